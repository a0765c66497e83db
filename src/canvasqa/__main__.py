from canvasqa.cli import cli

cli()
