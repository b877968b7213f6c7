from zeta.cli import cli

cli()
