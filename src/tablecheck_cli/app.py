import typer

from tablecheck_cli.compare import compare
from tablecheck_cli.validate import app as validate


app = typer.Typer(help="Validate and reconcile delimited data files")

app.add_typer(validate)
app.command("compare")(compare)
