"""CLI entrypoint: Typer app definition and command registration"""

import logging

import typer

from mdpost.cli.commands import build_cmd, list_cmd, show_cmd


app = typer.Typer(name="mdpost", no_args_is_help=True, help="Compile a directory of posts into a queryable snapshot")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log compile progress"),
    ):
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")


app.command(name="build")(build_cmd)
app.command(name="list")(list_cmd)
app.command(name="show")(show_cmd)
