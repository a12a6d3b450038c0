# src/fipcontroller/cli/main.py
"""
This module is the main entry point for the fipcontroller CLI.

It aggregates all commands from the submodules (run, status).
"""

import typer

from . import run, status

app = typer.Typer(
    name="fipcontroller",
    help="Keep Hetzner Cloud floating IPs attached to schedulable Kubernetes nodes.",
    add_completion=False,
)


def version_callback(value: bool):
    """Prints the installed package version for --version."""
    if value:
        from .. import __version__

        typer.echo(f"hcloud-fip-controller {__version__}")
        raise typer.Exit()


@app.command()
def version():
    """
    Print the controller version.
    """
    from .. import __version__

    typer.echo(f"hcloud-fip-controller {__version__}")


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
):
    """
    Floating IP controller for Hetzner Cloud backed Kubernetes clusters.

    Use "run" inside the cluster and "status" to inspect current assignments.
    """


app.add_typer(run.app, name="run")
app.add_typer(status.app, name="status")
