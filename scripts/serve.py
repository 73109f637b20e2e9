#!/usr/bin/env python3
"""
CV Builder Server CLI

Starts the HTTP API (and static editor assets) with uvicorn.

Examples:\n

    serve.py run                         # http://127.0.0.1:3000

    serve.py run --port 8080 --reload    # Development server with auto-reload
"""

import os
from pathlib import Path

import typer
import uvicorn
from dotenv import load_dotenv
from typing_extensions import Annotated

from cvbuilder.utils.logger import setup_logger
from cvbuilder.utils.timestamp import now

load_dotenv()
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "3000"))
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    help="Run the CV Builder HTTP server",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("run")
def run_command(
    host: Annotated[str, typer.Option("--host", help="Interface to bind")] = HOST,
    port: Annotated[int, typer.Option("--port", "-p", help="Port to listen on", min=1, max=65535)] = PORT,
    reload: Annotated[
        bool,
        typer.Option("--reload", help="Restart on code changes (development only)"),
    ] = False,
):
    """
    Start the server.

    Logs go to LOGS_PATH/serve_<timestamp>/serve.log as well as stdout.
    """
    log_file = setup_logger(
        context_name="serve",
        log_dir=LOGS_PATH / f"serve_{now()}",
        extra_provenance={"Host": host, "Port": port},
    )
    typer.secho(f"\nCV Builder server running on http://{host}:{port}", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"Log file: {log_file}\n")

    # log_config=None keeps uvicorn from replacing the handlers installed above
    uvicorn.run("cvbuilder.api:app", host=host, port=port, reload=reload, log_config=None)


if __name__ == "__main__":
    app()
