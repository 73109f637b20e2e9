#!/usr/bin/env python3
"""
PDF Export CLI

Exports resumes to PDF without the browser editor.

Commands:
    render  - Compose a PDF locally from a YAML/JSON resume file
    fetch   - Download the current resume from a running server (snapshot fallback)
    preview - Write the standalone HTML preview for a resume file

Examples:\n

    export_pdf.py render resume.yaml -o resume.pdf

    export_pdf.py render resume.yaml --strategy snapshot

    export_pdf.py fetch --base-url http://localhost:3000 -o current.pdf

    export_pdf.py preview resume.yaml -o preview.html
"""

import shutil
from pathlib import Path
from typing import List, Optional

import typer
from typing_extensions import Annotated

from cvbuilder.client.editor import ResumeEditor
from cvbuilder.client.export import CVBUILDER_BASE_URL
from cvbuilder.contexts.intake.defaults import load_resume_file
from cvbuilder.contexts.intake.normalizer import normalize_resume
from cvbuilder.contexts.intake.resume_data_structure import ResumeDocument
from cvbuilder.contexts.rendering.composer import compose_pdf
from cvbuilder.contexts.rendering.strategies import ProgrammaticPdfStrategy, SnapshotPdfStrategy
from cvbuilder.contexts.templating.preview import render_preview_document

STRATEGIES = {
    "programmatic": ProgrammaticPdfStrategy,
    "snapshot": SnapshotPdfStrategy,
}

app = typer.Typer(
    help="Export resumes to PDF locally or from a running server",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load_document(resume_file: Path) -> ResumeDocument:
    """Load a resume file and sanitize it like a submission."""
    try:
        raw = load_resume_file(resume_file)
    except FileNotFoundError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return normalize_resume(raw, ResumeDocument())


@app.command("render")
def render_command(
    resume_file: Annotated[Path, typer.Argument(help="Resume as YAML or JSON", dir_okay=False)],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output PDF (default: <resume_file>.pdf)", dir_okay=False),
    ] = None,
    strategy: Annotated[
        Optional[List[str]],
        typer.Option(
            "--strategy",
            "-s",
            help="Strategy to try, repeatable, in order (programmatic, snapshot)",
        ),
    ] = None,
):
    """
    Compose a PDF from a resume file.

    By default the programmatic layout is tried first and the HTML snapshot
    second.
    """
    names = strategy or ["programmatic", "snapshot"]
    unknown = [name for name in names if name not in STRATEGIES]
    if unknown:
        typer.secho(f"Error: unknown strategy {', '.join(unknown)}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    doc = _load_document(resume_file)
    output = output or resume_file.with_suffix(".pdf")

    typer.secho(f"\nExporting: {resume_file}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Strategies: {', '.join(names)}\n")

    result = compose_pdf(doc, [STRATEGIES[name]() for name in names])

    for name, error in result.errors.items():
        typer.secho(f"  {name} failed: {error.splitlines()[0]}", fg=typer.colors.YELLOW)

    if not result.success:
        typer.secho("✗ Export failed", fg=typer.colors.RED, bold=True, err=True)
        raise typer.Exit(code=1)

    output.write_bytes(result.pdf)
    typer.secho(f"✓ Exported with {result.strategy}", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Pages: {result.page_count if result.page_count is not None else '?'}")
    typer.echo(f"  Output: {output}\n")


@app.command("fetch")
def fetch_command(
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output PDF", dir_okay=False),
    ] = Path("cv-builder.pdf"),
    base_url: Annotated[str, typer.Option("--base-url", "-u", help="Server root URL")] = CVBUILDER_BASE_URL,
):
    """
    Download the server's current resume as PDF.

    Falls back to a local HTML snapshot of the same document when the server
    cannot produce the PDF.
    """
    editor = ResumeEditor(base_url=base_url)
    try:
        editor.load()
        if editor.offline:
            typer.secho(f"Error: cannot reach {base_url}\n", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

        result = editor.export_pdf()
        for name, error in result.errors.items():
            typer.secho(f"  {name} failed: {error.splitlines()[0]}", fg=typer.colors.YELLOW)
        if not result.success:
            typer.secho("✗ Export failed", fg=typer.colors.RED, bold=True, err=True)
            raise typer.Exit(code=1)

        shutil.copyfile(result.path, output)
    finally:
        editor.close()

    typer.secho(f"✓ Exported with {result.strategy}", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Output: {output}\n")


@app.command("preview")
def preview_command(
    resume_file: Annotated[Path, typer.Argument(help="Resume as YAML or JSON", dir_okay=False)],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output HTML (default: <resume_file>.html)", dir_okay=False),
    ] = None,
):
    """Write the standalone HTML preview page for a resume file."""
    doc = _load_document(resume_file)
    output = output or resume_file.with_suffix(".html")
    output.write_text(render_preview_document(doc), encoding="utf-8")
    typer.secho(f"✓ Preview written to {output}", fg=typer.colors.GREEN, bold=True)


if __name__ == "__main__":
    app()
