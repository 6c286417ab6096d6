from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from chatbot_index.config import DEFAULT_OUT_PATH, load_settings
from chatbot_index.index import load_index, run_build

app = typer.Typer(add_completion=False, help="Chatbot index builder")

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING, format="%(message)s")


def _markdown_only(files: list[str]) -> list[str]:
    kept: list[str] = []
    for arg in files:
        if arg.endswith(".md"):
            kept.append(arg)
        else:
            logger.warning("Ignoring non-Markdown argument: %s", arg)
    return kept


@app.command()
def build(
    files: Optional[list[str]] = typer.Argument(None, help="Markdown files to index."),
    out: Optional[Path] = typer.Option(None, "--out", help=f"Output file (default: {DEFAULT_OUT_PATH})."),
    chunk: Optional[int] = typer.Option(None, "--chunk", help="Maximum chunk length in characters (default: 1200)."),
    overlap: Optional[int] = typer.Option(None, "--overlap", help="Overlap between hard-split windows (default: 120)."),
    project: Optional[str] = typer.Option(None, "--project", help="Project name used to discover PRODUCT_DOC_<PROJECT>-*.md."),
    root: Optional[Path] = typer.Option(None, "--root", help="Directory to resolve paths and discover documents from."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log each indexed document."),
) -> None:
    """Build the chatbot index from Markdown documents."""
    _configure_logging(verbose)
    try:
        settings = load_settings(max_len=chunk, overlap=overlap, out_path=out, project=project, root=root)
        summary = run_build(settings=settings, files=_markdown_only(files or []))
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"Build failed: {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo("Build complete")
    typer.echo(f"files_indexed={summary.files_indexed}")
    typer.echo(f"chunks_written={summary.chunks_written}")
    typer.echo(f"unique_terms={summary.unique_terms}")
    typer.echo(f"out={summary.out_path}")
    typer.echo(f"duration_s={summary.duration_s}")
    if verbose:
        typer.echo("sources:")
        for source in summary.sources:
            typer.echo(f"- {source}")


@app.command()
def check(
    path: Path = typer.Argument(DEFAULT_OUT_PATH, help="Index file to verify."),
) -> None:
    """Load an index file and verify its invariants."""
    try:
        payload = load_index(path)
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"Check failed: {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo("Index checks passed")
    typer.echo(f"version={payload.version}")
    typer.echo(f"generated_at={payload.generated_at}")
    typer.echo(f"docs={payload.stats.total_docs}")
    typer.echo(f"chunks={payload.stats.total_chunks}")
    typer.echo(f"terms={len(payload.df)}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
