"""ChunkForge CLI.

Chunks a single file the way the ingestion pipeline would and shows the
result, so chunk settings can be tried out before indexing:

    chunkforge chunk src/app.py
    chunkforge chunk README.md --size 800 --overlap 100 --json
    chunkforge settings notes.txt
    chunkforge roundtrip docs/guide.md --stitch

Settings come from chunkforge.yaml (or config.yaml) in the working
directory, CHUNKFORGE_* environment variables, then command-line flags.

Rule #4: All functions < 60 lines
Rule #7: Check all return values
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from chunkforge import __version__
from chunkforge.chunking import (
    BoundaryChunk,
    Chunk,
    ChunkOptions,
    ChunkOrchestrator,
    ParserRuntime,
    build_chunk_records,
    get_optimal_chunk_settings,
    resolve_chunk_options,
    select_strategy,
)
from chunkforge.core.config import Config, load_config
from chunkforge.core.exceptions import ChunkForgeError, get_error_info
from chunkforge.core.logging import configure_logging, get_logger
from chunkforge.retrieval import (
    ContentReconstructor,
    InMemoryChunkLookup,
    SearchResult,
)

logger = get_logger(__name__)
console = Console()

PREVIEW_LENGTH = 48

app = typer.Typer(
    name="chunkforge",
    help="Boundary-aware content chunking for retrieval pipelines",
    add_completion=False,
)


# ============================================================================
# Helpers
# ============================================================================


def _fail(e: BaseException) -> NoReturn:
    """Print a helpful error and exit with code 1."""
    info = get_error_info(e)
    console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
    console.print(f"[dim]{info['error_code']}: {info['why_it_happened']}[/dim]")
    for suggestion in info["how_to_fix"]:
        console.print(f"  - {suggestion}", highlight=False)
    logger.debug("Command failed", error_type=type(e).__name__, error=str(e))
    raise typer.Exit(code=1)


def _load_settings(config_path: Optional[Path], log_level: Optional[str]) -> Config:
    """Load configuration and apply the log level."""
    config = load_config(config_path)
    configure_logging(level=log_level or config.log_level)
    return config


def _read_source(file: Path) -> str:
    return file.read_text(encoding="utf-8")


def _resolve_options(
    config: Config,
    file: Path,
    size: Optional[int],
    overlap: Optional[int],
    preserve_boundaries: Optional[bool],
) -> ChunkOptions:
    """Merge flags over configuration for one file."""
    chunking = config.chunking
    return resolve_chunk_options(
        str(file),
        size=size if size is not None else chunking.size,
        overlap=overlap if overlap is not None else chunking.overlap,
        preserve_words=chunking.preserve_words,
        preserve_boundaries=(
            preserve_boundaries
            if preserve_boundaries is not None
            else chunking.preserve_boundaries
        ),
        auto_optimize=chunking.auto_optimize,
    )


def _chunk_file(
    config: Config, text: str, options: ChunkOptions, use_cst: bool
) -> List[Chunk]:
    with ParserRuntime() as runtime:
        orchestrator = ChunkOrchestrator(
            runtime=runtime,
            cst_enabled=use_cst and config.parser.enabled,
            include_nested=config.parser.include_nested,
            warn_on_fallback=config.parser.warn_on_fallback,
        )
        return orchestrator.chunk(text, options)


def _preview(content: str) -> str:
    first_line = content.strip().split("\n", 1)[0]
    if len(first_line) > PREVIEW_LENGTH:
        return first_line[: PREVIEW_LENGTH - 3] + "..."
    return first_line


def _display_chunks(file: Path, chunks: List[Chunk], strategy: str) -> None:
    table = Table(title=f"{file.name}: {len(chunks)} chunks ({strategy})")
    table.add_column("#", justify="right")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Boundary")
    table.add_column("Name")
    table.add_column("Preview", overflow="fold")

    for chunk in chunks:
        boundary_type, name = "", ""
        if isinstance(chunk, BoundaryChunk):
            boundary_type = chunk.boundary.type
            name = chunk.boundary.name or chunk.boundary.title or ""
        table.add_row(
            str(chunk.index),
            str(chunk.start),
            str(chunk.end),
            boundary_type,
            name,
            _preview(chunk.content),
        )

    console.print(table)


# ============================================================================
# Commands
# ============================================================================


@app.command("chunk")
def chunk_command(
    file: Path = typer.Argument(..., help="File to chunk", exists=True, dir_okay=False),
    size: Optional[int] = typer.Option(
        None, "--size", "-s", help="Maximum chunk size in characters"
    ),
    overlap: Optional[int] = typer.Option(
        None, "--overlap", "-o", help="Overlap between sliding windows"
    ),
    preserve_boundaries: Optional[bool] = typer.Option(
        None,
        "--preserve-boundaries/--no-preserve-boundaries",
        help="Split along headings and declarations (default: by file type)",
    ),
    no_cst: bool = typer.Option(
        False, "--no-cst", help="Skip syntax-tree parsing, use regex boundaries"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print chunks as JSON"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to chunkforge.yaml"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="DEBUG, INFO, WARNING or ERROR"
    ),
) -> None:
    """Chunk a file and show the resulting chunks.

    Examples:
        chunkforge chunk src/app.py
        chunkforge chunk notes.txt --size 500 --overlap 50 --json
    """
    try:
        config = _load_settings(config_path, log_level)
        options = _resolve_options(config, file, size, overlap, preserve_boundaries)
        text = _read_source(file)
        use_cst = not no_cst
        strategy = select_strategy(options, use_cst and config.parser.enabled)
        chunks = _chunk_file(config, text, options, use_cst)
    except (ChunkForgeError, OSError, UnicodeDecodeError) as e:
        _fail(e)

    if as_json:
        typer.echo(json.dumps([chunk.to_dict() for chunk in chunks], indent=2))
        return
    _display_chunks(file, chunks, strategy.value)


@app.command("settings")
def settings_command(
    file: Path = typer.Argument(..., help="File name or path to inspect"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to chunkforge.yaml"
    ),
) -> None:
    """Show the recommended preset and the effective options for a file.

    The file does not need to exist; only its extension is used.
    """
    try:
        config = _load_settings(config_path, None)
        options = _resolve_options(config, file, None, None, None)
    except ChunkForgeError as e:
        _fail(e)

    preset = get_optimal_chunk_settings(str(file))
    strategy = select_strategy(options, config.parser.enabled)

    table = Table(title=f"Chunk settings for {file.name}")
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("Preset size", str(preset.size))
    table.add_row("Preset overlap", str(preset.overlap))
    table.add_row("Size", str(options.size))
    table.add_row("Overlap", str(options.overlap))
    table.add_row("Preserve words", str(options.preserve_words))
    table.add_row("Preserve boundaries", str(options.preserve_boundaries))
    table.add_row("Strategy", strategy.value)
    console.print(table)


def _reconstruct(
    config: Config, text: str, chunks: List[Chunk], file: Path, stitch: bool
) -> str:
    """Index chunks in memory and rebuild the source from the last hit."""
    records = build_chunk_records(text, chunks, file_path=str(file))
    if stitch:
        for record in records:
            record.original_content = None

    lookup = InMemoryChunkLookup()
    lookup.add_records(records)
    reconstructor = ContentReconstructor(
        lookup, overlap=config.retrieval.reconstruction_overlap
    )

    hit = records[-1]
    metadata: Dict[str, Any] = hit.to_metadata()
    return reconstructor.get_original_content(
        SearchResult(content=hit.content, metadata=metadata)
    )


@app.command("roundtrip")
def roundtrip_command(
    file: Path = typer.Argument(..., help="File to chunk", exists=True, dir_okay=False),
    stitch: bool = typer.Option(
        False, "--stitch", help="Rebuild from chunk contents instead of chunk 0"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to chunkforge.yaml"
    ),
) -> None:
    """Chunk a file, index it in memory and reconstruct the original.

    Reports whether the reconstructed text matches the file exactly.
    """
    try:
        config = _load_settings(config_path, None)
        options = _resolve_options(config, file, None, None, None)
        text = _read_source(file)
        chunks = _chunk_file(config, text, options, use_cst=True)
    except (ChunkForgeError, OSError, UnicodeDecodeError) as e:
        _fail(e)

    if not chunks:
        console.print("[yellow]No chunks produced[/yellow]")
        return

    rebuilt = _reconstruct(config, text, chunks, file, stitch)
    if rebuilt == text:
        console.print(f"[green]Exact match[/green] ({len(chunks)} chunks)")
    else:
        console.print(
            f"[yellow]Approximate[/yellow] ({len(chunks)} chunks, "
            f"{len(rebuilt)} of {len(text)} characters)"
        )


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit"
    ),
) -> None:
    """ChunkForge - boundary-aware content chunking."""
    if version:
        typer.echo(f"ChunkForge {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def cli_main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    cli_main()
