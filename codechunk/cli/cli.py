# codechunk/cli/cli.py
"""
codechunk command line.

Commands:
    codechunk ingest [ROOT]            Sync a source tree into the vector store
    codechunk delete RELATIVE_PATH     Drop one document and its chunks
    codechunk search QUERY             Semantic search over ingested chunks
    codechunk config                   Show the resolved configuration

Exit codes:
    0  success
    1  ingestion finished but some documents failed, or the vector store failed
    2  configuration error
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.markup import escape

from codechunk.cli.ui import CHECK, CROSS, WARN, IngestProgress, console
from codechunk.config.loader import find_user_config, load_config
from codechunk.config.schema import CodeChunkConfig
from codechunk.exceptions import ConfigurationError, VectorStoreError
from codechunk.ingest.executor import IngestSummary
from codechunk.llm.embedding.registry import available_embedding_plugins
from codechunk.logging.logger import configure_logging, get_logger
from codechunk.logging.tags import CLI
from codechunk.runtime import Runtime

app = typer.Typer(
    help="codechunk: incremental code chunking and semantic search",
    no_args_is_help=True,
)
logger = get_logger(__name__)

ConfigOption = typer.Option(
    None,
    "--config",
    "-c",
    exists=True,
    dir_okay=False,
    help="YAML config merged over the defaults (default: ./codechunk.yaml if present).",
)


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------


def _load(config_path: Optional[Path]) -> CodeChunkConfig:
    try:
        cfg = load_config(config_path or find_user_config())
    except ConfigurationError as e:
        _config_error(e)
    configure_logging(cfg.logging.level)
    return cfg


def _runtime(cfg: CodeChunkConfig) -> Runtime:
    try:
        return Runtime.from_config(cfg)
    except ConfigurationError as e:
        _config_error(e)


def _config_error(error: Exception) -> None:
    console.print(
        f"[red]{escape(CROSS)} Configuration error:[/red] {escape(str(error))}", highlight=False
    )
    raise typer.Exit(code=2)


def _store_error(error: VectorStoreError) -> None:
    console.print(
        f"[red]{escape(CROSS)} Vector store error:[/red] {escape(str(error))}", highlight=False
    )
    raise typer.Exit(code=1)


def _print_summary(summary: IngestSummary) -> None:
    symbol = CHECK if summary.failed == 0 else WARN
    console.print(
        f"{symbol} Ingestion complete in {summary.duration_seconds:.1f}s",
        markup=False,
        highlight=False,
    )
    console.print(
        f"  scanned {summary.scanned}  new {summary.new}  modified {summary.modified}  "
        f"unchanged {summary.unchanged}  deleted {summary.deleted}",
        markup=False,
        highlight=False,
    )
    console.print(
        f"  succeeded {summary.succeeded}  failed {summary.failed}  "
        f"chunks {summary.chunks_written}",
        markup=False,
        highlight=False,
    )
    for detail in summary.error_details:
        console.print(f"  [yellow]{escape(WARN)}[/yellow] {escape(detail)}", highlight=False)


# ---------------------------------------------------------------------------
# commands
# ---------------------------------------------------------------------------


@app.command("ingest")
def ingest(
    root: Optional[Path] = typer.Argument(
        None,
        exists=True,
        file_okay=False,
        help="Directory to ingest (default: source.root from config).",
    ),
    config: Optional[Path] = ConfigOption,
    force: bool = typer.Option(False, "--force", help="Re-ingest unchanged files too."),
) -> None:
    """Sync a source tree: ingest new/modified files, remove deleted ones."""
    cfg = _load(config)

    runtime = _runtime(cfg)
    try:
        coordinator = runtime.coordinator()
        source = runtime.source(root)
    except ConfigurationError as e:
        asyncio.run(runtime.aclose())
        _config_error(e)

    logger.info(f"{CLI} Ingesting {source.root}")

    async def _run() -> IngestSummary:
        try:
            with IngestProgress(f"Ingesting {source.root.name or source.root}") as on_progress:
                return await coordinator.ingest_all(source, on_progress=on_progress, force=force)
        finally:
            await runtime.aclose()

    try:
        summary = asyncio.run(_run())
    except FileNotFoundError as e:
        _config_error(e)
    except VectorStoreError as e:
        _store_error(e)

    _print_summary(summary)
    if summary.failed:
        raise typer.Exit(code=1)


@app.command("delete")
def delete(
    relative_path: str = typer.Argument(..., help="Document path relative to the source root."),
    config: Optional[Path] = ConfigOption,
) -> None:
    """Remove one document and its chunks so the next ingest rebuilds it."""
    cfg = _load(config)
    runtime = _runtime(cfg)

    async def _run() -> int:
        try:
            coordinator = runtime.coordinator(for_ingest=False)
            return await coordinator.delete_document_and_chunks(relative_path)
        finally:
            await runtime.aclose()

    try:
        removed = asyncio.run(_run())
    except VectorStoreError as e:
        _store_error(e)

    if removed:
        message = f"{CHECK} Removed {relative_path} ({removed} record(s))"
    else:
        message = f"{WARN} No document stored for {relative_path}"
    console.print(message, markup=False, highlight=False)


@app.command("search")
def search(
    query: str = typer.Argument(..., help="Natural language or code query."),
    top_k: int = typer.Option(10, "--top-k", "-k", min=1, help="Maximum number of results."),
    document: Optional[str] = typer.Option(
        None, "--document", "-d", help="Only search documents whose path contains this text."
    ),
    scores: bool = typer.Option(False, "--scores", help="Show similarity scores and labels."),
    config: Optional[Path] = ConfigOption,
) -> None:
    """Semantic search over ingested chunks."""
    cfg = _load(config)
    runtime = _runtime(cfg)

    async def _run():
        try:
            await runtime.documents.ensure_exists()
            await runtime.chunks.ensure_exists()
            searcher = runtime.search()
            if scores:
                return await searcher.search_with_scores(
                    query, max_results=top_k, document_name_filter=document
                )
            return await searcher.search(query, document_name_filter=document, max_results=top_k)
        finally:
            await runtime.aclose()

    try:
        results = asyncio.run(_run())
    except VectorStoreError as e:
        _store_error(e)

    if not results:
        console.print(f"{WARN} No results", markup=False, highlight=False)
        return

    for i, result in enumerate(results, start=1):
        if isinstance(result, tuple):
            chunk, score = result
            label = ".".join(p for p in (chunk.namespace, chunk.type_name, chunk.method_name) if p)
            console.print(f"[bold]#{i}[/bold] {score:.4f}  {escape(label)}", highlight=False)
            text = chunk.snippet
        else:
            console.print(f"[bold]#{i}[/bold]", highlight=False)
            text = result
        console.print(text, markup=False, highlight=False)
        console.print()


@app.command("config")
def show_config(config: Optional[Path] = ConfigOption) -> None:
    """Print the resolved configuration as YAML."""
    cfg = _load(config)
    typer.echo(yaml.safe_dump(cfg.model_dump(), sort_keys=False), nl=False)
    typer.echo(f"# available embedding plugins: {', '.join(available_embedding_plugins())}")


__all__ = ["app"]
