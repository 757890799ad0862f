"""
CLI Main - Typer-based command-line interface.

Usage:
    msharag serve
    msharag mcp
    msharag search "hard hats" --mode keyword
    msharag chunk c1
    msharag stats
"""

from __future__ import annotations

import json
import logging

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

app = typer.Typer(
    name="msharag",
    help="MSHA RAG - Mine safety regulation search",
    add_completion=False,
)
console = Console()
# MCP stdio owns stdout, so diagnostics go to stderr
err_console = Console(stderr=True)


@app.callback()
def configure(
    log_level: str | None = typer.Option(None, "--log-level", "-l", help="Logging level"),
) -> None:
    """Configure logging for every command."""
    from msharag.config import get_settings

    logging.basicConfig(
        level=(log_level or get_settings().log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _load_engine():
    """Load the corpus from configured paths and build the engine."""
    from msharag.config import CorpusLoadError
    from msharag.interfaces.api.deps import get_retrieval_engine

    try:
        return get_retrieval_engine()
    except CorpusLoadError as e:
        err_console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query"),
    mode: str = typer.Option("keyword", "--mode", "-m", help="keyword, semantic or hybrid"),
    top_k: int | None = typer.Option(None, "--top-k", "-n", help="Number of results"),
    vector: str | None = typer.Option(
        None, "--vector", "-v", help="Query embedding as a JSON array"
    ),
) -> None:
    """Search the corpus."""
    query_vector = None
    if vector:
        try:
            query_vector = [float(x) for x in json.loads(vector)]
        except (json.JSONDecodeError, TypeError, ValueError):
            console.print("[red]Error:[/red] --vector must be a JSON array of numbers")
            raise typer.Exit(1)

    engine = _load_engine()
    if top_k is None:
        from msharag.config import get_settings

        top_k = get_settings().search_default_top_k
    response = engine.search(query, mode=mode, top_k=top_k, query_vector=query_vector)

    if not response.results:
        console.print(f"[yellow]No results[/yellow] (mode: {response.mode})")
        return

    table = Table(title=f"Results for '{query}' ({response.mode})")
    table.add_column("#", style="dim")
    table.add_column("Score", style="green")
    table.add_column("Chunk", style="cyan")
    table.add_column("Source")
    table.add_column("Text")

    for i, result in enumerate(response.results, 1):
        table.add_row(
            str(i),
            f"{result.score:.4f}",
            result.chunk_id,
            result.source_name or "-",
            result.text[:80],
        )

    console.print(table)


@app.command()
def chunk(
    chunk_id: str = typer.Argument(..., help="Chunk ID"),
) -> None:
    """Show a single chunk."""
    engine = _load_engine()
    record = engine.corpus.get_chunk(chunk_id)
    if record is None:
        console.print(f"[red]Chunk not found:[/red] {chunk_id}")
        raise typer.Exit(1)

    console.print(
        Panel(
            record.text,
            title=f"{record.chunk_id} ({record.source_id})",
            subtitle=json.dumps(record.metadata) if record.metadata else None,
        )
    )


@app.command()
def stats() -> None:
    """Show corpus statistics."""
    engine = _load_engine()
    corpus_stats = engine.corpus.stats()

    table = Table(title="Corpus Statistics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Chunks", str(corpus_stats.chunks))
    table.add_row("Vectors", str(corpus_stats.vectors))
    console.print(table)


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", "-h", help="Host to bind"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to bind"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload"),
) -> None:
    """Start the HTTP API server."""
    import uvicorn

    from msharag.config import get_settings

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print("\n[green]Starting MSHA RAG API server[/green]")
    console.print(f"[dim]http://{host}:{port}[/dim]\n")

    uvicorn.run(
        "msharag.interfaces.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


@app.command()
def mcp() -> None:
    """Run the MCP server over stdio."""
    from msharag.config import get_settings
    from msharag.interfaces.mcp import create_server

    engine = _load_engine()
    err_console.print("[green]msha-rag-server MCP server running[/green]")
    create_server(engine, default_top_k=get_settings().search_default_top_k).run()


@app.command()
def version() -> None:
    """Show version information."""
    from msharag import __version__

    console.print(f"MSHA RAG v{__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
