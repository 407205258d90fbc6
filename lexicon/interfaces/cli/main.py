"""
CLI Main - Typer-based command-line interface.

Usage:
    lexicon init
    lexicon import entries.json
    lexicon search "serendipity" --type word
    lexicon explain 42 "serendipity"
    lexicon serve
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from lexicon.domains.entries import EntryKind

app = typer.Typer(
    name="lexicon",
    help="Lexicon - Ranked search over words, phrases, quotes and hypotheticals",
    add_completion=False,
)
console = Console()

DB_HELP = "SQLite database path (default from settings)"


@app.callback()
def _configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    from lexicon.config import get_settings

    level = "DEBUG" if verbose else get_settings().log_level
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _open_repository(db: Path | None):
    from lexicon.adapters.sqlite import EntryRepository
    from lexicon.config import get_settings

    return EntryRepository(db or get_settings().db_path)


@app.command()
def init(db: Path | None = typer.Option(None, "--db", help=DB_HELP)) -> None:
    """Create the entry database."""
    asyncio.run(_init_async(db))


async def _init_async(db: Path | None) -> None:
    repo = _open_repository(db)
    try:
        await repo.initialize()
    finally:
        await repo.close()
    console.print(f"[green]Initialized:[/green] {repo.db_path}")


@app.command("import")
def import_entries(
    path: Path = typer.Argument(..., help="JSON file: a list of entries or {'entries': [...]}"),
    db: Path | None = typer.Option(None, "--db", help=DB_HELP),
) -> None:
    """Import entries from a JSON file."""
    if not path.exists():
        console.print(f"[red]Error:[/red] File not found: {path}")
        raise typer.Exit(1)

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]Error:[/red] Invalid JSON in {path}: {e}")
        raise typer.Exit(1)
    records = payload.get("entries", []) if isinstance(payload, dict) else payload

    failed = asyncio.run(_import_async(records, db))
    if failed:
        raise typer.Exit(1)


async def _import_async(records: list[dict], db: Path | None) -> int:
    """Insert valid records; return the number rejected."""
    from lexicon.config import LexiconError
    from lexicon.domains.entries import parse_entry

    repo = _open_repository(db)
    imported = failed = 0
    try:
        await repo.initialize()
        for position, record in enumerate(records):
            try:
                await repo.insert_entry(parse_entry(record))
                imported += 1
            except LexiconError as e:
                failed += 1
                console.print(f"[red]Skipped #{position}:[/red] {e.message}")
    finally:
        await repo.close()

    console.print(f"[green]Imported {imported} entries[/green] ({failed} skipped)")
    return failed


@app.command()
def search(
    query: str = typer.Argument("", help="Search query (empty lists alphabetically)"),
    entry_type: str | None = typer.Option(None, "--type", "-t", help="word, phrase, quote, hypothetical"),
    tag: list[str] = typer.Option([], "--tag", help="Required tag (repeatable)"),
    limit: int | None = typer.Option(
        None, "--limit", "-n", min=1, max=100, help="Number of results (default from settings)"
    ),
    offset: int = typer.Option(0, "--offset", min=0, help="Results to skip"),
    explain: bool = typer.Option(False, "--explain", "-e", help="Show matched rules"),
    db: Path | None = typer.Option(None, "--db", help=DB_HELP),
) -> None:
    """Search the lexicon."""
    from lexicon.config import LexiconError, get_settings
    from lexicon.domains.entries import EntryKind
    from lexicon.domains.search import page_size

    settings = get_settings()
    limit = page_size(limit, settings.search_default_limit, settings.search_max_limit)

    try:
        kind = EntryKind(entry_type) if entry_type else None
    except ValueError:
        console.print(f"[red]Error:[/red] Invalid entry type: {entry_type}")
        raise typer.Exit(1)

    try:
        asyncio.run(_search_async(query, kind, tag, limit, offset, explain, db))
    except LexiconError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)


async def _search_async(
    query: str,
    kind: EntryKind | None,
    tags: list[str],
    limit: int,
    offset: int,
    explain: bool,
    db: Path | None,
) -> None:
    from lexicon.domains.search import SearchRequest, SearchService
    from lexicon.domains.search.extractors import primary_text

    repo = _open_repository(db)
    try:
        await repo.initialize()
        service = SearchService(repo)
        response = await service.search(
            SearchRequest(
                query=query, kind=kind, tags=tags, offset=offset, limit=limit, explain=explain
            )
        )
    finally:
        await repo.close()

    table = Table(title=f"Results for '{query}'" if query.strip() else "All entries")
    table.add_column("#", style="dim")
    table.add_column("ID", style="dim")
    table.add_column("Kind", style="cyan")
    table.add_column("Entry")
    table.add_column("Score", style="green", justify="right")
    if explain:
        table.add_column("Matched rules", style="yellow")

    for position, result in enumerate(response.results, offset + 1):
        row = [
            str(position),
            str(result.entry.id),
            result.entry.kind,
            primary_text(result.entry) or "",
            str(result.score),
        ]
        if explain:
            row.append(", ".join(m.rule for m in result.breakdown or [] if m.matched))
        table.add_row(*row)

    console.print(table)
    console.print(f"[dim]Showing {len(response.results)} of {response.total}[/dim]")


@app.command()
def explain(
    entry_id: int = typer.Argument(..., help="Entry ID"),
    query: str = typer.Argument(..., help="Search query"),
    db: Path | None = typer.Option(None, "--db", help=DB_HELP),
) -> None:
    """Show how one entry scores against a query."""
    from lexicon.config import LexiconError

    try:
        asyncio.run(_explain_async(entry_id, query, db))
    except LexiconError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)


async def _explain_async(entry_id: int, query: str, db: Path | None) -> None:
    from lexicon.domains.search import SearchService

    repo = _open_repository(db)
    try:
        await repo.initialize()
        explanation = await SearchService(repo).explain(entry_id, query)
    finally:
        await repo.close()

    table = Table(title=f"Entry {entry_id} vs '{query}'")
    table.add_column("Rule", style="cyan")
    table.add_column("Weight", justify="right")
    table.add_column("Matched")
    table.add_column("Score", style="green", justify="right")

    for match in explanation.rules:
        table.add_row(
            match.rule,
            str(match.weight),
            "[green]yes[/green]" if match.matched else "[dim]no[/dim]",
            str(match.score),
        )

    console.print(table)
    console.print(f"[bold]Total:[/bold] {explanation.total} / {explanation.max_score}")


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", "-h", help="Host to bind (default from settings)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to bind (default from settings)"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload"),
) -> None:
    """Start the API server."""
    import uvicorn

    from lexicon.config import get_settings

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print("\n[green]Starting Lexicon API server[/green]")
    console.print(f"[dim]http://{host}:{port}[/dim]\n")

    uvicorn.run(
        "lexicon.interfaces.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


@app.command()
def version() -> None:
    """Show version information."""
    from lexicon import __version__

    console.print(f"Lexicon v{__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
