"""
RecruitCRM Command Line Interface

Provides CLI commands for operating the candidate search pipeline,
including database setup, résumé extraction, embedding rebuilds,
semantic search and the HTTP API server.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="recruit-crm",
    help="RecruitCRM candidate semantic search CLI",
    add_completion=False,
)
console = Console()


def _require_database() -> None:
    from src.data.database import get_database_manager

    if not get_database_manager().check_connection():
        console.print("[red]Error: Could not connect to MongoDB. Run 'init-db' first.[/red]")
        raise typer.Exit(1)


@app.callback()
def main():
    """Configure logging before any command runs."""
    from src.utils.logger import setup_logging

    setup_logging()


@app.command()
def version():
    """Show application version."""
    from src import __version__, __app_name__

    console.print(f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]")


@app.command()
def info():
    """Show system information and configuration."""
    from src.utils.config import get_settings

    settings = get_settings()

    table = Table(title="RecruitCRM Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Database Host", settings.database.host)
    table.add_row("Database Name", settings.database.name)
    table.add_row("Embedding Model", settings.embedding.model)
    table.add_row("Embedding API Key", "set" if settings.embedding.is_configured else "[red]missing[/red]")
    table.add_row("Min Similarity", f"{settings.search.min_similarity:.2f}")
    table.add_row("Keyword Match Mode", str(settings.search.keyword_match_mode.value))
    table.add_row("Log Level", settings.logging.level)

    console.print(table)


@app.command()
def init_db():
    """Initialize the database with required indexes."""
    from src.data.database import get_database_manager

    console.print("[yellow]Initializing database...[/yellow]")

    db_manager = get_database_manager()

    console.print("  Checking database connection...")
    if not db_manager.check_connection():
        console.print("[red]Error: Could not connect to MongoDB.[/red]")
        console.print("[dim]Make sure MongoDB is running and connection settings are correct.[/dim]")
        raise typer.Exit(1)

    console.print("  [green]✓[/green] Connected to MongoDB")

    console.print("  Creating indexes...")
    try:
        db_manager.ensure_indexes()
    except Exception as e:
        console.print(f"[red]Error creating indexes: {e}[/red]")
        raise typer.Exit(1)
    console.print("  [green]✓[/green] Indexes created")

    console.print("\n[green]Database initialized successfully![/green]")


@app.command()
def extract(
    path: Path = typer.Argument(..., help="Résumé file to extract"),
    content_type: str = typer.Option("", "--content-type", "-t", help="Declared content type hint"),
):
    """Extract plain text from a résumé file."""
    from src.ml.nlp.extractors import get_extraction_chain

    if not path.is_file():
        console.print(f"[red]Error: File not found: {path}[/red]")
        raise typer.Exit(1)

    result = get_extraction_chain().extract(path.read_bytes(), content_type)
    if result.is_empty:
        console.print(f"[yellow]No text extracted.[/yellow] [dim]{result.error_message or ''}[/dim]")
        raise typer.Exit(1)

    console.print(f"[dim]step={result.metadata.get('step')} chars={result.char_count} words={result.word_count}[/dim]")
    console.print(result.text)


@app.command()
def fetch_resume(
    url: str = typer.Argument(..., help="Résumé URL (Drive, Docs, Sheets or direct link)"),
):
    """Fetch a résumé URL and print its extracted text."""
    from src.services.resume_fetcher import get_resume_fetcher

    result = get_resume_fetcher().fetch(url)
    console.print(f"[dim]fetched {result.fetch_url} status={result.status_code} type={result.content_type}[/dim]")

    if not result.ok:
        console.print(f"[yellow]No text: {result.error or 'empty response'}[/yellow]")
        raise typer.Exit(1)
    console.print(result.text)


@app.command()
def list_candidates(
    limit: int = typer.Option(20, "--limit", "-l", help="Maximum number of candidates to show"),
):
    """List candidates and whether they have an embedding."""
    from src.data.repositories import get_candidate_repository
    from src.ml.embeddings import normalize_embedding

    _require_database()

    candidates = get_candidate_repository().find({}, limit=limit, sort_by="createdAt", sort_order=-1)
    if not candidates:
        console.print("[yellow]No candidates found.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Candidates ({len(candidates)} shown)")
    table.add_column("ID", style="dim", width=24)
    table.add_column("Name", style="cyan")
    table.add_column("Title")
    table.add_column("Status", justify="center")
    table.add_column("Embedding", justify="right")

    for candidate in candidates:
        dims = len(normalize_embedding(candidate.embedding))
        table.add_row(
            str(candidate.id),
            candidate.full_name or "N/A",
            candidate.title or "",
            str(candidate.status),
            str(dims) if dims else "[red]none[/red]",
        )

    console.print(table)


@app.command()
def embed(
    candidate_id: str = typer.Argument(..., help="Candidate ID"),
    text: str = typer.Option("", "--text", help="Extra résumé text to include"),
    fetch: bool = typer.Option(False, "--fetch", help="Fetch the candidate's résumé URL first"),
):
    """Embed one candidate and save the vector."""
    from src.core.exceptions import RecruitCRMError
    from src.core.search import get_candidate_embedder
    from src.services.resume_fetcher import fetch_resume_text

    _require_database()
    embedder = get_candidate_embedder()

    try:
        if fetch and not text:
            candidate = embedder.store.get(candidate_id)
            text = fetch_resume_text(candidate.resume_url, candidate_id, fetcher=embedder.fetcher)
        vector = embedder.embed_candidate_and_save(candidate_id, text)
    except RecruitCRMError as e:
        console.print(f"[red]Error ({e.status_code}): {e.message}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Saved {len(vector)}-dim embedding for {candidate_id}")


@app.command()
def rebuild_embeddings(
    concurrency: Optional[int] = typer.Option(
        None, "--concurrency", "-c", min=1, help="Parallel workers (default from settings)"
    ),
):
    """Recompute embeddings for every candidate."""
    from src.core.search import get_candidate_embedder

    _require_database()

    with console.status("[yellow]Rebuilding embeddings...[/yellow]"):
        summary = get_candidate_embedder().rebuild_all(concurrency=concurrency)

    console.print()
    console.print("[bold]Rebuild Summary:[/bold]")
    console.print(f"  [green]✓ Embedded:[/green] {summary.success}")
    console.print(f"  [red]✗ Failed:[/red] {summary.fail}")
    console.print(f"  Total: {summary.total}")


@app.command()
def search(
    query: str = typer.Argument(..., help="Free-text search query"),
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Filter by candidate status"),
    city: Optional[str] = typer.Option(None, "--city", help="Filter by city (address substring)"),
    salary_max: Optional[float] = typer.Option(None, "--salary-max", help="Maximum expected salary"),
    limit: int = typer.Option(20, "--limit", "-l", help="Maximum results (capped at 20)"),
):
    """Semantic search over the candidate pool."""
    from src.core.exceptions import RecruitCRMError
    from src.core.search import SearchFilters, get_search_service

    _require_database()

    filters = SearchFilters(status=status, city=city, salary_max=salary_max)
    try:
        results = get_search_service().search(query, filters, limit)
    except RecruitCRMError as e:
        console.print(f"[red]Error ({e.status_code}): {e.message}[/red]")
        raise typer.Exit(1)

    if not results:
        console.print("[yellow]No matching candidates.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Results for '{query}'")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Score", justify="right", style="green")
    table.add_column("Name", style="cyan")
    table.add_column("Title")
    table.add_column("Address", style="dim")

    for rank, result in enumerate(results, start=1):
        candidate = result.candidate
        table.add_row(
            str(rank),
            f"{result.similarity:.3f}",
            candidate.full_name or "N/A",
            candidate.title or "",
            candidate.address or "",
        )

    console.print(table)


@app.command()
def health_check():
    """Check database connectivity and embedding configuration."""
    from src.data.database import get_database_manager
    from src.utils.config import get_settings

    console.print("[bold cyan]System Health Check[/bold cyan]")
    console.print(f"[dim]{'─' * 50}[/dim]")

    settings = get_settings()
    all_healthy = True

    console.print("\n[bold]Database:[/bold]")
    if get_database_manager().check_connection():
        console.print("  [green]✓[/green] MongoDB connected")
        console.print(f"    Host: {settings.database.host}:{settings.database.port}")
        console.print(f"    Database: {settings.database.name}")
    else:
        console.print("  [red]✗[/red] MongoDB not connected")
        all_healthy = False

    console.print("\n[bold]Embedding Provider:[/bold]")
    if settings.embedding.is_configured:
        console.print("  [green]✓[/green] API key configured")
        console.print(f"    Model: {settings.embedding.model}")
    else:
        console.print("  [red]✗[/red] No API key (set EMBEDDING_API_KEY or GEMINI_API_KEY)")
        all_healthy = False

    console.print(f"\n[dim]{'─' * 50}[/dim]")
    if all_healthy:
        console.print("[green]All critical systems operational.[/green]")
    else:
        console.print("[red]Some systems require attention.[/red]")
        raise typer.Exit(1)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from settings)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default from settings)"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes"),
):
    """Run the HTTP API server."""
    import uvicorn

    from src.utils.config import get_settings

    settings = get_settings().api
    uvicorn.run(
        "src.api.app:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


if __name__ == "__main__":
    app()
