"""CLI commands for LearnMe.

Commands:
- init-db: Create the database schema
- seed: Load the default catalog (languages, lessons, paths)
- serve: Run the Web API with uvicorn
- lessons: List the lessons of a language (slug prefix accepted)
- hints: Smart hints for a source file
- run: Simulated execution of a source file
- recommend: Learning path for a free-text goal
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from learnme.config import load_app_config
from learnme.core.code_runner import execute_code, supported_languages
from learnme.core.path_recommender import recommend_path
from learnme.core.smart_hints import HintContext, generate_smart_hints
from learnme.db.catalog_repository import list_languages, list_lessons
from learnme.db.database import init_db
from learnme.db.seed import seed_catalog
from learnme.utils.validators import AmbiguousSlugError, SlugNotFoundError, resolve_slug

app = typer.Typer(
    name="learnme",
    help="LearnMe programming education platform.",
    no_args_is_help=True,
)

console = Console()

# File suffix -> language name used by the hint engine and the code runner
SUFFIX_LANGUAGES = {
    ".py": "python",
    ".js": "javascript",
    ".mjs": "javascript",
    ".html": "html",
    ".htm": "html",
    ".css": "css",
}


def _open_db(db: Path | None) -> Path:
    path = db or load_app_config().db_path
    init_db(path)
    return path


def _read_source(file: Path, language: str | None) -> tuple[str, str]:
    """Read a source file and work out its language, or exit."""
    if not file.exists():
        console.print(f"[red]✗ File not found: {file}[/red]")
        raise typer.Exit(code=1)

    resolved = language or SUFFIX_LANGUAGES.get(file.suffix.lower())
    if resolved is None:
        console.print(
            f"[red]✗ Cannot infer language from '{file.suffix}'. Use --language.[/red]"
        )
        raise typer.Exit(code=1)

    return file.read_text(encoding="utf-8"), resolved


@app.command(name="init-db")
def init_db_command(
    db: Path | None = typer.Option(None, "--db", help="Database file (default from config)"),
) -> None:
    """Create the database and its tables."""
    path = _open_db(db)
    console.print(f"[green]✓ Database ready[/green] [dim]{path}[/dim]")


@app.command()
def seed(
    db: Path | None = typer.Option(None, "--db", help="Database file (default from config)"),
) -> None:
    """Seed languages, levels, lessons, exams, freestyles and paths."""
    path = _open_db(db)
    summary = seed_catalog()

    console.print(f"[green]✓ Seed complete[/green] [dim]{path}[/dim]")
    console.print(f"  [dim]languages:[/dim]  {summary.languages}")
    console.print(f"  [dim]lessons:[/dim]    {summary.lessons}")
    console.print(f"  [dim]exams:[/dim]      {summary.exams} new")
    console.print(f"  [dim]freestyles:[/dim] {summary.freestyles} new")
    console.print(f"  [dim]paths:[/dim]      {summary.paths}")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes"),
) -> None:
    """Run the Web API."""
    import uvicorn

    uvicorn.run("learnme.web.api:app", host=host, port=port, reload=reload)


@app.command()
def lessons(
    language: str = typer.Argument(..., help="Language slug or unique prefix"),
    db: Path | None = typer.Option(None, "--db", help="Database file (default from config)"),
) -> None:
    """List the lessons of a language."""
    _open_db(db)
    languages = {lang.slug: lang for lang in list_languages()}

    try:
        slug = resolve_slug(language, sorted(languages))
    except SlugNotFoundError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)
    except AmbiguousSlugError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)

    table = Table(show_header=True, header_style="bold", title=languages[slug].name)
    table.add_column("#", justify="right")
    table.add_column("ID")
    table.add_column("Title")
    table.add_column("Level")
    for lesson in list_lessons(languages[slug].language_id):
        table.add_row(str(lesson.number), lesson.lesson_id, lesson.title, lesson.level_id or "-")
    console.print(table)


@app.command()
def hints(
    file: Path = typer.Argument(..., help="Source file to analyze"),
    language: str | None = typer.Option(None, "--language", "-l", help="Override language"),
    level: str = typer.Option("beginner", "--level", help="beginner, intermediate or advanced"),
    progress: int = typer.Option(50, "--progress", min=0, max=100, help="Learning progress %"),
) -> None:
    """Show smart hints for a source file."""
    code, resolved = _read_source(file, language)
    found = generate_smart_hints(
        HintContext(
            language=resolved,
            code=code,
            user_level=level,  # type: ignore[arg-type]
            learning_progress=progress,
        )
    )

    if not found:
        console.print("[green]✓ No hints for this code[/green]")
        return

    for hint in found:
        console.print(f"[bold]{hint.priority.upper()}[/bold] [dim]{hint.id}[/dim]")
        console.print(f"  {hint.message}")
        if hint.code_suggestion:
            console.print(f"  [cyan]{hint.code_suggestion}[/cyan]")


@app.command()
def run(
    file: Path = typer.Argument(..., help="Source file to run"),
    language: str | None = typer.Option(None, "--language", "-l", help="Override language"),
) -> None:
    """Simulate running a source file."""
    code, resolved = _read_source(file, language)
    result = execute_code(code, resolved)

    if result.output:
        console.print(result.output, markup=False)
    if not result.success:
        console.print(f"[red]✗ {result.error}[/red]")
        console.print(f"  [dim]supported:[/dim] {', '.join(supported_languages())}")
        raise typer.Exit(code=1)

    console.print(f"[dim]{result.execution_time_ms} ms[/dim]")


@app.command()
def recommend(text: str = typer.Argument(..., help="Learning goal in free text")) -> None:
    """Recommend a learning path for a goal."""
    rec = recommend_path(text)
    console.print(f"[bold]{rec.path_title}[/bold] [dim]({rec.path_slug})[/dim]")
    console.print(f"  {rec.path_description}")
    console.print(f"  [dim]languages:[/dim] {', '.join(rec.languages)}")


if __name__ == "__main__":
    app()
