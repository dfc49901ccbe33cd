"""Command-line interface for World Wiki."""

import logging
import sys
from collections import Counter
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.table import Table

from world_wiki import __version__

console = Console()


def _configure_logging(verbose: bool) -> None:
    from world_wiki.config import get_settings

    level = logging.DEBUG if verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def source_options(func):
    """Options selecting the world export and the authored collections."""
    func = click.option("--pages", "-p", type=click.Path(exists=True), help="Static pages JSON")(func)
    func = click.option("--chronicles", "-c", type=click.Path(exists=True), help="Chronicles JSON")(func)
    func = click.option("--world", "-w", type=click.Path(), help="World export JSON (defaults to data dir)")(func)
    return func


def _load_service(world: str | None, chronicles: str | None, pages: str | None):
    """Load sources and build the wiki, exiting with a message on bad data."""
    from world_wiki.cache import WikiService
    from world_wiki.config import get_settings
    from world_wiki.errors import WikiError
    from world_wiki.loader import load_chronicles, load_static_pages, load_world

    settings = get_settings()
    world_path = Path(world) if world else settings.world_path
    chronicles_path = Path(chronicles) if chronicles else settings.chronicles_path
    pages_path = Path(pages) if pages else settings.static_pages_path

    try:
        with console.status("Loading world..."):
            world_state = load_world(world_path)
            chronicle_list = load_chronicles(chronicles_path) if chronicles_path.exists() else []
            page_list = load_static_pages(pages_path) if pages_path.exists() else []

        with console.status("Building page index..."):
            return WikiService(world_state, chronicles=chronicle_list, static_pages=page_list)
    except WikiError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(verbose: bool) -> None:
    """World Wiki - browse simulated worlds as a cross-referenced wiki."""
    _configure_logging(verbose)


@main.command()
def status() -> None:
    """Show configuration and which source files are present."""
    from world_wiki.config import get_settings

    settings = get_settings()

    console.print("[bold]World Wiki Status[/bold]\n")
    console.print(f"Data dir: {settings.data_dir}")

    for label, path in [
        ("World", settings.world_path),
        ("Chronicles", settings.chronicles_path),
        ("Static pages", settings.static_pages_path),
    ]:
        mark = "[green]OK[/green]" if path.exists() else "[yellow]missing[/yellow]"
        console.print(f"  {mark} {label}: {path}")

    console.print(f"\nMin link length: {settings.min_link_length}")


@main.command()
@click.argument("path", type=click.Path(exists=True))
def validate(path: str) -> None:
    """Check a world export before indexing it."""
    from world_wiki.errors import WikiError
    from world_wiki.loader import load_world

    try:
        world = load_world(Path(path))
    except WikiError as e:
        console.print(f"[red]Invalid:[/red] {e}")
        sys.exit(1)

    console.print(
        f"[green]Valid[/green] {len(world.entities):,} entities, "
        f"{len(world.relationships):,} relationships, "
        f"{len(world.narrative_events):,} events"
    )


@main.command()
@source_options
@click.option("--type", "-t", "page_type", help="Only list pages of this type")
@click.option("--limit", "-l", type=int, default=20, help="Pages to list")
def index(world: str | None, chronicles: str | None, pages: str | None, page_type: str | None, limit: int) -> None:
    """Summarize the page index."""
    service = _load_service(world, chronicles, pages)
    page_index = service.index

    counts = Counter(e.type for e in page_index.entries)
    table = Table(title="Page Index")
    table.add_column("Type", style="cyan")
    table.add_column("Pages", style="green", justify="right")
    for t, count in counts.most_common():
        table.add_row(t, f"{count:,}")
    table.add_row("[bold]total[/bold]", f"[bold]{len(page_index):,}[/bold]")
    console.print(table)

    entries = page_index.of_type(page_type) if page_type else page_index.entries
    if entries:
        console.print(f"\n[bold]Pages{f' ({page_type})' if page_type else ''}:[/bold]")
        for entry in entries[:limit]:
            console.print(f"  [dim]{entry.id}[/dim]  {entry.title}")
        if len(entries) > limit:
            console.print(f"  [dim]+{len(entries) - limit} more[/dim]")


@main.command()
@source_options
def categories(world: str | None, chronicles: str | None, pages: str | None) -> None:
    """List automatic categories by size."""
    service = _load_service(world, chronicles, pages)

    table = Table(title="Categories")
    table.add_column("Id", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Pages", style="green", justify="right")
    for category in service.index.categories:
        table.add_row(category.id, category.name, str(category.page_count))
    console.print(table)


@main.command()
@source_options
def disambiguation(world: str | None, chronicles: str | None, pages: str | None) -> None:
    """List base titles shared by more than one page."""
    service = _load_service(world, chronicles, pages)
    groups = service.index.by_base_name

    if not groups:
        console.print("[green]No shared titles[/green]")
        return

    for base, members in sorted(groups.items()):
        console.print(f"[bold]{base}[/bold]")
        for member in members:
            kind = f" ({member.entity_kind})" if member.entity_kind else ""
            console.print(f"  {member.title}{kind}  [dim]{member.type} {member.id}[/dim]")


@main.command()
@source_options
@click.argument("page_id")
@click.option("--json", "as_json", is_flag=True, help="Print the page as JSON")
def page(world: str | None, chronicles: str | None, pages: str | None, page_id: str, as_json: bool) -> None:
    """Synthesize and show a single page."""
    service = _load_service(world, chronicles, pages)

    wiki_page = service.get_page(page_id)
    if wiki_page is None:
        console.print(f"[yellow]Page not found:[/yellow] {page_id}")
        sys.exit(1)

    if as_json:
        click.echo(wiki_page.model_dump_json(indent=2))
        return

    console.print(f"[bold]{wiki_page.title}[/bold]  [dim]{wiki_page.type} / {wiki_page.slug}[/dim]")
    if wiki_page.summary:
        console.print(f"[italic]{wiki_page.summary}[/italic]")

    see_also = service.get_disambiguation(page_id)
    if see_also:
        titles = ", ".join(m.title for m in see_also)
        console.print(f"[dim]See also: {titles}[/dim]")

    if wiki_page.infobox and wiki_page.infobox.fields:
        table = Table(show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        for item in wiki_page.infobox.fields:
            table.add_row(item.label, item.value)
        console.print(table)

    for section in wiki_page.sections:
        console.print(Markdown(f"{'#' * section.level} {section.heading}\n\n{section.content}"))
        for image in section.images:
            console.print(f"  [dim]image {image.image_id} ({image.size}) {image.caption or ''}[/dim]")

    if wiki_page.categories:
        console.print(f"\n[dim]Categories: {', '.join(wiki_page.categories)}[/dim]")


@main.command()
@source_options
@click.argument("query")
@click.option("--limit", "-l", type=int, help="Maximum results")
def search(world: str | None, chronicles: str | None, pages: str | None, query: str, limit: int | None) -> None:
    """Fuzzy-search page titles and aliases."""
    service = _load_service(world, chronicles, pages)

    results = service.search(query, limit=limit)
    if not results:
        console.print("[yellow]No matches[/yellow]")
        return

    table = Table(title=f"Search: {query}")
    table.add_column("Score", style="green", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("Type")
    table.add_column("Id", style="dim")
    for entry, score in results:
        table.add_row(f"{score:.0f}", entry.title, entry.type, entry.id)
    console.print(table)


@main.command()
@source_options
@click.argument("text")
def link(world: str | None, chronicles: str | None, pages: str | None, text: str) -> None:
    """Insert wikilinks into a piece of text."""
    service = _load_service(world, chronicles, pages)
    click.echo(service.index.autolinker().link(text))


if __name__ == "__main__":
    main()
