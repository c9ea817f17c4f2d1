"""Rich-based CLI output formatting."""

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from inboxsort.models import Message
from inboxsort.taxonomy.classifier import Classification
from inboxsort.taxonomy.config import TaxonomyConfig
from inboxsort.taxonomy.rules import CATEGORY_COLORS, CATEGORY_DESCRIPTIONS


console = Console()


def print_header(title: str) -> None:
    """Print a styled header."""
    console.print()
    console.print(Panel(title, style="bold blue"))
    console.print()


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗[/red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]![/yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]ℹ[/blue] {message}")


def category_text(category: str) -> Text:
    """Render a category name in its color."""
    return Text(category, style=CATEGORY_COLORS.get(category, "white"))


def print_classifications(
    results: list[tuple[Message, Classification]],
    explain: bool = False,
    limit: int | None = None,
) -> None:
    """Print a table of classified messages."""
    table = Table(title="Classified Messages")
    table.add_column("ID", style="dim", max_width=18)
    table.add_column("Subject", style="cyan", max_width=50)
    table.add_column("Sender", max_width=30)
    table.add_column("Category", no_wrap=True)
    if explain:
        table.add_column("Source", style="dim", no_wrap=True)
        table.add_column("Top Score", justify="right", style="yellow", no_wrap=True)

    shown = results[:limit] if limit else results
    for message, result in shown:
        row = [
            Text(message.message_id or "-"),
            Text(message.subject[:50]),
            Text(message.sender[:30]),
            category_text(result.category),
        ]
        if explain:
            row.append(result.source)
            row.append(f"{result.top_score:g}" if result.scores else "-")
        table.add_row(*row)

    console.print(table)

    if limit and len(results) > limit:
        print_info(f"{len(results) - limit} more not shown")


def print_distribution(report: dict[str, Any]) -> None:
    """Print category distribution with percentage shares."""
    table = Table(title=f"Category Distribution ({report.get('total', 0)} messages)")
    table.add_column("Category", no_wrap=True)
    table.add_column("Count", justify="right", style="green")
    table.add_column("Share", justify="right", style="yellow")
    table.add_column("Description", style="dim", max_width=40)

    for row in report.get("distribution", []):
        category = row["category"]
        table.add_row(
            category_text(category),
            str(row["count"]),
            f"{row['percentage']:.1f}%",
            CATEGORY_DESCRIPTIONS.get(category, "")[:40],
        )

    console.print(table)


def print_overrides(overrides: dict[str, str]) -> None:
    """Print stored user corrections."""
    if not overrides:
        print_info("No corrections recorded")
        return

    table = Table(title="Recorded Corrections")
    table.add_column("Message ID", style="cyan")
    table.add_column("Category", no_wrap=True)

    for message_id, category in overrides.items():
        table.add_row(Text(message_id), category_text(category))

    console.print(table)


def print_taxonomy(config: TaxonomyConfig) -> None:
    """Print categories, keyword counts, weights and threshold."""
    table = Table(title="Taxonomy")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Category", no_wrap=True)
    table.add_column("Keywords", justify="right", style="green")
    table.add_column("Sample", style="dim", max_width=50)

    for index, category in enumerate(config.categories):
        keywords = config.keywords[category]
        name = category_text(category)
        if category == config.fallback:
            name.append(" (fallback)", style="dim")
        table.add_row(str(index), name, str(len(keywords)), ", ".join(keywords[:6]))

    console.print(table)

    weights = config.weights
    console.print(
        f"Weights: subject={weights.subject:g} snippet={weights.snippet:g} "
        f"sender={weights.sender:g}   Threshold: {config.threshold:g}"
    )
    if config.provider_labels:
        mapping = ", ".join(f"{k} → {v}" for k, v in config.provider_labels.items())
        console.print(f"Provider labels: {mapping}")


def confirm_action(message: str) -> bool:
    """Ask for user confirmation."""
    response = console.input(f"{message} {escape('[y/N]')}: ")
    return response.lower() in ("y", "yes")
