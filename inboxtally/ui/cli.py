"""Rich-based CLI output formatting."""

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from inboxtally.models import UnreadSnapshot


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


def _count_table(title: str, counts: dict[str, int], label_names: dict[str, str]) -> Table:
    table = Table(title=title)
    table.add_column("Label", style="cyan", max_width=40)
    table.add_column("ID", style="dim")
    table.add_column("Unread threads", justify="right", style="green")

    for label_id, count in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])):
        table.add_row(label_names.get(label_id, label_id)[:40], label_id, str(count))

    return table


def print_snapshot(
    snapshot: UnreadSnapshot,
    label_names: dict[str, str] | None = None,
) -> None:
    """Print system, user and archive unread counts."""
    label_names = label_names or {}

    summary = Table(title="Unread Summary", show_header=False)
    summary.add_column("Metric", style="cyan")
    summary.add_column("Value", style="green")
    summary.add_row("Messages scanned", str(snapshot.scanned_messages))
    summary.add_row("Archive", str(snapshot.archive_count))
    if snapshot.last_updated:
        summary.add_row("Last updated", snapshot.last_updated.strftime("%H:%M:%S UTC"))
    console.print(summary)
    console.print()

    console.print(_count_table("System Labels", snapshot.system_label_counts, label_names))
    console.print()

    if snapshot.user_label_counts:
        console.print(_count_table("User Labels", snapshot.user_label_counts, label_names))
    else:
        print_info("No unread threads in user labels")


def _add_branches(tree: Tree, nodes: list[dict[str, Any]]) -> None:
    for node in nodes:
        name = f"[bold]{node['name']}[/bold]" if node["children"] else node["name"]
        branch = tree.add(f"{name} [green]{node['count']}[/green]")
        _add_branches(branch, node["children"])


def print_label_tree(nodes: list[dict[str, Any]], title: str = "Folders with Unread") -> None:
    """Print nested label folders with their unread thread counts."""
    if not nodes:
        print_info("No folders with unread threads")
        return

    tree = Tree(f"[bold]{title}[/bold]")
    _add_branches(tree, nodes)
    console.print(tree)


def confirm_action(message: str) -> bool:
    """Ask for user confirmation."""
    response = console.input(f"{message} [y/N]: ")
    return response.lower() in ("y", "yes")
