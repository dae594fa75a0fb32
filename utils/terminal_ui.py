"""Terminal UI utilities using Rich library for beautiful output.

This module provides a unified interface for terminal output, integrating
with the theme system for consistent styling.
"""

from typing import Iterable, Optional, Sequence

from rich import box
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from config import Config
from utils.tui.theme import Theme, set_theme

# Initialize theme from config
set_theme(Config.TUI_THEME)

# Global console instance with theme support
console = Console(theme=Theme.get_rich_theme())


def _get_colors():
    """Get current theme colors."""
    return Theme.get_colors()


def _mode_label(mode) -> str:
    colors = _get_colors()
    if mode.value == "model-invoked-skill":
        return f"[{colors.skill_accent}]skill[/{colors.skill_accent}]"
    return f"[{colors.command_accent}]command[/{colors.command_accent}]"


def print_header(title: str, subtitle: Optional[str] = None) -> None:
    """Print a formatted header panel.

    Args:
        title: Main title text
        subtitle: Optional subtitle text
    """
    colors = _get_colors()
    content = f"[bold {colors.primary}]{title}[/bold {colors.primary}]"
    if subtitle:
        content += f"\n[{colors.text_secondary}]{subtitle}[/{colors.text_secondary}]"

    console.print(Panel(content, border_style=colors.primary, box=box.DOUBLE, padding=(1, 2)))


def print_collections(collections: Sequence) -> None:
    """Print collections with their document counts.

    Args:
        collections: Collections in registry order
    """
    colors = _get_colors()
    if not collections:
        console.print(f"[{colors.text_muted}](no collections found)[/{colors.text_muted}]")
        return

    table = Table(
        show_header=True,
        header_style=f"bold {colors.primary}",
        box=box.ROUNDED,
        border_style=colors.text_muted,
        padding=(0, 1),
    )
    table.add_column("Collection", style=f"{colors.primary} bold")
    table.add_column("Version", style=colors.text_secondary)
    table.add_column("Commands", justify="right", style=colors.command_accent)
    table.add_column("Skills", justify="right", style=colors.skill_accent)
    table.add_column("Description", style=colors.text_primary)

    for collection in collections:
        skills = sum(1 for doc in collection.documents if doc.is_skill)
        commands = len(collection.documents) - skills
        table.add_row(
            collection.name,
            collection.manifest.version or "-",
            str(commands),
            str(skills),
            collection.description,
        )

    console.print(table)


def print_documents(collection: str, summaries: Sequence) -> None:
    """Print the documents of one collection in discovery order.

    Args:
        collection: Collection name used as the table title
        summaries: DocumentSummary values
    """
    colors = _get_colors()
    table = Table(
        title=f"[bold {colors.primary}]{collection}[/bold {colors.primary}]",
        show_header=True,
        header_style=f"bold {colors.primary}",
        box=box.ROUNDED,
        border_style=colors.text_muted,
        padding=(0, 1),
    )
    table.add_column("Name", style="bold")
    table.add_column("Mode")
    table.add_column("Description", style=colors.text_secondary)

    for summary in summaries:
        table.add_row(summary.name, _mode_label(summary.invocation_mode), summary.description)

    console.print(table)


def print_document(document) -> None:
    """Print one document: metadata line and its Markdown body.

    Args:
        document: Document to display
    """
    colors = _get_colors()
    meta = [
        _mode_label(document.invocation_mode),
        f"[{colors.text_muted}]{document.path}[/{colors.text_muted}]",
    ]
    if document.argument_hint:
        meta.append(f"args: {document.argument_hint}")
    if document.requires_skills:
        meta.append(f"requires: {', '.join(document.requires_skills)}")

    console.print(
        Panel(
            Markdown(document.body or "_(empty)_"),
            title=f"[bold {colors.primary}]{document.qualified_name}[/bold {colors.primary}]",
            subtitle=" | ".join(meta),
            border_style=colors.text_muted,
            box=box.ROUNDED,
            padding=(1, 2),
        )
    )
    if document.description:
        console.print(f"[{colors.text_secondary}]{document.description}[/{colors.text_secondary}]")


def print_load_warnings(warnings: Iterable) -> None:
    """Print documents and collections skipped during a load.

    Args:
        warnings: LoadWarning values
    """
    for warning in warnings:
        print_warning(f"Skipped {warning.path}: {warning.message}")


def print_error(message: str, title: str = "Error") -> None:
    """Print an error message.

    Args:
        message: Error message
        title: Error title (default: "Error")
    """
    colors = _get_colors()
    console.print(
        Panel(
            f"[{colors.error}]{message}[/{colors.error}]",
            title=f"[bold {colors.error}]{title}[/bold {colors.error}]",
            border_style=colors.error,
            box=box.ROUNDED,
        )
    )


def print_warning(message: str) -> None:
    """Print a warning message.

    Args:
        message: Warning message
    """
    colors = _get_colors()
    console.print(f"[{colors.warning}]{message}[/{colors.warning}]")


def print_success(message: str) -> None:
    """Print a success message.

    Args:
        message: Success message
    """
    colors = _get_colors()
    console.print(f"[{colors.success}]✓ {message}[/{colors.success}]")


def print_info(message: str) -> None:
    """Print an info message.

    Args:
        message: Info message
    """
    colors = _get_colors()
    console.print(f"[{colors.primary}]ℹ {message}[/{colors.primary}]")


def print_log_location(log_file: str) -> None:
    """Print log file location.

    Args:
        log_file: Path to log file
    """
    colors = _get_colors()
    console.print()
    console.print(f"[{colors.text_muted}]Detailed logs: {log_file}[/{colors.text_muted}]")

