"""
CLI helper utilities for consistent error handling, service lookup and output.
"""

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from typing import Any, Dict, List, Optional

from models.match_result import MatchKind, MatchResult

console = Console()


def validate_context_for_command(ctx: click.Context, required_services: Optional[List[str]] = None) -> bool:
    """
    Validate context has required services with helpful error messages.

    Args:
        ctx: Click context object
        required_services: List of required service names (e.g., ['catalog', 'cache'])

    Returns:
        bool: True if validation passes, False otherwise
    """
    if not ctx.obj:
        click.secho("❌ Error: No context object found. Configuration may have failed to load.", fg="red", bold=True)
        return False

    if required_services:
        # Empty catalogs and databases are falsy, so test for presence only
        missing = [s for s in required_services if ctx.obj.get(s) is None]
        if missing:
            click.secho(f"❌ Error: Required services not available: {', '.join(missing)}", fg="red", bold=True)
            click.secho("💡 Check the [catalog], [relations] and [streams] sections of your config file", fg="yellow")
            return False

    return True


def get_service_from_context(ctx: click.Context, service_name: str) -> Any:
    """
    Get a service from context, exiting with status 1 when it is missing.

    Args:
        ctx: Click context object
        service_name: Name of the service to retrieve

    Returns:
        Service instance
    """
    if not validate_context_for_command(ctx, [service_name]):
        ctx.exit(1)
    return ctx.obj[service_name]


def elements_table(values: Dict[str, Any], title: str = "Parsed elements") -> Table:
    """Build a two-column rich table from a dict of parsed fields."""
    table = Table(title=escape(title))
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    for field, value in values.items():
        if isinstance(value, list):
            value = ", ".join(value)
        table.add_row(field, escape(str(value)))
    return table


def echo_match(result: MatchResult, query: str) -> None:
    """Print a one-line summary of a match result."""
    if result.kind == MatchKind.MATCHED:
        click.secho(f"✅ '{query}' matched {result.anime.title.preferred()} ({result.method.value})", fg="green", bold=True)
    elif result.kind == MatchKind.FUZZY:
        click.secho(
            f"🔍 '{query}' fuzzy matched {result.anime.title.preferred()} (confidence {result.confidence:.2f})",
            fg="yellow",
            bold=True,
        )
    else:
        click.secho(f"❌ No match for '{query}'", fg="red", bold=True)
