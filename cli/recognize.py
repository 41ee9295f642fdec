"""
Recognize CLI Command

Runs the full pipeline on release filenames: parse, recognize the title
through the recognition cache and redirect the episode number.
"""

import logging
import click
from services.recognition_service import recognize_release
from utils.cli_helpers import console, echo_match, elements_table, get_service_from_context

logger = logging.getLogger(__name__)


@click.command("recognize")
@click.argument("filenames", nargs=-1, required=True)
@click.option("--service", type=click.Choice(["mal", "kitsu", "anilist"]), default="mal", show_default=True,
              help="ID used for episode redirection")
@click.option("--stats", is_flag=True, help="Print recognition cache statistics at the end")
@click.pass_context
def recognize(ctx: click.Context, filenames: tuple, service: str, stats: bool) -> None:
    """
    Recognize release filenames against the catalog.

    Args:
        ctx (click.Context): Click context containing catalog, cache and relations.
        filenames (tuple): Filenames or torrent titles.
        service (str): Tracking service whose ID drives episode redirection.
        stats (bool): Print cache statistics.

    Returns:
        None. Exits with status 1 if any filename is not recognized.
    """
    catalog = get_service_from_context(ctx, "catalog")
    cache = get_service_from_context(ctx, "cache")
    relations = get_service_from_context(ctx, "relations")

    unrecognized = 0
    for filename in filenames:
        try:
            outcome = recognize_release(filename, cache, catalog, relations, service=service)
        except (OSError, ValueError) as e:
            logger.exception(f"Error recognizing {filename}: {e}")
            click.secho(f"❌ Error recognizing '{filename}': {e}", fg="red", bold=True)
            ctx.exit(1)

        echo_match(outcome.match, outcome.elements.title or filename)
        if not outcome.match.is_match:
            unrecognized += 1
            continue
        if outcome.redirect is not None:
            click.secho(
                f"↪️  Episode {outcome.elements.episode_number} -> {outcome.redirect.destination} "
                f"episode {outcome.redirect.episode}",
                fg="magenta",
            )
        elif outcome.episode is not None:
            click.secho(f"📺 Episode {outcome.episode}", fg="cyan")

    if stats:
        console.print(elements_table(cache.stats().model_dump(), title="Recognition cache"))

    if unrecognized:
        ctx.exit(1)
