"""
Match Title CLI Command

Matches a title against the configured catalog, bypassing the recognition cache.
"""

import logging
import click
from services.catalog_implementations.catalog_interface import CatalogInterface
from services.title_matcher import FUZZY_THRESHOLD
from services.title_matcher import match_title as match_candidates
from utils.cli_helpers import echo_match, get_service_from_context
from utils.title_normalizer import normalize

logger = logging.getLogger(__name__)


@click.command("match-title")
@click.argument("query")
@click.option("--threshold", "-t", type=float, default=FUZZY_THRESHOLD, show_default=True, help="Minimum fuzzy confidence")
@click.option("--show-normalized", is_flag=True, help="Also print the normalized query")
@click.pass_context
def match_title(ctx: click.Context, query: str, threshold: float, show_normalized: bool) -> None:
    """
    Match a title against the catalog (exact, normalized, then fuzzy).

    Args:
        ctx (click.Context): Click context containing the catalog.
        query (str): Title to look up.
        threshold (float): Minimum fuzzy confidence.
        show_normalized (bool): Print the normalized form of the query.

    Returns:
        None. Exits with status 1 when nothing matches.
    """
    catalog: CatalogInterface = get_service_from_context(ctx, "catalog")

    if show_normalized:
        click.secho(f"🔤 Normalized: '{normalize(query)}'", fg="cyan")

    try:
        result = match_candidates(query, catalog.all_anime(), threshold=threshold)
    except (OSError, ValueError) as e:
        logger.exception(f"Error reading catalog: {e}")
        click.secho(f"❌ Error reading catalog: {e}", fg="red", bold=True)
        ctx.exit(1)

    echo_match(result, query)
    if not result.is_match:
        ctx.exit(1)
    click.secho(f"🆔 IDs: {result.anime.ids}", fg="blue")
