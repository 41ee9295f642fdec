"""
Redirect Episode CLI Command

Looks up an episode in the relation rules and prints where it maps to.
"""

import logging
import click
from services.relation_database import RelationDatabase
from utils.cli_helpers import get_service_from_context

logger = logging.getLogger(__name__)


@click.command("redirect-episode")
@click.argument("anime_id", type=click.IntRange(min=0))
@click.argument("episode", type=click.IntRange(min=0))
@click.option("--service", type=click.Choice(["mal", "kitsu", "anilist"]), default="mal", show_default=True,
              help="Service the ID belongs to")
@click.pass_context
def redirect_episode(ctx: click.Context, anime_id: int, episode: int, service: str) -> None:
    """
    Redirect an episode number through the relation rules.

    Args:
        ctx (click.Context): Click context containing the relation database.
        anime_id (int): Source anime ID.
        episode (int): Source episode number.
        service (str): Which service anime_id belongs to.

    Returns:
        None. Exits with status 1 when no rule applies.
    """
    relations: RelationDatabase = get_service_from_context(ctx, "relations")
    logger.info(f"Redirecting {service} {anime_id} episode {episode}")

    redirect = relations.redirect(service, anime_id, episode)
    if redirect is None:
        click.secho(f"➖ No relation rule for {service} {anime_id} episode {episode}", fg="yellow")
        ctx.exit(1)

    click.secho(
        f"↪️  {service} {anime_id} episode {episode} -> {redirect.destination} episode {redirect.episode}",
        fg="green",
        bold=True,
    )
