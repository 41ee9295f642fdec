"""
Stream Title CLI Command

Identifies a streaming service from a browser URL and/or tab title and
extracts the anime title.
"""

import logging
import click
from services.stream_database import StreamDatabase
from utils.cli_helpers import get_service_from_context

logger = logging.getLogger(__name__)


@click.command("stream-title")
@click.argument("title")
@click.option("--url", "-u", help="Page URL, tried before the title patterns")
@click.pass_context
def stream_title(ctx: click.Context, title: str, url: str) -> None:
    """
    Extract the anime title from a streaming site's tab title.

    Args:
        ctx (click.Context): Click context containing the stream definitions.
        title (str): Browser tab title.
        url (str): Optional page URL.

    Returns:
        None. Exits with status 1 when no stream definition matches.
    """
    streams: StreamDatabase = get_service_from_context(ctx, "streams")

    match = streams.detect(url=url, title=title)
    if match is None:
        click.secho(f"❌ No streaming service recognized for '{title}'", fg="red", bold=True)
        ctx.exit(1)

    click.secho(f"📡 {match.service_name}: {match.extracted_title}", fg="green", bold=True)
