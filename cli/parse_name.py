"""
Parse Name CLI Command

Parses one or more release filenames and prints the extracted elements.
"""

import logging
import click
from utils.cli_helpers import console, elements_table
from utils.filename_parser import parse_filename

logger = logging.getLogger(__name__)


@click.command("parse-name")
@click.argument("filenames", nargs=-1, required=True)
@click.option("--json", "as_json", is_flag=True, help="Print one JSON object per filename")
@click.pass_context
def parse_name(ctx: click.Context, filenames: tuple, as_json: bool) -> None:
    """
    Parse release filenames into title, episode, group and release details.

    Args:
        ctx (click.Context): Click context (unused, kept for a uniform command signature).
        filenames (tuple): Filenames or torrent titles to parse.
        as_json (bool): Emit JSON instead of tables.

    Returns:
        None
    """
    for filename in filenames:
        logger.info(f"Parsing: {filename}")
        elements = parse_filename(filename)
        if as_json:
            click.echo(elements.to_json())
            continue
        values = elements.to_dict()
        if not values:
            click.secho(f"⚠️  Nothing recognized in '{filename}'", fg="yellow")
            continue
        console.print(elements_table(values, title=filename))
