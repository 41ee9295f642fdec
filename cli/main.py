"""
Main entry point for the AniRecog CLI.
- Sets up the Click command group and context object.
- Dynamically loads all CLI commands from this directory.
"""
import os
import importlib
import click
import logging
import rich_click as rclick
from utils.anirecog_config import DEFAULT_CONFIG_PATH, get_config_value, load_configuration
from utils.logging_config import setup_logging
from services.catalog_factory import create_catalog
from services.recognition_cache import DEFAULT_CAPACITY, RecognitionCache
from services.relation_database import RelationDatabase
from services.stream_database import StreamDatabase
from services.title_matcher import FUZZY_THRESHOLD

logger = logging.getLogger(__name__)

CONTEXT_KEYS = ("config", "catalog", "cache", "relations", "streams")


def build_context(cfg: dict) -> dict:
    """
    Build the shared context object from a loaded configuration.

    Args:
        cfg (dict): Normalized configuration.

    Returns:
        dict: config, catalog, cache, relations and streams.

    Raises:
        ValueError: If the catalog configuration is invalid.
        RelationParseError: If the packaged relation rules are corrupt.
    """
    catalog = create_catalog(cfg)
    cache = RecognitionCache(
        capacity=get_config_value(cfg, 'recognition', 'cache_capacity', fallback=DEFAULT_CAPACITY, value_type=int),
        threshold=get_config_value(cfg, 'recognition', 'fuzzy_threshold', fallback=FUZZY_THRESHOLD, value_type=float),
    )

    relations = RelationDatabase.embedded()
    user_rules = get_config_value(cfg, 'relations', 'user_rules')
    if user_rules:
        if os.path.exists(user_rules):
            relations = RelationDatabase.from_file(user_rules).merge(relations)
        else:
            logger.warning(f"User relation rules not found: {user_rules}")

    streams = StreamDatabase.embedded()
    user_streams = get_config_value(cfg, 'streams', 'user_streams')
    if user_streams:
        if os.path.exists(user_streams):
            streams.merge_user(StreamDatabase.from_file(user_streams))
        else:
            logger.warning(f"User stream definitions not found: {user_streams}")

    logger.info(f"✓ Loaded {relations.rule_count} relation rules and {len(streams)} stream definitions")
    return {
        "config": cfg,
        "catalog": catalog,
        "cache": cache,
        "relations": relations,
        "streams": streams,
    }


@rclick.group()
@click.option('--logfile', '-l', type=click.Path(writable=True), help="Log to file")
@click.option('--verbose', '-v', count=True, help="Set verbosity level (-v = INFO, -vv = DEBUG)")
@click.option('--config', '-c', type=click.Path(), default=DEFAULT_CONFIG_PATH, help="Path to config file")
@click.pass_context
def anirecog_cli(ctx: click.Context, verbose: int, logfile: str, config: str) -> None:
    """
    Main CLI group. Sets up the context object with configuration, catalog,
    recognition cache, relation rules and stream definitions.
    All subcommands share this context.

    Args:
        ctx (click.Context): Click context for Click command group.
        verbose (int): Verbosity level (-v = INFO, -vv = DEBUG).
        logfile (str): Path to log file.
        config (str): Path to configuration file.

    Returns:
        None
    """
    # Tests inject a ready context object
    if ctx.obj and all(k in ctx.obj for k in CONTEXT_KEYS):
        return

    setup_logging(verbosity=verbose, logfile=logfile)

    try:
        logger.info("Loading configuration and initializing services")
        cfg = load_configuration(config)
        ctx.obj = build_context(cfg)
    except Exception as e:
        logger.exception(f"Critical error during initialization: {e}")
        click.secho(f"❌ Initialization failed: {e}", fg="red", bold=True)
        ctx.exit(1)


# Dynamic discovery loop: auto-register all CLI commands in this directory
COMMAND_DIR = os.path.dirname(__file__)
for filename in sorted(os.listdir(COMMAND_DIR)):
    # Only import .py files that are not main.py or __init__.py
    if filename.endswith(".py") and filename not in {"main.py", "__init__.py"}:
        command_name = filename[:-3]
        module_name = f"cli.{command_name}"
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            logger.error(f"Failed to import {module_name}: {e}")
            continue
        cli_function = getattr(module, command_name, None)
        if cli_function:
            anirecog_cli.add_command(cli_function)
        else:
            logger.debug(f"No command function found in {module_name}")

if __name__ == '__main__':
    anirecog_cli()
