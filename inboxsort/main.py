"""CLI entrypoint for inboxsort."""

import json
import sys
from pathlib import Path
from typing import Optional

import click
import structlog
from dotenv import load_dotenv

from inboxsort import __version__
from inboxsort.analytics import get_category_distribution
from inboxsort.errors import ConfigError, StorageError
from inboxsort.fetcher import load_messages
from inboxsort.logging_config import setup_logging
from inboxsort.storage import SQLiteOverrideStore
from inboxsort.taxonomy import (
    TaxonomyConfig,
    explain_classification,
    load_config,
    record_correction,
)
from inboxsort.ui.cli import (
    confirm_action,
    print_classifications,
    print_distribution,
    print_error,
    print_header,
    print_info,
    print_overrides,
    print_success,
    print_taxonomy,
    print_warning,
)

# Load environment variables
load_dotenv()

logger = structlog.get_logger(__name__)


class Engine:
    """Configuration and override store shared by the commands."""

    def __init__(self, config_path: Path | None, db_path: Path | None):
        self.config_path = config_path
        self.db_path = db_path
        self._config = None
        self._store = None

    @property
    def config(self) -> TaxonomyConfig:
        if self._config is None:
            self._config = load_config(self.config_path)
        return self._config

    @property
    def store(self) -> SQLiteOverrideStore:
        if self._store is None:
            self._store = SQLiteOverrideStore(db_path=self.db_path)
        return self._store


def _fail(message: str) -> None:
    print_error(message)
    sys.exit(1)


def _open_store(engine: Engine, quiet: bool = False) -> Optional[SQLiteOverrideStore]:
    """Open the override store, or return None so classification continues without it."""
    try:
        return engine.store
    except StorageError as e:
        logger.warning("override_store_unavailable", error=str(e))
        if not quiet:
            print_warning("Corrections unavailable, classifying without them")
        return None


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON taxonomy file (defaults to INBOXSORT_TAXONOMY_FILE)",
)
@click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Override database path (defaults to CACHE_DIR/inboxsort_overrides.db)",
)
@click.pass_context
def cli(ctx, config_path: Path | None, db_path: Path | None):
    """inboxsort - sort email into categories, with your corrections remembered."""
    setup_logging()
    ctx.obj = Engine(config_path, db_path)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--explain", is_flag=True, help="Show deciding signal and top score")
@click.option("--limit", default=0, help="Maximum rows to show (0 for all)")
@click.pass_obj
def classify(engine: Engine, file: Path, explain: bool, limit: int):
    """Classify messages from a JSON export."""
    print_header("Classify Messages")

    try:
        messages = load_messages(file)
        config = engine.config
        store = _open_store(engine)
    except (ConfigError, ValueError) as e:
        _fail(str(e))
        return

    if not messages:
        print_info("No messages in file")
        return

    results = [(msg, explain_classification(msg, config, store)) for msg in messages]
    print_classifications(results, explain=explain, limit=limit or None)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Print raw counts as JSON")
@click.pass_obj
def summary(engine: Engine, file: Path, as_json: bool):
    """Show how messages are spread across categories."""
    try:
        messages = load_messages(file)
        config = engine.config
        store = _open_store(engine, quiet=as_json)
        report = get_category_distribution(messages, config, store)
    except (ConfigError, ValueError) as e:
        _fail(str(e))
        return

    if as_json:
        click.echo(json.dumps(report["counts"], indent=2))
        return

    print_header("Category Summary")
    print_distribution(report)
    if report["top_category"]:
        print_info(f"Top category: {report['top_category']}")


@cli.command()
@click.argument("message_id")
@click.argument("category")
@click.pass_obj
def correct(engine: Engine, message_id: str, category: str):
    """Record the right CATEGORY for MESSAGE_ID."""
    try:
        record_correction(engine.store, message_id, category, engine.config)
    except (ConfigError, StorageError, ValueError) as e:
        _fail(str(e))
        return

    print_success(f"Message {message_id} will be classified as {category}")


@cli.command()
@click.argument("message_id")
@click.pass_obj
def forget(engine: Engine, message_id: str):
    """Remove the correction for MESSAGE_ID."""
    try:
        removed = engine.store.delete(message_id)
    except (ConfigError, StorageError) as e:
        _fail(str(e))
        return

    if removed:
        print_success(f"Correction for {message_id} removed")
    else:
        print_info(f"No correction recorded for {message_id}")


@cli.command()
@click.pass_obj
def overrides(engine: Engine):
    """List recorded corrections."""
    try:
        stored = engine.store.all()
    except (ConfigError, StorageError) as e:
        _fail(str(e))
        return

    print_overrides(stored)


@cli.command("clear-overrides")
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
@click.pass_obj
def clear_overrides(engine: Engine, yes: bool):
    """Delete all recorded corrections."""
    if not yes and not confirm_action("Delete all recorded corrections?"):
        print_info("Cancelled")
        return

    try:
        engine.store.clear()
    except (ConfigError, StorageError) as e:
        _fail(str(e))
        return

    print_success("Corrections cleared")


@cli.command()
@click.pass_obj
def categories(engine: Engine):
    """Show the taxonomy and scoring settings."""
    try:
        config = engine.config
    except ConfigError as e:
        _fail(str(e))
        return

    print_taxonomy(config)


if __name__ == "__main__":
    cli()
