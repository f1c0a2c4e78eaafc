"""Command-line entry point for the user record store.

Examples:
  userstore --operation add --item '{"id":"1","email":"a@x.com","age":30}' --fileName users.json
  userstore --operation list --fileName users.json
  userstore --operation findById --id 1 --fileName users.json
  userstore --operation remove --id 1 --fileName users.json

Query results go to stdout as raw bytes; logs go to stderr. Any failure
exits with status 1 after the record file has been closed.
"""

import logging
import sys

import click

from . import config
from .errors import RecordStoreError
from .store import Arguments, run

log = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format=config.LOG_FORMAT,
        handlers=[logging.StreamHandler()],
    )


@click.command("userstore")
@click.option("--operation", default="", help=f"Operation to run: {', '.join(config.OPERATIONS)}")
@click.option("--id", "record_id", default="", help="Record id for findById and remove")
@click.option("--item", default="", help="JSON object to add, e.g. '{\"id\":\"1\",\"email\":\"a@x.com\",\"age\":30}'")
@click.option("--fileName", "file_name", default=lambda: config.USERS_FILE,
              help="Path to the JSON record file (default: $USERS_FILE)")
@click.option("--lock/--no-lock", default=lambda: config.USE_FILE_LOCK,
              help="Hold an exclusive advisory lock on the file (default: $USERSTORE_LOCK)")
@click.option("--log-level", default=lambda: config.LOG_LEVEL,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              help="Log level for stderr output (default: $LOG_LEVEL or WARNING)")
def main(operation, record_id, item, file_name, lock, log_level):
    """Add, list, find and remove user records in a JSON file."""
    setup_logging(log_level)

    args = Arguments(operation=operation, id=record_id, item=item, file_name=file_name)
    sink = sys.stdout.buffer
    try:
        run(args, sink, lock=lock)
    except (RecordStoreError, OSError) as e:
        log.debug(f"{operation or '<none>'} failed", exc_info=True)
        raise click.ClickException(str(e)) from e
    finally:
        sink.flush()


if __name__ == "__main__":
    main()
