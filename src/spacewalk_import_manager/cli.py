"""The Command Line Interface for swiman."""

import argparse
import logging
import os
import shlex
import sys
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from spacewalk_import_manager import _cli_log
from spacewalk_import_manager.commands import import_all, list_entities
from spacewalk_import_manager.entities import ALL, UnknownEntityError
from spacewalk_import_manager.importers import (
    ImporterFailure,
    UnknownImporterError,
    hammer_importers,
)

_IMPORT__DIRECTORY = "SWIMAN__IMPORT__DIRECTORY"
_IMPORT__ENTITIES = "SWIMAN__IMPORT__ENTITIES"
_IMPORT__INTOORGID = "SWIMAN__IMPORT__INTOORGID"
_IMPORT__MERGEUSERS = "SWIMAN__IMPORT__MERGEUSERS"

_HAMMER__COMMAND = "SWIMAN__HAMMER__COMMAND"

_DEFAULT_DIRECTORY = "/tmp/exports"  # noqa: S108

_log = logging.getLogger(__name__)


@dataclass
class _ParsedArgs:
    # These have internal defaults, env vars, and cli flags
    directory: Path
    entities: str
    hammer_command: str
    default_merge_users: bool

    # These have env vars and cli flags
    into_org_id: str | None = None

    # This boolean flag doesn't behave like the rest of the fields
    merge_users: bool | None = None

    # these have just defaults and cli flags
    list_entities: bool = False
    dry_run: bool = False
    verbose: int = 0
    log_directory: Path = Path("./logs")

    def as_hammer_args(self) -> list[str]:
        hammer = shlex.split(self.hammer_command)
        if len(hammer) == 0:
            empty = "The hammer command can't be empty"
            raise ValueError(empty)

        return hammer

    def as_import_options(self) -> import_all.ImportOptions:
        entities = [e.strip() for e in self.entities.split(",") if e.strip()]
        if len(entities) == 0:
            none = "At least one entity (or all) is required"
            raise ValueError(none)

        return import_all.ImportOptions(
            self.directory,
            entities,
            self.into_org_id,
            self.default_merge_users
            if self.merge_users is None
            else self.merge_users,
            self.dry_run,
        )

    @staticmethod
    @lru_cache
    def parser() -> argparse.ArgumentParser:
        desc = (
            "Load ALL data from a specified directory "
            "that is in spacewalk-export format."
        )
        parser = argparse.ArgumentParser(prog="swiman", description=desc)

        parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
        parser.add_argument("-v", "--verbose", action="count")
        parser.add_argument("--log-directory", type=Path)

        import_parser = parser.add_argument_group("Import Settings")
        import_parser.add_argument(
            "--directory",
            metavar="DIR_PATH",
            help="spacewalk-export directory. "
            f"Can also be specified as {_IMPORT__DIRECTORY} environment variable. "
            f"Defaults to {_DEFAULT_DIRECTORY}.",
            type=Path,
        )
        import_parser.add_argument(
            "--entities",
            metavar="entity[,entity...]",
            help=f"Import specific entities, or {ALL} of them. "
            f"Can also be specified as {_IMPORT__ENTITIES} environment variable.",
            type=str,
        )
        import_parser.add_argument(
            "--list-entities",
            action="store_true",
            help="List entities we understand and exit.",
        )
        import_parser.add_argument(
            "--into-org-id",
            metavar="ORG_ID",
            help="Import all organizations into one specified by id. "
            f"Can also be specified as {_IMPORT__INTOORGID} environment variable.",
            type=str,
        )
        import_parser.add_argument(
            "--merge-users",
            action=argparse.BooleanOptionalAction,
            help="Merge pre-created users (except admin). "
            f"Can also be specified as {_IMPORT__MERGEUSERS} environment variable.",
        )
        import_parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what we would have done, if we'd been allowed.",
        )

        hammer_parser = parser.add_argument_group("Hammer Settings")
        hammer_parser.add_argument(
            "--hammer-command",
            help="The hammer executable and any global options to run it with. "
            f"Can also be specified as {_HAMMER__COMMAND} environment variable.",
            type=str,
        )

        return parser


def main(args: list[str] | None = None) -> int:
    """Marshalls inputs and executes commands for swiman."""
    parsed_args = _ParsedArgs(
        directory=Path(os.environ.get(_IMPORT__DIRECTORY, _DEFAULT_DIRECTORY)),
        entities=os.environ.get(_IMPORT__ENTITIES, ALL),
        into_org_id=os.environ.get(_IMPORT__INTOORGID),
        default_merge_users=os.environ.get(_IMPORT__MERGEUSERS, "0") == "1",
        hammer_command=os.environ.get(_HAMMER__COMMAND, "hammer"),
    )
    parser = _ParsedArgs.parser()
    parsed_args = parser.parse_args(args, namespace=parsed_args)

    if parsed_args.list_entities:
        list_entities.run(sys.stdout)
        return 0

    try:
        i_opts = parsed_args.as_import_options()
        hammer = parsed_args.as_hammer_args()
    except ValueError:
        parser.print_usage()
        raise

    _cli_log.initialize(
        parsed_args.log_directory,
        30 - (parsed_args.verbose * 10),
        20 - (min(1, parsed_args.verbose) * 10),
    )

    try:
        import_all.run(i_opts, hammer_importers(hammer))
    except (UnknownEntityError, UnknownImporterError):
        parser.print_usage()
        raise
    except ImporterFailure:
        _log.exception("Import stopped, the remaining entities were not imported")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
