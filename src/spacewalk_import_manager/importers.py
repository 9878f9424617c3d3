"""The importer units swiman hands each entity off to."""

import logging
import subprocess
from collections.abc import Iterable, Sequence
from typing import Protocol

_log = logging.getLogger(__name__)


class Importer(Protocol):
    """Imports one entity from its export data.

    Failures are raised, never returned.
    """

    def run(self, args: list[str]) -> None: ...


class ImporterFailure(RuntimeError):  # noqa: N818
    """An importer unit did not complete."""

    def __init__(self, subcommand: str, returncode: int | None) -> None:
        """Initializes a new instance of ImporterFailure."""
        self.subcommand = subcommand
        self.returncode = returncode
        if returncode is None:
            msg = f"Importer '{subcommand}' could not be started"
        else:
            msg = f"Importer '{subcommand}' failed with exit code {returncode}"
        super().__init__(msg)


class UnknownImporterError(ValueError):
    """An entity's importer id has no importer unit behind it."""

    def __init__(self, importer_ids: Iterable[str]) -> None:
        """Initializes a new instance of UnknownImporterError."""
        self.importer_ids = sorted(importer_ids)
        super().__init__(
            f"No importer available for: {', '.join(self.importer_ids)}",
        )


class HammerImporter:
    """Runs an entity's import as a `hammer import` subcommand."""

    def __init__(self, subcommand: str, command: Sequence[str] = ("hammer",)) -> None:
        """Initializes a new instance of HammerImporter."""
        self._subcommand = subcommand
        self._command = list(command)

    @property
    def argv_prefix(self) -> list[str]:
        return [*self._command, "import", self._subcommand]

    def run(self, args: list[str]) -> None:
        """Runs hammer and waits for it to finish.

        hammer's own output is passed straight through to the terminal.

        :raises ImporterFailure: if hammer can't start or exits non-zero
        """
        argv = self.argv_prefix + args
        _log.debug("Running %s", argv)
        try:
            res = subprocess.run(argv, check=False)  # noqa: S603
        except OSError as e:
            raise ImporterFailure(self._subcommand, None) from e

        if res.returncode != 0:
            raise ImporterFailure(self._subcommand, res.returncode)


HAMMER_SUBCOMMANDS = {
    "OrganizationImportCommand": "organization",
    "UserImportCommand": "user",
    "SystemGroupImportCommand": "host-collection",
    "RepositoryEnableCommand": "repository-enable",
    "RepositoryImportCommand": "repository",
    "LocalRepositoryImportCommand": "content-view",
    "ActivationKeyImportCommand": "activation-key",
    "TemplateSnippetImportCommand": "template-snippet",
}


def hammer_importers(command: Sequence[str] = ("hammer",)) -> dict[str, Importer]:
    """The default importer for every importer id."""
    return {i: HammerImporter(s, command) for (i, s) in HAMMER_SUBCOMMANDS.items()}
