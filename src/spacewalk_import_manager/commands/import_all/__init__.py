"""Command for importing a whole spacewalk export."""

import sys
import typing
from collections.abc import Mapping

from spacewalk_import_manager.entities import default_registry
from spacewalk_import_manager.importers import (
    Importer,
    UnknownImporterError,
    hammer_importers,
)

from ._driver import drive
from ._expand import expand
from ._models import Action, ExecutionPlan, ImportOptions, PlanStep


def run(
    options: ImportOptions,
    importers: Mapping[str, Importer] | None = None,
    out: typing.TextIO | None = None,
) -> ExecutionPlan:
    """Import the selected entities and whatever they depend on.

    Nothing is imported when an entity is unknown or has no importer.
    A dry run doesn't need any importers.
    """
    if importers is None:
        importers = hammer_importers()

    registry = default_registry()
    expand(registry, options.entities)

    missing = {
        d.importer_id
        for d in registry
        if d.selected and d.importer_id not in importers
    }
    if len(missing) > 0 and not options.dry_run:
        raise UnknownImporterError(missing)

    return drive(registry, options, importers, out or sys.stdout)


__all__ = ["Action", "ExecutionPlan", "ImportOptions", "PlanStep", "run"]
