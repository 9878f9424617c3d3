import logging
import typing
from collections.abc import Mapping

from spacewalk_import_manager.entities import EntityRegistry
from spacewalk_import_manager.importers import Importer

from ._arguments import build_args
from ._models import Action, ExecutionPlan, ImportOptions, PlanStep

_log = logging.getLogger(__name__)


def drive(
    registry: EntityRegistry,
    options: ImportOptions,
    importers: Mapping[str, Importer],
    out: typing.TextIO,
) -> ExecutionPlan:
    """Imports the selected entities one at a time in declared order.

    An importer that raises stops the run, the remaining entities are left alone.
    """
    plan = ExecutionPlan()
    for d in registry:
        if not d.selected:
            _log.debug("%s is not selected", d.name)
            plan.steps.append(PlanStep(d.name, selected=False, action=Action.NOT_SELECTED))
            continue

        import_file = options.directory / f"{d.source_file}.csv"
        args = build_args(d.name, import_file, options)
        out.write(f"Import {d.name:<20} using {' '.join(args)}\n")

        file_exists = import_file.exists()
        if not file_exists:
            _log.info("Skipping %s, %s does not exist", d.name, import_file)
            out.write(f"...SKIPPING, no file {import_file} available.\n")
            action = Action.MISSING_FILE
        elif options.dry_run:
            _log.debug("Not running %s for %s", d.importer_id, d.name)
            action = Action.DRY_RUN
        else:
            _log.info("Running %s for %s", d.importer_id, d.name)
            # importers may write to the same file descriptor
            out.flush()
            importers[d.importer_id].run(args)
            action = Action.EXECUTED

        plan.steps.append(PlanStep(d.name, True, action, file_exists, args))  # noqa: FBT003

    return plan
