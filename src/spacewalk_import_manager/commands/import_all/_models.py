"""Models for import command."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class ImportOptions:
    """Options used for importing a spacewalk export."""

    directory: Path
    entities: list[str]

    into_org_id: str | None = None
    merge_users: bool = False
    dry_run: bool = False


class Action(Enum):
    """What happened to an entity during a run."""

    NOT_SELECTED = "not-selected"
    MISSING_FILE = "missing-file"
    DRY_RUN = "dry-run"
    EXECUTED = "executed"


@dataclass(frozen=True)
class PlanStep:
    """A single entity's outcome."""

    entity: str
    selected: bool
    action: Action
    file_exists: bool | None = None
    args: list[str] = field(default_factory=list)


@dataclass
class ExecutionPlan:
    """Results of importing a spacewalk export, in import order."""

    steps: list[PlanStep] = field(default_factory=list)

    @property
    def selected(self) -> list[PlanStep]:
        """The steps that were reported on."""
        return [s for s in self.steps if s.selected]

    @property
    def executed(self) -> list[str]:
        """The entities that had their importer run."""
        return [s.entity for s in self.steps if s.action is Action.EXECUTED]

    def action_of(self, entity: str) -> Action:
        return next(s.action for s in self.steps if s.entity == entity)
