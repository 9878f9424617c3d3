"""The entities swiman knows how to import and the order to import them in."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

ALL = "all"


class UnknownEntityError(ValueError):
    """An entity was requested that isn't in the registry."""

    def __init__(self, name: str, known: Iterable[str]) -> None:
        """Initializes a new instance of UnknownEntityError."""
        self.name = name
        self.known = list(known)
        super().__init__(
            f"Unknown entity '{name}', expected one of: {', '.join(self.known)}",
        )


@dataclass
class EntityDescriptor:
    """An importable entity.

    Only selected changes once the registry is built.
    """

    name: str
    """Unique key for the entity, as given to --entities."""

    source_file: str
    """Path of the export data relative to the export directory, without .csv."""

    importer_id: str
    """Identifier of the importer unit responsible for this entity."""

    depends_on: str | None = None
    """The entity that has to be imported before this one, if any."""

    selected: bool = False


class EntityRegistry:
    """The table of known entities in their declared import order."""

    def __init__(
        self,
        descriptors: Iterable[EntityDescriptor],
        order: Iterable[str],
    ) -> None:
        """Initializes a new instance of EntityRegistry.

        :raises ValueError: when the table or the order is inconsistent
        """
        self._known: dict[str, EntityDescriptor] = {}
        for d in descriptors:
            if d.name in self._known:
                dupe = f"Entity '{d.name}' is registered more than once"
                raise ValueError(dupe)
            self._known[d.name] = d

        self._order = list(order)
        if len(self._order) != len(self._known) or set(self._order) != set(
            self._known,
        ):
            perm = "Entity order must list every registered entity exactly once"
            raise ValueError(perm)

        position = {n: i for i, n in enumerate(self._order)}
        for d in self._known.values():
            if d.depends_on is None:
                continue
            if d.depends_on not in self._known:
                missing = f"Entity '{d.name}' depends on unknown '{d.depends_on}'"
                raise ValueError(missing)
            if position[d.depends_on] > position[d.name]:
                late = f"Entity '{d.name}' is ordered before '{d.depends_on}'"
                raise ValueError(late)

    def __iter__(self) -> Iterator[EntityDescriptor]:
        return (self._known[n] for n in self._order)

    def names(self) -> list[str]:
        """The entity names in declared import order."""
        return list(self._order)

    def is_known(self, name: str) -> bool:
        return name in self._known

    def describe(self, name: str) -> EntityDescriptor:
        """Looks up a single entity.

        :raises UnknownEntityError: when there is no such entity
        """
        if name not in self._known:
            raise UnknownEntityError(name, self._order)
        return self._known[name]

    def mark_selected(self, name: str) -> None:
        """Selects an entity for import. Selecting it twice is fine."""
        self.describe(name).selected = True

    def select_all(self) -> None:
        for d in self._known.values():
            d.selected = True

    def reset(self) -> None:
        for d in self._known.values():
            d.selected = False

    def selected(self) -> list[str]:
        """The selected entity names in declared import order."""
        return [d.name for d in self if d.selected]


ENTITY_ORDER = (
    "organization",
    "user",
    "host-collection",
    "repository-enable",
    "repository",
    "content-view",
    "activation-key",
    "template-snippet",
)


def _known_entities() -> list[EntityDescriptor]:
    # organizations are exported alongside users
    return [
        EntityDescriptor("organization", "users", "OrganizationImportCommand"),
        EntityDescriptor("user", "users", "UserImportCommand", "organization"),
        EntityDescriptor(
            "host-collection",
            "system-groups",
            "SystemGroupImportCommand",
            "organization",
        ),
        EntityDescriptor(
            "repository-enable",
            "channels",
            "RepositoryEnableCommand",
            "organization",
        ),
        EntityDescriptor(
            "repository",
            "repositories",
            "RepositoryImportCommand",
            "organization",
        ),
        EntityDescriptor(
            "content-view",
            "CHANNELS/export",
            "LocalRepositoryImportCommand",
            "repository",
        ),
        EntityDescriptor(
            "activation-key",
            "activation-keys",
            "ActivationKeyImportCommand",
            "organization",
        ),
        EntityDescriptor(
            "template-snippet",
            "kickstart-scripts",
            "TemplateSnippetImportCommand",
        ),
    ]


def default_registry() -> EntityRegistry:
    """A fresh registry of every entity swiman understands, nothing selected."""
    return EntityRegistry(_known_entities(), ENTITY_ORDER)
