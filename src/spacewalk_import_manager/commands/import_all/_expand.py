from collections.abc import Iterable

from spacewalk_import_manager.entities import ALL, EntityRegistry, UnknownEntityError


def expand(registry: EntityRegistry, requested: Iterable[str]) -> None:
    """Selects the requested entities and what they depend on.

    Dependencies are followed in a single pass rather than recursively.
    Walking the declared order backwards visits every dependent before its
    prerequisite so the prerequisite's own dependency is seen in the same pass.

    :raises UnknownEntityError: before anything is selected
    """
    names = [n.strip() for n in requested if n.strip()]
    for n in names:
        if n != ALL and not registry.is_known(n):
            raise UnknownEntityError(n, registry.names())

    registry.reset()
    if ALL in names:
        registry.select_all()
        return

    for n in names:
        registry.mark_selected(n)

    for d in reversed(list(registry)):
        if d.selected and d.depends_on is not None:
            registry.mark_selected(d.depends_on)
