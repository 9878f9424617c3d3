import pytest
from pytest_cases import parametrize, parametrize_with_cases

from spacewalk_import_manager.entities import (
    ENTITY_ORDER,
    UnknownEntityError,
    default_registry,
)


class ExpandCases:
    def case_all(self) -> tuple[list[str], list[str]]:
        return (["all"], list(ENTITY_ORDER))

    def case_all_and_more(self) -> tuple[list[str], list[str]]:
        return (["user", "all"], list(ENTITY_ORDER))

    def case_no_prerequisite(self) -> tuple[list[str], list[str]]:
        return (["organization"], ["organization"])

    def case_standalone(self) -> tuple[list[str], list[str]]:
        return (["template-snippet"], ["template-snippet"])

    def case_one_hop(self) -> tuple[list[str], list[str]]:
        return (["user"], ["organization", "user"])

    def case_requested_twice(self) -> tuple[list[str], list[str]]:
        return (
            ["activation-key", "activation-key", "organization"],
            ["organization", "activation-key"],
        )

    def case_blank_names(self) -> tuple[list[str], list[str]]:
        return ([" user ", ""], ["organization", "user"])


@parametrize_with_cases("requested,expected", cases=ExpandCases)
def test_expand(requested: list[str], expected: list[str]) -> None:
    import spacewalk_import_manager.commands.import_all._expand as uut

    registry = default_registry()
    uut.expand(registry, requested)

    assert registry.selected() == expected


@parametrize(requested=[[n] for n in ENTITY_ORDER] + [list(ENTITY_ORDER[3:6])])
def test_expand_prerequisites(requested: list[str]) -> None:
    import spacewalk_import_manager.commands.import_all._expand as uut

    registry = default_registry()
    uut.expand(registry, requested)

    for n in requested:
        assert registry.describe(n).selected
    for d in registry:
        if d.selected and d.depends_on is not None:
            assert registry.describe(d.depends_on).selected, d.name


def test_expand_resets() -> None:
    import spacewalk_import_manager.commands.import_all._expand as uut

    registry = default_registry()
    registry.mark_selected("template-snippet")
    uut.expand(registry, ["organization"])

    assert registry.selected() == ["organization"]


def test_expand_unknown_selects_nothing() -> None:
    import spacewalk_import_manager.commands.import_all._expand as uut

    registry = default_registry()
    with pytest.raises(UnknownEntityError) as e:
        uut.expand(registry, ["organization", "systems", "all"])

    assert e.value.name == "systems"
    assert registry.selected() == []


def test_expand_single_pass_walks_declared_order_backwards() -> None:
    """content-view's prerequisite is visited after it, in the same pass."""
    import spacewalk_import_manager.commands.import_all._expand as uut

    registry = default_registry()
    uut.expand(registry, ["content-view"])

    assert registry.selected() == ["organization", "repository", "content-view"]
