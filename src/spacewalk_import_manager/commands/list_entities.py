"""Command for listing the entities that can be imported."""

import sys
import typing

from spacewalk_import_manager.entities import default_registry


def run(out: typing.TextIO | None = None) -> list[str]:
    """Writes the entity names in the order they'd be imported."""
    out = out or sys.stdout
    names = default_registry().names()
    out.write("Entities I understand:\n")
    for n in names:
        out.write(f"  {n}\n")

    return names
