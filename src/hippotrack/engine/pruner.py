"""Null pruner - produces the minimal canonical form of a record."""

from collections.abc import Mapping
from typing import Any

from hippotrack.types import ABSENT, is_absent


def prune(node: Any) -> Any:
    """Drop absent values and collapse empty collections, bottom-up.

    ``None``, ``ABSENT``, empty sequences and empty mappings all become
    ABSENT. Tuples come back as lists. ``prune(prune(x)) == prune(x)``.
    """
    if is_absent(node):
        return ABSENT

    if isinstance(node, Mapping):
        cleaned: dict[Any, Any] = {}
        for key, value in node.items():
            pruned = prune(value)
            if pruned is not ABSENT:
                cleaned[key] = pruned
        return cleaned if cleaned else ABSENT

    if isinstance(node, (list, tuple)):
        items = [pruned for pruned in map(prune, node) if pruned is not ABSENT]
        return items if items else ABSENT

    return node


def prune_record(record: Mapping[str, Any]) -> dict[str, Any]:
    """Prune a record; an entirely empty record becomes ``{}``."""
    pruned = prune(record)
    return pruned if isinstance(pruned, dict) else {}
