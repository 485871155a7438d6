"""Field merging — shallow, last-wins union of attribute mappings."""

from typing import Any, Mapping, Optional


def merge(*sources: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Shallow-merge *sources* into a new dict.

    ``None`` sources are treated as empty. When a key appears in more than one
    source the value from the last source wins. Inputs are never mutated.
    """
    merged: dict[str, Any] = {}
    for source in sources:
        if source:
            merged.update(source)
    return merged
