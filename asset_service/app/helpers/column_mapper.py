from typing import Dict, List, Sequence

from ..enum.asset_enum import NAME_TARGET, STATUS_TARGET

NAME_HEADERS = {"name", "asset name"}
STATUS_HEADERS = {"status", "asset status"}


def auto_map_columns(headers: Sequence[str], definitions: Sequence) -> Dict[str, str]:
    """
    Guess the import target of every CSV header.

    Each header is matched on its own, first hit wins:
        1. "name" / "asset name"      -> __name
        2. "status" / "asset status"  -> __status
        3. exact name or label of a definition (case-insensitive)
        4. substring of a definition name/label, or the other way round,
           scanning definitions in position order

    Headers that match nothing are left out of the mapping.
    """
    ordered = sorted(definitions, key=lambda d: d.position or 0)
    mapping: Dict[str, str] = {}

    for header in headers:
        lower = header.strip().lower()
        if not lower:
            continue

        if lower in NAME_HEADERS:
            mapping[header] = NAME_TARGET
            continue
        if lower in STATUS_HEADERS:
            mapping[header] = STATUS_TARGET
            continue

        exact = next(
            (d for d in ordered
             if d.name.lower() == lower or d.label.lower() == lower),
            None,
        )
        if exact:
            mapping[header] = exact.name
            continue

        partial = next(
            (d for d in ordered if _overlaps(lower, d.name.lower()) or _overlaps(lower, d.label.lower())),
            None,
        )
        if partial:
            mapping[header] = partial.name

    return mapping


def _overlaps(header: str, candidate: str) -> bool:
    if not candidate:
        return False
    return candidate in header or header in candidate


def resolve_mapping(headers: List[str], definitions: Sequence, mapping: Dict[str, str] = None) -> Dict[str, str]:
    """A caller-supplied mapping always wins over the guessed one."""
    if mapping:
        return dict(mapping)
    return auto_map_columns(headers, definitions)
