"""
Delimited free-text name fields.

Duty rosters and assignment slots keep staff as plain text ("A, B" or one
name per line) instead of foreign keys. These helpers turn that text into
tokens and, when needed, into typed references against the staff directory.
"""
from __future__ import annotations
import re
from typing import Iterable, Optional, Protocol

from .schema import ResolvedName, StaffReference, UnresolvedName

_SEPARATORS = re.compile(r"[,\n]")


class _Named(Protocol):
    id: int
    full_name: str


def split_names(text: Optional[str]) -> list[str]:
    """Split on comma or newline, trim, drop empties. Duplicates and order are kept."""
    if not text:
        return []
    return [t.strip() for t in _SEPARATORS.split(text) if t.strip()]


def join_names(names: Iterable[str]) -> str:
    return ", ".join(n.strip() for n in names if n and n.strip())


def _directory_index(staff: Iterable[_Named], case_sensitive: bool) -> dict[str, _Named]:
    index: dict[str, _Named] = {}
    for s in staff:
        key = s.full_name if case_sensitive else s.full_name.lower()
        # first entry in directory order wins on homonyms
        index.setdefault(key, s)
    return index


def match_staff(name: str, staff: Iterable[_Named], *, case_sensitive: bool = True) -> Optional[_Named]:
    key = name if case_sensitive else name.lower()
    return _directory_index(staff, case_sensitive).get(key)


def resolve_names(
    text: Optional[str],
    staff: Iterable[_Named],
    *,
    case_sensitive: bool = True,
) -> list[ResolvedName]:
    index = _directory_index(staff, case_sensitive)
    resolved: list[ResolvedName] = []
    for token in split_names(text):
        hit = index.get(token if case_sensitive else token.lower())
        if hit is not None:
            resolved.append(StaffReference(staff_id=hit.id, full_name=hit.full_name))
        else:
            resolved.append(UnresolvedName(name=token))
    return resolved
