"""Mapping of raw PokeAPI records into typed creature records.

The source payloads are untyped JSON. Every optional field is defaulted
here, once, so the rest of the code can rely on a fully populated
:class:`~pokeduel.schemas.types.Creature`.
"""

from typing import Any

from pokeduel.schemas.types import Creature, TypeMember

UNKNOWN_TYPE = "unknown"


def _dig(record: Any, *path: str | int) -> Any:
    """Walk ``path`` through nested dicts and lists, returning None on any miss."""
    current = record
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or not -len(current) <= key < len(current):
                return None
            current = current[key]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(key)
    return current


def _as_count(value: Any) -> int:
    """Coerce a stat-like value to a non-negative int, or 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and value >= 0:
        return value
    return 0


def _as_text(value: Any, default: str = "") -> str:
    if isinstance(value, str) and value:
        return value
    return default


def get_stat_value(record: Any, stat_name: str, fallback: int = 0) -> int:
    """Look up a base stat by name in a raw creature record.

    Args:
        record: Raw creature record
        stat_name: Stat name, e.g. ``"hp"`` or ``"attack"``
        fallback: Value returned when the stat is absent

    Returns:
        The base stat, or ``fallback`` when missing or malformed
    """
    stats = _dig(record, "stats")
    if not isinstance(stats, list):
        return fallback

    for entry in stats:
        if _dig(entry, "stat", "name") == stat_name:
            base_stat = _dig(entry, "base_stat")
            if base_stat is None:
                return fallback
            return _as_count(base_stat)
    return fallback


def map_creature(record: Any) -> Creature:
    """Build a Creature from a raw by-id record.

    Never raises: sprites default to ``""``, stats to ``0`` and the type
    to ``"unknown"``.

    Args:
        record: Raw JSON body of a ``/pokemon/{id}`` response

    Returns:
        The normalized creature
    """
    return Creature(
        id=_as_count(_dig(record, "id")),
        name=_as_text(_dig(record, "name")),
        front_sprite=_as_text(_dig(record, "sprites", "front_default")),
        back_sprite=_as_text(_dig(record, "sprites", "back_default")),
        hp=get_stat_value(record, "hp", 0),
        attack=get_stat_value(record, "attack", 0),
        type_name=_as_text(_dig(record, "types", 0, "type", "name"), UNKNOWN_TYPE),
    )


def map_type_members(record: Any) -> list[TypeMember]:
    """Extract the ``pokemon[].pokemon`` entries of a by-type record.

    Entries that are not objects are skipped; missing names or urls
    become empty strings and are filtered later by the caller.
    """
    entries = _dig(record, "pokemon")
    if not isinstance(entries, list):
        return []

    members = []
    for entry in entries:
        member = _dig(entry, "pokemon")
        if not isinstance(member, dict):
            continue
        members.append(
            TypeMember(
                name=_as_text(member.get("name")),
                url=_as_text(member.get("url")),
            )
        )
    return members
