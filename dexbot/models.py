"""Dataclasses and shared type definitions for DexBot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class CatalogEntry:
    species_id: int
    name: str
    genus: str
    # Insertion-ordered and deduplicated; several game versions repeat the same text.
    variants: Tuple[str, ...]


@dataclass(frozen=True)
class DexAssignment:
    """Full reply for a user's first request inside a rotation window."""

    requester_id: int
    requester_mention: str
    species_name: str
    species_id: int
    genus: str
    flavor_text: str
    image_url: str

    @property
    def padded_id(self) -> str:
        return f"{self.species_id:03}"


@dataclass(frozen=True)
class StillAssigned:
    """Short reply for repeat requests inside the same rotation window."""

    requester_id: int
    requester_mention: str
    species_name: str

    @property
    def message(self) -> str:
        return f"You are still a {self.species_name}. Try again tomorrow."


@dataclass(frozen=True)
class TriggerCommand:
    user_id: int
    display_name: str
    mention: str
    channel_id: Optional[int] = None


@dataclass(frozen=True)
class Unrecognized:
    reason: str = ""


DexReply = Union[DexAssignment, StillAssigned]
Trigger = Union[TriggerCommand, Unrecognized]


__all__ = [
    "CatalogEntry",
    "DexAssignment",
    "DexReply",
    "StillAssigned",
    "Trigger",
    "TriggerCommand",
    "Unrecognized",
]
