"""Data models for creatures and rendered views."""

from .messages import PLACEHOLDER, BattleView, GalleryEntry, SlotView
from .types import Creature, TypeMember

__all__ = [
    "PLACEHOLDER",
    "BattleView",
    "Creature",
    "GalleryEntry",
    "SlotView",
    "TypeMember",
]
