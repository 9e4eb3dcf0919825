# Core battle flows

from .controller import (
    ANIMATION_LABELS,
    FETCH_ERROR_MESSAGE,
    BattleController,
    CreatureGateway,
)
from .mapper import get_stat_value, map_creature, map_type_members
from .renderer import Renderer, Surface, project
from .resolution import decide_outcome, select_gallery_candidates
from .selection import MAX_CREATURE_ID, pick_distinct_ids
from .state import BattleOutcome, BattleState, ControlState

__all__ = [
    "ANIMATION_LABELS",
    "FETCH_ERROR_MESSAGE",
    "MAX_CREATURE_ID",
    "BattleController",
    "BattleOutcome",
    "BattleState",
    "ControlState",
    "CreatureGateway",
    "Renderer",
    "Surface",
    "decide_outcome",
    "get_stat_value",
    "map_creature",
    "map_type_members",
    "pick_distinct_ids",
    "project",
    "select_gallery_candidates",
]
