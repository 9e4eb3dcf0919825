"""pokeduel - random creature battles backed by PokeAPI.

pokeduel fetches two random creatures, shows their stats and declares
the one with the higher attack the winner, then shows a few other
creatures sharing the winner's type.
"""

__version__ = "0.1.0"

from .core import (
    BattleController,
    BattleOutcome,
    BattleState,
    ControlState,
    Renderer,
    decide_outcome,
    map_creature,
    pick_distinct_ids,
)
from .schemas import BattleView, Creature, TypeMember
from .utils.errors import (
    BattleInProgressError,
    FetchError,
    PokeDuelError,
    SelectionInProgressError,
)

__all__ = [
    "BattleController",
    "BattleInProgressError",
    "BattleOutcome",
    "BattleState",
    "BattleView",
    "ControlState",
    "Creature",
    "FetchError",
    "PokeDuelError",
    "Renderer",
    "SelectionInProgressError",
    "TypeMember",
    "__version__",
    "decide_outcome",
    "map_creature",
    "pick_distinct_ids",
]
