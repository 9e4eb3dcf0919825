"""Win determination and same-type gallery candidate selection."""

import random

from pokeduel.core.state import BattleOutcome
from pokeduel.schemas.types import Creature, TypeMember

GALLERY_SIZE = 3


def decide_outcome(first: Creature, second: Creature) -> BattleOutcome:
    """Compare attack stats; the strictly greater attack wins.

    Args:
        first: Creature in the first slot
        second: Creature in the second slot

    Returns:
        A tie outcome when attacks are equal, otherwise a win outcome
    """
    if first.attack == second.attack:
        return BattleOutcome(
            kind="tie",
            message=(
                f"It's a tie! ({first.name} {first.attack} = "
                f"{second.name} {second.attack})"
            ),
        )

    winner = first if first.attack > second.attack else second
    return BattleOutcome(
        kind="win",
        message=f"The Winner is: {winner.name}!",
        winner=winner,
    )


def select_gallery_candidates(
    members: list[TypeMember],
    winner: Creature,
    rng: random.Random,
    limit: int = GALLERY_SIZE,
) -> list[TypeMember]:
    """Pick up to ``limit`` random same-type creatures other than the winner.

    Entries with no name, or with the winner's name, are dropped before a
    uniform shuffle.
    """
    candidates = [
        member for member in members if member.name and member.name != winner.name
    ]
    # Random.shuffle is an in-place Fisher-Yates shuffle
    rng.shuffle(candidates)
    return candidates[:limit]
