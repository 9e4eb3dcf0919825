"""Random pair selection."""

import random

MAX_CREATURE_ID = 1025


def random_creature_id(rng: random.Random, max_id: int = MAX_CREATURE_ID) -> int:
    """Draw an id uniformly from ``[1, max_id]``."""
    return rng.randint(1, max_id)


def pick_distinct_ids(
    rng: random.Random, max_id: int = MAX_CREATURE_ID
) -> tuple[int, int]:
    """Draw two distinct creature ids.

    The second id is re-drawn until it differs from the first, which
    terminates with probability 1 for any ``max_id >= 2``.

    Args:
        rng: Random source
        max_id: Highest known creature id

    Returns:
        Pair of distinct ids

    Raises:
        ValueError: If ``max_id`` leaves no room for two distinct ids
    """
    if max_id < 2:
        raise ValueError(f"max_id must be at least 2, got {max_id}")

    first_id = random_creature_id(rng, max_id)
    second_id = random_creature_id(rng, max_id)
    while second_id == first_id:
        second_id = random_creature_id(rng, max_id)
    return first_id, second_id
