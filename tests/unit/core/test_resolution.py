"""Unit tests for win determination and gallery candidate selection."""

import random

from pokeduel.core.resolution import decide_outcome, select_gallery_candidates
from pokeduel.schemas.types import Creature, TypeMember


def make_creature(name: str, attack: int, type_name: str = "normal") -> Creature:
    return Creature(id=1, name=name, attack=attack, hp=50, type_name=type_name)


class TestDecideOutcome:
    """Test decide_outcome."""

    def test_tie_on_equal_attack(self):
        """Test equal attack reports a tie naming both creatures."""
        outcome = decide_outcome(make_creature("ditto", 50), make_creature("eevee", 50))

        assert outcome.kind == "tie"
        assert outcome.winner is None
        assert outcome.message == "It's a tie! (ditto 50 = eevee 50)"
        assert outcome.winner_head == ""
        assert outcome.winner_type == ""

    def test_first_wins(self):
        """Test the strictly greater attack wins from the first slot."""
        first = make_creature("machamp", 80, "fighting")
        outcome = decide_outcome(first, make_creature("pidgey", 45))

        assert outcome.kind == "win"
        assert outcome.winner == first
        assert outcome.message == "The Winner is: machamp!"
        assert outcome.winner_head == "machamp!"
        assert outcome.winner_type == "Type: fighting"

    def test_second_wins(self):
        """Test the strictly greater attack wins from the second slot."""
        second = make_creature("onix", 45, "rock")
        outcome = decide_outcome(make_creature("magikarp", 10), second)

        assert outcome.winner == second

    def test_zero_attack_tie(self):
        """Test creatures lacking the stat tie at zero."""
        outcome = decide_outcome(make_creature("a", 0), make_creature("b", 0))
        assert outcome.kind == "tie"


class TestSelectGalleryCandidates:
    """Test select_gallery_candidates."""

    def test_excludes_winner_and_limits(self):
        """Test the winner is excluded and at most three of the rest are kept."""
        winner = make_creature("charmander", 52, "fire")
        members = [
            TypeMember(name=name, url=f"https://api/pokemon/{name}/")
            for name in ["charmander", "vulpix", "growlithe", "ponyta", "magmar"]
        ]

        chosen = select_gallery_candidates(members, winner, random.Random(3))

        assert len(chosen) == 3
        assert all(member.name != "charmander" for member in chosen)
        assert {member.name for member in chosen} <= {
            "vulpix",
            "growlithe",
            "ponyta",
            "magmar",
        }
        assert len({member.name for member in chosen}) == 3

    def test_drops_nameless_entries(self):
        winner = make_creature("charmander", 52, "fire")
        members = [TypeMember(name="", url="u1"), TypeMember(name="vulpix", url="u2")]

        chosen = select_gallery_candidates(members, winner, random.Random(0))

        assert chosen == [TypeMember(name="vulpix", url="u2")]

    def test_fewer_than_limit(self):
        winner = make_creature("a", 1)
        members = [TypeMember(name="b", url="u")]

        assert select_gallery_candidates(members, winner, random.Random(0), 3) == members

    def test_does_not_mutate_input(self):
        winner = make_creature("a", 1)
        members = [TypeMember(name=str(i), url="u") for i in range(10)]
        snapshot = list(members)

        select_gallery_candidates(members, winner, random.Random(0))

        assert members == snapshot

    def test_shuffle_reaches_every_candidate(self):
        """Test each remaining candidate can be chosen."""
        winner = make_creature("a", 1)
        members = [TypeMember(name=name, url="u") for name in "abcdef"]
        rng = random.Random(42)

        seen = set()
        for _ in range(200):
            seen.update(m.name for m in select_gallery_candidates(members, winner, rng))

        assert seen == set("bcdef")
