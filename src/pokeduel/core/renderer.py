"""Projection of the battle onto presentation surfaces.

``project`` is a pure function from state to :class:`BattleView`. The
``Renderer`` keeps the last view and pushes every new one to the
subscribed surfaces (WebSocket broadcasters, terminal printers, tests).
"""

from collections.abc import Awaitable, Callable

from pokeduel.core.state import BattleState, ControlState
from pokeduel.schemas.messages import PLACEHOLDER, BattleView, SlotView
from pokeduel.schemas.types import Creature
from pokeduel.utils.telemetry import get_logger

Surface = Callable[[BattleView], Awaitable[None]]


def project_slot(creature: Creature | None) -> SlotView:
    """Render one display slot, with placeholders for an empty slot."""
    if creature is None:
        return SlotView()

    return SlotView(
        name=creature.name or PLACEHOLDER,
        hp=str(creature.hp),
        attack=str(creature.attack),
        image=creature.front_sprite,
        hover_image=creature.back_sprite or creature.front_sprite,
        alt=creature.name,
    )


def project_title(state: BattleState) -> str:
    first_name = state.first.name if state.first else PLACEHOLDER
    second_name = state.second.name if state.second else PLACEHOLDER
    return f"{first_name} vs {second_name}"


def project(state: BattleState, controls: ControlState) -> BattleView:
    """Build the full view from the battle state and the UI flags."""
    outcome = state.outcome if controls.show_outcome else None

    if controls.error_message:
        result = controls.error_message
    elif outcome is not None:
        result = outcome.message
    else:
        result = ""

    return BattleView(
        title=project_title(state),
        first=project_slot(state.first),
        second=project_slot(state.second),
        result=result,
        winner_head=outcome.winner_head if outcome else "",
        winner_type=outcome.winner_type if outcome else "",
        battle_enabled=controls.battle_enabled,
        battle_label=controls.battle_label,
        gallery_visible=controls.gallery_visible,
        gallery=list(controls.gallery),
    )


class Renderer:
    """Pushes projected views to subscribed surfaces."""

    def __init__(self) -> None:
        self.last_view = BattleView()
        self._surfaces: list[Surface] = []
        self._logger = get_logger("pokeduel.renderer")

    def subscribe(self, surface: Surface) -> None:
        self._surfaces.append(surface)

    def unsubscribe(self, surface: Surface) -> None:
        if surface in self._surfaces:
            self._surfaces.remove(surface)

    async def render(self, state: BattleState, controls: ControlState) -> BattleView:
        """Project the state, remember the view and push it to every surface."""
        view = project(state, controls)
        self.last_view = view

        for surface in list(self._surfaces):
            await surface(view)

        self._logger.debug(
            "View rendered",
            title=view.title,
            battle_enabled=view.battle_enabled,
            battle_label=view.battle_label,
            surfaces=len(self._surfaces),
        )
        return view
