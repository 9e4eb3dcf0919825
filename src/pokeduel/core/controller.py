"""Battle controller: the selection and resolution flows.

The controller is the single owner of the battle state, the UI flags,
the random source and the in-flight guards. All mutation happens on the
event loop, so the guards are plain flags rather than locks.
"""

import asyncio
import random
from collections.abc import Awaitable, Callable
from typing import Protocol

from pokeduel.core.renderer import Renderer
from pokeduel.core.resolution import (
    GALLERY_SIZE,
    decide_outcome,
    select_gallery_candidates,
)
from pokeduel.core.selection import MAX_CREATURE_ID, pick_distinct_ids
from pokeduel.core.state import BATTLE_LABEL, BattleState, ControlState
from pokeduel.schemas.messages import BattleView, GalleryEntry
from pokeduel.schemas.types import Creature, TypeMember
from pokeduel.utils.errors import (
    BattleInProgressError,
    FetchError,
    SelectionInProgressError,
)
from pokeduel.utils.telemetry import get_logger, record_battle_outcome

FETCH_ERROR_MESSAGE = "Error fetching pokemon"
ANIMATION_LABELS = ("calculating...", "fighting.", "fighting..", "fighting...")


class CreatureGateway(Protocol):
    """Protocol for the creature lookups the flows depend on."""

    async def fetch_by_id(self, id_or_name: int | str) -> Creature: ...

    async def fetch_by_type(self, type_name: str) -> list[TypeMember]: ...

    async def fetch_resource(self, url: str) -> Creature: ...


class BattleController:
    """Runs the selection and resolution flows against one battle state."""

    def __init__(
        self,
        gateway: CreatureGateway,
        renderer: Renderer | None = None,
        rng: random.Random | None = None,
        max_creature_id: int = MAX_CREATURE_ID,
        gallery_size: int = GALLERY_SIZE,
        animation_step_seconds: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize the controller.

        Args:
            gateway: Creature lookups
            renderer: Renderer receiving every state change
            rng: Random source for ids and gallery shuffling
            max_creature_id: Highest creature id that may be drawn
            gallery_size: Maximum number of same-type creatures shown
            animation_step_seconds: Pause between battle label steps
            sleep: Awaitable used for the animation pauses
        """
        self.gateway = gateway
        self.renderer = renderer or Renderer()
        self.rng = rng or random.Random()
        self.max_creature_id = max_creature_id
        self.gallery_size = gallery_size
        self.animation_step_seconds = animation_step_seconds
        self._sleep = sleep

        self.state = BattleState()
        self.controls = ControlState()
        self._gallery_task: asyncio.Task[list[GalleryEntry]] | None = None
        self._logger = get_logger("pokeduel.controller")

    @property
    def view(self) -> BattleView:
        return self.renderer.last_view

    async def render(self) -> BattleView:
        return await self.renderer.render(self.state, self.controls)

    async def choose_new_pair(self) -> BattleView:
        """Fetch two distinct random creatures and make them the current pair.

        The pair is replaced only when both fetches succeed; on failure the
        previous pair stays and an error message is shown instead.

        Returns:
            The view rendered at the end of the flow

        Raises:
            SelectionInProgressError: If a selection is already in flight
            BattleInProgressError: If a battle animation is running
        """
        if self.controls.selecting:
            raise SelectionInProgressError()
        if self.controls.battling:
            raise BattleInProgressError()

        self.controls.selecting = True
        try:
            self.controls.clear_result()
            self.controls.battle_enabled = False
            await self.render()

            first_id, second_id = pick_distinct_ids(self.rng, self.max_creature_id)
            try:
                first, second = await asyncio.gather(
                    self.gateway.fetch_by_id(first_id),
                    self.gateway.fetch_by_id(second_id),
                )
            except FetchError as e:
                self._logger.error(
                    "Failed to fetch pair",
                    first_id=first_id,
                    second_id=second_id,
                    error=str(e),
                    status_code=e.status_code,
                )
                self.controls.error_message = FETCH_ERROR_MESSAGE
                return await self.render()

            self.state.replace_pair(first, second)
            self.controls.battle_enabled = self.state.has_pair
            self._logger.info(
                "Pair selected",
                first=first.name,
                second=second.name,
                generation=self.state.generation,
            )
            return await self.render()
        finally:
            self.controls.selecting = False

    async def battle(self) -> BattleView:
        """Play the battle animation, then announce the result.

        A no-op when no pair is loaded. On a win, the same-type gallery is
        loaded in the background.

        Raises:
            BattleInProgressError: If a battle animation is already running
            SelectionInProgressError: If a selection is in flight
        """
        if not self.state.has_pair:
            return self.view
        if self.controls.battling:
            raise BattleInProgressError()
        if self.controls.selecting:
            raise SelectionInProgressError()

        self.controls.battling = True
        self.controls.battle_enabled = False
        try:
            for label in ANIMATION_LABELS:
                self.controls.battle_label = label
                await self.render()
                await self._sleep(self.animation_step_seconds)
        finally:
            self.controls.battle_label = BATTLE_LABEL
            self.controls.battle_enabled = True
            self.controls.battling = False

        return await self.announce_winner()

    async def announce_winner(self) -> BattleView:
        """Decide and render the outcome of the current pair."""
        first, second = self.state.first, self.state.second
        if first is None or second is None:
            return self.view

        outcome = decide_outcome(first, second)
        self.state.outcome = outcome
        self.controls.show_outcome = True
        record_battle_outcome(outcome.kind)
        self._logger.info(
            "Battle resolved",
            outcome=outcome.kind,
            first=first.name,
            first_attack=first.attack,
            second=second.name,
            second_attack=second.attack,
            winner=outcome.winner.name if outcome.winner else None,
        )
        view = await self.render()

        self.controls.result_epoch += 1
        if self._gallery_task is not None and not self._gallery_task.done():
            self._gallery_task.cancel()
        self._gallery_task = None
        if outcome.winner is not None:
            self._gallery_task = asyncio.create_task(
                self.load_same_type(outcome.winner, self.controls.result_epoch)
            )
            self._gallery_task.add_done_callback(self._on_gallery_done)
        return view

    async def load_same_type(
        self, winner: Creature, epoch: int
    ) -> list[GalleryEntry]:
        """Show up to ``gallery_size`` other creatures sharing the winner's type.

        Best-effort: a failed type lookup or a failed detail fetch never
        surfaces to the user. Results are discarded when the result display
        has been cleared or replaced since ``epoch``, whether by a new
        selection (successful or not) or by another battle.

        Returns:
            The entries that were fetched successfully
        """
        try:
            members = await self.gateway.fetch_by_type(winner.type_name)
        except FetchError as e:
            self._logger.warning(
                "Type lookup failed", type_name=winner.type_name, error=str(e)
            )
            return []

        candidates = select_gallery_candidates(
            members, winner, self.rng, self.gallery_size
        )
        details = await asyncio.gather(
            *(self._fetch_gallery_entry(member) for member in candidates)
        )
        entries = [entry for entry in details if entry is not None]

        if epoch != self.controls.result_epoch:
            self._logger.info(
                "Discarding stale gallery",
                winner=winner.name,
                epoch=epoch,
                current_epoch=self.controls.result_epoch,
            )
            return entries

        self.controls.gallery = entries
        self._logger.info(
            "Gallery loaded",
            type_name=winner.type_name,
            candidates=len(candidates),
            shown=len(entries),
        )
        if entries:
            await self.render()
        return entries

    async def wait_for_gallery(self) -> list[GalleryEntry]:
        """Await the background gallery load started by the last win, if any."""
        if self._gallery_task is None:
            return []
        return await self._gallery_task

    async def cancel_gallery(self) -> None:
        """Cancel a pending gallery load and wait for it to unwind."""
        task, self._gallery_task = self._gallery_task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _fetch_gallery_entry(self, member: TypeMember) -> GalleryEntry | None:
        try:
            if member.url:
                creature = await self.gateway.fetch_resource(member.url)
            else:
                creature = await self.gateway.fetch_by_id(member.name)
        except FetchError as e:
            self._logger.debug("Dropping gallery entry", name=member.name, error=str(e))
            return None

        return GalleryEntry(
            name=creature.name or member.name, sprite=creature.front_sprite
        )

    def _on_gallery_done(self, task: asyncio.Task[list[GalleryEntry]]) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self._logger.error(
                "Gallery load crashed",
                error=str(error),
                error_type=type(error).__name__,
            )
