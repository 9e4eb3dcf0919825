"""Headless one-shot duel printed to the terminal."""

import asyncio
import random
from pathlib import Path

import click

from pokeduel.adapters.pokeapi.client import PokeAPIClient
from pokeduel.config import Config, ConfigError, load_config
from pokeduel.core.controller import FETCH_ERROR_MESSAGE, BattleController
from pokeduel.core.state import BATTLE_LABEL
from pokeduel.schemas.messages import BattleView
from pokeduel.utils.telemetry import setup_logging


def format_view(view: BattleView) -> str:
    """Render a view as plain text lines."""
    lines = [view.title]
    for slot in (view.first, view.second):
        lines.append(f"  {slot.name}: hp {slot.hp}, attack {slot.attack}")
    if view.result:
        lines.append(view.result)
    if view.winner_type:
        lines.append(view.winner_type)
    if view.gallery_visible:
        names = ", ".join(entry.name for entry in view.gallery)
        lines.append(f"Same type: {names}")
    return "\n".join(lines)


async def print_battle_label(view: BattleView) -> None:
    if view.battle_label != BATTLE_LABEL:
        click.echo(view.battle_label)


async def run_duel(config: Config, seed: int | None = None) -> BattleView:
    """Select a pair, battle it and wait for the gallery.

    Args:
        config: Application configuration
        seed: Optional seed for the random source

    Returns:
        The final rendered view
    """
    async with PokeAPIClient(
        base_url=config.pokeapi.base_url, timeout=config.pokeapi.request_timeout
    ) as gateway:
        controller = BattleController(
            gateway=gateway,
            rng=random.Random(seed),
            max_creature_id=config.pokeapi.max_creature_id,
            gallery_size=config.battle.gallery_size,
            animation_step_seconds=config.battle.animation_step_seconds,
        )
        controller.renderer.subscribe(print_battle_label)

        view = await controller.choose_new_pair()
        if view.result == FETCH_ERROR_MESSAGE:
            return view

        await controller.battle()
        await controller.wait_for_gallery()
        return controller.view


@click.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file (YAML)",
)
@click.option("--seed", type=int, default=None, help="Seed for the random source")
def duel(config_path: Path | None, seed: int | None) -> None:
    """Run a single battle between two random creatures."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    setup_logging(config.logging.level, config.logging.format)

    view = asyncio.run(run_duel(config, seed))
    click.echo(format_view(view))
    if view.result == FETCH_ERROR_MESSAGE:
        raise SystemExit(1)
