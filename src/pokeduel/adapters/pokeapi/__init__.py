"""PokeAPI gateway."""

from pokeduel.adapters.pokeapi.client import DEFAULT_BASE_URL, PokeAPIClient

__all__ = ["DEFAULT_BASE_URL", "PokeAPIClient"]
