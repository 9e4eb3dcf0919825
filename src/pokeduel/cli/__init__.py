"""Command-line interface for pokeduel."""
