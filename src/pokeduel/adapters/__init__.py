"""Adapters connecting the battle core to the outside world."""
