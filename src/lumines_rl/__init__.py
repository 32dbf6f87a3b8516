"""Lumines-style falling block puzzle: simulation core, Gymnasium env and pygame front-end."""
