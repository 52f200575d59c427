"""Falling-block puzzle engine: game core, command arbiter, renderers."""
