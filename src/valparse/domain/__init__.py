"""Domain layer: rule tags, evaluation, atoms, and diagnostics.

This layer depends only on stdlib and pydantic.
It must never import from services, commands, config, or output.
"""
