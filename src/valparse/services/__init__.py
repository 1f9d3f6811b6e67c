"""Service layer: use cases returning CommandResult.

Services may import from domain and config layers.
They must never import from commands or output.
"""
