"""Domain layer: front-matter synthesis, scalar quoting, and link rendering.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
