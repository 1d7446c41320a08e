"""Domain layer — documents, property bags, capabilities, and errors.

This layer depends only on stdlib and pydantic.
It must never import from extensions, services, commands, or config.
"""
