"""Service layer — document operations returning ServiceResult.

Services may import from domain, extensions, plugins, and config.
They must never import from commands or output.
"""
