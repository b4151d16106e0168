"""Domain layer — the country record, lookup keys, and error taxonomy.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, soap, commands, or config.
"""
