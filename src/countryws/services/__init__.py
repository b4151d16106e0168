"""Service layer — use cases returning ServiceResult.

Services may import from domain and depend on the ``CountryRepository``
port. They must never import from infrastructure, soap, commands, or mcp.
"""
