"""Infrastructure layer — SQLite engine, schema, and repository backends.

This layer depends on stdlib, the domain layer and third-party libs
(SQLAlchemy). It must never import from services, soap, commands, or output.
"""
