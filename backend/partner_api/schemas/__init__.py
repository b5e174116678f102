"""
Partner API - Pydantic Schemas
===============================

API contracts (request bodies and responses), kept separate from the ORM
models so the database layout can change without changing the JSON.
"""
