"""
Partner API - Application Package
==================================

What: HTTP service for managing marketplace partners and reading their service offers.
Who:  Imported by uvicorn (`partner_api.main:app`), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Ingestion & Upload (File Intake)  │  ← multipart parsing, disk writes
    ├─────────────────────────────────────┤
    │     Partner Handler (Domain Logic)  │  ← persistence, response shaping
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never talk to the database directly. They receive a PartnerHandler
    through FastAPI's dependency injection, which is what tests replace.
"""

__version__ = "1.0.0"
