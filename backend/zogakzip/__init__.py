"""
Zogakzip Backend — Application Package Initializer
===================================================

What: Marks the `zogakzip` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Password gates, tags, counters
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes handle status codes and request parsing and delegate everything
    else to services. Services raise the exceptions in `zogakzip.exceptions`;
    the handlers registered in `zogakzip.main` turn them into responses.
"""

__version__ = "1.0.0"
