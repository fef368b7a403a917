"""
DayNotes Backend: Application Package Initializer
==================================================

What: Marks the `daynotes` directory as a Python package.
Who:  Imported by uvicorn (daynotes.main:app), Alembic, pytest and the
      Notes Panel client.

Architecture Note:
    The backend follows the same layering for every resource:

    ┌─────────────────────────────────────┐
    │     Routes (API + page guard)       │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (business rules)       │  ← Ownership checks, validation
    ├─────────────────────────────────────┤
    │     Models & Schemas (data)         │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │     Database (persistence)          │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    The `daynotes.client` subpackage sits outside that stack: it is the
    Notes Panel, a consumer of the HTTP API that holds a day's notes as
    immutable state snapshots.
"""

__version__ = "1.0.0"
