"""
Kacchi Likhavat Backend — Application Package Initializer
==========================================================

What: Marks the `likhavat` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend is a layered REST service:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, response envelope
    ├─────────────────────────────────────┤
    │        Auth (Bearer JWT gate)       │  ← resolves the caller's user id
    ├─────────────────────────────────────┤
    │   Services (ownership-scoped CRUD)  │  ← CRUD, dashboard, search
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Every service method takes the caller's user id and never touches
    rows owned by anyone else.
"""

__version__ = "1.0.0"
