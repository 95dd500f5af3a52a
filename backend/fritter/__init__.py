"""
Fritter Backend: Application Package
=====================================

What: Server side of the Fritter social-posting app (freets, replies,
      likes, reports, follows and circles).
Who:  Imported by uvicorn (`fritter.main:app`), Alembic and pytest.

Layers:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  existence, ownership, content rules
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
