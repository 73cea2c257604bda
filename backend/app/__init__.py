"""
Cash Card Service — Application Package Initializer
=====================================================

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Business Logic)       │  ← ownership, paging, errors
    ├─────────────────────────────────────┤
    │   Repositories (Store Interface)    │  ← Protocol + SQL adapter
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Each layer receives the one below it explicitly, so each can be tested
    with the lower layer mocked out.
"""

__version__ = "1.0.0"
