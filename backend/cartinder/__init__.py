"""
Car Tinder Backend — Application Package Initializer
=====================================================

What:  Marks the `cartinder` directory as a Python package.
Why:   Enables module imports like `from cartinder.config import settings`.
Who:   Used by uvicorn, pytest, and the `cartinder` console script.

Architecture Note:
    The backend is a thin pass-through over a MySQL database whose stored
    procedures and functions own the business rules:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     CarService (Validation Layer)   │  ← required fields, error envelopes
    ├─────────────────────────────────────┤
    │       CarStore (Data Access)        │  ← one SQL call, error decoding
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Each request opens one session, makes one store call, and returns.
"""

__version__ = "1.0.0"
