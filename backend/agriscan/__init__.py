"""
AgriScan Backend - Application Package Initializer
===================================================

What: Marks the `agriscan` directory as a Python package.
Who:  Imported by uvicorn (`uvicorn agriscan.main:app`), Alembic and pytest.

Architecture Note:
    The backend keeps the usual layered split:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Gemini client, formatter, scans
    ├─────────────────────────────────────┤
    │      Document Stores (Persistence)  │  ← Firestore / SQL / in-memory
    └─────────────────────────────────────┘

    Routes translate HTTP to service calls, services never see a Request
    object, and every store satisfies the same two-method interface.
"""

__version__ = "1.0.0"
