"""
AP Exam Sync: Application Package Initializer
==============================================

What: Marks the `apsync` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The server follows a layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Field checks, lookups, mutations
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Document models + API contracts
    ├─────────────────────────────────────┤
    │        Store (Persistence)          │  ← One JSON document on disk
    └─────────────────────────────────────┘

    The `client` subpackage is the other half of the system: an httpx-based
    sync client that mirrors server state into a local cache.
"""

__version__ = "1.0.0"
