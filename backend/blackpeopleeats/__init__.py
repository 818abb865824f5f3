"""
BlackPeopleEats Backend — Application Package
===============================================

What: JSON API behind the BlackPeopleEats feed (restaurants, users, follows,
      posts, sponsorship checkout, city highlights).

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (queries, collaborators) │  ← FeedService, Stripe, Gemini
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch the session directly; they receive it through
    FastAPI's dependency injection and hand it to a service. Tests swap the
    session dependency for an in-memory SQLite store.
"""

__version__ = "1.0.0"
