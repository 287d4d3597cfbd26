"""Service Layer: database-backed operations called by thin routes.

Invariants:
    - Services receive an already-validated schema and a scoped AsyncSession
    - SQLAlchemy exceptions never escape a service; they become DatabaseError
"""
