"""Infrastructure Layer: database engine ownership and logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All SQLAlchemy failures surface as DatabaseError (core/errors.py)
"""
