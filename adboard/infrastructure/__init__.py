"""Infrastructure Layer — persistence adapters and cross-cutting concerns.

Invariants:
    - Repositories implement the Protocols in core/repository_protocols.py
    - All SQLAlchemy failures surface as core.errors.DatabaseError
"""
