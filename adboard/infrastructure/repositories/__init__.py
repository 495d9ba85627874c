"""SQL Repositories — SQLAlchemy implementations of the core boundary Protocols.

Invariants:
    - Repositories never commit implicitly; services call commit() once per operation
    - Returned values are core dataclasses, never ORM instances
"""

from adboard.infrastructure.repositories.sql_ad_repository import SqlAdRepository
from adboard.infrastructure.repositories.sql_category_repository import SqlCategoryRepository
from adboard.infrastructure.repositories.sql_tag_repository import SqlTagRepository
from adboard.infrastructure.repositories.sql_user_repository import SqlUserRepository

__all__ = [
    "SqlAdRepository",
    "SqlCategoryRepository",
    "SqlTagRepository",
    "SqlUserRepository",
]
