"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Relations between categories are by parent id only; no child collection is mapped

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from adboard.models.associations import ad_categories, ad_tags  # noqa: F401
from adboard.models.user import User  # noqa: F401
from adboard.models.category import Category  # noqa: F401
from adboard.models.tag import Tag  # noqa: F401
from adboard.models.ad import Ad  # noqa: F401
