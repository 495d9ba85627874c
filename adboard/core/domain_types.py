"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - CategoryId, AdId, TagId, UserId wrap UUIDs — never use bare UUID in domain logic
    - All valid ad states encoded as an Enum — no raw string matching
    - Name limits mirror the column widths in models/

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and to the DB status column without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

CategoryId = NewType("CategoryId", UUID)
AdId = NewType("AdId", UUID)
TagId = NewType("TagId", UUID)
UserId = NewType("UserId", UUID)


# ─── Limits ──────────────────────────────────────────────────────

CATEGORY_NAME_MAX_LENGTH = 50
CATEGORY_DESCRIPTION_MAX_LENGTH = 255
TAG_NAME_MAX_LENGTH = 50
AD_TITLE_MAX_LENGTH = 100
AD_DESCRIPTION_MAX_LENGTH = 2000


# ─── Enums ───────────────────────────────────────────────────────

class AdStatus(str, Enum):
    """Advertisement lifecycle states — maps to DB `status` column."""
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    EXPIRED = "EXPIRED"
    SUSPENDED = "SUSPENDED"
    DELETED = "DELETED"


class ResourceType(str, Enum):
    """Resource kinds named in errors and log records."""
    CATEGORY = "Category"
    AD = "Ad"
    TAG = "Tag"
    USER = "User"
