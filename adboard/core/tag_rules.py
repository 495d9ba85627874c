"""Tag Rules — name normalization for free-form labels.

Invariants:
    - Stored tag names are stripped and lowercase, whatever the input case
    - Normalized names are 1..TAG_NAME_MAX_LENGTH characters
    - TagUsage.ad_count counts ad links, soft-deleted ads included
"""

from dataclasses import dataclass

from adboard.core.domain_types import TAG_NAME_MAX_LENGTH, TagId
from adboard.core.errors import InvalidTagNameError


@dataclass(frozen=True)
class TagRecord:
    id: TagId
    name: str


@dataclass(frozen=True)
class TagUsage:
    """A tag with the number of ads it is attached to in some context."""
    id: TagId
    name: str
    ad_count: int


def normalize_tag_name(name: str) -> str:
    """Strip and lowercase; reject empty or over-long results."""
    normalized = name.strip().lower()
    if not normalized:
        raise InvalidTagNameError(name, "name cannot be empty or whitespace")
    if len(normalized) > TAG_NAME_MAX_LENGTH:
        raise InvalidTagNameError(
            name, f"name longer than {TAG_NAME_MAX_LENGTH} characters",
        )
    return normalized
