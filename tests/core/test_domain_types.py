"""Domain Types — verifies identity types, limits and enum values.

Tests:
    - NewType wrappers exist and are callable
    - AdStatus has exactly the five lifecycle states, serialized by name
    - ResourceType values are the names used in error messages
"""

from uuid import uuid4

from adboard.core.domain_types import (
    AdId, CategoryId, TagId, UserId,
    AdStatus, ResourceType,
    CATEGORY_NAME_MAX_LENGTH, TAG_NAME_MAX_LENGTH,
)


def test_identity_types_wrap_uuid():
    uid = uuid4()
    assert CategoryId(uid) == uid
    assert AdId(uid) == uid
    assert TagId(uid) == uid
    assert UserId(uid) == uid


def test_ad_status_has_five_states():
    assert set(AdStatus) == {
        AdStatus.DRAFT,
        AdStatus.PUBLISHED,
        AdStatus.EXPIRED,
        AdStatus.SUSPENDED,
        AdStatus.DELETED,
    }


def test_ad_status_values_are_upper_case_names():
    for status in AdStatus:
        assert status.value == status.name
    assert AdStatus("PUBLISHED") is AdStatus.PUBLISHED


def test_resource_type_values():
    assert ResourceType.CATEGORY.value == "Category"
    assert ResourceType.AD.value == "Ad"
    assert ResourceType.TAG.value == "Tag"
    assert ResourceType.USER.value == "User"


def test_name_limits():
    assert CATEGORY_NAME_MAX_LENGTH == 50
    assert TAG_NAME_MAX_LENGTH == 50
