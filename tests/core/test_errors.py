"""Error Hierarchy — verifies codes, HTTP statuses and the REST envelope.

Tests:
    - Each error maps to its documented code and status
    - Rule violations share InvalidOperationError as base
    - to_response() carries code, message, category, severity, timestamp, context
"""

from uuid import uuid4

import pytest

from adboard.core.errors import (
    AdboardError,
    CircularReferenceError,
    DatabaseError,
    DuplicateNameError,
    ErrorCategory,
    HasSubcategoriesError,
    InvalidOperationError,
    InvalidStatusTransitionError,
    InvalidTagNameError,
    ReferencedByAdsError,
    ResourceNotFoundError,
    UnauthorizedError,
)


@pytest.mark.parametrize("error, code, status", [
    (ResourceNotFoundError("Category", uuid4()), "RESOURCE_NOT_FOUND", 404),
    (DuplicateNameError("Category", "Cars"), "DUPLICATE_NAME", 409),
    (CircularReferenceError(uuid4(), uuid4()), "CIRCULAR_REFERENCE", 400),
    (HasSubcategoriesError(uuid4()), "HAS_SUBCATEGORIES", 409),
    (ReferencedByAdsError("Tag", uuid4(), 3), "REFERENCED_BY_ADS", 409),
    (InvalidStatusTransitionError(uuid4(), "DELETED", "DRAFT"), "INVALID_STATUS_TRANSITION", 400),
    (InvalidTagNameError("", "empty"), "INVALID_TAG_NAME", 400),
    (UnauthorizedError("Ad", uuid4(), uuid4()), "UNAUTHORIZED", 403),
    (DatabaseError("boom", "commit"), "DATABASE_ERROR", 503),
])
def test_codes_and_statuses(error, code, status):
    assert isinstance(error, AdboardError)
    assert error.code == code
    assert error.http_status == status


@pytest.mark.parametrize("error", [
    CircularReferenceError(uuid4(), uuid4()),
    HasSubcategoriesError(uuid4()),
    ReferencedByAdsError("Category", uuid4(), 1),
    InvalidStatusTransitionError(uuid4(), "PUBLISHED", "DRAFT"),
    InvalidTagNameError("x" * 80, "too long"),
])
def test_rule_violations_are_invalid_operations(error):
    assert isinstance(error, InvalidOperationError)
    assert error.category is ErrorCategory.BUSINESS_RULE


def test_to_response_envelope():
    category_id = uuid4()
    body = ResourceNotFoundError("Category", category_id).to_response()["error"]
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["category"] == "resource_not_found"
    assert str(category_id) in body["message"]
    assert body["context"] == {
        "resource_type": "Category",
        "resource_id": str(category_id),
    }
    assert "timestamp" in body


def test_unauthorized_records_actor():
    actor = uuid4()
    error = UnauthorizedError("Ad", uuid4(), actor)
    assert error.context.actor_id == str(actor)
