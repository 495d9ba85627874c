"""Tag Rules — verifies name normalization."""

import pytest

from adboard.core.domain_types import TAG_NAME_MAX_LENGTH
from adboard.core.errors import InvalidTagNameError
from adboard.core.tag_rules import normalize_tag_name


def test_normalizes_case_and_whitespace():
    assert normalize_tag_name("  Vintage ") == "vintage"
    assert normalize_tag_name("URGENT") == "urgent"


def test_normalization_is_idempotent():
    once = normalize_tag_name(" Mixed Case ")
    assert normalize_tag_name(once) == once


@pytest.mark.parametrize("name", ["", "   ", "\t\n"])
def test_blank_names_rejected(name):
    with pytest.raises(InvalidTagNameError) as exc_info:
        normalize_tag_name(name)
    assert exc_info.value.code == "INVALID_TAG_NAME"
    assert exc_info.value.http_status == 400


def test_max_length_accepted_and_one_more_rejected():
    assert normalize_tag_name("a" * TAG_NAME_MAX_LENGTH) == "a" * TAG_NAME_MAX_LENGTH
    with pytest.raises(InvalidTagNameError):
        normalize_tag_name("a" * (TAG_NAME_MAX_LENGTH + 1))


def test_length_checked_after_stripping():
    padded = "  " + "b" * TAG_NAME_MAX_LENGTH + "  "
    assert normalize_tag_name(padded) == "b" * TAG_NAME_MAX_LENGTH
