# backend/tests/unit/test_category_metadata.py
import pytest

from vcat.models.category import Category, CategoryCustomField
from vcat.services.category_metadata import (
    CategoryMetadata,
    CategoryMetadataService,
    parse_flag,
    parse_name_list,
    join_name_list,
)


@pytest.mark.parametrize("raw, expected", [
    (None, []),
    ("", []),
    ([], []),
    ("testtag", ["testtag"]),
    ("a|b|c", ["a", "b", "c"]),
    ("a||b|", ["a", "b"]),
    (" a | b ", ["a", "b"]),
    ("b|a|b", ["b", "a"]),
    (["a", "b"], ["a", "b"]),
    (("a", "", "a"), ["a"]),
    (["a", 3, None], ["a"]),
    (42, []),
    ({"a": 1}, []),
])
def test_parse_name_list(raw, expected):
    assert parse_name_list(raw) == expected


def test_string_and_list_forms_agree():
    assert parse_name_list("x|y|x") == parse_name_list(["x", "y", "x"])


def test_join_name_list_normalizes():
    assert join_name_list(["a", " b", "", "a"]) == "a|b"
    assert join_name_list(None) == ""


@pytest.mark.parametrize("raw, expected", [
    (True, True),
    ("true", True),
    ("TRUE", True),
    (" true ", True),
    (False, False),
    ("false", False),
    ("t", False),
    ("1", False),
    (1, False),
    (None, False),
])
def test_parse_flag(raw, expected):
    assert parse_flag(raw) is expected


def test_metadata_without_category_is_not_virtual():
    metadata = CategoryMetadata(None)
    assert metadata.is_virtual() is False
    assert metadata.tag_names() == []
    assert metadata.tag_group_names() == []


def test_metadata_reads_custom_fields():
    category = Category(name="Virtual", slug="virtual")
    category.custom_field_rows = [
        CategoryCustomField(name="is_virtual_category", value="true"),
        CategoryCustomField(name="virtual_tag_names", value="one|two"),
        CategoryCustomField(name="virtual_tag_group_names", value="|colours|"),
    ]

    metadata = CategoryMetadata(category)

    assert metadata.is_virtual() is True
    assert metadata.tag_names() == ["one", "two"]
    assert metadata.tag_group_names() == ["colours"]


def test_save_virtual_config_persists_joined_lists(db_session, make_category):
    category = make_category("Virtual")

    metadata = CategoryMetadataService(db_session).save_virtual_config(
        category, is_virtual=True, tag_names=["a", "b", "a"], tag_group_names="g1|g2"
    )

    assert metadata.is_virtual() is True
    assert category.custom_fields == {
        "is_virtual_category": "true",
        "virtual_tag_names": "a|b",
        "virtual_tag_group_names": "g1|g2",
    }


def test_save_virtual_config_updates_existing_rows(db_session, make_category):
    category = make_category("Virtual")
    service = CategoryMetadataService(db_session)
    service.save_virtual_config(category, is_virtual=True, tag_names="a", tag_group_names="")

    metadata = service.save_virtual_config(category, is_virtual=False, tag_names="b|c", tag_group_names=None)

    assert metadata.is_virtual() is False
    assert metadata.tag_names() == ["b", "c"]
    assert len(category.custom_field_rows) == 3
    assert db_session.query(CategoryCustomField).count() == 3
