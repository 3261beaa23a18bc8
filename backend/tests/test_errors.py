import pytest
from pydantic import ValidationError

from backend.errors import ErrorCollection, ErrorList, MessageBag, as_error_collection
from backend.models import ContactMessage


def test_message_bag_keeps_order_and_skips_duplicates():
    bag = MessageBag()
    bag.add("name", "required").add("email", "invalid").add("name", "too short").add("name", "required")

    assert bag.all() == ["required", "too short", "invalid"]
    assert bag.get("name") == ["required", "too short"]
    assert bag.keys() == ["name", "email"]
    assert len(bag) == 3


def test_message_bag_first():
    bag = MessageBag({"name": ["required", "too short"], "email": "invalid"})

    assert bag.first() == "required"
    assert bag.first("email") == "invalid"
    assert bag.first("missing") == ""
    assert MessageBag().first() == ""


def test_message_bag_has_and_empty():
    bag = MessageBag()

    assert bag.is_empty()
    assert not bag.has("name")

    bag.add("name", "required")

    assert not bag.is_empty()
    assert bag.has("name")


def test_message_bag_merge_accepts_bags_and_mappings():
    bag = MessageBag({"name": "required"})
    bag.merge(MessageBag({"email": "invalid"})).merge({"name": ["required", "too short"]})

    assert bag.messages() == {"name": ["required", "too short"], "email": ["invalid"]}


def test_message_bag_from_validation_error():
    with pytest.raises(ValidationError) as excinfo:
        ContactMessage.model_validate({"email": "not-an-email", "message": "hi"})

    bag = MessageBag.from_validation_error(excinfo.value)

    assert bag.keys() == ["name", "email"]
    assert bag.first("name") == "name: Field required"
    assert bag.first().startswith("name: ")


def test_message_bag_from_request_errors_strips_location():
    errors = [
        {"loc": ("body", "name"), "msg": "Field required"},
        {"loc": ("query", "page"), "msg": "Input should be a valid integer"},
        {"loc": ("body",), "msg": "Field required"},
        {"loc": (), "msg": "Value error"},
    ]

    bag = MessageBag.from_errors(errors)

    assert bag.all() == [
        "name: Field required",
        "page: Input should be a valid integer",
        "body: Field required",
        "Value error",
    ]


def test_error_list():
    errors = ErrorList(("a", "b"))

    assert errors.all() == ["a", "b"]
    assert errors.first() == "a"
    assert ErrorList().first() == ""


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, []),
        ("oops", ["oops"]),
        (("a", "b"), ["a", "b"]),
        ({"name": "required"}, ["required"]),
        (42, [42]),
    ],
)
def test_as_error_collection(value, expected):
    collection = as_error_collection(value)

    assert isinstance(collection, ErrorCollection)
    assert collection.all() == expected


def test_as_error_collection_keeps_rich_collections():
    bag = MessageBag({"name": "required"})

    assert as_error_collection(bag) is bag


def test_message_bag_ignores_json_offsets_after_body():
    bag = MessageBag.from_errors([{"loc": ("body", 12), "msg": "JSON decode error", "type": "json_invalid"}])

    assert bag.all() == ["body: JSON decode error"]
