"""
Tests for the item attribute store.
"""

from lor.models import ItemAttribute


def test_insert_and_get_record(services):
    assert services.data.insert(42, "pdf", "files/Photosynthesis.pdf")

    record = services.data.get_record(42, "pdf")
    assert isinstance(record, ItemAttribute)
    assert record.itemid == 42
    assert record.name == "pdf"
    assert record.value == "files/Photosynthesis.pdf"
    assert record.id is not None


def test_get_missing_record(services):
    assert services.data.get_record(42, "pdf") is None
    assert services.data.get_item_data(42) == {}


def test_duplicate_insert_fails(services):
    assert services.data.insert(42, "pdf", "files/A.pdf")
    assert services.data.insert(42, "pdf", "files/B.pdf") is False
    assert services.data.get_record(42, "pdf").value == "files/A.pdf"


def test_update_overwrites_value(services):
    services.data.insert(42, "pdf", "files/A.pdf")
    record = services.data.get_record(42, "pdf")

    assert services.data.update(record.model_copy(update={"value": "files/B.pdf"}))
    assert services.data.get_record(42, "pdf").value == "files/B.pdf"


def test_update_missing_row_fails(services):
    ghost = ItemAttribute(itemid=42, name="pdf", value="files/A.pdf")
    assert services.data.update(ghost) is False


def test_records_are_scoped_by_item(services):
    services.data.insert(1, "pdf", "files/One.pdf")
    services.data.insert(1, "document", "files/One.docx")
    services.data.insert(2, "pdf", "files/Two.pdf")

    assert services.data.get_item_data(1) == {
        "pdf": "files/One.pdf",
        "document": "files/One.docx",
    }
    assert [r.name for r in services.data.get_records(1)] == ["pdf", "document"]


def test_delete_records_twice(services):
    services.data.insert(1, "pdf", "files/One.pdf")
    services.data.insert(2, "pdf", "files/Two.pdf")

    assert services.data.delete_records(1)
    assert services.data.get_records(1) == []
    assert services.data.delete_records(1)
    assert services.data.get_records(1) == []
    assert services.data.get_item_data(2) == {"pdf": "files/Two.pdf"}
