"""Tests for item form construction and submission validation."""

import pytest

from lor.api.forms import build_item_form
from lor.services.fs import UploadedFiles
from lor.types import FileType, ItemForm, LinkType


@pytest.fixture
def vocabularies(services):
    services.items.add_category("Science")
    services.items.add_grade("Grade 5")
    services.items.add_grade("Grade 6")


def pdf_upload(filename: str = "lesson.pdf") -> UploadedFiles:
    upload = UploadedFiles()
    upload.add("pdf", b"%PDF-1.4", filename)
    return upload


class TestItemForm:

    def test_add_rule_once(self):
        form = ItemForm()
        form.add_rule("name", "required")
        form.add_rule("name", "required")
        assert form.rules == {"name": ["required"]}

    def test_serializes(self):
        form = ItemForm()
        form.add_element("text", "name", label="Name", maxlength=255)
        dumped = form.model_dump()
        assert dumped["elements"][0]["options"] == {"maxlength": 255}


class TestGenericForm:

    def test_generic_elements_precede_type_elements(self, services, vocabularies):
        form = build_item_form(services.items, FileType(services))
        names = [e.name for e in form.elements]

        assert names == ["name", "description", "category", "grades", "topics", "image", "pdf", "document"]
        assert form.get_element("category").options["choices"] == ["Science"]
        assert form.get_element("grades").options["choices"] == ["Grade 5", "Grade 6"]
        assert form.is_required("name")

    def test_edit_form_does_not_require_name(self, services, make_item):
        item = make_item()
        form = build_item_form(services.items, FileType(services), existing_item_id=item.id)
        assert not form.is_required("name")


class TestValidation:

    @pytest.fixture
    def form(self, services, vocabularies) -> ItemForm:
        return build_item_form(services.items, FileType(services))

    def test_missing_required(self, form):
        errors = form.validate_submission({"name": ""}, UploadedFiles())
        assert errors == {"name": "Required", "pdf": "Required", "document": "Required"}

    def test_wrong_file_type(self, form):
        upload = pdf_upload("lesson.txt")
        upload.add("document", b"PK", "lesson.docx")

        errors = form.validate_submission({"name": "Photosynthesis"}, upload)
        assert errors == {"pdf": "Accepted file types: .pdf"}

    def test_valid_submission(self, form):
        upload = pdf_upload("Lesson.PDF")
        upload.add("document", b"PK", "lesson.docx")

        data = {"name": "Photosynthesis", "category": "Science", "grades": ["Grade 5"]}
        assert form.validate_submission(data, upload) == {}

    def test_unknown_choice(self, form):
        upload = pdf_upload()
        upload.add("document", b"PK", "lesson.docx")

        errors = form.validate_submission({"name": "x", "grades": ["Grade 5", "Grade 12"]}, upload)
        assert errors == {"grades": "Unknown choice: Grade 12"}

    def test_name_maxlength(self, form):
        upload = pdf_upload()
        upload.add("document", b"PK", "lesson.docx")

        assert form.validate_submission({"name": "N" * 255}, upload) == {}
        assert form.validate_submission({"name": "N" * 256}, upload) == {
            "name": "Must be at most 255 characters"
        }

    def test_url_rule(self, services):
        form = build_item_form(services.items, LinkType(services))

        assert form.validate_submission({"name": "x", "link": "ftp://example.org"}) == {
            "link": "Must be an http(s) URL"
        }
        assert form.validate_submission({"name": "x"}) == {"link": "Required"}
        assert form.validate_submission({"name": "x", "link": "https://example.org"}) == {}
