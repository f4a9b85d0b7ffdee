"""Integration tests for the lor CLI (items and vocabularies)."""

import json
import sys

import pytest
from click.testing import CliRunner
from loguru import logger

from lor.cli.main import cli

PDF_BYTES = b"%PDF-1.4\n% cells\n"


@pytest.fixture(autouse=True)
def restore_logger():
    """The CLI points loguru at the runner's stderr; reset it afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def run(lifecycle):
    runner = CliRunner()

    def _run(*args: str):
        return runner.invoke(cli, list(args), obj={"lifecycle": lifecycle})

    return _run


@pytest.fixture
def lesson_pdf(tmp_path):
    path = tmp_path / "upload" / "cells.pdf"
    path.parent.mkdir()
    path.write_bytes(PDF_BYTES)
    return path


class TestItemsCommands:

    def test_create_show_update_delete(self, run, services, repository_root, lesson_pdf):
        result = run("items", "create", "Cells", "--pdf", str(lesson_pdf), "--topic", "biology")
        assert result.exit_code == 0, result.output
        assert "Created item" in result.output

        item = services.items.list_items()[0]
        assert (repository_root / "files" / "Cells.pdf").read_bytes() == PDF_BYTES

        shown = run("items", "show", str(item.id))
        assert shown.exit_code == 0
        output = json.loads(shown.stdout)
        assert output["attributes"] == {"pdf": "files/Cells.pdf", "document": "files/Cells.docx"}
        assert output["complete"] is True
        assert output["resource_url"] == f"http://lor.test/api/v1/items/{item.id}/files/pdf"

        result = run("items", "update", str(item.id), "--name", "Cell Biology")
        assert result.exit_code == 0, result.output
        assert (repository_root / "files" / "Cell Biology.pdf").read_bytes() == PDF_BYTES
        assert not (repository_root / "files" / "Cells.pdf").exists()

        result = run("items", "delete", str(item.id))
        assert result.exit_code == 0, result.output
        assert services.items.get(item.id) is None
        assert list((repository_root / "files").iterdir()) == []

    def test_create_video(self, run, services):
        result = run(
            "items", "create", "Mitosis",
            "--type", "video",
            "--video", "https://youtu.be/dQw4w9WgXcQ",
        )
        assert result.exit_code == 0, result.output

        item = services.items.list_items()[0]
        assert services.data.get_item_data(item.id) == {"video": "https://youtu.be/dQw4w9WgXcQ"}

    def test_create_link_without_url_fails(self, run, services):
        result = run("items", "create", "Nowhere", "--type", "link")

        assert result.exit_code == 1
        assert services.items.list_items() == []

    def test_unknown_type(self, run, services):
        result = run("items", "create", "Episode", "--type", "podcast")

        assert result.exit_code == 1
        assert services.items.list_items() == []

    def test_set_requires_key_value(self, run):
        result = run("items", "create", "Cells", "--type", "link", "--set", "link")
        assert result.exit_code == 2

    def test_missing_item(self, run):
        assert run("items", "show", "404").exit_code == 1
        assert run("items", "delete", "404").exit_code == 1

    def test_list(self, run, make_item):
        make_item("Cells", type="link", topics=["biology"])
        make_item("Fractions", type="link", topics=["math"])

        result = run("items", "list", "--keywords", "biology")

        assert result.exit_code == 0
        assert "Cells" in result.output
        assert "Fractions" not in result.output


class TestVocabularyCommands:

    def test_categories(self, run, services):
        result = run("categories", "add", "Science", "Math")
        assert result.exit_code == 0
        assert "Added category: Science" in result.output

        again = run("categories", "add", "Science")
        assert "Category already exists: Science" in again.output

        listed = run("categories", "list")
        assert listed.stdout.split() == ["Science", "Math"]

    def test_grades(self, run, services):
        run("grades", "add", "Grade 5")
        assert services.items.list_grades() == ["Grade 5"]
