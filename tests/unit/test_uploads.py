"""Tests for the in-memory upload handle."""

import pytest

from lor.exceptions import StorageError
from lor.services.fs import UploadedFile, UploadedFiles, UploadHandle


class TestUploadedFiles:

    def test_is_upload_handle(self):
        assert isinstance(UploadedFiles(), UploadHandle)

    def test_content_and_filename(self):
        upload = UploadedFiles({"pdf": UploadedFile(b"%PDF", "lesson.pdf")})

        assert upload.has_content("pdf")
        assert not upload.has_content("document")
        assert upload.get_filename("pdf") == "lesson.pdf"
        assert upload.get_filename("document") is None

    def test_save_file(self, tmp_path):
        upload = UploadedFiles()
        upload.add("pdf", b"%PDF")
        destination = tmp_path / "nested" / "lesson.pdf"

        assert upload.save_file("pdf", destination)
        assert destination.read_bytes() == b"%PDF"
        assert [p.name for p in destination.parent.iterdir()] == ["lesson.pdf"]

    def test_save_nothing(self, tmp_path):
        assert not UploadedFiles().save_file("pdf", tmp_path / "lesson.pdf")
        assert not (tmp_path / "lesson.pdf").exists()

    def test_override(self, tmp_path):
        destination = tmp_path / "lesson.pdf"
        destination.write_bytes(b"old")
        upload = UploadedFiles()
        upload.add("pdf", b"new")

        assert not upload.save_file("pdf", destination, override=False)
        assert destination.read_bytes() == b"old"
        assert upload.save_file("pdf", destination)
        assert destination.read_bytes() == b"new"

    def test_from_paths(self, tmp_path):
        source = tmp_path / "lesson.pdf"
        source.write_bytes(b"%PDF")

        upload = UploadedFiles.from_paths(pdf=source, document=None)

        assert upload.has_content("pdf")
        assert not upload.has_content("document")
        assert upload.get_filename("pdf") == "lesson.pdf"

    def test_overlong_destination_raises_storage_error(self, tmp_path):
        upload = UploadedFiles()
        upload.add("pdf", b"%PDF")

        with pytest.raises(StorageError):
            upload.save_file("pdf", tmp_path / ("x" * 300 + ".pdf"), override=False)
        assert list(tmp_path.iterdir()) == []

    def test_from_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            UploadedFiles.from_paths(pdf=tmp_path / "missing.pdf")
