"""
Integration tests for the item and resource endpoints.

Covers multipart create/edit/delete, stored file delivery and the read
endpoints feeding the search and view pages.
"""

import pytest

from lor.models import Item

PDF_BYTES = b"%PDF-1.4\n% photosynthesis lesson\n"
DOCX_BYTES = b"PK\x03\x04 photosynthesis worksheet"


def file_parts(pdf: bytes | None = PDF_BYTES, document: bytes | None = DOCX_BYTES) -> dict:
    parts = {}
    if pdf is not None:
        parts["pdf"] = ("lesson.pdf", pdf, "application/pdf")
    if document is not None:
        parts["document"] = (
            "lesson.docx",
            document,
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        )
    return parts


@pytest.fixture
def vocabularies(services):
    services.items.add_category("Science")
    services.items.add_grade("Grade 5")
    services.items.add_grade("Grade 6")


@pytest.fixture
def file_item(client, vocabularies) -> int:
    response = client.post(
        "/api/v1/items",
        data={
            "name": "Photosynthesis",
            "type": "file",
            "category": "Science",
            "grades": ["Grade 5", "Grade 6"],
            "topics": "plants, light",
            "description": "How plants make food",
        },
        files=file_parts(),
        headers={"X-User-Id": "teacher-1"},
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestCreateItem:

    def test_create_file_item(self, client, services, repository_root, file_item):
        item = services.items.get(file_item)
        assert item.name == "Photosynthesis"
        assert item.owner == "teacher-1"
        assert item.category == "Science"
        assert item.grades == ["Grade 5", "Grade 6"]
        assert item.topics == ["plants", "light"]

        assert (repository_root / "files" / "Photosynthesis.pdf").read_bytes() == PDF_BYTES
        assert (repository_root / "files" / "Photosynthesis.docx").read_bytes() == DOCX_BYTES
        assert services.data.get_item_data(file_item) == {
            "pdf": "files/Photosynthesis.pdf",
            "document": "files/Photosynthesis.docx",
        }

    def test_download_stored_file(self, client, file_item):
        response = client.get(f"/api/v1/items/{file_item}/files/pdf")

        assert response.status_code == 200
        assert response.content == PDF_BYTES
        assert "Photosynthesis.pdf" in response.headers["content-disposition"]

    def test_download_unknown_property(self, client, file_item):
        response = client.get(f"/api/v1/items/{file_item}/files/slides")
        assert response.status_code == 404

    def test_missing_required_files(self, client, services):
        response = client.post(
            "/api/v1/items",
            data={"name": "Photosynthesis", "type": "file"},
            files=file_parts(document=None),
        )

        assert response.status_code == 422
        assert response.json()["detail"] == {"document": "Required"}
        assert services.items.list_items() == []

    def test_wrong_extension(self, client):
        files = file_parts()
        files["pdf"] = ("lesson.txt", b"plain", "text/plain")

        response = client.post("/api/v1/items", data={"name": "Photosynthesis", "type": "file"}, files=files)

        assert response.status_code == 422
        assert "pdf" in response.json()["detail"]

    def test_unknown_type(self, client, services):
        response = client.post(
            "/api/v1/items",
            data={"name": "Episode 1", "type": "podcast"},
            files={"audio": ("ep1.mp3", b"ID3", "audio/mpeg")},
        )

        assert response.status_code == 422
        assert "podcast" in response.json()["detail"]["type"]
        assert services.items.list_items() == []

    def test_missing_type(self, client):
        response = client.post("/api/v1/items", data={"name": "Untyped"}, files=file_parts())
        assert response.status_code == 422

    def test_create_link_item(self, client, services):
        response = client.post(
            "/api/v1/items",
            data={"name": "Khan Academy", "type": "link", "link": "https://www.khanacademy.org"},
        )

        assert response.status_code == 201, response.text
        item_id = response.json()["id"]
        assert services.data.get_item_data(item_id) == {"link": "https://www.khanacademy.org"}
        assert services.items.get(item_id).image is None

    def test_thumbnail(self, client):
        response = client.post(
            "/api/v1/items",
            data={"name": "Khan Academy", "type": "link", "link": "https://www.khanacademy.org"},
            files={"image": ("cover.png", b"\x89PNG\r\n", "image/png")},
        )
        item_id = response.json()["id"]

        image = client.get(f"/api/v1/items/{item_id}/image")
        assert image.status_code == 200
        assert image.content == b"\x89PNG\r\n"

        summary = client.get("/api/v1/resources").json()[0]
        assert summary["image_url"] == f"http://lor.test/api/v1/items/{item_id}/image"

    def test_no_thumbnail(self, client, file_item):
        assert client.get(f"/api/v1/items/{file_item}/image").status_code == 404


class TestUpdateItem:

    def test_rename_relocates_files(self, client, services, repository_root, file_item):
        response = client.put(f"/api/v1/items/{file_item}", data={"name": "Photosynthesis v2"})

        assert response.status_code == 200, response.text
        assert not (repository_root / "files" / "Photosynthesis.pdf").exists()
        assert (repository_root / "files" / "Photosynthesis v2.pdf").read_bytes() == PDF_BYTES
        assert (repository_root / "files" / "Photosynthesis v2.docx").read_bytes() == DOCX_BYTES

        download = client.get(f"/api/v1/items/{file_item}/files/pdf")
        assert download.content == PDF_BYTES

    def test_replace_file(self, client, repository_root, file_item):
        response = client.put(
            f"/api/v1/items/{file_item}",
            data={"name": "Photosynthesis"},
            files=file_parts(pdf=b"%PDF-1.7 revised", document=None),
        )

        assert response.status_code == 200
        assert (repository_root / "files" / "Photosynthesis.pdf").read_bytes() == b"%PDF-1.7 revised"
        assert (repository_root / "files" / "Photosynthesis.docx").read_bytes() == DOCX_BYTES

    def test_type_cannot_change(self, client, file_item):
        response = client.put(f"/api/v1/items/{file_item}", data={"type": "link"})
        assert response.status_code == 422

    def test_missing_item(self, client):
        response = client.put("/api/v1/items/404", data={"name": "Nothing"})
        assert response.status_code == 404


class TestDeleteItem:

    def test_delete(self, client, services, repository_root, file_item):
        response = client.delete(f"/api/v1/items/{file_item}")

        assert response.status_code == 204
        assert services.items.get(file_item) is None
        assert services.data.get_records(file_item) == []
        assert list((repository_root / "files").iterdir()) == []
        assert client.get(f"/api/v1/items/{file_item}/files/pdf").status_code == 404

    def test_delete_missing_item(self, client):
        assert client.delete("/api/v1/items/404").status_code == 404


class TestResources:

    def test_search(self, client, file_item):
        response = client.get("/api/v1/resources", params={"keywords": "plants", "grade": "Grade 5"})

        assert response.status_code == 200
        results = response.json()
        assert [r["id"] for r in results] == [file_item]
        assert results[0]["resource_url"] == f"http://lor.test/api/v1/items/{file_item}/files/pdf"
        assert results[0]["image_url"] == "http://lor.test/static/default.png"

    def test_search_filters_out(self, client, file_item):
        response = client.get("/api/v1/resources", params={"type": "video"})
        assert response.json() == []

    def test_incomplete_items_hidden(self, client, services, file_item):
        services.data.delete_records(file_item)
        services.data.insert(file_item, "pdf", "files/Photosynthesis.pdf")

        assert client.get("/api/v1/resources").json() == []

    def test_get_resource(self, client, file_item):
        response = client.get(f"/api/v1/resources/{file_item}")

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Photosynthesis"
        assert data["display_height"] == "900px"
        assert data["display_html"].startswith("<embed")
        assert "Topics: plants, light" in data["embed_html"]
        assert data["unique_identifier"] == data["resource_url"]

    def test_get_missing_resource(self, client):
        assert client.get("/api/v1/resources/404").status_code == 404

    def test_unregistered_type_is_not_found(self, client, services):
        item = services.items.create(Item(name="Episode 1", type="podcast"))

        assert client.get(f"/api/v1/resources/{item.id}").status_code == 404
        assert client.get("/api/v1/resources").json() == []

    def test_resource_types(self, client):
        response = client.get("/api/v1/resource-types")

        types = {t["name"]: t for t in response.json()}
        assert set(types) == {"file", "link", "video"}
        assert types["file"]["properties"] == ["pdf", "document"]

    def test_create_form(self, client, vocabularies):
        response = client.get("/api/v1/resource-types/file/form")

        form = response.json()
        names = [e["name"] for e in form["elements"]]
        assert names[-2:] == ["pdf", "document"]
        assert form["rules"]["pdf"] == ["required"]

    def test_edit_form(self, client, file_item):
        form = client.get("/api/v1/resource-types/file/form", params={"item_id": file_item}).json()

        assert "pdf" not in form["rules"]
        assert f"/api/v1/items/{file_item}/files/document" in form["notes"][0]

    def test_vocabularies(self, client, vocabularies):
        assert client.get("/api/v1/categories").json() == ["Science"]
        assert client.get("/api/v1/grades").json() == ["Grade 5", "Grade 6"]

    def test_user(self, client):
        anonymous = client.get("/api/v1/user").json()
        assert anonymous["authenticated"] is False

        user = client.get("/api/v1/user", headers={"X-User-Id": "teacher-1"}).json()
        assert user == {"user_id": "teacher-1", "authenticated": True, "context": "system"}
