"""Tests for the /api/translations history endpoints."""

import pytest


def save(client, source_text: str, **extra) -> dict:
    body = {
        "sourceText": source_text,
        "translatedText": f"{source_text} (es)",
        "sourceLanguage": "en",
        "targetLanguage": "es",
        **extra,
    }
    response = client.post("/api/translations", json=body)
    assert response.status_code == 200
    return response.json()


class TestHistoryEndpoints:
    def test_create_returns_camel_case_entry(self, test_client):
        entry = save(test_client, "Hello", type="voice", metadata={"confidence": 0.95})

        assert entry["id"] == 1
        assert entry["sourceText"] == "Hello"
        assert entry["type"] == "voice"
        assert entry["isFavorite"] is False
        assert entry["metadata"] == {"confidence": 0.95}
        assert "createdAt" in entry

    def test_create_rejects_unknown_type(self, test_client):
        response = test_client.post(
            "/api/translations",
            json={
                "sourceText": "Hello",
                "translatedText": "Hola",
                "sourceLanguage": "en",
                "targetLanguage": "es",
                "type": "handwriting",
            },
        )

        assert response.status_code == 422

    def test_list_newest_first_with_pagination(self, test_client):
        for text in ("one", "two", "three"):
            save(test_client, text)

        everything = test_client.get("/api/translations").json()
        page = test_client.get("/api/translations", params={"limit": 1, "offset": 1}).json()

        assert [e["sourceText"] for e in everything] == ["three", "two", "one"]
        assert [e["sourceText"] for e in page] == ["two"]

    def test_history_is_capped(self, test_client):
        # test_settings caps history at 5 entries
        for i in range(7):
            save(test_client, f"entry {i}")

        entries = test_client.get("/api/translations").json()

        assert len(entries) == 5
        assert entries[-1]["sourceText"] == "entry 2"

    @pytest.mark.parametrize(
        "params, expected",
        [
            ({"search": "WORLD"}, ["hello world"]),
            ({"type": "ocr"}, ["menu"]),
            ({"favorites": "true"}, ["menu"]),
        ],
    )
    def test_filters(self, test_client, params, expected):
        save(test_client, "hello world")
        menu = save(test_client, "menu", type="ocr")
        test_client.post(f"/api/translations/{menu['id']}/favorite")

        entries = test_client.get("/api/translations", params=params).json()

        assert [e["sourceText"] for e in entries] == expected

    def test_get_patch_favorite_delete(self, test_client):
        entry = save(test_client, "Hello")
        url = f"/api/translations/{entry['id']}"

        assert test_client.get(url).json()["sourceText"] == "Hello"

        patched = test_client.patch(url, json={"translatedText": "Buenas"}).json()
        assert patched["translatedText"] == "Buenas"
        assert patched["sourceText"] == "Hello"

        favorite = test_client.post(f"{url}/favorite").json()
        assert favorite["isFavorite"] is True

        deleted = test_client.delete(url)
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Translation deleted successfully"}
        assert test_client.get(url).status_code == 404

    @pytest.mark.parametrize(
        "method, suffix",
        [("get", ""), ("patch", ""), ("delete", ""), ("post", "/favorite")],
    )
    def test_unknown_id_returns_404(self, test_client, method, suffix):
        kwargs = {"json": {"isFavorite": True}} if method == "patch" else {}

        response = getattr(test_client, method)(f"/api/translations/99{suffix}", **kwargs)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "RESOURCE_NOT_FOUND"

    def test_clear(self, test_client):
        save(test_client, "one")
        save(test_client, "two")

        response = test_client.delete("/api/translations")

        assert response.json() == {"deleted": 2}
        assert test_client.get("/api/translations").json() == []
