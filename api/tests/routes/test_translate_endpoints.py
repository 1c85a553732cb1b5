"""Tests for POST /api/translate and POST /api/detect-language."""

from fastapi.testclient import TestClient

from tests.fakes import (
    DETECT_HOST,
    GOOGLE_HOST,
    LIBRE_HOST,
    MYMEMORY_HOST,
    google_body,
    mymemory_body,
)


class TestTranslateEndpoint:
    def test_returns_canonical_camel_case_result(self, test_client, upstream):
        upstream.respond(
            GOOGLE_HOST,
            json_body=[
                [["Hola", "Hello", None, None, 1], [" mundo", " world", None, None, 1]],
                None,
                "en",
            ],
        )

        response = test_client.post(
            "/api/translate",
            json={"text": "Hello world", "targetLanguage": "es", "sourceLanguage": "en"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "translatedText": "Hola mundo",
            "sourceLanguage": "en",
            "targetLanguage": "es",
            "confidence": 0.95,
        }

    def test_auto_source_is_resolved(self, test_client, upstream):
        upstream.respond(
            DETECT_HOST, json_body={"data": {"detections": [{"language": "fr"}]}}
        )
        upstream.respond(LIBRE_HOST, json_body={"translatedText": "Hello"})

        response = test_client.post(
            "/api/translate",
            json={"text": "Bonjour", "targetLanguage": "en", "sourceLanguage": "auto"},
        )

        assert response.status_code == 200
        assert response.json()["sourceLanguage"] == "fr"
        assert upstream.requests_to(GOOGLE_HOST)[0].url.params["sl"] == "fr"

    def test_hindi_quality_upgrade(self, test_client, upstream):
        upstream.respond(
            MYMEMORY_HOST,
            json_body=mymemory_body(
                "X",
                match=0.99,
                matches=[
                    {
                        "translation": "नमस्ते",
                        "quality": 75,
                        "match": 0.74,
                        "created-by": "MT!",
                    }
                ],
            ),
        )

        response = test_client.post(
            "/api/translate",
            json={"text": "Hello", "targetLanguage": "hi", "sourceLanguage": "en"},
        )

        assert response.status_code == 200
        assert response.json()["translatedText"] == "नमस्ते"
        assert response.json()["confidence"] == 0.74

    def test_long_text_is_translated(self, test_client, upstream):
        upstream.respond(GOOGLE_HOST, json_body=google_body("b" * 6000, source="en"))

        response = test_client.post(
            "/api/translate",
            json={"text": "a" * 6000, "targetLanguage": "es", "sourceLanguage": "en"},
        )

        assert response.status_code == 200
        assert len(response.json()["translatedText"]) == 6000
        assert len(upstream.requests_to(GOOGLE_HOST)[0].url.params["q"]) == 6000

    def test_missing_fields_return_400(self, test_client, upstream):
        for body in ({"targetLanguage": "es"}, {"text": "Hello"}, {}):
            response = test_client.post("/api/translate", json=body)

            assert response.status_code == 400
            assert response.json()["error"]["code"] == "INVALID_REQUEST"
        assert upstream.requests == []

    def test_all_providers_failing_returns_500(self, test_client, upstream):
        for host in (DETECT_HOST, GOOGLE_HOST, LIBRE_HOST, MYMEMORY_HOST):
            upstream.respond(host, status_code=503, json_body={})

        response = test_client.post(
            "/api/translate", json={"text": "Hello", "targetLanguage": "es"}
        )

        assert response.status_code == 500
        assert response.json()["error"]["message"] == "Translation failed"
        # Provider detail stays server-side
        assert "mymemory" not in response.text.lower()

    def test_unavailable_without_lifespan(self):
        from translingo.main import app

        response = TestClient(app).post(
            "/api/translate", json={"text": "Hello", "targetLanguage": "es"}
        )

        assert response.status_code == 503


class TestDetectLanguageEndpoint:
    def test_detects(self, test_client, upstream):
        upstream.respond(
            DETECT_HOST,
            json_body={
                "data": {
                    "detections": [
                        {"language": "de", "isReliable": True, "confidence": 11.5}
                    ]
                }
            },
        )

        response = test_client.post("/api/detect-language", json={"text": "Guten Tag"})

        assert response.status_code == 200
        assert response.json() == {
            "language": "de",
            "confidence": 11.5,
            "isReliable": True,
        }

    def test_long_text_is_accepted(self, test_client, upstream):
        upstream.respond(
            DETECT_HOST, json_body={"data": {"detections": [{"language": "en"}]}}
        )

        response = test_client.post("/api/detect-language", json={"text": "a" * 6000})

        assert response.status_code == 200
        assert response.json()["language"] == "en"

    def test_missing_text_returns_400(self, test_client):
        response = test_client.post("/api/detect-language", json={})

        assert response.status_code == 400

    def test_upstream_failure_returns_502(self, test_client, upstream):
        upstream.respond(DETECT_HOST, status_code=500, json_body={})

        response = test_client.post("/api/detect-language", json={"text": "Hallo"})

        assert response.status_code == 502
        assert response.json()["error"]["code"] == "LANGUAGE_DETECTION_FAILED"
