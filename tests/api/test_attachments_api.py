# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Tests for the attachment processing endpoint.
"""

from unittest.mock import patch

from fastapi.testclient import TestClient

from docfit.core.config import settings
from docfit.main import app

client = TestClient(app)

PROCESS_URL = f"{settings.API_PREFIX}/attachments/process"


def csv_bytes(count):
    lines = ["id,value"] + [f"{i:03d},value{i:03d}" for i in range(count)]
    return ("\n".join(lines) + "\n").encode("utf-8")


class TestProcessAttachment:
    """Test cases for POST /attachments/process."""

    def test_process_small_csv(self):
        response = client.post(
            PROCESS_URL,
            files={"file": ("data.csv", csv_bytes(3), "text/csv")},
            data={"question": "How many rows?"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["filename"] == "data.csv"
        assert body["format"] == "csv"
        assert body["content_kind"] == "delimited"
        assert body["tier"] == "full"
        assert body["was_truncated"] is False
        assert body["total_units"] == 3
        assert body["included_units"] == 3
        assert body["text"].startswith("id,value\n000,value000")
        assert body["text_length"] == len(body["text"])
        assert body["message"].endswith("My question: How many rows?")

    def test_process_with_token_budget(self):
        response = client.post(
            PROCESS_URL,
            files={"file": ("data.csv", csv_bytes(50), "text/csv")},
            data={"token_budget": "125"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["tier"] == "moderate"
        assert body["was_truncated"] is True
        assert body["included_units"] == 27
        assert body["text_length"] <= 500
        assert "[Note: This is a large document" in body["message"]

    def test_token_budget_out_of_range(self):
        for token_budget in ["0", str(settings.MAX_TOKEN_BUDGET + 1)]:
            response = client.post(
                PROCESS_URL,
                files={"file": ("data.csv", csv_bytes(3), "text/csv")},
                data={"token_budget": token_budget},
            )
            assert response.status_code == 400
            assert "token_budget" in response.json()["detail"]

    def test_legacy_format_returns_error_code(self):
        response = client.post(
            PROCESS_URL,
            files={"file": ("old.xls", b"\xd0\xcf\x11\xe0", "application/vnd.ms-excel")},
        )

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["error_code"] == "legacy_xls"
        assert ".xlsx" in detail["message"]

    def test_unsupported_format(self):
        response = client.post(
            PROCESS_URL,
            files={"file": ("photo.png", b"\x89PNG", "image/png")},
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error_code"] == "unsupported_type"
        assert response.json()["request_id"] == response.headers["X-Request-ID"]

    def test_corrupt_file(self):
        response = client.post(
            PROCESS_URL,
            files={
                "file": (
                    "broken.docx",
                    b"not a zip",
                    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
                )
            },
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error_code"] == "parse_failed"

    def test_file_too_large(self):
        with patch.object(settings, "MAX_UPLOAD_FILE_SIZE_MB", 0):
            response = client.post(
                PROCESS_URL,
                files={"file": ("data.csv", csv_bytes(3), "text/csv")},
            )

        assert response.status_code == 400
        assert "File size exceeds maximum limit" in response.json()["detail"]

    def test_unexpected_error_returns_500(self):
        with patch(
            "docfit.api.endpoints.attachments.document_ingestion_service.process",
            side_effect=RuntimeError("boom"),
        ):
            response = client.post(
                PROCESS_URL,
                files={"file": ("data.csv", csv_bytes(3), "text/csv")},
            )

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to process attachment"

    def test_missing_file(self):
        response = client.post(PROCESS_URL, data={"question": "hi"})
        assert response.status_code == 422


class TestServiceEndpoints:
    """Test cases for health and root endpoints."""

    def test_health(self):
        response = client.get(f"{settings.API_PREFIX}/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
        assert len(response.headers["X-Request-ID"]) == 8

    def test_root(self):
        response = client.get("/")
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == settings.PROJECT_NAME
        assert body["version"] == settings.VERSION
        assert body["api_prefix"] == settings.API_PREFIX
