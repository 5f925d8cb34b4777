"""
Integration tests for the program import endpoints.

Tests the POST /programs/import and POST /programs/import/preview
endpoints through the TestClient, with openpyxl-built workbooks and the
in-memory FakeProgramImportRepository:
- Successful import response and persisted graph
- Upload validation (content type, boundary, file part, size, workbook)
- Authentication
- Persistence failure response
- Preview without writes
"""

import pytest

from tests.fakes import marker_program_grid, simple_program_grid, workbook_bytes

pytestmark = pytest.mark.integration

IMPORT_ENDPOINT = "/programs/import"
PREVIEW_ENDPOINT = "/programs/import/preview"
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def upload(content, filename="min-max.xlsx", field="file"):
    return {field: (filename, content, XLSX_MIME)}


@pytest.fixture
def workbook() -> bytes:
    return workbook_bytes(simple_program_grid(), "4x Week")


# ---------------------------------------------------------------------------
# Successful import
# ---------------------------------------------------------------------------


class TestImportSuccess:

    def test_returns_201_with_program_and_summary(self, client, fake_import_repo, workbook):
        response = client.post(IMPORT_ENDPOINT, files=upload(workbook))

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Program imported successfully"
        assert body["program"]["id"] == fake_import_repo.programs[0]["id"]
        assert body["program"]["created_by"] == "test-user-import"
        assert body["program"]["frequency_per_week"] == 4
        assert body["program"]["source"] == "Excel Import"

        summary = body["summary"]
        assert summary["blocks"] == 1
        assert summary["weeks"] == 2
        assert summary["workouts"] == 4
        assert summary["template_exercises"] == 12
        assert summary["exercises_created"] == 9
        assert summary["substitutions"] == 3
        assert summary["rows_skipped"] == 0

    def test_graph_is_persisted(self, client, fake_import_repo, workbook):
        client.post(IMPORT_ENDPOINT, files=upload(workbook))

        assert len(fake_import_repo.blocks) == 1
        assert len(fake_import_repo.weeks) == 2
        assert len(fake_import_repo.workouts) == 4
        assert len(fake_import_repo.template_exercises) == 12
        assert fake_import_repo.commit_count == 1

    def test_name_defaults_to_filename_stem(self, client, fake_import_repo, workbook):
        client.post(IMPORT_ENDPOINT, files=upload(workbook, filename="Min-Max 4x.xlsx"))
        assert fake_import_repo.programs[0]["name"] == "Min-Max 4x"

    def test_name_and_source_form_fields(self, client, fake_import_repo, workbook):
        response = client.post(
            IMPORT_ENDPOINT,
            files=upload(workbook),
            data={"name": "Jeff's Program", "source": "Coach Upload"},
        )

        assert response.status_code == 201
        assert fake_import_repo.programs[0]["name"] == "Jeff's Program"
        assert fake_import_repo.programs[0]["source"] == "Coach Upload"

    def test_file_under_other_field_name(self, client, workbook):
        response = client.post(IMPORT_ENDPOINT, files=upload(workbook, field="workbook"))
        assert response.status_code == 201

    def test_frequency_from_sheet_name(self, client, fake_import_repo):
        content = workbook_bytes(simple_program_grid(), "5x Week")
        client.post(IMPORT_ENDPOINT, files=upload(content))
        assert fake_import_repo.programs[0]["frequency_per_week"] == 5

    def test_skipped_rows_reported(self, client):
        content = workbook_bytes(marker_program_grid())
        response = client.post(IMPORT_ENDPOINT, files=upload(content))

        summary = response.json()["summary"]
        assert summary["weeks"] == 2
        assert [row["reason"] for row in summary["skipped_rows"]] == [
            "noise banner",
            "week-type label",
        ]


# ---------------------------------------------------------------------------
# Upload validation
# ---------------------------------------------------------------------------


class TestUploadValidation:

    def test_rejects_non_multipart(self, client, fake_import_repo):
        response = client.post(IMPORT_ENDPOINT, json={"file": "nope"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Expected multipart/form-data"
        assert fake_import_repo.calls == []

    def test_rejects_missing_boundary(self, client):
        response = client.post(
            IMPORT_ENDPOINT,
            content=b"--x--",
            headers={"content-type": "multipart/form-data"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Could not find boundary in content-type"

    def test_rejects_request_without_file(self, client):
        body = (
            b"--formbound\r\n"
            b'Content-Disposition: form-data; name="name"\r\n\r\n'
            b"No File\r\n"
            b"--formbound--\r\n"
        )
        response = client.post(
            IMPORT_ENDPOINT,
            content=body,
            headers={"content-type": "multipart/form-data; boundary=formbound"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "No file found in request"

    def test_rejects_unreadable_workbook(self, client, fake_import_repo):
        response = client.post(IMPORT_ENDPOINT, files=upload(b"name,sets\nBench,3\n", "plan.csv"))

        assert response.status_code == 400
        assert response.json()["detail"].startswith("Could not read workbook")
        assert fake_import_repo.programs == []

    def test_rejects_empty_file(self, client):
        response = client.post(IMPORT_ENDPOINT, files=upload(b""))

        assert response.status_code == 400
        assert response.json()["detail"] == "Uploaded file is empty"

    def test_rejects_oversized_upload(self, client, test_settings, fake_import_repo, workbook):
        test_settings.max_upload_bytes = 512

        response = client.post(IMPORT_ENDPOINT, files=upload(workbook))

        assert response.status_code == 413
        assert fake_import_repo.calls == []


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------


class TestAuthentication:

    def test_missing_authorization(self, anon_client, workbook):
        response = anon_client.post(IMPORT_ENDPOINT, files=upload(workbook))
        assert response.status_code == 401

    def test_malformed_authorization(self, anon_client, workbook):
        response = anon_client.post(
            IMPORT_ENDPOINT,
            files=upload(workbook),
            headers={"Authorization": "Token abc"},
        )
        assert response.status_code == 401

    def test_bearer_token_identifies_user(self, anon_client, fake_import_repo, workbook):
        response = anon_client.post(
            IMPORT_ENDPOINT,
            files=upload(workbook),
            headers={"Authorization": "Bearer user-42"},
        )

        assert response.status_code == 201
        assert fake_import_repo.programs[0]["created_by"] == "user-42"

    def test_auth_stub_refuses_production_settings(self, anon_client, test_settings, fake_import_repo, workbook):
        test_settings.environment = "production"

        with pytest.raises(RuntimeError, match="cannot be used in production"):
            anon_client.post(
                IMPORT_ENDPOINT,
                files=upload(workbook),
                headers={"Authorization": "Bearer user-42"},
            )

        assert fake_import_repo.programs == []


# ---------------------------------------------------------------------------
# Persistence failures
# ---------------------------------------------------------------------------


class TestImportFailure:

    def test_writer_failure_returns_500(self, client, fake_import_repo, workbook):
        fake_import_repo.fail_on = "insert_template_exercises"

        response = client.post(IMPORT_ENDPOINT, files=upload(workbook))

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to import program",
            "details": "simulated failure in insert_template_exercises",
        }
        assert fake_import_repo.programs == []
        assert fake_import_repo.workouts == []

    def test_commit_failure_returns_500(self, client, fake_import_repo, workbook):
        fake_import_repo.fail_commit = True

        response = client.post(IMPORT_ENDPOINT, files=upload(workbook))

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to import program"
        assert fake_import_repo.programs == []


# ---------------------------------------------------------------------------
# Preview
# ---------------------------------------------------------------------------


class TestPreview:

    def test_preview_returns_tree_without_writes(self, client, fake_import_repo, workbook):
        response = client.post(PREVIEW_ENDPOINT, files=upload(workbook))

        assert response.status_code == 200
        body = response.json()
        assert body["summary"]["sheet_name"] == "4x Week"
        assert body["summary"]["weeks"] == 2
        assert body["summary"]["exercises"] == 12
        assert body["program"]["name"] == "min-max"
        assert body["program"]["blocks"][0]["weeks"][0]["workouts"][0]["name"] == "Upper"
        assert fake_import_repo.calls == []
        assert fake_import_repo.programs == []

    def test_preview_validates_upload(self, client):
        response = client.post(PREVIEW_ENDPOINT, json={})
        assert response.status_code == 400


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "program-import-api"}
