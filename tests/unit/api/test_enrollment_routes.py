"""Unit tests for enrollment and policy routes."""

from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from registrar.api import create_app
from registrar.api.dependencies import get_engine
from registrar.enrollment import EnrollmentEngine, EnrollmentPolicy, ValidationMode

CATALOG = [
    {"id": "4", "name": "math1", "units": 3},
    {"id": "5", "name": "math2", "units": 3, "prerequisites": ["4"]},
    {"id": "7", "name": "prog", "units": 4},
    {"id": "1", "name": "ie", "units": 3},
    {"id": "6", "name": "fa", "units": 3},
]


def make_request(
    offerings: list[dict[str, Any]],
    transcript: list[dict[str, Any]] | None = None,
    current_term: list[dict[str, Any]] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build an enrollment request body."""
    return {
        "catalog": CATALOG,
        "student": {
            "id": "810197000",
            "name": "Bebe",
            "transcript": transcript or [],
            "current_term": current_term or [],
        },
        "offerings": offerings,
        **extra,
    }


@pytest.fixture
def app() -> FastAPI:
    """Create the app with the default policy."""
    return create_app(policy=EnrollmentPolicy())


@pytest.fixture
def client(app: FastAPI):
    """Create a test client (runs the lifespan, which initializes the engine)."""
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.mark.unit
class TestCheckEnrollment:
    """Tests for POST /enrollments/check."""

    def test_accepted_request_registers_sections(self, client: TestClient) -> None:
        body = make_request(
            offerings=[
                {"course_id": "5", "section": 2, "exam_time": "Mon 8-10"},
                {"course_id": "7", "section": 1, "exam_time": "Tue 8-10"},
            ],
            transcript=[{"term": "t1", "course_id": "4", "grade": 14}],
            current_term=[{"course_id": "6", "section": 3}],
        )

        response = client.post("/api/v1/enrollments/check", json=body)

        assert response.status_code == 200
        data = response.json()
        assert data["error"] is None
        assert data["data"]["status"] == "accepted"
        assert data["data"]["committed"] is True
        assert data["data"]["mode"] == "accumulate"
        assert data["data"]["violations"] == []
        assert data["data"]["gpa"] == 14.0
        assert data["data"]["current_term"] == [
            {"course_id": "6", "course_name": "fa", "section": 3},
            {"course_id": "5", "course_name": "math2", "section": 2},
            {"course_id": "7", "course_name": "prog", "section": 1},
        ]

    def test_rejected_request_lists_violations(self, client: TestClient) -> None:
        body = make_request(
            offerings=[
                {"course_id": "4", "section": 1, "exam_time": "Mon 8-10"},
                {"course_id": "5", "section": 1, "exam_time": "Mon 8-10"},
            ],
            transcript=[{"term": "t1", "course_id": "4", "grade": 15}],
        )

        response = client.post("/api/v1/enrollments/check", json=body)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "rejected"
        assert data["committed"] is False
        assert data["current_term"] == []
        assert data["violations"] == [
            {
                "rule": "already_passed",
                "message": "The student has already passed math1",
            },
            {
                "rule": "exam_time_conflict",
                "message": "Two offerings math1 (section 1, exam Mon 8-10) and "
                "math2 (section 1, exam Mon 8-10) have the same exam time",
            },
        ]

    def test_fail_fast_mode_from_request(self, client: TestClient) -> None:
        body = make_request(
            offerings=[
                {"course_id": "4", "section": 1, "exam_time": "Mon 8-10"},
                {"course_id": "5", "section": 1, "exam_time": "Mon 8-10"},
            ],
            transcript=[{"term": "t1", "course_id": "4", "grade": 15}],
            mode="fail_fast",
        )

        data = client.post("/api/v1/enrollments/check", json=body).json()["data"]

        assert data["mode"] == "fail_fast"
        assert [v["rule"] for v in data["violations"]] == ["already_passed"]

    def test_dry_run_does_not_commit(self, client: TestClient) -> None:
        body = make_request(
            offerings=[{"course_id": "1", "section": 1, "exam_time": "Mon 8-10"}],
            commit=False,
        )

        data = client.post("/api/v1/enrollments/check", json=body).json()["data"]

        assert data["status"] == "accepted"
        assert data["committed"] is False
        assert data["current_term"] == []
        assert data["gpa"] is None

    def test_dry_run_reports_violations(self, client: TestClient) -> None:
        body = make_request(
            offerings=[{"course_id": "5", "section": 1, "exam_time": "Mon 8-10"}],
            commit=False,
        )

        data = client.post("/api/v1/enrollments/check", json=body).json()["data"]

        assert data["status"] == "rejected"
        assert data["violations"][0]["rule"] == "prerequisite"

    def test_unknown_course_returns_404(self, client: TestClient) -> None:
        body = make_request(offerings=[{"course_id": "99", "section": 1, "exam_time": "x"}])

        response = client.post("/api/v1/enrollments/check", json=body)

        assert response.status_code == 404
        assert response.json() == {"data": None, "error": "Course not found: 99"}

    def test_duplicate_catalog_entry_returns_409(self, client: TestClient) -> None:
        body = make_request(offerings=[])
        body["catalog"] = [*CATALOG, {"id": "4", "name": "math1 again", "units": 3}]

        response = client.post("/api/v1/enrollments/check", json=body)

        assert response.status_code == 409
        assert response.json()["error"] == "Course already exists: 4"

    def test_numeric_ids_and_terms_are_read_as_strings(self, client: TestClient) -> None:
        body = make_request(
            offerings=[{"course_id": 5, "section": 1, "exam_time": 800}],
            transcript=[{"term": 13981, "course_id": 4, "grade": 14}],
        )
        body["catalog"] = [
            {"id": 4, "name": "math1", "units": 3},
            {"id": 5, "name": "math2", "units": 3, "prerequisites": [4]},
        ]
        body["student"]["id"] = 810197000

        data = client.post("/api/v1/enrollments/check", json=body).json()["data"]

        assert data["status"] == "accepted"
        assert data["current_term"] == [
            {"course_id": "5", "course_name": "math2", "section": 1}
        ]

    def test_invalid_body_returns_422(self, client: TestClient) -> None:
        body = make_request(offerings=[])
        body["catalog"] = [{"id": "4", "name": "math1", "units": 0}]

        response = client.post("/api/v1/enrollments/check", json=body)

        assert response.status_code == 422

    def test_grade_out_of_range_returns_422(self, client: TestClient) -> None:
        body = make_request(
            offerings=[], transcript=[{"term": "t1", "course_id": "4", "grade": 21}]
        )

        response = client.post("/api/v1/enrollments/check", json=body)

        assert response.status_code == 422


@pytest.mark.unit
class TestPolicyRoute:
    """Tests for GET /policy."""

    def test_returns_active_policy(self) -> None:
        app = create_app(policy=EnrollmentPolicy(unconditional_max_units_limit=24))

        with TestClient(app) as client:
            response = client.get("/api/v1/policy")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["unconditional_max_units_limit"] == 24
        assert data["pass_grade"] == 10
        assert data["no_history_gpa"] == 0.0

    def test_custom_policy_changes_decisions(self) -> None:
        app = create_app(policy=EnrollmentPolicy(failed_term_limit_units=3))
        body = make_request(
            offerings=[
                {"course_id": "1", "section": 1, "exam_time": "a"},
                {"course_id": "6", "section": 1, "exam_time": "b"},
            ]
        )

        with TestClient(app) as client:
            data = client.post("/api/v1/enrollments/check", json=body).json()["data"]

        assert data["violations"] == [
            {
                "rule": "unit_load",
                "message": "Number of units (6) requested does not match GPA of 0.0",
            }
        ]


@pytest.mark.unit
class TestDependencyOverride:
    """Routes use whatever engine the dependency provides."""

    def test_override_engine(self, app: FastAPI) -> None:
        engine = EnrollmentEngine(mode=ValidationMode.FAIL_FAST)

        def override_get_engine():
            yield engine

        app.dependency_overrides[get_engine] = override_get_engine
        body = make_request(
            offerings=[
                {"course_id": "5", "section": 1, "exam_time": "a"},
                {"course_id": "5", "section": 2, "exam_time": "a"},
            ]
        )

        with TestClient(app) as client:
            data = client.post("/api/v1/enrollments/check", json=body).json()["data"]

        assert data["mode"] == "fail_fast"
        assert len(data["violations"]) == 1
