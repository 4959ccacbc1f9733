"""HTTP tests for the pregnancy and content routers."""

from __future__ import annotations

from fastapi.testclient import TestClient


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "healthy"
        assert body["journey_config"]


class TestDueDateEndpoints:
    def test_due_date(self, client: TestClient) -> None:
        resp = client.post("/api/v1/pregnancy/due-date", json={"last_period_date": "2024-01-01"})
        assert resp.status_code == 200
        assert resp.json() == {"last_period_date": "2024-01-01", "due_date": "2024-09-30"}

    def test_due_date_from_timestamp(self, client: TestClient) -> None:
        resp = client.post(
            "/api/v1/pregnancy/due-date",
            json={"last_period_date": "2024-01-01T09:00:00Z"},
        )
        assert resp.json()["due_date"] == "2024-09-30"

    def test_last_period(self, client: TestClient) -> None:
        resp = client.post("/api/v1/pregnancy/last-period", json={"due_date": "2024-09-30"})
        assert resp.status_code == 200
        assert resp.json()["last_period_date"] == "2024-01-01"

    def test_malformed_date_is_422(self, client: TestClient) -> None:
        resp = client.post("/api/v1/pregnancy/due-date", json={"last_period_date": "not-a-date"})
        assert resp.status_code == 422
        assert "not-a-date" in resp.json()["detail"]

    def test_estimate_conception(self, client: TestClient) -> None:
        resp = client.post(
            "/api/v1/pregnancy/estimate",
            json={"method": "conception", "date": "2026-01-01"},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["method"] == "conception"
        assert body["due_date"] == "2026-09-24"

    def test_estimate_ultrasound_without_age_is_400(self, client: TestClient) -> None:
        resp = client.post(
            "/api/v1/pregnancy/estimate",
            json={"method": "ultrasound", "date": "2026-03-01"},
        )
        assert resp.status_code == 400

    def test_estimate_malformed_date_is_422(self, client: TestClient) -> None:
        resp = client.post(
            "/api/v1/pregnancy/estimate",
            json={"method": "lmp", "date": "yesterday"},
        )
        assert resp.status_code == 422


class TestTimelineEndpoint:
    def test_timeline_from_lmp(self, client: TestClient) -> None:
        resp = client.get("/api/v1/pregnancy/timeline", params={"last_period_date": "2025-10-06"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["current_week"] == 21
        assert body["trimester"] == "second"
        assert body["due_date"] == "2026-07-06"
        assert body["days_passed"] == 140
        assert body["days_remaining"] == 133
        assert body["milestones"]

    def test_timeline_from_due_date(self, client: TestClient) -> None:
        resp = client.get("/api/v1/pregnancy/timeline", params={"due_date": "2026-07-06"})
        assert resp.status_code == 200
        assert resp.json()["last_period_date"] == "2025-10-06"

    def test_requires_exactly_one_anchor(self, client: TestClient) -> None:
        assert client.get("/api/v1/pregnancy/timeline").status_code == 400
        resp = client.get(
            "/api/v1/pregnancy/timeline",
            params={"last_period_date": "2025-10-06", "due_date": "2026-07-06"},
        )
        assert resp.status_code == 400

    def test_malformed_anchor(self, client: TestClient) -> None:
        resp = client.get("/api/v1/pregnancy/timeline", params={"due_date": "2026-02-30"})
        assert resp.status_code == 422

    def test_empty_last_period_date_reports_empty_string(self, client: TestClient) -> None:
        resp = client.get("/api/v1/pregnancy/timeline", params={"last_period_date": ""})
        assert resp.status_code == 422
        detail = resp.json()["detail"]
        assert "empty string" in detail
        assert "None" not in detail

    def test_error_body_documented_in_schema(self, client: TestClient) -> None:
        schema = client.get("/openapi.json").json()
        assert "ErrorDetail" in schema["components"]["schemas"]
        responses = schema["paths"]["/api/v1/pregnancy/timeline"]["get"]["responses"]
        assert "422" in responses

    def test_trimester(self, client: TestClient) -> None:
        assert client.get("/api/v1/pregnancy/trimester/27").json() == {
            "week": 27,
            "trimester": "third",
        }


class TestContentEndpoints:
    def test_visibility_min_week(self, client: TestClient) -> None:
        payload = {"current_week": 10, "stage": "pregnant", "rule": {"min_week": 12}}
        assert client.post("/api/v1/content/visibility", json=payload).json() == {"visible": False}
        payload["current_week"] = 12
        assert client.post("/api/v1/content/visibility", json=payload).json() == {"visible": True}

    def test_visibility_stage(self, client: TestClient) -> None:
        payload = {"current_week": 20, "stage": "postpartum", "rule": {"stages": ["pregnant"]}}
        assert client.post("/api/v1/content/visibility", json=payload).json()["visible"] is False

    def test_visibility_without_rule(self, client: TestClient) -> None:
        payload = {"current_week": 1, "stage": "anything"}
        assert client.post("/api/v1/content/visibility", json=payload).json()["visible"] is True

    def test_inverted_rule_is_never_visible(self, client: TestClient) -> None:
        payload = {"current_week": 5, "stage": "pregnancy", "rule": {"min_week": 9, "max_week": 3}}
        resp = client.post("/api/v1/content/visibility", json=payload)
        assert resp.status_code == 200
        assert resp.json() == {"visible": False}

    def test_catalog_early_pregnancy(self, client: TestClient) -> None:
        resp = client.get("/api/v1/content", params={"current_week": 8, "stage": "pregnancy"})
        assert resp.status_code == 200
        content = resp.json()["content"]
        assert "todays_focus" in content
        assert content["preparation_center"].startswith("Birth preparation checklists unlock")
        assert "first_trimester_nausea" in content
        assert "hospital_bag" not in content
        assert "postpartum_recovery" not in content

    def test_catalog_postpartum(self, client: TestClient) -> None:
        resp = client.get("/api/v1/content", params={"current_week": 4, "stage": "postpartum"})
        content = resp.json()["content"]
        assert content["postpartum_recovery"] == "Your recovery after birth"
        assert "feeding_support" in content
        assert "birth_plan" not in content
