"""Integration tests for the REST API.

These tests exercise every router through FastAPI's TestClient, including
the error responses produced by the registered exception handlers.
"""

import io
from copy import deepcopy

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from racks.web import create_app


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


@pytest.fixture
def lab() -> list[dict]:
    """Rack A holds 1U items at 10 and 20 and a 2U item at 30; rack B is empty."""
    return [
        {
            "id": "rack-a",
            "name": "Rack A",
            "height": 42,
            "components": [
                {"id": "web-1", "name": "Web 1", "height": 1, "position": 10},
                {"id": "web-2", "name": "Web 2", "height": 1, "position": 20},
                {"id": "db-1", "name": "DB", "height": 2, "position": 30},
            ],
        },
        {"id": "rack-b", "name": "Rack B", "height": 24, "components": []},
    ]


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestImport:
    """Tests for POST /api/v1/configurations/import."""

    def test_current_format(self, client: TestClient, lab: list[dict]) -> None:
        response = client.post("/api/v1/configurations/import", json={"config": lab})
        assert response.status_code == 200
        body = response.json()
        assert [r["id"] for r in body["racks"]] == ["rack-a", "rack-b"]
        assert body["warnings"] == [{"path": "[1]", "message": "Rack 'Rack B' is empty"}]

    def test_legacy_upgrade(self, client: TestClient, legacy_rack_data: dict) -> None:
        response = client.post(
            "/api/v1/configurations/import", json={"config": legacy_rack_data}
        )
        assert response.status_code == 200
        component = response.json()["racks"][0]["components"][0]
        nic = component["networkInterfaces"][0]
        assert nic["name"] == "eth0"
        assert nic["addresses"][0]["address"] == "10.0.0.5"
        assert nic["addresses"][0]["type"] == "primary"
        assert component["ethernetConfig"] == {"frontCount": 0, "backCount": 4}

    def test_schema_error(self, client: TestClient, lab: list[dict]) -> None:
        lab[0]["components"][1]["height"] = 0
        response = client.post("/api/v1/configurations/import", json={"config": lab})
        assert response.status_code == 422
        body = response.json()
        assert body["error_type"] == "validation"
        assert body["details"][0]["path"] == "[0].components[1].height"

    def test_layout_error(self, client: TestClient, lab: list[dict]) -> None:
        lab[0]["components"][1]["position"] = 10
        response = client.post("/api/v1/configurations/import", json={"config": lab})
        assert response.status_code == 422
        assert response.json()["error_type"] == "layout"


class TestValidate:
    """Tests for POST /api/v1/validate."""

    def test_valid(self, client: TestClient, lab: list[dict]) -> None:
        response = client.post("/api/v1/validate", json={"config": lab})
        body = response.json()
        assert response.status_code == 200
        assert body["is_valid"] is True
        assert len(body["warnings"]) == 1

    def test_overlap_reported_in_body(self, client: TestClient, lab: list[dict]) -> None:
        lab[0]["components"][1]["position"] = 31
        body = client.post("/api/v1/validate", json={"config": lab}).json()
        assert body["is_valid"] is False
        assert body["errors"][0]["path"] == "[0].components[2].position"


class TestPlacement:
    """Tests for the placement endpoints."""

    def test_check_valid(self, client: TestClient, lab: list[dict]) -> None:
        response = client.post(
            "/api/v1/placement/check",
            json={"config": lab, "rack_id": "rack-a", "position": 1, "height": 4},
        )
        assert response.json() == {
            "valid": True,
            "reason": "ok",
            "message": "Placement is valid",
            "conflicts": [],
        }

    def test_check_overlap(self, client: TestClient, lab: list[dict]) -> None:
        body = client.post(
            "/api/v1/placement/check",
            json={"config": lab, "rack_id": "rack-a", "position": 29, "height": 2},
        ).json()
        assert body["valid"] is False
        assert body["reason"] == "overlap"
        assert body["conflicts"] == ["db-1"]

    def test_check_excludes_moving_component(
        self, client: TestClient, lab: list[dict]
    ) -> None:
        body = client.post(
            "/api/v1/placement/check",
            json={
                "config": lab,
                "rack_id": "rack-a",
                "position": 31,
                "height": 2,
                "exclude_component_id": "db-1",
            },
        ).json()
        assert body["valid"] is True

    def test_check_unknown_rack(self, client: TestClient, lab: list[dict]) -> None:
        response = client.post(
            "/api/v1/placement/check",
            json={"config": lab, "rack_id": "nope", "position": 1, "height": 1},
        )
        assert response.status_code == 404
        assert response.json()["error_type"] == "not_found"

    def test_next_position(self, client: TestClient, lab: list[dict]) -> None:
        body = client.post(
            "/api/v1/placement/next",
            json={"config": lab, "rack_id": "rack-b", "height": 2},
        ).json()
        assert body == {"position": 23, "fits": True}

    def test_next_position_full_rack(self, client: TestClient) -> None:
        full = [
            {
                "id": "r",
                "name": "R",
                "height": 2,
                "components": [{"id": "c", "name": "C", "height": 2, "position": 1}],
            }
        ]
        body = client.post(
            "/api/v1/placement/next", json={"config": full, "rack_id": "r"}
        ).json()
        assert body == {"position": 1, "fits": False}

    def test_move_across_racks(self, client: TestClient, lab: list[dict]) -> None:
        original = deepcopy(lab[0]["components"][0])
        response = client.post(
            "/api/v1/placement/move",
            json={
                "config": lab,
                "component_id": "web-1",
                "target_rack_id": "rack-b",
                "position": 10,
            },
        )
        assert response.status_code == 200
        racks = response.json()["racks"]
        assert [c["id"] for c in racks[0]["components"]] == ["web-2", "db-1"]
        moved = racks[1]["components"][0]
        assert moved["id"] == original["id"]
        assert moved["name"] == original["name"]
        assert moved["position"] == 10

    def test_move_rejected(self, client: TestClient, lab: list[dict]) -> None:
        response = client.post(
            "/api/v1/placement/move",
            json={
                "config": lab,
                "component_id": "web-1",
                "target_rack_id": "rack-a",
                "position": 31,
            },
        )
        assert response.status_code == 422
        body = response.json()
        assert body["error_type"] == "placement"
        assert "DB" in body["details"][0]["message"]

    def test_move_unknown_component(self, client: TestClient, lab: list[dict]) -> None:
        response = client.post(
            "/api/v1/placement/move",
            json={
                "config": lab,
                "component_id": "ghost",
                "target_rack_id": "rack-a",
                "position": 1,
            },
        )
        assert response.status_code == 404
        assert response.json()["details"] == {"kind": "component", "id": "ghost"}


class TestDistance:
    """Tests for POST /api/v1/distance."""

    def test_pair(self, client: TestClient, lab: list[dict]) -> None:
        body = client.post(
            "/api/v1/distance",
            json={"config": lab, "component_id": "web-1", "other_component_id": "web-2"},
        ).json()
        entry = body["distances"][0]
        assert entry["minimum"] == 17.5
        assert entry["is_range"] is False
        assert entry["formatted"] == "17.5 inches"

    def test_all_neighbours_in_units(self, client: TestClient, lab: list[dict]) -> None:
        body = client.post(
            "/api/v1/distance",
            json={"config": lab, "component_id": "web-2", "unit": "U"},
        ).json()
        assert [d["component_id"] for d in body["distances"]] == ["db-1", "web-1"]
        db, web = body["distances"]
        assert db["is_range"] is True
        assert db["formatted"] == "9.0-12.0 U"
        assert web["formatted"] == "10.0 U"

    def test_different_racks(self, client: TestClient, lab: list[dict]) -> None:
        lab[1]["components"].append({"id": "sw", "name": "SW", "height": 1, "position": 1})
        response = client.post(
            "/api/v1/distance",
            json={"config": lab, "component_id": "web-1", "other_component_id": "sw"},
        )
        assert response.status_code == 422
        assert response.json()["error_type"] == "placement"


class TestExport:
    """Tests for the export endpoints."""

    def test_formats(self, client: TestClient) -> None:
        response = client.get("/api/v1/export/formats")
        assert response.json() == {"formats": ["json", "svg", "xlsx"]}

    def test_json(self, client: TestClient, legacy_rack_data: dict) -> None:
        response = client.post("/api/v1/export/json", json={"config": legacy_rack_data})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert "filename=racks.json" in response.headers["content-disposition"]
        assert response.json()[0]["id"] == "rack-legacy"

    def test_svg(self, client: TestClient, lab: list[dict]) -> None:
        response = client.post("/api/v1/export/svg", json={"config": lab})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("image/svg+xml")
        assert 'data-component-id="db-1"' in response.text

    def test_xlsx(self, client: TestClient, lab: list[dict]) -> None:
        response = client.post("/api/v1/export/xlsx", json={"config": lab})
        assert response.status_code == 200
        workbook = load_workbook(io.BytesIO(response.content))
        assert workbook.sheetnames == ["Rack A", "Rack B"]
        assert workbook["Rack A"]["A2"].value == "DB"

    def test_unsupported_format(self, client: TestClient, lab: list[dict]) -> None:
        response = client.post("/api/v1/export/pdf", json={"config": lab})
        assert response.status_code == 400
        body = response.json()
        assert body["error_type"] == "unsupported_format"
        assert body["details"]["available"] == ["json", "svg", "xlsx"]
