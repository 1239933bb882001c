import pytest
from sqlalchemy.exc import OperationalError

from conftest import action_item, sensor_item


def store_down(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("connection refused"))


class TestSensorDataEndpoint:

    def test_batch_accepted(self, client):
        payload = [sensor_item("N1", 10.0), sensor_item("N2", 20.0)]
        response = client.post("/api/sensordata", json=payload)

        assert response.status_code == 200
        assert response.json() == {"message": "Successfully processed 2 sensor readings"}

    def test_malformed_timestamp_still_succeeds(self, client):
        payload = [
            sensor_item("N1", 10.0, "2024-01-01T00:00:00Z"),
            sensor_item("N2", 20.0, "garbage"),
            sensor_item("N3", 30.0, "2024-01-01T00:00:00Z"),
        ]
        response = client.post("/api/sensordata", json=payload)

        assert response.status_code == 200
        status = client.get("/api/gridstatus").json()
        assert {n["nodeId"] for n in status["nodes"]} == {"N1", "N3"}

    def test_out_of_range_timestamp_still_succeeds(self, client):
        payload = [
            sensor_item("N1", 10.0, "2024-01-01T00:00:00Z"),
            sensor_item("N2", 20.0, "9999-12-31T23:00:00-05:00"),
        ]
        response = client.post("/api/sensordata", json=payload)

        assert response.status_code == 200
        status = client.get("/api/gridstatus").json()
        assert {n["nodeId"] for n in status["nodes"]} == {"N1"}

    def test_empty_batch_rejected(self, client):
        response = client.post("/api/sensordata", json=[])
        assert response.status_code == 400

    def test_missing_body_rejected(self, client):
        response = client.post("/api/sensordata")
        assert response.status_code == 400

    def test_item_missing_fields_is_a_validation_error(self, client):
        response = client.post("/api/sensordata", json=[{"nodeId": "N1"}])
        assert response.status_code == 422

    def test_store_failure_is_internal_error(self, client, monkeypatch):
        monkeypatch.setattr("app.routes.sensor_data.ingest_sensor_batch", store_down)
        response = client.post("/api/sensordata", json=[sensor_item()])

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}


class TestControlEndpoint:

    def test_batch_accepted(self, client):
        response = client.post("/api/control/optimize", json=[action_item("A", "B"), action_item("B", "C")])

        assert response.status_code == 200
        assert response.json() == {"message": "Successfully processed 2 optimization actions"}

    def test_empty_batch_rejected(self, client):
        assert client.post("/api/control/optimize", json=[]).status_code == 400

    def test_missing_body_rejected(self, client):
        assert client.post("/api/control/optimize").status_code == 400

    def test_store_failure_is_internal_error(self, client, monkeypatch):
        monkeypatch.setattr("app.routes.control.ingest_optimization_batch", store_down)
        response = client.post("/api/control/optimize", json=[action_item()])

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}


class TestGridStatusEndpoint:

    def test_ingested_overloaded_node(self, client):
        client.post("/api/sensordata", json=[sensor_item("N1", 90.0, "2024-01-01T00:00:00Z")])

        response = client.get("/api/gridstatus")
        assert response.status_code == 200
        body = response.json()
        assert set(body) == {
            "timestamp", "totalNodes", "totalLoad", "totalCapacity",
            "averageUtilization", "overloadedNodes", "nodes",
        }
        assert body["totalNodes"] == 1
        assert body["overloadedNodes"] == 1
        node = body["nodes"][0]
        assert set(node) == {"nodeId", "region", "currentLoad", "capacity", "utilizationPercent", "lastUpdated"}
        assert node["nodeId"] == "N1"
        assert node["region"] == "Unknown"
        assert node["capacity"] == 100.0
        assert node["utilizationPercent"] == pytest.approx(90.0)
        assert node["lastUpdated"].startswith("2024-01-01T00:00:00")

    def test_latest_reading_reported(self, client):
        client.post("/api/sensordata", json=[
            sensor_item("N1", 80.0, "2024-01-01T00:00:02Z"),
            sensor_item("N1", 50.0, "2024-01-01T00:00:01Z"),
        ])

        node = client.get("/api/gridstatus").json()["nodes"][0]
        assert node["currentLoad"] == 80.0

    def test_store_failure_is_internal_error(self, client, monkeypatch):
        monkeypatch.setattr("app.routes.grid_status.compute_grid_status", store_down)
        response = client.get("/api/gridstatus")

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["docs"] == "/docs"


def test_health_reports_database(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["db"] == "ok"
