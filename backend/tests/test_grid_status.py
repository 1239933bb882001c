import math
from datetime import datetime

import pytest

from app.models.grid_node import GridNode
from app.models.sensor_reading import SensorReading
from app.services.grid_status import compute_grid_status, is_overloaded, utilization_percent


def add_node(db, node_id, capacity=100.0, region="North", last_updated=datetime(2024, 1, 1)):
    db.add(GridNode(node_id=node_id, region=region, capacity=capacity, last_updated=last_updated))


def add_reading(db, node_id, load, timestamp):
    db.add(SensorReading(sensor_id=f"S-{node_id}", node_id=node_id, timestamp=timestamp,
                         load_reading=load, voltage=410.0, frequency=60.0))


def by_node(snapshot):
    return {n["node_id"]: n for n in snapshot["nodes"]}


class TestUtilization:

    def test_zero_capacity_gives_zero(self):
        assert utilization_percent(50.0, 0.0) == 0.0

    def test_negative_capacity_gives_zero(self):
        assert utilization_percent(50.0, -10.0) == 0.0

    def test_overload_boundary(self):
        assert is_overloaded(utilization_percent(85.0, 100.0)) is False
        assert is_overloaded(utilization_percent(85.01, 100.0)) is True


class TestComputeGridStatus:

    def test_latest_reading_wins(self, db):
        add_node(db, "N1")
        add_reading(db, "N1", 80.0, datetime(2024, 1, 1, 0, 0, 2))
        add_reading(db, "N1", 50.0, datetime(2024, 1, 1, 0, 0, 1))
        db.commit()

        node = by_node(compute_grid_status(db))["N1"]
        assert node["current_load"] == 80.0
        assert node["utilization_percent"] == pytest.approx(80.0)
        assert node["last_updated"].replace(tzinfo=None) == datetime(2024, 1, 1, 0, 0, 2)

    def test_timestamp_tie_resolves_to_last_inserted(self, db):
        add_node(db, "N1")
        add_reading(db, "N1", 10.0, datetime(2024, 1, 1))
        add_reading(db, "N1", 20.0, datetime(2024, 1, 1))
        db.commit()

        assert by_node(compute_grid_status(db))["N1"]["current_load"] == 20.0

    def test_node_without_readings_reports_zero_load(self, db):
        add_node(db, "IDLE", last_updated=datetime(2023, 5, 6, 7, 8, 9))
        db.commit()

        node = by_node(compute_grid_status(db))["IDLE"]
        assert node["current_load"] == 0.0
        assert node["utilization_percent"] == 0.0
        assert node["last_updated"].replace(tzinfo=None) == datetime(2023, 5, 6, 7, 8, 9)

    def test_zero_capacity_node(self, db):
        add_node(db, "Z", capacity=0.0)
        add_reading(db, "Z", 40.0, datetime(2024, 1, 1))
        db.commit()

        snapshot = compute_grid_status(db)
        node = by_node(snapshot)["Z"]
        assert node["utilization_percent"] == 0.0
        assert math.isfinite(snapshot["average_utilization"])
        assert snapshot["average_utilization"] == 0.0
        assert snapshot["overloaded_nodes"] == 0

    def test_totals_and_overload_count(self, db):
        add_node(db, "A", capacity=100.0)
        add_node(db, "B", capacity=200.0)
        add_node(db, "C", capacity=100.0)
        add_reading(db, "A", 85.0, datetime(2024, 1, 1))    # exactly 85%, not overloaded
        add_reading(db, "B", 180.0, datetime(2024, 1, 1))   # 90%
        add_reading(db, "C", 85.01, datetime(2024, 1, 1))   # just over
        db.commit()

        snapshot = compute_grid_status(db)
        assert snapshot["total_nodes"] == 3
        assert snapshot["total_load"] == pytest.approx(350.01)
        assert snapshot["total_capacity"] == pytest.approx(400.0)
        assert snapshot["average_utilization"] == pytest.approx(350.01 / 400.0 * 100)
        assert snapshot["overloaded_nodes"] == 2
        assert set(by_node(snapshot)) == {"A", "B", "C"}

    def test_readings_for_unregistered_nodes_are_ignored(self, db):
        add_node(db, "A")
        add_reading(db, "A", 10.0, datetime(2024, 1, 1))
        add_reading(db, "GHOST", 500.0, datetime(2024, 1, 1))
        db.commit()

        snapshot = compute_grid_status(db)
        assert snapshot["total_nodes"] == 1
        assert snapshot["total_load"] == 10.0

    def test_empty_grid(self, db):
        snapshot = compute_grid_status(db)
        assert snapshot["total_nodes"] == 0
        assert snapshot["total_load"] == 0.0
        assert snapshot["total_capacity"] == 0.0
        assert snapshot["average_utilization"] == 0.0
        assert snapshot["overloaded_nodes"] == 0
        assert snapshot["nodes"] == []
        assert snapshot["timestamp"].tzinfo is not None

    def test_read_only(self, db):
        add_node(db, "A")
        add_reading(db, "A", 10.0, datetime(2024, 1, 1))
        db.commit()

        compute_grid_status(db)
        assert not db.new and not db.dirty and not db.deleted
