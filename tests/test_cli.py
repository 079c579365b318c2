"""Tests for the CLI interface."""
import json
import subprocess
import sys
from pathlib import Path

import pytest

CLI = [sys.executable, "-m", "plan_overlay"]
ROOT = Path(__file__).parent.parent

BUILDING_FORM = {
    "name": "Tower A",
    "floorCount": 2,
    "floors": {
        "1": {"apartments": [{"area": 50}, {"area": 60}]},
        "2": {"apartments": [{"area": 70, "rooms": "3+1"}]},
    },
}

PARKING_FORM = {
    "name": "Garage",
    "overviewImageUrl": "data:image/png;base64,AAAA",
    "sections": [
        {
            "area": {"x": 10, "y": 10, "width": 30, "height": 20},
            "planImageUrl": "data:image/png;base64,BBBB",
            "spaceCount": 3,
        }
    ],
}


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "store.json"


def _run(store_path: Path, *args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [*CLI, "--store", str(store_path), *args],
        capture_output=True, text=True, cwd=str(ROOT),
    )


def run_cli(store_path: Path, *args: str) -> dict:
    """Run CLI command and return parsed JSON output."""
    result = _run(store_path, *args)
    assert result.returncode == 0, f"CLI failed: {result.stderr}\n{result.stdout}"
    return json.loads(result.stdout)


def run_cli_expect_fail(store_path: Path, *args: str) -> dict:
    """Run CLI command expecting failure, return parsed JSON output."""
    result = _run(store_path, *args)
    assert result.returncode != 0
    return json.loads(result.stdout)


def write_form(tmp_path: Path, name: str, data: dict) -> str:
    path = tmp_path / name
    path.write_text(json.dumps(data))
    return str(path)


@pytest.fixture
def building_id(tmp_path, store_path):
    data = run_cli(store_path, "import-building", write_form(tmp_path, "b.json", BUILDING_FORM))
    return data["id"]


@pytest.fixture
def parking_id(tmp_path, store_path):
    data = run_cli(store_path, "import-parking", write_form(tmp_path, "p.json", PARKING_FORM))
    return data["id"]


class TestVersion:
    def test_version(self, store_path):
        data = run_cli(store_path, "version")
        assert data["ok"] is True
        assert data["version"]


class TestBuildings:
    def test_import_and_list(self, store_path, building_id):
        data = run_cli(store_path, "buildings")
        assert [b["id"] for b in data["buildings"]] == [building_id]
        assert data["buildings"][0]["apartments"] == 3
        assert data["buildings"][0]["available"] == 3

    def test_duplicate_name_rejected(self, tmp_path, store_path, building_id):
        form = dict(BUILDING_FORM, name=" tower a ")
        data = run_cli_expect_fail(store_path, "import-building", write_form(tmp_path, "dup.json", form))
        assert data["ok"] is False
        assert "already exists" in data["errors"][0]
        assert len(run_cli(store_path, "buildings")["buildings"]) == 1

    def test_floor_and_status(self, store_path, building_id):
        floor = run_cli(store_path, "floor", building_id, "1")
        assert [a["label"] for a in floor["apartments"]] == ["T1-1", "T1-2"]
        apt_id = floor["apartments"][0]["id"]

        data = run_cli(store_path, "set-status", building_id, "1", apt_id, "sold")
        assert data["available"] == 1
        assert data["total"] == 2

        summary = run_cli(store_path, "building", building_id)
        assert summary["floors"][0]["available"] == 1

    def test_unknown_status(self, store_path, building_id):
        data = run_cli_expect_fail(store_path, "set-status", building_id, "1", "x", "gone")
        assert "Unknown status" in data["error"]

    def test_move_dot(self, store_path, building_id):
        apt_id = run_cli(store_path, "floor", building_id, "2")["apartments"][0]["id"]
        run_cli(store_path, "move-dot", building_id, "2", apt_id, "25", "75")
        floor = run_cli(store_path, "floor", building_id, "2")
        assert floor["apartments"][0]["dot"] == {"x": 25.0, "y": 75.0}

    def test_move_dot_out_of_range(self, store_path, building_id):
        data = run_cli_expect_fail(store_path, "move-dot", building_id, "1", "x", "150", "10")
        assert data["ok"] is False

    def test_strips(self, store_path, building_id):
        data = run_cli(store_path, "strips", building_id)
        assert data["drawn"] is False
        assert set(data["shapes"]) == {"1", "2"}
        assert data["shapes"]["1"]["y"] == 50.0

    def test_delete(self, store_path, building_id):
        run_cli(store_path, "delete-building", building_id)
        assert run_cli(store_path, "buildings")["buildings"] == []
        run_cli_expect_fail(store_path, "delete-building", building_id)

    def test_missing_building(self, store_path):
        data = run_cli_expect_fail(store_path, "building", "nope")
        assert "not found" in data["error"]


class TestParkings:
    def test_section_and_status(self, store_path, parking_id):
        section = run_cli(store_path, "section", parking_id, "0")
        assert [s["label"] for s in section["spaces"]] == ["P1", "P2", "P3"]
        space_id = section["spaces"][1]["id"]

        run_cli(store_path, "set-space-status", parking_id, space_id, "in_negotiation")
        data = run_cli(store_path, "parking", parking_id)
        assert data["sections"][0]["available"] == 2

    def test_reimport_keeps_status(self, tmp_path, store_path, parking_id):
        space_id = run_cli(store_path, "section", parking_id, "0")["spaces"][1]["id"]
        run_cli(store_path, "set-space-status", parking_id, space_id, "sold")
        run_cli(
            store_path, "import-parking", write_form(tmp_path, "p2.json", PARKING_FORM),
            "--id", parking_id,
        )
        spaces = run_cli(store_path, "section", parking_id, "0")["spaces"]
        assert spaces[1]["id"] == space_id
        assert spaces[1]["status"] == "sold"

    def test_missing_section(self, store_path, parking_id):
        run_cli_expect_fail(store_path, "section", parking_id, "3")

    def test_no_sections_rejected(self, tmp_path, store_path):
        form = dict(PARKING_FORM, sections=[])
        data = run_cli_expect_fail(store_path, "import-parking", write_form(tmp_path, "e.json", form))
        assert data["errors"] == ["Draw at least one section"]
        assert run_cli(store_path, "parkings")["parkings"] == []


class TestStatusLabels:
    def test_floor_shows_label(self, store_path, building_id):
        floor = run_cli(store_path, "floor", building_id, "1")
        assert floor["apartments"][0]["statusLabel"] == "Available"
