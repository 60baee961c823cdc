"""
Tests for the read-only dataset API.
The app is built against a dataset produced by the pipeline in tmp_path.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from gi_atlas.api import create_app
from gi_atlas.pipeline import run_pipeline

SAMPLE = Path(__file__).resolve().parents[2] / "data" / "sample_registry.txt"


@pytest.fixture(scope="module")
def dataset_path(tmp_path_factory):
    out_dir = tmp_path_factory.mktemp("api")
    report = run_pipeline(SAMPLE, out_dir)
    return report.dataset_path


@pytest.fixture(scope="module")
def client(dataset_path):
    with TestClient(create_app(dataset_path)) as c:
        yield c


class TestEntries:
    def test_unfiltered(self, client):
        body = client.get("/entries").json()
        assert body["total"] == 9
        assert [e["id"] for e in body["entries"]][:3] == ["1", "2", "3"]
        assert body["filters"] == {"type": "All", "state": "All", "search": ""}

    def test_filtered(self, client):
        body = client.get("/entries", params={"type": "Agricultural", "search": "TEA"}).json()
        assert [e["name"] for e in body["entries"]] == ["Darjeeling Tea", "Kangra Tea"]

    def test_state_filter_includes_unresolved_names(self, client):
        body = client.get("/entries", params={"state": "Himachal"}).json()
        assert [e["name"] for e in body["entries"]] == ["Kangra Tea"]

    def test_pagination(self, client):
        body = client.get("/entries", params={"limit": 2, "offset": 2}).json()
        assert body["total"] == 9
        assert [e["id"] for e in body["entries"]] == ["3", "4"]

    def test_serialized_with_viewer_keys(self, client):
        entry = client.get("/entries").json()["entries"][0]
        assert "type" in entry and "primaryState" in entry and "stateCount" in entry

    def test_single_entry(self, client):
        resp = client.get("/entries/4")
        assert resp.status_code == 200
        assert resp.json()["states"] == ["Chattisgarh"]

    def test_single_entry_not_found(self, client):
        assert client.get("/entries/999").status_code == 404


class TestNext:
    def test_first_match(self, client):
        body = client.get("/entries/next", params={"type": "Handicraft"}).json()
        assert body["entry"]["id"] == "2"
        assert body["position"] == 0
        assert body["total"] == 4

    def test_advance_and_wrap(self, client):
        params = {"search": "tea"}
        first = client.get("/entries/next", params={**params, "current": "1"}).json()
        assert first["entry"]["name"] == "Kangra Tea"
        wrapped = client.get("/entries/next", params={**params, "current": first["entry"]["id"]}).json()
        assert wrapped["entry"]["name"] == "Darjeeling Tea"

    def test_unknown_current_selects_first(self, client):
        body = client.get("/entries/next", params={"current": "nope"}).json()
        assert body["entry"]["id"] == "1"

    def test_empty_filtered_set_keeps_selection(self, client):
        body = client.get("/entries/next", params={"state": "Goa", "current": "2"}).json()
        assert body["entry"]["id"] == "2"
        assert body["position"] is None
        assert body["total"] == 0

    def test_empty_filtered_set_without_selection(self, client):
        body = client.get("/entries/next", params={"state": "Goa"}).json()
        assert body["entry"] is None


class TestNextWithDuplicateIds:
    @pytest.fixture
    def dup_client(self, tmp_path):
        src = tmp_path / "dups.txt"
        src.write_text(
            "S.No,Geographical Indications,Goods,State\n"
            "5,Alpha,Handicraft,Goa\n"
            "5,Beta,Handicraft,Goa\n"
            "6,Gamma,Handicraft,Goa\n",
            encoding="utf-8",
        )
        report = run_pipeline(src, tmp_path / "out")
        with TestClient(create_app(report.dataset_path)) as c:
            yield c

    def test_walk_by_position_reaches_every_entry(self, dup_client):
        seen = []
        params = {}
        for _ in range(4):
            body = dup_client.get("/entries/next", params=params).json()
            seen.append(body["entry"]["name"])
            params = {"position": body["position"], "current": body["entry"]["id"]}
        assert seen == ["Alpha", "Beta", "Gamma", "Alpha"]

    def test_position_takes_precedence_over_current(self, dup_client):
        body = dup_client.get("/entries/next", params={"position": 1, "current": "6"}).json()
        assert body["entry"]["name"] == "Gamma"

    def test_out_of_range_position_falls_back_to_current(self, dup_client):
        body = dup_client.get("/entries/next", params={"position": 10, "current": "6"}).json()
        assert body["entry"]["name"] == "Alpha"

    def test_negative_position_rejected(self, dup_client):
        assert dup_client.get("/entries/next", params={"position": -1}).status_code == 422


class TestMetadata:
    def test_filters(self, client):
        body = client.get("/filters").json()
        assert body["types"] == ["All", "Agricultural", "Handicraft", "Manufactured"]
        assert body["states"][0] == "All"
        assert body["states"][1:] == sorted(body["states"][1:])

    def test_summary(self, client):
        body = client.get("/summary").json()
        assert body["totalRecords"] == 9
        assert sum(body["typeBreakdown"].values()) == 9
        assert body["indianStates"] == 42

    def test_health(self, client, dataset_path):
        body = client.get("/health").json()
        assert body["status"] == "ok"
        assert body["total_entries"] == 9
        assert body["dataset_path"] == dataset_path


class TestDegradedStartup:
    def test_missing_dataset_serves_empty(self, tmp_path):
        with TestClient(create_app(tmp_path / "missing.json")) as c:
            assert c.get("/health").json()["status"] == "empty"
            assert c.get("/entries").json()["total"] == 0
            assert c.get("/filters").json() == {"types": ["All"], "states": ["All"]}
