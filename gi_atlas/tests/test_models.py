"""
Tests for Pydantic model validation and serialization.
"""

from __future__ import annotations

import pytest

from gi_atlas.models import ALL, Coordinate, FilterSpec, GIEntry, GISummary, ResolutionMiss


class TestGIEntry:
    def test_from_states_derives_fields(self):
        entry = GIEntry.from_states(
            id="1",
            name="Darjeeling Tea",
            category="Agricultural",
            states=["West Bengal", "Sikkim"],
            coordinates=[Coordinate(state="West Bengal", lat=22.9868, lng=87.855)],
        )
        assert entry.primary_state == "West Bengal"
        assert entry.state_count == 2

    def test_from_states_empty(self):
        entry = GIEntry.from_states(id="1", name="X", category="Y", states=[], coordinates=[])
        assert entry.primary_state == ""
        assert entry.state_count == 0

    def test_alias_fields(self):
        data = {
            "id": "5",
            "name": "Basmati",
            "type": "Agricultural",
            "states": ["Punjab"],
            "coordinates": [{"state": "Punjab", "lat": 31.1471, "lng": 75.3412}],
            "primaryState": "Punjab",
            "stateCount": 1,
        }
        entry = GIEntry.model_validate(data)
        assert entry.category == "Agricultural"
        assert entry.coordinates[0].lat == pytest.approx(31.1471)
        assert entry.model_dump(by_alias=True, mode="json") == data

    def test_populate_by_name(self):
        entry = GIEntry(id="1", name="X", category="Handicraft")
        assert entry.category == "Handicraft"
        assert entry.states == ()

    def test_frozen(self):
        entry = GIEntry(id="1", name="X", category="Handicraft")
        with pytest.raises(Exception):
            entry.name = "Y"

    def test_negative_state_count_rejected(self):
        with pytest.raises(Exception):
            GIEntry(id="1", name="X", category="Y", state_count=-1)


class TestFilterSpec:
    def test_defaults(self):
        spec = FilterSpec()
        assert spec.type == ALL
        assert spec.state == ALL
        assert spec.search == ""

    def test_with_changes_returns_new_spec(self):
        spec = FilterSpec()
        changed = spec.with_changes(state="Goa")
        assert changed.state == "Goa"
        assert spec.state == ALL


class TestOtherModels:
    def test_resolution_miss_alias(self):
        miss = ResolutionMiss(entry_id="8", state="Gooa")
        assert miss.model_dump(by_alias=True) == {"entryId": "8", "state": "Gooa"}

    def test_summary_defaults(self):
        summary = GISummary(total_records=0, indian_states=42)
        assert summary.type_breakdown == {}
        assert summary.types == []
