"""Unit tests for section_store.py — JSON persistence, meta get/set, replace-on-save."""
import sys
import os
import json
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from hotspotmaker.config import META_IMAGE, META_SPOTS
from hotspotmaker.core.codec import FormRows
from hotspotmaker.core.section_store import (
    add_entry,
    delete_entry,
    get_entry,
    get_meta,
    load_sections,
    replace_hotspots,
    save_sections,
    set_meta,
    to_section,
    update_title,
)
from hotspotmaker.models.hotspot import Hotspot


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "data" / "hotspot_sections.json"


def _lamp_rows() -> FormRows:
    return FormRows(x=["10"], y=["20"], title=["Lamp"], text=["A reading lamp"], icon=[""])


# ─────────────────────────────────────────────────────────────────────────────
# Tests: load / save
# ─────────────────────────────────────────────────────────────────────────────

class TestLoadSave:
    def test_missing_file_gives_empty(self, store_path):
        assert load_sections(store_path) == []

    def test_corrupt_file_gives_empty(self, store_path):
        store_path.parent.mkdir(parents=True, exist_ok=True)
        store_path.write_text("{not json")
        assert load_sections(store_path) == []

    def test_non_object_document_gives_empty(self, store_path):
        store_path.parent.mkdir(parents=True, exist_ok=True)
        store_path.write_text("[1, 2]")
        assert load_sections(store_path) == []

    @pytest.mark.parametrize("sections", [5, "abc", {"a": 1}, None])
    def test_sections_not_a_list_gives_empty(self, store_path, sections):
        store_path.parent.mkdir(parents=True, exist_ok=True)
        store_path.write_text(json.dumps({"sections": sections}))
        assert load_sections(store_path) == []

    def test_non_object_meta_skips_item(self, store_path):
        store_path.parent.mkdir(parents=True, exist_ok=True)
        store_path.write_text(json.dumps({"sections": [
            {"section_id": 1, "title": "A", "created_at": "t", "meta": ["x"]},
            {"section_id": 2, "title": "B", "created_at": "t"},
        ]}))
        assert [e.section_id for e in load_sections(store_path)] == [2]

    def test_bad_items_skipped(self, store_path):
        store_path.parent.mkdir(parents=True, exist_ok=True)
        store_path.write_text(json.dumps({"sections": [
            {"section_id": 1, "title": "A", "created_at": "t"},
            {"title": "no id", "created_at": "t"},
            "junk",
        ]}))
        entries = load_sections(store_path)
        assert [e.section_id for e in entries] == [1]
        assert entries[0].meta == {}

    def test_round_trip(self, store_path):
        entries = []
        e = add_entry(entries, "Living room", store_path)
        set_meta(entries, e.section_id, META_IMAGE, "https://example.com/floor.jpg", store_path)
        loaded = load_sections(store_path)
        assert loaded == entries

    def test_save_creates_parent_directory(self, store_path):
        save_sections([], store_path)
        assert json.loads(store_path.read_text()) == {"sections": []}


# ─────────────────────────────────────────────────────────────────────────────
# Tests: entries
# ─────────────────────────────────────────────────────────────────────────────

class TestEntries:
    def test_ids_start_at_one_and_increase(self, store_path):
        entries = []
        assert add_entry(entries, "A", store_path).section_id == 1
        assert add_entry(entries, "B", store_path).section_id == 2

    def test_id_follows_highest_existing(self, store_path):
        entries = []
        add_entry(entries, "A", store_path)
        add_entry(entries, "B", store_path)
        add_entry(entries, "C", store_path)
        delete_entry(entries, 2, store_path)
        assert add_entry(entries, "D", store_path).section_id == 4

    def test_title_is_plain_text(self, store_path):
        entries = []
        assert add_entry(entries, "<b>Floor</b> plan", store_path).title == "Floor plan"

    def test_update_title(self, store_path):
        entries = []
        add_entry(entries, "Old", store_path)
        assert update_title(entries, 1, "New", store_path).title == "New"
        assert load_sections(store_path)[0].title == "New"

    def test_update_unknown(self, store_path):
        assert update_title([], 5, "x", store_path) is None

    def test_delete_removes_entry_and_meta(self, store_path):
        entries = []
        add_entry(entries, "A", store_path)
        replace_hotspots(entries, 1, "https://example.com/a.jpg", _lamp_rows(), store_path)
        assert delete_entry(entries, 1, store_path) is True
        assert get_entry(entries, 1) is None
        assert get_meta(entries, 1, META_SPOTS) is None
        assert load_sections(store_path) == []

    def test_delete_unknown(self, store_path):
        assert delete_entry([], 1, store_path) is False


# ─────────────────────────────────────────────────────────────────────────────
# Tests: meta get/set
# ─────────────────────────────────────────────────────────────────────────────

class TestMeta:
    def test_set_and_get(self, store_path):
        entries = []
        add_entry(entries, "A", store_path)
        assert set_meta(entries, 1, "k", "v", store_path) is True
        assert get_meta(entries, 1, "k") == "v"

    def test_absent_key(self, store_path):
        entries = []
        add_entry(entries, "A", store_path)
        assert get_meta(entries, 1, META_IMAGE) is None

    def test_unknown_section(self, store_path):
        assert set_meta([], 9, "k", "v", store_path) is False
        assert get_meta([], 9, "k") is None


# ─────────────────────────────────────────────────────────────────────────────
# Tests: replace_hotspots / to_section
# ─────────────────────────────────────────────────────────────────────────────

class TestReplaceHotspots:
    def test_stores_sanitized_image_and_encoded_rows(self, store_path):
        entries = []
        add_entry(entries, "A", store_path)
        replace_hotspots(entries, 1, " example.com/floor.jpg ", _lamp_rows(), store_path)
        assert get_meta(entries, 1, META_IMAGE) == "http://example.com/floor.jpg"
        assert json.loads(get_meta(entries, 1, META_SPOTS)) == [
            {"x": 10, "y": 20, "title": "Lamp", "text": "A reading lamp", "icon": ""}
        ]

    def test_save_replaces_whole_list(self, store_path):
        entries = []
        add_entry(entries, "A", store_path)
        rows = FormRows(x=["1", "2", "3"], y=["1", "2", "3"], title=["a", "b", "c"], text=["a", "b", "c"])
        replace_hotspots(entries, 1, None, rows, store_path)
        replace_hotspots(entries, 1, None, _lamp_rows(), store_path)
        assert to_section(entries[0]).spots == [
            Hotspot(x=10, y=20, title="Lamp", text="A reading lamp", icon="")
        ]

    def test_none_leaves_parts_untouched(self, store_path):
        entries = []
        add_entry(entries, "A", store_path)
        replace_hotspots(entries, 1, "https://example.com/a.jpg", _lamp_rows(), store_path)
        replace_hotspots(entries, 1, None, None, store_path)
        section = to_section(entries[0])
        assert section.image_url == "https://example.com/a.jpg"
        assert len(section.spots) == 1

    def test_unsafe_image_url_stored_empty(self, store_path):
        entries = []
        add_entry(entries, "A", store_path)
        replace_hotspots(entries, 1, "javascript:alert(1)", None, store_path)
        assert get_meta(entries, 1, META_IMAGE) == ""

    def test_unknown_section(self, store_path):
        assert replace_hotspots([], 1, "https://example.com/a.jpg", None, store_path) is None

    def test_persisted(self, store_path):
        entries = []
        add_entry(entries, "A", store_path)
        replace_hotspots(entries, 1, "https://example.com/a.jpg", _lamp_rows(), store_path)
        section = to_section(load_sections(store_path)[0])
        assert section.image_url == "https://example.com/a.jpg"
        assert section.spots[0].title == "Lamp"


class TestToSection:
    def test_empty_entry(self, store_path):
        entries = []
        e = add_entry(entries, "A", store_path)
        section = to_section(e)
        assert section.image_url == ""
        assert section.spots == []
        assert section.title == "A"

    def test_corrupt_blob_gives_no_spots(self, store_path):
        entries = []
        add_entry(entries, "A", store_path)
        set_meta(entries, 1, META_SPOTS, "{broken", store_path)
        assert to_section(entries[0]).spots == []
