# Copyright 2026 Vijaykumar Singh <singhvjd@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Tests for description.ext property documentation."""

import json

from ext_index.documentation import DocumentationEntry, DocumentationTable, get_documentation


class TestDocumentationTable:
    def test_bundled_table(self):
        table = get_documentation()

        assert len(table) > 0
        entry = table.get("ONLOADNAME")
        assert entry.name == "onLoadName"
        assert entry.link.startswith("https://")
        assert get_documentation() is table

    def test_load_from_file(self, write):
        path = write(
            "docs.json",
            json.dumps({"properties": [{"name": "briefing", "type": "Number"}]}),
        )

        table = DocumentationTable.load(path)

        assert [entry.name for entry in table] == ["briefing"]
        assert table.get("briefing").description == ""

    def test_search(self):
        table = DocumentationTable(
            [DocumentationEntry(name="respawn"), DocumentationEntry(name="respawnDelay")]
        )

        assert [e.name for e in table.search("respawnd")] == ["respawnDelay"]
        assert table.search("zzz") == []

    def test_insert_text_falls_back_to_assignment(self):
        assert DocumentationEntry(name="x", type="Boolean").insert_text() == "x = "
        assert DocumentationEntry(name="x", type="Array").insert_text() == "x[] = {"
