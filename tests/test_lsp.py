# Copyright 2026 Vijaykumar Singh <singhvjd@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Tests for editor protocol helpers and the document store."""

from ext_index.lsp import (
    CompletionItem,
    CompletionItemKind,
    Diagnostic,
    DiagnosticSeverity,
    DocumentStore,
    MarkupKind,
    empty_range,
    make_range,
    markdown_hover,
    path_to_uri,
    to_dict,
    uri_to_path,
)


class TestTypes:
    def test_diagnostic_json_shape(self):
        diagnostic = Diagnostic(
            range=make_range(1, 2, 1, 5),
            message="Oops",
            severity=DiagnosticSeverity.Error,
            source="ext-index",
        )

        data = to_dict(diagnostic)

        assert data["range"] == {
            "start": {"line": 1, "character": 2},
            "end": {"line": 1, "character": 5},
        }
        assert data["message"] == "Oops"
        assert data["severity"] == 1
        assert data["source"] == "ext-index"

    def test_completion_item_uses_camel_case(self):
        item = CompletionItem(
            label="TAG_fnc_a", kind=CompletionItemKind.Function, insert_text="TAG_fnc_a"
        )

        data = to_dict(item)

        assert data["label"] == "TAG_fnc_a"
        assert data["kind"] == 3
        assert data["insertText"] == "TAG_fnc_a"

    def test_hover_is_markdown(self):
        hover = markdown_hover("**x**")

        assert hover.contents.kind == MarkupKind.Markdown
        assert to_dict(hover)["contents"] == {"kind": "markdown", "value": "**x**"}

    def test_empty_ranges_are_distinct_objects(self):
        first = empty_range()

        assert first == make_range(0, 0, 0, 0)
        assert first is not empty_range()

    def test_uri_with_spaces(self):
        uri = path_to_uri("/missions/my mission/description.ext")

        assert uri == "file:///missions/my%20mission/description.ext"
        assert uri_to_path(uri) == "/missions/my mission/description.ext"

    def test_non_file_uri_is_returned_as_is(self):
        assert uri_to_path("untitled:Untitled-1") == "untitled:Untitled-1"


class TestDocumentStore:
    def test_open_update_close(self):
        store = DocumentStore()
        uri = path_to_uri("/m/description.ext")

        store.open(uri, "a")
        document = store.update(uri, "b")

        assert document.text == "b"
        assert document.version == 1
        assert document.language_id == "ext"
        assert store.get_text_for_path("/m/description.ext") == "b"

        store.close(uri)
        assert uri not in store
        assert store.get_text_for_path("/m/description.ext") is None

    def test_update_opens_unknown_document(self):
        store = DocumentStore()

        store.update("file:///m/a.hpp", "x", version=3)

        assert store.get("file:///m/a.hpp").version == 3
        assert len(store) == 1
