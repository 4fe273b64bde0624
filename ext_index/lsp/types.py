# Copyright 2025 Vijaykumar Singh <singhvjd@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Language Server Protocol value types.

The protocol types come from ``lsprotocol``; this module re-exports the
subset used for diagnostics, completion, hover and definition, and adds a
few constructors and the file path <-> URI conversion from ``pygls``.
"""

import os
from typing import Any, Dict

from lsprotocol.converters import get_converter
from lsprotocol.types import (
    CompletionItem,
    CompletionItemKind,
    Diagnostic,
    DiagnosticSeverity,
    Hover,
    Location,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    TextDocumentItem,
)
from pygls.uris import from_fs_path, to_fs_path

_converter = get_converter()


def make_range(line: int, character: int, end_line: int, end_character: int) -> Range:
    """Build a zero-based range."""
    return Range(
        start=Position(line=line, character=character),
        end=Position(line=end_line, character=end_character),
    )


def empty_range() -> Range:
    return make_range(0, 0, 0, 0)


def markdown_hover(value: str) -> Hover:
    return Hover(contents=MarkupContent(kind=MarkupKind.Markdown, value=value))


def to_dict(value: Any) -> Dict[str, Any]:
    """Convert a protocol object to its JSON shape."""
    return _converter.unstructure(value)


def path_to_uri(path: str) -> str:
    """Convert a file path to a file:// URI."""
    return from_fs_path(os.path.abspath(path)) or path


def uri_to_path(uri: str) -> str:
    """Convert a file:// URI to a path. Anything else is returned as is."""
    if uri.startswith("file://"):
        return to_fs_path(uri) or uri
    return uri


__all__ = [
    "CompletionItem",
    "CompletionItemKind",
    "Diagnostic",
    "DiagnosticSeverity",
    "Hover",
    "Location",
    "MarkupContent",
    "MarkupKind",
    "Position",
    "Range",
    "TextDocumentItem",
    "make_range",
    "empty_range",
    "markdown_hover",
    "to_dict",
    "path_to_uri",
    "uri_to_path",
]
