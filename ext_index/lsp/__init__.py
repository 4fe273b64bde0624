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

"""Editor-facing protocol types and open document tracking.

LSP types are provided by lsprotocol.types and re-exported here.
"""

from ext_index.lsp.documents import DocumentStore
from ext_index.lsp.types import (
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
    empty_range,
    make_range,
    markdown_hover,
    path_to_uri,
    to_dict,
    uri_to_path,
)

__all__ = [
    "DocumentStore",
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
    "empty_range",
    "make_range",
    "markdown_hover",
    "path_to_uri",
    "to_dict",
    "uri_to_path",
]
