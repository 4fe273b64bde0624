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

"""Open editor buffers.

The parser consults this store before reading from disk so that unsaved
edits are honored.
"""

import logging
from typing import Dict, Optional

from ext_index.lsp.types import TextDocumentItem, path_to_uri

logger = logging.getLogger(__name__)

LANGUAGE_ID = "ext"


class DocumentStore:
    """Tracks documents opened in the editor, keyed by URI."""

    def __init__(self):
        self._documents: Dict[str, TextDocumentItem] = {}  # uri -> document

    def open(
        self, uri: str, text: str, version: int = 0, language_id: Optional[str] = None
    ) -> TextDocumentItem:
        document = TextDocumentItem(
            uri=uri, language_id=language_id or LANGUAGE_ID, version=version, text=text
        )
        self._documents[uri] = document
        logger.debug(f"Opened document: {uri}")
        return document

    def update(self, uri: str, text: str, version: Optional[int] = None) -> TextDocumentItem:
        """Replace the full text of a document, opening it if needed."""
        current = self._documents.get(uri)
        if current is None:
            return self.open(uri, text, version or 0)
        document = TextDocumentItem(
            uri=uri,
            language_id=current.language_id,
            version=version if version is not None else current.version + 1,
            text=text,
        )
        self._documents[uri] = document
        return document

    def close(self, uri: str) -> None:
        if self._documents.pop(uri, None) is not None:
            logger.debug(f"Closed document: {uri}")

    def get(self, uri: str) -> Optional[TextDocumentItem]:
        return self._documents.get(uri)

    def get_text_for_path(self, filename: str) -> Optional[str]:
        """Return buffer contents for a filesystem path, if it is open."""
        document = self._documents.get(path_to_uri(filename))
        if document:
            return document.text
        return None

    def __contains__(self, uri: str) -> bool:
        return uri in self._documents

    def __len__(self) -> int:
        return len(self._documents)
