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

"""Documentation of description.ext properties.

Loaded once from the bundled ``data/description-values.json``.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_DOCUMENTATION_PATH = Path(__file__).parent / "data" / "description-values.json"


class DocumentationEntry(BaseModel):
    """A documented description.ext property."""

    model_config = {"frozen": True}

    name: str
    type: str = ""  # free-form label, selects the completion template
    description: str = ""
    link: str = ""

    def insert_text(self) -> str:
        """Completion template for this property."""
        kind = self.type.lower()
        if kind == "string":
            return f'{self.name} = "'
        if kind in ("array", "array of strings"):
            return f"{self.name}[] = {{"
        if kind == "class":
            return f"class {self.name}\n{{\n"
        return f"{self.name} = "


class DocumentationTable:
    """Property documentation keyed by lower-cased name."""

    def __init__(self, entries: Optional[List[DocumentationEntry]] = None):
        self._entries: Dict[str, DocumentationEntry] = {}
        for entry in entries or []:
            self._entries[entry.name.lower()] = entry

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "DocumentationTable":
        """Load entries from a JSON file with a ``properties`` list."""
        path = path or DEFAULT_DOCUMENTATION_PATH
        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        entries = [DocumentationEntry.model_validate(item) for item in data.get("properties", [])]
        logger.debug(f"Loaded {len(entries)} documentation entries from {path}")
        return cls(entries)

    def get(self, name: str) -> Optional[DocumentationEntry]:
        return self._entries.get(name.lower())

    def search(self, prefix: str) -> List[DocumentationEntry]:
        """Entries whose key starts with ``prefix``, compared case-insensitively."""
        return [entry for key, entry in self._entries.items() if key.startswith(prefix.lower())]

    def __iter__(self) -> Iterator[DocumentationEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)


_documentation: Optional[DocumentationTable] = None


def get_documentation() -> DocumentationTable:
    """Return the bundled documentation table, loading it on first use."""
    global _documentation
    if _documentation is None:
        _documentation = DocumentationTable.load()
    return _documentation
