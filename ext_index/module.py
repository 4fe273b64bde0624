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

"""Workspace session for description.ext indexing.

Owns the function table for every root file in a workspace and publishes
diagnostics through an injected callback. The editor layer calls
``index_workspace`` once at startup and ``parse_document`` on every change;
queries are served from the current table.

Usage:
    module = ExtModule(settings, publish_diagnostics=server.publish)
    await module.index_workspace(Path("/path/to/mission"))
    items = module.on_completion(uri, "TAG_fnc_")
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from ext_index.config import (
    DIAGNOSTIC_SOURCE,
    INCLUDE_EXTENSIONS,
    ROOT_FILENAME,
    ExtIndexSettings,
)
from ext_index.docstring.extractor import load_function_info
from ext_index.docstring.parser import DocstringParser
from ext_index.documentation import DocumentationTable, get_documentation
from ext_index.functions.builder import FunctionIndexBuilder
from ext_index.functions.protocol import FunctionRecord, FunctionTable
from ext_index.hpp.parser import HppParser
from ext_index.hpp.protocol import HppParseError
from ext_index.indexer import WorkspaceIndexer
from ext_index.lsp.documents import DocumentStore
from ext_index.lsp.types import (
    CompletionItem,
    Diagnostic,
    DiagnosticSeverity,
    Hover,
    Location,
    TextDocumentItem,
    path_to_uri,
    uri_to_path,
)
from ext_index.query import FunctionQueries
from ext_index.runner import ReparseCoordinator

logger = logging.getLogger(__name__)

PublishDiagnostics = Callable[[str, List[Diagnostic]], None]


class ExtModule:
    """Indexes description files and answers queries for one workspace."""

    def __init__(
        self,
        settings: Optional[ExtIndexSettings] = None,
        publish_diagnostics: Optional[PublishDiagnostics] = None,
        documents: Optional[DocumentStore] = None,
        documentation: Optional[DocumentationTable] = None,
    ):
        """Initialize the module.

        Args:
            settings: Indexer settings
            publish_diagnostics: Called with ``(uri, diagnostics)``; an empty
                list clears earlier diagnostics for that file
            documents: Open editor buffers, read in preference to disk
            documentation: Property documentation, bundled table by default
        """
        self.settings = settings or ExtIndexSettings()
        self.publish_diagnostics = publish_diagnostics or (lambda uri, diagnostics: None)
        self.documents = documents if documents is not None else DocumentStore()
        self.documentation = documentation if documentation is not None else get_documentation()

        self.functions: FunctionTable = {}
        self.files: List[str] = []
        self.docstring_parser = DocstringParser()
        self.runner = ReparseCoordinator(self.settings.debounce_seconds)
        self.queries = FunctionQueries(self.functions, self.documentation)
        self._configure()

    def _configure(self) -> None:
        self.builder = FunctionIndexBuilder(self.settings)
        self.indexer = WorkspaceIndexer(self.settings)
        self.runner.delay = self.settings.debounce_seconds

    def update_settings(self, settings: ExtIndexSettings) -> None:
        """Apply new settings; takes effect on the next parse."""
        self.settings = settings
        self._configure()

    # ------------------------------------------------------------------
    # Indexing
    # ------------------------------------------------------------------

    async def index_workspace(self, root: Union[str, Path]) -> None:
        """Index every root file of the workspace. Resolves once all were attempted."""
        self.files = await self.indexer.index(Path(root), self.parse_file)
        logger.info(f"Indexed {len(self.functions)} description files under {root}")

    async def parse_document(self, document: Union[TextDocumentItem, str]) -> None:
        """Re-index after a document changed, debounced per document."""
        uri = document.uri if isinstance(document, TextDocumentItem) else document
        await self.runner.run(uri, lambda: self._reparse(uri))

    async def _reparse(self, uri: str) -> None:
        path = os.path.abspath(uri_to_path(uri))
        name = os.path.basename(path).lower()

        if name == ROOT_FILENAME:
            if not os.path.exists(path) and self.documents.get_text_for_path(path) is None:
                self._forget_root(path)
                return
            if path not in self.files:
                self.files.append(path)
            await self.parse_file(path)
        elif os.path.splitext(name)[1] in INCLUDE_EXTENSIONS:
            # Any root may include this file
            for item in list(self.files):
                if not os.path.exists(item):
                    continue
                try:
                    await self.parse_file(item)
                except Exception:
                    logger.exception(f"Failed to index {item}")

    def _forget_root(self, path: str) -> None:
        """Drop a deleted root file along with its functions and diagnostics."""
        self.functions.pop(path, None)
        if path in self.files:
            self.files.remove(path)
        self.publish_diagnostics(path_to_uri(path), [])
        logger.info(f"Removed deleted description file: {path}")

    async def parse_file(self, filename: str) -> None:
        """Parse one root file and replace its function table."""
        logger.debug(f"Processing: {filename}")
        parser = HppParser(
            self.settings.include_prefixes,
            on_filename=self._clear_diagnostics,
            load_document=self.documents.get_text_for_path,
        )
        result = parser.parse(filename)
        if not result.success:
            self._publish_parse_error(result.error)
            return

        build = self.builder.build(result.root, filename)
        # Swap in the new mapping; readers never see a half-built table
        self.functions[filename] = build.functions

        for uri, diagnostics in build.diagnostics.items():
            self.publish_diagnostics(uri, diagnostics)

        await self._attach_docs(build.functions)
        logger.debug(f"Processed: {filename}")

    async def _attach_docs(self, functions: Dict[str, FunctionRecord]) -> None:
        for record in list(functions.values()):
            if not os.path.isfile(record.filename):
                continue
            info = await asyncio.to_thread(
                load_function_info, record.filename, self.docstring_parser
            )
            if info is not None:
                record.info = info

    def _clear_diagnostics(self, filename: str) -> None:
        self.publish_diagnostics(path_to_uri(filename), [])

    def _publish_parse_error(self, error: HppParseError) -> None:
        logger.debug(f"Syntax error: {error}")
        self.publish_diagnostics(
            path_to_uri(error.filename),
            [
                Diagnostic(
                    range=error.range,
                    message=error.message,
                    severity=DiagnosticSeverity.Error,
                    source=DIAGNOSTIC_SOURCE,
                )
            ],
        )

    async def close(self) -> None:
        await self.runner.close()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_function(self, name: str) -> Optional[FunctionRecord]:
        return self.queries.get_function(name)

    def on_completion(self, uri: str, name: str) -> List[CompletionItem]:
        return self.queries.completion(uri, name)

    def on_hover(self, uri: str, name: str) -> Optional[Hover]:
        return self.queries.hover(uri, name)

    def on_definition(self, uri: str, name: str) -> List[Location]:
        return self.queries.definition(name)
