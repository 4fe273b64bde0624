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

"""Function index and diagnostics for description.ext files.

Reads a mission or addon's root ``description.ext`` with its includes,
interprets the ``CfgFunctions`` registry and answers editor queries about
the functions it declares.

Package Structure:
    hpp/             - Config tree parser (classes, variables, includes)
    functions/       - Function registry builder
    docstring/       - Header comment extraction and parsing
    lsp/             - Editor protocol types and open documents
    config.py        - Settings and constants
    paths.py         - Include prefix resolution
    indexer.py       - Root file discovery
    runner.py        - Debounced per-document reparse
    query.py         - Completion, hover and definition
    documentation.py - description.ext property documentation
    module.py        - Workspace session tying it together
    watcher.py       - Filesystem watching
    cli.py           - Command line

Usage:
    from ext_index import ExtModule, ExtIndexSettings

    module = ExtModule(ExtIndexSettings(), publish_diagnostics=publish)
    await module.index_workspace("/path/to/mission")
    module.on_hover("file:///path/to/mission/init.sqf", "TAG_fnc_doThing")
"""

from ext_index.config import ExtIndexSettings, load_settings, load_workspace_settings
from ext_index.documentation import DocumentationEntry, DocumentationTable
from ext_index.functions import FunctionIndexBuilder, FunctionRecord
from ext_index.hpp import HppParser, ParseResult
from ext_index.indexer import WorkspaceIndexer
from ext_index.module import ExtModule
from ext_index.query import FunctionQueries
from ext_index.runner import ReparseCoordinator

__version__ = "0.1.0"

__all__ = [
    "ExtIndexSettings",
    "load_settings",
    "load_workspace_settings",
    "DocumentationEntry",
    "DocumentationTable",
    "FunctionIndexBuilder",
    "FunctionRecord",
    "HppParser",
    "ParseResult",
    "WorkspaceIndexer",
    "ExtModule",
    "FunctionQueries",
    "ReparseCoordinator",
]
