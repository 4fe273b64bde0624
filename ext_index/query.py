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

"""Completion, hover and definition over the function index.

Reads only. Each root's mapping is replaced wholesale on re-index, so
iterating a snapshot of the outer table is safe during a rebuild.
"""

import logging
import posixpath
from typing import List, Optional

from ext_index.config import ROOT_FILENAME, SCRIPT_EXTENSIONS
from ext_index.docstring.protocol import FunctionInfo
from ext_index.documentation import DocumentationTable
from ext_index.functions.protocol import FunctionRecord, FunctionTable
from ext_index.lsp.types import (
    CompletionItem,
    CompletionItemKind,
    Hover,
    Location,
    make_range,
    markdown_hover,
    path_to_uri,
)

logger = logging.getLogger(__name__)

def is_script_document(uri: str) -> bool:
    return posixpath.splitext(uri)[1].lower() in SCRIPT_EXTENSIONS


def is_root_document(uri: str) -> bool:
    return posixpath.basename(uri).lower() == ROOT_FILENAME


def render_signature(record: FunctionRecord) -> str:
    """Call signature such as ``(function) BOOL = [_unit,_amount=1] call TAG_fnc_heal``."""
    info = record.info
    signature = "(function)"
    if info and info.returns.type:
        signature += f" {info.returns.type} ="

    args = "ANY"
    if info:
        if info.parameter:
            args = info.parameter.type
        elif info.parameters:
            names = []
            for index, param in enumerate(info.parameters):
                name = param.name or f"_{param.type.lower()}{index}"
                if param.optional and param.default:
                    name = f"{name}={param.default}"
                names.append(name)
            args = "[" + ",".join(names) + "]"

    return f"{signature} {args} call {record.name}"


def render_parameters(info: FunctionInfo) -> str:
    lines = []
    for index, param in enumerate(info.parameters):
        if param.name:
            lines.append(f"{index}. {param.name} ({param.type}) - {param.description}")
        else:
            lines.append(f"{index}. {param.type} - {param.description}")
    return "\n".join(lines)


def render_function_hover(record: FunctionRecord) -> str:
    contents = ""
    info = record.info

    if info and info.description.short:
        contents += info.description.short + "\n"

    if info and info.parameters:
        contents += "\n" + render_parameters(info) + "\n\n"

    contents += f"```sqf\n{render_signature(record)}\n```"
    return contents


class FunctionQueries:
    """Answers editor queries from the function table and property docs."""

    def __init__(self, functions: FunctionTable, documentation: DocumentationTable):
        self.functions = functions
        self.documentation = documentation

    def get_function(self, name: str) -> Optional[FunctionRecord]:
        """First function with this qualified name across all roots."""
        key = name.lower()
        for table in list(self.functions.values()):
            record = table.get(key)
            if record:
                return record
        return None

    def completion(self, uri: str, prefix: str) -> List[CompletionItem]:
        items: List[CompletionItem] = []

        if is_script_document(uri):
            for table in list(self.functions.values()):
                for key, record in table.items():
                    if record.name.startswith(prefix):
                        items.append(
                            CompletionItem(
                                label=record.name,
                                kind=CompletionItemKind.Function,
                                data=key,
                                filter_text=record.name,
                                insert_text=record.name,
                                documentation=(
                                    record.info.description.short if record.info else None
                                ),
                            )
                        )

        if is_root_document(uri):
            for entry in self.documentation.search(prefix):
                template = entry.insert_text()
                items.append(
                    CompletionItem(
                        label=entry.name,
                        kind=CompletionItemKind.Property,
                        data=entry.name.lower(),
                        filter_text=template,
                        insert_text=template,
                        documentation=entry.description,
                    )
                )

        return items

    def hover(self, uri: str, name: str) -> Optional[Hover]:
        if is_script_document(uri):
            record = self.get_function(name)
            if record:
                return markdown_hover(render_function_hover(record))

        if is_root_document(uri):
            entry = self.documentation.get(name)
            if entry:
                return markdown_hover(f"{entry.description} _([more info]({entry.link}))_")

        return None

    def definition(self, name: str) -> List[Location]:
        record = self.get_function(name)
        if not record:
            return []
        return [Location(uri=path_to_uri(record.filename), range=make_range(0, 0, 0, 1))]
