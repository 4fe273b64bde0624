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

"""Function index types."""

import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ext_index.docstring.protocol import FunctionInfo
from ext_index.hpp.protocol import ConfigClass, FileLocation
from ext_index.lsp.types import Diagnostic


@dataclass
class FunctionRecord:
    """A function declared in a root file's registry.

    Unique per (root file, lower-cased qualified name).
    """

    name: str  # qualified, e.g. TAG_fnc_doThing
    filename: str  # resolved path of the script
    root: str = ""  # root file that declared it
    location: FileLocation = field(default_factory=FileLocation)
    info: Optional[FunctionInfo] = None  # attached after indexing

    @property
    def key(self) -> str:
        return self.name.lower()

    @property
    def exists(self) -> bool:
        return os.path.isfile(self.filename)


# root file -> lower-cased qualified name -> record
FunctionTable = Dict[str, Dict[str, FunctionRecord]]

# file URI -> diagnostics; an empty list clears earlier reports
DiagnosticBatch = Dict[str, List[Diagnostic]]


@dataclass(frozen=True)
class EffectiveContext:
    """Naming and path defaults inherited down tag -> category -> function."""

    tag: str
    category_tag: Optional[str] = None
    category_path: Optional[str] = None

    @classmethod
    def for_tag(cls, tag_class: ConfigClass) -> "EffectiveContext":
        return cls(tag=tag_class.body.get_string("tag") or tag_class.name)

    def for_category(
        self, category_class: ConfigClass, functions_directory: str
    ) -> "EffectiveContext":
        body = category_class.body
        return EffectiveContext(
            tag=self.tag,
            category_tag=body.get_string("tag") or self.tag,
            category_path=body.get_string("file")
            or os.path.join(functions_directory, category_class.name),
        )


@dataclass
class BuildResult:
    """Function table and diagnostics for one root file."""

    functions: Dict[str, FunctionRecord] = field(default_factory=dict)
    diagnostics: DiagnosticBatch = field(default_factory=dict)

    @property
    def count(self) -> int:
        return len(self.functions)

    @property
    def missing(self) -> List[FunctionRecord]:
        return [record for record in self.functions.values() if not record.exists]
