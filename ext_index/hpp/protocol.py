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

"""Config tree types.

Defines the data model produced by the description file parser: nested
classes holding child classes and variables, each class tagged with the
file and range it was declared at.
"""

import copy
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from ext_index.lsp.types import Range, empty_range

# A variable is a scalar string or a (possibly nested) array of values
Value = Union[str, List["Value"]]


@dataclass(frozen=True)
class FileLocation:
    """Where a class was declared."""

    filename: Optional[str] = None
    range: Range = field(default_factory=empty_range)


@dataclass
class ClassBody:
    """Children of a class. Keys are lower-cased, names keep their case."""

    classes: Dict[str, "ConfigClass"] = field(default_factory=dict)
    variables: Dict[str, Value] = field(default_factory=dict)

    def get_class(self, name: str) -> Optional["ConfigClass"]:
        return self.classes.get(name.lower())

    def get_variable(self, name: str) -> Optional[Value]:
        return self.variables.get(name.lower())

    def get_string(self, name: str) -> Optional[str]:
        """Return a variable only if it is a non-empty scalar."""
        value = self.variables.get(name.lower())
        if isinstance(value, str) and value:
            return value
        return None

    def copy(self) -> "ClassBody":
        return ClassBody(
            classes={key: child.copy() for key, child in self.classes.items()},
            variables=copy.deepcopy(self.variables),
        )


@dataclass
class ConfigClass:
    """A named class in the config tree."""

    name: str
    body: ClassBody = field(default_factory=ClassBody)
    file_location: FileLocation = field(default_factory=FileLocation)
    extends: Optional[str] = None

    def copy(self) -> "ConfigClass":
        return ConfigClass(
            name=self.name,
            body=self.body.copy(),
            file_location=self.file_location,
            extends=self.extends,
        )


class HppParseError(Exception):
    """Malformed input, with the file and range of the offending token."""

    def __init__(
        self, message: str, filename: Optional[str] = None, range: Optional[Range] = None
    ):
        super().__init__(message)
        self.message = message
        self.filename = filename
        self.range = range or empty_range()

    def __str__(self) -> str:
        if self.filename:
            line = self.range.start.line + 1
            return f"{self.filename}:{line}: {self.message}"
        return self.message


@dataclass
class ParseResult:
    """Outcome of parsing one root file: a tree or an error, never both."""

    root: Optional[ConfigClass] = None
    error: Optional[HppParseError] = None
    files: List[str] = field(default_factory=list)  # every file read, in order

    @property
    def success(self) -> bool:
        return self.error is None
