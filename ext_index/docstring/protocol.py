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

"""Function documentation types.

Structured form of a script function's header comment. Missing pieces are
left empty and mean "unknown".
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class HeaderStyle(Enum):
    """Header comment conventions the parser understands."""

    BIS = "bis"  # Description: / Parameter(s): / Returns:
    CBA = "cba"  # Arguments: / Return Value: with <TYPE> markers
    PLAIN = "plain"  # Free text only


@dataclass
class Parameter:
    """A function parameter."""

    name: Optional[str] = None
    type: str = "ANY"
    description: str = ""
    optional: bool = False
    default: Optional[str] = None


@dataclass
class ReturnValue:
    """A function return value."""

    type: Optional[str] = None
    description: str = ""


@dataclass
class Description:
    """Summary line and the full description text."""

    short: str = ""
    full: str = ""


@dataclass
class FunctionInfo:
    """Documentation for a script function."""

    description: Description = field(default_factory=Description)
    parameters: List[Parameter] = field(default_factory=list)
    parameter: Optional[Parameter] = None  # single parameter passed directly, not in an array
    returns: ReturnValue = field(default_factory=ReturnValue)
    author: Optional[str] = None
    examples: List[str] = field(default_factory=list)
    public: Optional[bool] = None
    style: HeaderStyle = HeaderStyle.PLAIN
