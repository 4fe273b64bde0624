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

"""Description file (config tree) parsing.

Example usage:
    from ext_index.hpp import HppParser

    parser = HppParser(include_prefixes={"\\\\A3\\\\": "C:/Data/"})
    result = parser.parse("mission/description.ext")
    if result.success:
        functions = result.root.body.get_class("CfgFunctions")
    else:
        print(result.error.filename, result.error.range, result.error.message)
"""

from ext_index.hpp.parser import HppParser, parse_file
from ext_index.hpp.protocol import (
    ClassBody,
    ConfigClass,
    FileLocation,
    HppParseError,
    ParseResult,
    Value,
)

__all__ = [
    "HppParser",
    "parse_file",
    "ClassBody",
    "ConfigClass",
    "FileLocation",
    "HppParseError",
    "ParseResult",
    "Value",
]
