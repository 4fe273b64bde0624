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

"""Script function header comments.

Example usage:
    from ext_index.docstring import parse_docstring

    info = parse_docstring('''
        Description:
            Heals the unit.
        Parameter(s):
            0: OBJECT - unit
        Returns:
            BOOL
    ''')
    info.description.short  # "Heals the unit."
    info.parameters[0].type  # "OBJECT"
"""

from ext_index.docstring.extractor import extract_header_comment, load_function_info
from ext_index.docstring.parser import DocstringParser, parse_docstring
from ext_index.docstring.protocol import (
    Description,
    FunctionInfo,
    HeaderStyle,
    Parameter,
    ReturnValue,
)

__all__ = [
    "extract_header_comment",
    "load_function_info",
    "DocstringParser",
    "parse_docstring",
    "Description",
    "FunctionInfo",
    "HeaderStyle",
    "Parameter",
    "ReturnValue",
]
