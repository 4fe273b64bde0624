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

"""Locates the header comment of a script file."""

import logging
from pathlib import Path
from typing import Optional

from ext_index.docstring.parser import DocstringParser
from ext_index.docstring.protocol import FunctionInfo

logger = logging.getLogger(__name__)


def extract_header_comment(text: str) -> Optional[str]:
    """Return the interior of the leading ``/* ... */`` block.

    Only whitespace, ``//`` comments and preprocessor lines may precede the
    block; anything else means the file has no header comment.
    """
    text = text.lstrip("\ufeff")
    pos = 0
    length = len(text)

    while pos < length:
        if text[pos].isspace():
            pos += 1
        elif text.startswith("//", pos) or text[pos] == "#":
            end = text.find("\n", pos)
            if end < 0:
                return None
            pos = end + 1
        elif text.startswith("/*", pos):
            end = text.find("*/", pos + 2)
            if end < 0:
                return None
            return text[pos + 2 : end]
        else:
            return None

    return None


def load_function_info(
    filename: str, parser: Optional[DocstringParser] = None
) -> Optional[FunctionInfo]:
    """Read a script and parse its header comment.

    Returns:
        FunctionInfo, or None when the file is unreadable or has no header
    """
    try:
        text = Path(filename).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug(f"Skipping docs for {filename}: {e}")
        return None

    comment = extract_header_comment(text)
    if comment is None:
        return None

    return (parser or DocstringParser()).parse(comment)
