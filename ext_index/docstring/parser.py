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

"""Header comment parsers for script functions.

Supports the two conventions found in the wild:

BIS style::

    Description:
        Heals the unit.
    Parameter(s):
        0: OBJECT - unit to heal
        1 (Optional): NUMBER - amount (default: 1)
    Returns:
        BOOL - true when healed

CBA/ACE style::

    Author: Someone
    Heals the unit.

    Arguments:
    0: Unit to heal <OBJECT>
    1: Amount <NUMBER> (default: 1)

    Return Value:
    Healed <BOOL>

    Public: Yes
"""

import logging
import re
from typing import List, Optional, Tuple

from ext_index.docstring.protocol import (
    Description,
    FunctionInfo,
    HeaderStyle,
    Parameter,
    ReturnValue,
)

logger = logging.getLogger(__name__)

DESCRIPTION = "_description"

SECTION_REGEX = re.compile(
    r"^\s*(Author\(s\)|Authors?|Description|Parameter\(s\)|Parameters?|Params|"
    r"Arguments?|Return Value|Returns?|Examples?|Public|Notes?|Function|File)\s*:\s*(.*)$",
    re.IGNORECASE,
)

# Sections whose value sits on the header line; following lines describe the function
INLINE_SECTIONS = {"author", "author(s)", "authors", "public", "function", "file"}

CBA_PARAM_REGEX = re.compile(r"^(\d+)\s*:\s*(.*?)\s*<([^>]*)>\s*(.*)$")

BIS_PARAM_REGEX = re.compile(
    r"^(?:(\d+)|_this(?:\s+select\s+(\d+))?|(_\w+))"
    r"\s*(\((?:optional|opt)[^)]*\))?\s*:\s*(.*)$",
    re.IGNORECASE,
)

DEFAULT_REGEX = re.compile(
    r"(?:[\(\[]\s*(?:optional\s*[,;]?\s*)?defaults?(?:\s+(?:value|is|to))?\s*[:=]?"
    r"|\bdefaults?(?:\s+(?:value|is|to))?\s*[:=])\s*(.+?)\s*[\)\]]?\s*$",
    re.IGNORECASE,
)

OPTIONAL_REGEX = re.compile(r"\(\s*optional\s*\)|\boptional\b", re.IGNORECASE)

KNOWN_TYPES = {
    "any",
    "array",
    "bool",
    "boolean",
    "code",
    "config",
    "control",
    "display",
    "group",
    "hashmap",
    "location",
    "namespace",
    "none",
    "nothing",
    "number",
    "object",
    "position",
    "scalar",
    "side",
    "string",
    "task",
    "void",
}

TYPE_REGEX = re.compile(r"^[A-Z][A-Z0-9_]*(?:\s*(?:,|\||/|\bor\b)\s*[A-Z][A-Z0-9_]*)*$")


def _clean_lines(comment: str) -> List[str]:
    """Strip comment decorations such as leading ``*`` gutters."""
    lines = []
    for line in comment.replace("\r\n", "\n").replace("\r", "\n").split("\n"):
        line = re.sub(r"^\s*\*+(?!/)\s?", "", line)
        lines.append(line.rstrip())
    return lines


def _looks_like_type(text: str) -> bool:
    text = text.strip()
    if not text:
        return False
    return text.lower() in KNOWN_TYPES or bool(TYPE_REGEX.match(text))


def _split_default(text: str) -> Tuple[str, Optional[str]]:
    """Pull a ``(default: X)`` note out of a description."""
    match = DEFAULT_REGEX.search(text)
    if not match:
        return text, None
    default = match.group(1).strip().rstrip(").]").strip()
    remainder = text[: match.start()].strip().rstrip("(,[").strip()
    return remainder, default or None


def _strip_optional(text: str) -> Tuple[str, bool]:
    if OPTIONAL_REGEX.search(text):
        cleaned = OPTIONAL_REGEX.sub("", text).strip(" ,;-")
        return re.sub(r"\(\s*\)", "", cleaned).strip(), True
    return text, False


class DocstringParser:
    """Parses the body of a header comment into a FunctionInfo.

    Parsing never raises: anything that goes wrong leaves the fields
    gathered so far and the rest unknown.
    """

    def parse(self, comment: str) -> FunctionInfo:
        info = FunctionInfo()
        if not comment or not comment.strip():
            return info

        try:
            self._parse(comment, info)
        except Exception as e:
            logger.debug(f"Failed to parse header comment: {e}")
        return info

    def _parse(self, comment: str, info: FunctionInfo) -> None:
        sections = self._split_sections(_clean_lines(comment))
        style = HeaderStyle.PLAIN
        description_parts = []

        for name, lines in sections:
            key = name.lower()
            content = "\n".join(lines).strip()

            if key == DESCRIPTION or key == "description":
                if content:
                    description_parts.append(content)
                if key == "description":
                    style = HeaderStyle.BIS

            elif key.startswith("author"):
                info.author = lines[0].strip() if lines and lines[0].strip() else None

            elif key.startswith("param") or key.startswith("argument"):
                if key.startswith("argument"):
                    style = HeaderStyle.CBA
                elif style is HeaderStyle.PLAIN:
                    style = HeaderStyle.BIS
                if self._parse_parameters(lines, info):
                    style = HeaderStyle.CBA

            elif key.startswith("return"):
                if key == "return value":
                    style = HeaderStyle.CBA
                info.returns = self._parse_returns(content)

            elif key.startswith("example"):
                if content:
                    info.examples.append(content)

            elif key == "public":
                value = content.lower()
                if value in ("yes", "true"):
                    info.public = True
                elif value in ("no", "false"):
                    info.public = False

        info.description = self._build_description(description_parts)
        info.style = style

    def _split_sections(self, lines: List[str]) -> List[Tuple[str, List[str]]]:
        """Split cleaned lines into ``(section, lines)`` pairs in order."""
        sections: List[Tuple[str, List[str]]] = []
        current_name = DESCRIPTION
        current: List[str] = []

        for line in lines:
            match = SECTION_REGEX.match(line)
            if match:
                sections.append((current_name, current))
                current_name = match.group(1)
                inline = match.group(2).strip()
                current = [inline] if inline else []
                if current_name.lower() in INLINE_SECTIONS:
                    sections.append((current_name, current))
                    current_name = DESCRIPTION
                    current = []
            else:
                current.append(line)

        sections.append((current_name, current))
        return [(name, body) for name, body in sections if name != DESCRIPTION or body]

    def _build_description(self, parts: List[str]) -> Description:
        text = "\n\n".join(part for part in parts if part)
        if not text:
            return Description()
        paragraphs = [p for p in re.split(r"\n\s*\n", text) if p.strip()]
        short = " ".join(line.strip() for line in paragraphs[0].split("\n") if line.strip())
        full = "\n".join(line.strip() for line in text.split("\n")).strip()
        return Description(short=short, full=full)

    def _parse_parameters(self, lines: List[str], info: FunctionInfo) -> bool:
        """Parse a parameters section.

        Returns:
            True if any entry used the CBA ``<TYPE>`` notation
        """
        current: Optional[Parameter] = None
        saw_cba = False

        for raw in lines:
            line = raw.strip()
            if not line:
                current = None
                continue

            cba = CBA_PARAM_REGEX.match(line)
            if cba:
                saw_cba = True
                current = self._cba_parameter(cba)
                info.parameters.append(current)
                continue

            bis = BIS_PARAM_REGEX.match(line)
            if bis:
                index, select, name, optional, rest = bis.groups()
                current = self._bis_parameter(name, optional, rest)
                if index is None and select is None and name is None:
                    # Bare _this: the argument is passed directly
                    info.parameter = current
                else:
                    info.parameters.append(current)
                continue

            if current is not None:
                current.description = f"{current.description} {line}".strip()
            elif line.lower().rstrip(".") in ("none", "nothing", "-"):
                continue
            elif info.parameter is None and not info.parameters:
                info.parameter = self._bis_parameter(None, None, line)
                current = info.parameter

        return saw_cba

    def _cba_parameter(self, match: re.Match) -> Parameter:
        _index, description, type_text, rest = match.groups()
        rest, default = _split_default(rest)
        rest, optional = _strip_optional(rest)
        description, is_optional = _strip_optional(description)
        return Parameter(
            name=None,
            type=type_text.strip() or "ANY",
            description=" ".join(part for part in (description, rest) if part),
            optional=optional or is_optional or default is not None,
            default=default,
        )

    def _bis_parameter(self, name: Optional[str], optional: Optional[str], rest: str) -> Parameter:
        rest, default = _split_default(rest)
        rest, is_optional = _strip_optional(rest)

        type_text, description = "ANY", rest
        if " - " in rest:
            head, tail = rest.split(" - ", 1)
            if _looks_like_type(head):
                type_text, description = head.strip(), tail.strip()
        elif _looks_like_type(rest):
            type_text, description = rest.strip(), ""

        return Parameter(
            name=name,
            type=type_text,
            description=description,
            optional=bool(optional) or is_optional or default is not None,
            default=default,
        )

    def _parse_returns(self, content: str) -> ReturnValue:
        text = " ".join(line.strip() for line in content.split("\n") if line.strip())
        if not text:
            return ReturnValue()

        cba = re.match(r"^(.*?)\s*<([^>]*)>\s*(.*)$", text)
        if cba:
            description = " ".join(p for p in (cba.group(1), cba.group(3)) if p)
            return ReturnValue(type=cba.group(2).strip() or None, description=description)

        if " - " in text:
            head, tail = text.split(" - ", 1)
            if _looks_like_type(head):
                return ReturnValue(type=head.strip(), description=tail.strip())

        if _looks_like_type(text):
            return ReturnValue(type=text)

        first = text.split()[0].rstrip(",.:;")
        if _looks_like_type(first):
            return ReturnValue(type=first, description=text[len(first) :].strip(" ,.:;-"))

        return ReturnValue(description=text)


_default_parser = DocstringParser()


def parse_docstring(comment: str) -> FunctionInfo:
    """Parse a header comment body with the shared parser."""
    return _default_parser.parse(comment)
