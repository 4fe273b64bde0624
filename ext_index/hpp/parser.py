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

r"""Parser for description.ext and its included header files.

Handles the class/variable grammar used by mission and addon configs:

    #include "defines.hpp"

    class CfgFunctions
    {
        class MyTag
        {
            tag = "MYTAG";
            class Utils
            {
                file = "functions\utils";
                class doThing {};
            };
        };
    };

Includes are expanded while tokenizing so every token keeps the file and
position it came from. Other preprocessor directives are skipped, macros
are not expanded.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional

from ext_index.hpp.protocol import (
    ClassBody,
    ConfigClass,
    FileLocation,
    HppParseError,
    ParseResult,
    Value,
)
from ext_index.lsp.types import Range, empty_range, make_range
from ext_index.paths import apply_include_prefix, join

logger = logging.getLogger(__name__)

# Characters that always form a token of their own
PUNCTUATION = frozenset("{}[];=:,")

# Tokens kinds
WORD = "word"
STRING = "string"
PUNCT = "punct"
EOF = "eof"

MAX_INCLUDE_DEPTH = 32


@dataclass
class Token:
    """A lexical token tagged with its origin."""

    kind: str
    text: str
    filename: str
    line: int
    column: int
    end_line: int
    end_column: int
    value: Optional[str] = None  # unquoted contents for strings

    @property
    def range(self) -> Range:
        return make_range(self.line, self.column, self.end_line, self.end_column)

    def is_punct(self, text: str) -> bool:
        return self.kind == PUNCT and self.text == text

    def describe(self) -> str:
        if self.kind == EOF:
            return "end of file"
        return f"'{self.text}'"


class _Lexer:
    """Turns one file's text into tokens, expanding includes recursively."""

    def __init__(self, parser: "HppParser", filename: str, text: str, depth: int):
        self.parser = parser
        self.filename = filename
        self.text = text.lstrip("\ufeff")
        self.depth = depth
        self.pos = 0
        self.line = 0
        self.column = 0

    def _error(self, message: str, line: int, column: int, end_column: int) -> HppParseError:
        return HppParseError(message, self.filename, make_range(line, column, line, end_column))

    def _peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        return self.text[index] if index < len(self.text) else ""

    def _advance(self, count: int = 1) -> str:
        consumed = self.text[self.pos : self.pos + count]
        for char in consumed:
            if char == "\n":
                self.line += 1
                self.column = 0
            else:
                self.column += 1
        self.pos += count
        return consumed

    def _at_line_start(self) -> bool:
        start = self.text.rfind("\n", 0, self.pos) + 1
        return not self.text[start : self.pos].strip()

    def tokenize(self, tokens: List[Token]) -> None:
        while self.pos < len(self.text):
            char = self._peek()

            if char.isspace():
                self._advance()
            elif char == "/" and self._peek(1) == "/":
                while self.pos < len(self.text) and self._peek() != "\n":
                    self._advance()
            elif char == "/" and self._peek(1) == "*":
                self._skip_block_comment()
            elif char == "#" and self._at_line_start():
                self._directive(tokens)
            elif char in ('"', "'"):
                tokens.append(self._string(char))
            elif char == "+" and self._peek(1) == "=":
                tokens.append(self._make(PUNCT, 2))
            elif char in PUNCTUATION:
                tokens.append(self._make(PUNCT, 1))
            else:
                tokens.append(self._word())

    def _make(self, kind: str, length: int) -> Token:
        line, column = self.line, self.column
        text = self._advance(length)
        return Token(kind, text, self.filename, line, column, self.line, self.column)

    def _skip_block_comment(self) -> None:
        line, column = self.line, self.column
        end = self.text.find("*/", self.pos + 2)
        if end < 0:
            raise self._error("Unterminated block comment", line, column, column + 2)
        self._advance(end + 2 - self.pos)

    def _string(self, quote: str) -> Token:
        line, column = self.line, self.column
        start = self.pos
        self._advance()
        chars = []
        while True:
            if self.pos >= len(self.text):
                raise self._error("Unterminated string", line, column, column + 1)
            char = self._advance()
            if char == quote:
                # A doubled quote is an escaped quote
                if self._peek() == quote:
                    self._advance()
                    chars.append(quote)
                    continue
                break
            chars.append(char)
        return Token(
            STRING,
            self.text[start : self.pos],
            self.filename,
            line,
            column,
            self.line,
            self.column,
            value="".join(chars),
        )

    def _word(self) -> Token:
        line, column = self.line, self.column
        start = self.pos
        while self.pos < len(self.text):
            char = self._peek()
            if char.isspace() or char in PUNCTUATION or char in ('"', "'"):
                break
            if char == "/" and self._peek(1) in ("/", "*"):
                break
            if char == "+" and self._peek(1) == "=":
                break
            self._advance()
        return Token(WORD, self.text[start : self.pos], self.filename, line, column, self.line, self.column)

    def _directive(self, tokens: List[Token]) -> None:
        line, column = self.line, self.column
        parts = []
        while self.pos < len(self.text):
            char = self._peek()
            if char == "\\" and self._peek(1) == "\n":
                self._advance(2)
                continue
            if char == "\\" and self._peek(1) == "\r" and self._peek(2) == "\n":
                self._advance(3)
                continue
            if char == "\n":
                break
            parts.append(self._advance())
        directive = "".join(parts).strip()
        end_column = column + len(directive)

        if not directive.startswith("#include"):
            logger.debug(f"Skipping directive in {self.filename}:{line + 1}: {directive}")
            return

        target = directive[len("#include") :].strip()
        if len(target) < 2 or (target[0], target[-1]) not in (('"', '"'), ("<", ">")):
            raise self._error(f"Malformed include: {directive}", line, column, end_column)

        error_range = make_range(line, column, line, end_column)
        self.parser._include(target[1:-1], self.filename, error_range, self.depth, tokens)


class HppParser:
    """Parses a root description file into a ConfigClass tree.

    Collaborators are injected per session:

    - ``on_filename`` is called with every file the parser opens, before
      it is read, so stale diagnostics for it can be cleared.
    - ``load_document`` may return the text of an open editor buffer; when
      it returns None the file is read from disk.
    """

    def __init__(
        self,
        include_prefixes: Optional[Mapping[str, str]] = None,
        on_filename: Optional[Callable[[str], None]] = None,
        load_document: Optional[Callable[[str], Optional[str]]] = None,
    ):
        self.include_prefixes: Dict[str, str] = dict(include_prefixes or {})
        self.on_filename = on_filename
        self.load_document = load_document
        self._root_dir = ""
        self._include_stack: List[str] = []
        self._files: List[str] = []
        self._tokens: List[Token] = []
        self._index = 0

    def parse(self, filename: str) -> ParseResult:
        """Parse a root file and everything it includes.

        Returns:
            ParseResult holding either the root class or the first error
        """
        filename = os.path.abspath(filename)
        self._root_dir = os.path.dirname(filename)
        self._include_stack = []
        self._files = []

        try:
            self._tokens = []
            self._read_file(filename, 0, self._tokens, None)
            self._index = 0
            root = ConfigClass(name="", file_location=FileLocation(filename, empty_range()))
            self._parse_body(root.body, [root.body], closing=False)
        except HppParseError as e:
            if e.filename is None:
                e.filename = filename
            logger.debug(f"Parse failed: {e}")
            return ParseResult(error=e, files=list(self._files))

        return ParseResult(root=root, files=list(self._files))

    def parse_text(self, filename: str, text: str) -> ParseResult:
        """Parse ``text`` as if it were the contents of ``filename``."""
        previous = self.load_document

        def load(path: str) -> Optional[str]:
            if os.path.abspath(path) == os.path.abspath(filename):
                return text
            return previous(path) if previous else None

        self.load_document = load
        try:
            return self.parse(filename)
        finally:
            self.load_document = previous

    # ------------------------------------------------------------------
    # Files and includes
    # ------------------------------------------------------------------

    def _read_file(
        self, filename: str, depth: int, tokens: List[Token], error_range: Optional[Range]
    ) -> None:
        if self.on_filename:
            self.on_filename(filename)
        self._files.append(filename)

        text = self.load_document(filename) if self.load_document else None
        if text is None:
            try:
                text = Path(filename).read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                raise HppParseError(
                    f"Failed to read {filename}: {e.strerror or e}",
                    self._include_stack[-1] if self._include_stack else filename,
                    error_range or empty_range(),
                )

        self._include_stack.append(filename)
        try:
            _Lexer(self, filename, text, depth).tokenize(tokens)
        finally:
            self._include_stack.pop()

    def _include(
        self, target: str, including_file: str, error_range: Range, depth: int, tokens: List[Token]
    ) -> None:
        if depth >= MAX_INCLUDE_DEPTH:
            raise HppParseError("Include nesting is too deep", including_file, error_range)

        path = self._resolve_include(target, including_file)
        if path in self._include_stack:
            raise HppParseError(f"Recursive include of {target}", including_file, error_range)
        in_memory = self.load_document(path) if self.load_document else None
        if in_memory is None and not os.path.isfile(path):
            raise HppParseError(f"Failed to find include file {path}", including_file, error_range)

        logger.debug(f"Including {path} from {including_file}")
        self._read_file(path, depth + 1, tokens, error_range)

    def _resolve_include(self, target: str, including_file: str) -> str:
        resolved = apply_include_prefix(target, self._root_dir, self.include_prefixes)
        if resolved is not None:
            return resolved
        return join(os.path.dirname(including_file), target)

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------

    def _peek(self) -> Token:
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        last = self._tokens[-1] if self._tokens else None
        if last is None:
            return Token(EOF, "", self._files[0] if self._files else "", 0, 0, 0, 0)
        return Token(EOF, "", last.filename, last.end_line, last.end_column, last.end_line, last.end_column)

    def _next(self) -> Token:
        token = self._peek()
        if token.kind != EOF:
            self._index += 1
        return token

    def _expect(self, text: str) -> Token:
        token = self._next()
        if not token.is_punct(text):
            raise HppParseError(f"Expected '{text}', got {token.describe()}", token.filename, token.range)
        return token

    def _expect_word(self, what: str) -> Token:
        token = self._next()
        if token.kind != WORD:
            raise HppParseError(f"Expected {what}, got {token.describe()}", token.filename, token.range)
        return token

    def _parse_body(self, body: ClassBody, scopes: List[ClassBody], closing: bool) -> None:
        while True:
            token = self._peek()
            if token.kind == EOF:
                if closing:
                    raise HppParseError("Expected '}', got end of file", token.filename, token.range)
                return
            if token.is_punct("}"):
                if not closing:
                    raise HppParseError("Unexpected '}'", token.filename, token.range)
                return
            if token.is_punct(";"):
                self._next()
                continue
            if token.kind != WORD:
                raise HppParseError(f"Unexpected {token.describe()}", token.filename, token.range)

            if token.text == "class":
                self._next()
                self._parse_class(body, scopes)
            elif token.text == "delete":
                self._next()
                name = self._expect_word("class name")
                self._expect(";")
                body.classes.pop(name.text.lower(), None)
            else:
                self._parse_variable(body)

    def _parse_class(self, body: ClassBody, scopes: List[ClassBody]) -> None:
        name = self._expect_word("class name")
        key = name.text.lower()
        extends = None

        if self._peek().is_punct(":"):
            self._next()
            extends = self._expect_word("base class name").text

        location = FileLocation(name.filename, name.range)
        existing = body.classes.get(key)

        if self._peek().is_punct(";"):
            # Forward declaration
            self._next()
            if existing is None:
                body.classes[key] = self._new_class(name.text, location, extends, scopes)
            return

        self._expect("{")
        if existing is None:
            existing = self._new_class(name.text, location, extends, scopes)
            body.classes[key] = existing
        else:
            existing.file_location = location
            if extends:
                existing.extends = extends

        self._parse_body(existing.body, scopes + [existing.body], closing=True)
        self._expect("}")
        self._expect(";")

    def _new_class(
        self, name: str, location: FileLocation, extends: Optional[str], scopes: List[ClassBody]
    ) -> ConfigClass:
        cls = ConfigClass(name=name, file_location=location, extends=extends)
        if extends:
            # Base classes are looked up from the innermost scope outwards
            for scope in reversed(scopes):
                base = scope.get_class(extends)
                if base is not None:
                    cls.body = base.body.copy()
                    break
            else:
                logger.debug(f"Base class {extends} of {name} is not defined in this tree")
        return cls

    def _parse_variable(self, body: ClassBody) -> None:
        name = self._next()
        key = name.text.lower()
        is_array = False

        if self._peek().is_punct("["):
            self._next()
            self._expect("]")
            is_array = True

        operator = self._next()
        if not (operator.is_punct("=") or operator.is_punct("+=")):
            raise HppParseError(
                f"Expected '=' after {name.text}, got {operator.describe()}",
                operator.filename,
                operator.range,
            )
        if operator.text == "+=" and not is_array:
            raise HppParseError("'+=' is only valid for arrays", operator.filename, operator.range)

        if is_array:
            if not self._peek().is_punct("{"):
                token = self._peek()
                raise HppParseError(
                    f"Expected '{{' for array {name.text}, got {token.describe()}",
                    token.filename,
                    token.range,
                )
            value = self._parse_array()
            if operator.text == "+=":
                current = body.variables.get(key)
                value = (list(current) if isinstance(current, list) else []) + value
        else:
            value = self._parse_scalar()

        self._expect(";")
        body.variables[key] = value

    def _parse_scalar(self) -> str:
        parts = []
        while True:
            token = self._peek()
            if token.kind == EOF or token.is_punct(";") or token.is_punct("}"):
                break
            if token.kind == PUNCT and token.text in "{[]":
                raise HppParseError(f"Unexpected {token.describe()}", token.filename, token.range)
            parts.append(self._next())

        if not parts:
            token = self._peek()
            raise HppParseError(f"Expected value, got {token.describe()}", token.filename, token.range)
        if len(parts) == 1 and parts[0].kind == STRING:
            return parts[0].value
        return " ".join(part.text for part in parts)

    def _parse_array(self) -> List[Value]:
        self._expect("{")
        items: List[Value] = []
        while True:
            token = self._peek()
            if token.is_punct("}"):
                self._next()
                return items
            if token.is_punct("{"):
                items.append(self._parse_array())
            else:
                items.append(self._parse_element())

            separator = self._peek()
            if separator.is_punct(","):
                self._next()
            elif not separator.is_punct("}"):
                raise HppParseError(
                    f"Expected ',' or '}}', got {separator.describe()}",
                    separator.filename,
                    separator.range,
                )

    def _parse_element(self) -> str:
        parts = []
        while True:
            token = self._peek()
            if token.kind == EOF:
                raise HppParseError("Expected '}', got end of file", token.filename, token.range)
            if token.is_punct(",") or token.is_punct("}"):
                break
            if token.kind == PUNCT and token.text in "{;=[]":
                raise HppParseError(f"Unexpected {token.describe()}", token.filename, token.range)
            parts.append(self._next())

        if not parts:
            token = self._peek()
            raise HppParseError(f"Expected value, got {token.describe()}", token.filename, token.range)
        if len(parts) == 1 and parts[0].kind == STRING:
            return parts[0].value
        return " ".join(part.text for part in parts)


def parse_file(
    filename: str,
    include_prefixes: Optional[Mapping[str, str]] = None,
    on_filename: Optional[Callable[[str], None]] = None,
    load_document: Optional[Callable[[str], Optional[str]]] = None,
) -> ParseResult:
    """Convenience wrapper around :class:`HppParser`."""
    return HppParser(include_prefixes, on_filename, load_document).parse(filename)
