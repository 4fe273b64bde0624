# Copyright 2026 Vijaykumar Singh <singhvjd@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Tests for header comment extraction and parsing."""

from ext_index.docstring import (
    DocstringParser,
    FunctionInfo,
    HeaderStyle,
    extract_header_comment,
    load_function_info,
    parse_docstring,
)

BIS_HEADER = """
Description:
    Heals the unit.

    Restores health over time.
Parameter(s):
    0: OBJECT - unit to heal
    1 (Optional): NUMBER - amount (default: 1)
Returns:
    BOOL - true when healed
"""


class TestBisStyle:
    def test_sections(self):
        info = parse_docstring(BIS_HEADER)

        assert info.style is HeaderStyle.BIS
        assert info.description.short == "Heals the unit."
        assert info.description.full == "Heals the unit.\n\nRestores health over time."
        assert info.returns.type == "BOOL"
        assert info.returns.description == "true when healed"

    def test_parameters(self):
        info = parse_docstring(BIS_HEADER)

        first, second = info.parameters
        assert first.name is None
        assert first.type == "OBJECT"
        assert first.description == "unit to heal"
        assert not first.optional

        assert second.type == "NUMBER"
        assert second.description == "amount"
        assert second.optional
        assert second.default == "1"

    def test_named_and_selected_parameters(self):
        info = parse_docstring(
            """
Parameter(s):
    _this select 0: STRING - name
    _count: NUMBER - how many
"""
        )

        assert [p.name for p in info.parameters] == [None, "_count"]
        assert [p.type for p in info.parameters] == ["STRING", "NUMBER"]

    def test_bare_this_is_a_single_parameter(self):
        info = parse_docstring("Parameter(s):\n    _this: OBJECT - the unit\n")

        assert info.parameters == []
        assert info.parameter.type == "OBJECT"
        assert info.parameter.description == "the unit"

    def test_none_means_no_parameters(self):
        info = parse_docstring("Parameter(s):\n    None\nReturns:\n    Nothing\n")

        assert info.parameters == []
        assert info.parameter is None

    def test_continuation_lines_extend_description(self):
        info = parse_docstring(
            """
Parameter(s):
    0: ARRAY - positions to visit,
        in order
"""
        )

        assert info.parameters[0].description == "positions to visit, in order"


class TestCbaStyle:
    def test_full_header(self, heal_header):
        comment = extract_header_comment(heal_header)

        info = parse_docstring(comment)

        assert info.style is HeaderStyle.CBA
        assert info.author == "Someone"
        assert info.description.short == "Heals the unit."
        assert info.public is True
        assert info.returns.type == "BOOL"
        assert info.returns.description == "Healed"

        unit, amount = info.parameters
        assert unit.type == "OBJECT"
        assert unit.description == "Unit to heal"
        assert amount.type == "NUMBER"
        assert amount.optional
        assert amount.default == "1"

    def test_examples_are_collected(self):
        info = parse_docstring(
            """
Arguments:
0: Player <OBJECT>

Example:
[player] call ace_common_fnc_foo

Public: No
"""
        )

        assert info.examples == ["[player] call ace_common_fnc_foo"]
        assert info.public is False


class TestPlainAndBroken:
    def test_free_text_only(self):
        info = parse_docstring("Does a thing.\n\nMore details.")

        assert info.style is HeaderStyle.PLAIN
        assert info.description.short == "Does a thing."
        assert info.parameters == []

    def test_empty_comment(self):
        info = DocstringParser().parse("   ")

        assert info == FunctionInfo()

    def test_garbage_never_raises(self):
        info = parse_docstring("Parameter(s):\n<<<\nReturns:\n<>\n")

        assert isinstance(info, FunctionInfo)


class TestExtractor:
    def test_comment_after_line_comments_and_directives(self):
        text = '// header\n#include "script_component.hpp"\n\n/* Heals. */\nx = 1;'

        assert extract_header_comment(text) == " Heals. "

    def test_code_before_comment_means_no_header(self):
        assert extract_header_comment("x = 1;\n/* late */") is None

    def test_unterminated_comment(self):
        assert extract_header_comment("/* never closed") is None

    def test_load_function_info(self, write, heal_header):
        path = write("functions/fn_heal.sqf", heal_header)

        info = load_function_info(str(path))

        assert info.description.short == "Heals the unit."

    def test_load_function_info_without_header(self, write):
        path = write("functions/fn_bare.sqf", "hint 'hi';\n")

        assert load_function_info(str(path)) is None

    def test_load_function_info_missing_file(self, tmp_path):
        assert load_function_info(str(tmp_path / "nope.sqf")) is None
