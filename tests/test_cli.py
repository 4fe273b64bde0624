# Copyright 2026 Vijaykumar Singh <singhvjd@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Tests for the command line."""

import io

import pytest
from rich.console import Console

from ext_index.cli import main

REGISTRY = """\
class CfgFunctions
{
    class TAG
    {
        class Cat
        {
            class heal {};
        };
    };
};
"""


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=300, color_system=None)


def output(console):
    return console.file.getvalue()


class TestCheck:
    def test_clean_workspace(self, write, tmp_path, console):
        write("description.ext", REGISTRY)
        write("functions/Cat/fn_heal.sqf")

        assert main(["check", str(tmp_path)], console=console) == 0
        assert "1 function(s), 0 error(s)" in output(console)

    def test_missing_function_file(self, write, tmp_path, console):
        write("description.ext", REGISTRY)

        assert main(["check", str(tmp_path)], console=console) == 1
        assert "for function TAG_fnc_heal." in output(console)
        assert "description.ext:7:19: error" in output(console)

    def test_syntax_error(self, write, tmp_path, console):
        write("description.ext", "class A {\n")

        assert main(["check", str(tmp_path)], console=console) == 1
        assert "Expected '}', got end of file" in output(console)

    def test_config_file(self, write, tmp_path, console):
        write("description.ext", REGISTRY)
        write("fnc/Cat/fn_heal.sqf")
        config = write("settings.yaml", "functionsDirectory: fnc\n")

        assert main(["check", str(tmp_path), "--config", str(config)], console=console) == 0

    def test_invalid_settings(self, write, tmp_path, console):
        write(".ext-index.yaml", "debounceSeconds: -1\n")

        assert main(["check", str(tmp_path)], console=console) == 2
        assert "Invalid settings" in output(console)

    def test_not_a_directory(self, tmp_path, console):
        assert main(["check", str(tmp_path / "missing")], console=console) == 2


class TestFunctions:
    def test_lists_functions(self, write, tmp_path, console, heal_header):
        write("description.ext", REGISTRY)
        write("functions/Cat/fn_heal.sqf", heal_header)

        assert main(["functions", str(tmp_path)], console=console) == 0
        assert "TAG_fnc_heal" in output(console)
        assert "fn_heal.sqf" in output(console)


def test_no_command_prints_help(capsys):
    assert main([]) == 2
    assert "usage" in capsys.readouterr().out
