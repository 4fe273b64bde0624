# Copyright 2026 Vijaykumar Singh <singhvjd@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Shared fixtures for building throwaway mission workspaces."""

from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture
def write(tmp_path: Path) -> Callable[..., Path]:
    """Write a file relative to the workspace root, creating directories."""

    def _write(relative: str, text: str = "") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def heal_header() -> str:
    return """\
/*
 * Author: Someone
 * Heals the unit.
 *
 * Arguments:
 * 0: Unit to heal <OBJECT>
 * 1: Amount <NUMBER> (default: 1)
 *
 * Return Value:
 * Healed <BOOL>
 *
 * Public: Yes
 */
params ["_unit", ["_amount", 1]];
"""
