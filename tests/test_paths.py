# Copyright 2026 Vijaykumar Singh <singhvjd@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Tests for include prefix resolution and exclude globs."""

import os

from ext_index.paths import (
    apply_include_prefix,
    is_absolute,
    matches_exclude,
    resolve_path,
)


class TestIncludePrefixes:
    def test_no_prefixes(self):
        assert apply_include_prefix("\\A3\\foo.sqf", "/mission", None) is None
        assert apply_include_prefix("\\A3\\foo.sqf", "/mission", {}) is None

    def test_first_declared_match_wins(self):
        prefixes = {"\\A3": "/short", "\\A3\\ui": "/long"}

        assert apply_include_prefix("\\A3\\ui\\x.hpp", "/mission", prefixes) == "/short\\ui\\x.hpp"

    def test_absolute_windows_target(self):
        prefixes = {"\\A3": "C:/Data"}

        assert apply_include_prefix("\\A3\\foo.sqf", "/mission", prefixes) == "C:/Data\\foo.sqf"

    def test_trailing_separator_in_prefix_is_not_reinserted(self):
        prefixes = {"\\A3\\": "C:/Data"}

        assert apply_include_prefix("\\A3\\foo.sqf", "/mission", prefixes) == "C:/Datafoo.sqf"

    def test_relative_target_joins_base_dir(self):
        prefixes = {"\\x\\cba\\": "cba/"}

        resolved = apply_include_prefix("\\x\\cba\\main.hpp", "/mission", prefixes)

        assert resolved == os.path.normpath("/mission/cba/main.hpp")

    def test_resolve_falls_back_to_base_dir(self):
        assert resolve_path("functions/fn_a.sqf", "/mission") == os.path.normpath(
            "/mission/functions/fn_a.sqf"
        )

    def test_is_absolute_either_platform(self):
        assert is_absolute("/usr/share")
        assert is_absolute("C:/Data")
        assert is_absolute("C:\\Data")
        assert not is_absolute("functions/cat")


class TestExcludes:
    def test_double_star_matches_zero_directories(self):
        assert matches_exclude("ignored/description.ext", ["ignored/**/*"])
        assert matches_exclude("ignored/deep/er/description.ext", ["ignored/**/*"])

    def test_non_matching_path(self):
        assert not matches_exclude("missions/description.ext", ["ignored/**/*"])

    def test_leading_dot_slash_and_trailing_double_star(self):
        assert matches_exclude("build/description.ext", ["./build/**"])

    def test_backslash_patterns(self):
        assert matches_exclude("old/description.ext", ["old\\*"])
