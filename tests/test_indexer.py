# Copyright 2026 Vijaykumar Singh <singhvjd@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Tests for root file discovery and workspace indexing."""

import pytest

from ext_index.config import ExtIndexSettings
from ext_index.indexer import WorkspaceIndexer


class TestDiscover:
    def test_finds_nested_root_files(self, write, tmp_path):
        write("description.ext")
        write("missions/coop/description.ext")
        write("missions/coop/notes.txt")

        files = WorkspaceIndexer().discover(tmp_path)

        assert files == [
            str(tmp_path / "description.ext"),
            str(tmp_path / "missions" / "coop" / "description.ext"),
        ]

    def test_skips_hidden_directories(self, write, tmp_path):
        write(".git/description.ext")
        write(".vscode/sub/description.ext")

        assert WorkspaceIndexer().discover(tmp_path) == []

    def test_exclude_globs(self, write, tmp_path):
        write("ignored/description.ext")
        write("ignored/sub/description.ext")
        kept = write("kept/description.ext")
        settings = ExtIndexSettings(exclude=["ignored/**/*"])

        assert WorkspaceIndexer(settings).discover(tmp_path) == [str(kept)]

    def test_explicit_files_first_without_duplicates(self, write, tmp_path):
        root = write("description.ext")
        nested = write("sub/description.ext")
        settings = ExtIndexSettings(description_files=["sub/description.ext"])

        assert WorkspaceIndexer(settings).discover(tmp_path) == [str(nested), str(root)]

    def test_discovery_off_uses_conventional_root(self, write, tmp_path):
        root = write("description.ext")
        write("sub/description.ext")
        settings = ExtIndexSettings(discover_description_files=False)

        assert WorkspaceIndexer(settings).discover(tmp_path) == [str(root)]

    def test_discovery_off_without_root(self, write, tmp_path):
        write("sub/description.ext")
        settings = ExtIndexSettings(discover_description_files=False)

        assert WorkspaceIndexer(settings).discover(tmp_path) == []


class TestIndex:
    @pytest.mark.asyncio
    async def test_failure_in_one_root_does_not_stop_others(self, write, tmp_path):
        first = write("a/description.ext")
        second = write("b/description.ext")
        parsed = []

        async def parse(filename):
            parsed.append(filename)
            if filename == str(first):
                raise RuntimeError("boom")

        files = await WorkspaceIndexer().index(tmp_path, parse)

        assert parsed == [str(first), str(second)]
        assert files == [str(first), str(second)]

    @pytest.mark.asyncio
    async def test_missing_explicit_file_is_skipped(self, tmp_path):
        settings = ExtIndexSettings(description_files=["gone/description.ext"])
        parsed = []

        async def parse(filename):
            parsed.append(filename)

        files = await WorkspaceIndexer(settings).index(tmp_path, parse)

        assert parsed == []
        assert len(files) == 1
