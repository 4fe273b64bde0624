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

"""Workspace discovery of root description files.

Root files come from the explicit ``description_files`` setting and,
when discovery is on, from every ``description.ext`` under the workspace.
Hidden directories and exclude globs are skipped.
"""

import logging
import os
from pathlib import Path
from typing import Awaitable, Callable, List, Optional

from ext_index.config import ROOT_FILENAME, ExtIndexSettings
from ext_index.paths import is_absolute, is_hidden_path, matches_exclude

logger = logging.getLogger(__name__)


class WorkspaceIndexer:
    """Finds root files and runs a parse callback over each of them."""

    def __init__(self, settings: Optional[ExtIndexSettings] = None):
        self.settings = settings or ExtIndexSettings()

    def discover(self, root: Path) -> List[str]:
        """List root files to index, explicit ones first, without duplicates."""
        root = Path(root).absolute()
        files = [
            item if is_absolute(item) else os.path.normpath(os.path.join(root, item))
            for item in self.settings.description_files
        ]

        if self.settings.discover_description_files:
            files.extend(self._scan(root))
        else:
            conventional = root / ROOT_FILENAME
            if conventional.exists():
                files.append(str(conventional))

        unique: List[str] = []
        for item in files:
            if item not in unique:
                unique.append(item)
        return unique

    def _scan(self, root: Path) -> List[str]:
        found = []
        for dirpath, dirnames, filenames in os.walk(root):
            relative_dir = Path(dirpath).relative_to(root)
            # Prune hidden directories in place so os.walk skips them
            dirnames[:] = sorted(d for d in dirnames if not is_hidden_path(Path(d)))

            if ROOT_FILENAME not in filenames:
                continue
            relative = (relative_dir / ROOT_FILENAME).as_posix()
            if matches_exclude(relative, self.settings.exclude):
                logger.debug(f"Excluded: {relative}")
                continue
            found.append(str(Path(dirpath) / ROOT_FILENAME))

        logger.debug(f"Discovered {len(found)} {ROOT_FILENAME} files under {root}")
        return found

    async def index(self, root: Path, parse: Callable[[str], Awaitable[None]]) -> List[str]:
        """Discover root files and parse them one after another.

        A failure in one file is logged and does not stop the others.

        Returns:
            The root files that were attempted
        """
        files = self.discover(root)
        for item in files:
            if not os.path.exists(item):
                logger.debug(f"Skipping missing root file: {item}")
                continue
            logger.debug(f"Parsing: {item}")
            try:
                await parse(item)
            except Exception:
                logger.exception(f"Failed to index {item}")
                continue
            logger.debug(f"Parsed: {item}")
        return files
