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

"""Path resolution and filtering shared by the parser, builder and indexer.

Include prefixes map a virtual path segment (``\\A3\\``, ``\\x\\cba\\``) to
a local directory. Prefixes are tried in declared order and the first
match wins, even when a longer prefix further down would also match.
"""

import fnmatch
import os
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Iterable, Mapping, Optional


def is_absolute(path: str) -> bool:
    """Absolute on either POSIX or Windows, whatever the host is."""
    return PurePosixPath(path).is_absolute() or PureWindowsPath(path).is_absolute()


def join(base: str, path: str) -> str:
    """Join and normalize, keeping separators inside ``path`` untouched."""
    return os.path.normpath(os.path.join(base, path))


def apply_include_prefix(
    filename: str, base_dir: str, include_prefixes: Optional[Mapping[str, str]]
) -> Optional[str]:
    """Substitute the first matching include prefix.

    Absolute mapped paths are concatenated verbatim with the remainder of
    ``filename``; relative mapped paths are joined against ``base_dir``.

    Returns:
        The resolved path, or None when no prefix matches.
    """
    if not include_prefixes:
        return None

    for prefix, local in include_prefixes.items():
        if filename.startswith(prefix):
            remainder = filename[len(prefix) :]
            if is_absolute(local):
                return local + remainder
            return join(base_dir, local + remainder)

    return None


def resolve_path(
    filename: str, base_dir: str, include_prefixes: Optional[Mapping[str, str]] = None
) -> str:
    """Resolve a declared path against the include prefixes or ``base_dir``."""
    resolved = apply_include_prefix(filename, base_dir, include_prefixes)
    if resolved is not None:
        return resolved
    return join(base_dir, filename)


def is_hidden_path(path: Path) -> bool:
    """Check if any component of the path is a hidden directory.

    Hidden directories follow Unix convention: they start with '.'
    Excludes '.' and '..' which are special directory entries.
    """
    for part in path.parts:
        if part.startswith(".") and part not in (".", ".."):
            return True
    return False


def matches_exclude(relative_path: str, patterns: Iterable[str]) -> bool:
    """Check a workspace-relative POSIX path against exclude globs.

    ``**`` may match zero directories, so ``ignored/**/*`` also excludes
    ``ignored/description.ext``.
    """
    for pattern in patterns:
        pattern = pattern.replace("\\", "/")
        if pattern.startswith("./"):
            pattern = pattern[2:]
        candidates = {pattern, pattern.replace("**/", "")}
        if pattern.endswith("/**"):
            candidates.add(pattern[:-3] + "/*")
        for candidate in candidates:
            if fnmatch.fnmatch(relative_path, candidate):
                return True
    return False
