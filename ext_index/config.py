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

"""Indexer settings and schema constants.

Settings come either from the editor (camelCase keys, optionally nested
under a ``sqflint`` section) or from a ``.ext-index.yaml`` file at the
workspace root:

    descriptionFiles:
      - missions/coop.Altis/description.ext
    discoverDescriptionFiles: true
    exclude:
      - "ignored/**/*"
    includePrefixes:
      "\\\\A3\\\\": "C:/UnpackedArma/"
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

# Root configuration file searched for in the workspace
ROOT_FILENAME = "description.ext"

# Registry class listing callable functions (matched case-insensitively)
REGISTRY_CLASS = "cfgfunctions"

# Files that can be included from a root file
INCLUDE_EXTENSIONS = (".hpp", ".h", ".inc")

# Files that hold function code
SCRIPT_EXTENSIONS = (".sqf",)

DIAGNOSTIC_SOURCE = "ext-index"

SETTINGS_FILENAME = ".ext-index.yaml"

# Editor settings section
SETTINGS_SECTION = "sqflint"


class ExtIndexSettings(BaseModel):
    """Settings for indexing a workspace."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    description_files: List[str] = Field(default_factory=list, alias="descriptionFiles")
    discover_description_files: bool = Field(default=True, alias="discoverDescriptionFiles")
    exclude: List[str] = Field(default_factory=list)
    # Order matters: the first matching prefix wins
    include_prefixes: Dict[str, str] = Field(default_factory=dict, alias="includePrefixes")
    functions_directory: str = Field(default="functions", alias="functionsDirectory")
    default_extension: str = Field(default=".sqf", alias="defaultExtension")
    debounce_seconds: float = Field(default=0.2, ge=0, alias="debounceSeconds")

    @classmethod
    def from_client_settings(cls, settings: Optional[Mapping[str, Any]]) -> "ExtIndexSettings":
        """Build settings from an editor configuration mapping."""
        if not settings:
            return cls()
        section = settings.get(SETTINGS_SECTION)
        if isinstance(section, Mapping):
            settings = section
        return cls.model_validate(dict(settings))


def load_settings(path: Path) -> ExtIndexSettings:
    """Load settings from a YAML file.

    A missing or unreadable file yields default settings. Values that fail
    validation raise ``pydantic.ValidationError``.
    """
    if not path.exists():
        logger.debug(f"No settings file at {path}, using defaults")
        return ExtIndexSettings()

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to load settings from {path}: {e}")
        return ExtIndexSettings()

    if not isinstance(data, Mapping):
        logger.warning(f"Ignoring settings file {path}: expected a mapping")
        return ExtIndexSettings()

    return ExtIndexSettings.from_client_settings(data)


def load_workspace_settings(root: Path, config: Optional[Path] = None) -> ExtIndexSettings:
    """Load settings for a workspace, preferring an explicit config file."""
    return load_settings(config if config is not None else root / SETTINGS_FILENAME)
