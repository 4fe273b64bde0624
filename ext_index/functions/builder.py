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

"""Builds the function table from a parsed root file.

The registry is read three levels deep, each level able to override the
defaults of its parent:

    class CfgFunctions
    {
        class TAG                   // tag = "..." overrides the class name
        {
            class Category          // tag, file override the tag / path
            {
                class doThing {};   // file, ext override the script path
            };
        };
    };

``TAG_fnc_doThing`` then lives at ``functions/Category/fn_doThing.sqf``
relative to the root file unless an include prefix maps it elsewhere.
"""

import logging
import os
from typing import Optional

from ext_index.config import DIAGNOSTIC_SOURCE, REGISTRY_CLASS, ExtIndexSettings
from ext_index.functions.protocol import BuildResult, EffectiveContext, FunctionRecord
from ext_index.hpp.protocol import ConfigClass
from ext_index.lsp.types import Diagnostic, DiagnosticSeverity, path_to_uri
from ext_index.paths import resolve_path

logger = logging.getLogger(__name__)


class FunctionIndexBuilder:
    """Walks a config tree and records every declared function."""

    def __init__(self, settings: Optional[ExtIndexSettings] = None):
        self.settings = settings or ExtIndexSettings()

    def build(self, root: ConfigClass, root_filename: str) -> BuildResult:
        """Build the function table for one root file.

        Args:
            root: Parsed tree of the root file
            root_filename: Path of the root file

        Returns:
            BuildResult with a fresh function mapping and missing-file diagnostics
        """
        result = BuildResult()
        registry = root.body.get_class(REGISTRY_CLASS)
        if registry is None:
            return result

        logger.debug(f"Scanning functions for: {root_filename}")
        root_dir = os.path.dirname(os.path.abspath(root_filename))

        for tag_class in registry.body.classes.values():
            context = EffectiveContext.for_tag(tag_class)
            logger.debug(f"Detected tag: {context.tag}")

            for category_class in tag_class.body.classes.values():
                category = context.for_category(category_class, self.settings.functions_directory)
                logger.debug(f"Detected category: {category_class.name}")

                for function_class in category_class.body.classes.values():
                    self._add_function(result, category, function_class, root_filename, root_dir)

        logger.info(f"Detected a total of {result.count} functions in {root_filename}")
        return result

    def _add_function(
        self,
        result: BuildResult,
        context: EffectiveContext,
        function_class: ConfigClass,
        root_filename: str,
        root_dir: str,
    ) -> None:
        body = function_class.body
        bare_name = function_class.name
        qualified_name = f"{context.category_tag}_fnc_{bare_name}"

        ext = body.get_string("ext") or self.settings.default_extension
        filename = body.get_string("file") or os.path.join(
            context.category_path, f"fn_{bare_name}{ext}"
        )
        filename = resolve_path(filename, root_dir, self.settings.include_prefixes)

        record = FunctionRecord(
            name=qualified_name,
            filename=filename,
            root=root_filename,
            location=function_class.file_location,
        )
        result.functions[record.key] = record

        if not os.path.isfile(filename):
            declared_in = function_class.file_location.filename or root_filename
            uri = path_to_uri(declared_in)
            result.diagnostics.setdefault(uri, []).append(
                Diagnostic(
                    range=function_class.file_location.range,
                    message=f"Failed to find {filename} for function {qualified_name}.",
                    severity=DiagnosticSeverity.Error,
                    source=DIAGNOSTIC_SOURCE,
                )
            )
