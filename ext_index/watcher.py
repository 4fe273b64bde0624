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

"""Re-index when description files change on disk.

Watchdog delivers events on its own thread; they are handed to the event
loop, where the module's coordinator debounces them per file.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from ext_index.config import INCLUDE_EXTENSIONS, ROOT_FILENAME
from ext_index.lsp.types import path_to_uri
from ext_index.module import ExtModule
from ext_index.paths import is_hidden_path

logger = logging.getLogger(__name__)


class DescriptionFileHandler(FileSystemEventHandler):
    """Forwards changes to description and include files to the module."""

    def __init__(self, module: ExtModule, loop: asyncio.AbstractEventLoop, root: Path):
        super().__init__()
        self.module = module
        self.loop = loop
        self.root = root

    def _should_process(self, path: str) -> bool:
        path_obj = Path(path)
        try:
            if is_hidden_path(path_obj.relative_to(self.root)):
                return False
        except ValueError:
            pass
        name = path_obj.name.lower()
        return name == ROOT_FILENAME or path_obj.suffix.lower() in INCLUDE_EXTENSIONS

    def _schedule(self, path: str) -> None:
        uri = path_to_uri(path)
        logger.debug(f"Change detected: {path}")
        self.loop.call_soon_threadsafe(self._submit, uri)

    def _submit(self, uri: str) -> None:
        task = asyncio.ensure_future(self.module.parse_document(uri))
        task.add_done_callback(self._report)

    @staticmethod
    def _report(task: asyncio.Future) -> None:
        if not task.cancelled() and task.exception() is not None:
            logger.warning(f"Error re-indexing after change: {task.exception()}")

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._should_process(event.src_path):
            self._schedule(event.src_path)

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._should_process(event.src_path):
            self._schedule(event.src_path)

    def on_deleted(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._should_process(event.src_path):
            self._schedule(event.src_path)


class WorkspaceWatcher:
    """Observes a workspace directory tree for the lifetime of a session."""

    def __init__(
        self,
        module: ExtModule,
        root: Path,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.module = module
        self.root = Path(root).absolute()
        self.loop = loop
        self._observer: Optional[Observer] = None

    @property
    def is_running(self) -> bool:
        return self._observer is not None

    def start(self) -> None:
        if self._observer is not None:
            logger.debug("Watcher already running")
            return
        loop = self.loop or asyncio.get_running_loop()
        handler = DescriptionFileHandler(self.module, loop, self.root)
        self._observer = Observer()
        self._observer.schedule(handler, str(self.root), recursive=True)
        self._observer.daemon = True
        self._observer.start()
        logger.info(f"Watching {self.root} for description file changes")

    def stop(self) -> None:
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join(timeout=5)
        self._observer = None
        logger.info("Watcher stopped")
