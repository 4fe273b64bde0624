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

"""Command line entry point.

    ext-index check path/to/mission
    ext-index functions path/to/mission --config settings.yaml
    ext-index watch path/to/mission
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ext_index.config import load_workspace_settings
from ext_index.lsp.types import Diagnostic, DiagnosticSeverity, uri_to_path
from ext_index.module import ExtModule

SEVERITY_STYLES = {
    DiagnosticSeverity.Error: ("error", "bold red"),
    DiagnosticSeverity.Warning: ("warning", "yellow"),
    DiagnosticSeverity.Information: ("info", "cyan"),
    DiagnosticSeverity.Hint: ("hint", "dim"),
}


class DiagnosticCollector:
    """Keeps the latest diagnostics per file, as an editor would."""

    def __init__(self, console: Optional[Console] = None, echo: bool = False):
        self.console = console
        self.echo = echo
        self.diagnostics: Dict[str, List[Diagnostic]] = {}

    def __call__(self, uri: str, diagnostics: List[Diagnostic]) -> None:
        if diagnostics:
            self.diagnostics[uri] = list(diagnostics)
        else:
            self.diagnostics.pop(uri, None)
        if self.echo and self.console is not None:
            for diagnostic in diagnostics:
                print_diagnostic(self.console, uri, diagnostic)

    @property
    def error_count(self) -> int:
        return sum(
            1
            for diagnostics in self.diagnostics.values()
            for diagnostic in diagnostics
            if diagnostic.severity == DiagnosticSeverity.Error
        )


def print_diagnostic(console: Console, uri: str, diagnostic: Diagnostic) -> None:
    label, style = SEVERITY_STYLES.get(diagnostic.severity, ("error", "bold red"))
    start = diagnostic.range.start
    console.print(
        f"{escape(uri_to_path(uri))}:{start.line + 1}:{start.character + 1}: "
        f"[{style}]{label}[/{style}] {escape(diagnostic.message)}",
        highlight=False,
    )


def _load_module(args, publish) -> ExtModule:
    root = Path(args.workspace)
    config = Path(args.config) if args.config else None
    settings = load_workspace_settings(root, config)
    return ExtModule(settings, publish_diagnostics=publish)


def _relative(path: str, root: Path) -> str:
    try:
        return os.path.relpath(path, root)
    except ValueError:
        return path


# ----------------------------------------------------------------------
# check
# ----------------------------------------------------------------------


def register_check(subparsers):
    """Register the 'check' command and its arguments."""
    check_p = subparsers.add_parser("check", help="Index a workspace once and report diagnostics")
    check_p.add_argument("workspace", help="Workspace directory")
    check_p.add_argument("--config", help="Settings file (default: <workspace>/.ext-index.yaml)")
    check_p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    check_p.set_defaults(func=run_check)


def run_check(args, console: Console) -> int:
    collector = DiagnosticCollector()
    module = _load_module(args, collector)

    async def _run():
        await module.index_workspace(Path(args.workspace))
        await module.close()

    asyncio.run(_run())

    for uri in sorted(collector.diagnostics):
        for diagnostic in collector.diagnostics[uri]:
            print_diagnostic(console, uri, diagnostic)

    count = sum(len(table) for table in module.functions.values())
    errors = collector.error_count
    console.print(
        f"{len(module.functions)} description file(s), {count} function(s), {errors} error(s)"
    )
    return 1 if errors else 0


# ----------------------------------------------------------------------
# functions
# ----------------------------------------------------------------------


def register_functions(subparsers):
    """Register the 'functions' command and its arguments."""
    functions_p = subparsers.add_parser("functions", help="List indexed functions")
    functions_p.add_argument("workspace", help="Workspace directory")
    functions_p.add_argument("--config", help="Settings file (default: <workspace>/.ext-index.yaml)")
    functions_p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    functions_p.set_defaults(func=run_functions)


def run_functions(args, console: Console) -> int:
    module = _load_module(args, DiagnosticCollector())
    root = Path(args.workspace).absolute()

    async def _run():
        await module.index_workspace(root)
        await module.close()

    asyncio.run(_run())

    table = Table(title="Functions")
    table.add_column("Function", style="bold")
    table.add_column("File")
    table.add_column("Found", justify="center")
    table.add_column("Documented", justify="center")

    for functions in module.functions.values():
        for record in sorted(functions.values(), key=lambda r: r.key):
            table.add_row(
                record.name,
                _relative(record.filename, root),
                "[green]yes[/green]" if record.exists else "[red]no[/red]",
                "yes" if record.info is not None else "",
            )

    console.print(table)
    return 0


# ----------------------------------------------------------------------
# watch
# ----------------------------------------------------------------------


def register_watch(subparsers):
    """Register the 'watch' command and its arguments."""
    watch_p = subparsers.add_parser("watch", help="Re-index whenever description files change")
    watch_p.add_argument("workspace", help="Workspace directory")
    watch_p.add_argument("--config", help="Settings file (default: <workspace>/.ext-index.yaml)")
    watch_p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    watch_p.set_defaults(func=run_watch)


def run_watch(args, console: Console) -> int:
    # Imported here so the other commands do not start watchdog machinery
    from ext_index.watcher import WorkspaceWatcher

    collector = DiagnosticCollector(console, echo=True)
    module = _load_module(args, collector)
    root = Path(args.workspace)

    async def _run():
        await module.index_workspace(root)
        watcher = WorkspaceWatcher(module, root)
        watcher.start()
        console.print(f"Watching {root.absolute()} (Ctrl+C to stop)")
        try:
            await asyncio.Event().wait()
        finally:
            watcher.stop()
            await module.close()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        console.print("Stopped")
    return 0


# ----------------------------------------------------------------------
# entry point
# ----------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ext-index",
        description="Index description.ext function registries and report problems",
    )
    subparsers = parser.add_subparsers(dest="command")
    register_check(subparsers)
    register_functions(subparsers)
    register_watch(subparsers)
    return parser


def setup_logging(verbose: bool, console: Console) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not getattr(args, "func", None):
        parser.print_help()
        return 2

    console = console or Console()
    setup_logging(args.verbose, console)

    if not Path(args.workspace).is_dir():
        console.print(f"[red]Not a directory:[/red] {escape(args.workspace)}")
        return 2

    try:
        return args.func(args, console)
    except ValidationError as e:
        console.print(f"[red]Invalid settings:[/red] {escape(str(e))}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
