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

import logging
import os
from pathlib import Path
from typing import Optional

import typer

from ..adapters.identity.posix import PosixOwnerResolver
from ..adapters.ignore.gitignore import GitIgnoreMatcher
from ..adapters.metadata.pillow_exif import PillowExifDecoder
from ..adapters.reporting.console import ConsoleReporter
from ..domain.errors import ConfigurationError, WalkError
from ..domain.options import SearchOptions
from ..domain.patterns import PatternSet
from ..ports.ignore import IgnoreMatcherPort
from ..services import MetadataExtractor, SearchService

from ..logging_config import setup_logging

setup_logging()

app = typer.Typer(help="ffsearch - find files by name, content, hex bytes and metadata")

logger = logging.getLogger(__name__)

IGNORE_FILE = ".gitignore"


def _split_root(root: str, file_pattern: Optional[str]) -> tuple[str, Optional[str]]:
    """
    Expand `~` and treat a wildcard in the root (e.g. `src/*.py`) as
    shorthand for `--file` when no file pattern was given.
    """
    if root.startswith("~"):
        root = os.path.expanduser(root)
    if "*" in root and not file_pattern:
        directory, pattern = os.path.split(root)
        return directory or ".", pattern
    return root, file_pattern


def _load_ignore(root: Path, *, search_all: bool, show_errors: bool) -> Optional[IgnoreMatcherPort]:
    if search_all:
        return None
    ignore_file = root / IGNORE_FILE
    if not ignore_file.is_file():
        if show_errors:
            typer.echo(f"No {IGNORE_FILE} file in {root}", err=True)
        return None
    return GitIgnoreMatcher.from_file(ignore_file)


def _wire(
    root: Path,
    options: SearchOptions,
    patterns: PatternSet,
    reporter: ConsoleReporter,
    *,
    show_errors: bool = False,
) -> SearchService:
    """
    Composition root:
      GitIgnoreMatcher + PosixOwnerResolver + PillowExifDecoder + ConsoleReporter
    """
    try:
        ignore = _load_ignore(root, search_all=options.search_all, show_errors=show_errors)
    except ConfigurationError as e:
        raise typer.BadParameter(str(e))

    extractor = MetadataExtractor(owners=PosixOwnerResolver(), decoder=PillowExifDecoder())
    return SearchService(
        options,
        patterns,
        ignore=ignore,
        extractor=extractor,
        listener=reporter,
    )


@app.command()
def search(
    root: str = typer.Argument(".", help="Directory to search (a trailing glob sets --file)"),
    file: Optional[str] = typer.Option(None, "--file", "-f", help="regex or glob pattern to match file names"),
    string: Optional[str] = typer.Option(None, "--string", "-s", help="regex pattern to match file content"),
    hex_: Optional[str] = typer.Option(None, "--hex", "-x", help="regex pattern to match hex-encoded lines"),
    meta: Optional[str] = typer.Option(None, "--meta", "-m", help="regex pattern to match file metadata"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="enable verbose mode"),
    binary: bool = typer.Option(False, "--binary", "-b", help="exclude binary files in search"),
    errors: bool = typer.Option(False, "--errors", "-e", help="print errors encountered during execution"),
    tracing: bool = typer.Option(False, "--tracing", "-t", help="debug logging and a trace of every visited path"),
    links: bool = typer.Option(False, "--links", "-l", help="follow symbolic links"),
    global_: bool = typer.Option(False, "--global", "-g", help="search all, including .gitignore'd and .git paths"),
    depth: int = typer.Option(-1, "--depth", "-d", help="depth to recurse, -1 for infinite depth"),
    full_path: bool = typer.Option(False, "--full-path", help="match --file against the full path"),
):
    """
    Walk ROOT and list files, optionally matching names, content, hex bytes or metadata.
    """
    if tracing:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Tracing enabled")

    root, file = _split_root(root, file)
    root_path = Path(root)
    if not root_path.exists():
        typer.echo(f"Error: directory '{root}' does not exist.")
        raise typer.Exit(code=1)

    try:
        patterns = PatternSet.compile(file=file, string=string, hex=hex_, meta=meta)
    except ConfigurationError as e:
        raise typer.BadParameter(str(e))

    options = SearchOptions(
        follow_symlinks=links,
        exclude_binary=binary,
        max_depth=depth if depth >= 0 else None,
        search_all=global_,
        match_full_path=full_path,
    )
    reporter = ConsoleReporter(verbose=verbose, show_errors=errors)
    service = _wire(root_path, options, patterns, reporter, show_errors=errors)

    try:
        totals = service.search(root_path)
    except WalkError as e:
        typer.echo(f"Error walking directories: {e}", err=True)
        raise typer.Exit(code=1)

    if verbose or not patterns.searches:
        reporter.summary(totals, searched=patterns.searches)
