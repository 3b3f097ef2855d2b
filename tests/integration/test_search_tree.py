# tests/integration/test_search_tree.py
import os
from pathlib import Path

from ffsearch.adapters.identity.posix import PosixOwnerResolver
from ffsearch.adapters.ignore.gitignore import GitIgnoreMatcher
from ffsearch.adapters.metadata.pillow_exif import PillowExifDecoder
from ffsearch.domain.models import MatchTotals
from ffsearch.domain.options import SearchOptions
from ffsearch.domain.patterns import PatternSet
from ffsearch.services import MetadataExtractor, SearchService


class Paths:
    def __init__(self):
        self.files = []

    def on_file(self, result):
        self.files.append(result.directory / result.filename)

    def on_match(self, match):
        pass

    def on_error(self, path, error):
        pass


def _service(options, patterns, ignore=None, listener=None):
    extractor = MetadataExtractor(owners=PosixOwnerResolver(), decoder=PillowExifDecoder())
    return SearchService(options, patterns, ignore=ignore, extractor=extractor, listener=listener)


def test_symlink_cycle_visits_each_real_file_once(tmp_path: Path):
    a = tmp_path / "A"
    b = tmp_path / "B"
    a.mkdir()
    b.mkdir()
    (a / "a.txt").write_text("aaa")
    (b / "b.txt").write_text("bb")
    os.symlink(b, a / "toB")
    os.symlink(a, b / "toA")
    os.symlink(tmp_path, a / "up")
    paths = Paths()

    totals = _service(SearchOptions(follow_symlinks=True, search_all=True), PatternSet(), listener=paths).search(
        tmp_path
    )

    rel = [p.relative_to(tmp_path).as_posix() for p in paths.files]
    assert rel == ["A/a.txt", "A/toB/b.txt"]
    assert totals == MatchTotals(files=2, bytes=5, matches=0)


def test_gitignored_directory_reachable_through_link(tmp_path: Path):
    sub = tmp_path / "subDir"
    sub.mkdir()
    (sub / "file.txt").write_bytes(b"This is in a symlinked directory.")
    os.symlink("subDir", tmp_path / "linkDir")
    (tmp_path / ".gitignore").write_text("subDir")
    paths = Paths()

    totals = _service(
        SearchOptions(follow_symlinks=True),
        PatternSet.compile(string="symlinked"),
        ignore=GitIgnoreMatcher.from_file(tmp_path / ".gitignore"),
        listener=paths,
    ).search(tmp_path)

    assert totals == MatchTotals(files=1, bytes=33, matches=1)
    assert paths.files == [tmp_path / "linkDir" / "file.txt"]


def test_git_metadata_skipped_by_default(tmp_path: Path):
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "config").write_text("[core]\n")
    (tmp_path / "src.txt").write_text("code\n")

    default = _service(SearchOptions(), PatternSet()).search(tmp_path)
    everything = _service(SearchOptions(search_all=True), PatternSet()).search(tmp_path)

    assert default.files == 1
    assert everything.files == 2
