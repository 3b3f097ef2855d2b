# tests/unit/test_walker.py
import os
from pathlib import Path

import pytest

from ffsearch.domain.errors import WalkError
from ffsearch.domain.models import EntryKind
from ffsearch.services.walker import PathWalker, WalkAction


def _collect(root: Path, follow: bool = False, skip: tuple = ()):
    seen = []

    def visit(entry, error):
        seen.append((entry, error))
        if entry.is_dir and entry.name in skip:
            return WalkAction.SKIP_SUBTREE
        return None

    PathWalker(follow_symlinks=follow).walk(root, visit)
    return seen


def _rel(root: Path, seen) -> list[str]:
    return [e.logical_path.relative_to(root).as_posix() for e, _ in seen if not e.is_root]


def test_walk_is_lexical_and_depth_first(tmp_path: Path):
    (tmp_path / "a").mkdir()
    (tmp_path / "a" / "z.txt").write_text("z")
    (tmp_path / "b.txt").write_text("b")
    (tmp_path / "c").mkdir()

    seen = _collect(tmp_path)

    assert seen[0][0].is_root
    assert _rel(tmp_path, seen) == ["a", "a/z.txt", "b.txt", "c"]


def test_depth_counts_separators_below_root(tmp_path: Path):
    (tmp_path / "a" / "b").mkdir(parents=True)
    (tmp_path / "a" / "b" / "f.txt").write_text("x")

    depths = {
        e.logical_path.relative_to(tmp_path).as_posix(): e.depth
        for e, _ in _collect(tmp_path)
        if not e.is_root
    }
    assert depths == {"a": 0, "a/b": 1, "a/b/f.txt": 2}


def test_skip_subtree_prunes_children_but_not_siblings(tmp_path: Path):
    (tmp_path / "a").mkdir()
    (tmp_path / "a" / "hidden.txt").write_text("x")
    (tmp_path / "b.txt").write_text("x")

    seen = _collect(tmp_path, skip=("a",))

    assert _rel(tmp_path, seen) == ["a", "b.txt"]


def test_missing_root_raises_walk_error(tmp_path: Path):
    with pytest.raises(WalkError):
        _collect(tmp_path / "nope")


def test_symlinked_dir_reports_logical_paths_and_reads_physical(tmp_path: Path):
    real = tmp_path / "real"
    real.mkdir()
    (real / "inner.txt").write_text("inner")
    os.symlink(real, tmp_path / "link")

    seen = _collect(tmp_path, follow=True)
    by_rel = {e.logical_path.relative_to(tmp_path).as_posix(): e for e, _ in seen if not e.is_root}

    # "link" sorts first, so the real directory is entered through it and
    # then not entered a second time under its own name.
    assert list(by_rel) == ["link", "link/inner.txt"]
    assert by_rel["link"].kind is EntryKind.SYMLINK_DIR
    inner = by_rel["link/inner.txt"]
    assert inner.kind is EntryKind.FILE
    assert inner.physical_path == Path(os.path.realpath(real)) / "inner.txt"
    assert inner.depth == 1


def test_symlinks_not_followed_by_default(tmp_path: Path):
    real = tmp_path / "real"
    real.mkdir()
    (real / "inner.txt").write_text("inner")
    os.symlink(real, tmp_path / "link")

    seen = _collect(tmp_path, follow=False)
    by_rel = {e.logical_path.relative_to(tmp_path).as_posix(): e for e, _ in seen if not e.is_root}

    assert list(by_rel) == ["link", "real", "real/inner.txt"]
    assert by_rel["link"].kind is EntryKind.SYMLINK_DIR
    assert by_rel["link"].link_target == Path(os.path.realpath(real))


def test_symlink_cycle_terminates_and_visits_each_file_once(tmp_path: Path):
    a = tmp_path / "A"
    b = tmp_path / "B"
    a.mkdir()
    b.mkdir()
    (a / "a.txt").write_text("a")
    (b / "b.txt").write_text("b")
    os.symlink(b, a / "toB")
    os.symlink(a, b / "toA")

    seen = _collect(tmp_path, follow=True)
    files = [r for r in _rel(tmp_path, seen) if r.endswith(".txt")]

    assert files == ["A/a.txt", "A/toB/b.txt"]


def test_link_back_to_root_is_skipped(tmp_path: Path):
    (tmp_path / "a").mkdir()
    (tmp_path / "a" / "f.txt").write_text("f")
    os.symlink(tmp_path, tmp_path / "a" / "loop")

    seen = _collect(tmp_path, follow=True)

    assert _rel(tmp_path, seen) == ["a", "a/f.txt"]


def test_broken_symlink_is_reported_as_entry_error(tmp_path: Path):
    os.symlink(tmp_path / "missing", tmp_path / "dangling")
    (tmp_path / "z.txt").write_text("z")

    seen = _collect(tmp_path, follow=True)
    errors = [(e.name, err) for e, err in seen if err is not None]

    assert len(errors) == 1
    assert errors[0][0] == "dangling"
    assert isinstance(errors[0][1], OSError)
    # the walk went on
    assert "z.txt" in _rel(tmp_path, seen)


def test_root_that_is_a_file_is_visited_once(tmp_path: Path):
    f = tmp_path / "only.txt"
    f.write_text("x")

    seen = _collect(f)

    assert len(seen) == 1
    assert seen[0][0].is_root and seen[0][0].kind is EntryKind.FILE


def test_pruned_directory_still_reachable_through_link(tmp_path: Path):
    deep = tmp_path / "a" / "deep"
    deep.mkdir(parents=True)
    (deep / "f.txt").write_text("hello")
    os.symlink(deep, tmp_path / "b_link")

    seen = _collect(tmp_path, follow=True, skip=("deep",))

    assert _rel(tmp_path, seen) == ["a", "a/deep", "b_link", "b_link/f.txt"]
