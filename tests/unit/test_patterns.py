# tests/unit/test_patterns.py
import pytest

from ffsearch.domain.errors import ConfigurationError
from ffsearch.domain.models import HexPattern, TextPattern
from ffsearch.domain.patterns import PatternSet, compile_filename_pattern, glob_to_regex


def test_glob_to_regex_escapes_dots_and_anchors():
    assert glob_to_regex("*.txt") == r"^.*\.txt$"
    assert glob_to_regex("file?.log") == r"^file.\.log$"


@pytest.mark.parametrize(
    "pattern,name,expected",
    [
        ("*.txt", "notes.txt", True),
        ("*.txt", "notes.txt.bak", False),
        ("*.*", "README", False),
        ("*.*", "a.b", True),
        ("?.txt", "a.txt", True),
        ("?.txt", "ab.txt", False),
    ],
)
def test_glob_patterns(pattern, name, expected):
    assert bool(compile_filename_pattern(pattern).search(name)) is expected


def test_regex_patterns_are_anchored_at_the_end():
    rx = compile_filename_pattern(r".*\.txt")
    assert rx.search("file1.txt")
    assert not rx.search("file1.txt.log")
    # unanchored start
    assert compile_filename_pattern("txt").search("notes.txt")


def test_valid_regex_with_star_is_used_as_regex():
    rx = compile_filename_pattern("file.*")
    assert rx.search("file1.txt")
    assert rx.search("myfile")
    assert not rx.search("other.txt")


def test_invalid_non_glob_pattern_raises():
    with pytest.raises(ConfigurationError):
        compile_filename_pattern("(unclosed")


def test_hex_takes_precedence_over_text():
    ps = PatternSet.compile(string="hello", hex="68 65")
    assert isinstance(ps.content, HexPattern)
    assert ps.content.regex.pattern == "68 65"


def test_text_pattern_alone():
    ps = PatternSet.compile(string="sample")
    assert isinstance(ps.content, TextPattern)
    assert ps.searches


def test_empty_strings_mean_not_configured():
    ps = PatternSet.compile(file="", string="", hex="", meta="")
    assert ps.filename is None
    assert ps.content is None
    assert ps.meta is None
    assert not ps.searches


def test_meta_only_counts_as_search():
    assert PatternSet.compile(meta="text/plain").searches


@pytest.mark.parametrize("kwargs", [{"string": "("}, {"hex": "[0-"}, {"meta": "*x"}])
def test_bad_patterns_raise_configuration_error(kwargs):
    with pytest.raises(ConfigurationError):
        PatternSet.compile(**kwargs)
