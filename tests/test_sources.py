"""Tests for trace sources and the resource resolver."""

import io

import pytest

from swf_workload.errors import InvalidConfiguration, SourceUnavailable
from swf_workload.reader import ResourceResolver, TraceSource


def test_from_path_missing_file_is_unavailable(tmp_path):
    """Test opening a missing file raises SourceUnavailable."""
    source = TraceSource.from_path(tmp_path / "missing.swf")
    assert source.name == "missing.swf"

    with pytest.raises(SourceUnavailable):
        source.open()


def test_from_path_blank_is_invalid():
    """Test a blank path is rejected at construction."""
    with pytest.raises(InvalidConfiguration):
        TraceSource.from_path("   ")


def test_from_bytes_can_be_reopened():
    """Test in-memory sources return a fresh stream each time."""
    source = TraceSource.from_bytes("t.swf", b"1 2 3\n")
    assert source.open().read() == b"1 2 3\n"
    assert source.open().read() == b"1 2 3\n"


def test_from_stream_is_single_use():
    """Test a stream-backed source can be opened only once."""
    source = TraceSource.from_stream("t.swf", io.BytesIO(b"1 2 3\n"))
    source.open()

    with pytest.raises(SourceUnavailable, match="already consumed"):
        source.open()


def test_opener_oserror_is_translated():
    """Test OSError from a custom opener becomes SourceUnavailable."""

    def opener():
        raise PermissionError("permission denied")

    with pytest.raises(SourceUnavailable, match="permission denied"):
        TraceSource(name="t.swf", opener=opener).open()


def test_resolver_searches_paths_in_order(tmp_path):
    """Test the first search path containing the name wins."""
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (second / "trace.swf").write_text("second\n")

    resolver = ResourceResolver([first, second])
    assert resolver.resolve("trace.swf").open().read() == b"second\n"

    (first / "trace.swf").write_text("first\n")
    assert resolver.resolve("trace.swf").open().read() == b"first\n"


def test_resolver_absolute_path(tmp_path):
    """Test absolute paths bypass the search paths."""
    path = tmp_path / "abs.swf"
    path.write_text("1\n")

    source = ResourceResolver([tmp_path / "elsewhere"]).resolve(str(path))
    assert source.name == "abs.swf"

    with pytest.raises(SourceUnavailable):
        ResourceResolver().resolve(str(tmp_path / "nope.swf"))


@pytest.mark.parametrize("name", ["", "   ", None])
def test_resolver_blank_name_is_invalid(name):
    """Test blank resource names fail fast."""
    with pytest.raises(InvalidConfiguration):
        ResourceResolver().resolve(name)


def test_resolver_missing_name_is_unavailable(tmp_path):
    """Test an unknown name raises SourceUnavailable listing the search paths."""
    with pytest.raises(SourceUnavailable, match="not found"):
        ResourceResolver([tmp_path]).resolve("missing.swf")


def test_resolver_package_data():
    """Test names fall back to package data when a package is given."""
    resolver = ResourceResolver([], package="swf_workload")
    source = resolver.resolve("__init__.py")
    assert source.open().read().startswith(b'"""')

    with pytest.raises(SourceUnavailable):
        resolver.resolve("missing.swf")
