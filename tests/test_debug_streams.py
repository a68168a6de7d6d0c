"""
Tests for the named debug stream registry.
"""

import io
import logging

import pytest
from rpnkey.debug import DebugStreams, NoSuchStreamError


@pytest.fixture
def streams():
    """Create a registry that is closed after the test."""
    registry = DebugStreams()
    yield registry
    registry.close()


class TestRegistry:
    """Tests for registration and lookup."""

    def test_add_and_get_stream(self, streams):
        """Test that a registered sink is returned by name."""
        sink = io.StringIO()
        streams.add_stream("console", sink)

        assert streams.get_stream("console") is sink
        assert "console" in streams

    def test_unknown_name(self, streams):
        """Test that unknown names raise NoSuchStreamError."""
        with pytest.raises(NoSuchStreamError) as exc_info:
            streams.get_stream("missing")

        assert exc_info.value.name == "missing"
        assert "No such stream" in str(exc_info.value)

    def test_error_is_lookup_error(self):
        """Test that the missing-stream error is recoverable as LookupError."""
        assert issubclass(NoSuchStreamError, LookupError)

    def test_reregistering_replaces(self, streams):
        """Test that registering a name again replaces the sink."""
        first, second = io.StringIO(), io.StringIO()
        streams.add_stream("out", first)
        streams.add_stream("out", second)

        assert streams.get_stream("out") is second

    def test_names_sorted(self, streams):
        """Test that names() lists every registration."""
        streams.add_stream("b", io.StringIO())
        streams.add_stream("a", io.StringIO())

        assert streams.names() == ["a", "b"]

    def test_registries_are_independent(self):
        """Test that two registries share no state."""
        one, two = DebugStreams(), DebugStreams()
        one.add_stream("x", io.StringIO())

        assert "x" not in two


class TestFileStreams:
    """Tests for add_file and close."""

    def test_add_file_writes(self, tmp_path):
        """Test that text written to a file stream lands on disk."""
        path = tmp_path / "logs" / "trace.log"
        with DebugStreams() as streams:
            streams.add_file("trace", path)
            print("hello", file=streams.get_stream("trace"))

        assert path.read_text(encoding="utf-8") == "hello\n"

    def test_close_leaves_borrowed_streams_open(self, tmp_path):
        """Test that close() only closes files the registry opened."""
        borrowed = io.StringIO()
        streams = DebugStreams()
        streams.add_stream("borrowed", borrowed)
        owned = streams.add_file("owned", tmp_path / "owned.log")
        streams.close()

        assert not borrowed.closed
        assert owned.closed

    def test_handler_routes_logging(self, streams):
        """Test that handler() writes log records to the sink."""
        sink = io.StringIO()
        streams.add_stream("log", sink)
        test_logger = logging.getLogger("rpnkey.test_debug_streams")
        test_logger.setLevel(logging.DEBUG)
        handler = streams.handler("log")
        test_logger.addHandler(handler)
        try:
            test_logger.debug("state %d", 3)
        finally:
            test_logger.removeHandler(handler)

        assert "DEBUG rpnkey.test_debug_streams: state 3" in sink.getvalue()

    def test_handler_for_unknown_name(self, streams):
        """Test that handler() needs a registered name."""
        with pytest.raises(NoSuchStreamError):
            streams.handler("missing")

    def test_closed_registry_rejects_use(self, tmp_path):
        """Test that a closed registry hands out no closed sinks."""
        streams = DebugStreams()
        streams.add_file("trace", tmp_path / "trace.log")
        streams.close()

        with pytest.raises(ValueError, match="closed"):
            streams.get_stream("trace")
        with pytest.raises(ValueError, match="closed"):
            streams.add_stream("console", io.StringIO())
        with pytest.raises(ValueError, match="closed"):
            streams.add_file("other", tmp_path / "other.log")
        assert not (tmp_path / "other.log").exists()

    def test_close_twice(self, tmp_path):
        """Test that closing an already closed registry does nothing."""
        streams = DebugStreams()
        owned = streams.add_file("trace", tmp_path / "trace.log")
        streams.close()
        streams.close()

        assert owned.closed
