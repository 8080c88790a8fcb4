"""Test output sinks and lazy output resolution."""

from __future__ import annotations

import io
from unittest.mock import patch

import pytest

from reporthub.config import ReporterConfig
from reporthub.console import NullConsole
from reporthub.core.errors import OutputClosedError, ReporterConfigurationError
from reporthub.manager import ReporterManager
from reporthub.output import (
    FileOutput,
    PreformattedOutput,
    StreamOutput,
    detect_host,
    output_factory,
    resolve_output,
)
from tests.mocks import MockReporter


class FakeNode:
    def __init__(self, tag: str = "", text: str = "") -> None:
        self.tag = tag
        self.text = text
        self.children: list[FakeNode] = []

    def appendChild(self, node: FakeNode) -> None:  # noqa: N802
        self.children.append(node)

    @property
    def text_content(self) -> str:
        return self.text + "".join(c.text_content for c in self.children)


class FakeDocument:
    """Just enough DOM for PreformattedOutput."""

    def __init__(self) -> None:
        self.body = FakeNode("body")

    def createElement(self, tag: str) -> FakeNode:  # noqa: N802
        return FakeNode(tag)

    def createTextNode(self, text: str) -> FakeNode:  # noqa: N802
        return FakeNode(text=text)


class TestStreamOutput:
    """Test stdout forwarding."""

    def test_write_forwards(self):
        stream = io.StringIO()
        output = StreamOutput(stream)

        output.write("hello ")
        output.write("world")

        assert stream.getvalue() == "hello world"

    def test_end_is_write(self):
        assert StreamOutput.end is StreamOutput.write

    def test_end_does_not_close(self):
        stream = io.StringIO()
        output = StreamOutput(stream)

        output.end("done")
        output.write("!")

        assert not stream.closed
        assert stream.getvalue() == "done!"


class TestFileOutput:
    """Test file-backed output."""

    def test_write_and_end(self, tmp_path):
        target = tmp_path / "report.txt"
        output = FileOutput(target)

        output.write("line 1\n")
        output.end("line 2\n")

        assert output.closed
        assert target.read_text(encoding="utf-8") == "line 1\nline 2\n"

    def test_end_twice_is_safe(self, tmp_path):
        output = FileOutput(tmp_path / "report.txt")
        output.end()
        output.end()
        assert output.closed

    def test_write_after_end_raises(self, tmp_path):
        output = FileOutput(tmp_path / "report.txt")
        output.end()
        with pytest.raises(OutputClosedError):
            output.write("late")


class TestPreformattedOutput:
    """Test in-page output."""

    def test_chunks_collected_until_end(self):
        document = FakeDocument()
        output = PreformattedOutput(document)

        output.write("a")
        output.write("b")

        assert output.element.tag == "pre"
        assert output.element.text_content == "ab"
        assert document.body.children == []

    def test_end_attaches_to_body(self):
        document = FakeDocument()
        output = PreformattedOutput(document)

        output.write("a")
        output.end("b")

        assert document.body.children == [output.element]
        assert output.element.text_content == "ab"

    def test_write_after_end_raises(self):
        output = PreformattedOutput(FakeDocument())
        output.end()
        with pytest.raises(OutputClosedError):
            output.write("late")


class TestResolveOutput:
    """Test host-based sink selection."""

    def test_filesystem_with_filename(self, tmp_path):
        output = resolve_output(tmp_path / "out.txt", "filesystem")
        assert isinstance(output, FileOutput)
        output.end()

    def test_filesystem_without_filename_uses_stdout(self, capsys):
        output = resolve_output(None, "filesystem")

        output.write("to stdout")

        assert isinstance(output, StreamOutput)
        assert capsys.readouterr().out == "to stdout"

    def test_document_host(self):
        document = FakeDocument()
        output = resolve_output("ignored.txt", "document", document)
        assert isinstance(output, PreformattedOutput)

    def test_detect_host_filesystem(self):
        with patch("reporthub.output.sys.platform", "linux"):
            assert detect_host() == "filesystem"

    def test_detect_host_browser(self):
        with patch("reporthub.output.sys.platform", "emscripten"):
            assert detect_host() == "document"


class TestLazyOutput:
    """Test that config.output is resolved on first read only."""

    def test_config_construction_opens_nothing(self, tmp_path):
        target = tmp_path / "lazy.txt"

        config = ReporterConfig({"filename": str(target)}, output_factory=output_factory("filesystem"))

        assert not config.output_resolved
        assert not target.exists()

    def test_first_read_opens_and_caches(self, tmp_path):
        target = tmp_path / "lazy.txt"
        config = ReporterConfig({"filename": str(target)}, output_factory=output_factory("filesystem"))

        first = config.output
        second = config.output

        assert first is second
        assert target.exists()
        assert config.output_resolved
        first.end()

    def test_factory_called_once(self):
        calls = []

        def factory(config):
            calls.append(config)
            return object()

        config = ReporterConfig(output_factory=factory)
        config.output
        config.output
        config.get("output")

        assert len(calls) == 1

    def test_membership_check_does_not_resolve(self):
        config = ReporterConfig(output_factory=lambda c: pytest.fail("resolved"))
        assert "output" in config
        assert not config.output_resolved

    def test_without_factory_falls_back_to_base(self):
        sink = object()
        config = ReporterConfig({"output": sink})
        assert config.output is sink

    def test_factory_attribute_error_is_not_masked_by_base(self):
        config = ReporterConfig(
            {"output": "stale"},
            output_factory=output_factory("document", object()),
        )

        with pytest.raises(ReporterConfigurationError) as exc_info:
            config.output  # noqa: B018

        assert exc_info.value.code == "output_unavailable"
        assert isinstance(exc_info.value.original_error, AttributeError)
        assert not config.output_resolved

    def test_manager_document_without_dom_raises_on_read(self):
        manager = ReporterManager(NullConsole(), host="document", document=object())
        reporter = manager.add(MockReporter, {}).reporter

        with pytest.raises(ReporterConfigurationError):
            reporter.output  # noqa: B018

    def test_each_reporter_gets_own_output(self, tmp_path):
        manager = ReporterManager(NullConsole(), host="filesystem")
        first = manager.add(MockReporter, {"filename": str(tmp_path / "a.txt")}).reporter
        second = manager.add(MockReporter, {"filename": str(tmp_path / "b.txt")}).reporter

        assert first.output is not second.output
        first.output.end()
        second.output.end()

    def test_manager_document_host(self):
        document = FakeDocument()
        manager = ReporterManager(NullConsole(), host="document", document=document)
        reporter = manager.add(MockReporter, {}).reporter

        reporter.output.write("report")
        reporter.output.end()

        assert document.body.children[0].text_content == "report"
