"""Tests for server.py — tool handlers, resources, and dispatch logic."""

import json
import shutil
from pathlib import Path

from server import (
    call_tool,
    format_duration,
    handle_compose_edl,
    handle_export_edl,
    handle_list_sequences,
    handle_preview_timeline,
    handle_validate_sequence,
    list_resources,
    list_tools,
    read_resource,
)

DEMO = str(Path(__file__).parent.parent / "examples" / "demo_sequence.json")

INLINE = {
    "title": "Inline",
    "events": [
        {"id": 1, "startTime": 0, "endTime": 2, "reelName": "NA", "clipName": "a.mov"},
        {"id": 2, "startTime": 0, "endTime": 1, "reelName": "NA", "clipName": "b.mxf"},
    ],
}


# ============================================================
# Utility Functions
# ============================================================


class TestFormatDuration:
    def test_milliseconds(self):
        assert format_duration(0.25) == "250ms"

    def test_seconds(self):
        assert format_duration(3.5) == "3.50s"

    def test_minutes(self):
        assert format_duration(90.5) == "1m 30.5s"


# ============================================================
# Tool Handlers
# ============================================================


class TestHandleListSequences:
    async def test_finds_demo(self):
        result = await handle_list_sequences({"directory": str(Path(DEMO).parent)})
        assert "demo_sequence.json" in result[0].text

    async def test_empty_directory(self, tmp_path):
        result = await handle_list_sequences({"directory": str(tmp_path)})
        assert "No sequence files found" in result[0].text


class TestHandleComposeEdl:
    async def test_from_file(self):
        result = await handle_compose_edl({"filepath": DEMO})
        text = result[0].text
        assert text.startswith("```edl\nTITLE: Demo Title of project\n")
        assert "001   SOMEREE  AA/V  C" in text
        assert text.endswith("```")

    async def test_inline(self):
        result = await handle_compose_edl({"sequence": INLINE})
        text = result[0].text
        assert "001    AX  AA/V  C  00:00:00:00 00:00:02:00 00:00:00:00 00:00:02:00" in text
        assert "004  AX       NONE  C" in text


class TestHandleExportEdl:
    async def test_default_output_next_to_file(self, tmp_path):
        src = tmp_path / "demo.json"
        shutil.copy(DEMO, src)
        result = await handle_export_edl({"filepath": str(src)})
        out = tmp_path / "demo.edl"
        assert out.exists()
        assert out.read_text(encoding="utf-8").startswith("TITLE: Demo Title of project")
        assert "**Records**: 6" in result[0].text

    async def test_inline_with_output_path(self, tmp_path):
        out = tmp_path / "inline.edl"
        await handle_export_edl({"sequence": INLINE, "output_path": str(out)})
        assert "TITLE: Inline" in out.read_text(encoding="utf-8")


class TestHandlePreviewTimeline:
    async def test_table(self):
        result = await handle_preview_timeline({"filepath": DEMO})
        text = result[0].text
        assert "Record Timeline: Demo Title of project" in text
        assert "| 001 | SOMEREE | Something.mov | 25 |" in text
        assert "| 004, 005, 006 | AX |" in text
        assert "29.97" in text

    async def test_empty(self):
        result = await handle_preview_timeline({"sequence": {"title": "E", "events": []}})
        assert "no events" in result[0].text


class TestHandleValidateSequence:
    async def test_reports_issues(self):
        result = await handle_validate_sequence({"filepath": DEMO})
        text = result[0].text
        assert "Sequence is valid" in text
        assert "events[1]" in text  # SomeOtherReelName is truncated

    async def test_clean(self):
        result = await handle_validate_sequence({"sequence": INLINE})
        assert "No issues found" in result[0].text


# ============================================================
# Resources
# ============================================================


class TestResources:
    async def test_read_resource(self):
        text = await read_resource(f"file://{DEMO}")
        assert "Title: Demo Title of project" in text
        assert "Events: 4 (1 MXF)" in text
        assert "Records: 6" in text

    async def test_read_missing_resource(self):
        text = await read_resource("file:///no/such/file.json")
        assert "Sequence file not found" in text

    async def test_read_malformed_resource(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"events": [{"reelName": "R", "clipName": "a.mov"}]}), encoding="utf-8")
        text = await read_resource(f"file://{bad}")
        assert text.startswith("Invalid sequence")
        assert "events[0]: 'startTime' is missing" in text
        assert "Errors: 2" in text

    async def test_list_resources(self, tmp_path, monkeypatch):
        shutil.copy(DEMO, tmp_path / "demo.json")
        monkeypatch.setattr("server.PROJECTS_DIR", str(tmp_path))
        resources = await list_resources()
        assert [r.name for r in resources] == ["demo"]


# ============================================================
# Tool Dispatch (call_tool)
# ============================================================


class TestCallTool:
    async def test_lists_all_tools(self):
        tools = await list_tools()
        assert {t.name for t in tools} == {
            "list_sequences", "compose_edl", "export_edl", "preview_timeline", "validate_sequence",
        }

    async def test_unknown_tool(self):
        result = await call_tool("nonexistent_tool", {})
        assert "Unknown tool" in result[0].text

    async def test_file_not_found_handled(self):
        result = await call_tool("compose_edl", {"filepath": "/no/such/file.json"})
        assert "File not found" in result[0].text

    async def test_missing_input(self):
        result = await call_tool("compose_edl", {})
        assert "Provide either" in result[0].text

    async def test_inline_export_requires_output_path(self):
        result = await call_tool("export_edl", {"sequence": INLINE})
        assert "Validation error" in result[0].text

    async def test_strict_rejects_bad_offset(self):
        seq = json.loads(json.dumps(INLINE))
        seq["events"][0]["offset"] = "bad"
        result = await call_tool("compose_edl", {"sequence": seq, "strict": True})
        assert "Validation error: events[0]" in result[0].text

    async def test_unexpected_error_hides_details(self):
        seq = {"title": "T", "events": [{"startTime": 0, "endTime": 1, "clipName": "a.mov"}]}
        result = await call_tool("compose_edl", {"sequence": seq})
        assert result[0].text == "Error: AttributeError"

    async def test_dispatches_correctly(self):
        result = await call_tool("compose_edl", {"filepath": DEMO})
        assert "TITLE: Demo Title of project" in result[0].text
