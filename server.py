#!/usr/bin/env python3
"""
EDL MCP Server — compose Edit Decision Lists from clip sequences.

Provides tools to compose, export, preview and validate EDLs from sequence
JSON (a file path or an inline object), plus MCP resources for discovering
sequence files.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Sequence

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Resource, TextContent, Tool

from edlcomposer.composer import EDLComposer
from edlcomposer.files import (
    SEQUENCE_EXTENSIONS,
    default_output_path,
    find_sequence_files,
    load_sequence,
    validate_directory,
    validate_filepath,
    validate_output_path,
    write_edl,
)
from edlcomposer.models import RecordVariant
from edlcomposer.models import Sequence as EDLSequence
from edlcomposer.validation import ensure_valid, validate_sequence

logging.basicConfig(level=os.environ.get("EDL_LOG_LEVEL", "INFO").upper())
logger = logging.getLogger("edl-mcp-server")

server = Server("edl-mcp-server")
PROJECTS_DIR = os.environ.get("EDL_PROJECTS_DIR", os.path.expanduser("~/Movies"))


# ============================================================================
# UTILITIES
# ============================================================================

def format_duration(seconds: float) -> str:
    """Format seconds into human-readable duration."""
    if seconds < 1:
        return f"{seconds*1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.2f}s"
    return f"{int(seconds // 60)}m {seconds % 60:.1f}s"


def _resolve_sequence(arguments: dict) -> EDLSequence:
    """Build the sequence from an inline ``sequence`` object or a ``filepath``."""
    strict = arguments.get("strict", False)
    if arguments.get("sequence") is not None:
        sequence = EDLSequence.from_dict(arguments["sequence"])
        if strict:
            ensure_valid(sequence)
        return sequence
    if arguments.get("filepath"):
        return load_sequence(arguments["filepath"], strict=strict)
    raise ValueError("Provide either 'filepath' or 'sequence'")


def _sequence_summary(sequence: EDLSequence) -> str:
    mxf = len([e for e in sequence.events if isinstance(e.clip_name, str)
               and e.variant == RecordVariant.WRAPPED_MEDIA])
    return (
        f"Title: {sequence.title}\n"
        f"Events: {len(sequence.events)} ({mxf} MXF)\n"
        f"Records: {len(sequence.events) + 2 * mxf}\n"
        f"Duration: {format_duration(sequence.total_duration)}"
    )


_SEQUENCE_INPUT = {
    "filepath": {"type": "string", "description": "Path to a sequence JSON file"},
    "sequence": {
        "type": "object",
        "description": "Inline sequence: {title, events: [{id, startTime, endTime, reelName, clipName, offset?, fps?}]}",
    },
}


# ============================================================================
# MCP RESOURCES — File discovery
# ============================================================================

@server.list_resources()
async def list_resources() -> list[Resource]:
    """Expose discovered sequence files as MCP resources."""
    resources = []
    for f in find_sequence_files(PROJECTS_DIR):
        p = Path(f)
        resources.append(Resource(
            uri=f"file://{f}",
            name=p.stem,
            description=f"EDL sequence: {p.name}",
            mimeType="application/json",
        ))
    return resources


@server.read_resource()
async def read_resource(uri: str) -> str:
    """Read a sequence file and return a summary."""
    filepath = str(uri).replace("file://", "")
    try:
        sequence = load_sequence(filepath)
    except (ValueError, FileNotFoundError) as e:
        return str(e)
    result = validate_sequence(sequence)
    if not result.is_valid:
        # Durations can't be summed until the errors are fixed
        errors = "\n".join(f"  - {issue}" for issue in result.errors)
        return f"Invalid sequence: {filepath}\n{result.summary()}\n{errors}"
    return f"{_sequence_summary(sequence)}\nPath: {filepath}"


# ============================================================================
# TOOL DEFINITIONS
# ============================================================================

@server.list_tools()
async def list_tools() -> list[Tool]:
    return [
        Tool(
            name="list_sequences",
            description="List sequence JSON files in a directory",
            inputSchema={
                "type": "object",
                "properties": {
                    "directory": {"type": "string", "description": "Directory to search (default: ~/Movies)"}
                }
            }
        ),
        Tool(
            name="compose_edl",
            description="Compose an EDL (CMX-style, non-drop frame) from a sequence and return its text",
            inputSchema={
                "type": "object",
                "properties": {
                    **_SEQUENCE_INPUT,
                    "strict": {"type": "boolean", "description": "Reject sequences with validation errors"},
                },
            }
        ),
        Tool(
            name="export_edl",
            description="Compose an EDL from a sequence and write it to a .edl file",
            inputSchema={
                "type": "object",
                "properties": {
                    **_SEQUENCE_INPUT,
                    "output_path": {"type": "string", "description": "Destination .edl path (default: next to the sequence file)"},
                    "strict": {"type": "boolean", "description": "Reject sequences with validation errors"},
                },
            }
        ),
        Tool(
            name="preview_timeline",
            description="Show where each event lands on the record timeline: record numbers, tape label, source and master timecodes",
            inputSchema={
                "type": "object",
                "properties": dict(_SEQUENCE_INPUT),
            }
        ),
        Tool(
            name="validate_sequence",
            description="Check a sequence for missing fields, bad offsets, zero-length events and truncated reel names",
            inputSchema={
                "type": "object",
                "properties": dict(_SEQUENCE_INPUT),
            }
        ),
    ]


# ============================================================================
# TOOL HANDLERS
# ============================================================================

async def handle_list_sequences(arguments: dict) -> Sequence[TextContent]:
    directory = arguments.get("directory", PROJECTS_DIR)
    resolved_dir = validate_directory(directory)
    files = find_sequence_files(resolved_dir)
    if not files:
        return [TextContent(type="text", text=f"No sequence files found in {directory}")]
    return [TextContent(type="text", text=f"Found {len(files)} sequence file(s):\n" + "\n".join(f"  - {f}" for f in files))]


async def handle_compose_edl(arguments: dict) -> Sequence[TextContent]:
    sequence = _resolve_sequence(arguments)
    edl = EDLComposer(sequence).compose()
    return [TextContent(type="text", text=f"```edl\n{edl}```")]


async def handle_export_edl(arguments: dict) -> Sequence[TextContent]:
    sequence = _resolve_sequence(arguments)
    output_path = arguments.get("output_path")
    if not output_path:
        if not arguments.get("filepath"):
            raise ValueError("'output_path' is required for inline sequences")
        output_path = default_output_path(validate_filepath(arguments["filepath"], SEQUENCE_EXTENSIONS))
    output_path = validate_output_path(output_path)
    composer = EDLComposer(sequence)
    write_edl(composer.compose(), output_path)
    return [TextContent(type="text", text=(
        f"# Exported EDL\n\n"
        f"- **Title**: {sequence.title}\n"
        f"- **Events**: {len(sequence.events)}\n"
        f"- **Records**: {composer.record_count}\n\n"
        f"Saved to: `{output_path}`\n\n"
        f"**Next step**: Import the EDL in your NLE (File > Import > Timeline) and relink media"
    ))]


async def handle_preview_timeline(arguments: dict) -> Sequence[TextContent]:
    sequence = _resolve_sequence(arguments)
    placements = EDLComposer(sequence).placements()
    if not placements:
        return [TextContent(type="text", text="Sequence has no events")]
    result = (
        f"# Record Timeline: {sequence.title}\n\n"
        "| Rec | Tape | Clip | fps | Source In | Source Out | Master In | Master Out |\n"
        "|-----|------|------|-----|-----------|------------|-----------|------------|\n"
    )
    for p in placements:
        recs = ", ".join(f"{n:03d}" for n in p.record_numbers)
        tc = p.timecodes
        result += (
            f"| {recs} | {p.tape_label} | {p.clip_name} | {p.fps:g} | "
            f"{tc.source_in} | {tc.source_out} | {tc.master_in} | {tc.master_out} |\n"
        )
    result += f"\nTotal duration: {format_duration(sequence.total_duration)}"
    return [TextContent(type="text", text=result)]


async def handle_validate_sequence(arguments: dict) -> Sequence[TextContent]:
    sequence = _resolve_sequence({**arguments, "strict": False})
    result = validate_sequence(sequence)
    text = f"# Sequence Validation: {sequence.title}\n\n{result.summary()}\n"
    if result.issues:
        text += "\n| Severity | Where | Issue |\n|----------|-------|-------|\n"
        text += "\n".join(f"| {i.severity} | {i.location} | {i.message} |" for i in result.issues)
    else:
        text += "\nNo issues found."
    return [TextContent(type="text", text=text)]


# ============================================================================
# TOOL DISPATCH
# ============================================================================

TOOL_HANDLERS = {
    "list_sequences": handle_list_sequences,
    "compose_edl": handle_compose_edl,
    "export_edl": handle_export_edl,
    "preview_timeline": handle_preview_timeline,
    "validate_sequence": handle_validate_sequence,
}


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> Sequence[TextContent]:
    handler = TOOL_HANDLERS.get(name)
    if not handler:
        return [TextContent(type="text", text=f"Unknown tool: {name}")]
    try:
        return await handler(arguments or {})
    except FileNotFoundError as e:
        return [TextContent(type="text", text=f"File not found: {e}")]
    except ValueError as e:
        return [TextContent(type="text", text=f"Validation error: {e}")]
    except Exception as e:
        logger.exception("Error in tool %s", name)
        return [TextContent(type="text", text=f"Error: {type(e).__name__}")]


# ============================================================================
# MAIN
# ============================================================================

async def main():
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main_sync():
    """Synchronous entry point for use as a console script."""
    import asyncio
    asyncio.run(main())


if __name__ == "__main__":
    main_sync()
