"""
EDL Composer - build CMX-style Edit Decision Lists from clip sequences.

This package provides tools to:
- Convert between seconds and HH:MM:SS:FF timecode
- Render clip events as EDL records (standard and MXF video/audio variants)
- Compose a full EDL document on a continuous record timeline
- Validate sequences before composing
- Load sequence JSON files and write .edl files
"""

from .composer import EDLComposer, compose_edl
from .files import export_edl, load_sequence, parse_sequence, write_edl
from .formatter import format_record_number, render_event, tape_label
from .models import (
    ClipEvent,
    EventPlacement,
    FrameRate,
    Offset,
    RecordTimecodes,
    RecordVariant,
    RenderedEvent,
    Sequence,
    ValidationIssue,
    ValidationIssueType,
    ValidationResult,
)
from .timecode import DEFAULT_FPS, seconds_to_timecode, timecode_to_seconds
from .validation import SequenceValidationError, ensure_valid, validate_sequence

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",

    # Timecode
    "DEFAULT_FPS",
    "seconds_to_timecode",
    "timecode_to_seconds",

    # Enums
    "RecordVariant",
    "ValidationIssueType",

    # Models
    "ClipEvent",
    "Sequence",
    "FrameRate",
    "Offset",
    "RecordTimecodes",
    "RenderedEvent",
    "EventPlacement",
    "ValidationIssue",
    "ValidationResult",

    # Formatter
    "render_event",
    "tape_label",
    "format_record_number",

    # Composer
    "EDLComposer",
    "compose_edl",

    # Validation
    "validate_sequence",
    "ensure_valid",
    "SequenceValidationError",

    # Files
    "parse_sequence",
    "load_sequence",
    "write_edl",
    "export_edl",
]
