"""
Data models for EDL sequences.

Provides the input model (a titled, ordered list of clip events), the closed
variants that normalise loosely typed input fields, and the result types
produced while composing and validating an Edit Decision List.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Dict, List, Optional

from .timecode import DEFAULT_FPS, timecode_to_seconds

# Sentinel used by reelName and offset for "not available"
NOT_AVAILABLE = "NA"

WRAPPED_MEDIA_EXTENSION = ".mxf"

# ============================================================================
# ENUMS
# ============================================================================


class RecordVariant(Enum):
    """How an event is laid out as EDL records."""
    STANDARD = "standard"            # one AA/V record
    WRAPPED_MEDIA = "wrapped_media"  # MXF: one video record + two audio records

    @classmethod
    def from_clip_name(cls, clip_name: str) -> 'RecordVariant':
        """Select the variant from the clip's file extension, ignoring case.

        Examples:
            RecordVariant.from_clip_name("A001C003.MXF")  -> WRAPPED_MEDIA
            RecordVariant.from_clip_name("interview.mov") -> STANDARD
            RecordVariant.from_clip_name("no_extension")  -> STANDARD
        """
        if PurePosixPath(clip_name.lower()).suffix == WRAPPED_MEDIA_EXTENSION:
            return cls.WRAPPED_MEDIA
        return cls.STANDARD

    @property
    def record_count(self) -> int:
        """Number of EDL records (and record numbers) one event consumes."""
        return 3 if self == RecordVariant.WRAPPED_MEDIA else 1


class ValidationIssueType(Enum):
    """Types of sequence validation issues."""
    MISSING_FIELD = "missing_field"
    INVALID_TIME = "invalid_time"
    NON_POSITIVE_DURATION = "non_positive_duration"
    INVALID_OFFSET = "invalid_offset"
    INVALID_FPS = "invalid_fps"
    NEGATIVE_TIMECODE = "negative_timecode"
    UNSPECIFIED_FPS = "unspecified_fps"
    REEL_TRUNCATED = "reel_truncated"
    EMPTY_SEQUENCE = "empty_sequence"


# ============================================================================
# INPUT NORMALISATION - closed variants for fps and offset
# ============================================================================

@dataclass(frozen=True)
class FrameRate:
    """
    An event's frame rate: either a numeric rate or unspecified.

    Numeric input is rounded to two decimals (29.97 stays 29.97, 25 becomes
    25.0). Anything else, including strings such as "25p" and a zero rate,
    is unspecified and falls back to DEFAULT_FPS.
    """
    rate: Optional[float] = None

    @classmethod
    def from_value(cls, value: Any) -> 'FrameRate':
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not value:
            return cls()
        return cls(round(float(value), 2))

    @property
    def is_specified(self) -> bool:
        return self.rate is not None

    @property
    def fps(self) -> float:
        """The rate to format timecodes with."""
        return self.rate if self.rate is not None else float(DEFAULT_FPS)


@dataclass(frozen=True)
class Offset:
    """
    Camera timecode offset: a timecode string, or none at all.

    Missing, empty, 0 and "NA" offsets all mean zero. The offset only shifts
    the displayed source timecodes; it never moves the record timeline.
    """
    timecode: Optional[Any] = None

    @classmethod
    def from_value(cls, value: Any) -> 'Offset':
        if not value or value == NOT_AVAILABLE:
            return cls()
        return cls(value)

    @property
    def is_zero(self) -> bool:
        return self.timecode is None

    def to_seconds(self, fps: float) -> float:
        """Convert to seconds. Raises ValueError for a malformed timecode."""
        if self.timecode is None:
            return 0.0
        return timecode_to_seconds(self.timecode, fps)


# ============================================================================
# CORE MODELS
# ============================================================================

@dataclass(frozen=True)
class ClipEvent:
    """
    One clip placed on the sequence.

    ``start_time``/``end_time`` are the source in/out points in seconds.
    ``offset`` and ``fps`` keep their raw input values; ``camera_offset``
    and ``frame_rate`` give the normalised forms.
    """
    start_time: Any
    end_time: Any
    reel_name: Any
    clip_name: Any
    id: Any = None
    offset: Any = None
    fps: Any = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ClipEvent':
        """Build from the JSON event shape (camelCase keys).

        Missing required keys are kept as None so that the failure surfaces
        where the value is first used.
        """
        return cls(
            id=data.get('id'),
            start_time=data.get('startTime'),
            end_time=data.get('endTime'),
            reel_name=data.get('reelName'),
            clip_name=data.get('clipName'),
            offset=data.get('offset'),
            fps=data.get('fps'),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'startTime': self.start_time,
            'endTime': self.end_time,
            'reelName': self.reel_name,
            'clipName': self.clip_name,
        }
        if self.offset is not None:
            data['offset'] = self.offset
        if self.fps is not None:
            data['fps'] = self.fps
        return data

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    @property
    def has_reel(self) -> bool:
        return self.reel_name != NOT_AVAILABLE

    @property
    def frame_rate(self) -> FrameRate:
        return FrameRate.from_value(self.fps)

    @property
    def camera_offset(self) -> Offset:
        return Offset.from_value(self.offset)

    @property
    def variant(self) -> RecordVariant:
        return RecordVariant.from_clip_name(self.clip_name)


@dataclass
class Sequence:
    """A titled, ordered list of clip events. Events are used in list order."""
    title: str
    events: List[ClipEvent] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Sequence':
        """Build from the JSON sequence shape.

        Raises:
            ValueError: If ``data`` or any event is not a JSON object, or
                ``events`` is not a list.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Sequence must be a JSON object, got {type(data).__name__}")
        raw_events = data.get('events', [])
        if raw_events is None:
            raw_events = []
        if not isinstance(raw_events, list):
            raise ValueError("Sequence 'events' must be a list")

        events = []
        for index, raw in enumerate(raw_events):
            if not isinstance(raw, dict):
                raise ValueError(f"events[{index}] must be a JSON object")
            events.append(ClipEvent.from_dict(raw))

        title = data.get('title')
        return cls(title="" if title is None else str(title), events=events)

    def to_dict(self) -> Dict[str, Any]:
        return {'title': self.title, 'events': [e.to_dict() for e in self.events]}

    @property
    def total_duration(self) -> float:
        """Length of the record timeline in seconds."""
        return sum(e.duration for e in self.events)


# ============================================================================
# COMPOSITION RESULTS
# ============================================================================

@dataclass(frozen=True)
class RecordTimecodes:
    """The four timecode columns shared by every record of one event."""
    source_in: str
    source_out: str
    master_in: str
    master_out: str

    @property
    def columns(self) -> str:
        return f"{self.source_in} {self.source_out} {self.master_in} {self.master_out}"


@dataclass
class RenderedEvent:
    """
    Output of formatting a single event.

    ``next_record`` is the record number the following event starts at and
    ``master_out`` is its master-in.
    """
    records: List[str]
    master_out: float
    next_record: int
    variant: RecordVariant
    tape_label: str
    timecodes: RecordTimecodes

    @property
    def text(self) -> str:
        return "".join(self.records)


@dataclass
class EventPlacement:
    """Where one event landed on the record timeline."""
    index: int
    event_id: Any
    clip_name: str
    tape_label: str
    variant: RecordVariant
    record_numbers: List[int]
    fps: float
    timecodes: RecordTimecodes
    master_in_seconds: float
    master_out_seconds: float

    @property
    def duration_seconds(self) -> float:
        return self.master_out_seconds - self.master_in_seconds


# ============================================================================
# VALIDATION
# ============================================================================

@dataclass
class ValidationIssue:
    """
    A single problem found in a sequence.

    ``event_index`` is the position in ``Sequence.events``, or None for
    sequence-level issues.
    """
    issue_type: ValidationIssueType
    severity: str  # "error", "warning", "info"
    message: str
    event_index: Optional[int] = None
    clip_name: Optional[str] = None

    @property
    def location(self) -> str:
        return "sequence" if self.event_index is None else f"events[{self.event_index}]"

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


@dataclass
class ValidationResult:
    """Result of sequence validation."""
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.error_count == 0

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == "error"]

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len([i for i in self.issues if i.severity == "warning"])

    def summary(self) -> str:
        """Generate a summary string."""
        status = "valid" if self.is_valid else "invalid"
        return (
            f"Sequence is {status} | "
            f"Errors: {self.error_count} | Warnings: {self.warning_count} | "
            f"Info: {len(self.issues) - self.error_count - self.warning_count}"
        )
