"""
Sequence validation.

The composer formats whatever it is given. This module is the opt-in
check that runs before composing: ``validate_sequence`` reports every
problem it finds, ``ensure_valid`` stops at errors and names the event.
"""

from typing import Any, List

from .formatter import TAPE_LABEL_LENGTH
from .models import (
    NOT_AVAILABLE,
    Sequence,
    ValidationIssue,
    ValidationIssueType,
    ValidationResult,
)


class SequenceValidationError(ValueError):
    """Raised when a sequence has errors that would break composition."""

    def __init__(self, issues: List[ValidationIssue]):
        self.issues = issues
        first = issues[0] if issues else None
        message = str(first) if first else "Sequence is invalid"
        if len(issues) > 1:
            message += f" (and {len(issues) - 1} more error(s))"
        super().__init__(message)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_sequence(sequence: Sequence) -> ValidationResult:
    """Check every event of a sequence without raising.

    Errors are problems that make composition fail (missing fields,
    non-numeric times, non-positive fps, unparseable offsets, negative
    timecodes). Warnings
    are legal but suspicious (zero or negative durations, truncated reel
    names). Info notes a non-numeric fps that falls back to 25.
    """
    result = ValidationResult()
    issues = result.issues

    if not sequence.events:
        issues.append(ValidationIssue(
            issue_type=ValidationIssueType.EMPTY_SEQUENCE,
            severity="warning",
            message="Sequence has no events",
        ))

    master_cursor = 0.0
    cursor_known = True
    for index, event in enumerate(sequence.events):
        clip_name = event.clip_name if isinstance(event.clip_name, str) else None

        for attr, key in (("reel_name", "reelName"), ("clip_name", "clipName")):
            value = getattr(event, attr)
            if not isinstance(value, str) or not value:
                issues.append(ValidationIssue(
                    issue_type=ValidationIssueType.MISSING_FIELD,
                    severity="error",
                    message=f"'{key}' is missing or not a string",
                    event_index=index,
                    clip_name=clip_name,
                ))

        times_ok = True
        for attr, key in (("start_time", "startTime"), ("end_time", "endTime")):
            value = getattr(event, attr)
            if value is None:
                times_ok = False
                issues.append(ValidationIssue(
                    issue_type=ValidationIssueType.MISSING_FIELD,
                    severity="error",
                    message=f"'{key}' is missing",
                    event_index=index,
                    clip_name=clip_name,
                ))
            elif not _is_number(value):
                times_ok = False
                issues.append(ValidationIssue(
                    issue_type=ValidationIssueType.INVALID_TIME,
                    severity="error",
                    message=f"'{key}' must be a number of seconds, got {value!r}",
                    event_index=index,
                    clip_name=clip_name,
                ))

        frame_rate = event.frame_rate
        fps_ok = True
        if event.fps is not None and not frame_rate.is_specified:
            issues.append(ValidationIssue(
                issue_type=ValidationIssueType.UNSPECIFIED_FPS,
                severity="info",
                message=f"fps {event.fps!r} is not a usable rate, using {frame_rate.fps:g}",
                event_index=index,
                clip_name=clip_name,
            ))
        elif frame_rate.fps <= 0:
            # Numeric but negative, or rounds to 0.00
            fps_ok = False
            issues.append(ValidationIssue(
                issue_type=ValidationIssueType.INVALID_FPS,
                severity="error",
                message=f"fps must be positive, got {event.fps!r}",
                event_index=index,
                clip_name=clip_name,
            ))

        offset_seconds = None
        if fps_ok:
            try:
                offset_seconds = event.camera_offset.to_seconds(frame_rate.fps)
            except ValueError as e:
                issues.append(ValidationIssue(
                    issue_type=ValidationIssueType.INVALID_OFFSET,
                    severity="error",
                    message=str(e),
                    event_index=index,
                    clip_name=clip_name,
                ))

        if isinstance(event.reel_name, str) and event.reel_name != NOT_AVAILABLE:
            stripped = event.reel_name.replace(" ", "")
            if len(stripped) > TAPE_LABEL_LENGTH:
                issues.append(ValidationIssue(
                    issue_type=ValidationIssueType.REEL_TRUNCATED,
                    severity="warning",
                    message=(
                        f"Reel name '{event.reel_name}' is truncated to "
                        f"'{stripped[:TAPE_LABEL_LENGTH].upper()}'"
                    ),
                    event_index=index,
                    clip_name=clip_name,
                ))

        if not times_ok:
            # Master positions from here on are unknown
            cursor_known = False
            continue

        if event.duration <= 0:
            issues.append(ValidationIssue(
                issue_type=ValidationIssueType.NON_POSITIVE_DURATION,
                severity="warning",
                message=f"Duration is {event.duration:g}s (endTime <= startTime)",
                event_index=index,
                clip_name=clip_name,
            ))

        if offset_seconds is not None and min(event.start_time, event.end_time) + offset_seconds < 0:
            issues.append(ValidationIssue(
                issue_type=ValidationIssueType.NEGATIVE_TIMECODE,
                severity="error",
                message="Source timecode falls before 00:00:00:00",
                event_index=index,
                clip_name=clip_name,
            ))

        master_cursor += event.duration
        if cursor_known and master_cursor < 0:
            issues.append(ValidationIssue(
                issue_type=ValidationIssueType.NEGATIVE_TIMECODE,
                severity="error",
                message="Master timeline moves before 00:00:00:00",
                event_index=index,
                clip_name=clip_name,
            ))

    return result


def ensure_valid(sequence: Sequence) -> Sequence:
    """Return the sequence unchanged, or raise on the first error.

    Raises:
        SequenceValidationError: With the offending event index in the
            message, e.g. "events[2]: 'clipName' is missing or not a string".
    """
    result = validate_sequence(sequence)
    if not result.is_valid:
        raise SequenceValidationError(result.errors)
    return sequence
