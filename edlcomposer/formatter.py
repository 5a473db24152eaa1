"""
Event formatter - renders one clip event as EDL records.

Each event becomes either a single AA/V record or, for MXF media, three
linked records (video, audio A1/A2, audio A3/A4) that share the same
source and master timecodes. Formatting is pure: the caller passes in the
event's master-in position and first record number and gets back the
records plus the values the next event starts from.

Standard record with a reel:

    001   SOMEREE  AA/V  C  00:00:38:08 00:00:48:08 00:00:00:00 00:00:10:00
    * FROM CLIP NAME: Something.mov
    * COMMENT:
    FINAL CUT PRO REEL: SomeReelName REPLACED BY: SOMEREE
"""

from typing import List

from .models import (
    NOT_AVAILABLE,
    ClipEvent,
    RecordTimecodes,
    RecordVariant,
    RenderedEvent,
)
from .timecode import seconds_to_timecode

# Label used for reel-less sources (auxiliary source)
AUX_TAPE_LABEL = "AX"
TAPE_LABEL_LENGTH = 7

# Placeholder level written on MXF audio records; not measured loudness
AUDIO_LEVEL = "-8.98 DB"


def format_record_number(number: int) -> str:
    """Zero-pad to three digits; larger numbers keep all their digits."""
    return f"{number:03d}"


def tape_label(reel_name: str) -> str:
    """Derive the 7-character EDL tape label for a reel name.

    EDL reel columns can't hold spaces, so spaces are dropped before
    truncating. "NA" maps to the auxiliary label.
    """
    if reel_name == NOT_AVAILABLE:
        return AUX_TAPE_LABEL
    return reel_name.replace(" ", "")[:TAPE_LABEL_LENGTH].upper()


def _standard_record(event: ClipEvent, label: str, timecodes: RecordTimecodes,
                     number: int) -> str:
    num = format_record_number(number)
    if event.has_reel:
        lines = [
            f"{num}   {label}  AA/V  C  {timecodes.columns}",
            f"* FROM CLIP NAME: {event.clip_name}",
            "* COMMENT:",
            f"FINAL CUT PRO REEL: {event.reel_name} REPLACED BY: {label}",
        ]
    else:
        lines = [
            f"{num}    {AUX_TAPE_LABEL}  AA/V  C  {timecodes.columns}",
            f"* FROM CLIP NAME: {event.clip_name}",
        ]
    return "\n".join(lines) + "\n\n"


def _audio_level_lines(source_in: str, channels: List[str]) -> List[str]:
    return [
        f"* AUDIO LEVEL AT {source_in} IS {AUDIO_LEVEL}  (REEL {AUX_TAPE_LABEL} {ch})"
        for ch in channels
    ]


def _wrapped_media_records(event: ClipEvent, timecodes: RecordTimecodes,
                           first_number: int) -> List[str]:
    """MXF clips: video and audio tracks as separate records, always reel-less."""
    clip_line = f"* FROM CLIP NAME: {event.clip_name}"

    video = [
        f"{format_record_number(first_number)}    {AUX_TAPE_LABEL}  V  C  {timecodes.columns}",
        clip_line,
    ]
    audio_a = [
        f"{format_record_number(first_number + 1)}    {AUX_TAPE_LABEL}  AA  C  {timecodes.columns}",
        clip_line,
        *_audio_level_lines(timecodes.source_in, ["A1", "A2"]),
    ]
    audio_b = [
        f"{format_record_number(first_number + 2)}  {AUX_TAPE_LABEL}       NONE  C        {timecodes.columns}",
        clip_line,
        *_audio_level_lines(timecodes.source_in, ["A3", "A4"]),
        "AUD  3    4",
    ]
    return ["\n".join(lines) + "\n\n" for lines in (video, audio_a, audio_b)]


def render_event(event: ClipEvent, master_in: float, first_record: int = 1) -> RenderedEvent:
    """Render one event placed at ``master_in`` on the record timeline.

    Args:
        event: The clip event to render
        master_in: Record-timeline position in seconds where the event starts
        first_record: Record number of the first record this event emits

    Returns:
        RenderedEvent with the record strings, the event's master-out (the
        next event's master-in) and the next free record number.

    Raises:
        ValueError: If the offset is not a valid timecode or a timecode
            would be negative.
        TypeError, AttributeError: If a required field is missing.
    """
    fps = event.frame_rate.fps
    offset = event.camera_offset.to_seconds(fps)
    master_out = master_in + (event.end_time - event.start_time)

    timecodes = RecordTimecodes(
        source_in=seconds_to_timecode(event.start_time + offset, fps),
        source_out=seconds_to_timecode(event.end_time + offset, fps),
        master_in=seconds_to_timecode(master_in, fps),
        master_out=seconds_to_timecode(master_out, fps),
    )

    variant = event.variant
    if variant == RecordVariant.WRAPPED_MEDIA:
        label = AUX_TAPE_LABEL
        records = _wrapped_media_records(event, timecodes, first_record)
    else:
        label = tape_label(event.reel_name)
        records = [_standard_record(event, label, timecodes, first_record)]

    return RenderedEvent(
        records=records,
        master_out=master_out,
        next_record=first_record + len(records),
        variant=variant,
        tape_label=label,
        timecodes=timecodes,
    )
