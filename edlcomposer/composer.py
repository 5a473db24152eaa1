"""
Sequence composer - assembles a complete EDL document.

The composer folds over the sequence's events in order, threading two
values through the loop: the master cursor (seconds elapsed on the record
timeline) and the next record number. Both start fresh on every call, so a
composer can be reused and always yields the same document.

Example:
    seq = Sequence.from_dict({
        "title": "Demo",
        "events": [{"id": 1, "startTime": 10, "endTime": 20,
                    "reelName": "SomeReelName", "clipName": "Something.mov",
                    "offset": "00:00:28:08", "fps": 25}],
    })
    EDLComposer(seq).compose()

produces:

    TITLE: Demo
    FCM: NON-DROP FRAME

    001   SOMEREE  AA/V  C  00:00:38:08 00:00:48:08 00:00:00:00 00:00:10:00
    * FROM CLIP NAME: Something.mov
    * COMMENT:
    FINAL CUT PRO REEL: SomeReelName REPLACED BY: SOMEREE

"""

import logging
from typing import Any, Dict, Iterator, List, Tuple, Union

from .formatter import render_event
from .models import ClipEvent, EventPlacement, RenderedEvent, Sequence

logger = logging.getLogger(__name__)


class EDLComposer:
    """Compose an Edit Decision List from a Sequence."""

    def __init__(self, sequence: Sequence):
        self.sequence = sequence

    @property
    def header(self) -> str:
        return f"TITLE: {self.sequence.title}\nFCM: NON-DROP FRAME\n\n"

    def _render(self) -> Iterator[Tuple[int, ClipEvent, float, RenderedEvent]]:
        """Yield (index, event, master_in, rendered) for each event in order."""
        master_cursor = 0.0
        next_record = 1
        for index, event in enumerate(self.sequence.events):
            rendered = render_event(event, master_cursor, next_record)
            logger.debug(
                "event %d (%s): records %d-%d, master %.3f-%.3f",
                index, event.clip_name, next_record, rendered.next_record - 1,
                master_cursor, rendered.master_out,
            )
            yield index, event, master_cursor, rendered
            master_cursor = rendered.master_out
            next_record = rendered.next_record

    def compose(self) -> str:
        """Return the full EDL document: header followed by every record."""
        body = "".join(rendered.text for _, _, _, rendered in self._render())
        return self.header + body

    def placements(self) -> List[EventPlacement]:
        """Report where each event lands on the record timeline."""
        result = []
        for index, event, master_in, rendered in self._render():
            first = rendered.next_record - len(rendered.records)
            result.append(EventPlacement(
                index=index,
                event_id=event.id,
                clip_name=event.clip_name,
                tape_label=rendered.tape_label,
                variant=rendered.variant,
                record_numbers=list(range(first, rendered.next_record)),
                fps=event.frame_rate.fps,
                timecodes=rendered.timecodes,
                master_in_seconds=master_in,
                master_out_seconds=rendered.master_out,
            ))
        return result

    @property
    def record_count(self) -> int:
        """Number of records the document will contain."""
        return sum(event.variant.record_count for event in self.sequence.events)


def compose_edl(sequence: Union[Sequence, Dict[str, Any]]) -> str:
    """Compose an EDL from a Sequence or its JSON-shaped dict."""
    if not isinstance(sequence, Sequence):
        sequence = Sequence.from_dict(sequence)
    return EDLComposer(sequence).compose()
