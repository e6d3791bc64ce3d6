import logging
from typing import List, Optional

from pydantic import BaseModel

from edi_config import DEFAULT_DELIMITERS, Delimiters
from edi_errors import EmptyPayloadError

logger = logging.getLogger(__name__)


class Segment(BaseModel):
    """A single tokenized EDI segment."""
    segment_id: str
    elements: List[str]
    position: int
    raw_segment: str

    def get_element(self, position: int) -> Optional[str]:
        """Retrieves the value of an element by its position (1-based index)."""
        if 1 <= position <= len(self.elements):
            return self.elements[position - 1]
        return None


def clean_data(data: str) -> str:
    # Payloads are wire-wrapped; line breaks are never segment separators here.
    return data.replace('\r\n', '\n').replace('\r', '\n').replace('\n', '').strip()


def tokenize(raw: str, delimiters: Delimiters = DEFAULT_DELIMITERS) -> List[Segment]:
    segments: List[Segment] = []
    raw_segments = clean_data(raw).split(delimiters.segment)
    for seg_str in raw_segments:
        clean_seg = seg_str.strip()
        if not clean_seg:
            continue
        parts = clean_seg.split(delimiters.element)
        segments.append(Segment(
            segment_id=parts[0],
            elements=parts[1:],
            position=len(segments) + 1,
            raw_segment=clean_seg,
        ))

    if not segments:
        raise EmptyPayloadError()
    logger.debug(f"Tokenized payload into {len(segments)} segments.")
    return segments


def split_composite(value: Optional[str], delimiters: Delimiters = DEFAULT_DELIMITERS) -> List[str]:
    """
    Splits a composite element into its components.

    The component separator is tried first; payloads that use the declared
    sub-element delimiter instead are split on that. An absent value yields
    an empty list.
    """
    if value is None:
        return []
    if delimiters.component in value:
        return value.split(delimiters.component)
    return value.split(delimiters.sub_element)


def component(parts: List[str], position: int) -> Optional[str]:
    if 1 <= position <= len(parts):
        return parts[position - 1]
    return None
