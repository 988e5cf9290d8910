from __future__ import annotations

import logging
import math
from numbers import Real
from typing import Iterable, List, Union

from .models import ChapterLine, SummarizedUtterance, Utterance

logger = logging.getLogger(__name__)

_SECONDS_PER_DAY = 24 * 60 * 60


def format_timestamp(seconds: float) -> str:
    """Render ``seconds`` as a zero-padded ``HH:MM:SS`` string.

    Fractions are truncated. Offsets of a day or more wrap around (``86400``
    renders as ``00:00:00``).
    """

    if isinstance(seconds, bool) or not isinstance(seconds, Real):
        raise ValueError(f"start offset must be a number, got {seconds!r}")
    if math.isnan(seconds) or math.isinf(seconds):
        raise ValueError(f"start offset must be finite, got {seconds!r}")
    if seconds < 0:
        raise ValueError(f"start offset must not be negative, got {seconds!r}")

    total = int(math.floor(seconds))
    if total >= _SECONDS_PER_DAY:
        logger.warning("Chapter offset %ss exceeds 24h and wraps around", total)
        total %= _SECONDS_PER_DAY

    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_chapters(items: Iterable[Union[SummarizedUtterance, Utterance]]) -> List[ChapterLine]:
    """Turn utterances into ``"HH:MM:SS text"`` chapter lines, keeping order.

    Lines carry the original utterance text, not its summary.
    """

    return [f"{format_timestamp(item.start)} {item.text}" for item in items]


__all__ = ["format_chapters", "format_timestamp"]
