from __future__ import annotations

import pytest

from audio_chapter_blog.chapters import format_chapters, format_timestamp
from audio_chapter_blog.models import SummarizedUtterance, Utterance


def _summarized(start: float, text: str, summary: str = "summary") -> SummarizedUtterance:
    return SummarizedUtterance(utterance=Utterance(start=start, text=text), summary=summary)


def test_format_chapters_renders_zero_offset() -> None:
    assert format_chapters([_summarized(0, "hi")]) == ["00:00:00 hi"]


def test_format_chapters_renders_hours_minutes_seconds() -> None:
    assert format_chapters([_summarized(3725, "x")]) == ["01:02:05 x"]


def test_format_chapters_uses_original_text_not_summary() -> None:
    lines = format_chapters([_summarized(61, "the words spoken", summary="a digest")])
    assert lines == ["00:01:01 the words spoken"]


def test_format_chapters_keeps_order_and_length() -> None:
    items = [_summarized(30, "b"), _summarized(5, "a"), _summarized(90, "c")]
    assert format_chapters(items) == ["00:00:30 b", "00:00:05 a", "00:01:30 c"]


def test_format_chapters_accepts_plain_utterances() -> None:
    assert format_chapters([Utterance(start=12.0, text="plain")]) == ["00:00:12 plain"]


def test_format_timestamp_truncates_fractions() -> None:
    assert format_timestamp(59.999) == "00:00:59"


def test_format_timestamp_wraps_after_a_day(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("WARNING"):
        assert format_timestamp(86400 + 5) == "00:00:05"
    assert "exceeds 24h" in caplog.text


@pytest.mark.parametrize("value", [-1, float("nan"), "10", None, True])
def test_format_timestamp_rejects_malformed_offsets(value: object) -> None:
    with pytest.raises(ValueError):
        format_timestamp(value)  # type: ignore[arg-type]
