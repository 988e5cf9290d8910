from __future__ import annotations

from audio_chapter_blog.html_render import build_post, render_summary_html, render_transcript_html


def test_render_summary_html_handles_markdown_structure() -> None:
    summary = "# Overview\n\nThe talk covers **testing** and\nreleases.\n\n- first point\n- second point\n\n1. step one\n2. step two"

    html = render_summary_html(summary)

    assert html.splitlines() == [
        "<h3>Overview</h3>",
        "<p>The talk covers <strong>testing</strong> and releases.</p>",
        "<ul><li>first point</li><li>second point</li></ul>",
        "<ol><li>step one</li><li>step two</li></ol>",
    ]


def test_render_summary_html_escapes_markup() -> None:
    assert render_summary_html("a < b & c") == "<p>a &lt; b &amp; c</p>"


def test_render_transcript_html_splits_paragraphs() -> None:
    assert render_transcript_html("first part.\n\nsecond part.") == "<p>first part.</p>\n<p>second part.</p>"


def test_build_post_contains_digest_transcript_and_audio_link() -> None:
    post = build_post(
        "Transcription and Summary",
        "The speakers discuss the roadmap.",
        "Hello everyone. Welcome back.",
        "https://minio.local:9000/audio-files/ep1.mp3",
    )

    assert post.title == "Transcription and Summary"
    assert "<h2>Chapter Summary</h2>" in post.html
    assert "<p>The speakers discuss the roadmap.</p>" in post.html
    assert "<h2>Full Transcription</h2>" in post.html
    assert "Hello everyone. Welcome back." in post.html
    assert '<a href="https://minio.local:9000/audio-files/ep1.mp3">Download Audio</a>' in post.html
    assert post.html.index("Chapter Summary") < post.html.index("Full Transcription") < post.html.index("Audio File")


def test_render_summary_html_splits_blocks_without_blank_lines() -> None:
    summary = "Intro line\n## Topics\n- alpha **beta**\n2) gamma\nClosing <note>"

    assert render_summary_html(summary).splitlines() == [
        "<p>Intro line</p>",
        "<h4>Topics</h4>",
        "<ul><li>alpha <strong>beta</strong></li></ul>",
        "<ol><li>gamma</li></ol>",
        "<p>Closing &lt;note&gt;</p>",
    ]
