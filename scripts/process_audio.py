import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from audio_chapter_blog import PipelineError, load_config, process_audio

logger = logging.getLogger("process_audio")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Upload an audio file, transcribe it, summarize it into chapters and publish a blog post.",
    )
    parser.add_argument("audio", help="Path to the local audio file")
    return parser.parse_args()


def main() -> int:
    args = parse_args()

    load_dotenv()
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config()
        result = process_audio(Path(args.audio), config=config)
    except (PipelineError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        return 1

    print(f"Post created: {result.handle.url or result.handle.id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
