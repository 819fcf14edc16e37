from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from loguru import logger

from . import __version__
from .config import ENV_PATH, configure_logging
from .errors import TranscribeError, format_error_chain
from .pipeline import run_pipeline


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="ytscribe",
        description="Download a video's audio and transcribe it with Groq Whisper.",
    )
    p.add_argument("url", help="YouTube video URL")
    p.add_argument("-o", "--output", default=None,
                   help="Output text file name (optional; default: stdout + clipboard)")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        configure_logging()
        if ENV_PATH:
            logger.debug(f"Loaded environment from {ENV_PATH}")
        run_pipeline(args.url, args.output)
    except TranscribeError as exc:
        print(format_error_chain(exc), file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
