"""Entry point that runs one scam-risk analysis from the command line."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
import sys

from dotenv import load_dotenv

# Ensure project root is on sys.path when running as a script
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from scamguard.analyzer import ScamAnalyzer
from scamguard.attachments import ImageFile
from scamguard.config import Settings
from scamguard.errors import AnalysisError

load_dotenv()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Analyze chat text and screenshots for scam risk.")
    parser.add_argument("--text", help="Message or conversation text (read from stdin when omitted)")
    parser.add_argument(
        "--image",
        action="append",
        default=[],
        type=Path,
        help="Screenshot to attach; repeat for several images",
    )
    parser.add_argument("--model", help="Override GEMINI_MODEL for this run")
    parser.add_argument("--pretty", action="store_true", help="Indent the JSON output")
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = Settings()
    if args.model:
        settings = settings.model_copy(update={"gemini_model": args.model})
    configure_logging(settings.log_level)

    text = args.text if args.text is not None else sys.stdin.read()
    images = [ImageFile.from_path(path) for path in args.image]

    analyzer = ScamAnalyzer(settings)
    try:
        result = asyncio.run(analyzer.analyze(text, images))
    except AnalysisError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2 if args.pretty else None))
    return 0


if __name__ == "__main__":
    sys.exit(main())
