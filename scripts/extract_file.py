"""Print the text extracted from a local document and the decoder that produced it."""
from __future__ import annotations

import argparse
import mimetypes
from pathlib import Path

from domain.entities import ExtractionRequest
from infrastructure.text_extraction.document_text_extractor import DocumentTextExtractor
from ui.logging_utils import setup_logging


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("path", help="Document to extract")
    parser.add_argument(
        "--type",
        dest="declared_type",
        default=None,
        help="Declared MIME type (default: guessed from the filename)",
    )
    parser.add_argument(
        "--preview",
        type=int,
        default=0,
        help="Print only the first N characters of the text (default: everything)",
    )
    parser.add_argument("--verbose", action="store_true", help="Log decoder decisions.")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    setup_logging("DEBUG" if args.verbose else "WARNING")

    path = Path(args.path).expanduser()
    if not path.is_file():
        print(f"File not found: {path}")
        return 1
    declared_type = args.declared_type
    if declared_type is None:
        declared_type = mimetypes.guess_type(path.name)[0] or ""

    request = ExtractionRequest(buffer=path.read_bytes(), declared_type=declared_type, filename=path.name)
    result = DocumentTextExtractor().extract_document(request)

    print(f"file: {path.name} ({len(request.buffer)} bytes, type: {declared_type or 'unknown'})")
    print(f"decoder: {result.decoder}")
    for attempt in result.attempts:
        print(f"  failed {attempt.decoder}: {attempt.error}")
    print(f"characters: {len(result.text)}")
    print()
    print(result.text[: args.preview] if args.preview else result.text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
