#!/usr/bin/env python
"""Resume processing script for Resume Tailor.

Normalizes and chunks a resume text file, and optionally extracts
structured fields and tailors the resume against a job description.

Usage:
    # Show the chunk layout of a resume
    python scripts/process_resume.py --path resume.txt

    # Override chunking parameters
    python scripts/process_resume.py --path resume.txt --chunk-size 1000 --overlap 100

    # Extract structured fields with the configured providers
    python scripts/process_resume.py --path resume.txt --extract

    # Extract, then tailor against a job description
    python scripts/process_resume.py --path resume.txt --job-description job.txt

Exit codes:
    0 - Success
    1 - Generation failure (all providers failed)
    2 - Configuration or input error
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

_SCRIPT_DIR = Path(__file__).resolve().parent
_REPO_ROOT = _SCRIPT_DIR.parent
sys.path.insert(0, str(_REPO_ROOT / "src"))

from resume_tailor.core.generation import GenerationError, ResumeExtractor, ResumeOptimizer
from resume_tailor.core.settings import Settings, load_settings
from resume_tailor.core.trace import TraceCollector, TraceContext
from resume_tailor.core.types import ChunkerConfig, ProcessedDocument
from resume_tailor.ingestion.chunking import TextChunker
from resume_tailor.libs.splitter import WindowSplitter
from resume_tailor.observability.logger import configure_logging, get_logger

logger = get_logger(__name__)


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Chunk, extract and tailor a resume.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument("--path", "-p", required=True, help="Path to the resume text file")
    parser.add_argument(
        "--config",
        default=str(_REPO_ROOT / "config" / "settings.yaml"),
        help="Path to configuration file (default: config/settings.yaml)",
    )
    parser.add_argument("--chunk-size", type=int, help="Override splitter.chunk_size")
    parser.add_argument("--overlap", type=int, help="Override splitter.overlap")
    parser.add_argument("--extract", action="store_true", help="Extract structured fields")
    parser.add_argument(
        "--job-description", "-j",
        help="Path to a job description file; implies --extract and tailors the resume",
    )
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output")

    return parser.parse_args(argv)


def read_text(path: str) -> str:
    """Read a UTF-8 text file.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise FileNotFoundError(f"File does not exist: {file_path}")
    return file_path.read_text(encoding="utf-8", errors="replace")


def build_chunker(settings: Settings, args: argparse.Namespace) -> TextChunker:
    """Create a chunker, applying command-line overrides to the settings."""
    if args.chunk_size is None and args.overlap is None:
        return TextChunker(settings=settings)

    overrides = {}
    if args.chunk_size is not None:
        overrides["chunk_size"] = args.chunk_size
    if args.overlap is not None:
        overrides["overlap"] = args.overlap
    return TextChunker(splitter=WindowSplitter.from_settings(settings, **overrides))


def print_document_summary(document: ProcessedDocument, verbose: bool = False) -> None:
    """Print document totals and per-chunk sizes."""
    metadata = document.metadata
    print("\n" + "=" * 60)
    print("DOCUMENT SUMMARY")
    print("=" * 60)
    print(f"Words:      {metadata.total_words}")
    print(f"Characters: {metadata.total_characters}")
    print(f"Chunks:     {metadata.total_chunks}")
    for chunk in document.chunks:
        print(f"  [{chunk.index}] {chunk.character_count} chars, {chunk.word_count} words")
        if verbose:
            preview = chunk.content[:80].replace("\n", " ")
            print(f"      {preview}...")
    print("=" * 60)


def main(argv: Optional[list] = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0=success, 1=generation failure, 2=configuration/input error)
    """
    args = parse_args(argv)

    try:
        settings = load_settings(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"[FAIL] Failed to load configuration: {e}")
        return 2

    configure_logging(settings)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        resume_text = read_text(args.path)
        job_text = read_text(args.job_description) if args.job_description else None
        chunker = build_chunker(settings, args)
    except (FileNotFoundError, TypeError, ValueError) as e:
        print(f"[FAIL] {e}")
        return 2

    trace_enabled = bool(settings.observability.get("trace_enabled", False))
    collector = TraceCollector.from_settings(settings) if trace_enabled else None
    trace = TraceContext(trace_type="processing")
    trace.metadata["source_path"] = str(args.path)

    output = {}
    exit_code = 0
    try:
        if args.extract or job_text is not None:
            trace.trace_type = "optimization" if job_text is not None else "extraction"
            extraction = ResumeExtractor(settings, chunker=chunker).extract(resume_text, trace=trace)
            document = extraction.document
            output["extractedInfo"] = extraction.info.to_dict()
            output["extractionProvider"] = extraction.provider

            if job_text is not None:
                optimized = ResumeOptimizer(settings).optimize(extraction.info, job_text, trace=trace)
                output.update(optimized.to_dict())
        else:
            document = chunker.process_document(resume_text, trace=trace)
        output["document"] = document.to_dict()
    except ValueError as e:
        print(f"[FAIL] {e}")
        exit_code = 2
    except GenerationError as e:
        print(f"[FAIL] {e}")
        for attempt in e.attempts:
            print(f"   - {attempt['provider']} #{attempt['attempt']}: {attempt['error']}")
        exit_code = 1
    finally:
        if collector is not None:
            collector.collect(trace)

    if exit_code:
        return exit_code

    if args.json:
        print(json.dumps(output, indent=2, ensure_ascii=False))
        return 0

    print_document_summary(document, args.verbose)
    if "extractedInfo" in output:
        print("\nEXTRACTED FIELDS (via %s)" % output["extractionProvider"])
        print(json.dumps(output["extractedInfo"], indent=2, ensure_ascii=False))
    if "optimizedResume" in output:
        print("\nTAILORED RESUME (via %s)" % output["provider"])
        print(output["optimizedResume"])
        if output["keywordMatches"]:
            print("\nKeyword matches: " + ", ".join(output["keywordMatches"]))
    return 0


if __name__ == "__main__":
    sys.exit(main())
