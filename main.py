#!/usr/bin/env python3
"""
Question Bank Builder - Main Entry Point.

Command-line driver for a question bank session: scans images into
questions, adds typed question/answer pairs, and exports the bank.

Usage:
    Command Line:
        python main.py --image q1.png --image q2.jpg --output ./exports/
        python main.py --entry "What is 2+2?" "4" --format both
        python main.py --image page.png --search "photosynthesis"

    Python:
        from main import build_question_bank
        artifacts = asyncio.run(build_question_bank(images=["q1.png"]))

Author: ML Engineering Team
Version: 1.0.0
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import ConfigurationManager, get_config
from question_bank.utils.logger import setup_logger_from_config, get_logger
from question_bank.utils.exceptions import InputError, QuestionBankError
from question_bank.output_handler.document_tree import DocumentArtifact
from question_bank.session import QuestionBankSession


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Question Bank Builder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Scan two photos into the bank:
        python main.py --image q1.png --image q2.jpg

    Add typed questions and export both formats:
        python main.py --entry "Capital of France?" "Paris" --format both
        """
    )

    parser.add_argument(
        "--image", "-i",
        action="append",
        default=[],
        metavar="PATH",
        help="Image to scan into a question (repeatable)"
    )

    parser.add_argument(
        "--entry", "-e",
        action="append",
        nargs=2,
        default=[],
        metavar=("QUESTION", "ANSWER"),
        help="Typed question/answer pair (repeatable)"
    )

    parser.add_argument(
        "--search", "-s",
        type=str,
        default=None,
        help="Log the questions matching this query before exporting"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output directory (default: paths.output_dir from settings)"
    )

    parser.add_argument(
        "--format", "-f",
        choices=["docx", "xlsx", "both"],
        default="docx",
        help="Export format (default: docx)"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors"
    )

    return parser.parse_args(argv)


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """Load configuration and set up logging."""
    config = ConfigurationManager(args.config)
    logger = setup_logger_from_config()

    if args.debug:
        import logging
        logger.setLevel(logging.DEBUG)
        for handler in logger.handlers:
            handler.setLevel(logging.DEBUG)
    elif args.quiet:
        import logging
        logger.setLevel(logging.WARNING)

    logger.info("=" * 60)
    logger.info("QUESTION BANK BUILDER")
    logger.info("=" * 60)
    logger.info(f"Version: {config.get('project.version', '1.0.0')}")

    return config


async def build_question_bank(
    images: Sequence[str] = (),
    entries: Sequence[Tuple[str, str]] = (),
    search: Optional[str] = None,
    export_format: str = "docx",
    session: Optional[QuestionBankSession] = None
) -> List[DocumentArtifact]:
    """
    Run one session: scan images, add entries, and export.

    Each scanned image becomes a question with an empty answer and the
    image attached. Images that fail to load or scan are skipped.

    Returns:
        Exported artifacts (empty if the bank ended up empty).
    """
    logger = get_logger(__name__)
    session = session or QuestionBankSession()

    for image_path in images:
        try:
            session.attach_image(image_path)
        except InputError as e:
            logger.error(f"Skipping {image_path}: {e}")
            continue

        logger.info(f"Scanning: {Path(image_path).name}")
        if await session.scan() and session.commit() is not None:
            continue

        logger.warning(f"No text recognized from {image_path}, skipped")
        session.remove_image()

    for question, answer in entries:
        session.set_question(question)
        session.set_answer(answer)
        if session.commit() is None:
            logger.warning("Skipping empty entry")

    if search is not None:
        view = session.search(search)
        logger.info(view.summary)
        for number, record in view.entries:
            logger.info(f"  Question {number}: {record.question[:60] or '(empty)'}")

    artifacts = []
    if export_format in ("docx", "both"):
        artifact = session.export_word()
        if artifact is not None:
            artifacts.append(artifact)
    if export_format in ("xlsx", "both"):
        artifact = session.export_excel()
        if artifact is not None:
            artifacts.append(artifact)

    return artifacts


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        args = parse_arguments(argv)
        initialize_system(args)
        logger = get_logger(__name__)

        artifacts = asyncio.run(build_question_bank(
            images=args.image,
            entries=[tuple(entry) for entry in args.entry],
            search=args.search,
            export_format=args.format
        ))

        if not artifacts:
            logger.error("Nothing exported: the question bank is empty")
            return 1

        output_dir = args.output or get_config("paths.output_dir", "outputs")
        for artifact in artifacts:
            path = artifact.save(output_dir)
            logger.info(f"Saved: {path}")

        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130

    except (QuestionBankError, OSError) as e:
        get_logger(__name__).error(f"Error: {e}")
        return 1

    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if "--debug" in sys.argv:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
