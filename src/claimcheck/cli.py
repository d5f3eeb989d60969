"""
Command-line interface for claimcheck

Runs the quiz API, or builds a quiz from features in the terminal.
"""

import asyncio
import sys
import argparse
import json
import logging

from .config import config
from .errors import ClaimCheckError
from .quiz.schema import QuizRecord
from .server import start_api_server
from .service import QuizService


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Configure basic logging for the CLI and return the package logger."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    return logging.getLogger("claimcheck")


def format_quiz(record: QuizRecord) -> str:
    """Format a quiz for terminal output, marking the correct choices."""
    lines = [f"Quiz {record.quiz_id}"]
    if record.object_type:
        lines.append(f"Object: {record.object_type}")
    lines.append("")

    for question in record.questions:
        lines.append(f"{question.id}. {question.text}")
        for choice in question.choices:
            marker = "*" if choice.id == question.correct_choice_id else " "
            lines.append(f"   {marker} {choice.id}) {choice.text}")
        lines.append("")

    return "\n".join(lines)


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="claimcheck",
        description="Ownership quizzes for found items",
        epilog='Example: claimcheck create "Color: matte black" "Brand: Nike" --mock'
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the quiz API")
    serve_parser.add_argument(
        "--host",
        default=config.server.host,
        help=f"Bind address (default: {config.server.host})"
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=config.server.port,
        help=f"Port (default: {config.server.port})"
    )

    # Create command
    create_parser = subparsers.add_parser("create", help="Build a quiz from features")
    create_parser.add_argument(
        "features",
        nargs="+",
        help='Identifying features, e.g. "Color: matte black"'
    )
    create_parser.add_argument(
        "--object-type",
        help="Kind of item (e.g. backpack)"
    )
    create_parser.add_argument(
        "--mock",
        action="store_true",
        help="Use local rules instead of the AI provider"
    )
    create_parser.add_argument(
        "--json",
        action="store_true",
        help="Output the quiz as JSON"
    )

    # Parse arguments
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(args.verbose)

    if args.command == "serve":
        start_api_server(host=args.host, port=args.port)

    elif args.command == "create":
        service = QuizService(use_mock=True if args.mock else None)

        try:
            record = asyncio.run(service.create_quiz(
                args.features,
                object_type=args.object_type,
                source="manual",
            ))
        except ClaimCheckError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

        if args.json:
            print(json.dumps(record.to_dict(), indent=2))
        else:
            print(format_quiz(record))


if __name__ == "__main__":
    main()
