# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# COMMANDS:
# ---------
# 1. Classify answers without touching storage:
#    assessment-engine classify --age 18-24 --cycle-length 26-30 --pain-level severe
#
# 2. Show one stored assessment:
#    assessment-engine show <assessment-id>
#
# 3. List a user's assessments:
#    assessment-engine list <user-id>
#
# 4. Classify and persist every assessment missing a pattern:
#    assessment-engine backfill-patterns
#
# Output is JSON on stdout. Errors go to stderr with exit code 1.
#
# ==============================================

import argparse
import json
import logging
import sys
from typing import List, Optional

from .analysis.classifier import PatternClassifier
from .assessment_service import AssessmentService
from .config import get_config
from .exceptions import AssessmentError
from .storage.factory import create_store

logger = logging.getLogger(__name__)

# Attributes every LogRecord carries; anything else came in through extra=
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class ContextFormatter(logging.Formatter):
    """Appends the extra= context of a record as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = {
            key: value for key, value in vars(record).items()
            if key not in _RECORD_ATTRS
        }
        if context:
            line += " " + " ".join(f"{key}={value!r}" for key, value in sorted(context.items()))
        return line


def configure_logging(level: str) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logging.basicConfig(level=level, handlers=[handler])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="assessment-engine",
        description="Normalize and classify menstrual health assessments."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    classify = subparsers.add_parser("classify", help="Classify a set of answers")
    classify.add_argument("--age")
    classify.add_argument("--cycle-length")
    classify.add_argument("--period-duration")
    classify.add_argument("--flow-heaviness")
    classify.add_argument("--pain-level")

    show = subparsers.add_parser("show", help="Show one assessment")
    show.add_argument("assessment_id")

    list_cmd = subparsers.add_parser("list", help="List a user's assessments")
    list_cmd.add_argument("user_id")

    subparsers.add_parser("backfill-patterns", help="Classify assessments without a pattern")

    return parser


def _print_json(value) -> None:
    print(json.dumps(value, indent=2, default=str, ensure_ascii=False))


def run_classify(args: argparse.Namespace) -> int:
    decision = PatternClassifier().classify_assessment(
        age=args.age,
        cycle_length=args.cycle_length,
        period_duration=args.period_duration,
        flow_heaviness=args.flow_heaviness,
        pain_level=args.pain_level,
    )
    _print_json(decision.to_dict())
    return 0


def run_with_store(args: argparse.Namespace) -> int:
    with create_store(get_config()) as store:
        service = AssessmentService(store)

        if args.command == "show":
            assessment = service.find_by_id(args.assessment_id)
            if assessment is None:
                print(f"Assessment {args.assessment_id} not found", file=sys.stderr)
                return 1
            _print_json(assessment)
        elif args.command == "list":
            _print_json(service.list_by_user(args.user_id))
        elif args.command == "backfill-patterns":
            _print_json(service.backfill_patterns())

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "classify":
        return run_classify(args)

    try:
        config = get_config()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    configure_logging(config.log_level)
    try:
        return run_with_store(args)
    except AssessmentError as e:
        logger.error("COMMAND_FAILED", extra={"command": args.command, "error": str(e)})
        print(str(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
