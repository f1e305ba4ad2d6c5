"""Feedback anchoring CLI - deterministic JSON in, JSON out.

Usage:
    python -m feedback_anchoring validate [--input PATH] [--strict]
    python -m feedback_anchoring render [--input PATH]

validate input:  {"text": "...", "annotations": [{"id", "startOffset", ...}]}
render input:    {"answers": ["..."], "feedbackItems": [...], "teacherComments": [...]}

Exit codes:
    0: Success
    1: Internal error
    2: Invalid input or configuration / anchors failed under --strict
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from pydantic import ValidationError

from feedback_anchoring.config import AnchoringConfigError, load_anchoring_config
from feedback_anchoring.models.annotation import AnchorStatus
from feedback_anchoring.models.requests import RenderRequest, ValidateAnchorsRequest
from feedback_anchoring.services.anchoring.validator import validate_anchors
from feedback_anchoring.services.review.payload import session_to_dict, statuses_to_dict
from feedback_anchoring.services.review.session import ReviewSession

logger = logging.getLogger(__name__)

# Anchor statuses reported as warnings by validate
WARNING_CODES: dict[AnchorStatus, str] = {
    AnchorStatus.DRIFTED: "ANCHOR_DRIFTED",
    AnchorStatus.ORPHANED: "ANCHOR_ORPHANED",
}


def _output_json(data: dict[str, Any]) -> None:
    """Output JSON to stdout with deterministic ordering."""
    print(json.dumps(data, sort_keys=True, indent=2))


def _make_error_result(code: str, message: str) -> dict[str, Any]:
    return {
        "errors": [{"code": code, "message": message, "path": "$"}],
        "pass": False,
        "warnings": [],
    }


def _load_json_input(input_path: str | None) -> tuple[Any, str | None]:
    """Load JSON from file or stdin.

    Returns:
        Tuple of (parsed_data, error_message). If error_message is not None,
        parsed_data should be ignored.
    """
    try:
        if input_path:
            with open(input_path, encoding="utf-8") as f:
                content = f.read()
        else:
            content = sys.stdin.read()

        if not content.strip():
            return None, "Empty input"

        return json.loads(content), None
    except FileNotFoundError:
        return None, f"File not found: {input_path}"
    except json.JSONDecodeError as e:
        return None, f"Invalid JSON: {e}"
    except UnicodeDecodeError as e:
        return None, f"Invalid encoding: {e}"
    except OSError as e:
        return None, f"Cannot read input: {e}"


def _validation_error_result(error: ValidationError) -> dict[str, Any]:
    errors = [
        {
            "code": "INVALID_INPUT",
            "message": detail["msg"],
            "path": "$." + ".".join(str(part) for part in detail["loc"]),
        }
        for detail in error.errors()
    ]
    return {"errors": errors, "pass": False, "warnings": []}


def cmd_validate(args: argparse.Namespace) -> int:
    """Classify anchors and report drifted/orphaned ones as warnings.

    Exit codes:
        0: pass=True
        2: invalid input, or orphaned anchors under --strict
    """
    data, error_msg = _load_json_input(args.input)
    if error_msg is not None:
        _output_json(_make_error_result("INVALID_JSON", error_msg))
        return 2

    try:
        request = ValidateAnchorsRequest.model_validate(data)
    except ValidationError as e:
        _output_json(_validation_error_result(e))
        return 2

    config = load_anchoring_config()
    statuses = validate_anchors(request.annotations, request.text, config=config)

    warnings = []
    for idx, annotation in enumerate(request.annotations):
        code = WARNING_CODES.get(statuses[annotation.id])
        if code is not None:
            warnings.append(
                {
                    "code": code,
                    "message": f"Annotation '{annotation.id}' anchor is {statuses[annotation.id]}",
                    "path": f"$.annotations[{idx}]",
                }
            )

    orphaned = any(status == AnchorStatus.ORPHANED for status in statuses.values())
    passed = not (args.strict and orphaned)
    _output_json(
        {
            "errors": [],
            "pass": passed,
            "statuses": statuses_to_dict(statuses),
            "warnings": warnings,
        }
    )
    return 0 if passed else 2


def cmd_render(args: argparse.Namespace) -> int:
    """Render a submission to per-answer paragraphs of segments."""
    data, error_msg = _load_json_input(args.input)
    if error_msg is not None:
        _output_json(_make_error_result("INVALID_JSON", error_msg))
        return 2

    try:
        request = RenderRequest.model_validate(data)
    except ValidationError as e:
        _output_json(_validation_error_result(e))
        return 2

    with ReviewSession(config=load_anchoring_config()) as session:
        session.load_submission(request.answers, request.feedback_items, request.teacher_comments)
        result = session_to_dict(session)

    result["pass"] = True
    _output_json(result)
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="feedback-anchoring",
        description="Anchor validation and segmentation for reviewed student text",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    validate_parser = subparsers.add_parser(
        "validate",
        help="Classify annotation anchors against a text",
    )
    validate_parser.add_argument(
        "--input",
        required=False,
        default=None,
        metavar="PATH",
        help="Path to JSON file (reads from stdin if omitted)",
    )
    validate_parser.add_argument(
        "--strict",
        action="store_true",
        default=False,
        help="Fail (exit 2) when any anchor is orphaned",
    )

    render_parser = subparsers.add_parser(
        "render",
        help="Render a submission into paragraphs of highlighted segments",
    )
    render_parser.add_argument(
        "--input",
        required=False,
        default=None,
        metavar="PATH",
        help="Path to JSON file (reads from stdin if omitted)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Exit codes:
        0: Success
        1: Internal error (unexpected)
        2: Invalid input or configuration / strict validation failed
    """
    try:
        parser = create_parser()
        args = parser.parse_args(argv)

        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )

        if args.command is None:
            parser.print_help()
            return 0

        if args.command == "validate":
            return cmd_validate(args)

        if args.command == "render":
            return cmd_render(args)

        return 0

    except AnchoringConfigError as e:
        _output_json(_make_error_result("INVALID_CONFIG", str(e)))
        return 2
    except Exception as e:
        # Fail-closed: unexpected errors return exit code 1
        logger.exception("Unexpected CLI failure")
        _output_json(_make_error_result("INTERNAL_ERROR", str(e)))
        return 1


if __name__ == "__main__":
    sys.exit(main())
