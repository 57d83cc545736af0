"""CLI interface for contact-guard, for moderators and scripted checks.

Usage:
    # Analyze text (stdin: text, stdout: ContentFilterResult JSON)
    echo 'Call me at 555-123-4567' | \
        python -m contact_guard.cli analyze --field Message

    # Disclosure level for an order status
    python -m contact_guard.cli disclosure shipped

    # Project a user for a counterparty (stdin: user JSON)
    echo '{"id":"u1","name":"Jane Roe","email":"jane@x.com","role":"seller"}' | \
        python -m contact_guard.cli mask-user --status shipped

`analyze` exits with status 1 when the text would be blocked.
"""

from __future__ import annotations
import argparse
import json
import logging
import sys

from .config import create_filter, load_from_yaml
from .content_filter import ContentFilterError
from .masking import get_mask_level, mask_user_for_order


def _emit(data: object) -> None:
    json.dump(data, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")


def cmd_analyze(args: argparse.Namespace) -> int:
    """Analyze plain text on stdin."""
    content_filter = create_filter(load_from_yaml(args.config) if args.config else None)
    text = sys.stdin.read()

    try:
        result = content_filter.analyze(text)
    except ContentFilterError as e:
        sys.stderr.write(f"error: {e}\n")
        return 2

    output = result.to_dict()
    if args.field and not result.allowed:
        output["message"] = content_filter.blocked_message(
            args.field, result.high_confidence_detections,
        )
    _emit(output)
    return 0 if result.allowed else 1


def cmd_disclosure(args: argparse.Namespace) -> int:
    """Print the disclosure level for an order status."""
    _emit(get_mask_level(args.status).to_dict())
    return 0


def cmd_mask_user(args: argparse.Namespace) -> int:
    """Mask a user JSON object from stdin for the given order status."""
    user = json.loads(sys.stdin.read())
    _emit(mask_user_for_order(user, args.status, args.admin).to_dict())
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="contact_guard",
        description="Contact-information filtering and identity masking",
    )
    parser.add_argument("--config", default="", help="YAML config path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("analyze", help="Analyze text (stdin)")
    p.add_argument("--field", default="", help="Field label for the blocked message")

    p = sub.add_parser("disclosure", help="Disclosure level for an order status")
    p.add_argument("status")

    p = sub.add_parser("mask-user", help="Mask a user record (JSON stdin)")
    p.add_argument("--status", required=True, help="Order status")
    p.add_argument("--admin", action="store_true", help="View as admin")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    cmds = {
        "analyze": cmd_analyze,
        "disclosure": cmd_disclosure,
        "mask-user": cmd_mask_user,
    }
    return cmds[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
