"""CLI interface for tag-shield — designed to be called by an editor or a hook.

Usage:
    # Wrap tags (stdin: source text, stdout: wrapped text)
    echo 'const x = {{ name }};' | python -m tag_shield.cli wrap

    # Unwrap tags
    echo 'const x = /* {{ name }} */;' | python -m tag_shield.cli unwrap

    # Format with tags preserved
    python -m tag_shield.cli format --parser typescript < app.ts

    # Mask / restore around a formatter of your own
    python -m tag_shield.cli mask < app.js > masked.json
    python -m tag_shield.cli restore --placeholders masked.json < formatted.js

    # Inspect tags and their lexical context
    python -m tag_shield.cli tags < app.js
    python -m tag_shield.cli classify --offset 10 < app.js
"""

from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path

from .config import create_formatter, load_config, load_from_yaml
from .formatter import ParserKind
from .masking import mask, restore
from .scanner import LexicalContextScanner, classify_context
from .patterns import find_tags
from .types import Placeholder
from .wrapper import unwrap, wrap


def _load_config(args: argparse.Namespace) -> dict:
    if args.config:
        return load_from_yaml(args.config)
    return load_config({})


def cmd_wrap(args: argparse.Namespace) -> None:
    """Wrap tags in code position with block comments."""
    sys.stdout.write(wrap(sys.stdin.read()))


def cmd_unwrap(args: argparse.Namespace) -> None:
    """Strip block-comment wrappers from tags."""
    sys.stdout.write(unwrap(sys.stdin.read()))


def cmd_format(args: argparse.Namespace) -> None:
    """Format stdin with the chosen parser, tags preserved."""
    formatter = create_formatter(_load_config(args))
    sys.stdout.write(formatter.format(sys.stdin.read(), ParserKind(args.parser)))


def cmd_mask(args: argparse.Namespace) -> None:
    """Mask tags; output masked text and placeholders as JSON."""
    result = mask(sys.stdin.read())
    output = {
        "text": result.text,
        "placeholders": [{"key": p.key, "original": p.original} for p in result.placeholders],
    }
    json.dump(output, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")


def cmd_restore(args: argparse.Namespace) -> None:
    """Restore tags into stdin from a placeholders JSON file."""
    raw = json.loads(Path(args.placeholders).read_text(encoding="utf-8"))
    # Accept the whole `mask` output or just its placeholder list
    entries = raw["placeholders"] if isinstance(raw, dict) else raw
    placeholders = [Placeholder(key=e["key"], original=e["original"]) for e in entries]
    sys.stdout.write(restore(sys.stdin.read(), placeholders))


def cmd_tags(args: argparse.Namespace) -> None:
    """List tags with their offsets and lexical context as JSON."""
    text = sys.stdin.read()
    scanner = LexicalContextScanner(text)
    output = [
        {
            "start": span.start,
            "end": span.end,
            "kind": span.kind.value,
            "text": span.text,
            "context": scanner.classify_span(span.start, span.end).value,
        }
        for span in find_tags(text)
    ]
    json.dump(output, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def cmd_classify(args: argparse.Namespace) -> None:
    """Print the lexical context of one offset."""
    text = sys.stdin.read()
    sys.stdout.write(classify_context(text, args.offset).value + "\n")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="tag_shield",
        description="Protect template tags in JS/TS source from code formatters",
    )
    parser.add_argument("--config", default=None, help="YAML config path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("wrap", help="Wrap tags in /* */ (stdin)")
    sub.add_parser("unwrap", help="Unwrap tags (stdin)")
    p_format = sub.add_parser("format", help="Format with tags preserved (stdin)")
    p_format.add_argument(
        "--parser",
        choices=[k.value for k in ParserKind],
        default=ParserKind.BABEL.value,
        help="Prettier parser",
    )
    sub.add_parser("mask", help="Mask tags, JSON out")
    p_restore = sub.add_parser("restore", help="Restore masked tags (stdin)")
    p_restore.add_argument("--placeholders", required=True, help="JSON from `mask`")
    sub.add_parser("tags", help="List tags with context, JSON out")
    p_classify = sub.add_parser("classify", help="Classify one offset (stdin)")
    p_classify.add_argument("--offset", type=int, required=True)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    cmds = {
        "wrap": cmd_wrap,
        "unwrap": cmd_unwrap,
        "format": cmd_format,
        "mask": cmd_mask,
        "restore": cmd_restore,
        "tags": cmd_tags,
        "classify": cmd_classify,
    }
    try:
        cmds[args.command](args)
    except (ValueError, KeyError, TypeError, OSError) as e:
        # json.JSONDecodeError is a ValueError
        sys.stderr.write(f"tag_shield: {e}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
