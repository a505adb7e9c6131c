from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Sequence

from .config import Settings
from .context import EvalContext
from .errors import ExprError, ExpressionError
from .formatting import format_value
from .resolver import render_template, resolve_value
from .storage import load_series_registry_file
from .template_rendering import lint_template_text

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trackerexpr",
        description="Resolve {{ expression }} placeholders against a JSON series file.",
    )
    parser.add_argument("series_file", type=Path, help="JSON file with 'dates' and 'series'.")
    parser.add_argument("template", help="Template text, e.g. 'Best streak: {{ maxStreak() :: d }} days'.")
    parser.add_argument("--value", action="store_true", help="Resolve a single number or date instead of text.")
    parser.add_argument("--date-format", default=None, help="Date format for date results (e.g. YYYY-MM-DD).")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = Settings.from_env()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        settings.validate()
        registry = load_series_registry_file(args.series_file)
    except ValueError as exc:
        logger.error("%s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    warnings, errors = lint_template_text(args.template, max_chars=settings.max_template_chars)
    for warning in warnings:
        logger.warning("%s", warning)
    if errors:
        for error in errors:
            print(f"Error: {error}", file=sys.stderr)
        return 1

    context = EvalContext.from_settings(settings)
    if args.date_format:
        context = EvalContext(args.date_format, context.start_date, context.end_date)
    if registry.dates:
        context = EvalContext(
            context.date_format,
            context.start_date or registry.dates[0],
            context.end_date or registry.dates[-1],
        )

    if args.value:
        try:
            value = resolve_value(args.template, registry, context)
        except ExpressionError as exc:
            print(str(exc), file=sys.stderr)
            return 1
        fmt = context.date_format if isinstance(value, date) else "g"
        formatted = format_value(value, fmt, context.date_format)
        if isinstance(formatted, ExprError):
            print(str(formatted), file=sys.stderr)
            return 1
        print(formatted)
        return 0

    result = render_template(args.template, registry, context)
    if not result["ok"]:
        print(result["error"], file=sys.stderr)
        return 1
    print(result["text"])
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
