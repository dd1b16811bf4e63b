"""Command-line interface for splmode."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path

from splmode.config import (
    CONFIG_FILENAME,
    FILE_EXTENSIONS,
    SplConfig,
    check_indent_width,
    config_from_mapping,
    load_config,
)
from splmode.errors import ConfigError

COMMANDS = ("highlight", "indent", "spans")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    command: str
    input_file: Path
    output_file: Path | None
    config: SplConfig
    check: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="splmode",
        description="Highlight and indent Splunk SPL searches",
    )
    p.add_argument("command", choices=COMMANDS, help="What to do with the input")
    p.add_argument("input", help=f"Input file ({', '.join(FILE_EXTENSIONS)})")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover splmode.toml)",
    )
    p.add_argument(
        "--indent-width",
        type=int,
        default=None,
        metavar="N",
        help="Columns per indent level (default: 4)",
    )
    p.add_argument(
        "--no-alternate-comments",
        action="store_true",
        help='Do not treat `comment("...")` as a comment',
    )
    p.add_argument(
        "--check",
        action="store_true",
        help="indent: report lines that would change instead of writing output",
    )
    p.add_argument("--debug", action="store_true", help="Dump classified spans to stderr")
    return p


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    discovered = config_path if config_path is not None else input_dir / CONFIG_FILENAME
    config = config_from_mapping(load_config(config_path, input_dir), discovered)

    indent_width = config.indent_width
    if args.indent_width is not None:
        indent_width = check_indent_width(args.indent_width)
    alternate_comments = config.alternate_comments and not args.no_alternate_comments

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        command=args.command,
        input_file=input_file,
        output_file=output_file,
        config=SplConfig(
            indent_width=indent_width,
            alternate_comments=alternate_comments,
            theme=config.theme,
        ),
        check=args.check,
        debug=args.debug,
    )


def run(options: CliOptions, source: str) -> tuple[str, int]:
    """Run *options.command* over *source*, returning (output, exit code)."""
    from splmode.classifier import Classifier
    from splmode.debug import dump_spans
    from splmode.indent import indent_changes, reindent
    from splmode.render import render_document

    config = options.config
    spans = list(Classifier(config.rules).classify(source))
    if options.debug:
        dump_spans(source, spans, file=sys.stderr)

    if options.command == "highlight":
        return render_document(source, spans, config.theme, options.input_file.name), 0

    if options.command == "indent":
        if options.check:
            changes = indent_changes(source, config.indent_width)
            lines = [
                f"{options.input_file}:{c.line}: expected indent {c.column}\n" for c in changes
            ]
            return "".join(lines), 1 if changes else 0
        return reindent(source, config.indent_width), 0

    rows = [
        f"{span.start}\t{span.end}\t{span.category.slug}\t{span.text(source)!r}\n"
        for span in spans
    ]
    return "".join(rows), 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    try:
        source = options.input_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {options.input_file}: {exc}", file=sys.stderr)
        return 2

    output, code = run(options, source)

    if options.output_file and not options.check:
        options.output_file.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)

    return code
