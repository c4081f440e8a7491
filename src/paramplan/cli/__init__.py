"""CLI module for the paramplan runner."""

from __future__ import annotations

import argparse
import logging
import shlex
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from paramplan.config import PlanConfig, load_config
from paramplan.errors import PlanError
from paramplan.logging import configure_logging
from paramplan.reports import ConsoleReporter, resolve_reporters
from paramplan.reports.base import Reporter
from paramplan.reports.jsonfile import JsonReporter
from paramplan.testing import PlanDefinition, Session, build_selector, collect, run_definitions

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for the paramplan CLI."""
    parser = _build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    console = Console()

    try:
        config = load_config()
        if args.command == "run":
            raise SystemExit(_run_plans(args, config, console))
        if args.command == "list":
            raise SystemExit(_list_plans(args, config, console))
    except PlanError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(2) from exc

    parser.print_help()
    raise SystemExit(0)


def _add_selection_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("paths", nargs="*", help="Plan files or directories")
    parser.add_argument("-k", "--keyword", help="Filter plans by keyword expression")
    parser.add_argument(
        "-t", "--tag", dest="include_tags", action="append", help="Run plans with given tag"
    )
    parser.add_argument(
        "--skip-tag",
        dest="exclude_tags",
        action="append",
        help="Skip plans that match this tag",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paramplan", description="Run test plans over every parameter combination they visit"
    )
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Run discovered plans")
    _add_selection_args(run_parser)
    run_parser.add_argument(
        "--selector",
        help="Parameter selector: registry name (all, first, none) or module:Class",
    )
    run_parser.add_argument(
        "--pin",
        dest="pins",
        action="append",
        metavar="NAME=V1,V2",
        help="Restrict a parameter to the given values (repeatable)",
    )
    run_parser.add_argument("--log-level", help="Severity for per-scope loggers (default: ERROR)")
    run_parser.add_argument(
        "--reporter",
        dest="reporters",
        action="append",
        help="Reporter name or import path (repeatable)",
    )
    run_parser.add_argument("--json", dest="json_path", help="Also write results as JSON to this path")
    run_parser.add_argument("-q", "--quiet", action="count", default=0, help="Reduce CLI output")
    run_parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase CLI output")

    list_parser = subparsers.add_parser("list", help="List discovered plans")
    _add_selection_args(list_parser)

    return parser


def _parse_pins(values: Sequence[str] | None) -> dict[str, list[str]]:
    pins: dict[str, list[str]] = {}
    for value in values or []:
        name, sep, options = value.partition("=")
        if not sep or not name:
            msg = f"Invalid --pin {value!r}, expected NAME=V1,V2"
            raise ValueError(msg)
        pins.setdefault(name.strip(), []).extend(opt.strip() for opt in options.split(",") if opt.strip())
    return pins


def _resolve_paths(args: argparse.Namespace, config: PlanConfig) -> list[str]:
    if args.paths:
        return args.paths
    return config.test_paths


def _resolve_tags(args: argparse.Namespace, config: PlanConfig) -> tuple[list[str], list[str]]:
    include = list(config.include_tags)
    exclude = list(config.exclude_tags)
    if args.include_tags:
        include.extend(args.include_tags)
    if args.exclude_tags:
        exclude.extend(args.exclude_tags)
    return include, exclude


def _resolve_verbosity(args: argparse.Namespace, config: PlanConfig) -> int:
    return config.verbosity + args.verbose - args.quiet


def _resolve_run_config(args: argparse.Namespace, config: PlanConfig) -> PlanConfig:
    """Apply CLI flags on top of the loaded configuration."""
    updates: dict[str, object] = {}
    if args.selector:
        updates["selector"] = args.selector
    if args.log_level:
        updates["log_level"] = args.log_level
    if args.pins:
        updates["pins"] = {**config.pins, **_parse_pins(args.pins)}
    return PlanConfig.model_validate({**config.model_dump(), **updates})


def _resolve_reporters(args: argparse.Namespace, config: PlanConfig, verbosity: int) -> list[Reporter]:
    names = args.reporters or config.reporters or ["ConsoleReporter"]
    options = {name: {"verbosity": verbosity} for name in names if name.endswith("ConsoleReporter")}
    reporters = resolve_reporters(names, options)
    if not any(isinstance(r, ConsoleReporter) for r in reporters):
        reporters.insert(0, ConsoleReporter(verbosity=verbosity))
    if getattr(args, "json_path", None):
        reporters.append(JsonReporter(args.json_path))
    return reporters


def _collect_definitions(paths: Sequence[str]) -> list[PlanDefinition]:
    definitions: list[PlanDefinition] = []
    for path in paths:
        definitions.extend(collect(path))
    return definitions


def _filter_definitions(
    definitions: list[PlanDefinition],
    include_tags: Sequence[str],
    exclude_tags: Sequence[str],
    keyword: str | None,
) -> list[PlanDefinition]:
    filtered = definitions

    if include_tags:
        include = set(include_tags)
        filtered = [d for d in filtered if d.tags & include]

    if exclude_tags:
        exclude = set(exclude_tags)
        filtered = [d for d in filtered if not (d.tags & exclude)]

    if keyword:
        matcher = KeywordMatcher(keyword)
        filtered = [d for d in filtered if matcher.match(d.full_name)]

    return filtered


def _select_definitions(
    args: argparse.Namespace, config: PlanConfig, console: Console
) -> list[PlanDefinition] | None:
    include_tags, exclude_tags = _resolve_tags(args, config)
    definitions = _collect_definitions(_resolve_paths(args, config))
    try:
        return _filter_definitions(definitions, include_tags, exclude_tags, args.keyword or config.keyword)
    except ValueError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        return None


def _run_plans(args: argparse.Namespace, config: PlanConfig, console: Console) -> int:
    try:
        config = _resolve_run_config(args, config)
    except ValueError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        return 2

    verbosity = _resolve_verbosity(args, config)
    configure_logging(logging.DEBUG if verbosity >= 2 else logging.WARNING, console=console)

    definitions = _select_definitions(args, config, console)
    if definitions is None:
        return 2

    selector = build_selector(config.selector, config.pins)
    session = Session(reporters=_resolve_reporters(args, config, verbosity))
    run_definitions(definitions, session, selector=selector, log_level=config.log_level)
    result = session.finish()

    return 0 if result.ok else 1


def _list_plans(args: argparse.Namespace, config: PlanConfig, console: Console) -> int:
    definitions = _select_definitions(args, config, console)
    if definitions is None:
        return 2
    if not definitions:
        console.print("[yellow]No plans found.[/yellow]")
        return 0
    for definition in definitions:
        line = escape(definition.full_name)
        if definition.tags:
            line += f" [dim]\\[{escape(', '.join(sorted(definition.tags)))}][/dim]"
        console.print(f"{line}  [dim]{escape(str(Path(definition.module_path)))}[/dim]", highlight=False)
    return 0


class KeywordMatcher:
    """Evaluate pytest-style -k expressions."""

    def __init__(self, expression: str) -> None:
        self.tokens = shlex.split(expression)
        self.index = 0
        self.func = self._parse_or()
        if self._peek() is not None:
            msg = "Invalid keyword expression"
            raise ValueError(msg)

    def match(self, text: str) -> bool:
        return self.func(text)

    def _parse_or(self) -> Callable[[str], bool]:
        left = self._parse_and()
        while self._peek_word("or"):
            self._advance()
            right = self._parse_and()
            prev = left
            left = lambda text, prev=prev, right=right: prev(text) or right(text)
        return left

    def _parse_and(self) -> Callable[[str], bool]:
        left = self._parse_not()
        while self._peek_word("and"):
            self._advance()
            right = self._parse_not()
            prev = left
            left = lambda text, prev=prev, right=right: prev(text) and right(text)
        return left

    def _parse_not(self) -> Callable[[str], bool]:
        if self._peek_word("not"):
            self._advance()
            operand = self._parse_not()
            return lambda text, operand=operand: not operand(text)
        return self._parse_term()

    def _parse_term(self) -> Callable[[str], bool]:
        token = self._peek()
        if token is None:
            msg = "Unexpected end of keyword expression"
            raise ValueError(msg)
        if token == "(":
            self._advance()
            expr = self._parse_or()
            if not self._peek_word(")"):
                msg = "Unmatched '(' in keyword expression"
                raise ValueError(msg)
            self._advance()
            return expr
        if token == ")":
            msg = "Unexpected ')' in keyword expression"
            raise ValueError(msg)
        self._advance()
        literal = token
        return lambda text, literal=literal: literal in text

    def _peek(self) -> str | None:
        return self.tokens[self.index] if self.index < len(self.tokens) else None

    def _peek_word(self, word: str) -> bool:
        token = self._peek()
        return token is not None and token.lower() == word

    def _advance(self) -> None:
        self.index += 1


__all__ = ["KeywordMatcher", "main"]
