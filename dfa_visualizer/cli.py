from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import config
from .controller import DFAController
from .engine import FrameKind, drive
from .errors import AutomatonError
from .render import to_dot

EMPTY_INPUT_LABEL = "<empty>"


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="dfa_visualizer",
        description="Check strings against a SPEC_DFA specification and export its graph.",
    )
    parser.add_argument(
        "--log-level",
        default=config.LOG_LEVEL,
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    spec_help = "Specification file, '-' for stdin or 'default' for the built-in example."

    check = sub.add_parser("check", help="Check one or more input strings.")
    check.add_argument("spec", help=spec_help)
    check.add_argument("inputs", nargs="+", help="Input strings; use '' for the empty string.")

    animate = sub.add_parser("animate", help="Print the animation frames of a string check.")
    animate.add_argument("spec", help=spec_help)
    animate.add_argument("input", help="Input string.")
    animate.add_argument(
        "--delay",
        type=float,
        default=0.0,
        help="Seconds to wait between frames.",
    )

    dot = sub.add_parser("dot", help="Print the Graphviz DOT source of the automaton.")
    dot.add_argument("spec", help=spec_help)

    fmt = sub.add_parser("format", help="Print the normalized specification.")
    fmt.add_argument("spec", help=spec_help)
    return parser.parse_args(argv)


def _read_spec(source: str) -> str:
    if source == "default":
        return config.DEFAULT_SPEC
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def run(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    config.configure_logging(args.log_level)
    controller = DFAController()
    try:
        controller.import_specification(_read_spec(args.spec))
        if args.command == "check":
            return _check(controller, args.inputs)
        if args.command == "animate":
            return _animate(controller, args.input, args.delay)
        if args.command == "dot":
            print(to_dot(controller.projection()))
        else:
            print(controller.export_specification())
    except (AutomatonError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def _check(controller: DFAController, inputs: Sequence[str]) -> int:
    model = controller.model
    all_accepted = True
    for text in inputs:
        verdict = controller.check_string_batch(text)
        status = "Accepted" if verdict.accepted else "Rejected"
        shown = text or EMPTY_INPUT_LABEL
        if verdict.accepted:
            print(f"{shown}: {status} (final state {model.label(verdict.state)})")
        else:
            all_accepted = False
            print(f"{shown}: {status} - {verdict.describe(model)}")
    return 0 if all_accepted else 2


def _animate(controller: DFAController, text: str, delay: float) -> int:
    model = controller.model
    run = controller.check_string_animated(text)

    def show(frame) -> None:
        label = model.label(frame.state)
        if frame.kind is FrameKind.EDGE:
            print(f"[{frame.sequence}] {frame.kind.value}: {label} --{frame.symbol}-->")
        elif frame.symbol is not None and not frame.terminal:
            print(f"[{frame.sequence}] {frame.kind.value}: {label} (after {frame.symbol})")
        else:
            print(f"[{frame.sequence}] {frame.kind.value}: {label}")

    verdict = drive(run, show, delay=delay)
    if verdict is None:
        return 1
    print(verdict.describe(model))
    return 0 if verdict.accepted else 2


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run(argv)
