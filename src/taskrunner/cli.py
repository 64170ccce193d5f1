"""Command line runner for JSON task maps.

Usage:
    taskrunner tasks.json --register build=myproject.tasks:Build
    cat tasks.json | taskrunner - --register build=myproject.tasks:Build --non-strict
    python -m taskrunner tasks.json --log-level DEBUG

Modules named in --register are imported with the current directory on
sys.path, so task modules in the working directory resolve.
"""

from __future__ import annotations

import argparse
import importlib
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

from taskrunner.config import DispatcherSettings
from taskrunner.dispatch import Dispatcher
from taskrunner.errors import TaskRunnerError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskrunner",
        description="Run a JSON task map and print the collected stats.",
    )
    parser.add_argument("taskfile", help="Path to a JSON task map, or '-' for stdin")
    parser.add_argument(
        "--register",
        "-r",
        action="append",
        default=[],
        metavar="NAME=MODULE:ATTR",
        help="Register a task constructor (repeatable)",
    )
    parser.add_argument(
        "--non-strict",
        action="store_true",
        help="Report faults on stderr and keep going instead of aborting",
    )
    parser.add_argument("--log-level", help="Logging level (overrides TASKRUNNER_LOG_LEVEL)")
    return parser


def parse_register_spec(spec: str) -> tuple[str, str, str]:
    """Split "name=module:attr" into its parts.

    Raises:
        ValueError: If the spec is malformed.
    """
    name, sep, target = spec.partition("=")
    module_name, colon, attr = target.partition(":")
    if not sep or not colon or not name or not module_name or not attr:
        raise ValueError(f"Expected NAME=MODULE:ATTR, got {spec!r}")
    return name, module_name, attr


def load_constructor(module_name: str, attr: str) -> Any:
    """Import module_name and resolve a (possibly dotted) attribute."""
    obj: Any = importlib.import_module(module_name)
    for part in attr.split("."):
        obj = getattr(obj, part)
    return obj


def load_task_map(source: str) -> Any:
    if source == "-":
        return json.load(sys.stdin)
    return json.loads(Path(source).read_text(encoding="utf-8"))


def _report(err: TaskRunnerError) -> None:
    cause = f" ({err.__cause__!r})" if err.__cause__ is not None else ""
    print(f"{err.kind}: {err}{cause}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides: dict[str, Any] = {}
    if args.non_strict:
        overrides["strict"] = False
    if args.log_level:
        overrides["log_level"] = args.log_level
    try:
        settings = DispatcherSettings(**overrides)
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    constructors: list[tuple[str, Any]] = []
    for spec in args.register:
        try:
            name, module_name, attr = parse_register_spec(spec)
            constructors.append((name, load_constructor(module_name, attr)))
        except (ValueError, ImportError, AttributeError) as e:
            parser.error(f"--register {spec}: {e}")

    try:
        task_map = load_task_map(args.taskfile)
    except (OSError, json.JSONDecodeError) as e:
        parser.error(f"cannot load {args.taskfile}: {e}")

    dispatcher = Dispatcher.from_settings(settings, notify=_report)
    try:
        for name, constructor in constructors:
            dispatcher.register(name, constructor)
        stats = dispatcher.run_sync(task_map)
    except TaskRunnerError as e:
        logger.debug("Aborted", exc_info=True)
        _report(e)
        return 1

    print(json.dumps(stats, indent=settings.json_indent, default=str))
    return 0
