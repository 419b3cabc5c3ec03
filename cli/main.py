"""treekit command line.

Usage:
    treekit test-tree sync          # YAML -> .tree -> scaffold/fix .t.sol + TESTS.md
    treekit test-tree check         # bulloak check over every .tree file
    treekit test-tree generate      # YAML -> .tree + TESTS.md
    treekit test-tree compile [FILE] [-o OUT]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import yaml

from treekit.compiler import compile_test_tree, yaml_to_tree
from treekit.core.config import Settings, load_settings
from treekit.core.errors import (
    ConfigurationError,
    DefinitionError,
    DefinitionSyntaxError,
    TreeKitError,
    get_exit_code,
)
from treekit.core.observability import configure_logging, generate_run_id, get_logger, set_run_id
from treekit.services import tree_sync
from treekit.services.bulloak import BulloakRunner

logger = get_logger(__name__)

YAML_ERROR_EXIT_CODE = 65


def _cmd_sync(args: argparse.Namespace, settings: Settings) -> int:
    return tree_sync.sync(settings, BulloakRunner(settings.bulloak_bin))


def _cmd_check(args: argparse.Namespace, settings: Settings) -> int:
    return tree_sync.check(settings, BulloakRunner(settings.bulloak_bin))


def _cmd_generate(args: argparse.Namespace, settings: Settings) -> int:
    return tree_sync.generate(settings)


def _cmd_compile(args: argparse.Namespace, settings: Settings) -> int:
    if args.file in (None, "-"):
        tree = compile_test_tree(sys.stdin.read())
    else:
        try:
            tree = yaml_to_tree(args.file)
        except DefinitionError as exc:
            exc.details.setdefault("file", args.file)
            raise
        except yaml.YAMLError as exc:
            raise DefinitionSyntaxError(f"Invalid YAML: {exc}", details={"file": args.file}) from exc

    if args.output:
        Path(args.output).write_text(tree, encoding="utf-8")
    else:
        sys.stdout.write(tree)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="treekit",
        description="Keep YAML test definitions, bulloak trees and Solidity tests in sync",
    )
    parser.add_argument("--log-level", help="Override APP_LOG_LEVEL (e.g. DEBUG)")
    parser.add_argument("--test-dir", help="Override TEST_DIR (default: test)")

    commands = parser.add_subparsers(dest="command", required=True)
    test_tree_parser = commands.add_parser("test-tree", help="Test tree management commands")
    actions = test_tree_parser.add_subparsers(dest="action", required=True)

    actions.add_parser(
        "sync", help="Scaffold or sync test definitions into Solidity tests"
    ).set_defaults(handler=_cmd_sync)
    actions.add_parser(
        "check", help="Check if Solidity test files are in sync with definitions"
    ).set_defaults(handler=_cmd_check)
    actions.add_parser(
        "generate", help="Generate .tree files and the markdown summary"
    ).set_defaults(handler=_cmd_generate)

    compile_parser = actions.add_parser("compile", help="Compile one definition to tree text")
    compile_parser.add_argument("file", nargs="?", help="Definition file (stdin when omitted or '-')")
    compile_parser.add_argument("-o", "--output", help="Write the tree here instead of stdout")
    compile_parser.set_defaults(handler=_cmd_compile)

    return parser


def _report(error: Exception) -> None:
    message = getattr(error, "message", str(error))
    details = getattr(error, "details", {}) or {}
    location = details.get("file")
    if location:
        print(f"Error: {location}: {message}", file=sys.stderr)
    else:
        print(f"Error: {message}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {}
    if args.log_level:
        overrides["app_log_level"] = args.log_level
    if args.test_dir:
        overrides["test_dir"] = args.test_dir

    try:
        settings = load_settings(**overrides)
    except ConfigurationError as exc:
        _report(exc)
        return get_exit_code(exc)

    configure_logging(settings.app_log_level, settings.observability_structured_logs)
    set_run_id(generate_run_id())

    try:
        return args.handler(args, settings)
    except yaml.YAMLError as exc:
        logger.debug("YAML parsing failed", exc_info=True)
        _report(exc)
        return YAML_ERROR_EXIT_CODE
    except TreeKitError as exc:
        logger.debug("Command failed: %s", exc.message, extra={"details": exc.details})
        _report(exc)
        return get_exit_code(exc)
    except OSError as exc:
        _report(exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
