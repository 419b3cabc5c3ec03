"""
Test tree workflow: keep YAML definitions, `.tree` files and Solidity tests in sync.

Layout under the test directory:

    test/Vault.t.yaml   human-written definition
    test/Vault.tree     generated by treekit
    test/Vault.t.sol    scaffolded (then maintained) by bulloak

Progress lines are reported through an `echo` callable (print by default)
so the CLI and tests can capture them.
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Callable
from pathlib import Path

import yaml

from treekit.compiler.compiler import (
    YAML_EXT,
    process_yaml_file,
    solidity_test_path_for,
    tree_path_for,
)
from treekit.core.config import Settings
from treekit.core.errors import DefinitionError, DefinitionSyntaxError
from treekit.services.bulloak import BulloakRunner

logger = logging.getLogger(__name__)

Echo = Callable[[str], None]

DEFAULT_SOLC_VERSION = "0.8.28"
SOLC_KEYS = ("solc", "solc_version")

MARKDOWN_TITLE = "# Test tree definitions"


def find_definition_files(test_dir: str | Path) -> list[Path]:
    """All `*.t.yaml` files below `test_dir`, sorted by path."""
    return sorted(Path(test_dir).glob(f"**/*{YAML_EXT}"))


def find_tree_files(test_dir: str | Path) -> list[Path]:
    """All `*.tree` files below `test_dir`, sorted by path."""
    return sorted(Path(test_dir).glob("**/*.tree"))


def _solc_from_config(config: dict) -> str | None:
    profile = config.get("profile", {}).get("default", {})
    for section in (profile, config):
        for key in SOLC_KEYS:
            value = section.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return None


def detect_solc_version(foundry_toml: str | Path, override: str | None = None) -> str:
    """
    Resolve the Solidity version passed to `bulloak scaffold`.

    Precedence: explicit override, then `solc`/`solc_version` from
    `[profile.default]` (or the top level) of foundry.toml, then
    DEFAULT_SOLC_VERSION. An unreadable or invalid foundry.toml falls back
    to the default.
    """
    if override:
        return override

    path = Path(foundry_toml)
    try:
        with path.open("rb") as fh:
            config = tomllib.load(fh)
    except OSError:
        logger.debug("No readable %s, using solc %s", path, DEFAULT_SOLC_VERSION)
        return DEFAULT_SOLC_VERSION
    except tomllib.TOMLDecodeError as exc:
        logger.warning("Ignoring invalid %s (%s), using solc %s", path, exc, DEFAULT_SOLC_VERSION)
        return DEFAULT_SOLC_VERSION

    return _solc_from_config(config) or DEFAULT_SOLC_VERSION


def convert_definitions(yaml_files: list[Path], echo: Echo = print) -> list[Path]:
    """
    Compile each definition into its sibling `.tree` file.

    Stops at the first invalid definition; the offending file is recorded
    in the error's details under "file". YAML syntax errors are re-raised
    as DefinitionSyntaxError.
    """
    tree_files: list[Path] = []
    for yaml_file in yaml_files:
        try:
            echo(f"[Convert]    {yaml_file} -> {tree_path_for(yaml_file)}")
            tree_files.append(process_yaml_file(yaml_file))
        except DefinitionError as exc:
            exc.details.setdefault("file", str(yaml_file))
            raise
        except yaml.YAMLError as exc:
            raise DefinitionSyntaxError(
                f"Invalid YAML: {exc}",
                details={"file": str(yaml_file)},
            ) from exc
    return tree_files


def render_markdown(tree_files: list[Path], test_dir: str | Path) -> str:
    """Build the markdown summary embedding every tree file verbatim."""
    test_dir = Path(test_dir).as_posix()
    markdown = f"{MARKDOWN_TITLE}\n\n"
    markdown += (
        "Below is the graphical summary of the tests described within "
        f"[{test_dir}/*{YAML_EXT}](./{test_dir})\n\n"
    )
    for tree_file in tree_files:
        content = tree_file.read_text(encoding="utf-8")
        markdown += f"```\n{content}```\n\n"
    return markdown


def generate_markdown(test_dir: str | Path, output: str | Path, echo: Echo = print) -> Path | None:
    """
    Write the markdown summary of all `.tree` files.

    Returns:
        The written path, or None when there is nothing to summarize
    """
    tree_files = find_tree_files(test_dir)
    if not tree_files:
        echo("No .tree files found to generate markdown")
        return None

    output = Path(output)
    output.write_text(render_markdown(tree_files, test_dir), encoding="utf-8")
    echo(f"[Markdown]   {output}")
    return output


def sync(settings: Settings, runner: BulloakRunner, echo: Echo = print) -> int:
    """
    Convert every definition, then scaffold or repair its Solidity test.

    A definition without a `.t.sol` sibling is scaffolded; an existing one is
    repaired with `bulloak check --fix`.

    Returns:
        0 when every bulloak call succeeded, 1 otherwise
    """
    runner.ensure_installed()

    yaml_files = find_definition_files(settings.test_dir)
    if not yaml_files:
        echo(f"No test definition files found ({settings.test_dir}/**/*{YAML_EXT})")
        return 0

    solc_version = detect_solc_version(settings.foundry_toml, settings.solc_version)
    echo(f"Using Solidity version: {solc_version}")

    failures: list[Path] = []
    for yaml_file in yaml_files:
        (tree_file,) = convert_definitions([yaml_file], echo)
        sol_file = solidity_test_path_for(yaml_file)

        if sol_file.exists():
            echo(f"[Sync file]  {sol_file}")
            returncode = runner.check([tree_file], fix=True)
        else:
            echo(f"[Scaffold]   {sol_file}")
            returncode = runner.scaffold(tree_file, solc_version)

        if returncode != 0:
            failures.append(sol_file)

    generate_markdown(settings.test_dir, settings.test_tree_markdown, echo)

    if failures:
        logger.warning("bulloak failed for %d file(s): %s", len(failures), failures)
        return 1
    return 0


def check(settings: Settings, runner: BulloakRunner, echo: Echo = print) -> int:
    """
    Verify Solidity tests match their trees.

    Returns:
        bulloak's exit code, or 0 when there are no trees yet
    """
    runner.ensure_installed()

    tree_files = find_tree_files(settings.test_dir)
    if not tree_files:
        echo("No .tree files found. Run 'treekit test-tree sync' first.")
        return 0

    return runner.check(tree_files)


def generate(settings: Settings, echo: Echo = print) -> int:
    """Convert every definition and regenerate the markdown summary."""
    yaml_files = find_definition_files(settings.test_dir)
    convert_definitions(yaml_files, echo)
    generate_markdown(settings.test_dir, settings.test_tree_markdown, echo)
    return 0
