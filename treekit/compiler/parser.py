"""
Rule parsing for YAML test definitions.

Turns the structure produced by `yaml.safe_load` into a TreeItem tree:

    Rules:                          Rules
      - given: a user               └── Given a user
        and:                            └── When they deposit
          - when: they deposit              └── It should credit them
            then:
              - it: should credit them

Each rule sets one of `given`, `when` or `it`; `and` (preferred) or `then`
holds its nested rules; `comment` is carried through to the rendered line.
"""

import logging
import re
from typing import Any

from treekit.compiler.models import TreeItem
from treekit.core.errors import (
    EmptyRootError,
    InvalidRuleError,
    MalformedDocumentError,
    MissingRootError,
    MultipleRootsError,
)
from treekit.domain.enums import COMMENT_KEY, ChildKey, ClauseKind

logger = logging.getLogger(__name__)

CLEAN_TEXT_REGEX = re.compile(r"[^a-zA-Z0-9 ]")


def sanitize_text(text: str) -> str:
    """
    Keep only ASCII letters, digits and spaces, then trim.

    Example:
        >>> sanitize_text("user's balance > 0!")
        'users balance  0'
    """
    return CLEAN_TEXT_REGEX.sub("", text).strip()


def _as_text(value: Any) -> str:
    """Render a YAML scalar the way it was spelled in the document."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    return str(value)


def parse_document(raw: Any) -> TreeItem:
    """
    Build the tree for a deserialized test definition.

    Args:
        raw: Result of `yaml.safe_load` on the whole document

    Returns:
        Root TreeItem whose content is the single top-level key

    Raises:
        MalformedDocumentError: Document is not a mapping, or the root value
                                is not a list of rules
        MultipleRootsError: More than one top-level key
        MissingRootError: No top-level key, or its value is null
        EmptyRootError: The root holds an empty list
        InvalidRuleError: A nested rule is invalid (see parse_rules)
    """
    if not isinstance(raw, dict):
        raise MalformedDocumentError(
            "The file format is not a valid yaml object",
            details={"type": type(raw).__name__},
        )

    root_keys = list(raw.keys())
    if len(root_keys) > 1:
        raise MultipleRootsError(
            "The test definition must have only one root node",
            details={"root_keys": [_as_text(key) for key in root_keys]},
        )

    if not root_keys:
        raise MissingRootError("A root node needs to be defined")

    root_key = root_keys[0]
    title = "" if root_key is None else _as_text(root_key)
    rules = raw[root_key]
    if not title or rules is None or rules == "":
        raise MissingRootError("A root node needs to be defined", details={"root_key": title})

    if not isinstance(rules, list):
        raise MalformedDocumentError(
            "The root node must contain a list of rules",
            details={"root_key": title, "type": type(rules).__name__},
        )

    if not rules:
        raise EmptyRootError(
            "The root node needs to include at least one element",
            details={"root_key": title},
        )

    return TreeItem(content=title, children=parse_rules(rules, path=f"$.{title}"))


def parse_rules(rules: list[Any], path: str = "$") -> list[TreeItem]:
    """
    Recursively convert a list of rules into TreeItems, preserving order.

    Args:
        rules: Rule mappings as produced by the YAML loader
        path: JSONPath of `rules` inside the document (for error reporting)

    Raises:
        InvalidRuleError: A rule sets none of given/when/it, or a child
                          list is not a sequence
    """
    items: list[TreeItem] = []
    for index, rule in enumerate(rules):
        items.append(_parse_rule(rule, f"{path}[{index}]"))
    return items


def _parse_rule(rule: Any, path: str) -> TreeItem:
    if not isinstance(rule, dict) or not any(rule.get(kind.value) for kind in ClauseKind):
        raise InvalidRuleError(
            "All rules should have a 'given', 'when' or 'it' rule",
            details={"path": path},
        )

    # First match wins; `it` text is kept verbatim.
    if rule.get(ClauseKind.GIVEN.value):
        content = f"{ClauseKind.GIVEN.label} {sanitize_text(_as_text(rule[ClauseKind.GIVEN.value]))}"
    elif rule.get(ClauseKind.WHEN.value):
        content = f"{ClauseKind.WHEN.label} {sanitize_text(_as_text(rule[ClauseKind.WHEN.value]))}"
    else:
        content = f"{ClauseKind.IT.label} {_as_text(rule[ClauseKind.IT.value])}"

    children: list[TreeItem] = []
    for key in ChildKey:
        nested = rule.get(key.value)
        if not nested:
            continue
        if not isinstance(nested, list):
            raise InvalidRuleError(
                f"The '{key.value}' field must contain a list of rules",
                details={"path": f"{path}.{key.value}", "type": type(nested).__name__},
            )
        if rule.get(ChildKey.AND.value) and rule.get(ChildKey.THEN.value):
            logger.debug("Rule at %s sets both 'and' and 'then'; 'then' is ignored", path)
        children = parse_rules(nested, path=f"{path}.{key.value}")
        break

    item = TreeItem(content=content, children=children)

    comment = rule.get(COMMENT_KEY)
    if comment:
        item.comment = _as_text(comment)

    return item
