"""
Domain enums for the test definition grammar.

Values are the exact YAML keys a rule may carry; `label` is the prefix the
rendered tree uses for that clause.
"""

from enum import Enum


class ClauseKind(str, Enum):
    """Clause keys of a rule, in label priority order."""

    GIVEN = "given"
    WHEN = "when"
    IT = "it"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class ChildKey(str, Enum):
    """Keys holding nested rules. `and` is consumed before `then`."""

    AND = "and"
    THEN = "then"


COMMENT_KEY = "comment"
