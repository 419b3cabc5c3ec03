"""
Domain-specific exceptions for treekit.

These exceptions represent invalid test definitions, bad configuration and
failures of the external tools treekit drives. The CLI layer maps them to
process exit codes.
"""

from typing import Any


class TreeKitError(Exception):
    """Base exception for all treekit domain errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class DefinitionError(TreeKitError):
    """
    Raised when a YAML test definition cannot be turned into a tree.

    Subclasses identify which structural invariant of the definition
    was violated.

    Exit code: 65 (data error)
    """

    pass


class MalformedDocumentError(DefinitionError):
    """
    Raised when the deserialized document is not a mapping.

    Examples:
    - Empty file
    - Top-level sequence or scalar
    - Root value that is not a sequence of rules
    """

    pass


class MultipleRootsError(DefinitionError):
    """Raised when the document defines more than one top-level key."""

    pass


class MissingRootError(DefinitionError):
    """
    Raised when no usable root node is defined.

    Examples:
    - Empty mapping (`{}`)
    - Root key with a null value
    """

    pass


class EmptyRootError(DefinitionError):
    """Raised when the root node holds an empty list of rules."""

    pass


class InvalidRuleError(DefinitionError):
    """
    Raised when a rule sets none of `given`, `when` or `it`.

    Also raised for child lists (`and`/`then`) that are not sequences.
    """

    pass


class DefinitionSyntaxError(DefinitionError):
    """
    Raised when a definition file is not valid YAML.

    Wraps the loader error so the offending file can be reported.
    """

    pass


class DefinitionPathError(DefinitionError):
    """Raised when a definition file does not follow the `*.t.yaml` naming."""

    pass


class ConfigurationError(TreeKitError):
    """
    Raised when settings loaded from the environment are invalid.

    Exit code: 78 (configuration error)
    """

    pass


class ToolNotFoundError(TreeKitError):
    """
    Raised when a required external binary is not on PATH.

    Examples:
    - bulloak is not installed

    Exit code: 127
    """

    pass


class ToolExecutionError(TreeKitError):
    """
    Raised when an external binary cannot be started.

    Exit code: 1
    """

    pass


# Process Exit Code Mapping
EXIT_CODE_MAP = {
    DefinitionError: 65,
    ConfigurationError: 78,
    ToolNotFoundError: 127,
    ToolExecutionError: 1,
}


def get_exit_code(error: Exception) -> int:
    """
    Get the process exit code for a given exception.

    Subclasses resolve to the code of their closest mapped ancestor.

    Args:
        error: The exception instance

    Returns:
        Exit code (defaults to 1 for unknown errors)
    """
    for klass in type(error).__mro__:
        if klass in EXIT_CODE_MAP:
            return EXIT_CODE_MAP[klass]
    return 1
