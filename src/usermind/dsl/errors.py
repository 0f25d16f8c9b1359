"""Error types for the usermind flow DSL.

Exception Hierarchy:
    DSLError (base for all DSL errors)
    ├── ParseError (YAML syntax and structural validation failures)
    └── FlowNotFoundError (flow file or directory does not exist)

``ParseError`` is the single failure channel of the parse pipeline. Callers
tell syntax failures from structural ones by ``path``: structural errors
always carry one, syntax errors never do.
"""

from __future__ import annotations

from pathlib import Path

from usermind.exceptions import UsermindError

__all__ = ["DSLError", "ParseError", "FlowNotFoundError"]


class DSLError(UsermindError):
    """Base exception for all DSL-related errors.

    Examples:
        ```python
        try:
            flow = load_flow("flows/login.yaml")
        except DSLError as e:
            logger.error(f"DSL error: {e}")
            sys.exit(1)
        ```
    """

    pass


class ParseError(DSLError):
    """Exception raised when a flow document fails parsing or validation.

    Attributes:
        message: Human-readable error message.
        path: Dot/bracket path to the offending field (e.g.
            ``steps[2].selector``, ``actor.session.token``). ``None`` for
            YAML syntax errors and for a non-object document.
        cause: The underlying YAML library error, set only for syntax errors.
        file_path: Path of the flow file, when the document was read from disk.

    Examples:
        ```python
        # Structural error
        raise ParseError(
            "Step 1 (action: 'click') is missing required field 'selector'",
            path="steps[1].selector",
        )

        # Syntax error
        raise ParseError("Invalid YAML syntax", cause=yaml_error) from yaml_error
        ```
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        cause: BaseException | None = None,
        file_path: Path | str | None = None,
    ) -> None:
        """Initialize the ParseError.

        Args:
            message: Human-readable error message.
            path: Location of the offending field.
            cause: The underlying deserializer error.
            file_path: Path of the file being parsed.
        """
        self.path = path
        self.cause = cause
        self.file_path = file_path
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    @property
    def is_syntax_error(self) -> bool:
        """True when the document could not be deserialized at all."""
        return self.path is None and self.cause is not None


class FlowNotFoundError(DSLError):
    """Exception raised when a flow file or flow directory does not exist.

    Attributes:
        message: Human-readable error message.
        file_path: The path that was requested.
    """

    def __init__(self, file_path: Path | str) -> None:
        self.file_path = file_path
        super().__init__(f"Flow file not found: {file_path}")
