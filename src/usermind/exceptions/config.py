from __future__ import annotations

from typing import Any

from usermind.exceptions.base import UsermindError


class ConfigError(UsermindError):
    """Exception for configuration loading, parsing, and validation errors.

    Raised when configuration cannot be loaded, parsed, or validated. This includes
    YAML parsing failures in ``usermind.yaml``, Pydantic validation errors, and
    invalid ``USERMIND_*`` environment variable values.

    Attributes:
        message: Human-readable error message describing the configuration issue.
        field: Optional dotted field name that caused the error
            (e.g., "flows.directory").
        value: Optional value that failed validation (for debugging).

    Examples:
        ```python
        # YAML parsing failure
        raise ConfigError("Invalid YAML in usermind.yaml: ...")

        # Pydantic validation failure
        raise ConfigError(
            "Invalid configuration value",
            field="verbosity",
            value="loud",
        )
        ```
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        """Initialize the ConfigError.

        Args:
            message: Human-readable error message.
            field: Optional field name that caused the error.
            value: Optional value that failed validation.
        """
        self.field = field
        self.value = value
        super().__init__(message)
