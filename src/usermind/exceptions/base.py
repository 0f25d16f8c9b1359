from __future__ import annotations


class UsermindError(Exception):
    """Base exception class for all usermind-specific errors.

    This is the root of the usermind exception hierarchy. All custom exceptions
    in the package inherit from this class. This allows catching all
    usermind-specific errors at CLI boundaries while letting system exceptions
    propagate naturally.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            flow = load_flow("flows/login.yaml")
        except UsermindError as e:
            logger.error(f"usermind error: {e.message}")
            sys.exit(1)
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the UsermindError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
