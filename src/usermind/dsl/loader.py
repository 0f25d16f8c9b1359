"""Flow file discovery and loading.

This module reads flow definitions from disk:
- FlowLocator: finds flow files in a directory
- load_flow: parses one file into a Flow
- check_flow_files: parses many files and reports each outcome
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from usermind.dsl.errors import FlowNotFoundError, ParseError
from usermind.dsl.serialization.parser import INVALID_YAML_MESSAGE, parse_flow
from usermind.dsl.serialization.schema import Flow
from usermind.logging import get_logger

__all__ = [
    "DEFAULT_PATTERNS",
    "FlowLocator",
    "FlowFileResult",
    "load_flow",
    "check_flow_files",
]

logger = get_logger(__name__)

DEFAULT_PATTERNS: tuple[str, ...] = ("*.yaml", "*.yml")


# =============================================================================
# Data Transfer Objects
# =============================================================================


@dataclass(frozen=True, slots=True)
class FlowFileResult:
    """Outcome of loading one flow file.

    Attributes:
        file_path: Path of the flow file.
        flow: The parsed flow, or None if loading failed.
        error: The failure, or None if the flow is valid.
    """

    file_path: Path
    flow: Flow | None = None
    error: ParseError | FlowNotFoundError | None = None

    @property
    def valid(self) -> bool:
        return self.error is None


# =============================================================================
# Service Implementations
# =============================================================================


class FlowLocator:
    """Finds flow files in a directory.

    Args:
        patterns: Glob patterns that identify flow files.
        recursive: Whether to descend into subdirectories.
    """

    def __init__(
        self,
        patterns: Sequence[str] = DEFAULT_PATTERNS,
        recursive: bool = True,
    ) -> None:
        self._patterns = tuple(patterns)
        self._recursive = recursive

    def scan(self, directory: Path) -> list[Path]:
        """Find all flow files in directory.

        Args:
            directory: Directory to scan.

        Returns:
            Sorted, de-duplicated absolute paths. Empty if the directory
            does not exist.
        """
        if not directory.is_dir():
            return []

        found: set[Path] = set()
        for pattern in self._patterns:
            matches = (
                directory.rglob(pattern) if self._recursive else directory.glob(pattern)
            )
            found.update(p.resolve() for p in matches if p.is_file())

        return sorted(found)


def load_flow(path: Path | str) -> Flow:
    """Read and parse a flow file.

    Args:
        path: Path to a YAML flow file.

    Returns:
        The normalized flow.

    Raises:
        FlowNotFoundError: If the file does not exist.
        ParseError: If the file is not a valid flow, or is not UTF-8 text;
            ``file_path`` is set on the error.
    """
    path = Path(path)
    if not path.is_file():
        raise FlowNotFoundError(path)

    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        logger.debug("flow_file_not_utf8", file_path=str(path), error=str(e))
        raise ParseError(INVALID_YAML_MESSAGE, cause=e, file_path=path) from e

    try:
        flow = parse_flow(content)
    except ParseError as e:
        e.file_path = path
        raise

    logger.debug("flow_file_loaded", file_path=str(path), flow_name=flow.name)
    return flow


def check_flow_files(paths: Iterable[Path | str]) -> list[FlowFileResult]:
    """Load every file and collect one result per path, in input order.

    A failing file does not stop the others from being checked.
    """
    results: list[FlowFileResult] = []
    for raw_path in paths:
        path = Path(raw_path)
        try:
            flow = load_flow(path)
        except (ParseError, FlowNotFoundError) as e:
            logger.info(
                "flow_file_invalid",
                file_path=str(path),
                error=e.message,
                path=getattr(e, "path", None),
            )
            results.append(FlowFileResult(file_path=path, error=e))
        else:
            results.append(FlowFileResult(file_path=path, flow=flow))
    return results
