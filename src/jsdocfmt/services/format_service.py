"""
Format Service for formatting the documentation comments of source files.

Collects source files, runs the comment orchestrator over each one and
optionally writes the result back.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from jsdocfmt.core.models import AliasConflict
from jsdocfmt.core.orchestrator import CommentOrchestrator

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = frozenset({".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".mts", ".cts"})

IGNORED_DIRECTORIES = frozenset({"node_modules", ".git", "dist", "build", "coverage"})


class FormatError(Exception):
    """Raised when a file cannot be formatted."""

    def __init__(self, path: Path | str, message: str):
        self.path = Path(path)
        super().__init__(f"{path}: {message}")


@dataclass
class FileFormatResult:
    """
    Outcome of formatting one file.

    Attributes:
        path: The formatted file
        changed: Whether formatting changed the content
        written: Whether the new content was written to disk
        conflicts: Alias conflicts reported for the file's comments
        duration_ms: Time spent formatting
    """

    path: Path
    changed: bool
    written: bool = False
    conflicts: list[AliasConflict] = field(default_factory=list)
    duration_ms: float = 0.0
    formatted: str = ""


class FormatService:
    """
    Formats source files.

    Files are processed one at a time; the comments of a file are formatted
    concurrently by the orchestrator.
    """

    def __init__(self, orchestrator: CommentOrchestrator):
        self._orchestrator = orchestrator

    def collect_files(self, paths: Iterable[Path | str]) -> list[Path]:
        """
        Expand files and directories into the list of files to format.

        Raises:
            FormatError: If a path does not exist
        """
        files: list[Path] = []
        for raw in paths:
            path = Path(raw)
            if not path.exists():
                raise FormatError(path, "No such file or directory")
            if path.is_file():
                files.append(path)
                continue
            for candidate in sorted(path.rglob("*")):
                if any(part in IGNORED_DIRECTORIES for part in candidate.relative_to(path).parts):
                    continue
                if candidate.is_file() and candidate.suffix in SUPPORTED_EXTENSIONS:
                    files.append(candidate)
        return files

    async def format_source(self, text: str) -> str:
        """Format source text that is not backed by a file."""
        return await self._orchestrator.format_text(text)

    async def format_file(self, path: Path | str, write: bool = False) -> FileFormatResult:
        """
        Format one file.

        Args:
            path: File to format
            write: Write the formatted content back when it changed

        Returns:
            FileFormatResult for the file

        Raises:
            FormatError: If reading, formatting or writing fails
        """
        path = Path(path)
        start = time.perf_counter()

        try:
            # newline="" keeps the file's own line endings
            with open(path, encoding="utf-8", newline="") as handle:
                original = handle.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FormatError(path, f"Cannot read file: {e}") from e

        try:
            document = await self._orchestrator.format_document(original)
        except Exception as e:
            logger.error(f"Formatting failed for {path}: {e}")
            raise FormatError(path, str(e)) from e

        written = False
        if write and document.changed:
            try:
                with open(path, "w", encoding="utf-8", newline="") as handle:
                    handle.write(document.text)
            except OSError as e:
                raise FormatError(path, f"Cannot write file: {e}") from e
            written = True
            logger.info(f"Formatted {path}")

        return FileFormatResult(
            path=path,
            changed=document.changed,
            written=written,
            conflicts=document.conflicts,
            duration_ms=(time.perf_counter() - start) * 1000,
            formatted=document.text,
        )

    async def format_paths(
        self, paths: Iterable[Path | str], write: bool = False
    ) -> list[FileFormatResult]:
        """Format every supported file under the given paths."""
        results = []
        for path in self.collect_files(paths):
            results.append(await self.format_file(path, write=write))
        return results
