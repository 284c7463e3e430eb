"""
Input intake.

Turns uploaded bytes or files into raw text for the pipeline. Text-like
sources are decoded with encoding fallbacks; other formats are not
parsed and receive the configured stand-in text instead.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from docfill.config import PipelineConfig

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = (".txt", ".text", ".csv", ".md")

# latin-1 maps every byte, so it must stay last
_FALLBACK_ENCODINGS = ("cp1252", "latin-1")

_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


class IntakeError(Exception):
    """Raised when an upload cannot be turned into usable text."""

    def __init__(self, message: str, source_name: str | None = None, details: str | None = None):
        self.source_name = source_name
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": str(self),
            "source_name": self.source_name,
            "details": self.details,
        }


@dataclass(frozen=True)
class IntakeResult:
    """Raw text produced from one upload.

    Args:
        text: Text to feed to the pipeline.
        source_name: Filename (or path) of the upload.
        is_stand_in: True when the upload was not text and the
            stand-in text was substituted.
        encoding: Encoding used to decode the bytes, None for stand-ins.
        warnings: Non-fatal notes such as encoding fallbacks.
    """

    text: str
    source_name: str | None = None
    is_stand_in: bool = False
    encoding: str | None = None
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary (text omitted)."""
        return {
            "filename": self.source_name,
            "is_stand_in": self.is_stand_in,
            "encoding": self.encoding,
            "warnings": list(self.warnings),
        }


class TextIntake:
    """Reads uploads into pipeline-ready text.

    Args:
        config: Supplies the stand-in text and input size limit.

    Example::

        intake = TextIntake()
        result = intake.read_path(Path("q3_figures.txt"))
        outcome = pipeline.process(result.text, "income-statement")
    """

    def __init__(self, config: PipelineConfig | None = None) -> None:
        self._config = config or PipelineConfig()

    @staticmethod
    def is_text_source(filename: str | None, content_type: str | None = None) -> bool:
        """Check whether an upload should be decoded as text."""
        if content_type and content_type.lower().startswith("text/"):
            return True
        if filename:
            return Path(filename).suffix.lower() in TEXT_SUFFIXES
        return False

    def read_bytes(
        self,
        data: bytes,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> IntakeResult:
        """Turn uploaded bytes into text.

        Args:
            data: Raw upload content.
            filename: Original filename, used for type detection.
            content_type: MIME type reported by the client.

        Returns:
            IntakeResult with decoded or stand-in text.

        Raises:
            IntakeError: If the text is empty or too long.
        """
        if not self.is_text_source(filename, content_type):
            logger.info("Non-text upload %s, using stand-in text", filename)
            return IntakeResult(
                text=self._config.stand_in_text,
                source_name=filename,
                is_stand_in=True,
            )

        text, encoding, warnings = self._decode(data, filename)
        text = _CONTROL_CHARS_RE.sub("", text)

        if not text.strip():
            raise IntakeError("Uploaded file contains no text", source_name=filename)
        if len(text) > self._config.max_input_chars:
            raise IntakeError(
                "Uploaded file is too large",
                source_name=filename,
                details=f"{len(text)} characters, limit {self._config.max_input_chars}",
            )

        return IntakeResult(
            text=text,
            source_name=filename,
            encoding=encoding,
            warnings=tuple(warnings),
        )

    def read_path(self, path: Path | str) -> IntakeResult:
        """Read a file from disk.

        Args:
            path: File to read.

        Returns:
            IntakeResult for the file's content.

        Raises:
            IntakeError: If the file cannot be read or has no usable text.
        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise IntakeError(
                f"Failed to read file: {e}",
                source_name=str(path),
                details=str(e),
            ) from e
        return self.read_bytes(data, filename=path.name)

    @staticmethod
    def _decode(data: bytes, filename: str | None) -> tuple[str, str, list[str]]:
        """Decode bytes as utf-8, falling back to single-byte encodings."""
        try:
            return data.decode("utf-8-sig"), "utf-8", []
        except UnicodeDecodeError:
            pass

        for encoding in _FALLBACK_ENCODINGS:
            try:
                text = data.decode(encoding)
            except UnicodeDecodeError:
                continue
            logger.warning("Used fallback encoding %s for %s", encoding, filename)
            return text, encoding, [f"Used fallback encoding: {encoding}"]

        raise IntakeError(
            "Could not decode text file with any supported encoding",
            source_name=filename,
            details="Tried: utf-8, " + ", ".join(_FALLBACK_ENCODINGS),
        )
