"""Unified exception taxonomy for the GeoJSON codec.

Every failure raised by the reader and writer inherits from
``GeosonError`` and carries a stable ``stage`` and ``code`` so callers
can branch on the condition without parsing messages.  Messages for
header defects are part of the public contract and never change.

Taxonomy categories
-------------------
- ``ValidationError``: the document (or configuration) is structurally
  wrong.  Split further into ``DocumentError`` and its ``HeaderError``
  branch.
- ``IOFailure``: the file boundary failed (cannot open for read/write).

Every exception exposes ``to_error_dict()`` for a structured payload
suitable for logging.
"""

from __future__ import annotations


class GeosonError(Exception):
    """Base exception for all codec errors.

    Attributes:
        message: Human-readable error description.
        stage: Codec stage where the error occurred
            (e.g. ``"normalize"``, ``"header"``, ``"write"``).
        code: Machine-readable error code (e.g. ``"MISSING_DATUM"``).
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(self, message: str = "", *, stage: str = "", code: str = "") -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, IOFailure):
            return "io"
        return "unknown"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(GeosonError):
    """Input or configuration validation failure."""


class IOFailure(GeosonError):
    """A file could not be opened for reading or writing."""


# ---------------------------------------------------------------------------
# Document structure
# ---------------------------------------------------------------------------


class DocumentError(ValidationError):
    """The GeoJSON document does not have the shape the codec requires."""

    default_stage = "parse"
    default_code = "DOCUMENT_INVALID"


class MalformedDocument(DocumentError):
    """Root is not valid JSON, not an object, or lacks a string ``type``."""

    default_stage = "normalize"
    default_code = "MALFORMED_DOCUMENT"


class InvalidCoordinates(DocumentError):
    """A position is too short, non-numeric, or a coordinate array is missing."""

    default_stage = "geometry"
    default_code = "INVALID_COORDINATES"


# ---------------------------------------------------------------------------
# Header (top-level properties)
# ---------------------------------------------------------------------------


class HeaderError(DocumentError):
    """The top-level ``properties`` header is missing or incomplete."""

    default_stage = "header"
    default_code = "HEADER_INVALID"


class MissingProperties(HeaderError):
    default_code = "MISSING_PROPERTIES"


class MissingCRS(HeaderError):
    default_code = "MISSING_CRS"


class InvalidCRS(HeaderError):
    default_code = "UNKNOWN_CRS"


UnknownCRS = InvalidCRS


class MissingDatum(HeaderError):
    default_code = "MISSING_DATUM"


class MissingHeading(HeaderError):
    default_code = "MISSING_HEADING"


# ---------------------------------------------------------------------------
# File boundary
# ---------------------------------------------------------------------------


class ReadError(IOFailure):
    """Raised when the source path cannot be opened."""

    default_stage = "read"
    default_code = "READ_FAILED"


class WriteError(IOFailure):
    """Raised when the destination path cannot be opened for writing."""

    default_stage = "write"
    default_code = "WRITE_FAILED"
