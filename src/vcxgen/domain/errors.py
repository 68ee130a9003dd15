from __future__ import annotations

"""
Domain Exception Hierarchy.

Every failure raised by the document codec, the project builders and the
export engine derives from VcxgenError so that interface layers can trap
them with a single clause.
"""


class VcxgenError(Exception):
    """Base class for all application-level failures."""


# -----------------------------------------------------------------------------
# DOCUMENT CODEC
# -----------------------------------------------------------------------------

class MalformedDocumentError(VcxgenError):
    """
    The byte stream handed to the decoder is not well-formed markup.

    Attributes:
        line: Line reported by the parser, if known.
        column: Column reported by the parser, if known.
    """

    def __init__(self, message: str, line: int = 0, column: int = 0):
        super().__init__(message)
        self.line = line
        self.column = column


class SinkWriteError(VcxgenError):
    """The sink receiving an encoded document failed during the write."""


# -----------------------------------------------------------------------------
# FILTER HIERARCHY
# -----------------------------------------------------------------------------

class PathResolutionError(VcxgenError):
    """A file directory cannot be expressed relative to the project root."""


class NamespaceParseError(VcxgenError):
    """The configured UUID namespace is not a valid UUID."""


# -----------------------------------------------------------------------------
# ENVIRONMENT
# -----------------------------------------------------------------------------

class TemplateNotFoundError(VcxgenError):
    """The project template could not be located or read."""


class ConfigError(VcxgenError):
    """A configuration file exists but cannot be used."""
