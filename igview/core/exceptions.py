"""Custom exceptions for export extraction."""


class ExtractionError(Exception):
    """Base class for recoverable extraction failures.

    None of these escape :func:`igview.parse_export`; each one advances a
    fallback cascade and is recorded in the diagnostics log.
    """

    prefix = "Extraction failed"

    def __init__(self, message: str | None = None):
        self.message = f"{self.prefix}: {message}" if message else self.prefix
        super().__init__(self.message)


class FileNotFound(ExtractionError):
    """A named candidate document is absent from the bundle."""

    prefix = "File not found"

    def __init__(self, target: str):
        self.target = target
        super().__init__(target)


class ParseFailure(ExtractionError):
    """A document was found but is not valid JSON."""

    prefix = "Parse failed"

    def __init__(self, path: str, reason: str | None = None):
        self.path = path
        self.reason = reason
        super().__init__(f"{path} ({reason})" if reason else path)


class SchemaMismatch(ExtractionError):
    """A document parsed but lacks the fields a strategy expects."""

    prefix = "Schema mismatch"


class EncodingRepairFailure(ExtractionError):
    """A string could not be re-decoded; the original is kept."""

    prefix = "Encoding repair failed"


class InsufficientDataError(Exception):
    """Raised when a parse resolved neither a username nor any media."""

    def __init__(self, message: str | None = None):
        self.message = message or (
            "Could not parse Instagram data. "
            "Please ensure you selected the root folder of your export."
        )
        super().__init__(self.message)
