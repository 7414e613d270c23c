"""Exceptions raised by Katsuyou."""


class ConfigurationError(ValueError):
    """Raised when bundled rule or part-of-speech data is malformed."""

    def __init__(self, source: str, reason: str, line: int = 0):
        self.source = source
        self.reason = reason
        self.line = line
        where = f"{source}:{line}" if line else source
        super().__init__(f"{where}: {reason}")
