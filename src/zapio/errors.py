class ZapioError(Exception):
    """Base class for every error raised by Zapio."""


class ConfigError(ZapioError):
    """Missing or invalid settings, e.g. no API key for the selected backend."""


class UnsupportedFormatError(ZapioError, ValueError):
    pass


class ExtractionError(ZapioError):
    """A document could not be read or produced no text."""


class LLMError(ZapioError, RuntimeError):
    """The model backend failed or returned something unusable."""
