"""Domain exceptions raised by the agents and caught at the API and worker edges."""


class AtelieError(Exception):
    """Base class for application errors."""


class AIConfigurationError(AtelieError):
    """Raised when an AI client is needed but no API key is configured."""


class AIResponseError(AtelieError):
    """Raised when the AI provider returns no usable content."""


class AnalysisParseError(AtelieError):
    """Raised when the AI response is not valid analysis JSON."""


class UnsupportedProviderError(AtelieError):
    """Raised when the configured AI provider is not supported."""


class AnalysisNotFoundError(AtelieError):
    """Raised when an analysis record does not exist."""


class ArtworkNotFoundError(AtelieError):
    """Raised when an artwork is missing from the catalog index."""
