class ReportError(Exception):
    """Base class for failures of the order-summary pipeline."""


class ConfigurationError(ReportError):
    """Raised when a required setting is missing or invalid."""


class FetchError(ReportError):
    """Raised when the order store query fails."""


class DispatchError(ReportError):
    """Raised when the rendered summary could not be delivered."""
