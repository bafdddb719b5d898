"""Error kinds raised inside a poll cycle.

All of them are caught at the :class:`~garden_stock_monitor.monitor.StockMonitor`
boundary and turned into a structured failure result.
"""


class StockMonitorError(Exception):
    """Base class for every error raised by this package."""


class FetchError(StockMonitorError):
    """Raised when the upstream page cannot be retrieved."""


class ExtractionError(StockMonitorError):
    """Raised when the embedded JSON object cannot be located in the page."""


class ParseError(StockMonitorError):
    """Raised when the extracted text is not valid JSON."""


class PersistenceError(StockMonitorError):
    """Raised when the snapshot file cannot be written."""


class DeliveryError(StockMonitorError):
    """Raised when the email provider rejects or fails a send."""


class KeyMaterialError(StockMonitorError):
    """Raised when the email API key cannot be decrypted."""


__all__ = [
    "StockMonitorError",
    "FetchError",
    "ExtractionError",
    "ParseError",
    "PersistenceError",
    "DeliveryError",
    "KeyMaterialError",
]
