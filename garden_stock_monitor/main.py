from __future__ import annotations

import logging
import threading
from typing import Optional

from . import config, keys
from .emailer import EmailNotifier
from .monitor import StockMonitor
from .server import StockHTTPServer
from .snapshot import SnapshotStore


def setup_logging() -> None:
    level = getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build_monitor() -> StockMonitor:
    """Wire the monitor from configuration."""
    api_key = keys.resolve_api_key(
        config.SENDGRID_API_KEY,
        config.SENDGRID_API_KEY_ENCRYPTED,
        config.ENCRYPTION_KEY,
    )
    notifier = EmailNotifier(
        api_key,
        to_address=config.YOUR_EMAIL,
        from_address=config.EMAIL_FROM,
    )
    return StockMonitor(SnapshotStore(config.STOCK_FILE), notifier)


def poll_loop(
    monitor: StockMonitor,
    interval_seconds: float,
    stop_event: Optional[threading.Event] = None,
) -> None:
    """Check once immediately, then every ``interval_seconds`` until stopped."""
    logger = logging.getLogger(__name__)
    stop_event = stop_event or threading.Event()
    while not stop_event.is_set():
        result = monitor.check_stock_changes()
        if result["success"]:
            logger.info("Scheduled check finished with %d change(s)", len(result["changes"]))
        else:
            logger.warning("Scheduled check failed: %s", result["error"])
        logger.info("Sleeping for %.0f seconds before next check.", interval_seconds)
        stop_event.wait(interval_seconds)


def main() -> None:
    """Start the HTTP server and the recurring stock check."""
    setup_logging()
    config.validate()
    logger = logging.getLogger(__name__)

    monitor = build_monitor()

    server = StockHTTPServer(monitor, host=config.HOST, port=config.PORT, public_dir=config.PUBLIC_DIR)
    server.start()

    logger.info(
        "Starting stock monitor for %s with interval %s minutes.",
        config.STOCK_URL,
        config.CHECK_INTERVAL_MINUTES,
    )
    t_poll = threading.Thread(
        target=poll_loop,
        args=(monitor, config.CHECK_INTERVAL_MINUTES * 60),
        name="stock-poll",
        daemon=True,
    )
    t_poll.start()

    try:
        t_poll.join()
    except KeyboardInterrupt:
        logger.info("Shutting down.")
    finally:
        server.stop()


if __name__ == "__main__":
    main()
