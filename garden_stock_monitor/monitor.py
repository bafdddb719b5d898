"""Poll cycle: fetch, normalise, diff, notify and persist.

Both entry points return a JSON-ready dict and never raise: any failure is
logged, reported by email on a best-effort basis, and returned as
``{"success": False, "error": message}``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List

from .emailer import EmailNotifier
from .scraper import fetch_stock_data
from .snapshot import SnapshotStore
from .stock import EMPTY_LISTING, diff_stock, format_stock_listing, normalize_stock

logger = logging.getLogger(__name__)

UPDATE_SUBJECT = "GrowAGarden Stock Update"
CHECK_ERROR_SUBJECT = "Stock Check Error"
LISTING_SUBJECT = "Current GrowAGarden Stock"
LISTING_ERROR_SUBJECT = "Current Stock Error"


class StockMonitor:
    def __init__(
        self,
        store: SnapshotStore,
        notifier: EmailNotifier,
        fetcher: Callable[[], Any] = fetch_stock_data,
    ):
        self.store = store
        self.notifier = notifier
        self.fetcher = fetcher

    def _report_error(self, subject: str, line: str) -> None:
        try:
            self.notifier.send(subject, [line])
        except Exception:
            logger.exception("Failed to send error notification")

    def check_stock_changes(self) -> Dict[str, Any]:
        """Run one full cycle and persist the raw payload as the new baseline."""
        try:
            current_raw = self.fetcher()
            previous_raw = self.store.load()

            current = normalize_stock(current_raw)
            previous = normalize_stock(previous_raw)
            changes: List[str] = diff_stock(previous, current)

            if changes:
                self.notifier.send(UPDATE_SUBJECT, changes)
                logger.info("Detected %d stock change(s)", len(changes))
            else:
                logger.info("No stock changes detected this cycle.")

            self.store.save(current_raw)
            return {"success": True, "changes": changes}
        except Exception as e:
            logger.exception("Error checking stock")
            self._report_error(CHECK_ERROR_SUBJECT, f"Error checking stock: {e}")
            return {"success": False, "error": str(e)}

    def get_current_stock(self) -> Dict[str, Any]:
        """Fetch the current stock and email the full listing."""
        try:
            current = normalize_stock(self.fetcher())
            stock = format_stock_listing(current)
            self.notifier.send(LISTING_SUBJECT, stock or [EMPTY_LISTING])
            logger.info("Current stock listing: %d item(s)", len(stock))
            return {"success": True, "stock": stock}
        except Exception as e:
            logger.exception("Error fetching current stock")
            self._report_error(LISTING_ERROR_SUBJECT, f"Error fetching stock: {e}")
            return {"success": False, "error": str(e)}


__all__ = ["StockMonitor"]
