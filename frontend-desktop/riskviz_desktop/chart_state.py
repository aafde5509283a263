"""
State behind the metric score chart, kept free of Qt so it is easy to test.

The window owns one ``MetricChartState``. It hands over a ``start_fetch``
callable (which kicks off a background request) and a listener that redraws
whenever the state changes. Results are reported back through
``fetch_succeeded`` / ``fetch_failed``. There is no request fencing: a slow
response that arrives after a newer one still wins.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Sequence

from .aggregation import ChartPoint, aggregate

logger = logging.getLogger(__name__)

LOADING = "loading"
ERROR = "error"
EMPTY = "empty"
READY = "ready"

NO_DATA_MESSAGE = "No risk data available"
FETCH_ERROR_MESSAGE = "Error fetching data from backend"

Rows = Sequence[Mapping[str, Any]]


class MetricChartState:
    def __init__(
        self,
        start_fetch: Callable[[], None],
        hotspot: str = "HS1",
        listener: Callable[["MetricChartState"], None] | None = None,
    ):
        self._start_fetch = start_fetch
        self._listener = listener
        self.hotspot = hotspot
        self.chart_data: list[ChartPoint] = []
        self.loading = False
        self.error: str | None = None
        self.upload_id = 0
        self.local_rows: Rows | None = None
        self.fetched_rows: Rows | None = None

    @property
    def status(self) -> str:
        if self.loading:
            return LOADING
        if self.error:
            return ERROR
        if not self.chart_data:
            return EMPTY
        return READY

    @property
    def placeholder_text(self) -> str:
        if self.status == LOADING:
            return "Loading metric score data..."
        return self.error or f"No metric score data available for {self.hotspot}"

    # -- triggers -------------------------------------------------------

    def mount(self) -> None:
        """First display of the chart."""
        self.sync()

    def sync(self) -> None:
        """Use local rows when there are any, otherwise fetch if nothing is shown."""
        if self.local_rows:
            logger.info("Using locally loaded CSV data")
            self._process(self.local_rows)
        elif not self.loading and not self.chart_data:
            self.refresh()

    def refresh(self) -> None:
        """Re-fetch from the backend (also the retry action of the placeholders)."""
        logger.info("Fetching risk data from backend")
        self.loading = True
        self.error = None
        self._notify()
        self._start_fetch()

    def set_upload_id(self, upload_id: int) -> None:
        if upload_id == self.upload_id:
            return
        self.upload_id = upload_id
        if upload_id > 0:
            logger.info("Upload id changed to %d, fetching fresh data", upload_id)
            self.refresh()

    def set_local_rows(self, rows: Rows | None) -> None:
        self.local_rows = rows
        self.sync()

    def set_hotspot(self, hotspot: str) -> None:
        self.hotspot = hotspot
        rows = self.local_rows or self.fetched_rows
        if rows:
            self._process(rows)
        else:
            self.sync()

    # -- fetch results --------------------------------------------------

    def fetch_succeeded(self, rows: Rows) -> None:
        self.loading = False
        if rows:
            logger.info("Retrieved %d risk rows from backend", len(rows))
            self.fetched_rows = rows
            self._process(rows)
        else:
            logger.info("No risk data available from backend")
            self.error = NO_DATA_MESSAGE
            self._notify()

    def fetch_failed(self, message: str) -> None:
        logger.error("Error fetching risk data: %s", message)
        self.loading = False
        self.error = FETCH_ERROR_MESSAGE
        self._notify()

    # -------------------------------------------------------------------

    def _process(self, rows: Rows) -> None:
        self.error = None
        self.chart_data = aggregate(rows, self.hotspot)
        logger.info("Extracted %d metric points for %s", len(self.chart_data), self.hotspot)
        self._notify()

    def _notify(self) -> None:
        if self._listener is not None:
            self._listener(self)
