"""
PyQt5 desktop client for the Risk Data Visualizer backend.

- A worker thread handles HTTP so the window does not freeze.
- Matplotlib draws the per-metric mean score chart for one hotspot.
- A picked CSV is shown straight away from the local file, then uploaded;
  a successful upload bumps the upload id, which re-fetches from the backend.
"""
import logging
import sys
from dataclasses import dataclass
from typing import Any, Dict

import pandas as pd
from PyQt5.QtCore import QThread, pyqtSignal
from PyQt5.QtWidgets import (
    QApplication,
    QCheckBox,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QStackedWidget,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)
from matplotlib.backends.backend_qt5agg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure

from . import api
from .aggregation import ChartPoint
from .chart import chart_title, draw_metric_scores, point_at, tooltip_text
from .chart_state import READY, MetricChartState

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "CRIMINAL NETWORKS"


@dataclass
class FetchResult:
    ok: bool
    error_message: str | None
    rows: list[Dict[str, Any]] | None


@dataclass
class UploadResult:
    ok: bool
    error_message: str | None
    payload: Dict[str, Any] | None


class FetchRiskWorker(QThread):
    """Background job that pulls every risk row from the API."""

    finished_with_result = pyqtSignal(object)

    def run(self) -> None:
        try:
            rows = api.get_risk_data()
            result = FetchResult(ok=True, error_message=None, rows=rows)
        except api.ApiError as exc:
            result = FetchResult(ok=False, error_message=str(exc), rows=None)
        self.finished_with_result.emit(result)


class UploadWorker(QThread):
    """Background job that uploads the CSV file to the API."""

    finished_with_result = pyqtSignal(object)

    def __init__(self, file_path: str):
        super().__init__()
        self.file_path = file_path

    def run(self) -> None:
        try:
            payload = api.upload_csv(self.file_path)
            result = UploadResult(ok=True, error_message=None, payload=payload)
        except (api.ApiError, OSError) as exc:
            result = UploadResult(ok=False, error_message=str(exc), payload=None)
        self.finished_with_result.emit(result)


class MetricScoreCanvas(FigureCanvas):
    """Matplotlib canvas with a hover tooltip per metric point."""

    def __init__(self, parent: QWidget | None = None):
        self.fig = Figure(figsize=(6, 4))
        super().__init__(self.fig)
        self.setParent(parent)
        self.ax = self.fig.add_subplot(111)
        self.points: list[ChartPoint] = []
        self.tooltip = None
        self.mpl_connect("motion_notify_event", self._on_hover)

    def plot_points(self, points: list[ChartPoint], title: str) -> None:
        self.points = points
        draw_metric_scores(self.ax, points, title)
        self.tooltip = self.ax.annotate(
            "",
            xy=(0, 0),
            xytext=(12, 12),
            textcoords="offset points",
            bbox={"boxstyle": "round", "fc": "white", "ec": "#999999"},
            fontsize=9,
        )
        self.tooltip.set_visible(False)
        self.fig.tight_layout()
        self.draw()

    def _on_hover(self, event) -> None:
        if self.tooltip is None or event.inaxes is not self.ax:
            return
        point = point_at(self.points, event.xdata, event.ydata)
        if point is None:
            if self.tooltip.get_visible():
                self.tooltip.set_visible(False)
                self.draw_idle()
            return
        self.tooltip.xy = (point.metric_index, point.score)
        self.tooltip.set_text(tooltip_text(point))
        self.tooltip.set_visible(True)
        self.draw_idle()


def read_csv_rows(file_path: str) -> list[Dict[str, str]]:
    # Same header cleanup as riskdata.parsing.read_rows; keep the two in sync.
    df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
    df.columns = [str(col).strip().lstrip("\ufeff") for col in df.columns]
    return df.to_dict(orient="records")


class MainWindow(QWidget):
    def __init__(self, hotspot: str = "HS1", title: str = DEFAULT_TITLE, show_table: bool = False):
        super().__init__()
        self.setWindowTitle("Risk Data Visualizer - Desktop")
        self.setMinimumSize(900, 600)

        self.title = title
        self.selected_file: str | None = None
        self.upload_id = 0
        # Keep references so running threads are not garbage collected.
        self.fetch_workers: list[FetchRiskWorker] = []
        self.current_upload_worker: UploadWorker | None = None

        self.state = MetricChartState(
            start_fetch=self._start_fetch,
            hotspot=hotspot,
            listener=self._render,
        )

        self._build_ui(show_table)
        self.state.mount()

    def _build_ui(self, show_table: bool) -> None:
        main_layout = QVBoxLayout()
        main_layout.setContentsMargins(16, 16, 16, 16)
        main_layout.setSpacing(12)

        self.title_label = QLabel("")
        self.title_label.setStyleSheet("font-size: 18px; font-weight: 600;")
        main_layout.addWidget(self.title_label)

        # Controls: hotspot, CSV picker, upload, refresh.
        controls = QHBoxLayout()

        controls.addWidget(QLabel("Hotspot:"))
        self.hotspot_input = QLineEdit(self.state.hotspot)
        self.hotspot_input.setMaximumWidth(120)
        self.hotspot_input.returnPressed.connect(self.on_hotspot_changed)
        controls.addWidget(self.hotspot_input)

        select_button = QPushButton("Open CSV...")
        select_button.clicked.connect(self.on_select_file)
        controls.addWidget(select_button)

        self.upload_button = QPushButton("Upload CSV")
        self.upload_button.clicked.connect(self.on_upload_clicked)
        controls.addWidget(self.upload_button)

        refresh_button = QPushButton("Refresh Data")
        refresh_button.clicked.connect(self.state.refresh)
        controls.addWidget(refresh_button)

        self.table_toggle = QCheckBox("Show table")
        self.table_toggle.setChecked(show_table)
        self.table_toggle.toggled.connect(lambda _checked: self._render(self.state))
        controls.addWidget(self.table_toggle)
        controls.addStretch()

        main_layout.addLayout(controls)

        self.file_path_label = QLabel("No file selected")
        self.file_path_label.setStyleSheet("color: #6b7280; font-size: 10px;")
        main_layout.addWidget(self.file_path_label)

        # Either the chart or a placeholder with a retry button.
        self.stack = QStackedWidget()

        placeholder = QWidget()
        placeholder_layout = QVBoxLayout()
        self.placeholder_label = QLabel("")
        self.placeholder_label.setStyleSheet("color: #6b7280;")
        self.retry_button = QPushButton("Refresh Data")
        self.retry_button.clicked.connect(self.state.refresh)
        placeholder_layout.addStretch()
        placeholder_layout.addWidget(self.placeholder_label)
        placeholder_layout.addWidget(self.retry_button)
        placeholder_layout.addStretch()
        placeholder.setLayout(placeholder_layout)

        self.chart_canvas = MetricScoreCanvas(self)

        self.stack.addWidget(placeholder)
        self.stack.addWidget(self.chart_canvas)
        main_layout.addWidget(self.stack, stretch=3)

        self.table = QTableWidget(0, 4)
        self.table.setHorizontalHeaderLabels(["Metric Index", "Metric Name", "RP Score", "Risk Level"])
        main_layout.addWidget(self.table, stretch=1)

        self.setLayout(main_layout)

    # -- chart state --------------------------------------------------

    def _start_fetch(self) -> None:
        worker = FetchRiskWorker()
        worker.finished_with_result.connect(self.on_fetch_finished)
        worker.finished.connect(lambda: self.fetch_workers.remove(worker))
        self.fetch_workers.append(worker)
        worker.start()

    def on_fetch_finished(self, result: FetchResult) -> None:
        if result.ok:
            self.state.fetch_succeeded(result.rows or [])
        else:
            self.state.fetch_failed(result.error_message or "")

    def _render(self, state: MetricChartState) -> None:
        self.title_label.setText(chart_title(state.hotspot, self.title))

        if state.status != READY:
            self.placeholder_label.setText(state.placeholder_text)
            self.retry_button.setVisible(not state.loading)
            self.stack.setCurrentIndex(0)
            self.table.setVisible(False)
            return

        self.chart_canvas.plot_points(state.chart_data, chart_title(state.hotspot, self.title))
        self.stack.setCurrentIndex(1)
        self._fill_table(state.chart_data)
        self.table.setVisible(self.table_toggle.isChecked())

    def _fill_table(self, points: list[ChartPoint]) -> None:
        self.table.setRowCount(len(points))
        for row, point in enumerate(points):
            self.table.setItem(row, 0, QTableWidgetItem(str(point.metric_index)))
            self.table.setItem(row, 1, QTableWidgetItem(point.metric))
            self.table.setItem(row, 2, QTableWidgetItem(str(point.score)))
            self.table.setItem(row, 3, QTableWidgetItem(point.risk_level))

    # -- user actions -------------------------------------------------

    def on_hotspot_changed(self) -> None:
        hotspot = self.hotspot_input.text().strip()
        if hotspot:
            self.state.set_hotspot(hotspot)

    def on_select_file(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Select risk CSV", "", "CSV files (*.csv);;All files (*.*)"
        )
        if not file_path:
            return

        self.selected_file = file_path
        self.file_path_label.setText(file_path)
        try:
            rows = read_csv_rows(file_path)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
            self._show_error(f"Could not read {file_path}: {exc}")
            return
        self.state.set_local_rows(rows)

    def on_upload_clicked(self) -> None:
        if not self.selected_file:
            self._show_error("Please select a CSV file first.")
            return

        self.upload_button.setEnabled(False)
        self.upload_button.setText("Uploading...")

        self.current_upload_worker = UploadWorker(self.selected_file)
        self.current_upload_worker.finished_with_result.connect(self.on_upload_finished)
        self.current_upload_worker.start()

    def on_upload_finished(self, result: UploadResult) -> None:
        self.upload_button.setEnabled(True)
        self.upload_button.setText("Upload CSV")

        if not result.ok:
            self._show_error(result.error_message or "Upload failed.")
            return

        logger.info("Upload finished: %s", result.payload)
        self.file_path_label.setText(
            f"{self.selected_file} - {(result.payload or {}).get('rows', 0)} rows uploaded"
        )
        # The backend now holds the data; stop preferring the local copy.
        self.state.local_rows = None
        self.upload_id += 1
        self.state.set_upload_id(self.upload_id)

    def _show_error(self, message: str) -> None:
        logger.warning(message)
        msg_box = QMessageBox(self)
        msg_box.setIcon(QMessageBox.Warning)
        msg_box.setWindowTitle("Error")
        msg_box.setText(message)
        msg_box.exec_()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
