from typing import Sequence, Tuple
import pyqtgraph as pg

from app.state import HistorySeries

WPM_COLOR = "#4caf50"
ACC_COLOR = "#2196f3"


def setup_history_plot(plot_widget: pg.PlotWidget, text_color: str = "#fff") -> Tuple[pg.PlotDataItem, pg.PlotDataItem]:
    """Configure the history plot once and return its (wpm, accuracy) curves."""
    plot_widget.setBackground(None)
    plot_widget.showGrid(x=False, y=True, alpha=0.15)
    plot_widget.setMenuEnabled(False)
    plot_widget.setMouseEnabled(x=False, y=False)
    plot_widget.hideButtons()
    plot_widget.addLegend(labelTextColor=text_color)
    plot_widget.setLimits(yMin=0)
    plot_widget.enableAutoRange("y", True)
    for side in ("left", "bottom"):
        plot_widget.getAxis(side).setTextPen(text_color)
    wpm_curve = plot_widget.plot(
        [], [], name="WPM", pen=pg.mkPen(WPM_COLOR, width=2.5),
        symbol="o", symbolSize=6, symbolBrush=WPM_COLOR, antialias=True,
    )
    acc_curve = plot_widget.plot(
        [], [], name="Accuracy", pen=pg.mkPen(ACC_COLOR, width=2.5),
        symbol="o", symbolSize=6, symbolBrush=ACC_COLOR, antialias=True,
    )
    return wpm_curve, acc_curve


def label_ticks(labels: Sequence[str]):
    return [[(i, lab) for i, lab in enumerate(labels)]]


def update_history_plot(plot_widget: pg.PlotWidget, curves, series: HistorySeries):
    wpm_curve, acc_curve = curves
    x = list(range(len(series.labels)))
    wpm_curve.setData(x, list(series.wpm))
    acc_curve.setData(x, list(series.accuracy))
    plot_widget.getAxis("bottom").setTicks(label_ticks(series.labels))
