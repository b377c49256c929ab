# ui/mistakes_panel.py
from PySide6.QtWidgets import (
    QFrame,
    QVBoxLayout,
    QLabel,
    QTableWidget,
    QTableWidgetItem,
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QColor

from services.mistakes import summarize_mistakes

ERROR = "#ff5252"
SUCCESS = "#4caf50"


class MistakesPanel(QFrame):
    """Post-trial review: error count, typed -> expected pairs, corrections."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("MistakesPanel")
        root = QVBoxLayout(self)
        root.setContentsMargins(20, 16, 20, 16)

        self.lblTitle = QLabel("Mistake Summary", self)
        self.lblTitle.setStyleSheet(f"color: {ERROR}; font-size: 18px; font-weight: 700;")
        root.addWidget(self.lblTitle)

        self.lblTotal = QLabel("", self)
        root.addWidget(self.lblTotal)

        self.table = QTableWidget(0, 2, self)
        self.table.setHorizontalHeaderLabels(["Typed", "Suggested correction"])
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.setFocusPolicy(Qt.NoFocus)
        root.addWidget(self.table)

        self.lblClean = QLabel("No mistakes!", self)
        self.lblClean.setStyleSheet(f"color: {SUCCESS};")
        root.addWidget(self.lblClean)

        self.set_mistakes(())

    def set_mistakes(self, mistakes):
        summary = summarize_mistakes(mistakes)
        has_errors = summary.total > 0
        self.lblTitle.setVisible(has_errors)
        self.lblTotal.setVisible(has_errors)
        self.table.setVisible(has_errors)
        self.lblClean.setVisible(not has_errors)

        self.lblTotal.setText(f"<b>Total Errors:</b> {summary.total}")
        self.table.setRowCount(summary.total)
        for i, ((typed, _), fix) in enumerate(zip(summary.pairs, summary.corrections)):
            typed_item = QTableWidgetItem(typed)
            typed_item.setForeground(QColor(ERROR))
            self.table.setItem(i, 0, typed_item)
            self.table.setItem(i, 1, QTableWidgetItem(fix))
