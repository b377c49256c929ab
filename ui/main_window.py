# ui/main_window.py
import html

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QFrame, QLabel, QLineEdit, QPushButton, QSizePolicy,
)
from PySide6.QtCore import Qt, Slot
import pyqtgraph as pg

from app.calculation import tokenize
from app.state import Snapshot, TrialResult
from services.typing_engine import TrialController
from ui.mistakes_panel import MistakesPanel
from utils.graph_helper import setup_history_plot, update_history_plot

PRIMARY = "#4f8cff"
BG = "#181a20"
CARD = "#23272f"
SUCCESS = "#4caf50"
ERROR = "#ff5252"
TEXT = "#fff"
SUBTLE = "#aaa"


def render_words_html(snap: Snapshot) -> str:
    """Target words with the current word highlighted and typed words coloured."""
    state = snap.state
    typed = tokenize(state.typed_text)
    parts: list[str] = []
    for idx, word in enumerate(state.target):
        style = ["padding:2px 4px"]
        if idx < len(typed) and typed[idx]:
            if typed[idx] == word:
                style.append(f"color:{SUCCESS}")
            else:
                style.append(f"color:{ERROR}")
        else:
            style.append("color:#eee")
        if idx == state.current_word_index and not state.is_finished:
            style.append("background:#444; text-decoration: underline")
        parts.append(f'<span style="{";".join(style)}">{html.escape(word)}</span>')
    return " ".join(parts)


class MainWindow(QMainWindow):
    def __init__(self, controller: TrialController, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.setWindowTitle("Word Test")
        self.resize(960, 760)

        root = QWidget(self)
        root_v = QVBoxLayout(root)
        root_v.setContentsMargins(32, 32, 32, 32)
        root_v.setSpacing(24)

        title = QLabel("Typing Speed Analyzer", root)
        title.setStyleSheet(f"color: {PRIMARY}; font-size: 32px; font-weight: 800;")
        root_v.addWidget(title)

        root_v.addWidget(self._build_test_card(root))
        root_v.addWidget(self._build_history_card(root), 1)
        self.setCentralWidget(root)
        self.setStyleSheet(
            f"""
            QWidget {{ background: {BG}; color: {TEXT}; }}
            QFrame#Card, QFrame#MistakesPanel {{ background: {CARD}; border-radius: 16px; }}
            QPushButton#Primary {{
                background: {PRIMARY}; color: {TEXT}; border: none;
                border-radius: 8px; padding: 10px 28px; font-weight: 600;
            }}
            QPushButton#Outline {{
                background: {CARD}; color: {PRIMARY}; border: 2px solid {PRIMARY};
                border-radius: 8px; padding: 10px 28px; font-weight: 600;
            }}
            QLineEdit {{
                font-size: 24px; padding: 16px; border-radius: 8px;
                border: 2px solid {PRIMARY}; background: {BG};
            }}
            """
        )

        controller.changed.connect(self._render)
        controller.finished.connect(self._on_finished)
        self._render(controller.snapshot())
        self.input.setFocus()

    # ---------------- Layout ----------------
    def _build_test_card(self, parent):
        card = QFrame(parent)
        card.setObjectName("Card")
        v = QVBoxLayout(card)
        v.setContentsMargins(32, 32, 32, 32)
        v.setSpacing(16)

        hint = QLabel("Type the words below as fast and accurately as you can!", card)
        hint.setStyleSheet(f"color: {SUBTLE}; font-size: 18px;")
        hint.setAlignment(Qt.AlignCenter)
        v.addWidget(hint)

        buttons = QHBoxLayout()
        buttons.addStretch(1)
        btn_restart = QPushButton("Restart", card)
        btn_restart.setObjectName("Primary")
        btn_restart.clicked.connect(self._on_restart)
        btn_new = QPushButton("New Test", card)
        btn_new.setObjectName("Outline")
        btn_new.clicked.connect(self._on_new_test)
        for b in (btn_restart, btn_new):
            b.setFocusPolicy(Qt.NoFocus)
            buttons.addWidget(b)
        buttons.addStretch(1)
        v.addLayout(buttons)

        self.lblWords = QLabel("", card)
        self.lblWords.setTextFormat(Qt.RichText)
        self.lblWords.setWordWrap(True)
        self.lblWords.setStyleSheet(
            "background: #3c4acf; font-family: monospace; font-size: 28px;"
            " padding: 24px; border-radius: 8px;"
        )
        self.lblWords.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
        v.addWidget(self.lblWords)

        self.input = QLineEdit(card)
        self.input.setPlaceholderText("Start typing here...")
        self.input.textEdited.connect(self.controller.ingest)
        v.addWidget(self.input)

        stats = QHBoxLayout()
        self.lblWPM = QLabel(card)
        self.lblAcc = QLabel(card)
        self.lblTime = QLabel(card)
        self.lblCount = QLabel(card)
        for lab in (self.lblWPM, self.lblAcc, self.lblTime, self.lblCount):
            lab.setStyleSheet("font-size: 20px; font-weight: 600;")
            stats.addWidget(lab)
        v.addLayout(stats)

        self.lblDone = QLabel("Test complete!", card)
        self.lblDone.setStyleSheet(f"color: {SUCCESS}; font-size: 22px; font-weight: 700;")
        self.lblDone.setAlignment(Qt.AlignCenter)
        v.addWidget(self.lblDone)

        self.btnReview = QPushButton("Review Mistakes", card)
        self.btnReview.setObjectName("Outline")
        self.btnReview.setCheckable(True)
        self.btnReview.setFocusPolicy(Qt.NoFocus)
        self.btnReview.toggled.connect(self._on_review_toggled)
        v.addWidget(self.btnReview, alignment=Qt.AlignHCenter)

        self.mistakes = MistakesPanel(card)
        self.mistakes.setVisible(False)
        v.addWidget(self.mistakes)
        return card

    def _build_history_card(self, parent):
        card = QFrame(parent)
        card.setObjectName("Card")
        v = QVBoxLayout(card)
        v.setContentsMargins(32, 24, 32, 24)

        head = QLabel("Performance Graph (Last 10 Tests)", card)
        head.setStyleSheet(f"color: {PRIMARY}; font-size: 22px; font-weight: 700;")
        v.addWidget(head)

        self.historyPlot = pg.PlotWidget(card)
        self._history_curves = setup_history_plot(self.historyPlot, TEXT)
        v.addWidget(self.historyPlot, 1)

        self.lblNoHistory = QLabel(
            "No test history yet. Complete a test to see your performance!", card
        )
        self.lblNoHistory.setStyleSheet(f"color: {SUBTLE};")
        v.addWidget(self.lblNoHistory)
        return card

    # ---------------- Rendering ----------------
    @Slot(object)
    def _render(self, snap: Snapshot):
        state, metrics = snap.state, snap.metrics
        self.lblWords.setText(render_words_html(snap))
        if self.input.text() != state.typed_text:
            self.input.setText(state.typed_text)
        self.input.setEnabled(not state.is_finished)

        acc_color = SUCCESS if metrics.accuracy > 90 else ERROR
        self.lblWPM.setText(f'WPM: <span style="color:{PRIMARY}">{metrics.wpm}</span>')
        self.lblAcc.setText(f'Accuracy: <span style="color:{acc_color}">{metrics.accuracy}%</span>')
        self.lblTime.setText(
            f'Time Left: <span style="color:{PRIMARY}">{state.time_remaining_seconds}s</span>'
        )
        self.lblCount.setText(f'Words: <span style="color:{PRIMARY}">{len(state.target)}</span>')

        self.lblDone.setVisible(state.is_finished)
        self.btnReview.setVisible(state.is_finished)
        if not state.is_finished and self.btnReview.isChecked():
            self.btnReview.setChecked(False)
        self.mistakes.set_mistakes(snap.mistakes)
        self.mistakes.setVisible(state.is_finished and self.btnReview.isChecked())

        has_history = bool(snap.history.labels)
        self.historyPlot.setVisible(has_history)
        self.lblNoHistory.setVisible(not has_history)
        if has_history:
            update_history_plot(self.historyPlot, self._history_curves, snap.history)

    # ---------------- Actions ----------------
    def _on_restart(self):
        self.controller.restart(self.controller.settings.word_count)
        self.input.setFocus()

    def _on_new_test(self):
        self.controller.restart(self.controller.settings.alt_word_count)
        self.input.setFocus()

    def _on_review_toggled(self, checked: bool):
        self.btnReview.setText("Hide Mistakes" if checked else "Review Mistakes")
        self.mistakes.setVisible(checked and self.controller.state.is_finished)

    def _on_finished(self, result: TrialResult):
        self.setWindowTitle(f"Word Test - {result.wpm} WPM, {result.accuracy}%")
