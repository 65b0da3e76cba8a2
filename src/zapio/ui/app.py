import os
import sys

from loguru import logger
from PySide6.QtCore import QObject, Qt, QThread, Signal
from PySide6.QtGui import QTextCursor
from PySide6.QtWidgets import (
    QApplication, QButtonGroup, QComboBox, QFileDialog, QHBoxLayout, QLabel,
    QMessageBox, QProgressBar, QPushButton, QRadioButton, QStackedWidget,
    QTextEdit, QVBoxLayout, QWidget
)

from zapio.ai.generator import generate
from zapio.ai.llm_router import check_config
from zapio.ai.ollama_client import ollama_models
from zapio.config import load_config
from zapio.errors import ConfigError
from zapio.export.anki_exporter import export_anki
from zapio.export.markdown_exporter import (
    cheatsheet_to_markdown, export_markdown, flashcards_to_markdown
)
from zapio.export.pdf_exporter import export_cheatsheet_pdf
from zapio.extractor.document import SUPPORTED_EXTENSIONS, preview_document
from zapio.main import configure_logging, safe_filename
from zapio.models import Cheatsheet, ContentKind
from zapio.study.flashcard_deck import FlashcardDeck
from zapio.study.quiz_session import QuizResult, QuizSession
from zapio.ui.settings_dialog import SettingsDialog


# -------------------- THEME --------------------
ACCENT = "#6C5CE7"
TEXT_SECONDARY = "#6B7280"
BAND_COLORS = {
    "success": "#34D399",
    "warning": "#F59E0B",
    "error": "#EF4444",
}

KIND_LABELS = {
    "Practice Quiz": ContentKind.QUIZ,
    "Flash Cards": ContentKind.FLASHCARDS,
    "Full Cheatsheet": ContentKind.CHEATSHEET,
}

FILE_FILTER = "Documents ({})".format(" ".join(f"*{ext}" for ext in SUPPORTED_EXTENSIONS))


# -------------------- WORKER --------------------
class Worker(QObject):
    """Runs one generation off the UI thread; results come back through signals."""
    finished = Signal(object)
    error = Signal(str)

    def __init__(self, kind: ContentKind, path: str, cfg: dict):
        super().__init__()
        self.kind = kind
        self.path = path
        self.cfg = cfg

    def run(self):
        try:
            result = generate(self.kind, self.path, self.cfg)
        except Exception as e:  # surface anything to the user instead of dying in the thread
            logger.exception("Generation failed")
            self.error.emit(str(e))
            return
        self.finished.emit(result)


# -------------------- VIEWS --------------------
class QuizView(QWidget):
    completed = Signal(object)

    def __init__(self):
        super().__init__()
        self.session = None

        self.progress = QProgressBar()
        self.progress.setTextVisible(False)
        self.progress_label = QLabel()
        self.question_label = QLabel()
        self.question_label.setWordWrap(True)
        self.question_label.setAlignment(Qt.AlignCenter)
        self.question_label.setStyleSheet("font-size: 18px; font-weight: 600;")

        self.option_group = QButtonGroup(self)
        self.option_buttons = []
        options_layout = QVBoxLayout()
        for i in range(4):
            btn = QRadioButton()
            self.option_group.addButton(btn, i)
            self.option_buttons.append(btn)
            options_layout.addWidget(btn)
        self.option_group.idClicked.connect(self.select_option)

        self.back_btn = QPushButton("Back")
        self.next_btn = QPushButton("Next")
        self.back_btn.clicked.connect(self.go_back)
        self.next_btn.clicked.connect(self.go_next)

        nav = QHBoxLayout()
        nav.addWidget(self.back_btn)
        nav.addStretch()
        nav.addWidget(self.next_btn)

        layout = QVBoxLayout(self)
        layout.addWidget(self.progress_label)
        layout.addWidget(self.progress)
        layout.addSpacing(16)
        layout.addWidget(self.question_label)
        layout.addLayout(options_layout)
        layout.addStretch()
        layout.addLayout(nav)

    def start(self, questions):
        self.session = QuizSession(questions)
        self.progress.setRange(0, len(questions))
        self.refresh()

    def refresh(self):
        s = self.session
        q = s.current
        self.question_label.setText(f"{s.index + 1}. {q.question}")

        self.option_group.setExclusive(False)
        for i, btn in enumerate(self.option_buttons):
            btn.setText(q.option_at(i))
            btn.setChecked(s.current_answer == i)
        self.option_group.setExclusive(True)

        self.progress.setValue(s.index + 1)
        self.progress_label.setText(s.progress_label)
        self.next_btn.setText("Finish" if s.is_last else "Next")
        self.back_btn.setVisible(not s.is_first)

    def select_option(self, index: int):
        self.session.select(index)

    def go_back(self):
        if self.session.back():
            self.refresh()

    def go_next(self):
        if self.session.current_answer is None:
            QMessageBox.warning(self, "No Option Selected", "Please select an option first.")
            return
        if self.session.next():
            self.refresh()
        else:
            self.completed.emit(self.session.finish())


class ResultView(QWidget):
    retry = Signal()
    restart = Signal()

    def __init__(self):
        super().__init__()
        self.score_label = QLabel()
        self.score_label.setAlignment(Qt.AlignCenter)
        self.percent_label = QLabel()
        self.percent_label.setAlignment(Qt.AlignCenter)
        self.percent_label.setStyleSheet(f"color: {TEXT_SECONDARY}; font-size: 16px;")
        self.message_label = QLabel()
        self.message_label.setWordWrap(True)
        self.message_label.setAlignment(Qt.AlignCenter)

        retry_btn = QPushButton("Retake Quiz")
        new_btn = QPushButton("New Document")
        retry_btn.clicked.connect(self.retry)
        new_btn.clicked.connect(self.restart)

        buttons = QHBoxLayout()
        buttons.addStretch()
        buttons.addWidget(retry_btn)
        buttons.addWidget(new_btn)
        buttons.addStretch()

        layout = QVBoxLayout(self)
        layout.addStretch()
        layout.addWidget(self.score_label)
        layout.addWidget(self.percent_label)
        layout.addSpacing(24)
        layout.addWidget(self.message_label)
        layout.addStretch()
        layout.addLayout(buttons)

    def show_result(self, result: QuizResult):
        color = BAND_COLORS[result.band]
        self.score_label.setText(f"{result.score}/{result.total}")
        self.score_label.setStyleSheet(f"color: {color}; font-size: 48px; font-weight: 700;")
        self.percent_label.setText(f"{result.percent}%")
        self.message_label.setText(result.message)


class FlashcardView(QWidget):
    def __init__(self):
        super().__init__()
        self.deck = None
        self.source = ""

        self.progress = QProgressBar()
        self.progress.setTextVisible(False)
        self.progress_label = QLabel()
        self.side_label = QLabel()
        self.side_label.setStyleSheet(f"color: {TEXT_SECONDARY};")
        self.card_label = QLabel()
        self.card_label.setWordWrap(True)
        self.card_label.setAlignment(Qt.AlignCenter)
        self.card_label.setMinimumHeight(220)
        self.card_label.setStyleSheet(
            f"border: 2px solid {ACCENT}; border-radius: 12px; padding: 24px; font-size: 18px;"
        )

        self.prev_btn = QPushButton("Previous")
        self.flip_btn = QPushButton("Flip")
        self.next_btn = QPushButton("Next")
        self.prev_btn.clicked.connect(self.previous_card)
        self.flip_btn.clicked.connect(self.flip_card)
        self.next_btn.clicked.connect(self.next_card)

        anki_btn = QPushButton("Export to Anki")
        md_btn = QPushButton("Export Markdown")
        anki_btn.clicked.connect(self.export_anki)
        md_btn.clicked.connect(self.export_markdown)

        nav = QHBoxLayout()
        nav.addWidget(self.prev_btn)
        nav.addStretch()
        nav.addWidget(self.flip_btn)
        nav.addStretch()
        nav.addWidget(self.next_btn)

        exports = QHBoxLayout()
        exports.addStretch()
        exports.addWidget(anki_btn)
        exports.addWidget(md_btn)

        layout = QVBoxLayout(self)
        layout.addWidget(self.progress_label)
        layout.addWidget(self.progress)
        layout.addWidget(self.side_label)
        layout.addWidget(self.card_label, 1)
        layout.addLayout(nav)
        layout.addLayout(exports)

    def start(self, cards, source: str):
        self.deck = FlashcardDeck(cards)
        self.source = source
        self.progress.setRange(0, len(cards))
        self.refresh()

    def refresh(self):
        d = self.deck
        self.card_label.setText(d.current_text)
        self.side_label.setText("Answer" if d.showing_answer else "Question")
        self.progress.setValue(d.index + 1)
        self.progress_label.setText(d.progress_label)
        self.prev_btn.setEnabled(d.has_previous)
        self.next_btn.setEnabled(d.has_next)
        self.flip_btn.setText("Done" if d.finished else "Flip")

    def flip_card(self):
        self.deck.flip()
        self.refresh()

    def next_card(self):
        if self.deck.next():
            self.refresh()

    def previous_card(self):
        if self.deck.previous():
            self.refresh()

    def export_anki(self):
        out_dir = QFileDialog.getExistingDirectory(self, "Choose folder for Anki deck", os.getcwd())
        if not out_dir:
            return
        try:
            path = export_anki(self.deck.cards, deck_name=safe_filename(self.source), output_dir=out_dir)
        except OSError as e:
            QMessageBox.critical(self, "Export Error", f"Error exporting deck: {e}")
            return
        QMessageBox.information(self, "Export Successful", f"Deck saved to: {path}")

    def export_markdown(self):
        default = f"{safe_filename(self.source)}_flashcards.md"
        path, _ = QFileDialog.getSaveFileName(self, "Save Flashcards", default, "Markdown (*.md)")
        if not path:
            return
        try:
            out = export_markdown(flashcards_to_markdown(self.deck.cards), path)
        except OSError as e:
            QMessageBox.critical(self, "Export Error", f"Error saving file: {e}")
            return
        QMessageBox.information(self, "Export Successful", f"Flashcards saved to: {out}")


class CheatsheetView(QWidget):
    def __init__(self):
        super().__init__()
        self.sheet = None
        self.source = ""

        self.text_view = QTextEdit()
        self.text_view.setReadOnly(True)

        pdf_btn = QPushButton("Export PDF")
        md_btn = QPushButton("Export Markdown")
        pdf_btn.clicked.connect(self.export_pdf)
        md_btn.clicked.connect(self.export_markdown)

        buttons = QHBoxLayout()
        buttons.addStretch()
        buttons.addWidget(pdf_btn)
        buttons.addWidget(md_btn)

        layout = QVBoxLayout(self)
        layout.addWidget(self.text_view, 1)
        layout.addLayout(buttons)

    def show_sheet(self, sheet: Cheatsheet, source: str):
        self.sheet = sheet
        self.source = source
        self.text_view.setPlainText(sheet.text)
        self.text_view.moveCursor(QTextCursor.Start)

    def export_pdf(self):
        default = f"{safe_filename(self.source)}_cheatsheet.pdf"
        path, _ = QFileDialog.getSaveFileName(self, "Save PDF", default, "PDF files (*.pdf)")
        if not path:
            return
        try:
            out = export_cheatsheet_pdf(self.sheet, path)
        except (OSError, RuntimeError) as e:
            QMessageBox.critical(self, "Export Error", f"Error exporting PDF: {e}")
            return
        QMessageBox.information(self, "Export Successful", f"Cheatsheet exported successfully to: {out}")

    def export_markdown(self):
        default = f"{safe_filename(self.source)}_cheatsheet.md"
        path, _ = QFileDialog.getSaveFileName(self, "Save Cheatsheet", default, "Markdown (*.md)")
        if not path:
            return
        try:
            out = export_markdown(cheatsheet_to_markdown(self.sheet), path)
        except OSError as e:
            QMessageBox.critical(self, "Export Error", f"Error saving file: {e}")
            return
        QMessageBox.information(self, "Export Successful", f"Cheatsheet saved to: {out}")


# -------------------- MAIN WINDOW --------------------
class ZapioApp(QWidget):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("Zapio - Flashcards, Quizzes & Cheatsheets")
        self.setMinimumSize(900, 650)

        self.document = None
        self.last_questions = []
        self.kind = None
        self.worker = None
        self.worker_thread = None

        self.build_ui()

    def build_ui(self):
        title = QLabel("Zapio")
        title.setStyleSheet(f"color: {ACCENT}; font-size: 28px; font-weight: 800;")
        subtitle = QLabel("Flashcards, Quizzes & Cheatsheets, Powered by AI.")
        subtitle.setStyleSheet(f"color: {TEXT_SECONDARY};")

        self.file_label = QLabel("No document selected")
        self.open_btn = QPushButton("Upload Document")
        self.open_btn.clicked.connect(self.open_document)

        self.kind_combo = QComboBox()
        self.kind_combo.addItems(list(KIND_LABELS))

        self.generate_btn = QPushButton("Proceed")
        self.generate_btn.clicked.connect(self.generate)
        settings_btn = QPushButton("Settings")
        settings_btn.clicked.connect(self.open_settings)

        controls = QHBoxLayout()
        controls.addWidget(self.open_btn)
        controls.addWidget(self.file_label, 1)
        controls.addWidget(self.kind_combo)
        controls.addWidget(self.generate_btn)
        controls.addWidget(settings_btn)

        self.busy = QProgressBar()
        self.busy.setRange(0, 0)
        self.busy.setVisible(False)
        self.status = QLabel("Upload a PDF, DOCX or TXT file to get started.")
        self.status.setStyleSheet(f"color: {TEXT_SECONDARY};")

        self.welcome = QLabel("Your study material will appear here.")
        self.welcome.setAlignment(Qt.AlignCenter)
        self.preview = QTextEdit()
        self.preview.setReadOnly(True)
        self.preview.setPlaceholderText("Document preview")
        self.quiz_view = QuizView()
        self.result_view = ResultView()
        self.flashcard_view = FlashcardView()
        self.cheatsheet_view = CheatsheetView()

        self.quiz_view.completed.connect(self.show_result)
        self.result_view.retry.connect(self.retake_quiz)
        self.result_view.restart.connect(self.reset)

        self.stack = QStackedWidget()
        for view in (self.welcome, self.preview, self.quiz_view, self.result_view,
                     self.flashcard_view, self.cheatsheet_view):
            self.stack.addWidget(view)

        layout = QVBoxLayout(self)
        layout.addWidget(title)
        layout.addWidget(subtitle)
        layout.addLayout(controls)
        layout.addWidget(self.busy)
        layout.addWidget(self.status)
        layout.addWidget(self.stack, 1)

    # ---------- ACTIONS ----------
    def open_document(self):
        path, _ = QFileDialog.getOpenFileName(self, "Choose a document", os.getcwd(), FILE_FILTER)
        if path:
            self.document = path
            self.file_label.setText(os.path.basename(path))
            self.preview.setPlainText(preview_document(path))
            self.preview.moveCursor(QTextCursor.Start)
            self.stack.setCurrentWidget(self.preview)
            self.update_status(f"Selected {os.path.basename(path)}")

    def open_settings(self):
        if SettingsDialog(self).exec():
            self.update_status("Settings saved")

    def update_status(self, msg: str):
        self.status.setText(msg)

    def lock_ui(self):
        self.open_btn.setEnabled(False)
        self.generate_btn.setEnabled(False)
        self.kind_combo.setEnabled(False)
        self.busy.setVisible(True)

    def unlock_ui(self):
        self.open_btn.setEnabled(True)
        self.generate_btn.setEnabled(True)
        self.kind_combo.setEnabled(True)
        self.busy.setVisible(False)

    def reset(self):
        self.stack.setCurrentWidget(self.welcome)
        self.update_status("Upload a PDF, DOCX or TXT file to get started.")

    # ---------- GENERATION ----------
    def generate(self):
        if not self.document:
            QMessageBox.warning(self, "No Document", "Please upload a document first.")
            return

        kind = KIND_LABELS[self.kind_combo.currentText()]
        cfg = load_config()
        try:
            mode = check_config(cfg)
        except (ConfigError, ValueError) as e:
            QMessageBox.warning(self, "Settings Required", str(e))
            return

        if mode == "ollama" and not ollama_models():
            QMessageBox.warning(
                self,
                "Local AI Model Not Found",
                "Ollama is not running or has no model.\n\n"
                "Run this command in terminal:\n  ollama pull llama3\n\n"
                "Or switch backend in Settings."
            )
            return

        logger.info("Proceed: file={}, kind={}", os.path.basename(self.document), kind.value)
        self.lock_ui()
        self.update_status(f"Generating {self.kind_combo.currentText().lower()}…")

        self.kind = kind
        self.worker = Worker(kind, self.document, cfg)
        self.worker_thread = QThread()
        self.worker.moveToThread(self.worker_thread)

        self.worker_thread.started.connect(self.worker.run)
        self.worker.finished.connect(self.on_done)
        self.worker.error.connect(self.on_error)
        self.worker.finished.connect(self.worker_thread.quit)
        self.worker.error.connect(self.worker_thread.quit)
        self.worker_thread.finished.connect(self.worker.deleteLater)
        self.worker_thread.finished.connect(self.worker_thread.deleteLater)

        self.worker_thread.start()

    def on_done(self, result):
        self.unlock_ui()
        source = os.path.basename(self.document)

        if isinstance(result, Cheatsheet):
            if result.failed:
                self.on_error(result.text)
                return
            self.cheatsheet_view.show_sheet(result, source)
            self.stack.setCurrentWidget(self.cheatsheet_view)
            self.update_status("Cheatsheet ready")
            return

        if not result:
            self.on_error("Failed to generate content, please try again.")
            return

        if self.kind is ContentKind.QUIZ:
            self.last_questions = result
            self.quiz_view.start(result)
            self.stack.setCurrentWidget(self.quiz_view)
            self.update_status(f"Quiz ready: {len(result)} questions")
        else:
            self.flashcard_view.start(result, source)
            self.stack.setCurrentWidget(self.flashcard_view)
            self.update_status(f"{len(result)} flashcards ready. Click Flip to see the answer")

    def on_error(self, err: str):
        self.unlock_ui()
        msg = err[:200] + "..." if len(err) > 200 else err
        QMessageBox.critical(self, "Generation Error", msg)
        self.update_status("Error during processing - try again")

    def show_result(self, result: QuizResult):
        self.result_view.show_result(result)
        self.stack.setCurrentWidget(self.result_view)
        self.update_status(f"Quiz finished: {result}")

    def retake_quiz(self):
        self.quiz_view.start(self.last_questions)
        self.stack.setCurrentWidget(self.quiz_view)


def main():
    configure_logging()
    app = QApplication(sys.argv)
    app.setStyle("Fusion")
    win = ZapioApp()
    win.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
