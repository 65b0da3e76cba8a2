from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QLabel, QLineEdit,
    QComboBox, QPushButton, QHBoxLayout
)

from zapio.ai.llm_router import MODES
from zapio.config import load_config, save_config


class SettingsDialog(QDialog):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setMinimumWidth(420)

        # File values only, so env overrides are not written back to disk
        self.cfg = load_config(use_env=False)

        self.mode_combo = QComboBox()
        self.mode_combo.addItems(list(MODES))
        self.mode_combo.setCurrentText(self.cfg["llm_mode"])

        self.openrouter_input = self._secret_input("OpenRouter API Key", self.cfg["openrouter_api_key"])
        self.gemini_input = self._secret_input("Gemini API Key", self.cfg["gemini_api_key"])

        self.model_input = QLineEdit(self.cfg["openrouter_model"])
        self.model_input.setPlaceholderText("OpenRouter model")

        save_btn = QPushButton("Save")
        cancel_btn = QPushButton("Cancel")
        save_btn.clicked.connect(self.save)
        cancel_btn.clicked.connect(self.reject)

        layout = QVBoxLayout(self)
        layout.addWidget(QLabel("LLM Backend"))
        layout.addWidget(self.mode_combo)
        layout.addWidget(QLabel("OpenRouter API Key (or OPENROUTER_API_KEY in .env)"))
        layout.addWidget(self.openrouter_input)
        layout.addWidget(QLabel("OpenRouter Model"))
        layout.addWidget(self.model_input)
        layout.addWidget(QLabel("Gemini API Key (optional)"))
        layout.addWidget(self.gemini_input)

        btns = QHBoxLayout()
        btns.addStretch()
        btns.addWidget(cancel_btn)
        btns.addWidget(save_btn)
        layout.addLayout(btns)

    @staticmethod
    def _secret_input(placeholder: str, value: str) -> QLineEdit:
        field = QLineEdit()
        field.setPlaceholderText(placeholder)
        field.setText(value)
        field.setEchoMode(QLineEdit.Password)
        return field

    def save(self):
        self.cfg.update({
            "llm_mode": self.mode_combo.currentText(),
            "openrouter_api_key": self.openrouter_input.text().strip(),
            "openrouter_model": self.model_input.text().strip() or self.cfg["openrouter_model"],
            "gemini_api_key": self.gemini_input.text().strip(),
        })
        save_config(self.cfg)
        self.accept()
