from __future__ import annotations

import html
from typing import List

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from chatzen.core.chat import ChatMessage, ChatSession, Role
from chatzen.core.config import SageConfig
from chatzen.core.controller import SageController
from chatzen.core.sage_backend import WisdomClient
from chatzen.ui.widgets import SignalBlocker

LOADING_TEXT = "✨ Le sage réfléchit..."


def message_html(message: ChatMessage) -> str:
    text = html.escape(message.text).replace("\n", "<br>")
    if message.role is Role.USER:
        return (
            '<table width="100%"><tr><td align="right">'
            f'<span style="background:#2563eb; color:white;">&nbsp;{text}&nbsp;</span>'
            "</td></tr></table>"
        )
    return (
        '<table width="100%"><tr><td align="left">'
        f'<span style="background:#3a3a3a; color:#e5e7eb;">&nbsp;{text}&nbsp;</span>'
        "</td></tr></table>"
    )


def transcript_html(session: ChatSession) -> str:
    parts = [message_html(message) for message in session.messages]
    if session.loading:
        parts.append(f'<p style="color:#9ca3af;">{html.escape(LOADING_TEXT)}</p>')
    return "".join(parts)


class ZenSagePanel(QWidget):
    """Chat window with the wise old cat."""

    def __init__(self, client: WisdomClient, config: SageConfig | None = None, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.session = ChatSession(client, config)
        self.controller = SageController(self.session, self)
        self._suggestion_buttons: List[QPushButton] = []
        self._build_ui()
        self.controller.session_changed.connect(self._refresh)
        self._refresh()

    def _build_ui(self) -> None:
        outer = QVBoxLayout(self)
        outer.setAlignment(Qt.AlignmentFlag.AlignCenter)

        window = QFrame()
        window.setObjectName("sageWindow")
        window.setMaximumWidth(720)
        layout = QVBoxLayout(window)

        header = QHBoxLayout()
        avatar = QLabel("🐈")
        avatar.setObjectName("sageAvatar")
        header.addWidget(avatar)
        names = QVBoxLayout()
        names.addWidget(QLabel("Le Sage Félin"))
        online = QLabel("● En ligne")
        online.setObjectName("sageOnline")
        names.addWidget(online)
        header.addLayout(names)
        header.addStretch(1)
        layout.addLayout(header)

        self.transcript = QTextBrowser()
        self.transcript.setOpenLinks(False)
        layout.addWidget(self.transcript, stretch=1)

        self.suggestions_row = QWidget()
        suggestions = QHBoxLayout(self.suggestions_row)
        suggestions.setContentsMargins(0, 0, 0, 0)
        for text in self.session.suggestions:
            button = QPushButton(text)
            button.setObjectName("suggestion")
            button.clicked.connect(lambda _checked=False, value=text: self.session.choose_suggestion(value))
            suggestions.addWidget(button)
            self._suggestion_buttons.append(button)
        layout.addWidget(self.suggestions_row)

        input_row = QHBoxLayout()
        self.input = QLineEdit()
        self.input.setPlaceholderText("Posez votre question au sage...")
        self.input.textChanged.connect(self._on_text_changed)
        self.input.returnPressed.connect(self.send)
        input_row.addWidget(self.input, stretch=1)
        self.send_button = QPushButton("➤")
        self.send_button.clicked.connect(self.send)
        input_row.addWidget(self.send_button)
        layout.addLayout(input_row)

        outer.addWidget(window)

    def send(self) -> None:
        self.controller.submit()

    def _on_text_changed(self, text: str) -> None:
        self.session.input_text = text
        self.send_button.setEnabled(self.session.can_submit)

    def _refresh(self) -> None:
        self.transcript.setHtml(transcript_html(self.session))
        bar = self.transcript.verticalScrollBar()
        bar.setValue(bar.maximum())
        if self.input.text() != self.session.input_text:
            with SignalBlocker(self.input):
                self.input.setText(self.session.input_text)
        self.suggestions_row.setVisible(self.session.show_suggestions)
        self.send_button.setEnabled(self.session.can_submit)

    def shutdown(self) -> None:
        self.controller.shutdown()
