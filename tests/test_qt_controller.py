from __future__ import annotations

import os
import threading
import time

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QCoreApplication, QEventLoop  # noqa: E402
from PySide6.QtWidgets import QApplication  # noqa: E402

from chatzen.core.chat import ChatMessage, ChatSession, Role  # noqa: E402
from chatzen.core.config import AppConfig, PointerConfig, SageConfig  # noqa: E402
from chatzen.core.controller import (  # noqa: E402
    QtFrameScheduler,
    SageController,
    running_sage_workers,
    wait_for_sage_workers,
)
from chatzen.core.errors import SageError  # noqa: E402
from chatzen.core.modes import AppMode  # noqa: E402
from chatzen.core.renderer import PointerRenderer  # noqa: E402

from conftest import RecordingSurface, ScriptedClient  # noqa: E402


class GatedClient:
    """Blocks inside `ask` until the test opens the gate."""

    def __init__(self, reply: str = "Dors, petit chat.") -> None:
        self.reply = reply
        self.gate = threading.Event()
        self.entered = threading.Event()

    def ask(self, prompt: str) -> str:
        self.entered.set()
        self.gate.wait(5.0)
        return self.reply


@pytest.fixture(scope="module")
def qt_app():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def gated_client():
    client = GatedClient()
    yield client
    client.gate.set()
    wait_for_sage_workers()
    spin_for(0.05)


def spin_until(predicate, timeout: float = 3.0) -> bool:
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            return False
        QCoreApplication.processEvents(QEventLoop.ProcessEventsFlag.AllEvents, 20)
        time.sleep(0.002)
    return True


def spin_for(seconds: float) -> None:
    spin_until(lambda: False, timeout=seconds)


def test_qt_scheduler_draws_until_stopped(qt_app) -> None:
    surface = RecordingSurface()
    renderer = PointerRenderer(QtFrameScheduler(1), PointerConfig(seed=0))
    renderer.attach(surface)

    renderer.start()
    assert spin_until(lambda: renderer.frames_drawn >= 3)
    renderer.stop()
    drawn = renderer.frames_drawn
    calls = len(surface.calls)

    spin_for(0.1)

    assert renderer.frames_drawn == drawn
    assert len(surface.calls) == calls


def test_cancelled_frame_never_fires(qt_app) -> None:
    scheduler = QtFrameScheduler(1)
    fired = []

    handle = scheduler.request_frame(lambda: fired.append(True))
    scheduler.cancel_frame(handle)
    spin_for(0.05)

    assert fired == []


def test_reply_is_applied_on_ui_thread(qt_app) -> None:
    session = ChatSession(ScriptedClient())
    controller = SageController(session)

    assert controller.submit("Comment mieux dormir ?")
    assert session.loading
    assert spin_until(lambda: not session.loading)

    assert session.messages[-1] == ChatMessage(Role.ASSISTANT, "Dors, petit chat.")
    assert spin_until(lambda: not controller.busy)


def test_failing_client_gives_fallback(qt_app) -> None:
    session = ChatSession(ScriptedClient(error=SageError("quota exceeded")))
    controller = SageController(session)

    controller.submit("Le secret du bonheur ?")
    assert spin_until(lambda: not session.loading)

    assert session.messages[-1] == ChatMessage(Role.ASSISTANT, SageConfig().fallback_reply)
    assert [m.role for m in session.messages].count(Role.ASSISTANT) == 2


def test_second_submit_refused_while_request_pending(qt_app, gated_client) -> None:
    session = ChatSession(gated_client)
    controller = SageController(session)

    assert controller.submit("first")
    assert not controller.submit("second")
    assert [m.text for m in session.messages if m.role is Role.USER] == ["first"]

    gated_client.gate.set()
    assert spin_until(lambda: not controller.busy)
    assert controller.submit("second")


def test_shutdown_returns_without_waiting_and_drops_reply(qt_app, gated_client) -> None:
    session = ChatSession(gated_client)
    controller = SageController(session)
    controller.submit("Pourquoi les humains sont bizarres ?")
    assert gated_client.entered.wait(2.0)

    started = time.monotonic()
    controller.shutdown()
    assert time.monotonic() - started < 0.5
    assert not controller.busy
    assert running_sage_workers()

    gated_client.gate.set()
    wait_for_sage_workers()
    spin_for(0.05)

    assert session.messages[-1].role is Role.USER


def test_leaving_sage_with_pending_request_does_not_block(qt_app, gated_client) -> None:
    from chatzen.ui.main_window import MainWindow

    window = MainWindow(AppConfig(), gated_client)
    window.shell.select(AppMode.ZEN_SAGE)
    panel = window.panel
    panel.input.setText("Comment mieux dormir ?")
    panel.send()
    assert gated_client.entered.wait(2.0)

    started = time.monotonic()
    window.shell.select(AppMode.LASER)
    assert time.monotonic() - started < 0.5
    assert window.shell.mode is AppMode.LASER

    started = time.monotonic()
    window.close()
    assert time.monotonic() - started < 0.5
