from __future__ import annotations

import logging
from typing import Callable, List, Optional

from PySide6.QtCore import QCoreApplication, QObject, QThread, QTimer, Signal

from .chat import ChatSession
from .sage_backend import WisdomClient

logger = logging.getLogger(__name__)


class QtFrameScheduler(QObject):
    """Frame scheduling on the Qt event loop: one single-shot timer per requested frame."""

    def __init__(self, interval_ms: int = 16, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._interval_ms = max(0, int(interval_ms))

    def request_frame(self, callback: Callable[[], None]) -> QTimer:
        timer = QTimer(self)
        timer.setSingleShot(True)

        def fire() -> None:
            timer.deleteLater()
            callback()

        timer.timeout.connect(fire)
        timer.start(self._interval_ms)
        return timer

    def cancel_frame(self, handle: QTimer) -> None:
        handle.stop()
        handle.deleteLater()


class SageWorker(QThread):
    answered = Signal(str)
    failed = Signal(object)

    def __init__(self, client: WisdomClient, prompt: str, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._client = client
        self._prompt = prompt

    def run(self) -> None:
        try:
            reply = self._client.ask(self._prompt)
        except Exception as exc:
            self.failed.emit(exc)
        else:
            self.answered.emit(reply)


def running_sage_workers() -> List[SageWorker]:
    app = QCoreApplication.instance()
    if app is None:
        return []
    return [worker for worker in app.findChildren(SageWorker) if worker.isRunning()]


def wait_for_sage_workers() -> None:
    """Block until requests abandoned by closed panels have returned. Only called on exit."""
    workers = running_sage_workers()
    if workers:
        logger.info("Waiting for %d sage request(s) to return before exit", len(workers))
    for worker in workers:
        worker.wait()


class SageController(QObject):
    """Runs chat requests off the UI thread and applies the outcome to the session."""

    session_changed = Signal()
    log_emitted = Signal(str)

    def __init__(self, session: ChatSession, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._session = session
        self._worker: Optional[SageWorker] = None
        self._session.add_listener(self.session_changed.emit)

    @property
    def session(self) -> ChatSession:
        return self._session

    @property
    def busy(self) -> bool:
        return self._worker is not None

    def submit(self, text: Optional[str] = None) -> bool:
        if self._worker is not None:
            return False
        prompt = self._session.begin(text)
        if prompt is None:
            return False
        # Owned by the application so it outlives a panel closed mid-request.
        worker = SageWorker(self._session.client, prompt, QCoreApplication.instance())
        worker.answered.connect(self._on_answered)
        worker.failed.connect(self._on_failed)
        worker.finished.connect(self._on_worker_finished)
        worker.finished.connect(worker.deleteLater)
        self._worker = worker
        worker.start()
        self.log_emitted.emit("Question sent to the sage.")
        return True

    def shutdown(self) -> None:
        """Detach from the request in flight without waiting; its reply is dropped."""
        worker = self._worker
        if worker is None:
            return
        self._worker = None
        worker.answered.disconnect(self._on_answered)
        worker.failed.disconnect(self._on_failed)
        worker.finished.disconnect(self._on_worker_finished)
        logger.info("Sage closed with a request in flight; the reply will be dropped")

    def _on_answered(self, reply: str) -> None:
        self._session.complete(reply)

    def _on_failed(self, error: object) -> None:
        self._session.fail(error if isinstance(error, BaseException) else RuntimeError(str(error)))

    def _on_worker_finished(self) -> None:
        self._worker = None
