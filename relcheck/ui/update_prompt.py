"""Qt prompt for available updates, plus a background check worker.

The yes/no box mirrors a plain MessageBox: question icon, Yes/No buttons.
Accepting opens the GitHub release page in the default browser.
"""

import logging

from PyQt6.QtCore import QUrl
from PyQt6.QtGui import QDesktopServices
from PyQt6.QtWidgets import QMessageBox

from relcheck.core.update_checker import UpdateChecker

logger = logging.getLogger(__name__)


class QtUpdatePrompt:
    """UpdatePrompt for Qt. Modal, so it must be used from the GUI thread."""

    def __init__(self, parent=None):
        self._parent = parent

    def confirm(self, title: str, message: str) -> bool:
        reply = QMessageBox.question(
            self._parent, title, message,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        return reply == QMessageBox.StandardButton.Yes

    def open_in_browser(self, url: str) -> None:
        if not QDesktopServices.openUrl(QUrl(url)):
            logger.warning("Failed to open %s in the default browser", url)


# ── QThread Worker ───────────────────────────────────────────────────

def _get_worker_class():
    from PyQt6.QtCore import QThread, pyqtSignal

    class UpdateWorker(QThread):
        """Runs UpdateChecker.check() off the GUI thread.

        The prompt is modal and process-wide, so the outcome is handed back
        via `check_finished` and the GUI thread calls checker.notify().
        """

        check_finished = pyqtSignal(object)     # CheckOutcome

        def __init__(self, checker: UpdateChecker, parent=None):
            super().__init__(parent)
            self._checker = checker

        def run(self):
            outcome = self._checker.check()
            self.check_finished.emit(outcome)

    return UpdateWorker


_UpdateWorkerClass = None


def get_update_worker_class():
    """Get the UpdateWorker class (built on first use)."""
    global _UpdateWorkerClass
    if _UpdateWorkerClass is None:
        _UpdateWorkerClass = _get_worker_class()
    return _UpdateWorkerClass


def start_background_check(app, checker: UpdateChecker):
    """Check on a worker thread, then prompt on the GUI thread and quit.

    The event loop exits with 0 for a conclusive check and 1 otherwise.
    Keep the returned worker referenced until the loop has finished.
    """
    worker = get_update_worker_class()(checker)

    def on_finished(outcome):
        checker.notify(outcome)
        logger.info("Update check %s", "completed" if outcome.is_conclusive else "failed")
        app.exit(0 if outcome.is_conclusive else 1)

    worker.check_finished.connect(on_finished)
    worker.start()
    return worker
