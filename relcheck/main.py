"""RelCheck — entry point."""

import sys
import os
import logging

from relcheck.branding import AppBranding
from relcheck.config.settings import UpdaterSettings
from relcheck.core.update_checker import UpdateChecker, UpdatePrompt
from relcheck.network.retrieval import ReleaseFetcher
from relcheck.network.transport import UrllibTransport


def setup_logging(data_dir: str):
    """Configure logging to file and console."""
    log_dir = os.path.join(data_dir, 'logs')
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'relcheck.log')

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler(),
        ],
    )


def build_checker(settings: UpdaterSettings, prompt: UpdatePrompt | None = None) -> UpdateChecker:
    """Wire the default transport, fetcher and checker together."""
    transport = UrllibTransport(timeout=settings.timeout,
                                user_agent=AppBranding.user_agent())
    fetcher = ReleaseFetcher(transport, settings, AppBranding.latest_release_path())
    return UpdateChecker(fetcher, prompt=prompt)


def main():
    settings = UpdaterSettings()
    settings.ensure_dirs()

    setup_logging(settings.data_dir)
    logger = logging.getLogger(__name__)
    logger.info("%s %s checking for updates", AppBranding.APP_NAME, AppBranding.VERSION)

    from PyQt6.QtWidgets import QApplication
    from relcheck.ui.update_prompt import QtUpdatePrompt, start_background_check

    app = QApplication(sys.argv)
    app.setApplicationName(AppBranding.APP_NAME)
    app.setOrganizationName(AppBranding.PUBLISHER)

    checker = build_checker(settings, prompt=QtUpdatePrompt())
    worker = start_background_check(app, checker)
    exit_code = app.exec()
    worker.wait()

    sys.exit(exit_code)


if __name__ == '__main__':
    main()
