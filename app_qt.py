# app_qt.py
"""
Main Application Entry Point - World Clock Board
Restores the last session (clocks, theme, window geometry) and starts the board
"""

import sys
import logging
from pathlib import Path
from datetime import datetime

from PySide6.QtWidgets import QApplication, QMessageBox
from PySide6.QtCore import Qt

from clockboard_qt.repositories.clock_repository import ClockRepository
from clockboard_qt.repositories.settings_repository import SettingsRepository
from clockboard_qt.repositories.theme_repository import ThemeRepository
from clockboard_qt.services.clock_collection import ClockCollection
from clockboard_qt.services.theme_resolver import ThemeResolver
from clockboard_qt.models.theme_data import ThemeData
from clockboard_qt.utils.constants import APP_NAME, ORGANIZATION_NAME
from clockboard_qt.utils.errors import ClockBoardError


# ========== LOGGING SETUP ==========
def setup_logging():
    """Configure logging: timestamped file in logs/ plus console"""
    log_dir = Path("logs")
    log_dir.mkdir(exist_ok=True)

    log_file = log_dir / f"clockboard_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler()
        ]
    )

    return logging.getLogger(__name__)


# ========== APPLICATION SETUP ==========
def setup_application():
    """Create the QApplication"""
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setOrganizationName(ORGANIZATION_NAME)
    app.setStyle("Fusion")
    return app


# ========== SESSION RESTORE ==========
def restore_theme(resolver: ThemeResolver, theme_repo: ThemeRepository,
                  settings: SettingsRepository) -> str:
    """
    Apply the last used theme, or the defaults

    Returns:
        Message describing a load problem, or empty
    """
    logger = logging.getLogger(__name__)

    theme = ThemeData()
    message = ""
    last_theme = settings.get_last_theme_file()
    if last_theme and Path(last_theme).is_file():
        try:
            theme = theme_repo.load(last_theme)
        except ClockBoardError as e:
            logger.error(f"Failed to load saved theme: {e}")
            message = f"Failed to load saved theme:\n\n{e}"

    resolver.apply(theme)
    return message


def restore_clocks(clock_repo: ClockRepository):
    """
    Build the collection from the last used file

    Returns:
        (collection, message) where message describes a load problem or is empty
    """
    result, error = clock_repo.restore_session()
    collection = ClockCollection(result.entities, result.global_format)

    if error is not None:
        return collection, f"Failed to load saved clocks:\n\n{error}"
    if result.errors:
        details = "\n".join(str(e) for e in result.errors)
        return collection, f"Some saved clocks could not be loaded:\n\n{details}"
    return collection, ""


# ========== MAIN FUNCTION ==========
def main():
    """Main entry point"""
    logger = setup_logging()
    logger.info("=" * 70)
    logger.info(f"Starting {APP_NAME}")
    logger.info("=" * 70)

    app = setup_application()

    settings = SettingsRepository()
    clock_repo = ClockRepository(settings)
    theme_repo = ThemeRepository()
    resolver = ThemeResolver()

    theme_message = restore_theme(resolver, theme_repo, settings)
    collection, clock_message = restore_clocks(clock_repo)
    message = "\n\n".join(m for m in (theme_message, clock_message) if m)

    from clockboard_qt.views.main_board import MainBoard
    window = MainBoard(collection, clock_repo, theme_repo, settings, resolver)
    window.show()

    if message:
        QMessageBox.warning(window, "Error", message)

    def on_shutdown():
        logger.info("Shutting down application...")
        settings.save_settings()
        logger.info("=" * 70)

    app.aboutToQuit.connect(on_shutdown)

    logger.info("Application ready - starting event loop")
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
