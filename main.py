"""
Main entry point for the Dir Diff application.

This module handles:
- Command line argument parsing
- Logging configuration
- Theme setup
- Main window creation and seeding of the initial paths
- Exception handling
"""

from __future__ import annotations

import argparse
import faulthandler
import logging
import os
import signal
import sys
import traceback
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QColor, QIcon, QPainter, QPalette, QPixmap
from PyQt6.QtWidgets import QApplication, QMessageBox, QStyleFactory

from dirdiff import APP_DISPLAY_NAME, APP_NAME, APP_ORGANIZATION, APP_VERSION
from dirdiff.core.models import PaneId
from dirdiff.core.state import PaneState
from dirdiff.services.settings import SettingsManager, Theme


# =============================================================================
# Constants
# =============================================================================

if getattr(sys, 'frozen', False):
    # Running as compiled executable
    APP_DIR = Path(sys.executable).parent
else:
    APP_DIR = Path(__file__).parent

LOGS_DIR = APP_DIR / "logs"

LOG_LEVEL_ENV = "DIRDIFF_LOG"
LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class CommandLineArgs:
    """Parsed command line arguments."""
    left_path: Optional[str] = None
    right_path: Optional[str] = None
    theme: Optional[Theme] = None
    config_file: Optional[str] = None
    log_level: str = "INFO"
    reset_settings: bool = False
    debug: bool = False


def initial_panes(args: CommandLineArgs) -> Iterator[tuple[PaneId, Path]]:
    """Yield the panes to seed at startup, left first."""
    for pane_id, path in ((PaneId.LEFT, args.left_path), (PaneId.RIGHT, args.right_path)):
        if path:
            yield pane_id, Path(path)


# =============================================================================
# Logging Setup
# =============================================================================

class LogFormatter(logging.Formatter):
    """Custom log formatter with colors for console."""

    COLORS = {
        logging.INFO: '\033[32m',      # Green
        logging.WARNING: '\033[33m',   # Yellow
        logging.ERROR: '\033[31m',     # Red
        logging.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__(
            fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        self.use_colors = use_colors and sys.stdout is not None and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)

        if self.use_colors:
            color = self.COLORS.get(record.levelno, '')
            return f"{color}{formatted}{self.RESET}"

        return formatted


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> logging.Logger:
    """
    Configure application logging.

    Args:
        level: Log level string
        log_file: Optional file path for logging

    Returns:
        Root logger instance
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(LogFormatter(use_colors=True))
    root_logger.addHandler(console_handler)

    # File handler
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(LogFormatter(use_colors=False))
        root_logger.addHandler(file_handler)

    # Reduce noise from third-party libraries
    logging.getLogger('PyQt6').setLevel(logging.WARNING)

    return root_logger


# =============================================================================
# Exception Handling
# =============================================================================

class ExceptionHandler:
    """
    Global exception handler for unhandled exceptions.

    Shows error dialog and logs the exception.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self._app: Optional[QApplication] = None

    def set_application(self, app: QApplication) -> None:
        """Set the application instance for error dialogs."""
        self._app = app

    def handle_exception(
        self,
        exc_type: type,
        exc_value: BaseException,
        exc_tb
    ) -> None:
        """Handle an unhandled exception."""
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_tb)
            return

        self.logger.critical(
            "Unhandled exception",
            exc_info=(exc_type, exc_value, exc_tb)
        )

        if self._app and QApplication.instance():
            tb_text = ''.join(traceback.format_exception(exc_type, exc_value, exc_tb))
            self._show_error_dialog(exc_type, exc_value, tb_text)

    def _show_error_dialog(
        self,
        exc_type: type,
        exc_value: BaseException,
        traceback_text: str
    ) -> None:
        """Show error dialog to user."""
        dialog = QMessageBox()
        dialog.setIcon(QMessageBox.Icon.Critical)
        dialog.setWindowTitle("Application Error")
        dialog.setText(f"An unexpected error occurred:\n\n{exc_type.__name__}: {exc_value}")
        dialog.setDetailedText(traceback_text)
        dialog.setStandardButtons(
            QMessageBox.StandardButton.Ok |
            QMessageBox.StandardButton.Close
        )
        dialog.setDefaultButton(QMessageBox.StandardButton.Ok)

        copy_btn = dialog.addButton(
            "Copy to Clipboard",
            QMessageBox.ButtonRole.ActionRole
        )

        dialog.exec()

        if dialog.clickedButton() == copy_btn:
            QApplication.clipboard().setText(traceback_text)

        if dialog.clickedButton() == dialog.button(QMessageBox.StandardButton.Close):
            QApplication.quit()


# =============================================================================
# Command Line Parsing
# =============================================================================

def parse_arguments(args: Optional[List[str]] = None) -> CommandLineArgs:
    """
    Parse command line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Compare the contents of two directories.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s photos backup/photos          Compare two folders
  %(prog)s photos photos-2023.json       Compare a folder with an exported list
  %(prog)s --theme light                 Start with light theme
        """
    )

    # Positional arguments
    parser.add_argument(
        'left',
        nargs='?',
        help='First directory/exported file'
    )
    parser.add_argument(
        'right',
        nargs='?',
        help='Second directory/exported file'
    )

    # Display options
    parser.add_argument(
        '--theme',
        choices=[theme.value for theme in Theme],
        default=None,
        help='Application theme'
    )

    # Configuration
    parser.add_argument(
        '-c', '--config',
        help='Settings file path'
    )
    parser.add_argument(
        '--reset-settings',
        action='store_true',
        help='Reset all settings to defaults'
    )

    # Logging
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug mode (also writes a log file)'
    )
    parser.add_argument(
        '--log-level',
        choices=LOG_LEVELS,
        default=None,
        help=f'Log level (default: ${LOG_LEVEL_ENV} or INFO)'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'{APP_NAME} {APP_VERSION}'
    )

    parsed = parser.parse_args(args)

    result = CommandLineArgs()
    result.left_path = parsed.left
    result.right_path = parsed.right
    result.config_file = parsed.config
    result.reset_settings = parsed.reset_settings
    result.debug = parsed.debug

    if parsed.theme:
        result.theme = Theme.from_string(parsed.theme)

    # Log level
    if parsed.debug or parsed.verbose:
        result.log_level = 'DEBUG'
    elif parsed.log_level:
        result.log_level = parsed.log_level
    else:
        env_level = os.environ.get(LOG_LEVEL_ENV, '').upper()
        result.log_level = env_level if env_level in LOG_LEVELS else 'INFO'

    return result


def create_app_icon(size: int = 64) -> QIcon:
    """Draw the application icon: two side-by-side panes."""
    pixmap = QPixmap(size, size)
    pixmap.fill(Qt.GlobalColor.transparent)

    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    painter.setPen(Qt.PenStyle.NoPen)

    margin = size // 8
    pane_width = (size - 3 * margin) // 2
    for index, color in enumerate((QColor(42, 130, 218), QColor(230, 126, 34))):
        painter.setBrush(color)
        x = margin + index * (pane_width + margin)
        painter.drawRoundedRect(x, margin, pane_width, size - 2 * margin, 4, 4)

    painter.end()
    return QIcon(pixmap)


def set_app_icon(app: QApplication) -> None:
    """Set the application icon."""
    app.setWindowIcon(create_app_icon())


# =============================================================================
# Application Setup
# =============================================================================

def setup_application(args: CommandLineArgs) -> QApplication:
    """
    Create and configure the QApplication.

    Args:
        args: Parsed command line arguments

    Returns:
        Configured QApplication instance
    """
    app = QApplication(sys.argv)

    app.setApplicationName(APP_NAME)
    app.setApplicationDisplayName(APP_DISPLAY_NAME)
    app.setApplicationVersion(APP_VERSION)
    app.setOrganizationName(APP_ORGANIZATION)

    app.setQuitOnLastWindowClosed(True)
    set_app_icon(app)

    return app


def setup_settings(args: CommandLineArgs) -> SettingsManager:
    """
    Set up application settings.

    Args:
        args: Parsed command line arguments

    Returns:
        SettingsManager instance
    """
    settings_path = Path(args.config_file) if args.config_file else None
    settings_manager = SettingsManager(settings_path)

    if args.reset_settings:
        settings_manager.reset()

    if args.theme:
        settings_manager.settings.ui.theme = args.theme

    return settings_manager


def setup_theme(app: QApplication, theme: Theme) -> None:
    """
    Apply the UI theme.

    Args:
        app: QApplication instance
        theme: Theme to apply
    """
    logging.info(f"Setting up theme: {theme}")

    if theme == Theme.DARK:
        _apply_dark_theme(app)
    elif theme == Theme.LIGHT:
        _apply_light_theme(app)
    else:
        # System theme - use Fusion style for consistency
        app.setStyle(QStyleFactory.create("Fusion"))


def _apply_palette(app: QApplication, window: QColor, base: QColor, text: QColor,
                   highlight: QColor, highlighted_text: QColor, disabled: QColor) -> None:
    app.setStyle(QStyleFactory.create("Fusion"))

    palette = QPalette()
    palette.setColor(QPalette.ColorRole.Window, window)
    palette.setColor(QPalette.ColorRole.WindowText, text)
    palette.setColor(QPalette.ColorRole.Base, base)
    palette.setColor(QPalette.ColorRole.AlternateBase, window)
    palette.setColor(QPalette.ColorRole.ToolTipBase, window)
    palette.setColor(QPalette.ColorRole.ToolTipText, text)
    palette.setColor(QPalette.ColorRole.Text, text)
    palette.setColor(QPalette.ColorRole.Button, window)
    palette.setColor(QPalette.ColorRole.ButtonText, text)
    palette.setColor(QPalette.ColorRole.BrightText, Qt.GlobalColor.red)
    palette.setColor(QPalette.ColorRole.Link, highlight)
    palette.setColor(QPalette.ColorRole.Highlight, highlight)
    palette.setColor(QPalette.ColorRole.HighlightedText, highlighted_text)

    # Disabled colors
    palette.setColor(QPalette.ColorGroup.Disabled, QPalette.ColorRole.WindowText, disabled)
    palette.setColor(QPalette.ColorGroup.Disabled, QPalette.ColorRole.Text, disabled)
    palette.setColor(QPalette.ColorGroup.Disabled, QPalette.ColorRole.ButtonText, disabled)

    app.setPalette(palette)


def _apply_dark_theme(app: QApplication) -> None:
    """Apply dark theme to application."""
    _apply_palette(
        app,
        window=QColor(32, 32, 32),
        base=QColor(25, 25, 25),
        text=QColor(230, 230, 230),
        highlight=QColor(96, 205, 255),
        highlighted_text=Qt.GlobalColor.black,
        disabled=QColor(127, 127, 127),
    )
    app.setStyleSheet("""
        QToolTip {
            color: #e6e6e6;
            background-color: #202020;
            border: 1px solid #3d3d3d;
            padding: 4px;
        }

        QGroupBox {
            border: 1px solid #3d3d3d;
            margin-top: 8px;
        }

        QGroupBox::title {
            subcontrol-origin: margin;
            left: 6px;
        }

        QSplitter::handle:hover {
            background-color: #60cdff;
        }
    """)


def _apply_light_theme(app: QApplication) -> None:
    """Apply light theme to application."""
    _apply_palette(
        app,
        window=QColor(240, 240, 240),
        base=QColor(255, 255, 255),
        text=QColor(0, 0, 0),
        highlight=QColor(0, 120, 215),
        highlighted_text=Qt.GlobalColor.white,
        disabled=QColor(160, 160, 160),
    )


# =============================================================================
# Main Window Creation
# =============================================================================

def create_main_window(args: CommandLineArgs, settings_manager: SettingsManager):
    """
    Create the main window and load the initial paths.

    Args:
        args: Parsed command line arguments
        settings_manager: Settings shared with the window

    Returns:
        MainWindow instance
    """
    from dirdiff.ui.main_window import MainWindow

    state = PaneState()
    for pane_id, path in initial_panes(args):
        state.read_path(pane_id, path)

    window = MainWindow(state, settings_manager)
    state.bind(window)

    return window


# =============================================================================
# Signal Handlers
# =============================================================================

def setup_signal_handlers(app: QApplication) -> None:
    """Set up Unix signal handlers."""
    if sys.platform != 'win32':
        signal.signal(signal.SIGINT, _signal_handler)
        signal.signal(signal.SIGTERM, _signal_handler)

        # Let the Python interpreter run so it can see the signal
        timer = QTimer(app)
        timer.timeout.connect(lambda: None)
        timer.start(500)


def _signal_handler(signum, frame) -> None:
    """Handle Unix signals."""
    logging.info(f"Received signal {signum}, shutting down...")
    QApplication.quit()


# =============================================================================
# Main Function
# =============================================================================

def main() -> int:
    """
    Application main entry point.

    Returns:
        Exit code (0 for success)
    """
    # Redirect stdout/stderr if None (common in frozen apps)
    if sys.stdout is None:
        sys.stdout = open(os.devnull, 'w')
    if sys.stderr is None:
        sys.stderr = open(os.devnull, 'w')

    faulthandler.enable()

    args = parse_arguments()

    log_file = LOGS_DIR / f"{APP_NAME}_{datetime.now():%Y%m%d}.log" if args.debug else None
    logger = setup_logging(args.log_level, log_file)
    logger.info(f"Starting {APP_NAME} v{APP_VERSION}")

    exception_handler = ExceptionHandler(logger)
    sys.excepthook = exception_handler.handle_exception

    try:
        app = setup_application(args)
        exception_handler.set_application(app)

        settings_manager = setup_settings(args)
        setup_theme(app, settings_manager.settings.ui.theme)
        setup_signal_handlers(app)

        main_window = create_main_window(args, settings_manager)
        main_window.show()

        logger.info("Application started successfully")

        exit_code = app.exec()

        logger.info(f"Application exiting with code {exit_code}")
        return exit_code

    except Exception as e:
        logger.critical(f"Fatal error during startup: {e}", exc_info=True)

        if QApplication.instance():
            QMessageBox.critical(
                None,
                "Fatal Error",
                f"The application failed to start:\n\n{e}\n\n"
                "Please check the logs for more information."
            )

        return 1


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == '__main__':
    sys.exit(main())
