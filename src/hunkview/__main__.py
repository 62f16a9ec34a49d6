"""Main entry point for the hunkview application."""

import argparse
import asyncio
from datetime import datetime, timezone
import glob
import logging
from logging.handlers import RotatingFileHandler
import os
import sys
from types import TracebackType
from typing import List

from qasync import QEventLoop, QApplication  # type: ignore[import-untyped]

from diff_view.diff_view_settings import DiffViewSettings
from hunkview.main_window import MainWindow
from vcs.git_runner import SubprocessGitRunner


def setup_logging(level: int = logging.DEBUG) -> None:
    """Configure application logging with timestamped files and rotation."""
    # Create logs directory in user's home .hunkview directory
    log_dir = os.path.expanduser("~/.hunkview/logs")
    os.makedirs(log_dir, exist_ok=True)

    # Generate timestamp for log filename
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d-%H-%M-%S-%f")[:23]
    log_file = os.path.join(log_dir, f"{timestamp}.log")

    # Keep up to 50 log files, max 1MB each
    handler = RotatingFileHandler(
        log_file,
        maxBytes=1024*1024,
        backupCount=49,
        encoding='utf-8'
    )

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[handler]
    )

    cleanup_old_logs(log_dir, max_logs=50)


def cleanup_old_logs(log_dir: str, max_logs: int) -> None:
    """Remove oldest log files if we exceed maximum count."""
    log_files = glob.glob(os.path.join(log_dir, "*.log*"))
    log_files.sort(key=os.path.getctime)

    while len(log_files) > max_logs:
        try:
            os.remove(log_files.pop(0))

        except OSError:
            pass  # Another instance may have removed it already


def install_global_exception_handler() -> None:
    """Install a global exception handler for uncaught exceptions."""
    logger = logging.getLogger('GlobalExceptionHandler')

    def handle_exception(exc_type: type[BaseException], exc_value: BaseException, exc_traceback: TracebackType | None) -> None:
        """Handle uncaught exceptions and log them."""
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return

        logger.critical(
            "Uncaught exception",
            exc_info=(exc_type, exc_value, exc_traceback),
            stack_info=True
        )

    sys.excepthook = handle_exception


def parse_args(argv: List[str]) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Arguments, excluding the program name

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="hunkview",
        description="View a file's diff and stage, unstage or discard it hunk by hunk"
    )
    parser.add_argument("path", help="Repository-relative path of the file to view")
    parser.add_argument("--staged", action="store_true", help="Show staged changes instead of the working tree")
    parser.add_argument("--repo", default=os.getcwd(), help="Repository directory (default: current directory)")
    parser.add_argument(
        "--config",
        default=os.path.expanduser("~/.hunkview/settings.json"),
        help="Settings file (default: ~/.hunkview/settings.json)"
    )
    parser.add_argument(
        "--log-level",
        default="DEBUG",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level for the log file"
    )
    return parser.parse_args(argv)


def main() -> int:
    """Main function to run the application."""
    args = parse_args(sys.argv[1:])

    setup_logging(getattr(logging, args.log_level))
    install_global_exception_handler()

    settings = DiffViewSettings.load_or_default(args.config)

    app = QApplication(sys.argv[:1])

    loop = QEventLoop(app)
    asyncio.set_event_loop(loop)

    window = MainWindow(SubprocessGitRunner(args.repo), settings)
    window.show()

    try:
        with loop:
            loop.create_task(window.open_file(args.path, args.staged))
            loop.run_forever()

    except KeyboardInterrupt:
        return 0

    return 0


if __name__ == "__main__":
    sys.exit(main())
