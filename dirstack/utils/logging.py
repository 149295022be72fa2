"""Unified logging infrastructure for dirstack.

This module provides:
1. Centralized logging configuration
2. Debug mode via DIRSTACK_DEBUG env var or programmatic flag
3. Log levels via DIRSTACK_LOG_LEVEL env var
4. Dual output: Rich console for CLI, file logging for debugging
5. Daemon mode: stderr-only for the background process

Usage:
    from dirstack.utils.logging import get_logger, configure_logging

    # In CLI entry point:
    configure_logging(debug=debug)

    # In any module:
    logger = get_logger(__name__)
    logger.info("Starting operation")
    logger.error("Something failed", exc=exception)

Environment Variables:
    DIRSTACK_DEBUG=1          Enable debug mode (verbose output)
    DIRSTACK_LOG_LEVEL=DEBUG  Set log level (DEBUG, INFO, WARNING, ERROR)
    DIRSTACK_LOG_FILE=/path   Override log file location
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.console import Console

from dirstack.paths import HostPaths

# Global state
_configured = False
_debug_mode = False
_daemon_mode = False
_log_file: Optional[Path] = None

# Shared Rich console instance (stderr so stdout stays clean for shell output)
console = Console(stderr=True)

# Custom log level for success messages
SUCCESS_LEVEL = 25
logging.addLevelName(SUCCESS_LEVEL, "SUCCESS")


def _get_log_file() -> Path:
    """Get the log file path."""
    global _log_file
    if _log_file:
        return _log_file

    env_log_file = os.environ.get("DIRSTACK_LOG_FILE")
    if env_log_file:
        _log_file = Path(env_log_file)
    else:
        _log_file = HostPaths.log_dir() / "dirstack.log"

    return _log_file


def is_debug_mode() -> bool:
    """Check if debug mode is enabled."""
    return _debug_mode or os.environ.get("DIRSTACK_DEBUG", "").lower() in ("1", "true", "yes")


def configure_logging(
    debug: bool = False,
    daemon: bool = False,
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
    force: bool = False,
) -> None:
    """Configure the logging system.

    Should be called once at application startup (CLI entry point or daemon start).
    Later calls are ignored unless force is set.

    Args:
        debug: Enable debug mode (verbose output, debug to console)
        daemon: Daemon mode (stderr only, no Rich formatting)
        log_level: Override log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Override log file path
        force: Reconfigure even if already configured
    """
    global _configured, _debug_mode, _daemon_mode, _log_file

    if _configured and not force:
        return

    _debug_mode = debug or is_debug_mode()
    _daemon_mode = daemon

    if log_file:
        _log_file = log_file

    # Environment wins over config so a one-off run can turn up verbosity
    env_level = os.environ.get("DIRSTACK_LOG_LEVEL")
    if env_level:
        level_name = env_level.upper()
    elif _debug_mode:
        level_name = "DEBUG"
    else:
        level_name = (log_level or "INFO").upper()

    level = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger("dirstack")
    root_logger.setLevel(logging.DEBUG)
    root_logger.propagate = False
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    # File handler with rotation (always enabled, captures all logs)
    try:
        path = _get_log_file()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)
    except OSError:
        # Can't write log file, continue without it
        pass

    # Stderr handler for the daemon (simple format, no colors)
    if _daemon_mode:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(level)
        stderr_formatter = logging.Formatter("%(name)s: %(levelname)s: %(message)s")
        stderr_handler.setFormatter(stderr_formatter)
        root_logger.addHandler(stderr_handler)

    _configured = True

    root_logger.debug(
        f"Logging configured: level={level_name}, debug={_debug_mode}, daemon={_daemon_mode}"
    )
    if _log_file:
        root_logger.debug(f"Log file: {_log_file}")


class dirstackLogger:
    """Logger wrapper with Rich console output.

    In daemon mode the stderr handler installed by configure_logging does
    the console work, so messages are only handed to the stdlib logger.
    In CLI mode warnings and errors are also rendered on the Rich console.
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(name)
        self.console = console

    def _to_console(self, requested: bool) -> bool:
        return requested and not _daemon_mode

    def debug(self, message: str, console_output: bool = False) -> None:
        """Log debug message.

        By default, debug only goes to the log file. Set console_output=True
        or enable DIRSTACK_DEBUG to see it in the console.
        """
        self.logger.debug(message)
        if self._to_console(console_output or is_debug_mode()):
            self.console.print(f"[dim][DEBUG] {message}[/dim]")

    def info(self, message: str, console_output: bool = False) -> None:
        self.logger.info(message)
        if self._to_console(console_output):
            self.console.print(f"[blue]{message}[/blue]")

    def success(self, message: str, console_output: bool = True) -> None:
        """Log success message (green output)."""
        self.logger.log(SUCCESS_LEVEL, message)
        if self._to_console(console_output):
            self.console.print(f"[green]✓ {message}[/green]")

    def warning(self, message: str, console_output: bool = True) -> None:
        self.logger.warning(message)
        if self._to_console(console_output):
            self.console.print(f"[yellow]⚠ {message}[/yellow]")

    def error(
        self,
        message: str,
        exc: Optional[BaseException] = None,
        console_output: bool = True,
    ) -> None:
        """Log error message (red output).

        Args:
            message: Error message
            exc: Optional exception to include in log
            console_output: Output to console
        """
        if exc:
            self.logger.error(f"{message}: {exc}", exc_info=exc)
            error_msg = f"{message}: {exc}"
        else:
            self.logger.error(message)
            error_msg = message

        if self._to_console(console_output):
            self.console.print(f"[red]✗ {error_msg}[/red]")

    def exception(self, message: str, console_output: bool = True) -> None:
        """Log exception with full traceback. Call from within an except block."""
        self.logger.exception(message)
        if self._to_console(console_output):
            self.console.print(f"[red]✗ {message}[/red]")
            if is_debug_mode():
                self.console.print_exception()


def get_logger(name: str) -> dirstackLogger:
    """Get or create a logger for a module.

    Example:
        logger = get_logger(__name__)
        logger.info("Operation started")
    """
    if not _configured:
        configure_logging()

    # Ensure name is under dirstack namespace
    if not name.startswith("dirstack"):
        name = f"dirstack.{name}"

    return dirstackLogger(name)


def get_daemon_logger(name: str) -> dirstackLogger:
    """Get a logger configured for daemon mode."""
    configure_logging(daemon=True)
    return get_logger(name)


def log_startup_info() -> None:
    """Log startup diagnostic information (call from main entry points)."""
    logger = get_logger("dirstack.startup")
    logger.debug(f"Python: {sys.version}")
    logger.debug(f"Platform: {sys.platform}")
    logger.debug(f"PID: {os.getpid()}")
    logger.debug(f"Debug mode: {is_debug_mode()}")
    logger.debug(f"Log file: {_get_log_file()}")

    for var in ["DIRSTACK_DEBUG", "DIRSTACK_LOG_LEVEL", "DIRSTACK_SOCKET", "DIRSTACK_CONFIG"]:
        value = os.environ.get(var)
        if value:
            logger.debug(f"ENV {var}={value}")
