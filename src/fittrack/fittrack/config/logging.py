# ABOUTME: Loguru configuration for the FitTrack core library
# ABOUTME: Provides unified logging setup, request-scoped loggers and correlation IDs

import secrets
import sys
from pathlib import Path
from typing import Any, Optional, Union

from loguru import logger
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class LoggerConfig(BaseModel):
    """Configuration for loguru logger."""

    # Console output configuration
    console_enabled: bool = True
    console_level: str = "INFO"
    console_format: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level> | {extra}"
    )
    console_colorize: bool = True
    console_serialize: bool = False
    console_backtrace: bool = True
    console_diagnose: bool = False

    # File output configuration. Function hosts capture stdout, so files are opt-in.
    file_enabled: bool = False
    file_level: str = "DEBUG"
    file_path: Union[str, Path] = "logs/fittrack.log"
    file_format: str = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message} | {extra}"
    file_rotation: str = "100 MB"
    file_retention: str = "30 days"
    file_compression: str = "gz"

    # Error file output
    error_file_enabled: bool = False
    error_file_level: str = "ERROR"
    error_file_path: Union[str, Path] = "logs/fittrack-errors.log"

    enqueue: bool = False
    catch: bool = True


class LoggingSettings(BaseSettings):
    """Logging settings that can be configured via environment variables."""

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_format: str = Field(default="txt", validation_alias="LOG_FORMAT")
    log_file_enabled: bool = Field(default=False, validation_alias="LOG_FILE_ENABLED")
    log_file_path: str = Field(default="logs/fittrack.log", validation_alias="LOG_FILE_PATH")
    log_console_colorize: bool = Field(default=True, validation_alias="LOG_CONSOLE_COLORIZE")


def setup_logging(config: Optional[LoggerConfig] = None) -> None:
    """
    Setup loguru logger with the specified configuration.

    Args:
        config: Logger configuration. If None, uses values from the environment.
    """
    if config is None:
        settings = LoggingSettings()
        structured = settings.log_format.lower().strip() in ("json", "structured")
        config = LoggerConfig(
            console_level=settings.log_level.upper(),
            console_serialize=structured,
            console_colorize=settings.log_console_colorize and not structured,
            file_enabled=settings.log_file_enabled,
            file_path=settings.log_file_path,
            file_level=settings.log_level.upper(),
        )

    # Remove default handler
    logger.remove()

    if config.console_enabled:
        logger.add(
            sys.stdout,
            level=config.console_level,
            format=config.console_format,
            colorize=config.console_colorize,
            serialize=config.console_serialize,
            backtrace=config.console_backtrace,
            diagnose=config.console_diagnose,
            enqueue=config.enqueue,
            catch=config.catch,
        )

    if config.file_enabled:
        log_path = Path(config.file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            config.file_path,
            level=config.file_level,
            format=config.file_format,
            rotation=config.file_rotation,
            retention=config.file_retention,
            compression=config.file_compression,
            enqueue=config.enqueue,
            catch=config.catch,
        )

    if config.error_file_enabled:
        error_path = Path(config.error_file_path)
        error_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            config.error_file_path,
            level=config.error_file_level,
            format=config.file_format,
            rotation=config.file_rotation,
            retention=config.file_retention,
            compression=config.file_compression,
            enqueue=config.enqueue,
            catch=config.catch,
        )


def get_logger(name: str):
    """
    Get a logger instance with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance bound to the specified name
    """
    return logger.bind(name=name)


def generate_correlation_id() -> str:
    """Return a 16 hex character identifier used to correlate one request's log lines."""
    return secrets.token_hex(8)


def bind_request_context(function_name: str, correlation_id: str | None = None, **context: Any):
    """
    Get a logger bound to a single request.

    Every record emitted through the returned logger carries the function name,
    a correlation ID and any extra context (method, path, client ip...). The
    correlation ID is also returned to callers in response bodies so operators
    can find the matching log lines.

    Args:
        function_name: Name of the handler processing the request.
        correlation_id: Existing correlation ID to reuse; generated when omitted.
        **context: Additional request metadata to attach to every record.

    Returns:
        Logger instance bound to the request context.
    """
    return logger.bind(
        name=function_name,
        function_name=function_name,
        correlation_id=correlation_id or generate_correlation_id(),
        **context,
    )


def configure_for_testing() -> None:
    """Configure logging for testing environment."""
    logger.remove()
    logger.add(
        sys.stdout,
        level="DEBUG",
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <5}</level> | <cyan>{name}</cyan> | <level>{message}</level>",
        colorize=True,
        backtrace=False,
        diagnose=False,
        enqueue=False,
        catch=False,
    )


def configure_for_production() -> None:
    """Configure logging for production: JSON lines on stdout, no variable dumps."""
    config = LoggerConfig(
        console_level="INFO",
        console_colorize=False,
        console_serialize=True,
        console_backtrace=False,
        console_diagnose=False,
    )
    setup_logging(config)


def configure_for_development() -> None:
    """Configure logging for development environment."""
    config = LoggerConfig(
        console_level="DEBUG",
        console_colorize=True,
        console_backtrace=True,
        console_diagnose=True,
        file_enabled=True,
        error_file_enabled=True,
    )
    setup_logging(config)


# Default setup - can be overridden by applications
setup_logging()
