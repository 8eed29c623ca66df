"""
Logging utilities for the MinCaml compiler.

This module provides logging functions that respect the CompilationContext
log level and format flags.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import sys
import time
from typing import Optional

from mc_context import CompilationContext, LogLevel

_LEVEL_TAGS = {
    LogLevel.ERROR: "ERROR",
    LogLevel.WARNING: "WARNING",
    LogLevel.INFO: "INFO",
    LogLevel.DEBUG: "DEBUG",
}


def log(context: Optional[CompilationContext], log_level: LogLevel, message: str) -> None:
    """
    Log a message if the context's logging level admits it.

    Args:
        context:    The compilation context containing logging level. When None,
                    the default context is used.
        log_level:  The level of the message to log.
        message:    The message to log.
    """
    if context is None:
        context = CompilationContext.default()
    if context.log_level < log_level:
        return
    prefix = ""
    if context.log_rich_format:
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        tag = _LEVEL_TAGS.get(log_level)
        prefix = f"{timestamp} [{tag}] " if tag else f"{timestamp} "
    print(f"{prefix}{message}", file=sys.stderr)


def log_error(context: Optional[CompilationContext], message: str) -> None:
    """
    Log an error-level message if logging level is ERROR or higher.
    """
    log(context, LogLevel.ERROR, message)


def log_warning(context: Optional[CompilationContext], message: str) -> None:
    """
    Log a warning-level message if logging level is WARNING or higher.
    """
    log(context, LogLevel.WARNING, message)


def log_info(context: Optional[CompilationContext], message: str) -> None:
    log(context, LogLevel.INFO, message)


def log_debug(context: Optional[CompilationContext], message: str) -> None:
    log(context, LogLevel.DEBUG, message)


def log_stage(context: Optional[CompilationContext], stage: str, filename: Optional[str] = None) -> None:
    """
    Log the start of a compilation stage.

    Args:
        context: The compilation context containing logging flags.
        stage: The name of the compilation stage (e.g., "Lexing", "Parsing").
        filename: Optional name of the source being processed.
    """
    if filename:
        log_info(context, f"{stage} '{filename}'")
    else:
        log_info(context, f"{stage}...")
