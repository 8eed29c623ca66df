"""
Compilation context for cross-cutting compiler options.

This module defines the CompilationContext dataclass which holds options and
state shared by the front end and the stages that consume its AST.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass, field
from enum import IntEnum

from mc_ids import IdGenerator


class LogLevel(IntEnum):
    """Hierarchical logging levels for the MinCaml compiler."""
    SILENT = 0      # No logging
    ERROR = 3       # Error messages only
    WARNING = 6     # Warning messages (default)
    INFO = 10       # General progress messages
    DEBUG = 30      # Detailed diagnostic information


@dataclass
class CompilationContext:
    """
    Holds cross-cutting compiler options that affect multiple compilation stages.

    Attributes:
        log_rich_format:        If True, emit logs in rich format: may include log level, timestamps, etc.
        log_level:              Current logging level.
        ids:                    Fresh-name generator for the stages after parsing.
    """
    log_rich_format: bool = False
    log_level: LogLevel = LogLevel.WARNING
    ids: IdGenerator = field(default_factory=IdGenerator, repr=False, compare=False)

    @staticmethod
    def default() -> 'CompilationContext':
        """Create a CompilationContext with default settings."""
        return CompilationContext(log_level=LogLevel.WARNING)
