#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import os
from dataclasses import dataclass
from typing import Optional

from mc_source import CompilationError


DIAGNOSTIC_CODE_FAMILIES = {
    "LEX": [
        "LEX-0010",
        "LEX-0020",
        "LEX-0030",
        "LEX-0031",
        "LEX-0032",
        "LEX-0040",
        "LEX-0070",  # warning
    ],
    "PAR": [
        "PAR-0010",
        "PAR-0020",
        "PAR-0021",
        "PAR-0030",
        "PAR-0040",
        "PAR-0041",
        "PAR-0050",
        "PAR-0051",
        "PAR-0052",
        "PAR-0053",
        "PAR-0054",
        "PAR-0055",
        "PAR-0060",
        "PAR-0061",
        "PAR-0070",
        "PAR-0071",
        "PAR-0080",
        "PAR-0081",
    ],
    # ICE codes are internal compiler errors raised as exceptions,
    # not user-facing diagnostics; they are excluded from this registry.
}


@dataclass
class Diagnostic:
    kind: str  # "error" or "warning"
    message: str
    filename: Optional[str] = None  # file path

    # Primary location (start of the range)
    line: Optional[int] = None
    column: Optional[int] = None
    offset: Optional[int] = None

    # Optional end of range (exclusive)
    end_line: Optional[int] = None
    end_column: Optional[int] = None

    # Return the one-line header; snippets will be printed at the call site
    def format(self) -> str:
        loc = ""
        if self.filename is not None:
            loc += f"{os.path.abspath(str(self.filename))}"
        if self.line is not None:
            if loc:
                loc += ":"
            loc += f"{self.line}"
            if self.column is not None:
                loc += f":{self.column}"
        if loc:
            loc += ": "
        return f"{loc}{self.kind}: {self.message}"


def diag_from_error(kind: str, error: CompilationError) -> Diagnostic:
    return Diagnostic(
        kind=kind,
        message=error.message,
        filename=error.filename,
        line=error.location.line,
        column=error.location.column,
        offset=error.location.offset,
    )
