################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of Dream Numerics
#
#  SPDX-License-Identifier: Apache-2.0
#  See LICENSE.md for more information.
#
################################################################################
"""Contract checks and error types shared by the numerics core."""

from __future__ import annotations

import inspect
import os
from types import FrameType


class ContractViolation(AssertionError):
    """Raised when a fail-fast contract check does not hold.

    Contract violations are programmer errors (out-of-range access, a
    dimension precondition that cannot be met) and are never meant to be
    recovered from.

    Attributes:
        expression: Source text of the failed condition
        filename: File containing the failed check
        lineno: Line number of the failed check
    """

    def __init__(self, expression: str, filename: str, lineno: int) -> None:
        """Record the failed expression and its source location."""
        self.expression: str = expression
        self.filename: str = filename
        self.lineno: int = lineno
        super().__init__(
            f"{os.path.basename(filename)}:{lineno}: assertion failed: {expression}"
        )


class DegenerateTransformError(ValueError):
    """Raised when a transform cannot be built from degenerate input."""


def ensure(condition: bool, expression: str) -> None:
    """Raise ContractViolation with the caller's location if condition fails."""
    if condition:
        return

    frame: FrameType | None = inspect.currentframe()
    caller: FrameType | None = frame.f_back if frame is not None else None
    try:
        if caller is None:
            raise ContractViolation(expression, "<unknown>", 0)
        raise ContractViolation(
            expression, caller.f_code.co_filename, caller.f_lineno
        )
    finally:
        # Break the reference cycle through the frame objects
        del frame
        del caller
