"""Warning categories raised by matx.

Filter on MatxWarning to silence everything the library emits, or on one
of the subclasses for a single concern. `warn` attributes each warning to
the first stack frame outside the matx package, so the reported location is
the user's call site whichever public entry point was used.

Only the standard library is imported here; every other matx module
imports this one.
"""
from __future__ import annotations

import os
import sys
import warnings

_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__))) + os.sep


class MatxWarning(UserWarning):
    """Base category for every matx warning."""


class MatxDTypeWarning(MatxWarning):
    """Random bounds mixing integer and non-integer values; cells are drawn as floats."""


class MatxPerformanceWarning(MatxWarning):
    """A pure-Python product or division above the configured slow-ops threshold."""


def warn(message: str, category: type[MatxWarning]) -> None:
    level = 2
    frame = sys._getframe(1)
    while frame is not None and os.path.abspath(frame.f_code.co_filename).startswith(_PACKAGE_DIR):
        frame = frame.f_back
        level += 1
    warnings.warn(message, category, stacklevel=level)
