#!/usr/bin/env python3
"""Thin loader delegating CLI/TUI logic to the interface layer."""

import sys

from core.interface import tuiman_app as _tuiman_app

if __name__ != "__main__":
    # When imported, expose the full interface implementation directly.
    sys.modules[__name__] = _tuiman_app
else:
    sys.exit(_tuiman_app.main())
