"""Make ``python -m raceready.cli.<command>`` work from a source checkout.

The importable modules live under ``src/raceready``; this package only adds
that directory to its own search path.
"""

from __future__ import annotations

from pathlib import Path

_CHECKOUT_SOURCES = Path(__file__).resolve().parents[1] / "src" / __name__

if _CHECKOUT_SOURCES.is_dir() and str(_CHECKOUT_SOURCES) not in __path__:
    __path__.append(str(_CHECKOUT_SOURCES))
