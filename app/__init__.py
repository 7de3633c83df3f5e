"""
Salary regime comparison.

The engine lives in ``app.core``; ``app.api.http`` exposes it over HTTP and
``app.main`` on the command line.
"""
from __future__ import annotations

__version__ = "0.1.0"
