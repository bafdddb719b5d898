"""
GrowAGarden stock monitoring service package.

This package contains modules for fetching the growagarden.gg stocks page,
extracting and diffing its embedded stock payload, persisting the last
snapshot, emailing changes and serving manual triggers over HTTP.
"""

__all__ = [
    "config",
    "emailer",
    "errors",
    "keys",
    "main",
    "monitor",
    "scraper",
    "server",
    "snapshot",
    "stock",
    "utils",
]
