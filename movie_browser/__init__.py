"""Movie browser: a TMDB-backed movie catalog page."""

__version__ = "1.0.0"
