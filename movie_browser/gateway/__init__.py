"""Clients for external movie-data APIs."""

from movie_browser.gateway.tmdb import TMDBClient

__all__ = ["TMDBClient"]
