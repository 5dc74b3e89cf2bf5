"""TMDB API client returning parsed JSON or a Failure value."""

import logging
from typing import Optional, Union
from urllib.parse import quote, urlencode

import requests

from movie_browser.models import Failure

logger = logging.getLogger(__name__)

CATEGORIES = ("popular", "top_rated", "upcoming")


class TMDBClient:
    """Client for The Movie Database API."""

    BASE_URL = "https://api.themoviedb.org/3"
    IMAGE_BASE_URL = "https://image.tmdb.org/t/p/"

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        image_base_url: Optional[str] = None,
        language: str = "en-US",
        timeout: float = 10,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.image_base_url = image_base_url or self.IMAGE_BASE_URL
        self.language = language
        self.timeout = timeout
        self.session = session or requests.Session()

    def _url(self, endpoint: str, params: Optional[dict] = None) -> str:
        """Build a fully-formed URL carrying the key and language."""
        query = {"api_key": self.api_key, "language": self.language}
        if params:
            query.update(params)
        # quote (not quote_plus) so spaces encode as %20
        return f"{self.base_url}{endpoint}?{urlencode(query, quote_via=quote, safe='')}"

    def category_url(self, category: str, page: int = 1) -> str:
        if category not in CATEGORIES:
            raise ValueError(f"Unknown category: {category}")
        return self._url(f"/movie/{category}", {"page": page})

    def search_url(self, query: str, page: int = 1) -> str:
        return self._url("/search/movie", {"query": query, "page": page})

    def detail_url(self, movie_id: int) -> str:
        return self._url(f"/movie/{int(movie_id)}")

    def videos_url(self, movie_id: int) -> str:
        return self._url(f"/movie/{int(movie_id)}/videos")

    def fetch_json(self, url: str) -> Union[dict, Failure]:
        """Make a single GET request and return the decoded body.

        Any non-2xx status, transport error or undecodable body comes back
        as a ``Failure``. Nothing is retried, and presenting the failure is
        left to the caller.
        """
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error(f"TMDB API error for {self._redact(url)}: {e}")
            return Failure(reason=f"HTTP error! status: {status}", status_code=status)
        except requests.RequestException as e:
            logger.error(f"TMDB API error for {self._redact(url)}: {e}")
            return Failure(reason=str(e))
        except ValueError as e:
            logger.error(f"TMDB API returned invalid JSON for {self._redact(url)}: {e}")
            return Failure(reason="invalid JSON")

        if not isinstance(data, dict):
            logger.error(f"TMDB API returned a non-object body for {self._redact(url)}")
            return Failure(reason="unexpected payload")
        return data

    def _redact(self, url: str) -> str:
        """Strip the API key before a URL reaches the logs."""
        if self.api_key:
            return url.replace(self.api_key, "***")
        return url

    def close(self) -> None:
        self.session.close()
