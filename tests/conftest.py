"""Shared fixtures: a TMDB client wired to an in-memory fake session."""

import random
from urllib.parse import parse_qs, urlparse

import pytest
import requests

from movie_browser.controller import AppController
from movie_browser.gateway.tmdb import TMDBClient

BASE_URL = "https://api.tmdb.test/3"
IMAGE_BASE = "https://image.tmdb.test/t/p/"
API_KEY = "test-key"


class FakeResponse:
    def __init__(self, payload=None, status_code=200, invalid_json=False):
        self.payload = payload
        self.status_code = status_code
        self.invalid_json = invalid_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self.invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload


class FakeSession:
    """Answers GET requests by endpoint path (the part after the API base)."""

    def __init__(self):
        self.routes = {}
        self.calls = []
        self.closed = False

    def add(self, endpoint, payload=None, status_code=200, error=None, handler=None):
        def respond(url):
            if handler is not None:
                handler(url)
            if error is not None:
                raise error
            return FakeResponse(payload, status_code)

        self.routes[endpoint] = respond

    def add_sequence(self, endpoint, responders):
        """Serve successive calls to one endpoint from a list of callables."""
        queue = list(responders)
        self.routes[endpoint] = lambda url: queue.pop(0)(url)

    def get(self, url, timeout=None):
        self.calls.append(url)
        endpoint = urlparse(url).path[len(urlparse(BASE_URL).path):]
        if endpoint not in self.routes:
            return FakeResponse({"status_message": "not found"}, 404)
        return self.routes[endpoint](url)

    def close(self):
        self.closed = True


def query_of(url):
    return {k: v[0] for k, v in parse_qs(urlparse(url).query).items()}


def movie(movie_id, title, **extra):
    data = {
        "id": movie_id,
        "title": title,
        "poster_path": f"/poster{movie_id}.jpg",
        "backdrop_path": f"/backdrop{movie_id}.jpg",
        "vote_average": 7.25,
        "release_date": "2020-05-01",
    }
    data.update(extra)
    return data


def page(*movies):
    return {"page": 1, "results": list(movies), "total_pages": 1}


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(session):
    return TMDBClient(API_KEY, base_url=BASE_URL, image_base_url=IMAGE_BASE, session=session)


@pytest.fixture
def controller(client):
    return AppController(client, rng=random.Random(0))
