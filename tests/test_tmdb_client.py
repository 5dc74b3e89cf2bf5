"""Tests for the TMDB request gateway."""

import logging

import pytest
import requests

from movie_browser.models import Failure

from conftest import API_KEY, BASE_URL, query_of


def test_category_url_embeds_key_language_and_page(client):
    url = client.category_url("top_rated")
    assert url.startswith(f"{BASE_URL}/movie/top_rated?")
    assert query_of(url) == {"api_key": API_KEY, "language": "en-US", "page": "1"}


def test_unknown_category_is_rejected(client):
    with pytest.raises(ValueError):
        client.category_url("trending")


def test_search_url_percent_encodes_query(client):
    url = client.search_url("star wars & more")
    assert "query=star%20wars%20%26%20more" in url
    assert query_of(url)["query"] == "star wars & more"


def test_detail_and_videos_urls(client):
    assert client.detail_url(550).startswith(f"{BASE_URL}/movie/550?")
    assert client.videos_url(550).startswith(f"{BASE_URL}/movie/550/videos?")


def test_fetch_json_returns_payload(client, session):
    session.add("/movie/popular", {"results": []})
    assert client.fetch_json(client.category_url("popular")) == {"results": []}
    assert len(session.calls) == 1


def test_http_error_becomes_failure(client, session):
    session.add("/movie/popular", {"status_message": "oops"}, status_code=500)
    result = client.fetch_json(client.category_url("popular"))
    assert isinstance(result, Failure)
    assert result.status_code == 500
    assert len(session.calls) == 1  # no retries


def test_transport_error_becomes_failure(client, session):
    session.add("/movie/popular", error=requests.ConnectionError("network down"))
    result = client.fetch_json(client.category_url("popular"))
    assert isinstance(result, Failure)
    assert result.status_code is None


def test_invalid_json_becomes_failure(client, session):
    session.routes["/movie/popular"] = lambda url: _InvalidJSON()
    assert isinstance(client.fetch_json(client.category_url("popular")), Failure)


def test_non_object_body_becomes_failure(client, session):
    session.add("/movie/popular", ["not", "an", "object"])
    assert isinstance(client.fetch_json(client.category_url("popular")), Failure)


def test_api_key_is_redacted_in_logs(client, session, caplog):
    session.add("/movie/popular", status_code=401)
    with caplog.at_level(logging.ERROR):
        client.fetch_json(client.category_url("popular"))
    assert "TMDB API error" in caplog.text
    assert API_KEY not in caplog.text


def test_close_closes_session(client, session):
    client.close()
    assert session.closed


class _InvalidJSON:
    status_code = 200

    def raise_for_status(self):
        pass

    def json(self):
        raise ValueError("Expecting value")
