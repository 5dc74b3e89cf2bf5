"""Tests for building models from TMDB payloads."""

import pytest

from movie_browser.models import (
    Failure,
    InvalidPayloadError,
    MovieDetail,
    MovieSummary,
    TrailerVideo,
)


def test_summary_from_api_keeps_optional_fields_missing():
    summary = MovieSummary.from_api({"id": 7, "title": "Se7en"})
    assert summary.id == 7
    assert summary.title == "Se7en"
    assert summary.poster_path is None
    assert summary.vote_average is None
    assert summary.release_year is None


def test_summary_release_year():
    summary = MovieSummary.from_api({"id": 1, "title": "X", "release_date": "1999-10-15"})
    assert summary.release_year == "1999"


def test_summary_without_id_is_rejected():
    with pytest.raises(InvalidPayloadError):
        MovieSummary.from_api({"title": "Nameless"})


def test_detail_without_genres_gets_empty_list():
    detail = MovieDetail.from_api({"id": 550, "title": "Fight Club"})
    assert detail.genres == []
    assert detail.overview == ""
    assert detail.release_date is None
    assert detail.vote_average is None


def test_detail_genres_keep_api_order():
    detail = MovieDetail.from_api({
        "id": 550,
        "title": "Fight Club",
        "genres": [{"id": 18, "name": "Drama"}, {"id": 53, "name": "Thriller"}],
    })
    assert [g.name for g in detail.genres] == ["Drama", "Thriller"]


def test_detail_without_title_is_rejected():
    with pytest.raises(InvalidPayloadError):
        MovieDetail.from_api({"id": 550})


def test_trailer_video_matching():
    assert TrailerVideo.from_api({"key": "abc", "site": "YouTube", "type": "Trailer"}).is_youtube_trailer()
    assert not TrailerVideo.from_api({"key": "abc", "site": "Vimeo", "type": "Trailer"}).is_youtube_trailer()
    assert not TrailerVideo.from_api({"key": "abc", "site": "YouTube", "type": "Teaser"}).is_youtube_trailer()


def test_trailer_watch_url():
    video = TrailerVideo(key="SUXWAEX2jlg", site="YouTube", type="Trailer")
    assert video.watch_url == "https://www.youtube.com/watch?v=SUXWAEX2jlg"


def test_failure_is_falsy():
    assert not Failure(reason="boom")


def test_non_numeric_rating_is_rejected():
    with pytest.raises(ValueError):
        MovieSummary.from_api({"id": 1, "title": "X", "vote_average": "n/a"})
    with pytest.raises(ValueError):
        MovieDetail.from_api({"id": 550, "title": "Fight Club", "vote_average": "n/a"})


def test_integer_rating_becomes_float():
    summary = MovieSummary.from_api({"id": 1, "title": "X", "vote_average": 0})
    assert summary.vote_average == 0.0
    assert isinstance(summary.vote_average, float)
