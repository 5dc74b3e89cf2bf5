"""Turn movie models into view objects and HTML fragments."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from movie_browser.config import Config
from movie_browser.models import MovieDetail, MovieSummary

templates_path = Path(__file__).parent / "templates"

env = Environment(
    loader=FileSystemLoader(str(templates_path)),
    autoescape=select_autoescape(["html"]),
)

POSTER_SIZE = "w500"
MODAL_POSTER_SIZE = "w780"
BACKDROP_SIZE = "original"

CARD_PLACEHOLDER = "https://via.placeholder.com/200x300?text=No+Poster"
MODAL_PLACEHOLDER = "https://via.placeholder.com/500x750?text=No+Poster"

NOT_AVAILABLE = "N/A"
NO_RESULTS_MESSAGE = "No movies found for this search/category."


@dataclass
class CardView:
    id: int
    title: str
    poster_url: str
    rating_text: str

    @property
    def detail_url(self) -> str:
        return f"/movies/{self.id}"


@dataclass
class ResultsView:
    """Contents of the results grid: cards, or a message instead of them."""

    cards: list[CardView] = field(default_factory=list)
    message: Optional[str] = None

    @property
    def html(self) -> str:
        return env.get_template("_results.html").render(results=self)


@dataclass
class DetailView:
    id: int
    title: str
    poster_url: str
    rating_text: str
    release_date: str
    runtime_text: str
    tagline: str
    overview: str
    genres: list[str]

    @property
    def trailer_url(self) -> str:
        # The id travels with the link, so nothing is re-bound per render
        return f"/movies/{self.id}/trailer"


@dataclass
class HeroView:
    title: str
    info: str
    backdrop_url: str


def format_rating(value: Optional[float]) -> str:
    """One decimal place; only a missing value becomes N/A, 0 stays 0.0."""
    if value is None:
        return NOT_AVAILABLE
    return f"{float(value):.1f}"


def _image(size: str, path: Optional[str], image_base: Optional[str]) -> str:
    return f"{image_base or Config.TMDB_IMAGE_BASE_URL}{size}{path}"


def card_view(summary: MovieSummary, image_base: Optional[str] = None) -> CardView:
    poster_url = (
        _image(POSTER_SIZE, summary.poster_path, image_base)
        if summary.poster_path
        else CARD_PLACEHOLDER
    )
    return CardView(
        id=summary.id,
        title=summary.title,
        poster_url=poster_url,
        rating_text=format_rating(summary.vote_average),
    )


def render_card(summary: MovieSummary, image_base: Optional[str] = None) -> str:
    """Render one clickable movie card."""
    return env.get_template("_card.html").render(card=card_view(summary, image_base))


def render_list(
    summaries: Iterable[MovieSummary], image_base: Optional[str] = None
) -> ResultsView:
    """Map summaries to cards in input order; empty input gives the no-results message."""
    cards = [card_view(s, image_base) for s in summaries]
    if not cards:
        return ResultsView(cards=[], message=NO_RESULTS_MESSAGE)
    return ResultsView(cards=cards)


def detail_view(detail: MovieDetail, image_base: Optional[str] = None) -> DetailView:
    poster_url = (
        _image(MODAL_POSTER_SIZE, detail.poster_path, image_base)
        if detail.poster_path
        else MODAL_PLACEHOLDER
    )
    return DetailView(
        id=detail.id,
        title=detail.title,
        poster_url=poster_url,
        rating_text=format_rating(detail.vote_average),
        release_date=detail.release_date or NOT_AVAILABLE,
        runtime_text=str(detail.runtime) if detail.runtime else NOT_AVAILABLE,
        tagline=detail.tagline or "",
        overview=detail.overview,
        genres=[g.name for g in detail.genres],
    )


def render_modal(detail: MovieDetail, image_base: Optional[str] = None) -> str:
    return env.get_template("_modal.html").render(detail=detail_view(detail, image_base))


def hero_view(summary: MovieSummary, image_base: Optional[str] = None) -> Optional[HeroView]:
    """Project a summary into the banner; None when it has no backdrop."""
    if not summary.backdrop_path:
        return None
    year = summary.release_year or NOT_AVAILABLE
    return HeroView(
        title=summary.title,
        info=f"{year} • ⭐ {format_rating(summary.vote_average)}",
        backdrop_url=_image(BACKDROP_SIZE, summary.backdrop_path, image_base),
    )
