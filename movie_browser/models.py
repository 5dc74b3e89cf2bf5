"""Data models for the movie browser."""

from dataclasses import dataclass, field
from typing import Optional


class InvalidPayloadError(ValueError):
    """Raised when an API payload lacks a field the model cannot do without."""


def _require(data: dict, key: str, kind: str):
    value = data.get(key)
    if value is None:
        raise InvalidPayloadError(f"{kind} payload is missing '{key}'")
    return value


def _optional_float(value) -> Optional[float]:
    """Ratings must be numeric; a non-numeric one raises ValueError."""
    if value is None:
        return None
    return float(value)


@dataclass
class Failure:
    """A request that did not produce usable JSON."""

    reason: str
    status_code: Optional[int] = None

    def __bool__(self) -> bool:
        # A failure is never a usable payload
        return False


@dataclass
class MovieSummary:
    """Minimal movie record used in list and grid views."""

    id: int
    title: str
    poster_path: Optional[str] = None
    vote_average: Optional[float] = None
    backdrop_path: Optional[str] = None
    release_date: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> "MovieSummary":
        """Build a summary from one entry of a list or search response."""
        return cls(
            id=int(_require(data, "id", "Movie summary")),
            title=data.get("title") or data.get("original_title") or "Untitled",
            poster_path=data.get("poster_path"),
            vote_average=_optional_float(data.get("vote_average")),
            backdrop_path=data.get("backdrop_path"),
            release_date=data.get("release_date"),
        )

    @property
    def release_year(self) -> Optional[str]:
        if self.release_date:
            return self.release_date.split("-")[0]
        return None


@dataclass
class Genre:
    name: str


@dataclass
class MovieDetail:
    """Full movie record shown in the detail modal.

    Only ``id`` and ``title`` are required. Everything else the API may
    omit, and the renderer supplies a fallback for it.
    """

    id: int
    title: str
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    tagline: Optional[str] = None
    overview: str = ""
    release_date: Optional[str] = None
    runtime: Optional[int] = None
    vote_average: Optional[float] = None
    genres: list[Genre] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict) -> "MovieDetail":
        """Build a detail record from a ``/movie/{id}`` response."""
        genres = [
            Genre(name=g["name"])
            for g in data.get("genres") or []
            if isinstance(g, dict) and g.get("name")
        ]
        return cls(
            id=int(_require(data, "id", "Movie detail")),
            title=_require(data, "title", "Movie detail"),
            poster_path=data.get("poster_path"),
            backdrop_path=data.get("backdrop_path"),
            tagline=data.get("tagline"),
            overview=data.get("overview") or "",
            release_date=data.get("release_date") or None,
            runtime=data.get("runtime") or None,
            vote_average=_optional_float(data.get("vote_average")),
            genres=genres,
        )


@dataclass
class TrailerVideo:
    """One entry of a ``/movie/{id}/videos`` response."""

    key: str
    site: str
    type: str

    WATCH_URL = "https://www.youtube.com/watch?v={key}"

    @classmethod
    def from_api(cls, data: dict) -> "TrailerVideo":
        return cls(
            key=data.get("key", ""),
            site=data.get("site", ""),
            type=data.get("type", ""),
        )

    def is_youtube_trailer(self) -> bool:
        return self.type == "Trailer" and self.site == "YouTube" and bool(self.key)

    @property
    def watch_url(self) -> str:
        return self.WATCH_URL.format(key=self.key)


@dataclass
class UIState:
    """Page state mutated by navigation, menu, search and modal handlers."""

    active_nav: Optional[str] = None
    menu_open: bool = False
    menu_icon_open: bool = False
    modal_open: bool = False
    loading: set[str] = field(default_factory=set)  # regions with a request in flight
