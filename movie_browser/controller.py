"""Page controller binding user interactions to TMDB requests and page state."""

import copy
import logging
import random
import threading
from dataclasses import dataclass
from typing import Optional

from movie_browser.gateway.tmdb import TMDBClient
from movie_browser.models import (
    Failure,
    MovieDetail,
    MovieSummary,
    TrailerVideo,
    UIState,
)
from movie_browser.web.rendering import (
    DetailView,
    HeroView,
    ResultsView,
    detail_view,
    hero_view,
    render_list,
)

logger = logging.getLogger(__name__)

# Page regions, each written by at most one request's completion at a time
RESULTS = "results"
MODAL = "modal"
HERO = "hero"

DEFAULT_CATEGORY = "popular"
DEFAULT_TITLE = "Popular Movies"

# Navigation target -> (TMDB category, section title)
NAV_TARGETS = {
    "home": (DEFAULT_CATEGORY, DEFAULT_TITLE),
    "popular": ("popular", "Popular Movies"),
    "top-rated": ("top_rated", "Top Rated Movies"),
    "upcoming": ("upcoming", "Upcoming Movies"),
}
NAV_LABELS = [
    ("home", "Home"),
    ("popular", "Popular"),
    ("top-rated", "Top Rated"),
    ("upcoming", "Upcoming"),
]

FETCH_ERROR_MESSAGE = "Could not fetch data. Please try again later."
DETAIL_ERROR_NOTICE = "Could not load movie details."
NO_VIDEO_DATA_NOTICE = "Video data not available"
NO_TRAILER_NOTICE = "No official trailer found"


@dataclass
class TrailerOutcome:
    """Either a URL to open in a new browsing context or a notice for the user."""

    url: Optional[str] = None
    notice: Optional[str] = None


@dataclass
class PageSnapshot:
    """Consistent copy of everything the page template needs."""

    state: UIState
    results_title: str
    results: Optional[ResultsView]
    results_error: Optional[str]
    modal: Optional[DetailView]
    hero: Optional[HeroView]
    notice: Optional[str]
    open_url: Optional[str] = None


class RequestSequencer:
    """Hands out increasing tokens per region and remembers the latest one."""

    def __init__(self):
        self._latest: dict[str, int] = {}

    def issue(self, region: str) -> int:
        token = self._latest.get(region, 0) + 1
        self._latest[region] = token
        return token

    def is_current(self, region: str, token: int) -> bool:
        return self._latest.get(region) == token


class AppController:
    """Holds the page state and runs every user interaction against TMDB.

    Requests run outside the lock, so two interactions may be in flight at
    once. Each request gets a token for its region; when
    ``discard_stale`` is set, only the latest issued request for a region
    may write to it. Otherwise responses apply in arrival order.
    """

    def __init__(
        self,
        client: TMDBClient,
        rng: Optional[random.Random] = None,
        discard_stale: bool = True,
        narrow_viewport_max: int = 768,
    ):
        self.client = client
        self.rng = rng or random.Random()
        self.discard_stale = discard_stale
        self.narrow_viewport_max = narrow_viewport_max

        self.state = UIState()
        self._results_title = DEFAULT_TITLE
        self._results: Optional[ResultsView] = None
        self._results_error: Optional[str] = None
        self._modal: Optional[DetailView] = None
        self._hero: Optional[HeroView] = None
        self._notice: Optional[str] = None
        self._open_url: Optional[str] = None

        self._lock = threading.RLock()
        self._sequencer = RequestSequencer()
        self._in_flight: dict[str, int] = {}
        self._started = False

    # ============== Request bookkeeping ==============

    def _begin(self, region: str) -> int:
        with self._lock:
            self._in_flight[region] = self._in_flight.get(region, 0) + 1
            self.state.loading.add(region)
            return self._sequencer.issue(region)

    def _finish(self, region: str) -> None:
        with self._lock:
            remaining = self._in_flight.get(region, 1) - 1
            self._in_flight[region] = remaining
            if remaining <= 0:
                self.state.loading.discard(region)

    def _accept(self, region: str, token: int) -> bool:
        """Whether a completed request may still write to its region."""
        if self.discard_stale and not self._sequencer.is_current(region, token):
            logger.debug(f"Discarding stale {region} response (token {token})")
            return False
        return True

    def is_narrow(self, viewport_width: Optional[int]) -> bool:
        return viewport_width is not None and viewport_width <= self.narrow_viewport_max

    def _collapse_menu_if_narrow(self, viewport_width: Optional[int]) -> None:
        with self._lock:
            if self.is_narrow(viewport_width) and self.state.menu_open:
                self.toggle_menu()

    # ============== Start-up ==============

    def start(self, viewport_width: Optional[int] = None) -> None:
        """Load the default category, mark it active and pick a hero. Runs once."""
        with self._lock:
            if self._started:
                return
            self._started = True
            self.state.active_nav = DEFAULT_CATEGORY

        logger.info("Loading initial page content")
        self.load_category(
            self.client.category_url(DEFAULT_CATEGORY), DEFAULT_TITLE, viewport_width
        )
        self.select_hero()

    @property
    def started(self) -> bool:
        return self._started

    # ============== Catalog ==============

    def _summaries(self, entries: list) -> list[MovieSummary]:
        summaries = []
        for entry in entries:
            try:
                summaries.append(MovieSummary.from_api(entry))
            except (ValueError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping malformed movie entry: {e}")
        return summaries

    def load_category(
        self, url: str, title: str, viewport_width: Optional[int] = None
    ) -> bool:
        """Fetch a page of summaries and show them under ``title``.

        Returns True when the results region was updated with cards (or
        the no-results message).
        """
        applied = False
        token = self._begin(RESULTS)
        try:
            data = self.client.fetch_json(url)
            with self._lock:
                if self._accept(RESULTS, token):
                    if isinstance(data, Failure):
                        self._results_error = FETCH_ERROR_MESSAGE
                    elif isinstance(data.get("results"), list):
                        self._results_title = title
                        self._results = render_list(
                            self._summaries(data["results"]), self.client.image_base_url
                        )
                        self._results_error = None
                        applied = True
                    else:
                        logger.warning(f"Response for '{title}' has no results collection")
        finally:
            self._finish(RESULTS)

        self._collapse_menu_if_narrow(viewport_width)
        return applied

    def select_hero(self) -> bool:
        """Pick a random entry of the first popular page for the banner."""
        token = self._begin(HERO)
        try:
            data = self.client.fetch_json(self.client.category_url(DEFAULT_CATEGORY))
            if isinstance(data, Failure):
                logger.error(f"Error loading hero background: {data.reason}")
                return False

            results = data.get("results")
            if not isinstance(results, list) or not results:
                logger.error("Error loading hero background: no result list in response")
                return False

            try:
                summary = MovieSummary.from_api(self.rng.choice(results))
                view = hero_view(summary, self.client.image_base_url)
            except (ValueError, TypeError, AttributeError) as e:
                logger.error(f"Error loading hero background: {e}")
                return False

            if view is None:
                return False

            with self._lock:
                if not self._accept(HERO, token):
                    return False
                self._hero = view
            return True
        finally:
            self._finish(HERO)

    # ============== Navigation & search ==============

    def navigate(self, target: str, viewport_width: Optional[int] = None) -> bool:
        """Load the category behind a nav entry and mark only that entry active."""
        entry = NAV_TARGETS.get(target)
        if entry is None:
            logger.debug(f"Ignoring unknown navigation target: {target!r}")
            return False

        category, title = entry
        with self._lock:
            self.state.active_nav = target
        self.load_category(self.client.category_url(category), title, viewport_width)
        return True

    def search(self, query: Optional[str], viewport_width: Optional[int] = None) -> bool:
        text = (query or "").strip()
        if not text:
            return False

        with self._lock:
            self.state.active_nav = None
        self._collapse_menu_if_narrow(viewport_width)
        self.load_category(
            self.client.search_url(text), f'Search Results for: "{text}"', viewport_width
        )
        return True

    def toggle_menu(self) -> None:
        with self._lock:
            self.state.menu_open = not self.state.menu_open
            self.state.menu_icon_open = not self.state.menu_icon_open

    # ============== Detail modal ==============

    def open_detail(self, movie_id: int) -> bool:
        """Fetch a movie's detail and open the modal with it.

        On failure the modal stays as it was and a notice is queued; the
        results region is left alone.
        """
        token = self._begin(MODAL)
        try:
            data = self.client.fetch_json(self.client.detail_url(movie_id))
            detail = None
            if isinstance(data, Failure):
                logger.error(f"Could not load details for movie {movie_id}: {data.reason}")
            else:
                try:
                    detail = MovieDetail.from_api(data)
                except (ValueError, TypeError) as e:
                    logger.error(f"Invalid detail payload for movie {movie_id}: {e}")

            with self._lock:
                if not self._accept(MODAL, token):
                    return False
                if detail is None:
                    self._notice = DETAIL_ERROR_NOTICE
                    return False
                self._modal = detail_view(detail, self.client.image_base_url)
                self.state.modal_open = True
                return True
        finally:
            self._finish(MODAL)

    def close_modal(self) -> None:
        with self._lock:
            self.state.modal_open = False

    # ============== Trailer ==============

    def resolve_trailer(self, movie_id: int) -> TrailerOutcome:
        """Find the first YouTube trailer of a movie, in API order."""
        data = self.client.fetch_json(self.client.videos_url(movie_id))
        entries = [] if isinstance(data, Failure) else data.get("results") or []
        if not entries:
            return TrailerOutcome(notice=NO_VIDEO_DATA_NOTICE)

        for entry in entries:
            if not isinstance(entry, dict):
                continue
            video = TrailerVideo.from_api(entry)
            if video.is_youtube_trailer():
                logger.info(f"Opening trailer {video.key} for movie {movie_id}")
                return TrailerOutcome(url=video.watch_url)

        return TrailerOutcome(notice=NO_TRAILER_NOTICE)

    # ============== Notices & snapshots ==============

    def post_notice(self, text: str) -> None:
        with self._lock:
            self._notice = text

    def post_open_url(self, url: str) -> None:
        """Queue a URL for the next page render to open in a new browsing context."""
        with self._lock:
            self._open_url = url

    def snapshot(self, consume_notice: bool = False) -> PageSnapshot:
        """Copy the state for rendering; consumed notices and URLs are delivered once."""
        with self._lock:
            notice, open_url = self._notice, self._open_url
            if consume_notice:
                self._notice = None
                self._open_url = None
            return PageSnapshot(
                state=copy.deepcopy(self.state),
                results_title=self._results_title,
                results=self._results,
                results_error=self._results_error,
                modal=self._modal,
                hero=self._hero,
                notice=notice,
                open_url=open_url,
            )
