"""FastAPI web application."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from movie_browser.config import Config
from movie_browser.controller import NAV_LABELS, AppController
from movie_browser.gateway.tmdb import TMDBClient

logger = logging.getLogger(__name__)

controller: Optional[AppController] = None


def build_controller() -> AppController:
    """Create the page controller from configuration."""
    client = TMDBClient(
        Config.TMDB_API_KEY,
        base_url=Config.TMDB_BASE_URL,
        image_base_url=Config.TMDB_IMAGE_BASE_URL,
        language=Config.TMDB_LANGUAGE,
        timeout=Config.REQUEST_TIMEOUT,
    )
    return AppController(
        client,
        discard_stale=Config.DISCARD_STALE_RESPONSES,
        narrow_viewport_max=Config.NARROW_VIEWPORT_MAX,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    global controller

    # Startup
    logger.info("Starting web application...")
    if controller is None:
        controller = build_controller()

    yield

    # Shutdown
    controller.client.close()


app = FastAPI(
    title="Movie Browser",
    description="Browse popular, top rated and upcoming movies from TMDB",
    lifespan=lifespan,
)

# Mount static files
static_path = Path(__file__).parent / "static"
app.mount("/static", StaticFiles(directory=str(static_path)), name="static")

# Templates
templates_path = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=str(templates_path))

RESULTS_ANCHOR = "/#movie-container"


def get_controller() -> AppController:
    global controller
    if controller is None:
        controller = build_controller()
    return controller


def back_to_page(url: str = "/") -> RedirectResponse:
    return RedirectResponse(url=url, status_code=303)


# Pydantic models for API
class UIStateResponse(BaseModel):
    active_nav: Optional[str] = None
    menu_open: bool
    menu_icon_open: bool
    modal_open: bool
    loading: list[str]
    results_title: str
    result_ids: list[int]
    results_message: Optional[str] = None
    results_error: Optional[str] = None
    modal_movie_id: Optional[int] = None
    hero_title: Optional[str] = None


class TrailerResponse(BaseModel):
    movie_id: int
    url: Optional[str] = None
    notice: Optional[str] = None


# ============== HTML Pages ==============

@app.get("/", response_class=HTMLResponse)
def index(request: Request, viewport_width: Optional[int] = Query(None)):
    """Main page; the first visit loads the default category and hero."""
    ctrl = get_controller()
    if not ctrl.started:
        ctrl.start(viewport_width)

    page = ctrl.snapshot(consume_notice=True)
    return templates.TemplateResponse(
        request=request,
        name="index.html",
        context={
            "state": page.state,
            "nav_entries": NAV_LABELS,
            "results_title": page.results_title,
            "results": page.results,
            "results_error": page.results_error,
            "modal": page.modal,
            "hero": page.hero,
            "notice": page.notice,
            "open_url": page.open_url,
        },
    )


@app.get("/nav/{target}")
def navigate(target: str, viewport_width: Optional[int] = Query(None)):
    """Load a category from the navigation bar and scroll to the results."""
    if get_controller().navigate(target, viewport_width):
        return back_to_page(RESULTS_ANCHOR)
    return back_to_page()


@app.get("/search")
def search(query: str = Query(""), viewport_width: Optional[int] = Query(None)):
    """Search movies by free text; blank input leaves the page as it is."""
    get_controller().search(query, viewport_width)
    return back_to_page()


@app.get("/menu/toggle")
def toggle_menu():
    get_controller().toggle_menu()
    return back_to_page()


@app.get("/movies/{movie_id}")
def open_detail(movie_id: int):
    """Open the detail modal for a movie card."""
    get_controller().open_detail(movie_id)
    return back_to_page()


@app.get("/modal/close")
def close_modal():
    get_controller().close_modal()
    return back_to_page()


@app.get("/movies/{movie_id}/trailer")
def watch_trailer(movie_id: int):
    """Resolve the trailer, then return to the page to open it or show a notice."""
    ctrl = get_controller()
    outcome = ctrl.resolve_trailer(movie_id)
    if outcome.url:
        ctrl.post_open_url(outcome.url)
    else:
        ctrl.post_notice(outcome.notice)
    return back_to_page()


# ============== API Endpoints ==============

@app.get("/api/state", response_model=UIStateResponse)
def get_state():
    """Get the current page state."""
    page = get_controller().snapshot()
    return UIStateResponse(
        active_nav=page.state.active_nav,
        menu_open=page.state.menu_open,
        menu_icon_open=page.state.menu_icon_open,
        modal_open=page.state.modal_open,
        loading=sorted(page.state.loading),
        results_title=page.results_title,
        result_ids=[c.id for c in page.results.cards] if page.results else [],
        results_message=page.results.message if page.results else None,
        results_error=page.results_error,
        modal_movie_id=page.modal.id if page.modal and page.state.modal_open else None,
        hero_title=page.hero.title if page.hero else None,
    )


@app.get("/api/movies/{movie_id}/trailer", response_model=TrailerResponse)
def get_trailer(movie_id: int):
    """Resolve a movie's trailer without touching the page."""
    outcome = get_controller().resolve_trailer(movie_id)
    return TrailerResponse(movie_id=movie_id, url=outcome.url, notice=outcome.notice)
