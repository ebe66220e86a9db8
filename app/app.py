import contextlib
import functools
import logging
from typing import Any, AsyncIterator, Awaitable, Callable

import httpx
from rich.logging import RichHandler
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse
from starlette.routing import Mount, Route
from starlette.staticfiles import StaticFiles

from app import config
from app.html.views import BLANK_DRAFT, templates_factory
from app.page import Page
from domain.errors import ForkifyError, NotFoundError
from domain.gateway import Gateway, catalog_client_factory
from domain.repository import BookmarkRepository, BookmarkStorage, JsonFileBookmarkStorage
from domain.store import StateStore


logger = logging.getLogger(__name__)


CONFIG = config.Config()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


def aHTMLResponse(route: Callable[..., Awaitable[str | tuple[str, int]]]):
    @functools.wraps(route)
    async def wrapper(*args: Any, **kwargs: Any) -> HTMLResponse:
        resp = await route(*args, **kwargs)
        if not isinstance(resp, tuple):
            html, code = resp, 200
        else:
            html, code = resp
        return HTMLResponse(html, status_code=code)

    return wrapper


def error_message(error: ForkifyError) -> str | None:
    """None lets the view fall back to its own message."""
    if isinstance(error, NotFoundError):
        return None
    return str(error)


def int_param(request: Request, name: str) -> int | None:
    try:
        return int(request.query_params[name])
    except (KeyError, ValueError):
        return None


@aHTMLResponse
async def homepage(request: Request) -> str:
    return str(request.app.state.page)


@aHTMLResponse
async def recipe(request: Request) -> str:
    page: Page = request.app.state.page
    store: StateStore = request.app.state.store

    id = page.location.read(request)
    if not id:
        return ""

    page.recipe.render_spinner()
    touched = [page.recipe]
    if store.search.results:
        page.results.update(store.get_page())
        touched.append(page.results)
    if store.bookmarks:
        page.bookmarks.update(list(store.bookmarks))
        touched.append(page.bookmarks)

    try:
        await store.load_recipe(id)
    except ForkifyError as e:
        logger.error("Could not load recipe %s: %s", id, e)
        page.recipe.render_error(error_message(e))
    else:
        page.recipe.render(store.recipe)
    return page.oob(*touched)


@aHTMLResponse
async def search(request: Request) -> str:
    page: Page = request.app.state.page
    store: StateStore = request.app.state.store

    query = request.query_params.get("query", "").strip()
    if not query:
        return ""

    page.results.render_spinner()
    try:
        await store.load_search_results(query)
    except ForkifyError as e:
        logger.error("Search %r failed: %s", query, e)
        page.results.render_error(error_message(e))
        return page.oob(page.results)

    page.results.render(store.get_page())
    page.pagination.render(store.search)
    return page.oob(page.results, page.pagination)


@aHTMLResponse
async def pagination(request: Request) -> str | tuple[str, int]:
    page: Page = request.app.state.page
    store: StateStore = request.app.state.store

    goto = int_param(request, "goto")
    if goto is None:
        return "Page must be a number.", 400
    if not 1 <= goto <= max(1, store.search.num_pages):
        return "Page out of range.", 400

    page.results.render(store.get_page(goto))
    page.pagination.render(store.search)
    return page.oob(page.results, page.pagination)


@aHTMLResponse
async def servings(request: Request) -> str | tuple[str, int]:
    page: Page = request.app.state.page
    store: StateStore = request.app.state.store

    to = int_param(request, "to")
    if to is None:
        return "Servings must be a number.", 400
    if to < 1:
        return ""
    if store.recipe is None:
        return "No recipe is loaded.", 409

    store.update_servings(to)
    page.recipe.update(store.recipe)
    return page.oob(page.recipe)


@aHTMLResponse
async def bookmark(request: Request) -> str | tuple[str, int]:
    page: Page = request.app.state.page
    store: StateStore = request.app.state.store

    if store.recipe is None:
        return "No recipe is loaded.", 409

    if not store.recipe.bookmarked:
        store.add_bookmark(store.recipe)
    else:
        store.delete_bookmark(store.recipe.id)

    page.recipe.update(store.recipe)
    page.bookmarks.render(list(store.bookmarks))
    return page.oob(page.recipe, page.bookmarks)


@aHTMLResponse
async def bookmarks(request: Request) -> str:
    page: Page = request.app.state.page
    store: StateStore = request.app.state.store
    page.bookmarks.render(list(store.bookmarks))
    return page.oob(page.bookmarks)


async def upload(request: Request) -> HTMLResponse:
    page: Page = request.app.state.page
    store: StateStore = request.app.state.store

    match request.method.lower():
        case "get":
            page.upload.render(BLANK_DRAFT)
            return HTMLResponse(page.oob(page.upload))
        case "post":
            async with request.form() as form:
                draft = {name: str(value) for name, value in form.items()}

            page.upload.render_spinner()
            try:
                new_recipe = await store.upload_recipe(draft)
            except ForkifyError as e:
                logger.error("Upload failed: %s", e)
                page.upload.render_error(str(e))
                return HTMLResponse(page.oob(page.upload))

            page.recipe.render(new_recipe)
            page.upload.render_message()
            page.bookmarks.render(list(store.bookmarks))
            resp = HTMLResponse(page.oob(page.recipe, page.upload, page.bookmarks))
            page.location.push(resp, new_recipe.id)
            return resp
        case _:
            raise ValueError("Unsupported method.")


def create_app(
    cfg: config.Config | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    storage: BookmarkStorage | None = None,
) -> Starlette:
    cfg = CONFIG if cfg is None else cfg

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        configure_logging(cfg.log_level)
        gateway = Gateway(
            catalog_client_factory(cfg.api_url, transport=transport),
            api_key=cfg.api_key,
            timeout_sec=cfg.timeout_sec,
        )
        repository = BookmarkRepository(
            JsonFileBookmarkStorage(cfg.bookmarks_dir) if storage is None else storage
        )
        app.state.store = StateStore.create(
            gateway=gateway,
            repository=repository,
            results_per_page=cfg.results_per_page,
        )
        app.state.page = Page(templates_factory(cfg.html_dir, icons_url=cfg.icons_url))
        app.state.page.start(app.state.store)
        yield
        await gateway.aclose()

    return Starlette(
        debug=True if cfg.env == config.Env.local else False,
        routes=[
            Route("/", homepage),
            Route("/recipe", recipe),
            Route("/search", search),
            Route("/page", pagination),
            Route("/servings", servings, methods=["POST"]),
            Route("/bookmark", bookmark, methods=["POST"]),
            Route("/bookmarks", bookmarks),
            Route("/upload", upload, methods=["GET", "POST"]),
            Mount("/assets", StaticFiles(directory=cfg.assets_dir)),
        ],
        lifespan=lifespan,
    )


app = create_app()
