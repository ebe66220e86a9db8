import copy

import bs4
from jinja2 import Environment

from app.html.render import Renderer, fragment
from app.html.views import (
    BLANK_DRAFT,
    PaginationView,
    RecipeView,
    UploadView,
    bookmarks_view,
    results_view,
)
from app.navigation import Location
from domain.store import StateStore


class Page:
    """The page document and a renderer per region.

    htmx swaps whole regions out of band, so responses are copies of the
    regions an action touched, tagged with `hx-swap-oob`.
    """

    def __init__(
        self,
        environment: Environment,
        *,
        location: Location | None = None,
    ) -> None:
        self.env = environment
        self.location = Location() if location is None else location
        self.document = fragment(environment.get_template("index.html").render())

        self.recipe = Renderer(
            self.region("recipe"),
            RecipeView(environment=environment),
            env=environment,
        )
        self.results = Renderer(
            self.region("results"),
            results_view(environment, active_id=self.location.active_id),
            env=environment,
        )
        self.pagination = Renderer(
            self.region("pagination"),
            PaginationView(environment=environment),
            env=environment,
        )
        self.bookmarks = Renderer(
            self.region("bookmarks"),
            bookmarks_view(environment, active_id=self.location.active_id),
            env=environment,
        )
        self.upload = Renderer(
            self.region("upload"),
            UploadView(environment=environment),
            env=environment,
        )

    def region(self, id: str) -> bs4.Tag:
        tag = self.document.find(id=id)
        if not isinstance(tag, bs4.Tag):
            raise ValueError(f"Page template has no region #{id}.")
        return tag

    def start(self, store: StateStore) -> None:
        self.recipe.render_message()
        self.bookmarks.render(list(store.bookmarks))
        self.upload.render(BLANK_DRAFT)

    def oob(self, *renderers: Renderer) -> str:
        parts = []
        for renderer in renderers:
            tag = copy.copy(renderer.parent)
            tag["hx-swap-oob"] = "true"
            parts.append(str(tag))
        return "\n".join(parts)

    def __str__(self) -> str:
        return str(self.document)
