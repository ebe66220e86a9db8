"""Application state: the active recipe, the search and the bookmarks.

The store is built explicitly and handed to whatever needs it. It is only
touched from the event loop, so there is no locking. Two overlapping loads
are not ordered: whichever settles last becomes the active recipe.
"""
import logging
from typing import Any, Mapping, Self

from domain.errors import NetworkError, RecipeNotLoadedError
from domain.gateway import Gateway
from domain.ingredients import upload_payload
from domain.models import Recipe, RecipeSummary, SearchState
from domain.repository import BookmarkRepository


logger = logging.getLogger(__name__)


RESULTS_PER_PAGE = 10


class StateStore:
    def __init__(
        self,
        *,
        gateway: Gateway,
        repository: BookmarkRepository,
        results_per_page: int = RESULTS_PER_PAGE,
    ) -> None:
        self.gateway = gateway
        self.repository = repository
        self.recipe: Recipe | None = None
        self.search = SearchState(results_per_page=results_per_page)
        self._bookmarks: list[Recipe] = []

    @classmethod
    def create(
        cls,
        *,
        gateway: Gateway,
        repository: BookmarkRepository,
        results_per_page: int = RESULTS_PER_PAGE,
    ) -> Self:
        store = cls(
            gateway=gateway,
            repository=repository,
            results_per_page=results_per_page,
        )
        store.hydrate()
        return store

    def hydrate(self) -> None:
        self._bookmarks = self.repository.load()
        logger.info("Hydrated %d bookmarks.", len(self._bookmarks))

    @property
    def bookmarks(self) -> tuple[Recipe, ...]:
        return tuple(self._bookmarks)

    def is_bookmarked(self, id: str) -> bool:
        return any(b.id == id for b in self._bookmarks)

    def _persist(self) -> None:
        self.repository.save(self._bookmarks)

    async def load_recipe(self, id: str) -> Recipe:
        data = await self.gateway.call(id)
        recipe = recipe_from_response(data)
        recipe.bookmarked = self.is_bookmarked(recipe.id)
        self.recipe = recipe
        logger.info("Loaded recipe %s.", recipe.id)
        return recipe

    async def load_search_results(self, query: str) -> list[RecipeSummary]:
        # The query sticks even when the request below fails.
        self.search.query = query
        data = await self.gateway.call("", params={"search": query})
        self.search.results = summaries_from_response(data)
        self.search.current_page = 1
        logger.info("Search %r found %d recipes.", query, len(self.search.results))
        return self.search.results

    def get_page(self, page: int | None = None) -> list[RecipeSummary]:
        page = self.search.current_page if page is None else page
        self.search.current_page = page
        start = (page - 1) * self.search.results_per_page
        end = page * self.search.results_per_page
        return self.search.results[max(start, 0) : max(end, 0)]

    def update_servings(self, servings: int) -> None:
        if self.recipe is None:
            raise RecipeNotLoadedError("No recipe is loaded.")
        if servings < 1:
            raise ValueError(f"Servings must be positive, got {servings}.")
        factor = servings / self.recipe.servings
        for ingredient in self.recipe.ingredients:
            ingredient.scale(factor)
        self.recipe.servings = servings

    def add_bookmark(self, recipe: Recipe) -> None:
        if self.is_bookmarked(recipe.id):
            logger.debug("Recipe %s is already bookmarked.", recipe.id)
            return
        if self.recipe is not None and self.recipe.id == recipe.id:
            self.recipe.bookmarked = True
        bookmark = recipe.copy()
        bookmark.bookmarked = True
        self._bookmarks.append(bookmark)
        self._persist()

    def delete_bookmark(self, id: str) -> None:
        remaining = [b for b in self._bookmarks if b.id != id]
        if len(remaining) == len(self._bookmarks):
            logger.debug("Recipe %s was not bookmarked.", id)
        self._bookmarks = remaining
        if self.recipe is not None and self.recipe.id == id:
            self.recipe.bookmarked = False
        self._persist()

    async def upload_recipe(self, draft: Mapping[str, str]) -> Recipe:
        payload = upload_payload(draft)
        data = await self.gateway.call("", payload)
        self.recipe = recipe_from_response(data)
        logger.info("Uploaded recipe %s.", self.recipe.id)
        self.add_bookmark(self.recipe)
        return self.recipe


def recipe_from_response(data: dict[str, Any]) -> Recipe:
    try:
        return Recipe.from_api(data["data"]["recipe"])
    except (KeyError, TypeError, ValueError) as e:
        raise NetworkError(f"Malformed recipe in response: {e!r}") from e


def summaries_from_response(data: dict[str, Any]) -> list[RecipeSummary]:
    try:
        return [RecipeSummary.from_api(r) for r in data["data"]["recipes"]]
    except (KeyError, TypeError) as e:
        raise NetworkError(f"Malformed search results in response: {e!r}") from e
