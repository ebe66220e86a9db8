import copy
import json
from typing import Any

import httpx
import pytest

from domain.gateway import Gateway, catalog_client_factory
from domain.repository import BookmarkRepository, InMemoryBookmarkStorage
from domain.store import StateStore


BASE_URL = "https://catalog.test/api/v2/recipes/"
API_KEY = "test-key"
RECIPE_ID = "5ed6604591c37cdc054bc886"


def recipe_payload(id: str = RECIPE_ID, **overrides: Any) -> dict[str, Any]:
    recipe = {
        "id": id,
        "title": "Spicy Chicken and Pepper Jack Pizza",
        "publisher": "My Baking Addiction",
        "source_url": "http://www.mybakingaddiction.com/spicy-chicken-pizza",
        "image_url": "http://forkify-api.herokuapp.com/images/FlatBread21of1a180.jpg",
        "servings": 4,
        "cooking_time": 45,
        "ingredients": [
            {"quantity": 1.5, "unit": "kg", "description": "flour"},
            {"quantity": None, "unit": "", "description": "salt"},
            {"quantity": 0.5, "unit": "cup", "description": "milk"},
        ],
    }
    recipe.update(overrides)
    return recipe


def summary_payload(n: int) -> dict[str, Any]:
    return {
        "id": f"recipe-{n}",
        "title": f"Pizza number {n}",
        "publisher": "Closet Cooking",
        "image_url": f"http://forkify-api.herokuapp.com/images/{n}.jpg",
    }


class FakeCatalog:
    """Stands in for the remote catalog behind an `httpx.MockTransport`."""

    def __init__(self) -> None:
        self.recipes: dict[str, dict[str, Any]] = {RECIPE_ID: recipe_payload()}
        self.search_results: list[dict[str, Any]] = []
        self.uploads: list[dict[str, Any]] = []
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.method == "POST":
            body = json.loads(request.content)
            self.uploads.append(body)
            recipe = {**body, "id": "uploaded-1", "key": request.url.params["key"]}
            return httpx.Response(
                201, json={"status": "success", "data": {"recipe": recipe}}
            )

        id = request.url.path.rsplit("/", 1)[-1]
        if not id:
            return httpx.Response(
                200,
                json={
                    "status": "success",
                    "results": len(self.search_results),
                    "data": {"recipes": self.search_results},
                },
            )
        if id in self.recipes:
            return httpx.Response(
                200,
                json={
                    "status": "success",
                    "data": {"recipe": copy.deepcopy(self.recipes[id])},
                },
            )
        return httpx.Response(
            404, json={"status": "fail", "message": "No recipe found with that ID"}
        )


@pytest.fixture
def catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture
def gateway(catalog: FakeCatalog) -> Gateway:
    client = catalog_client_factory(BASE_URL, transport=httpx.MockTransport(catalog))
    return Gateway(client, api_key=API_KEY)


@pytest.fixture
def storage() -> InMemoryBookmarkStorage:
    return InMemoryBookmarkStorage()


@pytest.fixture
def store(gateway: Gateway, storage: InMemoryBookmarkStorage) -> StateStore:
    return StateStore.create(gateway=gateway, repository=BookmarkRepository(storage))
