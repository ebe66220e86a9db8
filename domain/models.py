import math
from typing import Any, Self


class Ingredient:
    def __init__(
        self,
        *,
        quantity: float | None,
        unit: str = "",
        description: str = "",
    ) -> None:
        self.quantity = quantity
        self.unit = unit
        self.description = description

    def __repr__(self) -> str:
        return (
            f"<Ingredient(quantity={self.quantity}, unit={self.unit}, "
            f"description={self.description})>"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ingredient):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def scale(self, factor: float) -> None:
        if self.quantity is not None:
            self.quantity = self.quantity * factor

    def to_dict(self) -> dict[str, Any]:
        return {
            "quantity": self.quantity,
            "unit": self.unit,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        quantity = data.get("quantity")
        return cls(
            quantity=None if quantity is None else float(quantity),
            unit=data.get("unit") or "",
            description=data.get("description") or "",
        )


class Recipe:
    """The active recipe, or a bookmarked copy of one.

    Field names are the Python ones; `from_api` and `to_api` translate to and
    from the catalog's snake_case wire keys (`image_url`, `cooking_time` ...).
    """

    def __init__(
        self,
        *,
        id: str,
        title: str,
        publisher: str,
        source_url: str,
        image: str,
        servings: int,
        cooking_time: int,
        ingredients: list[Ingredient],
        bookmarked: bool = False,
        key: str | None = None,
    ) -> None:
        self.id = id
        self.title = title
        self.publisher = publisher
        self.source_url = source_url
        self.image = image
        self.servings = servings
        self.cooking_time = cooking_time
        self.ingredients = ingredients
        self.bookmarked = bookmarked
        self.key = key

    def __repr__(self) -> str:
        return f"<Recipe(id={self.id}, title={self.title})>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Recipe):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def copy(self) -> "Recipe":
        return Recipe.from_dict(self.to_dict())

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "publisher": self.publisher,
            "sourceUrl": self.source_url,
            "image": self.image,
            "servings": self.servings,
            "cookingTime": self.cooking_time,
            "ingredients": [i.to_dict() for i in self.ingredients],
            "bookmarked": self.bookmarked,
        }
        if self.key:
            data["key"] = self.key
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            publisher=data.get("publisher", ""),
            source_url=data.get("sourceUrl", ""),
            image=data.get("image", ""),
            servings=int(data.get("servings", 1)),
            cooking_time=int(data.get("cookingTime", 0)),
            ingredients=[Ingredient.from_dict(i) for i in data.get("ingredients", [])],
            bookmarked=bool(data.get("bookmarked", False)),
            key=data.get("key"),
        )

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Self:
        """Build from the `recipe` object of a catalog response."""
        servings = int(data["servings"])
        if servings < 1:
            raise ValueError(f"Recipe {data['id']} has {servings} servings.")
        cooking_time = int(data["cooking_time"])
        if cooking_time < 0:
            raise ValueError(f"Recipe {data['id']} has a negative cooking time.")
        return cls(
            id=data["id"],
            title=data["title"],
            publisher=data["publisher"],
            source_url=data["source_url"],
            image=data["image_url"],
            servings=servings,
            cooking_time=cooking_time,
            ingredients=[Ingredient.from_dict(i) for i in data["ingredients"]],
            key=data.get("key"),
        )


class RecipeSummary:
    """Search result entry. Read only once built."""

    __slots__ = ("_id", "_title", "_publisher", "_image", "_key")

    def __init__(
        self,
        *,
        id: str,
        title: str,
        publisher: str,
        image: str,
        key: str | None = None,
    ) -> None:
        self._id = id
        self._title = title
        self._publisher = publisher
        self._image = image
        self._key = key

    @property
    def id(self) -> str:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @property
    def publisher(self) -> str:
        return self._publisher

    @property
    def image(self) -> str:
        return self._image

    @property
    def key(self) -> str | None:
        return self._key

    def __repr__(self) -> str:
        return f"<RecipeSummary(id={self.id}, title={self.title})>"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=data["id"],
            title=data["title"],
            publisher=data["publisher"],
            image=data["image_url"],
            key=data.get("key"),
        )


class SearchState:
    def __init__(self, *, results_per_page: int) -> None:
        if results_per_page < 1:
            raise ValueError("results_per_page must be positive.")
        self.query = ""
        self.results: list[RecipeSummary] = []
        self.current_page = 1
        self.results_per_page = results_per_page

    def __repr__(self) -> str:
        return (
            f"<SearchState(query={self.query}, results={len(self.results)}, "
            f"current_page={self.current_page})>"
        )

    @property
    def num_pages(self) -> int:
        return math.ceil(len(self.results) / self.results_per_page)
