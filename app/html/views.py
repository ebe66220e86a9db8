"""Markup for each region of the page.

Each view is a small object with a template and its messages; the
`Renderer` decides whether that markup replaces or patches the region.
"""
from fractions import Fraction
from pathlib import Path
from typing import Any, Callable, NamedTuple

from jinja2 import Environment, FileSystemLoader, select_autoescape

from domain.models import Recipe, RecipeSummary, SearchState


ICONS_URL = "/assets/img/icons.svg"


def format_quantity(quantity: float | None) -> str:
    """1.5 -> '1 1/2', 0.25 -> '1/4', None -> ''."""
    if quantity is None:
        return ""
    frac = Fraction(quantity).limit_denominator(16)
    whole, rest = divmod(frac.numerator, frac.denominator)
    if not rest:
        return str(whole)
    part = f"{rest}/{frac.denominator}"
    return f"{whole} {part}" if whole else part


def templates_factory(html_dir: Path, *, icons_url: str = ICONS_URL) -> Environment:
    env = Environment(
        loader=FileSystemLoader(html_dir),
        autoescape=select_autoescape(),
    )
    env.filters["quantity"] = format_quantity
    env.globals["icons"] = icons_url
    return env


class RecipeView:
    default_message = "Start by searching for a recipe or an ingredient. Have fun!"
    error_message = "We could not find that recipe. Please try another one!"

    def __init__(
        self,
        *,
        environment: Environment,
        template_name: str = "recipe.html",
    ) -> None:
        self.env = environment
        self.name = template_name

    def generate_markup(self, data: Recipe) -> str:
        return self.env.get_template(self.name).render(recipe=data)


class PreviewListView:
    """Recipe previews linking to `#id`; the active recipe is highlighted."""

    def __init__(
        self,
        *,
        environment: Environment,
        default_message: str,
        error_message: str,
        active_id: Callable[[], str | None] = lambda: None,
        template_name: str = "preview-list.html",
    ) -> None:
        self.env = environment
        self.default_message = default_message
        self.error_message = error_message
        self.active_id = active_id
        self.name = template_name

    def generate_markup(self, data: list[RecipeSummary] | list[Recipe]) -> str:
        return self.env.get_template(self.name).render(
            previews=data,
            active_id=self.active_id(),
        )


def results_view(environment: Environment, **kwargs: Any) -> PreviewListView:
    return PreviewListView(
        environment=environment,
        default_message="",
        error_message="No recipes found for your query! Please try again ;)",
        **kwargs,
    )


def bookmarks_view(environment: Environment, **kwargs: Any) -> PreviewListView:
    return PreviewListView(
        environment=environment,
        default_message="",
        error_message="No bookmarks yet. Find a nice recipe and bookmark it ;)",
        **kwargs,
    )


class PageControl(NamedTuple):
    direction: str
    goto: int


def pagination_controls(current_page: int, num_pages: int) -> list[PageControl]:
    back = PageControl("prev", current_page - 1)
    forward = PageControl("next", current_page + 1)
    if num_pages <= 1:
        return []
    if current_page == 1:
        return [forward]
    if current_page == num_pages:
        return [back]
    if 1 < current_page < num_pages:
        return [back, forward]
    return []


class PaginationView:
    default_message = ""
    error_message = ""

    def __init__(
        self,
        *,
        environment: Environment,
        template_name: str = "pagination.html",
    ) -> None:
        self.env = environment
        self.name = template_name

    def generate_markup(self, data: SearchState) -> str:
        controls = pagination_controls(data.current_page, data.num_pages)
        return self.env.get_template(self.name).render(controls=controls)


BLANK_DRAFT = {
    "title": "",
    "sourceUrl": "",
    "image": "",
    "publisher": "",
    "cookingTime": "",
    "servings": "",
}


class UploadView:
    default_message = "Recipe was successfully uploaded :)"
    error_message = "The recipe could not be uploaded. Please try again!"

    def __init__(
        self,
        *,
        environment: Environment,
        template_name: str = "upload-form.html",
        ingredient_fields: int = 6,
    ) -> None:
        self.env = environment
        self.name = template_name
        self.ingredient_fields = ingredient_fields

    def generate_markup(self, data: dict[str, str]) -> str:
        return self.env.get_template(self.name).render(
            draft=data,
            ingredient_fields=self.ingredient_fields,
        )
