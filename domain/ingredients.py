from typing import Any, Mapping

from domain.errors import FormatError
from domain.models import Ingredient


INGREDIENT_PREFIX = "ingredient"


def parse_quantity(field: str, line: str, token: str) -> float | None:
    if not token:
        return None
    try:
        return float(token)
    except ValueError:
        raise FormatError(field, line) from None


def parse_ingredient(line: str, *, field: str = INGREDIENT_PREFIX) -> Ingredient:
    """Parse `quantity,unit,description`. A blank quantity means no quantity."""
    tokens = [t.strip() for t in line.split(",")]
    if len(tokens) != 3:
        raise FormatError(field, line)
    quantity, unit, description = tokens
    return Ingredient(
        quantity=parse_quantity(field, line, quantity),
        unit=unit,
        description=description,
    )


def parse_ingredients(draft: Mapping[str, str]) -> list[Ingredient]:
    """Parse every non-blank `ingredient*` field, in field order."""
    return [
        parse_ingredient(value, field=name)
        for name, value in draft.items()
        if name.startswith(INGREDIENT_PREFIX) and value.strip()
    ]


def parse_whole_number(draft: Mapping[str, str], field: str, *, minimum: int = 0) -> int:
    value = str(draft.get(field, "")).strip()
    expected = "a positive whole number" if minimum > 0 else "a whole number"
    try:
        number = int(value)
    except ValueError:
        raise FormatError(field, value, expected=expected) from None
    if number < minimum:
        raise FormatError(field, value, expected=expected)
    return number


def upload_payload(draft: Mapping[str, str]) -> dict[str, Any]:
    """Normalize the submission form into the catalog's recipe payload."""
    ingredients = parse_ingredients(draft)
    return {
        "title": draft.get("title", ""),
        "source_url": draft.get("sourceUrl", ""),
        "image_url": draft.get("image", ""),
        "publisher": draft.get("publisher", ""),
        "cooking_time": parse_whole_number(draft, "cookingTime"),
        "servings": parse_whole_number(draft, "servings", minimum=1),
        "ingredients": [i.to_dict() for i in ingredients],
    }
