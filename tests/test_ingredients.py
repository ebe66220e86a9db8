import pytest

from domain.errors import FormatError
from domain.ingredients import parse_ingredient, parse_ingredients, upload_payload
from domain.models import Ingredient


@pytest.mark.parametrize(
    "line,expected",
    (
        ("2,kg,flour", Ingredient(quantity=2, unit="kg", description="flour")),
        (",kg,flour", Ingredient(quantity=None, unit="kg", description="flour")),
        (" 0.5 , cup , whole milk ", Ingredient(quantity=0.5, unit="cup", description="whole milk")),
        ("1,,egg", Ingredient(quantity=1, unit="", description="egg")),
    ),
)
def test_parse_ingredient(line: str, expected: Ingredient) -> None:
    assert parse_ingredient(line) == expected


@pytest.mark.parametrize("line", ("2,kg", "2,kg,flour,sifted", "flour", "two,kg,flour"))
def test_parse_ingredient_wrong_format(line: str) -> None:
    with pytest.raises(FormatError) as exc:
        parse_ingredient(line, field="ingredient-3")
    assert exc.value.field == "ingredient-3"
    assert "ingredient-3" in str(exc.value)


def test_parse_ingredients_skips_blank_fields_and_keeps_order() -> None:
    draft = {
        "title": "Soup",
        "ingredient-1": "1,l,water",
        "ingredient-2": "",
        "ingredient-3": "  ",
        "ingredient-4": ",,salt",
    }
    got = parse_ingredients(draft)
    assert [i.description for i in got] == ["water", "salt"]


def test_upload_payload() -> None:
    draft = {
        "title": "Soup",
        "sourceUrl": "https://soup.test",
        "image": "https://soup.test/soup.jpg",
        "publisher": "Me",
        "cookingTime": "20",
        "servings": "2",
        "ingredient-1": "1,l,water",
    }
    assert upload_payload(draft) == {
        "title": "Soup",
        "source_url": "https://soup.test",
        "image_url": "https://soup.test/soup.jpg",
        "publisher": "Me",
        "cooking_time": 20,
        "servings": 2,
        "ingredients": [{"quantity": 1.0, "unit": "l", "description": "water"}],
    }


def test_upload_payload_rejects_non_numeric_servings() -> None:
    with pytest.raises(FormatError) as exc:
        upload_payload({"cookingTime": "20", "servings": "a few"})
    assert exc.value.field == "servings"


@pytest.mark.parametrize(
    "field,value",
    (("servings", "0"), ("servings", "-1"), ("cookingTime", "-5")),
)
def test_upload_payload_rejects_out_of_range_numbers(field: str, value: str) -> None:
    draft = {"cookingTime": "20", "servings": "2", field: value}
    with pytest.raises(FormatError) as exc:
        upload_payload(draft)
    assert exc.value.field == field


def test_upload_payload_allows_zero_cooking_time() -> None:
    assert upload_payload({"cookingTime": "0", "servings": "1"})["cooking_time"] == 0
