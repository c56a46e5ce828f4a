import pytest

from app.schemas import Ingredient, Location, RecipeCreate, RecipeUpdate
from app.validation.recipe import ValidationMode, recipe_id_from_title, validate_recipe


def make_recipe(model=RecipeCreate, **overrides):
    data = {
        "title": "Pea Risotto",
        "cook_time": 30,
        "difficulty": "moderate",
        "portion_size": 4,
        "ingredients": [Ingredient(item="arborio rice", quantity=300, unit="g")],
        "location": Location(cook_book="Weeknight Dinners", page=42),
    }
    data.update(overrides)
    return model(**data)


def error_keys(error_objects) -> set[str]:
    keys = set()
    for error in error_objects:
        keys.update(error.error_values or {})
    return keys


def test_valid_recipe() -> None:
    assert validate_recipe(make_recipe()) == []


def test_valid_update_without_title() -> None:
    recipe = make_recipe(RecipeUpdate, title=None)
    assert validate_recipe(recipe, ValidationMode.UPDATE) == []


@pytest.mark.parametrize("difficulty", ("EASY", "Moderate", "hArD"))
def test_difficulty_is_normalised(difficulty) -> None:
    recipe = make_recipe(difficulty=difficulty)
    assert validate_recipe(recipe) == []
    assert recipe.difficulty == difficulty.lower()


def test_invalid_difficulty_is_normalised_and_reported_the_same_way_twice() -> None:
    recipe = make_recipe(difficulty="Tricky")

    first = validate_recipe(recipe)
    second = validate_recipe(recipe)

    assert recipe.difficulty == "tricky"
    assert first == second
    assert [e.error_values for e in first] == [{"difficulty": "tricky"}]


def test_missing_fields_are_grouped() -> None:
    recipe = RecipeCreate(location=Location(link="https://example.com/risotto"))
    errors = validate_recipe(recipe)

    missing = [e for e in errors if e.error == "missing mandatory fields"]
    assert len(missing) == 1
    assert set(missing[0].error_values) == {"cook_time", "ingredients", "portion_size", "title"}
    # empty difficulty is an invalid value rather than a missing field
    assert {e.error for e in errors} == {
        "missing mandatory fields",
        "invalid difficulty, must be one of: easy, moderate, hard",
    }


def test_ingredient_errors_are_indexed() -> None:
    recipe = make_recipe(
        ingredients=[
            Ingredient(item="rice", quantity=300, unit="g"),
            Ingredient(item="", quantity=2),
            Ingredient(item="stock", quantity=1, unit="litre"),
        ],
        extra_ingredients=[Ingredient(item="parmesan", quantity=0, unit="handful")],
    )
    errors = validate_recipe(recipe)

    assert error_keys(errors) == {
        "ingredients.[1].item",
        "ingredients.[2].unit",
        "extra_ingredients.[0].quantity",
        "extra_ingredients.[0].unit",
    }
    unit_errors = [e for e in errors if e.error == "invalid units for ingredient"]
    assert [e.error_values for e in unit_errors] == [
        {"extra_ingredients.[0].unit": "handful"},
        {"ingredients.[2].unit": "litre"},
    ]


def test_negative_quantity_is_allowed() -> None:
    recipe = make_recipe(ingredients=[Ingredient(item="water", quantity=-1, unit="ml")])
    assert validate_recipe(recipe) == []


@pytest.mark.parametrize(
    "location",
    (
        Location(cook_book="Weeknight Dinners", page=1),
        Location(link="https://example.com/risotto"),
    ),
)
def test_location_with_exactly_one_reference_is_accepted(location) -> None:
    assert validate_recipe(make_recipe(location=location)) == []


@pytest.mark.parametrize(
    "location,message",
    (
        (
            Location(cook_book="Weeknight Dinners", page=42, link="https://example.com"),
            "invalid location, provide either a cook book and page or a link, not both",
        ),
        (
            Location(page=42, link="https://example.com"),
            "invalid location, provide either a cook book and page or a link, not both",
        ),
        (
            Location(),
            "missing location, provide either a cook book and page or a link",
        ),
        (
            Location(cook_book="Weeknight Dinners"),
            "invalid location, a cook book reference needs both a cook book and a page greater than 0",
        ),
        (
            Location(page=42),
            "invalid location, a cook book reference needs both a cook book and a page greater than 0",
        ),
        (
            Location(cook_book="Weeknight Dinners", page=-1),
            "invalid location, a cook book reference needs both a cook book and a page greater than 0",
        ),
    ),
)
def test_location_rejected(location, message) -> None:
    errors = validate_recipe(make_recipe(location=location))

    assert len(errors) == 1
    assert errors[0].error == message
    assert errors[0].error_values == {
        "location.cook_book": location.cook_book,
        "location.page": str(location.page),
        "location.link": location.link,
    }


def test_negative_portion_size() -> None:
    errors = validate_recipe(make_recipe(portion_size=-4))
    assert len(errors) == 1
    assert errors[0].error == "invalid portion size, cannot be less than 1"
    assert errors[0].error_values == {"portion_size": "-4"}


def test_negative_cook_time() -> None:
    errors = validate_recipe(make_recipe(cook_time=-10))
    assert [e.error_values for e in errors] == [{"cook_time": "-10"}]


def test_title_missing_on_create() -> None:
    errors = validate_recipe(make_recipe(title=""))
    assert len(errors) == 1
    assert errors[0].error == "missing mandatory fields"
    assert errors[0].error_values == {"title": ""}


def test_title_immutable_on_update() -> None:
    errors = validate_recipe(make_recipe(RecipeUpdate), ValidationMode.UPDATE)
    assert len(errors) == 1
    assert errors[0].error == "not allowed to change the existing title for recipe"
    assert errors[0].error_values == {"title": "Pea Risotto"}


def test_every_violation_reported_in_one_pass() -> None:
    recipe = make_recipe(
        RecipeUpdate,
        cook_time=0,
        difficulty="",
        portion_size=-1,
        ingredients=[Ingredient(item="rice", quantity=1, unit="bucket")],
        location=Location(),
    )
    errors = validate_recipe(recipe, ValidationMode.UPDATE)

    # grouped missing cook_time plus five individual errors
    assert len(errors) == 6
    assert error_keys(errors) == {
        "cook_time",
        "difficulty",
        "ingredients.[0].unit",
        "location.cook_book",
        "location.page",
        "location.link",
        "portion_size",
        "title",
    }


@pytest.mark.parametrize(
    "title,expected",
    (
        ("Pea Risotto", "pea-risotto"),
        ("  Double  Space ", "--double--space-"),
        ("Mum's Chilli", "mum's-chilli"),
        ("lasagne", "lasagne"),
    ),
)
def test_recipe_id_from_title(title, expected) -> None:
    assert recipe_id_from_title(title) == expected
