"""LLM reply parsing and recipe validation (pure, no I/O)."""

import json
from dataclasses import replace

import pytest

from domain.models import GeneratedRecipe
from domain.exceptions import (
    IncompleteRecipeError,
    MalformedJsonError,
    NoJsonObjectError,
    RecipeParseError,
)
from application.recipe_parser import parse_recipe_reply, validate_recipe

FULL = {
    "name": "Lily and jujube congee",
    "ingredients": ["lily 30g", "5 red dates"],
    "steps": ["Soak the lily", "Simmer with rice"],
    "reason": "Calms the mind",
}


def test_parses_plain_json():
    recipe = parse_recipe_reply(json.dumps(FULL))
    assert recipe.name == FULL["name"]
    assert recipe.ingredients == FULL["ingredients"]
    assert recipe.steps == FULL["steps"]
    assert recipe.reason == FULL["reason"]
    assert recipe.taboo is None and recipe.tags == []


def test_extracts_object_surrounded_by_prose():
    raw = "Sure! Here is your recipe:\n" + json.dumps(FULL) + "\nHope it helps."
    assert parse_recipe_reply(raw).name == FULL["name"]


def test_optional_and_unknown_fields():
    payload = dict(FULL, taboo="Avoid during pregnancy", suitableTime="dinner",
                   tags=["calming"], calories=320)
    recipe = parse_recipe_reply(json.dumps(payload))
    assert recipe.taboo == "Avoid during pregnancy"
    assert recipe.suitable_time == "dinner"
    assert recipe.tags == ["calming"]


def test_wrongly_typed_optional_field_is_dropped():
    recipe = parse_recipe_reply(json.dumps(dict(FULL, tags="calming", taboo=3)))
    assert recipe.tags == []
    assert recipe.taboo is None


@pytest.mark.parametrize("raw", ["", "   ", "no json here", "} inverted {", "only { opening"])
def test_no_json_object(raw):
    with pytest.raises(NoJsonObjectError):
        parse_recipe_reply(raw)


def test_malformed_json_keeps_raw_reply():
    raw = 'prefix {"name": "X", "ingredients": [} suffix'
    with pytest.raises(MalformedJsonError) as excinfo:
        parse_recipe_reply(raw)
    assert excinfo.value.raw_response == raw
    assert isinstance(excinfo.value, RecipeParseError)


@pytest.mark.parametrize("field", ["name", "ingredients", "steps", "reason"])
def test_missing_required_field_is_named(field):
    payload = {k: v for k, v in FULL.items() if k != field}
    with pytest.raises(IncompleteRecipeError) as excinfo:
        parse_recipe_reply(json.dumps(payload))
    assert excinfo.value.field == field


@pytest.mark.parametrize("field,value", [
    ("name", None), ("name", "  "), ("ingredients", []), ("ingredients", None),
    ("steps", []), ("steps", "one step"), ("steps", ["", "  "]), ("ingredients", [None]),
    ("reason", ""),
])
def test_null_or_empty_required_field_is_named(field, value):
    with pytest.raises(IncompleteRecipeError) as excinfo:
        parse_recipe_reply(json.dumps(dict(FULL, **{field: value})))
    assert excinfo.value.field == field


def test_validate_recipe_accepts_complete_recipe_unchanged():
    recipe = GeneratedRecipe(name="X", ingredients=["a"], steps=["s1"], reason="r")
    validate_recipe(recipe)
    assert recipe == GeneratedRecipe(name="X", ingredients=["a"], steps=["s1"], reason="r")


@pytest.mark.parametrize("field,empty", [
    ("name", ""), ("ingredients", []), ("steps", []), ("reason", ""),
])
def test_validate_recipe_names_removed_field(field, empty):
    recipe = GeneratedRecipe(name="X", ingredients=["a"], steps=["s1"], reason="r")
    with pytest.raises(IncompleteRecipeError) as excinfo:
        validate_recipe(replace(recipe, **{field: empty}))
    assert excinfo.value.field == field


def test_blank_list_entries_are_dropped():
    raw = '{"name":"X","ingredients":["a", null],"steps":["s1",""],"reason":"r"}'
    recipe = parse_recipe_reply(raw)
    assert recipe.steps == ["s1"]
    assert recipe.ingredients == ["a"]


def test_required_text_is_kept_verbatim():
    payload = dict(FULL, name=" Lily congee ", steps=["  Soak the lily", "Simmer\t"])
    recipe = parse_recipe_reply(json.dumps(payload))
    assert recipe.name == " Lily congee "
    assert recipe.steps == ["  Soak the lily", "Simmer\t"]
