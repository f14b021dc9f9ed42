"""Tolerant parsing of provider output into recipe candidates.

Generation providers rarely return clean JSON. They wrap it in prose or
markdown fences, leave trailing commas, use single quotes or forget to
quote keys. The parser tries a sequence of extraction strategies, from the
most to the least structurally specific, and repairs common defects with
regular expressions before decoding. Strict decoding is always tried
first so valid JSON is never rewritten.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any

import orjson
from pydantic import ValidationError

from pantry_suggest.observability.logging import get_logger
from pantry_suggest.schemas.enums import RecipeDifficulty
from pantry_suggest.schemas.recipe import (
    CandidateIngredient,
    NutritionEstimate,
    RecipeCandidate,
)
from pantry_suggest.services.suggestions.exceptions import ParseError


logger = get_logger(__name__)

_CODE_FENCE = re.compile(r"```[A-Za-z]*")
_TRAILING_COMMA = re.compile(r",\s*([}\]])")
_SINGLE_QUOTED = re.compile(
    r"(?<=[\[{:,])(\s*)'((?:[^'\\]|\\.)*)'(?=\s*[,:}\]])",
    re.DOTALL,
)
_UNQUOTED_KEY = re.compile(r"([{,]\s*)([A-Za-z_][A-Za-z0-9_]*)\s*:")
_STEP_PREFIX = re.compile(r"^\s*(?:\d+[.)]|[-*•])\s*")


# =============================================================================
# Text helpers
# =============================================================================


def strip_code_fences(text: str) -> str:
    """Remove markdown code fence markers, keeping their content."""
    return _CODE_FENCE.sub("", text).strip()


def _requote(match: re.Match[str]) -> str:
    inner = match.group(2).replace("\\'", "'").replace('"', '\\"')
    return f'{match.group(1)}"{inner}"'


def repair_json(text: str) -> str:
    """Fix single-quoted strings, unquoted keys and trailing commas."""
    text = _SINGLE_QUOTED.sub(_requote, text)
    text = _UNQUOTED_KEY.sub(r'\1"\2":', text)
    return _TRAILING_COMMA.sub(r"\1", text)


def _decode(fragment: str) -> Any:
    """Decode ``fragment`` strictly, then after repair. None if both fail."""
    try:
        return orjson.loads(fragment)
    except orjson.JSONDecodeError:
        pass
    try:
        return orjson.loads(repair_json(fragment))
    except orjson.JSONDecodeError:
        return None


def find_balanced(text: str, start: int) -> int | None:
    """Return the index of the bracket closing the one at ``start``.

    Brackets inside double-quoted strings are ignored. Returns None when
    the bracket is never closed.
    """
    pairs = {"[": "]", "{": "}"}
    stack = [pairs[text[start]]]
    in_string = False
    escaped = False
    for index in range(start + 1, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char in pairs:
            stack.append(pairs[char])
        elif char in ("]", "}"):
            if char != stack[-1]:
                return None
            stack.pop()
            if not stack:
                return index
    return None


def _next_opener(text: str, openers: str, start: int) -> int:
    found = [i for i in (text.find(o, start) for o in openers) if i != -1]
    return min(found, default=-1)


def _top_level_spans(text: str, openers: str) -> list[str]:
    """Every balanced span opened by one of ``openers`` and not nested in another."""
    spans = []
    index = _next_opener(text, openers, 0)
    while index != -1:
        end = find_balanced(text, index)
        if end is None:
            # Everything after an unclosed bracket is nested inside it
            break
        spans.append(text[index : end + 1])
        index = _next_opener(text, openers, end + 1)
    return spans


# =============================================================================
# Record normalization
# =============================================================================


def _unwrap(decoded: Any) -> list[Any]:
    if isinstance(decoded, list):
        return decoded
    if isinstance(decoded, Mapping):
        recipes = decoded.get("recipes")
        if isinstance(recipes, list):
            return recipes
        return [decoded]
    return []


def _text(value: Any) -> str | None:
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _ingredients(value: Any) -> list[CandidateIngredient]:
    if isinstance(value, str):
        value = re.split(r"[\n,]", value)
    if not isinstance(value, list):
        return []

    ingredients = []
    for entry in value:
        if isinstance(entry, Mapping):
            name = _text(entry.get("name") or entry.get("ingredient"))
            amount = _text(entry.get("amount") or entry.get("quantity"))
            unit = _text(entry.get("unit"))
            if amount and unit:
                amount = f"{amount} {unit}"
        else:
            name, amount = _text(entry), None
        if name:
            ingredients.append(
                CandidateIngredient(name=name, amount=amount or "1 serving")
            )
    return ingredients


def _instructions(value: Any) -> list[str]:
    if isinstance(value, str):
        value = value.splitlines()
    if not isinstance(value, list):
        return []
    steps = []
    for entry in value:
        step = _text(entry.get("text") if isinstance(entry, Mapping) else entry)
        if step:
            steps.append(_STEP_PREFIX.sub("", step) or step)
    return steps


def _cook_time(value: Any) -> str | None:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{int(value)} minutes"
    return _text(value)


def _servings(value: Any) -> int:
    try:
        servings = int(value)
    except (TypeError, ValueError):
        return 4
    return servings if servings >= 1 else 4


def _confidence(value: Any) -> float:
    try:
        confidence = float(value)
    except (TypeError, ValueError):
        return 0.8
    return min(max(confidence, 0.0), 1.0)


def _nutrition(value: Any) -> NutritionEstimate | None:
    if not isinstance(value, Mapping):
        return None
    try:
        return NutritionEstimate.model_validate(value)
    except ValidationError:
        return None


def to_candidate(record: Any) -> RecipeCandidate | None:
    """Normalize one decoded record, or None if it is not a usable recipe.

    A record is usable when it has a name, or at least ingredients or
    instructions to go on.
    """
    if not isinstance(record, Mapping):
        return None

    name = _text(record.get("name") or record.get("title"))
    ingredients = _ingredients(record.get("ingredients"))
    instructions = _instructions(record.get("instructions") or record.get("steps"))
    if not name and not (ingredients or instructions):
        return None

    fields: dict[str, Any] = {
        "ingredients": ingredients,
        "instructions": instructions,
        "servings": _servings(record.get("servings", 4)),
        "confidence": _confidence(record.get("confidence", 0.8)),
        "nutrition": _nutrition(record.get("nutrition")),
    }
    if name:
        fields["name"] = name
    cuisine = _text(record.get("cuisine"))
    if cuisine:
        fields["cuisine"] = cuisine
    cook_time = _cook_time(
        record.get("cookTime") or record.get("cook_time") or record.get("cookingTime")
    )
    if cook_time:
        fields["cook_time"] = cook_time
    difficulty = _text(record.get("difficulty"))
    if difficulty and difficulty.lower() == "medium":
        fields["difficulty"] = RecipeDifficulty.MEDIUM

    try:
        return RecipeCandidate(**fields)
    except ValidationError:
        return None


def _candidates(records: list[Any]) -> list[RecipeCandidate]:
    return [c for c in (to_candidate(r) for r in records) if c is not None]


# =============================================================================
# Strategies
# =============================================================================


def _first_array(text: str) -> list[RecipeCandidate]:
    # Arrays nested in an object belong to that object, not to the recipe list
    for span in _top_level_spans(text, "[{"):
        if span[0] != "[":
            continue
        decoded = _decode(span)
        candidates = _candidates(_unwrap(decoded)) if decoded is not None else []
        if candidates:
            return candidates
    return []


def _object_fragments(text: str) -> list[RecipeCandidate]:
    records: list[Any] = []
    for span in _top_level_spans(text, "{"):
        decoded = _decode(span)
        if decoded is not None:
            records.extend(_unwrap(decoded))
    return _candidates(records)


def _outer_span(text: str) -> list[RecipeCandidate]:
    openers = [i for i in (text.find("["), text.find("{")) if i != -1]
    end = max(text.rfind("]"), text.rfind("}"))
    if not openers or end <= min(openers):
        return []
    decoded = _decode(text[min(openers) : end + 1])
    return _candidates(_unwrap(decoded)) if decoded is not None else []


_TEXT_STRATEGIES: tuple[tuple[str, Callable[[str], list[RecipeCandidate]]], ...] = (
    ("first_array", _first_array),
    ("object_fragments", _object_fragments),
    ("outer_span", _outer_span),
)


def parse_recipe_candidates(raw: Any) -> list[RecipeCandidate]:
    """Extract recipe candidates from raw provider output.

    Args:
        raw: Provider output: text, an already-decoded list, or an object
            (optionally wrapping a ``recipes`` list).

    Returns:
        A non-empty list of candidates.

    Raises:
        ParseError: If no strategy yields a usable candidate.
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")

    if isinstance(raw, str):
        text = strip_code_fences(raw)
        for strategy_name, strategy in _TEXT_STRATEGIES:
            candidates = strategy(text)
            if candidates:
                logger.debug(
                    "Parsed provider output",
                    strategy=strategy_name,
                    count=len(candidates),
                )
                return candidates
    elif isinstance(raw, (list, Mapping)):
        candidates = _candidates(_unwrap(raw))
        if candidates:
            logger.debug("Parsed structured provider output", count=len(candidates))
            return candidates

    msg = f"No recipe candidates found in provider output ({type(raw).__name__})"
    raise ParseError(msg)
