"""
Allergen vocabulary and label-set helpers.

These are pure functions with no I/O. The same extractor is applied to
ground-truth text and to predicted text so the two sides are always
normalised identically.
"""

from typing import FrozenSet, Iterable, List, Optional

# Official label set, in the order used by prompts and reports.
ALLERGEN_LABELS = (
    "milk", "egg", "peanut", "tree nut",
    "wheat", "soy", "fish", "shellfish", "sesame",
)

EMPTY_SENTINEL = "EMPTY"

AllergenSet = FrozenSet[str]


def extract_allergen_set(text: Optional[str]) -> AllergenSet:
    """
    Canonicalize comma-separated allergen text into a label set.

    Tokens are trimmed and lower-cased; empty tokens and the "empty"
    sentinel are dropped. Tokens outside ALLERGEN_LABELS are kept.

    Args:
        text: Comma-separated allergen text, or None

    Returns:
        Frozen set of normalised tokens (empty for None)
    """
    if text is None:
        return frozenset()

    tokens = (token.strip().lower() for token in text.split(","))
    return frozenset(
        token for token in tokens
        if token and token != EMPTY_SENTINEL.lower()
    )


def approximate_lexical_match(text: Optional[str]) -> List[str]:
    """
    Find vocabulary labels in free model output by substring containment.

    This is deliberately approximate: it is not tokenized, so "shellfish"
    also matches "fish" and "eggplant" matches "egg". Any occurrence of
    "empty" in the text means the model abstained and no labels are
    returned.

    Args:
        text: Raw prediction text from the model

    Returns:
        Matched labels in ALLERGEN_LABELS order
    """
    if not text:
        return []

    lowered = text.lower()
    if EMPTY_SENTINEL.lower() in lowered:
        return []

    return [label for label in ALLERGEN_LABELS if label in lowered]


def format_allergen_text(labels: Iterable[str]) -> str:
    """
    Render labels as the canonical predicted-allergen text.

    Returns "EMPTY" for no labels, otherwise "milk, egg" style text with
    duplicates removed and input order preserved.
    """
    unique = list(dict.fromkeys(labels))
    if not unique:
        return EMPTY_SENTINEL
    return ", ".join(unique)
