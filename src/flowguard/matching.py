"""Associating tasks with feature names.

All feature/task association goes through :func:`is_related`, so the
heuristic can be swapped without touching the prioritizer or the gate.
"""

import re
from typing import Iterable, List, Sequence

_NON_ALNUM = re.compile(r"[^a-z0-9 ]")


def _normalize(text: str) -> str:
    return _NON_ALNUM.sub("", text.lower())


def _significant_words(text: str) -> List[str]:
    return [w for w in text.split(" ") if len(w) > 3]


def is_related(text: str, feature: str) -> bool:
    """Return True if a task title plausibly belongs to a feature.

    Matching ignores case and punctuation. A title is related to a feature
    when either one contains the other. Otherwise the words longer than three
    characters are compared: one shared word is enough for short feature
    names (three significant words or fewer), longer names need two.

    Args:
        text: Task title
        feature: Feature name

    Returns:
        Whether the two are related
    """
    t = _normalize(text)
    f = _normalize(feature)

    if f in t or t in f:
        return True

    t_words = _significant_words(t)
    f_words = _significant_words(f)
    overlap = [w for w in t_words if w in f_words]

    if overlap and len(f_words) <= 3:
        return True
    return len(overlap) >= 2


def added_features(initial: Sequence[str], current: Sequence[str]) -> List[str]:
    """Features in ``current`` that are not in ``initial``, in ``current`` order."""
    baseline = set(initial)
    return [f for f in current if f not in baseline]


def related_to_any(text: str, features: Iterable[str]) -> bool:
    return any(is_related(text, f) for f in features)


def is_initial_task(title: str, initial_features: Sequence[str]) -> bool:
    """Whether a task belongs to the initial scope.

    With no initial features every task counts as initial.
    """
    if not initial_features:
        return True
    return related_to_any(title, initial_features)


def is_expansion_task(
    title: str,
    initial_features: Sequence[str],
    current_features: Sequence[str],
) -> bool:
    """Whether a task belongs only to scope added after the baseline.

    A task related to both an added and an initial feature counts as initial.
    """
    if not initial_features or not current_features:
        return False

    added = added_features(initial_features, current_features)
    if not added:
        return False

    return related_to_any(title, added) and not related_to_any(title, initial_features)
