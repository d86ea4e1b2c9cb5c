"""Unit tests for task to feature matching."""

import pytest

from flowguard.matching import (
    added_features,
    is_expansion_task,
    is_initial_task,
    is_related,
)

INITIAL = ["User Authentication", "Dashboard", "Payments Integration", "Notifications", "Settings Page"]
CURRENT = INITIAL + ["Dark Mode", "Analytics Module", "AI Recommendations", "Export to CSV"]


@pytest.mark.parametrize(
    "text,feature",
    [
        ("Dashboard", "dashboard"),
        ("Design new Dashboard UI", "Dashboard"),
        ("Analytics Module Backend", "Analytics Module"),
        ("AI Recommendations engine", "AI Recommendations"),
        ("Write unit tests for Auth", "auth"),
        ("Stripe payments", "Payments Integration"),
    ],
)
def test_is_related(text, feature):
    assert is_related(text, feature)


@pytest.mark.parametrize(
    "text,feature",
    [
        ("Deploy to staging", "Dark Mode"),
        ("Write unit tests for Auth", "User Authentication"),
        ("Fix the theme toggle", "Dark Mode"),
    ],
)
def test_is_not_related(text, feature):
    assert not is_related(text, feature)


def test_long_feature_needs_two_shared_words():
    feature = "Realtime Team Collaboration Workspace Sharing"

    assert not is_related("Sharing links", feature)
    assert is_related("Workspace sharing links", feature)


def test_punctuation_is_ignored():
    assert is_related("Export-to-CSV button!", "Export to CSV") is False
    assert is_related("Export to CSV!", "export to csv")


def test_added_features_keeps_current_order():
    assert added_features(INITIAL, CURRENT) == [
        "Dark Mode", "Analytics Module", "AI Recommendations", "Export to CSV",
    ]


def test_is_initial_task():
    assert is_initial_task("Design new Dashboard UI", INITIAL)
    assert not is_initial_task("Analytics Module Backend", INITIAL)


def test_every_task_is_initial_without_features():
    assert is_initial_task("Anything at all", [])


def test_is_expansion_task():
    assert is_expansion_task("Analytics Module Backend", INITIAL, CURRENT)
    assert is_expansion_task("AI Recommendations engine", INITIAL, CURRENT)
    assert not is_expansion_task("Implement Payments API", INITIAL, CURRENT)
    assert not is_expansion_task("Deploy to staging", INITIAL, CURRENT)


def test_task_matching_both_scopes_is_initial():
    current = INITIAL + ["Dashboard Analytics"]

    assert not is_expansion_task("Dashboard analytics widgets", INITIAL, current)


def test_no_expansion_without_features():
    assert not is_expansion_task("Analytics Module Backend", [], CURRENT)
    assert not is_expansion_task("Analytics Module Backend", INITIAL, [])
    assert not is_expansion_task("Analytics Module Backend", INITIAL, INITIAL)
