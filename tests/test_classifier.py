"""Unit tests for the flood-risk classifier."""

from __future__ import annotations

import pytest

from services.classifier import RiskStatus, StatusClassifier


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        (0.0, RiskStatus.SAFE),
        (39.99, RiskStatus.SAFE),
        (40.0, RiskStatus.WARNING),
        (55.0, RiskStatus.WARNING),
        (69.999, RiskStatus.WARNING),
        (70.0, RiskStatus.DANGER),
        (250.0, RiskStatus.DANGER),
    ],
)
def test_classify_tiers(level: float, expected: RiskStatus) -> None:
    assert StatusClassifier().classify(level) is expected


def test_boundaries_belong_to_higher_tier() -> None:
    classifier = StatusClassifier()

    assert classifier.classify(40) is not RiskStatus.SAFE
    assert classifier.classify(70) is not RiskStatus.WARNING


def test_classify_is_total_over_negative_levels() -> None:
    assert StatusClassifier().classify(-5.0) is RiskStatus.SAFE


def test_oscillating_level_flips_without_hysteresis() -> None:
    classifier = StatusClassifier()

    statuses = [classifier.classify(level) for level in (69.5, 70.0, 69.5, 70.0)]

    assert statuses == [
        RiskStatus.WARNING,
        RiskStatus.DANGER,
        RiskStatus.WARNING,
        RiskStatus.DANGER,
    ]


def test_markers_and_colors() -> None:
    classifier = StatusClassifier()

    markers = classifier.markers()

    assert [(marker.status, marker.level) for marker in markers] == [
        (RiskStatus.WARNING, 40.0),
        (RiskStatus.DANGER, 70.0),
    ]
    assert classifier.color_for(RiskStatus.SAFE) == "#22c55e"
    assert markers[1].color == "#ef4444"


def test_rejects_inverted_thresholds() -> None:
    with pytest.raises(ValueError):
        StatusClassifier(warning_level=80, danger_level=70)
