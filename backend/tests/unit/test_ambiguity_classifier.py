"""Unit tests for AmbiguityClassifier."""

import pytest

from chatbot.application.services.ambiguity_classifier import AmbiguityClassifier


@pytest.fixture
def classifier():
    return AmbiguityClassifier(("Saludo", "agradecimiento"))


def test_confident_match(classifier):
    verdict = classifier.classify(0.8, "1", "Smog")
    assert not verdict.is_ambiguous
    assert not verdict.is_out_of_domain


def test_nothing_resolved_is_out_of_domain(classifier):
    verdict = classifier.classify(0.1, None, None)
    assert verdict.is_ambiguous
    assert verdict.is_out_of_domain


def test_weak_generic_subtopic_is_out_of_domain(classifier):
    verdict = classifier.classify(0.1, "3", "saludo")
    assert verdict.is_out_of_domain
    assert not verdict.is_ambiguous


def test_topic_without_subtopic_and_low_score_is_ambiguous(classifier):
    verdict = classifier.classify(0.2, "1", None)
    assert verdict.is_ambiguous
    assert not verdict.is_out_of_domain


def test_missing_topic_is_always_ambiguous(classifier):
    assert classifier.classify(0.9, None, "Smog").is_ambiguous


def test_thresholds_are_configurable():
    strict = AmbiguityClassifier(out_of_domain_threshold=0.5)
    assert strict.classify(0.4, None, None).is_out_of_domain


@pytest.mark.parametrize(
    "topic_id, subtopic",
    [(None, None), ("1", None), (None, "Smog"), ("1", "Smog"), ("3", "Saludo")],
)
def test_out_of_domain_is_monotonic_in_score(classifier, topic_id, subtopic):
    scores = [1.0, 0.5, 0.3, 0.2, 0.15, 0.149, 0.1, 0.0]
    flags = [classifier.classify(s, topic_id, subtopic).is_out_of_domain for s in scores]
    # Once a lower score turns it on, every lower score keeps it on.
    first_on = flags.index(True) if True in flags else len(flags)
    assert all(flags[first_on:])
