"""Ambiguity and out-of-domain flags from the accumulated evidence."""

from dataclasses import dataclass

from chatbot.application.services.text_normalizer import TextNormalizer


@dataclass(frozen=True)
class AmbiguityVerdict:
    is_ambiguous: bool
    is_out_of_domain: bool


class AmbiguityClassifier:
    """Computes two independent booleans; never raises.

    Out-of-domain is monotonic in the score: with topic and subtopic fixed,
    lowering the score can only turn it on.
    """

    def __init__(
        self,
        generic_subtopics: tuple[str, ...] = (),
        *,
        ambiguity_threshold: float = 0.3,
        out_of_domain_threshold: float = 0.15,
    ):
        self._generic = frozenset(TextNormalizer.fold(s).strip() for s in generic_subtopics)
        self._ambiguity_threshold = ambiguity_threshold
        self._out_of_domain_threshold = out_of_domain_threshold

    def classify(
        self,
        score: float,
        topic_id: str | None,
        subtopic: str | None,
    ) -> AmbiguityVerdict:
        weak = score < self._out_of_domain_threshold
        is_ambiguous = topic_id is None or (score < self._ambiguity_threshold and not subtopic)
        is_generic = bool(subtopic) and TextNormalizer.fold(subtopic).strip() in self._generic
        is_out_of_domain = (topic_id is None and not subtopic and weak) or (is_generic and weak)
        return AmbiguityVerdict(is_ambiguous=is_ambiguous, is_out_of_domain=is_out_of_domain)
