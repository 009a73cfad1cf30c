"""Text normalization for Spanish user queries.

Three levels of cleaning are used across the pipeline:
  1. ``fold``       — lowercase + diacritics stripped (NFD, combining marks removed).
  2. ``tokenize``   — fold, then non-word characters removed and split on whitespace.
  3. ``normalize``  — tokenize, then every token depluralized, re-joined with spaces.

``correct_misspellings`` runs before any of them, on the raw text.
"""

import logging
import re
import unicodedata

logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")

# Consonants after which a Spanish plural takes "-es" (motor → motores).
_ES_PLURAL_STEMS = frozenset("lrndjy")

# Words ending in "s" that are not plurals, or whose singular is identical.
_INVARIANT = frozenset({
    "analisis", "antes", "atlas", "bus", "caries", "crisis", "despues",
    "diabetes", "dosis", "gas", "gratis", "jamas", "jueves", "lunes",
    "martes", "mas", "menos", "miercoles", "paraguas", "pues", "quizas",
    "sintesis", "tesis", "tras", "virus", "viernes", "ademas", "atras",
    "tos", "asi", "entonces", "apenas",
})

_MIN_PLURAL_LENGTH = 5


class TextNormalizer:
    """Pure text-cleaning helpers; holds only the misspelling table."""

    def __init__(self, misspellings: tuple[tuple[str, str], ...] = ()):
        self._misspellings = misspellings

    # ── Public API ───────────────────────────────────────────────────

    @staticmethod
    def fold(text: str) -> str:
        """Lowercase and strip combining diacritical marks."""
        decomposed = unicodedata.normalize("NFD", (text or "").lower())
        return "".join(ch for ch in decomposed if not unicodedata.combining(ch))

    @classmethod
    def tokenize(cls, text: str) -> list[str]:
        """Fold, drop non-word characters and split on whitespace."""
        cleaned = _NON_WORD.sub("", cls.fold(text))
        return [token for token in _WHITESPACE.split(cleaned) if token]

    @classmethod
    def normalize(cls, text: str) -> str:
        """Full normalization: folded, punctuation-free, depluralized.

        Idempotent: ``normalize(normalize(x)) == normalize(x)``.
        """
        return " ".join(cls.singularize(token) for token in cls.tokenize(text))

    @staticmethod
    def singularize(token: str) -> str:
        """Depluralize one folded token with the regular Spanish plural rules."""
        if len(token) < _MIN_PLURAL_LENGTH or token in _INVARIANT or not token.endswith("s"):
            return token
        if token.endswith("ces"):
            return token[:-3] + "z"  # luces → luz
        if token.endswith("es") and token[-3] in _ES_PLURAL_STEMS:
            return token[:-2]  # ciudades → ciudad
        if token[-2] in "aeiou":
            return token[:-1]  # particulas → particula
        return token

    def correct_misspellings(self, text: str) -> str:
        """Rewrite the first known malformed phrase found in ``text``.

        Detection compares folded text; the replacement is applied to the
        original text, case-insensitively, for every occurrence of that one
        phrase. Later table entries are not considered once one matches.
        """
        folded = self.fold(text)
        for malformed, corrected in self._misspellings:
            if self.fold(malformed) in folded:
                rewritten = re.sub(re.escape(malformed), corrected, text, flags=re.IGNORECASE)
                logger.debug("Misspelling corrected: %r → %r (%r)", malformed, corrected, rewritten)
                return rewritten
        return text
