"""
Approximate string matching between patient wording and canonical symptoms.

Lower-casing, whitespace splitting and Levenshtein distance only; there is
no stemming or transliteration.
"""

from rapidfuzz.distance import Levenshtein

DEFAULT_SIMILARITY_THRESHOLD = 0.8


def normalize(text: str) -> str:
    """Lower-case and collapse runs of whitespace."""
    return " ".join(text.lower().split())


def tokenize(text: str) -> list[str]:
    """Split normalized text into words."""
    return normalize(text).split()


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit insertion, deletion and substitution cost."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Normalized similarity in [0, 1]; two empty strings are identical."""
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return 1.0 - edit_distance(a, b) / max_len


def matches(
    input_token: str,
    symptom_token: str,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD
) -> bool:
    """True if either token contains the other or they are near-identical."""
    a = normalize(input_token)
    b = normalize(symptom_token)
    if not a or not b:
        return False
    if a in b or b in a:
        return True
    return similarity(a, b) > threshold


def phrase_matches(
    query_phrase: str,
    symptom_name: str,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD
) -> bool:
    """
    Word-level match of a reported phrase against a canonical symptom name.

    The phrase matches if any of its words matches any word of the name.
    """
    symptom_words = tokenize(symptom_name)
    return any(
        matches(query_word, symptom_word, threshold)
        for query_word in tokenize(query_phrase)
        for symptom_word in symptom_words
    )


def text_overlaps(a: str, b: str) -> bool:
    """Case-insensitive substring test in either direction."""
    a_norm = normalize(a)
    b_norm = normalize(b)
    if not a_norm or not b_norm:
        return False
    return a_norm in b_norm or b_norm in a_norm
