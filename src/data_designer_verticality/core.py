# Stylometric verticality scorer.
#
# Extracts deterministic linguistic features from prose (pronoun, punctuation,
# subordination and impersonal-construction rates) and combines them with two
# categorical judgments (metaphor density, anecdote frequency) into a single
# 0-1 "verticality" score: how abstract and impersonal versus concrete and
# personal the writing is. No LLM calls, no I/O.

from __future__ import annotations

import math
import re
from dataclasses import asdict, dataclass
from typing import Literal

MetaphorDensity = Literal["none", "low", "moderate", "high"]
AnecdoteFrequency = Literal["none", "rare", "occasional", "frequent"]

# ---------------------------------------------------------------------------
# Hyperparameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Hyperparameters:
    """Normalization ranges, weights, and judgment scores of the verticality model.

    The defaults are the canonical model; scores are only comparable across
    runs that use the same values.
    """

    words_basis: float = 1000.0
    min_sentence_words: int = 3

    subordination_multiplier: float = 1.5
    subordination_min: float = 1.0
    subordination_max: float = 7.0

    ego_pronoun_range: tuple[float, float] = (0.0, 80.0)
    impersonal_range: tuple[float, float] = (0.0, 20.0)
    subordination_range: tuple[float, float] = (1.0, 7.0)
    semicolon_range: tuple[float, float] = (0.0, 15.0)
    dash_range: tuple[float, float] = (0.0, 20.0)
    question_range: tuple[float, float] = (0.0, 10.0)

    ego_pronoun_weight: float = 0.25
    impersonal_weight: float = 0.15
    subordination_weight: float = 0.15
    semicolon_weight: float = 0.10
    dash_weight: float = 0.10
    question_weight: float = 0.10
    metaphor_weight: float = 0.075
    anecdote_weight: float = 0.075

    metaphor_scores: tuple[tuple[str, float], ...] = (
        ("none", 1.0), ("low", 0.75), ("moderate", 0.5), ("high", 0.0),
    )
    anecdote_scores: tuple[tuple[str, float], ...] = (
        ("none", 1.0), ("rare", 0.75), ("occasional", 0.5), ("frequent", 0.0),
    )
    judgment_fallback_score: float = 0.5

    default_metaphor_density: str = "moderate"
    default_anecdote_frequency: str = "occasional"


DEFAULT_HYPERPARAMETERS = Hyperparameters()

# ---------------------------------------------------------------------------
# Classification tables
# ---------------------------------------------------------------------------

# (minimum score, level, description), evaluated top-down.
ABSTRACTION_LEVELS: tuple[tuple[float, str, str], ...] = (
    (
        0.85,
        "Extreme Abstraction",
        "Prose operates at the level of pure logical relations. No particulars survive. "
        "Variables, not names. Structure, not story.",
    ),
    (
        0.60,
        "High Abstraction",
        "Conceptual architecture dominates. Concrete examples appear but are subordinated "
        "to logical structure.",
    ),
    (
        0.40,
        "Mixed",
        "Abstraction and particularity in tension. Neither dominates.",
    ),
    (
        0.20,
        "Low Abstraction",
        "Concrete particulars dominate. Concepts emerge from stories, examples, and sensory detail.",
    ),
)
EXTREME_CONCRETENESS = (
    "Extreme Concreteness",
    "Pure sensory/narrative immersion. Abstraction dissolved into bodies, voices, and experience.",
)

# High Vertical starts at 0.70 here but High Abstraction at 0.60 above. Both
# tables are reproduced as published; do not align them.
VERTICALITY_CLASSIFICATIONS: tuple[tuple[float, str], ...] = (
    (0.85, "Extreme Vertical"),
    (0.70, "High Vertical"),
    (0.40, "Mid-Range"),
    (0.20, "Low Vertical / Moderate Horizontal"),
)
EXTREME_HORIZONTAL = "Extreme Horizontal"

# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RawFeatures:
    word_count: int = 0
    ego_pronoun_rate: float = 0.0
    avg_sentence_length: float = 0.0
    max_sentence_length: int = 0
    subordination_depth: float = 1.0
    semicolon_freq: float = 0.0
    colon_freq: float = 0.0
    dash_freq: float = 0.0
    question_freq: float = 0.0
    impersonal_rate: float = 0.0

    def to_payload(self) -> dict[str, object]:
        return {"type": "RawFeatures", **asdict(self)}


@dataclass(frozen=True)
class AbstractionLevel:
    level: str
    description: str

    def to_payload(self) -> dict[str, object]:
        return {"type": "AbstractionLevel", "level": self.level, "description": self.description}


# ---------------------------------------------------------------------------
# Compiled patterns
# ---------------------------------------------------------------------------

_EGO_PRONOUNS = frozenset({"i", "me", "my", "mine", "myself", "we", "us", "our", "ours", "ourselves"})
_SUBORDINATORS = frozenset({
    "that", "which", "who", "whom", "whose", "where", "when", "while",
    "although", "because", "since", "if", "unless", "until", "before",
    "after", "as", "whereas", "whenever", "wherever", "whether",
})

_EGO_PUNCT_RE = re.compile(r"[.,;:!?\"']")
_SUBORDINATOR_PUNCT_RE = re.compile(r"[.,;:]")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+\s+")
_TIME_COLON_RE = re.compile(r"\d:\d", re.ASCII)

# ASCII \b: letters and digits outside ASCII count as non-word characters.
_IMPERSONAL_PATTERNS = [
    re.compile(r"\bit is\b", re.IGNORECASE | re.ASCII),
    re.compile(r"\bit was\b", re.IGNORECASE | re.ASCII),
    re.compile(r"\bit has been\b", re.IGNORECASE | re.ASCII),
    re.compile(r"\bit would be\b", re.IGNORECASE | re.ASCII),
    re.compile(r"\bthere is\b", re.IGNORECASE | re.ASCII),
    re.compile(r"\bthere are\b", re.IGNORECASE | re.ASCII),
    re.compile(r"\bthere was\b", re.IGNORECASE | re.ASCII),
    re.compile(r"\bthere were\b", re.IGNORECASE | re.ASCII),
    re.compile(r"\bthere exists?\b", re.IGNORECASE | re.ASCII),
    re.compile(r"\bone may\b", re.IGNORECASE | re.ASCII),
    re.compile(r"\bone can\b", re.IGNORECASE | re.ASCII),
    re.compile(r"\bone cannot\b", re.IGNORECASE | re.ASCII),
    re.compile(r"\bone must\b", re.IGNORECASE | re.ASCII),
    re.compile(r"\bone might\b", re.IGNORECASE | re.ASCII),
    re.compile(r"\bthis does not mean\b", re.IGNORECASE | re.ASCII),
    re.compile(r"\bwhat this indicates\b", re.IGNORECASE | re.ASCII),
    re.compile(r"\bit is to be noted\b", re.IGNORECASE | re.ASCII),
    re.compile(r"\bto the extent that\b", re.IGNORECASE | re.ASCII),
    re.compile(r"\binsofar as\b", re.IGNORECASE | re.ASCII),
    re.compile(r"\binasmuch as\b", re.IGNORECASE | re.ASCII),
]

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _round_half_up(value: float, places: int) -> float:
    # Half-up, not round-half-even: 2.25 -> 2.3.
    scale = 10 ** places
    return math.floor(value * scale + 0.5) / scale


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _per_basis(count: float, word_count: int, hp: Hyperparameters) -> float:
    return (count / word_count) * hp.words_basis if word_count > 0 else 0.0


def _normalize(value: float, bounds: tuple[float, float]) -> float:
    low, high = bounds
    return _clamp((value - low) / (high - low), 0.0, 1.0)


def _judgment_score(table: tuple[tuple[str, float], ...], value: object, hp: Hyperparameters) -> float:
    if not isinstance(value, str):
        return hp.judgment_fallback_score
    return dict(table).get(value, hp.judgment_fallback_score)


def _qualifying_sentences(text: str, hp: Hyperparameters) -> list[str]:
    return [s for s in _SENTENCE_SPLIT_RE.split(text) if len(s.split()) >= hp.min_sentence_words]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compute_raw_features(text: str, hyperparameters: Hyperparameters | None = None) -> RawFeatures:
    """Measure the deterministic stylometric features of ``text``.

    Rates and frequencies are per 1000 words. Empty or whitespace-only text
    yields all-zero rates and a subordination depth of 1.
    """
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    words = text.split()
    wc = len(words)

    ego_count = sum(1 for w in words if _EGO_PUNCT_RE.sub("", w.lower()) in _EGO_PRONOUNS)

    sentence_lengths = [len(s.split()) for s in _qualifying_sentences(text, hp)]
    avg_sentence = sum(sentence_lengths) / len(sentence_lengths) if sentence_lengths else 0.0
    max_sentence = max(sentence_lengths, default=0)

    subordinator_count = sum(1 for w in words if _SUBORDINATOR_PUNCT_RE.sub("", w.lower()) in _SUBORDINATORS)
    if sentence_lengths:
        depth = _clamp(
            (subordinator_count / len(sentence_lengths)) * hp.subordination_multiplier,
            hp.subordination_min,
            hp.subordination_max,
        )
    else:
        depth = hp.subordination_min

    semicolons = text.count(";")
    colons = max(0, text.count(":") - len(_TIME_COLON_RE.findall(text)))
    dashes = text.count("\u2014") + text.count("--")
    questions = text.count("?")
    impersonal = sum(len(pat.findall(text)) for pat in _IMPERSONAL_PATTERNS)

    return RawFeatures(
        word_count=wc,
        ego_pronoun_rate=_round_half_up(_per_basis(ego_count, wc, hp), 2),
        avg_sentence_length=_round_half_up(avg_sentence, 1),
        max_sentence_length=max_sentence,
        subordination_depth=_round_half_up(depth, 1),
        semicolon_freq=_round_half_up(_per_basis(semicolons, wc, hp), 2),
        colon_freq=_round_half_up(_per_basis(colons, wc, hp), 2),
        dash_freq=_round_half_up(_per_basis(dashes, wc, hp), 2),
        question_freq=_round_half_up(_per_basis(questions, wc, hp), 2),
        impersonal_rate=_round_half_up(_per_basis(impersonal, wc, hp), 2),
    )


def compute_verticality_score(
    features: RawFeatures,
    metaphor_density: MetaphorDensity | str | None = "moderate",
    anecdote_frequency: AnecdoteFrequency | str | None = "occasional",
    hyperparameters: Hyperparameters | None = None,
) -> float:
    """Combine raw features and the two judgments into a 0-1 verticality score.

    Unrecognized judgment values score as the midpoint (0.5), the same as
    ``moderate`` / ``occasional``.
    """
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    raw = (
        hp.ego_pronoun_weight * (1 - _normalize(features.ego_pronoun_rate, hp.ego_pronoun_range))
        + hp.impersonal_weight * _normalize(features.impersonal_rate, hp.impersonal_range)
        + hp.subordination_weight * _normalize(features.subordination_depth, hp.subordination_range)
        + hp.semicolon_weight * _normalize(features.semicolon_freq, hp.semicolon_range)
        + hp.dash_weight * (1 - _normalize(features.dash_freq, hp.dash_range))
        + hp.question_weight * (1 - _normalize(features.question_freq, hp.question_range))
        + hp.metaphor_weight * _judgment_score(hp.metaphor_scores, metaphor_density, hp)
        + hp.anecdote_weight * _judgment_score(hp.anecdote_scores, anecdote_frequency, hp)
    )
    return _round_half_up(_clamp(raw, 0.0, 1.0), 2)


def get_abstraction_level(score: float) -> AbstractionLevel:
    for threshold, level, description in ABSTRACTION_LEVELS:
        if score >= threshold:
            return AbstractionLevel(level, description)
    return AbstractionLevel(*EXTREME_CONCRETENESS)


def get_verticality_classification(score: float) -> str:
    for threshold, label in VERTICALITY_CLASSIFICATIONS:
        if score >= threshold:
            return label
    return EXTREME_HORIZONTAL


def analyze_text(
    text: str,
    metaphor_density: MetaphorDensity | str | None = None,
    anecdote_frequency: AnecdoteFrequency | str | None = None,
    hyperparameters: Hyperparameters | None = None,
) -> dict:
    """Score text for verticality.

    Args:
        text: The prose to analyze.
        metaphor_density: ``none``/``low``/``moderate``/``high``. Defaults to ``moderate``.
        anecdote_frequency: ``none``/``rare``/``occasional``/``frequent``. Defaults to ``occasional``.
        hyperparameters: Optional tuning overrides. Uses the canonical model if omitted.

    Returns:
        Dict with keys: score, abstraction_level, abstraction_description,
        classification, word_count, metaphor_density, anecdote_frequency,
        raw_features.
    """
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    if metaphor_density is None:
        metaphor_density = hp.default_metaphor_density
    if anecdote_frequency is None:
        anecdote_frequency = hp.default_anecdote_frequency

    features = compute_raw_features(text, hp)
    score = compute_verticality_score(features, metaphor_density, anecdote_frequency, hp)
    abstraction = get_abstraction_level(score)

    return {
        "score": score,
        "abstraction_level": abstraction.level,
        "abstraction_description": abstraction.description,
        "classification": get_verticality_classification(score),
        "word_count": features.word_count,
        "metaphor_density": metaphor_density,
        "anecdote_frequency": anecdote_frequency,
        "raw_features": features.to_payload(),
    }


# feature -> True when a higher value reads as more vertical
_COMPARED_FEATURES: dict[str, bool] = {
    "ego_pronoun_rate": False,
    "subordination_depth": True,
    "semicolon_freq": True,
    "impersonal_rate": True,
}


def compare_texts(
    text_a: str,
    text_b: str,
    judgments_a: tuple[str | None, str | None] | None = None,
    judgments_b: tuple[str | None, str | None] | None = None,
    hyperparameters: Hyperparameters | None = None,
) -> dict:
    """Analyze two texts side by side.

    ``judgments_a`` / ``judgments_b`` are ``(metaphor_density, anecdote_frequency)``
    pairs. Ties in ``more_vertical`` and ``feature_leaders`` go to ``"b"``.
    """
    analysis_a = analyze_text(text_a, *(judgments_a or (None, None)), hyperparameters=hyperparameters)
    analysis_b = analyze_text(text_b, *(judgments_b or (None, None)), hyperparameters=hyperparameters)

    leaders: dict[str, str] = {}
    for name, higher_is_vertical in _COMPARED_FEATURES.items():
        value_a = analysis_a["raw_features"][name]
        value_b = analysis_b["raw_features"][name]
        a_leads = value_a > value_b if higher_is_vertical else value_a < value_b
        leaders[name] = "a" if a_leads else "b"

    return {
        "a": analysis_a,
        "b": analysis_b,
        "verticality_difference": _round_half_up(abs(analysis_a["score"] - analysis_b["score"]), 2),
        "more_vertical": "a" if analysis_a["score"] > analysis_b["score"] else "b",
        "feature_leaders": leaders,
    }
