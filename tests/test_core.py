import dataclasses

import pytest

from data_designer_verticality.core import (
    DEFAULT_HYPERPARAMETERS,
    AbstractionLevel,
    Hyperparameters,
    RawFeatures,
    analyze_text,
    compare_texts,
    compute_raw_features,
    compute_verticality_score,
    get_abstraction_level,
    get_verticality_classification,
)

# 100 sentences of exactly 10 words: no pronouns, subordinators, or punctuation marks.
UNIFORM_TEXT = " ".join(["Seven brown horses crossed the wide river near the mill."] * 100)

PERSONAL_TEXT = (
    "I think I lost my keys -- or did I? "
    "We looked everywhere, my brother and I, under the couch and in our car."
)

ABSTRACT_TEXT = (
    "It is to be noted that the argument holds only insofar as its premises are consistent; "
    "one must therefore ask whether the conclusion follows when the premises are weakened. "
    "There are cases in which the inference fails, although it has been argued that these "
    "cases are degenerate. To the extent that the objection succeeds, it would be necessary "
    "to restrict the domain; this does not mean, however, that the principle is false."
)

EXTREME_VERTICAL = RawFeatures(
    word_count=1000, impersonal_rate=20.0, subordination_depth=7.0, semicolon_freq=15.0,
)
EXTREME_HORIZONTAL = RawFeatures(
    word_count=1000, ego_pronoun_rate=80.0, dash_freq=20.0, question_freq=10.0,
)


class TestComputeRawFeatures:
    def test_uniform_sentences(self):
        features = compute_raw_features(UNIFORM_TEXT)
        assert features == RawFeatures(
            word_count=1000,
            ego_pronoun_rate=0.0,
            avg_sentence_length=10.0,
            max_sentence_length=10,
            subordination_depth=1.0,
            semicolon_freq=0.0,
            colon_freq=0.0,
            dash_freq=0.0,
            question_freq=0.0,
            impersonal_rate=0.0,
        )

    @pytest.mark.parametrize("text", ["", "   ", " \n\t  \n"])
    def test_empty_text_returns_defaults(self, text):
        features = compute_raw_features(text)
        assert features == RawFeatures()
        assert features.word_count == 0
        assert features.subordination_depth == 1.0
        assert features.avg_sentence_length == 0.0
        assert features.max_sentence_length == 0

    def test_short_text_has_no_qualifying_sentences(self):
        features = compute_raw_features("Hi there.")
        assert features.word_count == 2
        assert features.avg_sentence_length == 0.0
        assert features.max_sentence_length == 0
        assert features.subordination_depth == 1.0

    def test_ego_pronoun_rate(self):
        features = compute_raw_features("I went home and my dog was there.")
        assert features.word_count == 8
        assert features.ego_pronoun_rate == 250.0

    def test_ego_pronouns_ignore_case_and_punctuation(self):
        features = compute_raw_features(PERSONAL_TEXT)
        assert features.word_count == 24
        assert features.ego_pronoun_rate == 333.33

    def test_short_fragments_are_not_sentences(self):
        features = compute_raw_features("Hi. Go now. This sentence has five words. And this one has six words!")
        assert features.avg_sentence_length == 5.5
        assert features.max_sentence_length == 6

    def test_subordination_depth_rounds_half_up(self):
        # 3 subordinators over 2 sentences -> 2.25
        features = compute_raw_features("The man who left because it rained was sad. The dog that barked was loud.")
        assert features.subordination_depth == 2.3

    def test_subordination_depth_is_clamped(self):
        features = compute_raw_features("if if if if if if if if if if.")
        assert features.subordination_depth == 7.0

    def test_punctuation_frequencies(self):
        features = compute_raw_features("Wait; what: at 3:45 -- really? Yes—no.")
        assert features.word_count == 7
        assert features.semicolon_freq == 142.86
        assert features.colon_freq == 142.86  # the time colon is excluded
        assert features.dash_freq == 285.71
        assert features.question_freq == 142.86

    def test_time_colons_never_go_negative(self):
        features = compute_raw_features("The trains left at 3:45 and 4:15 and 5:30 today.")
        assert features.colon_freq == 0.0

    def test_time_colons_are_ascii_digits_only(self):
        features = compute_raw_features("Meet at ３:４５ please, said the note:")
        assert features.word_count == 7
        assert features.colon_freq == 285.71

    def test_impersonal_word_boundaries_are_ascii(self):
        features = compute_raw_features("éit is fine here today.")
        assert features.impersonal_rate == 200.0

    def test_impersonal_rate_counts_overlapping_patterns(self):
        features = compute_raw_features("It is clear. There are reasons. One must act. It is to be noted.")
        assert features.word_count == 14
        # "it is" x2, "there are", "one must", "it is to be noted"
        assert features.impersonal_rate == 357.14

    def test_rates_are_finite_and_non_negative(self):
        for text in (UNIFORM_TEXT, PERSONAL_TEXT, ABSTRACT_TEXT, "?", ";;;", "--"):
            payload = compute_raw_features(text).to_payload()
            for key, value in payload.items():
                if key == "type":
                    continue
                assert value >= 0
                assert value != float("inf")

    def test_is_deterministic(self):
        assert compute_raw_features(ABSTRACT_TEXT) == compute_raw_features(ABSTRACT_TEXT)

    def test_payload_shape(self):
        payload = compute_raw_features(UNIFORM_TEXT).to_payload()
        assert payload["type"] == "RawFeatures"
        assert set(payload) == {"type"} | {f.name for f in dataclasses.fields(RawFeatures)}


class TestComputeVerticalityScore:
    def test_uniform_text_scores_exactly_point_six(self):
        features = compute_raw_features(UNIFORM_TEXT)
        score = compute_verticality_score(features, "none", "none")
        assert score == 0.60
        assert get_abstraction_level(score).level == "High Abstraction"

    def test_extremes(self):
        assert compute_verticality_score(EXTREME_VERTICAL, "none", "none") == 1.0
        assert compute_verticality_score(EXTREME_HORIZONTAL, "high", "frequent") == 0.0

    def test_judgment_scores(self):
        # 0.075 * 0.75 = 0.05625 rounds half up
        assert compute_verticality_score(EXTREME_HORIZONTAL, "low", "frequent") == 0.06
        assert compute_verticality_score(EXTREME_HORIZONTAL, "high", "rare") == 0.06
        assert compute_verticality_score(EXTREME_HORIZONTAL, "none", "none") == 0.15

    def test_unrecognized_judgments_fall_back_to_midpoint(self):
        features = compute_raw_features(ABSTRACT_TEXT)
        moderate = compute_verticality_score(features, "moderate", "occasional")
        assert compute_verticality_score(features, "unknown", "occasional") == moderate
        assert compute_verticality_score(features, "moderate", "sometimes") == moderate
        assert compute_verticality_score(features, None, None) == moderate
        assert compute_verticality_score(features) == moderate

    def test_judgments_are_case_sensitive(self):
        features = compute_raw_features(ABSTRACT_TEXT)
        assert compute_verticality_score(features, "High") == compute_verticality_score(features, "moderate")

    def test_non_increasing_in_ego_pronoun_rate(self):
        features = compute_raw_features(ABSTRACT_TEXT)
        scores = [
            compute_verticality_score(dataclasses.replace(features, ego_pronoun_rate=rate), "low", "rare")
            for rate in range(0, 120, 5)
        ]
        assert all(later <= earlier for earlier, later in zip(scores, scores[1:]))

    def test_score_bounds(self):
        grid = [EXTREME_VERTICAL, EXTREME_HORIZONTAL, RawFeatures(), compute_raw_features(ABSTRACT_TEXT)]
        for features in grid:
            for metaphor in ("none", "low", "moderate", "high", "bogus"):
                for anecdote in ("none", "rare", "occasional", "frequent", "bogus"):
                    score = compute_verticality_score(features, metaphor, anecdote)
                    assert 0.0 <= score <= 1.0
                    assert score == round(score, 2)

    def test_default_weights_sum_to_one(self):
        hp = DEFAULT_HYPERPARAMETERS
        total = (
            hp.ego_pronoun_weight + hp.impersonal_weight + hp.subordination_weight + hp.semicolon_weight
            + hp.dash_weight + hp.question_weight + hp.metaphor_weight + hp.anecdote_weight
        )
        assert total == pytest.approx(1.0)

    def test_default_hyperparameters_are_immutable(self):
        assert hash(DEFAULT_HYPERPARAMETERS) == hash(Hyperparameters())
        with pytest.raises(TypeError):
            DEFAULT_HYPERPARAMETERS.metaphor_scores[3] = ("high", 1.0)
        assert compute_verticality_score(RawFeatures(), "high") == 0.49

    def test_custom_judgment_scores(self):
        generous = dataclasses.replace(DEFAULT_HYPERPARAMETERS, metaphor_scores=(("high", 1.0),))
        assert compute_verticality_score(RawFeatures(), "high", "rare", hyperparameters=generous) == 0.58

    def test_custom_hyperparameters(self):
        features = compute_raw_features(PERSONAL_TEXT)
        tolerant = dataclasses.replace(DEFAULT_HYPERPARAMETERS, ego_pronoun_range=(0.0, 1000.0))
        assert compute_verticality_score(features, hyperparameters=tolerant) > compute_verticality_score(features)


class TestClassification:
    def test_abstraction_boundaries(self):
        assert get_abstraction_level(0.85).level == "Extreme Abstraction"
        assert get_abstraction_level(0.849).level == "High Abstraction"
        assert get_abstraction_level(0.60).level == "High Abstraction"
        assert get_abstraction_level(0.59).level == "Mixed"
        assert get_abstraction_level(0.40).level == "Mixed"
        assert get_abstraction_level(0.39).level == "Low Abstraction"
        assert get_abstraction_level(0.20).level == "Low Abstraction"
        assert get_abstraction_level(0.19).level == "Extreme Concreteness"
        assert get_abstraction_level(0.00).level == "Extreme Concreteness"

    def test_abstraction_descriptions(self):
        assert get_abstraction_level(1.0) == AbstractionLevel(
            "Extreme Abstraction",
            "Prose operates at the level of pure logical relations. No particulars survive. "
            "Variables, not names. Structure, not story.",
        )
        assert get_abstraction_level(0.5).description == "Abstraction and particularity in tension. Neither dominates."
        assert get_abstraction_level(0.0).description == (
            "Pure sensory/narrative immersion. Abstraction dissolved into bodies, voices, and experience."
        )

    def test_verticality_classification(self):
        assert get_verticality_classification(0.85) == "Extreme Vertical"
        assert get_verticality_classification(0.70) == "High Vertical"
        assert get_verticality_classification(0.69) == "Mid-Range"
        assert get_verticality_classification(0.40) == "Mid-Range"
        assert get_verticality_classification(0.20) == "Low Vertical / Moderate Horizontal"
        assert get_verticality_classification(0.19) == "Extreme Horizontal"

    def test_tables_disagree_between_point_six_and_point_seven(self):
        assert get_abstraction_level(0.65).level == "High Abstraction"
        assert get_verticality_classification(0.65) == "Mid-Range"


class TestAnalyzeText:
    def test_result_shape(self):
        result = analyze_text(ABSTRACT_TEXT)
        expected_keys = {
            "score", "abstraction_level", "abstraction_description", "classification",
            "word_count", "metaphor_density", "anecdote_frequency", "raw_features",
        }
        assert expected_keys == set(result.keys())

    def test_defaults_are_echoed(self):
        result = analyze_text(ABSTRACT_TEXT)
        assert result["metaphor_density"] == "moderate"
        assert result["anecdote_frequency"] == "occasional"

    def test_uniform_text(self):
        result = analyze_text(UNIFORM_TEXT, "none", "none")
        assert result["score"] == 0.6
        assert result["abstraction_level"] == "High Abstraction"
        assert result["classification"] == "Mid-Range"
        assert result["word_count"] == 1000
        assert result["raw_features"]["avg_sentence_length"] == 10.0

    def test_abstract_outscores_personal(self):
        assert analyze_text(ABSTRACT_TEXT)["score"] > analyze_text(PERSONAL_TEXT)["score"]

    def test_empty_text(self):
        result = analyze_text("")
        assert result["word_count"] == 0
        assert 0.0 <= result["score"] <= 1.0


class TestCompareTexts:
    def test_comparison(self):
        result = compare_texts(UNIFORM_TEXT, PERSONAL_TEXT, ("none", "none"), ("high", "frequent"))
        assert result["a"]["score"] == 0.6
        assert result["b"]["score"] == 0.0
        assert result["verticality_difference"] == 0.6
        assert result["more_vertical"] == "a"
        assert result["feature_leaders"] == {
            "ego_pronoun_rate": "a",
            "subordination_depth": "b",
            "semicolon_freq": "b",
            "impersonal_rate": "b",
        }

    def test_ties_go_to_second_text(self):
        result = compare_texts(UNIFORM_TEXT, UNIFORM_TEXT)
        assert result["verticality_difference"] == 0.0
        assert result["more_vertical"] == "b"
        assert set(result["feature_leaders"].values()) == {"b"}
