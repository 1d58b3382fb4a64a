# SPDX-License-Identifier: Apache-2.0
"""Verticality plugin for NeMo Data Designer.

Adds a ``verticality`` column type that places text on an abstract/impersonal
versus concrete/personal axis from deterministic stylometric features plus two
categorical judgments (metaphor density, anecdote frequency).

Usage::

    from data_designer_verticality import VerticalityColumnConfig

    builder.add_column(VerticalityColumnConfig(
        name="verticality",
        target_columns=["essay"],
        metaphor_density_column="metaphor_judgment",
        anecdote_frequency_column="anecdote_judgment",
        min_score=0.6,
    ))
"""

from data_designer_verticality.config import VerticalityColumnConfig
from data_designer_verticality.core import (
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

__all__ = [
    "VerticalityColumnConfig",
    "AbstractionLevel",
    "Hyperparameters",
    "RawFeatures",
    "analyze_text",
    "compare_texts",
    "compute_raw_features",
    "compute_verticality_score",
    "get_abstraction_level",
    "get_verticality_classification",
]
