from __future__ import annotations

import logging

import pandas as pd
from data_designer.engine.column_generators.generators.base import ColumnGeneratorFullColumn

from data_designer_verticality.config import VerticalityColumnConfig
from data_designer_verticality.core import analyze_text
from data_designer_verticality.report import format_verticality_report

logger = logging.getLogger(__name__)


def _judgment(row: pd.Series, column: str | None) -> str | None:
    if column is None:
        return None
    value = row[column]
    return value if isinstance(value, str) else None


def score_row(row: pd.Series, config: VerticalityColumnConfig) -> dict:
    """Build the output record for one row."""
    text = " ".join(str(row[c]) for c in config.target_columns if pd.notna(row[c]))
    analysis = analyze_text(
        text,
        metaphor_density=_judgment(row, config.metaphor_density_column),
        anecdote_frequency=_judgment(row, config.anecdote_frequency_column),
    )
    long_enough = analysis["word_count"] >= config.min_word_count
    if not long_enough:
        logger.debug(f"   row {row.name!r}: {analysis['word_count']} words, below min_word_count")

    output: dict = {
        "is_valid": long_enough and config.min_score <= analysis["score"] <= config.max_score,
        "verticality_score": analysis["score"],
        "abstraction_level": analysis["abstraction_level"],
        "verticality_classification": analysis["classification"],
        "word_count": analysis["word_count"],
    }
    if config.include_raw_features:
        output["abstraction_description"] = analysis["abstraction_description"]
        output["raw_features"] = analysis["raw_features"]
    if config.include_report:
        output["verticality_report"] = format_verticality_report(analysis)
    return output


def score_frame(data: pd.DataFrame, config: VerticalityColumnConfig) -> pd.DataFrame:
    """Return a copy of ``data`` with one verticality record per row in ``config.name``."""
    logger.info(f"\U0001f4d0 Scoring column {config.name!r} for verticality")
    logger.info(f"   target columns: {config.target_columns}")
    logger.info(f"   score range: [{config.min_score}, {config.max_score}]")
    logger.info(f"   min_word_count: {config.min_word_count}")

    results = [score_row(row, config) for _, row in data.iterrows()]
    valid = sum(1 for r in results if r["is_valid"])
    logger.info(f"   {valid}/{len(results)} rows valid")

    data = data.copy()
    data[config.name] = results
    return data


class VerticalityColumnGenerator(ColumnGeneratorFullColumn[VerticalityColumnConfig]):
    """Column generator that scores text for stylometric verticality."""

    def generate(self, data: pd.DataFrame) -> pd.DataFrame:
        return score_frame(data, self.config)
