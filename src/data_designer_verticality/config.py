from __future__ import annotations

from typing import Literal

from pydantic import Field, model_validator

from data_designer.config.column_configs import SingleColumnConfig


class VerticalityColumnConfig(SingleColumnConfig):
    """Score text columns for stylometric verticality (abstract/impersonal vs. concrete/personal).

    Extracts pronoun, punctuation, subordination and impersonal-construction rates
    from each row's text and combines them with metaphor-density and
    anecdote-frequency judgments into a 0-1 score, an abstraction level, and a
    verticality classification.

    Attributes:
        target_columns: Columns whose text content will be concatenated and scored.
        metaphor_density_column: Optional column holding ``none``/``low``/``moderate``/``high``,
            usually produced by an upstream LLM-judge column. Missing values score as ``moderate``.
        anecdote_frequency_column: Optional column holding ``none``/``rare``/``occasional``/``frequent``.
            Missing values score as ``occasional``.
        min_word_count: Texts shorter than this are scored but marked ``is_valid=False``.
            Defaults to 400, below which the rates are too noisy to compare.
        min_score: Lowest verticality score for ``is_valid=True``.
        max_score: Highest verticality score for ``is_valid=True``.
        include_raw_features: Include the abstraction description and raw feature values in output.
        include_report: Include a rendered markdown report in output.
    """

    target_columns: list[str]
    metaphor_density_column: str | None = Field(default=None, description="Column with metaphor density judgments")
    anecdote_frequency_column: str | None = Field(default=None, description="Column with anecdote frequency judgments")
    min_word_count: int = Field(default=400, ge=0, description="Minimum word count for is_valid=True")
    min_score: float = Field(default=0.0, ge=0.0, le=1.0, description="Minimum verticality score for is_valid=True")
    max_score: float = Field(default=1.0, ge=0.0, le=1.0, description="Maximum verticality score for is_valid=True")
    include_raw_features: bool = Field(default=True, description="Include raw feature values in output")
    include_report: bool = Field(default=False, description="Include a markdown report in output")
    column_type: Literal["verticality"] = "verticality"

    @model_validator(mode="after")
    def _check_score_bounds(self) -> VerticalityColumnConfig:
        if self.min_score > self.max_score:
            raise ValueError(f"min_score ({self.min_score}) must not exceed max_score ({self.max_score})")
        return self

    @staticmethod
    def get_column_emoji() -> str:
        return "\U0001f4d0"

    @property
    def required_columns(self) -> list[str]:
        judgment_columns = [c for c in (self.metaphor_density_column, self.anecdote_frequency_column) if c]
        return [*self.target_columns, *judgment_columns]

    @property
    def side_effect_columns(self) -> list[str]:
        return []
