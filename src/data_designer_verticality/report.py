"""Markdown rendering for verticality analyses.

Everything here consumes the dicts returned by :func:`analyze_text` and
:func:`compare_texts`; no scoring happens in this module.
"""

from __future__ import annotations

import math

_BAR_FILLED = "█"
_BAR_EMPTY = "░"
_AXIS = "Horizontal ◄" + "─" * 32 + "► Vertical"

# feature -> ascending (upper bound, note) bands; the last note applies above every bound
_FEATURE_NOTES: dict[str, tuple[tuple[float, str], ...]] = {
    "ego_pronoun_rate": ((10, "Very low"), (30, "Low"), (50, "Moderate"), (float("inf"), "High")),
    "avg_sentence_length": ((20, "Short"), (35, "Moderate"), (float("inf"), "Long")),
    "subordination_depth": ((2, "Simple"), (4, "Moderate"), (float("inf"), "High nesting")),
    "semicolon_freq": ((3, "Low"), (8, "Moderate"), (float("inf"), "High")),
    "impersonal_rate": ((5, "Low"), (10, "Moderate"), (float("inf"), "High")),
}

_FEATURE_ROWS: tuple[tuple[str, str, str], ...] = (
    ("ego_pronoun_rate", "Ego-pronoun rate", " per 1000 words"),
    ("avg_sentence_length", "Average sentence length", " words"),
    ("max_sentence_length", "Max sentence length", " words"),
    ("subordination_depth", "Subordination depth", ""),
    ("semicolon_freq", "Semicolon frequency", " per 1000 words"),
    ("colon_freq", "Colon frequency", " per 1000 words"),
    ("dash_freq", "Dash frequency", " per 1000 words"),
    ("question_freq", "Rhetorical question rate", " per 1000 words"),
    ("impersonal_rate", "Impersonal constructions", " per 1000 words"),
)

_COMPARISON_ROWS: tuple[tuple[str, str], ...] = (
    ("ego_pronoun_rate", "Ego-pronoun rate"),
    ("avg_sentence_length", "Avg sentence length"),
    ("subordination_depth", "Subordination depth"),
    ("semicolon_freq", "Semicolon frequency"),
    ("impersonal_rate", "Impersonal rate"),
)


def generate_progress_bar(score: float, width: int = 40) -> str:
    filled = math.floor(max(0.0, min(1.0, score)) * width + 0.5)
    return f"[{_BAR_FILLED * filled}{_BAR_EMPTY * (width - filled)}]"


def describe_feature(name: str, value: float) -> str:
    """Qualitative note for a raw feature value, or ``""`` if the feature has none."""
    for upper, note in _FEATURE_NOTES.get(name, ()):
        if value < upper:
            return note
    return ""


def format_feature_table(raw_features: dict, metaphor_density: str, anecdote_frequency: str) -> str:
    rows = ["| Feature | Value | Notes |", "|---------|-------|-------|"]
    for key, label, unit in _FEATURE_ROWS:
        value = raw_features[key]
        rows.append(f"| **{label}** | {value}{unit} | {describe_feature(key, value)} |")
    rows.append(f"| **Metaphor density** | {metaphor_density} | |")
    rows.append(f"| **Anecdote frequency** | {anecdote_frequency} | |")
    return "\n".join(rows)


def format_verticality_report(analysis: dict, author_name: str | None = None, source_title: str | None = None) -> str:
    """Render a single-text analysis as a markdown report."""
    header = ["## STYLOMETRIC ANALYSIS", ""]
    if author_name:
        header.append(f"**Author:** {author_name}")
    if source_title:
        header.append(f"**Source:** {source_title}")
    header.append(f"**Word Count:** {analysis['word_count']}")

    score = analysis["score"]
    sections = [
        "\n".join(header),
        f"### VERTICALITY SCORE: {score:.2f}\n\n"
        f"```\n{generate_progress_bar(score)}\n{_AXIS}\n```\n\n"
        f"**Classification:** {analysis['classification']}",
        f"### ABSTRACTION LEVEL: {analysis['abstraction_level']}\n\n{analysis['abstraction_description']}",
        "### RAW FEATURE VALUES\n\n"
        + format_feature_table(analysis["raw_features"], analysis["metaphor_density"], analysis["anecdote_frequency"]),
    ]
    return "\n\n---\n\n".join(sections) + "\n"


def format_comparison_report(comparison: dict, label_a: str = "Text A", label_b: str = "Text B") -> str:
    """Render the output of :func:`compare_texts` as a markdown report."""
    a, b = comparison["a"], comparison["b"]
    labels = {"a": label_a, "b": label_b}
    difference = comparison["verticality_difference"]

    summary = "\n".join([
        f"| | {label_a} | {label_b} |",
        "|---|---|---|",
        f"| **Word Count** | {a['word_count']} | {b['word_count']} |",
        f"| **Verticality Score** | {a['score']:.2f} | {b['score']:.2f} |",
        f"| **Abstraction Level** | {a['abstraction_level']} | {b['abstraction_level']} |",
        f"| **Classification** | {a['classification']} | {b['classification']} |",
    ])

    width = max(len(label_a), len(label_b))
    bars = (
        f"```\n"
        f"{label_a.ljust(width)}: {generate_progress_bar(a['score'])} {a['score']:.2f}\n"
        f"{label_b.ljust(width)}: {generate_progress_bar(b['score'])} {b['score']:.2f}\n\n"
        f"{_AXIS}\n```\n\n"
        f"**Verdict:** {labels[comparison['more_vertical']]} is more vertical by {difference:.2f}\n\n"
        f"**Verticality Difference:** {difference:.2f}"
    )

    leaders = comparison["feature_leaders"]
    rows = [f"| Feature | {label_a} | {label_b} | More Vertical |", "|---------|--------|--------|---------------|"]
    for key, label in _COMPARISON_ROWS:
        leader = labels[leaders[key]] if key in leaders else "—"
        rows.append(f"| {label} | {a['raw_features'][key]} | {b['raw_features'][key]} | {leader} |")
    rows.append(f"| Metaphor density | {a['metaphor_density']} | {b['metaphor_density']} | — |")
    rows.append(f"| Anecdote frequency | {a['anecdote_frequency']} | {b['anecdote_frequency']} | — |")

    sections = [
        "## COMPARATIVE STYLOMETRIC ANALYSIS",
        "### TEXTS COMPARED\n\n" + summary,
        "### VERTICALITY COMPARISON\n\n" + bars,
        "### RAW FEATURE COMPARISON\n\n" + "\n".join(rows),
    ]
    return "\n\n---\n\n".join(sections) + "\n"
