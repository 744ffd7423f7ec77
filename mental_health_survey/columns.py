"""Column naming for the cleaned 2016 mental health in tech survey export."""

from collections.abc import Sequence

# Relevant Columns
COLUMN_MAPPING: dict[str, str] = {
    "Are you self-employed?": "self_employed",
    "Do you have medical coverage (private insurance or state-provided) which includes treatment of mental health issues?": "insured",
    "Do you have a family history of mental illness?": "family_history",
    "Have you been diagnosed with a mental health condition by a medical professional?": "diagnosed",
    "Do you currently have a mental health disorder?": "current_disorder",
    "Have you ever sought treatment for a mental health issue from a mental health professional?": "treatment",
    "What is your gender?": "gender",
    "What is your age?": "age",
    "What country do you live in?": "country",
    "What US state or territory do you live in?": "state",
    "Do you work remotely?": "remote_work",
}

# Condition flags sit between these two columns in the cleaned file
INDICATOR_START: str = "neurodevelopmental"
INDICATOR_END: str = "gender"

US_COUNTRY: str = "United States of America"


def indicator_columns(
    columns: Sequence[str],
    start: str = INDICATOR_START,
    end: str = INDICATOR_END,
) -> list[str]:
    """Returns the condition indicator block, from `start` up to (not including) `end`."""
    columns = list(columns)
    missing = [marker for marker in (start, end) if marker not in columns]
    if missing:
        raise ValueError(f"Indicator block markers not found: {missing}")

    first, last = columns.index(start), columns.index(end)
    if first >= last:
        raise ValueError(f"Indicator block start {start!r} must come before {end!r}")

    return columns[first:last]
