import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import polars as pl  # noqa: E402
import pytest  # noqa: E402

from mental_health_survey.dataset import load_survey  # noqa: E402

# (self_employed, insured, current_disorder, gender, age, country, state)
RESPONDENTS: list[tuple] = [
    # Self-employed, uninsured, US
    (1, 0, "No", "Male", 45, "United States of America", "California"),
    (1, 0, "No", "male", 50, "United States of America", "Texas"),
    (1, 0, "Yes", "M", 38, "United States of America", "California"),
    (1, 0, "No", "Female", 55, "United States of America", "Oregon"),
    (1, 0, "Maybe", "man", 41, "United States of America", "New York"),
    (1, 0, "No", "Male ", 60, "United States of America", "Texas"),
    # Self-employed, insured, US
    (1, 1, "Yes", "Female", 28, "United States of America", "California"),
    (1, 1, "Yes", "woman", 31, "United States of America", "Washington"),
    (1, 1, "No", "F", 35, "United States of America", "Illinois"),
    (1, 1, "Yes", "Male", 30, "United States of America", "California"),
    (1, 1, "Yes", "non-binary", 26, "United States of America", "Oregon"),
    (1, 1, "Maybe", "Female", 33, "United States of America", "Illinois"),
    # Employed, US
    (0, None, "Yes", "Cis Male", 29, "United States of America", "Texas"),
    (0, None, "No", "Female (trans)", 34, "United States of America", "Califronia"),
    (0, None, "Maybe", "Male identifying human", 40, "United States of America", "Ohio"),
    (0, None, "Yes", "female", 27, "United States of America", "New York"),
    # Outside the US
    (1, 1, "Yes", "Male", 39, "Germany", None),
    (1, 0, "No", "Female", 44, "United Kingdom", None),
    (0, None, "No", "Agender", 32, "Canada", None),
]


def _flags(i: int) -> dict[str, int]:
    return {
        "neurodevelopmental": int(i % 3 == 0),
        "mood": i % 2,
        "anxiety": int(i % 2 == 1 or i % 5 == 0),
        "trauma_stressor": int(i % 4 == 0),
        "obsessive_compulsive": int(i % 5 == 1),
        "substance_use": int(i in (2, 7, 11, 16)),
    }


def build_raw_survey() -> pl.DataFrame:
    """A small export with the survey's own question headers, in file order."""
    rows = []
    for i, (self_employed, insured, disorder, gender, age, country, state) in enumerate(
        RESPONDENTS
    ):
        rows.append(
            {
                "Are you self-employed?": self_employed,
                "Do you have medical coverage (private insurance or state-provided) which includes treatment of mental health issues?": insured,
                "Do you have a family history of mental illness?": "Yes" if i % 2 else "No",
                "Have you been diagnosed with a mental health condition by a medical professional?": "Yes" if i % 3 else "No",
                "Do you currently have a mental health disorder?": disorder,
                "Have you ever sought treatment for a mental health issue from a mental health professional?": i % 2,
                **_flags(i),
                "What is your gender?": gender,
                "What is your age?": age,
                "What country do you live in?": country,
                "What US state or territory do you live in?": state,
                "Do you work remotely?": "Sometimes",
            }
        )
    return pl.DataFrame(rows)


@pytest.fixture
def raw_survey() -> pl.DataFrame:
    return build_raw_survey()


@pytest.fixture
def survey_csv(tmp_path, raw_survey):
    path = tmp_path / "mental-health-in-tech-2016.csv"
    raw_survey.write_csv(path)
    return path


@pytest.fixture
def survey(survey_csv) -> pl.DataFrame:
    return load_survey(survey_csv)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")
