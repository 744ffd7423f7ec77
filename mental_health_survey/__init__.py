"""Exploratory analysis of the 2016 mental health in tech survey."""

from mental_health_survey.dataset import load_survey
from mental_health_survey.gender import GENDER_CATEGORIES, code_gender
from mental_health_survey.hypothesis import run_hypothesis_tests, self_employed_cohorts
from mental_health_survey.states import abbreviate_state

__all__ = [
    "GENDER_CATEGORIES",
    "abbreviate_state",
    "code_gender",
    "load_survey",
    "run_hypothesis_tests",
    "self_employed_cohorts",
]
