import polars as pl
import pytest

from mental_health_survey.gender import (
    GENDER_CATEGORIES,
    GENDER_RULES,
    code_gender,
    with_coded_gender,
)


@pytest.mark.parametrize(
    "answer",
    ["Trans woman", "Female (trans)", "MTF", "ftm man", "transgender non-binary", "Trans-male human"],
)
def test_transgender_tokens_take_priority(answer):
    assert code_gender(answer) == "Transgender"


@pytest.mark.parametrize(
    "answer",
    ["non-binary", "Nonbinary", "NB", "Enby", "genderfluid", "Agender", "bigender", "Androgynous", "Genderqueer woman"],
)
def test_non_binary(answer):
    assert code_gender(answer) == "Non-binary"


@pytest.mark.parametrize("answer", ["f", "F", " f ", "Female", "female ", "Cis woman", "Woman"])
def test_female(answer):
    assert code_gender(answer) == "Female"


@pytest.mark.parametrize("answer", ["m", "M", "Male", " male", "Cis Male", "man", "Mail", "Male-ish"])
def test_male(answer):
    assert code_gender(answer) == "Male"


def test_human_suppresses_male():
    assert code_gender("Male identifying human") == "Other"
    assert code_gender("human") == "Other"


@pytest.mark.parametrize("answer", ["banana", "Dude", "p", "", "   ", None])
def test_unmatched_answers_are_other(answer):
    assert code_gender(answer) == "Other"


def test_exact_tokens_only_match_whole_answer():
    # "fm" is neither "f" nor "m"
    assert code_gender("fm") == "Other"


def test_rules_have_no_blank_patterns():
    for rule in GENDER_RULES:
        for token in rule.substrings + rule.exact + rule.excluded:
            assert token.strip()


def test_every_rule_category_is_known():
    assert {rule.category for rule in GENDER_RULES} | {"Other"} == set(GENDER_CATEGORIES)


def test_with_coded_gender_fills_nulls():
    df = pl.DataFrame({"gender": ["Male", None, "enby", "F"]})

    coded = with_coded_gender(df)

    assert coded["coded_gender"].to_list() == ["Male", "Other", "Non-binary", "Female"]
    assert coded["gender"].to_list() == df["gender"].to_list()
