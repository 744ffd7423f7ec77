"""Free-text gender coding.

Survey respondents typed their gender freely, which leaves dozens of spellings
("M", "Male ", "cis male", "Female (trans)", "enby", ...). These are reduced to
five categories by checking a priority-ordered list of rules: the first rule
whose tokens match the normalised answer decides the category.
"""

from typing import NamedTuple

import polars as pl

TRANSGENDER = "Transgender"
NON_BINARY = "Non-binary"
FEMALE = "Female"
MALE = "Male"
OTHER = "Other"

GENDER_CATEGORIES: list[str] = [MALE, FEMALE, NON_BINARY, TRANSGENDER, OTHER]


class GenderRule(NamedTuple):
    category: str
    substrings: tuple[str, ...] = ()
    exact: tuple[str, ...] = ()
    excluded: tuple[str, ...] = ()

    def matches(self, answer: str) -> bool:
        """Checks an already normalised answer against this rule."""
        if any(token in answer for token in self.excluded):
            return False
        return answer in self.exact or any(token in answer for token in self.substrings)


def _tokens(*patterns: str) -> tuple[str, ...]:
    # A blank token is a substring of every answer
    return tuple(pattern for pattern in patterns if pattern.strip())


GENDER_RULES: tuple[GenderRule, ...] = (
    GenderRule(TRANSGENDER, substrings=_tokens("trans", "mtf", "ftm")),
    GenderRule(
        NON_BINARY,
        substrings=_tokens(
            "nb",
            "nonbinary",
            "non-binary",
            "fluid",
            "enby",
            "agender",
            "bigender",
            "androgynous",
            "genderqueer",
        ),
    ),
    GenderRule(FEMALE, substrings=_tokens("female", "woman"), exact=_tokens("f")),
    GenderRule(
        MALE,
        substrings=_tokens("male", "mail", "man"),
        exact=_tokens("m"),
        excluded=_tokens("human"),
    ),
)


def code_gender(text: str | None) -> str:
    """Maps a free-text gender answer to one of `GENDER_CATEGORIES`."""
    if text is None:
        return OTHER

    answer = text.strip().lower()
    for rule in GENDER_RULES:
        if rule.matches(answer):
            return rule.category

    return OTHER


def with_coded_gender(
    df: pl.DataFrame, source: str = "gender", target: str = "coded_gender"
) -> pl.DataFrame:
    """Adds the coded gender column derived from the free-text `source` column."""
    return df.with_columns(
        pl.col(source)
        .map_elements(code_gender, return_dtype=pl.String)
        .fill_null(OTHER)
        .alias(target)
    )
