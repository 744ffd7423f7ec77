"""Insured vs. uninsured self-employed US respondents.

Three independent one-sided tests are run on the two cohorts:
    1. Age: Student t-test, uninsured mean > insured mean
    2. Share of men: two-proportion z-test, uninsured > insured
    3. Share with a current disorder: two-proportion z-test, uninsured < insured

No multiple-comparison correction is applied across them.
"""

import logging
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np
import polars as pl
from scipy import stats
from statsmodels.stats.proportion import confint_proportions_2indep, proportions_ztest

from mental_health_survey.columns import US_COUNTRY
from mental_health_survey.gender import MALE

logger = logging.getLogger(__name__)

ALTERNATIVES: tuple[str, ...] = ("two-sided", "larger", "smaller")


class Cohorts(NamedTuple):
    uninsured: pl.DataFrame
    insured: pl.DataFrame


@dataclass(frozen=True)
class HypothesisResult:
    name: str
    statistic: float
    p_value: float
    confidence_interval: tuple[float, float]
    alternative: str
    confidence_level: float = 0.95

    def rejects_null(self, alpha: float = 0.05) -> bool:
        return self.p_value < alpha

    def summary(self) -> str:
        low, high = self.confidence_interval
        return (
            f"--- {self.name} ---\n"
            f"Alternative: {self.alternative}\n"
            f"Test statistic: {self.statistic:.4f}\n"
            f"p-value: {self.p_value:.4f}\n"
            f"{self.confidence_level:.0%} confidence interval: ({low:.4f}, {high:.4f})"
        )


def self_employed_cohorts(df: pl.DataFrame) -> Cohorts:
    """Splits self-employed US respondents by mental health coverage."""
    self_employed = df.filter(
        (pl.col("country") == US_COUNTRY) & (pl.col("self_employed") == 1)
    )
    cohorts = Cohorts(
        uninsured=self_employed.filter(pl.col("insured") == 0),
        insured=self_employed.filter(pl.col("insured") == 1),
    )
    logger.info(
        "Self-employed US cohorts: %d uninsured, %d insured",
        cohorts.uninsured.height,
        cohorts.insured.height,
    )
    return cohorts


def normal_approximation_holds(count: int, nobs: int, minimum: int = 10) -> bool:
    """Checks n*p >= minimum and n*(1 - p) >= minimum for an observed proportion."""
    return count >= minimum and nobs - count >= minimum


def proportion_ztest(
    count1: int,
    nobs1: int,
    count2: int,
    nobs2: int,
    alternative: str = "two-sided",
    confidence_level: float = 0.95,
    name: str = "Two-proportion z-test",
) -> HypothesisResult:
    """Pooled two-proportion z-test of p1 - p2 with a Wald interval for the difference.

    For one-sided alternatives the interval is one-sided too, with the open end
    at the largest possible difference (1 or -1).
    """
    if alternative not in ALTERNATIVES:
        raise ValueError(f"Unknown alternative {alternative!r}, expected one of {ALTERNATIVES}")
    if nobs1 <= 0 or nobs2 <= 0:
        raise ValueError("Both groups need at least one observation")

    statistic, p_value = proportions_ztest(
        count=np.array([count1, count2]),
        nobs=np.array([nobs1, nobs2]),
        alternative=alternative,
    )

    alpha = 1 - confidence_level
    if alternative == "two-sided":
        low, high = confint_proportions_2indep(
            count1, nobs1, count2, nobs2, method="wald", compare="diff", alpha=alpha
        )
    else:
        low, high = confint_proportions_2indep(
            count1, nobs1, count2, nobs2, method="wald", compare="diff", alpha=2 * alpha
        )
        if alternative == "larger":
            high = 1.0
        else:
            low = -1.0

    return HypothesisResult(
        name=name,
        statistic=float(statistic),
        p_value=float(p_value),
        confidence_interval=(float(low), float(high)),
        alternative=alternative,
        confidence_level=confidence_level,
    )


def age_ttest(
    uninsured: pl.DataFrame, insured: pl.DataFrame, confidence_level: float = 0.95
) -> HypothesisResult:
    """One-sided Student t-test that uninsured respondents are older on average.

    Equal variances are assumed; see the age boxplot for the visual check.
    """
    result = stats.ttest_ind(
        uninsured["age"].drop_nulls().to_numpy(),
        insured["age"].drop_nulls().to_numpy(),
        equal_var=True,
        alternative="greater",
    )
    interval = result.confidence_interval(confidence_level=confidence_level)

    test = HypothesisResult(
        name="Age t-test (uninsured > insured)",
        statistic=float(result.statistic),
        p_value=float(result.pvalue),
        confidence_interval=(float(interval.low), float(interval.high)),
        alternative="larger",
        confidence_level=confidence_level,
    )
    logger.info("%s: t=%.3f, p=%.4f", test.name, test.statistic, test.p_value)
    return test


def _count(df: pl.DataFrame, condition: pl.Expr) -> int:
    return df.filter(condition).height


def male_proportion_ztest(
    uninsured: pl.DataFrame, insured: pl.DataFrame, confidence_level: float = 0.95
) -> HypothesisResult:
    """One-sided z-test that the uninsured cohort has a larger share of men."""
    is_male = pl.col("coded_gender") == MALE
    test = proportion_ztest(
        _count(uninsured, is_male),
        uninsured.height,
        _count(insured, is_male),
        insured.height,
        alternative="larger",
        confidence_level=confidence_level,
        name="Male proportion z-test (uninsured > insured)",
    )
    logger.info("%s: z=%.3f, p=%.4f", test.name, test.statistic, test.p_value)
    return test


def disorder_proportion_ztest(
    uninsured: pl.DataFrame, insured: pl.DataFrame, confidence_level: float = 0.95
) -> HypothesisResult:
    """One-sided z-test that the uninsured cohort has a smaller share with a current disorder."""
    has_disorder = pl.col("current_disorder") == "Yes"
    test = proportion_ztest(
        _count(uninsured, has_disorder),
        uninsured.height,
        _count(insured, has_disorder),
        insured.height,
        alternative="smaller",
        confidence_level=confidence_level,
        name="Current disorder proportion z-test (uninsured < insured)",
    )
    logger.info("%s: z=%.3f, p=%.4f", test.name, test.statistic, test.p_value)
    return test


def run_hypothesis_tests(
    cohorts: Cohorts, confidence_level: float = 0.95
) -> dict[str, HypothesisResult]:
    uninsured, insured = cohorts
    return {
        "age": age_ttest(uninsured, insured, confidence_level),
        "male": male_proportion_ztest(uninsured, insured, confidence_level),
        "current_disorder": disorder_proportion_ztest(uninsured, insured, confidence_level),
    }
