# ---
# jupyter:
#   jupytext:
#     cell_metadata_filter: -all
#     formats: ipynb,py:light
#     text_representation:
#       extension: .py
#       format_name: light
#       format_version: '1.5'
#       jupytext_version: 1.17.3
#   kernelspec:
#     display_name: Python 3 (ipykernel)
#     language: python
#     name: python3
# ---

# # Insured vs. Uninsured Self-Employed Respondents
# Self-employed respondents were asked whether they have medical coverage that includes mental health treatment.
#
# ## Questions:
# 1. Are uninsured self-employed respondents older on average?
# 2. Are men over-represented among the uninsured?
# 3. Do fewer uninsured respondents report a current mental health disorder?
#
# Only US residents are included, since coverage works very differently elsewhere.

# ## 1. Load Dataset

# Imports
import logging
import matplotlib.pyplot as plt
import polars as pl

# +
from mental_health_survey.dataset import load_survey
from mental_health_survey.gender import MALE
from mental_health_survey.hypothesis import (
    normal_approximation_holds,
    run_hypothesis_tests,
    self_employed_cohorts,
)
from mental_health_survey.plots import plot_age_by_insurance

logging.basicConfig(level=logging.INFO)

# Constants
FILE_NAME: str = "../../data/cleaned/mental-health-in-tech-2016.csv"
FIGURES_DIR: str = "../../figures"
ALPHA: float = 0.05
# -

df: pl.DataFrame = load_survey(FILE_NAME)
cohorts = self_employed_cohorts(df)
uninsured, insured = cohorts

print(f"Uninsured self-employed US respondents: {uninsured.shape[0]:,}")
print(f"Insured self-employed US respondents: {insured.shape[0]:,}")

# ## 2. Check Assumptions
# The t-test assumes both cohorts have roughly equal age variance. Let's eyeball that first.

# +
print(f"Uninsured age: mean={uninsured['age'].mean():.1f}, std={uninsured['age'].std():.1f}")
print(f"Insured age:   mean={insured['age'].mean():.1f}, std={insured['age'].std():.1f}")

plot_age_by_insurance(uninsured, insured, output_path=f"{FIGURES_DIR}/age_by_insurance.png")
plt.show()
# -

# The spreads look similar enough, so we go with the equal-variance (Student) t-test.
#
# The z-tests rely on the normal approximation, which needs at least 10 successes and 10 failures per group.

# +
checks = {
    "Male": pl.col("coded_gender") == MALE,
    "Current disorder": pl.col("current_disorder") == "Yes",
}

print(f"{'Proportion':<18} {'Cohort':<10} {'Count':>6} {'n':>6}  OK")
print("-" * 48)
for label, condition in checks.items():
    for name, cohort in [("Uninsured", uninsured), ("Insured", insured)]:
        count = cohort.filter(condition).shape[0]
        ok = normal_approximation_holds(count, cohort.shape[0])
        print(f"{label:<18} {name:<10} {count:>6} {cohort.shape[0]:>6}  {'✓' if ok else '✗'}")
# -

# ## 3. Run Tests
# All three tests are one-sided. No multiple-comparison correction is applied.

# +
results = run_hypothesis_tests(cohorts)

for result in results.values():
    print(result.summary())
    verdict = "Reject" if result.rejects_null(ALPHA) else "Fail to reject"
    print(f"{verdict} the null hypothesis at alpha={ALPHA}\n")
# -

# ## 4. Summary

# +
print(f"\n1. Age:")
print(f"   - Mean difference (uninsured - insured): {uninsured['age'].mean() - insured['age'].mean():.2f} years")
print(f"   - p-value: {results['age'].p_value:.4f}")

print(f"\n2. Share of men:")
print(f"   - Uninsured: {uninsured.filter(checks['Male']).shape[0] / uninsured.shape[0]:.1%}")
print(f"   - Insured:   {insured.filter(checks['Male']).shape[0] / insured.shape[0]:.1%}")
print(f"   - p-value: {results['male'].p_value:.4f}")

print(f"\n3. Current disorder:")
print(f"   - Uninsured: {uninsured.filter(checks['Current disorder']).shape[0] / uninsured.shape[0]:.1%}")
print(f"   - Insured:   {insured.filter(checks['Current disorder']).shape[0] / insured.shape[0]:.1%}")
print(f"   - p-value: {results['current_disorder'].p_value:.4f}")
