# ---
# jupyter:
#   jupytext:
#     cell_metadata_filter: title,-all
#     formats: ipynb,py:percent
#     text_representation:
#       extension: .py
#       format_name: percent
#       format_version: '1.3'
#       jupytext_version: 1.17.3
#   kernelspec:
#     display_name: Mental Health in Tech
#     language: python
#     name: mental-health-in-tech
# ---

# %% [markdown]
# The OSMI Mental Health in Tech Survey 2016 dataset is used for this analysis.
#
# The goal of this notebook is to get a feel for who answered the survey, and which mental health conditions they report.
# The next notebook compares insured and uninsured self-employed respondents.

# %% Imports
# Imports
import logging
from pathlib import Path

import matplotlib.pyplot as plt
import polars as pl

from mental_health_survey.columns import COLUMN_MAPPING, indicator_columns
from mental_health_survey.dataset import load_survey, summarize_missing
from mental_health_survey.gender import GENDER_RULES
from mental_health_survey.plots import (
    PREVALENCE_GENDERS,
    condition_correlation,
    condition_prevalence,
    gender_counts,
    plot_condition_correlation,
    plot_condition_prevalence,
    plot_gender_counts,
    plot_state_choropleth,
    state_counts,
)

logging.basicConfig(level=logging.INFO)

# %% Load dataset
# Read Cleaned Data
FILE_NAME: str = "../../data/cleaned/mental-health-in-tech-2016.csv"
FIGURES_DIR: Path = Path("../../figures")

DATASET: pl.DataFrame = load_survey(FILE_NAME)

# %% [markdown]
# # Dataset Overview
# The survey questions are long, so they were renamed to short identifiers on load:

# %%
for question, column in COLUMN_MAPPING.items():
    print(f"- {column:<18} <- {question}")

print(f"\nTotal rows: {DATASET.shape[0]:,}")
print(f"Total columns: {DATASET.shape[1]}")
print(f"Memory usage: {DATASET.estimated_size('mb'):.2f} MB")

# %% [markdown]
# # Missing Data
# The following columns have null value rows:

# %%
display(summarize_missing(DATASET))

# %% [markdown]
# `insured` is only asked to self-employed respondents, and `state` only to US residents, so their nulls are expected.

# %% [markdown]
# # Gender
# Gender was a free-text question, which leaves a lot of spellings:

# %%
print(f"Unique gender answers: {DATASET['gender'].n_unique()}")
display(DATASET["gender"].value_counts().sort("count", descending=True).head(20))

# %% [markdown]
# These were coded into five categories on load. The rules are checked in order and the first match wins,
# so e.g. "Female (trans)" is coded as Transgender rather than Female:

# %%
for rule in GENDER_RULES:
    print(f"{rule.category:<12} substrings={rule.substrings} exact={rule.exact} unless={rule.excluded}")

# %% What did each raw answer end up as?
display(
    DATASET.group_by("gender", "coded_gender")
    .len()
    .sort("len", descending=True)
    .head(30)
)

# %%
display(gender_counts(DATASET))
plot_gender_counts(DATASET, output_path=FIGURES_DIR / "gender_counts.png")
plt.show()  # pyright: ignore[reportUnknownMemberType]

# %% [markdown]
# Non-binary, transgender and other answers are too few to analyse on their own.

# %% [markdown]
# # Location
# Where in the US do the respondents live?

# %%
print(f"Respondents with a resolved US state: {DATASET['state_code'].drop_nulls().len():,}")
display(state_counts(DATASET).head(10))

# %%
fig = plot_state_choropleth(DATASET, output_path=FIGURES_DIR / "state_choropleth.html")
fig.show()

# %% [markdown]
# # Conditions
# The cleaned file flags each diagnosed condition in its own 0/1 column. Respondents can have several.

# %%
conditions = indicator_columns(DATASET.columns)
print("Condition columns:")
for condition in conditions:
    print(f"- {condition}")

# %% [markdown]
# ## Prevalence by Gender
# Only female and male respondents are compared; the other categories are too small.

# %%
for gender in PREVALENCE_GENDERS:
    print(f"\n{gender} prevalence:")
    display(condition_prevalence(DATASET, gender).sort("prevalence", descending=True))

plot_condition_prevalence(DATASET, output_path=FIGURES_DIR / "condition_prevalence.png")
plt.show()  # pyright: ignore[reportUnknownMemberType]

# %% [markdown]
# ## Correlation Matrix
# Which conditions tend to be reported together?

# %%
display(condition_correlation(DATASET))

plot_condition_correlation(DATASET, output_path=FIGURES_DIR / "condition_correlation.png")
plt.show()  # pyright: ignore[reportUnknownMemberType]

# %% [markdown]
# # Summary
# 1. Gender
#    - Free-text answers are coded into five categories on load; only Female and Male are large enough to compare
# 2. Location
#    - Only respondents with a recognised US state or territory are mapped
# 3. Conditions
#    - Prevalence and correlation are computed over the condition flag columns only
#
# The next notebook narrows down to self-employed US respondents and tests for differences by insurance.
