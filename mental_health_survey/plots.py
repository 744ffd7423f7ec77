"""Descriptive charts for the survey.

Every chart is independent: each function takes the enriched survey frame (or
a cohort of it), draws one figure and hands it back. Pass `output_path` to also
write it under the figures directory.
"""

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import plotly.express as px
import plotly.graph_objects as go
import polars as pl
import seaborn as sns
from matplotlib.figure import Figure

from mental_health_survey.columns import indicator_columns
from mental_health_survey.gender import FEMALE, GENDER_CATEGORIES, MALE

logger = logging.getLogger(__name__)

# Other categories are too small to estimate prevalence from
PREVALENCE_GENDERS: list[str] = [FEMALE, MALE]

coolwarm = sns.color_palette("coolwarm", 8)


def _save(fig: Figure, output_path: str | Path | None) -> None:
    if output_path is not None:
        fig.savefig(output_path, dpi=300)
        logger.info("Saved figure to %s", output_path)


# Gender counts


def gender_counts(df: pl.DataFrame) -> pl.DataFrame:
    """Respondents per coded gender, in display order, including empty categories."""
    counts = df["coded_gender"].value_counts()
    lookup = dict(zip(counts["coded_gender"].to_list(), counts["count"].to_list()))
    return pl.DataFrame(
        {
            "coded_gender": GENDER_CATEGORIES,
            "count": [lookup.get(category, 0) for category in GENDER_CATEGORIES],
        }
    )


def plot_gender_counts(
    df: pl.DataFrame, output_path: str | Path | None = None
) -> Figure:
    counts = gender_counts(df)

    fig, ax = plt.subplots(figsize=(8, 5))
    sns.barplot(
        x=counts["coded_gender"].to_list(),
        y=counts["count"].to_list(),
        hue=counts["coded_gender"].to_list(),
        palette="coolwarm",
        legend=False,
        ax=ax,
    )
    for container in ax.containers:
        ax.bar_label(container)

    ax.set_title("Respondents by Gender")
    ax.set_xlabel("Gender")
    ax.set_ylabel("Respondents")

    fig.tight_layout()
    _save(fig, output_path)
    return fig


# Respondents by US state


def state_counts(df: pl.DataFrame) -> pl.DataFrame:
    """Respondents per US state code, ignoring rows without a resolved code."""
    return (
        df.filter(pl.col("state_code").is_not_null())
        .group_by("state_code")
        .len(name="respondents")
        .sort("respondents", descending=True)
    )


def plot_state_choropleth(
    df: pl.DataFrame, output_path: str | Path | None = None
) -> go.Figure:
    counts = state_counts(df)

    fig = px.choropleth(
        locations=counts["state_code"].to_list(),
        color=counts["respondents"].to_list(),
        locationmode="USA-states",
        scope="usa",
        color_continuous_scale="Blues",
        labels={"color": "Respondents"},
        title="Respondents by US State",
    )

    if output_path is not None:
        fig.write_html(output_path)
        logger.info("Saved choropleth to %s", output_path)
    return fig


# Condition prevalence by gender


def condition_prevalence(
    df: pl.DataFrame, gender: str, columns: list[str] | None = None
) -> pl.DataFrame:
    """Share of respondents of one coded gender flagged for each condition.

    Each value is the column sum divided by the number of respondents in the
    subset, so it always falls within [0, 1].
    """
    columns = columns or indicator_columns(df.columns)
    subset = df.filter(pl.col("coded_gender") == gender)
    means = subset.select(pl.col(columns).cast(pl.Float64).mean())

    return pl.DataFrame(
        {"condition": columns, "prevalence": list(means.row(0))},
        schema={"condition": pl.String, "prevalence": pl.Float64},
    )


def plot_condition_prevalence(
    df: pl.DataFrame,
    output_path: str | Path | None = None,
    genders: list[str] = PREVALENCE_GENDERS,
) -> Figure:
    columns = indicator_columns(df.columns)

    fig, axes = plt.subplots(1, len(genders), figsize=(16, 6))
    axes = np.atleast_1d(axes)

    palette = sns.color_palette("coolwarm", len(genders))
    for ax, gender, color in zip(axes, genders, palette):
        prevalence = condition_prevalence(df, gender, columns)
        n = df.filter(pl.col("coded_gender") == gender).height

        sns.barplot(
            x=prevalence["prevalence"].to_list(),
            y=prevalence["condition"].to_list(),
            color=color,
            ax=ax,
        )
        ax.set_xlim(0, 1)
        ax.set_title(f"{gender} (n={n:,})")
        ax.set_xlabel("Prevalence")

    axes[0].set_ylabel("Condition")
    fig.suptitle("Condition Prevalence by Gender")

    fig.tight_layout()
    _save(fig, output_path)
    return fig


# Correlation between conditions


def condition_correlation(
    df: pl.DataFrame, columns: list[str] | None = None
) -> pl.DataFrame:
    """Pearson correlation matrix over the condition indicator columns.

    The diagonal is pinned to 1, including for columns with no variance
    (whose off-diagonal entries are NaN).
    """
    columns = columns or indicator_columns(df.columns)
    matrix = df.select(pl.col(columns).cast(pl.Float64)).drop_nulls().to_numpy()

    with np.errstate(invalid="ignore", divide="ignore"):
        corr = np.atleast_2d(np.corrcoef(matrix, rowvar=False))
    np.fill_diagonal(corr, 1.0)

    return pl.DataFrame(corr, schema=columns, orient="row")


def plot_condition_correlation(
    df: pl.DataFrame, output_path: str | Path | None = None
) -> Figure:
    corr = condition_correlation(df)

    fig, ax = plt.subplots(figsize=(12, 10))
    sns.heatmap(
        corr.to_numpy(),
        xticklabels=corr.columns,
        yticklabels=corr.columns,
        annot=True,
        cmap="coolwarm",
        center=0,
        vmin=-1,
        vmax=1,
        fmt=".2f",
        square=True,
        linewidths=1,
        cbar_kws={"shrink": 0.8},
        ax=ax,
    )
    ax.set_title("Correlation Between Conditions")

    fig.tight_layout()
    _save(fig, output_path)
    return fig


# Age spread by insurance


def plot_age_by_insurance(
    uninsured: pl.DataFrame,
    insured: pl.DataFrame,
    output_path: str | Path | None = None,
) -> Figure:
    """Boxplots of age per cohort, to eyeball the equal-variance assumption."""
    uninsured_age = uninsured["age"].drop_nulls().to_list()
    insured_age = insured["age"].drop_nulls().to_list()
    labels = ["Uninsured"] * len(uninsured_age) + ["Insured"] * len(insured_age)

    fig, ax = plt.subplots(figsize=(8, 6))
    sns.boxplot(
        x=labels,
        y=uninsured_age + insured_age,
        hue=labels,
        palette=[coolwarm[1], coolwarm[6]],
        legend=False,
        ax=ax,
    )
    ax.set_title("Age of Self-Employed US Respondents by Insurance")
    ax.set_xlabel("Mental health coverage")
    ax.set_ylabel("Age")

    fig.tight_layout()
    _save(fig, output_path)
    return fig
