"""Loading the cleaned survey export."""

import logging
from pathlib import Path

import polars as pl

from mental_health_survey.columns import COLUMN_MAPPING
from mental_health_survey.gender import with_coded_gender
from mental_health_survey.states import with_state_code

logger = logging.getLogger(__name__)


def load_survey(path: str | Path) -> pl.DataFrame:
    """Reads the cleaned CSV, renames the question headers and adds the derived columns.

    The returned frame carries two extra columns:
        coded_gender -> one of Male, Female, Non-binary, Transgender, Other
        state_code   -> two-letter US postal code, null outside the US
    """
    df: pl.DataFrame = pl.read_csv(path)
    logger.info("Loaded %s: %d rows, %d columns", path, df.height, df.width)

    missing = [question for question in COLUMN_MAPPING if question not in df.columns]
    if missing:
        raise ValueError(f"Survey export is missing expected questions: {missing}")

    df = df.rename(COLUMN_MAPPING)
    df = with_coded_gender(df)
    df = with_state_code(df)

    logger.info(
        "Coded gender for %d rows, resolved %d US state codes",
        df.height,
        df["state_code"].drop_nulls().len(),
    )
    return df


def summarize_missing(df: pl.DataFrame) -> pl.DataFrame:
    """Null counts and percentages for every column that has any, largest first."""
    return (
        df.null_count()
        .transpose(include_header=True, column_names=["null_count"])
        .with_columns((pl.col("null_count") / df.height * 100).alias("null_percentage"))
        .filter(pl.col("null_count") > 0)
        .sort("null_count", descending=True)
    )
