"""
Data processing module for the hit prediction system.

Contains the main system class and all data loading, projection, cleaning,
type coercion, shuffling and train/evaluation splitting functionality.
"""

import os
import logging
import math
import numbers
from fractions import Fraction
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from config import (
    DATA_DIR, EVENTS_FILE, LOOKUP_FILE, JOIN_KEY, EVENT_COLUMNS, REQUIRED_COLUMNS,
    NUMERIC_COLUMNS, CODED_COLUMNS, LABEL_COLUMNS, TARGET_COL, OUTCOME_LABELS,
    HIT_LOCATIONS, NULL_SENTINEL, SPLIT_CONFIG
)
from .errors import ConfigurationError, InputSchemaError, MalformedRowError

logger = logging.getLogger(__name__)


class HitPredictionSystem:
    """
    Main system class tying the data preparation stages together.

    The class owns the input locations, the sampling configuration and the
    generator used for shuffling. The split generator is created fresh from
    the configured seed on every split, so the two random sources never
    share state.

    Attributes:
        events_path (str): CSV of batted-ball events
        lookup_path (str): CSV mapping batter ids to display names
        split_config (Dict): max_rows, train_fraction and seed for the splitter
        shuffle_rng: Unseeded generator owned by the shuffler
        model: Trained HitClassifier (set by the entry point)
    """

    def __init__(self, events_path: Optional[str] = None, lookup_path: Optional[str] = None,
                 split_config: Optional[dict] = None):
        """
        Initialize the hit prediction system.

        Args:
            events_path (str): Event source; defaults to DATA_DIR/EVENTS_FILE
            lookup_path (str): Lookup source; defaults to DATA_DIR/LOOKUP_FILE
            split_config (Dict): Overrides for SPLIT_CONFIG entries
        """
        self.events_path = events_path or os.path.join(DATA_DIR, EVENTS_FILE)
        self.lookup_path = lookup_path or os.path.join(DATA_DIR, LOOKUP_FILE)
        self.split_config = {**SPLIT_CONFIG, **(split_config or {})}
        self.shuffle_rng = np.random.default_rng()
        self.model = None

    def load_and_preprocess_data(self) -> pd.DataFrame:
        """
        Load both sources, project to the required columns, drop incomplete rows
        and coerce every column to its semantic type.

        Returns:
            pd.DataFrame: Cleaned dataset indexed by source row position

        Raises:
            InputSchemaError: If a source is unreadable or lacks a required column
            MalformedRowError: If a filtered value still cannot be parsed
        """
        logger.info("Loading and preprocessing data...")

        joined = load_raw_data(self.events_path, self.lookup_path)
        selected = select_columns(joined, REQUIRED_COLUMNS)
        cleaned = filter_missing(selected, REQUIRED_COLUMNS)

        logger.info(f"Kept {len(cleaned)} of {len(selected)} rows after removing missing values")

        return coerce_types(cleaned)

    def sample_partitions(self, df: pd.DataFrame) -> Tuple[pd.DataFrame, pd.DataFrame]:
        """
        Shuffle the cleaned data and split a bounded sample into training and
        evaluation partitions, re-deriving categorical levels on each side.

        Args:
            df (pd.DataFrame): Output of load_and_preprocess_data

        Returns:
            Tuple[pd.DataFrame, pd.DataFrame]: (training, evaluation)
        """
        shuffled = shuffle_rows(df, rng=self.shuffle_rng)

        train_df, eval_df = split_train_evaluation(
            shuffled,
            max_rows=self.split_config['max_rows'],
            train_fraction=self.split_config['train_fraction'],
            seed=self.split_config['seed']
        )

        return coerce_types(train_df), coerce_types(eval_df)


def _read_source(path: str, label: str) -> pd.DataFrame:
    """Read a CSV with every value kept as text."""
    try:
        return pd.read_csv(path, dtype=str)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise InputSchemaError(label, detail=str(e)) from e


def _require_columns(df: pd.DataFrame, columns: Sequence[str], label: str):
    missing = [col for col in columns if col not in df.columns]
    if missing:
        raise InputSchemaError(label, missing=missing)


def load_raw_data(events_path: str, lookup_path: str) -> pd.DataFrame:
    """
    Read the event and lookup sources and left-join them on the batter id.

    Lookup rows are collapsed to one per batter so an event is never
    duplicated by the join. Events without a lookup match keep null name
    columns.

    Args:
        events_path (str): Batted-ball event CSV
        lookup_path (str): Batter id -> name CSV

    Returns:
        pd.DataFrame: Joined table, one row per event, in source order
    """
    events = _read_source(events_path, f"event source '{events_path}'")
    lookup = _read_source(lookup_path, f"lookup source '{lookup_path}'")

    _require_columns(events, EVENT_COLUMNS, f"event source '{events_path}'")
    _require_columns(lookup, [JOIN_KEY], f"lookup source '{lookup_path}'")

    logger.info(f"Loaded {len(events)} event records and {len(lookup)} lookup records")

    duplicated = lookup[JOIN_KEY].duplicated()
    if duplicated.any():
        logger.warning(f"Dropping {int(duplicated.sum())} duplicate lookup entries")
        lookup = lookup[~duplicated]

    # Lookup columns that collide with event columns keep the event value
    lookup = lookup[[JOIN_KEY] + [c for c in lookup.columns if c not in events.columns]]

    joined = events.merge(lookup, on=JOIN_KEY, how='left')
    joined.index = events.index

    return joined


def select_columns(df: pd.DataFrame, columns: Sequence[str]) -> pd.DataFrame:
    """
    Project a table to exactly the named columns, in the given order.

    Raises:
        InputSchemaError: If any named column is absent
    """
    _require_columns(df, columns, "joined dataset")
    return df.loc[:, list(columns)].copy()


def filter_missing(df: pd.DataFrame, columns: Sequence[str] = REQUIRED_COLUMNS) -> pd.DataFrame:
    """
    Remove rows holding a missing value or the text sentinel in any listed column.

    The sentinel is matched against the raw text form, so this must run before
    any numeric coercion.

    Args:
        df (pd.DataFrame): Table containing every listed column
        columns (Sequence[str]): Columns that must be populated

    Returns:
        pd.DataFrame: Order-preserving subsequence of the input
    """
    missing = df[list(columns)].isna().any(axis=1)

    sentinel = pd.Series(False, index=df.index)
    for col in columns:
        sentinel |= np.array([isinstance(v, str) and v.strip() == NULL_SENTINEL for v in df[col]],
                             dtype=bool)

    dropped = int((missing | sentinel).sum())
    if dropped:
        logger.info(f"Removed {dropped} rows with missing or '{NULL_SENTINEL}' values")

    return df.loc[~(missing | sentinel)].copy()


def _parse_numbers(series: pd.Series, column: str) -> pd.Series:
    # Go through the category label's text so stray formatting is normalized
    # before parsing
    text = series.astype('category').astype(str).str.strip()
    parsed = pd.to_numeric(text, errors='coerce').astype(float)

    bad = ~np.isfinite(parsed.to_numpy())
    if bad.any():
        raise MalformedRowError(column, series.index[bad])

    return parsed


def _coerce_codes(series: pd.Series, column: str) -> pd.Series:
    numbers = _parse_numbers(series, column)

    fractional = (numbers != numbers.round()).to_numpy()
    if fractional.any():
        raise MalformedRowError(column, series.index[fractional], reason="has non-integer codes")

    return numbers.astype(int).astype('category')


def _coerce_labels(series: pd.Series, column: str) -> pd.Series:
    text = series.astype(str).str.strip()

    blank = text.eq('').fillna(False).to_numpy(dtype=bool)
    if blank.any():
        raise MalformedRowError(column, series.index[blank], reason="is blank")

    return text.astype('category')


def coerce_types(df: pd.DataFrame) -> pd.DataFrame:
    """
    Coerce every known column to its semantic type.

    Continuous measurements become floats, coded columns become integer
    categories and alignment columns become string categories. Category
    levels are derived from the rows present, so calling this on a partition
    recomputes that partition's label space. Applying it to its own output
    returns an equal frame.

    Args:
        df (pd.DataFrame): Filtered table (columns not in config are passed through)

    Returns:
        pd.DataFrame: New table with coerced columns

    Raises:
        MalformedRowError: If a value cannot be parsed, the location is not a fielder code
            or the outcome label is not binary
    """
    result = df.copy()

    for col in NUMERIC_COLUMNS:
        if col in result.columns:
            result[col] = _parse_numbers(result[col], col)

    for col in CODED_COLUMNS:
        if col in result.columns:
            result[col] = _coerce_codes(result[col], col)

    for col in LABEL_COLUMNS:
        if col in result.columns:
            result[col] = _coerce_labels(result[col], col)

    label_sets = {'hit_location': HIT_LOCATIONS, TARGET_COL: OUTCOME_LABELS}
    for col, labels in label_sets.items():
        if col in result.columns:
            outside = (~result[col].isin(labels)).to_numpy()
            if outside.any():
                raise MalformedRowError(col, result.index[outside],
                                        reason=f"is outside the label set {labels}")

    return result


def shuffle_rows(df: pd.DataFrame, rng: Optional[np.random.Generator] = None) -> pd.DataFrame:
    """
    Return the rows in a uniformly random order.

    The index travels with each row, so row identity survives the shuffle.
    A fresh unseeded generator is used when none is supplied.
    """
    if rng is None:
        rng = np.random.default_rng()
    return df.sample(frac=1, random_state=rng)


def split_train_evaluation(df: pd.DataFrame, max_rows: Optional[int], train_fraction: float,
                           seed: int) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Partition the first max_rows rows into training and evaluation sets.

    floor(train_fraction * max_rows) positions are drawn without replacement
    by a generator seeded from seed; the remaining positions form the
    evaluation set. Both partitions keep the source index and preserve the
    input order.

    Args:
        df (pd.DataFrame): Shuffled table
        max_rows (int): Number of leading rows to sample from (None = all rows)
        train_fraction (float): Share of sampled rows used for training, in (0, 1]
        seed (int): Seed for the split generator

    Returns:
        Tuple[pd.DataFrame, pd.DataFrame]: (training, evaluation)

    Raises:
        ConfigurationError: If train_fraction or max_rows is out of range
    """
    if max_rows is None:
        max_rows = len(df)

    validate_split_config(max_rows, train_fraction, len(df))

    subset = df.iloc[:max_rows]
    # Exact arithmetic: 0.29 * 100 is 28.999... in binary floating point
    n_train = math.floor(Fraction(str(train_fraction)) * max_rows)

    rng = np.random.default_rng(seed)
    in_train = np.zeros(max_rows, dtype=bool)
    in_train[rng.choice(max_rows, size=n_train, replace=False)] = True

    train_df = subset.iloc[in_train].copy()
    eval_df = subset.iloc[~in_train].copy()

    logger.info(f"Split {max_rows} rows into {len(train_df)} training "
                f"and {len(eval_df)} evaluation rows")

    return train_df, eval_df


def validate_split_config(max_rows: int, train_fraction: float, available_rows: int):
    """Raise ConfigurationError unless 0 < train_fraction <= 1 and 0 < max_rows <= available_rows."""
    if isinstance(train_fraction, (bool, np.bool_)) or not isinstance(train_fraction, numbers.Real):
        raise ConfigurationError(f"train_fraction must be a number, got {train_fraction!r}")
    if not 0 < train_fraction <= 1:
        raise ConfigurationError(f"train_fraction must be in (0, 1], got {train_fraction}")

    if isinstance(max_rows, bool) or not isinstance(max_rows, (int, np.integer)):
        raise ConfigurationError(f"max_rows must be an integer, got {max_rows!r}")
    if max_rows <= 0:
        raise ConfigurationError(f"max_rows must be positive, got {max_rows}")
    if max_rows > available_rows:
        raise ConfigurationError(
            f"max_rows ({max_rows}) exceeds the {available_rows} rows available after cleaning"
        )


def create_feature_matrix(df: pd.DataFrame, feature_cols: List[str],
                          label_col: str) -> Tuple[pd.DataFrame, np.ndarray]:
    """
    Extract the model inputs and targets from a coerced partition.

    Categorical features are returned as their category labels; the
    classifier owns the numeric encoding so it can align evaluation rows
    to the levels it was trained on.
    """
    X = df[feature_cols].copy()
    y = df[label_col].to_numpy()
    return X, y
