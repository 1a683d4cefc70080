"""
Evaluation module comparing predicted and actual batted-ball outcomes.

Contains the accuracy and positive-rate computation plus the frequency and
confusion tables used in the report.
"""

import logging
from typing import Dict

import numpy as np
import pandas as pd
from sklearn.metrics import confusion_matrix

from config import TARGET_COL, PREDICTION_COL, POSITIVE_LABEL, OUTCOME_LABELS, TARGET_NAMES
from .errors import DegenerateInputError

logger = logging.getLogger(__name__)


def evaluate_predictions(df: pd.DataFrame, true_col: str = TARGET_COL,
                         predicted_col: str = PREDICTION_COL,
                         positive_label=POSITIVE_LABEL) -> Dict:
    """Score a partition annotated with true and predicted labels.

    Args:
        df (pd.DataFrame): Partition holding both label columns.
        true_col (str): Column with the observed outcome.
        predicted_col (str): Column with the model's outcome.
        positive_label: Label counted as a hit.

    Returns:
        Dict: Dictionary containing:
            - accuracy (float): Share of rows where prediction equals truth.
            - actual_positive_rate (float): Share of rows whose true label is positive.
            - predicted_positive_rate (float): Share of rows predicted positive.
            - n_rows (int): Rows scored.

    Raises:
        DegenerateInputError: If the partition has no rows, since every rate
            would divide by zero.
    """
    n_rows = len(df)
    if n_rows == 0:
        raise DegenerateInputError("Evaluation partition is empty: insufficient data to score predictions")

    # Category columns with different level sets cannot be compared directly
    actual = np.asarray(df[true_col], dtype=object)
    predicted = np.asarray(df[predicted_col], dtype=object)

    results = {
        'accuracy': float(np.sum(actual == predicted)) / n_rows,
        'actual_positive_rate': float(np.sum(actual == positive_label)) / n_rows,
        'predicted_positive_rate': float(np.sum(predicted == positive_label)) / n_rows,
        'n_rows': n_rows
    }

    logger.info(f"Accuracy: {results['accuracy']:.4f} on {n_rows} rows")
    logger.info(f"Actual hit rate: {results['actual_positive_rate']:.4f}, "
                f"predicted hit rate: {results['predicted_positive_rate']:.4f}")

    return results


def label_frequency_table(series: pd.Series) -> pd.Series:
    """Count of each outcome label, including labels with no rows."""
    values = pd.Series(np.asarray(series, dtype=object))
    return values.value_counts().reindex(OUTCOME_LABELS, fill_value=0).rename('count')


def label_rate_table(series: pd.Series) -> pd.Series:
    """Proportion of rows carrying each outcome label."""
    counts = label_frequency_table(series)
    total = counts.sum()
    if total == 0:
        raise DegenerateInputError("Cannot compute label rates for an empty column")
    return (counts / total).rename('rate')


def confusion_table(df: pd.DataFrame, true_col: str = TARGET_COL,
                    predicted_col: str = PREDICTION_COL) -> pd.DataFrame:
    """Confusion matrix with actual outcomes as rows and predictions as columns."""
    cm = confusion_matrix(np.asarray(df[true_col], dtype=int),
                          np.asarray(df[predicted_col], dtype=int),
                          labels=OUTCOME_LABELS)
    return pd.DataFrame(cm,
                        index=[f"actual {name}" for name in TARGET_NAMES],
                        columns=[f"predicted {name}" for name in TARGET_NAMES])
