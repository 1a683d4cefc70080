"""
Report generation and export functionality for hit prediction results.

Contains functions for building the human-readable summary and exporting metrics to JSON.
"""

import json
import logging
from typing import Dict, Optional

import pandas as pd

from config import TARGET_COL, PREDICTION_COL, REPORT_CONFIG

logger = logging.getLogger(__name__)


def build_summary_report(cleaned_df: pd.DataFrame, results: Optional[Dict],
                         actual_rates: Optional[pd.Series] = None,
                         predicted_rates: Optional[pd.Series] = None,
                         confusion: Optional[pd.DataFrame] = None,
                         label_counts: Optional[pd.Series] = None) -> str:
    """Assemble the plain-text summary of a pipeline run.

    Args:
        cleaned_df (pd.DataFrame): Cleaned dataset; a sample of its rows is shown.
        results (Dict): Output of evaluate_predictions, or None when the
            evaluation partition was empty.
        actual_rates (pd.Series): Proportion of each true label in the evaluation partition.
        predicted_rates (pd.Series): Proportion of each predicted label.
        confusion (pd.DataFrame): Output of confusion_table.
        label_counts (pd.Series): Frequency of each true label in the cleaned data.

    Returns:
        str: Report text
    """
    lines = ["BATTED BALL HIT PREDICTION - ANALYSIS SUMMARY", "=" * 50, ""]

    lines += ["CLEANED DATA SAMPLE", "-" * 20]
    lines.append(cleaned_df.head(REPORT_CONFIG['sample_rows']).to_string())
    lines.append(f"({len(cleaned_df)} rows after cleaning)")
    lines.append("")

    if label_counts is not None:
        lines += [f"TRUE LABEL FREQUENCY ({TARGET_COL})", "-" * 20]
        lines.append(label_counts.to_string())
        lines.append("")

    lines += ["MODEL PERFORMANCE", "-" * 20]
    if results is None:
        lines.append("Insufficient data: the evaluation partition is empty, accuracy is undefined.")
        return "\n".join(lines) + "\n"

    lines.append(f"Evaluation rows: {results['n_rows']}")
    lines.append(f"Accuracy: {results['accuracy']:.4f}")
    lines.append(f"Actual hit rate: {results['actual_positive_rate']:.4f}")
    lines.append(f"Predicted hit rate: {results['predicted_positive_rate']:.4f}")
    lines.append("")

    if actual_rates is not None and predicted_rates is not None:
        lines += ["ACTUAL VS PREDICTED LABEL RATES", "-" * 20]
        rates = pd.concat([actual_rates.rename(TARGET_COL), predicted_rates.rename(PREDICTION_COL)], axis=1)
        lines.append(rates.round(4).to_string())
        lines.append("")

    if confusion is not None:
        lines += ["CONFUSION MATRIX", "-" * 20]
        lines.append(confusion.to_string())
        lines.append("")

    return "\n".join(lines)


def save_summary_report(report: str, filename: str = REPORT_CONFIG['summary_file']):
    """Write the summary text to disk."""
    with open(filename, 'w') as f:
        f.write(report)

    logger.info(f"Summary report saved to {filename}")


def export_results(results: Dict, params: Dict, split_config: Dict,
                   feature_importance: Optional[pd.Series] = None,
                   filename: str = REPORT_CONFIG['json_file']):
    """Export evaluation metrics and run configuration to JSON format.

    Args:
        results (Dict): Output of evaluate_predictions
        params (Dict): Forest hyperparameters used for training
        split_config (Dict): Sampling configuration used for the split
        feature_importance (pd.Series): Per-feature importances from the forest
        filename (str): Output filename for JSON export
    """
    export_data = {
        "model_performance": {
            "accuracy": float(results['accuracy']),
            "actual_positive_rate": float(results['actual_positive_rate']),
            "predicted_positive_rate": float(results['predicted_positive_rate']),
            "evaluation_rows": int(results['n_rows'])
        },
        "forest_parameters": {k: v for k, v in params.items()},
        "split_configuration": {k: v for k, v in split_config.items()},
        "feature_importance": (
            {k: float(v) for k, v in feature_importance.items()} if feature_importance is not None else {}
        )
    }

    with open(filename, 'w') as f:
        json.dump(export_data, f, indent=2, default=str)

    logger.info(f"Results exported to {filename}")
