"""
Batted Ball Hit Prediction

A tabular machine learning pipeline that predicts whether a batted ball
becomes a hit from exit velocity, launch angle and hit location, using
Statcast event data and a random forest classifier.
"""

from .data_processing import (
    HitPredictionSystem, load_raw_data, select_columns, filter_missing,
    coerce_types, shuffle_rows, split_train_evaluation
)
from .models import HitClassifier, train_classifier, predict_labels, annotate_predictions
from .analysis import evaluate_predictions, label_rate_table, confusion_table
from .reporting import build_summary_report, save_summary_report, export_results
from .errors import (
    HitPredictionError, InputSchemaError, MalformedRowError,
    DegenerateInputError, ConfigurationError
)

__version__ = "1.0"

__all__ = [
    'HitPredictionSystem',
    'load_raw_data',
    'select_columns',
    'filter_missing',
    'coerce_types',
    'shuffle_rows',
    'split_train_evaluation',
    'HitClassifier',
    'train_classifier',
    'predict_labels',
    'annotate_predictions',
    'evaluate_predictions',
    'label_rate_table',
    'confusion_table',
    'build_summary_report',
    'save_summary_report',
    'export_results',
    'HitPredictionError',
    'InputSchemaError',
    'MalformedRowError',
    'DegenerateInputError',
    'ConfigurationError'
]
