"""
Random forest classifier for batted-ball outcomes.

Contains the model wrapper, hyperparameter validation, training, prediction
and persistence functions.
"""

import logging
from typing import Dict, Optional

import joblib
import numpy as np
import pandas as pd
from sklearn.ensemble import RandomForestClassifier

from config import FEATURE_COLS, TARGET_COL, PREDICTION_COL, OUTCOME_LABELS, FOREST_CONFIG
from .data_processing import create_feature_matrix
from .errors import ConfigurationError, DegenerateInputError

logger = logging.getLogger(__name__)

LOCATION_COL = 'hit_location'
UNSEEN_LOCATION = -1


class HitClassifier:
    """
    Fitted random forest plus the encoding it was trained with.

    Hit location is categorical, and each partition derives its own level
    set. The training levels are stored here so evaluation rows map to the
    same integer codes the forest saw; a level never seen in training maps
    to UNSEEN_LOCATION.

    Attributes:
        forest (RandomForestClassifier): Fitted ensemble
        location_levels (List): Hit location levels present in training
        params (Dict): Hyperparameters used for fitting
    """

    def __init__(self, forest: RandomForestClassifier, location_levels, params: Dict):
        self.forest = forest
        self.location_levels = list(location_levels)
        self.params = dict(params)

    def encode(self, X: pd.DataFrame) -> pd.DataFrame:
        """Replace hit location labels with training-level codes."""
        encoded = X.copy()
        location = pd.Categorical(np.asarray(X[LOCATION_COL]), categories=self.location_levels)
        encoded[LOCATION_COL] = location.codes

        unseen = int((location.codes == UNSEEN_LOCATION).sum())
        if unseen:
            logger.warning(f"{unseen} rows have a hit location not seen in training")

        return encoded.astype(float)


def validate_forest_params(params: Dict) -> Dict:
    """
    Check the enumerated forest configuration and fill in defaults.

    Returns:
        Dict: Complete parameter set

    Raises:
        ConfigurationError: If a count is not a positive integer or more
            features per split are requested than exist
    """
    merged = {**FOREST_CONFIG, **(params or {})}

    for key in ('tree_count', 'features_per_split', 'leaf_size'):
        value = merged[key]
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
            raise ConfigurationError(f"{key} must be a positive integer, got {value!r}")

    if merged['features_per_split'] > len(FEATURE_COLS):
        raise ConfigurationError(
            f"features_per_split ({merged['features_per_split']}) exceeds the "
            f"{len(FEATURE_COLS)} available features"
        )

    return merged


def train_classifier(train_df: pd.DataFrame, params: Optional[Dict] = None) -> HitClassifier:
    """
    Fit a random forest predicting the outcome label from the three features.

    Args:
        train_df (pd.DataFrame): Coerced training partition
        params (Dict): tree_count, features_per_split, leaf_size and an
            optional random_state for the forest's own sampling

    Returns:
        HitClassifier: Fitted model

    Raises:
        ConfigurationError: If the hyperparameters are invalid
        DegenerateInputError: If the partition is empty or has a single outcome class
    """
    params = validate_forest_params(params)

    if train_df.empty:
        raise DegenerateInputError("Training partition is empty")

    X, y = create_feature_matrix(train_df, FEATURE_COLS, TARGET_COL)

    classes = np.unique(y)
    if len(classes) < 2:
        raise DegenerateInputError(
            f"Training partition contains only outcome class {classes.tolist()}"
        )

    location_levels = sorted(pd.unique(np.asarray(X[LOCATION_COL])))

    forest = RandomForestClassifier(
        n_estimators=params['tree_count'],
        max_features=params['features_per_split'],
        min_samples_leaf=params['leaf_size'],
        random_state=params['random_state']
    )

    model = HitClassifier(forest, location_levels, params)

    logger.info(f"Training random forest: {params['tree_count']} trees, "
                f"{params['features_per_split']} features per split, "
                f"leaf size {params['leaf_size']} on {len(X)} rows")

    forest.fit(model.encode(X), y.astype(int))

    for feature, importance in feature_importances(model).items():
        logger.info(f"  {feature}: importance {importance:.3f}")

    return model


def predict_labels(model: HitClassifier, df: pd.DataFrame) -> np.ndarray:
    """
    Predict an outcome label for every row, in input order.

    Args:
        model (HitClassifier): Fitted model
        df (pd.DataFrame): Coerced partition containing the feature columns

    Returns:
        np.ndarray: Predicted labels (0 = out, 1 = hit)
    """
    if df.empty:
        return np.array([], dtype=int)

    X = df[FEATURE_COLS]
    return model.forest.predict(model.encode(X))


def annotate_predictions(df: pd.DataFrame, predictions) -> pd.DataFrame:
    """Return a copy of the partition with the predicted label as a binary category."""
    annotated = df.copy()
    annotated[PREDICTION_COL] = pd.Categorical(np.asarray(predictions, dtype=int),
                                               categories=OUTCOME_LABELS)
    return annotated


def feature_importances(model: HitClassifier) -> pd.Series:
    """Impurity-based importance of each feature, largest first."""
    return pd.Series(model.forest.feature_importances_, index=FEATURE_COLS).sort_values(ascending=False)


def save_model(model: HitClassifier, filename: str):
    """Persist a fitted model with joblib."""
    joblib.dump(model, filename)
    logger.info(f"Model saved to {filename}")


def load_model(filename: str) -> HitClassifier:
    """Load a model written by save_model."""
    return joblib.load(filename)
