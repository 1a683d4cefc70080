import pandas as pd
import pytest

from hit_prediction.analysis import (
    confusion_table,
    evaluate_predictions,
    label_frequency_table,
    label_rate_table,
)
from hit_prediction.errors import DegenerateInputError
from hit_prediction.models import annotate_predictions


def _partition(actual, predicted) -> pd.DataFrame:
    frame = pd.DataFrame({'babip_value': pd.Series(actual).astype('category')})
    return annotate_predictions(frame, predicted)


class TestEvaluatePredictions:
    def test_known_values(self) -> None:
        results = evaluate_predictions(_partition([1, 0, 1], [1, 0, 0]))

        assert results['accuracy'] == pytest.approx(2 / 3)
        assert results['actual_positive_rate'] == pytest.approx(2 / 3)
        assert results['predicted_positive_rate'] == pytest.approx(1 / 3)
        assert results['n_rows'] == 3

    def test_perfect_prediction(self) -> None:
        actual = [1, 0, 0, 1, 1, 0]
        assert evaluate_predictions(_partition(actual, actual))['accuracy'] == 1.0

    def test_every_prediction_flipped(self) -> None:
        actual = [1, 0, 0, 1, 1, 0]
        flipped = [1 - label for label in actual]

        assert evaluate_predictions(_partition(actual, flipped))['accuracy'] == 0.0

    def test_true_labels_with_single_level(self) -> None:
        # true column has levels {0}, predicted has {0, 1}
        results = evaluate_predictions(_partition([0, 0, 0, 0], [0, 1, 0, 0]))

        assert results['accuracy'] == pytest.approx(0.75)
        assert results['actual_positive_rate'] == 0.0

    def test_empty_partition_raises(self) -> None:
        with pytest.raises(DegenerateInputError, match="insufficient data"):
            evaluate_predictions(_partition([], []))

    def test_custom_columns(self) -> None:
        frame = pd.DataFrame({'truth': [1, 1], 'guess': [1, 0]})
        results = evaluate_predictions(frame, true_col='truth', predicted_col='guess')

        assert results['accuracy'] == 0.5


class TestLabelTables:
    def test_frequency_includes_absent_labels(self) -> None:
        counts = label_frequency_table(pd.Series([0, 0, 0], dtype='category'))
        assert counts.to_dict() == {0: 3, 1: 0}

    def test_rates_sum_to_one(self) -> None:
        rates = label_rate_table(pd.Series([1, 0, 1, 1]))

        assert rates[1] == pytest.approx(0.75)
        assert rates[0] == pytest.approx(0.25)

    def test_rates_of_empty_column_raise(self) -> None:
        with pytest.raises(DegenerateInputError):
            label_rate_table(pd.Series([], dtype=int))


class TestConfusionTable:
    def test_counts(self) -> None:
        table = confusion_table(_partition([1, 0, 1, 0], [1, 0, 0, 1]))

        assert table.loc['actual Hit', 'predicted Hit'] == 1
        assert table.loc['actual Hit', 'predicted Out'] == 1
        assert table.loc['actual Out', 'predicted Out'] == 1
        assert table.loc['actual Out', 'predicted Hit'] == 1
        assert table.to_numpy().sum() == 4
