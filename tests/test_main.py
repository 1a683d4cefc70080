import json

import pytest

from hit_prediction.errors import ConfigurationError
from main import main, parse_args, run


def _args(source_files, tmp_path, *extra):
    events_path, lookup_path = source_files
    return [
        '--events', events_path,
        '--lookup', lookup_path,
        '--max-rows', '300',
        '--trees', '20',
        '--forest-seed', '0',
        '--report', str(tmp_path / "summary.txt"),
        *extra
    ]


class TestParseArgs:
    def test_defaults_come_from_config(self) -> None:
        args = parse_args([])

        assert args.max_rows == 40000
        assert args.train_fraction == 0.75
        assert args.seed == 42
        assert args.trees == 150
        assert args.features_per_split == 3
        assert args.forest_seed is None
        assert args.json is None

    def test_json_flag_without_path_uses_default_name(self) -> None:
        assert parse_args(['--json']).json == 'hit_prediction_results.json'


class TestMain:
    def test_end_to_end(self, source_files, tmp_path) -> None:
        json_path = tmp_path / "results.json"
        model_path = tmp_path / "forest.joblib"

        system, model, results, eval_df, report = main(parse_args(
            _args(source_files, tmp_path, '--json', str(json_path), '--model-out', str(model_path))
        ))

        assert system.model is model
        assert len(eval_df) == 75
        assert results['n_rows'] == 75
        assert 0.0 <= results['accuracy'] <= 1.0
        assert "Accuracy:" in report
        assert (tmp_path / "summary.txt").read_text() == report
        assert json.loads(json_path.read_text())['model_performance']['evaluation_rows'] == 75
        assert model_path.exists()

    def test_full_training_fraction_reports_insufficient_data(self, source_files, tmp_path) -> None:
        _, _, results, eval_df, report = main(parse_args(
            _args(source_files, tmp_path, '--train-fraction', '1.0')
        ))

        assert results is None
        assert eval_df.empty
        assert "Insufficient data" in report

    def test_oversized_sample_raises_configuration_error(self, source_files, tmp_path) -> None:
        args = parse_args(_args(source_files, tmp_path))
        args.max_rows = 5000

        with pytest.raises(ConfigurationError):
            main(args)

        assert not (tmp_path / "summary.txt").exists()


class TestRun:
    def test_success_exit_status(self, source_files, tmp_path) -> None:
        assert run(_args(source_files, tmp_path)) == 0

    def test_bad_fraction_exit_status(self, source_files, tmp_path, capsys) -> None:
        assert run(_args(source_files, tmp_path, '--train-fraction', '1.5')) == 1
        assert "Pipeline aborted" in capsys.readouterr().err

    def test_missing_source_exit_status(self, tmp_path, capsys) -> None:
        code = run(['--events', str(tmp_path / "none.csv"), '--lookup', str(tmp_path / "none.csv")])

        assert code == 1
        assert "Could not read" in capsys.readouterr().err
