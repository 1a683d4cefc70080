"""
Main execution file for the Batted Ball Hit Prediction System.

This file orchestrates the complete pipeline from data loading through
sampling, random forest training, evaluation, and report generation.
"""

import argparse
import logging
import sys
import warnings
from typing import List, Optional

from hit_prediction.data_processing import HitPredictionSystem
from hit_prediction.models import (
    train_classifier, predict_labels, annotate_predictions, feature_importances, save_model,
    validate_forest_params
)
from hit_prediction.analysis import (
    evaluate_predictions, label_frequency_table, label_rate_table, confusion_table
)
from hit_prediction.reporting import build_summary_report, save_summary_report, export_results
from hit_prediction.errors import HitPredictionError, DegenerateInputError
from config import TARGET_COL, PREDICTION_COL, SPLIT_CONFIG, FOREST_CONFIG, REPORT_CONFIG

# Configure logging and suppress warnings for cleaner output
warnings.filterwarnings('ignore')
logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line overrides for input paths, sampling and forest settings."""
    parser = argparse.ArgumentParser(description="Predict batted-ball hits with a random forest.")
    parser.add_argument('--events', help="Batted-ball event CSV")
    parser.add_argument('--lookup', help="Batter id to name CSV")
    parser.add_argument('--max-rows', type=int, default=SPLIT_CONFIG['max_rows'],
                        help="Rows sampled after shuffling")
    parser.add_argument('--train-fraction', type=float, default=SPLIT_CONFIG['train_fraction'],
                        help="Share of sampled rows used for training, in (0, 1]")
    parser.add_argument('--seed', type=int, default=SPLIT_CONFIG['seed'],
                        help="Seed for the train/evaluation split")
    parser.add_argument('--trees', type=int, default=FOREST_CONFIG['tree_count'])
    parser.add_argument('--features-per-split', type=int, default=FOREST_CONFIG['features_per_split'])
    parser.add_argument('--leaf-size', type=int, default=FOREST_CONFIG['leaf_size'])
    parser.add_argument('--forest-seed', type=int, default=FOREST_CONFIG['random_state'],
                        help="Seed for tree sampling (unseeded by default)")
    parser.add_argument('--report', default=REPORT_CONFIG['summary_file'],
                        help="Where to write the text summary")
    parser.add_argument('--json', nargs='?', const=REPORT_CONFIG['json_file'],
                        help="Export the metrics as JSON (default file name when no path is given)")
    parser.add_argument('--model-out', help="Optional joblib file for the fitted forest")
    return parser.parse_args(argv)


def main(args: Optional[argparse.Namespace] = None):
    """Run the end-to-end pipeline: load, clean, sample, train, evaluate, report.

    Steps:
        1) Load and join the event and lookup sources, project and clean them.
        2) Shuffle and split a bounded sample into training and evaluation sets.
        3) Train the random forest on the training partition.
        4) Predict and score the evaluation partition.
        5) Write the summary report and any optional exports.

    Returns:
        Tuple: (system, model, results, eval_df, report)
            - system: HitPredictionSystem instance holding the fitted model.
            - model: Trained HitClassifier.
            - results: Dict of evaluation metrics, or None for an empty evaluation partition.
            - eval_df: Evaluation partition annotated with predictions.
            - report: Summary report text.
    """
    if args is None:
        args = parse_args([])

    logger.info("Starting hit prediction pipeline...")

    split_config = {
        'max_rows': args.max_rows,
        'train_fraction': args.train_fraction,
        'seed': args.seed
    }
    forest_params = {
        'tree_count': args.trees,
        'features_per_split': args.features_per_split,
        'leaf_size': args.leaf_size,
        'random_state': args.forest_seed
    }

    try:
        forest_params = validate_forest_params(forest_params)
        system = HitPredictionSystem(args.events, args.lookup, split_config=split_config)

        logger.info("Step 1: Loading and cleaning data...")
        df = system.load_and_preprocess_data()
        label_counts = label_frequency_table(df[TARGET_COL])
        logger.info(f"Outcome distribution: {label_counts.to_dict()}")

        logger.info("Step 2: Shuffling and splitting...")
        train_df, eval_df = system.sample_partitions(df)

        logger.info("Step 3: Training random forest...")
        model = train_classifier(train_df, forest_params)
        system.model = model

        logger.info("Step 4: Evaluating predictions...")
        eval_df = annotate_predictions(eval_df, predict_labels(model, eval_df))

        try:
            results = evaluate_predictions(eval_df)
        except DegenerateInputError as e:
            logger.error(str(e))
            results = None

        if results is None:
            report = build_summary_report(df, None, label_counts=label_counts)
        else:
            report = build_summary_report(
                df, results,
                actual_rates=label_rate_table(eval_df[TARGET_COL]),
                predicted_rates=label_rate_table(eval_df[PREDICTION_COL]),
                confusion=confusion_table(eval_df),
                label_counts=label_counts
            )

        logger.info("Step 5: Writing report...")
        print(report)
        save_summary_report(report, args.report)

        if args.json and results is not None:
            export_results(results, model.params, split_config,
                           feature_importance=feature_importances(model), filename=args.json)

        if args.model_out:
            save_model(model, args.model_out)

        logger.info("Hit prediction pipeline completed successfully!")

        return system, model, results, eval_df, report

    except Exception as e:
        logger.error(f"Error in main execution: {str(e)}")
        raise


def run(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point; returns the process exit status."""
    try:
        _, _, results, _, _ = main(parse_args(argv))
    except HitPredictionError as e:
        print(f"Pipeline aborted: {e}", file=sys.stderr)
        return 1
    return 0 if results is not None else 1


if __name__ == "__main__":
    sys.exit(run())
