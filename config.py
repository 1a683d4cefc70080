"""
Configuration file for the batted-ball hit prediction system.

Contains all constants, column lists, and configuration parameters used throughout the project.
"""

# File paths (overridable from the command line)
DATA_DIR = "data"
EVENTS_FILE = "statcast_batted_balls.csv"   # One row per batted ball
LOOKUP_FILE = "batter_lookup.csv"           # batter id -> display name

# Join key shared by the event and lookup sources
JOIN_KEY = 'batter'

# Columns the event source must provide
EVENT_COLUMNS = [
    'batter',
    'launch_speed',           # Exit velocity (mph)
    'launch_angle',           # Vertical launch angle (degrees)
    'hit_distance_sc',        # Projected distance (feet)
    'hit_location',           # Fielder position code (1-9)
    'if_fielding_alignment',  # Standard / Strategic / Infield shift
    'of_fielding_alignment',  # Standard / Strategic / 4th outfielder
    'babip_value'             # 1 = hit, 0 = out
]

# Columns kept after projection, in report order
REQUIRED_COLUMNS = [
    'launch_speed', 'launch_angle', 'hit_distance_sc',
    'hit_location', 'if_fielding_alignment', 'of_fielding_alignment',
    'babip_value'
]

# Continuous measurements
NUMERIC_COLUMNS = ['launch_speed', 'launch_angle', 'hit_distance_sc']

# Integer-coded categories
CODED_COLUMNS = ['hit_location', 'babip_value']

# Free-text categories
LABEL_COLUMNS = ['if_fielding_alignment', 'of_fielding_alignment']

# Feature columns for model training
FEATURE_COLS = ['launch_speed', 'launch_angle', 'hit_location']

TARGET_COL = 'babip_value'
PREDICTION_COL = 'predicted_label'

# Outcome label space
POSITIVE_LABEL = 1
OUTCOME_LABELS = [0, 1]
TARGET_NAMES = ['Out', 'Hit']

# Fielder position codes (1 = pitcher ... 9 = right field)
HIT_LOCATIONS = list(range(1, 10))

# Text marker the upstream export writes for missing values
NULL_SENTINEL = 'null'

# Sampling configuration
SPLIT_CONFIG = {
    'max_rows': 40000,       # Rows kept after shuffling
    'train_fraction': 0.75,  # Share of kept rows used for training
    'seed': 42               # Fixed so the train/evaluation boundary is reproducible
}

# Random forest hyperparameters
FOREST_CONFIG = {
    'tree_count': 150,
    'features_per_split': 3,  # All three features eligible at every split
    'leaf_size': 1,
    'random_state': None      # Forest randomness is independent of the split seed
}

# Report configuration
REPORT_CONFIG = {
    'sample_rows': 5,
    'summary_file': 'hit_prediction_summary.txt',
    'json_file': 'hit_prediction_results.json'
}
