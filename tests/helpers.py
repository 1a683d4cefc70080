"""Factories for synthetic batted-ball sources."""

import numpy as np
import pandas as pd


def make_raw_events(n_rows: int = 400, seed: int = 0) -> pd.DataFrame:
    """Build text-valued batted-ball events where hits follow a simple rule.

    A ball is a hit when it leaves the bat at 90+ mph with a launch angle
    between 10 and 30 degrees, so a forest can learn the boundary.
    """
    rng = np.random.default_rng(seed)
    speed = rng.uniform(60, 115, n_rows).round(1)
    angle = rng.uniform(-30, 60, n_rows).round(1)
    location = rng.integers(1, 10, n_rows)
    distance = (speed * 2.5 + angle).round(0)
    hit = ((speed >= 90) & (angle >= 10) & (angle <= 30)).astype(int)

    return pd.DataFrame({
        'batter': [str(600000 + i % 7) for i in range(n_rows)],
        'launch_speed': [str(v) for v in speed],
        'launch_angle': [str(v) for v in angle],
        'hit_distance_sc': [str(v) for v in distance],
        'hit_location': [str(v) for v in location],
        'if_fielding_alignment': ['Standard' if i % 3 else 'Infield shift' for i in range(n_rows)],
        'of_fielding_alignment': ['Standard' if i % 4 else 'Strategic' for i in range(n_rows)],
        'babip_value': [str(v) for v in hit]
    })


def make_lookup() -> pd.DataFrame:
    """Names for six of the seven batters in make_raw_events; 600006 has no entry."""
    return pd.DataFrame({
        'batter': [str(600000 + i) for i in range(6)],
        'name_first': ['Matt', 'Ronald', 'Mookie', 'Freddie', 'Juan', 'Aaron'],
        'name_last': ['Olson', 'Acuna', 'Betts', 'Freeman', 'Soto', 'Judge']
    })
