"""Shared pytest fixtures for test modules."""

import numpy as np
import pandas as pd
import pytest

from hit_prediction.data_processing import coerce_types
from tests.helpers import make_lookup, make_raw_events


@pytest.fixture
def raw_events() -> pd.DataFrame:
    return make_raw_events()


@pytest.fixture
def lookup() -> pd.DataFrame:
    return make_lookup()


@pytest.fixture
def cleaned_events(raw_events: pd.DataFrame) -> pd.DataFrame:
    """Coerced events without the join key, as produced by the cleaning stages."""
    return coerce_types(raw_events.drop(columns=['batter']))


@pytest.fixture
def source_files(tmp_path, raw_events, lookup):
    """Write the event and lookup sources to CSV with two incomplete rows and return their paths."""
    events_path = tmp_path / "events.csv"
    lookup_path = tmp_path / "lookup.csv"

    events = raw_events.copy()
    events.loc[3, 'launch_speed'] = 'null'
    events.loc[8, 'hit_location'] = np.nan
    events.to_csv(events_path, index=False)
    lookup.to_csv(lookup_path, index=False)

    return str(events_path), str(lookup_path)
