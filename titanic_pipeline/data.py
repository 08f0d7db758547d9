"""Loading the train/test passenger files."""

import os
from typing import List, Tuple

import pandas as pd

from titanic_pipeline import config


def load_passengers(path: str) -> pd.DataFrame:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Required file not found: {path}")
    return pd.read_csv(path)


def check_columns(df: pd.DataFrame, require_target: bool = False) -> None:
    """Raise ValueError if any column of the passenger schema is absent."""
    required: List[str] = list(config.RAW_COLUMNS)
    if require_target:
        required.append(config.TARGET)
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {', '.join(missing)}")


def load_datasets(train_path: str, test_path: str) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Load and schema-check the labelled training file and the unlabelled test file."""
    train = load_passengers(train_path)
    test = load_passengers(test_path)
    check_columns(train, require_target=True)
    check_columns(test)
    return train, test
