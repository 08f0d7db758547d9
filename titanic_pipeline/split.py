"""Stratified train/test split and k-fold assignment."""

from typing import Tuple

import numpy as np
import pandas as pd
from sklearn.model_selection import StratifiedKFold, train_test_split

from titanic_pipeline import config


def split_train_test(df: pd.DataFrame, target: str = config.TARGET,
                     test_size: float = config.TEST_SIZE,
                     random_state: int = config.RANDOM_STATE) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Disjoint train/test partitions with the same share of each target class."""
    train, test = train_test_split(df, test_size=test_size, stratify=df[target],
                                   random_state=random_state)
    return train, test


def make_cv(k: int = config.N_FOLDS, random_state: int = config.RANDOM_STATE) -> StratifiedKFold:
    return StratifiedKFold(n_splits=k, shuffle=True, random_state=random_state)


def assign_folds(y: pd.Series, k: int = config.N_FOLDS,
                 random_state: int = config.RANDOM_STATE) -> pd.Series:
    """
    Fold id (0..k-1) for every row of y. Each fold is the validation part
    of one StratifiedKFold split, so every row lands in exactly one fold.
    """
    folds = np.full(len(y), -1, dtype=int)
    cv = make_cv(k, random_state)
    for fold, (_, val) in enumerate(cv.split(np.zeros(len(y)), y)):
        folds[val] = fold
    return pd.Series(folds, index=y.index, name='Fold')
