"""
Cleaning and feature construction.

Imputation statistics are learned from the training frame with
fit_imputation_values() and applied to any frame with build_features(),
so train and test are filled with the same values. Ticket holders are
counted over both files, since a ticket can be shared across them.
"""

from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from titanic_pipeline import config


# -------------------------
# Titles
# -------------------------
def standardize_title(title) -> str:
    if not isinstance(title, str):
        return 'Rare'
    title = config.TITLE_ALIASES.get(title, title)
    return title if title in config.MAIN_TITLES else 'Rare'


def extract_title(names: pd.Series) -> pd.Series:
    """'Braund, Mr. Owen Harris' -> 'Mr'; uncommon titles collapse to 'Rare'."""
    titles = names.str.extract(r',\s*([^\.]+)\.', expand=False).str.strip()
    return titles.apply(standardize_title)


def fare_per_ticket(fare: pd.Series, ticket: pd.Series, counts: Optional[Dict] = None) -> pd.Series:
    """
    Fare divided by the number of records holding the same ticket.

    counts maps ticket -> number of holders (see fit_imputation_values);
    tickets missing from it are counted within `ticket` itself.
    """
    holders = ticket.map(ticket.value_counts())
    if counts is not None:
        holders = ticket.map(counts).fillna(holders)
    return fare / holders


# -------------------------
# Imputation
# -------------------------
def fit_imputation_values(train: pd.DataFrame, test: Optional[pd.DataFrame] = None) -> Dict:
    """
    Statistics used to fill missing values, computed on training rows only.
    Ticket counts also include the test file's tickets when it is given.
    """
    titles = extract_title(train['Name'])
    age_by_title = train['Age'].groupby(titles).median().dropna()
    fare_median = train['Fare'].median()

    tickets = train['Ticket'] if test is None else pd.concat([train['Ticket'], test['Ticket']])
    ticket_counts = tickets.value_counts().to_dict()
    fare_adj = fare_per_ticket(train['Fare'].fillna(fare_median), train['Ticket'], ticket_counts)
    return {
        'Embarked': train['Embarked'].mode().iloc[0],
        'AgeByTitle': age_by_title.to_dict(),
        'Age': train['Age'].median(),
        'Fare': fare_median,
        'TicketCounts': ticket_counts,
        'FareEdges': [float(q) for q in fare_adj.quantile([0.25, 0.5, 0.75])],
    }


def clean(df: pd.DataFrame, values: Dict) -> pd.DataFrame:
    """Fill Embarked/Age/Fare and drop Cabin. Returns a new frame."""
    df = df.copy()
    df['Title'] = extract_title(df['Name'])
    df['Embarked'] = df['Embarked'].fillna(values['Embarked'])

    # Median age of the passenger's title bucket, overall median if the bucket was never observed
    title_age = df['Title'].map(values['AgeByTitle']).fillna(values['Age'])
    df['Age'] = df['Age'].fillna(title_age)

    df['Fare'] = df['Fare'].fillna(values['Fare'])
    df = df.drop(columns=['Cabin'])
    return df


# -------------------------
# Derived features
# -------------------------
def bucket_fare(fare_adj: pd.Series, edges: List[float]) -> pd.Series:
    idx = np.searchsorted(np.asarray(edges), fare_adj.to_numpy(), side='right')
    return pd.Series(np.asarray(config.FARE_LABELS)[idx], index=fare_adj.index)


def add_features(df: pd.DataFrame, values: Dict) -> pd.DataFrame:
    """Return a new DataFrame with engineered features on top of a cleaned frame."""
    df = df.copy()
    family = df['SibSp'] + df['Parch']
    df['IsAlone'] = (family == 0).astype(int)
    df['FareAdj'] = fare_per_ticket(df['Fare'], df['Ticket'], values.get('TicketCounts'))
    df['FamilyAge'] = family + 1 + df['Age'] / config.AGE_SCALE
    df['AgeBin'] = pd.cut(df['Age'], bins=config.AGE_BINS, labels=config.AGE_LABELS,
                          include_lowest=True).astype(str)
    df['FareBin'] = bucket_fare(df['FareAdj'], values['FareEdges'])
    return df


def build_features(df: pd.DataFrame, values: Dict) -> pd.DataFrame:
    return add_features(clean(df, values), values)


def missing_counts(df: pd.DataFrame, columns: Optional[List[str]] = None) -> pd.Series:
    """Per-column count of missing values, restricted to the model columns by default."""
    columns = columns or config.FEATURES
    return df[columns].isnull().sum()
