import matplotlib
matplotlib.use("Agg")
import numpy as np
import pandas as pd
import pytest

from titanic_pipeline.features import build_features, fit_imputation_values

MALE_TITLES = ['Mr'] * 8 + ['Master'] * 2 + ['Dr', 'Rev']
FEMALE_TITLES = ['Mrs'] * 5 + ['Miss'] * 5 + ['Mlle', 'Ms', 'Mme', 'Countess']


def make_passengers(n: int, seed: int, labelled: bool = True, start_id: int = 1) -> pd.DataFrame:
    """Titanic-shaped frame with the usual gaps in Age, Embarked and Cabin."""
    rng = np.random.default_rng(seed)
    sex = rng.choice(['male', 'female'], n, p=[0.6, 0.4])
    pclass = rng.choice([1, 2, 3], n, p=[0.25, 0.2, 0.55])
    titles = [rng.choice(MALE_TITLES) if s == 'male' else rng.choice(FEMALE_TITLES) for s in sex]
    age = np.where(np.isin(titles, ['Master']), rng.uniform(1, 12, n), rng.uniform(14, 75, n)).round(1)
    age[rng.random(n) < 0.15] = np.nan
    fare = (np.array([80.0, 25.0, 9.0])[pclass - 1] * rng.uniform(0.5, 2.0, n)).round(2)
    cabin = np.where(rng.random(n) < 0.2, 'C85', None)
    embarked = rng.choice(['S', 'C', 'Q'], n, p=[0.7, 0.2, 0.1]).astype(object)
    embarked[:2] = None

    df = pd.DataFrame({
        'PassengerId': np.arange(start_id, start_id + n),
        'Pclass': pclass,
        'Name': [f"Surname{i}, {t}. First" for i, t in enumerate(titles)],
        'Sex': sex,
        'Age': age,
        'SibSp': rng.integers(0, 4, n),
        'Parch': rng.integers(0, 3, n),
        'Ticket': [f"T{t}" for t in rng.integers(0, n // 2, n)],
        'Fare': fare,
        'Cabin': cabin,
        'Embarked': embarked,
    })
    if labelled:
        p = np.where(sex == 'female', 0.75, 0.2) + np.where(pclass == 1, 0.15, 0.0)
        df.insert(1, 'Survived', (rng.random(n) < p).astype(int))
    return df


@pytest.fixture
def raw_train():
    return make_passengers(400, seed=0)


@pytest.fixture
def raw_test():
    df = make_passengers(120, seed=1, labelled=False, start_id=1001)
    df.loc[5, 'Fare'] = np.nan
    return df


@pytest.fixture
def imputation_values(raw_train):
    return fit_imputation_values(raw_train)


@pytest.fixture
def train_fe(raw_train, imputation_values):
    return build_features(raw_train, imputation_values)


@pytest.fixture
def small_grid():
    return {'clf__n_estimators': [20, 40], 'clf__max_depth': [None, 4]}


@pytest.fixture
def csv_files(tmp_path, raw_train, raw_test):
    train_path = tmp_path / "train.csv"
    test_path = tmp_path / "test.csv"
    raw_train.to_csv(train_path, index=False)
    raw_test.to_csv(test_path, index=False)
    return str(train_path), str(test_path)
