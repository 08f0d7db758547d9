"""
Constants shared by the pipeline: seed, default paths, column lists and
the random forest search grid. Anything here can be overridden from the
command line (see cli.py).
"""

import os

# -------------------------
# Configuration / Defaults
# -------------------------
RANDOM_STATE = 42
TEST_SIZE = 0.25
N_FOLDS = 5
SCORING = "accuracy"

TRAIN_PATH = "train.csv"
TEST_PATH = "test.csv"
OUT_DIR = "output"
SUBMISSION_FN = "submission.csv"
FINAL_MODEL_FN = os.path.join("models", "final_random_forest.joblib")

# -------------------------
# Schema
# -------------------------
ID_COL = 'PassengerId'
TARGET = 'Survived'
RAW_COLUMNS = [
    'PassengerId', 'Pclass', 'Name', 'Sex', 'Age', 'SibSp',
    'Parch', 'Ticket', 'Fare', 'Cabin', 'Embarked'
]

# Titles kept as their own bucket; anything else becomes 'Rare'
MAIN_TITLES = ['Mr', 'Mrs', 'Miss', 'Master']
TITLE_ALIASES = {'Mlle': 'Miss', 'Ms': 'Miss', 'Mme': 'Mrs'}

AGE_BINS = [0, 12, 18, 30, 50, float('inf')]
AGE_LABELS = ['Child', 'Teen', 'YoungAdult', 'Adult', 'Senior']
FARE_LABELS = ['Low', 'MedLow', 'MedHigh', 'High']
AGE_SCALE = 70.0

# -------------------------
# Model columns
# -------------------------
NUM_COLS = ['Age', 'SibSp', 'Parch', 'Fare', 'FareAdj', 'FamilyAge']
CAT_COLS = ['Pclass', 'Sex', 'Embarked', 'Title', 'IsAlone', 'AgeBin', 'FareBin']
FEATURES = NUM_COLS + CAT_COLS

RF_PARAM_GRID = {
    'clf__n_estimators': [100, 200],
    'clf__max_depth': [None, 6, 10],
    'clf__min_samples_split': [2, 5]
}
LR_PARAMS = {'max_iter': 1000, 'solver': 'liblinear'}
