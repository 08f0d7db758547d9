#!/usr/bin/env python3
"""
titanic_model.py

Run the full Titanic pipeline from a checkout (same as `titanic-pipeline`).

Usage:
    python scripts/titanic_model.py --train train.csv --test test.csv
"""

import sys

from titanic_pipeline.cli import run

if __name__ == "__main__":
    sys.exit(run())
