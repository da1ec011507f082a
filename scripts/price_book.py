#!/usr/bin/env python3
"""Batch-price a book of European options with the parity self-check.

Usage
-----
    python scripts/price_book.py --input book.csv --output prices.csv
    python scripts/price_book.py --input book.csv --output prices.json

Input CSV format
----------------
    id,S,K,T,r,sigma,kind
    1,100,100,1.0,0.05,0.20,call
    2,100,95,0.5,0.03,0.25,put

Output
------
    CSV or JSON with columns: id, price, delta, gamma, vega, theta, rho,
    parity_implied, parity_direct, parity_discrepancy, error
"""

from __future__ import annotations
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from bsparity.cli import main


if __name__ == "__main__":
    sys.exit(main(["--log-level", "INFO", "book", *sys.argv[1:]]))
