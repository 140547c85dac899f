#!/usr/bin/env python3
"""CLI wrapper for product seeding.

Usage:
    # Generate 100 products tagged test_product
    PYTHONPATH=. python scripts/generate_products.py

    # Generate 500 products, 25 per request
    PYTHONPATH=. python scripts/generate_products.py 500 --batch-size 25
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.shopify_seeder.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
