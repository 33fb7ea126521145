#!/usr/bin/env python3
"""Print a fresh hex-encoded key for ``REVIEWPAY_ENCRYPTION_KEY``."""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from reviewpay.backend.app.services.tax_info import generate_encryption_key


if __name__ == "__main__":
    print(generate_encryption_key())
