from __future__ import annotations

import sys
from pathlib import Path

import matplotlib

# Ensure tests always import the local modules, not an older installed copy.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

# Benchmark plots must not open windows during the test run.
matplotlib.use("Agg")
