import os
import sys

# Ensure imports like `from app.main import create_app` work when pytest is run from repo root
BACKEND_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

import pytest


SAMPLE_CSV = (
    "Latitude,Longitude,Analyst\n"
    "28.6139,77.2090,alice\n"
    "invalid,77.2,bob\n"
    "\"28°36'50\"\"N\",77 12 30 E,carol\n"
)


@pytest.fixture
def sites_csv(tmp_path):
    """The three-row sample (alice, bob with a bad latitude, carol in DMS) on disk."""
    p = tmp_path / "Sites.csv"
    p.write_text(SAMPLE_CSV, encoding="utf-8")
    return p
