"""
Root conftest: makes ``src`` importable when the package is not installed.
Shared fixtures live in tests/conftest.py.
"""

import sys
from pathlib import Path

# Ensure src on path
sys.path.insert(0, str(Path(__file__).parent / "src"))
