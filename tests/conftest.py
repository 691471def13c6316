# File: tests/conftest.py
"""
Put the project root and the Streamlit app directory on sys.path so tests
can import `climbframe`, `api.main` and the app's `services` package.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))
sys.path.insert(0, str(ROOT / "app"))
