"""
Root conftest - shared pytest configuration and fixtures.
Ensures user_backend package is discoverable when running pytest from the repo root.
"""
import os
import sys
from pathlib import Path

# Ensure repo root is in path for 'from user_backend...' imports
_root = Path(__file__).resolve().parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

# Cheap bcrypt rounds for the whole test session; must be set before settings load
os.environ.setdefault("BCRYPT_ROUNDS", "4")
