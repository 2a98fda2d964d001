"""
Root conftest.py - puts the project root on ``sys.path`` so that the tests
import the working tree instead of an installed copy.
"""
import sys
import os

PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)
