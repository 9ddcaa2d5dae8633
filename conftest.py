import os
import sys

# Makes `contractkit_core` and `tests.helpers_test` importable when pytest is run from a checkout.
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))
