"""
Shared fixtures for liveosc tests
"""

import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from fakes import FakeTransport


@pytest.fixture
def transport():
    return FakeTransport()
