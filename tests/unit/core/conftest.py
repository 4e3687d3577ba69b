"""Shared fixtures for core unit tests"""

import pytest

from samples import make_policy


@pytest.fixture(name="policy")
def policy_fixture():
    return make_policy()
