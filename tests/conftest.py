"""
Pytest fixtures for the Karmic Dice test suite.

Provides a fresh ledger per test, fresh host die classes, and the
result-table resolver over a sample FFG registry.
"""

import pytest

from karmic_dice.config import KarmicDiceConfig
from karmic_dice.ledger.karma_ledger import KarmaLedger, reset_ledger
from karmic_dice.tables.result_tables import ResultTableResolver

from tests.helpers import FakeHooks, FakeHost, localize, make_die_classes, make_result_registry


# =============================================================================
# LEDGER FIXTURES
# =============================================================================


@pytest.fixture
def ledger():
    """A fresh ledger, independent of the process-wide one."""
    return KarmaLedger()


@pytest.fixture(autouse=True)
def clean_global_ledger():
    """Give every test a fresh process-wide ledger."""
    yield reset_ledger()
    reset_ledger()


# =============================================================================
# HOST FIXTURES
# =============================================================================


@pytest.fixture
def die_classes():
    """Fresh die term classes so wrappers never leak between tests."""
    return make_die_classes()


@pytest.fixture
def resolver():
    """Resolver over the sample FFG result registry."""
    return ResultTableResolver(make_result_registry(), localize)


@pytest.fixture
def config():
    return KarmicDiceConfig()


@pytest.fixture
def hooks():
    return FakeHooks()


@pytest.fixture
def host():
    return FakeHost()
