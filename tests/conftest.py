"""
Fixtures used in the tests
"""
import pytest

from iopchain.network import load_registry
from iopchain.versionbits import VersionBitsTracker
from tests.chain_utility import build_chain

__all__ = ["registry", "regtest", "testnet", "mainnet", "regtest_chain", "regtest_tracker"]


@pytest.fixture(scope="session")
def registry():
    return load_registry()


@pytest.fixture()
def regtest(registry):
    return registry["regtest"]


@pytest.fixture()
def testnet(registry):
    return registry["testnet"]


@pytest.fixture()
def mainnet(registry):
    return registry["main"]


@pytest.fixture()
def regtest_chain(regtest):
    """
    Regtest chain of 450 blocks that signal nothing
    """
    return build_chain(regtest, 450)


@pytest.fixture()
def regtest_tracker(regtest, regtest_chain):
    index, _ = regtest_chain
    return VersionBitsTracker(regtest, index)
