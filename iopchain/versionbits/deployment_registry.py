"""
The DeploymentRegistry class

Front door for chain validators and miners: holds the network registry and one VersionBitsTracker per network
whose chain index has been attached, and answers state queries keyed by network.
"""
import threading

from iopchain.chain.chain_index import ChainIndex
from iopchain.core import UnknownNetworkError, get_logger
from iopchain.network.params import Deployment
from iopchain.network.registry import NetworkLike, NetworkRegistry
from iopchain.versionbits.state import ThresholdState
from iopchain.versionbits.tracker import VersionBitsTracker

logger = get_logger(__name__)

__all__ = ["DeploymentRegistry"]


class DeploymentRegistry:
    """
    Network-keyed view over the VersionBitsTracker of every attached chain index
    """

    def __init__(self, networks: NetworkRegistry):
        self.networks = networks
        self._trackers: dict[str, VersionBitsTracker] = {}
        self._lock = threading.Lock()

    def attach(self, network: NetworkLike, chain: ChainIndex) -> VersionBitsTracker:
        """
        Bind a chain index to a network. Re-attaching replaces the tracker, discarding its cached states.
        """
        params = self.networks.get(network)
        tracker = VersionBitsTracker(params, chain)
        with self._lock:
            self._trackers[params.type] = tracker
        logger.info(f"Attached chain index for network {params.type!r}")
        return tracker

    def tracker(self, network: NetworkLike) -> VersionBitsTracker:
        params = self.networks.get(network)
        try:
            return self._trackers[params.type]
        except KeyError:
            raise UnknownNetworkError(f"No chain index attached for network {params.type!r}") from None

    # --- Deployment tables --- #

    def deployments(self, network: NetworkLike) -> tuple[Deployment, ...]:
        """Deployments of a network in their fixed evaluation order"""
        return self.networks.get(network).deploys

    def get_deployment(self, network: NetworkLike, name: str) -> Deployment:
        return self.networks.get(network).deployment(name)

    # --- Queries --- #

    def get_state(self, network: NetworkLike, name: str, block_hash: bytes) -> ThresholdState:
        return self.tracker(network).get_state(name, block_hash)

    def is_active(self, network: NetworkLike, name: str, block_hash: bytes) -> bool:
        return self.tracker(network).is_active(name, block_hash)

    def compute_block_version(self, network: NetworkLike, prev_hash: bytes) -> int:
        return self.tracker(network).compute_block_version(prev_hash)
