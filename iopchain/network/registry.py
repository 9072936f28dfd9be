"""
The NetworkRegistry class

A registry is built once at startup and passed to whatever needs chain parameters. It never changes after
construction; there is no module-level "current network".
"""
from types import MappingProxyType
from typing import Callable, Iterable, Iterator, Mapping, Optional, Union

from iopchain.core import ConfigurationError, UnknownNetworkError, get_logger
from iopchain.network.networks import NETWORK_TABLES, NETWORK_TYPES
from iopchain.network.params import NetworkParams, build_network

logger = get_logger(__name__)

__all__ = ["NetworkRegistry", "load_registry", "NetworkLike"]

NetworkLike = Union[str, NetworkParams]


class NetworkRegistry:
    """
    Immutable mapping of network type -> NetworkParams, iterated in registration order
    """

    def __init__(self, networks: Iterable[NetworkParams]):
        by_type = {}
        for params in networks:
            if params.type in by_type:
                raise ConfigurationError(f"Duplicate network type: {params.type!r}")
            by_type[params.type] = params
        self._networks: Mapping[str, NetworkParams] = MappingProxyType(by_type)

    @classmethod
    def from_tables(cls, tables: Iterable[Mapping]) -> "NetworkRegistry":
        return cls(build_network(t) for t in tables)

    # --- Mapping behaviour --- #

    @property
    def types(self) -> tuple:
        return tuple(self._networks)

    def __iter__(self) -> Iterator[NetworkParams]:
        return iter(self._networks.values())

    def __len__(self) -> int:
        return len(self._networks)

    def __contains__(self, network_type: str) -> bool:
        return network_type in self._networks

    def __getitem__(self, network_type: str) -> NetworkParams:
        return self.get(network_type)

    def get(self, network: NetworkLike) -> NetworkParams:
        """
        Return the params for a network type. NetworkParams registered here are passed through.
        """
        if isinstance(network, NetworkParams):
            network = network.type
        try:
            return self._networks[network]
        except KeyError:
            raise UnknownNetworkError(f"Unknown network: {network!r}") from None

    # --- Lookups --- #

    def _by(self, value, compare: Callable[[NetworkParams, object], bool], label: str,
            network: Optional[NetworkLike] = None) -> NetworkParams:
        """
        First network (in registration order) for which compare(params, value) holds.
        When a network is given only that network is checked.
        """
        candidates = [self.get(network)] if network is not None else list(self)
        for params in candidates:
            if compare(params, value):
                return params

        where = f" on network {candidates[0].type!r}" if network is not None else ""
        raise UnknownNetworkError(f"No network with {label} {value!r}{where}")

    def from_magic(self, magic: int, network: Optional[NetworkLike] = None) -> NetworkParams:
        return self._by(magic, lambda p, v: p.magic == v, "magic", network)

    def from_wif_prefix(self, prefix: int, network: Optional[NetworkLike] = None) -> NetworkParams:
        return self._by(prefix, lambda p, v: p.key_prefix.privkey == v, "WIF prefix", network)

    def from_xpubkey(self, prefix: int, network: Optional[NetworkLike] = None) -> NetworkParams:
        return self._by(prefix, lambda p, v: p.key_prefix.xpubkey == v, "xpubkey prefix", network)

    def from_xprivkey(self, prefix: int, network: Optional[NetworkLike] = None) -> NetworkParams:
        return self._by(prefix, lambda p, v: p.key_prefix.xprivkey == v, "xprivkey prefix", network)

    def from_public58(self, prefix: str, network: Optional[NetworkLike] = None) -> NetworkParams:
        return self._by(prefix, lambda p, v: p.key_prefix.xpubkey58 == v, "xpubkey58 prefix", network)

    def from_private58(self, prefix: str, network: Optional[NetworkLike] = None) -> NetworkParams:
        return self._by(prefix, lambda p, v: p.key_prefix.xprivkey58 == v, "xprivkey58 prefix", network)

    def from_address_prefix(self, prefix: int, network: Optional[NetworkLike] = None) -> NetworkParams:
        return self._by(prefix, lambda p, v: v in p.address_prefix.base58_prefixes().values(),
                        "address prefix", network)

    def from_bech32(self, hrp: str, network: Optional[NetworkLike] = None) -> NetworkParams:
        return self._by(hrp.lower(), lambda p, v: p.address_prefix.bech32 == v, "bech32 hrp", network)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({', '.join(self.types)})"


def load_registry(types: Iterable[str] = NETWORK_TYPES,
                  tables: Mapping[str, Mapping] = NETWORK_TABLES) -> NetworkRegistry:
    """
    Build the registry for the given network types from the literal tables.
    Raises UnknownNetworkError for a type without a table and ConfigurationError for a malformed table.
    """
    selected = []
    for network_type in types:
        if network_type not in tables:
            raise UnknownNetworkError(f"Unknown network: {network_type!r}")
        selected.append(tables[network_type])

    registry = NetworkRegistry.from_tables(selected)
    logger.info(f"Loaded networks: {', '.join(registry.types)}")
    return registry
