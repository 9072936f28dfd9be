"""
The frozen parameter records for a network and the loader that builds them from a literal table
"""
from dataclasses import dataclass, field, fields
from itertools import combinations
from types import MappingProxyType
from typing import ClassVar, Mapping, Optional

from iopchain.chain.header import BlockHeader
from iopchain.core import CHAIN, DEPLOYMENT, VERSIONBITS, ConfigurationError, DeploymentConflictError, \
    UnknownDeploymentError, get_logger

logger = get_logger(__name__)

__all__ = ["Genesis", "PowParams", "BlockParams", "Deployment", "KeyPrefix", "AddressPrefix", "NetworkParams",
           "build_network"]


@dataclass(frozen=True)
class Genesis:
    """
    Genesis header fields. Hashes are hex in serialized byte order.
    """
    version: int
    hash: str
    prev_block: str
    merkle_root: str
    ts: int
    bits: int
    nonce: int
    height: int = 0

    def to_header(self) -> BlockHeader:
        return BlockHeader(
            version=self.version,
            prev_block=bytes.fromhex(self.prev_block),
            merkle_root=bytes.fromhex(self.merkle_root),
            timestamp=self.ts,
            bits=self.bits,
            nonce=self.nonce
        )


@dataclass(frozen=True)
class PowParams:
    limit: int
    bits: int
    chainwork: int
    target_timespan: int
    target_spacing: int
    retarget_interval: int
    target_reset: bool
    no_retargeting: bool


@dataclass(frozen=True)
class BlockParams:
    bip34_height: int
    bip34_hash: Optional[str]
    bip65_height: int
    bip65_hash: Optional[str]
    bip66_height: int
    bip66_hash: Optional[str]
    prune_after_height: int
    keep_blocks: int
    max_tip_age: int
    slow_height: int


@dataclass(frozen=True)
class Deployment:
    """
    A versionbits soft-fork deployment with its defaults already resolved against the network.

    start_time == 0xffffffff never starts, timeout == 0xffffffff never times out, and start_time == timeout == 0 is
    a deployment that has not been configured yet.
    """
    name: str
    bit: int
    start_time: int
    timeout: int
    threshold: int
    window: int
    required: bool = False
    force: bool = False

    @property
    def mask(self) -> int:
        return 1 << self.bit

    @property
    def is_configured(self) -> bool:
        return not (self.start_time == DEPLOYMENT.UNCONFIGURED and self.timeout == DEPLOYMENT.UNCONFIGURED)

    @property
    def never_starts(self) -> bool:
        return self.start_time == DEPLOYMENT.NEVER

    @property
    def never_times_out(self) -> bool:
        return self.timeout == DEPLOYMENT.NEVER

    @property
    def live_range(self) -> Optional[tuple[int, int]]:
        """
        Half-open [start_time, timeout) interval during which the bit may be signaled, or None if it never is.
        """
        if not self.is_configured or self.never_starts:
            return None
        end = DEPLOYMENT.NEVER + 1 if self.never_times_out else self.timeout
        if self.start_time >= end:
            return None
        return self.start_time, end

    def overlaps(self, other: "Deployment") -> bool:
        if self.bit != other.bit:
            return False
        mine, theirs = self.live_range, other.live_range
        if mine is None or theirs is None:
            return False
        return max(mine[0], theirs[0]) < min(mine[1], theirs[1])

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class KeyPrefix:
    privkey: int
    xpubkey: int
    xprivkey: int
    xpubkey58: str
    xprivkey58: str
    coin_type: int


@dataclass(frozen=True)
class AddressPrefix:
    # Values carried over from the source tables without confirmation against the live chain
    UNVERIFIED: ClassVar[tuple] = ("witnesspubkeyhash", "witnessscripthash", "bech32")

    pubkeyhash: int
    scripthash: int
    witnesspubkeyhash: Optional[int] = None
    witnessscripthash: Optional[int] = None
    bech32: Optional[str] = None

    @property
    def has_witness_collision(self) -> bool:
        return self.witnesspubkeyhash is not None and self.witnesspubkeyhash == self.witnessscripthash

    def base58_prefixes(self) -> dict[str, int]:
        """Kind name -> prefix byte for every prefix set on this network, in lookup order"""
        kinds = ("pubkeyhash", "scripthash", "witnesspubkeyhash", "witnessscripthash")
        return {k: getattr(self, k) for k in kinds if getattr(self, k) is not None}


@dataclass(frozen=True, eq=False)
class NetworkParams:
    type: str
    seeds: tuple
    magic: int
    port: int
    checkpoint_map: Mapping[int, str]
    halving_interval: int
    genesis: Genesis
    genesis_block: str
    pow: PowParams
    block: BlockParams
    bip30: Mapping[int, str]
    activation_threshold: Optional[int]
    miner_window: Optional[int]
    deployments: Mapping[str, Deployment]
    deploys: tuple
    key_prefix: KeyPrefix
    address_prefix: AddressPrefix
    require_standard: bool
    rpc_port: int
    min_relay: int
    fee_rate: int
    max_fee_rate: int
    self_connect: bool
    request_mempool: bool
    # Bytes form of the magic, as it appears on the wire
    magic_bytes: bytes = field(init=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "magic_bytes", self.magic.to_bytes(4, "little"))

    @property
    def last_checkpoint(self) -> int:
        return max(self.checkpoint_map) if self.checkpoint_map else 0

    @property
    def genesis_hash(self) -> bytes:
        return bytes.fromhex(self.genesis.hash)

    def genesis_header(self) -> BlockHeader:
        """Parse the header of the serialized genesis block"""
        return BlockHeader.from_hex(self.genesis_block)

    def get_checkpoint(self, height: int) -> Optional[str]:
        return self.checkpoint_map.get(height)

    def deployment(self, name: str) -> Deployment:
        try:
            return self.deployments[name]
        except KeyError:
            raise UnknownDeploymentError(f"Unknown deployment {name!r} for network {self.type!r}") from None

    def __str__(self) -> str:
        return self.type


# --- LOADER --- #

_SCALAR_KEYS = ("type", "magic", "port", "halving_interval", "genesis_block", "require_standard", "rpc_port",
                "min_relay", "fee_rate", "max_fee_rate", "self_connect", "request_mempool")


def _require(table: Mapping, key: str, where: str):
    if key not in table:
        raise ConfigurationError(f"{where}: missing field {key!r}")
    return table[key]


def _build_record(record_type, table: Mapping, where: str):
    names = [f.name for f in fields(record_type) if f.init]
    unknown = set(table) - set(names)
    if unknown:
        raise ConfigurationError(f"{where}: unknown fields {sorted(unknown)}")
    try:
        return record_type(**table)
    except TypeError as e:
        raise ConfigurationError(f"{where}: {e}") from e


def _build_genesis(table: Mapping, network_type: str) -> Genesis:
    genesis = _build_record(Genesis, table, f"{network_type}.genesis")
    if genesis.height != 0:
        raise ConfigurationError(f"{network_type}: genesis height must be 0, got {genesis.height}")
    if genesis.prev_block != CHAIN.ZERO_HASH:
        raise ConfigurationError(f"{network_type}: genesis previous block must be the zero hash")
    return genesis


def _build_checkpoints(table: Mapping, network_type: str) -> Mapping[int, str]:
    heights = list(table)
    if any(not isinstance(h, int) or h <= 0 for h in heights):
        raise ConfigurationError(f"{network_type}: checkpoint heights must be positive integers")
    if any(a >= b for a, b in zip(heights, heights[1:])):
        raise ConfigurationError(f"{network_type}: checkpoint heights must be strictly increasing")
    return MappingProxyType(dict(table))


def _resolve_default(value: Optional[int], default: Optional[int], label: str, where: str) -> int:
    if value is None:
        if default is None:
            raise ConfigurationError(f"{where}: {label} uses the network default but none is set")
        return default
    if not isinstance(value, int) or value <= 0:
        raise ConfigurationError(f"{where}: {label} must be a positive integer or None, got {value!r}")
    return value


def _build_deployment(table: Mapping, threshold: Optional[int], window: Optional[int], where: str) -> Deployment:
    resolved = dict(table)
    resolved["window"] = _resolve_default(table.get("window"), window, "window", where)
    resolved["threshold"] = _resolve_default(table.get("threshold"), threshold, "threshold", where)
    deployment = _build_record(Deployment, resolved, where)

    if not 0 <= deployment.bit <= VERSIONBITS.MAX_BIT:
        raise ConfigurationError(f"{where}: bit {deployment.bit} outside 0..{VERSIONBITS.MAX_BIT}")
    if deployment.threshold > deployment.window:
        raise ConfigurationError(f"{where}: threshold {deployment.threshold} exceeds window {deployment.window}")
    if deployment.is_configured and not (deployment.never_starts or deployment.never_times_out) \
            and deployment.start_time > deployment.timeout:
        raise ConfigurationError(f"{where}: start_time {deployment.start_time} is after timeout {deployment.timeout}")
    return deployment


def _build_deployments(table: Mapping, threshold: Optional[int], window: Optional[int],
                       network_type: str) -> Mapping[str, Deployment]:
    deployments = {}
    for key, entry in table.items():
        where = f"{network_type}.deployments.{key}"
        deployment = _build_deployment(entry, threshold, window, where)
        if deployment.name != key:
            raise ConfigurationError(f"{where}: name {deployment.name!r} does not match its key")
        deployments[key] = deployment

    for a, b in combinations(deployments.values(), 2):
        if a.overlaps(b):
            raise DeploymentConflictError(
                f"{network_type}: deployments {a.name!r} and {b.name!r} share bit {a.bit} with overlapping ranges")

    return MappingProxyType(deployments)


def build_network(table: Mapping) -> NetworkParams:
    """
    Build a NetworkParams record from a literal network table.

    Every sentinel is resolved here: deployment threshold/window of None take the network's activation_threshold
    and miner_window. Any malformed or unresolvable value raises ConfigurationError, so a network that loads is
    fully concrete.
    """
    network_type = _require(table, "type", "network")
    for key in _SCALAR_KEYS:
        _require(table, key, network_type)

    deployments = _build_deployments(_require(table, "deployments", network_type),
                                     table.get("activation_threshold"), table.get("miner_window"), network_type)
    address_prefix = _build_record(AddressPrefix, _require(table, "address_prefix", network_type),
                                   f"{network_type}.address_prefix")

    if address_prefix.has_witness_collision:
        logger.warning(f"{network_type}: witness pubkeyhash and scripthash prefixes are both "
                       f"{address_prefix.witnesspubkeyhash:#04x}; confirm before use")

    return NetworkParams(
        type=network_type,
        seeds=tuple(table.get("seeds", ())),
        magic=table["magic"],
        port=table["port"],
        checkpoint_map=_build_checkpoints(table.get("checkpoint_map", {}), network_type),
        halving_interval=table["halving_interval"],
        genesis=_build_genesis(_require(table, "genesis", network_type), network_type),
        genesis_block=table["genesis_block"],
        pow=_build_record(PowParams, _require(table, "pow", network_type), f"{network_type}.pow"),
        block=_build_record(BlockParams, _require(table, "block", network_type), f"{network_type}.block"),
        bip30=MappingProxyType(dict(table.get("bip30", {}))),
        activation_threshold=table.get("activation_threshold"),
        miner_window=table.get("miner_window"),
        deployments=deployments,
        deploys=tuple(deployments.values()),
        key_prefix=_build_record(KeyPrefix, _require(table, "key_prefix", network_type),
                                 f"{network_type}.key_prefix"),
        address_prefix=address_prefix,
        require_standard=table["require_standard"],
        rpc_port=table["rpc_port"],
        min_relay=table["min_relay"],
        fee_rate=table["fee_rate"],
        max_fee_rate=table["max_fee_rate"],
        self_connect=table["self_connect"],
        request_mempool=table["request_mempool"],
    )
