"""
The VersionBitsTracker class

Tracks the activation state of every deployment of one network over a chain index. States are only evaluated at
window boundaries (blocks where (height + 1) % window == 0); every block of a window shares the state computed at
the boundary just below it. Evaluated boundaries are cached by (block hash, deployment name), so a block on a
competing branch never reuses the state of the block it replaces.
"""
import threading
from typing import Iterable, Optional

from iopchain.chain.chain_index import BlockEntry, ChainIndex, get_ancestor, get_previous, iter_window, \
    median_time_past
from iopchain.core import VERSIONBITS, ChainIndexError, VersionBitsError, get_logger
from iopchain.network.params import Deployment, NetworkParams
from iopchain.versionbits.state import ThresholdState

logger = get_logger(__name__)

__all__ = ["VersionBitsTracker"]

VERSION_MASK = (1 << VERSIONBITS.NUM_BITS) - 1


class VersionBitsTracker:
    """
    Per-network deployment state machine with a shared, lock-guarded state cache
    """

    def __init__(self, network: NetworkParams, chain: ChainIndex):
        self.network = network
        self.chain = chain
        self._cache: dict[tuple[bytes, str], ThresholdState] = {}
        self._lock = threading.Lock()

    # --- Cache --- #

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def _cached(self, entry: BlockEntry, deployment: Deployment) -> Optional[ThresholdState]:
        return self._cache.get((entry.hash, deployment.name))

    def _store(self, entry: BlockEntry, deployment: Deployment, state: ThresholdState) -> ThresholdState:
        """
        Insert-if-absent. A racing thread that evaluated the same boundary first wins; both computed the same state.
        """
        with self._lock:
            return self._cache.setdefault((entry.hash, deployment.name), state)

    def disconnect(self, block_hash: bytes) -> int:
        """
        Drop every cached state for a block leaving the chain. Returns the number of entries removed.
        """
        with self._lock:
            stale = [key for key in self._cache if key[0] == block_hash]
            for key in stale:
                del self._cache[key]
        if stale:
            logger.debug(f"Dropped {len(stale)} cached states for block {block_hash.hex()}")
        return len(stale)

    def clear(self):
        with self._lock:
            self._cache.clear()

    # --- Lookups --- #

    def deployment(self, name: str) -> Deployment:
        return self.network.deployment(name)

    def _entry(self, block_hash: bytes) -> BlockEntry:
        entry = self.chain.get_entry(block_hash)
        if entry is None:
            raise ChainIndexError(f"Block {block_hash.hex()} not in chain index")
        return entry

    # --- State machine --- #

    def _before_start(self, entry: BlockEntry, deployment: Deployment) -> bool:
        if not deployment.is_configured or deployment.never_starts:
            return True
        return median_time_past(self.chain, entry) < deployment.start_time

    def _count_signals(self, boundary: BlockEntry, deployment: Deployment) -> int:
        return sum(1 for e in iter_window(self.chain, boundary, deployment.window) if e.has_bit(deployment.bit))

    def _transition(self, boundary: BlockEntry, deployment: Deployment, state: ThresholdState) -> ThresholdState:
        """
        State for the window following boundary, given the state of the window ending at boundary.
        """
        match state:
            case ThresholdState.DEFINED:
                if median_time_past(self.chain, boundary) < deployment.start_time:
                    return ThresholdState.DEFINED

                # Started in this window: its signals count toward lock-in, the timeout applies from the next one
                if self._count_signals(boundary, deployment) >= deployment.threshold:
                    return ThresholdState.LOCKED_IN
                return ThresholdState.STARTED

            case ThresholdState.STARTED:
                if self._count_signals(boundary, deployment) >= deployment.threshold:
                    return ThresholdState.LOCKED_IN
                time = median_time_past(self.chain, boundary)
                if not deployment.never_times_out and time >= deployment.timeout:
                    return ThresholdState.FAILED
                return ThresholdState.STARTED

            case ThresholdState.LOCKED_IN:
                return ThresholdState.ACTIVE

            case _:
                return state

    def state_after(self, prev: Optional[BlockEntry], deployment: Deployment) -> ThresholdState:
        """
        State of the block that follows prev. prev=None is the parent of genesis.
        """
        if prev is None:
            return ThresholdState.DEFINED

        window = deployment.window

        # Step back to the last boundary at or below prev
        offset = (prev.height + 1) % window
        if offset != 0:
            prev = get_ancestor(self.chain, prev, prev.height - offset)

        state = ThresholdState.DEFINED
        compute = []
        entry = prev
        while entry is not None:
            cached = self._cached(entry, deployment)
            if cached is not None:
                state = cached
                break
            if self._before_start(entry, deployment):
                state = self._store(entry, deployment, ThresholdState.DEFINED)
                break
            compute.append(entry)
            entry = get_ancestor(self.chain, entry, entry.height - window)

        while compute:
            entry = compute.pop()
            new_state = self._transition(entry, deployment, state)
            if new_state != state:
                logger.debug(f"{self.network.type}: {deployment.name} {state.name} -> {new_state.name} "
                             f"after height {entry.height}")
            state = self._store(entry, deployment, new_state)

        return state

    def get_state(self, name: str, block_hash: bytes) -> ThresholdState:
        """
        Activation state of the named deployment at the given block
        """
        deployment = self.deployment(name)
        entry = self._entry(block_hash)
        return self.state_after(get_previous(self.chain, entry), deployment)

    def get_next_state(self, name: str, prev_hash: bytes) -> ThresholdState:
        """
        Activation state of the named deployment for a block built on prev_hash
        """
        return self.state_after(self._entry(prev_hash), self.deployment(name))

    def get_states(self, block_hash: bytes) -> dict[str, ThresholdState]:
        entry = self._entry(block_hash)
        prev = get_previous(self.chain, entry)
        return {d.name: self.state_after(prev, d) for d in self.network.deploys}

    def is_active(self, name: str, block_hash: bytes) -> bool:
        return self.get_state(name, block_hash) == ThresholdState.ACTIVE

    # --- Miner helpers --- #

    def compute_block_version(self, prev_hash: bytes) -> int:
        """
        Version for a block built on prev_hash: the versionbits top bits plus the bit of every deployment that is
        STARTED or LOCKED_IN.
        """
        prev = self._entry(prev_hash)
        version = VERSIONBITS.TOP_BITS
        for deployment in self.network.deploys:
            if self.state_after(prev, deployment).is_signaling:
                version |= deployment.mask
        return version

    def get_used_bits(self, prev_hash: bytes) -> int:
        """
        Bits in use for a block built on prev_hash. Force deployments always count as used, the others only while
        they are signaling.
        """
        prev = self._entry(prev_hash)
        used = 0
        for deployment in self.network.deploys:
            if deployment.force or self.state_after(prev, deployment).is_signaling:
                used |= deployment.mask
        return used

    def template_rules(self, prev_hash: bytes,
                       client_rules: Iterable[str] = ()) -> tuple[int, dict[str, int], list[str]]:
        """
        getblocktemplate view for a block built on prev_hash: (version, vbavailable, rules).

        Names of deployments that are not forced are prefixed with '!' while they need client support. A
        non-forced signaling deployment the client does not list in client_rules has its bit cleared.
        """
        prev = self._entry(prev_hash)
        client_rules = set(client_rules)
        version = VERSIONBITS.TOP_BITS
        vbavailable = {}
        rules = []

        for deployment in self.network.deploys:
            state = self.state_after(prev, deployment)
            name = deployment.name

            if state.is_signaling:
                version |= deployment.mask
                if not deployment.force:
                    if name not in client_rules:
                        version &= ~deployment.mask
                    name = f"!{name}"
                vbavailable[name] = deployment.bit

            elif state == ThresholdState.ACTIVE:
                if not deployment.force and deployment.required:
                    name = f"!{name}"
                rules.append(name)

        return version, vbavailable, rules

    # --- Validation helpers --- #

    def check_required_bits(self, version: int, prev_hash: bytes) -> list[str]:
        """
        Names of required deployments locked in for a block built on prev_hash that version does not signal
        """
        prev = self._entry(prev_hash)
        uses_versionbits = (version & VERSIONBITS.TOP_MASK) == VERSIONBITS.TOP_BITS
        missing = []
        for deployment in self.network.deploys:
            if not deployment.required:
                continue
            if self.state_after(prev, deployment) != ThresholdState.LOCKED_IN:
                continue
            if not uses_versionbits or not version & deployment.mask:
                missing.append(deployment.name)
        return missing

    def verify_block_version(self, version: int, prev_hash: bytes):
        missing = self.check_required_bits(version, prev_hash)
        if missing:
            raise VersionBitsError(f"Block version {version:#010x} does not signal required deployments: "
                                   f"{', '.join(missing)}")

    def count_unknown_bits(self, tip_hash: bytes, window: Optional[int] = None) -> int:
        """
        Number of blocks among the last window blocks ending at tip_hash that signal a bit no deployment uses
        """
        if window is None:
            window = self.network.miner_window
        count = 0
        for entry in iter_window(self.chain, self._entry(tip_hash), window):
            if (entry.version & VERSIONBITS.TOP_MASK) != VERSIONBITS.TOP_BITS:
                continue
            prev = get_previous(self.chain, entry)
            expected = self.get_used_bits(prev.hash) if prev is not None else 0
            if entry.version & VERSION_MASK & ~expected:
                count += 1
        if count:
            logger.debug(f"{self.network.type}: {count} of last {window} blocks signal unknown bits")
        return count
