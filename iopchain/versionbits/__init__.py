"""
BIP9-style versionbits: deployment activation states, the per-network tracker and the multi-network facade
"""

# versionbits/__init__.py
from iopchain.versionbits.deployment_registry import *
from iopchain.versionbits.state import *
from iopchain.versionbits.tracker import *
