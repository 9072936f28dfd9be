"""
Block header parsing and the chain index consumed by versionbits
"""

# chain/__init__.py
from iopchain.chain.chain_index import *
from iopchain.chain.header import *
