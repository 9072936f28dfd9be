"""
The network parameter tables, their frozen records and the registry that indexes them
"""

# network/__init__.py
from iopchain.network.networks import *
from iopchain.network.params import *
from iopchain.network.registry import *
