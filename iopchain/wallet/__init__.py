"""
Address, WIF and derivation path helpers driven by the network prefixes
"""

# wallet/__init__.py
from iopchain.wallet.address import *
from iopchain.wallet.derivation import *
