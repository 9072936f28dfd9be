"""
crypto folder used to house the hash functions and base58 encoding used with network prefixes
"""

# crypto/__init__.py
from iopchain.crypto.base58 import *
from iopchain.crypto.hash_functions import *
