"""
Contains the core elements that are used within iopchain

Core:
    -Provides the byte stream helpers used when parsing raw headers
    -Provides the reference formats and sentinels for chain parameters
    -Provides custom exceptions for registry and versionbits elements
    -Provides the shared logger factory
"""
# core/__init__.py
from iopchain.core.byte_stream import *
from iopchain.core.exceptions import *
from iopchain.core.formats import *
from iopchain.core.logging import *
from iopchain.core.serializable import *
