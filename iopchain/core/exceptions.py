"""
The custom exceptions used throughout iopchain
"""
__all__ = ["StreamError", "ReadError", "DataEncodingError", "ConfigurationError", "DeploymentConflictError",
           "UnknownNetworkError", "UnknownDeploymentError", "ChainIndexError", "VersionBitsError"]


class StreamError(Exception):
    """
    Catchall for stream errors
    """
    pass


class ReadError(StreamError):
    """
    For when trying to read data of length n from the stream and receiving data of length < n
    """
    pass


class DataEncodingError(Exception):
    """
    For use in base58 and address encoding/decoding
    """
    pass


class ConfigurationError(Exception):
    """
    Raised while loading a network table that is malformed or cannot be resolved
    """
    pass


class DeploymentConflictError(ConfigurationError):
    """
    Two deployments share a version bit while their live ranges overlap
    """
    pass


class UnknownNetworkError(LookupError):
    """
    Requested network type, magic or prefix is not in the registry
    """
    pass


class UnknownDeploymentError(LookupError):
    """
    Requested deployment name is not defined for the network
    """
    pass


class ChainIndexError(Exception):
    """
    For use in the chain index when a block or its parent is missing
    """
    pass


class VersionBitsError(Exception):
    """
    A block version does not signal a bit that a locked-in deployment requires
    """
    pass
