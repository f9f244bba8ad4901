class NvdGateError(Exception):
    """Base class for errors raised by nvdgate."""

class ConfigurationError(NvdGateError):
    """A gate option is missing, malformed or out of range."""

class ScanError(NvdGateError):
    """The scan engine could not be run or its output could not be read."""
