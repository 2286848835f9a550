class SpringVersionError(Exception):
    """Base class for every error that aborts a run."""


class FetchError(SpringVersionError):
    """The metadata server could not be reached or answered with an error status."""


class DecodeError(SpringVersionError):
    """A response body was not valid JSON/XML for the expected shape."""


class ResolutionError(SpringVersionError):
    """The requested Boot version or type action is not in the metadata."""


class OutputConfigError(SpringVersionError):
    """The output destination is unknown or not configured."""


class OutputError(SpringVersionError):
    """The output destination could not be written."""
