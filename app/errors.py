class FeedError(Exception):
    """A page fetch that produced no postings."""


class TransportError(FeedError):
    """Network failure or non-success HTTP status."""


class DecodeError(FeedError):
    """Response body is not JSON or lacks a usable `jdList`."""
