"""Exceptions raised by nostr-health."""


class NostrHealthError(Exception):
    """Base class for nostr-health errors."""


class InvalidEventError(NostrHealthError, ValueError):
    """
    Raised when a caller hands the decoder something that is not an event.

    Malformed tag values never raise; this is only for a missing event or
    one without a creation timestamp.
    """
