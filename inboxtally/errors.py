"""Exceptions raised by inboxtally."""


class InboxTallyError(Exception):
    """Base class for inboxtally errors."""


class CredentialError(InboxTallyError):
    """No Gmail access token is available, so a scan cannot start."""
