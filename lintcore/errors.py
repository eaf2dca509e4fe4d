"""Exceptions raised to callers. Loading failures are diagnostics, not exceptions."""


class ExtensionProfileError(AssertionError):
    """Profile completed without a matching start. Caller bug, never recoverable."""
