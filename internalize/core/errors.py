"""Errors raised while expanding `#[internal]`."""


class MalformedInvocationError(ValueError):
    """The annotated input is not a declaration node."""
