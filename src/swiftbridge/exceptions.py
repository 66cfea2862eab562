"""
Exceptions raised by swiftbridge entry points.

The host shows ``str(e)`` to the user, so messages are meant to be read as diagnostics.
"""


class SwiftBridgeError(Exception):
    pass


class SettingsError(SwiftBridgeError):
    """Raised when the language server settings cannot be read or have an unexpected shape."""


class AdapterNotFoundError(SwiftBridgeError):
    """Raised when no location of the debug adapter lookup chain yields an executable."""


class UnknownIdentifierError(SwiftBridgeError):
    """Raised when a language server or debug adapter identifier is not handled by this extension."""


class MalformedConfigError(SwiftBridgeError):
    """Raised when a serialized debug configuration cannot be interpreted."""
