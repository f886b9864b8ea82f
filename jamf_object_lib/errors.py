#!/usr/bin/env python3


class JamfError(Exception):
    """Base class for all errors raised by jamf_object_lib."""


class JamfAPIError(JamfError):
    """The Jamf Pro server returned an unsuccessful HTTP response."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(JamfAPIError):
    """The requested object does not exist (HTTP 404)."""


class ConflictError(JamfAPIError):
    """The object clashes with an existing one (HTTP 409)."""


class ValidationError(JamfAPIError):
    """The server rejected the data sent (HTTP 400)."""


class AuthenticationError(JamfAPIError):
    """The credentials were rejected or lack privileges (HTTP 401/403)."""


class MissingCredentialsError(JamfError):
    """No server or no user could be found for a connection."""


class InvalidDataError(JamfError):
    """Data is not valid for the resource type it is used with."""


class KeychainError(JamfError):
    """An error occurred while accessing the keychain."""


class ObjectHistoryError(JamfError):
    """Object history was requested without a database connection."""
