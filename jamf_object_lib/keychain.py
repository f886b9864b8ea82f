#!/usr/bin/env python3

"""
Saved connection data in the OS credential store.

Each service holds a single item whose secret is a JSON document with the
server, port, user and password of the last successful connection.
"""

import json

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from .errors import KeychainError

API_SERVICE = "jamf_object_lib.api"
DB_SERVICE = "jamf_object_lib.db"
ACCOUNT = "saved_connection"

SAVED_KEYS = ("server", "port", "user", "password")


def get_saved(service):
    """Get the saved connection data of a service.

    Args:
        service: The service name, API_SERVICE or DB_SERVICE.

    Returns:
        A dict with server, port, user and password, or `None` if nothing
        is saved.

    Raises:
        KeychainError: If the credential store could not be read.
    """
    try:
        secret = keyring.get_password(service, ACCOUNT)
    except KeyringError as e:
        raise KeychainError(str(e)) from e
    if not secret:
        return None
    try:
        saved = json.loads(secret)
    except ValueError as e:
        raise KeychainError(f"Saved data for {service} is not readable") from e
    return {key: saved.get(key, "") for key in SAVED_KEYS}


def save(service, server, port, user, password):
    """Save connection data for a service, replacing any existing data.

    Raises:
        KeychainError: If the item could not be saved.
    """
    secret = json.dumps(
        {"server": server, "port": port, "user": user, "password": password}
    )
    try:
        keyring.set_password(service, ACCOUNT, secret)
    except KeyringError as e:
        raise KeychainError(str(e)) from e


def forget(service):
    """Delete the saved connection data of a service. Nothing saved is not an error."""
    try:
        keyring.delete_password(service, ACCOUNT)
    except PasswordDeleteError:
        pass
    except KeyringError as e:
        raise KeychainError(str(e)) from e
