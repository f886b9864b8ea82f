#!/usr/bin/env python3

import json
import os.path
import plistlib
import re
import xml.etree.ElementTree as ET
from base64 import b64encode

import requests
from requests_toolbelt.utils import dump

from .errors import (
    AuthenticationError,
    ConflictError,
    JamfAPIError,
    NotFoundError,
    ValidationError,
)

SYSTEM_PREFS = "/etc/jamf_object_lib.json"
USER_PREFS = "~/.jamf_object_lib.json"

DEFAULT_PORT = 443
REQUEST_TIMEOUT = 60


def logging_hook(response, *args, **kwargs):
    data = dump.dump_all(response)
    print(data.decode("utf-8", errors="replace"))


def get_prefs(prefs_file):
    """return the contents of a plist or json prefs_file as a dictionary"""
    prefs_file = os.path.expanduser(prefs_file)
    if not os.path.exists(prefs_file):
        return {}

    prefs = {}
    if prefs_file.endswith(".plist"):
        with open(prefs_file, "rb") as pl:
            prefs = plistlib.load(pl)

    read_as_json = (".json", ".env")
    if list(filter(prefs_file.endswith, read_as_json)) != []:
        with open(prefs_file) as js:
            prefs = json.load(js)
    return prefs


def get_config(system_prefs=SYSTEM_PREFS, user_prefs=USER_PREFS):
    """return the default connection values. Values in the user prefs file
    override those in the system-wide prefs file"""
    config = get_prefs(system_prefs)
    config.update(get_prefs(user_prefs))
    return config


def get_system_server(system_prefs=SYSTEM_PREFS):
    """return the server recorded in the system-wide prefs file, if any"""
    return get_prefs(system_prefs).get("JSS_SERVER", "")


def encode_creds(jamf_user, jamf_password):
    """encode the username and password into a basic auth b64 encoded string so that we can
    get the session token"""
    credentials = f"{jamf_user}:{jamf_password}"
    enc_creds_bytes = b64encode(credentials.encode("utf-8"))
    return str(enc_creds_bytes, "utf-8")


def server_name(server):
    """the host name of a server given with or without a scheme"""
    return re.sub(r"^https?://", "", server.strip()).rstrip("/").lower()


def jamf_url(server, port=DEFAULT_PORT):
    """build the base URL of a Jamf Pro server"""
    server = server_name(server)
    if not port or int(port) == DEFAULT_PORT:
        return f"https://{server}"
    return f"https://{server}:{port}"


def error_message(response):
    """Jamf error responses are sent as html. Give us the <p> text back."""
    lines = re.findall(r"<p[^>]*>(.*?)</p>", response.text or "", re.DOTALL)
    if lines:
        return "\n".join(line.strip() for line in lines)
    return response.reason or ""


def status_check(r, request_type, rsrc):
    """Raise the matching error for an unsuccessful HTTP response"""
    if r.status_code in (200, 201, 202, 204):
        return
    message = f"{request_type} {rsrc} failed ({r.status_code}): {error_message(r)}"
    if r.status_code == 404:
        raise NotFoundError(message, r.status_code)
    if r.status_code == 409:
        raise ConflictError(message, r.status_code)
    if r.status_code == 400:
        raise ValidationError(message, r.status_code)
    if r.status_code in (401, 403):
        raise AuthenticationError(message, r.status_code)
    raise JamfAPIError(message, r.status_code)


class Connection:
    """A connection to the Classic API of a Jamf Pro server."""

    def __init__(
        self, server, port=DEFAULT_PORT, user="", password="", verbosity=0, ssl_verify=True
    ):
        self.server = server
        self.port = port
        self.user = user
        self.verbosity = verbosity
        self.url = jamf_url(server, port)
        self.token = None
        self._enc_creds = encode_creds(user, password)
        self.session = requests.Session()
        self.session.verify = ssl_verify
        if verbosity > 2:
            self.session.hooks["response"] = [logging_hook]

    def __repr__(self):
        return f"<Connection {self.user}@{self.url}>"

    @property
    def connected(self):
        return self.token is not None

    def connect(self):
        """get a bearer token for the API using basic auth"""
        url = f"{self.url}/api/v1/auth/token"
        headers = {
            "authorization": f"Basic {self._enc_creds}",
            "accept": "application/json",
        }
        r = self.session.post(url, headers=headers, timeout=REQUEST_TIMEOUT)
        status_check(r, "POST", "api/v1/auth/token")
        try:
            self.token = r.json()["token"]
        except (KeyError, ValueError) as e:
            raise AuthenticationError(
                f"No token received from {self.url}", r.status_code
            ) from e
        self.session.headers.update({"authorization": f"Bearer {self.token}"})
        if self.verbosity:
            print(f"Session token received from {self.url}")
        return self

    def disconnect(self):
        """invalidate the token and close the session"""
        try:
            if self.token:
                url = f"{self.url}/api/v1/auth/invalidate-token"
                r = self.session.post(url, timeout=REQUEST_TIMEOUT)
                if r.status_code not in (200, 204) and self.verbosity:
                    print(f"WARNING: token invalidation returned {r.status_code}")
        except requests.exceptions.RequestException as e:
            print(f"WARNING: token invalidation failed: {e}")
        finally:
            self.token = None
            self.session.headers.pop("authorization", None)
            self.session.close()

    def _request(self, request_type, rsrc, data=None):
        if not self.connected:
            raise AuthenticationError(f"Not connected to {self.url}")
        url = f"{self.url}/JSSResource/{rsrc}"
        if request_type in ("GET", "DELETE"):
            headers = {"accept": "application/json"}
        else:
            # the Classic API must be sent xml
            headers = {"content-type": "application/xml", "accept": "application/xml"}
        if self.verbosity > 1:
            print(f"{request_type} {url}")
        r = self.session.request(
            request_type, url, headers=headers, data=data, timeout=REQUEST_TIMEOUT
        )
        status_check(r, request_type, rsrc)
        return r

    def get(self, rsrc):
        """GET a Classic API resource and return the JSON data"""
        r = self._request("GET", rsrc)
        try:
            return r.json()
        except ValueError as e:
            raise JamfAPIError(
                f"Error parsing JSON from GET {rsrc}", r.status_code
            ) from e

    def post(self, rsrc, xml):
        """POST xml to a Classic API resource and return the new object id"""
        return self._id_from_response(self._request("POST", rsrc, xml))

    def put(self, rsrc, xml):
        """PUT xml to a Classic API resource and return the object id"""
        return self._id_from_response(self._request("PUT", rsrc, xml))

    def delete(self, rsrc):
        """DELETE a Classic API resource"""
        self._request("DELETE", rsrc)

    @staticmethod
    def _id_from_response(r):
        try:
            obj_id = ET.fromstring(r.content).findtext("id")
        except ET.ParseError:
            obj_id = None
        return int(obj_id) if obj_id else None
