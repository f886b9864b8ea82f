#!/usr/bin/env python3

"""
Run the live specs against a Jamf Pro server.

Credentials are resolved per field with the precedence keychain, then
command line, then prefs files. Each spec module runs in its own pytest
session with its own SpecRun plugin, so the results of one spec never
include the tests of another.
"""

import getpass
import uuid

import pytest

from . import actions, api_connect, keychain, object_history, specs
from .errors import MissingCredentialsError

# pytest exit codes that do not mean a spec failed
PASSING_EXIT_CODES = (pytest.ExitCode.OK, pytest.ExitCode.NO_TESTS_COLLECTED)


def resolve_credentials(
    saved,
    server="",
    port="",
    user="",
    config_server="",
    config_port="",
    default_port=api_connect.DEFAULT_PORT,
    label="API",
):
    """return the server, port, user and saved password to connect with, and
    whether they differ from the saved data. A server or user given on the
    command line that differs from the saved one replaces the saved data."""
    is_new = not saved
    if saved and server and api_connect.server_name(server) != api_connect.server_name(
        saved["server"]
    ):
        saved, is_new = None, True
    if saved and user and user != saved["user"]:
        # same server, new user: keep the saved server and port
        saved = dict(saved, user=user, password="")
        is_new = True

    saved = saved or {}
    resolved = {
        "server": saved.get("server") or server or config_server,
        "port": saved.get("port") or port or config_port or default_port,
        "user": saved.get("user") or user,
        "password": saved.get("password") or "",
    }

    if not resolved["server"]:
        raise MissingCredentialsError(
            f"No {label} server given and none saved in the keychain or prefs files"
        )
    if not resolved["user"]:
        raise MissingCredentialsError(
            f"No {label} user given and none saved in the keychain"
        )
    return resolved, is_new


def ask_password(credentials, label="API"):
    """prompt for the password unless the saved data already holds one"""
    if not credentials["password"]:
        credentials["password"] = getpass.getpass(
            f"Enter the {label} password for '{credentials['user']}' "
            f"on {credentials['server']} : "
        )
    return credentials


def show_saved_data():
    """print the saved connection data without the passwords"""
    for label, service in (("API", keychain.API_SERVICE), ("DB", keychain.DB_SERVICE)):
        saved = keychain.get_saved(service)
        if saved:
            print(
                f"{label}: {saved['user']}@{saved['server']}:{saved['port']}"
                f" (keychain service {service})"
            )
        else:
            print(f"{label}: nothing saved (keychain service {service})")


class SpecRun:
    """The fixtures and results of a single spec module.

    An instance is registered as a pytest plugin for one pytest session only.
    """

    def __init__(self, name, module, connection, history=None, verbosity=0):
        self.name = name
        self.module = module
        self.connection = connection
        self.object_history = history
        self.verbosity = verbosity
        self.prefix = f"spec-{uuid.uuid4().hex[:8]}"
        self.reports = []
        self.exit_code = None

    @pytest.fixture(scope="session")
    def jamf(self):
        return self.connection

    @pytest.fixture(scope="session")
    def history(self):
        return self.object_history

    @pytest.fixture(scope="session")
    def run_name(self):
        return self.prefix

    def pytest_runtest_logreport(self, report):
        # one report per test, plus any setup or teardown that did not pass
        if report.when == "call" or report.outcome != "passed":
            self.reports.append(report)

    def outcomes(self, outcome):
        return [report.nodeid for report in self.reports if report.outcome == outcome]

    @property
    def passed(self):
        return self.outcomes("passed")

    @property
    def failed(self):
        return self.outcomes("failed")

    @property
    def skipped(self):
        return self.outcomes("skipped")

    @property
    def ok(self):
        return self.exit_code in PASSING_EXIT_CODES and not self.failed

    def main_args(self):
        args = [self.module.__file__, "-p", "no:cacheprovider"]
        if self.verbosity:
            args.append("-" + "v" * self.verbosity)
        else:
            args.append("-q")
        return args

    def run(self):
        self.exit_code = pytest.main(self.main_args(), plugins=[self])
        return self

    def summary(self):
        return (
            f"{self.name}: {len(self.passed)} passed, {len(self.failed)} failed, "
            f"{len(self.skipped)} skipped"
        )


def run_spec(name, connection, history=None, verbosity=0):
    """run one spec module and return its SpecRun, or None for an unknown name"""
    module = specs.get_spec(name)
    if module is None:
        print(f"WARNING: Skipping unknown spec '{name}'")
        return None
    spec_name = specs.normalize_spec_name(name)
    print(f"\n** Running {spec_name}")
    return SpecRun(spec_name, module, connection, history, verbosity).run()


def run_specs(names, connection, history=None, verbosity=0):
    """run specs one after the other. With no names, all specs run in name order."""
    runs = []
    for name in names or specs.spec_names():
        spec_run = run_spec(name, connection, history, verbosity)
        if spec_run is not None:
            runs.append(spec_run)
    return runs


def connect_api(args, config):
    """resolve the API credentials, guard the production server and connect"""
    credentials, is_new = resolve_credentials(
        keychain.get_saved(keychain.API_SERVICE),
        server=args.server,
        port=args.port,
        user=args.user,
        config_server=config.get("JSS_SERVER", ""),
        config_port=config.get("JSS_PORT", ""),
    )
    if not actions.confirm_server(credentials["server"], api_connect.get_system_server()):
        return None

    ask_password(credentials)
    connection = api_connect.Connection(
        credentials["server"],
        credentials["port"],
        credentials["user"],
        credentials["password"],
        verbosity=args.verbose,
    ).connect()
    print(f"Connected to {connection.url} as {connection.user}")
    if is_new:
        keychain.save(keychain.API_SERVICE, **credentials)
    return connection


def connect_history(args, config, username):
    """connect to the Jamf Pro database for object history, if one is known"""
    saved = keychain.get_saved(keychain.DB_SERVICE)
    config_server = config.get("DB_SERVER", "")
    if not (args.db_server or saved or config_server):
        if args.verbose:
            print("No database server known, object history will not be recorded")
        return None

    credentials, is_new = resolve_credentials(
        saved,
        server=args.db_server,
        port=args.db_port,
        user=args.db_user,
        config_server=config_server,
        config_port=config.get("DB_PORT", ""),
        default_port=object_history.DEFAULT_DB_PORT,
        label="database",
    )
    ask_password(credentials, label="database")
    db = object_history.connect_db(**credentials)
    print(f"Connected to database on {credentials['server']}")
    if is_new:
        keychain.save(keychain.DB_SERVICE, **credentials)
    return object_history.ObjectHistory(db, username)


def run(args):
    """run the specs named in the parsed arguments and return the exit status"""
    if args.saved_data:
        show_saved_data()
        return 0

    config = api_connect.get_config()
    connection = connect_api(args, config)
    if connection is None:
        print("Not confirmed, no specs run.")
        return 0

    history = None
    try:
        history = connect_history(args, config, connection.user)
        runs = run_specs(args.specs, connection, history, args.verbose)
    finally:
        if history is not None:
            history.close()
        connection.disconnect()

    print("\n** Results")
    for spec_run in runs:
        print(spec_run.summary())
    return 0 if all(spec_run.ok for spec_run in runs) else 1
