#!/usr/bin/env python3

"""
Live specs, run against a Jamf Pro server by jamf_spec_runner.py.

Each spec is a pytest module. Specs are only run through the runner, which
supplies the fixtures they use:

    jamf      a connected api_connect.Connection
    history   an object_history.ObjectHistory, or None without a database
    run_name  a name prefix unique to this run, for objects a spec module creates
"""

from . import advanced_user_search_spec, api_objects_spec, user_spec

SPEC_SUFFIX = "_spec"

SPECS = {
    "advanced_user_search_spec": advanced_user_search_spec,
    "api_objects_spec": api_objects_spec,
    "user_spec": user_spec,
}


def normalize_spec_name(name):
    """the suffix is optional when naming specs on the command line"""
    name = name.strip()
    if name.endswith(".py"):
        name = name[:-3]
    if not name.endswith(SPEC_SUFFIX):
        name += SPEC_SUFFIX
    return name


def spec_names():
    return sorted(SPECS)


def get_spec(name):
    return SPECS.get(normalize_spec_name(name))
