#!/usr/bin/env python3

"""
** Jamf Object Lib Spec Runner: run the live specs against a Jamf Pro server

Credentials are taken from the keychain when saved there, then from the command
line, then from the prefs files /etc/jamf_object_lib.json and
~/.jamf_object_lib.json (JSS_SERVER, JSS_PORT, DB_SERVER, DB_PORT).
A new user or server given on the command line is saved to the keychain once
the connection succeeds.

Specs live in jamf_object_lib/specs. With no spec names, all of them run in
name order. The _spec suffix is optional.

For usage, run jamf_spec_runner.py --help
"""

import argparse
import os.path
import sys
import traceback


def get_args(argv=None):
    """Parse any command line arguments"""
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "specs",
        nargs="*",
        help="Specs to run, e.g. advanced_user_search. Default is all specs.",
    )
    parser.add_argument(
        "-s", "--server", default="", help="the Jamf Pro server name",
    )
    parser.add_argument(
        "-p", "--port", default="", help="the Jamf Pro server port. Default is 443",
    )
    parser.add_argument(
        "-u",
        "--user",
        default="",
        help="a user with the rights to create, update and delete the objects under test",
    )
    parser.add_argument(
        "-S", "--db-server", default="", help="the Jamf Pro database server name",
    )
    parser.add_argument(
        "-P", "--db-port", default="", help="the Jamf Pro database port. Default is 3306",
    )
    parser.add_argument(
        "-U", "--db-user", default="", help="a database user for object history",
    )
    parser.add_argument(
        "-g",
        "-i",
        "--gem-dir",
        "--lib-dir",
        dest="lib_dir",
        default="",
        help="a directory containing the jamf_object_lib package to test, "
        "instead of the installed one",
    )
    parser.add_argument(
        "-d",
        "--saved-data",
        action="store_true",
        help="show the connection data saved in the keychain and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="print verbose output",
    )
    parser.add_argument(
        "-h", "-H", "--help", action="help", help="show this help message and exit",
    )
    return parser.parse_args(argv)


def use_lib_dir(lib_dir):
    """put a development copy of jamf_object_lib ahead of the installed one.
    Must be called before the library is first imported."""
    lib_dir = os.path.abspath(os.path.expanduser(lib_dir))
    if not os.path.isdir(os.path.join(lib_dir, "jamf_object_lib")):
        raise FileNotFoundError(f"No jamf_object_lib package in {lib_dir}")
    sys.path.insert(0, lib_dir)
    return lib_dir


def main(argv=None):
    """Do the main thing here"""
    print("\n** Jamf Object Lib spec runner")
    print("** Runs the live specs against a Jamf Pro server.")

    #  parse the command line arguments
    args = get_args(argv)

    try:
        if args.lib_dir:
            print(f"Using jamf_object_lib from {use_lib_dir(args.lib_dir)}")
        from jamf_object_lib import spec_runner

        return spec_runner.run(args)
    except Exception as e:
        print(f"ERROR: {e}")
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
