#!/usr/bin/env python3

from .api_connect import server_name


def confirm(prompt=None):
    """prompts for a yes or no response from the user. Returns True only when
    the answer is 'y', so that anything else, including just typing ENTER,
    is treated as no.

    Examples:

    confirm(prompt='Run specs against jss.example.com?')
    Run specs against jss.example.com? (y/n): y
    True

    confirm(prompt='Run specs against jss.example.com?')
    Run specs against jss.example.com? (y/n): yes please
    False
    """

    if prompt is None:
        prompt = "Confirm"

    answer = input(f"{prompt} (y/n): ")
    return answer.strip().lower() == "y"


def confirm_server(server, production_server):
    """ask before running against the server recorded in the system-wide prefs
    file. Any other server needs no confirmation."""
    if not production_server or server_name(server) != server_name(production_server):
        return True
    print(f"WARNING: {server} is the server in the system-wide configuration.")
    print("Specs create, change and delete objects on the server they run against.")
    return confirm(prompt=f"Run specs against {server}?")
