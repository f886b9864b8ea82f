import json

import pytest

from jamf_object_lib.errors import NotFoundError


class FakeConnection:
    """Stands in for api_connect.Connection, serving canned JSON by resource."""

    verbosity = 0

    def __init__(self, responses=None, next_id=100):
        self.responses = responses or {}
        self.next_id = next_id
        self.calls = []
        self.user = "spec_user"

    def get(self, rsrc):
        self.calls.append(("GET", rsrc, None))
        try:
            return self.responses[rsrc]
        except KeyError:
            raise NotFoundError(f"GET {rsrc} failed (404): Not Found", 404)

    def post(self, rsrc, xml):
        self.calls.append(("POST", rsrc, xml))
        return self.next_id

    def put(self, rsrc, xml):
        self.calls.append(("PUT", rsrc, xml))
        return int(rsrc.rsplit("/", 1)[1])

    def delete(self, rsrc):
        self.calls.append(("DELETE", rsrc, None))


class FakeResponse:
    def __init__(self, status_code=200, body=b"", reason="OK"):
        self.status_code = status_code
        self.reason = reason
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        self.content = body.encode("utf-8") if isinstance(body, str) else body
        self.text = self.content.decode("utf-8")

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Stands in for requests.Session, replaying queued responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []
        self.headers = {}
        self.hooks = {}
        self.verify = True
        self.closed = False

    def request(self, method, url, headers=None, data=None, timeout=None):
        self.requests.append(
            {"method": method, "url": url, "headers": headers, "data": data, "timeout": timeout}
        )
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def post(self, url, headers=None, timeout=None):
        return self.request("POST", url, headers=headers, timeout=timeout)

    def close(self):
        self.closed = True


class FakeHistory:
    def __init__(self):
        self.entries = []

    def add_entry(self, resource_type, obj_id, notes="", details="", user=None):
        self.entries.append((resource_type.history_object_type, obj_id, notes))


SEARCH_DATA = {
    "advanced_user_search": {
        "id": 7,
        "name": "Staff",
        "criteria": [
            {
                "name": "Username",
                "priority": 0,
                "and_or": "and",
                "search_type": "like",
                "value": "a",
                "opening_paren": False,
                "closing_paren": False,
            }
        ],
        "display_fields": [{"name": "Username"}, {"name": "Full Name"}],
        "users": [
            {"id": 1, "name": "alice", "Username": "alice", "Full_Name": "Alice A"},
            {"id": 2, "name": "carla", "Username": "carla", "Full_Name": "Carla C"},
        ],
        "site": {"id": -1, "name": "None"},
    }
}


@pytest.fixture
def connection():
    return FakeConnection(
        {
            "advancedusersearches": {
                "advanced_user_searches": [
                    {"id": 7, "name": "Staff"},
                    {"id": 9, "name": "Students"},
                ]
            },
            "advancedusersearches/id/7": SEARCH_DATA,
            "advancedusersearches/name/Staff": SEARCH_DATA,
            "users/id/1": {"user": {"id": 1, "name": "alice", "full_name": "Alice A"}},
            "users/id/2": {"user": {"id": 2, "name": "carla", "full_name": "Carla C"}},
            "computers/id/3": {
                "computer": {"general": {"id": 3, "name": "mac-3"}, "hardware": {}}
            },
        }
    )


@pytest.fixture
def history():
    return FakeHistory()
