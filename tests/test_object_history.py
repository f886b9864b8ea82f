import pytest

from jamf_object_lib import api_objects
from jamf_object_lib.errors import ObjectHistoryError
from jamf_object_lib.object_history import ObjectHistory


class FakeCursor:
    def __init__(self, db):
        self.db = db

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, query, params):
        self.db.executed.append((" ".join(query.split()), params))

    def fetchall(self):
        return self.db.rows


class FakeDB:
    def __init__(self, rows=()):
        self.rows = list(rows)
        self.executed = []
        self.closed = False

    def cursor(self):
        return FakeCursor(self)

    def close(self):
        self.closed = True


SEARCH = api_objects.resource_type("advanced_user_search")


def test_add_entry_uses_history_object_type(monkeypatch):
    monkeypatch.setattr("time.time", lambda: 1700000000.5)
    db = FakeDB()
    ObjectHistory(db, "spec_user").add_entry(SEARCH, 7, notes="created")
    query, params = db.executed[0]
    assert query.startswith("INSERT INTO object_history")
    assert params == (55, 7, "spec_user", "created", "", 1700000000500)


def test_add_entry_with_other_user():
    db = FakeDB()
    ObjectHistory(db, "spec_user").add_entry(SEARCH, 7, details="renamed", user="someone")
    assert db.executed[0][1][2:5] == ("someone", "", "renamed")


def test_add_entry_needs_an_id_and_text():
    history = ObjectHistory(FakeDB(), "spec_user")
    with pytest.raises(ObjectHistoryError):
        history.add_entry(SEARCH, None, notes="created")
    with pytest.raises(ObjectHistoryError):
        history.add_entry(SEARCH, 7)


def test_entries():
    db = FakeDB(rows=[("spec_user", "updated", "", 2000), ("spec_user", "created", "", 1000)])
    entries = ObjectHistory(db, "spec_user").entries(SEARCH, 7)
    assert [entry["notes"] for entry in entries] == ["updated", "created"]
    assert db.executed[0][1] == (55, 7)
    assert "ORDER BY timestamp_epoch DESC" in db.executed[0][0]


def test_closed_history_refuses_entries():
    db = FakeDB()
    history = ObjectHistory(db, "spec_user")
    history.close()
    assert db.closed
    with pytest.raises(ObjectHistoryError):
        history.add_entry(SEARCH, 7, notes="created")
