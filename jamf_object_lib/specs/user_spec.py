#!/usr/bin/env python3

"""Users, the result type of advanced user searches."""

import pytest

from jamf_object_lib import api_resource
from jamf_object_lib.errors import InvalidDataError, NotFoundError


@pytest.fixture(scope="module")
def user(jamf, history, run_name):
    new = api_resource.APIObject("user", name=f"{run_name}-user")
    new["full_name"] = f"Spec User {run_name}"
    new["email"] = f"{run_name}@example.com"
    new.save(jamf, history)
    yield new
    if new.id:
        try:
            new.delete(jamf)
        except NotFoundError:
            pass


def test_create_gives_an_id(user):
    assert user.id > 0


def test_fetch_by_name(jamf, user):
    fetched = api_resource.get_object(jamf, "user", name=user.name)
    assert fetched.id == user.id
    assert fetched["full_name"] == user["full_name"]


def test_invalid_key_is_refused(user):
    with pytest.raises(InvalidDataError):
        user["not_a_user_field"] = "x"


def test_update(jamf, history, user):
    user["position"] = "Spec Runner"
    user.save(jamf, history)
    fetched = api_resource.get_object(jamf, "user", obj_id=user.id)
    assert fetched["position"] == "Spec Runner"


def test_history_entries(history, user):
    if history is None:
        pytest.skip("no database connection for object history")
    entries = history.entries(user.resource_type, user.id)
    assert [entry["notes"] for entry in entries][:2] == ["updated", "created"]


def test_delete(jamf, history, user):
    user.delete(jamf, history)
    with pytest.raises(NotFoundError):
        api_resource.get_object(jamf, "user", obj_id=user.id)
    user.id = None
