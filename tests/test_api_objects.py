import pytest

from jamf_object_lib import api_objects


def test_advanced_user_search_descriptor():
    rsrc = api_objects.resource_type("advanced_user_search")
    assert rsrc.rsrc_base == "advancedusersearches"
    assert rsrc.list_key == "advanced_user_searches"
    assert rsrc.object_key == "advanced_user_search"
    assert rsrc.valid_data_keys == {"criteria", "display_fields", "users"}
    assert rsrc.result_type == "user"
    assert rsrc.result_id_fields == ("id", "name")
    assert rsrc.history_object_type == 55


def test_lookup_helpers():
    assert api_objects.object_types("computer_group") == "computergroups"
    assert api_objects.object_list_types("computer_group") == "computer_groups"
    assert api_objects.object_keys("computer_group") == "computer_group"


def test_unknown_type_raises_key_error():
    with pytest.raises(KeyError):
        api_objects.resource_type("bogus")


def test_every_descriptor_has_valid_data_keys():
    for rsrc in api_objects.all_resource_types():
        assert rsrc.valid_data_keys, rsrc.object_type
        assert isinstance(rsrc.valid_data_keys, frozenset)


def test_history_object_types_are_unique_positive_ints():
    codes = [rsrc.history_object_type for rsrc in api_objects.all_resource_types()]
    assert all(isinstance(code, int) and code > 0 for code in codes)
    assert len(codes) == len(set(codes))


def test_result_types_are_known():
    for rsrc in api_objects.all_resource_types():
        if rsrc.result_type:
            assert rsrc.result_type in api_objects.RESOURCE_TYPES
            assert rsrc.result_id_fields


def test_table_keys_match_object_types():
    for object_type, rsrc in api_objects.RESOURCE_TYPES.items():
        assert rsrc.object_type == object_type
