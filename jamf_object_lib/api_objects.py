#!/usr/bin/env python3

from collections import namedtuple

ResourceType = namedtuple(
    "ResourceType",
    [
        "object_type",
        "rsrc_base",
        "list_key",
        "object_key",
        "valid_data_keys",
        "result_type",
        "result_id_fields",
        "history_object_type",
    ],
)

# keys that every Classic API object may carry alongside its valid data keys
COMMON_DATA_KEYS = frozenset(["id", "name", "site"])

# define the relationship between the object types, their URL, their JSON keys
# and their code in the object history table.
# we could make this shorter with some regex but I think this way is clearer
RESOURCE_TYPES = {
    "advanced_user_search": ResourceType(
        object_type="advanced_user_search",
        rsrc_base="advancedusersearches",
        list_key="advanced_user_searches",
        object_key="advanced_user_search",
        valid_data_keys=frozenset(["criteria", "display_fields", "users"]),
        result_type="user",
        result_id_fields=("id", "name"),
        history_object_type=55,
    ),
    "computer": ResourceType(
        object_type="computer",
        rsrc_base="computers",
        list_key="computers",
        object_key="computer",
        valid_data_keys=frozenset(
            [
                "general",
                "location",
                "purchasing",
                "peripherals",
                "hardware",
                "certificates",
                "security",
                "software",
                "extension_attributes",
                "groups_accounts",
                "iphones",
                "configuration_profiles",
            ]
        ),
        result_type=None,
        result_id_fields=(),
        history_object_type=1,
    ),
    "computer_group": ResourceType(
        object_type="computer_group",
        rsrc_base="computergroups",
        list_key="computer_groups",
        object_key="computer_group",
        valid_data_keys=frozenset(["is_smart", "criteria", "computers"]),
        result_type=None,
        result_id_fields=(),
        history_object_type=7,
    ),
    "mobile_device": ResourceType(
        object_type="mobile_device",
        rsrc_base="mobiledevices",
        list_key="mobile_devices",
        object_key="mobile_device",
        valid_data_keys=frozenset(
            [
                "general",
                "location",
                "purchasing",
                "applications",
                "security_object",
                "network",
                "certificates",
                "configuration_profiles",
                "provisioning_profiles",
                "mobile_device_groups",
                "extension_attributes",
            ]
        ),
        result_type=None,
        result_id_fields=(),
        history_object_type=21,
    ),
    "mobile_device_group": ResourceType(
        object_type="mobile_device_group",
        rsrc_base="mobiledevicegroups",
        list_key="mobile_device_groups",
        object_key="mobile_device_group",
        valid_data_keys=frozenset(["is_smart", "criteria", "mobile_devices"]),
        result_type=None,
        result_id_fields=(),
        history_object_type=25,
    ),
    "policy": ResourceType(
        object_type="policy",
        rsrc_base="policies",
        list_key="policies",
        object_key="policy",
        valid_data_keys=frozenset(
            [
                "general",
                "scope",
                "self_service",
                "package_configuration",
                "scripts",
                "printers",
                "dock_items",
                "account_maintenance",
                "reboot",
                "maintenance",
                "files_processes",
                "user_interaction",
                "disk_encryption",
            ]
        ),
        result_type=None,
        result_id_fields=(),
        history_object_type=3,
    ),
    "user": ResourceType(
        object_type="user",
        rsrc_base="users",
        list_key="users",
        object_key="user",
        valid_data_keys=frozenset(
            [
                "full_name",
                "email",
                "email_address",
                "phone_number",
                "position",
                "enable_custom_photo_url",
                "custom_photo_url",
                "ldap_server",
                "extension_attributes",
                "sites",
                "links",
                "user_groups",
            ]
        ),
        result_type=None,
        result_id_fields=(),
        history_object_type=53,
    ),
    "user_group": ResourceType(
        object_type="user_group",
        rsrc_base="usergroups",
        list_key="user_groups",
        object_key="user_group",
        valid_data_keys=frozenset(
            ["is_smart", "is_notify_on_change", "criteria", "users"]
        ),
        result_type=None,
        result_id_fields=(),
        history_object_type=54,
    ),
}


def resource_type(object_type):
    """Return the ResourceType for an object type"""
    return RESOURCE_TYPES[object_type]


def all_resource_types():
    """Return all known ResourceTypes in table order"""
    return list(RESOURCE_TYPES.values())


def object_types(object_type):
    """Return the URI name of a Classic API object type"""
    return RESOURCE_TYPES[object_type].rsrc_base


def object_list_types(object_type):
    """Return the JSON key used when listing all objects of a type"""
    return RESOURCE_TYPES[object_type].list_key


def object_keys(object_type):
    """Return the JSON/XML key used for a single object of a type"""
    return RESOURCE_TYPES[object_type].object_key
