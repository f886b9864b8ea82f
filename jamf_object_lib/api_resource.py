#!/usr/bin/env python3

"""
Generic create, read, update and delete of Classic API objects.

Every function here is driven by a ResourceType from api_objects, so no
resource type needs code of its own. Objects are fetched as JSON, but the
Classic API only accepts XML for POST and PUT, so APIObject data is turned
into XML with to_xml() before it is sent.
"""

import copy
import xml.etree.ElementTree as ET
from urllib.parse import quote

from . import api_objects
from .errors import InvalidDataError, NotFoundError


def _resource_type(object_type):
    if isinstance(object_type, api_objects.ResourceType):
        return object_type
    return api_objects.resource_type(object_type)


class APIObject:
    """A single object of a Classic API resource type."""

    def __init__(self, resource_type, data=None, name=None):
        self.resource_type = _resource_type(resource_type)
        self.data = {}
        for key, value in (data or {}).items():
            self[key] = value
        if name is not None:
            self.name = name

    @classmethod
    def from_api(cls, resource_type, data):
        """wrap data fetched from the API, which must carry an id and a name.
        The keys are taken as the server sends them."""
        obj = cls(resource_type)
        obj.data = copy.deepcopy(data)
        if obj.id is None or obj.name is None:
            raise InvalidDataError(
                f"{obj.object_type} data has no id or name: {sorted(data)}"
            )
        return obj

    def __repr__(self):
        return f"<{self.object_type} id={self.id} name={self.name!r}>"

    @property
    def object_type(self):
        return self.resource_type.object_type

    @property
    def valid_keys(self):
        return api_objects.COMMON_DATA_KEYS | self.resource_type.valid_data_keys

    def _identity(self):
        # computers, policies etc. keep their id and name in the general subset
        if "general" in self.resource_type.valid_data_keys:
            return self.data.setdefault("general", {})
        return self.data

    @property
    def id(self):
        return self._identity().get("id")

    @id.setter
    def id(self, value):
        self._identity()["id"] = value

    @property
    def name(self):
        return self._identity().get("name")

    @name.setter
    def name(self, value):
        self._identity()["name"] = value

    def __getitem__(self, key):
        return self.data[key]

    def __setitem__(self, key, value):
        if key not in self.valid_keys:
            raise InvalidDataError(f"'{key}' is not a valid key for {self.object_type}")
        self.data[key] = value

    def __contains__(self, key):
        return key in self.data

    def get(self, key, default=None):
        return self.data.get(key, default)

    def save(self, connection, history=None):
        """create the object if it has no id yet, otherwise update it"""
        if self.id:
            return update_object(connection, self, history)
        return create_object(connection, self, history)

    def delete(self, connection, history=None):
        delete_object(connection, self, history)


def singular(tag):
    """the tag of each item in a Classic API list"""
    if tag == "criteria":
        return "criterion"
    if tag.endswith("ies"):
        return tag[:-3] + "y"
    if tag.endswith(("ches", "shes", "sses")):
        return tag[:-2]
    if tag.endswith("s"):
        return tag[:-1]
    return tag


def _add_element(parent, tag, value):
    elem = ET.SubElement(parent, tag)
    if isinstance(value, dict):
        for key, subvalue in value.items():
            _add_element(elem, key, subvalue)
    elif isinstance(value, (list, tuple)):
        ET.SubElement(elem, "size").text = str(len(value))
        for item in value:
            _add_element(elem, singular(tag), item)
    elif isinstance(value, bool):
        elem.text = "true" if value else "false"
    elif value is not None:
        elem.text = str(value)
    return elem


def read_only_keys(resource_type):
    """keys the server fills in and will not accept back. For searches these are
    the result rows."""
    if resource_type.result_type:
        return {api_objects.object_list_types(resource_type.result_type)}
    return set()


def to_xml(obj):
    """return the Classic API XML representation of an APIObject"""
    root = ET.Element(obj.resource_type.object_key)
    skip = read_only_keys(obj.resource_type) | {"id"}
    for key, value in obj.data.items():
        if key in skip:
            continue
        _add_element(root, key, value)
    return ET.tostring(root, encoding="utf-8")


def object_url(resource_type, obj_id=None, name=None):
    """return the Classic API resource of a single object"""
    if obj_id is not None:
        return f"{resource_type.rsrc_base}/id/{obj_id}"
    return f"{resource_type.rsrc_base}/name/{quote(name, safe='')}"


def get_object_list(connection, object_type):
    """Return all items of an API object type as id and name summaries"""
    resource_type = _resource_type(object_type)
    output = connection.get(resource_type.rsrc_base)
    obj_list = [
        {"id": obj["id"], "name": obj.get("name")}
        for obj in output.get(resource_type.list_key, [])
    ]
    if connection.verbosity > 2:
        print("\nAPI object list:")
        print(obj_list)
    return obj_list


def get_object_id_from_name(connection, object_type, object_name):
    """returns an ID of an API object if it exists, otherwise 0"""
    obj_id = 0
    for obj in get_object_list(connection, object_type):
        # we need to check for a case-insensitive match
        if (obj["name"] or "").lower() == object_name.lower():
            obj_id = obj["id"]
    return obj_id


def get_object(connection, object_type, obj_id=None, name=None):
    """Fetch a single object by id or by name"""
    resource_type = _resource_type(object_type)
    if obj_id is None and name is None:
        raise ValueError("get_object needs an obj_id or a name")
    rsrc = object_url(resource_type, obj_id, name)
    output = connection.get(rsrc)
    try:
        data = output[resource_type.object_key]
    except KeyError as e:
        raise NotFoundError(f"GET {rsrc} returned no {resource_type.object_key}") from e
    return APIObject.from_api(resource_type, data)


def _record_history(history, obj, notes):
    if history is None:
        return
    history.add_entry(obj.resource_type, obj.id, notes=notes)


def create_object(connection, obj, history=None):
    """POST a new object and store the id the server gave it"""
    rsrc = object_url(obj.resource_type, 0)
    obj_id = connection.post(rsrc, to_xml(obj))
    obj.id = obj_id
    if connection.verbosity:
        print(f"{obj.object_type} '{obj.name}' created with ID {obj_id}")
    _record_history(history, obj, "created")
    return obj


def update_object(connection, obj, history=None):
    """PUT the data of an existing object"""
    if not obj.id:
        raise InvalidDataError(f"{obj.object_type} '{obj.name}' has no id to update")
    connection.put(object_url(obj.resource_type, obj.id), to_xml(obj))
    if connection.verbosity:
        print(f"{obj.object_type} '{obj.name}' updated")
    _record_history(history, obj, "updated")
    return obj


def delete_object(connection, obj, history=None):
    """DELETE an object by its id"""
    if not obj.id:
        raise InvalidDataError(f"{obj.object_type} '{obj.name}' has no id to delete")
    connection.delete(object_url(obj.resource_type, obj.id))
    if connection.verbosity:
        print(f"{obj.object_type} '{obj.name}' deleted")
    _record_history(history, obj, "deleted")


def copy_object(obj, name):
    """return an unsaved copy of an object under a new name"""
    data = copy.deepcopy(obj.data)
    new_obj = APIObject(obj.resource_type, data)
    new_obj._identity().pop("id", None)
    new_obj.name = name
    return new_obj
