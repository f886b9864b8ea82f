#!/usr/bin/env python3

import csv
import os.path
import xml.etree.ElementTree as ET
from collections import namedtuple

from . import api_objects, api_resource
from .errors import InvalidDataError

Criterion = namedtuple(
    "Criterion",
    [
        "name",
        "priority",
        "and_or",
        "search_type",
        "value",
        "opening_paren",
        "closing_paren",
    ],
    defaults=(False, False),
)

EXPORT_FORMATS = ("csv", "tab", "xml")


def _check_search(search):
    if not search.resource_type.result_type:
        raise InvalidDataError(f"{search.object_type} is not an advanced search")


def result_list_key(search):
    """the key under which the search returns its result rows"""
    _check_search(search)
    return api_objects.object_list_types(search.resource_type.result_type)


def new_search(object_type, name):
    """return a new, unsaved advanced search with no criteria or display fields"""
    search = api_resource.APIObject(object_type, name=name)
    _check_search(search)
    search["criteria"] = []
    search["display_fields"] = []
    return search


def criteria(search):
    """return the criteria of a search as Criterion tuples, in priority order"""
    found = [
        Criterion(
            name=c.get("name"),
            priority=int(c.get("priority", 0)),
            and_or=c.get("and_or", "and"),
            search_type=c.get("search_type"),
            value=c.get("value"),
            opening_paren=bool(c.get("opening_paren", False)),
            closing_paren=bool(c.get("closing_paren", False)),
        )
        for c in search.get("criteria") or []
    ]
    return sorted(found, key=lambda c: c.priority)


def add_criterion(
    search,
    name,
    search_type,
    value,
    and_or="and",
    opening_paren=False,
    closing_paren=False,
):
    """append a criterion to a search. It gets the next free priority."""
    _check_search(search)
    existing = search.get("criteria") or []
    criterion = Criterion(
        name=name,
        priority=len(existing),
        and_or=and_or,
        search_type=search_type,
        value=value,
        opening_paren=opening_paren,
        closing_paren=closing_paren,
    )
    search["criteria"] = existing + [criterion._asdict()]
    return criterion


def display_fields(search):
    return [field["name"] for field in search.get("display_fields") or []]


def set_display_fields(search, fields):
    _check_search(search)
    search["display_fields"] = [{"name": field} for field in fields]


def result_display_keys(search):
    """display field names as they appear as keys in each result row"""
    return [field.replace(" ", "_") for field in display_fields(search)]


def search_results(search):
    """return the result rows of a fetched search"""
    return list(search.get(result_list_key(search)) or [])


def requery_search_results(connection, search):
    """fetch the search again so the server re-runs it, and return the fresh rows"""
    fresh = api_resource.get_object(connection, search.resource_type, obj_id=search.id)
    search[result_list_key(search)] = fresh.get(result_list_key(search)) or []
    return search_results(search)


def fetch_result_objects(connection, search):
    """return full objects of the result type for every result row"""
    result_type = search.resource_type.result_type
    return [
        api_resource.get_object(connection, result_type, obj_id=row["id"])
        for row in search_results(search)
    ]


def export_results(search, path, fmt="csv", overwrite=False):
    """write the result rows of a search to a file as csv, tab or xml"""
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Export format must be one of {', '.join(EXPORT_FORMATS)}")
    if os.path.exists(path) and not overwrite:
        raise FileExistsError(f"{path} already exists")

    fields = list(search.resource_type.result_id_fields) + [
        key
        for key in result_display_keys(search)
        if key not in search.resource_type.result_id_fields
    ]
    rows = search_results(search)

    if fmt == "xml":
        list_key = result_list_key(search)
        root = ET.Element(list_key)
        for row in rows:
            item = ET.SubElement(root, api_resource.singular(list_key))
            for field in fields:
                value = row.get(field)
                ET.SubElement(item, field).text = "" if value is None else str(value)
        ET.ElementTree(root).write(path, encoding="utf-8", xml_declaration=True)
    else:
        delimiter = "\t" if fmt == "tab" else ","
        with open(path, "w", newline="") as export_file:
            writer = csv.DictWriter(
                export_file,
                fieldnames=fields,
                delimiter=delimiter,
                restval="",
                extrasaction="ignore",
            )
            writer.writeheader()
            writer.writerows(rows)
    return path
