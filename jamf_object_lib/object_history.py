#!/usr/bin/env python3

"""
Object history entries.

Jamf Pro keeps the history shown on each object's History tab in the
object_history table of its database. The Classic API cannot write to it,
so entries are added over a direct database connection.
"""

import time

import pymysql

from .errors import ObjectHistoryError

OBJECT_HISTORY_TABLE = "object_history"
JAMF_DATABASE = "jamfsoftware"
DEFAULT_DB_PORT = 3306


def connect_db(server, port=DEFAULT_DB_PORT, user="", password=""):
    """open a connection to the Jamf Pro database"""
    return pymysql.connect(
        host=server,
        port=int(port or DEFAULT_DB_PORT),
        user=user,
        password=password,
        database=JAMF_DATABASE,
        charset="utf8mb4",
        autocommit=True,
    )


class ObjectHistory:
    """Reads and writes object history entries for Classic API objects."""

    def __init__(self, db_connection, username):
        self.db = db_connection
        self.username = username

    def _cursor(self):
        if self.db is None:
            raise ObjectHistoryError("Object history needs a database connection")
        return self.db.cursor()

    def add_entry(self, resource_type, obj_id, notes="", details="", user=None):
        """add an entry for an object, tagged with its history object type"""
        if not obj_id:
            raise ObjectHistoryError(
                f"Cannot add history to a {resource_type.object_type} with no id"
            )
        if not (notes or details):
            raise ObjectHistoryError("A history entry needs notes or details")
        query = (
            f"INSERT INTO {OBJECT_HISTORY_TABLE} "
            "(object_type, object_id, username, notes, details, timestamp_epoch) "
            "VALUES (%s, %s, %s, %s, %s, %s)"
        )
        with self._cursor() as cursor:
            cursor.execute(
                query,
                (
                    resource_type.history_object_type,
                    obj_id,
                    user or self.username,
                    notes,
                    details,
                    int(time.time() * 1000),
                ),
            )

    def entries(self, resource_type, obj_id):
        """return the history of an object, newest first"""
        query = (
            "SELECT username, notes, details, timestamp_epoch "
            f"FROM {OBJECT_HISTORY_TABLE} "
            "WHERE object_type = %s AND object_id = %s "
            "ORDER BY timestamp_epoch DESC"
        )
        with self._cursor() as cursor:
            cursor.execute(query, (resource_type.history_object_type, obj_id))
            rows = cursor.fetchall()
        return [
            {
                "username": username,
                "notes": notes,
                "details": details,
                "timestamp_epoch": timestamp_epoch,
            }
            for username, notes, details, timestamp_epoch in rows
        ]

    def close(self):
        if self.db is not None:
            self.db.close()
            self.db = None
