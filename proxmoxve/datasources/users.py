"""Data sources for user accounts and the API version."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any

from ..schema import ProviderConfiguration, Resource, ResourceData, Schema, ValueType

__all__ = [
    "format_expiration",
    "read_user",
    "read_users",
    "read_version",
    "user_data_source",
    "users_data_source",
    "version_data_source",
]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, timezone.utc)
    raise TypeError(f"invalid expiration date: {value!r}")


def format_expiration(value: Any) -> str:
    """Format an account expiration date as an RFC 3339 UTC timestamp.

    A missing date, or one not after the Unix epoch, is reported as the epoch.
    """
    moment = _EPOCH
    if value is not None:
        candidate = _to_datetime(value)
        if math.floor(candidate.timestamp()) > 0:
            moment = candidate
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _or(value: Any, default: Any) -> Any:
    return default if value is None else value


def read_user(config: ProviderConfiguration, data: ResourceData) -> None:
    """Read one user account together with the access entries granted to it."""
    client = config.get_ve_client()
    user_id = data.get("user_id")
    user = client.get_user(user_id)
    acl = client.get_acl()

    data.set_id(user_id)

    entries = [
        {
            "path": entry.path,
            "propagate": bool(entry.propagate) if entry.propagate is not None else False,
            "role_id": entry.role_id,
        }
        for entry in acl
        if entry.type == "user" and entry.user_or_group_id == user_id
    ]
    data.set("acl", entries)
    data.set("comment", _or(user.comment, ""))
    data.set("email", _or(user.email, ""))
    data.set("enabled", bool(user.enabled) if user.enabled is not None else True)
    data.set("expiration_date", format_expiration(user.expiration_date))
    data.set("first_name", _or(user.first_name, ""))
    data.set("groups", list(user.groups) if user.groups is not None else [])
    data.set("keys", _or(user.keys, ""))
    data.set("last_name", _or(user.last_name, ""))


def _computed(value_type: ValueType, description: str) -> Schema:
    return Schema(value_type, description=description, computed=True)


def _list(value_type: ValueType, description: str) -> Schema:
    return Schema(ValueType.LIST, description=description, computed=True, elem=Schema(value_type))


def user_data_source() -> Resource:
    """Schema of the user data source."""
    acl_entry = Resource(
        schema={
            "path": _computed(ValueType.STRING, "The path"),
            "propagate": _computed(ValueType.BOOL, "Whether to propagate to child paths"),
            "role_id": _computed(ValueType.STRING, "The role id"),
        }
    )
    return Resource(
        schema={
            "acl": Schema(
                ValueType.SET, description="The access control list", computed=True, elem=acl_entry
            ),
            "comment": _computed(ValueType.STRING, "The user comment"),
            "email": _computed(ValueType.STRING, "The user's email address"),
            "enabled": _computed(ValueType.BOOL, "Whether the user account is enabled"),
            "expiration_date": _computed(ValueType.STRING, "The user account's expiration date"),
            "first_name": _computed(ValueType.STRING, "The user's first name"),
            "groups": _list(ValueType.STRING, "The user's groups"),
            "keys": _computed(ValueType.STRING, "The user's keys"),
            "last_name": _computed(ValueType.STRING, "The user's last name"),
            "user_id": Schema(ValueType.STRING, description="The user id", required=True),
        },
        read=read_user,
    )


def read_users(config: ProviderConfiguration, data: ResourceData) -> None:
    """Read all user accounts."""
    client = config.get_ve_client()
    users = client.list_users()

    data.set_id("users")
    data.set("comments", [_or(u.comment, "") for u in users])
    data.set("emails", [_or(u.email, "") for u in users])
    data.set("enabled", [bool(u.enabled) if u.enabled is not None else True for u in users])
    data.set("expiration_dates", [format_expiration(u.expiration_date) for u in users])
    data.set("first_names", [_or(u.first_name, "") for u in users])
    data.set("groups", [list(u.groups) if u.groups is not None else [] for u in users])
    data.set("keys", [_or(u.keys, "") for u in users])
    data.set("last_names", [_or(u.last_name, "") for u in users])
    data.set("user_ids", [u.id for u in users])


def users_data_source() -> Resource:
    """Schema of the users data source."""
    return Resource(
        schema={
            "comments": _list(ValueType.STRING, "The user comments"),
            "emails": _list(ValueType.STRING, "The users' email addresses"),
            "enabled": _list(ValueType.BOOL, "Whether a user account is enabled"),
            "expiration_dates": _list(ValueType.STRING, "The user accounts' expiration dates"),
            "first_names": _list(ValueType.STRING, "The users' first names"),
            "groups": Schema(
                ValueType.LIST,
                description="The users' groups",
                computed=True,
                elem=Schema(ValueType.LIST, elem=Schema(ValueType.STRING)),
            ),
            "keys": _list(ValueType.STRING, "The users' keys"),
            "last_names": _list(ValueType.STRING, "The users' last names"),
            "user_ids": _list(ValueType.STRING, "The user ids"),
        },
        read=read_users,
    )


def read_version(config: ProviderConfiguration, data: ResourceData) -> None:
    """Read the version information of the API."""
    client = config.get_ve_client()
    version = client.version()

    data.set_id("version")
    data.set("keyboard_layout", version.keyboard)
    data.set("release", version.release)
    data.set("repository_id", version.repository_id)
    data.set("version", version.version)


def version_data_source() -> Resource:
    """Schema of the version data source."""

    def attribute(description: str) -> Schema:
        return Schema(ValueType.STRING, description=description, computed=True, force_new=True)

    return Resource(
        schema={
            "keyboard_layout": attribute("The keyboard layout"),
            "release": attribute("The release information"),
            "repository_id": attribute("The repository id"),
            "version": attribute("The version information"),
        },
        read=read_version,
    )