"""Data sources for user groups."""

from __future__ import annotations

from ..schema import ProviderConfiguration, Resource, ResourceData, Schema, ValueType

__all__ = [
    "group_data_source",
    "groups_data_source",
    "read_group",
    "read_groups",
]


def read_group(config: ProviderConfiguration, data: ResourceData) -> None:
    """Read one group together with the access entries granted to it."""
    client = config.get_ve_client()
    group_id = data.get("group_id")
    group = client.get_group(group_id)
    acl = client.get_acl()

    data.set_id(group_id)

    entries = [
        {
            "path": entry.path,
            "propagate": bool(entry.propagate) if entry.propagate is not None else False,
            "role_id": entry.role_id,
        }
        for entry in acl
        if entry.type == "group" and entry.user_or_group_id == group_id
    ]
    data.set("acl", entries)
    data.set("comment", group.comment if group.comment is not None else "")
    data.set("members", list(group.members or []))


def group_data_source() -> Resource:
    """Schema of the group data source."""
    acl_entry = Resource(
        schema={
            "path": Schema(ValueType.STRING, description="The path", computed=True),
            "propagate": Schema(
                ValueType.BOOL, description="Whether to propagate to child paths", computed=True
            ),
            "role_id": Schema(ValueType.STRING, description="The role id", computed=True),
        }
    )
    return Resource(
        schema={
            "acl": Schema(
                ValueType.SET, description="The access control list", computed=True, elem=acl_entry
            ),
            "comment": Schema(ValueType.STRING, description="The group comment", computed=True),
            "group_id": Schema(ValueType.STRING, description="The group id", required=True),
            "members": Schema(
                ValueType.SET,
                description="The group members",
                computed=True,
                elem=Schema(ValueType.STRING),
            ),
        },
        read=read_group,
    )


def read_groups(config: ProviderConfiguration, data: ResourceData) -> None:
    """Read the identifiers and comments of all groups."""
    client = config.get_ve_client()
    groups = client.list_groups()
    data.set_id("groups")
    data.set("comments", [g.comment if g.comment is not None else "" for g in groups])
    data.set("group_ids", [g.id for g in groups])


def groups_data_source() -> Resource:
    """Schema of the groups data source."""
    return Resource(
        schema={
            "comments": Schema(
                ValueType.LIST,
                description="The group comments",
                computed=True,
                elem=Schema(ValueType.STRING),
            ),
            "group_ids": Schema(
                ValueType.LIST,
                description="The group ids",
                computed=True,
                elem=Schema(ValueType.STRING),
            ),
        },
        read=read_groups,
    )