"""Data sources for resource pools and access roles."""

from __future__ import annotations

from ..schema import ProviderConfiguration, Resource, ResourceData, Schema, ValueType

__all__ = [
    "pool_data_source",
    "pools_data_source",
    "read_pool",
    "read_pools",
    "read_role",
    "read_roles",
    "role_data_source",
    "roles_data_source",
]


def read_pool(config: ProviderConfiguration, data: ResourceData) -> None:
    """Read one pool and its members."""
    client = config.get_ve_client()
    pool_id = data.get("pool_id")
    pool = client.get_pool(pool_id)

    data.set_id(pool_id)
    data.set("comment", pool.comment if pool.comment is not None else "")
    data.set(
        "members",
        [
            {
                "id": member.id,
                "node_name": member.node,
                "datastore_id": member.datastore_id if member.datastore_id is not None else "",
                "type": member.type,
                "vm_id": member.vm_id if member.vm_id is not None else 0,
            }
            for member in pool.members or []
        ],
    )


def pool_data_source() -> Resource:
    """Schema of the pool data source."""
    member = Resource(
        schema={
            "datastore_id": Schema(ValueType.STRING, description="The datastore id", computed=True),
            "id": Schema(ValueType.STRING, description="The member id", computed=True),
            "node_name": Schema(ValueType.STRING, description="The node name", computed=True),
            "type": Schema(ValueType.STRING, description="The member type", computed=True),
            "vm_id": Schema(ValueType.INT, description="The virtual machine id", computed=True),
        }
    )
    return Resource(
        schema={
            "comment": Schema(ValueType.STRING, description="The pool comment", computed=True),
            "members": Schema(
                ValueType.LIST, description="The pool members", computed=True, elem=member
            ),
            "pool_id": Schema(ValueType.STRING, description="The pool id", required=True),
        },
        read=read_pool,
    )


def read_pools(config: ProviderConfiguration, data: ResourceData) -> None:
    """Read the identifiers of all pools."""
    client = config.get_ve_client()
    pools = client.list_pools()
    data.set_id("pools")
    data.set("pool_ids", [pool.id for pool in pools])


def pools_data_source() -> Resource:
    """Schema of the pools data source."""
    return Resource(
        schema={
            "pool_ids": Schema(
                ValueType.LIST,
                description="The pool ids",
                computed=True,
                elem=Schema(ValueType.STRING),
            ),
        },
        read=read_pools,
    )


def read_role(config: ProviderConfiguration, data: ResourceData) -> None:
    """Read the privileges of one role."""
    client = config.get_ve_client()
    role_id = data.get("role_id")
    privileges = client.get_role(role_id)
    data.set_id(role_id)
    data.set("privileges", set(privileges or ()))


def role_data_source() -> Resource:
    """Schema of the role data source."""
    return Resource(
        schema={
            "role_id": Schema(ValueType.STRING, description="The role id", required=True),
            "privileges": Schema(
                ValueType.SET,
                description="The role privileges",
                computed=True,
                elem=Schema(ValueType.STRING),
            ),
        },
        read=read_role,
    )


def read_roles(config: ProviderConfiguration, data: ResourceData) -> None:
    """Read all roles with their privileges."""
    client = config.get_ve_client()
    roles = client.list_roles()
    data.set_id("roles")
    data.set("privileges", [set(r.privileges) if r.privileges is not None else set() for r in roles])
    data.set("role_ids", [r.id for r in roles])
    data.set("special", [r.special if r.special is not None else False for r in roles])


def roles_data_source() -> Resource:
    """Schema of the roles data source."""
    return Resource(
        schema={
            "privileges": Schema(
                ValueType.LIST,
                description="The role privileges",
                computed=True,
                elem=Schema(ValueType.SET, elem=Schema(ValueType.STRING)),
            ),
            "role_ids": Schema(
                ValueType.LIST,
                description="The role ids",
                computed=True,
                elem=Schema(ValueType.STRING),
            ),
            "special": Schema(
                ValueType.LIST,
                description="Whether the role is special (built-in)",
                computed=True,
                elem=Schema(ValueType.BOOL),
            ),
        },
        read=read_roles,
    )