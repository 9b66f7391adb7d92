"""Data sources for cluster aliases, datastores and DNS settings."""

from __future__ import annotations

from ..schema import ProviderConfiguration, Resource, ResourceData, Schema, ValueType

__all__ = [
    "cluster_alias_data_source",
    "cluster_aliases_data_source",
    "datastores_data_source",
    "dns_data_source",
    "read_cluster_alias",
    "read_cluster_aliases",
    "read_datastores",
    "read_dns",
]


def read_cluster_alias(config: ProviderConfiguration, data: ResourceData) -> None:
    """Read one firewall alias of the cluster."""
    client = config.get_ve_client()
    alias_id = data.get("name")
    alias = client.get_alias(alias_id)
    data.set_id(alias_id)
    data.set("cidr", alias.cidr)
    data.set("comment", alias.comment if alias.comment is not None else "")


def cluster_alias_data_source() -> Resource:
    """Schema of the cluster alias data source."""
    return Resource(
        schema={
            "name": Schema(ValueType.STRING, description="Alias name", required=True),
            "cidr": Schema(ValueType.STRING, description="IP/CIDR block", computed=True),
            "comment": Schema(ValueType.STRING, description="Alias comment", computed=True),
        },
        read=read_cluster_alias,
    )


def read_cluster_aliases(config: ProviderConfiguration, data: ResourceData) -> None:
    """Read the identifiers of the cluster aliases."""
    client = config.get_ve_client()
    # The identifiers come from the pool listing, as they always have.
    entries = client.list_pools()
    data.set_id("aliases")
    data.set("alias_ids", [entry.id for entry in entries])


def cluster_aliases_data_source() -> Resource:
    """Schema of the cluster aliases data source."""
    return Resource(
        schema={
            "alias_ids": Schema(
                ValueType.LIST,
                description="Alias IDs",
                computed=True,
                elem=Schema(ValueType.STRING),
            ),
        },
        read=read_cluster_aliases,
    )


def _or(value, default):
    return default if value is None else value


def read_datastores(config: ProviderConfiguration, data: ResourceData) -> None:
    """Read the datastores of a node."""
    client = config.get_ve_client()
    node_name = data.get("node_name")
    datastores = client.list_datastores(node_name)

    data.set_id(f"{node_name}_datastores")
    data.set("active", [bool(_or(d.active, True)) for d in datastores])
    data.set(
        "content_types",
        [sorted(d.content_types) if d.content_types is not None else [] for d in datastores],
    )
    data.set("datastore_ids", [d.id for d in datastores])
    data.set("enabled", [bool(_or(d.enabled, True)) for d in datastores])
    data.set("shared", [bool(_or(d.shared, True)) for d in datastores])
    data.set("space_available", [_or(d.space_available, 0) for d in datastores])
    data.set("space_total", [_or(d.space_total, 0) for d in datastores])
    data.set("space_used", [_or(d.space_used, 0) for d in datastores])
    data.set("types", [d.type for d in datastores])


def _list(value_type: ValueType, description: str) -> Schema:
    return Schema(ValueType.LIST, description=description, computed=True, elem=Schema(value_type))


def datastores_data_source() -> Resource:
    """Schema of the datastores data source."""
    return Resource(
        schema={
            "active": _list(ValueType.BOOL, "Whether a datastore is active"),
            "content_types": Schema(
                ValueType.LIST,
                description="The allowed content types",
                computed=True,
                elem=Schema(ValueType.LIST, elem=Schema(ValueType.STRING)),
            ),
            "datastore_ids": _list(ValueType.STRING, "The datastore id"),
            "enabled": _list(ValueType.BOOL, "Whether a datastore is enabled"),
            "node_name": Schema(ValueType.STRING, description="The node name", required=True),
            "shared": _list(ValueType.BOOL, "Whether a datastore is shared"),
            "space_available": _list(ValueType.INT, "The available space in bytes"),
            "space_total": _list(ValueType.INT, "The total space in bytes"),
            "space_used": _list(ValueType.INT, "The used space in bytes"),
            "types": _list(ValueType.STRING, "The storage type"),
        },
        read=read_datastores,
    )


def read_dns(config: ProviderConfiguration, data: ResourceData) -> None:
    """Read the DNS settings of a node."""
    client = config.get_ve_client()
    node_name = data.get("node_name")
    dns = client.get_dns(node_name)

    data.set_id(f"{node_name}_dns")
    data.set("domain", dns.search_domain if dns.search_domain is not None else "")
    servers = [s for s in (dns.server1, dns.server2, dns.server3) if s is not None]
    data.set("servers", servers)


def dns_data_source() -> Resource:
    """Schema of the DNS data source."""
    return Resource(
        schema={
            "domain": Schema(ValueType.STRING, description="The DNS search domain", computed=True),
            "node_name": Schema(ValueType.STRING, description="The node name", required=True),
            "servers": _list(ValueType.STRING, "The DNS servers"),
        },
        read=read_dns,
    )