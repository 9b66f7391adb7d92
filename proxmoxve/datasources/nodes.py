"""Data sources for node hosts files, node listings and node clocks."""

from __future__ import annotations

import math
from datetime import datetime, timezone, tzinfo
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..schema import ProviderConfiguration, Resource, ResourceData, Schema, ValueType

__all__ = [
    "hosts_data_source",
    "nodes_data_source",
    "parse_hosts",
    "read_hosts",
    "read_nodes",
    "read_time",
    "time_data_source",
]


def _list(value_type: ValueType, description: str) -> Schema:
    return Schema(ValueType.LIST, description=description, computed=True, elem=Schema(value_type))


def _or(value: Any, default: Any) -> Any:
    return default if value is None else value


def parse_hosts(text: str) -> list[dict[str, Any]]:
    """Parse a hosts file into ``address``/``hostnames`` entries, skipping comments."""
    entries: list[dict[str, Any]] = []
    for line in text.split("\n"):
        if line.startswith("#"):
            continue
        values = line.replace("\t", " ").split(" ")
        if values[0] == "":
            continue
        entries.append(
            {"address": values[0], "hostnames": [name for name in values[1:] if name]}
        )
    return entries


def read_hosts(config: ProviderConfiguration, data: ResourceData) -> None:
    """Read the hosts file of a node."""
    client = config.get_ve_client()
    node_name = data.get("node_name")
    hosts = client.get_hosts(node_name)

    data.set_id(f"{node_name}_hosts")
    entries = parse_hosts(hosts.data)
    data.set("addresses", [entry["address"] for entry in entries])
    data.set("digest", hosts.digest if hosts.digest is not None else "")
    data.set("entries", entries)
    data.set("hostnames", [entry["hostnames"] for entry in entries])


def hosts_data_source() -> Resource:
    """Schema of the hosts data source."""
    entry = Resource(
        schema={
            "address": Schema(ValueType.STRING, description="The address", computed=True),
            "hostnames": _list(ValueType.STRING, "The hostnames"),
        }
    )
    return Resource(
        schema={
            "addresses": _list(ValueType.STRING, "The addresses"),
            "digest": Schema(ValueType.STRING, description="The SHA1 digest", computed=True),
            "entries": Schema(
                ValueType.LIST, description="The host entries", computed=True, elem=entry
            ),
            "hostnames": Schema(
                ValueType.LIST,
                description="The hostnames",
                computed=True,
                elem=Schema(ValueType.LIST, elem=Schema(ValueType.STRING)),
            ),
            "node_name": Schema(ValueType.STRING, description="The node name", required=True),
        },
        read=read_hosts,
    )


def _round_hundredths(value: float) -> float:
    scaled = value * 100
    rounded = math.copysign(math.floor(abs(scaled) + 0.5), scaled)
    return rounded / 100


def read_nodes(config: ProviderConfiguration, data: ResourceData) -> None:
    """Read the nodes of the cluster."""
    client = config.get_ve_client()
    nodes = client.list_nodes()

    data.set_id("nodes")
    data.set("cpu_count", [_or(n.cpu_count, 0) for n in nodes])
    data.set(
        "cpu_utilization",
        [
            _round_hundredths(n.cpu_utilization) if n.cpu_utilization is not None else 0
            for n in nodes
        ],
    )
    data.set("memory_available", [_or(n.memory_available, 0) for n in nodes])
    data.set("memory_used", [_or(n.memory_used, 0) for n in nodes])
    data.set("names", [n.name for n in nodes])
    data.set("online", [n.status == "online" if n.status is not None else False for n in nodes])
    data.set("ssl_fingerprints", [_or(n.ssl_fingerprint, 0) for n in nodes])
    data.set("support_levels", [_or(n.support_level, "") for n in nodes])
    data.set("uptime", [_or(n.uptime, 0) for n in nodes])


def nodes_data_source() -> Resource:
    """Schema of the nodes data source."""
    return Resource(
        schema={
            "cpu_count": _list(ValueType.INT, "The CPU count for each node"),
            "cpu_utilization": _list(ValueType.FLOAT, "The CPU utilization on each node"),
            "memory_available": _list(
                ValueType.INT, "The available memory in bytes on each node"
            ),
            "memory_used": _list(ValueType.INT, "The used memory in bytes on each node"),
            "names": _list(ValueType.STRING, "The node names"),
            "online": _list(ValueType.BOOL, "Whether a node is online"),
            "ssl_fingerprints": _list(ValueType.STRING, "The SSL fingerprint for each node"),
            "support_levels": _list(ValueType.STRING, "The support level for each node"),
            "uptime": _list(ValueType.INT, "The uptime in seconds for each node"),
        },
        read=read_nodes,
    )


def _load_zone(name: str) -> tzinfo:
    if name in ("", "UTC"):
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"unknown time zone {name!r}") from None


def _rfc3339(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    offset = moment.utcoffset()
    stamp = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if not offset:
        return stamp + "Z"
    minutes = int(offset.total_seconds()) // 60
    sign = "+" if minutes >= 0 else "-"
    hours, mins = divmod(abs(minutes), 60)
    return f"{stamp}{sign}{hours:02d}:{mins:02d}"


def read_time(config: ProviderConfiguration, data: ResourceData) -> None:
    """Read the clock and time zone of a node."""
    client = config.get_ve_client()
    node_name = data.get("node_name")
    node_time = client.get_node_time(node_name)
    zone = _load_zone(node_time.time_zone)

    data.set_id(f"{node_name}_time")
    # The node's local clock is shifted by its own offset, which leaves the current instant.
    local_time = datetime.now(timezone.utc).astimezone(zone)
    data.set("local_time", _rfc3339(local_time))
    data.set("time_zone", node_time.time_zone)
    data.set("utc_time", _rfc3339(node_time.utc_time))


def time_data_source() -> Resource:
    """Schema of the time data source."""
    return Resource(
        schema={
            "local_time": Schema(ValueType.STRING, description="The local timestamp", computed=True),
            "node_name": Schema(ValueType.STRING, description="The node name", required=True),
            "time_zone": Schema(ValueType.STRING, description="The time zone", computed=True),
            "utc_time": Schema(ValueType.STRING, description="The UTC timestamp", computed=True),
        },
        read=read_time,
    )