from types import SimpleNamespace

import pytest

from proxmoxve.datasources.cluster import (
    cluster_alias_data_source,
    cluster_aliases_data_source,
    datastores_data_source,
    dns_data_source,
    read_cluster_alias,
    read_cluster_aliases,
    read_datastores,
    read_dns,
)
from proxmoxve.schema import ConfigurationError, ProviderConfiguration, ResourceData, ValueType


class FakeClient:
    def __init__(self, **responses):
        self.responses = responses
        self.calls = []

    def get_alias(self, alias_id):
        self.calls.append(("get_alias", alias_id))
        return self.responses["alias"]

    def list_pools(self):
        self.calls.append(("list_pools",))
        return self.responses["pools"]

    def list_datastores(self, node_name):
        self.calls.append(("list_datastores", node_name))
        return self.responses["datastores"]

    def get_dns(self, node_name):
        self.calls.append(("get_dns", node_name))
        return self.responses["dns"]


def _types(resource):
    return {key: spec.type for key, spec in resource.schema.items()}


def test_cluster_alias_schema():
    s = cluster_alias_data_source()
    assert s.required_keys() == {"name"}
    assert {"cidr", "comment"} <= s.computed_keys()
    assert _types(s) == {
        "name": ValueType.STRING,
        "cidr": ValueType.STRING,
        "comment": ValueType.STRING,
    }


def test_cluster_aliases_schema():
    s = cluster_aliases_data_source()
    assert s.computed_keys() == {"alias_ids"}
    assert _types(s) == {"alias_ids": ValueType.LIST}


def test_datastores_schema():
    s = datastores_data_source()
    assert s.required_keys() == {"node_name"}
    assert s.computed_keys() == {
        "active",
        "content_types",
        "datastore_ids",
        "enabled",
        "shared",
        "space_available",
        "space_total",
        "space_used",
        "types",
    }
    assert _types(s) == {
        "active": ValueType.LIST,
        "content_types": ValueType.LIST,
        "datastore_ids": ValueType.LIST,
        "enabled": ValueType.LIST,
        "node_name": ValueType.STRING,
        "shared": ValueType.LIST,
        "space_available": ValueType.LIST,
        "space_total": ValueType.LIST,
        "space_used": ValueType.LIST,
        "types": ValueType.LIST,
    }


def test_dns_schema():
    s = dns_data_source()
    assert s.required_keys() == {"node_name"}
    assert s.computed_keys() == {"domain", "servers"}
    assert _types(s) == {
        "domain": ValueType.STRING,
        "node_name": ValueType.STRING,
        "servers": ValueType.LIST,
    }


def test_read_cluster_alias():
    client = FakeClient(alias=SimpleNamespace(cidr="10.0.0.0/8", comment=None))
    data = ResourceData(cluster_alias_data_source(), {"name": "local"})
    read_cluster_alias(ProviderConfiguration(client), data)
    assert data.id == "local"
    assert data.get("cidr") == "10.0.0.0/8"
    assert data.get("comment") == ""
    assert client.calls == [("get_alias", "local")]


def test_read_cluster_alias_with_comment():
    client = FakeClient(alias=SimpleNamespace(cidr="10.0.0.1", comment="gateway"))
    data = ResourceData(cluster_alias_data_source(), {"name": "gw"})
    read_cluster_alias(ProviderConfiguration(client), data)
    assert data.get("comment") == "gateway"


def test_read_cluster_aliases():
    client = FakeClient(pools=[SimpleNamespace(id="a"), SimpleNamespace(id="b")])
    data = ResourceData(cluster_aliases_data_source())
    cluster_aliases_data_source().read(ProviderConfiguration(client), data)
    assert data.id == "aliases"
    assert data.get("alias_ids") == ["a", "b"]


def test_read_datastores():
    full = SimpleNamespace(
        active=False,
        content_types=["vztmpl", "iso", "backup"],
        id="local",
        enabled=False,
        shared=False,
        space_available=10,
        space_total=30,
        space_used=20,
        type="dir",
    )
    empty = SimpleNamespace(
        active=None,
        content_types=None,
        id="nfs",
        enabled=None,
        shared=None,
        space_available=None,
        space_total=None,
        space_used=None,
        type="nfs",
    )
    client = FakeClient(datastores=[full, empty])
    data = ResourceData(datastores_data_source(), {"node_name": "pve"})
    read_datastores(ProviderConfiguration(client), data)
    assert data.id == "pve_datastores"
    assert data.get("active") == [False, True]
    assert data.get("content_types") == [["backup", "iso", "vztmpl"], []]
    assert data.get("datastore_ids") == ["local", "nfs"]
    assert data.get("enabled") == [False, True]
    assert data.get("shared") == [False, True]
    assert data.get("space_available") == [10, 0]
    assert data.get("space_total") == [30, 0]
    assert data.get("space_used") == [20, 0]
    assert data.get("types") == ["dir", "nfs"]
    assert client.calls == [("list_datastores", "pve")]


def test_read_dns():
    dns = SimpleNamespace(search_domain="example.com", server1="1.1.1.1", server2=None, server3="8.8.8.8")
    data = ResourceData(dns_data_source(), {"node_name": "pve"})
    read_dns(ProviderConfiguration(FakeClient(dns=dns)), data)
    assert data.id == "pve_dns"
    assert data.get("domain") == "example.com"
    assert data.get("servers") == ["1.1.1.1", "8.8.8.8"]


def test_read_dns_defaults():
    dns = SimpleNamespace(search_domain=None, server1=None, server2=None, server3=None)
    data = ResourceData(dns_data_source(), {"node_name": "pve"})
    read_dns(ProviderConfiguration(FakeClient(dns=dns)), data)
    assert data.get("domain") == ""
    assert data.get("servers") == []


def test_read_without_client_raises():
    data = ResourceData(dns_data_source(), {"node_name": "pve"})
    with pytest.raises(ConfigurationError):
        read_dns(ProviderConfiguration(), data)


def test_client_error_propagates():
    class Failing(FakeClient):
        def get_alias(self, alias_id):
            raise RuntimeError("not found")

    data = ResourceData(cluster_alias_data_source(), {"name": "x"})
    with pytest.raises(RuntimeError, match="not found"):
        read_cluster_alias(ProviderConfiguration(Failing()), data)
    assert data.id == ""