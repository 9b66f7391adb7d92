import pytest

from proxmoxve.schema import (
    ConfigurationError,
    ProviderConfiguration,
    Resource,
    ResourceData,
    Schema,
    ValueType,
)


def _resource():
    nested = Resource(schema={"path": Schema(ValueType.STRING, computed=True)})
    return Resource(
        schema={
            "node_name": Schema(ValueType.STRING, required=True),
            "servers": Schema(ValueType.LIST, computed=True, elem=Schema(ValueType.STRING)),
            "acl": Schema(ValueType.SET, computed=True, elem=nested),
            "enabled": Schema(ValueType.BOOL, optional=True, default_func=lambda: True),
        }
    )


def test_required_and_computed_keys():
    resource = _resource()
    assert resource.required_keys() == {"node_name"}
    assert resource.computed_keys() == {"servers", "acl"}


def test_nested_returns_block_schema():
    nested = _resource().nested("acl")
    assert nested.computed_keys() == {"path"}


def test_nested_without_block_raises():
    with pytest.raises(ValueError):
        _resource().nested("servers")
    with pytest.raises(KeyError):
        _resource().nested("missing")


def test_get_returns_given_value():
    data = ResourceData(_resource(), {"node_name": "pve"})
    assert data.get("node_name") == "pve"


def test_get_unset_returns_zero_value():
    data = ResourceData(_resource())
    assert data.get("node_name") == ""
    assert data.get("servers") == []


def test_get_unset_uses_default_func():
    data = ResourceData(_resource())
    assert data.get("enabled") is True


def test_set_then_get_round_trip():
    data = ResourceData(_resource())
    data.set("servers", ["a", "b"])
    assert data.get("servers") == ["a", "b"]


def test_set_unknown_key_raises():
    data = ResourceData(_resource())
    with pytest.raises(KeyError):
        data.set("unknown", 1)
    with pytest.raises(KeyError):
        data.get("unknown")


def test_without_schema_any_key_is_accepted():
    data = ResourceData()
    data.set("anything", 3)
    assert data.get("anything") == 3
    assert data.get("other") is None


def test_set_id():
    data = ResourceData(_resource())
    data.set_id("nodes")
    assert data.id == "nodes"


def test_get_ve_client_returns_client():
    client = object()
    assert ProviderConfiguration(client).get_ve_client() is client


def test_get_ve_client_without_client_raises():
    with pytest.raises(ConfigurationError, match="virtual environment details"):
        ProviderConfiguration().get_ve_client()