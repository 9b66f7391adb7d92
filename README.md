# proxmoxve

Python types for Proxmox Virtual Environment virtual machine settings, and a
set of read-only data sources that describe a Proxmox cluster through an API
client you supply.

## What it contains

- `proxmoxve.vm_config` parses the comma-separated `key=value` strings of
  QEMU VM settings and encodes them back into API parameters. Examples are
  `CustomAgent`, `CustomCPUEmulation`, `CustomSMBIOS`, `CustomVGADevice` and
  `CustomCloudInitConfig`. It also provides the helpers `split_pairs`, `flag`
  and `parse_ssh_keys`.
- `proxmoxve.vm_devices` covers the device definitions:
  `CustomStorageDevice`, `CustomNetworkDevice`, `CustomNUMADevice`,
  `CustomPCIDevice`, `CustomUSBDevice` and `CustomVirtualIODevice`. Each has an
  `encode_*_devices` helper that numbers a list of devices, or in the case of
  disks names them by slot.
- `proxmoxve.vm_requests` holds the request bodies for VM operations. These
  are `VMCreateRequestBody`, `VMCloneRequestBody`, `VMMigrateRequestBody`,
  `VMMoveDiskRequestBody`, `VMRebootRequestBody`, `VMResizeDiskRequestBody` and
  `VMShutdownRequestBody`. Each has a `to_params()` method that returns a list
  of `(name, value)` pairs. The module also reads responses:
  `VMGetResponseData.from_dict`, `VMGetStatusResponseData.from_dict` and
  `parse_qemu_network_interfaces`.
- `proxmoxve.schema` describes data sources with `Resource`, `Schema`,
  `ValueType` and `ResourceData`. `ProviderConfiguration` holds the API client.
  Its `get_ve_client()` method raises `ConfigurationError` when no client has
  been set.
- `proxmoxve.datasources` holds the data sources, each as a schema function
  with a matching `read_*` function:
  - `cluster`: cluster alias, cluster aliases, datastores, DNS
  - `groups`: group, groups
  - `nodes`: hosts, nodes, time, plus `parse_hosts`
  - `pools`: pool, pools, role, roles
  - `users`: user, users, version, plus `format_expiration`

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Parse a disk definition as the API reports it, then encode it again:

```python
from proxmoxve.vm_devices import CustomStorageDevice

disk = CustomStorageDevice.from_json(
    '"local-lvm:vm-100-disk-0,discard=on,ssd=1,iothread=1,size=8G"'
)
print(disk.file_volume, disk.size)   # local-lvm:vm-100-disk-0 8G
print(disk.encode("scsi0"))
# {'scsi0': 'file=local-lvm:vm-100-disk-0,size=8G,iothread=1,ssd=1,discard=on'}
```

Build the form parameters of a create request:

```python
from proxmoxve.vm_requests import VMCreateRequestBody

body = VMCreateRequestBody(name="web", cpu_cores=2, acpi=True)
print(body.to_params())   # [('acpi', '1'), ('cores', '2'), ('name', 'web')]
```

Run a data source against your own client object:

```python
from types import SimpleNamespace
from proxmoxve.schema import ProviderConfiguration, ResourceData
from proxmoxve.datasources.pools import pools_data_source, read_pools

class Client:
    def list_pools(self):
        return [SimpleNamespace(id="dev"), SimpleNamespace(id="prod")]

data = ResourceData(resource=pools_data_source())
read_pools(ProviderConfiguration(ve_client=Client()), data)
print(data.id, data.get("pool_ids"))   # pools ['dev', 'prod']
```

Each `read_*` function calls the client method it needs. These are
`get_alias`, `list_pools`, `list_datastores`, `get_dns`, `get_group`,
`get_acl`, `list_groups`, `get_hosts`, `list_nodes`, `get_node_time`,
`get_pool`, `get_role`, `list_roles`, `get_user`, `list_users` and `version`.
Each method returns objects whose attributes the read function takes its
values from.

## What it does not do

- It has no HTTP client for the Proxmox API. You must supply the client object
  that the data sources call.
- It does not assemble a provider from these data sources.
- It does not read connection settings such as the endpoint, username,
  password or one-time password from the environment.
- It does not manage resources. The data sources only read, and nothing here
  creates, changes or deletes VMs or other objects on a cluster.