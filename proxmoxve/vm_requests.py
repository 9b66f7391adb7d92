"""Virtual machine API request bodies and response payloads.

Request bodies turn themselves into form parameters with ``to_params``. Each
parameter is a ``(name, value)`` pair. Response payloads are built from the
decoded JSON of the API with ``from_dict``.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, fields
from typing import Any

from .vm_config import (
    CustomAgent,
    CustomAudioDevice,
    CustomCloudInitConfig,
    CustomCloudInitFiles,
    CustomCloudInitIPConfig,
    CustomCPUEmulation,
    CustomEFIDisk,
    CustomSharedMemory,
    CustomSMBIOS,
    CustomSpiceEnhancements,
    CustomStartupOrder,
    CustomVGADevice,
    CustomWatchdogDevice,
    encode_audio_devices,
    parse_ssh_keys,
)
from .vm_devices import (
    CustomNetworkDevice,
    CustomNUMADevice,
    CustomPCIDevice,
    CustomStorageDevice,
    CustomUSBDevice,
    encode_network_devices,
    encode_numa_devices,
    encode_pci_devices,
    encode_serial_devices,
    encode_storage_devices,
    encode_usb_devices,
)

__all__ = [
    "QEMUIPAddress",
    "QEMUInterfaceStatistics",
    "QEMUNetworkInterface",
    "VMCloneRequestBody",
    "VMCreateRequestBody",
    "VMGetResponseData",
    "VMGetStatusResponseData",
    "VMMigrateRequestBody",
    "VMMoveDiskRequestBody",
    "VMRebootRequestBody",
    "VMResizeDiskRequestBody",
    "VMShutdownRequestBody",
    "parse_qemu_network_interfaces",
]

Params = list[tuple[str, str]]
_Encoder = Callable[[str, Any], Iterable[tuple[str, str]]]


# ---------------------------------------------------------------------------
# Request encoding
# ---------------------------------------------------------------------------


def _format_float(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def _scalar(name: str, value: Any) -> Params:
    if isinstance(value, bool):
        return [(name, "1" if value else "0")]
    if isinstance(value, float):
        return [(name, _format_float(value))]
    return [(name, str(value))]


def _joined(separator: str) -> _Encoder:
    def encode(name: str, value: list[str]) -> Params:
        return [(name, separator.join(value))]

    return encode


def _custom(name: str, value: Any) -> Iterable[tuple[str, str]]:
    return value.encode(name).items()


def _cloud_init(_name: str, value: CustomCloudInitConfig) -> Iterable[tuple[str, str]]:
    return value.encode().items()


def _indexed(encoder: Callable[[Any, str], dict[str, str]]) -> _Encoder:
    def encode(name: str, value: Any) -> Iterable[tuple[str, str]]:
        return encoder(value, name).items()

    return encode


def _storage(_name: str, value: Mapping[str, CustomStorageDevice]) -> Iterable[tuple[str, str]]:
    return encode_storage_devices(value).items()


def _param(
    name: str,
    encode: _Encoder = _scalar,
    *,
    omitempty: bool = True,
    required: bool = False,
    factory: Callable[[], Any] | None = None,
) -> Any:
    metadata = {"param": name, "encode": encode, "omitempty": omitempty}
    if required:
        return field(metadata=metadata)
    if factory is not None:
        return field(default_factory=factory, metadata=metadata)
    return field(default=None, metadata=metadata)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, (str, list, tuple, dict)) and not value


def _encode_fields(body: Any) -> Params:
    params: Params = []
    for spec in fields(body):
        value = getattr(body, spec.name)
        if spec.metadata["omitempty"] and _is_empty(value):
            continue
        params.extend(spec.metadata["encode"](spec.metadata["param"], value))
    return params


@dataclass
class VMCloneRequestBody:
    """Parameters of a virtual machine clone request."""

    vm_id_new: int = _param("newid", omitempty=False, required=True)
    bandwidth_limit: int | None = _param("bwlimit")
    description: str | None = _param("description")
    full_copy: bool | None = _param("full")
    name: str | None = _param("name")
    pool_id: str | None = _param("pool")
    snapshot_name: str | None = _param("snapname")
    target_node_name: str | None = _param("target")
    target_storage: str | None = _param("storage")
    target_storage_format: str | None = _param("format")

    def to_params(self) -> Params:
        return _encode_fields(self)


@dataclass
class VMCreateRequestBody:
    """Parameters of a virtual machine create or update request."""

    acpi: bool | None = _param("acpi")
    agent: CustomAgent | None = _param("agent", _custom)
    allow_reboot: bool | None = _param("reboot")
    audio_devices: list[CustomAudioDevice] = _param(
        "audio", _indexed(encode_audio_devices), factory=list
    )
    autostart: bool | None = _param("autostart")
    backup_file: str | None = _param("archive")
    bandwidth_limit: int | None = _param("bwlimit")
    bios: str | None = _param("bios")
    boot_disk: str | None = _param("bootdisk")
    boot_order: str | None = _param("boot")
    cdrom: str | None = _param("cdrom")
    cloud_init_config: CustomCloudInitConfig | None = _param("cloudinit", _cloud_init)
    cpu_architecture: str | None = _param("arch")
    cpu_cores: int | None = _param("cores")
    cpu_emulation: CustomCPUEmulation | None = _param("cpu", _custom)
    cpu_limit: int | None = _param("cpulimit")
    cpu_sockets: int | None = _param("sockets")
    cpu_units: int | None = _param("cpuunits")
    dedicated_memory: int | None = _param("memory")
    delete: list[str] = _param("delete", _joined(","), factory=list)
    # Sent under "force", the same name the API layer has always used for it.
    deletion_protection: bool | None = _param("force")
    description: str | None = _param("description")
    efi_disk: CustomEFIDisk | None = _param("efidisk0", _custom)
    floating_memory: int | None = _param("balloon")
    floating_memory_shares: int | None = _param("shares")
    freeze: bool | None = _param("freeze")
    hook_script: str | None = _param("hookscript")
    hotplug: list[str] = _param("hotplug", _joined(","), factory=list)
    hugepages: str | None = _param("hugepages")
    ide_devices: dict[str, CustomStorageDevice] = _param("ide", _storage, factory=dict)
    keyboard_layout: str | None = _param("keyboard")
    kvm_arguments: list[str] = _param("args", _joined(" "), factory=list)
    kvm_enabled: bool | None = _param("kvm")
    local_time: bool | None = _param("localtime")
    lock: str | None = _param("lock")
    machine_type: str | None = _param("machine")
    migrate_downtime: float | None = _param("migrate_downtime")
    migrate_speed: int | None = _param("migrate_speed")
    name: str | None = _param("name")
    network_devices: list[CustomNetworkDevice] = _param(
        "net", _indexed(encode_network_devices), factory=list
    )
    numa_devices: list[CustomNUMADevice] = _param(
        "numa", _indexed(encode_numa_devices), factory=list
    )
    numa_enabled: bool | None = _param("numa")
    os_type: str | None = _param("ostype")
    overwrite: bool | None = _param("force")
    pci_devices: list[CustomPCIDevice] = _param(
        "hostpci", _indexed(encode_pci_devices), factory=list
    )
    pool_id: str | None = _param("pool")
    revert: str | None = _param("revert")
    sata_devices: dict[str, CustomStorageDevice] = _param("sata", _storage, factory=dict)
    scsi_devices: dict[str, CustomStorageDevice] = _param("scsi", _storage, factory=dict)
    scsi_hardware: str | None = _param("scsihw")
    serial_devices: list[str] = _param(
        "serial", _indexed(encode_serial_devices), factory=list
    )
    shared_memory: CustomSharedMemory | None = _param("ivshmem", _custom)
    skip_lock: bool | None = _param("skiplock")
    smbios: CustomSMBIOS | None = _param("smbios1", _custom)
    spice_enhancements: CustomSpiceEnhancements | None = _param("spice_enhancements", _custom)
    start_date: str | None = _param("startdate")
    start_on_boot: bool | None = _param("onboot")
    startup_order: CustomStartupOrder | None = _param("startup", _custom)
    tablet_device_enabled: bool | None = _param("tablet")
    tags: str | None = _param("tags")
    template: bool | None = _param("template")
    time_drift_fix_enabled: bool | None = _param("tdf")
    usb_devices: list[CustomUSBDevice] = _param(
        "usb", _indexed(encode_usb_devices), factory=list
    )
    vga_device: CustomVGADevice | None = _param("vga", _custom)
    virtual_cpu_count: int | None = _param("vcpus")
    virtual_io_devices: dict[str, CustomStorageDevice] = _param(
        "virtio", _storage, factory=dict
    )
    vm_generation_id: str | None = _param("vmgenid")
    vm_id: int | None = _param("vmid")
    vm_state_datastore_id: str | None = _param("vmstatestorage")
    watchdog_device: CustomWatchdogDevice | None = _param("watchdog", _custom)

    def to_params(self) -> Params:
        return _encode_fields(self)


@dataclass
class VMMigrateRequestBody:
    """Parameters of a virtual machine migration request."""

    target_node: str = _param("target", omitempty=False, required=True)
    online_migration: bool | None = _param("online")
    target_storage: str | None = _param("targetstorage")
    with_local_disks: bool | None = _param("with-local-disks")

    def to_params(self) -> Params:
        return _encode_fields(self)


@dataclass
class VMMoveDiskRequestBody:
    """Parameters of a disk move request."""

    disk: str = _param("disk", omitempty=False, required=True)
    target_storage: str = _param("storage", omitempty=False, required=True)
    bandwidth_limit: int | None = _param("bwlimit")
    delete_original_disk: bool | None = _param("delete")
    digest: str | None = _param("digest")
    target_storage_format: str | None = _param("format")

    def to_params(self) -> Params:
        return _encode_fields(self)


@dataclass
class VMRebootRequestBody:
    """Parameters of a reboot request."""

    timeout: int | None = _param("timeout")

    def to_params(self) -> Params:
        return _encode_fields(self)


@dataclass
class VMResizeDiskRequestBody:
    """Parameters of a disk resize request."""

    disk: str = _param("disk", omitempty=False, required=True)
    size: str = _param("size", omitempty=False, required=True)
    digest: str | None = _param("digest")
    skip_lock: bool | None = _param("skiplock")

    def to_params(self) -> Params:
        return _encode_fields(self)


@dataclass
class VMShutdownRequestBody:
    """Parameters of a shutdown request."""

    force_stop: bool | None = _param("forceStop")
    keep_active: bool | None = _param("keepActive")
    skip_lock: bool | None = _param("skipLock")
    timeout: int | None = _param("timeout")

    def to_params(self) -> Params:
        return _encode_fields(self)


# ---------------------------------------------------------------------------
# Response decoding
# ---------------------------------------------------------------------------


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "on", "yes")
    raise ValueError(f"invalid boolean: {value!r}")


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"invalid integer: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ValueError(f"invalid integer: {value!r}")


def _to_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"invalid number: {value!r}")
    return float(value)


def _to_str(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"expected a string, got {value!r}")
    return value


def _to_object(value: Any) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"expected an object, got {value!r}")
    return value


def _to_list(value: Any) -> list[Any]:
    if not isinstance(value, list):
        raise ValueError(f"expected a list, got {value!r}")
    return value


def _from_string(parser: Callable[[str], Any]) -> Callable[[Any], Any]:
    def parse(value: Any) -> Any:
        return parser(json.dumps(value))

    return parse


def _split(separator: str) -> Callable[[Any], list[str]]:
    def parse(value: Any) -> list[str]:
        text = _to_str(value)
        return text.split(separator) if text else []

    return parse


def _strings(value: Any) -> list[str]:
    return [_to_str(item) for item in _to_list(value)]


def _opt(data: Mapping[str, Any], key: str, parse: Callable[[Any], Any]) -> Any:
    value = data.get(key)
    return None if value is None else parse(value)


def _efi_disk(value: Any) -> CustomEFIDisk:
    data = _to_object(value)
    return CustomEFIDisk(
        file_volume=_to_str(data.get("file") or ""),
        disk_size=_opt(data, "size", _to_int),
        format=_opt(data, "format", _to_str),
    )


def _spice(value: Any) -> CustomSpiceEnhancements:
    data = _to_object(value)
    return CustomSpiceEnhancements(
        folder_sharing=_opt(data, "foldersharing", _to_bool),
        video_streaming=_opt(data, "videostreaming", _to_str),
    )


def _startup(value: Any) -> CustomStartupOrder:
    data = _to_object(value)
    return CustomStartupOrder(
        down=_opt(data, "down", _to_int),
        order=_opt(data, "order", _to_int),
        up=_opt(data, "up", _to_int),
    )


def _numa_device(value: Any) -> CustomNUMADevice:
    data = _to_object(value)
    return CustomNUMADevice(
        cpu_ids=_opt(data, "cpus", _strings) or [],
        host_node_names=_opt(data, "hostnodes", _strings),
        memory=_opt(data, "memory", _to_float),
        policy=_opt(data, "policy", _to_str),
    )


def _pci_device(value: Any) -> CustomPCIDevice:
    data = _to_object(value)
    return CustomPCIDevice(
        device_ids=_opt(data, "host", _strings) or [],
        device_path=_opt(data, "mdev", _to_str),
        pci_express=_opt(data, "pcie", _to_bool),
        rombar=_opt(data, "rombar", _to_bool),
        rom_file=_opt(data, "romfile", _to_str),
        xvga=_opt(data, "x-vga", _to_bool),
    )


def _usb_device(value: Any) -> CustomUSBDevice:
    data = _to_object(value)
    return CustomUSBDevice(
        host_device=_to_str(data.get("host") or ""),
        usb3=_opt(data, "usb3", _to_bool),
    )


def _list_of(parse: Callable[[Any], Any]) -> Callable[[Any], list[Any]]:
    def parse_list(value: Any) -> list[Any]:
        return [parse(item) for item in _to_list(value)]

    return parse_list


def _apply(target: Any, data: Mapping[str, Any], table: Iterable[tuple[str, str, Callable]]) -> None:
    for key, attr, parse in table:
        value = data.get(key)
        if value is not None:
            setattr(target, attr, parse(value))


@dataclass
class QEMUIPAddress:
    """One address reported by the guest agent."""

    address: str = ""
    prefix: int = 0
    type: str = ""


@dataclass
class QEMUInterfaceStatistics:
    """Traffic counters reported by the guest agent."""

    rx_bytes: int = 0
    rx_dropped: int = 0
    rx_errors: int = 0
    rx_packets: int = 0
    tx_bytes: int = 0
    tx_dropped: int = 0
    tx_errors: int = 0
    tx_packets: int = 0


_STATISTICS_FIELDS = (
    ("rx-bytes", "rx_bytes", _to_int),
    ("rx-dropped", "rx_dropped", _to_int),
    ("rx-errs", "rx_errors", _to_int),
    ("rx-packets", "rx_packets", _to_int),
    ("tx-bytes", "tx_bytes", _to_int),
    ("tx-dropped", "tx_dropped", _to_int),
    ("tx-errs", "tx_errors", _to_int),
    ("tx-packets", "tx_packets", _to_int),
)


def _statistics(value: Any) -> QEMUInterfaceStatistics:
    statistics = QEMUInterfaceStatistics()
    _apply(statistics, _to_object(value), _STATISTICS_FIELDS)
    return statistics


def _ip_address(value: Any) -> QEMUIPAddress:
    address = QEMUIPAddress()
    _apply(
        address,
        _to_object(value),
        (
            ("ip-address", "address", _to_str),
            ("prefix", "prefix", _to_int),
            ("ip-address-type", "type", _to_str),
        ),
    )
    return address


@dataclass
class QEMUNetworkInterface:
    """A network interface reported by the guest agent."""

    mac_address: str = ""
    name: str = ""
    statistics: QEMUInterfaceStatistics | None = None
    ip_addresses: list[QEMUIPAddress] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> QEMUNetworkInterface:
        interface = cls()
        _apply(
            interface,
            _to_object(data),
            (
                ("hardware-address", "mac_address", _to_str),
                ("name", "name", _to_str),
                ("statistics", "statistics", _statistics),
                ("ip-addresses", "ip_addresses", _list_of(_ip_address)),
            ),
        )
        return interface


def parse_qemu_network_interfaces(body: Mapping[str, Any]) -> list[QEMUNetworkInterface]:
    """Read the interfaces out of a guest agent ``network-get-interfaces`` response body."""
    data = _to_object(body).get("data")
    if data is None:
        return []
    result = _to_object(data).get("result")
    if result is None:
        return []
    return [QEMUNetworkInterface.from_dict(item) for item in _to_list(result)]


@dataclass
class VMGetStatusResponseData:
    """Current status of a virtual machine."""

    agent_enabled: bool | None = None
    cpu_count: float | None = None
    lock: str | None = None
    memory_allocation: int | None = None
    name: str | None = None
    pid: int | None = None
    qmp_status: str | None = None
    root_disk_size: int | None = None
    spice_support: bool | None = None
    status: str = ""
    tags: str | None = None
    uptime: int | None = None
    vm_id: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VMGetStatusResponseData:
        status = cls()
        _apply(status, _to_object(data), _STATUS_FIELDS)
        return status


_STATUS_FIELDS = (
    ("agent", "agent_enabled", _to_bool),
    ("cpus", "cpu_count", _to_float),
    ("lock", "lock", _to_str),
    ("maxmem", "memory_allocation", _to_int),
    ("name", "name", _to_str),
    ("pid", "pid", _to_int),
    ("qmpstatus", "qmp_status", _to_str),
    ("maxdisk", "root_disk_size", _to_int),
    ("spice", "spice_support", _to_bool),
    ("status", "status", _to_str),
    ("tags", "tags", _to_str),
    ("uptime", "uptime", _to_int),
    ("vmid", "vm_id", _to_int),
)


@dataclass
class VMGetResponseData:
    """Configuration of a virtual machine as the API reports it.

    Numbered slots (disks, network devices, IP configurations and serial
    devices) are kept in dictionaries keyed by their API names.
    """

    acpi: bool | None = None
    agent: CustomAgent | None = None
    allow_reboot: bool | None = None
    audio_device: CustomAudioDevice | None = None
    autostart: bool | None = None
    backup_file: str | None = None
    bandwidth_limit: int | None = None
    bios: str | None = None
    boot_disk: str | None = None
    boot_order: str | None = None
    cdrom: str | None = None
    cloud_init_dns_domain: str | None = None
    cloud_init_dns_server: str | None = None
    cloud_init_files: CustomCloudInitFiles | None = None
    cloud_init_password: str | None = None
    cloud_init_ssh_keys: list[str] | None = None
    cloud_init_type: str | None = None
    cloud_init_username: str | None = None
    cpu_architecture: str | None = None
    cpu_cores: int | None = None
    cpu_emulation: CustomCPUEmulation | None = None
    cpu_limit: int | None = None
    cpu_sockets: int | None = None
    cpu_units: int | None = None
    dedicated_memory: int | None = None
    deletion_protection: bool | None = None
    description: str | None = None
    efi_disk: CustomEFIDisk | None = None
    floating_memory: int | None = None
    floating_memory_shares: int | None = None
    freeze: bool | None = None
    hook_script: str | None = None
    hotplug: list[str] | None = None
    hugepages: str | None = None
    keyboard_layout: str | None = None
    kvm_arguments: list[str] | None = None
    kvm_enabled: bool | None = None
    local_time: bool | None = None
    lock: str | None = None
    machine_type: str | None = None
    migrate_downtime: float | None = None
    migrate_speed: int | None = None
    name: str | None = None
    numa_devices: list[CustomNUMADevice] | None = None
    numa_enabled: bool | None = None
    os_type: str | None = None
    overwrite: bool | None = None
    pci_devices: list[CustomPCIDevice] | None = None
    pool_id: str | None = None
    revert: str | None = None
    scsi_hardware: str | None = None
    shared_memory: CustomSharedMemory | None = None
    skip_lock: bool | None = None
    smbios: CustomSMBIOS | None = None
    spice_enhancements: CustomSpiceEnhancements | None = None
    start_date: str | None = None
    start_on_boot: bool | None = None
    startup_order: CustomStartupOrder | None = None
    tablet_device_enabled: bool | None = None
    tags: str | None = None
    template: bool | None = None
    time_drift_fix_enabled: bool | None = None
    usb_devices: list[CustomUSBDevice] | None = None
    vga_device: CustomVGADevice | None = None
    virtual_cpu_count: int | None = None
    vm_generation_id: str | None = None
    vm_state_datastore_id: str | None = None
    watchdog_device: CustomWatchdogDevice | None = None
    ide_devices: dict[str, CustomStorageDevice] = field(default_factory=dict)
    sata_devices: dict[str, CustomStorageDevice] = field(default_factory=dict)
    scsi_devices: dict[str, CustomStorageDevice] = field(default_factory=dict)
    virtio_devices: dict[str, CustomStorageDevice] = field(default_factory=dict)
    network_devices: dict[str, CustomNetworkDevice] = field(default_factory=dict)
    ip_configs: dict[str, CustomCloudInitIPConfig] = field(default_factory=dict)
    serial_devices: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VMGetResponseData:
        data = _to_object(data)
        response = cls()
        _apply(response, data, _GET_FIELDS)
        for prefix, count, attr, parse in _NUMBERED_FIELDS:
            slots = getattr(response, attr)
            for index in range(count):
                key = f"{prefix}{index}"
                value = data.get(key)
                if value is not None:
                    slots[key] = parse(value)
        return response


_GET_FIELDS = (
    ("acpi", "acpi", _to_bool),
    ("agent", "agent", _from_string(CustomAgent.from_json)),
    ("reboot", "allow_reboot", _to_bool),
    ("audio0", "audio_device", _from_string(CustomAudioDevice.from_json)),
    ("autostart", "autostart", _to_bool),
    ("archive", "backup_file", _to_str),
    ("bwlimit", "bandwidth_limit", _to_int),
    ("bios", "bios", _to_str),
    ("bootdisk", "boot_disk", _to_str),
    ("boot", "boot_order", _to_str),
    ("cdrom", "cdrom", _to_str),
    ("searchdomain", "cloud_init_dns_domain", _to_str),
    ("nameserver", "cloud_init_dns_server", _to_str),
    ("cicustom", "cloud_init_files", _from_string(CustomCloudInitFiles.from_json)),
    ("cipassword", "cloud_init_password", _to_str),
    ("sshkeys", "cloud_init_ssh_keys", _from_string(parse_ssh_keys)),
    ("citype", "cloud_init_type", _to_str),
    ("ciuser", "cloud_init_username", _to_str),
    ("arch", "cpu_architecture", _to_str),
    ("cores", "cpu_cores", _to_int),
    ("cpu", "cpu_emulation", _from_string(CustomCPUEmulation.from_json)),
    ("cpulimit", "cpu_limit", _to_int),
    ("sockets", "cpu_sockets", _to_int),
    ("cpuunits", "cpu_units", _to_int),
    ("memory", "dedicated_memory", _to_int),
    ("protection", "deletion_protection", _to_bool),
    ("description", "description", _to_str),
    ("efidisk0", "efi_disk", _efi_disk),
    ("balloon", "floating_memory", _to_int),
    ("shares", "floating_memory_shares", _to_int),
    ("freeze", "freeze", _to_bool),
    ("hookscript", "hook_script", _to_str),
    ("hotplug", "hotplug", _split(",")),
    ("hugepages", "hugepages", _to_str),
    ("keyboard", "keyboard_layout", _to_str),
    ("args", "kvm_arguments", _split("\n")),
    ("kvm", "kvm_enabled", _to_bool),
    ("localtime", "local_time", _to_bool),
    ("lock", "lock", _to_str),
    ("machine", "machine_type", _to_str),
    ("migrate_downtime", "migrate_downtime", _to_float),
    ("migrate_speed", "migrate_speed", _to_int),
    ("name", "name", _to_str),
    ("numa_devices", "numa_devices", _list_of(_numa_device)),
    ("numa", "numa_enabled", _to_bool),
    ("ostype", "os_type", _to_str),
    ("force", "overwrite", _to_bool),
    ("hostpci", "pci_devices", _list_of(_pci_device)),
    ("pool", "pool_id", _to_str),
    ("revert", "revert", _to_str),
    ("scsihw", "scsi_hardware", _to_str),
    ("ivshmem", "shared_memory", _from_string(CustomSharedMemory.from_json)),
    ("skiplock", "skip_lock", _to_bool),
    ("smbios1", "smbios", _from_string(CustomSMBIOS.from_json)),
    ("spice_enhancements", "spice_enhancements", _spice),
    ("startdate", "start_date", _to_str),
    ("onboot", "start_on_boot", _to_bool),
    ("startup", "startup_order", _startup),
    ("tablet", "tablet_device_enabled", _to_bool),
    ("tags", "tags", _to_str),
    ("template", "template", _to_bool),
    ("tdf", "time_drift_fix_enabled", _to_bool),
    ("usb", "usb_devices", _list_of(_usb_device)),
    ("vga", "vga_device", _from_string(CustomVGADevice.from_json)),
    ("vcpus", "virtual_cpu_count", _to_int),
    ("vmgenid", "vm_generation_id", _to_str),
    ("vmstatestorage", "vm_state_datastore_id", _to_str),
    ("watchdog", "watchdog_device", _from_string(CustomWatchdogDevice.from_json)),
)

_storage_device = _from_string(CustomStorageDevice.from_json)

_NUMBERED_FIELDS = (
    ("ide", 4, "ide_devices", _storage_device),
    ("sata", 6, "sata_devices", _storage_device),
    ("scsi", 14, "scsi_devices", _storage_device),
    ("virtio", 16, "virtio_devices", _storage_device),
    ("net", 8, "network_devices", _from_string(CustomNetworkDevice.from_json)),
    ("ipconfig", 8, "ip_configs", _from_string(CustomCloudInitIPConfig.from_json)),
    ("serial", 4, "serial_devices", _to_str),
)