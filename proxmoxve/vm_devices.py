"""Virtual machine device definitions and their API string forms.

Devices render themselves as comma separated ``key=value`` strings for the
API. The device kinds the API reports back also parse that form from a JSON
string.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from .vm_config import _decode_string, _parse_int, flag, split_pairs

__all__ = [
    "CustomNUMADevice",
    "CustomNetworkDevice",
    "CustomPCIDevice",
    "CustomStorageDevice",
    "CustomUSBDevice",
    "CustomVirtualIODevice",
    "encode_network_devices",
    "encode_numa_devices",
    "encode_pci_devices",
    "encode_serial_devices",
    "encode_storage_devices",
    "encode_usb_devices",
    "encode_virtio_devices",
]


def _extension(path: str) -> str:
    """Return the extension of the last path element, dot included."""
    for index in range(len(path) - 1, -1, -1):
        char = path[index]
        if char == "/":
            break
        if char == ".":
            return path[index:]
    return ""


def _parse_float(text: str) -> float:
    try:
        return float(text.strip() if text == text.strip() else "x")
    except ValueError:
        raise ValueError(f"invalid number: {text!r}") from None


@dataclass
class CustomNetworkDevice:
    """QEMU network device options."""

    model: str = ""
    bridge: str | None = None
    enabled: bool = False
    firewall: bool | None = None
    link_down: bool | None = None
    mac_address: str | None = None
    queues: int | None = None
    rate_limit: float | None = None
    tag: int | None = None
    mtu: int | None = None
    trunks: list[int] = field(default_factory=list)

    def encode(self, key: str) -> dict[str, str]:
        values = [f"model={self.model}"]
        if self.bridge is not None:
            values.append(f"bridge={self.bridge}")
        if self.firewall is not None:
            values.append(flag("firewall", self.firewall))
        if self.link_down is not None:
            values.append(flag("link_down", self.link_down))
        if self.mac_address is not None:
            values.append(f"macaddr={self.mac_address}")
        if self.queues is not None:
            values.append(f"queues={self.queues}")
        if self.rate_limit is not None:
            values.append(f"rate={self.rate_limit:f}")
        if self.tag is not None:
            values.append(f"tag={self.tag}")
        if self.mtu is not None:
            values.append(f"mtu={self.mtu}")
        if self.trunks:
            values.append("trunks=" + ";".join(str(trunk) for trunk in self.trunks))
        return {key: ",".join(values)}

    @classmethod
    def from_json(cls, raw: str | bytes) -> CustomNetworkDevice:
        device = cls()
        for pair in split_pairs(_decode_string(raw)):
            if len(pair) != 2:
                continue
            name, value = pair
            if name == "bridge":
                device.bridge = value
            elif name == "firewall":
                device.firewall = value == "1"
            elif name == "link_down":
                device.link_down = value == "1"
            elif name == "macaddr":
                device.mac_address = value
            elif name == "model":
                device.model = value
            elif name == "queues":
                device.queues = _parse_int(value)
            elif name == "rate":
                device.rate_limit = _parse_float(value)
            elif name == "mtu":
                device.mtu = _parse_int(value)
            elif name == "tag":
                device.tag = _parse_int(value)
            elif name == "trunks":
                device.trunks = [_parse_int(trunk) for trunk in value.split(";")]
            else:
                # The short form names the model and carries the MAC address.
                device.mac_address = value
                device.model = name
        device.enabled = True
        return device


def encode_network_devices(devices: Sequence[CustomNetworkDevice], key: str) -> dict[str, str]:
    """Encode the enabled network devices as ``<key><index>`` entries."""
    params: dict[str, str] = {}
    for index, device in enumerate(devices):
        if device.enabled:
            params.update(device.encode(f"{key}{index}"))
    return params


@dataclass
class CustomNUMADevice:
    """QEMU NUMA node options."""

    cpu_ids: list[str] = field(default_factory=list)
    host_node_names: list[str] | None = None
    memory: float | None = None
    policy: str | None = None

    def encode(self, key: str) -> dict[str, str]:
        values = ["cpus=" + ";".join(self.cpu_ids)]
        if self.host_node_names is not None:
            values.append("hostnodes=" + ";".join(self.host_node_names))
        if self.memory is not None:
            values.append(f"memory={self.memory:f}")
        if self.policy is not None:
            values.append(f"policy={self.policy}")
        return {key: ",".join(values)}


def encode_numa_devices(devices: Sequence[CustomNUMADevice], key: str) -> dict[str, str]:
    """Encode every NUMA node as ``<key><index>`` entries."""
    params: dict[str, str] = {}
    for index, device in enumerate(devices):
        params.update(device.encode(f"{key}{index}"))
    return params


@dataclass
class CustomPCIDevice:
    """Host PCI device pass-through options."""

    device_ids: list[str] = field(default_factory=list)
    device_path: str | None = None
    pci_express: bool | None = None
    rombar: bool | None = None
    rom_file: str | None = None
    xvga: bool | None = None

    def encode(self, key: str) -> dict[str, str]:
        values = ["host=" + ";".join(self.device_ids)]
        if self.device_path is not None:
            values.append(f"mdev={self.device_path}")
        if self.pci_express is not None:
            values.append(flag("pcie", self.pci_express))
        if self.rombar is not None:
            values.append(flag("rombar", self.rombar))
        if self.rom_file is not None:
            values.append(f"romfile={self.rom_file}")
        if self.xvga is not None:
            values.append(flag("x-vga", self.xvga))
        return {key: ",".join(values)}


def encode_pci_devices(devices: Sequence[CustomPCIDevice], key: str) -> dict[str, str]:
    """Encode every PCI device as ``<key><index>`` entries."""
    params: dict[str, str] = {}
    for index, device in enumerate(devices):
        params.update(device.encode(f"{key}{index}"))
    return params


def encode_serial_devices(devices: Sequence[str], key: str) -> dict[str, str]:
    """Encode serial device definitions as ``<key><index>`` entries."""
    return {f"{key}{index}": device for index, device in enumerate(devices)}


@dataclass
class CustomStorageDevice:
    """QEMU disk options shared by the IDE, SATA, SCSI and VirtIO buses."""

    aio: str | None = None
    backup_enabled: bool | None = None
    burstable_read_speed_mbps: int | None = None
    burstable_write_speed_mbps: int | None = None
    discard: str | None = None
    enabled: bool = False
    file_volume: str = ""
    format: str | None = None
    iothread: bool | None = None
    ssd: bool | None = None
    max_read_speed_mbps: int | None = None
    max_write_speed_mbps: int | None = None
    media: str | None = None
    size: str | None = None
    interface: str | None = None
    id: str | None = None
    file_id: str | None = None
    size_int: int | None = None

    def encode(self, key: str) -> dict[str, str]:
        values = [f"file={self.file_volume}"]
        if self.aio is not None:
            values.append(f"aio={self.aio}")
        if self.backup_enabled is not None:
            values.append(flag("backup", self.backup_enabled))
        if self.burstable_read_speed_mbps is not None:
            values.append(f"mbps_rd_max={self.burstable_read_speed_mbps}")
        if self.burstable_write_speed_mbps is not None:
            values.append(f"mbps_wr_max={self.burstable_write_speed_mbps}")
        if self.max_read_speed_mbps is not None:
            values.append(f"mbps_rd={self.max_read_speed_mbps}")
        if self.max_write_speed_mbps is not None:
            values.append(f"mbps_wr={self.max_write_speed_mbps}")
        if self.media is not None:
            values.append(f"media={self.media}")
        if self.size is not None:
            values.append(f"size={self.size}")
        if self.iothread is not None:
            values.append(flag("iothread", self.iothread))
        if self.ssd is not None:
            values.append(flag("ssd", self.ssd))
        if self.discard:
            values.append(f"discard={self.discard}")
        return {key: ",".join(values)}

    @classmethod
    def from_json(cls, raw: str | bytes) -> CustomStorageDevice:
        disk = cls()
        ints = {
            "mbps_rd": "max_read_speed_mbps",
            "mbps_rd_max": "burstable_read_speed_mbps",
            "mbps_wr": "max_write_speed_mbps",
            "mbps_wr_max": "burstable_write_speed_mbps",
        }
        strings = {
            "aio": "aio",
            "file": "file_volume",
            "media": "media",
            "size": "size",
            "format": "format",
            "discard": "discard",
        }
        flags = {"backup": "backup_enabled", "iothread": "iothread", "ssd": "ssd"}
        for pair in split_pairs(_decode_string(raw)):
            if len(pair) == 1:
                disk.file_volume = pair[0]
                ext = _extension(pair[0])
                if ext:
                    disk.format = ext[1:]
            elif len(pair) == 2:
                name, value = pair
                if name in ints:
                    setattr(disk, ints[name], _parse_int(value))
                elif name in strings:
                    setattr(disk, strings[name], value)
                elif name in flags:
                    setattr(disk, flags[name], value == "1")
        disk.enabled = True
        return disk


def encode_storage_devices(devices: Mapping[str, CustomStorageDevice]) -> dict[str, str]:
    """Encode the enabled disks under their own slot names."""
    params: dict[str, str] = {}
    for slot, device in devices.items():
        if device.enabled:
            params.update(device.encode(slot))
    return params


@dataclass
class CustomUSBDevice:
    """Host USB device pass-through options."""

    host_device: str = ""
    usb3: bool | None = None

    def encode(self, key: str) -> dict[str, str]:
        values = [f"host={self.host_device}"]
        if self.usb3 is not None:
            values.append(flag("usb3", self.usb3))
        return {key: ",".join(values)}


def encode_usb_devices(devices: Sequence[CustomUSBDevice], key: str) -> dict[str, str]:
    """Encode every USB device as ``<key><index>`` entries."""
    params: dict[str, str] = {}
    for index, device in enumerate(devices):
        params.update(device.encode(f"{key}{index}"))
    return params


@dataclass
class CustomVirtualIODevice:
    """QEMU VirtIO block device options."""

    aio: str | None = None
    backup_enabled: bool | None = None
    enabled: bool = False
    file_volume: str = ""

    def encode(self, key: str) -> dict[str, str]:
        values = [f"file={self.file_volume}"]
        if self.aio is not None:
            values.append(f"aio={self.aio}")
        if self.backup_enabled is not None:
            values.append(flag("backup", self.backup_enabled))
        return {key: ",".join(values)}


def encode_virtio_devices(devices: Sequence[CustomVirtualIODevice], key: str) -> dict[str, str]:
    """Encode the enabled VirtIO devices as ``<key><index>`` entries."""
    params: dict[str, str] = {}
    for index, device in enumerate(devices):
        if device.enabled:
            params.update(device.encode(f"{key}{index}"))
    return params