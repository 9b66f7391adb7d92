"""Virtual machine configuration values and their API string forms.

Each value renders itself as a comma separated ``key=value`` string for the
API, and parses the same form back from a JSON string.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from urllib.parse import quote_plus, unquote_plus

__all__ = [
    "CustomAgent",
    "CustomAudioDevice",
    "CustomCPUEmulation",
    "CustomCloudInitConfig",
    "CustomCloudInitFiles",
    "CustomCloudInitIPConfig",
    "CustomEFIDisk",
    "CustomSMBIOS",
    "CustomSharedMemory",
    "CustomSpiceEnhancements",
    "CustomStartupOrder",
    "CustomVGADevice",
    "CustomWatchdogDevice",
    "encode_audio_devices",
    "flag",
    "parse_ssh_keys",
    "split_pairs",
]

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _decode_string(raw: str | bytes) -> str:
    """Decode a JSON document that must hold a string (null counts as empty)."""
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    value = json.loads(raw)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"expected a JSON string, got {type(value).__name__}")
    return value


def _parse_int(text: str) -> int:
    if not _INT_PATTERN.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    return int(text)


def split_pairs(value: str) -> list[list[str]]:
    """Split ``a=b,c=d`` into its parts, each part split on ``=``."""
    return [part.strip().split("=") for part in value.split(",")]


def flag(name: str, value: bool) -> str:
    """Render a boolean option as ``name=1`` or ``name=0``."""
    return f"{name}={1 if value else 0}"


def _single(key: str, values: list[str]) -> dict[str, str]:
    return {key: ",".join(values)} if values else {}


@dataclass
class CustomAgent:
    """QEMU guest agent options."""

    enabled: bool | None = None
    trim_cloned_disks: bool | None = None
    type: str | None = None

    def encode(self, key: str) -> dict[str, str]:
        values = []
        if self.enabled is not None:
            values.append(flag("enabled", self.enabled))
        if self.trim_cloned_disks is not None:
            values.append(flag("fstrim_cloned_disks", self.trim_cloned_disks))
        if self.type is not None:
            values.append(f"type={self.type}")
        return _single(key, values)

    @classmethod
    def from_json(cls, raw: str | bytes) -> CustomAgent:
        agent = cls()
        for pair in split_pairs(_decode_string(raw)):
            if len(pair) == 1:
                agent.enabled = pair[0] == "1"
            elif len(pair) == 2:
                name, value = pair
                if name == "enabled":
                    agent.enabled = value == "1"
                elif name == "fstrim_cloned_disks":
                    agent.trim_cloned_disks = value == "1"
                elif name == "type":
                    agent.type = value
        return agent


@dataclass
class CustomAudioDevice:
    """QEMU audio device options."""

    device: str = ""
    driver: str | None = None
    enabled: bool = False

    def encode(self, key: str) -> dict[str, str]:
        values = [f"device={self.device}"]
        if self.driver is not None:
            values.append(f"driver={self.driver}")
        return {key: ",".join(values)}

    @classmethod
    def from_json(cls, raw: str | bytes) -> CustomAudioDevice:
        audio = cls()
        for pair in split_pairs(_decode_string(raw)):
            if len(pair) == 2:
                name, value = pair
                if name == "device":
                    audio.device = value
                elif name == "driver":
                    audio.driver = value
        return audio


def encode_audio_devices(devices: list[CustomAudioDevice], key: str) -> dict[str, str]:
    """Encode the enabled audio devices as ``<key><index>`` entries."""
    params: dict[str, str] = {}
    for index, device in enumerate(devices):
        if device.enabled:
            params.update(device.encode(f"{key}{index}"))
    return params


@dataclass
class CustomCloudInitFiles:
    """Custom cloud-init volume references."""

    meta_volume: str | None = None
    network_volume: str | None = None
    user_volume: str | None = None
    vendor_volume: str | None = None

    def _values(self) -> list[str]:
        values = []
        if self.meta_volume is not None:
            values.append(f"meta={self.meta_volume}")
        if self.network_volume is not None:
            values.append(f"network={self.network_volume}")
        if self.user_volume is not None:
            values.append(f"user={self.user_volume}")
        if self.vendor_volume is not None:
            values.append(f"vendor={self.vendor_volume}")
        return values

    @classmethod
    def from_json(cls, raw: str | bytes) -> CustomCloudInitFiles:
        files = cls()
        for pair in split_pairs(_decode_string(raw)):
            if len(pair) == 2:
                name, value = pair
                # The network volume is read into the meta slot, as the API layer always has.
                if name in ("meta", "network"):
                    files.meta_volume = value
                elif name == "user":
                    files.user_volume = value
                elif name == "vendor":
                    files.vendor_volume = value
        return files


@dataclass
class CustomCloudInitIPConfig:
    """Cloud-init IP configuration for one interface."""

    gateway_ipv4: str | None = None
    gateway_ipv6: str | None = None
    ipv4: str | None = None
    ipv6: str | None = None

    def _values(self) -> list[str]:
        values = []
        if self.gateway_ipv4 is not None:
            values.append(f"gw={self.gateway_ipv4}")
        if self.gateway_ipv6 is not None:
            values.append(f"gw6={self.gateway_ipv6}")
        if self.ipv4 is not None:
            values.append(f"ip={self.ipv4}")
        if self.ipv6 is not None:
            values.append(f"ip6={self.ipv6}")
        return values

    @classmethod
    def from_json(cls, raw: str | bytes) -> CustomCloudInitIPConfig:
        config = cls()
        for pair in split_pairs(_decode_string(raw)):
            if len(pair) == 2:
                name, value = pair
                if name == "gw":
                    config.gateway_ipv4 = value
                elif name == "gw6":
                    config.gateway_ipv6 = value
                elif name == "ip":
                    config.ipv4 = value
                elif name == "ip6":
                    config.ipv6 = value
        return config


def parse_ssh_keys(raw: str | bytes) -> list[str]:
    """Parse the URL-escaped, newline separated SSH key list."""
    text = _decode_string(raw)
    if _BAD_ESCAPE.search(text):
        raise ValueError(f"invalid URL escape in {text!r}")
    text = unquote_plus(text)
    if text == "":
        return []
    return text.strip().split("\n")


@dataclass
class CustomCloudInitConfig:
    """Cloud-init settings of a virtual machine."""

    files: CustomCloudInitFiles | None = None
    ip_config: list[CustomCloudInitIPConfig] = field(default_factory=list)
    nameserver: str | None = None
    password: str | None = None
    search_domain: str | None = None
    ssh_keys: list[str] | None = None
    type: str | None = None
    username: str | None = None

    def encode(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.files is not None:
            params.update(_single("cicustom", self.files._values()))
        for index, config in enumerate(self.ip_config):
            params.update(_single(f"ipconfig{index}", config._values()))
        if self.nameserver is not None:
            params["nameserver"] = self.nameserver
        if self.password is not None:
            params["cipassword"] = self.password
        if self.search_domain is not None:
            params["searchdomain"] = self.search_domain
        if self.ssh_keys is not None:
            escaped = quote_plus("\n".join(self.ssh_keys), safe="")
            params["sshkeys"] = escaped.replace("+", "%20")
        if self.type is not None:
            params["citype"] = self.type
        if self.username is not None:
            params["ciuser"] = self.username
        return params


@dataclass
class CustomCPUEmulation:
    """QEMU CPU emulation options."""

    flags: list[str] | None = None
    hidden: bool | None = None
    hv_vendor_id: str | None = None
    type: str = ""

    def encode(self, key: str) -> dict[str, str]:
        values = [f"cputype={self.type}"]
        if self.flags:
            values.append(f"flags={';'.join(self.flags)}")
        if self.hidden is not None:
            values.append(flag("hidden", self.hidden))
        if self.hv_vendor_id is not None:
            values.append(f"hv-vendor-id={self.hv_vendor_id}")
        return {key: ",".join(values)}

    @classmethod
    def from_json(cls, raw: str | bytes) -> CustomCPUEmulation:
        text = _decode_string(raw)
        if text == "":
            raise ValueError("unexpected empty string")
        cpu = cls()
        for pair in split_pairs(text):
            if len(pair) == 1:
                cpu.type = pair[0]
            elif len(pair) == 2:
                name, value = pair
                if name == "cputype":
                    cpu.type = value
                elif name == "flags":
                    cpu.flags = value.split(";") if value else []
                elif name == "hidden":
                    cpu.hidden = value == "1"
                elif name == "hv-vendor-id":
                    cpu.hv_vendor_id = value
        return cpu


@dataclass
class CustomEFIDisk:
    """QEMU EFI disk options."""

    file_volume: str = ""
    disk_size: int | None = None
    format: str | None = None

    def encode(self, key: str) -> dict[str, str]:
        values = [f"file={self.file_volume}"]
        if self.format is not None:
            values.append(f"format={self.format}")
        if self.disk_size is not None:
            values.append(f"size={self.disk_size}")
        return {key: ",".join(values)}


@dataclass
class CustomSharedMemory:
    """Inter-VM shared memory options."""

    name: str | None = None
    size: int = 0

    def encode(self, key: str) -> dict[str, str]:
        values = [f"size={self.size}"]
        if self.name is not None:
            values.append(f"name={self.name}")
        return {key: ",".join(values)}

    @classmethod
    def from_json(cls, raw: str | bytes) -> CustomSharedMemory:
        memory = cls()
        for pair in split_pairs(_decode_string(raw)):
            if len(pair) == 2:
                name, value = pair
                if name == "name":
                    memory.name = value
                elif name == "size":
                    memory.size = _parse_int(value)
        return memory


_SMBIOS_FIELDS = (
    ("family", "family"),
    ("manufacturer", "manufacturer"),
    ("product", "product"),
    ("serial", "serial"),
    ("sku", "sku"),
    ("uuid", "uuid"),
    ("version", "version"),
)


@dataclass
class CustomSMBIOS:
    """SMBIOS type 1 fields."""

    base64: bool | None = None
    family: str | None = None
    manufacturer: str | None = None
    product: str | None = None
    serial: str | None = None
    sku: str | None = None
    uuid: str | None = None
    version: str | None = None

    def encode(self, key: str) -> dict[str, str]:
        values = []
        if self.base64 is not None:
            values.append(flag("base64", self.base64))
        for attr, name in _SMBIOS_FIELDS:
            value = getattr(self, attr)
            if value is not None:
                values.append(f"{name}={value}")
        return _single(key, values)

    @classmethod
    def from_json(cls, raw: str | bytes) -> CustomSMBIOS:
        smbios = cls()
        names = {name: attr for attr, name in _SMBIOS_FIELDS}
        for pair in split_pairs(_decode_string(raw)):
            if len(pair) == 2:
                name, value = pair
                if name == "base64":
                    smbios.base64 = value == "1"
                elif name in names:
                    setattr(smbios, names[name], value)
        return smbios


@dataclass
class CustomSpiceEnhancements:
    """SPICE enhancement options."""

    folder_sharing: bool | None = None
    video_streaming: str | None = None

    def encode(self, key: str) -> dict[str, str]:
        values = []
        if self.folder_sharing is not None:
            values.append(flag("foldersharing", self.folder_sharing))
        if self.video_streaming is not None:
            values.append(f"videostreaming={self.video_streaming}")
        return _single(key, values)


@dataclass
class CustomStartupOrder:
    """Startup and shutdown ordering."""

    down: int | None = None
    order: int | None = None
    up: int | None = None

    def encode(self, key: str) -> dict[str, str]:
        values = []
        if self.order is not None:
            values.append(f"order={self.order}")
        if self.up is not None:
            values.append(f"up={self.up}")
        if self.down is not None:
            values.append(f"down={self.down}")
        return _single(key, values)


@dataclass
class CustomVGADevice:
    """QEMU VGA device options."""

    memory: int | None = None
    type: str | None = None

    def encode(self, key: str) -> dict[str, str]:
        values = []
        if self.memory is not None:
            values.append(f"memory={self.memory}")
        if self.type is not None:
            values.append(f"type={self.type}")
        return {key: ",".join(values)}

    @classmethod
    def from_json(cls, raw: str | bytes) -> CustomVGADevice:
        vga = cls()
        text = _decode_string(raw)
        if text == "":
            return vga
        for pair in split_pairs(text):
            if len(pair) == 1:
                vga.type = pair[0]
            elif len(pair) == 2:
                name, value = pair
                if name == "memory":
                    vga.memory = _parse_int(value)
                elif name == "type":
                    vga.type = value
        return vga


@dataclass
class CustomWatchdogDevice:
    """QEMU watchdog device options."""

    action: str | None = None
    model: str | None = None

    def encode(self, key: str) -> dict[str, str]:
        values = [f"model={self.model or ''}"]
        if self.action is not None:
            values.append(f"action={self.action}")
        return {key: ",".join(values)}

    @classmethod
    def from_json(cls, raw: str | bytes) -> CustomWatchdogDevice:
        watchdog = cls()
        text = _decode_string(raw)
        if text == "":
            return watchdog
        for pair in split_pairs(text):
            if len(pair) == 1:
                watchdog.model = pair[0]
            elif len(pair) == 2:
                name, value = pair
                if name == "action":
                    watchdog.action = value
                elif name == "model":
                    watchdog.model = value
        return watchdog