import json

import pytest

from proxmoxve.vm_config import (
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
    flag,
    parse_ssh_keys,
    split_pairs,
)


def _as_json(params, key):
    return json.dumps(params[key])


def test_flag_renders_one_and_zero():
    assert flag("hidden", True) == "hidden=1"
    assert flag("hidden", False) == "hidden=0"


def test_split_pairs_strips_and_splits():
    assert split_pairs("a=b, c") == [["a", "b"], ["c"]]


def test_agent_round_trip():
    agent = CustomAgent(enabled=True, trim_cloned_disks=False, type="virtio")
    params = agent.encode("agent")
    assert CustomAgent.from_json(_as_json(params, "agent")) == agent


def test_agent_bare_value_sets_enabled():
    assert CustomAgent.from_json('"1"').enabled is True
    assert CustomAgent.from_json('"0"').enabled is False


def test_agent_empty_encodes_nothing():
    assert CustomAgent().encode("agent") == {}


def test_agent_rejects_non_string_json():
    with pytest.raises(ValueError):
        CustomAgent.from_json("42")


def test_audio_round_trip_and_list_encoding():
    audio = CustomAudioDevice(device="ich9-intel-hda", driver="spice", enabled=True)
    decoded = CustomAudioDevice.from_json(_as_json(audio.encode("audio0"), "audio0"))
    assert (decoded.device, decoded.driver) == (audio.device, audio.driver)
    disabled = CustomAudioDevice(device="x")
    params = encode_audio_devices([disabled, audio], "audio")
    assert list(params) == ["audio1"]
    assert params["audio1"] == audio.encode("audio1")["audio1"]


def test_cloud_init_files_and_ip_round_trip():
    files = CustomCloudInitFiles(meta_volume="local:m", user_volume="local:u", vendor_volume="local:v")
    ip = CustomCloudInitIPConfig(gateway_ipv4="10.0.0.1", ipv4="10.0.0.2/24", ipv6="dhcp")
    params = CustomCloudInitConfig(files=files, ip_config=[CustomCloudInitIPConfig(), ip]).encode()
    assert CustomCloudInitFiles.from_json(_as_json(params, "cicustom")) == files
    assert "ipconfig0" not in params
    assert CustomCloudInitIPConfig.from_json(_as_json(params, "ipconfig1")) == ip


def test_cloud_init_network_volume_lands_in_meta():
    files = CustomCloudInitFiles.from_json('"network=local:n"')
    assert files.meta_volume == "local:n"
    assert files.network_volume is None


def test_cloud_init_plain_fields():
    config = CustomCloudInitConfig(
        nameserver="1.1.1.1", search_domain="example.com", type="nocloud", username="admin"
    )
    params = config.encode()
    assert params["nameserver"] == "1.1.1.1"
    assert params["searchdomain"] == "example.com"
    assert params["citype"] == "nocloud"
    assert params["ciuser"] == "admin"


def test_ssh_keys_round_trip():
    keys = ["ssh-ed25519 AAAA one@example.com", "ssh-rsa BBBB+/= two@example.com"]
    params = CustomCloudInitConfig(ssh_keys=keys).encode()
    assert "+" not in params["sshkeys"]
    assert " " not in params["sshkeys"]
    assert parse_ssh_keys(json.dumps(params["sshkeys"])) == keys


def test_ssh_keys_empty_and_bad_escape():
    assert parse_ssh_keys('""') == []
    with pytest.raises(ValueError):
        parse_ssh_keys('"%zz"')


def test_cpu_round_trip():
    cpu = CustomCPUEmulation(flags=["+aes", "-pcid"], hidden=True, hv_vendor_id="proxmox", type="host")
    assert CustomCPUEmulation.from_json(_as_json(cpu.encode("cpu"), "cpu")) == cpu


def test_cpu_minimal_encoding_and_bare_type():
    assert CustomCPUEmulation(type="host").encode("cpu") == {"cpu": "cputype=host"}
    assert CustomCPUEmulation.from_json('"kvm64"').type == "kvm64"
    assert CustomCPUEmulation.from_json('"flags="').flags == []


def test_cpu_empty_string_is_an_error():
    with pytest.raises(ValueError, match="unexpected empty string"):
        CustomCPUEmulation.from_json('""')


def test_efi_disk_encoding_starts_with_file():
    disk = CustomEFIDisk(file_volume="local-lvm:vm-1-disk-1", format="raw", disk_size=4)
    value = disk.encode("efidisk0")["efidisk0"]
    parts = value.split(",")
    assert parts[0] == "file=local-lvm:vm-1-disk-1"
    assert "format=raw" in parts
    assert "size=4" in parts


def test_shared_memory_round_trip_and_error():
    memory = CustomSharedMemory(name="shm", size=32)
    assert CustomSharedMemory.from_json(_as_json(memory.encode("ivshmem"), "ivshmem")) == memory
    with pytest.raises(ValueError):
        CustomSharedMemory.from_json('"size=big"')


def test_smbios_round_trip():
    smbios = CustomSMBIOS(
        base64=False, family="f", manufacturer="m", product="p",
        serial="SERIAL-0000", sku="s", uuid="00000000-0000-0000-0000-000000000000", version="v",
    )
    assert CustomSMBIOS.from_json(_as_json(smbios.encode("smbios1"), "smbios1")) == smbios
    assert CustomSMBIOS().encode("smbios1") == {}


def test_spice_and_startup_encoding():
    spice = CustomSpiceEnhancements(folder_sharing=True, video_streaming="all")
    assert spice.encode("spice_enhancements")["spice_enhancements"].split(",") == [
        "foldersharing=1",
        "videostreaming=all",
    ]
    assert CustomSpiceEnhancements().encode("spice_enhancements") == {}
    startup = CustomStartupOrder(down=3, order=1, up=2).encode("startup")["startup"]
    assert [p.split("=")[0] for p in startup.split(",")] == ["order", "up", "down"]
    assert CustomStartupOrder().encode("startup") == {}


def test_vga_round_trip_and_empty():
    vga = CustomVGADevice(memory=16, type="qxl")
    assert CustomVGADevice.from_json(_as_json(vga.encode("vga"), "vga")) == vga
    assert CustomVGADevice.from_json('""') == CustomVGADevice()
    assert CustomVGADevice().encode("vga") == {"vga": ""}
    assert CustomVGADevice.from_json('"std"').type == "std"


def test_watchdog_round_trip():
    watchdog = CustomWatchdogDevice(action="reset", model="i6300esb")
    decoded = CustomWatchdogDevice.from_json(_as_json(watchdog.encode("watchdog"), "watchdog"))
    assert decoded == watchdog
    assert CustomWatchdogDevice.from_json('"ib700"').model == "ib700"
    assert CustomWatchdogDevice.from_json('""') == CustomWatchdogDevice()