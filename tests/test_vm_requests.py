import pytest

from proxmoxve.vm_config import CustomAgent, CustomCloudInitConfig, CustomCloudInitIPConfig
from proxmoxve.vm_devices import CustomNetworkDevice, CustomStorageDevice
from proxmoxve.vm_requests import (
    QEMUNetworkInterface,
    VMCloneRequestBody,
    VMCreateRequestBody,
    VMGetResponseData,
    VMGetStatusResponseData,
    VMMigrateRequestBody,
    VMMoveDiskRequestBody,
    VMRebootRequestBody,
    VMResizeDiskRequestBody,
    VMShutdownRequestBody,
    parse_qemu_network_interfaces,
)


def test_clone_always_sends_new_id():
    assert dict(VMCloneRequestBody(vm_id_new=101).to_params()) == {"newid": "101"}


def test_clone_optional_fields():
    body = VMCloneRequestBody(vm_id_new=7, full_copy=True, name="web", target_storage="local")
    params = dict(body.to_params())
    assert params["full"] == "1"
    assert params["name"] == "web"
    assert params["storage"] == "local"
    assert "pool" not in params


def test_create_empty_body_has_no_params():
    assert VMCreateRequestBody().to_params() == []


def test_create_agent_uses_custom_encoding():
    params = dict(VMCreateRequestBody(agent=CustomAgent(enabled=True)).to_params())
    assert params == {"agent": "enabled=1"}


def test_create_booleans_are_integers():
    params = dict(VMCreateRequestBody(acpi=False, template=True).to_params())
    assert params["acpi"] == "0"
    assert params["template"] == "1"


def test_create_lists_are_joined():
    body = VMCreateRequestBody(delete=["ide0", "net1"], kvm_arguments=["-a", "-b"], hotplug=["disk", "usb"])
    params = dict(body.to_params())
    assert params["delete"] == ",".join(["ide0", "net1"])
    assert params["args"] == " ".join(["-a", "-b"])
    assert params["hotplug"] == ",".join(["disk", "usb"])


def test_create_float_has_no_trailing_zero():
    params = dict(VMCreateRequestBody(migrate_downtime=2.0).to_params())
    assert params["migrate_downtime"] == "2"
    params = dict(VMCreateRequestBody(migrate_downtime=0.5).to_params())
    assert params["migrate_downtime"] == "0.5"


def test_create_protection_and_overwrite_share_force():
    params = VMCreateRequestBody(deletion_protection=True, overwrite=False).to_params()
    assert sorted(value for key, value in params if key == "force") == ["0", "1"]


def test_create_storage_devices_only_enabled():
    disk = CustomStorageDevice(enabled=True, file_volume="local-lvm:vm-2041-disk-0", ssd=True)
    idle = CustomStorageDevice(enabled=False, file_volume="local-lvm:vm-2041-disk-1")
    params = dict(VMCreateRequestBody(scsi_devices={"scsi0": disk, "scsi1": idle}).to_params())
    assert params == disk.encode("scsi0")
    assert "scsi1" not in params


def test_create_network_devices_are_numbered():
    nic = CustomNetworkDevice(enabled=True, model="virtio", bridge="vmbr0")
    off = CustomNetworkDevice(enabled=False, model="e1000")
    params = dict(VMCreateRequestBody(network_devices=[nic, off]).to_params())
    assert params == nic.encode("net0")


def test_create_cloud_init_ignores_its_own_key():
    config = CustomCloudInitConfig(
        ip_config=[CustomCloudInitIPConfig(ipv4="dhcp")], username="admin"
    )
    params = dict(VMCreateRequestBody(cloud_init_config=config).to_params())
    assert "cloudinit" not in params
    assert params == config.encode()


def test_create_serial_devices():
    params = dict(VMCreateRequestBody(serial_devices=["socket", "/dev/ttyS0"]).to_params())
    assert params == {"serial0": "socket", "serial1": "/dev/ttyS0"}


def test_network_device_round_trip_through_response():
    nic = CustomNetworkDevice(enabled=True, model="virtio", bridge="vmbr0", firewall=True, tag=5, trunks=[1, 2])
    value = dict(VMCreateRequestBody(network_devices=[nic]).to_params())["net0"]
    parsed = VMGetResponseData.from_dict({"net0": value}).network_devices["net0"]
    assert parsed == nic


def test_storage_device_from_response():
    data = {"scsi0": "local-lvm:vm-2041-disk-0,discard=on,ssd=1,iothread=1,size=8G"}
    disk = VMGetResponseData.from_dict(data).scsi_devices["scsi0"]
    assert disk.file_volume == "local-lvm:vm-2041-disk-0"
    assert disk.discard == "on"
    assert disk.ssd is True
    assert disk.size == "8G"
    assert disk.enabled is True


def test_response_scalars_and_custom_values():
    data = {
        "name": "web",
        "cores": 2,
        "onboot": 1,
        "agent": "1",
        "vga": "qxl",
        "startup": {"order": 3},
        "serial0": "socket",
    }
    response = VMGetResponseData.from_dict(data)
    assert response.name == "web"
    assert response.cpu_cores == 2
    assert response.start_on_boot is True
    assert response.agent == CustomAgent(enabled=True)
    assert response.vga_device.type == "qxl"
    assert response.startup_order.order == 3
    assert response.serial_devices == {"serial0": "socket"}
    assert response.cpu_units is None


def test_response_null_stays_unset():
    response = VMGetResponseData.from_dict({"name": None, "ide0": None})
    assert response.name is None
    assert response.ide_devices == {}


def test_response_rejects_string_efi_disk():
    with pytest.raises(ValueError):
        VMGetResponseData.from_dict({"efidisk0": "local:1"})


def test_response_rejects_bad_integer():
    with pytest.raises(ValueError):
        VMGetResponseData.from_dict({"cores": "two"})


def test_response_cpu_requires_value():
    with pytest.raises(ValueError):
        VMGetResponseData.from_dict({"cpu": ""})


def test_migrate_params():
    params = dict(VMMigrateRequestBody(target_node="pve2", with_local_disks=True).to_params())
    assert params == {"target": "pve2", "with-local-disks": "1"}


def test_move_disk_params():
    body = VMMoveDiskRequestBody(disk="scsi0", target_storage="local", delete_original_disk=True)
    params = dict(body.to_params())
    assert params["disk"] == "scsi0"
    assert params["storage"] == "local"
    assert params["delete"] == "1"


def test_reboot_params():
    assert VMRebootRequestBody().to_params() == []
    assert dict(VMRebootRequestBody(timeout=30).to_params()) == {"timeout": "30"}


def test_resize_disk_params():
    params = dict(VMResizeDiskRequestBody(disk="virtio0", size="20G").to_params())
    assert params == {"disk": "virtio0", "size": "20G"}


def test_shutdown_params():
    params = dict(VMShutdownRequestBody(force_stop=True, keep_active=False, timeout=60).to_params())
    assert params == {"forceStop": "1", "keepActive": "0", "timeout": "60"}


def test_status_from_dict():
    status = VMGetStatusResponseData.from_dict(
        {"status": "running", "cpus": 2, "vmid": 100, "agent": 1, "maxmem": 1024}
    )
    assert status.status == "running"
    assert status.cpu_count == 2.0
    assert status.vm_id == 100
    assert status.agent_enabled is True
    assert status.memory_allocation == 1024
    assert status.pid is None


def test_status_defaults_to_empty():
    assert VMGetStatusResponseData.from_dict({}).status == ""


def test_qemu_network_interfaces():
    body = {
        "data": {
            "result": [
                {
                    "name": "eth0",
                    "hardware-address": "00:00:00:00:00:01",
                    "ip-addresses": [
                        {"ip-address": "192.0.2.10", "prefix": 24, "ip-address-type": "ipv4"}
                    ],
                    "statistics": {"rx-bytes": 10, "tx-packets": 3},
                },
                {"name": "lo"},
            ]
        }
    }
    interfaces = parse_qemu_network_interfaces(body)
    assert [item.name for item in interfaces] == ["eth0", "lo"]
    first = interfaces[0]
    assert first.mac_address == "00:00:00:00:00:01"
    assert first.ip_addresses[0].address == "192.0.2.10"
    assert first.ip_addresses[0].prefix == 24
    assert first.statistics.rx_bytes == 10
    assert first.statistics.tx_packets == 3
    assert interfaces[1].statistics is None
    assert interfaces[1].ip_addresses is None


def test_qemu_network_interfaces_missing_data():
    assert parse_qemu_network_interfaces({}) == []
    assert parse_qemu_network_interfaces({"data": {}}) == []


def test_qemu_interface_rejects_non_string_name():
    with pytest.raises(ValueError):
        QEMUNetworkInterface.from_dict({"name": 5})