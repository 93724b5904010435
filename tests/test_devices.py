import sys, pathlib
import asyncio
import subprocess
from collections import namedtuple

import pytest

sys.path.insert(0, str(pathlib.Path(__file__).parent.parent.joinpath("src").resolve()))
from npkistore import devices, StorageDevice, Mountpoint
from npkistore.devices import linux, windows, darwin

Partition = namedtuple("Partition", "device mountpoint fstype opts")


@pytest.fixture
def sysfs(tmp_path, monkeypatch):
    """
    sda: internal disk with sda1, sda2
    sdb: usb disk reporting removable=0 with sdb1
    sdc: card reader reporting removable=1
    """
    devices_dir = tmp_path / "devices"
    class_block = tmp_path / "class" / "block"
    sys_block = tmp_path / "block"
    class_block.mkdir(parents=True)
    sys_block.mkdir(parents=True)

    layout = {
        "sda": ("pci0000:00/ata1/host0/block/sda", "0", ["sda1", "sda2"]),
        "sdb": ("pci0000:00/usb2/2-1/host6/block/sdb", "0", ["sdb1"]),
        "sdc": ("pci0000:00/mmc0/block/sdc", "1", []),
    }
    for disk, (path, removable, parts) in layout.items():
        disk_dir = devices_dir / path
        disk_dir.mkdir(parents=True)
        (disk_dir / "removable").write_text(removable + "\n")
        (sys_block / disk).symlink_to(disk_dir)
        (class_block / disk).symlink_to(disk_dir)
        for part in parts:
            (disk_dir / part).mkdir()
            (disk_dir / part / "partition").write_text("1\n")
            (class_block / part).symlink_to(disk_dir / part)

    monkeypatch.setattr(linux, "SYS_BLOCK", str(sys_block))
    monkeypatch.setattr(linux, "SYS_CLASS_BLOCK", str(class_block))
    return tmp_path


def test_linux_parent_device(sysfs):
    assert linux.parent_device("/dev/sda1") == "/dev/sda"
    assert linux.parent_device("/dev/sda2") == "/dev/sda"
    assert linux.parent_device("/dev/sdc") == "/dev/sdc"
    assert linux.parent_device("tmpfs") == "tmpfs"


def test_linux_is_removable(sysfs):
    assert not linux.is_removable("/dev/sda")
    assert linux.is_removable("/dev/sdb")
    assert linux.is_removable("/dev/sdc")
    assert not linux.is_removable("/dev/nvme0n1")
    assert not linux.is_removable("overlay")


def test_windows_probe(monkeypatch):
    buses = {"C:\\": "NVMe", "E:\\": "SATA", "F:\\": "USB"}
    monkeypatch.setattr(windows, "bus_type", buses.__getitem__)
    assert windows.parent_device("E:\\") == "E:\\"
    assert windows.is_removable("E:\\", {"rw", "removable"})
    assert not windows.is_removable("C:\\", {"rw", "fixed"})
    assert not windows.is_removable("E:\\", {"rw", "fixed"})


def test_windows_fixed_usb_disk(monkeypatch):
    monkeypatch.setattr(windows, "bus_type", lambda device: "USB")
    assert windows.is_removable("F:\\", {"rw", "fixed"})
    assert not windows.is_removable("Z:\\", {"cdrom"})


def test_windows_bus_type_failure(monkeypatch, caplog):
    def fail(device):
        raise subprocess.TimeoutExpired(["powershell"], 30)

    monkeypatch.setattr(windows, "bus_type", fail)
    assert not windows.is_removable("F:\\", {"rw", "fixed"})
    assert "F:" in caplog.text


def test_windows_bus_type_command(monkeypatch):
    calls = []

    def run(args, **kwargs):
        calls.append(args)
        return subprocess.CompletedProcess(args, 0, stdout="USB\r\n")

    monkeypatch.setattr(windows.subprocess, "run", run)
    assert windows.bus_type("F:\\") == "USB"
    assert "Get-Partition -DriveLetter F" in calls[0][-1]
    assert windows.bus_type("\\\\server\\share") == ""
    assert len(calls) == 1


def test_darwin_parent_device():
    assert darwin.parent_device("/dev/disk4s1") == "/dev/disk4"
    assert darwin.parent_device("/dev/disk3s1s1") == "/dev/disk3"
    assert darwin.parent_device("/dev/disk2") == "/dev/disk2"
    assert darwin.parent_device("map auto_home") == "map auto_home"


def test_darwin_is_removable(monkeypatch):
    infos = {
        "/dev/disk0": {"Internal": True, "BusProtocol": "PCI-Express"},
        "/dev/disk4": {"BusProtocol": "USB", "RemovableMedia": False},
        "/dev/disk5": {"Ejectable": True},
    }
    monkeypatch.setattr(darwin, "disk_info", infos.__getitem__)
    assert not darwin.is_removable("/dev/disk0")
    assert darwin.is_removable("/dev/disk4")
    assert darwin.is_removable("/dev/disk5")
    assert not darwin.is_removable("devfs")


def test_darwin_diskutil_failure(monkeypatch, caplog):
    def fail(device):
        raise subprocess.CalledProcessError(1, ["diskutil", "info", "-plist", device])

    monkeypatch.setattr(darwin, "disk_info", fail)
    assert not darwin.is_removable("/dev/disk9")
    assert "/dev/disk9" in caplog.text


@pytest.fixture
def partitions(monkeypatch):
    parts = [
        Partition("/dev/sda2", "/", "ext4", "rw,relatime"),
        Partition("/dev/sdb1", "/media/usb", "vfat", "rw,nosuid"),
        Partition("/dev/sda1", "/boot/efi", "vfat", "rw"),
        Partition("/dev/sdb2", "/media/usb2", "exfat", "rw"),
    ]
    monkeypatch.setattr(devices.psutil, "disk_partitions", lambda all=False: parts)
    monkeypatch.setattr(devices, "parent_device", lambda device: device[:-1])
    monkeypatch.setattr(devices, "is_removable", lambda device, opts: device == "/dev/sdb")
    return parts


def test_list_devices_groups_partitions(partitions):
    found = devices.list_devices_sync()
    assert found == [
        StorageDevice(
            "/dev/sda",
            False,
            (Mountpoint("/", "ext4"), Mountpoint("/boot/efi", "vfat")),
        ),
        StorageDevice(
            "/dev/sdb",
            True,
            (Mountpoint("/media/usb", "vfat"), Mountpoint("/media/usb2", "exfat")),
        ),
    ]


def test_list_devices_async(partitions):
    assert asyncio.run(devices.list_devices()) == devices.list_devices_sync()


def test_list_devices_error_propagates(monkeypatch):
    def fail(all=False):
        raise PermissionError("no access")

    monkeypatch.setattr(devices.psutil, "disk_partitions", fail)
    with pytest.raises(PermissionError):
        asyncio.run(devices.list_devices())


def test_list_devices_all_partitions(monkeypatch):
    requested = []

    def disk_partitions(all=False):
        requested.append(all)
        return [Partition("tmpfs", "/run", "tmpfs", "rw")] if all else []

    monkeypatch.setattr(devices.psutil, "disk_partitions", disk_partitions)
    monkeypatch.setattr(devices, "parent_device", lambda device: device)
    monkeypatch.setattr(devices, "is_removable", lambda device, opts: False)
    assert devices.list_devices_sync() == []
    assert [d.device for d in devices.list_devices_sync(all_partitions=True)] == ["tmpfs"]
    assert requested == [False, True]
