import asyncio
import logging
import os, sys
from typing import Awaitable, Callable

import psutil
from typing_extensions import TypeAlias as _Alias

from .._models import Mountpoint, StorageDevice

if os.name == "nt":
    from .windows import parent_device, is_removable
elif sys.platform == "darwin":
    from .darwin import parent_device, is_removable
else:
    from .linux import parent_device, is_removable

log = logging.getLogger(__name__)

ListDevices: _Alias = Callable[[], Awaitable["list[StorageDevice]"]]


def list_devices_sync(all_partitions: bool = False) -> "list[StorageDevice]":
    """
    Mounted partitions grouped by the disk they live on, in the order
    psutil reports them
    """
    disks: "dict[str, tuple[list[Mountpoint], set[str]]]" = {}
    for part in psutil.disk_partitions(all=all_partitions):
        mounts, opts = disks.setdefault(parent_device(part.device), ([], set()))
        mounts.append(Mountpoint(part.mountpoint, part.fstype))
        opts.update(opt for opt in part.opts.split(",") if opt)

    devices = []
    for disk, (mounts, opts) in disks.items():
        device = StorageDevice(disk, is_removable(disk, opts), tuple(mounts))
        log.debug("Found %r removable=%s", device, device.is_removable)
        devices.append(device)
    return devices


async def list_devices() -> "list[StorageDevice]":
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, list_devices_sync)
