import logging
import os.path
import stat

import aiofiles.os

from . import constants
from ._models import DriveCertificate, SavePaths, StorageDevice
from .devices import ListDevices, list_devices as _list_devices
from .platforms import Platform, primary_drive_save_path

log = logging.getLogger(__name__)


async def external_drive_save_paths(
    list_devices: "ListDevices|None" = None,
) -> "list[SavePaths]":
    list_devices = list_devices or _list_devices
    result: "list[SavePaths]" = []
    for device in await list_devices():
        if not device.is_removable:
            continue
        result.append(
            SavePaths(
                device,
                [os.path.join(mp.path, constants.NPKI_DIR) for mp in device.mountpoints],
            )
        )
    return result


async def drive_save_paths(
    list_devices: "ListDevices|None" = None,
    platform: "Platform|None" = None,
    home: "str|os.PathLike|None" = None,
) -> "list[SavePaths]":
    return [
        SavePaths(None, [primary_drive_save_path(platform, home)]),
        *await external_drive_save_paths(list_devices),
    ]


def _list_subdirectories(path: str) -> "list[str]":
    with os.scandir(path) as entries:
        return [entry.name for entry in entries if entry.is_dir()]


# the whole listing, entries and is_dir() included, runs in the executor
_subdirectories = aiofiles.os.wrap(_list_subdirectories)


async def walk_save_path(
    save_path: str,
    device: "StorageDevice|None" = None,
    platform: "Platform|None" = None,
) -> "list[DriveCertificate]":
    """
    Certificates stored as <save_path>/<issuer>/USER/<subject>/.

    A missing or non directory save path gives no certificates, but an
    issuer without a readable USER directory raises the OSError from listing it.
    Paths below save_path are joined with the path flavour of platform,
    the host's when not given.
    """
    try:
        info = await aiofiles.os.stat(save_path)
    except OSError as e:
        log.debug("Skipping save path %s: %s", save_path, e)
        return []
    if not stat.S_ISDIR(info.st_mode):
        log.debug("Skipping save path %s: not a directory", save_path)
        return []

    join = platform.join if platform else os.path.join
    certificates: "list[DriveCertificate]" = []
    for issuer_id in await _subdirectories(save_path):
        user_root = join(save_path, issuer_id, constants.USER_DIR)
        for distinguished_name in await _subdirectories(user_root):
            certificates.append(
                DriveCertificate.at(
                    save_path, issuer_id, distinguished_name, device, platform
                )
            )
    return certificates


async def drive_certificates(
    list_devices: "ListDevices|None" = None,
    platform: "Platform|None" = None,
    home: "str|os.PathLike|None" = None,
) -> "list[DriveCertificate]":
    platform = platform or Platform.current()
    certificates: "list[DriveCertificate]" = []
    for save_paths in await drive_save_paths(list_devices, platform, home):
        for save_path in save_paths.paths:
            # mount points are host paths, the primary path follows platform
            found = await walk_save_path(
                save_path,
                save_paths.device,
                None if save_paths.device else platform,
            )
            log.debug("Found %d certificates under %s", len(found), save_path)
            certificates.extend(found)
    return certificates
