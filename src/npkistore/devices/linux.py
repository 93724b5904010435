import os

SYS_BLOCK = "/sys/block"
SYS_CLASS_BLOCK = "/sys/class/block"


def parent_device(device: str) -> str:
    if not device.startswith("/dev/"):
        return device
    # /dev/disk/by-*/ and /dev/mapper/ entries are symlinks
    name = os.path.basename(os.path.realpath(device))
    sysfs = os.path.join(SYS_CLASS_BLOCK, name)
    if os.path.exists(os.path.join(sysfs, "partition")):
        name = os.path.basename(os.path.dirname(os.path.realpath(sysfs)))
    return "/dev/" + name


def is_removable(device: str, opts: "set[str]" = frozenset()) -> bool:
    if not device.startswith("/dev/"):
        return False
    disk = os.path.join(SYS_BLOCK, os.path.basename(device))
    try:
        with open(os.path.join(disk, "removable")) as fh:
            if fh.read().strip() == "1":
                return True
    except OSError:
        return False
    return "/usb" in os.path.realpath(disk)
