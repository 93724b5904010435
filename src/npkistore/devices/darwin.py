import logging
import plistlib
import re
import subprocess

log = logging.getLogger(__name__)

_DISK_RE = re.compile(r"^(/dev/disk\d+)(s\d+)*$")


def parent_device(device: str) -> str:
    match = _DISK_RE.match(device)
    return match.group(1) if match else device


def disk_info(device: str) -> dict:
    result = subprocess.run(
        ["diskutil", "info", "-plist", device],
        capture_output=True,
        check=True,
        timeout=10,
    )
    return plistlib.loads(result.stdout)


def is_removable(device: str, opts: "set[str]" = frozenset()) -> bool:
    if not device.startswith("/dev/disk"):
        return False
    try:
        info = disk_info(device)
    except (OSError, subprocess.SubprocessError, plistlib.InvalidFileException) as e:
        log.warning("Unable to query %s with diskutil: %s", device, e)
        return False
    return bool(
        info.get("RemovableMedia")
        or info.get("Removable")
        or info.get("Ejectable")
        or info.get("BusProtocol") == "USB"
    )
