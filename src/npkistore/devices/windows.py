import logging
import re
import subprocess

log = logging.getLogger(__name__)

_DRIVE_RE = re.compile(r"^([A-Za-z]):")


def parent_device(device: str) -> str:
    # psutil reports one entry per drive letter
    return device


def bus_type(device: str) -> str:
    """BusType of the disk holding the drive letter, 'USB', 'SATA', 'NVMe'..."""
    match = _DRIVE_RE.match(device)
    if not match:
        return ""
    result = subprocess.run(
        [
            "powershell",
            "-NoProfile",
            "-Command",
            f"(Get-Partition -DriveLetter {match.group(1)} | Get-Disk).BusType",
        ],
        capture_output=True,
        text=True,
        check=True,
        timeout=30,
    )
    return result.stdout.strip()


def is_removable(device: str, opts: "set[str]" = frozenset()) -> bool:
    if "removable" in opts:
        return True
    # USB hard disks and SSDs are reported as fixed drives
    if "fixed" not in opts:
        return False
    try:
        return bus_type(device).upper() == "USB"
    except (OSError, subprocess.SubprocessError) as e:
        log.warning("Unable to query the bus type of %s: %s", device, e)
        return False
