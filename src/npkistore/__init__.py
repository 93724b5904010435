from ._models import (
    Mountpoint,
    StorageDevice,
    SavePaths,
    PathCandidate,
    DriveCertificate,
)
from .platforms import (
    Platform,
    primary_drive_save_path,
    security_token_environment_file_path,
)
from .devices import list_devices, list_devices_sync
from .discovery import (
    external_drive_save_paths,
    drive_save_paths,
    walk_save_path,
    drive_certificates,
)
