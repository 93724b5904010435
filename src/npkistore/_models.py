from typing import TYPE_CHECKING, Callable, NamedTuple, Optional, Tuple
import os.path

from . import constants

if TYPE_CHECKING:
    from .platforms import Platform


class Mountpoint(NamedTuple):
    path: str
    fstype: str = ""


class StorageDevice(NamedTuple):
    device: str
    # attached over USB or reported as removable media
    is_removable: bool
    mountpoints: Tuple[Mountpoint, ...] = ()

    def __repr__(self) -> str:
        mounts = ", ".join(mp.path for mp in self.mountpoints)
        return f"{self.__class__.__name__}({self.device} [{mounts}])"


class SavePaths(NamedTuple):
    device: Optional[StorageDevice]
    paths: "list[str]"


class PathCandidate(str):
    """
    Path of a file that is expected by naming convention but has not been
    checked on disk
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({str.__repr__(self)})"


def subject_dir(
    save_path: str,
    issuer_id: str,
    distinguished_name: str,
    join: Callable[..., str] = os.path.join,
) -> str:
    return join(save_path, issuer_id, constants.USER_DIR, distinguished_name)


class DriveCertificate(NamedTuple):
    device: Optional[StorageDevice]
    save_path: str
    issuer_id: str
    distinguished_name: str
    sign_public_key_path: Optional[PathCandidate] = None
    sign_private_key_path: Optional[PathCandidate] = None
    key_distribution_public_key_path: Optional[PathCandidate] = None
    key_distribution_private_key_path: Optional[PathCandidate] = None

    @property
    def path(self) -> str:
        if self.sign_public_key_path:
            # keeps the separator the key paths were built with
            return self.sign_public_key_path[: -len(constants.SIGN_PUBLIC_KEY) - 1]
        return subject_dir(self.save_path, self.issuer_id, self.distinguished_name)

    @classmethod
    def at(
        cls,
        save_path: str,
        issuer_id: str,
        distinguished_name: str,
        device: Optional[StorageDevice] = None,
        platform: "Platform|None" = None,
    ) -> "DriveCertificate":
        join = platform.join if platform else os.path.join
        path = subject_dir(save_path, issuer_id, distinguished_name, join)
        return cls(
            device,
            save_path,
            issuer_id,
            distinguished_name,
            PathCandidate(join(path, constants.SIGN_PUBLIC_KEY)),
            PathCandidate(join(path, constants.SIGN_PRIVATE_KEY)),
            PathCandidate(join(path, constants.KM_PUBLIC_KEY)),
            PathCandidate(join(path, constants.KM_PRIVATE_KEY)),
        )

    def as_dict(self) -> dict:
        return {
            "device": self.device.device if self.device else None,
            "save_path": self.save_path,
            "issuer_id": self.issuer_id,
            "distinguished_name": self.distinguished_name,
            "sign_public_key_path": self.sign_public_key_path,
            "sign_private_key_path": self.sign_private_key_path,
            "key_distribution_public_key_path": self.key_distribution_public_key_path,
            "key_distribution_private_key_path": self.key_distribution_private_key_path,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.issuer_id}/{self.distinguished_name})"
