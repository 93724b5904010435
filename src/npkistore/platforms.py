from enum import Enum
import ntpath, posixpath
import os
import platform as _platform
from types import ModuleType

from . import constants


class Platform(Enum):
    LINUX = "Linux"
    MACOS = "Darwin"
    WINDOWS = "Windows"

    @property
    def pathmod(self) -> ModuleType:
        """
        Path flavour of the platform, so a Windows path keeps its
        backslashes even when it is computed on another host
        """
        return ntpath if self is Platform.WINDOWS else posixpath

    def join(self, *parts: str) -> str:
        return self.pathmod.join(*parts)

    @classmethod
    def from_uname(cls, name: str) -> "Platform":
        if not name:
            return cls.LINUX
        if name.startswith(("Windows", "CYGWIN_NT", "MINGW", "MSYS_NT")):
            return cls.WINDOWS
        if name == "Darwin":
            return cls.MACOS
        return cls.LINUX

    @classmethod
    def from_name(cls, name: str) -> "Platform":
        """Lookup by member name or value, case insensitive: 'macos', 'Darwin', 'windows'..."""
        for member in cls:
            if name.lower() in (member.name.lower(), member.value.lower()):
                return member
        raise ValueError(f"Unknown platform {name}")

    @classmethod
    def current(cls) -> "Platform":
        return cls.from_uname(_platform.system())


_SAVE_PATHS = {
    Platform.WINDOWS: ("AppData", "LocalLow", constants.NPKI_DIR),
    Platform.MACOS: ("Library", "Preferences", constants.NPKI_DIR),
    Platform.LINUX: (constants.NPKI_DIR,),
}


def primary_drive_save_path(
    platform: "Platform|None" = None, home: "str|os.PathLike|None" = None
) -> str:
    platform = platform or Platform.current()
    home = os.fspath(home if home is not None else constants.user_home())
    return platform.join(home, *_SAVE_PATHS[platform])


def system_root() -> str:
    for var in constants.SYSTEM_ROOT_VARS:
        value = os.environ.get(var)
        if value:
            return value
    return constants.DEFAULT_SYSTEM_ROOT


def security_token_environment_file_path(
    platform: "Platform|None" = None, home: "str|os.PathLike|None" = None
) -> str:
    platform = platform or Platform.current()
    if platform is Platform.WINDOWS:
        return platform.join(system_root(), "System32", constants.SECURITY_TOKEN_CONFIG)
    home = os.fspath(home if home is not None else constants.user_home())
    return platform.join(home, "." + constants.SECURITY_TOKEN_CONFIG)
