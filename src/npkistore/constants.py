import os
from pathlib import Path


def user_home() -> Path:
    """$USER_HOME when set, otherwise the home directory of the current user"""
    return Path(os.environ.get("USER_HOME") or Path.home())


NPKI_DIR = "NPKI"
USER_DIR = "USER"

SIGN_PUBLIC_KEY = "signCert.der"
SIGN_PRIVATE_KEY = "signPri.key"
KM_PUBLIC_KEY = "kmCert.der"
KM_PRIVATE_KEY = "kmPri.key"

SECURITY_TOKEN_CONFIG = "npki_pkcs11.cnf"

# first non empty wins
SYSTEM_ROOT_VARS = ("SYSTEMROOT", "WINDIR")
DEFAULT_SYSTEM_ROOT = "C:\\Windows"
