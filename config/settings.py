"""Project configuration settings.

Constants shared by the crypto, storage and CLI layers. Paths and logging
can be overridden through the environment.
"""

from pathlib import Path
import os

# Security / crypto
DEFAULT_ITERATIONS = 100_000
SALT_LENGTH = 16
KEY_LENGTH = 32  # AES-256
IV_LENGTH = 12   # GCM nonce
AUTH_TAG_LENGTH = 16  # GCM tag length

# Vault
VAULT_FILE_NAME = "password-vault.dat"
DEFAULT_VAULT_PATH = Path(os.environ.get("VAULT_PATH", Path.home() / VAULT_FILE_NAME))
DEFAULT_VAULT_NAME = "My Password Vault"

# Entries
DEFAULT_CATEGORY = "General"
UNTITLED_ENTRY = "Untitled Entry"
DATE_FORMAT = "%d-%m-%Y %H:%M:%S"

# Password generator
DEFAULT_GENERATED_LENGTH = 20
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"

# Backup extensions
BACKUP_SUFFIX = ".backup"

# Logging
LOG_LEVEL = os.environ.get("VAULT_LOG_LEVEL", "INFO").upper()
LOG_FILE = os.environ.get("VAULT_LOG_FILE", str(Path.home() / ".pwvault.log"))

__all__ = [
	'DEFAULT_ITERATIONS','SALT_LENGTH','KEY_LENGTH','IV_LENGTH','AUTH_TAG_LENGTH',
	'VAULT_FILE_NAME','DEFAULT_VAULT_PATH','DEFAULT_VAULT_NAME',
	'DEFAULT_CATEGORY','UNTITLED_ENTRY','DATE_FORMAT',
	'DEFAULT_GENERATED_LENGTH','SYMBOLS','BACKUP_SUFFIX','LOG_LEVEL','LOG_FILE'
]
