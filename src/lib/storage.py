"""Vault persistence: the only layer that touches the filesystem.

save: vault -> JSON -> AES-GCM under PBKDF2(password, vault salt) -> container text -> atomic write
load: file text -> container decode -> PBKDF2(password, container salt) -> AES-GCM open -> Vault

The caller hands over a bytearray password for the duration of each call;
it is zeroed before the call returns, whatever the outcome.
"""
from __future__ import annotations
import json, os, shutil, logging
from datetime import datetime
from pathlib import Path
from typing import Optional
from config.settings import DEFAULT_VAULT_PATH, BACKUP_SUFFIX
from . import container
from .crypto import VaultCrypto, clear_password
from .errors import InvalidArgument, IoFailure, VaultError, VaultLoadError
from .models import Vault

log = logging.getLogger(__name__)

class VaultStorage:
	def __init__(self, path: Path | str | None = None):
		# Resolve path dynamically to honor environment overrides in tests
		if path is not None:
			self._path = Path(path)
		else:
			env_path = os.environ.get('VAULT_PATH')
			self._path = Path(env_path) if env_path else DEFAULT_VAULT_PATH
		self.crypto = VaultCrypto()

	@property
	def path(self) -> Path:
		return self._path

	def exists(self) -> bool:
		return self._path.exists()

	def save(self, vault: Vault, password: bytearray) -> None:
		"""Encrypt ``vault`` under ``password`` and replace the vault file."""
		try:
			if vault is None:
				raise InvalidArgument('Vault and password cannot be None')
			_check_password(password)
			salt = vault.salt
			key = self.crypto.derive_key(password, salt)
			payload = json.dumps(vault.to_dict()).encode('utf-8')
			self._write(container.encode(salt, self.crypto.encrypt(payload, key)))
			log.info(f"Vault saved -> {self._path}")
		finally:
			clear_password(password)

	def load(self, password: bytearray) -> Optional[Vault]:
		"""Return the stored vault, or None when no vault file exists yet.

		Any failure past reading the file raises VaultLoadError without saying
		which stage failed.
		"""
		try:
			_check_password(password)
			if not self.exists():
				return None
			try:
				text = self._path.read_text(encoding='utf-8')
			except UnicodeDecodeError as e:
				raise VaultLoadError('Failed to load vault: wrong password or corrupted vault file') from e
			except OSError as e:
				raise IoFailure(f'Could not read vault file {self._path}') from e
			try:
				salt, sealed = container.decode(text)
				key = self.crypto.derive_key(password, salt)
				raw = json.loads(self.crypto.decrypt(sealed, key).decode('utf-8'))
				vault = Vault.from_dict(raw, salt)
			except (VaultError, ValueError, KeyError, TypeError, AttributeError) as e:
				log.warning(f"Vault load failed: {self._path}")
				raise VaultLoadError('Failed to load vault: wrong password or corrupted vault file') from e
			# the container salt is authoritative over anything in the payload
			vault.set_salt(salt)
			log.info(f"Vault loaded <- {self._path} ({vault.entry_count()} entries)")
			return vault
		finally:
			clear_password(password)

	def delete(self) -> None:
		try:
			self._path.unlink(missing_ok=True)
			self._tmp_path().unlink(missing_ok=True)
		except OSError as e:
			raise IoFailure(f'Could not delete vault file {self._path}') from e
		log.info(f"Vault deleted: {self._path}")

	def backup(self, dest: Path | str | None = None) -> Path:
		"""Copy the encrypted vault file as-is; returns the backup path."""
		if not self.exists():
			raise IoFailure('No vault to backup')
		if dest is None:
			stamp = datetime.now().strftime('%Y%m%d_%H%M%S')
			dest = self._path.with_name(f"{self._path.stem}.{stamp}{BACKUP_SUFFIX}")
		dest = Path(dest)
		try:
			dest.parent.mkdir(parents=True, exist_ok=True)
			shutil.copy2(self._path, dest)
		except OSError as e:
			raise IoFailure(f'Failed to backup vault to {dest}') from e
		log.info(f"Vault backed up to: {dest}")
		return dest

	def _tmp_path(self) -> Path:
		return self._path.with_name(self._path.name + '.tmp')

	def _write(self, text: str) -> None:
		tmp = self._tmp_path()
		try:
			self._path.parent.mkdir(parents=True, exist_ok=True)
			with open(tmp, 'w', encoding='utf-8') as f:
				f.write(text)
				f.flush()
				os.fsync(f.fileno())
			os.chmod(tmp, 0o600)
			os.replace(tmp, self._path)
		except OSError as e:
			try:
				tmp.unlink(missing_ok=True)
			except OSError:
				log.warning(f"Could not remove temp file {tmp}")
			raise IoFailure(f'Could not write vault file {self._path}') from e


def _check_password(password: bytearray) -> None:
	if not isinstance(password, bytearray):
		raise InvalidArgument('Password must be a bytearray buffer')
	if not password:
		raise InvalidArgument('Password cannot be empty')
