"""Cryptographic utilities: key derivation, AES-GCM sealing, secret buffers
and password helpers."""
from __future__ import annotations
import base64, binascii, secrets, string
from typing import Union
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.backends import default_backend
from config.settings import (
	DEFAULT_ITERATIONS, SALT_LENGTH, KEY_LENGTH, IV_LENGTH, AUTH_TAG_LENGTH,
	DEFAULT_GENERATED_LENGTH, SYMBOLS
)
from .errors import InvalidArgument, CryptoFailure, KeyDerivationError

Secret = Union[bytearray, bytes, str]

class VaultCrypto:
	def __init__(self):
		self._backend = default_backend()

	def generate_salt(self) -> bytes:
		return generate_salt()

	def derive_key(self, password: Secret, salt: bytes) -> bytes:
		"""PBKDF2-HMAC-SHA256 over the password; same inputs, same key.

		A bytearray password is fed to the KDF as-is so no immutable copy of
		it is made here.
		"""
		if not password:
			raise InvalidArgument("Password empty")
		if salt is None or len(salt) != SALT_LENGTH:
			raise InvalidArgument(f"Salt must be {SALT_LENGTH} bytes")
		raw = password.encode('utf-8') if isinstance(password, str) else password
		try:
			kdf = PBKDF2HMAC(algorithm=hashes.SHA256(), length=KEY_LENGTH, salt=bytes(salt), iterations=DEFAULT_ITERATIONS, backend=self._backend)
		except UnsupportedAlgorithm as e:
			raise KeyDerivationError("PBKDF2-HMAC-SHA256 unavailable") from e
		return kdf.derive(raw)

	def encrypt(self, data: bytes, key: bytes) -> bytes:
		if data is None: raise InvalidArgument("Nothing to encrypt")
		self._check_key(key)
		iv = secrets.token_bytes(IV_LENGTH)
		try:
			cipher = Cipher(algorithms.AES(bytes(key)), modes.GCM(iv), backend=self._backend)
			enc = cipher.encryptor()
			ct = enc.update(bytes(data)) + enc.finalize()
		except Exception as e:
			raise CryptoFailure("Encryption failed") from e
		return iv + ct + enc.tag

	def decrypt(self, blob: bytes, key: bytes) -> bytes:
		if blob is None or len(blob) < IV_LENGTH:
			raise InvalidArgument("Encrypted data is too short to contain IV")
		self._check_key(key)
		iv = blob[:IV_LENGTH]; tag = blob[IV_LENGTH:][-AUTH_TAG_LENGTH:]; ct = blob[IV_LENGTH:-AUTH_TAG_LENGTH]
		try:
			cipher = Cipher(algorithms.AES(bytes(key)), modes.GCM(bytes(iv), bytes(tag)), backend=self._backend)
			dec = cipher.decryptor()
			return dec.update(bytes(ct)) + dec.finalize()
		except Exception:
			# one failure for bad tag, bad key and truncated input alike
			raise CryptoFailure("Decryption failed") from None

	def encrypt_text(self, text: str, key: bytes) -> str:
		return base64.b64encode(self.encrypt(text.encode('utf-8'), key)).decode('ascii')

	def decrypt_text(self, token: str, key: bytes) -> str:
		try:
			blob = base64.b64decode(token, validate=True)
		except (binascii.Error, ValueError, TypeError) as e:
			raise InvalidArgument("Token is not valid base64") from e
		return self.decrypt(blob, key).decode('utf-8')

	@staticmethod
	def _check_key(key: bytes) -> None:
		if key is None or len(key) != KEY_LENGTH:
			raise InvalidArgument(f"Key must be {KEY_LENGTH} bytes")

def generate_salt() -> bytes:
	return secrets.token_bytes(SALT_LENGTH)

def to_buffer(value: Secret | None) -> bytearray:
	"""Copy a password or secret into a fresh, erasable buffer."""
	if value is None:
		return bytearray()
	if isinstance(value, str):
		return bytearray(value.encode('utf-8'))
	return bytearray(value)

def clear_password(buf: bytearray | None) -> None:
	"""Overwrite ``buf`` with zeros in place. Immutable values and None are left alone."""
	if not isinstance(buf, bytearray):
		return
	buf[:] = bytes(len(buf))

def generate_password(length: int = DEFAULT_GENERATED_LENGTH, symbols: bool = True) -> str:
	pools = [string.ascii_lowercase, string.ascii_uppercase, string.digits]
	if symbols:
		pools.append(SYMBOLS)
	if length < 4:
		raise InvalidArgument('Password length too short')
	alphabet = ''.join(pools)
	chars = [secrets.choice(p) for p in pools]
	chars += [secrets.choice(alphabet) for _ in range(length - len(chars))]
	secrets.SystemRandom().shuffle(chars)
	return ''.join(chars)
