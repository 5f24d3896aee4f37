"""Error taxonomy shared by the vault engine.

Nothing here is recovered internally: every failure reaches the caller with a
readable message and, where there is one, the underlying cause chained.
Messages never carry secret material.
"""
from __future__ import annotations

class VaultError(Exception):
	"""Base class for every engine failure."""

class InvalidArgument(VaultError, ValueError):
	"""A required input is missing, empty or the wrong shape."""

class MalformedContainer(VaultError):
	"""On-disk text does not match the two-field container format."""

class CryptoError(VaultError):
	pass

class CryptoFailure(CryptoError):
	"""Authentication failed: wrong key, wrong password or tampered data."""

class KeyDerivationError(CryptoError):
	"""The key derivation primitive is unavailable in this environment."""

class IoFailure(VaultError):
	"""Reading, writing or removing the vault file failed."""

class VaultLoadError(VaultError):
	"""The vault file exists but could not be opened."""
