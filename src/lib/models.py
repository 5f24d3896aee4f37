"""In-memory vault model: password entries plus the collection that owns them.

Accessors hand out fresh lists and copied salt, so the only way to change a
vault is through its named operations or an entry's setters.
"""
from __future__ import annotations
import base64, uuid
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional
from config.settings import DEFAULT_CATEGORY, DEFAULT_VAULT_NAME, UNTITLED_ENTRY, DATE_FORMAT, SALT_LENGTH
from .crypto import Secret, clear_password, generate_salt
from .errors import InvalidArgument

class PasswordEntry:
	def __init__(self, title: Optional[str] = None, username: Optional[str] = None, secret: Secret | None = None,
			url: Optional[str] = None, notes: Optional[str] = None, category: Optional[str] = None):
		now = datetime.now()
		self._id = str(uuid.uuid4())
		self._created_at = now
		self._updated_at = now
		self._title = title
		self._username = username
		self._secret = _as_buffer(secret)
		self._url = url
		self._notes = notes
		self._category = category or DEFAULT_CATEGORY

	@property
	def id(self) -> str:
		return self._id

	@property
	def created_at(self) -> datetime:
		return self._created_at

	@property
	def updated_at(self) -> datetime:
		return self._updated_at

	@property
	def title(self) -> Optional[str]:
		return self._title

	@title.setter
	def title(self, value: Optional[str]):
		self._title = value; self._edit()

	@property
	def username(self) -> Optional[str]:
		return self._username

	@username.setter
	def username(self, value: Optional[str]):
		self._username = value; self._edit()

	@property
	def secret(self) -> bytearray:
		"""The stored credential buffer itself, not a copy."""
		return self._secret

	@secret.setter
	def secret(self, value: Secret | None):
		"""A bytearray is taken over as-is; the old buffer is wiped."""
		new = _as_buffer(value)
		if new is not self._secret:
			clear_password(self._secret)
		self._secret = new; self._edit()

	@property
	def url(self) -> Optional[str]:
		return self._url

	@url.setter
	def url(self, value: Optional[str]):
		self._url = value; self._edit()

	@property
	def notes(self) -> Optional[str]:
		return self._notes

	@notes.setter
	def notes(self, value: Optional[str]):
		self._notes = value; self._edit()

	@property
	def category(self) -> str:
		return self._category

	@category.setter
	def category(self, value: Optional[str]):
		self._category = value or DEFAULT_CATEGORY; self._edit()

	@property
	def display_name(self) -> str:
		if self._title and self._title.strip():
			return self._title
		return UNTITLED_ENTRY

	@property
	def created_at_formatted(self) -> str:
		return self._created_at.strftime(DATE_FORMAT)

	@property
	def updated_at_formatted(self) -> str:
		return self._updated_at.strftime(DATE_FORMAT)

	def clear_secret(self) -> None:
		clear_password(self._secret)

	def matches_search(self, text: Optional[str]) -> bool:
		"""Case-insensitive substring match on title, username, url and notes."""
		if text is None or not text.strip():
			return True
		needle = text.lower()
		return any(f is not None and needle in f.lower() for f in (self._title, self._username, self._url, self._notes))

	def _edit(self):
		self._updated_at = datetime.now()

	def to_dict(self) -> Dict[str, Any]:
		return {
			'id': self._id,
			'title': self._title,
			'username': self._username,
			'secretBase64': base64.b64encode(bytes(self._secret)).decode('ascii'),
			'url': self._url,
			'notes': self._notes,
			'category': self._category,
			'createdAt': self._created_at.isoformat(),
			'updatedAt': self._updated_at.isoformat(),
		}

	@classmethod
	def from_dict(cls, raw: Dict[str, Any]) -> 'PasswordEntry':
		e = cls(raw.get('title'), raw.get('username'), bytearray(base64.b64decode(raw.get('secretBase64') or '', validate=True)),
			raw.get('url'), raw.get('notes'), raw.get('category'))
		e._id = raw['id']
		e._created_at = datetime.fromisoformat(raw['createdAt'])
		e._updated_at = datetime.fromisoformat(raw['updatedAt'])
		return e

	def __str__(self) -> str:
		return f"{self.display_name} ({self._username if self._username is not None else 'no username'})"

	def __repr__(self) -> str:
		return f"PasswordEntry(id={self._id!r}, title={self._title!r}, category={self._category!r})"


def _as_buffer(value: Secret | None) -> bytearray:
	if isinstance(value, bytearray):
		return value
	if value is None:
		return bytearray()
	if isinstance(value, str):
		return bytearray(value.encode('utf-8'))
	return bytearray(value)


class Vault:
	"""The whole credential collection plus its salt and identity."""

	def __init__(self, id: Optional[str] = None, name: str = DEFAULT_VAULT_NAME,
			entries: Iterable[PasswordEntry] = (), salt: Optional[bytes] = None):
		self._id = id or str(uuid.uuid4())
		self.name = name
		self._entries: List[PasswordEntry] = list(entries)
		self._salt = bytearray()
		self.set_salt(salt if salt is not None else generate_salt())

	@property
	def id(self) -> str:
		return self._id

	@property
	def salt(self) -> bytes:
		return bytes(self._salt)

	def set_salt(self, salt: bytes) -> None:
		if salt is None or len(salt) != SALT_LENGTH:
			raise InvalidArgument(f'Salt must be {SALT_LENGTH} bytes')
		self._salt = bytearray(salt)

	def add_entry(self, entry: PasswordEntry) -> None:
		if entry is None:
			raise InvalidArgument('Entry cannot be None')
		self._entries.append(entry)

	def remove_entry(self, entry_id: str) -> bool:
		for i, e in enumerate(self._entries):
			if e.id == entry_id:
				del self._entries[i]
				return True
		return False

	def get_entry(self, entry_id: str) -> Optional[PasswordEntry]:
		for e in self._entries:
			if e.id == entry_id:
				return e
		return None

	def all_entries(self) -> List[PasswordEntry]:
		return list(self._entries)

	def search(self, text: Optional[str] = None) -> List[PasswordEntry]:
		if text is None or not text.strip():
			return self.all_entries()
		return [e for e in self._entries if e.matches_search(text)]

	def entries_by_category(self, category: str) -> List[PasswordEntry]:
		return [e for e in self._entries if e.category == category]

	def categories(self) -> List[str]:
		return sorted({e.category for e in self._entries})

	def entry_count(self) -> int:
		return len(self._entries)

	def clear(self) -> None:
		self._entries.clear()

	def to_dict(self) -> Dict[str, Any]:
		return {
			'id': self._id,
			'name': self.name,
			'salt': base64.b64encode(bytes(self._salt)).decode('ascii'),
			'entries': [e.to_dict() for e in self._entries],
		}

	@classmethod
	def from_dict(cls, raw: Dict[str, Any], salt: bytes) -> 'Vault':
		"""Rebuild a vault; ``salt`` comes from the container, not the payload."""
		entries = [PasswordEntry.from_dict(e) for e in raw.get('entries') or []]
		return cls(raw['id'], raw.get('name', DEFAULT_VAULT_NAME), entries, salt)

	def __repr__(self) -> str:
		return f"Vault(id={self._id!r}, name={self.name!r}, entries={len(self._entries)})"
