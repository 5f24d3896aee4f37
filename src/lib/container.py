"""On-disk envelope: base64 salt + base64 sealed payload in a flat JSON object.

    {"saltBase64":"...","encryptedDataBase64":"..."}

There is no version field or magic number. The codec only moves bytes in and
out of the text and knows nothing about the cipher.
"""
from __future__ import annotations
import base64, binascii, json
from typing import Tuple, Union
from .errors import MalformedContainer

SALT_FIELD = 'saltBase64'
DATA_FIELD = 'encryptedDataBase64'
FIELDS = (SALT_FIELD, DATA_FIELD)

def encode(salt: bytes, sealed: bytes) -> str:
	return json.dumps({
		SALT_FIELD: base64.b64encode(bytes(salt)).decode('ascii'),
		DATA_FIELD: base64.b64encode(bytes(sealed)).decode('ascii'),
	}, separators=(',', ':'))

def decode(text: Union[str, bytes]) -> Tuple[bytes, bytes]:
	if isinstance(text, (bytes, bytearray)):
		try:
			text = bytes(text).decode('utf-8')
		except UnicodeDecodeError as e:
			raise MalformedContainer('Container is not UTF-8 text') from e
	try:
		obj = json.loads(text)
	except (json.JSONDecodeError, TypeError) as e:
		raise MalformedContainer('Container is not well-formed JSON') from e
	if not isinstance(obj, dict):
		raise MalformedContainer('Container must be a JSON object')
	missing = [f for f in FIELDS if f not in obj]
	if missing:
		raise MalformedContainer(f"Container missing field(s): {', '.join(missing)}")
	extra = sorted(set(obj) - set(FIELDS))
	if extra:
		raise MalformedContainer(f"Unexpected container field(s): {', '.join(extra)}")
	return _b64(obj, SALT_FIELD), _b64(obj, DATA_FIELD)

def _b64(obj: dict, field: str) -> bytes:
	value = obj[field]
	if not isinstance(value, str):
		raise MalformedContainer(f'{field} must be a string')
	try:
		return base64.b64decode(value, validate=True)
	except (binascii.Error, ValueError) as e:
		raise MalformedContainer(f'{field} is not valid base64') from e
