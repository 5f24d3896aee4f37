import pytest
from cryptography.exceptions import UnsupportedAlgorithm
from src.lib.crypto import (
    VaultCrypto, clear_password, to_buffer, generate_password
)
from src.lib.errors import CryptoFailure, InvalidArgument, KeyDerivationError


def test_generate_salt_shape():
    c = VaultCrypto()
    s1, s2 = c.generate_salt(), c.generate_salt()
    assert len(s1) == 16 and len(s2) == 16
    assert s1 != s2


def test_derive_key_consistency():
    c = VaultCrypto()
    salt = c.generate_salt()
    k1 = c.derive_key('secret', salt)
    k2 = c.derive_key(bytearray(b'secret'), salt)
    assert k1 == k2 and len(k1) == 32


def test_derive_key_salt_changes_key():
    c = VaultCrypto()
    assert c.derive_key('pw', b'\x01' * 16) != c.derive_key('pw', b'\x02' * 16)


def test_derive_key_known_vector():
    import hashlib
    c = VaultCrypto(); salt = b'0123456789abcdef'
    assert c.derive_key('masterpw', salt) == hashlib.pbkdf2_hmac('sha256', b'masterpw', salt, 100_000, 32)


@pytest.mark.parametrize('pwd,salt', [('', b'x' * 16), (None, b'x' * 16), ('pw', b'short'), ('pw', None)])
def test_derive_key_rejects_bad_input(pwd, salt):
    with pytest.raises(InvalidArgument):
        VaultCrypto().derive_key(pwd, salt)


def test_derive_key_primitive_unavailable(monkeypatch):
    def broken(*a, **kw):
        raise UnsupportedAlgorithm('no sha256 here')
    monkeypatch.setattr('src.lib.crypto.PBKDF2HMAC', broken)
    with pytest.raises(KeyDerivationError):
        VaultCrypto().derive_key('pw', b'x' * 16)


def test_encrypt_decrypt_various_sizes():
    c = VaultCrypto(); key = c.derive_key('pw', c.generate_salt())
    for payload in [b'', b'a', b'hello world', b'x' * 1024, b'y' * 4096]:
        blob = c.encrypt(payload, key)
        assert len(blob) == 12 + len(payload) + 16
        assert c.decrypt(blob, key) == payload


def test_nonce_uniqueness():
    c = VaultCrypto(); key = b'k' * 32
    blobs = [c.encrypt(b'same plaintext', key) for _ in range(1000)]
    assert len({b[:12] for b in blobs}) == 1000
    assert len(set(blobs)) == 1000


def test_decrypt_wrong_password():
    c = VaultCrypto(); salt = c.generate_salt()
    blob = c.encrypt(b'data', c.derive_key('pw1', salt))
    with pytest.raises(CryptoFailure):
        c.decrypt(blob, c.derive_key('pw2', salt))


def test_decrypt_wrong_salt():
    c = VaultCrypto()
    blob = c.encrypt(b'data', c.derive_key('pw', b'\x01' * 16))
    with pytest.raises(CryptoFailure):
        c.decrypt(blob, c.derive_key('pw', b'\x02' * 16))


@pytest.mark.parametrize('where', [0, 13, -1])
def test_decrypt_tampered(where):
    c = VaultCrypto(); key = b'k' * 32
    blob = bytearray(c.encrypt(b'some data', key))
    blob[where] ^= 0x01
    with pytest.raises(CryptoFailure) as exc:
        c.decrypt(bytes(blob), key)
    assert str(exc.value) == 'Decryption failed'


def test_decrypt_short_input_rejected_before_cipher(monkeypatch):
    def boom(*a, **kw):
        raise AssertionError('cipher must not be touched')
    monkeypatch.setattr('src.lib.crypto.Cipher', boom)
    for blob in (b'', b'x' * 11, None):
        with pytest.raises(InvalidArgument):
            VaultCrypto().decrypt(blob, b'k' * 32)


@pytest.mark.parametrize('n', [12, 20, 27])
def test_decrypt_missing_tag_is_crypto_failure(n):
    with pytest.raises(CryptoFailure):
        VaultCrypto().decrypt(b'z' * n, b'k' * 32)


def test_bad_key_length():
    c = VaultCrypto()
    with pytest.raises(InvalidArgument):
        c.encrypt(b'data', b'short')
    with pytest.raises(InvalidArgument):
        c.decrypt(b'x' * 40, b'short')


def test_text_helpers():
    c = VaultCrypto(); key = b'k' * 32
    token = c.encrypt_text('héllo', key)
    assert c.decrypt_text(token, key) == 'héllo'
    with pytest.raises(InvalidArgument):
        c.decrypt_text('not base64!!', key)


def test_clear_password_in_place():
    buf = bytearray(b'hunter2')
    copy = bytearray(buf)
    view = buf
    clear_password(buf)
    assert view is buf and len(buf) == 7
    assert all(b == 0 for b in buf)
    assert copy == bytearray(b'hunter2')
    clear_password(None)


def test_to_buffer():
    assert to_buffer('pw') == bytearray(b'pw')
    assert to_buffer(None) == bytearray()
    src = bytearray(b'abc')
    assert to_buffer(src) is not src


def test_generate_password():
    pw = generate_password(24)
    assert len(pw) == 24
    assert any(c.islower() for c in pw) and any(c.isupper() for c in pw) and any(c.isdigit() for c in pw)
    assert generate_password(16, symbols=False).isalnum()
    assert generate_password() != generate_password()
    with pytest.raises(InvalidArgument):
        generate_password(3)

