"""Hasher factories over the external digest libraries."""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from functools import partial
from pathlib import Path

import blake3
from Crypto.Hash import MD2, MD4, RIPEMD160, keccak
from gmssl import func, sm3
from gostcrypto import gosthash

from digestsum.util.typing import Hasher

CHUNK_SIZE = 8192

class Sm3Hasher:
    """Incremental facade over ``gmssl.sm3``, which only hashes whole messages."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def update(self, data: bytes) -> None:
        self._buffer.extend(data)

    def digest(self) -> bytes:
        return bytes.fromhex(sm3.sm3_hash(func.bytes_to_list(bytes(self._buffer))))

class StreebogHasher:
    """GOST R 34.11-2012 through ``gostcrypto``, returning ``bytes`` digests."""

    def __init__(self, name: str) -> None:
        self._hash = gosthash.new(name)

    def update(self, data: bytes) -> None:
        self._hash.update(data)

    def digest(self) -> bytes:
        return bytes(self._hash.digest())

HASHER_FACTORIES: dict[str, Callable[[], Hasher]] = {
    "blake2b": hashlib.blake2b,
    "blake2s": hashlib.blake2s,
    "blake3": blake3.blake3,
    "keccak-224": partial(keccak.new, digest_bits=224),
    "keccak-256": partial(keccak.new, digest_bits=256),
    "keccak-384": partial(keccak.new, digest_bits=384),
    "keccak-512": partial(keccak.new, digest_bits=512),
    "md2": MD2.new,
    "md4": MD4.new,
    "md5": hashlib.md5,
    "ripemd-160": RIPEMD160.new,
    "sha1": hashlib.sha1,
    "sha224": hashlib.sha224,
    "sha256": hashlib.sha256,
    "sha384": hashlib.sha384,
    "sha512": hashlib.sha512,
    "sha3-224": hashlib.sha3_224,
    "sha3-256": hashlib.sha3_256,
    "sha3-384": hashlib.sha3_384,
    "sha3-512": hashlib.sha3_512,
    "sm3": Sm3Hasher,
    "streebog-256": partial(StreebogHasher, "streebog256"),
    "streebog-512": partial(StreebogHasher, "streebog512"),
}

def new_hasher(identifier: str) -> Hasher:
    """Return a fresh hasher for the kebab-case algorithm `identifier`."""
    try:
        factory = HASHER_FACTORIES[identifier]
    except KeyError as exc:
        raise KeyError(f"No hasher registered for '{identifier}'.") from exc
    return factory()

def hash_bytes(identifier: str, data: bytes) -> bytes:
    """Return the raw digest of `data`."""
    hasher = new_hasher(identifier)
    hasher.update(data)
    return hasher.digest()

def hash_file(identifier: str, path: Path) -> bytes:
    """Return the raw digest for `path`, read in chunks."""
    hasher = new_hasher(identifier)
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(CHUNK_SIZE), b""):
            hasher.update(chunk)
    return hasher.digest()

__all__ = ["CHUNK_SIZE", "HASHER_FACTORIES", "Sm3Hasher", "StreebogHasher", "hash_bytes", "hash_file", "new_hasher"]
