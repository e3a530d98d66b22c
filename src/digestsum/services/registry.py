"""Hash algorithm catalog: names, aliases, insecure set and digest dispatch."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from digestsum.errors import InsecureAlgorithmError, UnknownAlgorithmError
from digestsum.util.hashing import hash_bytes, hash_file


class Algorithm(Enum):
    """Supported hash algorithms; values are the kebab-case identifiers."""

    BLAKE2B = "blake2b"
    BLAKE2S = "blake2s"
    BLAKE3 = "blake3"
    KECCAK224 = "keccak-224"
    KECCAK256 = "keccak-256"
    KECCAK384 = "keccak-384"
    KECCAK512 = "keccak-512"
    MD2 = "md2"
    MD4 = "md4"
    MD5 = "md5"
    RIPEMD160 = "ripemd-160"
    SHA1 = "sha1"
    SHA224 = "sha224"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"
    SHA3_224 = "sha3-224"
    SHA3_256 = "sha3-256"
    SHA3_384 = "sha3-384"
    SHA3_512 = "sha3-512"
    SM3 = "sm3"
    STREEBOG256 = "streebog-256"
    STREEBOG512 = "streebog-512"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def digest_size(self) -> int:
        return _DIGEST_SIZES[self]

    @property
    def insecure(self) -> bool:
        return self in INSECURE_ALGORITHMS

    def __str__(self) -> str:
        return self.display_name


_DISPLAY_NAMES: dict[Algorithm, str] = {
    Algorithm.BLAKE2B: "BLAKE2b",
    Algorithm.BLAKE2S: "BLAKE2s",
    Algorithm.BLAKE3: "BLAKE3",
    Algorithm.KECCAK224: "Keccak-224",
    Algorithm.KECCAK256: "Keccak-256",
    Algorithm.KECCAK384: "Keccak-384",
    Algorithm.KECCAK512: "Keccak-512",
    Algorithm.MD2: "MD2",
    Algorithm.MD4: "MD4",
    Algorithm.MD5: "MD5",
    Algorithm.RIPEMD160: "RIPEMD-160",
    Algorithm.SHA1: "SHA1",
    Algorithm.SHA224: "SHA224",
    Algorithm.SHA256: "SHA256",
    Algorithm.SHA384: "SHA384",
    Algorithm.SHA512: "SHA512",
    Algorithm.SHA3_224: "SHA3-224",
    Algorithm.SHA3_256: "SHA3-256",
    Algorithm.SHA3_384: "SHA3-384",
    Algorithm.SHA3_512: "SHA3-512",
    Algorithm.SM3: "SM3",
    Algorithm.STREEBOG256: "Streebog-256",
    Algorithm.STREEBOG512: "Streebog-512",
}

_DIGEST_SIZES: dict[Algorithm, int] = {
    Algorithm.BLAKE2B: 64,
    Algorithm.BLAKE2S: 32,
    Algorithm.BLAKE3: 32,
    Algorithm.KECCAK224: 28,
    Algorithm.KECCAK256: 32,
    Algorithm.KECCAK384: 48,
    Algorithm.KECCAK512: 64,
    Algorithm.MD2: 16,
    Algorithm.MD4: 16,
    Algorithm.MD5: 16,
    Algorithm.RIPEMD160: 20,
    Algorithm.SHA1: 20,
    Algorithm.SHA224: 28,
    Algorithm.SHA256: 32,
    Algorithm.SHA384: 48,
    Algorithm.SHA512: 64,
    Algorithm.SHA3_224: 28,
    Algorithm.SHA3_256: 32,
    Algorithm.SHA3_384: 48,
    Algorithm.SHA3_512: 64,
    Algorithm.SM3: 32,
    Algorithm.STREEBOG256: 32,
    Algorithm.STREEBOG512: 64,
}

# Spellings accepted in addition to the kebab-case value and the display name.
_EXTRA_ALIASES: dict[Algorithm, tuple[str, ...]] = {
    Algorithm.KECCAK224: ("keccak224",),
    Algorithm.KECCAK256: ("keccak256",),
    Algorithm.KECCAK384: ("keccak384",),
    Algorithm.KECCAK512: ("keccak512",),
    Algorithm.RIPEMD160: ("ripemd160", "rmd160"),
    Algorithm.SHA1: ("sha-1",),
    Algorithm.SHA224: ("sha-224", "sha2-224"),
    Algorithm.SHA256: ("sha-256", "sha2-256"),
    Algorithm.SHA384: ("sha-384", "sha2-384"),
    Algorithm.SHA512: ("sha-512", "sha2-512"),
    Algorithm.SHA3_224: ("sha3_224",),
    Algorithm.SHA3_256: ("sha3_256",),
    Algorithm.SHA3_384: ("sha3_384",),
    Algorithm.SHA3_512: ("sha3_512",),
    Algorithm.STREEBOG256: ("streebog256", "gost-2012-256"),
    Algorithm.STREEBOG512: ("streebog512", "gost-2012-512"),
}

INSECURE_ALGORITHMS: frozenset[Algorithm] = frozenset(
    {Algorithm.MD2, Algorithm.MD4, Algorithm.MD5, Algorithm.SHA1}
)


def _build_lookup() -> dict[str, Algorithm]:
    lookup: dict[str, Algorithm] = {}
    for algorithm in Algorithm:
        for candidate in (algorithm.value, algorithm.display_name, *_EXTRA_ALIASES.get(algorithm, ())):
            lookup[candidate.strip().lower()] = algorithm
    return lookup


_LOOKUP = _build_lookup()


def resolve(name: str) -> Algorithm:
    """Return the algorithm named `name` (case-insensitive, aliases accepted)."""

    algorithm = _LOOKUP.get(name.strip().lower())
    if algorithm is None:
        raise UnknownAlgorithmError(name)
    return algorithm


def aliases(algorithm: Algorithm) -> tuple[str, ...]:
    """Return every lowercase spelling that resolves to `algorithm`."""

    return tuple(sorted(key for key, value in _LOOKUP.items() if value is algorithm))


def display_name(algorithm: Algorithm) -> str:
    return algorithm.display_name


def is_insecure(algorithm: Algorithm) -> bool:
    return algorithm in INSECURE_ALGORITHMS


def require_allowed(algorithm: Algorithm, *, allow_insecure: bool) -> Algorithm:
    """Reject insecure algorithms unless explicitly allowed."""

    if is_insecure(algorithm) and not allow_insecure:
        raise InsecureAlgorithmError(algorithm.display_name)
    return algorithm


def resolve_selection(name: Optional[str], *, allow_insecure: bool) -> Optional[Algorithm]:
    """Resolve an optional user selection, enforcing the insecure opt-in."""

    if name is None:
        return None
    return require_allowed(resolve(name), allow_insecure=allow_insecure)


def list_algorithms() -> list[Algorithm]:
    """Return the catalog in display order."""

    return list(Algorithm)


def digest(algorithm: Algorithm, data: bytes) -> bytes:
    """Return the raw digest of `data` under `algorithm`."""

    return hash_bytes(algorithm.value, data)


def digest_path(algorithm: Algorithm, path: Path) -> bytes:
    """Return the raw digest of the file at `path` under `algorithm`."""

    return hash_file(algorithm.value, path)


__all__ = [
    "Algorithm",
    "INSECURE_ALGORITHMS",
    "aliases",
    "digest",
    "digest_path",
    "display_name",
    "is_insecure",
    "list_algorithms",
    "require_allowed",
    "resolve",
    "resolve_selection",
]
