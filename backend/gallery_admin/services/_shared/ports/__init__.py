"""
gallery_admin.services._shared.ports
====================================

Collection of *ports* (hexagonal interfaces) that define the contracts for
token signing, hashed token storage and blob storage.

Modules
-------
- :mod:`token_signer`:
    Defines :class:`~.TokenSigner`, :class:`~.TokenClaims` and :class:`~.TokenType`.

- :mod:`token_index`:
    Defines :class:`~.HashedTokenIndex`, :class:`~.TokenHasher`,
    :class:`~.RefreshTokenRecord` and the in-memory index used in tests.

- :mod:`blob_storage`:
    Defines :class:`~.BlobStorage` and :class:`~.InMemoryBlobStorage`.

Design Notes
------------
Concrete adapters (PyJWT, HMAC, Redis, S3) implement these interfaces under
``gallery_admin.infra``.
"""

from __future__ import annotations

from .blob_storage import BlobStorage, InMemoryBlobStorage
from .token_index import (
    HashedTokenIndex,
    InMemoryHashedTokenIndex,
    RefreshTokenRecord,
    TokenHasher,
)
from .token_signer import TokenClaims, TokenSigner, TokenType

__all__ = [
    "BlobStorage",
    "HashedTokenIndex",
    "InMemoryBlobStorage",
    "InMemoryHashedTokenIndex",
    "RefreshTokenRecord",
    "TokenClaims",
    "TokenHasher",
    "TokenSigner",
    "TokenType",
]
