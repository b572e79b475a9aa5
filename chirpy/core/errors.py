"""
Chirpy error taxonomy

Module: core.errors
Date: 2026-10-12
Version: 0.1.0

CHANGELOG:
[2026-10-12 v0.1.0] Initial implementation
  - One exception class per failure kind of the core
  - HTTP status attached to each class for the transport layer

Every error raised by the core derives from ChirpyError. The transport maps
them to HTTP responses through ``http_status``; nothing in the core
terminates the process.
"""


class ChirpyError(Exception):
    """Base Chirpy error"""
    http_status = 500


class ValidationError(ChirpyError):
    """Caller-supplied data violates a constraint (body too long, empty password)"""
    http_status = 400


class NotFound(ChirpyError):
    """Referenced id or email does not exist"""
    http_status = 404


class Conflict(ChirpyError):
    """Uniqueness violation (email already registered)"""
    http_status = 409


class Unauthorized(ChirpyError):
    """Credential mismatch at login"""
    http_status = 401


class InvalidToken(ChirpyError):
    """Token signature, structure, issuer or expiry check failed"""
    http_status = 401


class Revoked(ChirpyError):
    """Token is present in the revocation set"""
    http_status = 401


class StoreIOError(ChirpyError):
    """Disk read, write or (de)serialization failure"""
    http_status = 500


class InternalError(ChirpyError):
    """Cryptographic primitive failure"""
    http_status = 500
