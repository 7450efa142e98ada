"""Cache key builders. Single place for key format.

A key is ``<prefix><tenant_handle>_<md5(resource_uri)>``. The digest is the
lower-case hex MD5 of the UTF-8 encoded URI, so keys stay addressable across
restarts and platforms.

Tenant sweeps match the tenant prefix followed by exactly one digest, so
clearing ``acme`` never touches keys of ``acme_corp``.
"""

import hashlib

KEY_SEP = "_"
DIGEST_LENGTH = 32

# One lower-case hex digit, in the bracket syntax shared by glob and Redis MATCH
_HEX_CLASS = "[0-9a-f]"


def uri_digest(resource_uri: str) -> str:
    """Stable 128-bit hex digest of a resource URI."""
    return hashlib.md5(resource_uri.encode("utf-8"), usedforsecurity=False).hexdigest()


def tenant_key_prefix(key_prefix: str, tenant_handle: str) -> str:
    """Common prefix of every key stored for a tenant."""
    return f"{key_prefix}{tenant_handle}{KEY_SEP}"


def form_key(key_prefix: str, tenant_handle: str, resource_uri: str) -> str:
    """Cache key for a tenant's resource."""
    return f"{tenant_key_prefix(key_prefix, tenant_handle)}{uri_digest(resource_uri)}"


def digest_pattern() -> str:
    """Pattern matching exactly one URI digest (glob and Redis MATCH syntax)."""
    return _HEX_CLASS * DIGEST_LENGTH
