"""Network egress allowlist entries."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Optional, Union
from urllib.parse import SplitResult, urlsplit

import idna

from dossierkit.errors import InvalidInputError

_FORBIDDEN_HOST_CHARS = frozenset("\0\t\n\r #%/:<>?@[\\]^|")
_KNOWN_DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}


def _host_to_ascii(host: str) -> str:
    """Normalise a host to lower-case ASCII, punycoding non-ASCII labels."""
    if host.isascii():
        if any(ch in _FORBIDDEN_HOST_CHARS for ch in host):
            raise InvalidInputError("invalid allowlist host")
        return host.lower()
    try:
        return idna.encode(host, uts46=True).decode("ascii").lower()
    except (idna.IDNAError, UnicodeError, ValueError) as exc:
        raise InvalidInputError("invalid allowlist host") from exc


def _fallback_port(scheme: str) -> int:
    return 443 if scheme == "https" else 80


@dataclass(frozen=True)
class AllowlistEntry:
    """A single scheme/host/port (and optional path prefix) that may be contacted."""

    scheme: str
    host: str
    port: int
    path_prefix: Optional[str] = field(default=None, kw_only=True)
    purpose: str = ""
    policy_pack_id: str = ""
    policy_pack_version: str = ""

    def canonicalize(self) -> AllowlistEntry:
        """Return a normalised copy, raising InvalidInputError if the entry is unusable."""
        scheme = self.scheme.lower()
        if scheme not in ("https", "http"):
            raise InvalidInputError("allowlist scheme must be http or https")

        host = _host_to_ascii(self.host)
        port = self.port or _fallback_port(scheme)

        path_prefix = self.path_prefix
        if path_prefix is not None:
            path_prefix = path_prefix.replace("\\", "/")
            if not path_prefix.startswith("/"):
                path_prefix = "/" + path_prefix
            if ".." in path_prefix:
                raise InvalidInputError("allowlist path_prefix must not contain ..")

        return replace(self, scheme=scheme, host=host, port=port, path_prefix=path_prefix)

    def matches_url(self, url: Union[str, SplitResult]) -> bool:
        """Whether the URL falls under this (canonical) entry."""
        parts = urlsplit(url) if isinstance(url, str) else url
        scheme = parts.scheme.lower()
        hostname = parts.hostname
        if not hostname:
            return False
        try:
            host = _host_to_ascii(hostname)
        except InvalidInputError:
            return False
        try:
            port = parts.port
        except ValueError:
            return False
        if port is None:
            port = _KNOWN_DEFAULT_PORTS.get(scheme, _fallback_port(scheme))
        if scheme != self.scheme or host != self.host or port != self.port:
            return False
        if self.path_prefix is not None:
            return (parts.path or "/").startswith(self.path_prefix)
        return True

    def to_dict(self) -> dict[str, Any]:
        """Serialisable form; path_prefix is omitted when unset."""
        data: dict[str, Any] = {
            "scheme": self.scheme,
            "host": self.host,
            "port": self.port,
        }
        if self.path_prefix is not None:
            data["path_prefix"] = self.path_prefix
        data["purpose"] = self.purpose
        data["policy_pack_id"] = self.policy_pack_id
        data["policy_pack_version"] = self.policy_pack_version
        return data