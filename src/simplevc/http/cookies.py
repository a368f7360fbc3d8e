"""Cookie parsing and Set-Cookie serialization.

``parse_cookies`` fills ``Request.cookies``; ``SetCookie`` values ride on
``Response.cookies`` until the ASGI sender writes them out.
"""

from dataclasses import dataclass


def parse_cookies(header: str) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict.

    Pairs without ``=`` are ignored, surrounding double quotes are
    removed and a repeated name keeps its last value.
    """
    cookies: dict[str, str] = {}
    for pair in header.split(";") if header else ():
        name, sep, value = pair.partition("=")
        name = name.strip()
        if sep and name:
            cookies[name] = value.strip().strip('"')
    return cookies


@dataclass(frozen=True, slots=True)
class SetCookie:
    """One ``Set-Cookie`` directive."""

    name: str
    value: str
    max_age: int | None = None
    path: str = "/"
    domain: str | None = None
    secure: bool = False
    httponly: bool = True
    samesite: str = "lax"

    def to_header_value(self) -> str:
        """Serialize as ``name=value; Max-Age=..; Path=..; ...``."""
        attributes = [
            ("Max-Age", self.max_age),
            ("Path", self.path or None),
            ("Domain", self.domain or None),
            ("Secure", True if self.secure else None),
            ("HttpOnly", True if self.httponly else None),
            ("SameSite", self.samesite.capitalize() if self.samesite else None),
        ]
        parts = [f"{self.name}={self.value}"]
        for key, value in attributes:
            if value is True:
                parts.append(key)
            elif value is not None:
                parts.append(f"{key}={value}")
        return "; ".join(parts)
