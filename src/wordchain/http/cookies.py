"""Cookie parsing and ``Set-Cookie`` serialization.

The read side (``parse_cookies``) feeds ``Request.cookies``; the write
side (``SetCookie``) is what ``Response.with_cookies`` attaches.
"""

from dataclasses import dataclass


def parse_cookies(header: str) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict.

    Returns an empty dict for empty or missing headers. When a name
    repeats, the first occurrence wins.
    """
    if not header:
        return {}
    cookies: dict[str, str] = {}
    for pair in header.split(";"):
        pair = pair.strip()
        if "=" in pair:
            key, _, value = pair.partition("=")
            cookies.setdefault(key.strip(), value.strip())
    return cookies


@dataclass(frozen=True, slots=True)
class SetCookie:
    """A ``Set-Cookie`` directive attached to a Response."""

    name: str
    value: str
    max_age: int | None = None
    path: str = "/"
    domain: str | None = None
    secure: bool = False
    httponly: bool = True
    samesite: str = "lax"

    def to_header_value(self) -> str:
        parts = [f"{self.name}={self.value}"]
        if self.max_age is not None:
            parts.append(f"Max-Age={self.max_age}")
        if self.path:
            parts.append(f"Path={self.path}")
        if self.domain:
            parts.append(f"Domain={self.domain}")
        if self.secure:
            parts.append("Secure")
        if self.httponly:
            parts.append("HttpOnly")
        if self.samesite:
            parts.append(f"SameSite={self.samesite}")
        return "; ".join(parts)

    @classmethod
    def parse(cls, header_value: str) -> "SetCookie":
        """Parse a ``Set-Cookie`` header value (used by the test client)."""
        first, *attrs = (part.strip() for part in header_value.split(";"))
        name, _, value = first.partition("=")
        fields: dict[str, object] = {
            "path": "",
            "httponly": False,
            "samesite": "",
        }
        for attr in attrs:
            key, _, attr_value = attr.partition("=")
            key = key.lower()
            if key == "max-age":
                fields["max_age"] = int(attr_value)
            elif key == "path":
                fields["path"] = attr_value
            elif key == "domain":
                fields["domain"] = attr_value
            elif key == "secure":
                fields["secure"] = True
            elif key == "httponly":
                fields["httponly"] = True
            elif key == "samesite":
                fields["samesite"] = attr_value
        return cls(name=name.strip(), value=value.strip(), **fields)  # type: ignore[arg-type]
