"""``Authorization: Basic`` credential parsing for the login endpoint."""

import base64
import binascii
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BasicCredentials:
    account_id: str
    password: str = ""

    def __repr__(self) -> str:
        return f"BasicCredentials(account_id={self.account_id!r}, password='***')"


def parse_basic(header: str) -> BasicCredentials | None:
    """Parse ``Basic base64(id:password)``; ``None`` when malformed.

    Malformed means: not exactly two space-separated terms, a scheme
    other than ``Basic``, invalid base64 or UTF-8, or a decoded value
    that is not exactly one ``id:password`` pair.
    """
    terms = header.split(" ")
    if len(terms) != 2 or terms[0] != "Basic":
        return None
    try:
        decoded = base64.b64decode(terms[1], validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    props = decoded.split(":")
    if len(props) != 2:
        return None
    return BasicCredentials(account_id=props[0], password=props[1])
