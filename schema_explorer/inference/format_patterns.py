import re
from datetime import date, datetime
from typing import Callable, Optional
from dataclasses import dataclass
from urllib.parse import urlsplit

from .schema_core import StringFormat


SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")

# Schemes whose URLs are only valid with an authority component
HOST_REQUIRED_SCHEMES = {"http", "https", "ftp", "ws", "wss"}


@dataclass
class FormatPattern:
    """A string format with an optional literal pattern and a validator."""

    name: str
    format: StringFormat
    validator: Callable[[str], bool]
    pattern: Optional[re.Pattern] = None

    def matches(self, text):
        if self.pattern is not None and not self.pattern.match(text):
            return False
        return self.validator(text)


def is_absolute_uri(text):
    # Stricter than WHATWG URL parsing: no surrounding spaces, http:host is rejected
    if text != text.strip() or not SCHEME_PATTERN.match(text):
        return False

    try:
        parts = urlsplit(text)
    except ValueError:
        return False

    if parts.scheme.lower() in HOST_REQUIRED_SCHEMES:
        host = parts.hostname
        if not host or any(ch.isspace() for ch in parts.netloc):
            return False
        try:
            parts.port
        except ValueError:
            return False

    return True


def looks_like_email(text):
    return "@" in text and "." in text


def is_calendar_date(text):
    try:
        date.fromisoformat(text)
        return True
    except ValueError:
        return False


def is_iso_datetime(text):
    try:
        datetime.fromisoformat(text)
        return True
    except ValueError:
        return False


# Order matters - the first matching format wins
FORMAT_PATTERNS = [
    FormatPattern(
        name="absolute_uri",
        format=StringFormat.URI,
        validator=is_absolute_uri,
    ),
    FormatPattern(
        name="email_like",
        format=StringFormat.EMAIL,
        validator=looks_like_email,
    ),
    FormatPattern(
        name="iso_date",
        format=StringFormat.DATE,
        validator=is_calendar_date,
        pattern=re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII),
    ),
    FormatPattern(
        name="iso_datetime",
        format=StringFormat.DATE_TIME,
        validator=is_iso_datetime,
        pattern=re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}", re.ASCII),
    ),
]
