"""
Named string format checkers used by the ``format`` keyword.

A process-wide ``default_format_registry`` is pre-populated with the built-in
checkers; ``register_format`` adds or replaces entries on it.
"""

from __future__ import annotations

import ipaddress
import re
from datetime import datetime
from email.utils import parseaddr
from threading import Lock
from typing import Callable, Dict, List, Optional
from urllib.parse import urlparse

from schema_validator.errors import EmptyNameError, MissingFunctionError

FormatChecker = Callable[[str], bool]

_HOSTNAME_RE = re.compile(
    r"^([a-zA-Z0-9]|[a-zA-Z0-9][a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])"
    r"(\.([a-zA-Z0-9]|[a-zA-Z0-9][a-zA-Z0-9\-]{0,61}[a-zA-Z0-9]))*$"
)
_UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}:\d{2}$")
_DATE_TIME_RE = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})[Tt](?P<time>\d{2}:\d{2}:\d{2})(\.\d+)?"
    r"(?P<offset>[Zz]|[+-](?P<oh>\d{2}):(?P<om>\d{2}))$"
)


def is_email(value: str) -> bool:
    _, address = parseaddr(value)
    if not address or address.count("@") != 1:
        return False
    local, _, domain = address.partition("@")
    return bool(local) and bool(domain) and " " not in address


def is_date(value: str) -> bool:
    if not _DATE_RE.match(value):
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def is_time(value: str) -> bool:
    if not _TIME_RE.match(value):
        return False
    try:
        datetime.strptime(value, "%H:%M:%S")
    except ValueError:
        return False
    return True


def is_date_time(value: str) -> bool:
    """RFC 3339 ``date-time``."""
    match = _DATE_TIME_RE.match(value)
    if not match:
        return False
    if not (is_date(match.group("date")) and is_time(match.group("time"))):
        return False
    if match.group("oh") is not None:
        return int(match.group("oh")) < 24 and int(match.group("om")) < 60
    return True


def is_uri(value: str) -> bool:
    if not value or any(ch.isspace() for ch in value):
        return False
    if value.startswith("/"):
        return True
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc or parsed.path)


def is_hostname(value: str) -> bool:
    return len(value) <= 255 and bool(_HOSTNAME_RE.match(value))


def is_ipv4(value: str) -> bool:
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        return False
    return True


def is_ipv6(value: str) -> bool:
    try:
        ipaddress.IPv6Address(value)
    except ValueError:
        return False
    return True


def is_uuid(value: str) -> bool:
    return bool(_UUID_RE.match(value.lower()))


BUILTIN_FORMATS: Dict[str, FormatChecker] = {
    "email": is_email,
    "date-time": is_date_time,
    "date": is_date,
    "time": is_time,
    "uri": is_uri,
    "hostname": is_hostname,
    "ipv4": is_ipv4,
    "ipv6": is_ipv6,
    "uuid": is_uuid,
}


class FormatRegistry:
    """
    Lock-protected mapping of format name to checker.
    """

    def __init__(self, *, include_builtins: bool = True) -> None:
        self._checkers: Dict[str, FormatChecker] = dict(BUILTIN_FORMATS) if include_builtins else {}
        self._lock = Lock()

    def register(self, name: str, checker: Optional[FormatChecker]) -> None:
        if not name:
            raise EmptyNameError("format name cannot be empty")
        if checker is None or not callable(checker):
            raise MissingFunctionError("format checker cannot be nil")
        with self._lock:
            self._checkers[name] = checker

    def get(self, name: str) -> Optional[FormatChecker]:
        with self._lock:
            return self._checkers.get(name)

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._checkers)


default_format_registry = FormatRegistry()


def register_format(name: str, checker: FormatChecker) -> None:
    default_format_registry.register(name, checker)
