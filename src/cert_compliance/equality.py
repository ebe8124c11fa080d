"""Order- and duplicate-insensitive comparison helpers used by the compliance checks."""
import ipaddress
from typing import Iterable, Optional

from cert_compliance.api import IssuerReference, KeyUsage


def equal_unsorted(a: Optional[Iterable[str]], b: Optional[Iterable[str]]) -> bool:
    """Compare two string collections as sets.

    Order and duplicate counts are ignored, and None is the same as empty.
    """
    return set(a or ()) == set(b or ())


def _canonical_ip(value: str) -> str:
    try:
        return str(ipaddress.ip_address(value))
    except ValueError:
        return value


def equal_ip_addresses_unsorted(
    observed: Optional[Iterable[str]],
    desired: Optional[Iterable[str]],
) -> bool:
    """Set comparison of IP addresses in canonical string form.

    Entries that do not parse as an IP address are compared verbatim.
    """
    return equal_unsorted(
        (_canonical_ip(ip) for ip in observed or ()),
        (_canonical_ip(ip) for ip in desired or ()),
    )


def equal_key_usages_unsorted(
    a: Optional[Iterable[KeyUsage]],
    b: Optional[Iterable[KeyUsage]],
) -> bool:
    return set(a or ()) == set(b or ())


def issuer_refs_equal(a: IssuerReference, b: IssuerReference) -> bool:
    """Structural comparison of two issuer references over name, kind and group."""
    return a.name == b.name and a.kind == b.kind and a.group == b.group
