"""X.509 decoding into comparable artifacts.

Signing requests and issued certificates are both reduced to an
``X509Artifact``: the names and subject fields the compliance checks care
about, as plain strings.
"""
import ipaddress
import logging
from typing import Iterable, List, Union

from cryptography import x509
from cryptography.x509.oid import NameOID, ObjectIdentifier
from pydantic import BaseModel, ConfigDict, Field

from cert_compliance.models import DecodeError

logger = logging.getLogger("cert_compliance.pki")

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class X509Artifact(BaseModel):
    """Comparable view of a decoded signing request or certificate."""

    model_config = ConfigDict(frozen=True)

    common_name: str = ""
    dns_names: List[str] = Field(default_factory=list)
    ip_addresses: List[str] = Field(default_factory=list)
    uris: List[str] = Field(default_factory=list)
    serial_number: str = ""
    organizations: List[str] = Field(default_factory=list)
    countries: List[str] = Field(default_factory=list)
    organizational_units: List[str] = Field(default_factory=list)
    localities: List[str] = Field(default_factory=list)
    provinces: List[str] = Field(default_factory=list)
    street_addresses: List[str] = Field(default_factory=list)
    postal_codes: List[str] = Field(default_factory=list)


def ip_addresses_to_string(addresses: Iterable[IPAddress]) -> List[str]:
    """Render IP addresses in canonical (compressed) string form."""
    return [str(ip) for ip in addresses]


def urls_to_string(uris: Iterable[str]) -> List[str]:
    return [str(uri) for uri in uris]


def _attribute_values(name: x509.Name, oid: ObjectIdentifier) -> List[str]:
    values: List[str] = []
    for attr in name.get_attributes_for_oid(oid):
        value = attr.value
        if isinstance(value, bytes):
            value = value.decode("utf-8", errors="replace")
        values.append(value)
    return values


def _last_attribute(name: x509.Name, oid: ObjectIdentifier) -> str:
    # Later attributes override earlier ones, as in most X.509 stacks.
    values = _attribute_values(name, oid)
    return values[-1] if values else ""


def _subject_alt_names(extensions: x509.Extensions) -> x509.SubjectAlternativeName:
    try:
        return extensions.get_extension_for_class(x509.SubjectAlternativeName).value
    except x509.ExtensionNotFound:
        return x509.SubjectAlternativeName([])


def _artifact_from(subject: x509.Name, extensions: x509.Extensions) -> X509Artifact:
    sans = _subject_alt_names(extensions)
    return X509Artifact(
        common_name=_last_attribute(subject, NameOID.COMMON_NAME),
        dns_names=sans.get_values_for_type(x509.DNSName),
        ip_addresses=ip_addresses_to_string(sans.get_values_for_type(x509.IPAddress)),
        uris=urls_to_string(sans.get_values_for_type(x509.UniformResourceIdentifier)),
        serial_number=_last_attribute(subject, NameOID.SERIAL_NUMBER),
        organizations=_attribute_values(subject, NameOID.ORGANIZATION_NAME),
        countries=_attribute_values(subject, NameOID.COUNTRY_NAME),
        organizational_units=_attribute_values(subject, NameOID.ORGANIZATIONAL_UNIT_NAME),
        localities=_attribute_values(subject, NameOID.LOCALITY_NAME),
        provinces=_attribute_values(subject, NameOID.STATE_OR_PROVINCE_NAME),
        street_addresses=_attribute_values(subject, NameOID.STREET_ADDRESS),
        postal_codes=_attribute_values(subject, NameOID.POSTAL_CODE),
    )


def decode_x509_certificate_request_bytes(data: bytes) -> X509Artifact:
    """Decode a PEM encoded certificate signing request.

    Raises:
        DecodeError: If the bytes are empty, not PEM, or not a valid CSR.
    """
    if not data:
        raise DecodeError("certificate request", "no PEM data found")
    try:
        csr = x509.load_pem_x509_csr(data)
        return _artifact_from(csr.subject, csr.extensions)
    except (ValueError, x509.DuplicateExtension) as exc:
        logger.debug("Failed to decode certificate request: %s", exc)
        raise DecodeError("certificate request", str(exc)) from exc


def decode_x509_certificate_bytes(data: bytes) -> X509Artifact:
    """Decode the first certificate in a PEM bundle.

    Raises:
        DecodeError: If the bytes are empty, not PEM, or not a valid certificate.
    """
    if not data:
        raise DecodeError("certificate", "no PEM data found")
    try:
        cert = x509.load_pem_x509_certificate(data)
        return _artifact_from(cert.subject, cert.extensions)
    except (ValueError, x509.DuplicateExtension) as exc:
        logger.debug("Failed to decode certificate: %s", exc)
        raise DecodeError("certificate", str(exc)) from exc
