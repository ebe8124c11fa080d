"""Shared pytest fixtures and builders for all tests."""
import ipaddress
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional, Sequence, Tuple

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID
from ulid import ULID

from cert_compliance import (
    TLS_CERT_KEY,
    Certificate,
    CertificateRequest,
    CertificateRequestSpec,
    CertificateSpec,
    CertificateStatus,
    InMemoryLister,
    IssuerReference,
    ObjectMeta,
    OwnerReference,
    Secret,
    X509Subject,
)

# One key for every generated CSR and certificate keeps generation fast.
_KEY = ec.generate_private_key(ec.SECP256R1())

CA_ISSUER = IssuerReference(name="ca-issuer", kind="Issuer", group="cert-manager.io")


def _subject_name(common_name: str, subject: Optional[X509Subject]) -> x509.Name:
    attrs: List[x509.NameAttribute] = []
    if common_name:
        attrs.append(x509.NameAttribute(NameOID.COMMON_NAME, common_name))
    if subject is not None:
        if subject.serial_number:
            attrs.append(x509.NameAttribute(NameOID.SERIAL_NUMBER, subject.serial_number))
        pairs: Sequence[Tuple[x509.ObjectIdentifier, List[str]]] = (
            (NameOID.ORGANIZATION_NAME, subject.organizations),
            (NameOID.COUNTRY_NAME, subject.countries),
            (NameOID.ORGANIZATIONAL_UNIT_NAME, subject.organizational_units),
            (NameOID.LOCALITY_NAME, subject.localities),
            (NameOID.STATE_OR_PROVINCE_NAME, subject.provinces),
            (NameOID.STREET_ADDRESS, subject.street_addresses),
            (NameOID.POSTAL_CODE, subject.postal_codes),
        )
        for oid, values in pairs:
            for value in values:
                attrs.append(x509.NameAttribute(oid, value))
    return x509.Name(attrs)


def _general_names(
    dns_names: Sequence[str],
    ip_addresses: Sequence[str],
    uris: Sequence[str],
) -> List[x509.GeneralName]:
    names: List[x509.GeneralName] = [x509.DNSName(d) for d in dns_names]
    names += [x509.IPAddress(ipaddress.ip_address(ip)) for ip in ip_addresses]
    names += [x509.UniformResourceIdentifier(u) for u in uris]
    return names


def make_csr_pem(
    common_name: str = "",
    dns_names: Sequence[str] = (),
    ip_addresses: Sequence[str] = (),
    uris: Sequence[str] = (),
    subject: Optional[X509Subject] = None,
) -> bytes:
    """Build a PEM encoded CSR carrying the given names."""
    builder = x509.CertificateSigningRequestBuilder().subject_name(
        _subject_name(common_name, subject)
    )
    sans = _general_names(dns_names, ip_addresses, uris)
    if sans:
        builder = builder.add_extension(x509.SubjectAlternativeName(sans), critical=False)
    csr = builder.sign(_KEY, hashes.SHA256())
    return csr.public_bytes(serialization.Encoding.PEM)


def make_certificate_pem(
    common_name: str = "",
    dns_names: Sequence[str] = (),
    ip_addresses: Sequence[str] = (),
    uris: Sequence[str] = (),
    subject: Optional[X509Subject] = None,
) -> bytes:
    """Build a PEM encoded self-signed certificate carrying the given names."""
    name = _subject_name(common_name, subject)
    now = datetime.now(timezone.utc)
    builder = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(_KEY.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(minutes=5))
        .not_valid_after(now + timedelta(days=90))
    )
    sans = _general_names(dns_names, ip_addresses, uris)
    if sans:
        builder = builder.add_extension(x509.SubjectAlternativeName(sans), critical=False)
    cert = builder.sign(_KEY, hashes.SHA256())
    return cert.public_bytes(serialization.Encoding.PEM)


def make_spec(**overrides: Any) -> CertificateSpec:
    """Build a CertificateSpec with defaults for all required fields."""
    defaults: dict[str, Any] = {
        "secret_name": "web-tls",
        "common_name": "example.com",
        "dns_names": ["example.com", "www.example.com"],
        "issuer_ref": CA_ISSUER,
    }
    defaults.update(overrides)
    return CertificateSpec(**defaults)


def make_certificate(
    name: str = "web",
    namespace: str = "default",
    labels: Optional[dict[str, str]] = None,
    next_private_key_secret_name: Optional[str] = None,
    **spec_overrides: Any,
) -> Certificate:
    return Certificate(
        metadata=ObjectMeta(
            name=name,
            namespace=namespace,
            uid=str(ULID()),
            labels=labels or {},
        ),
        spec=make_spec(**spec_overrides),
        status=CertificateStatus(next_private_key_secret_name=next_private_key_secret_name),
    )


def compliant_request(
    spec: CertificateSpec,
    name: str = "web-1",
    namespace: str = "default",
    **request_overrides: Any,
) -> CertificateRequest:
    """Build a CertificateRequest whose CSR and parameters satisfy ``spec``."""
    fields: dict[str, Any] = {
        "request": make_csr_pem(
            common_name=spec.common_name,
            dns_names=spec.dns_names,
            ip_addresses=spec.ip_addresses,
            uris=spec.uri_sans,
            subject=spec.subject,
        ),
        "is_ca": spec.is_ca,
        "usages": spec.usages,
        "duration": spec.duration,
        "issuer_ref": spec.issuer_ref,
    }
    fields.update(request_overrides)
    return CertificateRequest(
        metadata=ObjectMeta(name=name, namespace=namespace, uid=str(ULID())),
        spec=CertificateRequestSpec(**fields),
    )


def make_request(
    name: str = "web-1",
    namespace: str = "default",
    annotations: Optional[dict[str, str]] = None,
    owner_references: Optional[List[OwnerReference]] = None,
    labels: Optional[dict[str, str]] = None,
) -> CertificateRequest:
    """Build a CertificateRequest for predicate and filter tests."""
    return CertificateRequest(
        metadata=ObjectMeta(
            name=name,
            namespace=namespace,
            uid=str(ULID()),
            labels=labels or {},
            annotations=annotations or {},
            owner_references=owner_references or [],
        ),
        spec=CertificateRequestSpec(
            request=make_csr_pem(common_name="example.com"),
            issuer_ref=CA_ISSUER,
        ),
    )


def make_secret(
    name: str = "web-tls",
    namespace: str = "default",
    cert_pem: Optional[bytes] = None,
) -> Secret:
    data = {TLS_CERT_KEY: cert_pem} if cert_pem is not None else {}
    return Secret(metadata=ObjectMeta(name=name, namespace=namespace), data=data)


@pytest.fixture
def certificate_lister() -> InMemoryLister[Certificate]:
    """Lister holding O1 (secret web-tls), O2 (secret other) and O3 (next key web-tls)."""
    lister: InMemoryLister[Certificate] = InMemoryLister()
    lister.add(make_certificate(name="o1", secret_name="web-tls"))
    lister.add(make_certificate(name="o2", secret_name="other"))
    lister.add(
        make_certificate(
            name="o3",
            secret_name="o3-tls",
            next_private_key_secret_name="web-tls",
        )
    )
    return lister
