"""Field-by-field comparison of X.509 artifacts against a CertificateSpec.

Both checks return the list of Certificate field paths whose observed value
does not match the desired one. The list is ordered by a fixed check order so
callers can rely on exact output; an empty list means the artifact complies.
"""

from typing import List

from cert_compliance.api import (
    TLS_CERT_KEY,
    CertificateRequest,
    CertificateSpec,
    Secret,
    X509Subject,
)
from cert_compliance.equality import (
    equal_ip_addresses_unsorted,
    equal_key_usages_unsorted,
    equal_unsorted,
    issuer_refs_equal,
)
from cert_compliance.pki import (
    X509Artifact,
    decode_x509_certificate_bytes,
    decode_x509_certificate_request_bytes,
)

# ---------------------------------------------------------------------------
# Field paths
# ---------------------------------------------------------------------------

FIELD_COMMON_NAME: str = "spec.commonName"
FIELD_DNS_NAMES: str = "spec.dnsNames"
FIELD_IP_ADDRESSES: str = "spec.ipAddresses"
FIELD_URI_SANS: str = "spec.uriSANs"
FIELD_SUBJECT_SERIAL_NUMBER: str = "spec.subject.serialNumber"
FIELD_SUBJECT_ORGANIZATIONS: str = "spec.subject.organizations"
FIELD_SUBJECT_COUNTRIES: str = "spec.subject.countries"
FIELD_SUBJECT_LOCALITIES: str = "spec.subject.localities"
FIELD_SUBJECT_ORGANIZATIONAL_UNITS: str = "spec.subject.organizationalUnits"
FIELD_SUBJECT_POSTAL_CODES: str = "spec.subject.postCodes"
FIELD_SUBJECT_PROVINCES: str = "spec.subject.provinces"
FIELD_SUBJECT_STREET_ADDRESSES: str = "spec.subject.streetAddresses"
FIELD_IS_CA: str = "spec.isCA"
FIELD_USAGES: str = "spec.usages"
FIELD_DURATION: str = "spec.duration"
FIELD_ISSUER_REF: str = "spec.issuerRef"

REQUEST_FIELD_ORDER: tuple[str, ...] = (
    FIELD_COMMON_NAME,
    FIELD_DNS_NAMES,
    FIELD_IP_ADDRESSES,
    FIELD_URI_SANS,
    FIELD_SUBJECT_SERIAL_NUMBER,
    FIELD_SUBJECT_ORGANIZATIONS,
    FIELD_SUBJECT_COUNTRIES,
    FIELD_SUBJECT_LOCALITIES,
    FIELD_SUBJECT_ORGANIZATIONAL_UNITS,
    FIELD_SUBJECT_POSTAL_CODES,
    FIELD_SUBJECT_PROVINCES,
    FIELD_SUBJECT_STREET_ADDRESSES,
    FIELD_IS_CA,
    FIELD_USAGES,
    FIELD_DURATION,
    FIELD_ISSUER_REF,
)

ALT_NAME_FIELD_ORDER: tuple[str, ...] = (
    FIELD_COMMON_NAME,
    FIELD_DNS_NAMES,
    FIELD_IP_ADDRESSES,
    FIELD_URI_SANS,
)


def _alt_name_violations(artifact: X509Artifact, spec: CertificateSpec) -> List[str]:
    violations: List[str] = []
    if artifact.common_name != spec.common_name:
        violations.append(FIELD_COMMON_NAME)
    if not equal_unsorted(artifact.dns_names, spec.dns_names):
        violations.append(FIELD_DNS_NAMES)
    if not equal_ip_addresses_unsorted(artifact.ip_addresses, spec.ip_addresses):
        violations.append(FIELD_IP_ADDRESSES)
    if not equal_unsorted(artifact.uris, spec.uri_sans):
        violations.append(FIELD_URI_SANS)
    return violations


def request_matches_spec(req: CertificateRequest, spec: CertificateSpec) -> List[str]:
    """Compare a CertificateRequest with a CertificateSpec.

    Names and subject fields are read from the decoded CSR; isCA, usages,
    duration and issuerRef are read from the request's own spec. Duration is
    only compared when both sides set one.

    Args:
        req: The request whose CSR and parameters are checked.
        spec: The desired certificate spec. Never modified.

    Returns:
        Field paths on the Certificate that do not match their counterparts
        on the request, in check order.

    Raises:
        DecodeError: If the CSR cannot be decoded.
    """
    x509req = decode_x509_certificate_request_bytes(req.spec.request)

    # Work on a copy with an empty subject so the caller's spec is untouched.
    subject = spec.subject
    if subject is None:
        subject = X509Subject()
        spec = spec.model_copy(update={"subject": subject})

    violations = _alt_name_violations(x509req, spec)
    if x509req.serial_number != subject.serial_number:
        violations.append(FIELD_SUBJECT_SERIAL_NUMBER)
    if not equal_unsorted(x509req.organizations, subject.organizations):
        violations.append(FIELD_SUBJECT_ORGANIZATIONS)
    if not equal_unsorted(x509req.countries, subject.countries):
        violations.append(FIELD_SUBJECT_COUNTRIES)
    if not equal_unsorted(x509req.localities, subject.localities):
        violations.append(FIELD_SUBJECT_LOCALITIES)
    if not equal_unsorted(x509req.organizational_units, subject.organizational_units):
        violations.append(FIELD_SUBJECT_ORGANIZATIONAL_UNITS)
    if not equal_unsorted(x509req.postal_codes, subject.postal_codes):
        violations.append(FIELD_SUBJECT_POSTAL_CODES)
    if not equal_unsorted(x509req.provinces, subject.provinces):
        violations.append(FIELD_SUBJECT_PROVINCES)
    if not equal_unsorted(x509req.street_addresses, subject.street_addresses):
        violations.append(FIELD_SUBJECT_STREET_ADDRESSES)
    if req.spec.is_ca != spec.is_ca:
        violations.append(FIELD_IS_CA)
    if not equal_key_usages_unsorted(req.spec.usages, spec.usages):
        violations.append(FIELD_USAGES)
    if (
        spec.duration is not None
        and req.spec.duration is not None
        and spec.duration != req.spec.duration
    ):
        violations.append(FIELD_DURATION)
    if not issuer_refs_equal(spec.issuer_ref, req.spec.issuer_ref):
        violations.append(FIELD_ISSUER_REF)

    return violations


def secret_data_alt_names_match_spec(secret: Secret, spec: CertificateSpec) -> List[str]:
    """Compare the certificate stored in a Secret with a CertificateSpec.

    This is a purposely narrower check than request_matches_spec: some
    issuers override subject fields, usages or duration, so only the common
    name and subject alternative names are compared.

    Raises:
        DecodeError: If the Secret holds no certificate or it cannot be decoded.
    """
    x509cert = decode_x509_certificate_bytes(secret.data.get(TLS_CERT_KEY, b""))
    return _alt_name_violations(x509cert, spec)
