"""Certificate resource contracts: Certificate, CertificateRequest and Secret."""

from datetime import timedelta
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from cert_compliance.models import ObjectMeta

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

CERTIFICATE_REQUEST_REVISION_ANNOTATION_KEY: str = "cert-manager.io/certificate-revision"

TLS_CERT_KEY: str = "tls.crt"
TLS_PRIVATE_KEY_KEY: str = "tls.key"
TLS_SECRET_TYPE: str = "kubernetes.io/tls"


class KeyUsage(str, Enum):
    """Key usages and extended key usages a certificate may request."""

    SIGNING = "signing"
    DIGITAL_SIGNATURE = "digital signature"
    CONTENT_COMMITMENT = "content commitment"
    KEY_ENCIPHERMENT = "key encipherment"
    KEY_AGREEMENT = "key agreement"
    DATA_ENCIPHERMENT = "data encipherment"
    CERT_SIGN = "cert sign"
    CRL_SIGN = "crl sign"
    ENCIPHER_ONLY = "encipher only"
    DECIPHER_ONLY = "decipher only"
    ANY = "any"
    SERVER_AUTH = "server auth"
    CLIENT_AUTH = "client auth"
    CODE_SIGNING = "code signing"
    EMAIL_PROTECTION = "email protection"
    SMIME = "s/mime"
    IPSEC_END_SYSTEM = "ipsec end system"
    IPSEC_TUNNEL = "ipsec tunnel"
    IPSEC_USER = "ipsec user"
    TIMESTAMPING = "timestamping"
    OCSP_SIGNING = "ocsp signing"
    MICROSOFT_SGC = "microsoft sgc"
    NETSCAPE_SGC = "netscape sgc"


# ---------------------------------------------------------------------------
# Spec models
# ---------------------------------------------------------------------------


class X509Subject(BaseModel):
    """Distinguished-name fields requested for a certificate subject."""

    model_config = ConfigDict(frozen=True)

    organizations: List[str] = Field(default_factory=list)
    countries: List[str] = Field(default_factory=list)
    organizational_units: List[str] = Field(default_factory=list)
    localities: List[str] = Field(default_factory=list)
    provinces: List[str] = Field(default_factory=list)
    street_addresses: List[str] = Field(default_factory=list)
    postal_codes: List[str] = Field(default_factory=list)
    serial_number: str = Field(default="")


class IssuerReference(BaseModel):
    """Reference to the issuer that should sign a certificate."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Issuer resource name")
    kind: str = Field(default="", description="Issuer or ClusterIssuer")
    group: str = Field(default="", description="API group of the issuer")


class CertificateSpec(BaseModel):
    """Desired state of a certificate."""

    model_config = ConfigDict(frozen=True)

    secret_name: str = Field(
        ...,
        min_length=1,
        description="Name of the Secret the signed certificate is stored in",
    )
    common_name: str = Field(default="")
    dns_names: List[str] = Field(default_factory=list)
    ip_addresses: List[str] = Field(default_factory=list)
    uri_sans: List[str] = Field(default_factory=list)
    subject: Optional[X509Subject] = Field(
        None, description="Subject fields; None is treated as an empty subject"
    )
    is_ca: bool = Field(default=False)
    usages: List[KeyUsage] = Field(default_factory=list)
    duration: Optional[timedelta] = Field(
        None, description="Requested lifetime of the certificate"
    )
    issuer_ref: IssuerReference


class CertificateStatus(BaseModel):
    """Observed state of a certificate."""

    model_config = ConfigDict(frozen=True)

    revision: Optional[int] = Field(None, ge=1)
    next_private_key_secret_name: Optional[str] = Field(
        None,
        description="Secret holding the private key for the next issuance",
    )


class Certificate(BaseModel):
    """A declaratively managed certificate."""

    model_config = ConfigDict(frozen=True)

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: CertificateSpec
    status: CertificateStatus = Field(default_factory=CertificateStatus)


class CertificateRequestSpec(BaseModel):
    """A single signing request raised on behalf of a Certificate."""

    model_config = ConfigDict(frozen=True)

    request: bytes = Field(..., description="PEM encoded x509 certificate signing request")
    is_ca: bool = Field(default=False)
    usages: List[KeyUsage] = Field(default_factory=list)
    duration: Optional[timedelta] = None
    issuer_ref: IssuerReference


class CertificateRequest(BaseModel):
    """Request for a signed certificate from an issuer."""

    model_config = ConfigDict(frozen=True)

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: CertificateRequestSpec


class Secret(BaseModel):
    """Credential-store object holding issued certificate material."""

    model_config = ConfigDict(frozen=True)

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    type: str = Field(default=TLS_SECRET_TYPE)
    data: Dict[str, bytes] = Field(default_factory=dict)

    def __repr__(self) -> str:
        """Human-readable representation without key material."""
        return (
            f"Secret(namespace={self.metadata.namespace}, "
            f"name={self.metadata.name}, "
            f"keys={sorted(self.data)})"
        )
