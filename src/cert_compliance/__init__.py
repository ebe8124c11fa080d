"""
cert-compliance: Spec-compliance checks and change correlation for certificate controllers.

This library provides the pure building blocks a certificate-lifecycle
controller reconciles with: comparing a decoded signing request or issued
certificate against the desired CertificateSpec, and mapping Secret changes
back to the Certificates that must be re-queued.

Example:
    >>> from cert_compliance import (
    ...     InMemoryLister, InMemoryWorkQueue, LabelSelector,
    ...     enqueue_certificates_for_secret_name_func, with_secret_name,
    ... )
    >>> certs = InMemoryLister()
    >>> queue = InMemoryWorkQueue()
    >>> handler = enqueue_certificates_for_secret_name_func(
    ...     certs, LabelSelector.everything(), with_secret_name, queue,
    ... )
    >>> len(queue)
    0
"""

__version__ = "0.1.0"

# Core metadata models
from cert_compliance.models import (
    OwnerReference,
    ObjectMeta,
    LabelSelector,
    get_controller_of,
    is_controlled_by,
    CertComplianceError,
    DecodeError,
    StoreError,
    NotFoundError,
    KeyFuncError,
)

# Resource contracts
from cert_compliance.api import (
    CERTIFICATE_REQUEST_REVISION_ANNOTATION_KEY,
    TLS_CERT_KEY,
    TLS_PRIVATE_KEY_KEY,
    TLS_SECRET_TYPE,
    KeyUsage,
    X509Subject,
    IssuerReference,
    CertificateSpec,
    CertificateStatus,
    Certificate,
    CertificateRequestSpec,
    CertificateRequest,
    Secret,
)

# X.509 decoding
from cert_compliance.pki import (
    X509Artifact,
    decode_x509_certificate_request_bytes,
    decode_x509_certificate_bytes,
    ip_addresses_to_string,
    urls_to_string,
)

# Set comparison
from cert_compliance.equality import (
    equal_unsorted,
    equal_ip_addresses_unsorted,
    equal_key_usages_unsorted,
    issuer_refs_equal,
)

# Predicates
from cert_compliance.predicates import (
    Predicate,
    CertificatePredicate,
    CertificateRequestPredicate,
    CertificatePredicateFactory,
    SecretNamePredicate,
    NextPrivateKeySecretNamePredicate,
    CertificateRevisionPredicate,
    CertificateRequestOwnerPredicate,
    with_secret_name,
    with_next_private_key_secret_name,
    with_certificate_revision,
    with_certificate_request_owner,
    matches_all,
)

# Listers and filtering
from cert_compliance.listers import (
    Lister,
    NamespaceLister,
    InMemoryLister,
    GetFunc,
    certificate_get_func,
)
from cert_compliance.filters import (
    filter_resources,
    list_certificates_matching_predicate,
    list_certificate_requests_matching_predicates,
)

# Compliance checks
from cert_compliance.compliance import (
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
    REQUEST_FIELD_ORDER,
    ALT_NAME_FIELD_ORDER,
    request_matches_spec,
    secret_data_alt_names_match_spec,
)

# Work queue and change correlation
from cert_compliance.workqueue import (
    WorkQueue,
    InMemoryWorkQueue,
    ShutDownError,
    key_func,
    split_meta_namespace_key,
)
from cert_compliance.correlator import (
    on_secret_changed,
    enqueue_certificates_for_secret_name_func,
)

# Public API (controls what's exported with "from cert_compliance import *")
__all__ = [
    # Version
    "__version__",
    # Models
    "OwnerReference",
    "ObjectMeta",
    "LabelSelector",
    "get_controller_of",
    "is_controlled_by",
    # Exceptions
    "CertComplianceError",
    "DecodeError",
    "StoreError",
    "NotFoundError",
    "KeyFuncError",
    "ShutDownError",
    # Resource contracts
    "CERTIFICATE_REQUEST_REVISION_ANNOTATION_KEY",
    "TLS_CERT_KEY",
    "TLS_PRIVATE_KEY_KEY",
    "TLS_SECRET_TYPE",
    "KeyUsage",
    "X509Subject",
    "IssuerReference",
    "CertificateSpec",
    "CertificateStatus",
    "Certificate",
    "CertificateRequestSpec",
    "CertificateRequest",
    "Secret",
    # X.509 decoding
    "X509Artifact",
    "decode_x509_certificate_request_bytes",
    "decode_x509_certificate_bytes",
    "ip_addresses_to_string",
    "urls_to_string",
    # Set comparison
    "equal_unsorted",
    "equal_ip_addresses_unsorted",
    "equal_key_usages_unsorted",
    "issuer_refs_equal",
    # Predicates
    "Predicate",
    "CertificatePredicate",
    "CertificateRequestPredicate",
    "CertificatePredicateFactory",
    "SecretNamePredicate",
    "NextPrivateKeySecretNamePredicate",
    "CertificateRevisionPredicate",
    "CertificateRequestOwnerPredicate",
    "with_secret_name",
    "with_next_private_key_secret_name",
    "with_certificate_revision",
    "with_certificate_request_owner",
    "matches_all",
    # Listers and filtering
    "Lister",
    "NamespaceLister",
    "InMemoryLister",
    "GetFunc",
    "certificate_get_func",
    "filter_resources",
    "list_certificates_matching_predicate",
    "list_certificate_requests_matching_predicates",
    # Compliance checks
    "FIELD_COMMON_NAME",
    "FIELD_DNS_NAMES",
    "FIELD_IP_ADDRESSES",
    "FIELD_URI_SANS",
    "FIELD_SUBJECT_SERIAL_NUMBER",
    "FIELD_SUBJECT_ORGANIZATIONS",
    "FIELD_SUBJECT_COUNTRIES",
    "FIELD_SUBJECT_LOCALITIES",
    "FIELD_SUBJECT_ORGANIZATIONAL_UNITS",
    "FIELD_SUBJECT_POSTAL_CODES",
    "FIELD_SUBJECT_PROVINCES",
    "FIELD_SUBJECT_STREET_ADDRESSES",
    "FIELD_IS_CA",
    "FIELD_USAGES",
    "FIELD_DURATION",
    "FIELD_ISSUER_REF",
    "REQUEST_FIELD_ORDER",
    "ALT_NAME_FIELD_ORDER",
    "request_matches_spec",
    "secret_data_alt_names_match_spec",
    # Work queue and change correlation
    "WorkQueue",
    "InMemoryWorkQueue",
    "key_func",
    "split_meta_namespace_key",
    "on_secret_changed",
    "enqueue_certificates_for_secret_name_func",
]
