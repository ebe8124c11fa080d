"""List-then-filter helpers over namespace-scoped listers."""
from typing import List, TypeVar

from cert_compliance.api import Certificate, CertificateRequest
from cert_compliance.listers import NamespaceLister, Resource
from cert_compliance.models import LabelSelector
from cert_compliance.predicates import (
    CertificatePredicate,
    CertificateRequestPredicate,
    Predicate,
    matches_all,
)

T = TypeVar("T", bound=Resource)


def filter_resources(
    lister: NamespaceLister[T],
    selector: LabelSelector,
    predicate: Predicate[T],
    *predicates: Predicate[T],
) -> List[T]:
    """List resources once and keep those matching every predicate.

    The lister's order is preserved. At least one predicate is required; pass
    an always-true predicate explicitly to keep everything.

    Raises:
        StoreError: Propagated unchanged from the lister; no partial results.
    """
    checks = (predicate, *predicates)
    return [obj for obj in lister.list(selector) if matches_all(checks, obj)]


def list_certificates_matching_predicate(
    lister: NamespaceLister[Certificate],
    selector: LabelSelector,
    predicate: CertificatePredicate,
) -> List[Certificate]:
    return filter_resources(lister, selector, predicate)


def list_certificate_requests_matching_predicates(
    lister: NamespaceLister[CertificateRequest],
    selector: LabelSelector,
    predicate: CertificateRequestPredicate,
    *predicates: CertificateRequestPredicate,
) -> List[CertificateRequest]:
    return filter_resources(lister, selector, predicate, *predicates)
