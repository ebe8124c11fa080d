"""Composable predicates over Certificate and CertificateRequest resources.

Each predicate is a small immutable value object exposing
``matches(resource) -> bool``. A sequence of predicates matches a resource
when every predicate does; evaluation stops at the first failure.

Example:
    >>> from cert_compliance.predicates import with_secret_name
    >>> predicate = with_secret_name("web-tls")
    >>> predicate
    SecretNamePredicate(name='web-tls')
"""
from dataclasses import dataclass
from typing import Callable, Iterable, Protocol, TypeVar

from cert_compliance.api import (
    CERTIFICATE_REQUEST_REVISION_ANNOTATION_KEY,
    Certificate,
    CertificateRequest,
)
from cert_compliance.models import ObjectMeta, is_controlled_by

T_contra = TypeVar("T_contra", contravariant=True)
R = TypeVar("R")


class Predicate(Protocol[T_contra]):
    """A pure boolean test over a single resource."""

    def matches(self, resource: T_contra) -> bool:
        ...


CertificatePredicate = Predicate[Certificate]
CertificateRequestPredicate = Predicate[CertificateRequest]

# Builds a certificate predicate bound to the name of a changed Secret.
CertificatePredicateFactory = Callable[[str], CertificatePredicate]


# ---------------------------------------------------------------------------
# Certificate predicates
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SecretNamePredicate:
    """Matches Certificates whose spec.secretName equals ``name``."""

    name: str

    def matches(self, resource: Certificate) -> bool:
        return resource.spec.secret_name == self.name


@dataclass(frozen=True)
class NextPrivateKeySecretNamePredicate:
    """Matches Certificates whose in-rotation private key Secret is ``name``.

    Certificates with no next private key Secret never match.
    """

    name: str

    def matches(self, resource: Certificate) -> bool:
        next_name = resource.status.next_private_key_secret_name
        if next_name is None:
            return False
        return next_name == self.name


# ---------------------------------------------------------------------------
# CertificateRequest predicates
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CertificateRevisionPredicate:
    """Matches requests annotated with the given Certificate revision."""

    revision: int

    def matches(self, resource: CertificateRequest) -> bool:
        value = resource.metadata.annotations.get(CERTIFICATE_REQUEST_REVISION_ANNOTATION_KEY)
        if value is None:
            return False
        return value == str(self.revision)


@dataclass(frozen=True)
class CertificateRequestOwnerPredicate:
    """Matches requests whose controlling owner has UID ``owner_uid``."""

    owner_uid: str

    def matches(self, resource: CertificateRequest) -> bool:
        return is_controlled_by(resource.metadata, self.owner_uid)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def with_secret_name(name: str) -> SecretNamePredicate:
    return SecretNamePredicate(name=name)


def with_next_private_key_secret_name(name: str) -> NextPrivateKeySecretNamePredicate:
    return NextPrivateKeySecretNamePredicate(name=name)


def with_certificate_revision(revision: int) -> CertificateRevisionPredicate:
    return CertificateRevisionPredicate(revision=revision)


class _HasMetadata(Protocol):
    @property
    def metadata(self) -> ObjectMeta:
        ...


def with_certificate_request_owner(owner: _HasMetadata) -> CertificateRequestOwnerPredicate:
    """Predicate matching requests controlled by ``owner`` (compared by UID)."""
    return CertificateRequestOwnerPredicate(owner_uid=owner.metadata.uid)


def matches_all(predicates: Iterable[Predicate[R]], resource: R) -> bool:
    """True if every predicate matches; short-circuits on the first miss."""
    for predicate in predicates:
        if not predicate.matches(resource):
            return False
    return True
