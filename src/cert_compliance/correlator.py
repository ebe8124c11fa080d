"""Correlate Secret changes back to the Certificates that must be reconciled.

When a Secret changes, every Certificate in the same namespace whose
predicate (built from the Secret's name) matches is re-queued. The predicate
family decides which relationship is followed: ``with_secret_name`` for the
Secret a Certificate is stored in, ``with_next_private_key_secret_name`` for
the private key Secret of an in-flight rotation.
"""
import logging
from typing import Callable, List, Optional

from cert_compliance.api import Certificate, Secret
from cert_compliance.filters import list_certificates_matching_predicate
from cert_compliance.listers import Lister
from cert_compliance.models import KeyFuncError, LabelSelector, StoreError
from cert_compliance.predicates import CertificatePredicateFactory
from cert_compliance.workqueue import WorkQueue, key_func

logger = logging.getLogger("cert_compliance.correlator")


def on_secret_changed(
    obj: object,
    lister: Lister[Certificate],
    selector: LabelSelector,
    secret_name_predicate: CertificatePredicateFactory,
    queue: Optional[WorkQueue] = None,
    log: Optional[logging.Logger] = None,
) -> List[str]:
    """Find the Certificates affected by a changed Secret and enqueue them.

    Args:
        obj: The changed object as delivered by the watch. Anything other
            than a Secret is logged and ignored.
        lister: Certificate lister; queried in the Secret's namespace.
        selector: Label selector passed through to the lister.
        secret_name_predicate: Builds the Certificate predicate from the
            Secret's name.
        queue: If given, every computed key is added to it.
        log: Logger to use instead of the module logger.

    Returns:
        The reconciliation keys that were computed, in lister order. Empty if
        the object was not a Secret or listing failed.
    """
    log = log or logger

    if not isinstance(obj, Secret):
        log.info("Non-Secret type resource passed to on_secret_changed: %s", type(obj).__name__)
        return []

    namespace = obj.metadata.namespace
    predicate = secret_name_predicate(obj.metadata.name)
    try:
        certs = list_certificates_matching_predicate(
            lister.namespaced(namespace), selector, predicate
        )
    except StoreError as exc:
        log.error("Failed listing Certificate resources in %r: %s", namespace, exc)
        return []

    keys: List[str] = []
    for cert in certs:
        try:
            key = key_func(cert)
        except KeyFuncError as exc:
            log.error("Error determining 'key' for resource: %s", exc)
            continue
        keys.append(key)
        if queue is not None:
            log.debug("Enqueueing Certificate %s for Secret %s/%s", key, namespace, obj.metadata.name)
            queue.add(key)
    return keys


def enqueue_certificates_for_secret_name_func(
    lister: Lister[Certificate],
    selector: LabelSelector,
    secret_name_predicate: CertificatePredicateFactory,
    queue: WorkQueue,
    log: Optional[logging.Logger] = None,
) -> Callable[[object], None]:
    """Bind on_secret_changed into a watch event handler."""

    def handler(obj: object) -> None:
        on_secret_changed(obj, lister, selector, secret_name_predicate, queue=queue, log=log)

    return handler
