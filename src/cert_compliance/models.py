"""Core metadata models and exceptions for cert-compliance."""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class OwnerReference(BaseModel):
    """Reference from a dependent resource to the resource that owns it."""

    model_config = ConfigDict(frozen=True)

    api_version: str = Field(
        default="cert-manager.io/v1",
        description="API version of the owner",
    )
    kind: str = Field(..., min_length=1, description="Kind of the owner")
    name: str = Field(..., min_length=1, description="Name of the owner")
    uid: str = Field(..., min_length=1, description="UID of the owner")
    controller: Optional[bool] = Field(
        None,
        description="True if the owner is the managing controller",
    )


class ObjectMeta(BaseModel):
    """Identity and bookkeeping metadata shared by every stored resource."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Resource name")
    namespace: str = Field(default="", description="Namespace the resource lives in")
    uid: str = Field(default="", description="Store-assigned unique identifier")
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)
    owner_references: List[OwnerReference] = Field(default_factory=list)


class LabelSelector(BaseModel):
    """Equality-based label selector.

    An empty selector matches every resource.
    """

    model_config = ConfigDict(frozen=True)

    match_labels: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def everything(cls) -> "LabelSelector":
        """Selector that matches all resources."""
        return cls()

    def matches(self, labels: Dict[str, str]) -> bool:
        for key, value in self.match_labels.items():
            if labels.get(key) != value:
                return False
        return True

    def __repr__(self) -> str:
        if not self.match_labels:
            return "LabelSelector(<everything>)"
        terms = ",".join(f"{k}={v}" for k, v in sorted(self.match_labels.items()))
        return f"LabelSelector({terms})"


def get_controller_of(meta: ObjectMeta) -> Optional[OwnerReference]:
    """Return the controlling owner reference of a resource, if any."""
    for ref in meta.owner_references:
        if ref.controller:
            return ref
    return None


def is_controlled_by(meta: ObjectMeta, owner_uid: str) -> bool:
    """True if the controlling owner reference of ``meta`` points at ``owner_uid``.

    A plain (non-controller) owner reference to the same UID does not count.
    """
    ref = get_controller_of(meta)
    if ref is None:
        return False
    return ref.uid == owner_uid


# Custom Exceptions
class CertComplianceError(Exception):
    """Base exception for all library errors."""
    pass


class DecodeError(CertComplianceError):
    """PEM or DER input could not be decoded into an X.509 artifact."""

    def __init__(self, kind: str, reason: str) -> None:
        self.kind = kind
        self.reason = reason
        super().__init__(f"error decoding {kind}: {reason}")


class StoreError(CertComplianceError):
    """Resource store (lister) failure."""
    pass


class NotFoundError(StoreError):
    """Requested resource does not exist in the store."""

    def __init__(self, namespace: str, name: str) -> None:
        self.namespace = namespace
        self.name = name
        super().__init__(f"resource {namespace}/{name} not found")


class KeyFuncError(CertComplianceError):
    """Reconciliation key could not be computed for a resource."""

    def __init__(self, obj: object, reason: str) -> None:
        self.obj = obj
        super().__init__(f"couldn't create key for object {obj!r}: {reason}")
