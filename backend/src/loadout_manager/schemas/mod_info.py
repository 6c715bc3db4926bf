"""Metadata a provider resolves for a mod specification.

The store never produces or caches these; they are looked up through a
``ModResolver`` when the presentation layer needs names or tags.
"""

from enum import StrEnum

from pydantic import BaseModel, Field

from loadout_manager.models.mod_data import ModSpecification


class ProviderKind(StrEnum):
    Modio = "modio"
    Http = "http"
    File = "file"


class ApprovalStatus(StrEnum):
    Verified = "Verified"
    Approved = "Approved"
    Sandbox = "Sandbox"

    @property
    def rank(self) -> int:
        return list(ApprovalStatus).index(self)


class RequiredStatus(StrEnum):
    RequiredByAll = "RequiredByAll"
    Optional = "Optional"

    @property
    def rank(self) -> int:
        return list(RequiredStatus).index(self)


class ModioTags(BaseModel):
    approval_status: ApprovalStatus = ApprovalStatus.Sandbox
    required_status: RequiredStatus = RequiredStatus.Optional
    qol: bool = False
    gameplay: bool = False
    audio: bool = False
    visual: bool = False
    framework: bool = False
    versions: list[str] = Field(default_factory=list)


class ModInfo(BaseModel):
    name: str
    spec: ModSpecification
    provider: ProviderKind
    versions: list[ModSpecification] = Field(default_factory=list)
    modio_tags: ModioTags | None = None
