from enum import StrEnum

from pydantic import BaseModel


class SortBy(StrEnum):
    Enabled = "Enabled"
    Name = "Name"
    Priority = "Priority"
    Provider = "Provider"
    RequiredStatus = "RequiredStatus"
    ApprovalCategory = "ApprovalCategory"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS: dict[SortBy, str] = {
    SortBy.Enabled: "Enabled",
    SortBy.Name: "Name",
    SortBy.Priority: "Priority",
    SortBy.Provider: "Provider",
    SortBy.RequiredStatus: "Is Required",
    SortBy.ApprovalCategory: "Approval",
}


class SortingConfig(BaseModel):
    sort_category: SortBy = SortBy.Enabled
    is_ascending: bool = True
