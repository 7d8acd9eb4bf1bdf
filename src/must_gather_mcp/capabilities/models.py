from typing import Literal

from pydantic import BaseModel, ConfigDict

Severity = Literal["critical", "warning", "info"]
Scope = Literal["cluster", "namespace", "pod", "node", "container"]
Category = Literal["health", "performance", "configuration", "logs"]


class Parameter(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    optional: bool = False
    description: str | None = None


class CapabilitySummary(BaseModel):
    """Public view of a capability, as returned to callers."""

    model_config = ConfigDict(frozen=True)

    name: str
    signature: str
    description: str
    component: str | None = None
    severity: Severity
    scope: Scope
    category: Category
    parameters: tuple[Parameter, ...] = ()
    returns: str
    example: str = ""


class CapabilityDescriptor(CapabilitySummary):
    keywords: tuple[str, ...] = ()

    def to_summary(self) -> CapabilitySummary:
        return CapabilitySummary.model_validate(self.model_dump(exclude={"keywords"}))


class SearchQuery(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    component: str | None = None
    severity: str | None = None
    scope: str | None = None
    category: str | None = None
    keyword: str | None = None
    limit: int | None = None
