from pydantic import BaseModel, ConfigDict, Field

from ..capabilities import CapabilitySummary
from ..typedefs import TypeDescriptor


class SearchAnalysisResult(BaseModel):
    summary: str
    total_methods: int
    methods: list[CapabilitySummary] = Field(default_factory=list)
    suggested_method: str | None = None
    usage: str


class TypeDefinitionRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    type_names: list[str] | None = Field(default=None, alias="typeNames")
    depth: int | None = None
    include_examples: bool | None = Field(default=None, alias="includeExamples")


class TypeDefinitionResult(BaseModel):
    types: list[TypeDescriptor] = Field(default_factory=list)
    available_types: list[str] = Field(default_factory=list)
