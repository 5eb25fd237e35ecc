"""Result models for OpenAPI complexity analysis.

Python attributes are snake_case; every model serializes with camelCase
keys (``fieldCount``, ``maxDepth``, ``totalEndpoints``) when dumped with
``by_alias=True``, and accepts either spelling on construction.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SchemaAnalysis(_CamelModel):
    """Field count and maximum nesting depth of one schema."""

    model_config = ConfigDict(frozen=True)

    field_count: int = Field(default=0, ge=0)
    max_depth: int = Field(default=0, ge=0)


class EndpointAnalysis(_CamelModel):
    """Request and response complexity of a single operation."""

    path: str  # /pets/{petId}
    method: HttpMethod
    operation_id: str | None = None
    summary: str | None = None
    request: SchemaAnalysis
    response: SchemaAnalysis


class OpenAPIAnalysisReport(_CamelModel):
    """Per-operation analysis of a whole document."""

    title: str
    version: str
    endpoints: list[EndpointAnalysis]
    total_endpoints: int = Field(ge=0)


class ReportSummary(_CamelModel):
    """Cross-endpoint totals derived from a report."""

    total_endpoints: int = 0
    total_request_fields: int = 0
    total_response_fields: int = 0
    max_request_depth: int = 0
    max_response_depth: int = 0
