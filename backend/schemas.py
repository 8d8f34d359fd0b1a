"""Pydantic schemas for API request/response and the rendered view.

Responses are serialized with camelCase names (overallScore, passedCount,
ogTitle, ...) so existing consumers of the report keep working.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from analyzer import Analysis
from models import Report, TagRecord


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class AnalyzeRequest(BaseModel):
    """Request body for POST /analyze."""

    url: str

    @field_validator("url", mode="before")
    @classmethod
    def normalize_url_field(cls, value: object) -> str:
        return str(value or "").strip()


# -----------------------------
# Report
# -----------------------------
class FindingOut(CamelModel):
    kind: str
    title: str
    description: str
    category: str
    category_points: int
    score_points: int


class CategoryTallyOut(CamelModel):
    earned_points: int
    max_points: int


class ReportOut(CamelModel):
    overall_score: int = Field(ge=0, le=100)
    passed_count: int
    warning_count: int
    error_count: int
    findings: list[FindingOut]
    categories: dict[str, CategoryTallyOut]

    @classmethod
    def from_report(cls, report: Report) -> "ReportOut":
        return cls(
            overall_score=report.overall_score,
            passed_count=report.passed_count,
            warning_count=report.warning_count,
            error_count=report.error_count,
            findings=[
                FindingOut(
                    kind=f.kind.value,
                    title=f.title,
                    description=f.description,
                    category=f.category.value,
                    category_points=f.category_points,
                    score_points=f.score_points,
                )
                for f in report.findings
            ],
            categories={
                category.value: CategoryTallyOut(
                    earned_points=tally.earned_points,
                    max_points=tally.max_points,
                )
                for category, tally in report.categories.items()
            },
        )


class TagRecordOut(CamelModel):
    title: str = ""
    description: str = ""
    keywords: str = ""
    canonical: str = ""
    robots: str = ""
    viewport: str = ""
    charset: str = ""
    og_title: str = ""
    og_description: str = ""
    og_image: str = ""
    og_url: str = ""
    og_type: str = ""
    og_site_name: str = ""
    twitter_card: str = ""
    twitter_title: str = ""
    twitter_description: str = ""
    twitter_image: str = ""
    twitter_site: str = ""
    author: str = ""
    language: str = ""
    structured_data: list[Any] = Field(default_factory=list)

    @classmethod
    def from_tags(cls, tags: TagRecord) -> "TagRecordOut":
        fields = {name: getattr(tags, name) for name in cls.model_fields if name != "structured_data"}
        return cls(structured_data=list(tags.structured_data), **fields)


# -----------------------------
# View
# -----------------------------
class ScoreSummary(CamelModel):
    score: int
    passed: int
    warnings: int
    errors: int
    score_degrees: float


class SearchPreview(CamelModel):
    url: str
    title: str
    description: str


class SocialPreview(CamelModel):
    title: str
    description: str
    domain: str
    image: str | None = None


class FindingView(CamelModel):
    kind: str
    icon: str
    title: str
    description: str


class CategoryCard(CamelModel):
    id: str
    name: str
    percentage: int
    status: str
    status_class: str
    score_degrees: float


class MetaTagEntry(CamelModel):
    name: str
    content: str


class TagGroup(CamelModel):
    title: str
    tags: list[MetaTagEntry]


class StructuredDataBlock(CamelModel):
    label: str
    content: str


class ReportView(CamelModel):
    summary: ScoreSummary
    search: SearchPreview
    facebook: SocialPreview
    twitter: SocialPreview
    findings: list[FindingView]
    categories: list[CategoryCard]
    tag_groups: list[TagGroup]
    structured_data: list[StructuredDataBlock]


class AnalyzeResponse(CamelModel):
    """Response body for POST /analyze."""

    url: str
    tags: TagRecordOut
    report: ReportOut
    view: ReportView


    @classmethod
    def from_analysis(cls, analysis: Analysis, view: ReportView) -> "AnalyzeResponse":
        return cls(
            url=analysis.url,
            tags=TagRecordOut.from_tags(analysis.tags),
            report=ReportOut.from_report(analysis.report),
            view=view,
        )
