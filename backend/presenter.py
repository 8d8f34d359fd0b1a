"""Turn a Report and its TagRecord into a display-ready ReportView.

Pure: no scoring happens here and nothing is written anywhere. The API
returns the view as JSON; the CLI prints it as text.
"""

import json
from urllib.parse import urlparse

from models import CATEGORY_LABELS, Category, Kind, Report, TagRecord
from scoring import category_status
from schemas import (
    CategoryCard,
    FindingView,
    MetaTagEntry,
    ReportView,
    ScoreSummary,
    SearchPreview,
    SocialPreview,
    StructuredDataBlock,
    TagGroup,
)

NO_TITLE = "No title"
NO_DESCRIPTION = "No description"
NO_SEARCH_DESCRIPTION = "No description available"

ICONS = {
    Kind.PASSED: "check-circle",
    Kind.WARNING: "exclamation-triangle",
    Kind.ERROR: "times-circle",
}


def _first(*values: str) -> str:
    for value in values:
        if value:
            return value
    return ""


def _degrees(percentage: float) -> float:
    return percentage / 100 * 360


def _summary(report: Report) -> ScoreSummary:
    return ScoreSummary(
        score=report.overall_score,
        passed=report.passed_count,
        warnings=report.warning_count,
        errors=report.error_count,
        score_degrees=_degrees(report.overall_score),
    )


def _category_cards(report: Report) -> list[CategoryCard]:
    cards: list[CategoryCard] = []
    for category in Category:
        tally = report.categories[category]
        percentage = tally.percentage
        status, status_class = category_status(percentage)
        cards.append(
            CategoryCard(
                id=category.value,
                name=CATEGORY_LABELS[category],
                percentage=percentage,
                status=status,
                status_class=status_class,
                score_degrees=_degrees(percentage),
            )
        )
    return cards


def _tag_groups(tags: TagRecord) -> list[TagGroup]:
    groups = [
        (
            "Basic SEO Tags",
            [
                ("Title", tags.title),
                ("Meta Description", tags.description),
                ("Meta Keywords", tags.keywords),
                ("Canonical URL", tags.canonical),
                ("Robots", tags.robots),
                ("Viewport", tags.viewport),
                ("Charset", tags.charset),
                ("Language", tags.language),
                ("Author", tags.author),
            ],
        ),
        (
            "Open Graph Tags",
            [
                ("og:title", tags.og_title),
                ("og:description", tags.og_description),
                ("og:image", tags.og_image),
                ("og:url", tags.og_url),
                ("og:type", tags.og_type),
                ("og:site_name", tags.og_site_name),
            ],
        ),
        (
            "Twitter Card Tags",
            [
                ("twitter:card", tags.twitter_card),
                ("twitter:title", tags.twitter_title),
                ("twitter:description", tags.twitter_description),
                ("twitter:image", tags.twitter_image),
                ("twitter:site", tags.twitter_site),
            ],
        ),
    ]
    return [
        TagGroup(
            title=title,
            tags=[MetaTagEntry(name=name, content=content) for name, content in entries if content],
        )
        for title, entries in groups
    ]


def _structured_data_blocks(tags: TagRecord) -> list[StructuredDataBlock]:
    return [
        StructuredDataBlock(
            label=f"JSON-LD Schema {index}",
            content=json.dumps(data, indent=2, ensure_ascii=False),
        )
        for index, data in enumerate(tags.structured_data, start=1)
    ]


def render(report: Report, tags: TagRecord, url: str) -> ReportView:
    """Build the full view: score block, previews, findings, categories, tags."""
    domain = urlparse(url).hostname or ""

    return ReportView(
        summary=_summary(report),
        search=SearchPreview(
            url=url,
            title=_first(tags.title, NO_TITLE),
            description=_first(tags.description, NO_SEARCH_DESCRIPTION),
        ),
        facebook=SocialPreview(
            title=_first(tags.og_title, tags.title, NO_TITLE),
            description=_first(tags.og_description, tags.description, NO_DESCRIPTION),
            domain=domain,
            image=tags.og_image or None,
        ),
        twitter=SocialPreview(
            title=_first(tags.twitter_title, tags.og_title, tags.title, NO_TITLE),
            description=_first(tags.twitter_description, tags.og_description, tags.description, NO_DESCRIPTION),
            domain=domain,
            image=_first(tags.twitter_image, tags.og_image) or None,
        ),
        findings=[
            FindingView(kind=f.kind.value, icon=ICONS[f.kind], title=f.title, description=f.description)
            for f in report.findings
        ],
        categories=_category_cards(report),
        tag_groups=_tag_groups(tags),
        structured_data=_structured_data_blocks(tags),
    )
