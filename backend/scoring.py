"""Scoring engine: TagRecord -> Report.

Each rule returns exactly one Finding. Rules run in RULES order and the
findings keep that order, which the presenter relies on.

Every finding carries two point values. `score_points` feeds the overall
score, `category_points` feeds the category tally. The two tables differ
for the social rules and the viewport rule.
"""

from types import MappingProxyType
from typing import Callable, Sequence

from models import (
    CATEGORY_MAX_POINTS,
    Category,
    CategoryTally,
    Finding,
    Kind,
    Report,
    TagRecord,
)

MAX_SCORE = 100

TITLE_MIN_LENGTH = 30
TITLE_MAX_LENGTH = 60
DESCRIPTION_MIN_LENGTH = 120
DESCRIPTION_MAX_LENGTH = 160

Rule = Callable[[TagRecord], Finding]


# -----------------------------
# Rules
# -----------------------------
def check_title(tags: TagRecord) -> Finding:
    if not tags.title:
        return Finding(
            kind=Kind.ERROR,
            title="Missing Title Tag",
            description="Title tag is missing. This is crucial for SEO.",
            category=Category.BASIC_SEO,
        )

    length = len(tags.title)
    if TITLE_MIN_LENGTH <= length <= TITLE_MAX_LENGTH:
        return Finding(
            kind=Kind.PASSED,
            title="Title Tag Length",
            description=f"Perfect! Title is {length} characters (30-60 recommended).",
            category=Category.BASIC_SEO,
            category_points=15,
            score_points=15,
        )
    return Finding(
        kind=Kind.WARNING,
        title="Title Tag Length",
        description=f"Title is {length} characters. Recommended: 30-60 characters.",
        category=Category.BASIC_SEO,
        category_points=8,
        score_points=8,
    )


def check_description(tags: TagRecord) -> Finding:
    if not tags.description:
        return Finding(
            kind=Kind.ERROR,
            title="Missing Meta Description",
            description="Meta description is missing. This affects click-through rates.",
            category=Category.BASIC_SEO,
        )

    length = len(tags.description)
    if DESCRIPTION_MIN_LENGTH <= length <= DESCRIPTION_MAX_LENGTH:
        return Finding(
            kind=Kind.PASSED,
            title="Meta Description Length",
            description=f"Perfect! Description is {length} characters (120-160 recommended).",
            category=Category.BASIC_SEO,
            category_points=15,
            score_points=15,
        )
    return Finding(
        kind=Kind.WARNING,
        title="Meta Description Length",
        description=f"Description is {length} characters. Recommended: 120-160 characters.",
        category=Category.BASIC_SEO,
        category_points=8,
        score_points=8,
    )


def check_open_graph(tags: TagRecord) -> Finding:
    if tags.og_title and tags.og_description:
        return Finding(
            kind=Kind.PASSED,
            title="Open Graph Tags",
            description="Open Graph title and description are present for social media sharing.",
            category=Category.SOCIAL_MEDIA,
            category_points=15,
            score_points=10,
        )
    return Finding(
        kind=Kind.WARNING,
        title="Open Graph Tags",
        description="Missing Open Graph tags. These improve social media sharing appearance.",
        category=Category.SOCIAL_MEDIA,
    )


def check_twitter_card(tags: TagRecord) -> Finding:
    if tags.twitter_card:
        return Finding(
            kind=Kind.PASSED,
            title="Twitter Card",
            description="Twitter Card meta tag is present.",
            category=Category.SOCIAL_MEDIA,
            category_points=10,
            score_points=5,
        )
    return Finding(
        kind=Kind.WARNING,
        title="Twitter Card",
        description="Twitter Card meta tag is missing.",
        category=Category.SOCIAL_MEDIA,
    )


def check_canonical(tags: TagRecord) -> Finding:
    if tags.canonical:
        return Finding(
            kind=Kind.PASSED,
            title="Canonical URL",
            description="Canonical URL is specified, helping prevent duplicate content issues.",
            category=Category.TECHNICAL_SEO,
            category_points=10,
            score_points=10,
        )
    return Finding(
        kind=Kind.WARNING,
        title="Canonical URL",
        description="Canonical URL is missing. Consider adding it to prevent duplicate content issues.",
        category=Category.TECHNICAL_SEO,
    )


def check_viewport(tags: TagRecord) -> Finding:
    if tags.viewport:
        return Finding(
            kind=Kind.PASSED,
            title="Mobile Viewport",
            description="Viewport meta tag is present for mobile optimization.",
            category=Category.TECHNICAL_SEO,
            category_points=10,
            score_points=5,
        )
    return Finding(
        kind=Kind.ERROR,
        title="Missing Viewport Tag",
        description="Viewport meta tag is missing. This affects mobile usability.",
        category=Category.TECHNICAL_SEO,
    )


def check_language(tags: TagRecord) -> Finding:
    if tags.language:
        return Finding(
            kind=Kind.PASSED,
            title="Language Declaration",
            description=f'Language is declared as "{tags.language}".',
            category=Category.CONTENT_QUALITY,
            category_points=5,
            score_points=5,
        )
    return Finding(
        kind=Kind.WARNING,
        title="Language Declaration",
        description="HTML lang attribute is missing. This helps search engines understand content language.",
        category=Category.CONTENT_QUALITY,
    )


def check_structured_data(tags: TagRecord) -> Finding:
    count = len(tags.structured_data)
    if count > 0:
        return Finding(
            kind=Kind.PASSED,
            title="Structured Data",
            description=f"Found {count} structured data block(s). Great for rich snippets!",
            category=Category.TECHNICAL_SEO,
            category_points=10,
            score_points=10,
        )
    return Finding(
        kind=Kind.WARNING,
        title="Structured Data",
        description="No structured data found. Consider adding Schema.org markup for rich snippets.",
        category=Category.TECHNICAL_SEO,
    )


RULES: tuple[Rule, ...] = (
    check_title,
    check_description,
    check_open_graph,
    check_twitter_card,
    check_canonical,
    check_viewport,
    check_language,
    check_structured_data,
)


# -----------------------------
# Evaluation
# -----------------------------
def evaluate(tags: TagRecord, rules: Sequence[Rule] = RULES) -> Report:
    """Run every rule against `tags` and build the report. Never raises."""
    findings = tuple(rule(tags) for rule in rules)

    earned = {category: 0 for category in Category}
    for finding in findings:
        earned[finding.category] += finding.category_points

    categories = MappingProxyType(
        {
            category: CategoryTally(earned_points=earned[category], max_points=CATEGORY_MAX_POINTS[category])
            for category in Category
        }
    )

    return Report(
        overall_score=min(MAX_SCORE, sum(f.score_points for f in findings)),
        passed_count=sum(1 for f in findings if f.kind is Kind.PASSED),
        warning_count=sum(1 for f in findings if f.kind is Kind.WARNING),
        error_count=sum(1 for f in findings if f.kind is Kind.ERROR),
        findings=findings,
        categories=categories,
    )


def category_status(percentage: int) -> tuple[str, str]:
    """Return (label, css class) for a category percentage."""
    if percentage >= 90:
        return "Excellent", "excellent"
    if percentage >= 70:
        return "Good", "good"
    if percentage >= 50:
        return "Needs Work", "warning"
    return "Poor", "poor"
