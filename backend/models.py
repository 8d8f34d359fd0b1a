"""Data models and types used across the backend.

The extractor produces a TagRecord, the scoring engine turns it into a
Report. All of them are frozen: a Report is built once per analysis and
never changed afterwards.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class Kind(str, Enum):
    """Outcome of one evaluated rule."""

    PASSED = "passed"
    WARNING = "warning"
    ERROR = "error"


class Category(str, Enum):
    """Report category a rule contributes to."""

    BASIC_SEO = "basicSeo"
    SOCIAL_MEDIA = "socialMedia"
    TECHNICAL_SEO = "technicalSeo"
    CONTENT_QUALITY = "contentQuality"


CATEGORY_MAX_POINTS: Mapping[Category, int] = MappingProxyType(
    {
        Category.BASIC_SEO: 30,
        Category.SOCIAL_MEDIA: 25,
        Category.TECHNICAL_SEO: 30,
        Category.CONTENT_QUALITY: 15,
    }
)

CATEGORY_LABELS: Mapping[Category, str] = MappingProxyType(
    {
        Category.BASIC_SEO: "Basic SEO",
        Category.SOCIAL_MEDIA: "Social Media",
        Category.TECHNICAL_SEO: "Technical SEO",
        Category.CONTENT_QUALITY: "Content Quality",
    }
)


@dataclass(frozen=True)
class TagRecord:
    """Meta tags extracted from one HTML document. Empty string means absent."""

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
    structured_data: tuple[Any, ...] = ()


@dataclass(frozen=True)
class Finding:
    """A single rule outcome."""

    kind: Kind
    title: str
    description: str
    category: Category
    category_points: int = 0
    score_points: int = 0  # contribution to the overall score


@dataclass(frozen=True)
class CategoryTally:
    earned_points: int
    max_points: int

    @property
    def percentage(self) -> int:
        if self.max_points <= 0:
            return 0
        # Half-up rounding; round() would round 50.5 down to 50.
        return int(math.floor(100 * self.earned_points / self.max_points + 0.5))


@dataclass(frozen=True)
class Report:
    """Result of scoring one TagRecord."""

    overall_score: int
    passed_count: int
    warning_count: int
    error_count: int
    findings: tuple[Finding, ...] = ()
    categories: Mapping[Category, CategoryTally] = field(
        default_factory=lambda: MappingProxyType({})
    )
