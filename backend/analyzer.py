"""Analysis pipeline: URL -> fetch -> extract -> evaluate."""

import logging
from dataclasses import dataclass

from models import Report, TagRecord
from scoring import evaluate
from scraper import extract_tags, fetch_html, prepare_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Analysis:
    url: str
    tags: TagRecord
    report: Report


def analyze_url(raw_url: str, timeout: float | None = None, relay_url: str | None = None) -> Analysis:
    """
    Run one analysis. Raises InvalidURLError before any network activity
    and FetchError when the page cannot be retrieved; no partial report is
    returned in either case.
    """
    url = prepare_url(raw_url)
    html = fetch_html(url, timeout=timeout, relay_url=relay_url)
    tags = extract_tags(html)
    report = evaluate(tags)
    logger.info(
        "Analyzed %s: score=%d passed=%d warnings=%d errors=%d",
        url,
        report.overall_score,
        report.passed_count,
        report.warning_count,
        report.error_count,
    )
    return Analysis(url=url, tags=tags, report=report)
