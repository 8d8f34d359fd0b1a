"""
Analyze one URL from the terminal.

Usage:
  seo-meta-analyzer example.com
  seo-meta-analyzer https://example.com --json
  seo-meta-analyzer example.com --relay https://api.allorigins.win/get --timeout 20
"""

import argparse
import json
import sys

import config
from analyzer import analyze_url
from presenter import render
from schemas import AnalyzeResponse, ReportView
from scraper import FetchError, InvalidURLError

KIND_MARKERS = {
    "passed": "[PASS]",
    "warning": "[WARN]",
    "error": "[FAIL]",
}


def format_text(view: ReportView) -> str:
    s = view.summary
    lines = [
        f"SEO Score: {s.score}/100",
        f"Passed: {s.passed}  Warnings: {s.warnings}  Errors: {s.errors}",
        "",
        "Categories:",
    ]
    for card in view.categories:
        lines.append(f"  {card.name:<16} {card.percentage:>3}%  {card.status}")

    lines += ["", "Findings:"]
    for item in view.findings:
        lines.append(f"  {KIND_MARKERS.get(item.kind, item.kind)} {item.title}: {item.description}")

    lines += [
        "",
        "Search preview:",
        f"  {view.search.title}",
        f"  {view.search.url}",
        f"  {view.search.description}",
    ]
    for label, card in (("Facebook", view.facebook), ("Twitter", view.twitter)):
        lines += [
            "",
            f"{label} preview:",
            f"  {card.domain}",
            f"  {card.title}",
            f"  {card.description}",
            f"  image: {card.image or '-'}",
        ]

    for group in view.tag_groups:
        if not group.tags:
            continue
        lines += ["", f"{group.title}:"]
        lines += [f"  {tag.name}: {tag.content}" for tag in group.tags]

    for block in view.structured_data:
        lines += ["", f"{block.label}:", block.content]

    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Fetch a page, score its SEO meta tags and print the report.")
    ap.add_argument("url", help="Page URL (https:// is added when no scheme is given).")
    ap.add_argument("--json", action="store_true", help="Print the full JSON payload instead of text.")
    ap.add_argument("--timeout", type=float, default=None, help="Fetch timeout in seconds.")
    ap.add_argument("--relay", default=None, help="Cross-origin relay endpoint (overrides RELAY_URL).")
    ap.add_argument("--log-level", default=None, help="Logging level (default: WARNING).")
    args = ap.parse_args(argv)

    config.configure_logging(args.log_level or "WARNING")

    try:
        analysis = analyze_url(args.url, timeout=args.timeout, relay_url=args.relay)
    except InvalidURLError:
        print("Please enter a valid URL", file=sys.stderr)
        return 2
    except FetchError:
        print("Unable to analyze the website. Please check the URL and try again.", file=sys.stderr)
        return 1

    view = render(analysis.report, analysis.tags, analysis.url)
    if args.json:
        payload = AnalyzeResponse.from_analysis(analysis, view)
        print(json.dumps(payload.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False))
    else:
        print(format_text(view))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
