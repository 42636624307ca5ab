"""Post-generation checks and console summary for agenda runs."""

from __future__ import annotations

import sys
from typing import Iterable

from .host import Page, PageElement
from .models import OversetFinding, RunContext


def _effectively_visible(element: PageElement) -> bool:
    return element.visible and all(ancestor.visible for ancestor in element.ancestors())


def scan_overset(pages: Iterable[Page]) -> list[OversetFinding]:
    """List visible text frames whose text does not fit, by 1-based page number."""
    findings: list[OversetFinding] = []
    for number, page in enumerate(pages, start=1):
        for element in page.all_elements():
            if not element.is_text_capable or not _effectively_visible(element):
                continue
            try:
                overflowing = element.overflows()
            except Exception:
                continue
            if overflowing:
                findings.append(OversetFinding(page=number, label=element.label))
    return findings


def print_run_summary(context: RunContext, *, verbose: bool = False) -> None:
    pages = sum(1 for result in context.fill_results if result.complete)
    print(f"✅ Filled {pages} page(s)")

    for failure in context.failures:
        print(f"❌ Page {failure.page} ({failure.session_title}): {failure.message}", file=sys.stderr)

    warnings = context.warnings
    if warnings:
        print(f"⚠️  {len(warnings)} fill warning(s)", file=sys.stderr)
        if verbose:
            for warning in warnings:
                print(f"  - {warning}", file=sys.stderr)

    images = context.image_results
    if images.enabled:
        print(f"🖼️  Images placed: {len(images.successful)}/{images.total_attempted}")

    if context.overset:
        print(f"⚠️  Overset text suspected in {len(context.overset)} frame(s)", file=sys.stderr)
        if verbose:
            for finding in context.overset:
                print(f"  - {finding.location}", file=sys.stderr)
