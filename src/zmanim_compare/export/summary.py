"""Plain-language summary of an analysis."""

from datetime import date as dt_date
from typing import List

from ..models.analysis import AnalysisResult, ComparisonEntry, Relation, ZmanAnalysis
from ..core.comparator import time_difference


def format_day(iso_date: str) -> str:
    """Render an ISO date as "June 1" without any timezone conversion.
    
    Keys that are not ISO dates are shown as given.
    """
    try:
        day = dt_date.fromisoformat(iso_date)
    except ValueError:
        return iso_date
    return f"{day:%B} {day.day}"


def _describe(entry: ComparisonEntry) -> str:
    return f"{format_day(entry.date)} at {entry.local_time}"


def summarize_zman(analysis: ZmanAnalysis) -> List[str]:
    """Summary lines for a single zman."""
    label = analysis.label.lower()
    lines = [analysis.label]
    
    if analysis.overall is None:
        lines.append(f"  No {label} times available")
        return lines
    
    lines.append("  Overall:")
    earliest, latest = analysis.overall.earliest, analysis.overall.latest
    lines.append(f"    Earliest {label}: {earliest.location} on {_describe(earliest)}")
    lines.append(f"    Latest {label}: {latest.location} on {_describe(latest)}")
    
    lines.append("  By location:")
    for group in analysis.location_groups.values():
        lines.append(f"    {group.location}:")
        lines.append(f"      Earliest: {_describe(group.earliest)}")
        lines.append(f"      Latest: {_describe(group.latest)}")
    
    spreads = [
        (date, time_difference(group))
        for date, group in analysis.date_groups.items()
        if len(group) > 1
    ]
    if spreads:
        lines.append("  By date:")
        for date, spread in spreads:
            group = analysis.date_groups[date]
            lines.append(
                f"    {format_day(date)}: {group.earliest.location} earliest, "
                f"{group.latest.location} latest ({spread} apart)"
            )
    
    directional = analysis.directional_relations()
    if directional:
        lines.append("  Location comparisons:")
        for comparison in directional:
            word = "earlier" if comparison.relation is Relation.ALWAYS_EARLIER else "later"
            lines.append(f"    {comparison.first} is always {word} than {comparison.second}")
    
    return lines


def render_summary(result: AnalysisResult) -> str:
    """Summary text for every analyzed zman."""
    blocks = ["\n".join(summarize_zman(analysis)) for analysis in result.zmanim.values()]
    return "\n\n".join(blocks) + "\n"
