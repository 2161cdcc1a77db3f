"""Text formatting helpers."""

from typing import Iterable, List, Sequence

from practice.models import ContributionWeek, Span

# Heatmap glyph per intensity level (0-4)
INTENSITY_GLYPHS = "·░▒▓█"
WEEKDAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def format_time(seconds: float) -> str:
    """Format time in seconds to readable string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def format_percentage(value: float, decimals: int = 1) -> str:
    """Format a 0-1 score as a percentage."""
    return f"{value * 100:.{decimals}f}%"


def truncate_text(text: str, max_length: int = 50, suffix: str = "...") -> str:
    """Truncate text to max length."""
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix


def highlight_spans(text: str, spans: Iterable[Span], left: str = "[", right: str = "]") -> str:
    """Wrap every mismatched span of ``text`` in markers.

    ``text`` must be the sequence the spans index into (the normalized text).
    """
    parts: List[str] = []
    cursor = 0
    for span in sorted(spans, key=lambda s: s.start):
        if span.matched:
            continue
        parts.append(text[cursor:span.start])
        parts.append(f"{left}{text[span.start:span.end]}{right}")
        cursor = span.end
    parts.append(text[cursor:])
    return "".join(parts)


def render_grid(weeks: Sequence[ContributionWeek], months: Sequence[str] = ()) -> str:
    """Render the contribution grid with one row per weekday."""
    lines = []
    if months:
        lines.append("    " + " ".join(months))
    for weekday, label in enumerate(WEEKDAY_LABELS):
        row = []
        for week in weeks:
            cell = week[weekday]
            row.append(" " if cell is None else INTENSITY_GLYPHS[cell.intensity])
        lines.append(f"{label} {''.join(row)}")
    return "\n".join(lines)
