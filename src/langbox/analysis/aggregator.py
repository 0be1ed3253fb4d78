"""Folds changed files into per-language statistics and renders them."""

from langbox.analysis.classifier import LanguageClassifier
from langbox.models.activity import ChangedFile
from langbox.models.language import LanguageStat

NAME_WIDTH = 12
BAR_WIDTH = 20


def aggregate(
    files: list[ChangedFile],
    classifier: LanguageClassifier | None = None,
) -> list[LanguageStat]:
    """Count files and sum line changes per language, ranked.

    Files the classifier rejects are left out entirely.
    """
    classifier = classifier or LanguageClassifier()

    stats: dict[str, LanguageStat] = {}
    for changed in files:
        name = classifier.classify(changed.path, changed.patch)
        if name is None:
            continue
        stat = stats.setdefault(name, LanguageStat(name=name))
        stat.add_file(changed.additions, changed.deletions)

    return rank(list(stats.values()))


def _sort_key(stat: LanguageStat) -> tuple[int, int, str]:
    return (-stat.count, -stat.changes, stat.name)


def rank(stats: list[LanguageStat]) -> list[LanguageStat]:
    """Most files first, then most changed lines, then name."""
    return sorted(stats, key=_sort_key)


def _make_bar(percentage: float, width: int = BAR_WIDTH) -> str:
    filled = round(percentage / 100 * width)
    return "█" * filled + "░" * (width - filled)


def _truncate(name: str, width: int = NAME_WIDTH) -> str:
    if len(name) <= width:
        return name
    return name[: width - 1] + "…"


def empty_message(days: int) -> str:
    return f"No push activity in the last {days} day{'s' if days != 1 else ''}."


def render(
    stats: list[LanguageStat],
    days: int,
    top_n: int | None = None,
) -> str:
    """Render stats as a fixed-width text block, one line per language.

    Percentages are shares of the total changed lines across all stats, so
    they stay the same when top_n hides the tail.
    """
    if not stats:
        return empty_message(days)

    ranked = rank(stats)
    total = sum(s.changes for s in ranked)
    if top_n:
        ranked = ranked[:top_n]

    lines = []
    for stat in ranked:
        percentage = stat.changes / total * 100 if total else 0.0
        lines.append(
            f"{_truncate(stat.name):<{NAME_WIDTH}} "
            f"{stat.count:>4} file{'s' if stat.count != 1 else ' '} "
            f"{stat.changes:>8,} changes "
            f"{_make_bar(percentage)} "
            f"{percentage:>5.1f}%"
        )
    return "\n".join(lines)
