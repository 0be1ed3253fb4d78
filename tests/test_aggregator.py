"""Tests for the change aggregator and renderer."""

import random

from langbox.analysis.aggregator import aggregate, empty_message, rank, render
from langbox.analysis.classifier import LanguageClassifier
from langbox.models.activity import ChangedFile
from langbox.models.language import LanguageStat


def changed(path: str, additions: int = 0, deletions: int = 0) -> ChangedFile:
    return ChangedFile(
        path=path,
        additions=additions,
        deletions=deletions,
        changes=additions + deletions,
    )


def as_tuples(stats: list[LanguageStat]) -> list[tuple]:
    return [(s.name, s.count, s.additions, s.deletions) for s in stats]


class TestAggregate:
    """Tests for folding files into language stats."""

    def test_counts_and_sums(self):
        """Test per-language file counts and line sums."""
        files = [
            changed("a.py", 10, 2),
            changed("b.py", 5, 5),
            changed("c.ts", 1, 0),
            changed("README.md", 3, 1),
        ]

        stats = aggregate(files)

        assert as_tuples(stats) == [
            ("Python", 2, 15, 7),
            ("Markdown", 1, 3, 1),
            ("TypeScript", 1, 1, 0),
        ]

    def test_same_path_counted_per_occurrence(self):
        """Test that a file touched by two commits counts twice."""
        stats = aggregate([changed("a.py", 1, 0), changed("a.py", 2, 0)])

        assert as_tuples(stats) == [("Python", 2, 3, 0)]

    def test_ignored_and_unknown_files_excluded(self):
        """Test that vendored and unclassifiable files add nothing."""
        files = [
            changed("node_modules/x/index.js", 1000, 0),
            changed("package-lock.json", 5000, 4000),
            changed("blob.unknownext", 7, 7),
            changed("main.go", 1, 1),
        ]

        assert as_tuples(aggregate(files)) == [("Go", 1, 1, 1)]

    def test_custom_classifier(self):
        """Test that an injected classifier's ignore globs apply."""
        classifier = LanguageClassifier(extra_ignore_patterns=["generated/*"])
        files = [changed("generated/api.py", 100, 0), changed("app.py", 1, 0)]

        assert as_tuples(aggregate(files, classifier)) == [("Python", 1, 1, 0)]

    def test_empty_input(self):
        """Test that no files gives no stats."""
        assert aggregate([]) == []

    def test_order_independent(self):
        """Test that shuffling the input leaves the stats unchanged."""
        files = [
            changed(f"src/file{i}.{ext}", i, i % 3)
            for i, ext in enumerate(["py", "ts", "go", "md", "rs", "py", "py", "go", "css"] * 4)
        ]
        expected = as_tuples(aggregate(files))

        rng = random.Random(1234)
        for _ in range(5):
            shuffled = files[:]
            rng.shuffle(shuffled)
            assert as_tuples(aggregate(shuffled)) == expected


class TestRank:
    """Tests for ranking order."""

    def test_count_then_changes_then_name(self):
        """Test the full tie-breaking chain."""
        stats = [
            LanguageStat(name="Zig", count=2, additions=1, deletions=1),
            LanguageStat(name="Go", count=2, additions=10, deletions=0),
            LanguageStat(name="C", count=5, additions=0, deletions=0),
            LanguageStat(name="Ada", count=2, additions=1, deletions=1),
        ]

        assert [s.name for s in rank(stats)] == ["C", "Go", "Ada", "Zig"]


class TestRender:
    """Tests for the fixed-width text block."""

    def test_known_stats(self):
        """Test rendering of a known stat set."""
        stats = [
            LanguageStat(name="Markdown", count=2, additions=5, deletions=1),
            LanguageStat(name="TypeScript", count=5, additions=40, deletions=10),
        ]

        content = render(stats, days=14)

        assert content == "\n".join(
            [
                "TypeScript      5 files       50 changes " + "█" * 18 + "░" * 2 + "  89.3%",
                "Markdown        2 files        6 changes " + "█" * 2 + "░" * 18 + "  10.7%",
            ]
        )

    def test_deterministic(self):
        """Test that rendering the same stats twice yields the same text."""
        stats = [
            LanguageStat(name="TypeScript", count=5, additions=40, deletions=10),
            LanguageStat(name="Markdown", count=2, additions=5, deletions=1),
        ]

        assert render(stats, 14) == render(list(reversed(stats)), 14)

    def test_lines_have_equal_width(self):
        """Test that every line lines up."""
        stats = [
            LanguageStat(name="Python", count=120, additions=15000, deletions=3000),
            LanguageStat(name="C", count=1, additions=1, deletions=0),
        ]

        lines = render(stats, 14).splitlines()

        assert len({len(line) for line in lines}) == 1

    def test_long_names_truncated(self):
        """Test that long language names are cut to the column width."""
        stats = [LanguageStat(name="Visual Basic .NET", count=1, additions=1, deletions=0)]

        line = render(stats, 14)

        assert line.startswith("Visual Basi… ")

    def test_singular_file(self):
        """Test singular wording for one file."""
        stats = [LanguageStat(name="Go", count=1, additions=1, deletions=0)]

        assert "   1 file " in render(stats, 14)

    def test_top_n_caps_lines(self):
        """Test that top_n limits output while keeping shares of the full total."""
        stats = [
            LanguageStat(name="Python", count=3, additions=50, deletions=0),
            LanguageStat(name="Go", count=2, additions=25, deletions=0),
            LanguageStat(name="Rust", count=1, additions=25, deletions=0),
        ]

        lines = render(stats, 14, top_n=2).splitlines()

        assert len(lines) == 2
        assert lines[0].startswith("Python")
        assert lines[0].endswith(" 50.0%")
        assert lines[1].endswith(" 25.0%")

    def test_zero_changes(self):
        """Test that stats with no changed lines render 0%."""
        stats = [LanguageStat(name="Text", count=1, additions=0, deletions=0)]

        assert render(stats, 14).endswith("░" * 20 + "   0.0%")

    def test_empty_placeholder(self):
        """Test the placeholder for a window without activity."""
        assert render([], 14) == "No push activity in the last 14 days."
        assert empty_message(1) == "No push activity in the last 1 day."
