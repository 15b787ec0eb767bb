from typing import Dict, List, Sequence, Tuple

from codedigest.core.models import FileRecord


SUMMARY_INTRO = "This file is a comprehensive representation of the entire codebase."


# ============================================================================
# Summary Builder
# ============================================================================


class SummaryBuilder:
    """Aggregates FileRecords into totals and a language histogram."""

    @staticmethod
    def language_histogram(records: Sequence[FileRecord]) -> List[Tuple[str, int]]:
        """
        Count files per language.

        Returns:
            ``(language, count)`` pairs, most files first; ties keep first-seen order
        """
        counts: Dict[str, int] = {}
        for record in records:
            counts[record.language] = counts.get(record.language, 0) + 1
        return sorted(counts.items(), key=lambda item: item[1], reverse=True)

    def summarize(self, records: Sequence[FileRecord]) -> str:
        """
        Render the summary text.

        ``Total Characters`` counts the stored content, so it includes
        line-number prefixes when those were applied.
        """
        lines = [
            SUMMARY_INTRO,
            "",
            f"Total Files: {len(records)}",
            f"Total Lines: {sum(r.line_count for r in records)}",
            f"Total Characters: {sum(len(r.content) for r in records)}",
            "",
            "Languages:",
        ]
        for language, count in self.language_histogram(records):
            lines.append(f"  - {language}: {count} files")
        return "\n".join(lines) + "\n"
