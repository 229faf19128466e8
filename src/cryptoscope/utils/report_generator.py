"""
Report Generation Module
Creates human-readable Markdown reports from XOR break results
"""

from datetime import datetime

from .. import __version__


class ReportGenerator:
    """
    Generates Markdown reports from Cryptoscope break results

    Sections:
    - Summary (key, key size, plaintext score)
    - Key-size ranking table
    - Plaintext preview
    """

    def __init__(self, preview_length: int = 600, ranking_rows: int = 10):
        """
        Args:
            preview_length: Maximum plaintext characters to include
            ranking_rows: Number of key-size candidates to list
        """
        self.preview_length = preview_length
        self.ranking_rows = ranking_rows

    def generate_markdown(self, result, title: str = "Analysis", source: str = "") -> str:
        """
        Generate Markdown report

        Args:
            result: BreakResult object
            title: Report title
            source: Name of the analyzed input

        Returns:
            Markdown formatted report as string
        """
        sections = [
            self._generate_header(title, source),
            self._generate_summary(result),
            self._generate_ranking_section(result),
            self._generate_plaintext_section(result),
        ]
        return '\n\n'.join(sections) + '\n'

    def _generate_header(self, title: str, source: str) -> str:
        header = f"""# Cryptoscope Report: {title}

**Generated**: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}
**Analysis Tool**: Cryptoscope v{__version__}"""
        if source:
            header += f"\n**Input**: `{source}`"
        return header

    def _generate_summary(self, result) -> str:
        return f"""## Summary

| Field | Value |
|---|---|
| Key | `{result.key.decode('latin-1')!r}` |
| Key (hex) | `{result.key.hex()}` |
| Key size | {result.key_size} |
| Plaintext score | {result.score} |
| Ciphertext length | {len(result.plaintext)} bytes |"""

    def _generate_ranking_section(self, result) -> str:
        lines = ["## Key Size Ranking", "", "| Rank | Key size | Normalized distance |", "|---|---|---|"]
        for rank, entry in enumerate(result.key_size_scores[:self.ranking_rows], start=1):
            marker = " **(selected)**" if entry.key_size == result.key_size else ""
            lines.append(f"| {rank} | {entry.key_size}{marker} | {entry.score:.4f} |")
        return '\n'.join(lines)

    def _generate_plaintext_section(self, result) -> str:
        text = result.plaintext.decode('utf-8', errors='replace')
        if len(text) > self.preview_length:
            text = text[:self.preview_length] + "\n..."
        return f"## Plaintext\n\n```\n{text}\n```"
