"""Markdown rendering of a scan result."""

from .models import ScanResult


def _cell(value: str) -> str:
    return value.replace("|", "\\|").replace("\n", " ")


def render_markdown_table(result: ScanResult) -> str:
    """Render the four display fields as a one-row Markdown table."""
    infected = "true" if result.infected else "false"
    return "\n".join(
        [
            "#### Bitdefender",
            "",
            "| Infected | Result | Engine | Updated |",
            "|:--------:|--------|--------|---------|",
            f"| {infected} | {_cell(result.result)} | {_cell(result.engine)} "
            f"| {_cell(result.updated)} |",
            "",
        ]
    )
