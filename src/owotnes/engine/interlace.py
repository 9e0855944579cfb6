"""
Interlace scheduler - alternate between even and odd cell rows per render tick.

Halves the per-tick edit volume; any single row refreshes every other tick.
"""


class InterlaceScheduler:
    """One-bit field selector, toggled once per render tick."""

    def __init__(self, enabled: bool = True, field: int = 0):
        self.enabled = enabled
        self.field = field & 1

    def should_visit(self, row: int) -> bool:
        if not self.enabled:
            return True
        return row % 2 == self.field

    def rows(self, row_count: int) -> range:
        """Rows visited under the current field."""
        if not self.enabled:
            return range(row_count)
        return range(self.field, row_count, 2)

    def advance(self) -> None:
        """Toggle the field. Called every tick whether or not edits were produced."""
        self.field ^= 1

    def __repr__(self) -> str:
        return f"InterlaceScheduler(enabled={self.enabled}, field={self.field})"
