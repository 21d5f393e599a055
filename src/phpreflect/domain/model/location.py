"""Source span value object."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Exact extent of a syntax node in source text.

    Attributes:
        start_line: First line (1-based, must be > 0)
        end_line: Last line (1-based, >= start_line)
        start_byte: Offset of the first byte (0-based)
        end_byte: Offset one past the last byte
    """

    start_line: int
    end_line: int
    start_byte: int = 0
    end_byte: int = 0

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.start_line <= 0:
            raise ValueError(f"start_line must be > 0, got {self.start_line}")
        if self.end_line < self.start_line:
            raise ValueError(
                f"end_line ({self.end_line}) must be >= start_line ({self.start_line})"
            )
        if self.start_byte < 0:
            raise ValueError(f"start_byte must be >= 0, got {self.start_byte}")
        if self.end_byte < self.start_byte:
            raise ValueError(
                f"end_byte ({self.end_byte}) must be >= start_byte ({self.start_byte})"
            )

    def __str__(self) -> str:
        """Format as start-end line range."""
        if self.start_line == self.end_line:
            return f"line {self.start_line}"
        return f"lines {self.start_line}-{self.end_line}"
