"""Configuration management for the alignment engine."""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class MatchTolerances(BaseModel):
    """Adjacency and same-line thresholds used when matching geometry.

    Deltas are in page-space units; negative deltas require overlap beyond
    the margin. Fractions are relative to the smaller polygon's height.
    """

    column_delta: float = 0.2
    paragraph_same_line: float = Field(default=0.9, ge=0.0, le=1.0)
    paragraph_delta: float = 0.1
    word_same_line: float = Field(default=0.9, ge=0.0, le=1.0)
    head_delta: float = -0.05
    body_delta: float = -0.1
    tail_delta: float = -0.05

    def word_delta(self, part: str) -> float:
        """Word adjacency delta for a head/body/tail part."""
        return {
            "head": self.head_delta,
            "body": self.body_delta,
            "tail": self.tail_delta,
        }[part]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Pixel to page-space conversion
    pixels_per_unit: float = 72.0
    coordinate_precision: int = 4

    # Highlighting
    force_overlap: bool = False
    min_box_extent: float = 0.01

    # Matching tolerances
    column_delta: float = 0.2
    paragraph_same_line: float = 0.9
    paragraph_delta: float = 0.1
    word_same_line: float = 0.9
    head_delta: float = -0.05
    body_delta: float = -0.1
    tail_delta: float = -0.05

    # Logging
    log_level: str = "INFO"

    @property
    def tolerances(self) -> MatchTolerances:
        """Matching thresholds as a single value object."""
        return MatchTolerances(
            column_delta=self.column_delta,
            paragraph_same_line=self.paragraph_same_line,
            paragraph_delta=self.paragraph_delta,
            word_same_line=self.word_same_line,
            head_delta=self.head_delta,
            body_delta=self.body_delta,
            tail_delta=self.tail_delta,
        )

    class Config:
        env_prefix = "DOCALIGN_"
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
