# models/settings.py
from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.week_start import WeekStart


class NLDSettings(BaseModel):
    """
    Immutable configuration snapshot.
    Read once per call; replaced as a whole, never mutated.
    """

    model_config = ConfigDict(frozen=True)

    date_format: str = Field("YYYY-MM-DD", description="Pattern for dates")
    time_format: str = Field("HH:mm", description="Pattern for times")
    separator: str = Field(" ", description="Placed between date and time on insert")
    week_start: WeekStart = Field(WeekStart.LOCALE_DEFAULT, description="First day of the week")

    @field_validator("date_format", "time_format")
    @classmethod
    def pattern_must_not_be_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("Format patterns cannot be blank")
        return v

    @field_validator("week_start", mode="before")
    @classmethod
    def normalize_week_start(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    # -----------------------------
    # Derived patterns
    # -----------------------------
    @property
    def datetime_format(self) -> str:
        return f"{self.date_format}{self.separator}{self.time_format}"
