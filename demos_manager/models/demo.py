"""
Pydantic model for a demo record held in the local cache.
"""

from pydantic import BaseModel, field_validator

DEMO_STATUSES = ("None", "To watch", "Watched")


class DemoRecord(BaseModel):
    """A single imported demo. `comment` and `status` are user-customized data."""

    id: str
    name: str
    path: str = ""
    comment: str = ""
    status: str = "None"

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Demo id cannot be empty.")
        return v

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        if v not in DEMO_STATUSES:
            raise ValueError(f"Status must be one of {', '.join(DEMO_STATUSES)}.")
        return v

    @property
    def has_custom_data(self) -> bool:
        return bool(self.comment) or self.status != "None"

    def custom_data(self) -> dict[str, str]:
        """The subset of fields preserved by a backup."""
        return {"id": self.id, "comment": self.comment, "status": self.status}
