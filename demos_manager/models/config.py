"""
Pydantic models for persisted user settings and baked-in release metadata.
"""

from pydantic import BaseModel, Field, field_validator

from demos_manager import __version__
from demos_manager.models.version import AppVersion


class AppSettings(BaseModel):
    """A validated snapshot of the user's persisted settings."""

    application_version: str = ""
    last_folder: str = ""
    enable_check_update: bool = True
    folders: list[str] = Field(default_factory=list)

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @field_validator("folders")
    @classmethod
    def validate_folders(cls, v: list[str]) -> list[str]:
        """Drops blank lines and repeated entries while keeping order."""
        return list(dict.fromkeys(f.strip() for f in v if f.strip()))


class ReleaseInfo(BaseModel):
    """Metadata shipped with a release. Not user-configurable."""

    app_name: str
    version: str
    author: str
    website: str
    require_clear_cache: bool = False

    class Config:
        """Pydantic model configuration."""

        frozen = True

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        AppVersion.parse(v)
        return v

    @field_validator("website")
    @classmethod
    def validate_website(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("Release website must be an http(s) URL.")
        return v.rstrip("/")

    @property
    def app_version(self) -> AppVersion:
        return AppVersion.parse(self.version)

    @property
    def credits(self) -> str:
        return f"{self.app_name} {self.version} by {self.author}"


CURRENT_RELEASE = ReleaseInfo(
    app_name="Demos Manager",
    version=__version__,
    author="The Demos Manager contributors",
    website="https://csgo-demos-manager.com",
    require_clear_cache=True,
)
