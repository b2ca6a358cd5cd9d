"""
Data Models Layer.

This package contains the version type and the Pydantic models that define
settings, release metadata and cached demo records.
"""

from .config import CURRENT_RELEASE, AppSettings, ReleaseInfo
from .demo import DemoRecord
from .version import AppVersion

__all__ = ["AppSettings", "AppVersion", "CURRENT_RELEASE", "DemoRecord", "ReleaseInfo"]
