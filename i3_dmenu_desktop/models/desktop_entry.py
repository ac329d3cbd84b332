"""
Desktop Entry Data Models

Parsed form of one XDG .desktop file plus the versioned container used
to persist parsed entries between runs.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class DesktopEntry(BaseModel):
    """
    Parsed and validated ``[Desktop Entry]`` section of one .desktop file.

    ``source_path`` identifies the entry in the cache and ``modified_time``
    (nanoseconds, as returned by ``st_mtime_ns``) is the file mtime observed
    when it was parsed.
    """
    name: str = Field(..., description="Display name, localized when possible")
    exec: Optional[str] = Field(default=None, description="Exec command template")
    try_exec: Optional[str] = Field(default=None, description="TryExec probe, dropped when not executable")
    path: Optional[str] = Field(default=None, description="Working directory (Path key)")
    type: str = Field(..., description="Entry type, e.g. Application or Link")
    no_display: bool = Field(default=False, description="NoDisplay key")
    hidden: bool = Field(default=False, description="Hidden key")
    startup_notify: bool = Field(default=True, description="StartupNotify key")
    terminal: bool = Field(default=False, description="Terminal key")
    source_path: str = Field(..., min_length=1, description="Absolute path of the .desktop file")
    modified_time: int = Field(..., description="mtime of source_path in nanoseconds at parse time")

    @model_validator(mode="after")
    def application_has_exec(self) -> "DesktopEntry":
        """Type=Application entries must carry an Exec template"""
        if self.type == "Application" and self.exec is None:
            raise ValueError(f"Application entry without Exec: {self.source_path}")
        return self

    def is_visible_application(self) -> bool:
        """True for launchable entries: Type=Application, not Hidden, not NoDisplay."""
        return self.type == "Application" and not self.hidden and not self.no_display


class PersistedCache(BaseModel):
    """On-disk cache layout: format version plus every parsed entry."""
    version: int = Field(..., ge=0)
    records: List[DesktopEntry] = Field(default_factory=list)
