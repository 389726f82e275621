"""Profile lifecycle: onboarding, edits and full reset."""

import logging
from dataclasses import dataclass
from typing import Protocol

from nutri_guide.domain.analysis import BMIResult
from nutri_guide.domain.profile import UserProfile
from nutri_guide.services.analyzer import analyze_profile

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for the single user profile."""

    def get_profile(self) -> UserProfile | None:
        """Return the stored profile, if onboarding has happened."""

    def save_profile(self, profile: UserProfile) -> None:
        """Store or replace the profile."""


class ResettableStore(Protocol):
    """Storage that can drop every app record."""

    def clear(self) -> int:
        """Delete all app records and return how many were removed."""


@dataclass
class ProfileService:
    """Application service for the user profile."""

    repository: ProfileRepository
    store: ResettableStore

    def get_profile(self) -> UserProfile | None:
        """Return the current profile or None before onboarding."""
        return self.repository.get_profile()

    def save_profile(self, profile: UserProfile) -> None:
        """Persist a new or edited profile."""
        self.repository.save_profile(profile)

    def get_analysis(self) -> BMIResult | None:
        """Return the analysis of the stored profile, if any."""
        profile = self.repository.get_profile()
        if profile is None:
            return None
        return analyze_profile(profile)

    def reset(self) -> None:
        """Remove the profile and all tracked data."""
        removed = self.store.clear()
        _logger.info("App data reset: removed=%s", removed)
