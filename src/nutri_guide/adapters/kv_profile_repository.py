"""Key-value repository for the user profile."""

from dataclasses import dataclass

from pydantic import TypeAdapter

from nutri_guide.domain.profile import UserProfile
from nutri_guide.services.profiles import ProfileRepository
from nutri_guide.services.storage import NamespacedStore

_PROFILE_ADAPTER = TypeAdapter(UserProfile)


@dataclass
class KeyValueProfileRepository(ProfileRepository):
    """Stores the profile as a single JSON record."""

    namespace: NamespacedStore

    def get_profile(self) -> UserProfile | None:
        """Return the stored profile."""
        raw = self.namespace.store.get(self.namespace.key("user_profile"))
        if raw is None:
            return None
        return _PROFILE_ADAPTER.validate_python(raw)

    def save_profile(self, profile: UserProfile) -> None:
        """Replace the stored profile."""
        self.namespace.store.set(
            self.namespace.key("user_profile"),
            _PROFILE_ADAPTER.dump_python(profile, mode="json"),
        )
