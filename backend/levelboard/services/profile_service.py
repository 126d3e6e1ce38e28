"""Profile service - creator display metadata with fallbacks."""

from typing import Mapping

from levelboard.config import settings
from levelboard.models.profile import Profile


class ProfileService:
    @staticmethod
    def resolve(profiles: Mapping[str, Profile], name: str) -> Profile:
        """Profile for a creator, filling missing avatar/banner with defaults."""
        profile = profiles.get(name)
        return Profile(
            name=name,
            avatar=(profile.avatar if profile else None) or settings.DEFAULT_AVATAR,
            banner=(profile.banner if profile else None) or settings.DEFAULT_BANNER,
        )


profile_service = ProfileService()
