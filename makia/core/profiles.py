"""Tutor profile catalog."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from makia.core.exceptions import UnknownProfileError
from makia.logging_config import get_logger
from makia.prompts.tutors import BUILTIN_PROFILES

logger: Any = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class VoiceProfile:
    """Voice settings handed to the speech synthesizer."""

    language_code: str
    voice_name: str
    gender: str = "NEUTRAL"
    audio_encoding: str = "MP3"


@dataclass(frozen=True, slots=True)
class TutorProfile:
    """A selectable tutor persona. Immutable once loaded."""

    id: str
    display_name: str
    prompt_template: str
    voice: VoiceProfile
    personality: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TutorProfile:
        """Build a profile from its YAML/dict form.

        Raises:
            ValueError: If a required key is missing
        """
        try:
            voice = data["voice"]
            return cls(
                id=str(data["id"]),
                display_name=str(data["name"]),
                prompt_template=str(data["prompt"]).strip(),
                personality=str(data.get("personality", "")),
                voice=VoiceProfile(
                    language_code=str(voice["language_code"]),
                    voice_name=str(voice["name"]),
                    gender=str(voice.get("gender", "NEUTRAL")),
                    audio_encoding=str(voice.get("encoding", "MP3")),
                ),
            )
        except KeyError as e:
            raise ValueError(f"Tutor profile is missing key {e}") from e


class ProfileCatalog:
    """Read-only lookup of tutor profiles, keyed by id."""

    def __init__(self, profiles: Iterable[TutorProfile], default_id: str | None = None) -> None:
        self._profiles: dict[str, TutorProfile] = {}
        for profile in profiles:
            if profile.id in self._profiles:
                raise ValueError(f"Duplicate tutor profile id: {profile.id}")
            self._profiles[profile.id] = profile

        if not self._profiles:
            raise ValueError("At least one tutor profile is required")

        self._default_id = default_id or next(iter(self._profiles))
        if self._default_id not in self._profiles:
            raise ValueError(f"Default tutor profile not defined: {self._default_id}")

    @classmethod
    def builtin(cls, default_id: str | None = None) -> ProfileCatalog:
        """Catalog of the shipped MAKI / KUKULCAN / CHAC personas."""
        return cls(
            (TutorProfile.from_dict(entry) for entry in BUILTIN_PROFILES),
            default_id=default_id,
        )

    @classmethod
    def from_yaml(cls, path: str | Path, default_id: str | None = None) -> ProfileCatalog:
        """Load profiles from a YAML file with a top-level ``profiles`` list."""
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        entries = data.get("profiles", [])
        logger.info(f"Loaded {len(entries)} tutor profiles from {path}")
        return cls((TutorProfile.from_dict(entry) for entry in entries), default_id=default_id)

    @property
    def default_id(self) -> str:
        return self._default_id

    def get(self, profile_id: str | None) -> TutorProfile:
        """Resolve a profile id; a missing id selects the default profile.

        Raises:
            UnknownProfileError: If the id is not in the catalog
        """
        if not profile_id:
            return self._profiles[self._default_id]

        profile = self._profiles.get(profile_id)
        if profile is None:
            raise UnknownProfileError(profile_id)
        return profile

    def list(self) -> list[TutorProfile]:
        """Profiles in definition order."""
        return list(self._profiles.values())

    def __contains__(self, profile_id: object) -> bool:
        return profile_id in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)
