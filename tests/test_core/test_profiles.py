"""Tests for the tutor profile catalog."""

from __future__ import annotations

import pytest

from makia.core.exceptions import UnknownProfileError
from makia.core.profiles import ProfileCatalog, TutorProfile, VoiceProfile
from makia.prompts.tutors import CONFUSED_GUIDANCE, build_system_prompt

PROFILES_YAML = """
profiles:
  - id: ada
    name: ADA
    personality: patient
    prompt: |
      You are ADA, a patient tutor.
    voice:
      language_code: en-GB
      name: en-GB-SoniaNeural
      gender: FEMALE
  - id: alan
    name: ALAN
    prompt: You are ALAN.
    voice:
      language_code: en-GB
      name: en-GB-RyanNeural
"""


def make_profile(profile_id: str) -> TutorProfile:
    return TutorProfile(
        id=profile_id,
        display_name=profile_id.upper(),
        prompt_template=f"You are {profile_id}.",
        voice=VoiceProfile(language_code="en-US", voice_name="en-US-GuyNeural"),
    )


class TestBuiltinCatalog:
    """Tests for the shipped tutor personas."""

    def test_builtin_profiles(self, profiles: ProfileCatalog) -> None:
        assert [p.id for p in profiles.list()] == ["maki", "kukulcan", "chac"]
        assert [p.display_name for p in profiles.list()] == ["MAKI", "KUKULCAN", "CHAC"]
        assert [p.personality for p in profiles.list()] == ["nerd", "cool", "strict"]

    def test_builtin_voices(self, profiles: ProfileCatalog) -> None:
        voices = {p.id: p.voice for p in profiles.list()}

        assert voices["maki"].voice_name == "en-US-GuyNeural"
        assert voices["kukulcan"].voice_name == "en-US-ChristopherNeural"
        assert voices["chac"].voice_name == "en-US-EricNeural"
        assert all(v.audio_encoding == "MP3" for v in voices.values())

    def test_missing_id_selects_default(self, profiles: ProfileCatalog) -> None:
        assert profiles.get(None).id == "maki"
        assert profiles.get("").id == "maki"

    def test_default_can_be_changed(self) -> None:
        catalog = ProfileCatalog.builtin("chac")
        assert catalog.default_id == "chac"
        assert catalog.get(None).display_name == "CHAC"

    def test_unknown_id_raises(self, profiles: ProfileCatalog) -> None:
        with pytest.raises(UnknownProfileError) as exc_info:
            profiles.get("socrates")

        assert exc_info.value.profile_id == "socrates"
        assert exc_info.value.status_code == 400

    def test_membership(self, profiles: ProfileCatalog) -> None:
        assert "kukulcan" in profiles
        assert "socrates" not in profiles
        assert len(profiles) == 3

    def test_profiles_are_immutable(self, profiles: ProfileCatalog) -> None:
        with pytest.raises(AttributeError):
            profiles.get("maki").display_name = "OTHER"  # type: ignore[misc]


class TestCatalogValidation:
    """Tests for catalog construction errors."""

    def test_duplicate_ids_rejected(self) -> None:
        with pytest.raises(ValueError, match="Duplicate"):
            ProfileCatalog([make_profile("a"), make_profile("a")])

    def test_empty_catalog_rejected(self) -> None:
        with pytest.raises(ValueError):
            ProfileCatalog([])

    def test_unknown_default_rejected(self) -> None:
        with pytest.raises(ValueError, match="Default"):
            ProfileCatalog([make_profile("a")], default_id="b")

    def test_first_profile_is_default_when_unset(self) -> None:
        catalog = ProfileCatalog([make_profile("a"), make_profile("b")])
        assert catalog.default_id == "a"

    def test_from_dict_missing_key(self) -> None:
        with pytest.raises(ValueError, match="missing key"):
            TutorProfile.from_dict({"id": "x", "name": "X", "voice": {}})


class TestYamlCatalog:
    """Tests for loading profiles from YAML."""

    def test_from_yaml(self, tmp_path) -> None:
        path = tmp_path / "profiles.yaml"
        path.write_text(PROFILES_YAML, encoding="utf-8")

        catalog = ProfileCatalog.from_yaml(path, default_id="alan")

        assert [p.id for p in catalog.list()] == ["ada", "alan"]
        assert catalog.default_id == "alan"

        ada = catalog.get("ada")
        assert ada.prompt_template == "You are ADA, a patient tutor."
        assert ada.voice.gender == "FEMALE"
        assert ada.voice.language_code == "en-GB"

        alan = catalog.get("alan")
        assert alan.personality == ""
        assert alan.voice.gender == "NEUTRAL"


class TestSystemPrompt:
    """Tests for build_system_prompt()."""

    def test_plain_prompt(self) -> None:
        assert build_system_prompt("You are MAKI.", confused=False) == "You are MAKI."

    def test_confused_prompt_gets_guidance(self) -> None:
        prompt = build_system_prompt("You are MAKI.", confused=True)

        assert prompt.startswith("You are MAKI.")
        assert prompt.endswith(CONFUSED_GUIDANCE)
