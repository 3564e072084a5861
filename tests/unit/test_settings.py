import pytest
from pydantic import ValidationError

from wikifix.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_context_radii(self) -> None:
        s = Settings()
        assert s.small_context_radius == 40
        assert s.standard_context_radius == 100
        assert s.large_context_radius == 500

    def test_default_max_context_length(self) -> None:
        s = Settings()
        assert s.max_context_length == 500

    def test_default_dropped_tags(self) -> None:
        s = Settings()
        assert s.dropped_tags == ["head", "style", "pre"]

    def test_default_exclusion_languages(self) -> None:
        s = Settings()
        assert sorted(s.exclusion_rules) == ["ca", "de", "en", "fr", "nl", "pl", "pt", "ru", "uk"]
        assert len(s.exclusion_rules["fr"]["data-mw"]) == 3

    def test_default_rules_not_shared_between_instances(self) -> None:
        s1 = Settings()
        s1.exclusion_rules["fr"]["data-mw"].append("parts[*]")
        s2 = Settings()
        assert len(s2.exclusion_rules["fr"]["data-mw"]) == 3


class TestSettingsFromEnv:
    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_large_context_radius(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LARGE_CONTEXT_RADIUS", "250")
        s = Settings()
        assert s.large_context_radius == 250

    def test_loads_exclusion_rules_as_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(
            "EXCLUSION_RULES", '{"eo": {"data-mw": ["parts[*].template.target[?(@.wt == \'Lingvo\')]"]}}'
        )
        s = Settings()
        assert list(s.exclusion_rules) == ["eo"]

    def test_loads_exclude_edit_links(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EXCLUDE_EDIT_LINKS", "false")
        s = Settings()
        assert s.exclude_edit_links is False


class TestSettingsValidation:
    def test_invalid_radius_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SMALL_CONTEXT_RADIUS", "wide")
        with pytest.raises(ValidationError):
            Settings()

    def test_negative_radius_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STANDARD_CONTEXT_RADIUS", "-1")
        with pytest.raises(ValidationError):
            Settings()

    def test_zero_max_context_length_raises(self) -> None:
        with pytest.raises(ValidationError):
            Settings(max_context_length=0)
