"""Tests for taxonomy configuration."""

import json

import pytest

from inboxsort.errors import ConfigError
from inboxsort.taxonomy import FieldWeights, TaxonomyConfig, default_config, load_config
from inboxsort.taxonomy.rules import CATEGORIES


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove configuration variables that would leak into tests."""
    for name in (
        "INBOXSORT_TAXONOMY_FILE",
        "INBOXSORT_THRESHOLD",
        "INBOXSORT_SUBJECT_WEIGHT",
        "INBOXSORT_SNIPPET_WEIGHT",
        "INBOXSORT_SENDER_WEIGHT",
    ):
        monkeypatch.delenv(name, raising=False)


def make_config(**overrides):
    """Build a small valid config with some fields replaced."""
    kwargs = {
        "categories": ("Work", "Home"),
        "keywords": {"Work": ["meeting"], "Home": ["dinner"]},
        "threshold": 2,
        "fallback": "Home",
    }
    kwargs.update(overrides)
    return TaxonomyConfig(**kwargs)


class TestTaxonomyConfig:
    """Tests for configuration validation."""

    def test_default_config(self):
        """Test the packaged configuration."""
        config = default_config()

        assert config.categories == CATEGORIES
        assert config.fallback == "Other"
        assert config.threshold == 2
        assert config.weights == FieldWeights(subject=2, snippet=1, sender=1.5)
        assert config.provider_labels["CATEGORY_SOCIAL"] == "Entertainment"

    def test_keywords_are_lowercased(self):
        """Test that keywords are normalised on construction."""
        config = make_config(keywords={"Work": ["Meeting", "STANDUP"], "Home": ["dinner"]})

        assert config.keywords["Work"] == ("meeting", "standup")

    def test_config_is_read_only(self):
        """Test that configuration cannot be changed after construction."""
        config = make_config()

        with pytest.raises(AttributeError):
            config.threshold = 5
        with pytest.raises(TypeError):
            config.keywords["Work"] = ("x",)

    def test_empty_taxonomy(self):
        """Test that a taxonomy needs categories."""
        with pytest.raises(ConfigError):
            make_config(categories=(), keywords={}, fallback="")

    def test_duplicate_categories(self):
        """Test that categories must be unique."""
        with pytest.raises(ConfigError):
            make_config(categories=("Work", "Home", "Work"))

    def test_category_without_keywords(self):
        """Test that each category needs keywords."""
        with pytest.raises(ConfigError):
            make_config(keywords={"Work": ["meeting"], "Home": []})

    def test_keywords_for_unknown_category(self):
        """Test that keyword lists must belong to a category."""
        with pytest.raises(ConfigError):
            make_config(keywords={"Work": ["meeting"], "Home": ["dinner"], "Play": ["game"]})

    def test_negative_threshold(self):
        """Test that the threshold cannot be negative."""
        with pytest.raises(ConfigError):
            make_config(threshold=-1)

    @pytest.mark.parametrize("threshold", [float("nan"), float("inf")])
    def test_non_finite_threshold(self, threshold):
        """Test that the threshold must be a finite number."""
        with pytest.raises(ConfigError):
            make_config(threshold=threshold)

    @pytest.mark.parametrize("name", [["Work"], "", "  ", 3])
    def test_category_names_must_be_strings(self, name):
        """Test that every category is a non-empty string."""
        with pytest.raises(ConfigError):
            make_config(categories=("Work", "Home", name))

    @pytest.mark.parametrize(
        "weights",
        [
            {"subject": 0},
            {"snippet": -1},
            {"sender": "high"},
            {"subject": float("nan")},
            {"sender": float("inf")},
        ],
    )
    def test_invalid_weights(self, weights):
        """Test that weights must be positive numbers."""
        with pytest.raises(ConfigError):
            FieldWeights(**weights)

    def test_fallback_must_be_category(self):
        """Test that the fallback belongs to the taxonomy."""
        with pytest.raises(ConfigError):
            make_config(fallback="Elsewhere")

    def test_provider_label_must_map_to_category(self):
        """Test that provider labels point into the taxonomy."""
        with pytest.raises(ConfigError):
            make_config(provider_labels={"CATEGORY_SOCIAL": "Social"})

    def test_require_category(self):
        """Test category membership checks."""
        config = make_config()

        assert config.require_category("Work") == "Work"
        assert config.is_category("Home") is True
        assert config.is_category(None) is False
        with pytest.raises(ConfigError):
            config.require_category("Play")

    def test_index_of(self):
        """Test declaration indexes."""
        config = make_config()

        assert config.index_of("Work") == 0
        assert config.index_of("Home") == 1


class TestLoadConfig:
    """Tests for loading configuration from files and environment."""

    def test_defaults_without_file(self):
        """Test that no file and no env gives the packaged config."""
        assert load_config() == default_config()

    def test_load_file(self, tmp_path):
        """Test a custom taxonomy file."""
        path = tmp_path / "taxonomy.json"
        path.write_text(json.dumps({
            "categories": ["Work", "Personal", "Misc"],
            "keywords": {
                "Work": ["meeting", "deadline"],
                "Personal": ["birthday"],
                "Misc": ["hello"],
            },
            "weights": {"sender": 3},
            "threshold": 1,
            "provider_labels": {"CATEGORY_PERSONAL": "Personal"},
        }))

        config = load_config(path)
        assert config.categories == ("Work", "Personal", "Misc")
        assert config.fallback == "Misc"
        assert config.weights.sender == 3
        assert config.weights.subject == 2
        assert config.threshold == 1
        assert dict(config.provider_labels) == {"CATEGORY_PERSONAL": "Personal"}

    def test_file_from_env(self, tmp_path, monkeypatch):
        """Test the taxonomy file location from environment."""
        path = tmp_path / "taxonomy.json"
        path.write_text(json.dumps({"threshold": 4}))
        monkeypatch.setenv("INBOXSORT_TAXONOMY_FILE", str(path))

        config = load_config()
        assert config.threshold == 4
        assert config.categories == CATEGORIES

    def test_env_overrides(self, monkeypatch):
        """Test weight and threshold environment overrides."""
        monkeypatch.setenv("INBOXSORT_THRESHOLD", "3.5")
        monkeypatch.setenv("INBOXSORT_SUBJECT_WEIGHT", "4")

        config = load_config()
        assert config.threshold == 3.5
        assert config.weights.subject == 4
        assert config.weights.snippet == 1

    def test_bad_env_value(self, monkeypatch):
        """Test a non-numeric environment value."""
        monkeypatch.setenv("INBOXSORT_THRESHOLD", "two")

        with pytest.raises(ConfigError):
            load_config()

    @pytest.mark.parametrize(
        "name", ["INBOXSORT_THRESHOLD", "INBOXSORT_SUBJECT_WEIGHT", "INBOXSORT_SENDER_WEIGHT"]
    )
    @pytest.mark.parametrize("raw", ["nan", "inf", "-inf"])
    def test_non_finite_env_value(self, monkeypatch, name, raw):
        """Test that NaN and infinity are rejected from the environment."""
        monkeypatch.setenv(name, raw)

        with pytest.raises(ConfigError):
            load_config()

    def test_nan_threshold_in_file(self, tmp_path):
        """Test a NaN threshold literal in a taxonomy file."""
        path = tmp_path / "taxonomy.json"
        path.write_text('{"threshold": NaN}')

        with pytest.raises(ConfigError):
            load_config(path)

    def test_unhashable_categories_in_file(self, tmp_path):
        """Test category entries that are not strings."""
        path = tmp_path / "taxonomy.json"
        path.write_text(json.dumps({"categories": [["a"]], "keywords": {}}))

        with pytest.raises(ConfigError):
            load_config(path)

    def test_missing_file(self, tmp_path):
        """Test a taxonomy file that does not exist."""
        with pytest.raises(ConfigError):
            load_config(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        """Test a taxonomy file that is not JSON."""
        path = tmp_path / "taxonomy.json"
        path.write_text("categories: [Work]")

        with pytest.raises(ConfigError):
            load_config(path)

    def test_unknown_weight_field(self, tmp_path):
        """Test weights outside subject, snippet and sender."""
        path = tmp_path / "taxonomy.json"
        path.write_text(json.dumps({"weights": {"body": 1}}))

        with pytest.raises(ConfigError):
            load_config(path)

    def test_categories_without_matching_keywords(self, tmp_path):
        """Test a category list whose keywords are left at the defaults."""
        path = tmp_path / "taxonomy.json"
        path.write_text(json.dumps({"categories": ["Work", "Misc"]}))

        with pytest.raises(ConfigError):
            load_config(path)
