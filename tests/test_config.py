from pathlib import Path

from pubmed_explorer.config import DEFAULT_BASE_URL, load_settings


def test_settings_read_environment(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("NCBI_BASE_URL", "http://localhost:9000/eutils/")
    monkeypatch.setenv("NCBI_API_KEY", " key ")
    monkeypatch.setenv("PUBMED_TIMEOUT", "4.5")
    monkeypatch.setenv("PUBMED_RELATED_LIMIT", "5")

    settings = load_settings(str(tmp_path / "absent.env"))

    assert settings.base_url == "http://localhost:9000/eutils"
    assert settings.api_key == "key"
    assert settings.timeout == 4.5
    assert settings.related_limit == 5


def test_invalid_numbers_fall_back_to_defaults(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("NCBI_BASE_URL", "")
    monkeypatch.setenv("PUBMED_TIMEOUT", "soon")
    monkeypatch.setenv("PUBMED_MAX_RETRIES", "-1")
    monkeypatch.setenv("PUBMED_SEARCH_LIMIT", "many")

    settings = load_settings(str(tmp_path / "absent.env"))

    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.timeout == 15.0
    assert settings.max_retries == 3
    assert settings.search_limit == 100


def test_zero_retries_is_allowed(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("PUBMED_MAX_RETRIES", "0")

    assert load_settings(str(tmp_path / "absent.env")).max_retries == 0
