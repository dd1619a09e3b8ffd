import pytest

from gh_secret_scanning.models.config import (
    Config,
    is_default_host,
    normalize_host,
)
from gh_secret_scanning.models.run_params import RunParams


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
	for var in ("GITHUB_TOKEN", "GH_TOKEN", "GH_HOST", "ALERT_LIMIT",
	            "REQUEST_TIMEOUT_SECONDS", "VERIFY_TIMEOUT_SECONDS",
	            "MAX_PARALLEL_VERIFICATIONS", "LOG_LEVEL", "OUTPUT_DIR"):
		monkeypatch.delenv(var, raising=False)


def test_defaults():
	cfg = Config()
	assert cfg.host == "github.com"
	assert cfg.limit == 30
	assert cfg.request_timeout_seconds == 30
	assert cfg.verify_timeout_seconds == 300
	assert cfg.max_parallel_verifications == 8
	assert cfg.github_token is None
	assert cfg.is_enterprise_server is False


def test_github_token_alias():
	cfg = Config(GITHUB_TOKEN="ghp_test123")
	assert cfg.github_token == "ghp_test123"


def test_gh_token_env_fallback(monkeypatch):
	monkeypatch.setenv("GH_TOKEN", "gho_fromenv")
	cfg = Config()
	assert cfg.github_token == "gho_fromenv"


def test_host_from_env_strips_scheme(monkeypatch):
	monkeypatch.setenv("GH_HOST", "https://ghes.example.com/")
	cfg = Config()
	assert cfg.host == "ghes.example.com"
	assert cfg.is_enterprise_server is True


def test_limit_rejects_zero():
	with pytest.raises(ValueError):
		Config(ALERT_LIMIT=0)


def test_request_timeout_rejects_negative():
	with pytest.raises(ValueError):
		Config(REQUEST_TIMEOUT_SECONDS=-1)


def test_normalize_host():
	assert normalize_host("http://ghes.local") == "ghes.local"
	assert normalize_host("  ") == "github.com"


def test_is_default_host():
	assert is_default_host("github.com")
	assert is_default_host("https://api.github.com")
	assert not is_default_host("ghes.example.com")


# ── apply_overrides ──────────────────────────────────────────────────


def test_apply_overrides_all_fields():
	"""apply_overrides sets every overridable field from RunParams."""
	cfg = Config()
	rp = RunParams(organization="acme", host="https://ghes.acme.io",
	               limit=7)
	cfg.apply_overrides(rp)
	assert cfg.host == "ghes.acme.io"
	assert cfg.limit == 7


def test_apply_overrides_none_preserves_defaults():
	"""apply_overrides skips None fields, keeping env/default values."""
	cfg = Config(ALERT_LIMIT=50)
	rp = RunParams(organization="acme")
	cfg.apply_overrides(rp)
	assert cfg.limit == 50
	assert cfg.host == "github.com"
