from checkup.config import ObjectStorageConfig, load_settings


def test_defaults_without_yaml():
    settings = load_settings({})
    assert settings.photos.max_file_size == 5 * 1024 * 1024
    assert settings.photos.max_per_property == 5
    assert settings.photos.max_total_size == 20 * 1024 * 1024
    assert settings.summary_strategy == "memory"
    assert settings.auth.login_domain == "healthoffice.local"


def test_yaml_values_are_applied():
    settings = load_settings({
        "database": {"url": "sqlite+aiosqlite:///tmp/x.db"},
        "summary_strategy": "database",
        "photos": {"max_per_property": 3},
    })
    assert settings.database_url == "sqlite+aiosqlite:///tmp/x.db"
    assert settings.summary_strategy == "database"
    assert settings.photos.max_per_property == 3


def test_object_storage_env(monkeypatch):
    monkeypatch.setenv("OBS_ENABLED", "true")
    monkeypatch.setenv("OBS_BUCKET", "checkups")
    monkeypatch.setenv("OBS_ACCESS_KEY_ID", "AKIA")
    monkeypatch.setenv("OBS_SECRET_ACCESS_KEY", "secret")
    monkeypatch.setenv("OBS_ENDPOINT", "obs.example.com")

    config = ObjectStorageConfig()
    assert config.is_configured
    assert config.endpoint == "https://obs.example.com"


def test_object_storage_incomplete(monkeypatch):
    monkeypatch.delenv("OBS_BUCKET", raising=False)
    config = ObjectStorageConfig(enabled=True, access_key_id="a", secret_access_key="b")
    assert not config.is_configured
    assert not ObjectStorageConfig(enabled=False, bucket="b", access_key_id="a", secret_access_key="b").is_configured
