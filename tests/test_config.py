from src.scaffold import config


def test_git_init_flag(monkeypatch):
    monkeypatch.setenv("CREATE_DROID_GIT_INIT", "yes")
    assert config.git_init_enabled() is True
    monkeypatch.setenv("CREATE_DROID_GIT_INIT", "off")
    assert config.git_init_enabled() is False
    monkeypatch.setenv("CREATE_DROID_GIT_INIT", "maybe")
    assert config.git_init_enabled() is True
    monkeypatch.delenv("CREATE_DROID_GIT_INIT")
    assert config.git_init_enabled() is True


def test_http_timeout(monkeypatch):
    monkeypatch.delenv("CREATE_DROID_HTTP_TIMEOUT_S", raising=False)
    assert config.http_timeout_s() == 10
    monkeypatch.setenv("CREATE_DROID_HTTP_TIMEOUT_S", "3")
    assert config.http_timeout_s() == 3
    monkeypatch.setenv("CREATE_DROID_HTTP_TIMEOUT_S", "abc")
    assert config.http_timeout_s() == 10
    monkeypatch.setenv("CREATE_DROID_HTTP_TIMEOUT_S", "0")
    assert config.http_timeout_s() == 1


def test_addon_registry_url_requires_name_field(monkeypatch):
    monkeypatch.setenv("CREATE_DROID_ADDON_REGISTRY_URL", "https://mirror.example/{name}.json")
    assert config.addon_registry_url() == "https://mirror.example/{name}.json"
    monkeypatch.setenv("CREATE_DROID_ADDON_REGISTRY_URL", "https://mirror.example/addons.json")
    assert "{name}" in config.addon_registry_url()
    assert "mirror.example" not in config.addon_registry_url()


def test_default_sdk_dir_precedence(monkeypatch, tmp_path):
    for name in ("ANDROID_HOME", "ANDROID_SDK_ROOT", "CREATE_DROID_SDK_DIR"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    assert config.default_sdk_dir() == str(tmp_path / ".local" / "share" / "create-android-app" / "sdk")

    monkeypatch.setenv("CREATE_DROID_SDK_DIR", "/custom")
    assert config.default_sdk_dir() == "/custom"
    monkeypatch.setenv("ANDROID_SDK_ROOT", "/root-sdk")
    assert config.default_sdk_dir() == "/root-sdk"
    monkeypatch.setenv("ANDROID_HOME", "/home-sdk")
    assert config.default_sdk_dir() == "/home-sdk"


def test_log_level(monkeypatch):
    monkeypatch.setenv("CREATE_DROID_LOG_LEVEL", "debug")
    assert config.log_level() == "DEBUG"
