import pytest

from sqlite_webgui.config import Settings, load_settings, read_config_yaml


@pytest.fixture(autouse=True)
def _isolated(tmp_path, monkeypatch):
    # no stray config.yaml or SQLITE_WEBGUI_* vars from the developer's shell
    monkeypatch.chdir(tmp_path)
    for key in ("CONFIG", "PORT", "HOST", "WRITABLE", "OPEN_BROWSER", "FOREIGN_KEYS", "LOG_LEVEL", "DB_PATH"):
        monkeypatch.delenv("SQLITE_WEBGUI_" + key, raising=False)


def test_defaults():
    s = load_settings()
    assert s == Settings()
    assert s.port == 8080
    assert s.readonly is True


def test_yaml_file(tmp_path):
    (tmp_path / "config.yaml").write_text("port: 9000\nwritable: true\nlog_level: debug\n", encoding="utf-8")
    s = load_settings()
    assert s.port == 9000
    assert s.writable is True and s.readonly is False
    assert s.log_level == "DEBUG"


def test_explicit_config_path(tmp_path):
    cfg = tmp_path / "other.yaml"
    cfg.write_text("host: 0.0.0.0\n", encoding="utf-8")
    assert load_settings(str(cfg)).host == "0.0.0.0"


def test_bad_yaml_ignored(tmp_path):
    (tmp_path / "config.yaml").write_text("port: [unclosed\n", encoding="utf-8")
    assert read_config_yaml() == {}
    assert load_settings().port == 8080


def test_env_overrides_yaml(tmp_path, monkeypatch):
    (tmp_path / "config.yaml").write_text("port: 9000\nwritable: true\n", encoding="utf-8")
    monkeypatch.setenv("SQLITE_WEBGUI_PORT", "9100")
    monkeypatch.setenv("SQLITE_WEBGUI_WRITABLE", "no")
    s = load_settings()
    assert s.port == 9100
    assert s.writable is False


def test_overrides_win(tmp_path, monkeypatch):
    monkeypatch.setenv("SQLITE_WEBGUI_PORT", "9100")
    s = load_settings(port=3000, writable=None, db_path="x.db")
    assert s.port == 3000
    assert s.writable is False
    assert s.db_path == "x.db"


def test_junk_port_falls_back(monkeypatch):
    monkeypatch.setenv("SQLITE_WEBGUI_PORT", "eighty")
    assert load_settings().port == 8080
