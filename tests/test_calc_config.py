import pytest

from calc_config import DEFAULTS, CalcConfig, ConfigError, find_config_path, load_config


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    (tmp_path / "home").mkdir()
    return tmp_path


def test_defaults_without_file(isolated):
    assert find_config_path() is None
    cfg = load_config()
    assert cfg == CalcConfig()
    assert cfg.prompt == DEFAULTS["prompt"]
    assert cfg.precision == 6
    assert cfg.show_caret is True


def test_cwd_file_wins_over_home(isolated):
    (isolated / "home" / ".calc_rd.ini").write_text("[main]\nprecision = 9\n", encoding="utf-8")
    assert load_config().precision == 9
    (isolated / "calc.ini").write_text("[main]\nprecision = 4\n", encoding="utf-8")
    cfg = load_config()
    assert cfg.precision == 4
    assert cfg.path.name == "calc.ini"


def test_explicit_file(isolated):
    ini = isolated / "my.ini"
    ini.write_text(
        "[main]\nprompt = calc>\\n> \nprecision = 10\nshow_caret = no\n",
        encoding="utf-8",
    )
    cfg = load_config(ini)
    assert cfg.prompt == "calc>\n>"
    assert cfg.precision == 10
    assert cfg.show_caret is False


def test_missing_section_uses_defaults(isolated):
    ini = isolated / "empty.ini"
    ini.write_text("[other]\nx = 1\n", encoding="utf-8")
    assert load_config(ini).precision == 6


def test_explicit_missing_file(isolated):
    with pytest.raises(ConfigError, match="не найден"):
        load_config(isolated / "nope.ini")


@pytest.mark.parametrize("body", [
    "[main]\nprecision = abc\n",
    "[main]\nprecision = 0\n",
    "[main]\nshow_caret = maybe\n",
    "precision = 3\n",
])
def test_invalid_files(isolated, body):
    ini = isolated / "bad.ini"
    ini.write_text(body, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(ini)


def test_unreadable_file(isolated, monkeypatch):
    ini = isolated / "calc.ini"
    ini.write_text("[main]\nprecision = 3\n", encoding="utf-8")

    def deny(*args, **kwargs):
        raise PermissionError("доступ запрещён")

    monkeypatch.setattr("calc_config.open", deny, raising=False)
    with pytest.raises(ConfigError, match="Не удалось прочитать"):
        load_config()
