"""
Настройки оболочки калькулятора (INI, секция [main]).
Порядок поиска: явный путь из --config, ./calc.ini в текущем каталоге, ~/.calc_rd.ini.
Если файла нет — используются DEFAULTS.
"""
import configparser
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

SECTION = "main"

DEFAULTS = {
    "prompt": "\nВведите выражение: ",
    "precision": "6",
    "show_caret": "yes",
}


class ConfigError(Exception):
    """Файл настроек не читается или содержит недопустимые значения."""
    pass


@dataclass
class CalcConfig:
    prompt: str = DEFAULTS["prompt"]
    precision: int = 6
    show_caret: bool = True
    path: Path | None = None


def find_config_path(explicit: str | Path | None = None) -> Path | None:
    if explicit is not None:
        return Path(explicit)
    candidates = [
        Path.cwd() / "calc.ini",
        Path.home() / ".calc_rd.ini",
    ]
    for c in candidates:
        if c.exists():
            return c
    return None


def load_config(explicit: str | Path | None = None) -> CalcConfig:
    path = find_config_path(explicit)
    if path is None:
        logger.debug("Файл настроек не найден, используются значения по умолчанию")
        return CalcConfig()
    if not path.is_file():
        raise ConfigError(f"Файл настроек не найден: {path}")

    # interpolation=None: в приглашении может встретиться '%'
    cfg = configparser.ConfigParser(defaults=DEFAULTS, interpolation=None)
    try:
        with open(path, encoding="utf-8") as f:
            cfg.read_file(f)
    except (OSError, configparser.Error, UnicodeDecodeError) as e:
        raise ConfigError(f"Не удалось прочитать {path}: {e}") from e

    section = cfg[SECTION] if cfg.has_section(SECTION) else cfg[configparser.DEFAULTSECT]
    try:
        precision = section.getint("precision")
        show_caret = section.getboolean("show_caret")
    except ValueError as e:
        raise ConfigError(f"Некорректное значение в {path}: {e}") from e
    if precision <= 0:
        raise ConfigError(f"precision должно быть > 0 в {path}")

    # configparser обрезает пробелы; '\n' в INI пишется буквально
    prompt = section.get("prompt").replace("\\n", "\n")

    logger.debug("Настройки загружены из %s", path)
    return CalcConfig(prompt=prompt, precision=precision, show_caret=show_caret, path=path)
