import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version

from calc_config import CalcConfig, ConfigError, load_config
from calc_rd import CalcError, calculate_expression

try:
    __version__ = version("calc-lab-rd")
except PackageNotFoundError:
    # запуск из исходников без установки
    __version__ = "unknown"

EXIT_COMMAND = "exit"

logger = logging.getLogger(__name__)


def format_result(value: float, precision: int = 6) -> str:
    return format(value, f".{precision}g")


def display_error(error: CalcError, expression: str, show_caret: bool = True, stream=None) -> None:
    stream = stream or sys.stderr
    print("Ошибка:", error, file=stream)
    if show_caret and error.position is not None:
        print(f"  {expression}", file=stream)
        print("  " + " " * error.position + "^", file=stream)


def evaluate_line(expression: str, config: CalcConfig) -> bool:
    """Вычисляет одну строку и печатает результат или ошибку. Возвращает True при успехе."""
    logger.debug("Вычисление: %r", expression)
    try:
        result = calculate_expression(expression)
    except CalcError as e:
        logger.debug("%s: %s", type(e).__name__, e)
        display_error(e, expression, config.show_caret)
        return False
    print("Результат:", format_result(result, config.precision))
    return True


def repl(config: CalcConfig, banner: bool = True) -> int:
    if banner:
        print(f"Калькулятор (введите '{EXIT_COMMAND}' для выхода)")
    while True:
        try:
            expression = input(config.prompt)
        except (EOFError, KeyboardInterrupt):
            print()
            return 0
        if expression == EXIT_COMMAND:
            print("Выход из калькулятора. До свидания!")
            return 0
        evaluate_line(expression, config)


def run_batch(lines, config: CalcConfig, stop_on_error: bool = False) -> int:
    """
    Неинтерактивный режим. Код 1, если хотя бы одна строка не вычислилась.
    stop_on_error: прервать на первой ошибке (выражения из командной строки).
    """
    status = 0
    for line in lines:
        expression = line.rstrip("\r\n")
        if expression == EXIT_COMMAND:
            break
        if not evaluate_line(expression, config):
            status = 1
            if stop_on_error:
                break
    return status


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="calc-rd",
        description="калькулятор арифметических выражений (рекурсивный спуск)",
    )
    parser.add_argument("expressions", nargs="*", metavar="expression",
                        help="вычислить выражения и выйти")
    parser.add_argument("-c", "--config", help="путь к INI-файлу настроек")
    parser.add_argument("-q", "--quiet", action="store_true", help="не печатать приветствие")
    parser.add_argument("-v", "--verbose", action="store_true", help="отладочный журнал в stderr")
    parser.add_argument("--version", action="version", version=f"calc-rd {__version__}")
    return parser


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)
    # basicConfig не меняет уровень, если обработчики уже настроены
    logging.getLogger().setLevel(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print("Ошибка:", e, file=sys.stderr)
        return 2

    if args.expressions:
        return run_batch(args.expressions, config, stop_on_error=True)
    if not sys.stdin.isatty():
        return run_batch(sys.stdin, config)
    return repl(config, banner=not args.quiet)


if __name__ == "__main__":
    sys.exit(main())
