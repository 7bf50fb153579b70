import math


class CalcError(Exception):
    """Базовая ошибка калькулятора: сообщение и (если известна) позиция в строке."""

    def __init__(self, message: str, position: int | None = None):
        self.message = message
        self.position = position
        if position is not None:
            message = f"{message} на позиции {position}"
        super().__init__(message)


class ParseError(CalcError):
    """Синтаксическая ошибка при разборе выражения."""
    pass


class EvalError(CalcError):
    """Ошибка при вычислении."""
    pass


class DivisionByZeroError(EvalError):
    pass


class NumberFormatError(CalcError):
    """Лексема прошла сканер, но не преобразуется в число (например, одиночная '.')."""
    pass


DIGITS = "0123456789"
# пробельные символы C isspace
WHITESPACE = " \t\n\v\f\r"


# Поток символов: общий курсор для всех уровней грамматики
class CharStream:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ''

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def skip_whitespace(self):
        while self.pos < len(self.text) and self.text[self.pos] in WHITESPACE:
            self.pos += 1

    def match(self, expected: str) -> bool:
        """
        Пропускает пробелы; если текущий символ равен expected — съедает его и возвращает True.
        При несовпадении курсор не двигается.
        """
        self.skip_whitespace()
        if self.pos < len(self.text) and self.text[self.pos] == expected:
            self.pos += 1
            return True
        return False


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x == math.floor(x) and math.fmod(x, 2.0) != 0.0


def ieee_pow(base: float, exponent: float) -> float:
    """
    Возведение в степень с семантикой C pow: вместо исключений math.pow
    возвращает nan (вне области определения) или ±inf (переполнение, полюс).
    """
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        if base == 0.0:
            # 0 в отрицательной степени: полюс
            if _is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        return math.nan


# Правила: number и primary
def parse_number(cs: CharStream) -> float:
    """
    number → digit* ('.' digit*)?
    Не более одной точки; пустая лексема — ошибка.
    """
    cs.skip_whitespace()
    start = cs.pos
    point_seen = False
    while not cs.at_end() and (cs.peek() in DIGITS or cs.peek() == '.'):
        if cs.peek() == '.':
            if point_seen:
                raise ParseError("Некорректный формат числа", cs.pos)
            point_seen = True
        cs.pos += 1

    if start == cs.pos:
        raise ParseError("Ожидалось число", cs.pos)

    lexeme = cs.text[start:cs.pos]
    try:
        value = float(lexeme)
    except ValueError:
        raise NumberFormatError(f"Не удалось преобразовать '{lexeme}' в число", start) from None

    # float() не сообщает о выходе за диапазон double: inf или потеря ненулевого числа
    if math.isinf(value) or (value == 0.0 and any(ch in "123456789" for ch in lexeme)):
        raise NumberFormatError(f"Число '{lexeme}' вне диапазона", start)
    return value


def parse_primary(cs: CharStream) -> float:
    """
    primary → '+' primary | '-' primary | '(' expr ')' | number
    Унарный знак съедается здесь, поэтому -2^2 = (-2)^2.
    """
    cs.skip_whitespace()
    if cs.match('+'):
        return parse_primary(cs)
    if cs.match('-'):
        return -parse_primary(cs)

    if cs.match('('):
        value = parse_expr(cs)
        cs.skip_whitespace()
        if not cs.match(')'):
            raise ParseError("Отсутствует закрывающая скобка", cs.pos)
        return value

    return parse_number(cs)


# Правила: pow, mul, add, expr
def parse_pow(cs: CharStream) -> float:
    """
    pow → primary ('^' pow)?
    Право-ассоциативный: 2^3^2 = 2^(3^2) = 512
    """
    base = parse_primary(cs)
    cs.skip_whitespace()
    if cs.match('^'):
        exponent = parse_pow(cs)  # рекурсия вправо для правой ассоциативности
        return ieee_pow(base, exponent)
    return base


def parse_mul(cs: CharStream) -> float:
    """
    mul → pow (('*' | '/') pow)*
    Левая ассоциативность.
    """
    value = parse_pow(cs)
    while True:
        cs.skip_whitespace()
        if cs.match('*'):
            value *= parse_pow(cs)
        elif cs.match('/'):
            rhs = parse_pow(cs)
            if rhs == 0.0:
                raise DivisionByZeroError("Деление на ноль", cs.pos)
            value /= rhs
        else:
            break
    return value


def parse_add(cs: CharStream) -> float:
    """
    add → mul (('+' | '-') mul)*
    Левая ассоциативность.
    """
    value = parse_mul(cs)
    while True:
        cs.skip_whitespace()
        if cs.match('+'):
            value += parse_mul(cs)
        elif cs.match('-'):
            value -= parse_mul(cs)
        else:
            break
    return value


def parse_expr(cs: CharStream) -> float:
    """
    expr → add
    """
    return parse_add(cs)


class Evaluator:
    """
    Рекурсивный спуск с вычислением на лету, без построения дерева.
    Каждый вызов parse() начинает с нового курсора; экземпляр не стоит делить между потоками.
    """

    def parse(self, expression: str) -> float:
        cs = CharStream(expression)
        try:
            result = parse_expr(cs)
        except RecursionError:
            raise ParseError("Слишком глубокая вложенность выражения", cs.pos) from None

        # Проверяем, что всё выражение израсходовано
        cs.skip_whitespace()
        if not cs.at_end():
            raise ParseError(f"Неожиданный символ '{cs.peek()}'", cs.pos)
        return float(result)


def calculate_expression(expression: str) -> float:
    return Evaluator().parse(expression)
