"""
KZG 커밋먼트 오류 종류
======================

모든 연산은 실패 시 아래 예외 중 하나를 직접 호출자에게 전달한다.
내부에서 복구하지 않으며, 부분적으로 유효한 증명을 만들지 않는다.

기존 코드가 ``ValueError`` / ``ZeroDivisionError`` 를 잡고 있어도
동작하도록 각 종류는 대응되는 내장 예외도 함께 상속한다.
"""


class KateError(Exception):
    """이 패키지가 던지는 모든 오류의 기반 클래스."""


class NoInverseError(KateError, ZeroDivisionError):
    """역원이 없는 원소(0 또는 위수와 서로소가 아닌 값)로 나누려 할 때."""

    def __init__(self, value, order):
        self.value = value
        self.order = order
        super().__init__(f"{value} has no inverse modulo {order}")


class InvalidArgumentError(KateError, ValueError):
    """잘못된 인자 (예: 홀수 n에 대한 단위근 요청)."""


class RandomSourceError(KateError):
    """난수 소스가 실패했을 때."""


class DivisionByZeroError(KateError, ZeroDivisionError):
    """제수가 영 다항식일 때."""


class LengthMismatchError(KateError, ValueError):
    """계수 개수와 인코딩된 거듭제곱 개수가 다를 때."""

    def __init__(self, expected, actual, what="encoded powers"):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"len(coefficients) != len({what}): {expected} != {actual}"
        )


class DegreeTooLargeError(KateError, ValueError):
    """다항식 차수가 SRS 용량을 초과할 때."""

    def __init__(self, degree, max_degree):
        self.degree = degree
        self.max_degree = max_degree
        super().__init__(
            f"polynomial degree {degree} exceeds SRS max degree {max_degree}"
        )


class InvalidEvaluationError(KateError, ValueError):
    """(p(x) - y) / (x - z) 의 나머지가 0이 아닐 때.

    증명자가 주장한 평가값이 틀렸거나 다항식이 일관되지 않다는 신호다.
    """
