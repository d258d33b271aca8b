"""
유한체(Finite Field) 산술
=========================

임의의 위수(order) n 위의 모듈러 산술을 제공한다.
원소는 파이썬 ``int`` (임의 정밀도 정수)로 표현하며,
모든 연산 결과는 항상 [0, n) 범위로 축소된다.

**주의**: 상수 시간(constant-time) 연산이 아니다.
부채널(side-channel) 공격 저항성을 의도하지 않는다.

**단위근(Roots of Unity)**:
  x ≠ 0 이면 x^(q-1) = 1 (페르마 소정리)이므로,
  n | (q-1) 일 때 x^((q-1)/n)은 n차 단위근이다.
  원시(primitive) 단위근은 무작위 표본을 반복 추출하여 찾는다
  (시도당 성공 확률 ≥ 1/2, 반복 횟수 상한 없음).

사용 예시:
    >>> f = Field(97)
    >>> f.add(45, 67)     # 15
    >>> f.div(1, 3)       # 3의 모듈러 역원
    >>> BN128_FIELD.mul(2, 3)
"""

import logging
import secrets

from py_ecc import bn128

from kate.errors import InvalidArgumentError, NoInverseError, RandomSourceError

logger = logging.getLogger(__name__)


class Field:
    """위수 ``order`` 의 유한체 (실제로는 소수체).

    생성 후 변경되지 않는다.

    속성:
        order: 모듈러스 n

    예시:
        >>> f = Field(7)
        >>> f.mul(3, 5)       # 1
        >>> f.inverse(3)      # 5
    """

    __slots__ = ("_order",)

    def __init__(self, order):
        order = int(order)
        if order < 2:
            raise InvalidArgumentError(f"field order must be >= 2: {order}")
        self._order = order

    @property
    def order(self):
        return self._order

    def __eq__(self, other):
        return isinstance(other, Field) and self._order == other._order

    def __hash__(self):
        return hash(self._order)

    def __repr__(self):
        return f"Field({self._order})"

    # ── 기본 연산 ──

    def element(self, x):
        """정수 (또는 ``__int__`` 를 지원하는 값, 예: py_ecc FQ)를 체 원소로 축소한다."""
        return int(x) % self._order

    def add(self, x, y):
        return (x + y) % self._order

    def sub(self, x, y):
        return (x - y) % self._order

    def mul(self, x, y):
        return (x * y) % self._order

    def neg(self, x):
        return (-x) % self._order

    def exp(self, x, y):
        """x^y mod n. 음수 지수는 역원의 거듭제곱으로 처리한다."""
        if y < 0:
            return pow(self.inverse(x), -y, self._order)
        return pow(x, y, self._order)

    def inverse(self, x):
        """곱셈 역원 x⁻¹.

        Raises:
            NoInverseError: x가 위수와 서로소가 아닐 때 (x = 0 포함)
        """
        try:
            return pow(x % self._order, -1, self._order)
        except ValueError:
            raise NoInverseError(x, self._order) from None

    def div(self, x, y):
        """x · y⁻¹ mod n."""
        return (x * self.inverse(y)) % self._order

    # ── 난수 ──

    def random_element(self, random_source=None):
        """[0, n) 에서 균등하게 원소 하나를 뽑는다.

        바이트 스트림에서 위수의 비트 길이만큼 읽어 범위를 벗어나면
        다시 뽑는 거부 표집(rejection sampling)을 사용한다.

        Args:
            random_source: ``n -> bytes`` 호출 가능 객체.
                           None이면 ``secrets.token_bytes`` 를 사용한다.

        Returns:
            int: 난수 원소

        Raises:
            RandomSourceError: 난수 소스가 예외를 던지거나 짧게 읽었을 때
        """
        if random_source is None:
            random_source = secrets.token_bytes

        bits = (self._order - 1).bit_length()
        if bits == 0:
            return 0
        nbytes = (bits + 7) // 8
        mask = (1 << bits) - 1

        while True:
            try:
                buf = random_source(nbytes)
            except Exception as exc:
                raise RandomSourceError(f"random source failed: {exc}") from exc
            if buf is None or len(buf) < nbytes:
                raise RandomSourceError(
                    f"random source returned {0 if buf is None else len(buf)} "
                    f"bytes, wanted {nbytes}"
                )
            x = int.from_bytes(buf[:nbytes], "big") & mask
            if x < self._order:
                return x

    def random_nonzero_element(self, random_source=None):
        while True:
            x = self.random_element(random_source)
            if x != 0:
                return x

    # ── 단위근 ──

    def root_of_unity(self, n, primitive=False, random_source=None):
        """무작위 n차 단위근을 반환한다. n은 짝수여야 한다.

        n이 (q-1)을 나누지 않으면 유일한 단위근은 1이므로 1을 그대로 반환한다
        (``primitive`` 값과 무관).

        원시 단위근은 확률적으로 찾는다: root^(n/2) ≠ 1 인 root만 받아들이고
        아니면 다시 뽑는다. 시도당 성공 확률은 1/2 이상이며, 반복 횟수에
        상한이 없다 (확률적 종료 알고리즘).

        Args:
            n: 단위근의 차수 (양의 짝수)
            primitive: True이면 원시 단위근을 요구
            random_source: ``random_element`` 와 동일

        Returns:
            int: 단위근

        Raises:
            InvalidArgumentError: n이 양의 짝수가 아닐 때
            RandomSourceError: 난수 소스 실패

        예시:
            >>> w = BN128_FIELD.root_of_unity(4, primitive=True)
            >>> BN128_FIELD.exp(w, 4)   # 1
            >>> BN128_FIELD.exp(w, 2)   # ≠ 1
        """
        if not isinstance(n, int) or n <= 0 or n % 2 == 1:
            raise InvalidArgumentError(
                f"can only calculate even roots of unity; n = {n}"
            )

        q_sub_1_over_n, rem = divmod(self._order - 1, n)
        if rem != 0:
            return 1

        half_n = n // 2
        attempts = 0
        while True:
            attempts += 1
            x = self.random_nonzero_element(random_source)
            root = self.exp(x, q_sub_1_over_n)
            if not primitive or self.exp(root, half_n) != 1:
                logger.debug("found %d-th root of unity after %d attempt(s)", n, attempts)
                return root

    def roots_of_unity(self, n, random_source=None):
        """[1, ω, ω², ..., ω^(n-1)] (ω는 원시 n차 단위근)."""
        omega = self.root_of_unity(n, primitive=True, random_source=random_source)
        roots = []
        current = 1
        for _ in range(n):
            roots.append(current)
            current = self.mul(current, omega)
        return roots


# bn128 스칼라 필드 (곡선 위수). 커밋먼트 프로토콜의 기본 체.
CURVE_ORDER = bn128.curve_order
BN128_FIELD = Field(CURVE_ORDER)
