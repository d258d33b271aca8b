"""
다항식(Polynomial) 대수
=======================

유한체 위의 조밀(dense) 계수 표현 다항식. p(v) = c₀ + c₁·v + c₂·v² + ...

**표현**:
  coeffs[i] 는 vⁱ 의 계수이다. 저장 공간에는 최고차 쪽에 0 계수가
  남아 있을 수 있다. 차수(degree)는 0이 아닌 계수의 최고 인덱스이며,
  **영 다항식의 차수는 0으로 정의한다** (-∞ 아님). 나눗셈 루프의 종료
  조건이 이 규약에 의존하므로 그대로 유지한다.

**불변성**:
  모든 연산은 새 Polynomial을 반환하며 피연산자를 수정하지 않는다.

**다항식 나눗셈 (poly_div)**:
  KZG 열기 증명에서 몫 다항식 q(v) = (p(v) - y) / (v - z) 계산에 쓰인다.
  나머지가 0이 아니면 주장한 평가값이 틀렸다는 뜻이다.

사용 예시:
    >>> f = Field(100)
    >>> p = Polynomial([1, 0, 0, 1], f)    # 1 + v³
    >>> q, r = poly_div(p, Polynomial([1, 1], f))
    >>> q.coeffs  # [1, 99, 1]
"""

import logging

from kate.errors import (
    DivisionByZeroError,
    InvalidArgumentError,
    InvalidEvaluationError,
)
from kate.field import BN128_FIELD

logger = logging.getLogger(__name__)


class Polynomial:
    """유한체 ``field`` 위의 다항식.

    예시:
        >>> p = Polynomial([1, 2])      # 1 + 2v  (bn128 스칼라 필드)
        >>> q = Polynomial([3, 4])      # 3 + 4v
        >>> r = p + q                   # 4 + 6v
        >>> r = p * q                   # 3 + 10v + 8v²
    """

    def __init__(self, coeffs=None, field=BN128_FIELD):
        """다항식 생성.

        Args:
            coeffs: 계수 리스트 [c₀, c₁, ...] (int 또는 ``__int__`` 지원 값).
                    None이나 빈 리스트이면 영 다항식을 생성한다.
            field: 계수가 속한 유한체
        """
        self.field = field
        if not coeffs:
            self.coeffs = [0]
        else:
            self.coeffs = [field.element(c) for c in coeffs]

    @classmethod
    def _raw(cls, coeffs, field):
        # 이미 축소된 계수 리스트를 복사 없이 감싼다
        poly = cls.__new__(cls)
        poly.field = field
        poly.coeffs = coeffs if coeffs else [0]
        return poly

    # ── 생성자 ──

    @classmethod
    def zero(cls, field=BN128_FIELD):
        """영 다항식 p(v) = 0."""
        return cls._raw([0], field)

    @classmethod
    def one(cls, field=BN128_FIELD):
        """상수 다항식 p(v) = 1."""
        return cls._raw([1], field)

    @classmethod
    def linear(cls, root, field=BN128_FIELD):
        """1차 다항식 v - root."""
        return cls._raw([field.neg(field.element(root)), 1], field)

    @classmethod
    def from_roots(cls, roots, field=BN128_FIELD):
        """주어진 원소들을 근으로 갖는 다항식 ∏ (v - rᵢ).

        집합 원소를 다항식의 근으로 인코딩하여 숨긴다.
        빈 집합이면 상수 1을 반환한다.

        예시:
            >>> p = Polynomial.from_roots([1, 2], Field(97))
            >>> p.evaluate(5)   # (5-1)(5-2) = 12
        """
        result = cls.one(field)
        for r in roots:
            result = result * cls.linear(r, field)
        return result

    # ── 기본 성질 ──

    @property
    def degree(self):
        """0이 아닌 계수의 최고 인덱스. 영 다항식의 차수는 0."""
        for d in range(len(self.coeffs) - 1, 0, -1):
            if self.coeffs[d] != 0:
                return d
        return 0

    def is_zero(self):
        """영 다항식인지 확인."""
        return self.degree == 0 and self.coeffs[0] == 0

    def leading_coefficient(self):
        return self.coeffs[self.degree]

    def trimmed(self):
        """최고차 쪽 0 계수를 제거한 새 다항식 (길이 = degree + 1)."""
        return Polynomial._raw(self.coeffs[: self.degree + 1], self.field)

    def __len__(self):
        """저장된 계수 개수 (0 계수 포함)."""
        return len(self.coeffs)

    def _check_field(self, other):
        if other.field != self.field:
            raise InvalidArgumentError(
                f"polynomials over different fields: {self.field} != {other.field}"
            )

    def _coerce(self, other):
        if isinstance(other, Polynomial):
            self._check_field(other)
            return other
        return Polynomial([other], self.field)

    # ── 평가 ──

    def evaluate(self, point):
        """다항식을 주어진 점에서 평가한다 (Horner's method).

        최고차 계수부터 y = y·x + cᵢ 를 누적한다.

        예시:
            >>> Polynomial([0, 1, 2], Field(100)).evaluate(1)   # 3
        """
        f = self.field
        x = f.element(point)
        y = 0
        for coeff in reversed(self.coeffs):
            y = f.add(f.mul(y, x), coeff)
        return y

    # ── 산술 ──

    def add(self, other):
        """다항식 덧셈. 더 긴 차수 범위에 대해 계수별로 더한다."""
        other = self._coerce(other)
        f = self.field
        n = max(self.degree, other.degree) + 1
        result = [0] * n
        for i in range(min(n, len(self.coeffs))):
            result[i] = self.coeffs[i]
        for i in range(min(n, len(other.coeffs))):
            result[i] = f.add(result[i], other.coeffs[i])
        return Polynomial._raw(result, f)

    def scaled_by(self, scalar):
        """스칼라곱: scalar · p(v)."""
        f = self.field
        c = f.element(scalar)
        return Polynomial._raw([f.mul(a, c) for a in self.coeffs], f)

    def sub(self, other):
        """다항식 뺄셈: p + (-1)·q."""
        other = self._coerce(other)
        return self.add(other.scaled_by(-1))

    def mul(self, other):
        """다항식 곱셈 (나이브 합성곱, O(n²)).

        결과의 k번째 계수 = Σ_{i+j=k} pᵢ·qⱼ.
        원소 개수가 수십~수백 정도인 집합에는 충분하다.
        """
        other = self._coerce(other)
        f = self.field
        da, db = self.degree, other.degree
        result = [0] * (da + db + 1)
        for i in range(da + 1):
            a = self.coeffs[i]
            if a == 0:
                continue
            for j in range(db + 1):
                result[i + j] = f.add(result[i + j], f.mul(a, other.coeffs[j]))
        return Polynomial._raw(result, f)

    def divide(self, divisor):
        """(몫, 나머지) = self / divisor. ``poly_div`` 참고."""
        return poly_div(self, divisor)

    def equals(self, other):
        """차수가 같고 0..degree 계수가 모두 같으면 True."""
        d = self.degree
        if d != other.degree:
            return False
        return self.coeffs[: d + 1] == other.coeffs[: d + 1]

    # ── 연산자 ──

    def __add__(self, other):
        return self.add(other)

    def __radd__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.sub(other)

    def __rsub__(self, other):
        return self._coerce(other).sub(self)

    def __neg__(self):
        return self.scaled_by(-1)

    def __mul__(self, other):
        if isinstance(other, Polynomial):
            return self.mul(other)
        return self.scaled_by(other)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __divmod__(self, other):
        return poly_div(self, self._coerce(other))

    def __eq__(self, other):
        if isinstance(other, Polynomial):
            return self.equals(other)
        if isinstance(other, int):
            return self.equals(Polynomial([other], self.field))
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        terms = []
        for i, c in enumerate(self.coeffs[: self.degree + 1]):
            if c == 0:
                continue
            if i == 0:
                terms.append(str(c))
            elif i == 1:
                terms.append(f"{c}*v")
            else:
                terms.append(f"{c}*v^{i}")
        return "Poly(" + " + ".join(terms) + ")" if terms else "Poly(0)"


# ─────────────────────────────────────────────────────────────────────
# 다항식 나눗셈 (Polynomial Long Division)
# ─────────────────────────────────────────────────────────────────────

def poly_div(dividend, divisor):
    """다항식 나눗셈: dividend(v) = divisor(v) · q(v) + r(v).

    피제수의 작업용 사본 위에서 반복적으로 최고차 항을 소거한다.
    나머지의 차수가 제수의 차수보다 작아지거나, 나머지가 영 다항식
    (차수 0, 값 0)이 되면 멈춘다.

    영 다항식의 차수를 0으로 두는 규약 때문에, 상수 제수로 나누는 경우에도
    나머지가 0이 되는 순간 루프가 종료된다.

    Args:
        dividend: 피제수 다항식
        divisor: 제수 다항식

    Returns:
        tuple: (몫 Polynomial, 나머지 Polynomial)

    Raises:
        DivisionByZeroError: 제수가 영 다항식일 때
        NoInverseError: 제수의 최고차 계수에 역원이 없을 때
        InvalidArgumentError: 두 다항식의 체가 다를 때

    예시:
        >>> f = Field(100)
        >>> q, r = poly_div(Polynomial([1, 0, 0, 1], f), Polynomial([1, 1], f))
        >>> q  # Poly(1 + 99*v + 1*v^2)
        >>> r  # Poly(0)
    """
    dividend._check_field(divisor)
    if divisor.is_zero():
        raise DivisionByZeroError(
            f"division by the zero polynomial (dividend degree {dividend.degree})"
        )

    f = dividend.field
    deg_d = divisor.degree
    deg_n = dividend.degree
    if deg_n < deg_d:
        return Polynomial.zero(f), dividend.trimmed()

    lead_inv = f.inverse(divisor.coeffs[deg_d])
    den = divisor.coeffs[: deg_d + 1]
    # 작업용 사본: 피제수는 수정하지 않는다
    remainder = Polynomial._raw(list(dividend.coeffs[: deg_n + 1]), f)
    quotient = [0] * (deg_n - deg_d + 1)

    while remainder.degree >= deg_d:
        ip = remainder.degree
        shift = ip - deg_d
        coeff = f.mul(remainder.coeffs[ip], lead_inv)
        quotient[shift] = coeff
        rc = remainder.coeffs
        for j in range(deg_d + 1):
            rc[shift + j] = f.sub(rc[shift + j], f.mul(coeff, den[j]))
        logger.debug("poly_div step: q[%d] = %d", shift, coeff)
        if remainder.is_zero():
            break

    return Polynomial._raw(quotient, f), remainder.trimmed()


def quotient_of_opening(poly, point, value):
    """q(v) = (p(v) - y) / (v - z) 를 계산하고 나머지가 0인지 확인한다.

    p(z) = y 이면 (v - z) 가 (p(v) - y) 를 나누므로 (인수정리) 나머지는 0이다.

    Raises:
        InvalidEvaluationError: 나머지가 0이 아닐 때
    """
    f = poly.field
    quotient, remainder = poly_div(poly - f.element(value), Polynomial.linear(point, f))
    if not remainder.is_zero():
        raise InvalidEvaluationError(
            f"division rest not zero: {remainder} "
            f"(degree {poly.degree} polynomial, z={f.element(point)}, y={f.element(value)})"
        )
    return quotient
