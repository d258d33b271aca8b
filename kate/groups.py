"""
페어링 그룹 인터페이스 및 bn128 구현
=====================================

KZG 커밋먼트는 두 원천 그룹 G1, G2와 쌍선형 페어링
e: G1 × G2 → GT 만을 인터페이스로 사용한다. 이 조건을 만족하는
페어링 친화 곡선이라면 어떤 구현으로도 교체할 수 있다.

**Group 인터페이스**:
  항등원(identity), 덧셈(add), 역원(neg), 스칼라곱(scalar_mul),
  생성자 스칼라곱(scalar_base_mul).

**bn128 구현**:
  py_ecc.bn128 의 아핀(affine) 좌표 점을 그대로 사용한다.
  무한원점(항등원)은 py_ecc와 같이 None으로 표현한다.

사용 예시:
    >>> P = BN128_G1.scalar_base_mul(5)       # 5·G1
    >>> Q = BN128_G2.scalar_base_mul(3)       # 3·G2
    >>> pairing_check([P, BN128_G1.neg(P)], [Q, Q])   # True
"""

from typing import Protocol, Sequence, TypeVar

from py_ecc import bn128
from py_ecc import optimized_bn128 as ob

from kate.errors import InvalidArgumentError, LengthMismatchError

P = TypeVar("P")


class Group(Protocol[P]):
    """커밋먼트 계산에 필요한 그룹 연산 집합."""

    name: str
    generator: P
    order: int

    def identity(self) -> P: ...

    def add(self, a: P, b: P) -> P: ...

    def neg(self, a: P) -> P: ...

    def scalar_mul(self, point: P, scalar: int) -> P: ...

    def scalar_base_mul(self, scalar: int) -> P: ...


class CurveGroup:
    """py_ecc.bn128 위의 원천 그룹 (G1 또는 G2).

    속성:
        name: "g1" 또는 "g2"
        generator: 그룹 생성자
        order: 그룹 위수 (bn128.curve_order)
    """

    def __init__(self, name, generator, b, order=bn128.curve_order):
        self.name = name
        self.generator = generator
        self.b = b
        self.order = order

    def __repr__(self):
        return f"CurveGroup({self.name!r})"

    def identity(self):
        return None

    def add(self, a, b):
        return bn128.add(a, b)

    def neg(self, a):
        return bn128.neg(a)

    def scalar_mul(self, point, scalar):
        """scalar · point. 스칼라는 그룹 위수로 축소한다."""
        return bn128.multiply(point, int(scalar) % self.order)

    def scalar_base_mul(self, scalar):
        """scalar · generator."""
        return self.scalar_mul(self.generator, scalar)

    def is_on_curve(self, point):
        if point is None:
            return True
        try:
            return bn128.is_on_curve(point, self.b)
        except (TypeError, ValueError, AttributeError):
            return False


BN128_G1 = CurveGroup("g1", bn128.G1, bn128.b)
BN128_G2 = CurveGroup("g2", bn128.G2, bn128.b2)

_GROUPS = {"g1": BN128_G1, "g2": BN128_G2}


def group_by_name(name):
    """이름("g1" 또는 "g2")으로 그룹을 찾는다."""
    try:
        return _GROUPS[name.lower()]
    except (KeyError, AttributeError):
        raise InvalidArgumentError(f"unknown group: {name!r}") from None


def other_group(group):
    """페어링의 반대편 그룹."""
    return BN128_G2 if group is BN128_G1 else BN128_G1


def _to_jacobian(point, group):
    # bn128 아핀 점 → optimized_bn128 사영(projective) 점
    if point is None:
        return ob.Z1 if group is BN128_G1 else ob.Z2
    x, y = point
    if group is BN128_G1:
        return (ob.FQ(int(x)), ob.FQ(int(y)), ob.FQ.one())
    return (
        ob.FQ2([int(c) for c in x.coeffs]),
        ob.FQ2([int(c) for c in y.coeffs]),
        ob.FQ2.one(),
    )


def pairing_check(g1_elements: Sequence, g2_elements: Sequence) -> bool:
    """∏ e(g1ᵢ, g2ᵢ) == 1 (GT 항등원) 인지 확인한다.

    각 쌍의 밀러 루프(Miller loop) 결과를 곱한 뒤 최종 지수승(final
    exponentiation)을 한 번만 수행한다. 페어링 자체는 py_ecc의
    optimized_bn128 (사영 좌표) 구현을 사용한다.

    Args:
        g1_elements: G1 점 리스트
        g2_elements: 같은 길이의 G2 점 리스트

    Returns:
        bool: 페어링 곱이 GT 항등원이면 True

    Raises:
        LengthMismatchError: 두 리스트 길이가 다를 때
        ValueError: 점이 곡선 위에 있지 않을 때 (py_ecc)

    주의:
        py_ecc pairing의 인자 순서는 (G2, G1)이다.
    """
    if len(g1_elements) != len(g2_elements):
        raise LengthMismatchError(len(g1_elements), len(g2_elements), "g2 elements")
    acc = ob.FQ12.one()
    for p1, p2 in zip(g1_elements, g2_elements):
        acc = acc * ob.pairing(
            _to_jacobian(p2, BN128_G2),
            _to_jacobian(p1, BN128_G1),
            final_exponentiate=False,
        )
    return ob.final_exponentiate(acc) == ob.FQ12.one()
