"""
거듭제곱 인코딩 (Powers Encoder)
================================

SRS는 비밀 값 s의 거듭제곱 [1, s, s², ..., s^d] 를 그룹 원소로 인코딩한 것이다.
커밋하는 쪽은 s를 모른 채, 이미 인코딩된 거듭제곱에 계수를 곱해 더함으로써
p(s)·G 를 "지수에서(in the exponent)" 계산한다.

    p(s)·G = Σᵢ cᵢ · [sⁱ]

사용 예시:
    >>> xs = compute_powers(3, 4, Field(97))        # [1, 3, 9, 27]
    >>> encoded = encode_powers(xs, BN128_G1)
    >>> evaluate_on_encoded_powers(poly, encoded, BN128_G1)
"""

from kate.errors import InvalidArgumentError, LengthMismatchError
from kate.field import BN128_FIELD


def compute_powers(x, n, field=BN128_FIELD):
    """[x⁰, x¹, ..., x^(n-1)] 을 이전 거듭제곱에 x를 곱해가며 계산한다.

    n = 0 이면 빈 리스트를 반환한다.
    """
    if n < 0:
        raise InvalidArgumentError(f"number of powers must be >= 0: {n}")
    x = field.element(x)
    xs = []
    current = 1 % field.order
    for _ in range(n):
        xs.append(current)
        current = field.mul(current, x)
    return xs


def encode_powers(powers, group):
    """각 거듭제곱을 그룹 생성자에 곱한다: [xⁱ·G]."""
    return [group.scalar_base_mul(x) for x in powers]


def evaluate_on_encoded_powers(poly, encoded_powers, group):
    """인코딩된 거듭제곱 위에서 다항식을 평가한다: Σᵢ cᵢ · encoded_powers[i].

    비밀 값을 알지 못해도 되며, 이미 인코딩된 값만 다룬다.

    Args:
        poly: 평가할 다항식
        encoded_powers: [x⁰·G, x¹·G, ...] (계수 개수와 같은 길이)
        group: 원소 연산을 제공하는 그룹 (``kate.groups.Group``)

    Returns:
        그룹 원소 p(x)·G

    Raises:
        LengthMismatchError: len(poly.coeffs) != len(encoded_powers)
    """
    if len(poly.coeffs) != len(encoded_powers):
        raise LengthMismatchError(len(poly.coeffs), len(encoded_powers))

    result = group.identity()
    for coeff, power in zip(poly.coeffs, encoded_powers):
        if coeff == 0:
            continue
        result = group.add(result, group.scalar_mul(power, coeff))
    return result
