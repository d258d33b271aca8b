"""
집합 멤버십 증명
================

숨기고 싶은 집합 {m₁, m₂, ..., mₙ} 을 다항식의 근으로 인코딩한다:

    p(v) = (v - m₁)(v - m₂)···(v - mₙ)

p에 커밋한 뒤 공개된 값 z에 대해 p(z) = y 를 KZG로 증명한다.
y == 0 이면 z는 p의 근, 즉 집합의 원소이다.
검증자는 커밋먼트와 (z, y, π) 만 보고 집합 자체는 알 수 없다.

사용 예시:
    >>> srs = SRS.generate(max_degree=4, seed=1)
    >>> hidden = HiddenSet([1, 2], srs)
    >>> opening = hidden.prove_membership(5)
    >>> opening.value   # (5-1)(5-2) = 12 → 원소 아님
    >>> verify_membership(hidden.commitment, hidden.prove_membership(2), srs)  # True
"""

import logging

from kate.errors import DegreeTooLargeError
from kate.field import BN128_FIELD
from kate.groups import BN128_G1
from kate.kzg import commit, create_witness, verify_opening_claim
from kate.polynomial import Polynomial

logger = logging.getLogger(__name__)


class HiddenSet:
    """다항식 근으로 인코딩된 비공개 집합과 그 커밋먼트.

    속성:
        polynomial: ∏ (v - mᵢ) (비공개)
        commitment: 공개 커밋먼트 (G1 점)
        srs: 사용한 SRS
    """

    def __init__(self, members, srs):
        members = [BN128_FIELD.element(m) for m in members]
        if len(members) > srs.max_degree:
            raise DegreeTooLargeError(len(members), srs.max_degree)
        self.srs = srs
        self.polynomial = Polynomial.from_roots(members, BN128_FIELD)
        self.commitment = commit(self.polynomial, srs)
        logger.info("committed to hidden set of %d element(s)", len(members))

    def __len__(self):
        return self.polynomial.degree

    def prove_membership(self, z, group=BN128_G1):
        """z에서 다항식을 열어 증명을 만든다. value == 0 이면 z는 원소이다."""
        return create_witness(self.polynomial, z, self.srs, group)


def verify_membership(commitment, opening, srs):
    """증명이 유효하고 평가값이 0이면 True (z가 집합의 원소)."""
    if opening.value != 0:
        return False
    return verify_opening_claim(commitment, opening, srs)
