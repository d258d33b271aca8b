"""
KZG 다항식 커밋먼트 스킴
=========================

Kate-Zaverucha-Goldberg (KZG) 커밋먼트: 숨겨진 다항식에 대한 간결한
"지문"(커밋먼트)을 타원곡선 점으로 만들고, 나중에 임의의 점에서의
평가값을 짧은 증명으로 보인다.

**커밋먼트**:
  C = p(s)·G1 = Σᵢ cᵢ · [sⁱ]₁   (s는 SRS의 비밀 값, 이미 폐기됨)

**열기 증명 (Opening Proof)**:
  "p(z) = y" 임을 증명하는 방법:
  1. 몫 다항식 q(v) = (p(v) - y) / (v - z) 계산
     (p(z) = y이면 (v-z)가 (p(v)-y)를 나누므로 q(v)는 다항식)
  2. 증명 π = q(s)·G2 또는 q(s)·G1
  3. 검증 (페어링):
     π ∈ G2:  e([s-z]₁, π) · e(-(C - [y]₁), [1]₂) == 1
     π ∈ G1:  e(π, [s-z]₂) · e(-(C - [y]₁), [1]₂) == 1
     페어링의 쌍선형성 덕분에 몫을 어느 쪽 그룹에 두어도 같은 관계를 확인한다.

검증자는 [z], [y], π 와 공개 SRS만 필요하다.

사용 예시:
    >>> C = commit(poly, srs)
    >>> opening = create_witness(poly, 7, srs)
    >>> verify_opening(C, opening.proof, 7, opening.value, srs)  # True
"""

import logging

from kate.errors import DegreeTooLargeError, InvalidArgumentError
from kate.field import BN128_FIELD
from kate.groups import BN128_G1, BN128_G2, group_by_name, other_group, pairing_check
from kate.polynomial import quotient_of_opening
from kate.powers import evaluate_on_encoded_powers
from kate.serializers import (
    serialize_fr,
    deserialize_fr,
    serialize_point,
    deserialize_point,
)

logger = logging.getLogger(__name__)


class Opening:
    """열기 결과: 평가 주장 (z, y) 와 그 증명.

    속성:
        point: 평가 점 z
        value: 평가값 y = p(z)
        proof: 몫 다항식 커밋먼트 π (group 위의 점)
        group: π가 속한 그룹 (BN128_G1 또는 BN128_G2)
    """

    __slots__ = ("point", "value", "proof", "group")

    def __init__(self, point, value, proof, group=BN128_G1):
        self.point = point
        self.value = value
        self.proof = proof
        self.group = group

    def __eq__(self, other):
        if not isinstance(other, Opening):
            return NotImplemented
        return (self.point, self.value, self.proof, self.group) == (
            other.point, other.value, other.proof, other.group
        )

    __hash__ = None

    def __repr__(self):
        return f"Opening(point={self.point}, value={self.value}, group={self.group.name})"

    def to_dict(self):
        return {
            "point": serialize_fr(self.point),
            "value": serialize_fr(self.value),
            "group": self.group.name,
            "proof": serialize_point(self.proof),
        }

    @classmethod
    def from_dict(cls, data):
        group = group_by_name(data["group"])
        return cls(
            deserialize_fr(data["point"]),
            deserialize_fr(data["value"]),
            deserialize_point(data["proof"], group),
            group,
        )


def _check_field(poly):
    # SRS는 bn128 스칼라 필드 위의 거듭제곱이다
    if poly.field != BN128_FIELD:
        raise InvalidArgumentError(
            f"polynomial over {poly.field} cannot be used with a bn128 SRS"
        )


def _evaluate_on_srs(poly, srs, group):
    d = poly.degree
    if d + 1 > len(srs):
        raise DegreeTooLargeError(d, srs.max_degree)
    return evaluate_on_encoded_powers(poly.trimmed(), srs.powers(group)[: d + 1], group)


def commit(poly, srs):
    """다항식을 KZG 커밋한다.

    C = Σ cᵢ · [sⁱ]₁ = p(s) · G1

    SRS의 G1 powers에 다항식 계수를 곱하여 선형결합한다.
    s를 모르는 상태에서 p(s)·G1을 계산하는 것이다.

    Args:
        poly: 커밋할 다항식 (bn128 스칼라 필드 위)
        srs: Structured Reference String (SRS)

    Returns:
        G1 점: 커밋먼트 C (영 다항식이면 None)

    Raises:
        DegreeTooLargeError: 다항식 차수가 SRS 최대 차수를 초과할 때
        InvalidArgumentError: 다항식이 bn128 스칼라 필드 위에 있지 않을 때
    """
    _check_field(poly)
    return _evaluate_on_srs(poly, srs, BN128_G1)


def create_witness(poly, point, srs, group=BN128_G1):
    """열기 증명(opening proof)을 생성한다.

    y = p(z) 를 계산하고 q(v) = (p(v) - y) / (v - z) 를 group 위에서 평가한다.

    Args:
        poly: 열어볼 다항식 p(v)
        point: 평가 점 z
        srs: SRS
        group: 증명을 인코딩할 그룹 (BN128_G1 또는 BN128_G2)

    Returns:
        Opening: (z, y, π, group)

    Raises:
        InvalidEvaluationError: 나머지가 0이 아닐 때
        DegreeTooLargeError: 몫 다항식이 SRS 용량을 초과할 때
        InvalidArgumentError: 다항식이 bn128 스칼라 필드 위에 있지 않을 때
    """
    _check_field(poly)
    f = poly.field
    z = f.element(point)
    y = poly.evaluate(z)
    quotient = quotient_of_opening(poly, z, y)
    proof = _evaluate_on_srs(quotient, srs, group)
    logger.debug("opened degree %d polynomial in %s", poly.degree, group.name)
    return Opening(z, y, proof, group)


def verify_opening(commitment, proof, point, value, srs, group=BN128_G1):
    """KZG 열기 증명을 검증한다.

    [s - z] 는 공개 SRS의 [s] 에서 z·생성자를 빼서 만든다.
    몫이 G2에 있으면 [s - z]₁, G1에 있으면 [s - z]₂ 를 사용한다.

    Args:
        commitment: 다항식 커밋먼트 C (G1 점)
        proof: 열기 증명 π (group 위의 점)
        point: 평가 점 z
        value: 주장하는 평가값 y = p(z)
        srs: SRS
        group: π가 속한 그룹

    Returns:
        bool: 검증 성공 여부. 곡선 위에 있지 않은 점이 섞여 있으면 False.
    """
    z = int(point)
    y = int(value)
    other = other_group(group)

    try:
        # [s - z] (π 반대편 그룹)
        s_minus_z = other.add(srs.powers(other)[1], other.neg(other.scalar_base_mul(z)))

        # -(C - [y]₁)
        c_minus_y = BN128_G1.add(commitment, BN128_G1.neg(BN128_G1.scalar_base_mul(y)))
        neg_c_minus_y = BN128_G1.neg(c_minus_y)

        if group is BN128_G2:
            g1_elements = [s_minus_z, neg_c_minus_y]
            g2_elements = [proof, BN128_G2.generator]
        else:
            g1_elements = [proof, neg_c_minus_y]
            g2_elements = [s_minus_z, BN128_G2.generator]

        return pairing_check(g1_elements, g2_elements)
    except (ValueError, TypeError, AttributeError) as exc:
        logger.warning("rejecting opening with malformed input: %s", exc)
        return False


def verify_opening_claim(commitment, opening, srs):
    """Opening 객체 (z, y, π, group) 로 ``verify_opening`` 을 호출한다."""
    return verify_opening(
        commitment, opening.proof, opening.point, opening.value, srs, opening.group
    )
