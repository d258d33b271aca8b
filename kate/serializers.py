"""
KZG 데이터 직렬화/역직렬화 헬퍼
================================

JSON에 저장 가능한 형태로 체 원소, G1/G2 점, 다항식을 변환한다.
SRS와 열기 증명은 각각 ``SRS.to_dict`` / ``Opening.to_dict`` 에서 이 헬퍼를 사용한다.
큰 정수는 JSON 숫자 정밀도 문제를 피하기 위해 10진수 문자열로 저장한다.

점 형식 (무한원점은 null):
    G1: [x, y]
    G2: [[x₀, x₁], [y₀, y₁]]   (FQ2 좌표 = x₀ + x₁·i)
"""

from py_ecc import bn128

from kate.errors import InvalidArgumentError
from kate.groups import BN128_G1


# ─── 체 원소 ───

def serialize_fr(val):
    """int → str(int)"""
    return str(int(val))


def deserialize_fr(s):
    """str(int) → int"""
    return int(s)


# ─── 곡선 점 ───

def _encode_coord(c):
    if isinstance(c, bn128.FQ2):
        return [serialize_fr(x) for x in c.coeffs]
    return serialize_fr(c)


def _decode_coord(data, group):
    if group is BN128_G1:
        return bn128.FQ(int(data))
    if len(data) != 2:
        raise ValueError(f"FQ2 coordinate needs 2 components, got {len(data)}")
    return bn128.FQ2([int(x) for x in data])


def serialize_point(point):
    """G1/G2 점 → 좌표 리스트. 좌표 타입(FQ / FQ2)으로 그룹이 정해진다."""
    if point is None:
        return None
    return [_encode_coord(c) for c in point]


def deserialize_point(data, group):
    """그룹에 맞게 점을 복원한다. 곡선 위에 있지 않으면 InvalidArgumentError."""
    if data is None:
        return None
    try:
        x, y = data
        point = (_decode_coord(x, group), _decode_coord(y, group))
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"malformed {group.name} point: {data!r}") from exc
    if not group.is_on_curve(point):
        raise InvalidArgumentError(f"{group.name} point is not on the curve")
    return point


# ─── Polynomial ───

def serialize_poly(poly):
    """Polynomial → {"order": str, "coeffs": [str, ...]} (0..degree 계수만)"""
    return {
        "order": serialize_fr(poly.field.order),
        "coeffs": [serialize_fr(c) for c in poly.trimmed().coeffs],
    }


# ─── 화면 표시용 축약 ───

def abbreviate(value):
    """긴 정수는 앞 8자리...뒤 4자리로, 점은 x 좌표(FQ2면 실수부)만 보인다."""
    if value is None:
        return "infinity"
    if isinstance(value, tuple):
        x = value[0]
        if isinstance(x, bn128.FQ2):
            x = x.coeffs[0]
        return f"({abbreviate(int(x))}, ...)"
    s = str(int(value))
    if len(s) > 16:
        return f"{s[:8]}...{s[-4:]}"
    return s
