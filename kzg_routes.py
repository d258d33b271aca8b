"""
KZG Flask Blueprint: 커밋 / 열기 / 검증 / 멤버십 엔드포인트
===========================================================

모든 엔드포인트는 JSON을 주고받는다. 큰 정수와 곡선 좌표는 10진수 문자열이다.

  GET  /kzg/srs                  SRS 요약
  POST /kzg/commit               {"coeffs": [...]}            → polynomial, commitment
  POST /kzg/open                 {"coeffs": [...], "point", "group"} → polynomial, commitment, opening
  POST /kzg/verify               {"commitment", "opening"}     → valid
  POST /kzg/membership/prove     {"members": [...], "point", "group"}
  POST /kzg/membership/verify    {"commitment", "opening"}     → valid, member

SRS는 app.py에서 앱 생성 시 한 번 만들어 ``app.extensions`` 에 넣는다.
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from kate.errors import InvalidArgumentError, KateError
from kate.field import BN128_FIELD
from kate.groups import BN128_G1, group_by_name
from kate.kzg import Opening, commit, create_witness, verify_opening_claim
from kate.membership import HiddenSet
from kate.polynomial import Polynomial
from kate.serializers import (
    abbreviate,
    deserialize_point,
    serialize_fr,
    serialize_point,
    serialize_poly,
)

logger = logging.getLogger(__name__)

kzg_bp = Blueprint("kzg", __name__, url_prefix="/kzg")

EXTENSION_KEY = "kate.srs"


def init_kzg_bp(app, srs):
    """app.py에서 SRS를 주입받는다."""
    app.extensions[EXTENSION_KEY] = srs


def get_srs():
    return current_app.extensions[EXTENSION_KEY]


# ─── 요청 파싱 헬퍼 ───

def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidArgumentError("request body must be a JSON object")
    return data


def _field(data, key):
    try:
        return data[key]
    except KeyError:
        raise InvalidArgumentError(f"missing field: {key}") from None


def _int(value, key):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"{key} must be an integer: {value!r}") from None


def _int_list(data, key):
    values = _field(data, key)
    if not isinstance(values, list):
        raise InvalidArgumentError(f"{key} must be a list")
    return [_int(v, key) for v in values]


def _group(data):
    return group_by_name(data.get("group", BN128_G1.name))


def _commitment(data):
    return deserialize_point(_field(data, "commitment"), BN128_G1)


def _opening(data):
    raw = _field(data, "opening")
    try:
        return Opening.from_dict(raw)
    except (KeyError, TypeError, ValueError) as exc:
        if isinstance(exc, KateError):
            raise
        raise InvalidArgumentError(f"malformed opening: {exc}") from exc


@kzg_bp.errorhandler(KateError)
def handle_kate_error(exc):
    logger.info("request rejected: %s: %s", type(exc).__name__, exc)
    return jsonify({"error": type(exc).__name__, "message": str(exc)}), 400


# ──────────────────────────────────────────────────────────────
# Setup
# ──────────────────────────────────────────────────────────────

@kzg_bp.route("/srs")
def srs_info():
    """SRS 요약 (공개 정보)."""
    srs = get_srs()
    return jsonify({
        "max_degree": srs.max_degree,
        "g1_count": len(srs.g1_powers),
        "g2_count": len(srs.g2_powers),
        "g1_samples": [abbreviate(p) for p in srs.g1_powers[:5]],
    })


# ──────────────────────────────────────────────────────────────
# Commit / Open / Verify
# ──────────────────────────────────────────────────────────────

@kzg_bp.route("/commit", methods=["POST"])
def commit_poly():
    data = _json_body()
    poly = Polynomial(_int_list(data, "coeffs"), BN128_FIELD)
    commitment = commit(poly, get_srs())
    return jsonify({
        "degree": poly.degree,
        "polynomial": serialize_poly(poly),
        "commitment": serialize_point(commitment),
    })


@kzg_bp.route("/open", methods=["POST"])
def open_poly():
    data = _json_body()
    srs = get_srs()
    poly = Polynomial(_int_list(data, "coeffs"), BN128_FIELD)
    point = _int(_field(data, "point"), "point")
    opening = create_witness(poly, point, srs, _group(data))
    return jsonify({
        "polynomial": serialize_poly(poly),
        "commitment": serialize_point(commit(poly, srs)),
        "opening": opening.to_dict(),
        "value_short": abbreviate(opening.value),
    })


@kzg_bp.route("/verify", methods=["POST"])
def verify():
    data = _json_body()
    commitment = _commitment(data)
    opening = _opening(data)
    valid = verify_opening_claim(commitment, opening, get_srs())
    return jsonify({"valid": valid})


# ──────────────────────────────────────────────────────────────
# Membership
# ──────────────────────────────────────────────────────────────

@kzg_bp.route("/membership/prove", methods=["POST"])
def membership_prove():
    """숨겨진 집합에 커밋하고 point에서 연다. 집합 원소는 응답에 포함되지 않는다."""
    data = _json_body()
    hidden = HiddenSet(_int_list(data, "members"), get_srs())
    point = _int(_field(data, "point"), "point")
    opening = hidden.prove_membership(point, _group(data))
    return jsonify({
        "commitment": serialize_point(hidden.commitment),
        "opening": opening.to_dict(),
    })


@kzg_bp.route("/membership/verify", methods=["POST"])
def membership_verify():
    data = _json_body()
    srs = get_srs()
    commitment = _commitment(data)
    opening = _opening(data)
    valid = verify_opening_claim(commitment, opening, srs)
    return jsonify({
        "valid": valid,
        "member": valid and opening.value == 0,
        "value": serialize_fr(opening.value),
    })
