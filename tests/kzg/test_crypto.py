"""
Tests for the commitment modules: groups, SRS, KZG.

Covers:
- pairing_check (bilinearity, length mismatch)
- SRS generation (deterministic, both groups, max_degree, persistence)
- KZG commit (known polynomial, zero polynomial, degree overflow)
- KZG create_witness + verify_opening (G1 and G2 proofs, valid/invalid)
- KZG linearity: commit(a+b) == commit(a) + commit(b)
"""

import hashlib
import json

import pytest
from py_ecc import bn128

from kate.errors import (
    DegreeTooLargeError,
    InvalidArgumentError,
    InvalidEvaluationError,
    LengthMismatchError,
    RandomSourceError,
)
from kate.field import CURVE_ORDER, Field
from kate.groups import BN128_G1, BN128_G2, group_by_name, other_group, pairing_check
from kate.kzg import Opening, commit, create_witness, verify_opening, verify_opening_claim
from kate.polynomial import Polynomial, quotient_of_opening
from kate.serializers import abbreviate, deserialize_point, serialize_point, serialize_poly
from kate.srs import SRS


# ─────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture(scope="module")
def srs_small():
    """Small SRS for fast tests (max_degree=4)."""
    return SRS.generate(max_degree=4, seed=42)


@pytest.fixture
def poly():
    """p(v) = 3 + 2v + v²"""
    return Polynomial([3, 2, 1])


# ─────────────────────────────────────────────────────────────────────
# Groups / pairing
# ─────────────────────────────────────────────────────────────────────

class TestGroups:
    def test_identity_is_none(self):
        assert BN128_G1.identity() is None
        assert BN128_G1.add(BN128_G1.identity(), BN128_G1.generator) == BN128_G1.generator

    def test_scalar_mul_reduces_scalar(self):
        assert BN128_G1.scalar_base_mul(CURVE_ORDER + 3) == BN128_G1.scalar_base_mul(3)

    def test_neg(self):
        p = BN128_G1.scalar_base_mul(5)
        assert BN128_G1.add(p, BN128_G1.neg(p)) is None

    def test_is_on_curve(self):
        assert BN128_G1.is_on_curve(bn128.G1)
        assert BN128_G2.is_on_curve(bn128.G2)
        assert not BN128_G1.is_on_curve((bn128.FQ(1), bn128.FQ(1)))
        assert not BN128_G2.is_on_curve(bn128.G1)

    def test_group_by_name(self):
        assert group_by_name("g1") is BN128_G1
        assert group_by_name("G2") is BN128_G2

    def test_unknown_group(self):
        with pytest.raises(InvalidArgumentError):
            group_by_name("gt")
        with pytest.raises(InvalidArgumentError):
            group_by_name(None)

    def test_other_group(self):
        assert other_group(BN128_G1) is BN128_G2
        assert other_group(BN128_G2) is BN128_G1


class TestPairingCheck:
    def test_bilinearity(self):
        """e(a·G1, b·G2) · e(-ab·G1, G2) == 1"""
        a, b = 6, 7
        assert pairing_check(
            [BN128_G1.scalar_base_mul(a), BN128_G1.neg(BN128_G1.scalar_base_mul(a * b))],
            [BN128_G2.scalar_base_mul(b), BN128_G2.generator],
        )

    def test_unbalanced_product(self):
        assert not pairing_check(
            [BN128_G1.scalar_base_mul(6), BN128_G1.neg(BN128_G1.scalar_base_mul(41))],
            [BN128_G2.scalar_base_mul(7), BN128_G2.generator],
        )

    def test_empty_product_is_identity(self):
        assert pairing_check([], [])

    def test_length_mismatch(self):
        with pytest.raises(LengthMismatchError):
            pairing_check([BN128_G1.generator], [])


# ─────────────────────────────────────────────────────────────────────
# SRS Tests
# ─────────────────────────────────────────────────────────────────────

class TestSRS:
    """SRS.generate 테스트."""

    def test_powers_length(self, srs_small):
        """g1_powers, g2_powers length == max_degree + 1."""
        assert len(srs_small.g1_powers) == 5
        assert len(srs_small.g2_powers) == 5
        assert len(srs_small) == 5

    def test_max_degree(self, srs_small):
        assert srs_small.max_degree == 4

    def test_first_elements_are_generators(self, srs_small):
        assert srs_small.g1_powers[0] == bn128.G1
        assert srs_small.g2_powers[0] == bn128.G2

    def test_powers_share_secret(self, srs_small):
        """seed로부터 유도한 s에 대해 [sⁱ]₁, [sⁱ]₂."""
        s = int.from_bytes(hashlib.sha256(b"42").digest(), "big") % CURVE_ORDER
        assert srs_small.g1_powers[1] == bn128.multiply(bn128.G1, s)
        assert srs_small.g2_powers[2] == bn128.multiply(bn128.G2, s * s % CURVE_ORDER)

    def test_deterministic_with_same_seed(self, srs_small):
        assert SRS.generate(max_degree=4, seed=42) == srs_small

    def test_different_seeds_produce_different_srs(self):
        assert SRS.generate(max_degree=1, seed=1) != SRS.generate(max_degree=1, seed=2)

    def test_random_srs(self):
        srs = SRS.generate(max_degree=1)
        assert srs.max_degree == 1
        assert srs.g1_powers[1] != bn128.G1

    def test_max_degree_must_be_positive(self):
        with pytest.raises(InvalidArgumentError):
            SRS.generate(max_degree=0)

    def test_random_source_failure(self):
        def broken(n):
            raise OSError("no entropy")

        with pytest.raises(RandomSourceError):
            SRS.generate(max_degree=1, random_source=broken)

    def test_read_only(self, srs_small):
        with pytest.raises(AttributeError):
            srs_small.g1_powers = []
        assert isinstance(srs_small.g1_powers, tuple)

    def test_mismatched_lengths_rejected(self, srs_small):
        with pytest.raises(InvalidArgumentError):
            SRS(srs_small.g1_powers, srs_small.g2_powers[:3])

    def test_repr_hides_powers(self, srs_small):
        assert repr(srs_small) == "SRS(max_degree=4)"


class TestSRSPersistence:
    def test_dict_round_trip(self, srs_small):
        data = json.loads(json.dumps(srs_small.to_dict()))
        assert data["max_degree"] == 4
        assert SRS.from_dict(data) == srs_small

    def test_off_curve_point_rejected(self, srs_small):
        data = srs_small.to_dict()
        data["g1_powers"][1] = ["1", "1"]
        with pytest.raises(InvalidArgumentError):
            SRS.from_dict(data)

    def test_malformed_document(self):
        with pytest.raises(InvalidArgumentError):
            SRS.from_dict({"g1_powers": []})

    def test_save_and_load(self, srs_small, tmp_path):
        path = tmp_path / "srs.json"
        srs_small.save(path)
        assert SRS.load(path) == srs_small

    def test_load_or_generate_reuses_file(self, tmp_path):
        path = tmp_path / "srs.json"
        first = SRS.load_or_generate(path, 2, seed=1)
        assert path.exists()
        # 다른 시드로 요청해도 기존 SRS를 다시 생성하지 않는다
        second = SRS.load_or_generate(path, 2, seed=2)
        assert second == first

    def test_load_or_generate_too_small(self, tmp_path):
        path = tmp_path / "srs.json"
        SRS.load_or_generate(path, 1, seed=1)
        with pytest.raises(DegreeTooLargeError):
            SRS.load_or_generate(path, 3, seed=1)


# ─────────────────────────────────────────────────────────────────────
# KZG Commit Tests
# ─────────────────────────────────────────────────────────────────────

class TestKZGCommit:
    def test_commit_constant(self, srs_small):
        """commit(c) = c·G1"""
        assert commit(Polynomial([7]), srs_small) == bn128.multiply(bn128.G1, 7)

    def test_commit_zero_polynomial(self, srs_small):
        assert commit(Polynomial.zero(), srs_small) is None

    def test_commit_known_polynomial(self, srs_small):
        """commit(3 + 2v) = 3·G1 + 2·[s]₁"""
        expected = bn128.add(
            bn128.multiply(bn128.G1, 3), bn128.multiply(srs_small.g1_powers[1], 2)
        )
        assert commit(Polynomial([3, 2]), srs_small) == expected

    def test_commit_ignores_trailing_zeros(self, srs_small):
        padded = Polynomial([3, 2, 0, 0, 0, 0, 0, 0])
        assert commit(padded, srs_small) == commit(Polynomial([3, 2]), srs_small)

    def test_commit_full_degree(self, srs_small):
        assert commit(Polynomial([1, 1, 1, 1, 1]), srs_small) is not None

    def test_commit_degree_too_large(self, srs_small):
        with pytest.raises(DegreeTooLargeError) as exc_info:
            commit(Polynomial([1, 1, 1, 1, 1, 1]), srs_small)
        assert exc_info.value.degree == 5
        assert exc_info.value.max_degree == 4

    def test_commit_foreign_field_rejected(self, srs_small):
        """bn128 스칼라 필드가 아닌 다항식은 커밋하지 않는다."""
        with pytest.raises(InvalidArgumentError):
            commit(Polynomial([3, 2, 1], Field(97)), srs_small)

    def test_commit_linearity(self, srs_small):
        a = Polynomial([1, 2, 3])
        b = Polynomial([4, 0, 5, 6])
        assert commit(a + b, srs_small) == bn128.add(
            commit(a, srs_small), commit(b, srs_small)
        )


# ─────────────────────────────────────────────────────────────────────
# KZG Opening Tests
# ─────────────────────────────────────────────────────────────────────

class TestKZGOpening:
    def test_witness_value(self, srs_small, poly):
        opening = create_witness(poly, 4, srs_small)
        assert opening.point == 4
        assert opening.value == 27  # 3 + 8 + 16
        assert opening.group is BN128_G1

    def test_witness_is_quotient_commitment(self, srs_small, poly):
        """π = q(s)·G1, q(v) = (p(v) - 27) / (v - 4) = v + 6"""
        opening = create_witness(poly, 4, srs_small)
        assert opening.proof == commit(Polynomial([6, 1]), srs_small)

    def test_witness_in_g2(self, srs_small, poly):
        opening = create_witness(poly, 4, srs_small, BN128_G2)
        assert opening.group is BN128_G2
        assert BN128_G2.is_on_curve(opening.proof)

    def test_witness_of_constant_is_identity(self, srs_small):
        opening = create_witness(Polynomial([9]), 3, srs_small)
        assert opening.value == 9
        assert opening.proof is None

    def test_witness_degree_too_large(self, srs_small):
        with pytest.raises(DegreeTooLargeError):
            create_witness(Polynomial([1] * 7), 2, srs_small)

    def test_verify_g1_proof(self, srs_small, poly):
        C = commit(poly, srs_small)
        opening = create_witness(poly, 4, srs_small)
        assert verify_opening(C, opening.proof, 4, 27, srs_small)

    def test_verify_g2_proof(self, srs_small, poly):
        C = commit(poly, srs_small)
        opening = create_witness(poly, 4, srs_small, BN128_G2)
        assert verify_opening_claim(C, opening, srs_small)

    @pytest.mark.parametrize("group", [BN128_G1, BN128_G2], ids=["g1", "g2"])
    def test_wrong_value_rejected(self, srs_small, poly, group):
        C = commit(poly, srs_small)
        opening = create_witness(poly, 4, srs_small, group)
        assert not verify_opening(C, opening.proof, 4, 28, srs_small, group)

    @pytest.mark.parametrize("group", [BN128_G1, BN128_G2], ids=["g1", "g2"])
    def test_wrong_point_rejected(self, srs_small, poly, group):
        C = commit(poly, srs_small)
        opening = create_witness(poly, 4, srs_small, group)
        assert not verify_opening(C, opening.proof, 5, 27, srs_small, group)

    @pytest.mark.parametrize("group", [BN128_G1, BN128_G2], ids=["g1", "g2"])
    def test_tampered_proof_rejected(self, srs_small, poly, group):
        C = commit(poly, srs_small)
        opening = create_witness(poly, 4, srs_small, group)
        tampered = group.add(opening.proof, group.generator)
        assert not verify_opening(C, tampered, 4, 27, srs_small, group)

    @pytest.mark.parametrize("group", [BN128_G1, BN128_G2], ids=["g1", "g2"])
    def test_wrong_commitment_rejected(self, srs_small, poly, group):
        other = commit(poly + 1, srs_small)
        opening = create_witness(poly, 4, srs_small, group)
        assert not verify_opening_claim(other, opening, srs_small)

    def test_foreign_field_polynomial_rejected(self, srs_small):
        with pytest.raises(InvalidArgumentError):
            create_witness(Polynomial([3, 2, 1], Field(97)), 50, srs_small)
    def test_off_curve_proof_rejected(self, srs_small, poly):
        C = commit(poly, srs_small)
        bogus = (bn128.FQ(1), bn128.FQ(1))
        assert not verify_opening(C, bogus, 4, 27, srs_small)

    def test_proof_in_wrong_group_rejected(self, srs_small, poly):
        C = commit(poly, srs_small)
        opening = create_witness(poly, 4, srs_small)
        assert not verify_opening(C, opening.proof, 4, 27, srs_small, BN128_G2)

    def test_opening_dict_round_trip(self, srs_small, poly):
        opening = create_witness(poly, 4, srs_small, BN128_G2)
        data = json.loads(json.dumps(opening.to_dict()))
        assert data["group"] == "g2"
        assert Opening.from_dict(data) == opening

    def test_quotient_check(self, poly):
        with pytest.raises(InvalidEvaluationError):
            quotient_of_opening(poly, 4, 28)


# ─────────────────────────────────────────────────────────────────────
# Serializers
# ─────────────────────────────────────────────────────────────────────

class TestSerializers:
    def test_poly_document(self):
        p = Polynomial([1, 0, 5, 0, 0], Field(97))
        assert serialize_poly(p) == {"order": "97", "coeffs": ["1", "0", "5"]}

    def test_g1_point_format(self):
        assert serialize_point(bn128.G1) == ["1", "2"]
        assert deserialize_point(["1", "2"], BN128_G1) == bn128.G1

    def test_g2_point_format(self):
        data = json.loads(json.dumps(serialize_point(bn128.G2)))
        assert len(data) == 2
        assert all(len(coord) == 2 for coord in data)
        assert deserialize_point(data, BN128_G2) == bn128.G2

    def test_point_at_infinity(self):
        assert serialize_point(None) is None
        assert deserialize_point(None, BN128_G1) is None

    def test_malformed_point(self):
        with pytest.raises(InvalidArgumentError):
            deserialize_point(["x"], BN128_G1)
        with pytest.raises(InvalidArgumentError):
            deserialize_point([["1", "2", "3"], ["4", "5"]], BN128_G2)

    def test_abbreviate(self):
        assert abbreviate(12) == "12"
        assert abbreviate(CURVE_ORDER - 1).count("...") == 1
        assert abbreviate(None) == "infinity"
        assert abbreviate(bn128.G1) == "(1, ...)"
        assert abbreviate(bn128.G2).startswith("(")
