"""
KZG Structured Reference String (SRS)
=====================================

신뢰 설정(trusted setup)으로 공개 파라미터를 생성한다.

**SRS란?**
  KZG 다항식 커밋먼트에 필요한 공개 파라미터이다.
  비밀 값 s ("toxic waste")를 사용하여 생성되며,
  생성 후 s는 반드시 폐기되어야 한다.

  SRS = {
      G1 powers: [G1, s·G1, s²·G1, ..., s^d·G1]
      G2 powers: [G2, s·G2, s²·G2, ..., s^d·G2]
  }

  몫 다항식을 G1, G2 어느 쪽에서 평가하든 검증할 수 있도록
  두 그룹 모두 d차까지 인코딩한다.

**보안**:
  s를 아는 사람은 임의의 거짓 증명을 만들 수 있다.
  s는 ``generate`` 의 지역 변수로만 존재하고, 저장/로그/직렬화되지 않는다.
  한 배포(deployment)에서 SRS를 다시 생성하면 이전의 모든 커밋먼트와
  증명이 무효가 되므로, ``load_or_generate`` 로 한 번 만든 SRS를 재사용한다.

사용 예시:
    >>> srs = SRS.generate(max_degree=16, seed=42)
    >>> len(srs.g1_powers)  # 17 (0차부터 16차까지)
"""

import hashlib
import json
import logging
import os

from kate.errors import DegreeTooLargeError, InvalidArgumentError
from kate.field import BN128_FIELD
from kate.groups import BN128_G1, BN128_G2
from kate.powers import compute_powers, encode_powers
from kate.serializers import (
    serialize_point,
    deserialize_point,
)

logger = logging.getLogger(__name__)


class SRS:
    """Structured Reference String: KZG 커밋먼트용 공개 파라미터.

    생성 후 읽기 전용이며 (튜플), 여러 스레드에서 동기화 없이 읽어도 안전하다.

    속성:
        g1_powers: (G1, s·G1, ..., s^d·G1)
        g2_powers: (G2, s·G2, ..., s^d·G2)
        max_degree: 지원하는 최대 다항식 차수 d
    """

    __slots__ = ("_g1_powers", "_g2_powers")

    def __init__(self, g1_powers, g2_powers):
        if len(g1_powers) != len(g2_powers):
            raise InvalidArgumentError(
                f"g1/g2 powers differ in length: {len(g1_powers)} != {len(g2_powers)}"
            )
        if len(g1_powers) < 2:
            raise InvalidArgumentError("SRS needs at least [1] and [s] in each group")
        self._g1_powers = tuple(g1_powers)
        self._g2_powers = tuple(g2_powers)

    @property
    def g1_powers(self):
        return self._g1_powers

    @property
    def g2_powers(self):
        return self._g2_powers

    @property
    def max_degree(self):
        return len(self._g1_powers) - 1

    def __len__(self):
        return len(self._g1_powers)

    def __eq__(self, other):
        if not isinstance(other, SRS):
            return NotImplemented
        return self._g1_powers == other._g1_powers and self._g2_powers == other._g2_powers

    __hash__ = None

    def __repr__(self):
        return f"SRS(max_degree={self.max_degree})"

    def powers(self, group):
        """그룹에 해당하는 거듭제곱 튜플."""
        return self._g1_powers if group is BN128_G1 else self._g2_powers

    @classmethod
    def generate(cls, max_degree, seed=None, random_source=None):
        """SRS를 생성한다.

        Args:
            max_degree: 지원할 최대 다항식 차수 (>= 1).
                        n개 원소 집합이면 n 이상이어야 한다.
            seed: 결정론적 생성을 위한 시드 (교육/테스트용).
                  실제 시스템에서는 MPC를 사용해야 한다.
            random_source: seed가 없을 때 사용할 ``n -> bytes`` 난수 소스.

        Returns:
            SRS: 생성된 구조화 참조 문자열

        Raises:
            InvalidArgumentError: max_degree < 1
            RandomSourceError: 난수 소스 실패
        """
        if max_degree < 1:
            raise InvalidArgumentError(f"max_degree must be >= 1: {max_degree}")

        # toxic waste s 생성
        if seed is not None:
            h = hashlib.sha256(str(seed).encode()).digest()
            s = int.from_bytes(h, "big") % BN128_FIELD.order
        else:
            s = BN128_FIELD.random_nonzero_element(random_source)

        ss = compute_powers(s, max_degree + 1, BN128_FIELD)
        srs = cls(encode_powers(ss, BN128_G1), encode_powers(ss, BN128_G2))
        logger.info("generated SRS with max degree %d", max_degree)
        return srs

    # ── 직렬화 ──

    def to_dict(self):
        """공개 파라미터만 담은 JSON 호환 dict."""
        return {
            "max_degree": self.max_degree,
            "g1_powers": [serialize_point(p) for p in self._g1_powers],
            "g2_powers": [serialize_point(p) for p in self._g2_powers],
        }

    @classmethod
    def from_dict(cls, data):
        """``to_dict`` 결과로부터 복원한다. 곡선 밖의 점은 InvalidArgumentError."""
        try:
            g1 = data["g1_powers"]
            g2 = data["g2_powers"]
        except (KeyError, TypeError) as exc:
            raise InvalidArgumentError(f"malformed SRS document: {exc}") from exc
        return cls(
            [deserialize_point(p, BN128_G1) for p in g1],
            [deserialize_point(p, BN128_G2) for p in g2],
        )

    def save(self, path):
        with open(path, "w") as f:
            json.dump(self.to_dict(), f)
        logger.info("saved SRS (max degree %d) to %s", self.max_degree, path)

    @classmethod
    def load(cls, path):
        with open(path) as f:
            srs = cls.from_dict(json.load(f))
        logger.info("loaded SRS (max degree %d) from %s", srs.max_degree, path)
        return srs

    @classmethod
    def load_or_generate(cls, path, max_degree, seed=None, random_source=None):
        """배포 단위 SRS: 파일이 있으면 읽고, 없으면 생성 후 저장한다.

        기존 SRS를 다시 생성하지 않는다. 저장된 SRS가 요청한 차수보다
        작으면 DegreeTooLargeError를 던진다.
        """
        if os.path.exists(path):
            srs = cls.load(path)
            if srs.max_degree < max_degree:
                raise DegreeTooLargeError(max_degree, srs.max_degree)
            return srs
        srs = cls.generate(max_degree, seed=seed, random_source=random_source)
        srs.save(path)
        return srs
