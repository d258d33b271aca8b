"""
설정
====

기본값에 ``KATE_`` 로 시작하는 환경 변수를 덮어쓴다.

    KATE_MAX_DEGREE=32 KATE_SRS_PATH=/var/lib/kate/srs.json flask --app app run
"""

import os

ENV_PREFIX = "KATE_"

DEFAULTS = {
    # SRS가 지원하는 최대 다항식 차수 (= 최대 집합 크기)
    "MAX_DEGREE": 16,
    # 배포 단위 SRS 파일. None이면 메모리에서만 생성한다.
    "SRS_PATH": "srs.json",
    # 교육용 결정론적 SRS 시드. None이면 안전한 난수를 사용한다.
    "SRS_SEED": None,
    "LOG_LEVEL": "INFO",
}

_INT_KEYS = {"MAX_DEGREE"}


def load_config(env=None):
    """DEFAULTS에 환경 변수를 덮어쓴 설정 dict를 반환한다."""
    if env is None:
        env = os.environ
    config = dict(DEFAULTS)
    for key in DEFAULTS:
        raw = env.get(ENV_PREFIX + key)
        if raw is None:
            continue
        if key in _INT_KEYS:
            try:
                config[key] = int(raw)
            except ValueError:
                raise ValueError(f"{ENV_PREFIX}{key} must be an integer: {raw!r}") from None
        elif raw == "" and key in ("SRS_PATH", "SRS_SEED"):
            config[key] = None
        else:
            config[key] = raw
    return config
