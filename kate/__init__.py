"""
kate: 유한체 / 다항식 / KZG 다항식 커밋먼트
"""
