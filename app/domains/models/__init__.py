# app/domains/models/__init__.py

"""
모든 도메인의 SQLModel 모델들을 한 곳에서 임포트하여,
SQLModel.metadata가 모든 테이블을 인식하도록 보장합니다.
"""

# loo (Loo, LooContribution)
from app.domains.loo.models import Loo, LooContribution

__all__ = ["Loo", "LooContribution"]
