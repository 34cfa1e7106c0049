# app/models/profile_verification.py
from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.infra.base import Base

VERIFICATION_STEPS = ("video_verified", "front_photo_verified", "selfie_verified")


class ProfileVerification(Base):
    __tablename__ = "profile_verifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    profile_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, unique=True
    )

    # Passos de verificação
    video_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    front_photo_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    selfie_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def steps(self) -> dict[str, bool]:
        return {step: bool(getattr(self, step)) for step in VERIFICATION_STEPS}
