"""
Testes da montagem de resultados (objetos transientes, sem sessão).
"""

from datetime import datetime

import pytest

from app.domains.filters.services.pagination import plan_page
from app.domains.filters.services.result_assembler import (
    assemble_page,
    serialize_profile,
    verification_summary,
)
from app.domains.filters.services.spec_normalizer import normalize_filter_spec
from app.models.profile import Profile, ProfileMedia, ProfileRate
from app.models.profile_verification import ProfileVerification


def _plan(**raw):
    return plan_page(normalize_filter_spec(raw))


@pytest.fixture
def profile():
    p = Profile(
        id=7,
        user_id=3,
        name="Ana",
        age=24,
        description="hola",
        is_active=True,
        country="Colombia",
        department_value="antioquia",
        department_label="Antioquia",
        city_value="medellin",
        city_label=None,
        created_at=datetime(2024, 1, 1, 12, 0),
    )
    p.media = [
        ProfileMedia(kind="gallery", link="g1.jpg"),
        ProfileMedia(kind="video", link="v1.mp4", preview="v1.png"),
        ProfileMedia(kind="audio", link="a1.mp3"),
    ]
    p.rates = [ProfileRate(hour="01:00", price=50000, delivery=True)]
    return p


class TestVerificationSummary:
    def test_missing_is_pending(self):
        assert verification_summary(None) == {"isVerified": False, "verificationLevel": "pending"}

    def test_partial(self):
        v = ProfileVerification(video_verified=True, front_photo_verified=False, selfie_verified=False)
        assert verification_summary(v)["verificationLevel"] == "partial"

    def test_all_steps(self):
        v = ProfileVerification(video_verified=True, front_photo_verified=True, selfie_verified=True)
        assert verification_summary(v) == {"isVerified": True, "verificationLevel": "verified"}


class TestSerializeProfile:
    def test_default_fields(self, profile):
        out = serialize_profile(profile, _plan().fields)
        assert set(out) == {
            "id",
            "name",
            "age",
            "location",
            "description",
            "verification",
            "media",
            "isActive",
        }
        assert out["location"] == {
            "country": "Colombia",
            "department": {"value": "antioquia", "label": "Antioquia"},
            "city": {"value": "medellin", "label": None},
        }
        assert out["media"] == {
            "gallery": ["g1.jpg"],
            "videos": [{"link": "v1.mp4", "preview": "v1.png"}],
            "audios": ["a1.mp3"],
        }
        assert out["verification"]["verificationLevel"] == "pending"

    def test_projection(self, profile):
        out = serialize_profile(profile, _plan(fields=["name", "rates", "createdAt"]).fields)
        assert out == {
            "id": 7,
            "name": "Ana",
            "rates": [{"hour": "01:00", "price": 50000, "delivery": True}],
            "createdAt": "2024-01-01T12:00:00",
        }


class TestAssemblePage:
    def test_metadata(self):
        page = assemble_page([{"id": 1}, {"id": 2}], 3, _plan(page=1, limit=2))
        assert page.total_pages == 2
        assert page.has_next_page is True
        assert page.has_prev_page is False
        assert page.model_dump(by_alias=True)["totalCount"] == 3

    def test_last_page(self):
        page = assemble_page([{"id": 3}], 3, _plan(page=2, limit=2))
        assert page.has_next_page is False
        assert page.has_prev_page is True

    def test_empty_result(self):
        page = assemble_page([], 0, _plan())
        assert page.total_pages == 0
        assert page.has_next_page is False
        assert page.profiles == []

    def test_page_past_the_end(self):
        page = assemble_page([], 5, _plan(page=9, limit=2))
        assert page.total_pages == 3
        assert page.has_next_page is False
        assert page.current_page == 9
