"""
Fixtures partilhadas: base de dados SQLite (ficheiro) por teste, seeds e
cliente HTTP com a UoW apontada para essa base.
"""

import os
import tempfile
from datetime import UTC, datetime, timedelta

# Ambiente de teste antes de qualquer import de app.*
_TMP = tempfile.mkdtemp(prefix="pfl-tests-")
os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_TMP}/default.db")
os.environ.setdefault("LOG_DIR", os.path.join(_TMP, "logs"))
os.environ.setdefault("LOG_COLORS", "false")
os.environ.setdefault("JWT_SECRET", "perfiles-test-secret-with-enough-bytes-0123456789")

import jwt
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings
from app.infra.uow import UoW
from app.models import (
    AttributeGroup,
    AttributeGroupVariant,
    AvailabilitySlot,
    Profile,
    ProfileAvailability,
    ProfileFeature,
    ProfileMedia,
    ProfileRate,
    ProfileVerification,
    User,
    create_db_and_tables,
)

BASE_TIME = datetime(2024, 1, 1, tzinfo=UTC)


# ============================================================================
# Store
# ============================================================================


@pytest.fixture
def engine(tmp_path):
    eng = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}", connect_args={"check_same_thread": False}
    )
    create_db_and_tables(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def uow(db, session_factory):
    return UoW(db, session_factory=session_factory)


# ============================================================================
# Seeds
# ============================================================================


class Seeder:
    """Cria grupos, utilizadores e perfis; commit explícito no fim."""

    def __init__(self, db):
        self.db = db
        self._users = 0
        self._profiles = 0

    def group(self, key: str, values: list[str], *, name: str | None = None, inactive=()) -> AttributeGroup:
        group = AttributeGroup(key=key, name=name or key.title(), type="multi")
        for pos, value in enumerate(values):
            group.variants.append(
                AttributeGroupVariant(
                    value=value,
                    label=value.title(),
                    active=value not in inactive,
                    position=pos,
                )
            )
        self.db.add(group)
        self.db.flush()
        return group

    def user(self, *, verified: bool = False) -> User:
        self._users += 1
        user = User(email=f"user{self._users}@example.com", is_verified=verified)
        self.db.add(user)
        self.db.flush()
        return user

    def profile(
        self,
        name: str,
        *,
        user: User | None = None,
        active: bool = True,
        age: int | None = 25,
        country: str | None = "Colombia",
        department: tuple[str, str] | None = ("antioquia", "Antioquia"),
        city: tuple[str, str] | None = ("medellin", "Medellín"),
        features: dict[AttributeGroup, list[str]] | None = None,
        prices: list[float] = (),
        availability: dict[str, list[tuple[str, str]]] | None = None,
        videos: int = 0,
        gallery: int = 1,
        verification: dict[str, bool] | None = None,
        created_offset: int | None = None,
    ) -> Profile:
        self._profiles += 1
        offset = self._profiles if created_offset is None else created_offset
        created = BASE_TIME + timedelta(minutes=offset)
        p = Profile(
            user=user or self.user(),
            name=name,
            description=f"{name} description",
            age=age,
            is_active=active,
            country=country,
            department_value=department[0] if department else None,
            department_label=department[1] if department else None,
            city_value=city[0] if city else None,
            city_label=city[1] if city else None,
            created_at=created,
            updated_at=created,
        )
        for group, values in (features or {}).items():
            for value in values:
                p.features.append(ProfileFeature(group_id=group.id, value=value))
        for i, price in enumerate(prices):
            p.rates.append(ProfileRate(hour=f"0{i + 1}:00", price=price, delivery=False))
        for day, slots in (availability or {}).items():
            entry = ProfileAvailability(day_of_week=day)
            for start, end in slots:
                entry.slots.append(AvailabilitySlot(start=start, end=end))
            p.availability.append(entry)
        for i in range(gallery):
            p.media.append(ProfileMedia(kind="gallery", link=f"https://cdn.test/{name}/{i}.jpg"))
        for i in range(videos):
            p.media.append(
                ProfileMedia(
                    kind="video",
                    link=f"https://cdn.test/{name}/{i}.mp4",
                    preview=f"https://cdn.test/{name}/{i}.png",
                )
            )
        if verification is not None:
            p.verification = ProfileVerification(**verification)
        self.db.add(p)
        self.db.flush()
        return p

    def commit(self) -> None:
        self.db.commit()


@pytest.fixture
def seed(db):
    return Seeder(db)


@pytest.fixture
def catalog(seed):
    """
    Catálogo pequeno usado pelos cenários de pesquisa:

    - ana:   rubia, alta, 50k, ativa, medellin, vídeo verificado, lunes 10-18
    - bea:   rubia, baja, 80k, ativa, bogota, sem verificação
    - carla: negra, alta, 120k, ativa, medellin, docs verificados, martes 20-23
    - dora:  rubia, alta, 60k, inativa, medellin
    - eva:   sem features, sem tarifas, ativa, medellin
    """
    hair = seed.group("hairColor", ["rubio", "negro", "castano"])
    height = seed.group("height", ["alta", "baja"])
    category = seed.group("category", ["escort", "masajista", "trans"], inactive=("trans",))

    profiles = {
        "ana": seed.profile(
            "Ana",
            user=seed.user(verified=True),
            age=24,
            features={hair: ["rubio"], height: ["alta"], category: ["escort"]},
            prices=[50000, 90000],
            availability={"lunes": [("10:00", "18:00")]},
            videos=1,
            verification={"video_verified": True},
        ),
        "bea": seed.profile(
            "Bea",
            age=31,
            department=("cundinamarca", "Cundinamarca"),
            city=("bogota", "Bogotá"),
            features={hair: ["rubio"], height: ["baja"], category: ["masajista"]},
            prices=[80000],
        ),
        "carla": seed.profile(
            "Carla",
            user=seed.user(verified=True),
            age=28,
            features={hair: ["negro"], height: ["alta"], category: ["escort"]},
            prices=[120000],
            availability={"martes": [("20:00", "23:00")]},
            verification={
                "video_verified": False,
                "front_photo_verified": True,
                "selfie_verified": True,
            },
        ),
        "dora": seed.profile(
            "Dora",
            active=False,
            age=40,
            features={hair: ["rubio"], height: ["alta"]},
            prices=[60000],
        ),
        "eva": seed.profile("Eva", age=22),
    }
    seed.commit()
    return {"groups": {"hairColor": hair, "height": height, "category": category}, **profiles}


# ============================================================================
# HTTP
# ============================================================================


@pytest.fixture
def client(session_factory):
    from fastapi.testclient import TestClient

    from app.core.deps import get_uow
    from apps.api_main import app

    def _override_uow():
        session = session_factory()
        try:
            yield UoW(session, session_factory=session_factory)
        finally:
            session.close()

    app.dependency_overrides[get_uow] = _override_uow
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    token = jwt.encode(
        {"sub": "1", "typ": "access"}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM
    )
    return {"Authorization": f"Bearer {token}"}
