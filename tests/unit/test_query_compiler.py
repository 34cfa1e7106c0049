"""
Testes do compilador de filtros (sem base de dados).

O lookup de grupos é um fake em memória; as comparações são feitas sobre
o SQL renderizado com literal_binds.
"""

import logging

import pytest
from sqlalchemy import select

from app.domains.filters.services.observer import (
    OTHER_KEY,
    LoggingCompileObserver,
    RecordingCompileObserver,
)
from app.domains.filters.services.query_compiler import (
    compile_profile_query,
    normalize_values,
)
from app.domains.filters.services.spec_normalizer import normalize_filter_spec
from app.models.profile import Profile


class FakeGroups:
    def __init__(self, mapping: dict[str, int]):
        self.mapping = mapping
        self.calls: list[list[str]] = []

    def find_by_keys(self, keys):
        self.calls.append(list(keys))
        return [(k, self.mapping[k]) for k in keys if k in self.mapping]


@pytest.fixture
def groups():
    return FakeGroups({"hairColor": 1, "height": 2, "category": 3})


@pytest.fixture
def observer():
    return RecordingCompileObserver()


def render(query) -> str:
    stmt = select(Profile.id).where(query.predicate())
    return str(stmt.compile(compile_kwargs={"literal_binds": True}))


def compile_raw(raw, groups, observer=None):
    return compile_profile_query(normalize_filter_spec(raw), groups, observer=observer)


class TestEmptyAndTopLevel:
    def test_empty_spec_has_no_clauses(self, groups, observer):
        q = compile_raw({}, groups, observer)
        assert q.clauses == ()
        assert groups.calls == []
        assert len(observer.queries) == 1 and observer.queries[0] is q

    def test_is_active(self, groups):
        q = compile_raw({"isActive": True}, groups)
        assert len(q.conditions) == 1
        assert "profiles.is_active" in render(q)

    def test_location_uses_values(self, groups):
        q = compile_raw({"location": {"department": "antioquia", "city": "medellin"}}, groups)
        sql = render(q)
        assert "profiles.department_value = 'antioquia'" in sql
        assert "profiles.city_value = 'medellin'" in sql

    def test_price_range_on_lowest_rate(self, groups):
        q = compile_raw({"priceRange": {"min": 100, "max": 200}}, groups)
        sql = render(q)
        assert len(q.conditions) == 2
        assert "min(profile_rates.price)" in sql
        assert q.conjuncts == ()

    def test_age_range(self, groups):
        q = compile_raw({"ageRange": {"min": 18, "max": 30}}, groups)
        sql = render(q)
        assert "profiles.age >= 18" in sql
        assert "profiles.age <= 30" in sql

    def test_has_videos_false_does_not_filter(self, groups):
        assert compile_raw({"hasVideos": False}, groups).clauses == ()

    def test_has_videos_true(self, groups):
        sql = render(compile_raw({"hasVideos": True}, groups))
        assert "profile_media.kind = 'video'" in sql

    def test_profile_not_verified_is_negated(self, groups):
        sql = render(compile_raw({"profileVerified": False}, groups))
        assert "NOT" in sql and "EXISTS" in sql
        assert "video_verified" in sql

    def test_account_verification(self, groups):
        sql = render(compile_raw({"isVerified": True}, groups))
        assert "users.is_verified" in sql


class TestFacets:
    def test_one_lookup_for_all_keys(self, groups):
        compile_raw({"features": {"hairColor": "rubio", "height": "alta"}, "category": "escort"}, groups)
        assert len(groups.calls) == 1
        assert sorted(groups.calls[0]) == ["category", "hairColor", "height"]

    def test_one_existential_per_facet(self, groups):
        q = compile_raw({"features": {"hairColor": ["rubio", "negro"], "height": "alta"}}, groups)
        assert len(q.conjuncts) == 2
        sql = render(q)
        assert "profile_features.value IN ('rubio', 'negro')" in sql

    def test_values_are_case_and_space_insensitive(self, groups):
        a = compile_raw({"features": {"hairColor": [" Rubio ", "NEGRO"]}}, groups)
        b = compile_raw({"features": {"hairColor": ["rubio", "negro"]}}, groups)
        assert render(a) == render(b)

    def test_unknown_facet_is_omitted(self, groups, observer):
        q = compile_raw({"features": {"gender": ["male", "female"]}}, groups, observer)
        assert q.conjuncts == ()
        assert q.skipped_facets == ("gender",)
        assert observer.unresolved == ["gender"]
        assert render(q) == render(compile_raw({}, groups))

    def test_unknown_facet_does_not_drop_known_ones(self, groups, observer):
        q = compile_raw(
            {"features": {"gender": "male", "hairColor": "rubio"}}, groups, observer
        )
        assert len(q.conjuncts) == 1
        assert observer.unresolved == ["gender"]

    def test_compile_is_idempotent(self, groups):
        raw = {
            "features": {"hairColor": ["rubio"]},
            "priceRange": {"min": 10},
            "availability": {"dayOfWeek": "lunes"},
            "isActive": True,
        }
        assert render(compile_raw(raw, groups)) == render(compile_raw(raw, groups))

    def test_normalize_values(self):
        assert normalize_values([" A", "a", "b ", ""]) == ["a", "b"]


class TestAvailability:
    def test_day_and_slot_are_independent(self, groups):
        q = compile_raw(
            {"availability": {"dayOfWeek": "lunes", "timeSlot": {"start": "10:00", "end": "12:00"}}},
            groups,
        )
        assert len(q.conjuncts) == 2
        sql = render(q)
        assert "profile_availability.day_of_week = 'lunes'" in sql
        assert "availability_slots" in sql
        assert "'10:00'" in sql and "'12:00'" in sql

    def test_only_start(self, groups):
        q = compile_raw({"availability": {"timeSlot": {"start": "10:00"}}}, groups)
        assert len(q.conjuncts) == 1


class TestLoggingObserver:
    def test_counts_unresolved_keys(self, groups, caplog):
        obs = LoggingCompileObserver()
        with caplog.at_level(logging.WARNING, logger="pfl.filters.compiler"):
            compile_raw({"features": {"gender": "male"}}, groups, obs)
            compile_raw({"features": {"gender": "female"}}, groups, obs)
        assert obs.unresolved_counts() == {"gender": 2}
        assert "Unknown facet key 'gender'" in caplog.text

    def test_distinct_keys_are_bounded(self, groups):
        obs = LoggingCompileObserver(max_keys=3)
        features = {f"unknown{i}": "x" for i in range(10)}
        compile_raw({"features": features}, groups, obs)

        counts = obs.unresolved_counts()
        assert len(counts) == 4
        assert counts[OTHER_KEY] == 7
        assert sum(counts.values()) == 10

    def test_known_key_keeps_counting_past_the_bound(self, groups):
        obs = LoggingCompileObserver(max_keys=1)
        for key in ("gender", "eyes", "gender"):
            obs.facet_unresolved(key)
        assert obs.unresolved_counts() == {"gender": 2, OTHER_KEY: 1}
