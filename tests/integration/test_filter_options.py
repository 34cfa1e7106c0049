"""
Opções de filtro: vocabulário para construir a UI.
"""

from app.domains.filters.usecases import get_filter_options
from app.infra.uow import UoW


class TestFilterOptions:
    def test_options_from_catalog(self, uow, catalog):
        options = get_filter_options.execute(uow)

        assert [o.value for o in options.categories] == ["escort", "masajista"]
        assert options.features["hairColor"][0].label == "Rubio"
        assert [o.value for o in options.features["hairColor"]] == ["rubio", "negro", "castano"]
        assert options.locations.countries == ["Colombia"]
        assert [d.value for d in options.locations.departments] == ["antioquia", "cundinamarca"]
        assert [(c.value, c.label) for c in options.locations.cities] == [
            ("bogota", "Bogotá"),
            ("medellin", "Medellín"),
        ]
        assert (options.price_range.min, options.price_range.max) == (50000, 120000)

    def test_inactive_profiles_do_not_feed_options(self, uow, seed):
        seed.profile(
            "Oculta",
            active=False,
            country="Perú",
            department=("lima", "Lima"),
            city=("lima", "Lima"),
            prices=[10],
        )
        seed.commit()
        options = get_filter_options.execute(uow)
        assert options.locations.countries == []
        assert options.locations.departments == []
        assert (options.price_range.min, options.price_range.max) == (0, 0)

    def test_empty_store(self, uow):
        options = get_filter_options.execute(uow)
        assert options.categories == []
        assert options.features == {}

    def test_sequential_matches_parallel(self, uow, session_factory, catalog):
        with session_factory() as fresh:
            sequential = get_filter_options.execute(UoW(fresh))
        assert sequential == get_filter_options.execute(uow)

    def test_endpoint(self, client, catalog):
        resp = client.get("/api/v1/filters/options")
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        data = body["data"]
        assert set(data) == {"categories", "locations", "features", "priceRange"}
        assert data["priceRange"] == {"min": 50000, "max": 120000}
        assert {"label": "Escort", "value": "escort"} in data["categories"]
        assert all(o["value"] != "trans" for o in data["features"]["category"])
