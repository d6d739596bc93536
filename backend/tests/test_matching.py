from datetime import date

import pytest

from app.models.preferences import Preferences
from app.models.property import Property
from app.schemas.matching import CategoryWeights
from app.services.matching import MatchingCalculator, round_half_up
from conftest import API, auth


def _category(breakdown, name):
    return next(c for c in breakdown.categories if c.category == name)


@pytest.fixture
def calculator():
    return MatchingCalculator()


def test_default_weights_sum_to_100():
    assert sum(CategoryWeights().model_dump().values()) == 100


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(1.5) == 2
    assert round_half_up(0.49) == 0


def test_no_preferences_scores_zero(calculator):
    breakdown = calculator.calculate(Property(title="Flat", price=1000), Preferences())

    assert breakdown.match_percentage == 0
    assert breakdown.max_possible_score == 0
    assert breakdown.is_perfect_match is False
    assert breakdown.summary.skipped == 16
    assert all(not c.has_preference and c.max_score == 0 for c in breakdown.categories)


def test_perfect_match(calculator):
    prop = Property(
        title="Flat",
        price=1500,
        bedrooms=2,
        property_type="apartment",
        available_from=date(2026, 11, 1),
    )
    prefs = Preferences(
        min_price=1000,
        max_price=2000,
        bedrooms=[2, 3],
        property_types=["Apartment"],
        move_in_date=date(2026, 11, 15),
    )

    breakdown = calculator.calculate(prop, prefs)

    assert breakdown.total_score == 20 + 10 + 8 + 10
    assert breakdown.max_possible_score == 48
    assert breakdown.match_percentage == 100
    assert breakdown.is_perfect_match is True
    assert breakdown.summary.matched == 4
    assert breakdown.summary.skipped == 12


@pytest.mark.parametrize(
    "price, score, reason",
    [
        (1500, 20, "Within budget"),
        (2200, 10, "Slightly over budget"),
        (2300, 0, "Outside budget range"),
        (850, 14, "Under budget"),
        (700, 0, "Outside budget range"),
    ],
)
def test_budget(calculator, price, score, reason):
    prefs = Preferences(min_price=1000, max_price=2000)
    result = _category(calculator.calculate(Property(price=price), prefs), "budget")

    assert result.score == score
    assert result.max_score == 20
    assert result.reason == reason


@pytest.mark.parametrize(
    "available_from, score",
    [
        (None, 5),
        (date(2026, 10, 1), 10),
        (date(2026, 11, 10), 7),
        (date(2026, 11, 25), 4),
        (date(2026, 12, 15), 0),
    ],
)
def test_availability(calculator, available_from, score):
    prefs = Preferences(move_in_date=date(2026, 11, 1))
    result = _category(calculator.calculate(Property(available_from=available_from), prefs), "availability")

    assert result.score == score


def test_deposit(calculator):
    no_deposit = Preferences(deposit_preference="no")
    any_deposit = Preferences(deposit_preference="yes")

    assert _category(calculator.calculate(Property(deposit=0), no_deposit), "deposit").score == 5
    assert _category(calculator.calculate(Property(deposit=500), no_deposit), "deposit").score == 0
    assert _category(calculator.calculate(Property(deposit=500), any_deposit), "deposit").score == 5


@pytest.mark.parametrize(
    "bedrooms, score",
    [(2, 10), (1, 5), (4, 5), (5, 0), (None, 3)],
)
def test_bedrooms(calculator, bedrooms, score):
    prefs = Preferences(bedrooms=[2, 3])
    result = _category(calculator.calculate(Property(bedrooms=bedrooms), prefs), "bedrooms")

    assert result.score == score


@pytest.mark.parametrize(
    "bathrooms, score",
    [(1, 5), (3, 5), (0, 0), (None, 2)],
)
def test_bathrooms(calculator, bathrooms, score):
    prefs = Preferences(bathrooms=[1])
    result = _category(calculator.calculate(Property(bathrooms=bathrooms), prefs), "bathrooms")

    assert result.score == score


def test_more_bathrooms_than_wanted_scores_ninety_percent():
    calculator = MatchingCalculator(CategoryWeights(bathrooms=10))
    prefs = Preferences(bathrooms=[1])

    result = _category(calculator.calculate(Property(bathrooms=2), prefs), "bathrooms")

    assert result.score == 9
    assert result.match is True


@pytest.mark.parametrize(
    "wanted, offered, score",
    [
        ("long_term", None, 5),
        ("long_term", "flexible", 5),
        ("long_term", "long_term", 5),
        ("long_term", "12_months", 4),
        ("short_term", "6-months", 4),
        ("long_term", "short_term", 0),
    ],
)
def test_duration(calculator, wanted, offered, score):
    prefs = Preferences(let_duration=wanted)
    result = _category(calculator.calculate(Property(let_duration=offered), prefs), "duration")

    assert result.score == score


@pytest.mark.parametrize(
    "size, score",
    [(60, 5), (None, 2), (45, 3), (30, 0), (120, 0)],
)
def test_square_meters(calculator, size, score):
    prefs = Preferences(min_square_meters=50, max_square_meters=100)
    result = _category(calculator.calculate(Property(square_meters=size), prefs), "square_meters")

    assert result.score == score


def test_bills(calculator):
    prefs = Preferences(bills="included")

    assert _category(calculator.calculate(Property(bills="included"), prefs), "bills").score == 5
    assert _category(calculator.calculate(Property(bills="some_included"), prefs), "bills").score == 3
    assert _category(calculator.calculate(Property(bills="excluded"), prefs), "bills").score == 0


def test_tenant_type_overlap_is_proportional():
    calculator = MatchingCalculator(CategoryWeights(tenant_type=10))
    prefs = Preferences(tenant_types=["family", "student"])

    unrestricted = calculator.calculate(Property(tenant_types=[]), prefs)
    half = calculator.calculate(Property(tenant_types=["family"]), prefs)
    none = calculator.calculate(Property(tenant_types=["elder"]), prefs)

    assert _category(unrestricted, "tenant_type").score == 10
    assert _category(half, "tenant_type").score == 5
    assert _category(none, "tenant_type").score == 0


def test_pets():
    calculator = MatchingCalculator(CategoryWeights(pets=10))
    prefs = Preferences(pet_policy=True, pets=[{"type": "dog"}, {"type": "cat"}])

    refused = calculator.calculate(Property(pet_policy=False, pets=[]), prefs)
    some = calculator.calculate(Property(pet_policy=True, pets=[{"type": "dog"}]), prefs)
    every = calculator.calculate(Property(pet_policy=True, pets=[{"type": "all"}]), prefs)
    unspecified = calculator.calculate(Property(pet_policy=True, pets=[]), prefs)

    assert _category(refused, "pets").score == 0
    assert _category(some, "pets").score == 5
    assert _category(every, "pets").score == 10
    assert _category(unspecified, "pets").score == 10


def test_amenities_are_proportional():
    calculator = MatchingCalculator(CategoryWeights(amenities=8))
    prefs = Preferences(amenities=["Gym", "Pool", "Parking", "Concierge"])

    all_four = calculator.calculate(Property(amenities=["gym", "pool", "parking", "concierge"]), prefs)
    three = calculator.calculate(Property(amenities=["gym", "pool", "parking"]), prefs)
    one = calculator.calculate(Property(amenities=["gym"]), prefs)
    nothing = calculator.calculate(Property(amenities=[]), prefs)

    assert _category(all_four, "amenities").score == 8
    assert _category(three, "amenities").score == 6
    assert _category(three, "amenities").match is True
    assert _category(one, "amenities").score == 2
    assert _category(one, "amenities").match is False
    assert _category(nothing, "amenities").score == 0


def test_outdoor_space():
    calculator = MatchingCalculator(CategoryWeights(outdoor_space=10))
    prefs = Preferences(balcony=True, terrace=True)

    both = calculator.calculate(Property(balcony=True, terrace=True), prefs)
    one = calculator.calculate(Property(balcony=True, terrace=False), prefs)
    none = calculator.calculate(Property(balcony=False, terrace=False), prefs)

    assert _category(both, "outdoor_space").score == 10
    assert _category(one, "outdoor_space").score == 5
    assert _category(none, "outdoor_space").score == 0


def test_furnishing():
    calculator = MatchingCalculator(CategoryWeights(furnishing=10))
    prefs = Preferences(furnishing=["furnished"])

    assert _category(calculator.calculate(Property(furnishing="Furnished"), prefs), "furnishing").score == 10
    assert _category(calculator.calculate(Property(furnishing="part-furnished"), prefs), "furnishing").score == 5
    assert _category(calculator.calculate(Property(furnishing="unfurnished"), prefs), "furnishing").score == 0


def test_location():
    calculator = MatchingCalculator(CategoryWeights(location=10))
    prefs = Preferences(preferred_metro_stations=["Canary Wharf"])

    near = Property(metro_stations=[{"label": "Canary Wharf DLR", "destination": 3}], commute_times=[])
    good_commute = Property(
        metro_stations=[{"label": "Bank", "destination": 3}],
        commute_times=[{"label": "City", "destination": 20}, {"label": "West End", "destination": 35}],
    )
    far = Property(
        metro_stations=[{"label": "Bank", "destination": 3}],
        commute_times=[{"label": "City", "destination": 50}],
    )

    assert _category(calculator.calculate(near, prefs), "location").score == 10
    assert _category(calculator.calculate(good_commute, prefs), "location").score == 7
    assert _category(calculator.calculate(far, prefs), "location").score == 0


def test_percentage_counts_only_expressed_preferences(calculator):
    prefs = Preferences(min_price=1000, max_price=2000, bedrooms=[3])
    prop = Property(price=1500, bedrooms=1)

    breakdown = calculator.calculate(prop, prefs)

    assert breakdown.total_score == 20
    assert breakdown.max_possible_score == 30
    assert breakdown.match_percentage == 67
    assert breakdown.summary.matched == 1
    assert breakdown.summary.not_matched == 1
    assert breakdown.summary.partial == 0


def test_custom_weights_change_the_total():
    calculator = MatchingCalculator(CategoryWeights(budget=50, bedrooms=50))
    prefs = Preferences(min_price=1000, max_price=2000, bedrooms=[3])

    breakdown = calculator.calculate(Property(price=1500, bedrooms=1), prefs)

    assert breakdown.match_percentage == 50


# --- API ---

def test_matches_ranked_best_first(client, tenant, make_property):
    make_property(title="Too expensive", price=5000, bedrooms=2)
    make_property(title="Just right", price=1500, bedrooms=2)
    make_property(title="Wrong size", price=1500, bedrooms=5)
    client.post(
        f"{API}/preferences",
        json={"min_price": 1000, "max_price": 2000, "bedrooms": [2]},
        headers=auth(tenant),
    )

    data = client.get(f"{API}/matching/matches", headers=auth(tenant)).json()

    assert [r["property"]["title"] for r in data["results"]][0] == "Just right"
    assert data["results"][0]["match_percentage"] == 100
    assert data["total"] == 3
    assert data["preferences"]["summary"].startswith("Budget")
    assert data["applied_weights"]["budget"] == 20


def test_min_score_filters(client, tenant, make_property):
    make_property(title="Too expensive", price=5000)
    make_property(title="Just right", price=1500)
    client.post(f"{API}/preferences", json={"max_price": 2000}, headers=auth(tenant))

    data = client.get(
        f"{API}/matching/matches", params={"min_score": 60}, headers=auth(tenant)
    ).json()
    recommendations = client.get(f"{API}/matching/recommendations", headers=auth(tenant)).json()

    assert [r["property"]["title"] for r in data["results"]] == ["Just right"]
    assert [r["property"]["title"] for r in recommendations["results"]] == ["Just right"]


def test_matches_without_preferences(client, tenant, make_property):
    make_property(title="Older")
    make_property(title="Newer")

    data = client.get(f"{API}/matching/matches", headers=auth(tenant)).json()

    assert data["preferences"] is None
    assert data["total"] == 2
    assert all(r["match_percentage"] == 0 for r in data["results"])


def test_top_matches_and_single_property(client, tenant, make_property):
    prop = make_property(title="Studio", price=900, property_type="studio")
    client.post(
        f"{API}/preferences",
        json={"max_price": 1000, "property_types": ["studio"]},
        headers=auth(tenant),
    )

    top = client.get(f"{API}/matching/top-matches", headers=auth(tenant)).json()
    single = client.get(f"{API}/matching/property/{prop['id']}", headers=auth(tenant))
    missing = client.get(
        f"{API}/matching/property/00000000-0000-0000-0000-000000000001", headers=auth(tenant)
    )

    assert top[0]["match_score"] == 100
    assert sorted(top[0]["match_categories"]) == ["budget", "property_type"]
    assert single.status_code == 200
    assert single.json()["property"]["id"] == prop["id"]
    assert len(single.json()["categories"]) == 16
    assert missing.status_code == 404


def test_operator_cannot_use_matching(client, operator):
    assert client.get(f"{API}/matching/matches", headers=auth(operator)).status_code == 403
