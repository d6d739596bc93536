"""Preferences -> property matching.

Each of sixteen categories awards up to its weight in points. Categories the
tenant said nothing about are skipped (``max_score = 0``) and do not count
towards the percentage, so a sparse preferences row is not penalised.
"""

import logging
import math
from typing import Any, Iterable, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import NotFound
from app.models.preferences import Preferences
from app.models.property import Property
from app.schemas.matching import (
    CategoryMatchResult,
    CategoryWeights,
    MatchBreakdown,
    MatchingResponse,
    MatchSummary,
    PreferencesSummary,
    PropertyMatchResult,
    TopMatch,
)
from app.services.properties import to_response

logger = logging.getLogger(__name__)

SHORT_TERM_DURATIONS = {"short_term", "short-term", "6_months", "6-months"}
LONG_TERM_DURATIONS = {"long_term", "long-term", "12_months", "12-months"}
PART_FURNISHED = {"partially_furnished", "part-furnished"}
GOOD_AVERAGE_COMMUTE_MINUTES = 30


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _lower(value: Optional[str]) -> Optional[str]:
    return value.lower() if value else None


def _lowered(values: Optional[Iterable[str]]) -> list[str]:
    return [v.lower() for v in values or [] if v]


def _item(entry: Any, key: str) -> Any:
    """Read a key from a JSON list item (dict) or a schema object."""
    if isinstance(entry, dict):
        return entry.get(key)
    return getattr(entry, key, None)


def _money(value: Optional[float]) -> str:
    return f"£{value:g}" if value else "£0"


def _result(
    category: str,
    match: bool,
    score: int,
    max_score: int,
    reason: str,
    details: Optional[str] = None,
) -> CategoryMatchResult:
    return CategoryMatchResult(
        category=category,
        match=match,
        score=score,
        max_score=max_score,
        reason=reason,
        details=details,
        has_preference=True,
    )


def _skipped(category: str, reason: str, details: Optional[str] = None) -> CategoryMatchResult:
    return CategoryMatchResult(
        category=category,
        match=False,
        score=0,
        max_score=0,
        reason=reason,
        details=details,
        has_preference=False,
    )


class MatchingCalculator:
    """Scores one property against one preferences row."""

    def __init__(self, weights: Optional[CategoryWeights] = None):
        self.weights = weights or CategoryWeights()

    def calculate(self, prop: Property, prefs: Preferences) -> MatchBreakdown:
        w = self.weights
        categories = [
            self.match_budget(prop, prefs, w.budget),
            self.match_availability(prop, prefs, w.availability),
            self.match_deposit(prop, prefs, w.deposit),
            self.match_property_type(prop, prefs, w.property_type),
            self.match_bedrooms(prop, prefs, w.bedrooms),
            self.match_bathrooms(prop, prefs, w.bathrooms),
            self.match_building_style(prop, prefs, w.building_style),
            self.match_duration(prop, prefs, w.duration),
            self.match_square_meters(prop, prefs, w.square_meters),
            self.match_bills(prop, prefs, w.bills),
            self.match_tenant_type(prop, prefs, w.tenant_type),
            self.match_pets(prop, prefs, w.pets),
            self.match_amenities(prop, prefs, w.amenities),
            self.match_outdoor_space(prop, prefs, w.outdoor_space),
            self.match_furnishing(prop, prefs, w.furnishing),
            self.match_location(prop, prefs, w.location),
        ]

        scored = [c for c in categories if c.has_preference]
        total = sum(c.score for c in scored)
        max_possible = sum(c.max_score for c in scored)
        percentage = round_half_up(total / max_possible * 100) if max_possible > 0 else 0

        summary = MatchSummary(
            matched=sum(1 for c in scored if c.match and c.score == c.max_score),
            partial=sum(1 for c in scored if 0 < c.score < c.max_score),
            not_matched=sum(1 for c in scored if c.score == 0 and c.max_score > 0),
            skipped=len(categories) - len(scored),
        )

        return MatchBreakdown(
            total_score=total,
            max_possible_score=max_possible,
            match_percentage=percentage,
            is_perfect_match=percentage == 100 and bool(scored),
            categories=categories,
            summary=summary,
        )

    # --- categories ---

    def match_budget(self, prop: Property, prefs: Preferences, max_score: int) -> CategoryMatchResult:
        price = float(prop.price or 0)
        min_price, max_price = prefs.min_price, prefs.max_price

        if not min_price and not max_price:
            return _skipped("budget", "No budget preference set", f"Property price: {_money(price)}/month")

        range_text = f"{_money(min_price)}-{_money(max_price) if max_price else '∞'}"
        within_min = not min_price or price >= min_price
        within_max = not max_price or price <= max_price

        if within_min and within_max:
            return _result(
                "budget", True, max_score, max_score, "Within budget",
                f"{_money(price)}/month is within {range_text} range",
            )

        if max_price and price > max_price:
            over_by = (price - max_price) / max_price * 100
            if over_by <= 10:
                return _result(
                    "budget", False, round_half_up(max_score * 0.5), max_score, "Slightly over budget",
                    f"{_money(price)}/month is {over_by:.1f}% over max budget of {_money(max_price)}",
                )

        if min_price and price < min_price:
            under_by = (min_price - price) / min_price * 100
            if under_by <= 20:
                return _result(
                    "budget", False, round_half_up(max_score * 0.7), max_score, "Under budget",
                    f"{_money(price)}/month is {under_by:.1f}% under min budget of {_money(min_price)}",
                )

        return _result(
            "budget", False, 0, max_score, "Outside budget range",
            f"{_money(price)}/month is outside {range_text} range",
        )

    def match_availability(self, prop: Property, prefs: Preferences, max_score: int) -> CategoryMatchResult:
        move_in, available = prefs.move_in_date, prop.available_from

        if not move_in:
            return _skipped(
                "availability", "No move-in date preference",
                f"Available from {available.isoformat()}" if available else "Availability not specified",
            )

        if not available:
            return _result(
                "availability", True, round_half_up(max_score * 0.5), max_score,
                "Availability not specified", "Contact property for availability",
            )

        if available <= move_in:
            return _result(
                "availability", True, max_score, max_score, "Available on time",
                f"Available from {available.isoformat()}, move-in {move_in.isoformat()}",
            )

        days_late = (available - move_in).days
        details = f"Available {days_late} days after preferred move-in date"
        if days_late <= 14:
            return _result("availability", False, round_half_up(max_score * 0.7), max_score, "Available soon", details)
        if days_late <= 30:
            return _result(
                "availability", False, round_half_up(max_score * 0.4), max_score, "Available within a month", details,
            )
        return _result("availability", False, 0, max_score, "Not available in time", details)

    def match_deposit(self, prop: Property, prefs: Preferences, max_score: int) -> CategoryMatchResult:
        preference = prefs.deposit_preference
        deposit = float(prop.deposit or 0)
        deposit_text = f"Deposit: {_money(deposit)}" if deposit else "No deposit required"

        if not preference:
            return _skipped("deposit", "No deposit preference", deposit_text)

        if preference == "no":
            if deposit == 0:
                return _result(
                    "deposit", True, max_score, max_score, "No deposit required",
                    "Property has no deposit requirement",
                )
            return _result(
                "deposit", False, 0, max_score, "Deposit required",
                f"Property requires {_money(deposit)} deposit",
            )

        return _result("deposit", True, max_score, max_score, "Deposit acceptable", deposit_text)

    def match_property_type(self, prop: Property, prefs: Preferences, max_score: int) -> CategoryMatchResult:
        wanted = prefs.property_types or []
        property_type = _lower(prop.property_type)

        if not wanted:
            return _skipped(
                "property_type", "No property type preference",
                f"Property type: {property_type or 'Not specified'}",
            )

        if property_type and property_type in _lowered(wanted):
            return _result(
                "property_type", True, max_score, max_score, "Property type matches",
                f"{property_type} is in your preferred types",
            )
        return _result(
            "property_type", False, 0, max_score, "Property type doesn't match",
            f"{property_type or 'Unknown'} is not in your preferred types ({', '.join(wanted)})",
        )

    def match_bedrooms(self, prop: Property, prefs: Preferences, max_score: int) -> CategoryMatchResult:
        wanted = prefs.bedrooms or []
        bedrooms = prop.bedrooms

        if not wanted:
            return _skipped("bedrooms", "No bedroom preference", f"Property has {bedrooms or 0} bedrooms")

        if bedrooms is None:
            return _result(
                "bedrooms", False, round_half_up(max_score * 0.3), max_score,
                "Bedroom count unknown", "Property bedroom count not specified",
            )

        wanted_text = ", ".join(str(b) for b in wanted)
        if bedrooms in wanted:
            return _result(
                "bedrooms", True, max_score, max_score, "Bedroom count matches",
                f"{bedrooms} bedrooms matches your preference",
            )
        if bedrooms == min(wanted) - 1 or bedrooms == max(wanted) + 1:
            return _result(
                "bedrooms", False, round_half_up(max_score * 0.5), max_score,
                "Close to preferred bedroom count",
                f"{bedrooms} bedrooms is close to your preference ({wanted_text})",
            )
        return _result(
            "bedrooms", False, 0, max_score, "Bedroom count doesn't match",
            f"{bedrooms} bedrooms, you prefer {wanted_text}",
        )

    def match_bathrooms(self, prop: Property, prefs: Preferences, max_score: int) -> CategoryMatchResult:
        wanted = prefs.bathrooms or []
        bathrooms = prop.bathrooms

        if not wanted:
            return _skipped("bathrooms", "No bathroom preference", f"Property has {bathrooms or 0} bathrooms")

        if bathrooms is None:
            return _result(
                "bathrooms", False, round_half_up(max_score * 0.3), max_score,
                "Bathroom count unknown", "Property bathroom count not specified",
            )

        if bathrooms in wanted:
            return _result(
                "bathrooms", True, max_score, max_score, "Bathroom count matches",
                f"{bathrooms} bathrooms matches your preference",
            )
        if bathrooms > max(wanted):
            return _result(
                "bathrooms", True, round_half_up(max_score * 0.9), max_score,
                "More bathrooms than required", f"{bathrooms} bathrooms exceeds your preference",
            )
        return _result(
            "bathrooms", False, 0, max_score, "Bathroom count doesn't match",
            f"{bathrooms} bathrooms, you prefer {', '.join(str(b) for b in wanted)}",
        )

    def match_building_style(self, prop: Property, prefs: Preferences, max_score: int) -> CategoryMatchResult:
        wanted = prefs.building_types or []
        building_type = _lower(prop.building_type)

        if not wanted:
            return _skipped(
                "building_style", "No building style preference",
                f"Building type: {building_type or 'Not specified'}",
            )

        if building_type and building_type in _lowered(wanted):
            return _result(
                "building_style", True, max_score, max_score, "Building style matches",
                f"{building_type} matches your preference",
            )
        return _result(
            "building_style", False, 0, max_score, "Building style doesn't match",
            f"{building_type or 'Unknown'} is not in your preferences",
        )

    def match_duration(self, prop: Property, prefs: Preferences, max_score: int) -> CategoryMatchResult:
        wanted = _lower(prefs.let_duration)
        duration = _lower(prop.let_duration)

        if not wanted:
            return _skipped("duration", "No duration preference", f"Let duration: {duration or 'Flexible'}")

        if not duration or duration == "flexible":
            return _result(
                "duration", True, max_score, max_score, "Flexible duration",
                "Property offers flexible let duration",
            )
        if wanted == duration:
            return _result(
                "duration", True, max_score, max_score, "Duration matches",
                f"{duration} matches your preference",
            )

        both_short = wanted in SHORT_TERM_DURATIONS and duration in SHORT_TERM_DURATIONS
        both_long = wanted in LONG_TERM_DURATIONS and duration in LONG_TERM_DURATIONS
        if both_short or both_long:
            return _result(
                "duration", True, round_half_up(max_score * 0.8), max_score, "Similar duration",
                f"{duration} is similar to your preference",
            )
        return _result(
            "duration", False, 0, max_score, "Duration doesn't match",
            f"{duration}, you prefer {prefs.let_duration}",
        )

    def match_square_meters(self, prop: Property, prefs: Preferences, max_score: int) -> CategoryMatchResult:
        min_sqm, max_sqm = prefs.min_square_meters, prefs.max_square_meters
        size = float(prop.square_meters or 0)

        if not min_sqm and not max_sqm:
            return _skipped(
                "square_meters", "No size preference", f"{size:g} sqm" if size else "Size not specified",
            )

        if not size:
            return _result(
                "square_meters", False, round_half_up(max_score * 0.3), max_score,
                "Size not specified", "Property size information not available",
            )

        if (not min_sqm or size >= min_sqm) and (not max_sqm or size <= max_sqm):
            return _result(
                "square_meters", True, max_score, max_score, "Size matches",
                f"{size:g} sqm is within {min_sqm or 0:g}-{f'{max_sqm:g}' if max_sqm else '∞'} sqm range",
            )

        if min_sqm and size < min_sqm:
            under_by = (min_sqm - size) / min_sqm * 100
            if under_by <= 15:
                return _result(
                    "square_meters", False, round_half_up(max_score * 0.6), max_score,
                    "Slightly smaller", f"{size:g} sqm is {under_by:.0f}% smaller than preferred",
                )
        return _result(
            "square_meters", False, 0, max_score, "Size doesn't match",
            f"{size:g} sqm is outside your preference",
        )

    def match_bills(self, prop: Property, prefs: Preferences, max_score: int) -> CategoryMatchResult:
        wanted = _lower(prefs.bills)
        bills = _lower(prop.bills)

        if not wanted:
            return _skipped("bills", "No bills preference", f"Bills: {bills or 'Not specified'}")

        if wanted == bills:
            return _result("bills", True, max_score, max_score, "Bills preference matches", f"Bills {bills}")
        if wanted == "included" and bills == "some_included":
            return _result(
                "bills", False, round_half_up(max_score * 0.6), max_score,
                "Some bills included", "Some bills are included, not all",
            )
        return _result(
            "bills", False, 0, max_score, "Bills preference doesn't match",
            f"Bills {bills or 'excluded'}, you prefer {prefs.bills}",
        )

    def match_tenant_type(self, prop: Property, prefs: Preferences, max_score: int) -> CategoryMatchResult:
        wanted = prefs.tenant_types or []
        accepted = prop.tenant_types or []

        if not wanted:
            return _skipped(
                "tenant_type", "No tenant type preference",
                f"Accepts: {', '.join(accepted) if accepted else 'All'}",
            )

        if not accepted:
            return _result(
                "tenant_type", True, max_score, max_score,
                "Property accepts all tenant types", "No tenant type restrictions",
            )

        accepted_lower = _lowered(accepted)
        overlap = [t for t in _lowered(wanted) if t in accepted_lower]
        if overlap:
            return _result(
                "tenant_type", True, round_half_up(max_score * len(overlap) / len(wanted)), max_score,
                "Tenant type compatible", f"Matches: {', '.join(overlap)}",
            )
        return _result(
            "tenant_type", False, 0, max_score, "Tenant type not accepted",
            f"Property accepts: {', '.join(accepted)}",
        )

    def match_pets(self, prop: Property, prefs: Preferences, max_score: int) -> CategoryMatchResult:
        needs_pet_friendly = prefs.pet_policy is True
        user_pets = prefs.pets or []
        allows_pets = prop.pet_policy is True
        allowed = prop.pets or []
        allowed_text = ", ".join(str(_item(p, "type")) for p in allowed)

        if not needs_pet_friendly and not user_pets:
            return _skipped("pets", "No pet requirements", "You don't require a pet-friendly property")

        if not allows_pets:
            return _result("pets", False, 0, max_score, "Pets not allowed", "This property does not allow pets")

        if user_pets and allowed:
            user_types = [_lower(_item(p, "type")) for p in user_pets]
            allowed_types = {_lower(_item(p, "type")) for p in allowed}
            accepted = [t for t in user_types if t in allowed_types or "all" in allowed_types]

            if len(accepted) == len(user_types):
                return _result("pets", True, max_score, max_score, "Pet-friendly", f"Allows: {allowed_text}")
            if accepted:
                return _result(
                    "pets", False, round_half_up(max_score * len(accepted) / len(user_types)), max_score,
                    "Some pets allowed", f"Allows: {allowed_text}",
                )

        return _result(
            "pets", True, max_score, max_score, "Pet-friendly property",
            f"Allows: {allowed_text}" if allowed else "Pets allowed",
        )

    def match_amenities(self, prop: Property, prefs: Preferences, max_score: int) -> CategoryMatchResult:
        wanted = prefs.amenities or []
        available = prop.amenities or []

        if not wanted:
            details = "No amenities listed"
            if available:
                details = f"Available: {', '.join(available[:3])}{'...' if len(available) > 3 else ''}"
            return _skipped("amenities", "No amenity preferences", details)

        available_lower = _lowered(available)
        matched = [a for a in _lowered(wanted) if a in available_lower]
        ratio = len(matched) / len(wanted)
        found_text = f"Has {len(matched)} of {len(wanted)} preferred amenities"

        if ratio == 1:
            return _result(
                "amenities", True, max_score, max_score, "All amenities available",
                f"Has all {len(wanted)} preferred amenities",
            )
        if ratio >= 0.5:
            return _result(
                "amenities", True, round_half_up(max_score * ratio), max_score,
                "Most amenities available", found_text,
            )
        if matched:
            return _result(
                "amenities", False, round_half_up(max_score * ratio), max_score,
                "Some amenities available", found_text,
            )
        return _result(
            "amenities", False, 0, max_score, "Preferred amenities not available",
            f"Missing: {', '.join(wanted[:3])}",
        )

    def match_outdoor_space(self, prop: Property, prefs: Preferences, max_score: int) -> CategoryMatchResult:
        features = (
            ("outdoor_space", "Outdoor space"),
            ("balcony", "Balcony"),
            ("terrace", "Terrace"),
        )
        present = [label for name, label in features if getattr(prop, name) is True]
        present_text = ", ".join(present) if present else "No outdoor space"
        requested = [name for name, _ in features if getattr(prefs, name) is True]

        if not requested:
            return _skipped("outdoor_space", "No outdoor space preference", present_text)

        matched = [name for name in requested if getattr(prop, name) is True]
        ratio = len(matched) / len(requested)

        if ratio == 1:
            return _result("outdoor_space", True, max_score, max_score, "Outdoor space matches", present_text)
        if ratio > 0:
            return _result(
                "outdoor_space", False, round_half_up(max_score * ratio), max_score,
                "Partial outdoor space match", present_text,
            )
        return _result(
            "outdoor_space", False, 0, max_score, "No outdoor space available",
            "Property has no outdoor space features",
        )

    def match_furnishing(self, prop: Property, prefs: Preferences, max_score: int) -> CategoryMatchResult:
        wanted = prefs.furnishing or []
        furnishing = _lower(prop.furnishing)

        if not wanted:
            return _skipped("furnishing", "No furnishing preference", f"Furnishing: {furnishing or 'Not specified'}")

        if furnishing and furnishing in _lowered(wanted):
            return _result(
                "furnishing", True, max_score, max_score, "Furnishing matches",
                f"{furnishing} matches your preference",
            )
        if furnishing in PART_FURNISHED:
            return _result(
                "furnishing", False, round_half_up(max_score * 0.5), max_score,
                "Partially furnished", "Property is partially furnished",
            )
        return _result(
            "furnishing", False, 0, max_score, "Furnishing doesn't match",
            f"{furnishing or 'Unknown'}, you prefer {' or '.join(wanted)}",
        )

    def match_location(self, prop: Property, prefs: Preferences, max_score: int) -> CategoryMatchResult:
        wanted_stations = _lowered(prefs.preferred_metro_stations)
        stations = prop.metro_stations or []
        commutes = prop.commute_times or []
        near_text = f"Near: {', '.join(str(_item(m, 'label')) for m in stations[:2])}"

        if not wanted_stations:
            return _skipped(
                "location", "No location preference",
                near_text if stations else "Location info not available",
            )

        labels = [label.lower() for label in (_item(m, "label") for m in stations) if label]
        if any(w in label or label in w for w in wanted_stations for label in labels):
            return _result("location", True, max_score, max_score, "Near preferred metro", near_text)

        if commutes:
            average = sum(float(_item(c, "destination") or 0) for c in commutes) / len(commutes)
            if average <= GOOD_AVERAGE_COMMUTE_MINUTES:
                return _result(
                    "location", True, round_half_up(max_score * 0.7), max_score,
                    "Good commute times", f"Average commute: {round_half_up(average)} minutes",
                )

        return _result(
            "location", False, 0, max_score, "Location not ideal", "Not near preferred locations",
        )


def summarize_preferences(prefs: Preferences) -> str:
    """Short human-readable description of what the tenant is looking for."""
    parts = []
    if prefs.min_price or prefs.max_price:
        parts.append(f"Budget {_money(prefs.min_price)}-{_money(prefs.max_price) if prefs.max_price else '∞'}")
    if prefs.bedrooms:
        parts.append(f"{'/'.join(str(b) for b in sorted(prefs.bedrooms))} bedrooms")
    if prefs.property_types:
        parts.append(", ".join(prefs.property_types))
    if prefs.move_in_date:
        parts.append(f"move in {prefs.move_in_date.isoformat()}")
    if prefs.preferred_metro_stations:
        parts.append(f"near {', '.join(prefs.preferred_metro_stations[:2])}")
    return "; ".join(parts) if parts else "No preferences set"


class MatchingService:
    """Ranks every listing against a tenant's preferences."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_matches_for_user(
        self,
        user_id: UUID,
        limit: int = 50,
        min_score: int = 0,
        weights: Optional[dict[str, int]] = None,
    ) -> MatchingResponse:
        applied = CategoryWeights(**(weights or {}))
        calculator = MatchingCalculator(applied)
        prefs = await self._find_preferences(user_id)
        properties = await self._all_properties()

        if prefs is None:
            # Nothing to match against: newest listings, unscored
            blank = Preferences(user_id=user_id)
            results = [self._result(calculator, p, blank) for p in properties[:limit]]
            return MatchingResponse(
                results=results,
                total=len(results),
                preferences=None,
                applied_weights=applied,
            )

        results = [self._result(calculator, p, prefs) for p in properties]
        results = [r for r in results if r.match_percentage >= min_score]
        # Stable sort keeps newest-first among equal scores
        results.sort(key=lambda r: r.match_percentage, reverse=True)
        results = results[:limit]

        logger.info(
            f"[MATCHING] user={user_id} scored={len(properties)} returned={len(results)} min_score={min_score}"
        )
        return MatchingResponse(
            results=results,
            total=len(results),
            preferences=PreferencesSummary(id=prefs.id, summary=summarize_preferences(prefs)),
            applied_weights=applied,
        )

    async def get_top_matches(self, user_id: UUID, limit: int = 20) -> list[TopMatch]:
        """Simplified matches for property cards."""
        response = await self.get_matches_for_user(user_id, limit=limit)
        return [
            TopMatch(
                property=r.property,
                match_score=r.match_percentage,
                match_categories=[
                    c.category for c in r.categories if c.has_preference and c.match and c.score == c.max_score
                ],
            )
            for r in response.results
        ]

    async def get_property_match(self, property_id: UUID, user_id: UUID) -> PropertyMatchResult:
        result = await self.db.execute(
            select(Property)
            .options(selectinload(Property.building))
            .where(Property.id == property_id)
        )
        prop = result.scalar_one_or_none()
        if not prop:
            raise NotFound("Property not found")

        prefs = await self._find_preferences(user_id) or Preferences(user_id=user_id)
        return self._result(MatchingCalculator(), prop, prefs)

    async def _find_preferences(self, user_id: UUID) -> Optional[Preferences]:
        result = await self.db.execute(
            select(Preferences).where(Preferences.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def _all_properties(self) -> list[Property]:
        result = await self.db.execute(
            select(Property)
            .options(selectinload(Property.building))
            .order_by(Property.created_at.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    def _result(calculator: MatchingCalculator, prop: Property, prefs: Preferences) -> PropertyMatchResult:
        breakdown = calculator.calculate(prop, prefs)
        return PropertyMatchResult(property=to_response(prop), **breakdown.model_dump())
