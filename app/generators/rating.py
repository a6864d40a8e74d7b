"""
Aggregate rating normalization.

The storefront stores reviews as a running sum of star ratings plus a count.
Converting them to a schema.org ratingValue goes through an integer
"percent" step, which quantizes the result. Existing rich snippets depend on
these exact values, so the arithmetic must not be replaced by a plain
average.
"""
from decimal import Decimal

from app.errors import MalformedInputError
from app.models.schema import AggregateRatingSchema
from app.utils.formatting import format_decimal

MAX_RATING = 5


def _div_trunc(numerator: int, denominator: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def rating_percent(rating_sum: int, total_reviews: int) -> int:
    """Both divisions truncate."""
    return _div_trunc(_div_trunc(rating_sum * 100, total_reviews), 5)


def rating_value(rating_sum: int, total_reviews: int) -> str:
    """Rating value as a one-decimal string, e.g. ``"4.0"``."""
    value = Decimal(rating_percent(rating_sum, total_reviews)) / Decimal(20)
    return format_decimal(value, 1)


def normalize_rating(rating_sum: int, total_reviews: int) -> AggregateRatingSchema:
    """
    Build the aggregateRating node from review counters.
    
    Callers only invoke this when ``total_reviews > 0``.
    
    Raises:
        MalformedInputError: counters are negative, zero reviews, or the sum
            exceeds what ``total_reviews`` five-star reviews could produce
    """
    if total_reviews <= 0:
        raise MalformedInputError(
            "Aggregate rating requires at least one review",
            details={"total_reviews": total_reviews},
        )
    if rating_sum < 0 or rating_sum > total_reviews * MAX_RATING:
        raise MalformedInputError(
            f"Rating sum {rating_sum} is out of range for {total_reviews} review(s)",
            details={"rating_sum": rating_sum, "total_reviews": total_reviews},
        )
    
    return AggregateRatingSchema(
        ratingValue=rating_value(rating_sum, total_reviews),
        reviewCount=total_reviews,
    )
