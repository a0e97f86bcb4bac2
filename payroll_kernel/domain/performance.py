"""Performance review value object."""

from __future__ import annotations

from dataclasses import dataclass

from payroll_kernel.exceptions import InvalidRatingError

MIN_RATING = 1
MAX_RATING = 5


def validate_rating(rating: int) -> int:
    """Return ``rating`` if it is an integer on the 1..5 scale."""
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidRatingError(rating)
    if not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidRatingError(rating)
    return rating


@dataclass(frozen=True)
class PerformanceRecord:
    """
    One dated review.

    ``date`` is free-form text and is not checked against the order in
    which reviews are appended.
    """

    rating: int
    review: str
    date: str
    reviewed_by: str

    def __post_init__(self) -> None:
        validate_rating(self.rating)
