"""Tests for rating statistics."""

from storefront.reviews.review.ratings import average_rating, rating_distribution, rating_percentage
from storefront.reviews.review.review import Review


def _reviews(*ratings):
    return [
        Review.submit(product_id="prod-001", user_id=f"user-{i}", rating=r, title="t", content="c")
        for i, r in enumerate(ratings)
    ]


def test_average_is_rounded_to_one_decimal():
    assert average_rating(_reviews(5, 4, 4)) == 4.3


def test_average_without_reviews():
    assert average_rating([]) == 0


def test_distribution_covers_every_star():
    assert rating_distribution(_reviews(5, 5, 1)) == {1: 1, 2: 0, 3: 0, 4: 0, 5: 2}


def test_percentage():
    assert rating_percentage(_reviews(5, 5, 1), 5) == 66.7
    assert rating_percentage([], 5) == 0
