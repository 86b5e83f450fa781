"""Rating statistics over a product's approved reviews."""

from protean.utils.globals import current_domain

from storefront.reviews.review.review import Review


def approved_reviews(product_id):
    return current_domain.repository_for(Review).for_product(product_id, approved_only=True)


def average_rating(reviews) -> float:
    """Mean rating rounded to one decimal; 0 when there are no reviews."""
    if not reviews:
        return 0
    return round(sum(r.rating for r in reviews) / len(reviews), 1)


def rating_distribution(reviews) -> dict[int, int]:
    distribution = dict.fromkeys(range(1, 6), 0)
    for review in reviews:
        distribution[review.rating] += 1
    return distribution


def rating_percentage(reviews, rating) -> float:
    if not reviews:
        return 0
    return round(rating_distribution(reviews)[rating] / len(reviews) * 100, 1)


def rating_summary(product_id) -> dict:
    reviews = approved_reviews(product_id)
    return {
        "average_rating": average_rating(reviews),
        "reviews_count": len(reviews),
        "rating_distribution": rating_distribution(reviews),
    }
