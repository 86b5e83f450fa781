"""Tests for slug generation."""

from storefront.shared.slug import generate_slug, parameterize


class TestParameterize:
    def test_lowercases_and_joins_words(self):
        assert parameterize("Friendship Bracelet") == "friendship-bracelet"

    def test_folds_accents(self):
        assert parameterize("Crème Brûlée & Friends!") == "creme-brulee-friends"

    def test_collapses_and_trims_separators(self):
        assert parameterize("  --Hand   made--  ") == "hand-made"

    def test_keeps_underscores(self):
        assert parameterize("gift_box") == "gift_box"

    def test_empty_text(self):
        assert parameterize("") == ""
        assert parameterize(None) == ""


class TestGenerateSlug:
    def test_unused_slug_is_returned_as_is(self):
        assert generate_slug("Beaded Necklace", set().__contains__) == "beaded-necklace"

    def test_taken_slug_gets_a_counter(self):
        taken = {"beaded-necklace"}
        assert generate_slug("Beaded Necklace", taken.__contains__) == "beaded-necklace-1"

    def test_counter_keeps_climbing(self):
        taken = {"beaded-necklace", "beaded-necklace-1", "beaded-necklace-2"}
        assert generate_slug("Beaded Necklace", taken.__contains__) == "beaded-necklace-3"
