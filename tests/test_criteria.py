import math
import unittest
from fractions import Fraction

from track_transforms.criteria import FilterCriteria
from track_transforms.models import Track


class TestFilterCriteria(unittest.TestCase):
    def test_accepts_camel_and_snake_case_keys(self) -> None:
        camel = FilterCriteria.coerce({"minYear": 1990, "maxYear": 1999})
        snake = FilterCriteria.coerce({"min_year": 1990, "max_year": 1999})
        self.assertEqual(camel, snake)
        self.assertEqual((camel.min_year, camel.max_year), (1990, 1999))

    def test_malformed_spelling_does_not_hide_usable_one(self) -> None:
        criteria = FilterCriteria.coerce({"min_year": "junk", "minYear": 2010})
        self.assertEqual(criteria.min_year, 2010)
        criteria = FilterCriteria.coerce({"maxYear": math.nan, "max_year": 2020})
        self.assertEqual(criteria.max_year, 2020)
        self.assertIsNone(FilterCriteria.coerce({"minYear": "x", "min_year": None}).min_year)

    def test_invalid_values_become_absent_filters(self) -> None:
        criteria = FilterCriteria.coerce(
            {"minYear": math.inf, "maxYear": "1999", "artist": "", "genre": "rock"}
        )
        self.assertTrue(criteria.is_empty)

    def test_blank_artist_is_absent(self) -> None:
        self.assertIsNone(FilterCriteria.coerce({"artist": " \t "}).artist)
        self.assertIsNone(FilterCriteria.coerce({"artist": 42}).artist)

    def test_boolean_years_are_ignored(self) -> None:
        self.assertIsNone(FilterCriteria.coerce({"minYear": True}).min_year)

    def test_fraction_years_are_kept_as_numbers(self) -> None:
        criteria = FilterCriteria.coerce({"minYear": Fraction(3979, 2)})
        self.assertEqual(criteria.min_year, 1989.5)

    def test_non_mapping_coerces_to_empty(self) -> None:
        for value in (None, "x", 3, ["artist", "x"]):
            with self.subTest(value=value):
                self.assertTrue(FilterCriteria.coerce(value).is_empty)

    def test_coerce_returns_existing_instance(self) -> None:
        criteria = FilterCriteria(artist="Björk")
        self.assertIs(FilterCriteria.coerce(criteria), criteria)

    def test_matches_artist_casefolds(self) -> None:
        criteria = FilterCriteria(artist="STRASSE")
        self.assertTrue(criteria.matches_artist("Straße"))
        self.assertFalse(criteria.matches_artist("Strasse Band"))

    def test_accepts_applies_all_checks(self) -> None:
        criteria = FilterCriteria(min_year=1980, max_year=1989, artist="queen")
        self.assertTrue(criteria.accepts(Track(title="A", artist="Queen", year=1980)))
        self.assertFalse(criteria.accepts(Track(title="A", artist="Queen", year=1979)))
        self.assertFalse(criteria.accepts(Track(title="A", artist="Queen", year=1990)))
        self.assertFalse(criteria.accepts(Track(title="A", artist="Wham!", year=1985)))


if __name__ == "__main__":
    unittest.main()
