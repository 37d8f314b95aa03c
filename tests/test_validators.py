"""
Songbook - Field Validator Tests

Tests for songbook/services/validators.py. Validates:
- Title/artist required + length rules
- Year range (1900..current year), optional, numeric strings accepted
- Genre length rule
- Batch validation collecting every failing message (full and partial)
- Validators are pure: running them in any order gives the same outcome
"""

import random
from datetime import datetime

import pytest

from songbook.services.validators import (
    FIELD_VALIDATORS,
    parse_year,
    validate_artist,
    validate_genre,
    validate_song_fields,
    validate_title,
    validate_year,
)

THIS_YEAR = datetime.now().year


# ===========================================================================
# validate_title / validate_artist
# ===========================================================================


class TestValidateTitle:
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_required(self, value):
        result = validate_title(value)
        assert result.valid is False
        assert result.message == "Song title is required"

    def test_valid(self):
        assert validate_title("Yesterday").valid is True

    def test_max_length_boundary(self):
        assert validate_title("x" * 100).valid is True

    def test_too_long(self):
        result = validate_title("x" * 101)
        assert result.valid is False
        assert "100" in result.message


class TestValidateArtist:
    @pytest.mark.parametrize("value", [None, "", "\t"])
    def test_required(self, value):
        result = validate_artist(value)
        assert result.valid is False
        assert result.message == "Artist is required"

    def test_valid(self):
        assert validate_artist("The Beatles").valid is True

    def test_too_long(self):
        result = validate_artist("y" * 101)
        assert result.valid is False
        assert "100" in result.message


# ===========================================================================
# validate_year
# ===========================================================================


class TestValidateYear:
    @pytest.mark.parametrize("value", [None, "", 0])
    def test_absent_is_valid(self, value):
        assert validate_year(value).valid is True

    @pytest.mark.parametrize("value", [1900, 1975, THIS_YEAR, "1999", str(THIS_YEAR)])
    def test_in_range(self, value):
        assert validate_year(value).valid is True

    @pytest.mark.parametrize(
        "value", [1899, 1800, THIS_YEAR + 1, "abc", "19.5", "-1990", "20 20"]
    )
    def test_rejected(self, value):
        result = validate_year(value)
        assert result.valid is False
        assert "1900" in result.message
        assert str(THIS_YEAR) in result.message


class TestParseYear:
    def test_int(self):
        assert parse_year(2001) == 2001

    def test_digit_string_with_spaces(self):
        assert parse_year(" 2001 ") == 2001

    @pytest.mark.parametrize("value", ["abc", "", None, True, 20.5])
    def test_unparseable(self, value):
        assert parse_year(value) is None


# ===========================================================================
# validate_genre
# ===========================================================================


class TestValidateGenre:
    @pytest.mark.parametrize("value", [None, "", "Rock", "g" * 50])
    def test_valid(self, value):
        assert validate_genre(value).valid is True

    def test_too_long(self):
        result = validate_genre("g" * 51)
        assert result.valid is False
        assert "50" in result.message


# ===========================================================================
# validate_song_fields
# ===========================================================================


class TestValidateSongFields:
    def test_all_valid(self):
        fields = {"title": "A", "artist": "B", "year": 2020, "duration": "3:45"}
        assert validate_song_fields(fields) == []

    def test_collects_every_error(self):
        fields = {
            "title": "",
            "artist": "",
            "year": 1800,
            "genre": "g" * 51,
            "duration": "bad",
        }
        errors = validate_song_fields(fields)
        assert len(errors) == 5

    def test_missing_required_fields_on_create(self):
        errors = validate_song_fields({})
        assert errors == ["Song title is required", "Artist is required"]

    def test_partial_skips_absent_fields(self):
        assert validate_song_fields({}, partial=True) == []

    def test_partial_checks_present_fields(self):
        errors = validate_song_fields({"year": 1800}, partial=True)
        assert len(errors) == 1
        assert "1900" in errors[0]

    def test_partial_still_requires_supplied_title(self):
        errors = validate_song_fields({"title": "  "}, partial=True)
        assert errors == ["Song title is required"]


# ===========================================================================
# Purity / order independence
# ===========================================================================


class TestOrderIndependence:
    def test_shuffled_order_gives_same_messages(self):
        fields = {
            "title": "",
            "artist": "z" * 200,
            "year": "later",
            "genre": "g" * 60,
            "duration": "99",
        }
        baseline = {
            name: FIELD_VALIDATORS[name](value) for name, value in fields.items()
        }

        rng = random.Random(1234)
        for _ in range(10):
            names = list(fields)
            rng.shuffle(names)
            outcome = {name: FIELD_VALIDATORS[name](fields[name]) for name in names}
            assert outcome == baseline

    def test_repeated_calls_are_stable(self):
        assert validate_year(1800) == validate_year(1800)
        assert validate_song_fields({"title": ""}) == validate_song_fields(
            {"title": ""}
        )
