"""Tests for date and slug helpers."""

import re
import pytest
from datetime import date, datetime, timezone

from src.utils.dates import (
    add_days,
    days_between,
    format_date,
    parse_date,
    parse_datetime,
    parse_local_date,
)
from src.utils.slugs import (
    FALLBACK_SLUG,
    PROJECT_COLORS,
    generate_project_id,
    generate_slug,
    generate_unique_slug,
    is_slug_unique,
    project_color,
    project_initials,
)


class TestParseDates:
    """Tests for lenient date parsing."""
    
    def test_date_only_is_midnight_utc(self):
        assert parse_datetime("2024-01-01") == datetime(2024, 1, 1, tzinfo=timezone.utc)
    
    def test_zulu_suffix(self):
        parsed = parse_datetime("2024-01-01T10:30:00Z")
        
        assert parsed == datetime(2024, 1, 1, 10, 30, tzinfo=timezone.utc)
    
    def test_offsets_converted_to_utc(self):
        parsed = parse_datetime("2024-01-01T02:00:00+02:00")
        
        assert parsed == datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc)
    
    @pytest.mark.parametrize("value", [None, "", "   ", "garbage", 12345])
    def test_unparseable(self, value):
        assert parse_datetime(value) is None
    
    def test_parse_date(self):
        assert parse_date("2024-03-05T23:00:00Z") == date(2024, 3, 5)
        assert parse_date("nope") is None
    
    def test_parse_local_date_keeps_offset(self):
        assert parse_local_date("2024-01-01T23:00:00-05:00") == date(2024, 1, 1)
        assert parse_date("2024-01-01T23:00:00-05:00") == date(2024, 1, 2)
        assert parse_local_date("2024-01-01") == date(2024, 1, 1)
        assert parse_local_date("nope") is None


class TestDaysBetween:
    """Tests for elapsed day counting."""
    
    def test_whole_days(self):
        assert days_between("2024-01-01", "2024-01-13") == 12
    
    def test_rounds_up_partial_days(self):
        assert days_between("2024-01-01", "2024-01-01T00:00:01Z") == 1
    
    def test_absolute_difference(self):
        assert days_between("2024-01-13", "2024-01-01") == 12
    
    def test_unparseable(self):
        assert days_between("never", "2024-01-01") is None
    
    def test_add_days(self):
        assert add_days(date(2024, 2, 28), 2) == date(2024, 3, 1)


class TestFormatDate:
    """Tests for display formatting."""
    
    def test_styles(self):
        assert format_date("2024-01-05") == "Jan 5, 2024"
        assert format_date("2024-01-05", "long") == "Friday, January 5, 2024"
        assert format_date("2024-01-05", "relative") == "Jan 5"
    
    def test_missing_and_invalid(self):
        assert format_date(None) == "Not set"
        assert format_date("") == "Not set"
        assert format_date("soon") == "Invalid date"
    
    def test_offset_date_shown_as_written(self):
        assert format_date("2024-01-05T23:00:00-05:00") == "Jan 5, 2024"


class TestSlugs:
    """Tests for slug generation."""
    
    @pytest.mark.parametrize("name,expected", [
        ("Vitamin D3 Gummies", "vitamin-d3-gummies"),
        ("  Omega-3 & Fish Oil!  ", "omega-3-fish-oil"),
        ("snake_case name", "snake-case-name"),
        ("--Edge--", "edge"),
        ("Café Blend", "caf-blend"),
        ("", ""),
    ])
    def test_generate_slug(self, name, expected):
        assert generate_slug(name) == expected
    
    def test_unique_slug(self, make_project):
        existing = [
            make_project(name="Zinc", project_id="proj_1", slug="zinc"),
            make_project(name="Zinc", project_id="proj_2", slug="zinc-1"),
        ]
        
        assert generate_unique_slug("Zinc", existing) == "zinc-2"
        assert generate_unique_slug("Iron", existing) == "iron"
    
    def test_exclude_own_slug(self, make_project):
        existing = [make_project(name="Zinc", project_id="proj_1", slug="zinc")]
        
        assert is_slug_unique("zinc", existing, exclude_id="proj_1")
        assert not is_slug_unique("zinc", existing)
        assert generate_unique_slug("Zinc", existing, exclude_id="proj_1") == "zinc"
    
    def test_unique_slug_falls_back_when_name_has_no_ascii(self, make_project):
        existing = [make_project(name="维生素片", project_id="proj_1", slug=FALLBACK_SLUG)]
        
        assert generate_slug("维生素片") == ""
        assert generate_unique_slug("维生素片", []) == "project"
        assert generate_unique_slug("!!!", existing) == "project-1"


class TestProjectIdentity:
    """Tests for ids and avatar helpers."""
    
    def test_project_id_format(self):
        assert re.fullmatch(r"proj_\d+_[a-z0-9]{9}", generate_project_id())
        assert generate_project_id() != generate_project_id()
    
    def test_color_is_stable(self):
        assert project_color("Omega 3") == project_color("Omega 3")
        assert project_color("Omega 3") in PROJECT_COLORS
    
    def test_initials(self):
        assert project_initials("vitamin d3 gummies") == "VD"
        assert project_initials("Zinc") == "Z"
        assert project_initials("") == "P"
