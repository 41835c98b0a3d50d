"""Tests for the built-in helper catalog.

Helpers are plain functions, so most tests call them directly; the block
helpers and the option-aware ones are exercised through templates.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, timedelta

import pytest

from vitrine import DEFAULT_HELPERS, Environment
from vitrine.environment.helpers.arithmetic import add, ceil, divide, floor, mod, multiply, round_, subtract
from vitrine.environment.helpers.arrays import contains, first, join, last, length, limit
from vitrine.environment.helpers.comparison import eq, gt, gte, lt, lte, ne
from vitrine.environment.helpers.dates import format_date, relative_time
from vitrine.environment.helpers.strings import capitalize, lowercase, replace, slugify, truncate, uppercase
from vitrine.environment.helpers.utility import (
    component_class,
    default,
    json,
    lookup,
    make_asset_helper,
    random,
    typeof,
)


def render(source: str, data=None) -> str:
    return Environment().compile(source)(data)


def test_catalog_names():
    assert set(DEFAULT_HELPERS) == {
        "eq", "ne", "lt", "gt", "lte", "gte", "and", "or",
        "uppercase", "lowercase", "capitalize", "truncate", "replace", "slugify",
        "length", "first", "last", "join", "contains", "limit",
        "add", "subtract", "multiply", "divide", "mod", "round", "floor", "ceil",
        "formatDate", "relativeTime",
        "json", "typeof", "default", "random", "times", "switch", "case",
        "asset", "componentClass", "lookup", "log",
    }  # fmt: skip


class TestComparison:
    def test_eq_is_strict(self):
        assert eq(1, 1.0)
        assert not eq(1, "1")
        assert not eq(1, True)
        assert eq("a", "a")

    def test_ne(self):
        assert ne(1, "1")
        assert not ne(None, None)

    def test_ordering(self):
        assert lt(1, 2)
        assert gt("b", "a")
        assert lte(2, 2)
        assert gte(3, 2)

    def test_unorderable_is_false(self):
        assert lt(1, "a") is False
        assert gt(None, 1) is False

    @pytest.mark.parametrize(
        ("data", "expected"),
        [({"a": 1, "b": "x"}, "and or"), ({"a": 1, "b": ""}, "or"), ({"a": 0, "b": []}, "or"), ({}, "")],
    )
    def test_and_or(self, data, expected):
        source = "{{#if (and a b)}}and{{/if}} {{#if (or a b)}}or{{/if}}"
        assert render(source, data).strip() == expected


class TestStrings:
    def test_case_helpers(self):
        assert uppercase("abc") == "ABC"
        assert lowercase("ABC") == "abc"
        assert capitalize("hello world") == "Hello world"

    def test_falsy_passthrough(self):
        assert uppercase(None) is None
        assert truncate("", 3) == ""

    def test_numbers_are_stringified(self):
        assert uppercase(12) == "12"

    def test_truncate(self):
        assert truncate("Hello world", 5) == "Hello..."
        assert truncate("Hi", 5) == "Hi"

    def test_replace_uses_pattern(self):
        assert replace("a.b.c", "\\.", "-") == "a-b-c"

    def test_truncate_numeric_string_length(self):
        assert truncate("abcdef", "3") == "abc..."
        assert truncate("abc", "x") == "abc"
        assert render('{{truncate s "3"}}', {"s": "abcdef"}) == "abc..."

    def test_replace_inserts_literally(self):
        assert replace("cat", "(c)", "$1\\1") == "$1\\1at"

    def test_replace_through_template(self):
        assert render('{{replace title " " "_"}}', {"title": "a b c"}) == "a_b_c"

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            (r"{{replace s '\.' '-'}}", "a-b  c"),
            (r'{{replace s "\s+" " "}}', "a.b c"),
            (r"{{replace s '\w' '_'}}", "_._  _"),
        ],
    )
    def test_replace_regex_escapes_in_template(self, source, expected):
        assert render(source, {"s": "a.b  c"}) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("Hello, World!  Foo", "hello-world-foo"),
            ("  Trim me  ", "trim-me"),
            ("snake_case name", "snake-case-name"),
            ("---", ""),
        ],
    )
    def test_slugify(self, value, expected):
        assert slugify(value) == expected


class TestArrays:
    def test_length(self):
        assert length([1, 2, 3]) == 3
        assert length("abc") == 0
        assert length(None) == 0

    def test_first_last(self):
        assert first([1, 2]) == 1
        assert last([1, 2]) == 2
        assert first([]) is None
        assert last("ab") is None

    def test_join(self):
        assert join(["a", "b"]) == "a, b"
        assert join(["a", "b"], "-") == "a-b"
        assert join("ab") == ""

    def test_contains_is_strict(self):
        assert contains([1, "1"], "1")
        assert not contains([1], "1")
        assert not contains(None, 1)

    def test_limit(self):
        assert limit([1, 2, 3], 2) == [1, 2]
        assert limit([1], -1) == []
        assert limit(None, 2) == []

    def test_limit_in_each(self):
        assert render("{{#each (limit items 2)}}{{this}}{{/each}}", {"items": [1, 2, 3]}) == "12"


class TestArithmetic:
    def test_add(self):
        assert add(1, 2) == 3
        assert add("a", 1) == "a1"
        assert add("1", 2) == "12"
        assert add(True, 1) == 2

    def test_subtract_multiply(self):
        assert subtract("5", 2) == 3
        assert multiply(2, 2.5) == 5.0

    def test_divide(self):
        assert divide(10, 4) == 2.5
        assert divide(10, 0) == 0

    def test_mod(self):
        assert mod(7, 3) == 1
        assert mod(-7, 3) == -1
        assert math.isnan(mod(1, 0))

    @pytest.mark.parametrize(
        ("args", "expected"),
        [((2.5,), 3), ((2.4,), 2), ((-2.5,), -2), ((2.345, 2), 2.35), ((1.005, 2), 1.01), (("7.6",), 8)],
    )
    def test_round_half_up(self, args, expected):
        assert round_(*args) == expected

    def test_floor_ceil(self):
        assert floor(2.7) == 2
        assert ceil(2.1) == 3
        assert math.isnan(floor("not a number"))

    def test_output_formatting(self):
        assert render("{{divide 9 3}} {{mod 1 0}}") == "3 NaN"


class TestDates:
    def test_format_date_default_pattern(self):
        assert format_date("2024-03-05T09:07:02") == "2024-03-05"

    def test_format_date_pattern(self):
        assert format_date("2024-03-05T09:07:02", "DD/MM/YYYY HH:mm:ss") == "05/03/2024 09:07:02"

    def test_format_date_replaces_each_token_once(self):
        assert format_date(date(2024, 1, 2), "YYYY YYYY") == "2024 YYYY"

    def test_format_date_accepts_datetime(self):
        assert format_date(datetime(2023, 12, 31, 23, 59), "YYYY-MM-DD HH:mm") == "2023-12-31 23:59"

    @pytest.mark.parametrize("value", [None, "", "not a date", []])
    def test_invalid_dates_render_empty(self, value):
        assert format_date(value) == ""
        assert relative_time(value) == ""

    @pytest.mark.parametrize(
        ("delta", "expected"),
        [
            (timedelta(seconds=30), "just now"),
            (timedelta(minutes=1), "1 minute ago"),
            (timedelta(minutes=5), "5 minutes ago"),
            (timedelta(hours=3), "3 hours ago"),
            (timedelta(days=1, hours=2), "1 day ago"),
            (timedelta(days=40), "40 days ago"),
        ],
    )
    def test_relative_time(self, delta, expected):
        now = datetime(2024, 6, 1, 12, 0, 0)
        assert relative_time(now - delta, now=now) == expected

    def test_relative_time_defaults_to_now(self):
        assert relative_time(datetime.now() - timedelta(hours=3)) == "3 hours ago"
        assert relative_time(datetime.now()) == "just now"


class TestUtility:
    def test_json(self):
        assert json({"a": [1, None]}) == '{\n  "a": [\n    1,\n    null\n  ]\n}'

    def test_json_in_template_is_escaped(self):
        assert render("{{json v}}", {"v": "x"}) == "&quot;x&quot;"
        assert render("{{{json v}}}", {"v": "x"}) == '"x"'

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(None, "undefined"), (True, "boolean"), (1, "number"), (1.5, "number"), ("s", "string"),
         ([], "object"), ({}, "object"), (len, "function")],
    )  # fmt: skip
    def test_typeof(self, value, expected):
        assert typeof(value) == expected

    def test_default(self):
        assert default(None, "x") == "x"
        assert default(0, "x") == "x"
        assert default("", "x") == "x"
        assert default("v", "x") == "v"
        assert default([], "x") == []

    def test_random_is_inclusive(self):
        assert random(4, 4) == 4
        assert {random(1, 2) for _ in range(200)} <= {1, 2}

    def test_times(self):
        source = "{{#times 3}}{{index}}{{#if @first}}F{{/if}}{{#if last}}L{{/if}};{{/times}}"
        assert render(source) == "0F;1;2L;"

    def test_times_with_non_number(self):
        assert render('{{#times "x"}}never{{/times}}') == ""

    def test_switch_case(self):
        source = '{{#switch kind}}{{#case "a"}}A{{/case}}{{#case "b"}}B{{/case}}{{/switch}}'
        assert render(source, {"kind": "b"}) == "B"
        assert render(source, {"kind": "z"}) == ""

    def test_case_outside_switch(self):
        assert render('{{#case "a"}}A{{/case}}') == ""

    def test_asset_helper(self):
        assert make_asset_helper("/static")("/img/logo.png") == "/static/img/logo.png"
        assert render('{{asset "css/x.css"}}') == "/assets/css/x.css"

    def test_component_class(self):
        assert component_class("card", {"featured": True, "dark": False}) == "card card--featured"
        assert component_class("card") == "card"

    def test_lookup(self):
        assert lookup({"a": 1}, "a") == 1
        assert lookup(["x", "y"], 1) == "y"
        assert lookup(None, "a") is None

    def test_log(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="vitrine.environment.helpers.utility"):
            assert render('{{log "value is" v level="warning"}}', {"v": 3}) == ""
        (record,) = caplog.records
        assert record.levelno == logging.WARNING
        assert record.getMessage() == "value is 3"
