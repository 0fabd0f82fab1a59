"""
Unit tests for placeholders, predicate parsing and join records.
"""

import pytest

from sqlforge.sql_builder.conditions import JoinSpec, JoinType, Predicate
from sqlforge.sql_builder.placeholders import ParamStyle, placeholder


class TestPlaceholder:
    """Tests for placeholder rendering and style coercion."""

    def test_dollar_number(self):
        """Dollar style carries the ordinal."""
        assert placeholder(1, ParamStyle.DOLLAR_NUMBER) == "$1"
        assert placeholder(12, ParamStyle.DOLLAR_NUMBER) == "$12"

    def test_question_mark(self):
        """Question mark style ignores the ordinal."""
        assert placeholder(1, ParamStyle.QUESTION_MARK) == "?"
        assert placeholder(7, ParamStyle.QUESTION_MARK) == "?"

    def test_default_is_dollar(self):
        """Without a style the dollar form is used."""
        assert placeholder(3) == "$3"

    @pytest.mark.parametrize("value, expected", [
        ("?", ParamStyle.QUESTION_MARK),
        ("$", ParamStyle.DOLLAR_NUMBER),
        ("question_mark", ParamStyle.QUESTION_MARK),
        ("DOLLAR_NUMBER", ParamStyle.DOLLAR_NUMBER),
        (ParamStyle.QUESTION_MARK, ParamStyle.QUESTION_MARK),
    ])
    def test_coerce(self, value, expected):
        """Members, tokens and names are accepted."""
        assert ParamStyle.coerce(value) is expected

    @pytest.mark.parametrize("value", ["named", "", 1, None])
    def test_coerce_rejects_unknown(self, value):
        """Anything else raises ValueError."""
        with pytest.raises(ValueError):
            ParamStyle.coerce(value)


class TestPredicateFromInput:
    """Tests for Predicate.from_input."""

    def test_predicate_returned_as_is(self):
        """A Predicate is passed through."""
        p = Predicate("id", "=", 1)
        assert Predicate.from_input(p) is p

    def test_dict_with_field(self):
        """Dict input uses field/operator/value and defaults joiner to and."""
        p = Predicate.from_input({"field": "age", "operator": ">", "value": 18})
        assert p == Predicate("age", ">", 18, "and")

    def test_dict_with_column_and_joiner(self):
        """Dict input accepts column and an explicit joiner."""
        p = Predicate.from_input({"column": "admin", "operator": "=", "value": True, "joiner": "OR"})
        assert p == Predicate("admin", "=", True, "or")

    def test_dict_missing_operator(self):
        """Dict without an operator is rejected."""
        with pytest.raises(ValueError):
            Predicate.from_input({"field": "age", "value": 1})

    def test_tuple_forms(self):
        """Three and four item tuples are accepted."""
        assert Predicate.from_input(("id", "=", 1)) == Predicate("id", "=", 1)
        assert Predicate.from_input(("id", "=", 1, "or")) == Predicate("id", "=", 1, "or")

    def test_list_forms(self):
        """Lists, as decoded from JSON arrays, work like tuples."""
        assert Predicate.from_input(["age", ">", 18]) == Predicate("age", ">", 18)
        assert Predicate.from_input(["age", ">", 18, "or"]) == Predicate("age", ">", 18, "or")

    @pytest.mark.parametrize("item", [
        {"field": "a", "operator": None, "value": 1},
        {"field": 5, "operator": "=", "value": 1},
        ["a", 1, 2],
        [["a"], "=", 2],
    ])
    def test_non_string_field_or_operator(self, item):
        """Field and operator must be strings."""
        with pytest.raises(ValueError, match="must be strings"):
            Predicate.from_input(item)

    def test_tuple_wrong_length(self):
        """Other tuple sizes are rejected."""
        with pytest.raises(ValueError):
            Predicate.from_input(("id", "="))

    def test_invalid_joiner(self):
        """Unknown joiners are rejected."""
        with pytest.raises(ValueError):
            Predicate.from_input(("id", "=", 1, "xor"))

    def test_unsupported_type(self):
        """Unsupported input types raise TypeError."""
        with pytest.raises(TypeError):
            Predicate.from_input(42)


class TestPredicateFromString:
    """Tests for Predicate.from_string."""

    @pytest.mark.parametrize("text, expected", [
        ("age > 18", Predicate("age", ">", 18)),
        ("users.active = true", Predicate("users.active", "=", True)),
        ("score >= 1.5", Predicate("score", ">=", 1.5)),
        ("balance < -5", Predicate("balance", "<", -5)),
        ("status != pending", Predicate("status", "!=", "pending")),
        ("deleted_at <> null", Predicate("deleted_at", "<>", None)),
        ("name = 'O''Brien'", Predicate("name", "=", "O'Brien")),
        ("code = '42'", Predicate("code", "=", "42")),
        ("or name like 'J%'", Predicate("name", "LIKE", "J%", "or")),
        ("AND email NOT  ILIKE '%@test'", Predicate("email", "NOT ILIKE", "%@test", "and")),
        ("ordering = 1", Predicate("ordering", "=", 1)),
    ])
    def test_parses(self, text, expected):
        """Supported conditions parse into predicates."""
        assert Predicate.from_string(text) == expected

    @pytest.mark.parametrize("text", ["", "   ", "age >", "age 18", "18 > age", "age > 1 extra", "age in (1, 2)"])
    def test_rejects_malformed(self, text):
        """Malformed conditions raise ValueError."""
        with pytest.raises(ValueError):
            Predicate.from_string(text)

    def test_rejects_unknown_character(self):
        """Characters outside the grammar raise ValueError."""
        with pytest.raises(ValueError):
            Predicate.from_string("age ~ 1")


class TestJoinSpec:
    """Tests for JoinSpec and JoinType."""

    def test_join_keywords(self):
        """Join kinds render upper-case keywords."""
        assert [k.value for k in JoinType] == ["JOIN", "LEFT JOIN", "RIGHT JOIN", "INNER JOIN", "FULL JOIN"]

    def test_equality(self):
        """JoinSpecs compare by value."""
        a = JoinSpec(JoinType.LEFT, "users", "u.id = p.user_id", "u")
        b = JoinSpec(JoinType.LEFT, "users", "u.id = p.user_id", "u")
        assert a == b
        assert a != JoinSpec(JoinType.INNER, "users", "u.id = p.user_id", "u")
