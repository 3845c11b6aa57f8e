"""Tests for the declaration grammars, independent of line assembly."""

import pytest

from godotdoc.errors import InvalidSyntax, UnresolvedConstant
from godotdoc.grammars import (
    leading_keyword,
    parse_assignment,
    parse_class_header,
    parse_constant,
    parse_enum_header,
    parse_enum_values,
    parse_export,
    parse_function,
    parse_int,
    parse_signal,
    parse_variable,
)
from godotdoc.models import FunctionArgument


def no_constants(name):
    return None


class TestLeadingKeyword:
    """Recognising which declaration a line starts."""

    @pytest.mark.parametrize(
        "line, keyword",
        [
            ("class A:", "class"),
            ("signal hit", "signal"),
            ("func f():", "func"),
            ("var x", "var"),
            ("const X = 1", "const"),
            ("export var x", "export"),
            ("export(int) var x", "export"),
            ("enum E {A}", "enum"),
            ("enum{A}", "enum"),
        ],
    )
    def test_keywords(self, line, keyword):
        """Each declaration keyword is detected."""
        assert leading_keyword(line) == keyword

    @pytest.mark.parametrize(
        "line",
        ["class_name Player", "extends Node", "exports.append(1)", "enumerate()", "x = 1", ""],
    )
    def test_non_declarations(self, line):
        """Identifiers that merely start with a keyword are not declarations."""
        assert leading_keyword(line) is None


class TestHeaders:
    """Class and signal headers."""

    def test_class_name_up_to_colon(self):
        """The class name ends at the colon."""
        assert parse_class_header("class Inner:") == "Inner"

    def test_class_with_extends(self):
        """An extends clause is kept in the name."""
        assert parse_class_header("class Inner extends Node:") == "Inner extends Node"

    def test_signal(self):
        """Signal parameters are kept in the name."""
        assert parse_signal("signal hit(damage, source)") == "hit(damage, source)"

    def test_empty_names_rejected(self):
        """A header without a name is invalid."""
        with pytest.raises(InvalidSyntax):
            parse_class_header("class :")
        with pytest.raises(InvalidSyntax):
            parse_signal("signal ")


class TestFunctionSignature:
    """Arguments, super call and return type of `func` lines."""

    def test_arguments_types_defaults_and_return(self):
        """Each argument keeps its own type and default."""
        name, args = parse_function("func foo(a, b: int, c = 1) -> bool:")
        assert name == "foo"
        assert args.arguments == [
            FunctionArgument("a"),
            FunctionArgument("b", "int"),
            FunctionArgument("c", None, "1"),
        ]
        assert args.super_arguments is None
        assert args.return_type == "bool"

    def test_super_arguments_for_init(self):
        """`_init(...).(...)` records the super call's arguments."""
        name, args = parse_function("func _init(x).(y):")
        assert name == "_init"
        assert args.arguments == [FunctionArgument("x")]
        assert args.super_arguments == [FunctionArgument("y")]

    def test_empty_super_call(self):
        """An empty super call leaves super_arguments unset."""
        _, args = parse_function("func _init().():")
        assert args.arguments == []
        assert args.super_arguments is None

    def test_no_arguments(self):
        """Empty parentheses give no arguments."""
        name, args = parse_function("func _ready():")
        assert name == "_ready"
        assert args.arguments == []
        assert args.return_type is None

    def test_typed_default(self):
        """Type and default can both be present."""
        _, args = parse_function("func f(speed: float = 1.5):")
        assert args.arguments == [FunctionArgument("speed", "float", "1.5")]

    def test_inferred_type(self):
        """`:=` gives a default without a type."""
        _, args = parse_function("func f(a := 2):")
        assert args.arguments == [FunctionArgument("a", None, "2")]

    def test_nested_call_default_kept_whole(self):
        """Commas and colons inside a default do not split it."""
        _, args = parse_function("func f(pos = Vector2(1, 2), d = {\"a\": 1}):")
        assert args.arguments == [
            FunctionArgument("pos", None, "Vector2(1, 2)"),
            FunctionArgument("d", None, '{"a": 1}'),
        ]

    def test_string_default_with_separators(self):
        """Separators inside a string default are ignored."""
        _, args = parse_function('func f(s = "a, b) : c"):')
        assert args.arguments == [FunctionArgument("s", None, '"a, b) : c"')]

    def test_negative_default(self):
        """A '-' inside the argument list is not an arrow."""
        _, args = parse_function("func f(a = -1) -> int:")
        assert args.arguments == [FunctionArgument("a", None, "-1")]
        assert args.return_type == "int"

    def test_trailing_comma(self):
        """A trailing comma is allowed."""
        _, args = parse_function("func f(a, b,):")
        assert [a.name for a in args.arguments] == ["a", "b"]

    def test_spaces_around_names(self):
        """Whitespace around an argument name is ignored."""
        _, args = parse_function("func f( a , b ):")
        assert [a.name for a in args.arguments] == ["a", "b"]

    def test_missing_colon_tolerated(self):
        """The trailing colon may be missing."""
        name, _ = parse_function("func f()")
        assert name == "f"

    @pytest.mark.parametrize(
        "line",
        [
            "func f(a)(b):",  # second group without super call
            "func g(a).(b):",  # super call outside _init
            "func f(a): pass",  # content after the signature
            "func f(a,,b):",
            "func f(a) > int:",
            "func f(a) - int:",
            "func f(a:",
            "func (a):",
            "func f:",
            "func f(a) -> :",
            "func f((a)):",
            "func f(a b):",
            "func f(x, a b = 1):",
            "func _init(x).(a b):",
        ],
    )
    def test_invalid(self, line):
        """Malformed signatures are rejected."""
        with pytest.raises(InvalidSyntax):
            parse_function(line)


class TestAssignment:
    """`name: type = value setget a, b` splitting."""

    def test_full_declaration(self):
        """All four parts are recognised."""
        name, args = parse_variable("var x: int = 1 setget set_x, get_x")
        assert name == "x"
        assert args.value_type == "int"
        assert args.assignment == "1"
        assert args.setter == "set_x"
        assert args.getter == "get_x"

    def test_plain_assignment(self):
        """Only the initializer is set."""
        name, args = parse_variable("var y = 2")
        assert name == "y"
        assert args.value_type is None
        assert args.assignment == "2"
        assert args.setter is None
        assert args.getter is None

    def test_name_only(self):
        """A bare name has no initializer."""
        name, args = parse_variable("var z")
        assert name == "z"
        assert args.assignment is None

    def test_type_only(self):
        """A type without an initializer."""
        _, args = parse_variable("var z: Node2D")
        assert args.value_type == "Node2D"
        assert args.assignment is None

    def test_inferred_type(self):
        """`:=` leaves the type empty."""
        _, args = parse_variable("var z := 3")
        assert args.value_type is None
        assert args.assignment == "3"

    def test_type_and_setget(self):
        """Type followed directly by setget."""
        _, args = parse_variable("var z: int setget set_z")
        assert args.value_type == "int"
        assert args.setter == "set_z"

    def test_assignment_and_setget(self):
        """An empty setter slot means getter only."""
        _, args = parse_variable("var z = 3 setget , get_z")
        assert args.assignment == "3"
        assert args.setter is None
        assert args.getter == "get_z"

    def test_setget_only(self):
        """A trailing comma leaves the getter empty."""
        name, args = parse_variable("var z setget set_z,")
        assert name == "z"
        assert args.setter == "set_z"
        assert args.getter is None

    def test_nested_separators_ignored(self):
        """Separators inside the initializer do not split it."""
        _, args = parse_variable('var d = {"a": 1, "b": f(x = 2)}')
        assert args.value_type is None
        assert args.assignment == '{"a": 1, "b": f(x = 2)}'

    def test_comparison_in_initializer(self):
        """Only the first top-level '=' is the assignment."""
        _, args = parse_constant("const DEBUG: bool = LEVEL == 2")
        assert args.value_type == "bool"
        assert args.assignment == "LEVEL == 2"

    @pytest.mark.parametrize(
        "line",
        [
            " x = 1 : int",  # type after assignment
            " x setget a : int",  # type after setget
            " x setget a = 1",  # assignment after setget
            " x setget a, b, c",
            " x setget ,",
            " = 1",
            " x =",
            " two words = 1",
        ],
    )
    def test_invalid(self, line):
        """Out-of-order or malformed parts are rejected."""
        with pytest.raises(InvalidSyntax):
            parse_assignment(line)


class TestExport:
    """`export[(hint)] var ...` declarations."""

    def test_plain_export(self):
        """An export without a hint has no type or options."""
        name, args = parse_export("export var speed = 10")
        assert name == "speed"
        assert args.value_type is None
        assert args.options == []
        assert args.assignment == "10"

    def test_hint_type_and_options(self):
        """The first hint element is the type, the rest are options."""
        name, args = parse_export('export(int, "Easy", "Hard") var level = 0')
        assert name == "level"
        assert args.value_type == "int"
        assert args.options == ['"Easy"', '"Hard"']
        assert args.assignment == "0"

    def test_annotation_used_without_hint(self):
        """Without a hint the variable's annotation is the type."""
        _, args = parse_export("export var speed: float = 1.0")
        assert args.value_type == "float"

    def test_hint_wins_over_annotation(self):
        """The hint type takes precedence over the annotation."""
        _, args = parse_export("export(float) var speed: int = 1")
        assert args.value_type == "float"

    def test_parens_after_var_are_not_a_hint(self):
        """Parentheses in the initializer are not a hint."""
        _, args = parse_export("export var pos = Vector2(1, 2)")
        assert args.value_type is None
        assert args.assignment == "Vector2(1, 2)"

    def test_onready_export(self):
        """`onready` may follow the hint."""
        name, args = parse_export("export(NodePath) onready var target")
        assert name == "target"
        assert args.value_type == "NodePath"

    def test_setget(self):
        """Exports accept a setget clause."""
        _, args = parse_export("export var hp = 3 setget set_hp")
        assert args.setter == "set_hp"

    @pytest.mark.parametrize(
        "line",
        [
            "export(int)",
            "export(int var x",
            "export junk var x",
            "export(int) junk var x",
        ],
    )
    def test_invalid(self, line):
        """Missing ` var ` or a malformed hint is rejected."""
        with pytest.raises(InvalidSyntax):
            parse_export(line)


class TestEnums:
    """Enum headers and value lists."""

    def test_header_closed(self):
        """A one-line enum returns its whole body."""
        assert parse_enum_header("enum State { IDLE, RUN }") == ("State", " IDLE, RUN ", True)

    def test_header_open(self):
        """An open header returns an empty body."""
        assert parse_enum_header("enum State {") == ("State", "", False)

    def test_anonymous(self):
        """An anonymous enum has an empty name."""
        assert parse_enum_header("enum {A}") == ("", "A", True)

    def test_header_without_brace(self):
        """An enum without '{' is invalid."""
        with pytest.raises(InvalidSyntax):
            parse_enum_header("enum State")

    def test_auto_increment(self):
        """Values count up from zero."""
        values, next_value = parse_enum_values(" A, B, C ", 0, no_constants)
        assert values == [("A", 0), ("B", 1), ("C", 2)]
        assert next_value == 3

    def test_explicit_values_restart_sequence(self):
        """An explicit value resets the counter."""
        values, _ = parse_enum_values("A = 5, B, C = 2, D", 0, no_constants)
        assert values == [("A", 5), ("B", 6), ("C", 2), ("D", 3)]

    def test_continues_from_previous_chunk(self):
        """Counting resumes from the value passed in."""
        values, _ = parse_enum_values("C", 2, no_constants)
        assert values == [("C", 2)]

    def test_empty_elements_skipped(self):
        """Empty elements take no value."""
        values, _ = parse_enum_values("A, , B,", 0, no_constants)
        assert values == [("A", 0), ("B", 1)]

    def test_hex_and_negative_literals(self):
        """Integer literals in any base are accepted."""
        values, _ = parse_enum_values("A = 0x10, B = -1, C", 0, no_constants)
        assert values == [("A", 16), ("B", -1), ("C", 0)]

    def test_constant_reference(self):
        """A constant name resolves to its integer value."""
        values, _ = parse_enum_values("A = FOO, B", 0, {"FOO": "3"}.get)
        assert values == [("A", 3), ("B", 4)]

    def test_unresolved_constant(self):
        """An unknown name is reported."""
        with pytest.raises(UnresolvedConstant) as exc:
            parse_enum_values("A = NOPE", 0, no_constants)
        assert "'NOPE' is not a valid enum value" in str(exc.value)

    def test_non_integer_constant(self):
        """A constant that is not an integer is reported."""
        with pytest.raises(UnresolvedConstant):
            parse_enum_values("A = NAME", 0, {"NAME": '"text"'}.get)

    @pytest.mark.parametrize("body", ["A B", "A = 1 = 2", "A = FOO + 1", "A = "])
    def test_invalid_element(self, body):
        """Values that are neither integers nor constant names are invalid."""
        with pytest.raises(InvalidSyntax):
            parse_enum_values(body, 0, {"FOO": "1"}.get)


class TestParseInt:
    """GDScript integer literals."""

    @pytest.mark.parametrize(
        "raw, value", [("0", 0), ("42", 42), ("-3", -3), ("0x1F", 31), ("0b101", 5)]
    )
    def test_literals(self, raw, value):
        """Decimal, hex, binary and negative literals parse."""
        assert parse_int(raw) == value

    @pytest.mark.parametrize("raw", ["FOO", "1.5", '"1"', ""])
    def test_not_integers(self, raw):
        """Anything else gives None."""
        assert parse_int(raw) is None
