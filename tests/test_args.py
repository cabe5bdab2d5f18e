import pytest

from sixelterm.args import UsageError, iter_options


def test_simple_flags():
    assert list(iter_options(["-a", "-b"])) == [("a", None), ("b", None)]


def test_clustered_flags():
    assert list(iter_options(["-ab"])) == [("a", None), ("b", None)]


def test_value_attached():
    assert list(iter_options(["-ofile"], "o")) == [("o", "file")]


def test_value_in_next_argument_then_operand():
    result = list(iter_options(["-o", "file", "rest"], "o"))
    assert result == [("o", "file"), (None, "rest")]


def test_value_ends_cluster():
    result = list(iter_options(["-xo", "v", "-y"], "o"))
    assert result == [("x", None), ("o", "v"), ("y", None)]


def test_attached_value_consumes_rest_of_cluster():
    assert list(iter_options(["-oab"], "o")) == [("o", "ab")]


def test_double_dash_ends_options():
    assert list(iter_options(["--", "-a"])) == [(None, "-a")]


def test_single_dash_is_operand():
    assert list(iter_options(["-", "-a"])) == [(None, "-"), (None, "-a")]


def test_options_after_operand_are_operands():
    assert list(iter_options(["file", "-a"])) == [(None, "file"), (None, "-a")]


def test_empty_next_argument_is_a_value():
    assert list(iter_options(["-o", ""], "o")) == [("o", "")]


def test_missing_value_raises():
    with pytest.raises(UsageError) as info:
        list(iter_options(["-a", "-o"], "o"))
    assert info.value.option == "o"


def test_options_before_error_are_yielded():
    gen = iter_options(["-a", "-o"], "o")
    assert next(gen) == ("a", None)
    with pytest.raises(UsageError):
        next(gen)