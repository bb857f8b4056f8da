import pytest

from lineserve.core.errors import MalformedRequest
from lineserve.core.exchange.handlers import MAX_OPERAND_DIGITS, compute, echo, parse_operand
from lineserve.core.models.exchange import Request


@pytest.mark.ut
@pytest.mark.parametrize("line,expected", [
    ("4", 4),
    ("-7", -7),
    ("+12", 12),
    ("0", 0),
    ("00042", 42),
    ("40000", 40000),
])
def test_parse_operand(line, expected):
    assert parse_operand(line) == expected


@pytest.mark.ut
@pytest.mark.parametrize("line", ["", "abc", "4.5", " 4", "4 ", "1_000", "--1", "+", "١٢"])
def test_parse_operand_rejects(line):
    with pytest.raises(MalformedRequest):
        parse_operand(line)


@pytest.mark.ut
def test_parse_operand_rejects_too_many_digits():
    with pytest.raises(MalformedRequest):
        parse_operand("9" * (MAX_OPERAND_DIGITS + 1))


@pytest.mark.ut
def test_largest_operand_square_is_renderable():
    response = compute(Request(lines=("9" * MAX_OPERAND_DIGITS, "1")))
    assert response.lines[1] == "Square of 1: 1"


@pytest.mark.ut
def test_compute_squares_in_order():
    response = compute(Request(lines=("4", "7")))
    assert response.lines == ("Square of 4: 16", "Square of 7: 49")


@pytest.mark.ut
def test_compute_negative_and_large():
    response = compute(Request(lines=("-3", "46341")))
    assert response.lines == ("Square of -3: 9", "Square of 46341: 2147488281")


@pytest.mark.ut
def test_compute_rejects_invalid_line():
    with pytest.raises(MalformedRequest):
        compute(Request(lines=("4", "seven")))


@pytest.mark.ut
def test_echo_default_prefix():
    assert echo(Request(lines=("hello",))).lines == ("Server:hello",)


@pytest.mark.ut
def test_echo_custom_prefix_keeps_line_verbatim():
    assert echo(Request(lines=(" a:b ",)), prefix="Bot").lines == ("Bot: a:b ",)
