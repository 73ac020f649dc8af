import itertools

import pytest

from allowlist import PATTERN_CIDR, PATTERN_INVALID, PATTERN_IP, classify_pattern, matches
from errors import ConfigurationError, InvalidAddressError, InvalidPatternError


def test_literal_ip():
    assert matches("10.0.0.5", ["10.0.0.5"]) is True
    assert matches("10.0.0.6", ["10.0.0.5"]) is False


def test_cidr():
    assert matches("10.0.1.17", ["10.0.1.0/24"]) is True
    assert matches("10.0.2.17", ["10.0.1.0/24"]) is False


def test_cidr_with_host_bits():
    assert matches("10.0.1.17", ["10.0.1.9/24"]) is True


def test_malformed_pattern():
    with pytest.raises(InvalidPatternError) as exc:
        matches("1.2.3.4", ["not-an-ip"])
    assert exc.value.pattern == "not-an-ip"
    assert isinstance(exc.value, ConfigurationError)


def test_malformed_pattern_after_miss_aborts():
    with pytest.raises(InvalidPatternError):
        matches("1.2.3.4", ["5.6.7.8", "1.2.3.0/33"])


def test_match_short_circuits_before_malformed_pattern():
    assert matches("1.2.3.4", ["1.2.3.4", "garbage"]) is True


def test_malformed_address():
    with pytest.raises(InvalidAddressError) as exc:
        matches("bogus", ["1.2.3.0/24"])
    assert exc.value.address == "bogus"


def test_order_does_not_change_result():
    patterns = ["192.0.2.0/24", "10.9.9.9", "172.16.0.0/12", "203.0.113.7"]
    for perm in itertools.permutations(patterns):
        assert matches("172.20.1.1", list(perm)) is True


def test_literal_comparison_is_textual():
    assert matches("2001:db8::1", ["2001:0db8:0000:0000:0000:0000:0000:0001"]) is False
    assert matches("2001:db8::1", ["2001:db8::1"]) is True


def test_empty_allow_list_matches_nothing():
    assert matches("10.0.0.1", []) is False


@pytest.mark.parametrize("pattern,kind", [
    ("10.0.0.0/8", PATTERN_CIDR),
    ("2001:db8::/32", PATTERN_CIDR),
    ("10.0.0.1", PATTERN_IP),
    ("10.0.0.1/", PATTERN_INVALID),
    ("example.com", PATTERN_INVALID),
    ("", PATTERN_INVALID),
])
def test_classify_pattern(pattern, kind):
    assert classify_pattern(pattern).kind == kind

