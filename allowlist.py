import ipaddress
from collections import namedtuple

from errors import InvalidAddressError, InvalidPatternError

PATTERN_CIDR = 'cidr'
PATTERN_IP = 'ip'
PATTERN_INVALID = 'invalid'

Pattern = namedtuple('Pattern', ['kind', 'value'])


def _parse_ip(text):
    try:
        return ipaddress.ip_address(text)
    except ValueError:
        return None


def _parse_cidr(text):
    # bare addresses are not CIDR blocks, ip_network would read them as /32
    if '/' not in text:
        return None
    try:
        return ipaddress.ip_network(text, strict=False)
    except ValueError:
        return None


def classify_pattern(pattern):
    """Tag an allow-list entry as a CIDR block, a literal IP or invalid."""
    network = _parse_cidr(pattern)
    if network is not None:
        return Pattern(PATTERN_CIDR, network)
    if _parse_ip(pattern) is not None:
        return Pattern(PATTERN_IP, pattern)
    return Pattern(PATTERN_INVALID, pattern)


def matches(address, patterns):
    # literal entries compare as exact strings, not as parsed addresses
    ip = _parse_ip(address)
    if ip is None:
        raise InvalidAddressError(address)
    for pattern in patterns:
        kind, value = classify_pattern(pattern)
        if kind == PATTERN_CIDR:
            if ip in value:
                return True
        elif kind == PATTERN_IP:
            if address == value:
                return True
        else:
            raise InvalidPatternError(pattern)
    return False
