from collections import namedtuple

from allowlist import matches
from errors import EipAssignError

ALREADY_ASSIGNED = 'already_assigned'
SELECTED = 'selected'
NONE_AVAILABLE = 'none_available'

SelectionResult = namedtuple('SelectionResult', ['outcome', 'allocation_id', 'examined'])


class PoolAddress(namedtuple('PoolAddress', ['public_ip', 'allocation_id', 'instance_id'])):
    __slots__ = ()

    @classmethod
    def from_api(cls, address):
        return cls(address['PublicIp'], address.get('AllocationId'), address.get('InstanceId') or None)

    @property
    def is_free(self):
        return self.instance_id is None


def select_address(pool, instance_id, patterns):
    """First free allow-listed entry wins; an entry bound to ``instance_id`` beats
    everything, even a bad pool address or pattern seen earlier in the scan.
    """
    candidate = None
    error = None
    for entry in pool:
        if entry.instance_id is not None and entry.instance_id == instance_id:
            return SelectionResult(ALREADY_ASSIGNED, entry.allocation_id, len(pool))
        if candidate is not None or error is not None or not entry.is_free:
            continue
        try:
            if matches(entry.public_ip, patterns):
                candidate = entry
        except EipAssignError as e:
            error = e

    if error is not None:
        raise error
    if candidate is None:
        return SelectionResult(NONE_AVAILABLE, None, len(pool))
    return SelectionResult(SELECTED, candidate.allocation_id, len(pool))
