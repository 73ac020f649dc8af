import argparse, signal, sys, threading

from ec2_metadata import ec2_metadata

from cloudwatch_utils import load_config, log_to_cw, send_cw_metric
from eip_utils import (associate_address, ec2_client, get_instance_identity,
                       get_primary_interface_id, list_pool_addresses)
from errors import EipAssignError, InvalidAddressError, InvalidPatternError, NoEligibleAddressError
from selector import ALREADY_ASSIGNED, NONE_AVAILABLE, select_address

PARKED_ALREADY_ASSIGNED = 'parked_already_assigned'
PARKED_NEWLY_ASSIGNED = 'parked_newly_assigned'


def report(message, cfg):
    print(message)
    log_to_cw(message, cfg)


def assign(patterns, cfg, metadata, ec2=None):
    """Returns the parked state to stay in; raises EipAssignError on failure."""
    identity = get_instance_identity(metadata)
    if not cfg.get('REGION'):
        cfg['REGION'] = identity.region
    if ec2 is None:
        ec2 = ec2_client(cfg['REGION'])

    pool = list_pool_addresses(ec2, cfg.get('ADDRESS_DOMAIN', 'vpc'))
    result = select_address(pool, identity.instance_id, patterns)

    if result.outcome == ALREADY_ASSIGNED:
        report("IP is already assigned", cfg)
        return PARKED_ALREADY_ASSIGNED
    if result.outcome == NONE_AVAILABLE:
        raise NoEligibleAddressError(result.examined)

    eni = get_primary_interface_id(metadata)
    associate_address(ec2, result.allocation_id, eni)
    report(f"Assigned {result.allocation_id} to {eni}.", cfg)
    send_cw_metric(1, cfg)
    return PARKED_NEWLY_ASSIGNED


def park(stop_event=None):
    if stop_event is None:
        stop_event = threading.Event()
        for sig in (signal.SIGTERM, signal.SIGINT):
            signal.signal(sig, lambda *_: stop_event.set())
    while not stop_event.wait(3600):
        pass


def build_parser():
    parser = argparse.ArgumentParser(
        description="Associate the first free allow-listed elastic IP with this instance.")
    parser.add_argument('patterns', nargs='*', metavar='ip-or-cidr')
    parser.add_argument('--config', default='config.txt', help="KEY=VALUE settings file")
    return parser


def main(argv=None, metadata=None, ec2=None, stop_event=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.patterns:
        print(f"Usage: {parser.prog} <ip-or-cidr> [<ip-or-cidr>...]", file=sys.stderr)
        return 1

    cfg = load_config(args.config)
    try:
        assign(args.patterns, cfg, metadata or ec2_metadata, ec2)
    except (InvalidPatternError, InvalidAddressError) as e:
        message = f"Unable to validate EIP: {e}"
    except EipAssignError as e:
        message = str(e)
    else:
        park(stop_event)
        return 0
    print(message, file=sys.stderr)
    log_to_cw(message, cfg)
    return 1


if __name__ == "__main__":
    sys.exit(main())
