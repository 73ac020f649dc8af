from collections import namedtuple

import boto3
import requests
from botocore.exceptions import BotoCoreError, ClientError

from errors import InstanceEnvironmentError, ProviderError
from selector import PoolAddress

InstanceContext = namedtuple('InstanceContext', ['instance_id', 'region'])


def get_instance_identity(metadata):
    try:
        doc = metadata.instance_identity_document
        return InstanceContext(doc['instanceId'], doc['region'])
    except (requests.exceptions.RequestException, KeyError, ValueError) as e:
        raise InstanceEnvironmentError(f"Unable to detect instance id and region: {e}") from e


def get_primary_interface_id(metadata):
    # metadata maps the primary MAC to its ENI
    try:
        mac = metadata.mac
        return metadata.network_interfaces[mac].interface_id
    except (requests.exceptions.RequestException, KeyError) as e:
        raise InstanceEnvironmentError(f"Unable to detect primary network interface: {e}") from e


def ec2_client(region):
    return boto3.client('ec2', region_name=region)


def list_pool_addresses(ec2, domain='vpc'):
    try:
        result = ec2.describe_addresses(
            Filters=[{'Name': 'domain', 'Values': [domain]}]
        )
    except (ClientError, BotoCoreError) as e:
        raise ProviderError(f"Unable to retrieve available elastic IPs: {e}") from e
    return [PoolAddress.from_api(a) for a in result['Addresses']]


def associate_address(ec2, allocation_id, interface_id):
    # not retried: losing a race for the same allocation is fatal
    try:
        ec2.associate_address(AllocationId=allocation_id, NetworkInterfaceId=interface_id)
    except (ClientError, BotoCoreError) as e:
        raise ProviderError(f"Unable to associate address: {e}") from e
