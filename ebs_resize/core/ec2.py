"""
EBS Resize - EC2 Adapter

Implements the ComputeAdapter interface on top of a boto3 EC2 client.

boto3 is blocking, so every call runs in a worker thread and the event
loop stays free while a request is in flight. Provider errors are turned
into AdapterError with the AWS error code attached.
"""

import asyncio
from typing import Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from ebs_resize.core.adapter import ComputeAdapter
from ebs_resize.core.exceptions import AdapterError
from ebs_resize.core.models import Instance, Snapshot, Volume
from ebs_resize.utils.logger import get_logger, log_api_call, log_api_response

# Error codes EC2 returns for ids that do not exist, or are not visible yet
NOT_FOUND_CODES = (
    'InvalidInstanceID.NotFound',
    'InvalidInstanceID.Malformed',
)
VOLUME_NOT_FOUND_CODES = ('InvalidVolume.NotFound',)
SNAPSHOT_NOT_FOUND_CODES = ('InvalidSnapshot.NotFound',)


class EC2Adapter(ComputeAdapter):
    """
    Control-plane adapter for Amazon EC2.

    Example:
        client, _ = SessionManager(region='us-east-1').get_client()
        adapter = EC2Adapter(client, logger)
        volumes = await adapter.describe_volumes(['vol-123'])
    """

    def __init__(self, client, logger=None):
        """
        Args:
            client: boto3 EC2 client
            logger: Optional logger for API call tracing
        """
        self.client = client
        self.logger = logger or get_logger()

    async def _call(self, method_name: str, **params):
        """Run one boto3 call in a worker thread, translating errors."""
        log_api_call(self.logger, method_name, **params)
        method = getattr(self.client, method_name)
        try:
            response = await asyncio.to_thread(method, **params)
        except ClientError as e:
            error = e.response.get('Error', {})
            raise AdapterError(
                method_name,
                error.get('Message', str(e)),
                code=error.get('Code')
            ) from e
        except BotoCoreError as e:
            raise AdapterError(method_name, str(e)) from e
        log_api_response(self.logger, response)
        return response

    async def describe_instances(self, instance_ids: List[str], state: Optional[str] = None,
                                 zone: Optional[str] = None) -> List[Instance]:
        filters = []
        if state:
            filters.append({'Name': 'instance-state-name', 'Values': [state]})
        if zone:
            filters.append({'Name': 'availability-zone', 'Values': [zone]})

        try:
            response = await self._call('describe_instances', InstanceIds=list(instance_ids),
                                        Filters=filters)
        except AdapterError as e:
            if e.code in NOT_FOUND_CODES:
                return []
            raise

        return [
            Instance.from_aws(instance)
            for reservation in response.get('Reservations', [])
            for instance in reservation.get('Instances', [])
        ]

    async def describe_volumes(self, volume_ids: Optional[List[str]] = None,
                               filters: Optional[Dict[str, str]] = None) -> List[Volume]:
        params = {}
        if volume_ids:
            params['VolumeIds'] = list(volume_ids)
        if filters:
            params['Filters'] = [
                {'Name': name, 'Values': [value]}
                for name, value in filters.items()
            ]

        try:
            response = await self._call('describe_volumes', **params)
        except AdapterError as e:
            # A volume just created may not be visible to describe calls yet
            if e.code in VOLUME_NOT_FOUND_CODES:
                return []
            raise

        return [Volume.from_aws(v) for v in response.get('Volumes', [])]

    async def create_snapshot(self, volume_id: str, description: str) -> Snapshot:
        response = await self._call('create_snapshot', VolumeId=volume_id,
                                    Description=description)
        return Snapshot.from_aws(response)

    async def describe_snapshots(self, snapshot_ids: List[str]) -> List[Snapshot]:
        try:
            response = await self._call('describe_snapshots', SnapshotIds=list(snapshot_ids))
        except AdapterError as e:
            if e.code in SNAPSHOT_NOT_FOUND_CODES:
                return []
            raise

        return [Snapshot.from_aws(s) for s in response.get('Snapshots', [])]

    async def create_volume(self, snapshot_id: str, zone: str, volume_type: str,
                            size: int) -> Volume:
        response = await self._call(
            'create_volume',
            SnapshotId=snapshot_id,
            AvailabilityZone=zone,
            VolumeType=volume_type,
            Size=size
        )
        return Volume.from_aws(response)

    async def attach_volume(self, volume_id: str, instance_id: str, device: str) -> None:
        await self._call('attach_volume', VolumeId=volume_id, InstanceId=instance_id,
                         Device=device)

    async def detach_volume(self, volume_id: str, instance_id: str) -> None:
        await self._call('detach_volume', VolumeId=volume_id, InstanceId=instance_id)
