"""AWS EC2 compute backend."""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError, EndpointConnectionError

from stratus.errors import (
    ResourceMissingError,
    TransientProviderError,
    UnhandledProviderError,
)
from stratus.models.instance import Instance, InstanceRequest, InstanceState, Subnet
from stratus.providers.base import ComputeProvider, ImageLookup


logger = logging.getLogger(__name__)

MISSING_ERROR_CODES = frozenset({
    "InvalidInstanceID.NotFound",
    "InvalidSubnetID.NotFound",
    "InvalidVolume.NotFound",
    "InvalidAMIID.NotFound",
    "InvalidAddress.NotFound",
})

TRANSIENT_ERROR_CODES = frozenset({
    "RequestLimitExceeded",
    "Throttling",
    "InternalError",
    "Unavailable",
    "ServiceUnavailable",
    "InsufficientInstanceCapacity",
})


def translate_error(error: Exception, context: str) -> Exception:
    """Map a botocore error onto the adapter's provider errors."""
    if isinstance(error, ClientError):
        code = error.response.get("Error", {}).get("Code", "")
        message = f"{context}: {code}: {error}"
        if code in MISSING_ERROR_CODES:
            return ResourceMissingError(message)
        if code in TRANSIENT_ERROR_CODES:
            return TransientProviderError(message)
        return UnhandledProviderError(message)
    if isinstance(error, EndpointConnectionError):
        return TransientProviderError(f"{context}: {error}")
    return UnhandledProviderError(f"{context}: {error}")


class Ec2ComputeProvider(ComputeProvider, ImageLookup):
    """Compute provider backed by the EC2 API."""

    def __init__(
        self,
        region: str = "us-east-1",
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        client: Any = None,
    ):
        """Initialize EC2 provider; the client is created on first use."""
        self.region = region
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key
        self.endpoint_url = endpoint_url
        self._client = client

    @property
    def client(self) -> Any:
        """boto3 EC2 client."""
        if self._client is None:
            self._client = boto3.client(
                "ec2",
                region_name=self.region,
                aws_access_key_id=self.access_key_id,
                aws_secret_access_key=self.secret_access_key,
                endpoint_url=self.endpoint_url,
            )
        return self._client

    async def _call(self, context: str, method: Callable[..., Dict[str, Any]], **kwargs: Any) -> Dict[str, Any]:
        """Run a blocking SDK call in a thread and translate its errors."""
        try:
            return await asyncio.to_thread(method, **kwargs)
        except (ClientError, BotoCoreError) as e:
            raise translate_error(e, context) from e

    async def create_instance(self, request: InstanceRequest) -> str:
        """Submit RunInstances."""
        params = self._run_instances_params(request)
        logger.debug(f"run_instances: {params}")
        response = await self._call("run_instances", self.client.run_instances, **params)
        instance_id = response["Instances"][0]["InstanceId"]
        logger.info(f"Submitted EC2 instance {instance_id}")
        return instance_id

    def _run_instances_params(self, request: InstanceRequest) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "ImageId": request.image_id,
            "InstanceType": request.instance_type,
            "MinCount": 1,
            "MaxCount": 1,
            "UserData": request.user_data,
        }

        if request.block_device_mappings:
            params["BlockDeviceMappings"] = [
                self._block_device_mapping(mapping) for mapping in request.block_device_mappings
            ]
        if request.availability_zone is not None:
            params["Placement"] = {"AvailabilityZone": request.availability_zone}
        if request.key_name is not None:
            params["KeyName"] = request.key_name

        if request.vpc:
            params["SubnetId"] = request.subnet_id
            if request.private_ip_address is not None:
                params["PrivateIpAddress"] = request.private_ip_address
            if request.security_groups:
                params["SecurityGroupIds"] = list(request.security_groups)
        elif request.security_groups:
            params["SecurityGroups"] = list(request.security_groups)

        return params

    @staticmethod
    def _block_device_mapping(mapping) -> Dict[str, Any]:
        entry: Dict[str, Any] = {"DeviceName": mapping.device_name}
        if mapping.virtual_name is not None:
            entry["VirtualName"] = mapping.virtual_name
        if mapping.delete_on_termination is not None:
            entry["Ebs"] = {"DeleteOnTermination": mapping.delete_on_termination}
        return entry

    async def get_instance(self, instance_id: str) -> Instance:
        """Describe a single instance."""
        response = await self._call(
            f"describe_instances {instance_id}",
            self.client.describe_instances,
            InstanceIds=[instance_id],
        )
        instances: List[Dict[str, Any]] = [
            instance
            for reservation in response.get("Reservations", [])
            for instance in reservation.get("Instances", [])
        ]
        if not instances:
            raise ResourceMissingError(f"Instance {instance_id} not found")

        data = instances[0]
        return Instance(
            id=data["InstanceId"],
            state=InstanceState(data["State"]["Name"]),
            floating_address=data.get("PublicIpAddress"),
            availability_zone=data.get("Placement", {}).get("AvailabilityZone"),
        )

    async def terminate_instance(self, instance_id: str) -> None:
        """Submit TerminateInstances."""
        await self._call(
            f"terminate_instances {instance_id}",
            self.client.terminate_instances,
            InstanceIds=[instance_id],
        )

    async def reboot_instance(self, instance_id: str) -> None:
        """Submit RebootInstances."""
        await self._call(
            f"reboot_instances {instance_id}",
            self.client.reboot_instances,
            InstanceIds=[instance_id],
        )

    async def associate_floating_address(self, instance_id: str, address: str) -> None:
        """Associate an elastic IP, reusing an existing association."""
        response = await self._call(
            f"describe_addresses {address}",
            self.client.describe_addresses,
            PublicIps=[address],
        )
        addresses = response.get("Addresses", [])
        if not addresses:
            raise ResourceMissingError(f"Elastic IP {address} not found")

        allocation = addresses[0]
        if allocation.get("InstanceId") == instance_id:
            logger.debug(f"Elastic IP {address} already associated with {instance_id}")
            return

        if allocation.get("AllocationId"):
            params = {
                "InstanceId": instance_id,
                "AllocationId": allocation["AllocationId"],
                "AllowReassociation": True,
            }
        else:
            params = {"InstanceId": instance_id, "PublicIp": address}

        await self._call(
            f"associate_address {address} -> {instance_id}",
            self.client.associate_address,
            **params,
        )
        logger.info(f"Associated elastic IP {address} with {instance_id}")

    async def lookup_subnet(self, subnet_id: str) -> Subnet:
        """Describe a subnet."""
        response = await self._call(
            f"describe_subnets {subnet_id}",
            self.client.describe_subnets,
            SubnetIds=[subnet_id],
        )
        subnets = response.get("Subnets", [])
        if not subnets:
            raise ResourceMissingError(f"Subnet {subnet_id} not found")
        return Subnet(id=subnets[0]["SubnetId"], availability_zone=subnets[0].get("AvailabilityZone"))

    async def get_disk_zone(self, disk_id: str) -> str:
        """Return the availability zone of an EBS volume."""
        response = await self._call(
            f"describe_volumes {disk_id}",
            self.client.describe_volumes,
            VolumeIds=[disk_id],
        )
        volumes = response.get("Volumes", [])
        if not volumes:
            raise ResourceMissingError(f"Disk {disk_id} not found")
        return volumes[0]["AvailabilityZone"]

    async def root_device_name(self, image_id: str) -> str:
        """Return the root device name of an AMI."""
        response = await self._call(
            f"describe_images {image_id}",
            self.client.describe_images,
            ImageIds=[image_id],
        )
        images = response.get("Images", [])
        if not images:
            raise ResourceMissingError(f"Image {image_id} not found")
        return images[0]["RootDeviceName"]
