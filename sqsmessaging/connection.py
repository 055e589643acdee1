"""Connection factory and connection."""

import os
from collections import deque
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import NoRegionError
from pydantic import ConfigDict, validate_call

from sqsmessaging.acknowledge.ids import BatchIdGenerator
from sqsmessaging.acknowledge.negative import NegativeAcknowledger
from sqsmessaging.acknowledge.positive import Acknowledger
from sqsmessaging.acknowledge.retry import RetryMode, RetryPolicy
from sqsmessaging.clients.base import QueueClient
from sqsmessaging.clients.sqs import SQSClient
from sqsmessaging.constants import APPENDED_USER_AGENT, MIN_BATCH
from sqsmessaging.datastructures import BatchResult, PendingItem
from sqsmessaging.exceptions import ConfigurationError
from sqsmessaging.logger import logger


class SQSConnection:
    """Holds the backend client and the acknowledgement settings of one connection.

    The retry policy is shared read-only by every negative acknowledger of the
    connection, and the batch id generator is owned by the connection.

    The factory builds connections around an `SQSClient`, but any `QueueClient`
    works, e.g. `SQSConnection(client=PubSubClient(), retry_policy=RetryPolicy())`.
    """

    def __init__(
        self,
        client: QueueClient,
        retry_policy: RetryPolicy,
        prefetch_size: int = MIN_BATCH,
    ) -> None:
        self.client = client
        self.retry_policy = retry_policy
        self.prefetch_size = prefetch_size
        self.batch_id_generator = BatchIdGenerator()

    def negative_acknowledger(self) -> NegativeAcknowledger:
        return NegativeAcknowledger(
            client=self.client,
            retry_policy=self.retry_policy,
            batch_id_generator=self.batch_id_generator,
        )

    def acknowledger(self) -> Acknowledger:
        return Acknowledger(client=self.client, batch_id_generator=self.batch_id_generator)

    def nack(self, items: deque[PendingItem], destination: str) -> list[BatchResult]:
        return self.negative_acknowledger().bulk_action(items, destination)

    def ack(self, items: deque[PendingItem], destination: str) -> list[BatchResult]:
        return self.acknowledger().bulk_action(items, destination)


class SQSConnectionFactory:
    @validate_call(config=ConfigDict(strict=True, arbitrary_types_allowed=True))
    def __init__(
        self,
        *,
        region_name: str | None = None,
        endpoint_url: str | None = None,
        retry_mode: RetryMode = RetryMode.DEFAULT_DELAY,
        retry_delay: int = 0,
        prefetch_size: int = MIN_BATCH,
        sqs_client: Any = None,
        client_config: Config | None = None,
    ) -> None:
        if prefetch_size <= 0:
            raise ConfigurationError("Invalid prefetch size.")

        self.region_name = region_name
        self.endpoint_url = endpoint_url
        self.prefetch_size = prefetch_size
        self.sqs_client = sqs_client
        self.client_config = client_config
        self.retry_policy = RetryPolicy(mode=retry_mode, delay=retry_delay)

    @classmethod
    def from_env(cls) -> "SQSConnectionFactory":
        """Builds a factory from the SQSMESSAGING_* environment variables."""
        retry_mode_text = os.getenv("SQSMESSAGING_RETRY_MODE", RetryMode.DEFAULT_DELAY.value)
        try:
            retry_mode = RetryMode(retry_mode_text.strip().lower())
            retry_delay = int(os.getenv("SQSMESSAGING_RETRY_DELAY", 0))
            prefetch_size = int(os.getenv("SQSMESSAGING_PREFETCH_SIZE", MIN_BATCH))
        except ValueError as e:
            raise ConfigurationError(f"Invalid environment configuration: {e}") from e

        return cls(
            region_name=os.getenv("AWS_DEFAULT_REGION") or None,
            endpoint_url=os.getenv("SQSMESSAGING_ENDPOINT_URL") or None,
            retry_mode=retry_mode,
            retry_delay=retry_delay,
            prefetch_size=prefetch_size,
        )

    def create_connection(
        self,
        aws_access_key_id: str | None = None,
        aws_secret_access_key: str | None = None,
    ) -> SQSConnection:
        if (aws_access_key_id is None) != (aws_secret_access_key is None):
            raise ConfigurationError(
                "Both the access key id and the secret access key must be given."
            )

        if self.sqs_client is None:
            self.sqs_client = self._create_sqs_client(aws_access_key_id, aws_secret_access_key)

        logger.debug(
            f"Creating connection with retry mode {self.retry_policy.mode.name} "
            f"and prefetch size {self.prefetch_size}."
        )
        return SQSConnection(
            client=SQSClient(self.sqs_client),
            retry_policy=self.retry_policy,
            prefetch_size=self.prefetch_size,
        )

    def _create_sqs_client(
        self, aws_access_key_id: str | None, aws_secret_access_key: str | None
    ) -> Any:
        try:
            return boto3.client(
                "sqs",
                region_name=self.region_name,
                endpoint_url=self.endpoint_url,
                aws_access_key_id=aws_access_key_id,
                aws_secret_access_key=aws_secret_access_key,
                config=self._build_client_config(),
            )
        except ValueError as e:
            raise ConfigurationError(f"Bad endpoint configuration: {e}") from e
        except NoRegionError as e:
            raise ConfigurationError(
                "No region configured, set region_name or AWS_DEFAULT_REGION."
            ) from e

    def _build_client_config(self) -> Config:
        """Appends the library user agent to the caller's botocore configuration."""
        client_config = self.client_config or Config()
        user_agent_extra = APPENDED_USER_AGENT
        if client_config.user_agent_extra:
            user_agent_extra = f"{client_config.user_agent_extra} {APPENDED_USER_AGENT}"

        return client_config.merge(Config(user_agent_extra=user_agent_extra))
