from typing import Any, TypedDict

from botocore.client import BaseClient


# API Gateway (Lambda proxy integration)
type LambdaEvent = dict[str, Any]
type LambdaContext = Any
type LambdaResponse = dict[str, Any]

# Configuration: the whole AppConfig/YAML document, and the slice one Lambda sees
type ConfigDocument = dict[str, Any]
type LambdaConfiguration = dict[str, Any]


class ShortenerSection(TypedDict, total=False):
    base_url: str
    shortcode_length: int
    alphabet: str
    max_allocation_attempts: int


# Redis returns hash fields as strings (decode_responses=True)
type RedisHash = dict[str, str]


class ShortURLPayload(TypedDict):
    shortCode: str
    originalUrl: str
    ownerId: str | None
    clicks: int
    createdAt: str


# boto3 clients are generated at runtime
type AppConfigDataClient = BaseClient
