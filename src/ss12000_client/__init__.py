"""ss12000_client package exports."""

from .client import DEFAULT_TIMEOUT_SECONDS, SS12000Client
from .config import ClientConfig, create_client_from_env, load_env_config
from .errors import (
    ConfigurationError,
    DecodeError,
    HttpStatusError,
    SS12000ClientError,
    TransportFailure,
)
from .logging import setup_logging
from .outcome import Empty, Failure, JsonObject, JsonValue, Outcome, Success, page_token
from .query import (
    append_query,
    encode_query,
    join_url,
    parse_query,
    to_query_params,
)
from .resources import (
    ListFilters,
    LookupRequest,
    SubscriptionCreate,
    SubscriptionUpdate,
)

__all__ = [
    # Client
    "SS12000Client",
    "DEFAULT_TIMEOUT_SECONDS",
    # Config
    "ClientConfig",
    "load_env_config",
    "create_client_from_env",
    "setup_logging",
    # Outcomes
    "Outcome",
    "Success",
    "Empty",
    "Failure",
    "JsonValue",
    "JsonObject",
    "page_token",
    # Exceptions
    "SS12000ClientError",
    "ConfigurationError",
    "TransportFailure",
    "HttpStatusError",
    "DecodeError",
    # Query encoding
    "to_query_params",
    "encode_query",
    "parse_query",
    "append_query",
    "join_url",
    # Request bodies / filters
    "ListFilters",
    "LookupRequest",
    "SubscriptionCreate",
    "SubscriptionUpdate",
]
