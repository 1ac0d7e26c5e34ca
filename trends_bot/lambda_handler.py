"""Main Lambda handler for Trends Slack Bot."""

import base64
import binascii
import json
from datetime import UTC, datetime
from typing import Any

import boto3
from botocore.exceptions import ClientError

from .config import Config, SlackConfig
from .errors import ConfigurationError
from .formatter import AttachmentFormatter
from .handler import EventHandler
from .logging_config import create_execution_logger, setup_structured_logging
from .models import HandlerResponse
from .region import get_region_extractor
from .slack import SlackPublisher
from .trends import TrendsFeedClient

SECRET_TOKEN_KEYS = ("token", "bot_token", "slack_token", "oauth_access_token")


def get_slack_token(secret_name: str, aws_region: str, execution_id: str) -> str:
    """
    Retrieve the Slack bot token from AWS Secrets Manager.

    Supports both plain string and JSON object secrets. The token value is
    never logged.

    Args:
        secret_name: Name of the secret in Secrets Manager
        aws_region: AWS region for Secrets Manager client
        execution_id: Execution ID for logging context

    Returns:
        Slack bot token

    Raises:
        ConfigurationError: If the secret cannot be retrieved or holds no token
    """
    secrets_logger = create_execution_logger("secrets_manager", execution_id)

    if not aws_region or not aws_region.strip():
        raise ConfigurationError("AWS region cannot be empty")

    try:
        secrets_logger.info(
            f"Retrieving Slack token from Secrets Manager: {secret_name}"
        )
        secrets_client = boto3.client("secretsmanager", region_name=aws_region)
        response = secrets_client.get_secret_value(SecretId=secret_name)
    except ClientError as e:
        error_code = e.response.get("Error", {}).get("Code", "Unknown")
        secrets_logger.error(
            f"AWS Secrets Manager error retrieving {secret_name}: {error_code}"
        )
        raise ConfigurationError(f"Failed to retrieve secret {secret_name}") from e

    secret_value = response.get("SecretString", "")
    if not secret_value or not secret_value.strip():
        raise ConfigurationError(f"Secret {secret_name} contains empty value")

    try:
        secret_data = json.loads(secret_value)
    except json.JSONDecodeError:
        secrets_logger.info("Retrieved token from plain text secret")
        return secret_value.strip()

    if not isinstance(secret_data, dict):
        raise ConfigurationError(f"JSON secret {secret_name} must be an object")

    for key in SECRET_TOKEN_KEYS:
        value = secret_data.get(key)
        if isinstance(value, str) and value.strip():
            secrets_logger.info("Retrieved token from JSON secret", secret_key=key)
            return value.strip()

    raise ConfigurationError(f"No Slack token found in JSON secret {secret_name}")


def load_slack_config(config: Config, execution_id: str) -> SlackConfig:
    """Resolve the bot token once and freeze it into a SlackConfig.

    Raises:
        ConfigurationError: If neither OAUTH_ACCESS_TOKEN nor
            SLACK_SECRET_NAME yields a token
    """
    token = config.slack_token
    if not token and config.slack_secret_name:
        token = get_slack_token(config.slack_secret_name, config.aws_region, execution_id)
    return config.get_slack_config(token)


def build_event_handler(
    config: Config, slack_config: SlackConfig, execution_id: str
) -> EventHandler:
    """Wire the per-request components."""
    return EventHandler(
        feed_client=TrendsFeedClient(config.get_feed_config(), execution_id=execution_id),
        formatter=AttachmentFormatter(config.attachment_style),
        publisher=SlackPublisher(slack_config, execution_id=execution_id),
        extract_region=get_region_extractor(config.region_extraction),
        execution_id=execution_id,
    )


def request_body(event: dict[str, Any]) -> str | bytes:
    """Extract the raw request body from an API Gateway or function URL event.

    A direct invocation without an HTTP envelope is treated as the payload.
    """
    if "body" not in event:
        return json.dumps(event)

    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError):
            # Left undecoded, the JSON decode step reports it as a bad body
            return body
    return body


def to_http_response(response: HandlerResponse) -> dict[str, Any]:
    return {
        "statusCode": response.status_code,
        "headers": {"Content-Type": "text/plain; charset=utf-8"},
        "body": response.body,
    }


# Process startup: configure logging and load the credential once, failing
# the Lambda init when it is missing.
CONFIG = Config()
setup_structured_logging(CONFIG.log_level)
SLACK_CONFIG = load_slack_config(CONFIG, "startup")


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """
    Lambda entry point for the Slack event webhook.

    Args:
        event: API Gateway proxy or function URL event
        context: Lambda context object

    Returns:
        HTTP response dictionary
    """
    execution_id = getattr(context, "aws_request_id", None) or (
        f"lambda_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"
    )
    main_logger = create_execution_logger("main", execution_id)
    main_logger.log_execution_start(
        lambda_function_name=getattr(context, "function_name", "unknown"),
    )

    try:
        handler = build_event_handler(CONFIG, SLACK_CONFIG, execution_id)
        response = handler.handle(request_body(event))
    except Exception as e:
        main_logger.exception(f"Critical error in Lambda handler: {e}", error=str(e))
        main_logger.log_execution_end(success=False)
        return to_http_response(HandlerResponse(500, "internal error"))

    main_logger.log_execution_end(
        success=response.status_code == 200, status_code=response.status_code
    )
    return to_http_response(response)
