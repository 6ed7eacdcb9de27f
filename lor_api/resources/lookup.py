"""Resolve externally managed resources (tables, layers) from settings."""

from lor_api.config.settings import Settings

REQUESTS_LAYER = "requests"
LOR_UTILITIES_LAYER = "lor-utilities"


def validate_settings(settings: Settings) -> None:
    """Raise ValueError listing every required value that is not configured."""
    missing = []
    if not settings.aws_account:
        missing.append("AWS_ACCOUNT")
    if not settings.riot_api_secret_arn:
        missing.append("RIOT_API_SECRET_ARN")
    if not settings.requests_layer_arn:
        missing.append("REQUESTS_LAYER_ARN")
    if not settings.lor_utilities_layer_arn:
        missing.append("LOR_UTILITIES_LAYER_ARN")
    if not settings.table_names_list:
        missing.append("TABLE_NAMES")

    if missing:
        raise ValueError(f"Missing required settings: {', '.join(missing)}")


def table_arn(name: str, region: str, account: str) -> str:
    return f"arn:aws:dynamodb:{region}:{account}:table/{name}"


def table_arns(settings: Settings) -> dict[str, str]:
    """Map each configured table name to its DynamoDB ARN."""
    return {
        name: table_arn(name, settings.aws_region, settings.aws_account)
        for name in settings.table_names_list
    }


def layer_arns(settings: Settings) -> dict[str, str]:
    return {
        REQUESTS_LAYER: settings.requests_layer_arn,
        LOR_UTILITIES_LAYER: settings.lor_utilities_layer_arn,
    }
