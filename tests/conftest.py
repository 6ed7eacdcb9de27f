"""Shared fixtures for the LoR API infrastructure test suite."""

import aws_cdk as cdk
import pytest
from aws_cdk.assertions import Template

from lor_api.config.settings import Settings, get_settings
from lor_api.logging.structured import get_logger, run_id_var, stack_var
from lor_api.resources.lookup import layer_arns, table_arns
from lor_api.resources.registry import HANDLERS
from lor_api.stacks.api_gateway_stack import ApiGatewayStack

TEST_ACCOUNT = "123456789012"
TEST_REGION = "us-west-2"
SECRET_ARN = f"arn:aws:secretsmanager:{TEST_REGION}:{TEST_ACCOUNT}:secret:Riot-API-Key-AbCdEf"
REQUESTS_LAYER_ARN = f"arn:aws:lambda:{TEST_REGION}:{TEST_ACCOUNT}:layer:requests:3"
LOR_UTILITIES_LAYER_ARN = f"arn:aws:lambda:{TEST_REGION}:{TEST_ACCOUNT}:layer:lor-utilities:7"


@pytest.fixture(autouse=True)
def reset_logging():
    """Isolate the run id and logger handlers between tests."""
    run_token = run_id_var.set("")
    stack_token = stack_var.set("")
    yield
    stack_var.reset(stack_token)
    run_id_var.reset(run_token)
    get_logger().handlers.clear()


@pytest.fixture
def override_settings(monkeypatch):
    """Factory fixture: set env vars and clear settings cache.

    Usage:
        override_settings(AWS_ACCOUNT="123456789012", LAMBDA_MEMORY_MB="256")
    """
    def _override(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setenv(key.upper(), str(value))
        # Clear lru_cache so Settings re-reads env
        get_settings.cache_clear()

    yield _override

    get_settings.cache_clear()


@pytest.fixture
def handlers_dir(tmp_path) -> str:
    """One asset directory per handler, each holding a trivial module."""
    root = tmp_path / "handlers"
    for spec in HANDLERS:
        asset_dir = root / spec.asset
        asset_dir.mkdir(parents=True)
        (asset_dir / f"{spec.asset}.py").write_text(
            "def lambda_handler(event, context):\n    return event\n",
            encoding="utf-8",
        )
    return str(root)


@pytest.fixture
def deploy_settings(override_settings, handlers_dir) -> Settings:
    """Settings with every required value configured."""
    override_settings(
        AWS_ACCOUNT=TEST_ACCOUNT,
        AWS_REGION=TEST_REGION,
        RIOT_API_SECRET_ARN=SECRET_ARN,
        REQUESTS_LAYER_ARN=REQUESTS_LAYER_ARN,
        LOR_UTILITIES_LAYER_ARN=LOR_UTILITIES_LAYER_ARN,
        TABLE_NAMES="Player-Info,Player-Decks,Player-Matches",
        HANDLERS_DIR=handlers_dir,
        STACK_NAME="LoR-ApiGateway",
    )
    return get_settings()


@pytest.fixture
def stack(deploy_settings) -> ApiGatewayStack:
    app = cdk.App()
    return ApiGatewayStack(
        app,
        "TestApiGatewayStack",
        table_arns(deploy_settings),
        layer_arns(deploy_settings),
        settings=deploy_settings,
        env=cdk.Environment(account=TEST_ACCOUNT, region=TEST_REGION),
    )


@pytest.fixture
def template(stack) -> Template:
    return Template.from_stack(stack)


def as_list(value) -> list:
    """IAM collapses single-element lists to a scalar; normalize back."""
    return value if isinstance(value, list) else [value]


def table_arn_for(name: str) -> str:
    return f"arn:aws:dynamodb:{TEST_REGION}:{TEST_ACCOUNT}:table/{name}"
