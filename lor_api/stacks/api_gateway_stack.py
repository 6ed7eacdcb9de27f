"""REST API fronting the player handlers, with their roles and grants."""

import os
from collections.abc import Mapping

from aws_cdk import Duration, Stack
from aws_cdk import aws_apigateway as apigw
from aws_cdk import aws_iam as iam
from aws_cdk import aws_lambda as lambda_
from constructs import Construct

from lor_api.config.settings import Settings, get_settings
from lor_api.gateway.integration import add_endpoint
from lor_api.logging.structured import get_logger
from lor_api.resources.models import HandlerSpec
from lor_api.resources.registry import (
    ADD_PLAYER,
    ENDPOINTS,
    GET_PLAYER_ENTRIES,
    HANDLERS,
    grants_for,
)
from lor_api.security.permissions import attach_grants

LAMBDA_PRINCIPAL = "lambda.amazonaws.com"


class ApiGatewayStack(Stack):
    """Two GET endpoints, each backed by one handler function.

    Args:
        tables: table name -> DynamoDB table ARN.
        layers: layer key -> Lambda layer version ARN.
        settings: defaults to the environment-derived settings.
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        tables: Mapping[str, str],
        layers: Mapping[str, str],
        *,
        settings: Settings | None = None,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self._settings = settings or get_settings()
        self._layer_arns = dict(layers)
        self._imported_layers: dict[str, lambda_.ILayerVersion] = {}
        logger = get_logger()

        self.functions: dict[str, lambda_.Function] = {}
        for spec in HANDLERS:
            function = self._create_function(spec)
            attach_grants(function, grants_for(spec.key), tables, self._settings.riot_api_secret_arn)
            self.functions[spec.key] = function
            logger.info(
                "Declared handler",
                extra={"log_data": {
                    "function_name": spec.function_name,
                    "role_name": spec.role_name,
                    "layers": list(spec.layers),
                }},
            )

        self.api = apigw.RestApi(self, "LoR-Api", rest_api_name=self._settings.api_name)

        self.methods: dict[str, apigw.Method] = {}
        for endpoint in ENDPOINTS:
            self.methods[endpoint.path] = add_endpoint(
                self.api, self.functions[endpoint.handler_key], endpoint
            )
            logger.info(
                "Declared endpoint",
                extra={"log_data": {
                    "path": f"/{endpoint.path}",
                    "method": endpoint.method,
                    "handler": endpoint.handler_key,
                }},
            )

    @property
    def add_player_function(self) -> lambda_.Function:
        return self.functions[ADD_PLAYER]

    @property
    def get_player_entries_function(self) -> lambda_.Function:
        return self.functions[GET_PLAYER_ENTRIES]

    def _layer(self, key: str) -> lambda_.ILayerVersion:
        """Import a layer by ARN once per stack."""
        if key not in self._imported_layers:
            arn = self._layer_arns.get(key)
            if not arn:
                raise ValueError(f"Unknown layer: {key}")
            self._imported_layers[key] = lambda_.LayerVersion.from_layer_version_arn(
                self, f"Layer-{key}", arn
            )
        return self._imported_layers[key]

    def _create_function(self, spec: HandlerSpec) -> lambda_.Function:
        settings = self._settings
        role = iam.Role(
            self,
            spec.role_id,
            assumed_by=iam.ServicePrincipal(LAMBDA_PRINCIPAL),
            role_name=spec.role_name,
        )
        return lambda_.Function(
            self,
            spec.construct_id,
            runtime=lambda_.Runtime(settings.lambda_runtime, lambda_.RuntimeFamily.PYTHON),
            layers=[self._layer(key) for key in spec.layers],
            handler=spec.handler,
            code=lambda_.Code.from_asset(os.path.join(settings.handlers_dir, spec.asset)),
            memory_size=settings.lambda_memory_mb,
            tracing=lambda_.Tracing.ACTIVE,
            timeout=Duration.seconds(settings.lambda_timeout_seconds),
            function_name=spec.function_name,
            role=role,
        )
