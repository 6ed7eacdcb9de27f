"""Non-proxy Lambda integrations for the REST API.

Each endpoint maps its query string parameters into a JSON body through a
static request template and returns the handler output with CORS headers.
"""

import json
from collections.abc import Sequence

from aws_cdk import aws_apigateway as apigw
from aws_cdk import aws_lambda as lambda_

from lor_api.resources.models import EndpointSpec

JSON_CONTENT_TYPE = "application/json"
SUCCESS_STATUS = "200"

_HEADER = "method.response.header.{}"

ALLOW_HEADERS = "Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token"
ALLOW_METHODS = "OPTIONS,GET"
ALLOW_ORIGIN = "*"

# Static header values must be single-quoted for API Gateway
CORS_RESPONSE_PARAMETERS = {
    _HEADER.format("Access-Control-Allow-Headers"): f"'{ALLOW_HEADERS}'",
    _HEADER.format("Access-Control-Allow-Methods"): f"'{ALLOW_METHODS}'",
    _HEADER.format("Access-Control-Allow-Origin"): f"'{ALLOW_ORIGIN}'",
}

METHOD_RESPONSE_PARAMETERS = {
    _HEADER.format("Access-Control-Allow-Headers"): True,
    _HEADER.format("Access-Control-Allow-Methods"): True,
    _HEADER.format("Access-Control-Allow-Credentials"): True,
    _HEADER.format("Access-Control-Allow-Origin"): True,
}


def request_template(parameters: Sequence[str]) -> str:
    """Build the mapping template forwarding each query param by name.

    The output is plain JSON whose values are VTL expressions, e.g.
    {"username": "$input.params('username')"}.
    """
    return json.dumps({name: f"$input.params('{name}')" for name in parameters}, indent=2)


def build_integration(function: lambda_.IFunction, endpoint: EndpointSpec) -> apigw.LambdaIntegration:
    return apigw.LambdaIntegration(
        function,
        proxy=False,
        passthrough_behavior=apigw.PassthroughBehavior.NEVER,
        request_templates={JSON_CONTENT_TYPE: request_template(endpoint.parameters)},
        integration_responses=[
            apigw.IntegrationResponse(
                status_code=SUCCESS_STATUS,
                response_parameters=dict(CORS_RESPONSE_PARAMETERS),
            )
        ],
    )


def add_endpoint(
    api: apigw.RestApi, function: lambda_.IFunction, endpoint: EndpointSpec
) -> apigw.Method:
    """Add the endpoint's resource under the API root and wire its method."""
    resource = api.root.add_resource(endpoint.path)
    return resource.add_method(
        endpoint.method,
        build_integration(function, endpoint),
        method_responses=[
            apigw.MethodResponse(
                status_code=SUCCESS_STATUS,
                response_parameters=dict(METHOD_RESPONSE_PARAMETERS),
            )
        ],
    )
