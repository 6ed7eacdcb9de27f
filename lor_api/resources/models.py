"""Declarative descriptions of the handlers, endpoints and grants."""

from dataclasses import dataclass


@dataclass(frozen=True)
class HandlerSpec:
    key: str
    construct_id: str
    function_name: str
    role_id: str
    role_name: str
    asset: str  # directory under handlers_dir, also the handler module name
    layers: tuple[str, ...] = ()  # keys into the layer ARN map

    @property
    def handler(self) -> str:
        return f"{self.asset}.lambda_handler"


@dataclass(frozen=True)
class EndpointSpec:
    path: str
    handler_key: str
    parameters: tuple[str, ...]  # query string params forwarded to the handler
    method: str = "GET"


@dataclass(frozen=True)
class GrantSpec:
    handler_key: str
    resource_kind: str  # "secret" | "table"
    actions: tuple[str, ...]
    resource_names: tuple[str, ...] = ()  # table names; unused for the secret
