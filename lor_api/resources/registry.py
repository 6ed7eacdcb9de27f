"""Topology registry: every handler, endpoint and grant the stack declares."""

from lor_api.resources.models import EndpointSpec, GrantSpec, HandlerSpec
from lor_api.security.permissions import (
    SECRET_READ_ACTIONS,
    TABLE_SCAN_ACTIONS,
    TABLE_WRITE_ACTIONS,
)

ADD_PLAYER = "add-player"
GET_PLAYER_ENTRIES = "get-player-entries"

PLAYER_INFO = "Player-Info"
PLAYER_DECKS = "Player-Decks"
PLAYER_MATCHES = "Player-Matches"

HANDLERS: tuple[HandlerSpec, ...] = (
    HandlerSpec(
        key=ADD_PLAYER,
        construct_id="LoR-Add-Player",
        function_name="LoR-Add-Player-To-List",
        role_id="LoR-Add-Player-To-List",
        role_name="LoR-Add-Player-To-List",
        asset="add-player-to-list",
        layers=("requests", "lor-utilities"),
    ),
    HandlerSpec(
        key=GET_PLAYER_ENTRIES,
        construct_id="LoR-Get-Player-Entries",
        function_name="LoR-Get-Player-Entries",
        role_id="LoR-Get-Player-Entries-Role",
        role_name="LoR-Get-Player-Entries",
        asset="get-player-entries",
    ),
)

ENDPOINTS: tuple[EndpointSpec, ...] = (
    EndpointSpec(path="AddPlayer", handler_key=ADD_PLAYER, parameters=("username", "region")),
    EndpointSpec(
        path="getPlayerEntries",
        handler_key=GET_PLAYER_ENTRIES,
        parameters=("entry_amount", "scope"),
    ),
)

GRANTS: tuple[GrantSpec, ...] = (
    GrantSpec(handler_key=ADD_PLAYER, resource_kind="secret", actions=SECRET_READ_ACTIONS),
    GrantSpec(
        handler_key=ADD_PLAYER,
        resource_kind="table",
        actions=TABLE_WRITE_ACTIONS,
        resource_names=(PLAYER_INFO, PLAYER_DECKS, PLAYER_MATCHES),
    ),
    GrantSpec(
        handler_key=GET_PLAYER_ENTRIES,
        resource_kind="table",
        actions=TABLE_SCAN_ACTIONS,
        resource_names=(PLAYER_INFO,),
    ),
)


def get_handler(key: str) -> HandlerSpec:
    """Look up a handler by key."""
    for spec in HANDLERS:
        if spec.key == key:
            return spec
    raise ValueError(f"Unknown handler: {key}")


def get_endpoint(path: str) -> EndpointSpec:
    for spec in ENDPOINTS:
        if spec.path == path.lstrip("/"):
            return spec
    raise ValueError(f"Unknown endpoint: {path}")


def grants_for(handler_key: str) -> list[GrantSpec]:
    return [g for g in GRANTS if g.handler_key == handler_key]
