"""CDK app entry point. `cdk synth` runs this via cdk.json."""

import aws_cdk as cdk
from pydantic import ValidationError

from lor_api.config.settings import Settings, get_settings
from lor_api.logging.structured import configure_logging, stack_var, start_run, timed_synth
from lor_api.resources.lookup import layer_arns, table_arns, validate_settings
from lor_api.stacks.api_gateway_stack import ApiGatewayStack


def build_app(settings: Settings | None = None) -> cdk.App:
    """Validate settings and declare the API gateway stack on a new app."""
    settings = settings or get_settings()
    validate_settings(settings)

    app = cdk.App()
    ApiGatewayStack(
        app,
        settings.stack_name,
        table_arns(settings),
        layer_arns(settings),
        settings=settings,
        env=cdk.Environment(account=settings.aws_account, region=settings.aws_region),
    )
    return app


def main() -> None:
    start_run()

    try:
        settings = get_settings()
    except ValidationError:
        # Settings drive handler config; fall back to stdout at the default level
        configure_logging().exception("Synthesis failed", extra={"log_data": {"phase": "settings"}})
        raise

    logger = configure_logging(settings.log_level, settings.log_file)
    stack_var.set(settings.stack_name)

    try:
        with timed_synth() as timing:
            build_app(settings).synth()
    except Exception:
        logger.exception(
            "Synthesis failed",
            extra={"log_data": {"phase": "synth", "elapsed_ms": timing.elapsed_ms}},
        )
        raise

    logger.info(
        "Synthesized stack",
        extra={"log_data": {
            "account": settings.aws_account,
            "region": settings.aws_region,
            "elapsed_ms": timing.elapsed_ms,
        }},
    )


if __name__ == "__main__":
    main()
