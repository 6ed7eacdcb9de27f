"""Least-privilege IAM statements for the handler roles.

Each grant becomes exactly one statement naming exactly the resources and
actions it declares. No wildcards, no managed policies.
"""

from collections.abc import Iterable, Mapping

from aws_cdk import aws_iam as iam
from aws_cdk import aws_lambda as lambda_

from lor_api.resources.models import GrantSpec

SECRET_READ_ACTIONS = ("secretsmanager:DescribeSecret", "secretsmanager:GetSecretValue")
TABLE_WRITE_ACTIONS = ("dynamodb:PutItem",)
TABLE_SCAN_ACTIONS = ("dynamodb:Scan",)


def resolve_resources(grant: GrantSpec, tables: Mapping[str, str], secret_arn: str) -> list[str]:
    """Turn a grant's resource names into ARNs."""
    if grant.resource_kind == "secret":
        if not secret_arn:
            raise ValueError("Secret ARN is required for secret grants")
        return [secret_arn]

    if grant.resource_kind == "table":
        arns = []
        for name in grant.resource_names:
            if name not in tables:
                raise ValueError(f"Unknown table: {name}")
            arns.append(tables[name])
        return arns

    raise ValueError(f"Unknown resource kind: {grant.resource_kind}")


def build_statement(grant: GrantSpec, tables: Mapping[str, str], secret_arn: str) -> iam.PolicyStatement:
    return iam.PolicyStatement(
        effect=iam.Effect.ALLOW,
        resources=resolve_resources(grant, tables, secret_arn),
        actions=list(grant.actions),
    )


def attach_grants(
    function: lambda_.IFunction,
    grants: Iterable[GrantSpec],
    tables: Mapping[str, str],
    secret_arn: str,
) -> list[iam.PolicyStatement]:
    """Add one statement per grant to the function's role policy."""
    statements = []
    for grant in grants:
        statement = build_statement(grant, tables, secret_arn)
        function.add_to_role_policy(statement)
        statements.append(statement)
    return statements
