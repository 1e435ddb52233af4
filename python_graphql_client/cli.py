import json
import logging
import os
import sys

from contextlib import ExitStack
from typing import Any, List, Optional

import click
import yaml

from graphql import GraphQLSyntaxError, parse

import python_graphql_client

from .client import Client
from .context import Context
from .errors import GraphQLClientError
from .request import Request
from .types import Config
from .utils import parse_header, parse_variable, split_key_value

DEFAULT_CONFIG: Config = {
    "use_multipart_form": False,
    "headers": {},
}


def load_config_file(config_file: Optional[str]) -> Config:
    config: Config = {**DEFAULT_CONFIG, "headers": dict(DEFAULT_CONFIG["headers"])}
    if not config_file:
        return config
    try:
        with open(config_file) as fp:
            loaded = yaml.safe_load(fp) or {}
    except (OSError, yaml.YAMLError) as err:
        raise click.BadParameter(str(err), param_hint="--config") from err
    if not isinstance(loaded, dict):
        raise click.BadParameter("config file must hold a mapping", param_hint="--config")
    if loaded.get("headers") is None:
        loaded.pop("headers", None)
    elif not isinstance(loaded["headers"], dict):
        raise click.BadParameter("headers must be a mapping", param_hint="--config")
    config.update(loaded)  # type: ignore
    return config


def read_query(query: str) -> str:
    if query == "-":
        return sys.stdin.read()
    with open(query, "r", encoding="utf-8") as fp:
        return fp.read()


def build_request(query: str, variables: List[str], headers: List[str], config: Config) -> Request:
    request = Request(query)
    for name, value in config.get("headers", {}).items():
        request.header[name] = value
    for header in headers:
        name, value = parse_header(header)
        request.header[name] = value
    for variable in variables:
        name, value = parse_variable(variable)
        request.var(name, value)
    return request


def run(client: Client, request: Request, timeout: Optional[float] = None) -> Any:
    response: dict = {}
    ctx = Context.background()
    if timeout:
        ctx = ctx.with_timeout(timeout)
    with ctx:
        client.run(request, response, ctx=ctx)
    return response


@click.command()
@click.option("-e", "--endpoint", help="graphql endpoint url", type=str)
@click.option(
    "-q",
    "--query",
    help="path of the file holding the query, '-' reads stdin",
    type=str,
    required=True,
)
@click.option("-v", "--var", "variables", help="variable as name=value, value may be JSON", multiple=True)
@click.option("-F", "--file", "files", help="file to upload as field=path", multiple=True)
@click.option("-H", "--header", "headers", help="request header as 'Name: value'", multiple=True)
@click.option("-m", "--multipart", help="send as multipart/form-data", is_flag=True)
@click.option("-t", "--timeout", help="seconds before the request is abandoned", type=float)
@click.option("-c", "--config", help="path where config yaml file", type=str)
@click.option("--verbose", help="log the exchange to stderr", is_flag=True)
@click.version_option(python_graphql_client.__version__, "--version")
def cli(
    endpoint: Optional[str],
    query: str,
    variables: List[str],
    files: List[str],
    headers: List[str],
    multipart: bool,
    timeout: Optional[float],
    config: Optional[str],
    verbose: bool,
):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    config_data = load_config_file(config)
    endpoint = endpoint or config_data.get("endpoint")
    if not endpoint:
        raise click.UsageError("endpoint must be required")
    multipart = multipart or config_data.get("use_multipart_form", False)
    if timeout is None:
        timeout = config_data.get("timeout")

    try:
        query_str = read_query(query)
    except OSError as err:
        raise click.BadParameter(str(err), param_hint="--query") from err
    try:
        parse(query_str)
    except GraphQLSyntaxError as err:
        raise click.ClickException(str(err)) from err

    try:
        request = build_request(query_str, variables, headers, config_data)
        uploads = [split_key_value(f) for f in files]
    except ValueError as err:
        raise click.BadParameter(str(err)) from err

    with ExitStack() as stack:
        for field, path in uploads:
            try:
                fp = stack.enter_context(open(path, "rb"))
            except OSError as err:
                raise click.BadParameter(str(err), param_hint="--file") from err
            request.file(field, os.path.basename(path), fp)
        client = Client(endpoint, use_multipart_form=multipart)
        try:
            response = run(client, request, timeout=timeout)
        except GraphQLClientError as err:
            raise click.ClickException(str(err)) from err

    click.echo(json.dumps(response, indent=2, ensure_ascii=False))


def main():
    # pylint: disable=no-value-for-parameter
    cli()  # noqa


if __name__ == "__main__":
    main()
