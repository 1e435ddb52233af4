"""Queries the example server.

$ python -m strawberry server graphql_server:schema
$ python client_example.py
"""
import logging

from dataclasses import dataclass, field
from typing import Any, Dict

from python_graphql_client import Client, Context, Request, ServerError

ENDPOINT = "http://localhost:8000/graphql"


@dataclass
class HeroResponse:
    hero: Dict[str, Any] = field(default_factory=dict)


def main():
    logging.basicConfig(level=logging.DEBUG)
    client = Client(ENDPOINT)

    request = Request(
        """
        query GetHero($e: Episode!) {
            hero(episode: $e) { id name appearsIn }
        }
        """
    )
    request.var("e", "JEDI")
    response = HeroResponse()
    with Context.background().with_timeout(5) as ctx:
        client.run(request, response, ctx=ctx)
    print(response.hero)

    try:
        client.run(Request("query { hello fail }"), {})
    except ServerError as err:
        print(err, err.path)


if __name__ == "__main__":
    main()
