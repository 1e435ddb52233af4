import enum
import typing

import strawberry


@strawberry.enum
class Episode(enum.Enum):
    NEWHOPE = "NEWHOPE"
    EMPIRE = "EMPIRE"
    JEDI = "JEDI"


@strawberry.type
class Character:
    id: strawberry.ID
    name: str
    appears_in: typing.List[Episode]


character_map: typing.Dict[Episode, Character] = {
    Episode.NEWHOPE: Character(id=strawberry.ID("h-1"), name="luke", appears_in=[Episode.NEWHOPE, Episode.EMPIRE]),
    Episode.EMPIRE: Character(
        id=strawberry.ID("h-2"), name="obi", appears_in=[Episode.NEWHOPE, Episode.EMPIRE, Episode.JEDI]
    ),
    Episode.JEDI: Character(id=strawberry.ID("d-1"), name="C-3PO", appears_in=[Episode.NEWHOPE]),
}


@strawberry.type
class Query:
    @strawberry.field
    def hello(self) -> str:
        return "hello world"

    @strawberry.field
    def hero(self, episode: Episode) -> Character:
        return character_map[episode]

    @strawberry.field
    def fail(self) -> str:
        raise Exception("this field always fails")


schema = strawberry.Schema(query=Query)

# run server
# $ python -m strawberry server graphql_server:schema
