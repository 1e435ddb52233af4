from dataclasses import dataclass
from typing import IO, Any, Dict, List, Optional, Union

from graphql import DocumentNode, print_ast
from requests.structures import CaseInsensitiveDict


@dataclass(frozen=True)
class File:
    field: str
    name: str
    reader: IO[Any]


class Request:
    """A GraphQL request.

    Files are only sent by a client created with ``use_multipart_form=True``;
    any other client refuses to run a request carrying files.
    """

    def __init__(self, query: Union[str, DocumentNode]):
        if isinstance(query, DocumentNode):
            query = print_ast(query)
        self._query: str = query
        self._vars: Optional[Dict[str, Any]] = None
        self._files: List[File] = []
        self.header: CaseInsensitiveDict = CaseInsensitiveDict()

    def var(self, key: str, value: Any) -> None:
        if self._vars is None:
            self._vars = {}
        self._vars[key] = value

    def file(self, fieldname: str, filename: str, reader: IO[Any]) -> None:
        self._files.append(File(field=fieldname, name=filename, reader=reader))

    @property
    def query(self) -> str:
        return self._query

    @property
    def vars(self) -> Optional[Dict[str, Any]]:
        return self._vars

    @property
    def files(self) -> List[File]:
        return self._files
