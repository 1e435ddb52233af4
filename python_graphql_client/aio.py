"asyncio flavour of the client, running requests through aiohttp"
import asyncio

from typing import Any, Optional, Tuple

import aiohttp

from .client import BaseClient, LogFunc
from .context import Context
from .encoding import encode_json_body, encode_variables, read_files
from .errors import DeadlineExceededError, TransportError
from .request import Request
from .response import decode_response


class AsyncClient(BaseClient):
    """GraphQL client for asyncio applications.

    A ``session`` given here is used for every call and left open; without
    one a session is opened and closed around each call.
    """

    def __init__(
        self,
        endpoint: str,
        session: Optional[aiohttp.ClientSession] = None,
        use_multipart_form: bool = False,
        log: Optional[LogFunc] = None,
    ):
        super().__init__(endpoint, use_multipart_form=use_multipart_form, log=log)
        self.session = session

    async def run(self, request: Request, response: Any = None, ctx: Optional[Context] = None) -> Any:
        "execute graphql query async"
        if ctx is None:
            ctx = Context.background()
        self.check(ctx, request)
        if self.use_multipart_form:
            data: Any = self.prepare_multipart(request)
        else:
            data = self.prepare_json(request)
        headers = self.merge_headers(request)
        self.logf(">> headers: %s", dict(headers))

        status_code, body = await self.send(ctx, data, dict(headers))
        self.logf("<< %s", body.decode("utf-8", errors="replace"))
        decode_response(status_code, body, response)
        return response

    def prepare_json(self, request: Request) -> bytes:
        body = encode_json_body(request)
        self.logf(">> variables: %s", request.vars)
        self.logf(">> query: %s", request.query)
        return body

    def prepare_multipart(self, request: Request) -> aiohttp.MultipartWriter:
        writer = aiohttp.MultipartWriter("form-data")
        writer.append(request.query).set_content_disposition("form-data", name="query")
        variables = encode_variables(request)
        if variables is not None:
            writer.append(variables).set_content_disposition("form-data", name="variables")
        files = read_files(request)
        for field, filename, content in files:
            part = writer.append(content, {"Content-Type": "application/octet-stream"})
            part.set_content_disposition("form-data", name=field, filename=filename)
        self.logf(">> variables: %s", variables or "")
        self.logf(">> files: %d", len(files))
        self.logf(">> query: %s", request.query)
        return writer

    async def send(self, ctx: Context, data: Any, headers: Any) -> Tuple[int, bytes]:
        loop = asyncio.get_running_loop()
        task = asyncio.ensure_future(self._post(data, headers))
        remove_callback = ctx.add_cancel_callback(lambda: loop.call_soon_threadsafe(task.cancel))
        try:
            return await asyncio.wait_for(task, timeout=ctx.remaining())
        except asyncio.CancelledError as err:
            ctx_err = ctx.err()
            if ctx_err is None:
                raise
            raise ctx_err from err
        except asyncio.TimeoutError as err:
            if not task.cancelled():
                raise TransportError(f"timeout: {err}") from err
            # wait_for gave up on the deadline, its timer may fire a tick early
            raise (ctx.err() or DeadlineExceededError()) from err
        except aiohttp.ClientError as err:
            raise TransportError(str(err)) from err
        finally:
            remove_callback()

    async def _post(self, data: Any, headers: Any) -> Tuple[int, bytes]:
        if self.session is not None:
            return await self._exchange(self.session, data, headers)
        async with aiohttp.ClientSession() as session:
            return await self._exchange(session, data, headers)

    async def _exchange(self, session: aiohttp.ClientSession, data: Any, headers: Any) -> Tuple[int, bytes]:
        async with session.post(self.endpoint, data=data, headers=headers) as res:
            return res.status, await res.read()
