"""Low level GraphQL client.

::

    # create a client (safe to share across requests)
    client = Client("https://example.com/graphql")

    # make a request
    request = Request('''
        query ($key: String!) {
            items (id:$key) {
                field1
                field2
            }
        }
    ''')

    # set any variables
    request.var("key", "value")

    # run it and capture the response
    response = {}
    client.run(request, response)

Pass your own ``requests.Session`` as ``http_client`` to control the
transport, and ``use_multipart_form=True`` to be able to upload files.
"""
import logging
import threading

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional, Tuple

import requests

from requests.structures import CaseInsensitiveDict

from .context import Context
from .encoding import ACCEPT, JSON_CONTENT_TYPE, encode_json_body, encode_variables, read_files
from .errors import ConfigurationError, DeadlineExceededError, TransportError
from .request import Request
from .response import decode_response

logger = logging.getLogger("python_graphql_client")

LogFunc = Callable[[str], None]

CHUNK_SIZE = 64 * 1024


class BaseClient:
    """Configuration and request checks shared by the sync and async clients.

    ``log`` is called with preformatted debug lines describing each
    exchange. It defaults to the ``python_graphql_client`` logger at DEBUG
    level.
    """

    def __init__(self, endpoint: str, use_multipart_form: bool = False, log: Optional[LogFunc] = None):
        self.endpoint = endpoint
        self.use_multipart_form = use_multipart_form
        self.log: LogFunc = log if log is not None else logger.debug

    def logf(self, fmt: str, *args: Any) -> None:
        try:
            self.log(fmt % args)
        except Exception:  # pylint: disable=broad-except
            logger.warning("log function failed", exc_info=True)

    def check(self, ctx: Context, request: Request) -> None:
        err = ctx.err()
        if err is not None:
            raise err
        if request.files and not self.use_multipart_form:
            raise ConfigurationError("cannot send files without multipart form mode")

    def merge_headers(self, request: Request) -> CaseInsensitiveDict:
        """Caller headers plus ours.

        A caller ``Accept`` is appended after ours; ``Content-Type`` always
        stays the one matching the encoded body.
        """
        headers = CaseInsensitiveDict(request.header)
        accept = headers.get("Accept")
        headers["Accept"] = f"{ACCEPT}, {accept}" if accept else ACCEPT
        if self.use_multipart_form:
            headers.pop("Content-Type", None)
        else:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        return headers


class Client(BaseClient):
    "GraphQL client running requests through a ``requests.Session``"

    def __init__(
        self,
        endpoint: str,
        http_client: Optional[requests.Session] = None,
        use_multipart_form: bool = False,
        log: Optional[LogFunc] = None,
    ):
        super().__init__(endpoint, use_multipart_form=use_multipart_form, log=log)
        self.http_client = http_client if http_client is not None else requests.Session()
        self.executor = ThreadPoolExecutor(thread_name_prefix="python_graphql_client")

    def run(self, request: Request, response: Any = None, ctx: Optional[Context] = None) -> Any:
        """Execute the request and decode ``data`` into ``response``.

        Pass ``None`` as response to skip decoding the data. If the request
        fails or the server returns errors, the first error is raised.
        """
        if ctx is None:
            ctx = Context.background()
        self.check(ctx, request)
        if self.use_multipart_form:
            prepared = self.prepare_multipart(request)
        else:
            prepared = self.prepare_json(request)
        self.logf(">> headers: %s", dict(prepared.headers))

        status_code, body = self.send(ctx, prepared)
        self.logf("<< %s", body.decode("utf-8", errors="replace"))
        decode_response(status_code, body, response)
        return response

    def prepare_json(self, request: Request) -> requests.PreparedRequest:
        body = encode_json_body(request)
        self.logf(">> variables: %s", request.vars)
        self.logf(">> query: %s", request.query)
        return self.http_client.prepare_request(
            requests.Request("POST", self.endpoint, data=body, headers=self.merge_headers(request))
        )

    def prepare_multipart(self, request: Request) -> requests.PreparedRequest:
        fields: list = [("query", (None, request.query))]
        variables = encode_variables(request)
        if variables is not None:
            fields.append(("variables", (None, variables)))
        files = read_files(request)
        for field, filename, content in files:
            fields.append((field, (filename, content, "application/octet-stream")))
        self.logf(">> variables: %s", variables or "")
        self.logf(">> files: %d", len(files))
        self.logf(">> query: %s", request.query)
        return self.http_client.prepare_request(
            requests.Request("POST", self.endpoint, files=fields, headers=self.merge_headers(request))
        )

    def send(self, ctx: Context, prepared: requests.PreparedRequest) -> Tuple[int, bytes]:
        """POST once and buffer the whole body.

        The exchange runs on a worker thread so that cancelling ``ctx`` or
        reaching its deadline returns at once, even while the server has not
        answered yet. The deadline also bounds every socket operation.
        """
        timeout = ctx.remaining()
        if timeout is not None and timeout <= 0:
            # urllib3 rejects a zero timeout
            raise DeadlineExceededError()
        wakeup = threading.Event()
        remove_callback = ctx.add_cancel_callback(wakeup.set)
        try:
            future = self.executor.submit(self.exchange, ctx, prepared, timeout)
            future.add_done_callback(lambda _: wakeup.set())
            wakeup.wait(ctx.remaining())
            if future.done() and not ctx.done():
                return future.result()
        finally:
            remove_callback()
        # the worker notices ctx between chunks and closes the response
        raise ctx.err() or DeadlineExceededError()

    def exchange(self, ctx: Context, prepared: requests.PreparedRequest, timeout: Optional[float]) -> Tuple[int, bytes]:
        settings = self.http_client.merge_environment_settings(prepared.url, {}, True, None, None)
        try:
            res = self.http_client.send(prepared, timeout=timeout, **settings)
        except requests.RequestException as err:
            ctx_err = ctx.err()
            if ctx_err is not None:
                raise ctx_err from err
            raise TransportError(str(err)) from err

        with res:
            remove_callback = ctx.add_cancel_callback(res.close)
            try:
                chunks = []
                for chunk in res.iter_content(chunk_size=CHUNK_SIZE):
                    if ctx.done():
                        break
                    chunks.append(chunk)
            except (requests.RequestException, OSError, ValueError) as err:
                ctx_err = ctx.err()
                if ctx_err is not None:
                    raise ctx_err from err
                raise TransportError(f"reading body: {err}") from err
            finally:
                remove_callback()

        ctx_err = ctx.err()
        if ctx_err is not None:
            raise ctx_err
        return res.status_code, b"".join(chunks)
