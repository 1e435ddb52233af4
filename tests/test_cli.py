import inspect
import json
import tempfile
import unittest

from unittest import mock

import click

from click.testing import CliRunner

from fake_transport import ENDPOINT, make_session, respond

from python_graphql_client import Client, cli


def write_temp(content: str, suffix: str) -> "tempfile._TemporaryFileWrapper":
    fp = tempfile.NamedTemporaryFile(suffix=suffix)
    fp.write(content.encode("utf-8"))
    fp.flush()
    return fp


class Test(unittest.TestCase):
    def test_run(self):
        session, adapter = make_session(respond('{"data": {"a": {"id": "1", "name": "luke"}}}'))
        client = Client(ENDPOINT, http_client=session)
        request = cli.build_request(
            "query Q($id: ID!) { a(id: $id) { id name } }",
            ["id=1"],
            ["X-Custom-Header: 123"],
            cli.load_config_file(None),
        )

        result = cli.run(client, request, timeout=5)

        self.assertEqual(result, {"a": {"id": "1", "name": "luke"}})
        self.assertEqual(json.loads(adapter.calls[0].body)["variables"], {"id": 1})
        self.assertEqual(adapter.calls[0].headers["X-Custom-Header"], "123")

    def test_load_config_file(self):
        with write_temp(
            inspect.cleandoc(
                """
                endpoint: http://localhost:8000/graphql
                use_multipart_form: true
                headers:
                  Authorization: Bearer token
                """
            ),
            ".yaml",
        ) as config_file:
            config = cli.load_config_file(config_file.name)

        self.assertEqual(config["endpoint"], "http://localhost:8000/graphql")
        self.assertTrue(config["use_multipart_form"])
        self.assertEqual(config["headers"], {"Authorization": "Bearer token"})
        self.assertEqual(cli.DEFAULT_CONFIG["headers"], {})

    def test_load_config_file_empty_headers(self):
        with write_temp("endpoint: http://localhost:8000/graphql\nheaders:\n", ".yaml") as config_file:
            config = cli.load_config_file(config_file.name)

        self.assertEqual(config["headers"], {})
        request = cli.build_request("query {}", [], [], config)
        self.assertEqual(dict(request.header), {})

    def test_load_config_file_not_a_mapping(self):
        with write_temp("- http://localhost:8000/graphql\n", ".yaml") as config_file:
            with self.assertRaises(click.BadParameter):
                cli.load_config_file(config_file.name)

    def test_main_config_not_a_mapping(self):
        runner = CliRunner()
        with write_temp("query { hello }", ".graphql") as query_file, write_temp(
            "just a string\n", ".yaml"
        ) as config_file:
            result = runner.invoke(cli.cli, ["-e", ENDPOINT, "-q", query_file.name, "-c", config_file.name])

        self.assertEqual(result.exit_code, 2)
        self.assertIn("config file must hold a mapping", result.output)
        self.assertNotIn("Traceback", result.output)

    def test_main_missing_upload(self):
        runner = CliRunner()
        with write_temp("mutation { upload }", ".graphql") as query_file, mock.patch(
            "python_graphql_client.client.requests.Session"
        ) as session:
            result = runner.invoke(
                cli.cli, ["-e", ENDPOINT, "-q", query_file.name, "-m", "-F", "file=/nonexistent/upload.txt"]
            )

        self.assertEqual(result.exit_code, 2)
        self.assertIn("--file", result.output)
        self.assertIsInstance(result.exception, SystemExit)
        session.assert_not_called()

    def test_build_request_headers_override_config(self):
        config = cli.load_config_file(None)
        config["headers"] = {"Authorization": "Bearer a"}
        request = cli.build_request("query {}", [], ["authorization: Bearer b"], config)
        self.assertEqual(request.header["Authorization"], "Bearer b")

    def test_main(self):
        session, adapter = make_session(respond('{"data": {"hello": "hello world"}}'))
        runner = CliRunner()
        with write_temp("query { hello }", ".graphql") as query_file, mock.patch(
            "python_graphql_client.client.requests.Session", return_value=session
        ):
            result = runner.invoke(cli.cli, ["-e", ENDPOINT, "-q", query_file.name])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.output), {"hello": "hello world"})
        self.assertEqual(len(adapter.calls), 1)

    def test_main_upload(self):
        session, adapter = make_session(respond('{"data": {"upload": true}}'))
        runner = CliRunner()
        with write_temp("mutation { upload }", ".graphql") as query_file, write_temp(
            "This is a file", ".txt"
        ) as upload, mock.patch("python_graphql_client.client.requests.Session", return_value=session):
            result = runner.invoke(cli.cli, ["-e", ENDPOINT, "-q", query_file.name, "-m", "-F", f"file={upload.name}"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn(b"This is a file", adapter.calls[0].body)

    def test_main_server_error(self):
        session, _ = make_session(respond('{"errors": [{"message": "bad"}]}'))
        runner = CliRunner()
        with write_temp("query { hello }", ".graphql") as query_file, mock.patch(
            "python_graphql_client.client.requests.Session", return_value=session
        ):
            result = runner.invoke(cli.cli, ["-e", ENDPOINT, "-q", query_file.name])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("graphql: bad", result.output)

    def test_main_syntax_error(self):
        runner = CliRunner()
        with write_temp("query {", ".graphql") as query_file, mock.patch(
            "python_graphql_client.client.requests.Session"
        ) as session:
            result = runner.invoke(cli.cli, ["-e", ENDPOINT, "-q", query_file.name])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Syntax Error", result.output)
        session.assert_not_called()

    def test_main_requires_endpoint(self):
        runner = CliRunner()
        with write_temp("query { hello }", ".graphql") as query_file:
            result = runner.invoke(cli.cli, ["-q", query_file.name])

        self.assertEqual(result.exit_code, 2)
