"""Tests for the MCP server setup."""

from unittest.mock import patch

from fastmcp import FastMCP

from library_catalogue.server import create_server, main


class TestServer:
    def test_create_server(self, test_config):
        mcp = create_server(test_config)

        assert isinstance(mcp, FastMCP)
        assert mcp.name == "test-library-catalogue"

    def test_main_runs_stdio(self):
        with patch("library_catalogue.server.run_stdio_server") as run:
            main()

        run.assert_called_once()
        assert run.call_args.args[0].transport == "stdio"
