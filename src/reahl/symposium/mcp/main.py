import argparse
import asyncio
import logging

from reahl.symposium import __version__
from reahl.symposium.mcp.diagnostics import configure_logging
from reahl.symposium.mcp.diagnostics import install_unhandled_error_logging
from reahl.symposium.mcp.diagnostics import log_unhandled_loop_exception
from reahl.symposium.mcp.server import create_server
from reahl.symposium.mcp.settings import ConfigurationError
from reahl.symposium.mcp.settings import DEFAULT_ENV_FILE
from reahl.symposium.mcp.settings import load_settings
from reahl.symposium.mcp.tools import SEARCH_REPLACE_TOOL_NAME


async def serve_stdio(mcp_server):
    asyncio.get_running_loop().set_exception_handler(log_unhandled_loop_exception)
    await mcp_server.run_stdio_async()


def run_application(argv=None):
    parser = argparse.ArgumentParser(
        description='Run the Symposium PowerShell MCP server.'
    )
    parser.add_argument(
        '--transport',
        default='stdio',
        choices=['stdio'],
        help='MCP transport type.',
    )
    parser.add_argument(
        '--env-file',
        default=DEFAULT_ENV_FILE,
        help=(
            'Dotenv file with default configuration. '
            'Process environment variables take precedence.'
        ),
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Level of diagnostics written to stderr.',
    )
    arguments = parser.parse_args(argv)
    configure_logging(arguments.log_level)
    install_unhandled_error_logging()
    logger = logging.getLogger(__name__)
    logger.info(
        'Starting PowerShell MCP Server v%s - Symposium Edition...',
        __version__,
    )
    try:
        settings = load_settings(env_file=arguments.env_file)
        logger.info('Registering Symposium migration tools...')
        mcp_server = create_server(settings)
    except ConfigurationError as error:
        parser.error(str(error))
    logger.info('Available tools: Symposium migration tools')
    logger.info('  - %s', SEARCH_REPLACE_TOOL_NAME)
    asyncio.run(serve_stdio(mcp_server))


if __name__ == '__main__':
    run_application()
