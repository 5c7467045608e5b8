import functools
import logging
from typing import Annotated
from typing import Optional

from pydantic import Field

from reahl.symposium.mcp.remoting import resolve_remoting_config
from reahl.symposium.mcp.responses import search_replace_failed_response
from reahl.symposium.mcp.responses import search_replace_response
from reahl.symposium.mcp.responses import unexpected_error_response
from reahl.symposium.mcp.settings import validated_script_path
from reahl.symposium.powershell import DomainException
from reahl.symposium.powershell import NamedArgument
from reahl.symposium.powershell import build_script_command
from reahl.symposium.powershell import create_powershell_session
from reahl.symposium.powershell import execute_powershell_command


SEARCH_REPLACE_TOOL_NAME = 'sym-search-replace'
SEARCH_REPLACE_TOOL_DESCRIPTION = (
    'Search and replace text in Sitecore content items. '
    'Standalone tool that does not require sym-initialize.'
)


class SearchReplaceRequest:
    def __init__(self, find_text, replace_text, scope_paths, remoting_config=None):
        self.find_text = find_text
        self.replace_text = replace_text
        self.scope_paths = scope_paths
        self.remoting_config = remoting_config

    def named_arguments(self, resolved_remoting_config):
        return [
            NamedArgument('FindText', self.find_text),
            NamedArgument('ReplaceText', self.replace_text),
            NamedArgument('ScopePaths', self.scope_paths),
            NamedArgument('remotingConfig', resolved_remoting_config, literal=True),
        ]


def register_tools(mcp_server, settings, create_session=None):
    search_replace_script = validated_script_path(settings.search_replace_script)
    if create_session is None:
        create_session = functools.partial(
            create_powershell_session,
            executable=settings.powershell_executable,
            timeout=settings.command_timeout,
        )
    logger = logging.getLogger(__name__)

    def log_search_replace_request(search_replace_request):
        logger.info('== SYM - Search and Replace ==')
        logger.info('Script: %s', search_replace_script)
        logger.info('Find Text: %s', search_replace_request.find_text)
        logger.info('Replace Text: %s', search_replace_request.replace_text)
        logger.info('Scope Paths: %s', search_replace_request.scope_paths)

    def run_search_replace(search_replace_request):
        log_search_replace_request(search_replace_request)
        remoting_config = resolve_remoting_config(
            search_replace_request.remoting_config,
            settings.default_remoting_config,
        )
        try:
            command_line = build_script_command(
                search_replace_script,
                search_replace_request.named_arguments(remoting_config),
            )
        except DomainException as error:
            logger.warning('Rejected search and replace arguments: %s', error)
            return search_replace_failed_response(
                search_replace_request,
                {'success': False, 'error': str(error)},
            )
        logger.info('Executing command with search and replace parameters')
        execution_result = execute_powershell_command(
            command_line,
            working_directory=settings.working_directory,
            create_session=create_session,
        )
        if not execution_result['success']:
            logger.info('Search and replace failed: %s', execution_result['error'])
        return search_replace_response(search_replace_request, execution_result)

    @mcp_server.tool(
        name=SEARCH_REPLACE_TOOL_NAME,
        description=SEARCH_REPLACE_TOOL_DESCRIPTION,
    )
    def sym_search_replace(
        FindText: Annotated[str, Field(description='Text to find and replace')],
        ReplaceText: Annotated[str, Field(description='Text to replace with')],
        ScopePaths: Annotated[
            str,
            Field(
                description=(
                    'Root node path under which to perform search and replace '
                    '(e.g., /sitecore/content/Home)'
                )
            ),
        ],
        remotingConfig: Annotated[
            Optional[str],
            Field(
                description=(
                    'Remoting configuration Base64 string for XM Cloud '
                    'connection (uses default if not provided: '
                    'https://xmcloudcm.localhost/ with sitecore\\speremoting)'
                )
            ),
        ] = None,
    ):
        search_replace_request = SearchReplaceRequest(
            FindText,
            ReplaceText,
            ScopePaths,
            remoting_config=remotingConfig,
        )
        try:
            return run_search_replace(search_replace_request)
        except Exception as error:
            logger.exception('Unexpected error during search and replace')
            return unexpected_error_response(error)
