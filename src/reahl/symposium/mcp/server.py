SERVER_NAME = 'powershell-mcp-server'


class McpDependencyNotInstalled(Exception):
    pass


def import_fast_mcp():
    try:
        from mcp.server.fastmcp import FastMCP
    except ModuleNotFoundError as module_not_found_error:
        raise McpDependencyNotInstalled(
            'Symposium MCP requires the mcp package. '
            'Install with: pip install reahl-symposium'
        ) from module_not_found_error
    return FastMCP


def create_server(settings, create_session=None):
    fast_mcp = import_fast_mcp()
    register_tools = import_tool_registration()
    mcp_server = fast_mcp(name=SERVER_NAME)
    register_tools(
        mcp_server,
        settings,
        create_session=create_session,
    )
    return mcp_server


def import_tool_registration():
    try:
        from reahl.symposium.mcp.tools import register_tools
    except ModuleNotFoundError as module_not_found_error:
        if module_not_found_error.name in ('pydantic', 'dotenv'):
            raise McpDependencyNotInstalled(
                'Symposium MCP requires %s. '
                'Install project dependencies first.'
                % module_not_found_error.name
            ) from module_not_found_error
        raise
    return register_tools
