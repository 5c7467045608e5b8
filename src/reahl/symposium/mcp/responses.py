from mcp.types import CallToolResult
from mcp.types import TextContent


def text_tool_result(text, is_error=False):
    return CallToolResult(
        content=[TextContent(type='text', text=text)],
        isError=is_error,
    )


def request_summary(search_replace_request):
    return (
        '**Find Text:** %s\n'
        '**Replace Text:** %s\n'
        '**Scope Paths:** %s'
    ) % (
        search_replace_request.find_text,
        search_replace_request.replace_text,
        search_replace_request.scope_paths,
    )


def search_replace_completed_response(search_replace_request, execution_result):
    return text_tool_result(
        '✅ **Search and Replace Completed Successfully**\n'
        '\n'
        '%s\n'
        '\n'
        '**Output:**\n'
        '```\n'
        '%s\n'
        '```'
        % (request_summary(search_replace_request), execution_result['output'])
    )


def search_replace_failed_response(search_replace_request, execution_result):
    return text_tool_result(
        '❌ **Search and Replace Failed**\n'
        '\n'
        '%s\n'
        '**Error:** %s\n'
        '\n'
        'Please check your configuration and try again.'
        % (request_summary(search_replace_request), execution_result['error']),
        is_error=True,
    )


def search_replace_response(search_replace_request, execution_result):
    if execution_result['success']:
        return search_replace_completed_response(
            search_replace_request,
            execution_result,
        )
    return search_replace_failed_response(search_replace_request, execution_result)


def unexpected_error_response(error):
    return text_tool_result(
        '💥 Unexpected error executing PowerShell script: %s' % error,
        is_error=True,
    )
