import logging
import sys
import threading


LOG_TAG = '[PowerShell MCP]'


def configure_logging(level='INFO', stream=None):
    handler = logging.StreamHandler(sys.stderr if stream is None else stream)
    handler.setFormatter(logging.Formatter(LOG_TAG + ' %(message)s'))
    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    return handler


def log_uncaught_exception(exception_type, exception, exception_traceback):
    if issubclass(exception_type, KeyboardInterrupt):
        sys.__excepthook__(exception_type, exception, exception_traceback)
        return
    logging.getLogger(__name__).error(
        'Uncaught exception: %s',
        exception,
        exc_info=(exception_type, exception, exception_traceback),
    )


def log_uncaught_thread_exception(hook_arguments):
    if hook_arguments.exc_type is SystemExit:
        return
    logging.getLogger(__name__).error(
        'Uncaught exception in thread %s: %s',
        getattr(hook_arguments.thread, 'name', '<unknown>'),
        hook_arguments.exc_value,
        exc_info=(
            hook_arguments.exc_type,
            hook_arguments.exc_value,
            hook_arguments.exc_traceback,
        ),
    )


def log_unhandled_loop_exception(loop, context):
    exception = context.get('exception')
    logging.getLogger(__name__).error(
        'Unhandled rejection: %s',
        exception if exception is not None else context.get('message'),
    )


def install_unhandled_error_logging():
    sys.excepthook = log_uncaught_exception
    threading.excepthook = log_uncaught_thread_exception
