import contextlib
import logging
import os
import subprocess

from reahl.symposium.powershell.command import single_quoted_value


NO_OUTPUT_MESSAGE = 'Command executed successfully with no output.'
DEFAULT_WORKING_DIRECTORY_NAME = 'Default'
STOP_ON_ERRORS_PREAMBLE = "$ErrorActionPreference = 'Stop'; "
DEFAULT_EXECUTABLE_OPTIONS = (
    '-NoLogo',
    '-NoProfile',
    '-NonInteractive',
    '-ExecutionPolicy',
    'Bypass',
)


class PowerShellError(Exception):
    pass


def default_powershell_executable():
    return 'powershell' if os.name == 'nt' else 'pwsh'


class PowerShellResult:
    def __init__(self, stdout, stderr=''):
        self.stdout = stdout
        self.stderr = stderr

    @property
    def raw(self):
        return self.stdout.strip()


class PowerShellSession:
    def __init__(
        self,
        executable=None,
        executable_options=DEFAULT_EXECUTABLE_OPTIONS,
        timeout=None,
    ):
        self.executable = executable or default_powershell_executable()
        self.executable_options = list(executable_options)
        self.timeout = timeout
        self.location = None
        self.is_disposed = False

    def command_arguments(self, command_line):
        return [self.executable] + self.executable_options + [
            '-Command',
            STOP_ON_ERRORS_PREAMBLE + command_line,
        ]

    def invoke(self, command_line):
        if self.is_disposed:
            raise PowerShellError('PowerShell session has already been disposed.')
        if self.location and not os.path.isdir(self.location):
            raise PowerShellError(
                'PowerShell location does not exist: %s' % self.location
            )
        logging.getLogger(__name__).debug(
            'Invoking %s in location=%s',
            self.executable,
            self.location or DEFAULT_WORKING_DIRECTORY_NAME,
        )
        try:
            completed_process = subprocess.run(
                self.command_arguments(command_line),
                cwd=self.location,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                encoding='utf-8',
                errors='replace',
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as error:
            raise PowerShellError(
                'PowerShell executable could not be started: %s' % self.executable
            ) from error
        except subprocess.TimeoutExpired as error:
            raise PowerShellError(
                'PowerShell command did not finish within %s seconds.'
                % self.timeout
            ) from error
        error_text = (completed_process.stderr or '').strip()
        if completed_process.returncode != 0 or error_text:
            raise PowerShellError(failure_message_for(completed_process))
        return PowerShellResult(completed_process.stdout, completed_process.stderr)

    def set_location(self, path):
        try:
            result = self.invoke(
                'Set-Location -LiteralPath %s -ErrorAction Stop; '
                '(Get-Location).ProviderPath'
                % single_quoted_value(path)
            )
        except PowerShellError as error:
            raise PowerShellError(
                'Could not change location to %s: %s' % (path, error)
            ) from error
        self.location = result.raw or path

    def dispose(self):
        self.is_disposed = True


def failure_message_for(completed_process):
    error_text = (completed_process.stderr or '').strip()
    if error_text:
        return error_text
    return 'PowerShell exited with code %s.' % completed_process.returncode


def create_powershell_session(executable=None, timeout=None):
    logging.getLogger(__name__).debug(
        'Creating PowerShell session executable=%s timeout=%s',
        executable or default_powershell_executable(),
        timeout,
    )
    return PowerShellSession(executable=executable, timeout=timeout)


def close_session(powershell_session):
    powershell_session.dispose()


@contextlib.contextmanager
def opened_powershell_session(create_session):
    powershell_session = create_session()
    try:
        yield powershell_session
    finally:
        close_session(powershell_session)


def execute_powershell_command(
    command_line,
    working_directory=None,
    create_session=create_powershell_session,
):
    working_directory_name = working_directory or DEFAULT_WORKING_DIRECTORY_NAME
    with opened_powershell_session(create_session) as powershell_session:
        try:
            if working_directory:
                powershell_session.set_location(working_directory)
            result = powershell_session.invoke(command_line)
        except Exception as error:
            logging.getLogger(__name__).debug(
                'PowerShell command failed: %s',
                error,
            )
            return {
                'success': False,
                'error': str(error),
                'working_directory': working_directory_name,
            }
    return {
        'success': True,
        'output': result.raw or NO_OUTPUT_MESSAGE,
        'working_directory': working_directory_name,
    }
