from reahl.symposium.powershell.command import DomainException
from reahl.symposium.powershell.command import NamedArgument
from reahl.symposium.powershell.command import build_script_command
from reahl.symposium.powershell.command import double_quoted_value
from reahl.symposium.powershell.command import single_quoted_value
from reahl.symposium.powershell.session import NO_OUTPUT_MESSAGE
from reahl.symposium.powershell.session import PowerShellError
from reahl.symposium.powershell.session import PowerShellResult
from reahl.symposium.powershell.session import PowerShellSession
from reahl.symposium.powershell.session import close_session
from reahl.symposium.powershell.session import create_powershell_session
from reahl.symposium.powershell.session import execute_powershell_command
from reahl.symposium.powershell.session import opened_powershell_session

__all__ = [
    'DomainException',
    'NO_OUTPUT_MESSAGE',
    'NamedArgument',
    'PowerShellError',
    'PowerShellResult',
    'PowerShellSession',
    'build_script_command',
    'close_session',
    'create_powershell_session',
    'double_quoted_value',
    'execute_powershell_command',
    'opened_powershell_session',
    'single_quoted_value',
]
