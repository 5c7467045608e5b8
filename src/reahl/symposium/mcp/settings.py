import logging
import os

from dotenv import dotenv_values

from reahl.symposium.mcp.remoting import RemotingConfiguration
from reahl.symposium.powershell.session import default_powershell_executable


DEFAULT_ENV_FILE = '.env'
DEFAULT_SEARCH_REPLACE_SCRIPT = (
    'c:\\Projects\\Symposium\\Custom-Sitecore-MCP-Server'
    '\\examples\\SearchReplace-SitecoreContent.ps1'
)


class ConfigurationError(Exception):
    pass


class ServerSettings:
    def __init__(
        self,
        search_replace_script,
        default_remoting_config,
        powershell_executable=None,
        command_timeout=None,
        working_directory=None,
    ):
        self.search_replace_script = validated_script_path(search_replace_script)
        self.default_remoting_config = default_remoting_config
        self.powershell_executable = (
            powershell_executable or default_powershell_executable()
        )
        self.command_timeout = command_timeout
        self.working_directory = working_directory


def validated_script_path(script_path):
    if not isinstance(script_path, str) or not script_path.strip():
        raise ConfigurationError(
            'DEFAULT_SEARCH_REPLACE_SCRIPT must name a PowerShell script.'
        )
    return script_path


def validated_timeout(timeout_text):
    if not timeout_text:
        return None
    try:
        timeout = float(timeout_text)
    except ValueError:
        raise ConfigurationError(
            'SEARCH_REPLACE_TIMEOUT_SECONDS must be a number, got %r.'
            % timeout_text
        )
    if timeout <= 0:
        raise ConfigurationError(
            'SEARCH_REPLACE_TIMEOUT_SECONDS must be positive, got %r.'
            % timeout_text
        )
    return timeout


def configuration_values(env_file=DEFAULT_ENV_FILE, environ=None):
    values = {}
    if env_file:
        values.update(
            {
                name: value
                for name, value in dotenv_values(env_file).items()
                if value is not None
            }
        )
    values.update(os.environ if environ is None else environ)
    return values


def load_settings(env_file=DEFAULT_ENV_FILE, environ=None):
    values = configuration_values(env_file=env_file, environ=environ)
    logging.getLogger(__name__).debug(
        'Loaded configuration from env_file=%s',
        env_file,
    )
    return ServerSettings(
        values.get('DEFAULT_SEARCH_REPLACE_SCRIPT') or DEFAULT_SEARCH_REPLACE_SCRIPT,
        RemotingConfiguration.from_values(values).encoded(),
        powershell_executable=values.get('POWERSHELL_EXECUTABLE'),
        command_timeout=validated_timeout(
            values.get('SEARCH_REPLACE_TIMEOUT_SECONDS')
        ),
        working_directory=values.get('SEARCH_REPLACE_WORKING_DIRECTORY') or None,
    )
