import base64
import json
import os
import tempfile

from reahl.tofu import Fixture
from reahl.tofu import expected
from reahl.tofu import set_up
from reahl.tofu import tear_down
from reahl.tofu import with_fixtures

from reahl.symposium.mcp.settings import ConfigurationError
from reahl.symposium.mcp.settings import DEFAULT_SEARCH_REPLACE_SCRIPT
from reahl.symposium.mcp.settings import ServerSettings
from reahl.symposium.mcp.settings import load_settings


def decoded(token):
    return json.loads(base64.b64decode(token).decode('utf-8'))


class EnvFileFixture(Fixture):
    @set_up
    def write_env_file(self):
        self.temporary_directory = tempfile.TemporaryDirectory()
        self.env_file = os.path.join(self.temporary_directory.name, '.env')
        with open(self.env_file, 'w', encoding='utf-8') as env_file:
            env_file.write(
                'DEFAULT_SEARCH_REPLACE_SCRIPT=/opt/scripts/from-file.ps1\n'
                'SITECORE_CONNECTION_URI=https://file.example.com/\n'
                'SITECORE_USERNAME=sitecore\\\\file\n'
                'SPE_REMOTING_SECRET=file-secret\n'
            )

    @tear_down
    def remove_env_file(self):
        self.temporary_directory.cleanup()


def test_defaults_apply_without_env_file_or_environment():
    settings = load_settings(env_file=None, environ={})
    assert settings.search_replace_script == DEFAULT_SEARCH_REPLACE_SCRIPT
    assert decoded(settings.default_remoting_config) == {
        'connectionUri': 'https://xmcloudcm.localhost/',
        'username': 'sitecore\\speremoting',
        'SPE_REMOTING_SECRET': '',
    }
    assert settings.command_timeout is None
    assert settings.working_directory is None


@with_fixtures(EnvFileFixture)
def test_env_file_values_are_used(env_fixture):
    settings = load_settings(env_file=env_fixture.env_file, environ={})
    assert settings.search_replace_script == '/opt/scripts/from-file.ps1'
    assert decoded(settings.default_remoting_config)['connectionUri'] == (
        'https://file.example.com/'
    )
    assert decoded(settings.default_remoting_config)['SPE_REMOTING_SECRET'] == (
        'file-secret'
    )


@with_fixtures(EnvFileFixture)
def test_environment_takes_precedence_over_env_file(env_fixture):
    settings = load_settings(
        env_file=env_fixture.env_file,
        environ={
            'SPE_REMOTING_SECRET': 'env-secret',
            'POWERSHELL_EXECUTABLE': '/usr/bin/pwsh',
            'SEARCH_REPLACE_TIMEOUT_SECONDS': '90',
            'SEARCH_REPLACE_WORKING_DIRECTORY': '/srv/work',
        },
    )
    assert decoded(settings.default_remoting_config)['SPE_REMOTING_SECRET'] == (
        'env-secret'
    )
    assert settings.search_replace_script == '/opt/scripts/from-file.ps1'
    assert settings.powershell_executable == '/usr/bin/pwsh'
    assert settings.command_timeout == 90.0
    assert settings.working_directory == '/srv/work'


def test_missing_env_file_is_ignored():
    settings = load_settings(env_file='/no/such/dir/.env', environ={})
    assert settings.search_replace_script == DEFAULT_SEARCH_REPLACE_SCRIPT


def test_invalid_timeout_is_a_configuration_error():
    with expected(ConfigurationError):
        load_settings(
            env_file=None,
            environ={'SEARCH_REPLACE_TIMEOUT_SECONDS': 'soon'},
        )
    with expected(ConfigurationError):
        load_settings(
            env_file=None,
            environ={'SEARCH_REPLACE_TIMEOUT_SECONDS': '-1'},
        )


def test_empty_script_path_is_a_configuration_error():
    with expected(ConfigurationError):
        ServerSettings('', 'token')
