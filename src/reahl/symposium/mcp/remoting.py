import base64
import binascii
import json
import logging


DEFAULT_CONNECTION_URI = 'https://xmcloudcm.localhost/'
DEFAULT_USERNAME = 'sitecore\\speremoting'
SECRET_KEY = 'SPE_REMOTING_SECRET'
REVEALED_SECRET_LENGTH = 6
MAXIMUM_MASK_LENGTH = 10
REVEALED_KEYS = ('connectionUri', 'username')


class RemotingConfiguration:
    def __init__(self, connection_uri, username, secret):
        self.connection_uri = connection_uri
        self.username = username
        self.secret = secret

    @classmethod
    def from_values(cls, values):
        return cls(
            values.get('SITECORE_CONNECTION_URI') or DEFAULT_CONNECTION_URI,
            values.get('SITECORE_USERNAME') or DEFAULT_USERNAME,
            values.get('SPE_REMOTING_SECRET') or '',
        )

    def as_json(self):
        return json.dumps(
            {
                'connectionUri': self.connection_uri,
                'username': self.username,
                SECRET_KEY: self.secret,
            },
            separators=(',', ':'),
            ensure_ascii=False,
        )

    def encoded(self):
        return base64.b64encode(self.as_json().encode('utf-8')).decode('ascii')


def mask_secret(secret):
    if not secret:
        return 'N/A'
    if len(secret) <= REVEALED_SECRET_LENGTH:
        return secret
    masked_length = min(len(secret) - REVEALED_SECRET_LENGTH, MAXIMUM_MASK_LENGTH)
    return secret[:REVEALED_SECRET_LENGTH] + '*' * masked_length


def decode_remoting_config(encoded_config):
    try:
        return base64.b64decode(encoded_config, validate=True).decode('utf-8')
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return encoded_config


def masked_remoting_config(encoded_config):
    decoded_config = decode_remoting_config(encoded_config)
    try:
        config_values = json.loads(decoded_config)
    except ValueError:
        return '[not decodable]'
    if not isinstance(config_values, dict):
        return '[not decodable]'
    return json.dumps(
        {
            key: value if key in REVEALED_KEYS else mask_secret(str(value))
            for key, value in config_values.items()
        },
        ensure_ascii=False,
    )


def resolve_remoting_config(requested_config, default_config):
    user_provided = bool(requested_config)
    resolved_config = requested_config if user_provided else default_config
    logging.getLogger(__name__).info(
        'Remoting Config: %s - length: %s',
        '[User provided]' if user_provided else '[Using default]',
        len(resolved_config),
    )
    if not user_provided:
        logging.getLogger(__name__).info(
            'Remoting Config (masked): %s',
            masked_remoting_config(resolved_config),
        )
    return resolved_config
