# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

'''
Public GPG trusted keys used to verify distributed release bundles.  A key
cannot be changed once uploaded, so every settable field forces a new key.
'''

from dataclasses import dataclass

from ansible_collections.jfrog.artifactory.plugins.module_utils.codec import (
    decode_into, json_field, schema_has_key, universal_packer)
from ansible_collections.jfrog.artifactory.plugins.module_utils.errors import ValidationError
from ansible_collections.jfrog.artifactory.plugins.module_utils.resource import Resource, import_state_passthrough
from ansible_collections.jfrog.artifactory.plugins.module_utils.schema import TYPE_STRING, Field, string_is_not_empty

DISTRIBUTION_PUBLIC_KEYS_ENDPOINT = 'artifactory/api/security/keys/trusted'
DISTRIBUTION_PUBLIC_KEY_ENDPOINT = 'artifactory/api/security/keys/trusted/{id}'

_BEGIN_BLOCK = '-----BEGIN PGP PUBLIC KEY BLOCK-----'
_END_BLOCK = '-----END PGP PUBLIC KEY BLOCK-----'


@dataclass
class DistributionPublicKeyPayload():
    key_id: str = json_field('kid', default='')
    alias: str = json_field('alias', default='')
    fingerprint: str = json_field('fingerprint', default='')
    public_key: str = json_field('key', default='')
    issued_on: str = json_field('issued_on', default='')
    issued_by: str = json_field('issued_by', default='')
    valid_until: str = json_field('valid_until', default='')


def strip_tabs(value):
    return value.replace('\t', '')


def validate_public_key(value, name):
    stripped = strip_tabs(value).strip()
    if not stripped.startswith(_BEGIN_BLOCK) or not stripped.endswith(_END_BLOCK):
        raise ValidationError('must be an ASCII armored PGP public key block', name)


DISTRIBUTION_PUBLIC_KEY_SCHEMA = {
    'key_id': Field(
        TYPE_STRING,
        computed=True,
        description='Returns the key id by which this key is referenced in Artifactory.',
    ),
    'alias': Field(
        TYPE_STRING,
        required=True,
        force_new=True,
        validate=[string_is_not_empty],
        description='Will be used as an identifier when uploading/retrieving the public key via REST API.',
    ),
    'fingerprint': Field(TYPE_STRING, computed=True, description='Returns the computed key fingerprint'),
    'public_key': Field(
        TYPE_STRING,
        required=True,
        force_new=True,
        state_func=strip_tabs,
        validate=[validate_public_key],
        description='The Public key to add as a trusted distribution GPG key.',
    ),
    'issued_on': Field(TYPE_STRING, computed=True, description='Returns the date/time when this GPG key was created.'),
    'issued_by': Field(TYPE_STRING, computed=True, description='Returns the name and eMail address of issuer.'),
    'valid_until': Field(TYPE_STRING, computed=True, description='Returns the date/time when this GPG key expires.'),
}

result_packer = universal_packer(schema_has_key(DISTRIBUTION_PUBLIC_KEY_SCHEMA))


def list_distribution_public_keys(client):
    keys = list()
    for data in (client.get(DISTRIBUTION_PUBLIC_KEYS_ENDPOINT).json() or {}).get('keys', []):
        keys.append(decode_into(DistributionPublicKeyPayload(), data))
    return keys


def resource_distribution_public_key_create(d, meta):
    body = {
        'alias': d.get_string('alias'),
        'public_key': strip_tabs(d.get_string('public_key')),
    }
    response = meta.client.post(DISTRIBUTION_PUBLIC_KEYS_ENDPOINT, body=body)
    result = decode_into(DistributionPublicKeyPayload(), response.json() or {})
    d.set_id(result.key_id)
    result_packer(result, d)


def resource_distribution_public_key_read(d, meta):
    for key in list_distribution_public_keys(meta.client):
        if key.key_id == d.id():
            result_packer(key, d)
            return
    # An empty id tells the caller the key no longer exists
    d.set_id('')


def resource_distribution_public_key_delete(d, meta):
    meta.client.delete(DISTRIBUTION_PUBLIC_KEY_ENDPOINT, {'id': d.id()})
    d.set_id('')


def key_id_for_alias(declared, meta):
    '''The key id is assigned by Artifactory, so an existing key is found by its alias.'''
    alias = declared.get('alias', '')
    for key in list_distribution_public_keys(meta.client):
        if key.alias == alias:
            return key.key_id
    return ''


def resource_artifactory_distribution_public_key():
    return Resource(
        DISTRIBUTION_PUBLIC_KEY_SCHEMA,
        create=resource_distribution_public_key_create,
        read=resource_distribution_public_key_read,
        delete=resource_distribution_public_key_delete,
        importer=import_state_passthrough(resource_distribution_public_key_read),
        identity=key_id_for_alias,
        description='Manage the public GPG trusted keys used to verify distributed release bundles',
    )
