# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

'''
Connection options shared by every module, and the ProviderMetadata object
that carries the client and the server version into each lifecycle function.
'''

from ansible.module_utils.basic import env_fallback
from ansible.module_utils.compat.version import LooseVersion

from ansible_collections.jfrog.artifactory.plugins.module_utils.artifactory_client import ArtifactoryClient
from ansible_collections.jfrog.artifactory.plugins.module_utils.errors import ValidationError

# Matches the options of the jfrog.artifactory.artifactory_common_docs doc fragment
PROVIDER_ARGUMENT_SPEC = dict(
    artifactory_base_url=dict(type='str', required=True, fallback=(env_fallback, ['JFROG_URL'])),
    auth_type=dict(type='str', required=False, default='AccessToken'),
    auth_string=dict(type='str', required=True, no_log=True, fallback=(env_fallback, ['JFROG_ACCESS_TOKEN'])),
    ignore_ca_error=dict(type='bool', required=False, default=False),
)

STATE_ARGUMENT_SPEC = dict(
    state=dict(type='str', required=False, default='Present'),
)

STATES = ('present', 'absent')


class ProviderMetadata():
    '''Context passed by reference into every lifecycle function.

    The server version is requested the first time it is needed and then kept.
    '''

    def __init__(self, client, artifactory_version=None, module=None):
        self.client = client
        self._artifactory_version = artifactory_version
        self.module = module

    @property
    def artifactory_version(self):
        if self._artifactory_version is None:
            self._artifactory_version = self.client.get_version()
            self.debug('artifactory version: %s' % self._artifactory_version)
        return self._artifactory_version

    def debug(self, message):
        if self.module is not None:
            self.module.debug(message)

    def warn(self, message):
        if self.module is not None:
            self.module.warn(message)


def check_version(current, supported):
    '''Returns True when the current version is the supported version or later.'''
    if not current or not supported:
        raise ValidationError('cannot compare versions %r and %r' % (current, supported))
    try:
        return LooseVersion(current) >= LooseVersion(supported)
    except (TypeError, ValueError) as e:
        raise ValidationError('cannot compare versions %r and %r: %s' % (current, supported, e))


def normalize_state(state):
    state = str(state).lower()
    if state not in STATES:
        raise ValidationError('must be "Present" or "Absent"', field='state')
    return state


def configure(module):
    '''Builds the ProviderMetadata from the connection options of a module.'''
    params = module.params
    if params['ignore_ca_error']:
        module.warn('API calls to Artifactory are not validating CA certs. Auth tokens vulnerable to MITM attack.')
    client = ArtifactoryClient(
        params['artifactory_base_url'],
        auth_type=params['auth_type'],
        auth_string=params['auth_string'],
        ignore_ca_error=params['ignore_ca_error'],
        debug=module.debug,
    )
    return ProviderMetadata(client, module=module)
