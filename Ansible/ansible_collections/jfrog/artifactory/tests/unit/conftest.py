# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

"""Shared fixtures: an in-memory Artifactory behind ansible's Request.open."""

import io
import json
import re
from collections import namedtuple
from urllib.error import HTTPError

import pytest
from ansible.module_utils import api as ansible_api

from ansible_collections.jfrog.artifactory.plugins.module_utils import artifactory_client
from ansible_collections.jfrog.artifactory.plugins.module_utils.artifactory_client import ArtifactoryClient
from ansible_collections.jfrog.artifactory.plugins.module_utils.provider import ProviderMetadata

BASE_URL = 'https://artifactory.example.com'

MERGE_ERROR_BODY = {'errors': [{'status': 500, 'message': 'Could not merge and save new descriptor [org.jfrog]'}]}

PUBLIC_KEY = '''-----BEGIN PGP PUBLIC KEY BLOCK-----

mQENBFzBYm0BCADnWRy3rnvZ0s9Jpvwzt93AxnWPQ+jKSaGzbDcfxAuMnVqjdfAd
\t=a7Ra
-----END PGP PUBLIC KEY BLOCK-----'''

Call = namedtuple('Call', ['method', 'path', 'body'])

_REPOSITORY = re.compile(r'^artifactory/api/repositories/([^/]+)$')
_ATTACH = re.compile(r'^access/api/v1/projects/_/attach/repositories/([^/]+)(?:/([^/]+))?$')
_TRUSTED_KEY = re.compile(r'^artifactory/api/security/keys/trusted(?:/([^/]+))?$')


class FakeResponse():

    def __init__(self, status, body):
        self.status = status
        self._body = body
        self.headers = {}

    def getcode(self):
        return self.status

    def read(self):
        return self._body


class FakeArtifactory():
    """Keeps repositories and trusted keys in memory and answers like Artifactory does.

    Missing repositories answer 400, as the real server does.  Responses queued with
    fail() are returned before the in-memory state is consulted.
    """

    def __init__(self, version='7.49.8'):
        self.version = version
        self.repositories = dict()
        self.keys = list()
        self._issued = 0
        self.calls = list()
        self.sleeps = list()
        self._failures = list()

    def fail(self, method, path, status, body=None, times=1):
        for _ in range(times):
            self._failures.append((method, path, status, body))

    def calls_to(self, method=None, path_prefix=''):
        return [call for call in self.calls
                if (method is None or call.method == method) and call.path.startswith(path_prefix)]

    def open(self, method, url, data=None, **kwargs):
        path = url[len(BASE_URL) + 1:]
        body = json.loads(data) if data else None
        self.calls.append(Call(method, path, body))

        for failure in self._failures:
            if failure[0] == method and failure[1] == path:
                self._failures.remove(failure)
                return self._respond(url, failure[2], failure[3])

        status, payload = self._route(method, path, body)
        return self._respond(url, status, payload)

    def _respond(self, url, status, payload):
        raw = b'' if payload is None else json.dumps(payload).encode('utf-8')
        if status >= 400:
            raise HTTPError(url, status, 'error', {}, io.BytesIO(raw))
        return FakeResponse(status, raw)

    def _route(self, method, path, body):
        if path == 'artifactory/api/system/version':
            return 200, {'version': self.version, 'revision': '74908900'}

        match = _REPOSITORY.match(path)
        if match:
            return self._repository(method, match.group(1), body)

        match = _ATTACH.match(path)
        if match:
            repo_key, project_key = match.groups()
            if repo_key not in self.repositories:
                return 404, {'errors': [{'status': 404, 'message': 'repository not found'}]}
            self.repositories[repo_key]['projectKey'] = project_key if method == 'PUT' else 'default'
            return 204, None

        match = _TRUSTED_KEY.match(path)
        if match:
            return self._trusted_key(method, match.group(1), body)

        return 404, {'errors': [{'status': 404, 'message': 'unknown endpoint %s' % path}]}

    def _repository(self, method, key, body):
        missing = {'errors': [{'status': 400, 'message': 'Bad Request'}]}
        if method == 'PUT':
            repository = {'projectKey': 'default', 'environments': ['DEV']}
            repository.update(body)
            self.repositories[key] = repository
            return 200, None
        if key not in self.repositories:
            return 400, missing
        if method == 'GET':
            return 200, self.repositories[key]
        if method == 'HEAD':
            return 200, None
        if method == 'POST':
            self.repositories[key].update(body)
            return 200, None
        if method == 'DELETE':
            del self.repositories[key]
            return 200, None
        return 405, None

    def _trusted_key(self, method, kid, body):
        if method == 'POST':
            key = {
                'kid': 'kid-%d' % (self._issued + 1),
                'alias': body['alias'],
                'fingerprint': 'e4:d1:7a:%02d' % self._issued,
                'key': body['public_key'],
                'issued_on': '2022-11-14T09:47:06.000Z',
                'issued_by': 'Jane Doe <jane@example.com>',
                'valid_until': '2025-11-14T09:47:06.000Z',
            }
            self.keys.append(key)
            self._issued += 1
            return 201, key
        if method == 'GET':
            return 200, {'keys': self.keys}
        if method == 'DELETE':
            for key in self.keys:
                if key['kid'] == kid:
                    self.keys.remove(key)
                    return 204, None
            return 404, {'errors': [{'status': 404, 'message': 'key not found'}]}
        return 405, None


@pytest.fixture
def artifactory(monkeypatch):
    server = FakeArtifactory()

    def fake_open(request, method, url, data=None, **kwargs):
        return server.open(method, url, data=data, **kwargs)

    monkeypatch.setattr(artifactory_client.Request, 'open', fake_open)
    monkeypatch.setattr(ansible_api.time, 'sleep', server.sleeps.append)
    return server


@pytest.fixture
def client(artifactory):
    return ArtifactoryClient(BASE_URL, auth_type='AccessToken', auth_string='token', retry_wait_time=0)


@pytest.fixture
def meta(client, artifactory):
    return ProviderMetadata(client, artifactory_version=artifactory.version)


class ModuleExit(Exception):
    pass


class ModuleFail(Exception):
    pass


class FakeModule():
    """Stands in for AnsibleModule: holds params and raises on exit_json/fail_json."""

    Exit = ModuleExit
    Fail = ModuleFail

    def __init__(self, params, check_mode=False, diff=False):
        self.params = params
        self.check_mode = check_mode
        self._diff = diff
        self.debug_messages = list()
        self.warnings = list()

    def debug(self, message):
        self.debug_messages.append(message)

    def warn(self, message):
        self.warnings.append(message)

    def exit_json(self, **result):
        raise ModuleExit(result)

    def fail_json(self, **result):
        raise ModuleFail(result)


@pytest.fixture
def module_params():
    def build(**params):
        base = dict(
            artifactory_base_url=BASE_URL,
            auth_type='AccessToken',
            auth_string='token',
            ignore_ca_error=False,
            state='Present',
        )
        base.update(params)
        return base
    return build


@pytest.fixture
def fake_module(module_params):
    def build(check_mode=False, diff=False, **params):
        return FakeModule(module_params(**params), check_mode=check_mode, diff=diff)
    return build


@pytest.fixture
def merge_error_body():
    return MERGE_ERROR_BODY


@pytest.fixture
def public_key():
    return PUBLIC_KEY
