# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

'''
This library wraps the JFrog Platform REST API.  Every call goes through
ArtifactoryClient.send_request, which expands path parameters, encodes the
body as JSON, and re-sends the request while one of the caller's retry
conditions holds.
'''

import base64
import json
import re
import socket
from urllib.error import HTTPError, URLError
from urllib.parse import quote

from ansible.module_utils.api import retry_with_delays_and_condition
from ansible.module_utils.common.text.converters import to_bytes, to_native, to_text
from ansible.module_utils.urls import Request

from ansible_collections.jfrog.artifactory.plugins.module_utils.errors import (
    ArtifactoryRequestError, TransportFailure, ValidationError)

VERSION_ENDPOINT = 'artifactory/api/system/version'

DEFAULT_TIMEOUT = 30
DEFAULT_RETRY_COUNT = 5
DEFAULT_RETRY_WAIT_TIME = 0.1
DEFAULT_RETRY_MAX_WAIT_TIME = 2.0

AUTH_TYPES = ('basic', 'accesstoken', 'apikey')

_MERGE_ERROR = re.compile(r'Could not merge and save new descriptor')


def build_auth_headers(auth_type, auth_string):
    '''Returns the headers that authenticate a request.

    :param auth_type: Must be "accesstoken", "apikey", or "basic" (case-insensitive)
    :param auth_string: For auth_type="accesstoken", it is the access token string.
        For auth_type="apikey", it is the api key.
        For auth_type="basic", is is the username and password joined with a colon in the format "username:password".
    '''
    auth_type = str(auth_type).lower()
    if auth_type not in AUTH_TYPES:
        raise ValidationError('must be "Basic", "AccessToken", or "ApiKey"', field='auth_type')
    if auth_type == 'accesstoken':
        return {"Authorization": "Bearer " + auth_string}
    if auth_type == 'apikey':
        return {"X-JFrog-Art-Api": auth_string}
    if ':' not in auth_string:
        raise ValidationError('Basic auth requires the format username:password', field='auth_string')
    return {"Authorization": "Basic " + to_text(base64.standard_b64encode(to_bytes(auth_string)))}


def expand_path(endpoint, path_params=None):
    '''Substitutes each {name} in the endpoint with its url-quoted value.'''
    if not path_params:
        return endpoint
    return endpoint.format(**dict((name, quote(str(value), safe='')) for name, value in path_params.items()))


class ArtifactoryResponse():
    '''Status, raw body, and headers of a single HTTP exchange.'''

    def __init__(self, status, body=b'', headers=None):
        self.status = status
        self.body = body or b''
        self.headers = headers or {}

    @property
    def is_error(self):
        return self.status >= 400

    @property
    def text(self):
        return to_text(self.body, errors='surrogate_or_replace')

    def json(self):
        if not self.body:
            return None
        return json.loads(self.text)

    def __repr__(self):
        return 'ArtifactoryResponse(%d)' % self.status


def retry_on_merge_error(response):
    '''Artifactory rejects concurrent writes to its configuration descriptor with this message.
    The write is safe to resubmit.
    '''
    return response is not None and _MERGE_ERROR.search(response.text) is not None


def retry_400(response):
    return response is not None and response.status == 400


def exponential_backoff(retries, wait_time, max_wait_time):
    '''Yields one delay per retry, doubling from wait_time up to max_wait_time.'''
    for _ in range(retries):
        yield wait_time
        wait_time = min(wait_time * 2, max_wait_time)


class ArtifactoryClient():
    '''One client is created per module invocation and shared by every request it makes.'''

    def __init__(self, base_url, auth_type='accesstoken', auth_string='', ignore_ca_error=False,
                 timeout=DEFAULT_TIMEOUT, retry_count=DEFAULT_RETRY_COUNT,
                 retry_wait_time=DEFAULT_RETRY_WAIT_TIME, retry_max_wait_time=DEFAULT_RETRY_MAX_WAIT_TIME,
                 debug=None):
        '''Creates a new client.

        :param base_url: Contains the schema, hostname, and port number (if not default) of the JFrog Platform
        :param ignore_ca_error: When set to true, API calls skip cert verification.
        :param retry_count: How many times a request is re-sent while a retry condition holds.
        :param debug: Optional callable receiving trace messages.
        '''
        self.base_url = base_url.rstrip('/')
        self.headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        self.headers.update(build_auth_headers(auth_type, auth_string))
        self.ignore_ca_error = ignore_ca_error
        self.timeout = timeout
        self.retry_count = retry_count
        self.retry_wait_time = retry_wait_time
        self.retry_max_wait_time = retry_max_wait_time
        self._debug = debug

    def send_request(self, method, endpoint, path_params=None, body=None, retry_conditions=()):
        '''Sends a request and returns the ArtifactoryResponse.

        :param endpoint: Path relative to base_url, may contain {name} placeholders
        :param body: Object serialised as the JSON body
        :param retry_conditions: Callables taking an error response.  While any returns True, the
            request is re-sent, up to retry_count times, with exponential back off.
        :raises ArtifactoryRequestError: when the final response has an error status
        :raises TransportFailure: when no response was received
        '''
        url = self.base_url + '/' + expand_path(endpoint, path_params)
        data = None
        if body is not None:
            data = json.dumps(body)

        retries = [0]

        def should_retry(error):
            if not isinstance(error, ArtifactoryRequestError):
                return False
            if not any(condition(error.response) for condition in retry_conditions):
                return False
            retries[0] += 1
            self.debug('%s %s returned %d, retrying (%d/%d)'
                       % (method, url, error.status, retries[0], self.retry_count))
            return True

        backoff = exponential_backoff(self.retry_count, self.retry_wait_time, self.retry_max_wait_time)

        @retry_with_delays_and_condition(backoff, should_retry_error=should_retry)
        def send():
            response = self._send(method, url, data)
            if response.is_error:
                raise ArtifactoryRequestError(
                    '%s %s failed with status %d: %s' % (method, url, response.status, response.text), response)
            return response

        return send()

    def get(self, endpoint, path_params=None, retry_conditions=()):
        return self.send_request('GET', endpoint, path_params, retry_conditions=retry_conditions)

    def head(self, endpoint, path_params=None, retry_conditions=()):
        return self.send_request('HEAD', endpoint, path_params, retry_conditions=retry_conditions)

    def put(self, endpoint, path_params=None, body=None, retry_conditions=()):
        return self.send_request('PUT', endpoint, path_params, body, retry_conditions)

    def post(self, endpoint, path_params=None, body=None, retry_conditions=()):
        return self.send_request('POST', endpoint, path_params, body, retry_conditions)

    def delete(self, endpoint, path_params=None, retry_conditions=()):
        return self.send_request('DELETE', endpoint, path_params, retry_conditions=retry_conditions)

    def get_version(self):
        '''Returns the version string reported by the connected Artifactory server.'''
        return self.get(VERSION_ENDPOINT).json()['version']

    def debug(self, message):
        if self._debug is not None:
            self._debug(message)

    def _send(self, method, url, data):
        request = Request(headers=self.headers, validate_certs=not self.ignore_ca_error, timeout=self.timeout)
        try:
            response = request.open(method, url, data=data)
        except HTTPError as e:
            return ArtifactoryResponse(e.code, e.read() if e.fp is not None else b'', e.headers)
        except (URLError, socket.timeout, ConnectionError) as e:
            raise TransportFailure('%s %s failed: %s' % (method, url, to_native(e)))
        return ArtifactoryResponse(response.getcode(), response.read(), response.headers)
