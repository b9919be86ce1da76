# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

'''
This library turns a repository schema, a pack function, an unpack function,
and a payload constructor into the full lifecycle of an Artifactory
repository.  Create is a PUT message, Read is a GET message, Update is a POST
message, and Delete is a DELETE message, all against the same endpoint.
'''

import random
from collections import namedtuple
from types import MappingProxyType

from ansible_collections.jfrog.artifactory.plugins.module_utils.artifactory_client import (
    retry_400, retry_on_merge_error)
from ansible_collections.jfrog.artifactory.plugins.module_utils.codec import decode_into, to_payload_json
from ansible_collections.jfrog.artifactory.plugins.module_utils.errors import (
    ArtifactoryError, ArtifactoryRequestError, ProjectReassignmentFailure, ValidationError)
from ansible_collections.jfrog.artifactory.plugins.module_utils.provider import check_version
from ansible_collections.jfrog.artifactory.plugins.module_utils.resource import Resource, import_state_passthrough
from ansible_collections.jfrog.artifactory.plugins.module_utils.schema import (
    TYPE_SET, TYPE_STRING, Field, project_key_validator, repo_key_validator, string_in_slice)

DEFAULT_PROJECT_KEY = 'default'

REPOSITORIES_ENDPOINT = 'artifactory/api/repositories/{key}'
PROJECT_ATTACH_ENDPOINT = 'access/api/v1/projects/_/attach/repositories/{repoKey}/{projectKey}'
PROJECT_DETACH_ENDPOINT = 'access/api/v1/projects/_/attach/repositories/{repoKey}'

CUSTOM_PROJECT_ENVIRONMENT_SUPPORTED_VERSION = '7.53.1'

REPO_TYPES_SUPPORTED = (
    'alpine', 'bower', 'cargo', 'chef', 'cocoapods', 'composer', 'conan', 'conda', 'cran', 'debian',
    'docker', 'gems', 'generic', 'gitlfs', 'go', 'gradle', 'helm', 'ivy', 'maven', 'npm', 'nuget',
    'opkg', 'p2', 'pub', 'puppet', 'pypi', 'rpm', 'sbt', 'swift', 'terraformbackend', 'vagrant', 'vcs',
)

GRADLE_LIKE_PACKAGE_TYPES = ('gradle', 'sbt', 'ivy')

PROJECT_ENVIRONMENTS_SUPPORTED = ('DEV', 'PROD')

repo_type_validator = string_in_slice(REPO_TYPES_SUPPORTED)


def validate_repo_layout_ref_schema_override(value, name):
    raise ValidationError('Always override repo_layout_ref attribute in the schema on top of base schema', name)


BASE_REPO_SCHEMA = {
    'key': Field(
        TYPE_STRING,
        required=True,
        force_new=True,
        validate=[repo_key_validator],
        description='A mandatory identifier for the repository that must be unique. It cannot begin with a '
                    'number or contain spaces or special characters.',
    ),
    'project_key': Field(
        TYPE_STRING,
        optional=True,
        default=DEFAULT_PROJECT_KEY,
        validate=[project_key_validator],
        description='Project key for assigning this repository to. When assigning repository to a project, '
                    'repository key must be prefixed with project key, separated by a dash.',
    ),
    'project_environments': Field(
        TYPE_SET,
        optional=True,
        computed=True,
        min_items=1,
        max_items=2,
        description='Project environment for assigning this repository to. Before Artifactory 7.53.1, up to 2 '
                    'values ("DEV" and "PROD") are allowed. From 7.53.1 onward, only one value is allowed.',
    ),
    'package_type': Field(TYPE_STRING, computed=True, force_new=True),
    'description': Field(TYPE_STRING, optional=True, description='Public description.'),
    'notes': Field(TYPE_STRING, optional=True, description='Internal description.'),
    'includes_pattern': Field(
        TYPE_STRING,
        optional=True,
        default='**/*',
        description='List of comma-separated artifact patterns to include when evaluating artifact requests.',
    ),
    'excludes_pattern': Field(
        TYPE_STRING,
        optional=True,
        description='List of artifact patterns to exclude when evaluating artifact requests.',
    ),
    # Every package schema replaces this field with repo_layout_ref_schema()
    'repo_layout_ref': Field(
        TYPE_STRING,
        optional=True,
        validate=[validate_repo_layout_ref_schema_override],
    ),
}

RepoLayout = namedtuple('RepoLayout', ['repo_layout_ref', 'supported_repo_types'])

_ALL_CLASSES = frozenset(['local', 'remote', 'virtual', 'federated'])


def _layout(repo_layout_ref, supported_repo_types=_ALL_CLASSES):
    return RepoLayout(repo_layout_ref, frozenset(supported_repo_types))


DEFAULT_REPO_LAYOUTS = MappingProxyType({
    'alpine': _layout('simple-default'),
    'bower': _layout('bower-default'),
    'cargo': _layout('cargo-default', ['local', 'remote', 'federated']),
    'chef': _layout('simple-default'),
    'cocoapods': _layout('simple-default', ['local', 'remote', 'federated']),
    'composer': _layout('composer-default', ['local', 'remote', 'federated']),
    'conan': _layout('conan-default'),
    'conda': _layout('simple-default'),
    'cran': _layout('simple-default'),
    'debian': _layout('simple-default'),
    'docker': _layout('simple-default'),
    'gems': _layout('simple-default'),
    'generic': _layout('simple-default'),
    'gitlfs': _layout('simple-default'),
    'go': _layout('go-default'),
    'gradle': _layout('maven-2-default'),
    'helm': _layout('simple-default'),
    'ivy': _layout('ivy-default'),
    'maven': _layout('maven-2-default'),
    'npm': _layout('npm-default'),
    'nuget': _layout('nuget-default'),
    'opkg': _layout('simple-default', ['local', 'remote', 'federated']),
    'p2': _layout('simple-default', ['remote', 'virtual']),
    'pub': _layout('simple-default'),
    'puppet': _layout('puppet-default'),
    'pypi': _layout('simple-default'),
    'rpm': _layout('simple-default'),
    'sbt': _layout('sbt-default'),
    'swift': _layout('simple-default'),
    'terraformbackend': _layout('simple-default', ['local', 'federated']),
    'vagrant': _layout('simple-default', ['local', 'federated']),
    'vcs': _layout('vcs-default', ['remote']),
})


def get_default_repo_layout_ref(repository_type, package_type):
    '''Returns a function giving the default layout for the repository type and package type.
    The lookup happens when the function is called.
    '''
    def default_repo_layout_ref():
        layout = DEFAULT_REPO_LAYOUTS.get(package_type)
        if layout is not None and repository_type in layout.supported_repo_types:
            return layout.repo_layout_ref
        raise ValidationError('default repo layout not found for repository type %s & package type %s'
                              % (repository_type, package_type))
    return default_repo_layout_ref


def repo_layout_ref_schema(repository_type, package_type):
    return {
        'repo_layout_ref': Field(
            TYPE_STRING,
            optional=True,
            default_func=get_default_repo_layout_ref(repository_type, package_type),
            description='Repository layout key for the %s repository' % repository_type,
        ),
    }


def handle_reset_with_non_existent_value(d, key):
    '''Artifactory will not accept an empty string or null to reset a value to not set.
    When the field was removed from the declaration, a value that cannot exist is sent instead.
    '''
    value = d.get_string(key)
    if value == '' and d.has_change(key):
        return 'non-existant-value-%d' % random.randint(1, 2 ** 31)
    return value


def is_not_found(error):
    '''Artifactory answers 400 instead of 404 for a repository that does not exist.'''
    return isinstance(error, ArtifactoryRequestError) and error.status in (400, 404)


def _unpack(unpack, d):
    try:
        return unpack(d)
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError('unable to build the repository payload: %s' % e)


def mk_repo_create(unpack, read):
    def create(d, meta):
        repo, key = _unpack(unpack, d)
        meta.client.put(REPOSITORIES_ENDPOINT, {'key': key}, to_payload_json(repo),
                        retry_conditions=(retry_on_merge_error,))
        d.set_id(key)
        # The API does not echo back the computed fields
        return read(d, meta)
    return create


def mk_repo_read(pack, construct):
    def read(d, meta):
        repo = construct()
        try:
            response = meta.client.get(REPOSITORIES_ENDPOINT, {'key': d.id()})
        except ArtifactoryRequestError as e:
            if is_not_found(e):
                d.set_id('')
                return
            raise
        decode_into(repo, response.json() or {})
        pack(repo, d)
    return read


def assign_repo_to_project(repo_key, project_key, client):
    client.put(PROJECT_ATTACH_ENDPOINT, {'repoKey': repo_key, 'projectKey': project_key})


def unassign_repo_from_project(repo_key, client):
    client.delete(PROJECT_DETACH_ENDPOINT, {'repoKey': repo_key})


def project_key_transition(old_project_key, new_project_key):
    '''Returns "assign", "unassign", or None for a change of project_key.

    Moving a repository from one project straight to another is neither.
    '''
    if old_project_key == DEFAULT_PROJECT_KEY and len(new_project_key) > 0:
        return 'assign'
    if len(old_project_key) > 0 and new_project_key == DEFAULT_PROJECT_KEY:
        return 'unassign'
    return None


def mk_repo_update(unpack, read):
    def update(d, meta):
        repo, key = _unpack(unpack, d)
        meta.client.post(REPOSITORIES_ENDPOINT, {'key': d.id()}, to_payload_json(repo),
                         retry_conditions=(retry_on_merge_error,))
        d.set_id(key)

        project_key_changed = d.has_change('project_key')
        meta.debug('projectKeyChanged: %s' % project_key_changed)
        if project_key_changed:
            old_project_key, new_project_key = d.get_change('project_key')
            transition = project_key_transition(old_project_key, new_project_key)
            meta.debug('oldProjectKey: %s, newProjectKey: %s, transition: %s'
                       % (old_project_key, new_project_key, transition))
            try:
                if transition == 'assign':
                    assign_repo_to_project(key, new_project_key, meta.client)
                elif transition == 'unassign':
                    unassign_repo_from_project(key, meta.client)
            except ArtifactoryError as e:
                raise ProjectReassignmentFailure(key, e)

        return read(d, meta)
    return update


def delete_repo(d, meta):
    try:
        meta.client.delete(REPOSITORIES_ENDPOINT, {'key': d.id()}, retry_conditions=(retry_on_merge_error,))
    except ArtifactoryRequestError as e:
        if not is_not_found(e):
            raise
    d.set_id('')


def check_repo(id, client, retry_conditions=()):
    '''Sends HEAD for the repository.  Artifactory returns 400 instead of 404, but regardless, it is an error.'''
    return client.head(REPOSITORIES_ENDPOINT, {'key': id}, retry_conditions=retry_conditions)


def repo_exists(d, meta):
    '''Returns (exists, error).  A repository that cannot be found reports its error rather than raising it.

    :raises ArtifactoryRequestError: for any other error status
    '''
    try:
        check_repo(d.id(), meta.client, retry_conditions=(retry_400,))
    except ArtifactoryRequestError as e:
        if not is_not_found(e):
            raise
        return False, e
    return True, None


def project_environments_diff(d, meta):
    '''Rejects project_environments the connected Artifactory does not accept.  Nothing is written.'''
    project_environments, ok = d.get_ok('project_environments')
    if not ok:
        return
    try:
        is_supported = check_version(meta.artifactory_version, CUSTOM_PROJECT_ENVIRONMENT_SUPPORTED_VERSION)
    except ArtifactoryError as e:
        raise ValidationError('Failed to check version %s' % e, field='project_environments')

    if is_supported:
        if len(project_environments) == 2:
            raise ValidationError('For Artifactory %s or later, only one environment can be assigned to a '
                                  'repository.' % CUSTOM_PROJECT_ENVIRONMENT_SUPPORTED_VERSION,
                                  field='project_environments')
    else:
        for project_environment in project_environments:
            if project_environment not in PROJECT_ENVIRONMENTS_SUPPORTED:
                raise ValidationError('project_environment %s not allowed' % project_environment,
                                      field='project_environments')


def mk_resource_schema(schema, pack, unpack, constructor, description=''):
    reader = mk_repo_read(pack, constructor)
    return Resource(
        schema,
        create=mk_repo_create(unpack, reader),
        read=reader,
        update=mk_repo_update(unpack, reader),
        delete=delete_repo,
        importer=import_state_passthrough(reader),
        customize_diff=project_environments_diff,
        exists=repo_exists,
        description=description,
    )
