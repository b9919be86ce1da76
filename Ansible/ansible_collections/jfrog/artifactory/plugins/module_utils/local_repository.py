# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

'''
Local repositories: the fields every local repository shares, the payload
Artifactory exchanges for them, and the package types built on top.
'''

from dataclasses import asdict, dataclass
from typing import List

from ansible_collections.jfrog.artifactory.plugins.module_utils.codec import decode_into, default_packer, json_field
from ansible_collections.jfrog.artifactory.plugins.module_utils.errors import ArtifactoryRequestError, ValidationError
from ansible_collections.jfrog.artifactory.plugins.module_utils.repository import (
    BASE_REPO_SCHEMA, REPOSITORIES_ENDPOINT, handle_reset_with_non_existent_value, is_not_found,
    mk_resource_schema, repo_layout_ref_schema)
from ansible_collections.jfrog.artifactory.plugins.module_utils.resource import Resource
from ansible_collections.jfrog.artifactory.plugins.module_utils.schema import (
    TYPE_BOOL, TYPE_INT, TYPE_SET, TYPE_STRING, Field, computed_schema, merge_schemas)

RCLASS = 'local'

PACKAGE_TYPES_LIKE_GENERIC = (
    'bower', 'chef', 'cocoapods', 'composer', 'conda', 'cran', 'gems', 'generic', 'gitlfs', 'go', 'helm',
    'npm', 'opkg', 'pub', 'puppet', 'pypi', 'swift', 'terraformbackend', 'vagrant',
)

BASE_LOCAL_REPO_SCHEMA = merge_schemas(BASE_REPO_SCHEMA, {
    'blacked_out': Field(
        TYPE_BOOL,
        optional=True,
        default=False,
        description='When set, the repository does not participate in artifact resolution and new artifacts '
                    'cannot be deployed.',
    ),
    'xray_index': Field(
        TYPE_BOOL,
        optional=True,
        default=False,
        description='Enable Indexing In Xray. Repository will be indexed with the default retention period.',
    ),
    'property_sets': Field(TYPE_SET, optional=True, description='List of property set name'),
    'archive_browsing_enabled': Field(
        TYPE_BOOL,
        optional=True,
        description='When set, you may view content such as HTML or Javadoc files directly from Artifactory.',
    ),
    'download_direct': Field(
        TYPE_BOOL,
        optional=True,
        description='When set, download requests to this repository will redirect the client to download the '
                    'artifact directly from the cloud storage provider.',
    ),
    'priority_resolution': Field(
        TYPE_BOOL,
        optional=True,
        default=False,
        description='Setting repositories with priority will cause metadata to be merged only from repositories '
                    'set with this field',
    ),
    'cdn_redirect': Field(
        TYPE_BOOL,
        optional=True,
        default=False,
        description='When set, download requests to this repository will redirect the client to download the '
                    'artifact directly from AWS CloudFront.',
    ),
})


@dataclass
class RepositoryBaseParams():
    key: str = json_field('key', default='')
    project_key: str = json_field('projectKey', omitempty=True, default='')
    project_environments: List[str] = json_field('environments', omitempty=True, default_factory=list)
    rclass: str = json_field('rclass', default=RCLASS)
    package_type: str = json_field('packageType', default='')
    description: str = json_field('description', default='')
    notes: str = json_field('notes', default='')
    includes_pattern: str = json_field('includesPattern', omitempty=True, default='')
    excludes_pattern: str = json_field('excludesPattern', default='')
    repo_layout_ref: str = json_field('repoLayoutRef', omitempty=True, default='')
    blacked_out: bool = json_field('blackedOut', default=False)
    xray_index: bool = json_field('xrayIndex', default=False)
    property_sets: List[str] = json_field('propertySets', omitempty=True, default_factory=list)
    archive_browsing_enabled: bool = json_field('archiveBrowsingEnabled', default=False)
    download_direct: bool = json_field('downloadRedirect', default=False)
    priority_resolution: bool = json_field('priorityResolution', default=False)
    cdn_redirect: bool = json_field('cdnRedirect', default=False)

    def id(self):
        return self.key


def unpack_base_repo(rclass, d, package_type):
    return RepositoryBaseParams(
        key=d.get_string('key'),
        project_key=d.get_string('project_key'),
        project_environments=d.get_set('project_environments'),
        rclass=rclass,
        package_type=package_type,
        description=d.get_string('description'),
        notes=d.get_string('notes'),
        includes_pattern=d.get_string('includes_pattern'),
        excludes_pattern=d.get_string('excludes_pattern'),
        repo_layout_ref=d.get_string('repo_layout_ref'),
        blacked_out=d.get_bool('blacked_out'),
        xray_index=d.get_bool('xray_index'),
        property_sets=d.get_set('property_sets'),
        archive_browsing_enabled=d.get_bool('archive_browsing_enabled'),
        download_direct=d.get_bool('download_direct'),
        priority_resolution=d.get_bool('priority_resolution'),
        cdn_redirect=d.get_bool('cdn_redirect'),
    )


def get_generic_repo_schema(repo_type):
    return merge_schemas(BASE_LOCAL_REPO_SCHEMA, repo_layout_ref_schema(RCLASS, repo_type))


def resource_artifactory_local_generic_repository(repo_type):
    '''Local repository of a package type with no fields beyond the shared local ones.'''
    if repo_type not in PACKAGE_TYPES_LIKE_GENERIC:
        raise ValidationError('package type %s has its own local repository schema' % repo_type,
                              field='package_type')

    def constructor():
        return RepositoryBaseParams(package_type=repo_type, rclass=RCLASS)

    def unpack(d):
        repo = unpack_base_repo(RCLASS, d, repo_type)
        return repo, repo.id()

    generic_repo_schema = get_generic_repo_schema(repo_type)
    return mk_resource_schema(generic_repo_schema, default_packer(generic_repo_schema), unpack, constructor,
                              description='Provides a local %s repository' % repo_type)


# Cargo

CARGO_LOCAL_SCHEMA = merge_schemas(BASE_LOCAL_REPO_SCHEMA, {
    'anonymous_access': Field(
        TYPE_BOOL,
        optional=True,
        default=False,
        description='Cargo client does not send credentials when performing download and search for crates. '
                    'Enable this to allow anonymous access to these resources.',
    ),
    'enable_sparse_index': Field(
        TYPE_BOOL,
        optional=True,
        default=False,
        description='Enable internal index support based on Cargo sparse index specifications, instead of the '
                    'default git index.',
    ),
}, repo_layout_ref_schema(RCLASS, 'cargo'))


@dataclass
class CargoLocalRepoParams(RepositoryBaseParams):
    anonymous_access: bool = json_field('cargoAnonymousAccess', default=False)
    enable_sparse_index: bool = json_field('cargoInternalIndex', default=False)


def unpack_local_cargo_repository(d):
    repo = CargoLocalRepoParams(
        **asdict(unpack_base_repo(RCLASS, d, 'cargo')),
        anonymous_access=d.get_bool('anonymous_access'),
        enable_sparse_index=d.get_bool('enable_sparse_index'),
    )
    return repo, repo.id()


def new_cargo_local_repo_params():
    return CargoLocalRepoParams(package_type='cargo', rclass=RCLASS)


def resource_artifactory_local_cargo_repository():
    return mk_resource_schema(CARGO_LOCAL_SCHEMA, default_packer(CARGO_LOCAL_SCHEMA), unpack_local_cargo_repository,
                              new_cargo_local_repo_params, description='Provides a local cargo repository')


# RPM

def _non_negative(value, name):
    if value < 0:
        raise ValidationError('expected a value of at least 0, got %d' % value, name)


RPM_LOCAL_SCHEMA = merge_schemas(BASE_LOCAL_REPO_SCHEMA, {
    'yum_root_depth': Field(
        TYPE_INT,
        optional=True,
        default=0,
        validate=[_non_negative],
        description='The depth, relative to the repository\'s root folder, where RPM metadata is created.',
    ),
    'calculate_yum_metadata': Field(TYPE_BOOL, optional=True, default=False),
    'enable_file_lists_indexing': Field(TYPE_BOOL, optional=True, default=False),
    'yum_group_file_names': Field(
        TYPE_STRING,
        optional=True,
        default='',
        description='A comma-separated list of XML file names containing RPM group component definitions.',
    ),
    'primary_keypair_ref': Field(
        TYPE_STRING,
        optional=True,
        description='Primary keypair used to sign artifacts. Default value is empty.',
    ),
    'secondary_keypair_ref': Field(
        TYPE_STRING,
        optional=True,
        description='Secondary keypair used to sign artifacts. Default value is empty.',
    ),
}, repo_layout_ref_schema(RCLASS, 'rpm'))


@dataclass
class RpmLocalRepositoryParams(RepositoryBaseParams):
    yum_root_depth: int = json_field('yumRootDepth', default=0)
    calculate_yum_metadata: bool = json_field('calculateYumMetadata', default=False)
    enable_file_lists_indexing: bool = json_field('enableFileListsIndexing', default=False)
    yum_group_file_names: str = json_field('groupFileNames', default='')
    primary_keypair_ref: str = json_field('primaryKeyPairRef', default='')
    secondary_keypair_ref: str = json_field('secondaryKeyPairRef', default='')


def unpack_local_rpm_repository(d):
    repo = RpmLocalRepositoryParams(
        **asdict(unpack_base_repo(RCLASS, d, 'rpm')),
        yum_root_depth=d.get_int('yum_root_depth'),
        calculate_yum_metadata=d.get_bool('calculate_yum_metadata'),
        enable_file_lists_indexing=d.get_bool('enable_file_lists_indexing'),
        yum_group_file_names=d.get_string('yum_group_file_names'),
        primary_keypair_ref=handle_reset_with_non_existent_value(d, 'primary_keypair_ref'),
        secondary_keypair_ref=handle_reset_with_non_existent_value(d, 'secondary_keypair_ref'),
    )
    return repo, repo.id()


def new_rpm_local_repository_params():
    return RpmLocalRepositoryParams(package_type='rpm', rclass=RCLASS)


def resource_artifactory_local_rpm_repository():
    return mk_resource_schema(RPM_LOCAL_SCHEMA, default_packer(RPM_LOCAL_SCHEMA), unpack_local_rpm_repository,
                              new_rpm_local_repository_params, description='Provides a local rpm repository')


# Data sources

def mk_repo_read_data_source(pack, construct):
    '''Reads the repository named by the "key" field.  A repository that does not exist leaves the id empty.'''
    def read(d, meta):
        repo = construct()
        key = d.get_string('key')
        try:
            response = meta.client.get(REPOSITORIES_ENDPOINT, {'key': key})
        except ArtifactoryRequestError as e:
            if is_not_found(e):
                d.set_id('')
                return
            raise
        decode_into(repo, response.json() or {})
        d.set_id(key)
        pack(repo, d)
    return read


def data_source_artifactory_local_cargo_repository():
    schema = computed_schema(CARGO_LOCAL_SCHEMA)
    return Resource(schema, read=mk_repo_read_data_source(default_packer(schema), new_cargo_local_repo_params),
                    description='Data source for local cargo repository')


def data_source_artifactory_local_rpm_repository():
    schema = computed_schema(RPM_LOCAL_SCHEMA)
    return Resource(schema, read=mk_repo_read_data_source(default_packer(schema), new_rpm_local_repository_params),
                    description='Data source for a local rpm repository')
