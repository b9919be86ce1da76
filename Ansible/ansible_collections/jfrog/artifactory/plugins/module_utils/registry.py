# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

'''
Maps resource type names, and repository class / package type pairs, to the
factories that build their Resource.
'''

from functools import partial
from types import MappingProxyType

from ansible_collections.jfrog.artifactory.plugins.module_utils.distribution_public_key import (
    resource_artifactory_distribution_public_key)
from ansible_collections.jfrog.artifactory.plugins.module_utils.errors import ValidationError
from ansible_collections.jfrog.artifactory.plugins.module_utils.local_repository import (
    PACKAGE_TYPES_LIKE_GENERIC, data_source_artifactory_local_cargo_repository,
    data_source_artifactory_local_rpm_repository, resource_artifactory_local_cargo_repository,
    resource_artifactory_local_generic_repository, resource_artifactory_local_rpm_repository)


def _local_repository_factories():
    factories = dict()
    for package_type in PACKAGE_TYPES_LIKE_GENERIC:
        factories[package_type] = partial(resource_artifactory_local_generic_repository, package_type)
    factories['cargo'] = resource_artifactory_local_cargo_repository
    factories['rpm'] = resource_artifactory_local_rpm_repository
    return factories


REPOSITORY_FACTORIES = MappingProxyType({
    'local': MappingProxyType(_local_repository_factories()),
})


def _resource_factories():
    factories = dict()
    for rclass, by_package_type in REPOSITORY_FACTORIES.items():
        for package_type, factory in by_package_type.items():
            factories['artifactory_%s_%s_repository' % (rclass, package_type)] = factory
    factories['artifactory_distribution_public_key'] = resource_artifactory_distribution_public_key
    return factories


RESOURCES = MappingProxyType(_resource_factories())

DATA_SOURCES = MappingProxyType({
    'artifactory_local_cargo_repository': data_source_artifactory_local_cargo_repository,
    'artifactory_local_rpm_repository': data_source_artifactory_local_rpm_repository,
})


def repository_resource(rclass, package_type):
    '''Returns the Resource for a repository class and package type.

    :raises ValidationError: naming both when the combination is not supported
    '''
    factory = REPOSITORY_FACTORIES.get(rclass, {}).get(package_type)
    if factory is None:
        raise ValidationError('repository type %s & package type %s is not supported' % (rclass, package_type))
    return factory()


def get_resource(name):
    if name not in RESOURCES:
        raise KeyError('unknown resource type %s' % name)
    return RESOURCES[name]()


def get_data_source(name):
    if name not in DATA_SOURCES:
        raise KeyError('unknown data source %s' % name)
    return DATA_SOURCES[name]()
