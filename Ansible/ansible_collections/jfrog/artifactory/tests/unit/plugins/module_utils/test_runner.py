# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

import pytest

from ansible_collections.jfrog.artifactory.plugins.module_utils.errors import (
    ArtifactoryError, ArtifactoryRequestError, ValidationError)
from ansible_collections.jfrog.artifactory.plugins.module_utils.local_repository import (
    resource_artifactory_local_generic_repository)
from ansible_collections.jfrog.artifactory.plugins.module_utils.provider import ProviderMetadata
from ansible_collections.jfrog.artifactory.plugins.module_utils.resource import Resource
from ansible_collections.jfrog.artifactory.plugins.module_utils.resource_data import ResourceData
from ansible_collections.jfrog.artifactory.plugins.module_utils.runner import ResourceRunner
from ansible_collections.jfrog.artifactory.plugins.module_utils.schema import TYPE_STRING, Field

GENERIC = dict(package_type='generic')


@pytest.fixture
def runner(meta):
    return ResourceRunner(resource_artifactory_local_generic_repository('generic'), meta)


def writes(artifactory):
    return [(call.method, call.path) for call in artifactory.calls if call.method not in ('GET', 'HEAD')]


class TestPresent:
    def test_create(self, runner, artifactory):
        result = runner.apply(dict(key='generic-local', description='files'), computed_config=GENERIC)

        assert result['changed'] is True
        assert result['id'] == 'generic-local'
        assert result['diff']['before'] == {}
        assert result['attributes']['description'] == 'files'
        assert result['attributes']['repo_layout_ref'] == 'simple-default'
        assert result['attributes']['project_key'] == 'default'
        assert writes(artifactory) == [('PUT', 'artifactory/api/repositories/generic-local')]

    def test_unchanged_declaration_writes_nothing(self, runner, artifactory):
        runner.apply(dict(key='generic-local', description='files'), computed_config=GENERIC)
        del artifactory.calls[:]

        result = runner.apply(dict(key='generic-local', description='files'), computed_config=GENERIC)

        assert result['changed'] is False
        assert result['diff']['before'] == result['diff']['after']
        assert writes(artifactory) == []

    def test_changed_field_is_updated(self, runner, artifactory):
        runner.apply(dict(key='generic-local', description='files'), computed_config=GENERIC)
        del artifactory.calls[:]

        result = runner.apply(dict(key='generic-local', description='artifacts'), computed_config=GENERIC)

        assert result['changed'] is True
        assert result['diff']['before']['description'] == 'files'
        assert result['diff']['after']['description'] == 'artifacts'
        assert writes(artifactory) == [('POST', 'artifactory/api/repositories/generic-local')]

    def test_omitted_field_is_reset(self, runner, artifactory):
        runner.apply(dict(key='generic-local', description='files', xray_index=True), computed_config=GENERIC)

        result = runner.apply(dict(key='generic-local'), computed_config=GENERIC)

        assert result['changed'] is True
        assert result['attributes']['description'] == ''
        assert result['attributes']['xray_index'] is False
        assert artifactory.repositories['generic-local']['description'] == ''

    def test_omitted_computed_field_keeps_its_value(self, runner, artifactory):
        runner.apply(dict(key='generic-local', project_environments=['PROD']), computed_config=GENERIC)

        result = runner.apply(dict(key='generic-local'), computed_config=GENERIC)

        assert result['changed'] is False
        assert result['attributes']['project_environments'] == ['PROD']

    def test_changed_package_type_replaces(self, meta, artifactory):
        npm = ResourceRunner(resource_artifactory_local_generic_repository('npm'), meta)
        npm.apply(dict(key='packages-local'), computed_config=dict(package_type='npm'))
        del artifactory.calls[:]

        generic = ResourceRunner(resource_artifactory_local_generic_repository('generic'), meta)
        result = generic.apply(dict(key='packages-local', repo_layout_ref='simple-default'), computed_config=GENERIC)

        assert result['changed'] is True
        assert writes(artifactory) == [('DELETE', 'artifactory/api/repositories/packages-local'),
                                       ('PUT', 'artifactory/api/repositories/packages-local')]
        assert artifactory.repositories['packages-local']['packageType'] == 'generic'

    def test_invalid_declaration_sends_nothing(self, runner, artifactory):
        with pytest.raises(ValidationError, match='cannot start with a number'):
            runner.apply(dict(key='1-local'), computed_config=GENERIC)
        assert artifactory.calls == []

    def test_rejected_environments_write_nothing(self, client, artifactory):
        meta = ProviderMetadata(client, artifactory_version='7.53.1')
        runner = ResourceRunner(resource_artifactory_local_generic_repository('generic'), meta)

        with pytest.raises(ValidationError, match='project_environments'):
            runner.apply(dict(key='generic-local', project_environments=['DEV', 'PROD']), computed_config=GENERIC)
        assert writes(artifactory) == []

    def test_project_assignment(self, runner, artifactory):
        runner.apply(dict(key='myproj-generic'), computed_config=GENERIC)

        result = runner.apply(dict(key='myproj-generic', project_key='myproj'), computed_config=GENERIC)

        assert result['attributes']['project_key'] == 'myproj'
        assert ('PUT', 'access/api/v1/projects/_/attach/repositories/myproj-generic/myproj') in writes(artifactory)


class TestCheckMode:
    def test_create_is_reported_but_not_sent(self, meta, artifactory):
        runner = ResourceRunner(resource_artifactory_local_generic_repository('generic'), meta, check_mode=True)

        result = runner.apply(dict(key='generic-local', notes='n'), computed_config=GENERIC)

        assert result['changed'] is True
        assert result['diff']['after']['notes'] == 'n'
        assert writes(artifactory) == []
        assert artifactory.repositories == {}

    def test_delete_is_reported_but_not_sent(self, runner, meta, artifactory):
        runner.apply(dict(key='generic-local'), computed_config=GENERIC)
        checking = ResourceRunner(runner.resource, meta, check_mode=True)

        result = checking.apply(dict(key='generic-local'), state='absent')

        assert result['changed'] is True
        assert result['diff']['before']['key'] == 'generic-local'
        assert 'generic-local' in artifactory.repositories


class TestAbsent:
    def test_delete(self, runner, artifactory):
        runner.apply(dict(key='generic-local'), computed_config=GENERIC)

        result = runner.apply(dict(key='generic-local'), state='absent')

        assert result['changed'] is True
        assert result['id'] == ''
        assert result['diff']['after'] == {}
        assert 'generic-local' not in artifactory.repositories

    def test_missing_repository_is_not_a_change(self, runner, artifactory):
        result = runner.apply(dict(key='generic-local'), state='absent')

        assert result['changed'] is False
        assert writes(artifactory) == []

    @pytest.mark.parametrize('status', [401, 500])
    def test_server_error_is_not_reported_as_absent(self, runner, artifactory, status):
        runner.apply(dict(key='generic-local'), computed_config=GENERIC)
        artifactory.fail('HEAD', 'artifactory/api/repositories/generic-local', status,
                         {'errors': [{'status': status}]})

        with pytest.raises(ArtifactoryRequestError) as exc:
            runner.apply(dict(key='generic-local'), state='absent')

        assert exc.value.status == status
        assert 'generic-local' in artifactory.repositories


def test_import_state(runner, artifactory):
    runner.apply(dict(key='generic-local', notes='imported'), computed_config=GENERIC)

    assert runner.import_state('generic-local').get('notes') == 'imported'
    assert runner.import_state('other-local').id() == ''
    assert runner.import_state('').id() == ''


def test_write_that_cannot_be_read_back_is_an_error(meta):
    def create(d, meta):
        pass

    resource = Resource({'key': Field(TYPE_STRING, required=True)}, create=create, read=lambda d, meta: None,
                        delete=lambda d, meta: None, importer=lambda d, meta: [ResourceData(d.schema)])

    with pytest.raises(ArtifactoryError, match='could not be read back'):
        ResourceRunner(resource, meta).apply(dict(key='thing'))
