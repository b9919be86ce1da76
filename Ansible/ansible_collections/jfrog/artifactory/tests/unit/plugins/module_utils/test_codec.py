# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

from dataclasses import dataclass
from typing import List, Optional

from ansible_collections.jfrog.artifactory.plugins.module_utils.codec import (
    decode_into, default_packer, json_field, to_payload_json)
from ansible_collections.jfrog.artifactory.plugins.module_utils.resource_data import ResourceData
from ansible_collections.jfrog.artifactory.plugins.module_utils.schema import TYPE_BOOL, TYPE_SET, TYPE_STRING, Field


@dataclass
class Cleanup():
    enabled: bool = json_field('enabled', default=False)
    period_days: int = json_field('periodDays', omitempty=True, default=0)


@dataclass
class Payload():
    key: str = json_field('key', default='')
    layout: str = json_field('repoLayoutRef', omitempty=True, default='')
    tags: List[str] = json_field('tags', default_factory=list)
    enabled: bool = json_field('enabled', default=False)
    cleanup: Cleanup = json_field('cleanup', default_factory=Cleanup)
    comment: Optional[str] = json_field('comment', default=None)


SCHEMA = {
    'key': Field(TYPE_STRING, required=True),
    'tags': Field(TYPE_SET, optional=True),
    'enabled': Field(TYPE_BOOL, optional=True),
    'comment': Field(TYPE_STRING, optional=True),
}


def test_to_payload_json():
    body = to_payload_json(Payload(key='k', tags={'b', 'a'}, cleanup=Cleanup(enabled=True, period_days=7)))

    assert body == {
        'key': 'k',
        'tags': ['a', 'b'],
        'enabled': False,
        'cleanup': {'enabled': True, 'periodDays': 7},
        'comment': None,
    }


def test_decode_into_ignores_unknown_and_null_members():
    payload = decode_into(Payload(layout='simple-default'), {
        'key': 'k',
        'repoLayoutRef': None,
        'cleanup': {'periodDays': 3},
        'somethingNew': 1,
    })

    assert payload.key == 'k'
    assert payload.layout == 'simple-default'
    assert payload.cleanup == Cleanup(enabled=False, period_days=3)
    assert not hasattr(payload, 'somethingNew')


def test_default_packer_copies_schema_fields_only():
    d = ResourceData(SCHEMA)

    default_packer(SCHEMA)(Payload(key='k', layout='x', tags=['z', 'y'], enabled=True), d)

    assert d.attributes() == {'key': 'k', 'tags': ['y', 'z'], 'enabled': True, 'comment': ''}
    assert d.get('layout') is None


class TestResourceData:
    def test_changes_are_relative_to_the_state(self):
        d = ResourceData(SCHEMA, state={'key': 'k', 'enabled': True}, config={'enabled': False, 'tags': ['a']})

        assert d.get_change('enabled') == (True, False)
        assert d.has_change('tags')
        assert not d.has_change('key')
        assert d.changed_fields() == ['enabled', 'tags']

    def test_unset_fields_read_as_zero(self):
        d = ResourceData(SCHEMA)

        assert d.get('tags') == []
        assert d.get_string('comment') == ''
        assert d.get_bool('enabled') is False
        assert d.get_ok('comment') == ('', False)

    def test_get_string_only_if_changed(self):
        d = ResourceData(SCHEMA, state={'key': 'k', 'comment': 'same'}, config={'comment': 'same'})

        assert d.get_string('comment', only_if_changed=True) == ''
        assert d.get_string('key') == 'k'

    def test_set_keeps_the_old_value(self):
        d = ResourceData(SCHEMA, state={'tags': ['a']})

        d.set('tags', ['c', 'b'])

        assert d.get_set('tags') == ['b', 'c']
        assert d.get_change('tags') == (['a'], ['b', 'c'])

    def test_id(self):
        d = ResourceData(SCHEMA, id='k')
        d.set_id('')
        assert d.id() == ''
