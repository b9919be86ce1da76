# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

'''
This library decides which lifecycle function a module task needs.  The
existing object is imported by its identity, the declaration is planned on
top of it, and the object is then created, updated, replaced, deleted, or
left alone.  Check mode plans without writing.
'''

from ansible_collections.jfrog.artifactory.plugins.module_utils.errors import ArtifactoryError
from ansible_collections.jfrog.artifactory.plugins.module_utils.resource_data import ResourceData
from ansible_collections.jfrog.artifactory.plugins.module_utils.schema import validate_declaration


class ResourceRunner():

    def __init__(self, resource, meta, check_mode=False):
        self.resource = resource
        self.schema = resource.schema
        self.meta = meta
        self.check_mode = check_mode

    def import_state(self, id):
        '''Returns the ResourceData read from Artifactory.  Its id is empty when nothing was found.'''
        d = ResourceData(self.schema, id=id)
        if not id:
            return d
        return self.resource.importer(d, self.meta)[0]

    def exists(self, id):
        if not id:
            return False
        if self.resource.exists is not None:
            exists, error = self.resource.exists(ResourceData(self.schema, id=id), self.meta)
            if error is not None:
                self.meta.debug('%s not found: %s' % (id, error))
            return exists
        return self.import_state(id).id() != ''

    def plan(self, prior, declared, computed_config=None):
        '''Returns the ResourceData the declaration leads to.

        Undeclared fields fall back to their default, or to their zero value,
        except computed fields which keep the value read from Artifactory.
        '''
        config = dict()
        for name, field in self.schema.items():
            if name in declared:
                config[name] = declared[name]
            elif field.settable and not field.computed:
                if field.has_default():
                    config[name] = field.resolve_default()
                else:
                    config[name] = field.zero_value()
        config.update(computed_config or {})
        state = prior.attributes() if prior.id() else {}
        return ResourceData(self.schema, state=state, config=config, id=prior.id())

    def apply(self, declaration, state='present', computed_config=None):
        '''Brings Artifactory to the declared state.

        :param declaration: Field values as passed to the module.  None means not declared.
        :param state: "present" or "absent"
        :param computed_config: Values for computed fields that the module decides, such as the package type
        :return: Dictionary with changed, id, diff (before/after), and attributes
        '''
        declared = validate_declaration(self.schema, declaration)
        id = self.resource.identity(declared, self.meta)

        if state == 'absent':
            return self._absent(id)

        prior = self.import_state(id)
        planned = self.plan(prior, declared, computed_config)
        if self.resource.customize_diff is not None:
            self.resource.customize_diff(planned, self.meta)
        before = prior.attributes() if prior.id() else {}

        if not prior.id():
            action = 'create'
        else:
            changed_fields = planned.changed_fields()
            if not changed_fields:
                return self._result(False, prior.id(), before, before)
            forces_new = [name for name in changed_fields if self.schema[name].force_new]
            self.meta.debug('changed fields: %s, forcing replacement: %s' % (changed_fields, forces_new))
            action = 'replace' if forces_new or self.resource.update is None else 'update'

        self.meta.debug('%s %s' % (action, id or declared))
        if self.check_mode:
            return self._result(True, prior.id(), before, planned.attributes())

        if action == 'replace':
            self.resource.delete(prior, self.meta)
            planned = ResourceData(self.schema, config=planned.attributes())
            action = 'create'

        if action == 'create':
            self.resource.create(planned, self.meta)
        else:
            self.resource.update(planned, self.meta)

        if not planned.id():
            raise ArtifactoryError('%s was written but could not be read back' % (id or declared))
        return self._result(True, planned.id(), before, planned.attributes())

    def _absent(self, id):
        if not self.exists(id):
            return self._result(False, '', {}, {})
        prior = self.import_state(id)
        before = prior.attributes() if prior.id() else {}
        if not self.check_mode:
            self.resource.delete(ResourceData(self.schema, state=before, id=id), self.meta)
        return self._result(True, '', before, {})

    def _result(self, changed, id, before, after):
        return dict(
            changed=changed,
            id=id,
            diff=dict(before=before, after=after),
            attributes=after,
        )


def read_data_source(data_source, meta, declaration):
    '''Reads a data source.

    :return: (found, attributes)
    '''
    declared = validate_declaration(data_source.schema, declaration)
    d = ResourceData(data_source.schema, config=declared)
    data_source.read(d, meta)
    if not d.id():
        return False, {}
    return True, d.attributes()
