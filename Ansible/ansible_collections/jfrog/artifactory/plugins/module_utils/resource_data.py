# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

from ansible_collections.jfrog.artifactory.plugins.module_utils.schema import TYPE_SET


class ResourceData():
    '''Holds the identity and field values of one resource while a lifecycle function runs.

    The values it was created from (the state last read from Artifactory) are
    kept apart from the current values so that a function can ask which fields
    a task changes.  Packers write through set(), which only touches the
    current values.
    '''

    def __init__(self, schema, state=None, config=None, id=''):
        '''
        :param schema: The resource schema
        :param state: Field values read from Artifactory before this change
        :param config: Declared field values that override the state
        :param id: Identity of the resource.  Empty when it does not exist.
        '''
        self.schema = schema
        self._id = id
        self._old = dict(state or {})
        self._new = dict(self._old)
        self._new.update(config or {})

    def id(self):
        return self._id

    def set_id(self, id):
        self._id = id

    def _zero(self, key):
        field = self.schema.get(key)
        if field is None:
            return None
        return field.zero_value()

    def get(self, key):
        return self._new.get(key, self._zero(key))

    def get_ok(self, key):
        '''Returns the value and whether it is set to something other than its zero value.'''
        value = self.get(key)
        return value, value != self._zero(key)

    def get_string(self, key, only_if_changed=False):
        if only_if_changed and not self.has_change(key):
            return ''
        return self.get(key) or ''

    def get_bool(self, key):
        return bool(self.get(key))

    def get_int(self, key):
        return int(self.get(key) or 0)

    def get_set(self, key):
        return sorted(self.get(key) or [])

    def get_change(self, key):
        '''Returns the (old, new) values of a field.'''
        return self._old.get(key, self._zero(key)), self.get(key)

    def has_change(self, key):
        old, new = self.get_change(key)
        return old != new

    def changed_fields(self):
        return sorted(key for key in self.schema if self.has_change(key))

    def set(self, key, value):
        if key in self.schema and self.schema[key].type == TYPE_SET and value is not None:
            value = sorted(value)
        self._new[key] = value

    def attributes(self):
        '''Returns every schema field with its current value.'''
        return dict((key, self.get(key)) for key in self.schema)
