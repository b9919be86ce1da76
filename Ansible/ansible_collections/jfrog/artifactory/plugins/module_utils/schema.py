# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

'''
Declarative description of the fields of a resource.  A schema is a plain
dictionary of field name to Field.  The same schema validates a declaration,
renders the module argument_spec, and drives the default packer.
'''

import re

from ansible_collections.jfrog.artifactory.plugins.module_utils.errors import ValidationError

TYPE_STRING = 'str'
TYPE_BOOL = 'bool'
TYPE_INT = 'int'
TYPE_SET = 'set'

_ZERO_VALUES = {
    TYPE_STRING: '',
    TYPE_BOOL: False,
    TYPE_INT: 0,
}

REPO_KEY_INVALID_CHARS = " !@#$%^&*()+={}[]:;<>,/?~`|\\"

_PROJECT_KEY = re.compile(r'^[a-z][a-z0-9\-]{1,19}$')


class Field():
    '''A single field of a resource schema.

    :param type: One of TYPE_STRING, TYPE_BOOL, TYPE_INT, or TYPE_SET (a set of strings)
    :param required: The declaration must set the field
    :param optional: The declaration may set the field
    :param computed: Artifactory sets the field.  Combined with optional, an unset field keeps the value read back.
    :param default: Value used when an optional field is not declared
    :param default_func: Callable returning the default.  Evaluated when a declaration is planned, never at import.
    :param validate: Callables taking (value, field name) and raising ValidationError
    :param force_new: Changing the field replaces the resource
    :param state_func: Normalises a declared value before it is compared with the value read back
    '''

    def __init__(self, type, required=False, optional=False, computed=False, default=None, default_func=None,
                 validate=(), force_new=False, description='', sensitive=False, min_items=None, max_items=None,
                 state_func=None):
        self.type = type
        self.required = required
        self.optional = optional
        self.computed = computed
        self.default = default
        self.default_func = default_func
        self.validate = tuple(validate)
        self.force_new = force_new
        self.description = description
        self.sensitive = sensitive
        self.min_items = min_items
        self.max_items = max_items
        self.state_func = state_func

    @property
    def settable(self):
        return self.required or self.optional

    def zero_value(self):
        if self.type == TYPE_SET:
            return []
        return _ZERO_VALUES[self.type]

    def has_default(self):
        return self.default is not None or self.default_func is not None

    def resolve_default(self):
        if self.default_func is not None:
            return self.default_func()
        return self.default

    def __repr__(self):
        return 'Field(%s)' % self.type


def merge_schemas(*schemas):
    '''Merges schemas left to right.  A later definition of a field replaces an earlier one.'''
    merged = dict()
    for schema in schemas:
        merged.update(schema)
    return merged


def computed_schema(schema, required=('key',)):
    '''Returns a copy of a schema where the fields named in required are required and every other
    field is computed.  Data sources read an object by its required fields and report the rest.
    '''
    derived = dict()
    for name, field in schema.items():
        if name in required:
            derived[name] = Field(field.type, required=True, validate=field.validate, description=field.description)
        else:
            derived[name] = Field(field.type, computed=True, description=field.description)
    return derived


def normalize_value(field, value, name):
    '''Checks the python type of a declared value and returns it in its stored form.
    Sets are stored as sorted lists of strings.
    '''
    if field.type == TYPE_SET:
        if isinstance(value, str) or not isinstance(value, (list, tuple, set, frozenset)):
            raise ValidationError('expected a list of strings, got %r' % (value,), name)
        if not all(isinstance(item, str) for item in value):
            raise ValidationError('expected a list of strings, got %r' % (value,), name)
        return sorted(set(value))
    if field.type == TYPE_BOOL:
        if not isinstance(value, bool):
            raise ValidationError('expected a boolean, got %r' % (value,), name)
        return value
    if field.type == TYPE_INT:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError('expected an integer, got %r' % (value,), name)
        return value
    if not isinstance(value, str):
        raise ValidationError('expected a string, got %r' % (value,), name)
    return value


def validate_declaration(schema, declaration):
    '''Validates a declaration against the schema.

    Fields whose value is None are treated as not declared, which is how the
    module parameters represent an option the task does not set.

    :return: A new dictionary holding only the declared fields, normalised
    :raises ValidationError: on the first field that does not conform
    '''
    declared = dict()
    for name, value in declaration.items():
        if value is None:
            continue
        if name not in schema:
            raise ValidationError('unsupported field', name)
        field = schema[name]
        if not field.settable:
            raise ValidationError('field is computed by Artifactory and cannot be set', name)
        value = normalize_value(field, value, name)
        if field.type == TYPE_SET:
            if field.min_items is not None and len(value) < field.min_items:
                raise ValidationError('expected at least %d values' % field.min_items, name)
            if field.max_items is not None and len(value) > field.max_items:
                raise ValidationError('expected at most %d values' % field.max_items, name)
        for validator in field.validate:
            validator(value, name)
        if field.state_func is not None:
            value = field.state_func(value)
        declared[name] = value

    for name, field in schema.items():
        if field.required and name not in declared:
            raise ValidationError('field is required', name)
    return declared


def to_argument_spec(schema):
    '''Renders the settable fields of a schema as a module argument_spec.

    Defaults are left out.  They are applied when the declaration is planned
    so that fields with a default_func are resolved only then.
    '''
    spec = dict()
    for name, field in schema.items():
        if not field.settable:
            continue
        option = dict(required=field.required)
        if field.type == TYPE_SET:
            option.update(type='list', elements='str')
        else:
            option['type'] = field.type
        if field.sensitive:
            option['no_log'] = True
        spec[name] = option
    return spec


def repo_key_validator(value, name='key'):
    '''Repository keys cannot begin with a number or contain spaces or special characters.'''
    if re.match(r'^[0-9]', value):
        raise ValidationError('repo key cannot start with a number', name)
    invalid = sorted(set(c for c in value if c in REPO_KEY_INVALID_CHARS))
    if invalid:
        raise ValidationError('repo key cannot contain any of %r' % ''.join(invalid), name)


def project_key_validator(value, name='project_key'):
    if not _PROJECT_KEY.match(value):
        raise ValidationError('must be 2 - 20 lowercase alphanumeric and hyphen characters, starting with a letter',
                              name)


def string_is_not_empty(value, name):
    if value == '':
        raise ValidationError('expected a non-empty string', name)


def string_in_slice(values):
    def validator(value, name):
        if value not in values:
            raise ValidationError('expected one of %s, got %r' % (', '.join(values), value), name)
    return validator
