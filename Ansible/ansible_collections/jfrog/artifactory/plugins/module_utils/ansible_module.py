# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

'''
Glue shared by the modules of this collection: building the argument_spec
from a resource schema and running a resource or data source for an
AnsibleModule.
'''

from ansible.module_utils.common.text.converters import to_native

from ansible_collections.jfrog.artifactory.plugins.module_utils.errors import ArtifactoryError
from ansible_collections.jfrog.artifactory.plugins.module_utils.provider import (
    PROVIDER_ARGUMENT_SPEC, STATE_ARGUMENT_SPEC, configure, normalize_state)
from ansible_collections.jfrog.artifactory.plugins.module_utils.runner import ResourceRunner, read_data_source
from ansible_collections.jfrog.artifactory.plugins.module_utils.schema import to_argument_spec


def resource_argument_spec(schema, extra=None):
    '''argument_spec of a resource module: the schema fields, the connection options, and state.'''
    spec = to_argument_spec(schema)
    spec.update(extra or {})
    spec.update(PROVIDER_ARGUMENT_SPEC)
    spec.update(STATE_ARGUMENT_SPEC)
    return spec


def data_source_argument_spec(schema):
    spec = to_argument_spec(schema)
    spec.update(PROVIDER_ARGUMENT_SPEC)
    return spec


def declaration_from_params(params, schema):
    return dict((name, params.get(name)) for name, field in schema.items() if field.settable and name in params)


def execute_resource(module, resource, result_key, computed_config=None):
    '''Applies the module parameters to Artifactory and exits the module.

    :param resource: Resource to manage.  May be a callable taking the module parameters and returning it.
    :param result_key: Name of the returned value holding the resource attributes
    '''
    result = dict(changed=False)
    result[result_key] = dict()
    try:
        if callable(resource):
            resource = resource(module.params)
        meta = configure(module)
        state = normalize_state(module.params['state'])
        runner = ResourceRunner(resource, meta, check_mode=module.check_mode)
        outcome = runner.apply(declaration_from_params(module.params, resource.schema), state, computed_config)
    except ArtifactoryError as e:
        module.fail_json(msg=to_native(e), **result)
        return

    result['changed'] = outcome['changed']
    result[result_key] = outcome['attributes']
    if getattr(module, '_diff', False):
        result['diff'] = outcome['diff']
    module.exit_json(**result)


def execute_data_source(module, data_source, result_key):
    '''Reads a data source and exits the module.  A missing object is reported with found=False.'''
    result = dict(changed=False, found=False)
    result[result_key] = dict()
    try:
        meta = configure(module)
        found, attributes = read_data_source(data_source, meta, declaration_from_params(module.params, data_source.schema))
    except ArtifactoryError as e:
        module.fail_json(msg=to_native(e), **result)
        return

    result['found'] = found
    result[result_key] = attributes
    module.exit_json(**result)
