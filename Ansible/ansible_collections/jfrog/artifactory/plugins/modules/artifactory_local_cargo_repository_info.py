#!/usr/bin/python
# -*- coding: utf-8 -*-

# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

DOCUMENTATION = r'''
---
module: artifactory_local_cargo_repository_info

short_description: Reads a local cargo repository

version_added: "1.0.0"

description:
    - Returns the settings of an existing local cargo repository.

options:
    key:
        description: Key of the repository.
        required: True
        type: str

extends_documentation_fragment:
    - jfrog.artifactory.artifactory_common_docs

author:
    - Jared Schmidt (@jared-schmidt-civ)
'''

EXAMPLES = r'''
- name: Read the cargo repository
  jfrog.artifactory.artifactory_local_cargo_repository_info:
    key: cargo-local
    artifactory_base_url: https://artifactory.example.com
    auth_string: "{{ access_token }}"
  register: cargo
'''

RETURN = r'''
found:
    description: Whether the repository exists.
    type: bool
    returned: always
repository:
    description: Settings of the repository.  Empty when it does not exist.
    type: dict
    returned: always
    sample: {"key": "cargo-local", "package_type": "cargo", "anonymous_access": false}
'''

from ansible.module_utils.basic import AnsibleModule

from ansible_collections.jfrog.artifactory.plugins.module_utils.ansible_module import (
    data_source_argument_spec, execute_data_source)
from ansible_collections.jfrog.artifactory.plugins.module_utils.local_repository import (
    data_source_artifactory_local_cargo_repository)


def run_module():
    data_source = data_source_artifactory_local_cargo_repository()
    module = AnsibleModule(
        argument_spec=data_source_argument_spec(data_source.schema),
        supports_check_mode=True
    )
    execute_data_source(module, data_source, 'repository')


def main():
    run_module()


if __name__ == '__main__':
    main()
