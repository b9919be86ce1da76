#!/usr/bin/python
# -*- coding: utf-8 -*-

# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

DOCUMENTATION = r'''
---
module: artifactory_local_cargo_repository

short_description: Manages a local cargo repository

version_added: "1.0.0"

description:
    - Creates, updates, and deletes a local cargo repository.

options:
    anonymous_access:
        description:
        - Cargo client does not send credentials when performing download and search for crates.  Enable this to
          allow anonymous access to these resources.
        default: False
        type: bool
    enable_sparse_index:
        description:
        - Enable internal index support based on Cargo sparse index specifications, instead of the default git index.
        default: False
        type: bool

extends_documentation_fragment:
    - jfrog.artifactory.artifactory_common_docs
    - jfrog.artifactory.artifactory_common_docs.state
    - jfrog.artifactory.artifactory_common_docs.local_repository

author:
    - Jared Schmidt (@jared-schmidt-civ)
'''

EXAMPLES = r'''
- name: Add or update a local cargo repository
  jfrog.artifactory.artifactory_local_cargo_repository:
    key: cargo-local
    anonymous_access: true
    enable_sparse_index: true
    artifactory_base_url: https://artifactory.example.com
    auth_string: "{{ access_token }}"
'''

RETURN = r'''
repository:
    description: Settings of the repository as read back from Artifactory.  Empty once it is deleted.
    type: dict
    returned: always
    sample: {"key": "cargo-local", "package_type": "cargo", "repo_layout_ref": "cargo-default", "anonymous_access": true}
'''

from ansible.module_utils.basic import AnsibleModule

from ansible_collections.jfrog.artifactory.plugins.module_utils.ansible_module import (
    execute_resource, resource_argument_spec)
from ansible_collections.jfrog.artifactory.plugins.module_utils.local_repository import (
    resource_artifactory_local_cargo_repository)


def run_module():
    resource = resource_artifactory_local_cargo_repository()
    module = AnsibleModule(
        argument_spec=resource_argument_spec(resource.schema),
        supports_check_mode=True
    )
    execute_resource(module, resource, 'repository')


def main():
    run_module()


if __name__ == '__main__':
    main()
