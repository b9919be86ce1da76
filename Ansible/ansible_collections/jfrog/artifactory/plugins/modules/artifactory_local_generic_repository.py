#!/usr/bin/python
# -*- coding: utf-8 -*-

# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

DOCUMENTATION = r'''
---
module: artifactory_local_generic_repository

short_description: Manages a local repository of a package type without type specific settings

version_added: "1.0.0"

description:
    - Creates, updates, and deletes a local Artifactory repository of one of the package types that only use the
      settings shared by every local repository.
    - The repository layout defaults to the layout recommended for the package type.

options:
    package_type:
        description:
        - Package type of the repository.  Changing it replaces the repository.
        choices: [bower, chef, cocoapods, composer, conda, cran, gems, generic, gitlfs, go, helm, npm, opkg, pub,
                  puppet, pypi, swift, terraformbackend, vagrant]
        default: generic
        type: str

extends_documentation_fragment:
    - jfrog.artifactory.artifactory_common_docs
    - jfrog.artifactory.artifactory_common_docs.state
    - jfrog.artifactory.artifactory_common_docs.local_repository

author:
    - Jared Schmidt (@jared-schmidt-civ)
'''

EXAMPLES = r'''
- name: Add or update a local npm repository assigned to a project
  jfrog.artifactory.artifactory_local_generic_repository:
    key: myproj-npm-local
    package_type: npm
    project_key: myproj
    project_environments:
      - DEV
    description: npm packages built by myproj
    artifactory_base_url: https://artifactory.example.com
    auth_type: AccessToken
    auth_string: "{{ access_token }}"

- name: Delete a local generic repository
  jfrog.artifactory.artifactory_local_generic_repository:
    key: generic-local
    state: Absent
    artifactory_base_url: https://artifactory.example.com
    auth_string: "{{ access_token }}"
'''

RETURN = r'''
repository:
    description: Settings of the repository as read back from Artifactory.  Empty once it is deleted.
    type: dict
    returned: always
    sample: {"key": "generic-local", "package_type": "generic", "repo_layout_ref": "simple-default"}
'''

from ansible.module_utils.basic import AnsibleModule

from ansible_collections.jfrog.artifactory.plugins.module_utils.ansible_module import (
    execute_resource, resource_argument_spec)
from ansible_collections.jfrog.artifactory.plugins.module_utils.local_repository import (
    PACKAGE_TYPES_LIKE_GENERIC, RCLASS, get_generic_repo_schema)
from ansible_collections.jfrog.artifactory.plugins.module_utils.registry import repository_resource


def run_module():
    module_args = resource_argument_spec(
        get_generic_repo_schema('generic'),
        extra=dict(package_type=dict(type='str', default='generic', choices=list(PACKAGE_TYPES_LIKE_GENERIC))),
    )

    module = AnsibleModule(
        argument_spec=module_args,
        supports_check_mode=True
    )

    package_type = module.params['package_type']
    execute_resource(
        module,
        lambda params: repository_resource(RCLASS, package_type),
        'repository',
        computed_config=dict(package_type=package_type),
    )


def main():
    run_module()


if __name__ == '__main__':
    main()
