#!/usr/bin/python
# -*- coding: utf-8 -*-

# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

DOCUMENTATION = r'''
---
module: artifactory_local_rpm_repository

short_description: Manages a local rpm repository

version_added: "1.0.0"

description:
    - Creates, updates, and deletes a local rpm repository.

options:
    yum_root_depth:
        description:
        - The depth, relative to the repository's root folder, where RPM metadata is created.
        default: 0
        type: int
    calculate_yum_metadata:
        description: Calculate the RPM metadata when packages are deployed.
        default: False
        type: bool
    enable_file_lists_indexing:
        description: Index the file lists metadata.
        default: False
        type: bool
    yum_group_file_names:
        description:
        - A comma-separated list of XML file names containing RPM group component definitions.
        type: str
    primary_keypair_ref:
        description:
        - Primary keypair used to sign artifacts.  Removing it from the task clears it in Artifactory.
        type: str
    secondary_keypair_ref:
        description:
        - Secondary keypair used to sign artifacts.  Removing it from the task clears it in Artifactory.
        type: str

extends_documentation_fragment:
    - jfrog.artifactory.artifactory_common_docs
    - jfrog.artifactory.artifactory_common_docs.state
    - jfrog.artifactory.artifactory_common_docs.local_repository

author:
    - Jared Schmidt (@jared-schmidt-civ)
'''

EXAMPLES = r'''
- name: Add or update a signed local rpm repository
  jfrog.artifactory.artifactory_local_rpm_repository:
    key: rpm-local
    yum_root_depth: 1
    calculate_yum_metadata: true
    primary_keypair_ref: rpm-signing
    artifactory_base_url: https://artifactory.example.com
    auth_string: "{{ access_token }}"
'''

RETURN = r'''
repository:
    description: Settings of the repository as read back from Artifactory.  Empty once it is deleted.
    type: dict
    returned: always
    sample: {"key": "rpm-local", "package_type": "rpm", "yum_root_depth": 1, "calculate_yum_metadata": true}
'''

from ansible.module_utils.basic import AnsibleModule

from ansible_collections.jfrog.artifactory.plugins.module_utils.ansible_module import (
    execute_resource, resource_argument_spec)
from ansible_collections.jfrog.artifactory.plugins.module_utils.local_repository import (
    resource_artifactory_local_rpm_repository)


def run_module():
    resource = resource_artifactory_local_rpm_repository()
    module = AnsibleModule(
        argument_spec=resource_argument_spec(resource.schema),
        supports_check_mode=True
    )
    execute_resource(module, resource, 'repository')


def main():
    run_module()


if __name__ == '__main__':
    main()
