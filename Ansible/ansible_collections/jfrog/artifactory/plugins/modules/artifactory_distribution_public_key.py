#!/usr/bin/python
# -*- coding: utf-8 -*-

# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

DOCUMENTATION = r'''
---
module: artifactory_distribution_public_key

short_description: Manages the public GPG trusted keys used to verify distributed release bundles

version_added: "1.0.0"

description:
    - Uploads and deletes trusted public GPG keys.
    - An existing key is found by its alias.  Keys cannot be changed, so a different public key for the same
      alias deletes the old key and uploads the new one.

options:
    alias:
        description:
        - Will be used as an identifier when uploading/retrieving the public key via REST API.
        required: True
        type: str
    public_key:
        description:
        - The Public key to add as a trusted distribution GPG key.  Tabs are removed before it is uploaded.
        required: True
        type: str

extends_documentation_fragment:
    - jfrog.artifactory.artifactory_common_docs
    - jfrog.artifactory.artifactory_common_docs.state

author:
    - Jared Schmidt (@jared-schmidt-civ)
'''

EXAMPLES = r'''
- name: Trust the release bundle signing key
  jfrog.artifactory.artifactory_distribution_public_key:
    alias: release-signing
    public_key: "{{ lookup('file', 'release-signing.asc') }}"
    artifactory_base_url: https://artifactory.example.com
    auth_string: "{{ access_token }}"
'''

RETURN = r'''
key:
    description: The trusted key as read back from Artifactory.  Empty once it is deleted.
    type: dict
    returned: always
    sample: {"key_id": "b3bfe5a7", "alias": "release-signing", "fingerprint": "0f:93:2c", "issued_by": "Jane"}
'''

from ansible.module_utils.basic import AnsibleModule

from ansible_collections.jfrog.artifactory.plugins.module_utils.ansible_module import (
    execute_resource, resource_argument_spec)
from ansible_collections.jfrog.artifactory.plugins.module_utils.distribution_public_key import (
    resource_artifactory_distribution_public_key)


def run_module():
    resource = resource_artifactory_distribution_public_key()
    module = AnsibleModule(
        argument_spec=resource_argument_spec(resource.schema),
        supports_check_mode=True
    )
    execute_resource(module, resource, 'key')


def main():
    run_module()


if __name__ == '__main__':
    main()
