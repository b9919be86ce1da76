# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole


class ModuleDocFragment(object):
    DOCUMENTATION = r'''
options:
    artifactory_base_url:
        description:
        - Base url of the JFrog Platform.  It must include the schema (http or https), the fqdn, and port
          number (if not 80 or 443).  Requests go to the C(artifactory/) and C(access/) paths below it.
        - Falls back to the C(JFROG_URL) environment variable.
        required: True
        type: str
    auth_type:
        description:
        - Specifies which authentication type to use with artifactory's API.  Basic auth uses an admin's username
          and password.
        choices:
        - Basic
        - AccessToken
        - ApiKey
        default: AccessToken
        type: str
    auth_string:
        description:
        - The authentication string to be provided in artifactory api calls.  Paired with selection given in "auth_type".
        - Basic auth requires that auth_string be provided in the format "username:password".  The plugin performs the base64 encoding.
        - AccessToken and ApiKey require that auth_string be the access token or api key.
        - Falls back to the C(JFROG_ACCESS_TOKEN) environment variable.
        required: True
        type: str
    ignore_ca_error:
        description:
        - Flag to disable CA verification.  Opens API calls to MITM attack.  Do not use in production environments.
        default: False
        required: False
        type: bool

requirements:
    - Python >= 3.9

notes:
    - Writes that Artifactory rejects with "Could not merge and save new descriptor" are retried up to 5 times.
'''

    STATE = r'''
options:
    state:
        description:
        - Desired state of the object after execution.
        - "Present" ensures the object is present in artifactory and matches what has been defined.  Fields
          that are not set fall back to their default, fields computed by Artifactory keep their current value.
        - "Absent" ensures the object is deleted.
        default: Present
        choices:
        - Present
        - Absent
        type: str

notes:
    - Check mode is supported.
    - Diff mode is supported.
'''

    LOCAL_REPOSITORY = r'''
options:
    key:
        description:
        - A mandatory identifier for the repository that must be unique.  It cannot begin with a number or
          contain spaces or special characters.
        - Changing the key replaces the repository.
        required: True
        type: str
    project_key:
        description:
        - Project key for assigning this repository to.  Must be 2 - 20 lowercase alphanumeric and hyphen
          characters.  When assigning repository to a project, repository key must be prefixed with project key,
          separated by a dash.
        - Changing it from C(default) to a project attaches the repository, changing it back to C(default)
          detaches it.  Moving a repository from one project straight to another project is not performed.
        default: default
        type: str
    project_environments:
        description:
        - Project environment for assigning this repository to.
        - Before Artifactory 7.53.1, up to 2 values (C(DEV) and C(PROD)) are allowed.  From 7.53.1 onward, only
          one value is allowed.
        type: list
        elements: str
    description:
        description: Public description.
        type: str
    notes:
        description: Internal description.
        type: str
    includes_pattern:
        description:
        - List of comma-separated artifact patterns to include when evaluating artifact requests.
        default: "**/*"
        type: str
    excludes_pattern:
        description:
        - List of artifact patterns to exclude when evaluating artifact requests.
        type: str
    repo_layout_ref:
        description:
        - Sets the layout that the repository should use for storing and identifying modules.  Defaults to the
          layout recommended for the package type.
        type: str
    blacked_out:
        description:
        - When set, the repository does not participate in artifact resolution and new artifacts cannot be deployed.
        default: False
        type: bool
    xray_index:
        description: Enable Indexing In Xray.
        default: False
        type: bool
    property_sets:
        description: List of property set names.
        type: list
        elements: str
    archive_browsing_enabled:
        description:
        - When set, you may view content such as HTML or Javadoc files directly from Artifactory.
        type: bool
    download_direct:
        description:
        - When set, download requests to this repository redirect the client to the cloud storage provider.
        type: bool
    priority_resolution:
        description:
        - Setting repositories with priority will cause metadata to be merged only from repositories set with
          this field.
        default: False
        type: bool
    cdn_redirect:
        description:
        - When set, download requests to this repository redirect the client to AWS CloudFront.
        default: False
        type: bool
'''
