# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

'''
Exceptions raised by the resource lifecycle functions.  Modules catch
ArtifactoryError and report it with fail_json.
'''


class ArtifactoryError(Exception):
    '''Base class for every error raised while managing an Artifactory resource.'''


class ValidationError(ArtifactoryError):
    '''The declaration does not conform to the resource schema.  Raised before any request is sent.'''

    def __init__(self, message, field=None):
        self.field = field
        if field:
            message = '%s: %s' % (field, message)
        super().__init__(message)


class TransportFailure(ArtifactoryError):
    '''A request failed because of the network or because Artifactory answered with an error status.'''


class ArtifactoryRequestError(TransportFailure):
    '''Artifactory answered with an error status.  The response is kept so callers can classify it.'''

    def __init__(self, message, response=None):
        self.response = response
        super().__init__(message)

    @property
    def status(self):
        if self.response is None:
            return None
        return self.response.status


class ProjectReassignmentFailure(ArtifactoryError):
    '''The repository was updated but attaching it to (or detaching it from) a project failed.'''

    def __init__(self, repo_key, cause):
        self.repo_key = repo_key
        self.cause = cause
        super().__init__('repository %s was updated but its project assignment failed: %s' % (repo_key, cause))
