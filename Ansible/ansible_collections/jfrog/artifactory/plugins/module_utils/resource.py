# Public Domain 2021, Jared Schmidt <jared.schmidt.civ@gmail.com>
# CC0 1.0 Universal license (see https://creativecommons.org/publicdomain/zero/1.0/)
# License applies only to the contents of this file, not the collection as a whole

'''
A Resource bundles a schema with the functions that create, read, update,
and delete one kind of Artifactory object.  Every lifecycle function takes
(ResourceData, ProviderMetadata).
'''


def import_state_passthrough(read):
    '''Returns an importer that reads the resource using the identity it is given and nothing else.'''
    def importer(d, meta):
        read(d, meta)
        return [d]
    return importer


def identity_from_key(declared, meta):
    return declared.get('key', '')


class Resource():

    def __init__(self, schema, create=None, read=None, update=None, delete=None, importer=None,
                 customize_diff=None, identity=identity_from_key, exists=None, description=''):
        '''
        :param identity: Callable taking (declaration, meta) and returning the identity of the declared
            object, or an empty string when it cannot be known before it is created
        :param customize_diff: Callable taking (planned ResourceData, meta), raising ValidationError to
            reject the change before anything is written
        :param exists: Callable taking (ResourceData, meta) and returning (exists, error)
        '''
        self.schema = schema
        self.create = create
        self.read = read
        self.update = update
        self.delete = delete
        self.importer = importer
        self.customize_diff = customize_diff
        self.identity = identity
        self.exists = exists
        self.description = description

    @property
    def is_data_source(self):
        return self.create is None and self.delete is None

    def force_new_fields(self):
        return sorted(name for name, field in self.schema.items() if field.force_new)
